"""Pydantic data models for catalog, practitioners, and bookings."""
