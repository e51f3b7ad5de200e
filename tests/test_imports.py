"""Tests for import chains and module integrity.

Ensures all public modules can be imported without errors and
that re-exports from __init__.py files work correctly.
"""


class TestSchemaImports:
    def test_import_catalog_schema(self):
        from toltimed.schemas.catalog_schema import SelectedService, Service, ServiceCategory
        assert ServiceCategory.INPATIENT == "inpatient"
        assert Service is not None
        assert SelectedService is not None

    def test_import_booking_schema(self):
        from toltimed.schemas.booking_schema import ScheduleConfig, ScheduleFrequency
        assert ScheduleFrequency.SPECIFIC_DAYS == "specific-days"
        assert ScheduleConfig().selected_days == ()


class TestWizardImports:
    def test_package_reexports(self):
        from toltimed.wizard import (
            BookingFinalizer,
            BookingWizard,
            ScheduleConfigurator,
            ServiceCart,
            WizardStage,
            session_multiplier,
            validate_time,
        )
        assert WizardStage.BOOKING == "booking"
        assert callable(session_multiplier)
        assert callable(validate_time)
        assert all(cls is not None for cls in (
            BookingFinalizer, BookingWizard, ScheduleConfigurator, ServiceCart,
        ))

    def test_tools_import_without_cycle(self):
        from toltimed.tools import booking, practitioners, services
        assert booking.get_booking("missing") is None
        assert practitioners.get_practitioner("nurse-003").rating_display == "N/A"
        assert services.get_service("np-003").price == 1500


class TestConfigImports:
    def test_settings_singleton(self):
        from toltimed.config import settings
        assert settings.wizard.default_total_days >= 1
        assert settings.wizard.submission_timeout_sec > 0
