"""
Service cart for the first wizard stage.

Each service appears at most once (its id is the key). Lines carry
quantity and day multipliers that never drop below 1, and totals are
always derived from price, quantity, and days.

Usage:
    cart = ServiceCart()
    cart.toggle_select(service)
    cart.adjust_quantity(service.id, "days", increment=True)
    cart.cart_total()
"""

import logging
from typing import Optional

from toltimed.errors import MissingPriceError
from toltimed.schemas.catalog_schema import SelectedService, Service

logger = logging.getLogger(__name__)

DIMENSIONS = ("quantity", "days")


class ServiceCart:
    """Ordered cart of selected services."""

    def __init__(self) -> None:
        self._lines: list[SelectedService] = []

    @property
    def lines(self) -> tuple[SelectedService, ...]:
        return tuple(self._lines)

    def _index_of(self, service_id: str) -> int:
        for i, line in enumerate(self._lines):
            if line.service.id == service_id:
                return i
        return -1

    def toggle_select(self, service: Service) -> bool:
        """
        Add the service, or remove it if it is already in the cart.

        Removal discards quantity and day edits, so a re-add starts
        again at quantity 1 and 1 day.

        Returns:
            True if the service is now selected.

        Raises:
            MissingPriceError: If the service has no price.
        """
        idx = self._index_of(service.id)
        if idx >= 0:
            del self._lines[idx]
            logger.debug("Removed '%s' from cart", service.id)
            return False

        if service.price is None:
            raise MissingPriceError(f"Service '{service.id}' has no price and cannot be booked")

        self._lines.append(SelectedService(service=service))
        logger.debug("Added '%s' to cart", service.id)
        return True

    def adjust_quantity(
        self, service_id: str, dimension: str, increment: bool
    ) -> Optional[SelectedService]:
        """Step quantity or days up or down by one, never below 1.

        Returns the updated line, or None when the service is not in the cart.
        """
        if dimension not in DIMENSIONS:
            raise ValueError(f"Unknown dimension '{dimension}'. Valid: {list(DIMENSIONS)}")
        idx = self._index_of(service_id)
        if idx < 0:
            return None

        line = self._lines[idx]
        current = getattr(line, dimension)
        updated = line.model_copy(
            update={dimension: max(1, current + (1 if increment else -1))}
        )
        self._lines[idx] = updated
        return updated

    def cart_total(self) -> float:
        return sum(line.total_amount for line in self._lines)

    def total_services(self) -> int:
        return len(self._lines)

    def is_selected(self, service_id: str) -> bool:
        return self._index_of(service_id) >= 0

    def get_line(self, service_id: str) -> Optional[SelectedService]:
        idx = self._index_of(service_id)
        return self._lines[idx] if idx >= 0 else None

    def first_line(self) -> Optional[SelectedService]:
        """The line the wizard books; later lines are kept for the receipt."""
        return self._lines[0] if self._lines else None

    def clear(self) -> None:
        self._lines.clear()
