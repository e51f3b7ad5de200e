"""Tests for the service cart."""

import pytest

from toltimed.errors import MissingPriceError
from toltimed.tools.services import filter_services, get_all_services
from tests.conftest import make_service


class TestToggleSelect:
    def test_adds_service_at_quantity_and_days_one(self, cart):
        service = make_service()
        assert cart.toggle_select(service) is True
        line = cart.get_line(service.id)
        assert line.quantity == 1
        assert line.days == 1
        assert line.total_amount == 1000

    def test_toggle_again_removes(self, cart):
        service = make_service()
        cart.toggle_select(service)
        assert cart.toggle_select(service) is False
        assert not cart.is_selected(service.id)
        assert cart.total_services() == 0

    def test_readd_starts_fresh(self, cart):
        service = make_service()
        cart.toggle_select(service)
        cart.adjust_quantity(service.id, "quantity", increment=True)
        cart.adjust_quantity(service.id, "days", increment=True)
        cart.toggle_select(service)
        cart.toggle_select(service)
        line = cart.get_line(service.id)
        assert (line.quantity, line.days) == (1, 1)

    def test_dedup_by_identifier(self, cart):
        cart.toggle_select(make_service("svc-1", price=1000))
        # Same id with a different price is still the same cart line.
        cart.toggle_select(make_service("svc-1", price=2000))
        assert cart.total_services() == 0

    def test_missing_price_is_rejected(self, cart):
        with pytest.raises(MissingPriceError):
            cart.toggle_select(make_service(price=None))
        assert cart.total_services() == 0

    def test_free_service_allowed(self, cart):
        cart.toggle_select(make_service(price=0))
        assert cart.cart_total() == 0
        assert cart.total_services() == 1


class TestAdjustQuantity:
    def test_increment_recomputes_total(self, cart):
        service = make_service(price=1500)
        cart.toggle_select(service)
        cart.adjust_quantity(service.id, "quantity", increment=True)
        line = cart.adjust_quantity(service.id, "days", increment=True)
        assert line.quantity == 2
        assert line.days == 2
        assert line.total_amount == 1500 * 2 * 2

    def test_decrement_at_one_is_noop(self, cart):
        service = make_service()
        cart.toggle_select(service)
        line = cart.adjust_quantity(service.id, "quantity", increment=False)
        assert line.quantity == 1
        line = cart.adjust_quantity(service.id, "days", increment=False)
        assert line.days == 1

    def test_unknown_service_returns_none(self, cart):
        assert cart.adjust_quantity("nope", "days", increment=True) is None

    def test_unknown_dimension_raises(self, cart):
        service = make_service()
        cart.toggle_select(service)
        with pytest.raises(ValueError, match="Unknown dimension"):
            cart.adjust_quantity(service.id, "weeks", increment=True)


class TestCartTotal:
    def test_sums_all_lines(self, cart):
        a = make_service("a", price=3500)
        b = make_service("b", price=2000)
        cart.toggle_select(a)
        cart.toggle_select(b)
        cart.adjust_quantity("a", "days", increment=True)
        assert cart.cart_total() == 3500 * 2 + 2000

    def test_empty_cart_is_zero(self, cart):
        assert cart.cart_total() == 0

    def test_first_line_is_first_selected(self, cart):
        cart.toggle_select(make_service("a"))
        cart.toggle_select(make_service("b"))
        assert cart.first_line().service.id == "a"


class TestFilterServices:
    def test_matches_name_case_insensitive(self):
        results = filter_services(get_all_services(), "WOUND")
        assert [s.id for s in results] == ["np-001"]

    def test_matches_short_description(self):
        results = filter_services(get_all_services(), "blood pressure")
        assert [s.id for s in results] == ["np-003"]

    def test_empty_term_returns_everything(self):
        assert len(filter_services(get_all_services(), "  ")) == len(get_all_services())

    def test_filter_does_not_touch_cart(self, cart):
        service = get_all_services()[0]
        cart.toggle_select(service)
        filter_services(get_all_services(), "zzz")
        assert cart.is_selected(service.id)

    def test_large_result_set_is_not_truncated(self):
        services = [
            make_service(service_id=f"svc-{i}", name=f"Wound care {i}")
            for i in range(60)
        ]
        assert len(filter_services(services, "")) == 60
        results = filter_services(services, "wound")
        assert len(results) == 60
        assert results[-1].id == "svc-59"
