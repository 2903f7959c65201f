"""
Tests for the orders table helpers: drilldown, search, sort and pagination.
"""

from kpi_dashboard.analytics.tables import (
    DrilldownType,
    SortDirection,
    drilldown_orders,
    paginate,
    search_orders,
    sort_orders,
)
from kpi_dashboard.shared.models import OrderCategory, OrderStatus, Region


class TestDrilldown:
    """Test narrowing to a day or category."""

    def test_by_day(self, make_order, now):
        """Test that a day drilldown keeps only that ISO date."""
        today = make_order(days_ago=0)
        yesterday = make_order(days_ago=1)
        result = drilldown_orders([today, yesterday], "day", now.date().isoformat())
        assert result == [today]

    def test_by_category(self, make_order):
        """Test that a category drilldown matches the category label."""
        addon = make_order(category=OrderCategory.ADD_ONS)
        other = make_order(category=OrderCategory.OTHER)
        assert drilldown_orders([addon, other], DrilldownType.CATEGORY, "Add-ons") == [addon]

    def test_missing_or_unknown_returns_all(self, make_order):
        """Test that an incomplete or unknown drilldown is ignored."""
        orders = [make_order(), make_order()]
        assert drilldown_orders(orders, None, "2026-01-01") == orders
        assert drilldown_orders(orders, "day", None) == orders
        assert drilldown_orders(orders, "week", "1") == orders


class TestSearch:
    """Test free-text search."""

    def test_matches_customer_case_insensitive(self, make_order):
        """Test a case-insensitive customer name match."""
        emma = make_order(customer_name="Emma Smith")
        liam = make_order(customer_name="Liam Jones")
        assert search_orders([emma, liam], "  EMMA ") == [emma]

    def test_matches_id_region_status(self, make_order):
        """Test matches on id, region and status."""
        apac = make_order(region=Region.APAC)
        refunded = make_order(status=OrderStatus.REFUNDED)
        orders = [apac, refunded]
        assert search_orders(orders, "apac") == [apac]
        assert search_orders(orders, "refund") == [refunded]
        assert search_orders(orders, apac.id) == [apac]

    def test_blank_query_returns_all(self, make_order):
        """Test that a blank query does not filter."""
        orders = [make_order()]
        assert search_orders(orders, "   ") == orders
        assert search_orders(orders, None) == orders


class TestSort:
    """Test column sorting."""

    def test_total_ascending(self, make_order):
        """Test sorting by total, ascending."""
        orders = [make_order(total=300), make_order(total=100), make_order(total=200)]
        result = sort_orders(orders, "total", "asc")
        assert [o.total for o in result] == [100, 200, 300]

    def test_customer_name_descending(self, make_order):
        """Test sorting by customer name, descending."""
        orders = [make_order(customer_name=n) for n in ("ava b", "Zoe A", "emma c")]
        result = sort_orders(orders, "customerName", SortDirection.DESC)
        assert [o.customer_name for o in result] == ["Zoe A", "emma c", "ava b"]

    def test_unknown_field_sorts_by_date_desc(self, make_order):
        """Test that an unknown field falls back to newest first."""
        old = make_order(days_ago=5)
        new = make_order(days_ago=1)
        assert sort_orders([old, new], "bogus", "asc") == [new, old]

    def test_invalid_direction_defaults_to_desc(self, make_order):
        """Test that an invalid direction sorts descending."""
        orders = [make_order(total=1), make_order(total=2)]
        assert [o.total for o in sort_orders(orders, "total", "sideways")] == [2, 1]


class TestPaginate:
    """Test pagination."""

    def test_first_page(self):
        """Test the first page and its metadata."""
        page = paginate(list(range(25)), page=1, page_size=10)
        assert page.items == list(range(10))
        assert page.total_items == 25
        assert page.total_pages == 3

    def test_last_partial_page(self):
        """Test a short final page."""
        page = paginate(list(range(25)), page=3, page_size=10)
        assert page.items == [20, 21, 22, 23, 24]

    def test_page_is_clamped(self):
        """Test that out-of-range pages clamp to the valid range."""
        assert paginate(list(range(25)), page=99, page_size=10).page == 3
        assert paginate(list(range(25)), page=0, page_size=10).page == 1

    def test_empty(self):
        """Test paginating nothing."""
        page = paginate([], page=3, page_size=10)
        assert page.items == []
        assert page.page == 1
        assert page.total_pages == 0

    def test_camel_case_metadata(self):
        """Test the wire names of page metadata."""
        payload = paginate([1, 2, 3], page_size=2).model_dump(by_alias=True)
        assert payload["pageSize"] == 2
        assert payload["totalItems"] == 3
        assert payload["totalPages"] == 2
