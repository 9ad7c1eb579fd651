"""
Tests for the pure business calculations
Shortage/surplus, purchase costing, stock classification and numbering
"""

import pytest
from decimal import Decimal
from datetime import date

from garment_erp.services.business_logic import (
    ShortageSurplusCalculator,
    PurchaseCostService,
    StockStatus,
    calculate_shortage_surplus,
    classify_stock,
    suggest_store_log_status,
    financial_year_code,
    next_prefixed_code,
    capitalize_first,
    dedupe_by_key,
    round_quantity,
    to_decimal,
)


class TestShortageSurplusCalculator:
    """Invoice vs received quantity on store entry lines"""

    def test_shortage_when_less_received(self):
        """Invoice 50, received 45 gives a shortage of 5"""
        result = calculate_shortage_surplus(50, 45)
        assert result.shortage == Decimal("5.00")
        assert result.surplus == Decimal("0.00")

    def test_surplus_when_more_received(self):
        """Invoice 45, received 50 gives a surplus of 5"""
        result = calculate_shortage_surplus(45, 50)
        assert result.shortage == Decimal("0.00")
        assert result.surplus == Decimal("5.00")

    def test_both_zero_when_quantities_match(self):
        """Matching quantities give neither shortage nor surplus"""
        result = calculate_shortage_surplus(50, 50)
        assert result.shortage == 0
        assert result.surplus == 0

    @pytest.mark.parametrize("invoice,received", [
        ("100", "99.995"),
        ("0.1", "0.3"),
        ("12.5", "12.5"),
        ("0", "7"),
        ("7", "0"),
    ])
    def test_shortage_and_surplus_are_exclusive(self, invoice, received):
        """At most one of shortage and surplus is nonzero"""
        result = ShortageSurplusCalculator.calculate(invoice, received)
        assert not (result.shortage > 0 and result.surplus > 0)
        assert result.shortage >= 0
        assert result.surplus >= 0

    def test_values_are_rounded_half_up(self):
        """Results are stored rounded to two places"""
        result = calculate_shortage_surplus("10", "9.995")
        assert result.shortage == Decimal("0.01")

    def test_missing_quantities_count_as_zero(self):
        """None and blank quantities behave as zero"""
        result = calculate_shortage_surplus(None, "")
        assert result.shortage == 0
        assert result.surplus == 0


class TestPurchaseCostService:
    """Purchase line and header costing"""

    def test_material_line_with_gst(self):
        """100 kg at 250 with 5% GST"""
        result = PurchaseCostService.calculate_line(100, 250, 5)
        assert result.total_cost == Decimal("25000.00")
        assert result.gst_amount == Decimal("1250.00")
        assert result.total_with_gst == Decimal("26250.00")

    def test_fractional_unit_cost(self):
        """1000 buttons at 0.5 with 12% GST"""
        result = PurchaseCostService.calculate_line(1000, "0.5", 12)
        assert result.total_cost == Decimal("500.00")
        assert result.total_with_gst == Decimal("560.00")

    def test_machine_line_uses_cost(self):
        """Machines are priced on cost alone"""
        result = PurchaseCostService.calculate_machine("45000", 18)
        assert result.total_cost == Decimal("45000.00")
        assert result.total_with_gst == Decimal("53100.00")

    def test_zero_gst(self):
        """No GST leaves the total unchanged"""
        result = PurchaseCostService.calculate_line(3, "33.33", 0)
        assert result.total_with_gst == result.total_cost == Decimal("99.99")

    def test_summarize_by_category(self):
        """Category totals and grand totals"""
        lines = [
            {"item_type": "fabric", "total_cost": Decimal("100"), "total_with_gst": Decimal("105")},
            {"item_type": "fabric", "total_cost": Decimal("50"), "total_with_gst": Decimal("52.50")},
            {"item_type": "buttons", "total_cost": Decimal("10"), "total_with_gst": Decimal("11.20")},
        ]
        totals = PurchaseCostService.summarize(lines, ["fabric", "buttons", "packets", "machine"])

        assert totals.categories["fabric"].total_cost == Decimal("150")
        assert totals.categories["fabric"].total_with_gst == Decimal("157.50")
        assert totals.categories["packets"].total_cost == 0
        assert totals.grand_total_cost == Decimal("160")
        assert totals.grand_total_with_gst == Decimal("168.70")


class TestStockClassification:
    """Available stock against the initially received quantity"""

    def test_exactly_twenty_percent_is_available(self):
        """The low threshold is strict"""
        assert classify_stock(20, 100) == StockStatus.AVAILABLE

    def test_below_twenty_percent_is_low(self):
        """19 of 100 is low"""
        assert classify_stock(19, 100) == StockStatus.LOW

    def test_zero_is_out_of_stock(self):
        """Nothing left is out of stock"""
        assert classify_stock(0, 100) == StockStatus.OUT_OF_STOCK

    def test_negative_is_out_of_stock_not_low(self):
        """Out of stock is checked before low"""
        assert classify_stock(-5, 100) == StockStatus.OUT_OF_STOCK

    def test_zero_initial_with_stock_is_available(self):
        """A surplus-only line with stock is available"""
        assert classify_stock(5, 0) == StockStatus.AVAILABLE

    def test_custom_ratio(self):
        """The threshold ratio is configurable"""
        assert classify_stock(40, 100, Decimal("0.5")) == StockStatus.LOW
        assert classify_stock(50, 100, Decimal("0.5")) == StockStatus.AVAILABLE

    def test_status_values(self):
        """Wire values of the statuses"""
        assert StockStatus.OUT_OF_STOCK.value == "outOfStock"
        assert StockStatus.LOW.value == "low"
        assert StockStatus.AVAILABLE.value == "available"


class TestStoreLogStatusSuggestion:
    """Automatic status moves for store logs"""

    def test_taken_without_returns_moves_to_out(self):
        """In Store becomes Out once material is taken"""
        assert suggest_store_log_status("In Store", 10, 0, 10) == "Out"

    def test_everything_returned_moves_back_in_store(self):
        """Out becomes In Store when nothing is left in hand"""
        assert suggest_store_log_status("Out", 10, 10, 0) == "In Store"

    def test_partial_return_keeps_status(self):
        """Partial returns do not change the status"""
        assert suggest_store_log_status("Out", 10, 4, 6) == "Out"

    def test_completed_is_never_changed(self):
        """Completed logs keep their status"""
        assert suggest_store_log_status("Completed", 10, 0, 10) == "Completed"
        assert suggest_store_log_status("Completed", 10, 10, 0) == "Completed"


class TestNumbering:
    """Financial year codes and prefixed master codes"""

    def test_financial_year_after_april(self):
        """April starts the new financial year"""
        assert financial_year_code(date(2025, 4, 1)) == "2526"

    def test_financial_year_before_april(self):
        """January to March belong to the previous year"""
        assert financial_year_code(date(2026, 3, 31)) == "2526"

    def test_financial_year_century_rollover(self):
        """Two-digit years wrap"""
        assert financial_year_code(date(2099, 12, 1)) == "9900"

    def test_next_code_increments(self):
        """BUY007 is followed by BUY008"""
        assert next_prefixed_code("BUY007", "BUY") == "BUY008"

    def test_next_code_starts_at_one(self):
        """Missing or foreign codes restart the sequence"""
        assert next_prefixed_code(None, "SUP") == "SUP001"
        assert next_prefixed_code("XYZ", "SUP") == "SUP001"

    def test_next_code_grows_past_width(self):
        """The width is a minimum"""
        assert next_prefixed_code("YAS999", "YAS") == "YAS1000"


class TestHelpers:
    """Small helpers shared by the services"""

    def test_capitalize_first(self):
        """Only the first character is upper-cased"""
        assert capitalize_first("  ravi textiles") == "Ravi textiles"
        assert capitalize_first("") == ""
        assert capitalize_first(None) is None

    def test_dedupe_by_key_keeps_first(self):
        """Repeated ids are dropped in order"""
        records = [{"id": 1, "n": "a"}, {"id": 2, "n": "b"}, {"id": 1, "n": "c"}]
        assert [r["n"] for r in dedupe_by_key(records)] == ["a", "b"]

    def test_to_decimal_tolerates_junk(self):
        """Unparseable input reads as zero"""
        assert to_decimal("abc") == 0
        assert to_decimal(2.5) == Decimal("2.5")

    def test_round_quantity(self):
        """Half-up rounding to two places"""
        assert round_quantity("2.345") == Decimal("2.35")
