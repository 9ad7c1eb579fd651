"""
Garment ERP Business Logic Services
Pure calculations shared by the purchase, store and order services
"""
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional
from enum import Enum
from dataclasses import dataclass, field
from datetime import date
import logging

logger = logging.getLogger(__name__)

_TWO_PLACES = Decimal('0.01')
ZERO = Decimal('0')


class StockStatus(str, Enum):
    """Classification of an inventory row"""
    AVAILABLE = "available"
    LOW = "low"
    OUT_OF_STOCK = "outOfStock"


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a loosely-typed quantity to Decimal

    None, empty strings and unparseable values count as zero.
    """
    if value is None or value == "":
        return ZERO
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        logger.debug(f"Treating non-numeric quantity {value!r} as zero")
        return ZERO


def round_quantity(value: Any) -> Decimal:
    """Round half-up to two decimal places"""
    return to_decimal(value).quantize(_TWO_PLACES, rounding=ROUND_HALF_UP)


@dataclass
class ShortageSurplusResult:
    """Result of comparing invoiced and physically received quantities"""
    invoice_qty: Decimal
    store_in_qty: Decimal
    shortage: Decimal
    surplus: Decimal


@dataclass
class LineCostResult:
    """Cost of a single purchase line"""
    total_cost: Decimal
    gst_amount: Decimal
    total_with_gst: Decimal


@dataclass
class CategoryTotals:
    """Cost totals for one purchase category"""
    total_cost: Decimal = ZERO
    total_with_gst: Decimal = ZERO


@dataclass
class PurchaseTotals:
    """Cost totals for a whole purchase"""
    categories: Dict[str, CategoryTotals] = field(default_factory=dict)
    grand_total_cost: Decimal = ZERO
    grand_total_with_gst: Decimal = ZERO


class ShortageSurplusCalculator:
    """
    Shortage/surplus on receipt of goods

    Exactly one of shortage and surplus is nonzero, both are zero when the
    quantities agree. Values are rounded once and stored rounded.
    """

    @staticmethod
    def calculate(invoice_qty: Any, store_in_qty: Any) -> ShortageSurplusResult:
        invoice = to_decimal(invoice_qty)
        received = to_decimal(store_in_qty)

        shortage = round_quantity(max(invoice - received, ZERO))
        surplus = round_quantity(max(received - invoice, ZERO))

        logger.debug(
            f"Shortage/surplus: invoice={invoice}, store_in={received}, "
            f"shortage={shortage}, surplus={surplus}"
        )

        return ShortageSurplusResult(
            invoice_qty=invoice,
            store_in_qty=received,
            shortage=shortage,
            surplus=surplus,
        )


def calculate_shortage_surplus(invoice_qty: Any, store_in_qty: Any) -> ShortageSurplusResult:
    """Module-level shortcut for ShortageSurplusCalculator.calculate"""
    return ShortageSurplusCalculator.calculate(invoice_qty, store_in_qty)


class PurchaseCostService:
    """
    Purchase line and header costing

    totalCost = quantity x costPerUnit (machines: totalCost = cost)
    totalWithGst = totalCost x (1 + gst / 100)
    """

    @staticmethod
    def calculate_line(quantity: Any, cost_per_unit: Any, gst_percentage: Any) -> LineCostResult:
        total_cost = (to_decimal(quantity) * to_decimal(cost_per_unit)).quantize(
            _TWO_PLACES, rounding=ROUND_HALF_UP
        )
        return PurchaseCostService._with_gst(total_cost, gst_percentage)

    @staticmethod
    def calculate_machine(cost: Any, gst_percentage: Any) -> LineCostResult:
        total_cost = round_quantity(cost)
        return PurchaseCostService._with_gst(total_cost, gst_percentage)

    @staticmethod
    def _with_gst(total_cost: Decimal, gst_percentage: Any) -> LineCostResult:
        gst_amount = (total_cost * to_decimal(gst_percentage) / Decimal('100')).quantize(
            _TWO_PLACES, rounding=ROUND_HALF_UP
        )
        return LineCostResult(
            total_cost=total_cost,
            gst_amount=gst_amount,
            total_with_gst=total_cost + gst_amount,
        )

    @staticmethod
    def summarize(lines: Iterable[Dict[str, Any]], categories: Iterable[str]) -> PurchaseTotals:
        """
        Sum priced lines by category

        Args:
            lines: mappings with item_type, total_cost and total_with_gst
            categories: category names always present in the result
        """
        totals = PurchaseTotals(categories={name: CategoryTotals() for name in categories})

        for line in lines:
            bucket = totals.categories.setdefault(line["item_type"], CategoryTotals())
            bucket.total_cost += to_decimal(line.get("total_cost"))
            bucket.total_with_gst += to_decimal(line.get("total_with_gst"))

        for bucket in totals.categories.values():
            totals.grand_total_cost += bucket.total_cost
            totals.grand_total_with_gst += bucket.total_with_gst

        return totals


def classify_stock(available: Any, initial: Any, low_ratio: Any = Decimal('0.2')) -> StockStatus:
    """
    Classify available stock against the initially received quantity

    outOfStock is checked first so a negative balance is never reported as low.
    The low threshold is strict: exactly 20% of initial is still available.
    """
    available = to_decimal(available)
    if available <= ZERO:
        return StockStatus.OUT_OF_STOCK
    if available < to_decimal(initial) * to_decimal(low_ratio):
        return StockStatus.LOW
    return StockStatus.AVAILABLE


def suggest_store_log_status(
    current_status: str,
    total_taken: Any,
    total_returned: Any,
    total_in_hand: Any,
) -> str:
    """
    Suggest a store log status from its totals

    Material taken and nothing returned moves "In Store" to "Out"; everything
    returned moves "Out" back to "In Store". Anything else keeps the status.
    """
    taken = to_decimal(total_taken)
    returned = to_decimal(total_returned)
    in_hand = to_decimal(total_in_hand)

    if taken > ZERO and returned == ZERO and current_status == "In Store":
        return "Out"
    if returned > ZERO and in_hand == ZERO and current_status == "Out":
        return "In Store"
    return current_status


def financial_year_code(on: Optional[date] = None, start_month: int = 4) -> str:
    """
    Two-digit start/end year code of the financial year containing a date

    With an April start, 2025-04-01 through 2026-03-31 is "2526".
    """
    on = on or date.today()
    start_year = on.year if on.month >= start_month else on.year - 1
    return f"{start_year % 100:02d}{(start_year + 1) % 100:02d}"


def next_prefixed_code(last_code: Optional[str], prefix: str, width: int = 3) -> str:
    """
    Increment a code such as BUY007 to BUY008

    A missing or malformed previous code starts the sequence at 1.
    """
    number = 0
    if last_code and last_code.startswith(prefix):
        suffix = last_code[len(prefix):]
        if suffix.isdigit():
            number = int(suffix)
    return f"{prefix}{number + 1:0{width}d}"


def capitalize_first(value: Optional[str]) -> Optional[str]:
    """Upper-case the first character, leave the rest untouched"""
    if not value:
        return value
    value = value.strip()
    return value[:1].upper() + value[1:]


def dedupe_by_key(records: List[Any], key: str = "id") -> List[Any]:
    """Drop repeated records, keeping first occurrence order"""
    seen = set()
    unique = []
    for record in records:
        marker = record.get(key) if isinstance(record, dict) else getattr(record, key, None)
        if marker in seen:
            continue
        seen.add(marker)
        unique.append(record)
    return unique
