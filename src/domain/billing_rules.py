"""Billing rules

Pure functions shared by the revenue ledger and the invoice generators:
rate resolution, minor-unit conversion, line item construction and invoice
totals. Amounts from lessons and customers are in major units; everything
that ends up on an invoice is in cents.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional, Tuple
from src.domain.company_settings import CompanySettings, DEFAULT_PAYMENT_TERMS_DAYS, DEFAULT_TAX_RATE
from src.domain.customer import Customer
from src.domain.lesson import Lesson

HUNDRED = Decimal("100")
UNIT_LESSON = "Lesson"
UNIT_HOUR = "Hour"
DEFAULT_LINE_DESCRIPTION = "Lesson"


def round_half_up(value: Decimal) -> int:
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def two_places(value: Decimal) -> Decimal:
    """Quantize to the 0.01 precision of the quantity and tax rate columns."""
    return Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


def to_minor_units(amount: Optional[Decimal]) -> int:
    """Convert a major-unit amount (euros) to cents."""
    if amount is None:
        return 0
    return round_half_up(Decimal(str(amount)) * HUNDRED)


def from_minor_units(amount: int) -> Decimal:
    return (Decimal(amount) / HUNDRED).quantize(Decimal("0.01"))


def effective_hourly_rate(customer: Optional[Customer], settings: Optional[CompanySettings]) -> Decimal:
    """Customer hourly rate, else workspace default, else 0."""
    if customer is not None and customer.default_hourly_rate:
        return Decimal(str(customer.default_hourly_rate))
    if settings is not None and settings.default_hourly_rate:
        return Decimal(str(settings.default_hourly_rate))
    return Decimal("0")


def has_fixed_rate(lesson: Lesson) -> bool:
    # A zero rate counts as "no fixed price"
    return bool(lesson.rate)


def lesson_revenue(
    lesson: Lesson, customer: Optional[Customer], settings: Optional[CompanySettings]
) -> Decimal:
    """Projected revenue of a lesson in major units: effective rate x duration."""
    rate = Decimal(str(lesson.rate)) if has_fixed_rate(lesson) else effective_hourly_rate(customer, settings)
    return rate * lesson.duration_hours


def resolve_tax_rate(customer: Customer, settings: Optional[CompanySettings]) -> Decimal:
    if customer.is_vat_exempt:
        return Decimal("0")
    if settings is not None and settings.default_tax_rate is not None:
        return Decimal(str(settings.default_tax_rate))
    return DEFAULT_TAX_RATE


def resolve_payment_terms(customer: Customer, settings: Optional[CompanySettings]) -> int:
    if customer.payment_terms_days:
        return customer.payment_terms_days
    if settings is not None and settings.default_payment_terms_days:
        return settings.default_payment_terms_days
    return DEFAULT_PAYMENT_TERMS_DAYS


def line_total(quantity: Decimal, unit_price: int) -> int:
    return round_half_up(Decimal(str(quantity)) * unit_price)


def line_tax(total: int, tax_rate: Decimal) -> int:
    return round_half_up(Decimal(total) * Decimal(str(tax_rate)) / HUNDRED)


@dataclass(frozen=True)
class InvoiceLineDraft:
    """An invoice line before it is persisted"""

    description: str
    quantity: Decimal
    unit: str
    unit_price: int
    tax_rate: Decimal
    service_date: Optional[date] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    lesson_id: Optional[int] = None

    @property
    def total(self) -> int:
        return line_total(self.quantity, self.unit_price)

    @property
    def tax(self) -> int:
        return line_tax(self.total, self.tax_rate)


@dataclass(frozen=True)
class InvoiceTotals:
    subtotal: int
    tax_total: int
    total: int


def compute_totals(lines: Iterable[InvoiceLineDraft]) -> InvoiceTotals:
    subtotal = 0
    tax_total = 0
    for line in lines:
        subtotal += line.total
        tax_total += line.tax
    return InvoiceTotals(subtotal=subtotal, tax_total=tax_total, total=subtotal + tax_total)


def build_lesson_line(
    lesson: Lesson,
    customer: Customer,
    settings: Optional[CompanySettings],
    tax_rate: Decimal,
) -> InvoiceLineDraft:
    """
    Build the invoice line for a billable lesson

    Fixed-price lessons bill one "Lesson" at the fixed rate. Everything else
    bills the duration in hours, rounded to two decimals, at the hourly rate.
    """
    if has_fixed_rate(lesson):
        quantity = Decimal("1")
        unit = UNIT_LESSON
        unit_price = to_minor_units(lesson.rate)
    else:
        quantity = two_places(lesson.duration_hours)
        unit = UNIT_HOUR
        unit_price = to_minor_units(effective_hourly_rate(customer, settings))

    descriptions = customer.service_descriptions or []
    description = descriptions[0] if descriptions else DEFAULT_LINE_DESCRIPTION

    return InvoiceLineDraft(
        description=description,
        quantity=quantity,
        unit=unit,
        unit_price=unit_price,
        tax_rate=tax_rate,
        service_date=lesson.start.date(),
        start_time=lesson.start.strftime("%H:%M"),
        end_time=lesson.end.strftime("%H:%M"),
        lesson_id=lesson.id,
    )


def month_bounds(year: int, month: int) -> Tuple[datetime, datetime]:
    """First and last instant of a calendar month, both inclusive."""
    last_day = calendar.monthrange(year, month)[1]
    return (
        datetime(year, month, 1),
        datetime.combine(date(year, month, last_day), time.max),
    )


def previous_month(today: date) -> Tuple[int, int]:
    if today.month == 1:
        return today.year - 1, 12
    return today.year, today.month - 1


def format_export_amount(amount_minor: int) -> str:
    """Cents as major units with a comma decimal separator, e.g. 20230 -> 202,30."""
    return f"{from_minor_units(amount_minor):.2f}".replace(".", ",")
