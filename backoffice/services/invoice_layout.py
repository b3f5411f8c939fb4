"""
Invoice layout engine.

Pure pagination of invoice line items: which page and row each item lands on,
running totals accumulated while rows are placed, blank padding per page and
the footer summary printed on the last page. Nothing here touches reportlab;
invoice_pdf draws whatever this module decides.
"""
import math
from dataclasses import dataclass
from decimal import Decimal
from functools import partial, reduce
from typing import Optional, Tuple

from backoffice.models import InvoiceData, InvoiceFormat, InvoiceLineItem, OrderSummary
from backoffice.utils.number_words import amount_in_words

ITEMS_PER_PAGE = 25
ZERO = Decimal('0')


@dataclass(frozen=True)
class PageSlot:
    """Where one item lands: page, row within the page, and whether it closes the page."""

    page_index: int
    row_on_page: int
    is_last_row_of_page: bool


def page_count(total_items: int, items_per_page: int = ITEMS_PER_PAGE) -> int:
    """Up to items_per_page items fit on exactly one page; beyond that, full pages plus the remainder."""
    if total_items <= items_per_page:
        return 1
    return math.ceil(total_items / items_per_page)


def page_slot(item_index: int, total_items: int, items_per_page: int = ITEMS_PER_PAGE) -> PageSlot:
    """Page-break policy as a pure function of the item position."""
    if not 0 <= item_index < total_items:
        raise IndexError(f"item {item_index} outside 0..{total_items - 1}")

    page_index, row_on_page = divmod(item_index, items_per_page)
    is_last = row_on_page == items_per_page - 1 or item_index == total_items - 1
    return PageSlot(page_index=page_index, row_on_page=row_on_page, is_last_row_of_page=is_last)


@dataclass(frozen=True)
class InvoiceRow:
    """A table row: serial number (1-based, continuous across pages) and its item."""

    serial: int
    item: InvoiceLineItem
    slot: PageSlot


@dataclass(frozen=True)
class RunningTotals:
    """Sums accumulated row by row for the totals line."""

    quantity: int = 0
    actual: Decimal = ZERO
    discount: Decimal = ZERO
    amount: Decimal = ZERO

    def add(self, item: InvoiceLineItem) -> 'RunningTotals':
        return RunningTotals(
            quantity=self.quantity + item.quantity,
            actual=self.actual + item.actual_amount,
            discount=self.discount + item.discount_amount,
            amount=self.amount + item.line_total,
        )


@dataclass(frozen=True)
class LayoutState:
    """Accumulator threaded through the fold over line items."""

    pages: Tuple[Tuple[InvoiceRow, ...], ...] = ()
    totals: RunningTotals = RunningTotals()


def _place_row(state: LayoutState, indexed_item, total_items: int, items_per_page: int) -> LayoutState:
    index, item = indexed_item
    slot = page_slot(index, total_items, items_per_page)

    pages = state.pages
    if slot.row_on_page == 0:
        pages = pages + ((),)

    row = InvoiceRow(serial=index + 1, item=item, slot=slot)
    pages = pages[:-1] + (pages[-1] + (row,),)
    return LayoutState(pages=pages, totals=state.totals.add(item))


def fold_rows(items, items_per_page: int = ITEMS_PER_PAGE) -> LayoutState:
    """Place every item in input order and accumulate the running totals."""
    items = tuple(items)
    reducer = partial(_place_row, total_items=len(items), items_per_page=items_per_page)
    return reduce(reducer, enumerate(items), LayoutState())


@dataclass(frozen=True)
class SummaryBlock:
    """Right-hand footer figures plus the amount in words."""

    actual_total: Decimal
    discount_total: Decimal
    sub_total: Decimal
    packaging: Decimal
    final_amount: Decimal
    amount_in_words: str


def _prefer(value: Optional[Decimal], fallback: Decimal) -> Decimal:
    # Zero counts as missing in stored summaries
    return value if value else fallback


def resolve_summary(order_summary: Optional[OrderSummary], totals: RunningTotals,
                    invoice_format: Optional[InvoiceFormat] = None) -> SummaryBlock:
    """
    Footer figures, preferring the caller's stored order summary.

    Stored values win whenever present; running totals are only the
    fallback. The two sources are not reconciled.
    """
    invoice_format = invoice_format or InvoiceFormat()
    summary = order_summary or OrderSummary()

    actual_total = _prefer(summary.total_price, totals.actual)
    discount_total = _prefer(summary.total_savings, totals.discount)
    sub_total = _prefer(summary.total_offer_price, actual_total - discount_total)
    packaging = _prefer(summary.packaging_price, ZERO)
    final_amount = _prefer(summary.total_with_packaging, sub_total + packaging)

    words = amount_in_words(
        max(final_amount, ZERO),
        currency=invoice_format.currency_words,
        suffix=invoice_format.words_suffix,
    )
    return SummaryBlock(
        actual_total=actual_total,
        discount_total=discount_total,
        sub_total=sub_total,
        packaging=packaging,
        final_amount=final_amount,
        amount_in_words=words,
    )


@dataclass(frozen=True)
class InvoicePage:
    index: int
    rows: Tuple[InvoiceRow, ...]
    blank_rows: int
    is_last: bool

    @property
    def is_first(self) -> bool:
        return self.index == 0

    @property
    def number(self) -> int:
        return self.index + 1


@dataclass(frozen=True)
class InvoiceLayout:
    """Fully decided document: pages, totals row and footer summary."""

    invoice: InvoiceData
    pages: Tuple[InvoicePage, ...]
    totals: RunningTotals
    summary: SummaryBlock
    items_per_page: int = ITEMS_PER_PAGE

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def last_page(self) -> InvoicePage:
        return self.pages[-1]


def build_invoice_layout(invoice: InvoiceData, invoice_format: Optional[InvoiceFormat] = None,
                         items_per_page: int = ITEMS_PER_PAGE) -> InvoiceLayout:
    """
    Paginate an invoice.

    Every page table is padded to items_per_page slots with blank rows so
    the table height never changes. An invoice without items still gets one
    (empty) page with its footer.
    """
    state = fold_rows(invoice.items, items_per_page)
    grouped = state.pages or ((),)

    pages = tuple(
        InvoicePage(
            index=index,
            rows=rows,
            blank_rows=items_per_page - len(rows),
            is_last=index == len(grouped) - 1,
        )
        for index, rows in enumerate(grouped)
    )

    return InvoiceLayout(
        invoice=invoice,
        pages=pages,
        totals=state.totals,
        summary=resolve_summary(invoice.order_summary, state.totals, invoice_format),
        items_per_page=items_per_page,
    )
