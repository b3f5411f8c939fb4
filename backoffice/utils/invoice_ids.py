"""Order id and invoice number helpers (ORD-DDMMYY-NNN / INV-DDMMYY-NNN)."""
import re
from datetime import date, datetime
from typing import Any, Dict, Optional

ORDER_ID_PATTERN = re.compile(r'^ORD-(\d{2})(\d{2})(\d{2})-(\d{3})$')


def _date_code(on_date: date) -> str:
    return on_date.strftime('%d%m%y')


def generate_order_id(on_date: date, existing_orders_count: int) -> str:
    """
    Next order id for a day, given how many orders that day already has.

    Example: generate_order_id(date(2025, 7, 21), 0) -> "ORD-210725-001"
    """
    return f"ORD-{_date_code(on_date)}-{str(existing_orders_count + 1).zfill(3)}"


def generate_invoice_number(order_id: Optional[str], today: Optional[date] = None) -> str:
    """
    Invoice number derived from the order id.

    New-style ids only swap the prefix (ORD-210725-001 -> INV-210725-001).
    Legacy ids get today's date code plus their last three characters.
    """
    if order_id and order_id.startswith('ORD-'):
        return 'INV-' + order_id[len('ORD-'):]

    today = today or datetime.now().date()
    unique_number = order_id[-3:] if order_id else datetime.now().strftime('%f')[-3:]
    return f"INV-{_date_code(today)}-{unique_number}"


def parse_order_id(order_id: str) -> Dict[str, Any]:
    """Split an ORD-DDMMYY-NNN id into its components."""
    match = ORDER_ID_PATTERN.match(order_id or '')
    if not match:
        return {'is_valid': False, 'original': order_id}

    day, month, year, order_number = match.groups()
    return {
        'day': int(day),
        'month': int(month),
        'year': int(year) + 2000,
        'order_number': int(order_number),
        'is_valid': True,
    }
