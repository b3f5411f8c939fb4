"""
Formatting utilities for invoices.
Includes money, percentages, dates, customer addresses and contact numbers.
"""
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from datetime import date, datetime
from typing import Any, Dict, Optional, Union

ADDRESS_FIELDS = ('street', 'landmark', 'nearestTown', 'district', 'state', 'pincode')
HOME_COUNTRY = 'India'


def money(value: Union[int, float, Decimal, str, None]) -> str:
    """
    Format a monetary amount with exactly 2 decimals and no grouping.

    Args:
        value: Amount to format

    Returns:
        Formatted string. Invalid or empty values render as "0.00".

    Examples:
        money(165) -> "165.00"
        money(868.4210526) -> "868.42"
        money(None) -> "0.00"
    """
    if value is None or value == "":
        return "0.00"

    try:
        num = Decimal(str(value)).quantize(Decimal('0.01'), rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return "0.00"

    if num == 0:
        num = abs(num)
    return f"{num:.2f}"


def percentage(value: Union[int, float, Decimal, str, None]) -> str:
    """
    Format a percentage without trailing zeros.

    Examples:
        percentage(81) -> "81%"
        percentage(Decimal('12.50')) -> "12.5%"
    """
    if value is None or value == "":
        return "0%"

    try:
        num = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return "0%"

    text = f"{num:f}"
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    return f"{text}%"


def invoice_date(value: Union[date, datetime, str, None], date_format: str = '%d/%m/%Y') -> str:
    """
    Format an invoice date (DD/MM/YYYY by default).

    ISO strings as stored on order documents are accepted.

    Examples:
        invoice_date(datetime(2025, 7, 21, 10, 30)) -> "21/07/2025"
        invoice_date("2025-07-21T10:30:00") -> "21/07/2025"
    """
    if value is None:
        return "-"

    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            return "-"

    if not isinstance(value, date):
        return "-"

    return value.strftime(date_format)


def customer_address(address: Union[Dict[str, Any], str, None], default: str = 'Customer Address') -> str:
    """
    Join the non-empty parts of a delivery address.

    The country is only printed when it is not India.

    Examples:
        customer_address({'district': 'Sivakasi', 'state': 'Tamil Nadu'}) -> "Sivakasi, Tamil Nadu"
        customer_address(None) -> "Customer Address"
    """
    if not address:
        return default

    if isinstance(address, str):
        return address.strip() or default

    parts = [str(address[key]).strip() for key in ADDRESS_FIELDS if address.get(key)]
    country = address.get('country')
    if country and country != HOME_COUNTRY:
        parts.append(str(country).strip())

    parts = [part for part in parts if part]
    return ', '.join(parts) if parts else default


def customer_contact(mobile: Optional[str], delivery_contact: Optional[str],
                     default: str = 'Contact Number') -> str:
    """
    Printable contact numbers; both are shown only when they differ.

    Examples:
        customer_contact('98765', '91234') -> "98765, 91234"
        customer_contact('98765', '98765') -> "98765"
    """
    mobile = (mobile or '').strip()
    delivery_contact = (delivery_contact or '').strip()

    if mobile and delivery_contact and mobile != delivery_contact:
        return f"{mobile}, {delivery_contact}"
    return mobile or delivery_contact or default
