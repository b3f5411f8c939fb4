"""Amount-in-words conversion using the Indian numbering system."""
from decimal import Decimal, ROUND_FLOOR

from backoffice.exceptions import InvalidInputError

ONES = ['', 'one', 'two', 'three', 'four', 'five', 'six', 'seven', 'eight', 'nine']
TEENS = ['ten', 'eleven', 'twelve', 'thirteen', 'fourteen', 'fifteen',
         'sixteen', 'seventeen', 'eighteen', 'nineteen']
TENS = ['', '', 'twenty', 'thirty', 'forty', 'fifty', 'sixty', 'seventy', 'eighty', 'ninety']

# Largest unit first
UNITS = (
    (10_000_000, 'crore'),
    (100_000, 'lakh'),
    (1_000, 'thousand'),
    (100, 'hundred'),
)


def _below_hundred(n: int) -> list:
    if n >= 20:
        return [TENS[n // 10]] + ([ONES[n % 10]] if n % 10 else [])
    if n >= 10:
        return [TEENS[n - 10]]
    return [ONES[n]] if n else []


def _words(n: int) -> list:
    for size, name in UNITS:
        if n >= size:
            head, rest = divmod(n, size)
            return _words(head) + [name] + _words(rest)
    return _below_hundred(n)


def number_to_words(num: int) -> str:
    """
    Spell out a non-negative integer in lowercase words.

    Groups are composed only when non-zero, so 100000 is "one lakh" and
    10000001 is "one crore one".

    Examples:
        number_to_words(0) -> "zero"
        number_to_words(868) -> "eight hundred sixty eight"
        number_to_words(123456789) -> "twelve crore thirty four lakh fifty six thousand seven hundred eighty nine"

    Raises:
        InvalidInputError: for negative or non-integer input.
    """
    if isinstance(num, bool) or not isinstance(num, int):
        raise InvalidInputError('Amount in words needs a whole number')
    if num < 0:
        raise InvalidInputError('Amount in words needs a non-negative number')
    if num == 0:
        return 'zero'
    return ' '.join(_words(num))


def amount_in_words(amount, currency: str = 'Rupees', suffix: str = 'Only') -> str:
    """
    Printable amount line, e.g. "Rupees One Hundred Sixty Five Only".

    The amount is floored to whole units first; paise are not spelled out.
    """
    whole = int(Decimal(str(amount)).to_integral_value(rounding=ROUND_FLOOR))
    words = ' '.join(word.capitalize() for word in number_to_words(whole).split())
    return ' '.join(part for part in (currency, words, suffix) if part)
