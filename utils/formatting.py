"""
utils/formatting.py
-------------------
Money rendering helpers for chart labels, exports and search results.
"""

from config import CURRENCY_SYMBOL


def _group_indian(integer_digits: str) -> str:
    # Last three digits form one group, the rest are grouped in pairs.
    if len(integer_digits) <= 3:
        return integer_digits
    head, tail = integer_digits[:-3], integer_digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: float, decimals: int = 2) -> str:
    """
    Format an amount the way the dashboard displays money.

    Examples:
        >>> format_currency(123456.5)
        '₹1,23,456.50'
        >>> format_currency(-950, decimals=0)
        '-₹950'
    """
    sign = "-" if amount < 0 else ""
    text = f"{abs(amount):.{decimals}f}"
    integer_part, _, fraction = text.partition(".")
    grouped = _group_indian(integer_part)
    if fraction:
        grouped = f"{grouped}.{fraction}"
    return f"{sign}{CURRENCY_SYMBOL}{grouped}"


def decimal_string(value: float) -> str:
    """
    Shortest decimal form of a number: integral values carry no fraction.

    This is the text a search query is matched against, so ``500.0`` must
    read as ``"500"`` and ``12.5`` as ``"12.5"``.
    """
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)
