"""
Fraction Service

Converts between stored decimal amounts and the mixed fractions used
when writing and reading recipes ("1 1/2" <-> 1.5).
"""

import math
import re

from constants import (
    FRACTION_TOLERANCE, MAX_APPROX_DENOMINATOR, MAX_APPROX_ITERATIONS,
    COMMON_FRACTIONS, UNICODE_FRACTIONS,
)
from .errors import ValidationError

_PLAIN_DECIMAL = re.compile(r'^[\d.]+$')
_MIXED_FRACTION = re.compile(r'^(\d+)\s+(\d+)/(\d+)$')
_BARE_FRACTION = re.compile(r'^(\d+)/(\d+)$')


def _approximate(remainder):
    """
    Best rational approximation of 0 < remainder < 1 by continued fractions.

    Stops at the first convergent within tolerance. When the next
    convergent's denominator would exceed MAX_APPROX_DENOMINATOR, the
    previous convergent is kept instead.
    """
    a = remainder
    h1, h2 = 1, 0
    k1, k2 = 0, 1
    for _ in range(MAX_APPROX_ITERATIONS):
        b = math.floor(a)
        h = b * h1 + h2
        k = b * k1 + k2
        if k > MAX_APPROX_DENOMINATOR:
            return h1, k1
        if abs(remainder - h / k) < FRACTION_TOLERANCE:
            return h, k
        h2, h1 = h1, h
        k2, k1 = k1, k
        a = 1 / (a - b)
    return h1, k1


def decimal_to_fraction(decimal):
    """
    Format a decimal amount as a cooking fraction.

    Examples: 1.5 -> "1 1/2", 0.25 -> "1/4", 2 -> "2", None or 0 -> "".
    Negative values keep their sign in front: -1.5 -> "-1 1/2".
    Values that are not finite render as "".
    """
    if decimal is None or decimal == 0:
        return ''
    try:
        value = float(decimal)
    except OverflowError:
        return ''
    if not math.isfinite(value):
        return ''

    sign = '-' if value < 0 else ''
    value = abs(value)
    whole = math.floor(value)
    remainder = value % 1

    if remainder < FRACTION_TOLERANCE:
        return f"{sign}{whole}"

    numerator = denominator = None
    for n, d in COMMON_FRACTIONS:
        if abs(remainder - n / d) < FRACTION_TOLERANCE:
            numerator, denominator = n, d
            break

    if numerator is None:
        numerator, denominator = _approximate(remainder)
        # Rounded all the way down or up to a whole number
        if numerator == 0:
            return f"{sign}{whole}"
        if numerator == denominator:
            return f"{sign}{whole + 1}"

    if whole == 0:
        return f"{sign}{numerator}/{denominator}"
    return f"{sign}{whole} {numerator}/{denominator}"


def fraction_to_decimal(text):
    """
    Parse "2", "0.5", "1 1/2" or "3/4" into a float.

    Returns None for blank input, any other shape, a zero denominator, a
    malformed decimal such as "12.34.56", or a value too large for a
    float. Never raises.
    """
    if text is None:
        return None
    trimmed = str(text).strip()
    if not trimmed:
        return None

    try:
        value = _parse_trimmed(trimmed)
    except OverflowError:
        return None
    if value is None or not math.isfinite(value):
        return None
    return value


def _parse_trimmed(trimmed):
    if _PLAIN_DECIMAL.match(trimmed):
        try:
            return float(trimmed)
        except ValueError:
            return None

    mixed_match = _MIXED_FRACTION.match(trimmed)
    if mixed_match:
        whole, numerator, denominator = (int(g) for g in mixed_match.groups())
        if denominator == 0:
            return None
        return whole + numerator / denominator

    frac_match = _BARE_FRACTION.match(trimmed)
    if frac_match:
        numerator, denominator = (int(g) for g in frac_match.groups())
        if denominator == 0:
            return None
        return numerator / denominator

    return None


def normalize_fractions(text):
    """Replace Unicode fraction characters with ASCII ones ("1½" -> "1 1/2")."""
    for char, ascii_fraction in UNICODE_FRACTIONS.items():
        if char in text:
            text = re.sub(r'(\d)\s*' + re.escape(char), r'\1 ' + ascii_fraction, text)
            text = text.replace(char, ascii_fraction)
    return text


def parse_amount(value):
    """
    Parse an ingredient amount submitted by a client.

    Accepts None/blank (no amount), a number, or fraction text. Anything
    unparseable, negative or not finite is a ValidationError rather than a
    silent default.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError(f'Invalid amount: {value!r}')

    if isinstance(value, (int, float)):
        try:
            amount = float(value)
        except OverflowError:
            raise ValidationError('Invalid amount: too large')
    elif isinstance(value, str):
        if not value.strip():
            return None
        amount = fraction_to_decimal(normalize_fractions(value))
        if amount is None:
            raise ValidationError(f'Invalid amount: {value[:50]!r}')
    else:
        raise ValidationError(f'Invalid amount: {value!r}')

    if not math.isfinite(amount) or amount < 0:
        raise ValidationError(f'Invalid amount: {amount!r}')
    return amount
