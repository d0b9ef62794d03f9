# DecimalValue.py
"""""
Arbitrary precision decimal numbers for the Big Number Calculator.

A DecimalValue stores a sign and two digit tuples (integral and fractional
part, most significant digit first). All arithmetic is done digit by digit,
so results are exact; nothing ever passes through a float.

Canonical form
--------------
- integral part has no leading zeros (a single 0 is kept)
- fractional part has no trailing zeros
- zero is always positive, there is no "-0"

Instances never change after construction. Every operation returns a new,
normalized DecimalValue.
"""""

import re
from decimal import Decimal

from . import error as E

# [+-] digits [. digits]  or  [+-] . digits
NUMBER_PATTERN = re.compile(r"[+-]?([0-9]+(\.[0-9]+)?|\.[0-9]+)")


# -----------------------------
# Digit list helpers
# -----------------------------

def _normalize(sign, integral, fractional):
    """Strip insignificant zeros and force zero to be positive."""
    start = 0
    while start < len(integral) - 1 and integral[start] == 0:
        start += 1
    integral = tuple(integral[start:]) or (0,)

    end = len(fractional)
    while end > 0 and fractional[end - 1] == 0:
        end -= 1
    fractional = tuple(fractional[:end])

    if integral == (0,) and not fractional:
        sign = True
    return sign, integral, fractional


def _pad_left(digits, width):
    return [0] * (width - len(digits)) + list(digits)


def _align(n, n1):
    """Return both magnitudes as equally long digit lists plus the count of fractional places."""
    width = max(len(n.integral), len(n1.integral))
    places = max(len(n.fractional), len(n1.fractional))

    x = _pad_left(n.integral, width) + list(n.fractional) + [0] * (places - len(n.fractional))
    y = _pad_left(n1.integral, width) + list(n1.fractional) + [0] * (places - len(n1.fractional))
    return x, y, places


def _split(digits, places):
    point = len(digits) - places
    return digits[:point], digits[point:]


def _add_digits(x, y):
    """Add two equally long digit lists; a final carry becomes a new leading digit."""
    result = []
    carry = 0
    for i in range(len(x) - 1, -1, -1):
        total = x[i] + y[i] + carry
        if total > 9:
            total -= 10
            carry = 1
        else:
            carry = 0
        result.append(total)

    if carry:
        result.append(carry)
    result.reverse()
    return result


def _subtract_digits(x, y):
    """Subtract y from x (equally long, x >= y) with borrow propagation."""
    result = []
    borrow = 0
    for i in range(len(x) - 1, -1, -1):
        difference = x[i] - y[i] - borrow
        if difference < 0:
            difference += 10
            borrow = 1
        else:
            borrow = 0
        result.append(difference)

    result.reverse()
    return result


def _compare_magnitude(n, n1):
    """Compare |n| with |n1|. Returns -1, 0 or 1."""
    x, y, _ = _align(n, n1)
    return (x > y) - (x < y)


def _abs_sum(n, n1):
    """|n| + |n1| as (integral, fractional) digit lists."""
    x, y, places = _align(n, n1)
    return _split(_add_digits(x, y), places)


def _abs_diff(n, n1):
    """||n| - |n1|| as (integral, fractional, order).

    order is the magnitude comparison of n against n1, so callers can pick the
    sign without comparing again.
    """
    x, y, places = _align(n, n1)
    order = (x > y) - (x < y)
    if order < 0:
        x, y = y, x
    integral, fractional = _split(_subtract_digits(x, y), places)
    return integral, fractional, order


def _count_nonzero(digits):
    return sum(1 for digit in digits if digit != 0)


# -----------------------------
# Conversion helpers
# -----------------------------

def _parse(text):
    if NUMBER_PATTERN.fullmatch(text) is None:
        raise E.FormatError(f"Bad number format: {text}", code="3008")

    sign = not text.startswith("-")
    integral_text, _, fractional_text = text.lstrip("+-").partition(".")
    return sign, [int(c) for c in integral_text], [int(c) for c in fractional_text]


def _from_int(value):
    sign = value >= 0
    value = abs(value)
    digits = []
    while value:
        value, digit = divmod(value, 10)
        digits.append(digit)
    digits.reverse()
    return sign, digits, []


def _from_decimal(value):
    """Convert a decimal.Decimal digit by digit using its (sign, digits, exponent) tuple."""
    if not value.is_finite():
        raise E.FormatError(f"Bad number format: {value}", code="3008")

    decimal_tuple = value.as_tuple()
    sign = decimal_tuple.sign == 0
    digits = list(decimal_tuple.digits)
    exponent = decimal_tuple.exponent

    if exponent >= 0:
        return sign, digits + [0] * exponent, []

    places = -exponent
    if places >= len(digits):
        return sign, [0], [0] * (places - len(digits)) + digits
    return sign, digits[:-places], digits[-places:]


# -----------------------------
# DecimalValue
# -----------------------------

class DecimalValue:
    """Signed decimal number of arbitrary length.

    Accepts a numeral string, an int, a decimal.Decimal or another DecimalValue.
    Strings must match NUMBER_PATTERN, otherwise FormatError is raised.
    """

    __slots__ = ("_sign", "_integral", "_fractional")

    def __init__(self, value="0"):
        if isinstance(value, DecimalValue):
            sign, integral, fractional = value._sign, value._integral, value._fractional
        elif isinstance(value, str):
            sign, integral, fractional = _parse(value)
        elif isinstance(value, Decimal):
            sign, integral, fractional = _from_decimal(value)
        elif isinstance(value, int):
            sign, integral, fractional = _from_int(value)
        else:
            raise E.FormatError(f"Bad number format: {value!r}", code="3008")

        self._sign, self._integral, self._fractional = _normalize(sign, integral, fractional)

    @classmethod
    def _from_parts(cls, sign, integral, fractional):
        """Build directly from digit sequences, skipping string parsing."""
        number = cls.__new__(cls)
        number._sign, number._integral, number._fractional = _normalize(sign, integral, fractional)
        return number

    # --- read-only state ---

    @property
    def sign(self):
        """True for zero and positive numbers."""
        return self._sign

    @property
    def integral(self):
        return self._integral

    @property
    def fractional(self):
        return self._fractional

    def is_zero(self):
        return self._integral == (0,) and not self._fractional

    def is_integer(self):
        return not self._fractional

    # --- conversion ---

    def __str__(self):
        text = "" if self._sign else "-"
        text += "".join(str(digit) for digit in self._integral)
        if self._fractional:
            text += "." + "".join(str(digit) for digit in self._fractional)
        return text

    def __repr__(self):
        return f"DecimalValue('{self}')"

    def to_decimal(self):
        """Return the value as decimal.Decimal (exact, the context precision is not applied)."""
        return Decimal(str(self))

    def __bool__(self):
        return not self.is_zero()

    # --- comparison ---

    def compare_to(self, other):
        return compare(self, other)

    def __eq__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return compare(self, other) == 0

    def __hash__(self):
        # equal values share one canonical string
        return hash(str(self))

    def __lt__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return compare(self, other) >= 0

    # --- unary ---

    def __neg__(self):
        return DecimalValue._from_parts(not self._sign, self._integral, self._fractional)

    def __pos__(self):
        return self

    def __abs__(self):
        return DecimalValue._from_parts(True, self._integral, self._fractional)

    def abs(self):
        return abs(self)

    def truncate(self):
        """Drop the fractional part (rounds toward zero)."""
        return DecimalValue._from_parts(self._sign, self._integral, ())

    # --- addition / subtraction ---

    def __add__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented

        if self._sign == other._sign:
            integral, fractional = _abs_sum(self, other)
            sign = self._sign
        else:
            integral, fractional, order = _abs_diff(self, other)
            # The operand with the larger magnitude decides the sign
            sign = self._sign if order >= 0 else other._sign

        return DecimalValue._from_parts(sign, integral, fractional)

    def __sub__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented

        if self._sign != other._sign:
            # a - (-b) = a + b  and  -a - b = -(a + b)
            integral, fractional = _abs_sum(self, other)
            sign = self._sign
        else:
            integral, fractional, order = _abs_diff(self, other)
            sign = self._sign if order >= 0 else not self._sign

        return DecimalValue._from_parts(sign, integral, fractional)

    # --- multiplication ---

    def __mul__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented

        outer = list(self._integral + self._fractional)
        inner = list(other._integral + other._fractional)

        # Fewer non-zero digits in the outer loop means fewer partial products
        if _count_nonzero(outer) > _count_nonzero(inner):
            outer, inner = inner, outer

        accumulated = [0]
        for position, digit in enumerate(reversed(outer)):
            if digit == 0:
                continue

            partial = []
            carry = 0
            for inner_digit in reversed(inner):
                product = inner_digit * digit + carry
                carry, product = divmod(product, 10)
                partial.append(product)
            if carry:
                partial.append(carry)
            partial.reverse()
            partial.extend([0] * position)

            width = max(len(accumulated), len(partial))
            accumulated = _add_digits(_pad_left(accumulated, width), _pad_left(partial, width))

        places = len(self._fractional) + len(other._fractional)
        if places >= len(accumulated):
            # Add 0s in front to be able to insert the decimal point
            accumulated = _pad_left(accumulated, places + 1)

        integral, fractional = _split(accumulated, places)
        return DecimalValue._from_parts(self._sign == other._sign, integral, fractional)

    def shift(self, places):
        """Multiply by 10**places by moving the decimal point (negative places divide)."""
        digits = list(self._integral + self._fractional)
        point = len(self._integral) + places

        if point < 0:
            digits = [0] * -point + digits
            point = 0
        elif point > len(digits):
            digits = digits + [0] * (point - len(digits))

        return DecimalValue._from_parts(self._sign, digits[:point], digits[point:])

    # --- division ---

    def __divmod__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        return divide_and_remainder(self, other)

    def __floordiv__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        quotient, _ = divide_and_remainder(self, other)
        return quotient

    def __mod__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        _, remainder = divide_and_remainder(self, other)
        return remainder

    def __truediv__(self, other):
        if not isinstance(other, DecimalValue):
            return NotImplemented
        # imported here, ScientificEngine builds on this module
        from .ScientificEngine import divide_with_decimals
        return divide_with_decimals(self, other)

    # --- rounding ---

    def round(self, places=0):
        """Round half away from zero to `places` fractional digits."""
        if places < 0:
            raise E.ArgumentRangeError("Decimal places should be at least 0.", code="3033")

        if len(self._fractional) <= places:
            return self

        result = self
        if self._fractional[places] >= 5:
            unit = ONE.shift(-places)
            result = result + unit if self._sign else result - unit

        return DecimalValue._from_parts(result._sign, result._integral, result._fractional[:places])

    def __round__(self, ndigits=None):
        # round(v) gives an int like the built in numbers, ties still go away from zero
        if ndigits is None:
            return int(str(self.round(0)))
        return self.round(ndigits)


# -----------------------------
# Module level operations
# -----------------------------

def compare(n, n1):
    """Return -1, 0 or 1 for n < n1, n == n1, n > n1."""
    if n.sign != n1.sign:
        return 1 if n.sign else -1

    result = _compare_magnitude(n, n1)
    return result if n.sign else -result


def divide_and_remainder(dividend, divisor):
    """Long division of two DecimalValues.

    Returns (quotient, remainder) with floor semantics: the quotient is rounded
    toward negative infinity and the remainder has the sign of the divisor, so
    dividend == quotient * divisor + remainder.
    """
    if divisor.is_zero():
        raise E.DivisionByZeroError("Division by zero", code="3003")

    numerator = abs(dividend)
    denominator = abs(divisor)

    # Get rid of decimals; scaling both sides keeps the quotient
    scale = 0
    while numerator.fractional or denominator.fractional:
        numerator = numerator.shift(1)
        denominator = denominator.shift(1)
        scale += 1

    multiples = [denominator * DecimalValue(digit) for digit in range(10)]

    quotient_digits = []
    remainder = ZERO
    for digit in numerator.integral:
        trial = DecimalValue._from_parts(True, remainder.integral + (digit,), ())

        estimate = 9
        while multiples[estimate] > trial:
            estimate -= 1

        quotient_digits.append(estimate)
        remainder = trial - multiples[estimate]

    quotient = DecimalValue._from_parts(True, quotient_digits, ())
    remainder = remainder.shift(-scale)

    negative = dividend.sign != divisor.sign
    if negative and not remainder.is_zero():
        quotient = quotient + ONE
        remainder = denominator.shift(-scale) - remainder

    if negative:
        quotient = -quotient
    if not divisor.sign:
        remainder = -remainder

    return quotient, remainder


ZERO = DecimalValue("0")
ONE = DecimalValue("1")
