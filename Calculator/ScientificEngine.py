# ScientificEngine
"""""
Derived math on DecimalValue: scaled division, floor/ceil, factorial,
integer powers and trigonometric functions.

Everything here is built on the public DecimalValue operations only.

Precision
---------
- Division results default to DEFAULT_DECIMAL_PLACES digits after the point.
- sin/cos reduce the argument to [-pi, pi] against PI and sum the Taylor
  series until its terms vanish. Intermediate values keep
  WORKING_DECIMAL_PLACES digits and the result is rounded to
  TRIG_DECIMAL_PLACES.
- tan/cot divide the working precision series and widen the precision when
  the divisor is small, so the quotient is also good to TRIG_DECIMAL_PLACES.
- Arguments whose integral part needs more digits of PI than PI_DECIMAL_PLACES
  carries are rejected with ArgumentRangeError.
"""""

from .DecimalValue import DecimalValue, divide_and_remainder
from . import error as E


DEFAULT_DECIMAL_PLACES = 10
WORKING_DECIMAL_PLACES = 40
TRIG_DECIMAL_PLACES = 10
GUARD_DIGITS = 5

ZERO = DecimalValue("0")
ONE = DecimalValue("1")
TWO = DecimalValue("2")

PI = DecimalValue(
    "3.14159265358979323846264338327950288419716939937510"
    "58209749445923078164062862089986280348253421170679"
)
PI_DECIMAL_PLACES = 100
TWO_PI = PI * TWO
HALF_PI = PI * DecimalValue("0.5")


def divide_with_decimals(n, n1, places=DEFAULT_DECIMAL_PLACES):
    """Return n / n1 rounded half-up to `places` digits after the decimal point.

    One guard digit is computed beyond the requested precision and used for
    rounding, so 2/3 gives 0.6666666667.
    """
    if places < 0:
        raise E.ArgumentRangeError("Decimal places should be at least 0.", code="3033")

    quotient, _ = divide_and_remainder(abs(n).shift(places + 1), abs(n1))

    guard_digit = quotient.integral[-1]
    result = quotient.shift(-1).truncate()
    if guard_digit >= 5:
        result = result + ONE

    result = result.shift(-places)
    return result if n.sign == n1.sign else -result


def round_decimal(n, places=0):
    return n.round(places)


def floor(n):
    """Round toward negative infinity."""
    if n.is_integer():
        return n
    truncated = n.truncate()
    return truncated if n.sign else truncated - ONE


def ceil(n):
    """Round toward positive infinity."""
    if n.is_integer():
        return n
    truncated = n.truncate()
    return truncated + ONE if n.sign else truncated


def factorial(n):
    if not n.sign or not n.is_integer():
        raise E.DomainError("Factorial is only supported for zero and positive integers.", code="3031")

    result = ONE
    i = ONE
    while i <= n:
        result = result * i
        i = i + ONE
    return result


def power(base, exponent):
    """base ^ exponent for integer exponents. Negative exponents use divide_with_decimals."""
    if not exponent.is_integer():
        raise E.DomainError(f"Non integer exponent: {exponent}", code="3007")

    if exponent.is_zero() and base.is_zero():
        raise E.DomainError("Zero raised to zero is undefined.", code="3032")

    if not exponent.sign:
        return divide_with_decimals(ONE, power(base, -exponent))

    result = ONE
    i = ZERO
    while i < exponent:
        result = result * base
        i = i + ONE
    return result


def _reduce(n, places):
    """Return n shifted by a multiple of 2pi into [-pi, pi], accurate to `places` digits."""
    # Each unit of n's magnitude spends one digit of PI
    if len(n.integral) + places > PI_DECIMAL_PLACES:
        raise E.ArgumentRangeError(f"Argument too large for trigonometric functions: {n}", code="3034")

    x = n % TWO_PI
    if x > PI:
        x = x - TWO_PI
    return x.round(places)


def _cosine(n, places):
    x = _reduce(n, places)
    square = (x * x).round(places)

    # 1 - x^2/2! + x^4/4! - ... until the terms vanish at this precision
    result = ONE
    term = ONE
    k = 1
    while not term.is_zero():
        numerator = -(term * square).round(places)
        term = divide_with_decimals(numerator, DecimalValue((2 * k - 1) * (2 * k)), places)
        result = result + term
        k += 1
    return result


def _sine(n, places):
    # sin(x) = cos(pi/2 - x)
    return _cosine(HALF_PI - n, places)


def cosine(n, places=TRIG_DECIMAL_PLACES):
    return _cosine(n, max(WORKING_DECIMAL_PLACES, places + GUARD_DIGITS)).round(places)


def sine(n, places=TRIG_DECIMAL_PLACES):
    return _sine(n, max(WORKING_DECIMAL_PLACES, places + GUARD_DIGITS)).round(places)


def _leading_zeros(n):
    """Number of zeros right after the decimal point of a value below one."""
    if n.integral != (0,):
        return 0
    count = 0
    for digit in n.fractional:
        if digit:
            break
        count += 1
    return count


def _trig_quotient(numerator, denominator, n, name):
    places = WORKING_DECIMAL_PLACES
    divisor = denominator(n, places)

    # Below the guard digits the series result is rounding noise
    if divisor.round(places - GUARD_DIGITS).is_zero():
        raise E.DivisionByZeroError(f"{name} is undefined for {n}", code="2001")

    # A small divisor magnifies the error of both series, buy the lost digits back
    lost = _leading_zeros(divisor)
    if lost:
        # sin works on pi/2 - n, which can carry one more integral digit than n
        places = min(places + 2 * lost, PI_DECIMAL_PLACES - len(n.integral) - 1)
        divisor = denominator(n, places)

    return divide_with_decimals(numerator(n, places), divisor, TRIG_DECIMAL_PLACES)


def tangent(n):
    return _trig_quotient(_sine, _cosine, n, "tan")


def cotangent(n):
    return _trig_quotient(_cosine, _sine, n, "cot")
