"""Big Number Calculator: exact decimal arithmetic and expression evaluation."""

from .DecimalValue import DecimalValue
from .MathEngine import calculate, evaluate
