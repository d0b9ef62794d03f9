# error.py
"""""
Error types for the Big Number Calculator.

Every error carries a four digit code (see ERROR_MESSAGES) and, once it
reaches the public entry points, the equation that caused it.
"""""


class MathError(Exception):
    def __init__(self, message, code="9999", equation=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation

    def __str__(self):
        return f"{self.code}: {self.message}"


class ParseError(MathError):
    pass

class FormatError(ParseError):
    pass

class UnknownTokenError(ParseError):
    pass

class InvalidExpressionError(ParseError):
    pass


class CalculationError(MathError):
    pass

class DomainError(CalculationError):
    pass

class DivisionByZeroError(CalculationError):
    pass

class ArgumentRangeError(CalculationError):
    pass



Error_Dictionary= {

    "1" : "Missing Files",
    "2" : "Scientific Calculation Error",
    "3" : "Calculator Error",
    "5" : "Configuration Error",
    "9" : "Runtime Error"

}

#Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number



ERROR_MESSAGES = {
    "2001" : "Trigonometric function undefined for this argument.",

    "3003" : "Division by Zero",
    "3004" : "Invalid Operator: ", # + operator
    "3007" : "Non integer exponent. ",
    "3008" : "Bad number format: ", # + number
    "3009" : "Missing ')'. ",
    "3010" : "Missing '('. ",
    "3011" : "Unexpected Token: ", # + Token
    "3012" : "Invalid expression: ", # + Equation
    "3031" : "Factorial is only supported for zero and positive integers.",
    "3032" : "Zero raised to zero is undefined.",
    "3033" : "Decimal places should be at least 0.",
    "3034" : "Argument too large for trigonometric functions: ", # + argument

    "5001" : "Settings file could not be written: ", # + path

    "9999" : "Unexpected Error: " #+error
}


def describe(code):
    """Return the category and default message registered for an error code."""
    category = Error_Dictionary.get(str(code)[:1], Error_Dictionary["9"])
    return category, ERROR_MESSAGES.get(str(code), ERROR_MESSAGES["9999"])
