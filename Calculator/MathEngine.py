# MathEngine.py
"""""
Core calculation engine for the Big Number Calculator.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens
   (DecimalValue literals and Operator references).
2) Infix to postfix: shunting yard reordering driven by operator precedence.
3) Postfix evaluator: stack machine producing one DecimalValue.
4) Formatter: renders results for display using the user settings.
"""""

from types import MappingProxyType

from . import config_manager as config_manager
from . import ScientificEngine
from . import error as E
from .DecimalValue import DecimalValue

# Debug toggle for optional prints in this module
debug = False


# -----------------------------
# Operator table
# -----------------------------

class Operator:
    """Operator or function usable in an expression.

    Lower precedence numbers bind tighter. Unary operators are prefix
    functions and receive their single operand as `n` (n1 is None).
    """
    __slots__ = ("token", "operate", "precedence", "unary")

    def __init__(self, token, operate, precedence, unary):
        self.token = token
        self.operate = operate
        self.precedence = precedence
        self.unary = unary

    def __repr__(self):
        return f"Operator({self.token!r})"

    def __str__(self):
        return self.token


def _grouping(n, n1):
    raise E.InvalidExpressionError("Parenthesis in postfix expression.", code="3011")


_operator_list = [
    Operator("(", _grouping, 1000, False),
    Operator(")", _grouping, 1000, False),
    Operator("+", lambda n, n1: n + n1, 4, False),
    Operator("-", lambda n, n1: n - n1, 4, False),
    Operator("*", lambda n, n1: n * n1, 3, False),
    Operator("/", lambda n, n1: ScientificEngine.divide_with_decimals(n, n1), 3, False),
    Operator("mod", lambda n, n1: n % n1, 3, False),
    Operator("%", lambda n, n1: n % n1, 3, False),
    Operator("pos", lambda n, n1: n, 2, True),
    Operator("neg", lambda n, n1: -n, 2, True),
    Operator("pow", lambda n, n1: ScientificEngine.power(n, n1), 1, False),
    Operator("^", lambda n, n1: ScientificEngine.power(n, n1), 1, False),
    Operator("abs", lambda n, n1: abs(n), 0, True),
    Operator("floor", lambda n, n1: ScientificEngine.floor(n), 0, True),
    Operator("ceil", lambda n, n1: ScientificEngine.ceil(n), 0, True),
    Operator("fact", lambda n, n1: ScientificEngine.factorial(n), 0, True),
    Operator("sin", lambda n, n1: ScientificEngine.sine(n), 0, True),
    Operator("cos", lambda n, n1: ScientificEngine.cosine(n), 0, True),
    Operator("tan", lambda n, n1: ScientificEngine.tangent(n), 0, True),
    Operator("cot", lambda n, n1: ScientificEngine.cotangent(n), 0, True),
]

# Read-only after import
OPERATORS = MappingProxyType({op.token: op for op in _operator_list})

LPAR = OPERATORS["("]
RPAR = OPERATORS[")"]
MUL = OPERATORS["*"]


def get_operator(token):
    """Return the Operator registered for token; raise UnknownTokenError otherwise."""
    try:
        return OPERATORS[token]
    except KeyError:
        raise E.UnknownTokenError(f"Invalid operator: {token}", code="3004") from None


def is_literal(token):
    return isinstance(token, DecimalValue)


def is_prefix_function(token):
    return isinstance(token, Operator) and token.unary


# -----------------------------
# Tokenizer
# -----------------------------

SPACE, NUMBER, SYMBOL, WORD = "space", "number", "symbol", "word"


def char_type(c):
    if c.isspace():
        return SPACE
    elif ('0' <= c <= '9') or c == '.':
        return NUMBER
    elif 'a' <= c <= 'z':
        return WORD
    else:
        return SYMBOL


def flush_token(tokens, token_type, text):
    """Append the finished run `text` to tokens as a literal or operator."""
    if token_type == SPACE or not text:
        return

    if token_type == NUMBER:
        tokens.append(DecimalValue(text))
        return

    if text in ("+", "-"):
        # Sign is binary only after something that ends an operand
        previous = tokens[-1] if tokens else None
        if not (is_literal(previous) or previous is RPAR):
            text = "pos" if text == "+" else "neg"

    tokens.append(get_operator(text))


def insert_implicit_multiplication(tokens):
    """Insert '*' wherever juxtaposition means multiplication: 2(3), (2)(3), 2sin(1), (2)3."""
    result = []
    for token in tokens:
        if result:
            previous = result[-1]
            ends_operand = is_literal(previous) or previous is RPAR
            starts_operand = token is LPAR or is_literal(token) or is_prefix_function(token)
            if ends_operand and starts_operand:
                result.append(MUL)
        result.append(token)
    return result


def tokenize(expression):
    """Convert a raw expression string into a list of DecimalValues and Operators.

    Raises FormatError for malformed numbers and UnknownTokenError for
    unknown operator or function names.
    """
    tokens = []
    last_type = SPACE
    current = ""

    for c in expression.lower():
        current_type = char_type(c)

        # Most symbol operators are single characters, so symbols flush eagerly
        if current_type != last_type or (current_type == SYMBOL and current):
            flush_token(tokens, last_type, current)
            current = ""

        current += c
        last_type = current_type

    flush_token(tokens, last_type, current)

    return insert_implicit_multiplication(tokens)


# -----------------------------
# Infix to postfix (shunting yard)
# -----------------------------

def should_unwind(ops, incoming):
    """True while the operator on top of the stack has to be emitted before `incoming`."""
    if not ops or incoming.unary:
        # Prefix functions have no left operand to complete
        return False
    return ops[-1].precedence <= incoming.precedence


def infix_to_postfix(infix):
    """Reorder an infix token list into postfix (reverse Polish) order."""
    ops = []
    postfix = []

    for token in infix:
        if is_literal(token):
            postfix.append(token)

        elif not isinstance(token, Operator):
            raise E.UnknownTokenError(f"Unexpected token: {token!r}", code="3011")

        elif token is LPAR:
            ops.append(token)

        elif token is RPAR:
            while ops and ops[-1] is not LPAR:
                postfix.append(ops.pop())
            if not ops:
                raise E.UnknownTokenError("Missing opening parenthesis '('", code="3010")
            ops.pop()

        else:
            while should_unwind(ops, token):
                postfix.append(ops.pop())
            ops.append(token)

    while ops:
        op = ops.pop()
        if op is LPAR:
            raise E.UnknownTokenError("Missing closing parenthesis ')'", code="3009")
        postfix.append(op)

    return postfix


# -----------------------------
# Postfix evaluator
# -----------------------------

def apply_operator(op, stack):
    """Pop the operands of `op` from the stack and return its result."""
    needed = 1 if op.unary else 2
    if len(stack) < needed:
        raise E.InvalidExpressionError(f"Missing operand for '{op.token}'.", code="3012")

    n1 = stack.pop()
    if op.unary:
        return op.operate(n1, None)
    n = stack.pop()
    return op.operate(n, n1)


def evaluate_postfix(postfix):
    """Evaluate a postfix token list and return the single resulting DecimalValue."""
    stack = []

    for token in postfix:
        if is_literal(token):
            stack.append(token)
        elif isinstance(token, Operator):
            stack.append(apply_operator(token, stack))
        else:
            raise E.InvalidExpressionError(f"Invalid token in postfix expression: {token!r}", code="3011")

    if len(stack) != 1:
        raise E.InvalidExpressionError("Invalid expression.", code="3012")
    return stack[0]


# -----------------------------
# Public entry points
# -----------------------------

def evaluate(expression):
    """Evaluate an expression string and return a DecimalValue.

    Any failure is raised as a MathError subclass with `equation` set.
    """
    try:
        infix = tokenize(expression)
        if debug == True:
            print(infix)

        postfix = infix_to_postfix(infix)
        if debug == True:
            print("Postfix:", postfix)

        return evaluate_postfix(postfix)

    except E.MathError as e:
        e.equation = expression
        raise


def cleanup(ergebnis):
    """Round a result to the configured decimal places.

    Returns:
        (rounded_value, rounding_flag)
    where rounding_flag tells whether digits were dropped.
    """
    target_decimals = config_manager.load_setting_value("decimal_places")
    if isinstance(target_decimals, bool) or not isinstance(target_decimals, int) or target_decimals < 0:
        target_decimals = config_manager.DEFAULT_SETTINGS["decimal_places"]

    gerundetes_ergebnis = ergebnis.round(target_decimals)
    return gerundetes_ergebnis, gerundetes_ergebnis != ergebnis


def calculate(problem):
    """Main API for display: evaluate → round → render string ('= 14' or '≈ 0.33')."""
    try:
        ergebnis = evaluate(problem)
        ergebnis, rounding = cleanup(ergebnis)

    # Known errors already carry the equation
    except E.MathError:
        raise
    # Convert unexpected Python exceptions to our unified error type
    except Exception as e:
        raise E.MathError(message=str(e).strip(), code="9999", equation=problem) from e

    ungefaehr_zeichen = "\u2248"  # "≈"
    if rounding == True:
        return f"{ungefaehr_zeichen} {ergebnis}"
    return f"= {ergebnis}"
