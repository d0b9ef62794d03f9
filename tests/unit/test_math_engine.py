"""
Tests for MathEngine (operator table, tokenizer, shunting yard, evaluator)

Checks:
1. Operator table contents and read-only access
2. Tokenizing: unary signs, implicit multiplication, error cases
3. Infix to postfix reordering and parenthesis matching
4. Postfix evaluation and malformed stacks
5. End-to-end evaluate / calculate
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from Calculator import MathEngine as M
from Calculator import config_manager
from Calculator import error as E
from Calculator.DecimalValue import DecimalValue


def D(value):
    return DecimalValue(value)


def op(token):
    return M.OPERATORS[token]


def render(tokens):
    return [str(token) for token in tokens]


# =============================================================================
# OPERATOR TABLE
# =============================================================================


class TestOperatorTable:
    def test_binary_operators(self):
        for token in ["+", "-", "*", "/", "^", "%", "pow", "mod"]:
            assert op(token).unary is False

    def test_prefix_functions(self):
        for token in ["pos", "neg", "abs", "fact", "floor", "ceil", "sin", "cos", "tan", "cot"]:
            assert op(token).unary is True

    def test_precedence_order(self):
        # smaller numbers bind tighter
        assert op("^").precedence < op("neg").precedence < op("*").precedence < op("+").precedence
        assert op("sin").precedence < op("^").precedence
        assert op("(").precedence > op("+").precedence

    def test_aliases_share_behaviour(self):
        assert op("^").precedence == op("pow").precedence
        assert op("%").precedence == op("mod").precedence

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            M.OPERATORS["sqrt"] = op("abs")

    def test_get_operator(self):
        assert M.get_operator("fact") is op("fact")
        with pytest.raises(E.UnknownTokenError) as excinfo:
            M.get_operator("sqrt")
        assert excinfo.value.code == "3004"

    def test_operate(self):
        assert op("-").operate(D("5"), D("2")) == D("3")
        assert op("neg").operate(D("5"), None) == D("-5")


# =============================================================================
# TOKENIZER
# =============================================================================


class TestTokenize:
    def test_simple_expression(self):
        tokens = M.tokenize("2 + 3 * 4")
        assert tokens == [D("2"), op("+"), D("3"), op("*"), D("4")]

    def test_operators_are_shared_instances(self):
        tokens = M.tokenize("1+2")
        assert tokens[1] is op("+")

    @pytest.mark.parametrize("expression, expected", [
        ("-5", ["neg", "5"]),
        ("+5", ["pos", "5"]),
        ("3-5", ["3", "-", "5"]),
        ("(-5)", ["(", "neg", "5", ")"]),
        ("(1)-5", ["(", "1", ")", "-", "5"]),
        ("2*-3", ["2", "*", "neg", "3"]),
        ("--3", ["neg", "neg", "3"]),
    ])
    def test_unary_signs(self, expression, expected):
        assert render(M.tokenize(expression)) == expected

    @pytest.mark.parametrize("expression, expected", [
        ("2(3)", ["2", "*", "(", "3", ")"]),
        ("(2)(3)", ["(", "2", ")", "*", "(", "3", ")"]),
        ("2sin(0)", ["2", "*", "sin", "(", "0", ")"]),
        ("(2)3", ["(", "2", ")", "*", "3"]),
        ("2 3", ["2", "*", "3"]),
        ("(1)fact(3)", ["(", "1", ")", "*", "fact", "(", "3", ")"]),
    ])
    def test_implicit_multiplication(self, expression, expected):
        assert render(M.tokenize(expression)) == expected

    def test_no_multiplication_before_binary_word(self):
        assert render(M.tokenize("2pow3")) == ["2", "pow", "3"]
        assert render(M.tokenize("7 mod 2")) == ["7", "mod", "2"]

    def test_case_insensitive(self):
        assert M.tokenize("SIN(1)") == M.tokenize("sin(1)")
        assert M.tokenize("Fact(3)") == M.tokenize("fact(3)")

    def test_decimal_literals(self):
        assert M.tokenize("0.5+.25") == [D("0.5"), op("+"), D("0.25")]

    def test_whitespace_is_ignored(self):
        assert M.tokenize("  1 \t+\n2 ") == M.tokenize("1+2")

    def test_empty_expression(self):
        assert M.tokenize("") == []
        assert M.tokenize("   ") == []

    @pytest.mark.parametrize("expression", ["1..2", "1.2.3", ".", "5."])
    def test_bad_number(self, expression):
        with pytest.raises(E.FormatError):
            M.tokenize(expression)

    @pytest.mark.parametrize("expression", ["sqrt(4)", "2 $ 3", "x+1", "2,3", "π"])
    def test_unknown_operator(self, expression):
        with pytest.raises(E.UnknownTokenError):
            M.tokenize(expression)


# =============================================================================
# INFIX TO POSTFIX
# =============================================================================


class TestInfixToPostfix:
    @pytest.mark.parametrize("expression, expected", [
        ("2 + 3 * 4", ["2", "3", "4", "*", "+"]),
        ("2 * 3 + 4", ["2", "3", "*", "4", "+"]),
        ("(1 + 2) * 3", ["1", "2", "+", "3", "*"]),
        ("1 - 2 - 3", ["1", "2", "-", "3", "-"]),
        ("2 ^ 3 ^ 2", ["2", "3", "^", "2", "^"]),
        ("fact(4)", ["4", "fact"]),
        ("-2^2", ["2", "2", "^", "neg"]),
        ("2^-1", ["2", "1", "neg", "^"]),
        ("fact(3)^2", ["3", "fact", "2", "^"]),
        ("-7 % 3", ["7", "neg", "3", "%"]),
    ])
    def test_order(self, expression, expected):
        assert render(M.infix_to_postfix(M.tokenize(expression))) == expected

    def test_parentheses_are_not_emitted(self):
        postfix = M.infix_to_postfix(M.tokenize("((1))"))
        assert postfix == [D("1")]

    def test_missing_closing_parenthesis(self):
        with pytest.raises(E.UnknownTokenError) as excinfo:
            M.infix_to_postfix(M.tokenize("(2+3"))
        assert excinfo.value.code == "3009"

    def test_missing_opening_parenthesis(self):
        with pytest.raises(E.UnknownTokenError) as excinfo:
            M.infix_to_postfix(M.tokenize("2+3)"))
        assert excinfo.value.code == "3010"

    def test_foreign_token(self):
        with pytest.raises(E.UnknownTokenError):
            M.infix_to_postfix([D("1"), "+", D("2")])


# =============================================================================
# POSTFIX EVALUATION
# =============================================================================


class TestEvaluatePostfix:
    def test_binary_keeps_operand_order(self):
        assert M.evaluate_postfix([D("5"), D("2"), op("-")]) == D("3")
        assert M.evaluate_postfix([D("1"), D("4"), op("/")]) == D("0.25")

    def test_unary(self):
        assert M.evaluate_postfix([D("2"), op("neg")]) == D("-2")
        assert M.evaluate_postfix([D("3"), op("fact")]) == D("6")

    def test_nested(self):
        postfix = [D("2"), D("3"), D("4"), op("*"), op("+")]
        assert M.evaluate_postfix(postfix) == D("14")

    @pytest.mark.parametrize("postfix", [
        [],
        [D("2"), D("3")],
        [D("2"), op("+")],
        [op("neg")],
    ])
    def test_malformed_stack(self, postfix):
        with pytest.raises(E.InvalidExpressionError):
            M.evaluate_postfix(postfix)

    def test_stray_token(self):
        with pytest.raises(E.InvalidExpressionError):
            M.evaluate_postfix([D("1"), "x"])

    def test_parenthesis_in_postfix(self):
        with pytest.raises(E.InvalidExpressionError):
            M.evaluate_postfix([D("1"), D("2"), op("(")])


# =============================================================================
# END TO END
# =============================================================================


class TestEvaluate:
    @pytest.mark.parametrize("expression, expected", [
        ("2 + 3 * 4", "14"),
        ("fact(4)", "24"),
        ("2(3)", "6"),
        ("(2)(3)", "6"),
        ("(2)3", "6"),
        ("2sin(0)", "0"),
        ("-2^2", "-4"),
        ("(-2)^2", "4"),
        ("2^-1", "0.5"),
        ("2 - -3", "5"),
        ("--3", "3"),
        ("+4", "4"),
        ("1+2*3^2", "19"),
        ("2^3^2", "64"),
        ("fact(3)^2", "36"),
        ("2*(3+4)", "14"),
        ("10/4", "2.5"),
        ("1/3", "0.3333333333"),
        ("7 mod 3", "1"),
        ("-7 % 3", "2"),
        ("7 % -3", "-2"),
        ("2 pow 10", "1024"),
        ("abs(-5)", "5"),
        ("floor(2.7)", "2"),
        ("floor(-2.7)", "-3"),
        ("ceil(2.1)", "3"),
        ("FACT(3)", "6"),
        ("sin(0) + cos(0)", "1"),
        ("0.1+0.2", "0.3"),
        ("99999999999999999999+1", "100000000000000000000"),
        ("123456789012345678901234567890 * 10", "1234567890123456789012345678900"),
        ("fact(30)", "265252859812191058636308480000000"),
        ("1 - 0.0000000001", "0.9999999999"),
    ])
    def test_result(self, expression, expected):
        assert str(M.evaluate(expression)) == expected

    def test_factorial_domain(self):
        with pytest.raises(E.DomainError):
            M.evaluate("fact(-1)")

    def test_division_by_zero(self):
        with pytest.raises(E.DivisionByZeroError):
            M.evaluate("1/0")
        with pytest.raises(E.DivisionByZeroError):
            M.evaluate("5 mod 0")

    def test_zero_power_zero(self):
        with pytest.raises(E.DomainError):
            M.evaluate("0^0")

    def test_fractional_power(self):
        with pytest.raises(E.DomainError):
            M.evaluate("2^0.5")

    def test_tangent_and_cotangent_precision(self):
        assert str(M.evaluate("cot(1)")) == "0.6420926159"
        assert str(M.evaluate("tan(1.57)")) == "1255.7655915008"

    def test_trig_argument_too_large(self):
        with pytest.raises(E.ArgumentRangeError) as excinfo:
            M.evaluate("sin(10^60)")
        assert excinfo.value.code == "3034"

    @pytest.mark.parametrize("expression", ["", "2 +", "*", "neg", "()"])
    def test_invalid_expression(self, expression):
        with pytest.raises(E.InvalidExpressionError):
            M.evaluate(expression)

    def test_error_carries_equation(self):
        with pytest.raises(E.MathError) as excinfo:
            M.evaluate("fact(1.5)")
        assert excinfo.value.equation == "fact(1.5)"

    def test_concurrent_evaluations(self):
        expressions = ["2+3*4", "fact(10)", "1/3", "sin(1)"] * 5
        expected = [M.evaluate(expression) for expression in expressions]
        with ThreadPoolExecutor(max_workers=4) as pool:
            results = list(pool.map(M.evaluate, expressions))
        assert results == expected

    def test_debug_prints(self, monkeypatch, capsys):
        monkeypatch.setattr(M, "debug", True)
        M.evaluate("1+2")
        output = capsys.readouterr().out
        assert "Postfix:" in output


class TestCalculate:
    @pytest.fixture(autouse=True)
    def settings_file(self, tmp_path, monkeypatch):
        path = tmp_path / "config.json"
        monkeypatch.setattr(config_manager, "config_json", path)
        return path

    def test_exact_result(self):
        assert M.calculate("2 + 3 * 4") == "= 14"
        assert M.calculate("10/4") == "= 2.5"

    def test_rounded_result(self):
        config_manager.save_setting({"decimal_places": 4})
        assert M.calculate("1/3") == "≈ 0.3333"
        assert M.calculate("2/3") == "≈ 0.6667"

    def test_default_decimal_places(self):
        assert M.calculate("1/3") == "= 0.3333333333"

    def test_invalid_setting_falls_back(self):
        config_manager.save_setting({"decimal_places": -3})
        assert M.calculate("1/8") == "= 0.125"

    def test_boolean_setting_falls_back(self):
        config_manager.save_setting({"decimal_places": True})
        assert M.calculate("1/8") == "= 0.125"

    def test_known_error_is_raised(self):
        with pytest.raises(E.DivisionByZeroError) as excinfo:
            M.calculate("1/0")
        assert excinfo.value.code == "3003"
        assert excinfo.value.equation == "1/0"

    def test_unexpected_error_is_wrapped(self, monkeypatch):
        def broken(expression):
            raise RuntimeError("boom")

        monkeypatch.setattr(M, "evaluate", broken)
        with pytest.raises(E.MathError) as excinfo:
            M.calculate("1+1")
        assert excinfo.value.code == "9999"
        assert excinfo.value.equation == "1+1"
