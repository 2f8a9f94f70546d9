import unittest
from fractions import Fraction

from polycalc.syntax import *
from polycalc.parse import parse, ParseError

def num(x):
    return ENum(Fraction(x))

class TestParser(unittest.TestCase):

    def test_blank_input(self):
        assert parse("") is None
        assert parse("   ") is None
        assert parse("# just a comment") is None

    def test_atoms(self):
        self.assertEqual(parse("3"), num(3))
        self.assertEqual(parse("identifier"), EVar("identifier"))

    def test_precedence(self):
        self.assertEqual(parse("3*x + 6 * y ^ 2"),
            EAdd(EMul(num(3), EVar("x")), EMul(num(6), EPow(EVar("y"), num(2)))))

    def test_left_associativity(self):
        self.assertEqual(parse("a - b - c"), ESub(ESub(EVar("a"), EVar("b")), EVar("c")))
        self.assertEqual(parse("a / b * c"), EMul(EDiv(EVar("a"), EVar("b")), EVar("c")))

    def test_power_is_right_associative(self):
        self.assertEqual(parse("x ^ 2 ^ 3"), EPow(EVar("x"), EPow(num(2), num(3))))

    def test_parentheses(self):
        self.assertEqual(parse("(a + b) * c"), EMul(EAdd(EVar("a"), EVar("b")), EVar("c")))

    def test_unary_minus(self):
        self.assertEqual(parse("-8*x"), EMul(EMul(num(-1), num(8)), EVar("x")))
        self.assertEqual(parse("-x^2"), EMul(num(-1), EPow(EVar("x"), num(2))))
        self.assertEqual(parse("a + -b"), EAdd(EVar("a"), EMul(num(-1), EVar("b"))))

    def test_assignment(self):
        self.assertEqual(parse("q = 3"), SAssign("q", num(3)))

    def test_lists(self):
        self.assertEqual(parse("[]"), EList(()))
        self.assertEqual(parse("[1, 2, a]"), EList((num(1), num(2), EVar("a"))))

    def test_calls(self):
        self.assertEqual(parse("help()"), ECall("help", ()))
        self.assertEqual(parse("support(f, [x, y])"),
            ECall("support", (EVar("f"), EList((EVar("x"), EVar("y"))))))

    def test_syntax_errors(self):
        for text in ("3 +", "(x", "x = ", "= 3", "f(,)", "3 4"):
            with self.assertRaises(ParseError, msg=text):
                parse(text)

    def test_error_messages(self):
        with self.assertRaisesRegex(ParseError, "end of input"):
            parse("3 +")
        with self.assertRaisesRegex(ParseError, "syntax error at '4'"):
            parse("3 4")
