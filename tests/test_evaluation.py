import unittest
from fractions import Fraction

from polycalc.evaluation import eval, Session, EvaluationError
from polycalc.parse import parse
from polycalc.syntax import ENum, EVar, SAssign

SESSION = [
    ("3", "3"),
    (".2 * 5 + 8 / (3 + 1)", "3"),
    ("identifier", "identifier"),
    ("3*x + 6 * y ^ 2", "((3 * x) + (6 * (y ^ 2)))"),
    ("[1, 2, a, b, c]", "[1 2 a b c]"),
    ("q = 3", "q = 3"),
    ("multicoeff(18*x^2*y + y*z, [x, y, z], [2, 1, 0])", "18"),
    ("multicoeff(18*x^2*y + 19*x^2*y*z + y*z, [x, y], [2, 1])", "19*z + 18"),
    ("multicoeff(18*x^2*y + 19*x^2*y*z + y*z, [x, y, z], [2, 1, 0])", "18"),
    ("multicoeff2(18*x^2*y + 19*x^2*y*z + y*z, x^2*y)", "19*z + 18"),
    ("f = p(3*x*y^2 + 8*x^2 + 7 + 20*x*y + 3*y^10)", "f = 8*x^2 + 3*x*y^2 + 20*x*y + 3*y^10 + 7"),
    ("totalorder(f)", "3*y^10 + 3*x*y^2 + 8*x^2 + 20*x*y + 7"),
    ("lexorder(f)", "8*x^2 + 3*x*y^2 + 20*x*y + 3*y^10 + 7"),
    ("lpp(f)", "1*x^2"),
    ("lc(f)", "8"),
    ("lm(f)", "8*x^2"),
    ("lm(totalorder(f))", "3*y^10"),
    ("support(lexorder(f), [x, y])", "[[2 0] [1 2] [1 1] [0 10] [0 0]]"),
    ("support(f, [y])", "[[0] [2] [1] [10] [0]]"),
    ("f1 = p(2*x^2*y + 3*x + 4*y)", "f1 = 2*x^2*y + 3*x + 4*y"),
    ("lpp(f1)", "1*x^2*y"),
    ("lc(f1)", "2"),
    ("lm(f1)", "2*x^2*y"),
    ("higher(f1, y)", "2*x^2*y + 3*x"),
    ("lower(f1, x*y)", "3*x + 4*y"),
    ("remainder(f1)", "3*x + 4*y"),
    ("g = p(-8*x^2 + -1*x*y + 12*y^2)", "g = -8*x^2 + -1*x*y + 12*y^2"),
    ("f5 = 40*x + 36*y^3 + 53*y", "f5 = (((40 * x) + (36 * (y ^ 3))) + (53 * y))"),
    ("reduceterm(g, f5, x^2)", "36/5*x*y^3 + 48/5*x*y + 12*y^2"),
    ("reduce(g, f5)", "36/5*x*y^3 + 48/5*x*y + 12*y^2"),
    ("reduceany(g, [x^5 + y^3, f5])", "36/5*x*y^3 + 48/5*x*y + 12*y^2"),
]

class TestSession(unittest.TestCase):

    def test_session(self):
        s = Session()
        for text, expected in SESSION:
            self.assertEqual(s.run(text), expected, msg=text)

    def test_blank_lines(self):
        s = Session()
        assert s.run("") is None
        assert s.run("  # nothing") is None

    def test_assignment_binds(self):
        s = Session()
        self.assertEqual(s.run("q = 3"), "q = 3")
        self.assertEqual(s.run("q + 1"), "4")
        self.assertEqual(s.env, { "q": ENum(Fraction(3)) })

    def test_reset(self):
        s = Session()
        s.run("q = 3")
        s.reset()
        self.assertEqual(s.run("q"), "q")

    def test_reset_operation(self):
        s = Session()
        s.run("q = 3")
        assert s.run("reset()") is None
        self.assertEqual(s.env, {})
        self.assertEqual(s.run("q"), "q")

class TestEval(unittest.TestCase):

    def test_folding(self):
        self.assertEqual(eval(parse("2 ^ 10"), {}), ENum(Fraction(1024)))
        self.assertEqual(eval(parse("2 ^ -1"), {}), ENum(Fraction(1, 2)))
        self.assertEqual(eval(parse("1 - 3/4"), {}), ENum(Fraction(1, 4)))

    def test_non_integral_powers_stay_symbolic(self):
        s = Session()
        self.assertEqual(s.run("2 ^ .5"), "(2 ^ 1/2)")

    def test_partial_folding(self):
        s = Session()
        self.assertEqual(s.run("x * (2 + 3)"), "(x * 5)")

    def test_division_by_zero(self):
        with self.assertRaises(EvaluationError):
            eval(parse("1 / (2 - 2)"), {})
        with self.assertRaises(EvaluationError):
            eval(parse("0 ^ -1"), {})

    def test_unbound_variables(self):
        self.assertEqual(eval(parse("x"), {}), EVar("x"))
        self.assertEqual(eval(parse("x"), { "x": ENum(Fraction(2)) }), ENum(Fraction(2)))

    def test_assignment_result(self):
        env = {}
        self.assertEqual(eval(parse("a = 1 + 1"), env), SAssign("a", ENum(Fraction(2))))
        self.assertEqual(env["a"], ENum(Fraction(2)))

    def test_long_sums(self):
        s = Session()
        text = " + ".join(["x"] * 1500)
        self.assertEqual(s.run("p(" + text + ")"), " + ".join(["1*x"] * 1500))
        self.assertEqual(s.run(" + ".join(["1"] * 1500)), "1500")
        self.assertEqual(s.run("p(" + "*".join(["x"] * 1500) + ")"), "1*x^1500")

    def test_none(self):
        assert eval(None, {}) is None

    def test_unknown_value(self):
        with self.assertRaises(EvaluationError):
            eval("text", {})
