import unittest
from fractions import Fraction

from polycalc.syntax import *
from polycalc.syntax_tools import pprint, free_vars
from polycalc.parse import parse

class TestPrettyPrinter(unittest.TestCase):

    def test_numbers(self):
        self.assertEqual(pprint(ENum(Fraction(3))), "3")
        self.assertEqual(pprint(ENum(Fraction(36, 5))), "36/5")
        self.assertEqual(pprint(ENum(Fraction(-8))), "-8")

    def test_binary_operators(self):
        self.assertEqual(pprint(parse("3*x + 6 * y ^ 2")), "((3 * x) + (6 * (y ^ 2)))")

    def test_lists(self):
        self.assertEqual(pprint(parse("[1, 2, a, b, c]")), "[1 2 a b c]")

    def test_calls(self):
        self.assertEqual(pprint(parse("f(x, [y])")), "f(x, [y])")

    def test_assignment(self):
        self.assertEqual(pprint(parse("q = 3")), "q = 3")

class TestFreeVars(unittest.TestCase):

    def test_first_occurrence_order(self):
        self.assertEqual(list(free_vars(parse("y*x + z + x^2"))), ["y", "x", "z"])

    def test_no_vars(self):
        self.assertEqual(list(free_vars(parse("1 + 2"))), [])

    def test_deep_tree(self):
        e = EVar("x0")
        for i in range(1, 5000):
            e = EAdd(e, EVar("x{}".format(i % 7)))
        self.assertEqual(len(free_vars(e)), 7)

    def test_long_sum(self):
        e = parse(" + ".join(["x"] * 2000))
        self.assertEqual(len(free_vars(e)), 1)
        s = pprint(e)
        assert s.startswith("(" * 1999 + "x + x)")
        assert s.endswith(" + x)")
