import unittest

from polycalc.common import (
    FrozenDict, check_type, typechecked, fresh_name, partition_point)
from polycalc.syntax import ENum, EVar, EAdd
from fractions import Fraction

class TestCommonUtils(unittest.TestCase):

    def test_frozendict_unordered(self):
        d1 = FrozenDict([('a', 1), ('b', 2)])
        d2 = FrozenDict([('b', 2), ('a', 1)])
        assert hash(d1) == hash(d2)
        assert d1 == d2

    def test_partition_point(self):
        self.assertEqual(partition_point(10, lambda i: i >= 3), 3)
        self.assertEqual(partition_point(10, lambda i: True), 0)
        self.assertEqual(partition_point(10, lambda i: False), 10)
        self.assertEqual(partition_point(0, lambda i: True), 0)

    def test_partition_point_sorted_list(self):
        xs = [9, 7, 7, 4, 1]
        self.assertEqual(partition_point(len(xs), lambda i: xs[i] < 7), 3)
        self.assertEqual(partition_point(len(xs), lambda i: xs[i] <= 7), 1)

    def test_fresh_name(self):
        n1 = fresh_name()
        n2 = fresh_name()
        assert n1 != n2
        n3 = fresh_name("x", omit={n1, n2})
        assert n3 not in (n1, n2)
        assert "x" in n3

    def test_check_type(self):
        check_type([1, 2], [int])
        check_type((1, 2), [int])
        check_type(("a", 1), (str, int))
        check_type({"a": 1}, {str: int})
        with self.assertRaises(AssertionError):
            check_type("xy", [str])
        with self.assertRaises(AssertionError):
            check_type([1, "a"], [int])

    def test_typechecked(self):
        @typechecked
        def f(x : [str]) -> int:
            return len(x)
        self.assertEqual(f(["a", "b"]), 2)
        with self.assertRaises(AssertionError):
            f("ab")

class TestADT(unittest.TestCase):

    def test_structural_equality(self):
        e1 = EAdd(ENum(Fraction(1)), EVar("x"))
        e2 = EAdd(ENum(Fraction(1)), EVar("x"))
        assert e1 is not e2
        assert e1 == e2
        assert hash(e1) == hash(e2)
        assert e1 != EAdd(EVar("x"), ENum(Fraction(1)))

    def test_declared_case_module(self):
        self.assertEqual(EVar.__module__, "polycalc.syntax")
        self.assertEqual(repr(EVar("x")), "EVar('x')")

    def test_wrong_arity(self):
        with self.assertRaises(AssertionError):
            EVar("x", "y")
