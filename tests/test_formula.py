"""
Unit tests for the formula model.
"""

import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src"))

from cdclsat.formula import Clause, Formula, Literal
from cdclsat.utils.exceptions import InvalidClauseError


class TestLiteral(unittest.TestCase):
    """Test cases for Literal."""

    def test_equality_and_hash(self):
        self.assertEqual(Literal(3, True), Literal(3, True))
        self.assertNotEqual(Literal(3, True), Literal(3, False))
        self.assertNotEqual(Literal(3), Literal(4))
        self.assertEqual(len({Literal(1), Literal(1), Literal(1, True)}), 2)

    def test_neg(self):
        self.assertEqual(Literal(2).neg(), Literal(2, True))
        self.assertEqual(Literal(2, True).neg().neg(), Literal(2, True))

    def test_int_conversion(self):
        self.assertEqual(Literal.from_int(-7), Literal(7, True))
        self.assertEqual(Literal.from_int(7), Literal(7, False))
        self.assertEqual(Literal(7, True).to_int(), -7)

    def test_invalid_variable(self):
        with self.assertRaises(InvalidClauseError):
            Literal(0)
        with self.assertRaises(InvalidClauseError):
            Literal(-3)
        with self.assertRaises(InvalidClauseError):
            Literal.from_int(0)

    def test_str(self):
        self.assertEqual(str(Literal(4)), "4")
        self.assertEqual(str(Literal(4, True)), "¬4")


class TestClause(unittest.TestCase):
    """Test cases for Clause."""

    def test_keeps_order_and_duplicates(self):
        clause = Clause.from_ints([2, -1, 2])
        self.assertEqual(len(clause), 3)
        self.assertEqual(clause.to_ints(), [2, -1, 2])
        self.assertEqual(clause.variables(), {1, 2})

    def test_immutable_value(self):
        literals = [Literal(1), Literal(2)]
        clause = Clause(literals)
        literals.append(Literal(3))
        self.assertEqual(len(clause), 2)
        self.assertEqual(clause, Clause.from_ints([1, 2]))
        self.assertNotEqual(clause, Clause.from_ints([2, 1]))

    def test_str(self):
        self.assertEqual(str(Clause.from_ints([1, -2])), "1 ∨ ¬2")
        self.assertEqual(str(Clause()), "")


class TestFormula(unittest.TestCase):
    """Test cases for Formula."""

    def test_variables(self):
        formula = Formula.from_ints([[1, -3], [5]])
        self.assertEqual(formula.get_variables(), frozenset({1, 3, 5}))
        self.assertEqual(len(formula), 2)

    def test_add_learned(self):
        formula = Formula.from_ints([[1, 2], [-1]])
        learned = Clause.from_ints([2])
        formula.add_learned(learned)

        self.assertEqual(len(formula.clauses), 3)
        self.assertEqual(formula.learned_clauses, [learned])
        self.assertEqual(formula.original_clauses, [Clause.from_ints([1, 2]), Clause.from_ints([-1])])
        self.assertEqual(formula.variables, frozenset({1, 2}))

    def test_learned_clause_cannot_introduce_variables(self):
        formula = Formula.from_ints([[1, 2]])
        with self.assertRaises(InvalidClauseError):
            formula.add_learned(Clause.from_ints([3]))

    def test_str(self):
        formula = Formula.from_ints([[1, 2], [-1]])
        self.assertEqual(str(formula), "(1 ∨ 2) ∧ (¬1)")

    def test_empty_formula(self):
        formula = Formula()
        self.assertEqual(formula.variables, frozenset())
        self.assertEqual(formula.to_ints(), [])


if __name__ == "__main__":
    unittest.main()
