"""
Tests for the generic operator container and its arithmetic.
"""

import pytest

from qstruct import (PauliProduct, SpinOperator, FermionOperator, DecoherenceOperator, pauli,
                     zero, one)
from qstruct.errors import CapacityViolation, IncompatibleOperands


class TestContainer:
    """Container operations of Operator."""

    def test_set_is_idempotent(self):
        op = SpinOperator()
        op.set('0Z', 1.5)
        op.set('0Z', 1.5)
        assert op.get('0Z') == 1.5
        assert len(op) == 1

    def test_set_zero_removes(self):
        op = SpinOperator({'0Z': 1.0})
        op.set('0Z', 0)
        assert op.is_empty()
        assert '0Z' not in op

    def test_get_missing_is_zero(self):
        assert SpinOperator().get('3X') == 0

    def test_add_term_merges_and_cancels(self):
        op = SpinOperator()
        op.add_term('0X1Y', 1.0)
        op.add_operator_product(PauliProduct('0X1Y'), 2.0)
        assert op.get('0X1Y') == 3.0
        op.add_term('0X1Y', -3.0)
        assert op.is_empty()

    def test_remove(self):
        op = SpinOperator({'0Z': 2.0, '1X': 1.0})
        assert op.remove('0Z') == 2.0
        assert op.remove('0Z') is None
        assert op == SpinOperator({'1X': 1.0})

    def test_extend_is_atomic(self):
        op = SpinOperator(number_modes=2)
        with pytest.raises(CapacityViolation):
            op.extend([('0X', 1.0), ('2Z', 1.0)])
        assert op.is_empty()

    def test_iteration_order(self):
        op = SpinOperator({'1X': 1.0, '0Z1X': 2.0, '0X': 3.0})
        assert [str(p) for p in op.keys()] == ['0X', '0Z1X', '1X']
        assert list(op.values()) == [3.0, 2.0, 1.0]
        # generators are restartable
        assert list(op.keys()) == list(op.keys())

    def test_iter_yields_single_terms(self):
        op = SpinOperator({'0Z': 1.0, '1X': 2.0})
        terms = list(op)
        assert terms == [SpinOperator({'0Z': 1.0}), SpinOperator({'1X': 2.0})]
        assert sum(terms, zero(SpinOperator)) == op

    def test_separate_into_n_terms(self):
        op = SpinOperator({'0Z': 1.0, '0X1X': 2.0, '1Y': 3.0, 'I': 4.0})
        single, rest = op.separate_into_n_terms(1)
        assert single == SpinOperator({'0Z': 1.0, '1Y': 3.0})
        assert rest == SpinOperator({'0X1X': 2.0, 'I': 4.0})
        assert single + rest == op

    def test_number_modes(self):
        op = SpinOperator({'4Z': 1.0})
        assert op.current_number_modes() == 5
        assert op.number_modes() == 5
        assert SpinOperator(number_modes=7).number_modes() == 7
        assert SpinOperator().current_number_modes() == 0

    def test_foreign_products_are_rejected(self):
        with pytest.raises(IncompatibleOperands):
            SpinOperator().set(FermionOperator.product_type('0C'), 1.0)

    def test_copy_is_independent(self):
        op = SpinOperator({'0Z': 1.0})
        other = op.copy()
        other.set('1X', 1.0)
        assert len(op) == 1

    def test_substitute_parameters(self):
        op = SpinOperator({'0Z': 'theta', '1X': '1 - theta'})
        result = op.substitute_parameters({'theta': 1})
        assert result == SpinOperator({'0Z': 1.0})


class TestArithmetic:
    """Linear and monoidal operations of Operator."""

    def test_negation_cancels(self):
        op = SpinOperator({'0Z': 1.0, '1X': -2.0})
        assert (op + (-op)).is_empty()
        assert op - op == 0

    def test_addition(self):
        a = SpinOperator({'0Z': 1.0})
        b = SpinOperator({'0Z': 2.0, '1X': 1.0})
        assert a + b == SpinOperator({'0Z': 3.0, '1X': 1.0})
        assert a + 1 == SpinOperator({'0Z': 1.0, 'I': 1.0})
        assert 2 - a == SpinOperator({'0Z': -1.0, 'I': 2.0})

    def test_in_place_addition(self):
        a = SpinOperator({'0Z': 1.0})
        a += SpinOperator({'0Z': 1.0})
        assert a == SpinOperator({'0Z': 2.0})

    def test_bound_of_sum(self):
        a = SpinOperator({'0Z': 1.0}, number_modes=2)
        b = SpinOperator({'2Z': 1.0}, number_modes=3)
        assert (a + b).number_modes() == 3
        assert (a + SpinOperator({'1X': 1.0})).bound == 2
        assert (SpinOperator() + SpinOperator()).bound is None
        with pytest.raises(CapacityViolation):
            a + SpinOperator({'5X': 1.0})

    def test_scalar_multiplication(self):
        a = SpinOperator({'0Z': 1.0, '1X': 2.0})
        assert a * 2 == SpinOperator({'0Z': 2.0, '1X': 4.0})
        assert 1j * a == SpinOperator({'0Z': 1j, '1X': 2j})
        assert a / 2 == SpinOperator({'0Z': 0.5, '1X': 1.0})
        assert (a * 0).is_empty()

    def test_distributivity(self):
        a = pauli('0X') + 2 * pauli('1Z')
        b = pauli('0Y') - pauli('1Y')
        c = 3 * pauli('0Z1X')
        assert (a + b) @ c == a @ c + b @ c
        assert a * b == a @ b

    def test_commutator(self):
        assert pauli('0X').commutator(pauli('0Y')) == 2j * pauli('0Z')
        assert pauli('0X').commutator(pauli('1Y')).is_empty()

    def test_hermitian_conjugate(self):
        op = SpinOperator({'0X': 1j, '1Z': 2.0})
        assert op.H == SpinOperator({'0X': -1j, '1Z': 2.0})
        assert DecoherenceOperator({'0iY': 1.0}).H == DecoherenceOperator({'0iY': -1.0})

    def test_mixing_families_fails(self):
        with pytest.raises(IncompatibleOperands):
            SpinOperator({'0Z': 1.0}) + FermionOperator({'0N': 1.0})
        with pytest.raises(IncompatibleOperands):
            SpinOperator({'0Z': 1.0}) @ DecoherenceOperator({'0Z': 1.0})

    def test_unit_and_zero(self):
        op = SpinOperator({'0Z': 1.0})
        assert one(SpinOperator) @ op == op
        assert (zero(op) @ op).is_empty()

    def test_symbolic_coefficients(self):
        op = SpinOperator({'0Z': 'theta'})
        assert (op - op).is_empty()
        assert (op * 2).get('0Z') == op.get('0Z') * 2

    def test_repr(self):
        op = pauli('0Z1X') * 2 + pauli('1X') * 1j
        assert repr(op) == '2 Z0 X1 + i X1'
        assert repr(SpinOperator()) == '0'
