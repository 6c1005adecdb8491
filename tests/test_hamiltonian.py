"""
Tests for Hamiltonians: folding of conjugate pairs and Hermiticity checks.
"""

import numpy
import pytest

from qstruct import (SpinHamiltonian, SpinOperator, FermionHamiltonian, FermionOperator,
                     FermionProduct, HermitianFermionProduct, BosonHamiltonian, BosonOperator)
from qstruct.errors import IncompatibleOperands, NonHermitianTerm


def test_spin_hamiltonian_requires_real_coefficients():
    h = SpinHamiltonian()
    h.set('0Z', 1.0)
    h.add_term('0X1X', 0.5)
    assert h.get('0Z') == 1.0
    with pytest.raises(NonHermitianTerm):
        h.set('1Y', 1j)
    assert len(h) == 2


def test_fermion_hamiltonian_folds_conjugate_pairs():
    h = FermionHamiltonian()
    h.set('0C1A', 1 + 1j)
    assert h.get('0C1A') == 1 + 1j
    # c0 c1^dag = -(c1^dag c0) so its coefficient is -conj(h)
    assert h.get('0A1C') == -(1 - 1j)
    (key,) = h.keys()
    assert isinstance(key, HermitianFermionProduct)
    assert key == FermionProduct('0C1A')


def test_non_canonical_insert():
    h = FermionHamiltonian()
    h.add_term('0A1C', 2.0)
    assert h == FermionHamiltonian({'0C1A': -2.0})
    h.add_term('0C1A', 2.0)
    assert h.is_empty()


def test_self_adjoint_key_needs_real_coefficient():
    h = FermionHamiltonian({'0N': 1.0})
    with pytest.raises(NonHermitianTerm):
        h.set('1N', 2j)
    with pytest.raises(NonHermitianTerm):
        FermionHamiltonian({'0C1A2N': 1.0, '3N': 1j})


def test_to_operator_expands():
    h = FermionHamiltonian({'0C1A': 1.0, '2N': 0.5})
    expected = FermionOperator({'0C1A': 1.0, '0A1C': -1.0, '2N': 0.5})
    assert h.to_operator() == expected
    assert h.to_operator() == h.to_operator().H


def test_from_operator():
    op = FermionOperator({'0C1A': 1j, '0A1C': 1j, '2N': 3.0})
    h = FermionHamiltonian.from_operator(op)
    assert h.to_operator() == op
    with pytest.raises(NonHermitianTerm):
        FermionHamiltonian.from_operator(FermionOperator({'0C': 1.0}))
    with pytest.raises(IncompatibleOperands):
        FermionHamiltonian.from_operator(SpinOperator({'0Z': 1.0}))


def test_scalar_multiplication():
    h = SpinHamiltonian({'0Z': 1.0})
    assert isinstance(h * 2.0, SpinHamiltonian)
    assert (h * 2.0).get('0Z') == 2.0
    assert isinstance(2 * h, SpinHamiltonian)
    assert (h / 2).get('0Z') == 0.5
    product = h * 1j
    assert isinstance(product, SpinOperator)
    assert product == SpinOperator({'0Z': 1j})


def test_products_of_hamiltonians_are_plain_operators():
    a = SpinHamiltonian({'0X': 1.0})
    b = SpinHamiltonian({'0Y': 1.0})
    result = a @ b
    assert isinstance(result, SpinOperator)
    assert result == SpinOperator({'0Z': 1j})
    assert a * b == result


def test_addition_and_scalars():
    a = SpinHamiltonian({'0X': 1.0})
    b = SpinHamiltonian({'0X': -1.0, '1Z': 2.0})
    assert a + b == SpinHamiltonian({'1Z': 2.0})
    assert (a - a).is_empty()
    assert a + 1.0 == SpinHamiltonian({'0X': 1.0, 'I': 1.0})
    with pytest.raises(NonHermitianTerm):
        a + 1j
    with pytest.raises(IncompatibleOperands):
        a + FermionHamiltonian({'0N': 1.0})


def test_separate_and_remove():
    h = FermionHamiltonian({'0C1A': 1.0, '2N': 1.0})
    single, rest = h.separate_into_n_terms(1)
    assert single == FermionHamiltonian({'2N': 1.0})
    assert rest == FermionHamiltonian({'0C1A': 1.0})
    assert '0A1C' in h
    assert h.remove('0A1C') == 1.0
    assert list(h.keys()) == [FermionProduct('2N')]


def test_hermitian_conjugate_is_identity():
    h = FermionHamiltonian({'0C1A': 1j})
    assert h.H == h


def test_boson_hamiltonian():
    h = BosonHamiltonian({'0CCA': 0.5})
    assert h.to_operator() == BosonOperator({'0CAA': 0.5, '0CCA': 0.5})
    matrix = h.sparse_matrix(local_dimension=4).toarray()
    numpy.testing.assert_allclose(matrix, matrix.conj().T)


def test_hamiltonian_matrix_is_hermitian():
    h = FermionHamiltonian({'0C1A': 0.3 + 0.2j, '0C1C': 0.5, '1N': -1.0})
    matrix = h.sparse_matrix().toarray()
    assert matrix.shape == (4, 4)
    numpy.testing.assert_allclose(matrix, matrix.conj().T)


def test_symbolic_hamiltonian():
    h = SpinHamiltonian({'0Z': 'J'})
    assert (h * 2).get('0Z') == h.get('0Z') * 2
    assert (h.substitute_parameters({'J': 0.5})).get('0Z') == 0.5
