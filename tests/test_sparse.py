"""
Tests for sparse matrices of operators and super-operators.
"""

import numpy
import pytest
import scipy.sparse

from qstruct import (SparseMatrixConverter, SpinOperator, DecoherenceOperator,
                     SpinHamiltonian, PauliProduct, pauli, fermion)
from qstruct.errors import DimensionMismatch, IncompatibleOperands, UnresolvedSymbol

I2 = numpy.eye(2)
X = numpy.array([[0, 1], [1, 0]], dtype=complex)
Y = numpy.array([[0, -1j], [1j, 0]], dtype=complex)
Z = numpy.array([[1, 0], [0, -1]], dtype=complex)


def kron(*factors):
    ''' Kronecker product with the first factor on the highest mode '''
    result = numpy.eye(1)
    for f in factors:
        result = numpy.kron(result, f)
    return result


@pytest.mark.parametrize("token, matrix", [('0X', X), ('0Y', Y), ('0Z', Z), ('I', I2)])
def test_single_spin(token, matrix):
    numpy.testing.assert_allclose(pauli(token).sparse_matrix(number_modes=1).toarray(), matrix)


def test_decoherence_iy_is_real():
    matrix = DecoherenceOperator({'0iY': 1.0}).sparse_matrix().toarray()
    numpy.testing.assert_allclose(matrix, 1j * Y)
    assert numpy.all(matrix.imag == 0)


def test_mode_zero_is_least_significant():
    op = SpinOperator({'0Z1X': 1.0})
    numpy.testing.assert_allclose(op.sparse_matrix().toarray(), kron(X, Z))
    padded = op.sparse_matrix(number_modes=3).toarray()
    numpy.testing.assert_allclose(padded, kron(I2, X, Z))


def test_operator_sum():
    op = SpinOperator({'0X': 0.5, '1Z': -1.0, '0Y1Y': 2.0})
    expected = 0.5 * kron(I2, X) - kron(Z, I2) + 2.0 * kron(Y, Y)
    matrix = op.sparse_matrix()
    assert scipy.sparse.issparse(matrix)
    numpy.testing.assert_allclose(matrix.toarray(), expected)


def test_matrix_of_product_is_homomorphism():
    a = pauli('0X1Y') + 0.5 * pauli('1Z')
    b = pauli('0Z') - 2j * pauli('0Y1X')
    ma = a.sparse_matrix(number_modes=2).toarray()
    mb = b.sparse_matrix(number_modes=2).toarray()
    numpy.testing.assert_allclose((a @ b).sparse_matrix(number_modes=2).toarray(), ma @ mb)


def test_fermion_signs():
    # c1^dag on |mode0 occupied> picks up a minus sign
    create1 = fermion('1C').sparse_matrix(number_modes=2).toarray()
    assert create1[3, 1] == -1
    assert create1[2, 0] == 1
    number = fermion('0N').sparse_matrix(number_modes=1).toarray()
    numpy.testing.assert_allclose(number, numpy.diag([0, 1]))


def test_fermion_anticommutation_matrices():
    for i in range(3):
        for j in range(3):
            ci = fermion((i, 'A')).sparse_matrix(number_modes=3).toarray()
            cj = fermion((j, 'C')).sparse_matrix(number_modes=3).toarray()
            expected = numpy.eye(8) if i == j else numpy.zeros((8, 8))
            numpy.testing.assert_allclose(ci @ cj + cj @ ci, expected)


def test_requested_modes_too_small():
    with pytest.raises(DimensionMismatch):
        pauli('2Z').sparse_matrix(number_modes=2)


def test_bound_mismatch():
    op = SpinOperator({'0Z': 1.0}, number_modes=2)
    assert op.sparse_matrix().shape == (4, 4)
    with pytest.raises(IncompatibleOperands):
        op.sparse_matrix(number_modes=3)


def test_unresolved_symbols():
    with pytest.raises(UnresolvedSymbol):
        SpinOperator({'0Z': 'theta'}).sparse_matrix()


def test_converter():
    converter = SparseMatrixConverter(2)
    assert converter.dimension == 4
    numpy.testing.assert_allclose(converter.product_matrix(PauliProduct('1X')).toarray(), kron(X, I2))
    with pytest.raises(DimensionMismatch):
        SparseMatrixConverter(-1)
    with pytest.raises(DimensionMismatch):
        converter.product_matrix(PauliProduct('2X'))


def test_empty_operator():
    matrix = SpinOperator().sparse_matrix(number_modes=2)
    assert matrix.shape == (4, 4)
    assert matrix.nnz == 0


def test_hamiltonian_superoperator():
    h = SpinHamiltonian({'0Z': 1.0})
    matrix = h.sparse_matrix_superoperator().toarray()
    expected = -1j * (numpy.kron(Z, I2) - numpy.kron(I2, Z.T))
    numpy.testing.assert_allclose(matrix, expected)
    # commutator acting on a row-major vectorized density matrix
    rho = numpy.array([[0.6, 0.2j], [-0.2j, 0.4]])
    numpy.testing.assert_allclose(matrix @ rho.reshape(-1), (-1j * (Z @ rho - rho @ Z)).reshape(-1))
