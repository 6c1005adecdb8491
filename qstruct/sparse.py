''' Sparse matrix representation of operators.

    The computational basis of n modes with local dimension d is labelled
    by the integers 0 .. d**n - 1 in mixed radix, mode 0 being the least
    significant digit. Each product acts mode by mode on all basis states
    at once; entries of different products on the same (row, col) are
    summed. '''
import logging

import numpy
import scipy.sparse

from . import coefficient as cf
from .errors import DimensionMismatch, IncompatibleOperands

logger = logging.getLogger(__name__)


class SparseMatrixConverter():
    ''' Converts operators to scipy sparse matrices

        Parameters:
        number_modes: int - number of modes (spins) of the basis
        local_dimension: int - dimension of a single mode '''
    def __init__(self, number_modes, local_dimension=2):
        if isinstance(number_modes, bool) or not isinstance(number_modes, int) or number_modes < 0:
            raise DimensionMismatch("number of modes must be a non-negative integer, got {!r}".format(number_modes))
        if isinstance(local_dimension, bool) or not isinstance(local_dimension, int) or local_dimension < 1:
            raise DimensionMismatch("local dimension must be a positive integer, got {!r}".format(local_dimension))
        self.number_modes = number_modes
        self.local_dimension = local_dimension
        self.dimension = local_dimension ** number_modes

    @classmethod
    def for_operator(cls, operator, number_modes=None, local_dimension=None):
        ''' converter sized for operator
            Input:
            operator: Operator, HamiltonianOperator or LindbladNoiseOperator
            number_modes: int (optional) - defaults to operator.number_modes()
            local_dimension: int (optional) - defaults to the product's
                             local dimension (required for bosons) '''
        if local_dimension is None:
            local_dimension = operator.product_type.local_dimension
        if local_dimension is None:
            raise DimensionMismatch("'{}' needs an explicit local_dimension".format(type(operator).__name__))
        if number_modes is None:
            number_modes = operator.number_modes()
        elif operator.bound is not None and number_modes != operator.bound:
            raise IncompatibleOperands("operator is bounded to {:d} modes, {:d} requested".format(operator.bound, number_modes))
        return cls(number_modes, local_dimension)

    def _check(self, operator):
        current = operator.current_number_modes()
        if current > self.number_modes:
            raise DimensionMismatch("operator acts on {:d} modes, basis has {:d}".format(current, self.number_modes))

    def product_entries(self, product, coef=1):
        ''' nonzero entries of coef * product
            Output:
            (rows, cols, data): numpy arrays '''
        if product.max_index() >= self.number_modes:
            raise DimensionMismatch("product {} acts outside of {:d} modes".format(product, self.number_modes))
        states = numpy.arange(self.dimension, dtype=numpy.int64)
        new_states, amplitudes = product.act_on_basis(states, self.local_dimension)
        mask = amplitudes != 0
        return new_states[mask], states[mask], amplitudes[mask] * coef

    def _assemble(self, entries):
        if entries:
            rows = numpy.concatenate([e[0] for e in entries])
            cols = numpy.concatenate([e[1] for e in entries])
            data = numpy.concatenate([e[2] for e in entries]).astype(complex)
        else:
            rows = cols = numpy.zeros(0, dtype=numpy.int64)
            data = numpy.zeros(0, dtype=complex)
        matrix = scipy.sparse.coo_matrix((data, (rows, cols)), shape=(self.dimension, self.dimension))
        matrix.sum_duplicates()
        matrix.eliminate_zeros()
        return matrix

    def product_matrix(self, product):
        return self._assemble([self.product_entries(product)])

    def operator_matrix(self, operator):
        ''' matrix of sum_k coef_k * product_k
            Output:
            scipy.sparse.coo_matrix of shape (dimension, dimension) '''
        if operator.key_arity != 1:
            raise IncompatibleOperands("'{}' has no operator matrix, use superoperator_matrix".format(type(operator).__name__))
        self._check(operator)
        entries = [self.product_entries(term, cf.to_complex(coef)) for term, coef in operator.items()]
        matrix = self._assemble(entries)
        logger.debug("assembled %dx%d matrix with %d entries from %d terms", self.dimension, self.dimension, matrix.nnz, len(entries))
        return matrix

    def superoperator_matrix(self, operator):
        ''' super-operator acting on row-major vectorized density matrices
            noise operators: sum rate * (L (x) conj(R) - 1/2 (R^dag L (x) I + I (x) (R^dag L)^T))
            other operators: -i (H (x) I - I (x) H^T)
            Output:
            scipy.sparse.coo_matrix of shape (dimension**2, dimension**2) '''
        self._check(operator)
        identity = scipy.sparse.identity(self.dimension, dtype=complex, format='csr')
        if operator.key_arity == 1:
            h = self.operator_matrix(operator).tocsr()
            result = -1j * (scipy.sparse.kron(h, identity, format='csr') - scipy.sparse.kron(identity, h.T, format='csr'))
        else:
            size = self.dimension ** 2
            result = scipy.sparse.csr_matrix((size, size), dtype=complex)
            for (left, right), rate in operator.items():
                rate = cf.to_complex(rate)
                lm = self.product_matrix(left).tocsr()
                rm = self.product_matrix(right).tocsr()
                rdl = rm.conj().T @ lm
                term = scipy.sparse.kron(lm, rm.conj(), format='csr') \
                    - 0.5 * (scipy.sparse.kron(rdl, identity, format='csr') + scipy.sparse.kron(identity, rdl.T, format='csr'))
                result = result + rate * term
        result = result.tocoo()
        result.sum_duplicates()
        result.eliminate_zeros()
        logger.debug("assembled super-operator of dimension %d with %d entries", result.shape[0], result.nnz)
        return result
