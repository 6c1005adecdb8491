''' Lindblad noise operators.

    A noise term is keyed by a pair (L, R) of products and carries a rate
    gamma; it stands for the dissipator

        D[rho] = gamma * (L rho R^dag - 1/2 {R^dag L, rho})

    Identity products are rejected on either side, since they only
    contribute a coherent part that belongs to the Hamiltonian. '''
from . import coefficient as cf
from .errors import IncompatibleOperands, InvalidLindbladTerm
from .operator import ComposedOperator, Operator
from .product import Product


class NoiseOperator(Operator):
    ''' Operator keyed by pairs of products (left, right)

        Parameters:
        terms: dict or iterable - {(left, right): rate, ...}
        number_modes: int (optional) - bound on the mode indices
        product_type: Product subclass of both sides '''
    key_arity = 2

    def __init__(self, terms=None, number_modes=None, product_type=None):
        if product_type is not None:
            self.product_type = product_type
        super().__init__(terms, number_modes)

    def empty_clone(self):
        return type(self)(number_modes=self._number_modes, product_type=self.product_type)

    def _check_side(self, side):
        if isinstance(side, str):
            side = self.product_type.from_string(side)
        if not isinstance(side, Product) or side.family is not self.product_type.family:
            raise IncompatibleOperands("'{}' does not accept keys of type '{}'".format(type(self).__name__, type(side).__name__))
        return side

    def check_term(self, term):
        if not isinstance(term, (tuple, list)) or len(term) != 2:
            raise IncompatibleOperands("noise keys are (left, right) pairs of products, got {!r}".format(term))
        return (self._check_side(term[0]), self._check_side(term[1]))

    def term_max_index(self, term):
        return max(term[0].max_index(), term[1].max_index())

    def term_order(self, term):
        return (len(term[0]), len(term[1]))

    def term_repr(self, term):
        return '({}, {})'.format(term[0].label(), term[1].label())

    def term_token(self, term):
        return '({}, {})'.format(term[0], term[1])

    def term_mul(self, term1, term2):
        raise IncompatibleOperands("noise operators cannot be multiplied")

    def term_adjoint(self, term):
        # D[L, R] with rate g maps hermitian rho onto D[R, L] with rate g*
        return (term[1], term[0]), 1

    def separate_into_n_terms(self, n_left, n_right):
        return super().separate_into_n_terms((n_left, n_right))

    def _as_operator(self, other):
        if cf.is_scalar(other):
            raise IncompatibleOperands("scalars cannot be added to noise operators")
        return other

    def __matmul__(self, other):
        raise IncompatibleOperands("noise operators cannot be multiplied")


class LindbladNoiseOperator(ComposedOperator):
    ''' Lindblad noise operator: sum of rate * D[L, R]

        Parameters:
        terms: dict or iterable - {(left, right): rate, ...}
            left, right: products (or readable tokens), not the identity
        number_modes: int (optional) - bound on the mode indices

        Attributes (to be redefined by specific subclasses):
        product_type: product class of both sides '''
    key_arity = 2

    def __init__(self, terms=None, number_modes=None):
        self.internal = NoiseOperator(number_modes=number_modes, product_type=self.product_type)
        if terms is not None:
            self.extend(terms)

    def _key(self, term):
        left, right = self.internal.check_term(term)
        if len(left) == 0 or len(right) == 0:
            raise InvalidLindbladTerm("identity product in noise term ({}, {})".format(left, right))
        return (left, right)

    def set(self, term, rate):
        self.internal.set(self._key(term), rate)

    def get(self, term):
        ''' rate of term, zero if absent (identity sides are never stored) '''
        return self.internal.get(self.internal.check_term(term))

    def add_term(self, term, rate):
        self.internal.add_term(self._key(term), rate)

    add_operator_product = add_term

    def extend(self, terms):
        if isinstance(terms, LindbladNoiseOperator):
            self._check_compatible(terms)
            terms = terms.items()
        elif isinstance(terms, dict):
            terms = terms.items()
        self.internal.extend([(self._key(term), rate) for term, rate in terms])

    def separate_into_n_terms(self, n_left, n_right):
        return super().separate_into_n_terms(n_left, n_right)

    def _as_operand(self, other):
        if cf.is_scalar(other):
            raise IncompatibleOperands("scalars cannot be added to noise operators")
        return other

    def __mul__(self, other):
        if not cf.is_scalar(other):
            return NotImplemented
        return self._wrap(self.internal * other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        if not cf.is_scalar(other):
            return NotImplemented
        return self._wrap(self.internal / other)

    def hermitian_conjugate(self):
        return self._wrap(self.internal.hermitian_conjugate())

    @property
    def H(self):
        return self.hermitian_conjugate()

    def sparse_matrix_superoperator(self, number_modes=None, local_dimension=None):
        ''' super-operator of the dissipator on row-major vectorized density matrices '''
        return self.internal.sparse_matrix_superoperator(number_modes, local_dimension)
