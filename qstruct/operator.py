''' Sparse operator container.

    An Operator maps canonical product keys to coefficients. Zero
    coefficients are never stored, merging two entries on the same key
    sums their coefficients and drops the entry if the sum vanishes, and
    iteration follows the total order of the keys. An operator with a
    declared number of modes (a "system") rejects products beyond it. '''
import logging

from . import coefficient as cf
from .errors import CapacityViolation, IncompatibleOperands
from .product import Product
from .sparse import SparseMatrixConverter
from . import serialization

logger = logging.getLogger(__name__)


def _check_number_modes(number_modes):
    if number_modes is None:
        return None
    if isinstance(number_modes, bool) or not isinstance(number_modes, int) or number_modes < 0:
        raise ValueError("number of modes must be a non-negative integer or None, got {!r}".format(number_modes))
    return number_modes


def accumulate(terms, term, coef):
    ''' merge coef into terms[term], removing the entry if the sum vanishes '''
    if term in terms:
        total = cf.add(terms[term], coef)
        if cf.is_zero(total):
            terms.pop(term)
        else:
            terms[term] = total
    elif not cf.is_zero(coef):
        terms[term] = coef


class Operator():
    ''' Represents an element of an operator algebra as a sparse sum of
        products, which admits addition, multiplication (associative),
        scalar multiplication and Hermitian conjugation

        Parameters:
        terms: dict or iterable - {term: coef, ...} or [(term, coef), ...]
            term: Product - canonical product (or its readable token)
            coef: number, sympy expression or str - the coefficient
        number_modes: int (optional) - bound on the mode indices

        Attributes:
        product_type: Product subclass accepted as key
        key_arity: number of products in a key (1, or 2 for noise) '''
    product_type = Product
    key_arity = 1

    def __init__(self, terms=None, number_modes=None):
        self.terms = {}
        self._number_modes = _check_number_modes(number_modes)
        if terms is not None:
            self.extend(terms)

    def empty_clone(self):
        ''' an empty operator of the same type and bound '''
        return type(self)(number_modes=self._number_modes)

    def _new(self, terms, number_modes):
        result = self.empty_clone()
        result._number_modes = number_modes
        result.terms = terms
        return result

    def copy(self):
        return self._new(dict(self.terms), self._number_modes)

    # ---- term hooks ----
    # !!! to be redefined by specific Operator subclasses
    def check_term(self, term):
        ''' validate (and parse) a key '''
        if isinstance(term, str):
            term = self.product_type.from_string(term)
        if not isinstance(term, Product) or term.family is not self.product_type.family:
            raise IncompatibleOperands("'{}' does not accept keys of type '{}'".format(type(self).__name__, type(term).__name__))
        return term

    def term_max_index(self, term):
        return term.max_index()

    def term_order(self, term):
        ''' number of indices a term touches '''
        return len(term)

    def term_repr(self, term):
        ''' provides a representation for operator term '''
        return term.label()

    def term_token(self, term):
        return str(term)

    def term_mul(self, term1, term2):
        ''' define multiplication of two terms
            Output:
            list of (term, phase) '''
        return term1.multiply(term2)

    def term_adjoint(self, term):
        ''' Output: (term, phase) with term^dagger = phase * term '''
        return term.hermitian_conjugate()

    # ---- bounds ----
    def number_modes(self):
        ''' declared bound if any, else the current number of modes '''
        if self._number_modes is not None:
            return self._number_modes
        return self.current_number_modes()

    def current_number_modes(self):
        ''' one more than the largest index touched by any term '''
        return max((self.term_max_index(term) for term in self.terms), default=-1) + 1

    @property
    def bound(self):
        return self._number_modes

    def _check_capacity(self, term):
        if self._number_modes is not None:
            index = self.term_max_index(term)
            if index >= self._number_modes:
                raise CapacityViolation(index, self._number_modes)

    # ---- container ----
    def set(self, term, coef):
        ''' overwrite the coefficient of term (a zero coefficient removes it) '''
        term = self.check_term(term)
        coef = cf.coefficient(coef)
        if cf.is_zero(coef):
            self.terms.pop(term, None)
        else:
            self._check_capacity(term)
            self.terms[term] = coef

    def get(self, term):
        ''' coefficient of term, zero if absent '''
        return self.terms.get(self.check_term(term), 0j)

    def add_term(self, term, coef):
        ''' add coef to the coefficient of term '''
        term = self.check_term(term)
        coef = cf.coefficient(coef)
        if cf.is_zero(coef):
            return
        self._check_capacity(term)
        accumulate(self.terms, term, coef)

    add_operator_product = add_term

    def remove(self, term):
        ''' drop term, returning its coefficient (None if absent) '''
        return self.terms.pop(self.check_term(term), None)

    def extend(self, terms):
        ''' add many terms at once; nothing is added if any term is rejected
            Input:
            terms: Operator, dict or iterable of (term, coef) '''
        if isinstance(terms, Operator):
            self._check_compatible(terms)
            terms = terms.terms.items()
        elif isinstance(terms, dict):
            terms = terms.items()
        checked = [(self.check_term(term), cf.coefficient(coef)) for term, coef in terms]
        for term, coef in checked:
            if not cf.is_zero(coef):
                self._check_capacity(term)
        for term, coef in checked:
            accumulate(self.terms, term, coef)

    def keys(self):
        return (term for term in sorted(self.terms))

    def values(self):
        return (self.terms[term] for term in sorted(self.terms))

    def items(self):
        return ((term, self.terms[term]) for term in sorted(self.terms))

    def __iter__(self):
        ''' on iteration, yield each term as a separate operator '''
        for term, coef in self.items():
            yield self._new({term: coef}, self._number_modes)

    def __len__(self):
        return len(self.terms)

    def __contains__(self, term):
        return self.check_term(term) in self.terms

    def is_empty(self):
        return len(self.terms) == 0

    def separate_into_n_terms(self, n):
        ''' split into the terms touching exactly n indices and the rest
            Output:
            (separated, remainder): two new operators '''
        separated = {}
        remainder = {}
        for term, coef in self.terms.items():
            if self.term_order(term) == n:
                separated[term] = coef
            else:
                remainder[term] = coef
        return self._new(separated, self._number_modes), self._new(remainder, self._number_modes)

    def substitute_parameters(self, values):
        ''' substitute symbolic parameters
            Input:
            values: dict - {name: number, ...} '''
        terms = {}
        for term, coef in self.terms.items():
            accumulate(terms, term, cf.substitute(coef, values))
        return self._new(terms, self._number_modes)

    # ---- representation ----
    def __repr__(self):
        if self.is_empty(): # zero operator
            return '0'
        txt = ''
        for term, coef in self.items():
            txt_term = cf.coef_repr(coef) + self.term_repr(term)
            if txt != '' and txt_term[0] != '-':
                txt += '+ '
            txt += txt_term + ' '
        return txt.strip()

    def __str__(self):
        txt = '{}{{\n'.format(type(self).__name__)
        for term, coef in self.items():
            txt += '{}: {},\n'.format(self.term_token(term), cf.display(coef))
        return txt + '}'

    # ---- comparison ----
    def __eq__(self, other):
        ''' compare if self and other are the same operator
            (self == other) '''
        if cf.is_scalar(other):
            if cf.is_zero(cf.coefficient(other)):
                return self.is_empty()
            try:
                return (self - other).is_empty()
            except IncompatibleOperands:
                return False
        if not isinstance(other, Operator):
            return NotImplemented
        if type(self) is not type(other) or self.product_type is not other.product_type:
            return False
        if self._number_modes != other._number_modes:
            return False
        if self.terms.keys() != other.terms.keys():
            return False
        return all(cf.is_zero(cf.sub(coef, other.terms[term])) for term, coef in self.terms.items())

    __hash__ = None

    # ---- linear algebra ----
    def _check_compatible(self, other):
        if type(other) is not type(self) or other.product_type is not self.product_type:
            raise IncompatibleOperands("operation is not defined between '{}' and '{}'".format(type(self).__name__, type(other).__name__))

    def _combined_bound(self, other):
        bounds = [b for b in (self._number_modes, other._number_modes) if b is not None]
        return max(bounds) if bounds else None

    def _bounded(self, terms, number_modes):
        ''' result of a binary operation, checked against its bound '''
        result = self._new(terms, number_modes)
        if number_modes is not None and result.current_number_modes() > number_modes:
            raise CapacityViolation(result.current_number_modes() - 1, number_modes)
        return result

    def _as_operator(self, other):
        ''' non-operators are treated as multiples of the identity '''
        if cf.is_scalar(other):
            return one(self) * other
        return other

    def _scale(self, value):
        value = cf.coefficient(value)
        if cf.is_zero(value):
            return self._new({}, self._number_modes)
        terms = {}
        for term, coef in self.terms.items():
            accumulate(terms, term, cf.mul(coef, value))
        return self._new(terms, self._number_modes)

    def __mul__(self, other):
        ''' scalar multiplication (A * x) or operator multiplication (A * B) '''
        if isinstance(other, Operator):
            return self @ other
        if not cf.is_scalar(other):
            return NotImplemented
        return self._scale(other)

    def __rmul__(self, other):
        ''' scalar multiplication (x * A) '''
        if not cf.is_scalar(other):
            return NotImplemented
        return self._scale(other)

    def __truediv__(self, other):
        ''' scalar division (A / x) '''
        if not cf.is_scalar(other):
            return NotImplemented
        return self._scale(1 / cf.coefficient(other))

    def __neg__(self):
        ''' operator negation (- A) '''
        return self._new({term: cf.neg(coef) for term, coef in self.terms.items()}, self._number_modes)

    def __add__(self, other):
        ''' operator addition (A + B)
            Input:
            other: Operator - the operator to add
                   number - treated as scalar multiple of identity '''
        other = self._as_operator(other)
        if not isinstance(other, Operator):
            return NotImplemented
        self._check_compatible(other)
        if len(other.terms) <= len(self.terms):
            shorter_terms, longer_terms = other.terms, dict(self.terms)
        else:
            shorter_terms, longer_terms = self.terms, dict(other.terms)
        for term, coef in shorter_terms.items(): # iterate through the shorter
            accumulate(longer_terms, term, coef)
        return self._bounded(longer_terms, self._combined_bound(other))

    def __radd__(self, other):
        ''' operator addition (B + A) '''
        return self + other

    def __iadd__(self, other):
        ''' operator addition (in-place) (A += B) '''
        other = self._as_operator(other)
        if not isinstance(other, Operator):
            return NotImplemented
        self.extend(other)
        return self

    def __sub__(self, other):
        ''' operator subtraction (A - B) '''
        other = self._as_operator(other)
        if not isinstance(other, Operator):
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other):
        ''' operator subtraction (B - A) '''
        return (-self) + other

    # ---- monoidal algebra ----
    def __matmul__(self, other):
        ''' operator multiplication (A @ B)
            Input:
            other: Operator - the operator to mutiply '''
        if not isinstance(other, Operator):
            return NotImplemented
        self._check_compatible(other)
        logger.debug("multiplying %s with %d x %d terms", type(self).__name__, len(self.terms), len(other.terms))
        result = {}
        for term_self, coef_self in self.terms.items():
            for term_other, coef_other in other.terms.items():
                coef = cf.mul(coef_self, coef_other)
                for term, phase in self.term_mul(term_self, term_other):
                    accumulate(result, term, cf.mul(coef, phase))
        return self._bounded(result, self._combined_bound(other))

    def commutator(self, other):
        ''' commutator of self with other
            [A, B] = A @ B - B @ A '''
        return self @ other - other @ self

    # ---- adjoint ----
    def hermitian_conjugate(self):
        result = {}
        for term, coef in self.terms.items():
            term_adj, phase = self.term_adjoint(term)
            accumulate(result, term_adj, cf.mul(cf.conjugate(coef), phase))
        return self._new(result, self._number_modes)

    @property
    def H(self):
        ''' Hermitian conjugation '''
        return self.hermitian_conjugate()

    # ---- conversion ----
    def sparse_matrix(self, number_modes=None, local_dimension=None):
        ''' scipy.sparse.coo_matrix of the operator in the computational basis '''
        converter = SparseMatrixConverter.for_operator(self, number_modes, local_dimension)
        return converter.operator_matrix(self)

    def sparse_matrix_superoperator(self, number_modes=None, local_dimension=None):
        ''' scipy.sparse.coo_matrix of the super-operator acting on
            row-major vectorized density matrices '''
        converter = SparseMatrixConverter.for_operator(self, number_modes, local_dimension)
        return converter.superoperator_matrix(self)

    def to_readable(self):
        return serialization.to_readable(self)

    def to_compact(self):
        return serialization.to_compact(self)

    def to_json(self):
        return serialization.to_json(self)

    @classmethod
    def from_readable(cls, data):
        return serialization.from_readable(cls, data)

    @classmethod
    def from_compact(cls, data):
        return serialization.from_compact(cls, data)

    @classmethod
    def from_json(cls, text):
        return serialization.from_json(cls, text)


# constructors of universal operators
def zero(optype=None):
    ''' construct the zero element of the algebra
        (i.e. the identity of addition)
        Input:
        optype: type - the operator type
                Operator - operator type and bound are inferred from
                           the operator instance. '''
    if optype is None:
        optype = Operator
    if isinstance(optype, Operator):
        return optype.empty_clone()
    return optype()


def one(optype=None):
    ''' construct the unit element of the algebra
        (i.e. the identity of multiplication) '''
    result = zero(optype)
    result.terms[result.product_type()] = 1 + 0j
    return result


def build_term(optype, obj):
    ''' single-term operator from a token, a product, a dict or pairs
        Examples:
        build_term(SpinOperator, '-i0X1Z')
        build_term(SpinOperator, {0: 'X', 1: 'Z'})
        build_term(SpinOperator, [(0, 'X'), (1, 'Z')]) '''
    product_type = optype.product_type
    phase = 1
    if isinstance(obj, tuple) and len(obj) == 2 and isinstance(obj[0], int):
        obj = [obj] # a single (index, symbol) pair
    if isinstance(obj, str):
        product, phase = product_type.parse_term(obj)
        phase = phase.to_complex()
    elif isinstance(obj, Product):
        product = obj
    elif isinstance(obj, (dict, tuple, list)):
        product = product_type(obj)
    else:
        raise NotImplementedError("'{}' constructor is not implemented for '{}'".format(optype.__name__, type(obj).__name__))
    result = optype()
    result.set(product, phase)
    return result


class ComposedOperator():
    ''' Operator-like value that owns an internal container and adds
        invariants of its own on top of it (Hamiltonians, noise).

        Attributes:
        internal: the owned container
        product_type: Product subclass accepted in keys
        key_arity: number of products in a key '''
    product_type = None
    key_arity = 1

    def _wrap(self, internal):
        obj = type(self).__new__(type(self))
        obj.internal = internal
        return obj

    def empty_clone(self):
        return self._wrap(self.internal.empty_clone())

    def copy(self):
        return self._wrap(self.internal.copy())

    # !!! to be redefined by specific subclasses
    def _key(self, term):
        ''' internal key of a (user supplied) term '''
        return self.internal.check_term(term)

    def _as_operand(self, other):
        return other

    # ---- container ----
    def remove(self, term):
        return self.internal.terms.pop(self._key(term), None)

    def keys(self):
        return self.internal.keys()

    def values(self):
        return self.internal.values()

    def items(self):
        return self.internal.items()

    def __iter__(self):
        for term in self.internal:
            yield self._wrap(term)

    def __len__(self):
        return len(self.internal)

    def __contains__(self, term):
        return self._key(term) in self.internal.terms

    def is_empty(self):
        return self.internal.is_empty()

    @property
    def bound(self):
        return self.internal.bound

    def number_modes(self):
        return self.internal.number_modes()

    def current_number_modes(self):
        return self.internal.current_number_modes()

    def separate_into_n_terms(self, *n):
        separated, remainder = self.internal.separate_into_n_terms(*n)
        return self._wrap(separated), self._wrap(remainder)

    def substitute_parameters(self, values):
        return self._wrap(self.internal.substitute_parameters(values))

    # ---- linear algebra ----
    def _check_compatible(self, other):
        if type(other) is not type(self):
            raise IncompatibleOperands("operation is not defined between '{}' and '{}'".format(type(self).__name__, type(other).__name__))

    def __neg__(self):
        return self._wrap(-self.internal)

    def __add__(self, other):
        other = self._as_operand(other)
        if not isinstance(other, ComposedOperator):
            return NotImplemented
        self._check_compatible(other)
        return self._wrap(self.internal + other.internal)

    def __radd__(self, other):
        return self + other

    def __sub__(self, other):
        other = self._as_operand(other)
        if not isinstance(other, ComposedOperator):
            return NotImplemented
        self._check_compatible(other)
        return self._wrap(self.internal - other.internal)

    def __rsub__(self, other):
        return (-self) + other

    # ---- comparison ----
    def __eq__(self, other):
        if cf.is_scalar(other) and cf.is_zero(cf.coefficient(other)):
            return self.is_empty()
        if not isinstance(other, ComposedOperator):
            return NotImplemented
        return type(self) is type(other) and self.internal == other.internal

    __hash__ = None

    # ---- representation ----
    def __repr__(self):
        return repr(self.internal)

    def __str__(self):
        txt = '{}{{\n'.format(type(self).__name__)
        for term, coef in self.items():
            txt += '{}: {},\n'.format(self.internal.term_token(term), cf.display(coef))
        return txt + '}'

    # ---- conversion ----
    def to_readable(self):
        return serialization.to_readable(self)

    def to_compact(self):
        return serialization.to_compact(self)

    def to_json(self):
        return serialization.to_json(self)

    @classmethod
    def from_readable(cls, data):
        return serialization.from_readable(cls, data)

    @classmethod
    def from_compact(cls, data):
        return serialization.from_compact(cls, data)

    @classmethod
    def from_json(cls, text):
        return serialization.from_json(cls, text)
