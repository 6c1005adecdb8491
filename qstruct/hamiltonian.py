''' Hermitian operators stored by their canonical half.

    A key K with coefficient h stands for h K + h.c. when K differs from
    its conjugate, and for h K when K is self-adjoint (h must then be
    real up to the conjugation phase). Terms entered with the
    non-canonical member of a conjugate pair are folded onto the
    canonical one. '''
from . import coefficient as cf
from .errors import IncompatibleOperands, NonHermitianTerm
from .operator import ComposedOperator, Operator, accumulate


class HamiltonianOperator(ComposedOperator):
    ''' Hermitian operator

        Parameters:
        terms: dict or iterable - {term: coef, ...} or [(term, coef), ...]
        number_modes: int (optional) - bound on the mode indices

        Scaling by a real number keeps the result a Hamiltonian; complex
        scalars and products with operators give a plain operator_type.

        Attributes (to be redefined by specific subclasses):
        operator_type: the plain Operator subclass of the same kind
        product_type: the plain product class (parsing and lookup)
        hermitian_type: product class of the stored canonical keys '''
    operator_type = Operator
    hermitian_type = None

    def __init__(self, terms=None, number_modes=None):
        self.internal = self.operator_type(number_modes=number_modes)
        if terms is not None:
            self.extend(terms)

    def _canonical(self, term, coef):
        ''' fold (term, coef) onto the canonical key
            Output:
            (key, coef) '''
        term = self.internal.check_term(term)
        conj, phase = term.hermitian_conjugate()
        if conj < term:
            term, coef = conj, cf.mul(cf.conjugate(coef), phase)
        elif conj == term:
            if not cf.is_zero(cf.sub(coef, cf.mul(cf.conjugate(coef), phase))):
                raise NonHermitianTerm("coefficient {} of self-adjoint term {} is not real".format(coef, term))
        return self.hermitian_type._from_sorted(term.items), coef

    def _key(self, term):
        term = self.internal.check_term(term)
        conj, _ = term.hermitian_conjugate()
        return min(term, conj)

    def _as_operand(self, other):
        if cf.is_scalar(other):
            result = self.empty_clone()
            result.set(self.product_type(), other)
            return result
        return other

    # ---- container ----
    def set(self, term, coef):
        key, coef = self._canonical(term, cf.coefficient(coef))
        self.internal.set(key, coef)

    def get(self, term):
        ''' coefficient of term in the expanded operator '''
        term = self.internal.check_term(term)
        conj, phase = term.hermitian_conjugate()
        if conj < term:
            return cf.mul(cf.conjugate(self.internal.get(conj)), phase)
        return self.internal.get(term)

    def add_term(self, term, coef):
        key, coef = self._canonical(term, cf.coefficient(coef))
        self.internal.add_term(key, coef)

    add_operator_product = add_term

    def extend(self, terms):
        if isinstance(terms, HamiltonianOperator):
            self._check_compatible(terms)
            terms = terms.items()
        elif isinstance(terms, dict):
            terms = terms.items()
        self.internal.extend([self._canonical(term, cf.coefficient(coef)) for term, coef in terms])

    # ---- algebra ----
    def __mul__(self, other):
        ''' real scalars keep the operator Hermitian; complex scalars and
            operator products give a plain operator '''
        if isinstance(other, HamiltonianOperator):
            return self.to_operator() @ other.to_operator()
        if isinstance(other, Operator):
            return self.to_operator() @ other
        if not cf.is_scalar(other):
            return NotImplemented
        value = cf.coefficient(other)
        if cf.is_real(value):
            return self._wrap(self.internal * value)
        return self.to_operator() * value

    def __rmul__(self, other):
        if isinstance(other, Operator):
            return other @ self.to_operator()
        if not cf.is_scalar(other):
            return NotImplemented
        return self * other

    def __matmul__(self, other):
        if isinstance(other, HamiltonianOperator):
            return self.to_operator() @ other.to_operator()
        if isinstance(other, Operator):
            return self.to_operator() @ other
        return NotImplemented

    def __rmatmul__(self, other):
        if isinstance(other, Operator):
            return other @ self.to_operator()
        return NotImplemented

    def __truediv__(self, other):
        if not cf.is_scalar(other):
            return NotImplemented
        return self * (1 / cf.coefficient(other))

    def hermitian_conjugate(self):
        return self.copy()

    @property
    def H(self):
        return self.hermitian_conjugate()

    # ---- conversion ----
    def to_operator(self):
        ''' the expanded operator sum_K (h K + h.c.) '''
        result = self.internal.empty_clone()
        for key, coef in self.internal.terms.items():
            term = key.family._from_sorted(key.items)
            accumulate(result.terms, term, coef)
            conj, phase = term.hermitian_conjugate()
            if conj != term:
                accumulate(result.terms, conj, cf.mul(cf.conjugate(coef), phase))
        return result

    @classmethod
    def from_operator(cls, operator):
        ''' Hermitian operator equal to operator
            raises NonHermitianTerm if operator is not Hermitian '''
        if not isinstance(operator, cls.operator_type):
            raise IncompatibleOperands("'{}' cannot be built from '{}'".format(cls.__name__, type(operator).__name__))
        if operator != operator.hermitian_conjugate():
            raise NonHermitianTerm("operator is not Hermitian")
        result = cls(number_modes=operator.bound)
        for term, coef in operator.items():
            conj, _ = term.hermitian_conjugate()
            if term <= conj:
                result.set(term, coef)
        return result

    def sparse_matrix(self, number_modes=None, local_dimension=None):
        return self.to_operator().sparse_matrix(number_modes, local_dimension)

    def sparse_matrix_superoperator(self, number_modes=None, local_dimension=None):
        return self.to_operator().sparse_matrix_superoperator(number_modes, local_dimension)
