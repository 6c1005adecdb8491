''' Fermionic operators.

    A fermion product is a normal-ordered string of creators (C),
    annihilators (A) and number operators (N), at most one per mode and
    sorted by mode. C and A anticommute across modes, so merging two
    products picks up a sign per exchange of such symbols. '''
import numpy

from .product import Product, SymbolEnum
from .operator import Operator, build_term
from .hamiltonian import HamiltonianOperator
from .lindblad import LindbladNoiseOperator
from .errors import DimensionMismatch, NonHermitianTerm


class SingleFermion(SymbolEnum):
    I = 0
    C = 1 # creator
    A = 2 # annihilator
    N = 3 # number operator C A


_I, _C, _A, _N = SingleFermion
# same-mode products, e.g. A C = I - N
_single_mul_table = {
    (_C, _C): [],
    (_C, _A): [(_N, 1)],
    (_C, _N): [],
    (_A, _C): [(_I, 1), (_N, -1)],
    (_A, _A): [],
    (_A, _N): [(_A, 1)],
    (_N, _C): [(_C, 1)],
    (_N, _A): [],
    (_N, _N): [(_N, 1)],
}
_adjoint_table = {_C: _A, _A: _C, _N: _N}


class FermionProduct(Product):
    ''' normal-ordered product of fermionic operators,
        e.g. FermionProduct('0C1A') = c0^dag c1 '''
    __slots__ = ()
    symbol_type = SingleFermion
    kind = 'fermion'

    def create(self, index):
        return self.set(index, _C)

    def annihilate(self, index):
        return self.set(index, _A)

    def number(self, index):
        return self.set(index, _N)

    def is_odd(self, symbol):
        return symbol == _C or symbol == _A

    def single_mul(self, symbol1, symbol2):
        return _single_mul_table[(symbol1, symbol2)]

    def symbol_adjoint(self, symbol):
        return _adjoint_table[symbol], 1

    def hermitian_conjugate(self):
        ''' reversing m odd operators costs (-1)**(m(m-1)/2) '''
        conj, phase = super().hermitian_conjugate()
        m = sum(1 for _, s in self._items if self.is_odd(s))
        if (m * (m - 1) // 2) % 2:
            phase = -phase
        return conj, phase

    def act_on_basis(self, states, local_dimension):
        ''' Jordan-Wigner action: an odd operator on mode j picks up the
            parity of the occupied modes below j (bit 1 = occupied) '''
        if local_dimension != 2:
            raise DimensionMismatch("fermions have local dimension 2, got {!r}".format(local_dimension))
        new_states = states.copy()
        amplitudes = numpy.ones(states.shape, dtype=complex)
        # rightmost operator acts first, modes below it are still untouched
        for index, symbol in reversed(self._items):
            bit = (states >> index) & 1
            if symbol == _N:
                amplitudes *= bit
                continue
            parity = numpy.zeros(states.shape, dtype=states.dtype)
            for k in range(index):
                parity ^= (states >> k) & 1
            allowed = bit == 0 if symbol == _C else bit == 1
            amplitudes *= numpy.where(allowed, 1 - 2 * parity, 0)
            new_states ^= (1 << index)
        return new_states, amplitudes


FermionProduct.family = FermionProduct


class HermitianFermionProduct(FermionProduct):
    ''' canonical half of a conjugate pair of fermion products:
        a product no larger than its Hermitian conjugate '''
    __slots__ = ()

    def validate(self):
        conj, _ = self.hermitian_conjugate()
        if conj < self:
            raise NonHermitianTerm("{} is not the canonical member of its conjugate pair, use {}".format(self, conj))


class FermionOperator(Operator):
    ''' operator in the algebra of fermionic modes

        Parameters:
        terms: dict - {FermionProduct: coef, ...} (tokens such as '0C1A' accepted)
        number_modes: int (optional) - number of fermionic modes '''
    product_type = FermionProduct


class FermionHamiltonian(HamiltonianOperator):
    ''' Hermitian fermion operator, each key K stands for h K + h.c. '''
    operator_type = FermionOperator
    product_type = FermionProduct
    hermitian_type = HermitianFermionProduct


class FermionLindbladNoiseOperator(LindbladNoiseOperator):
    product_type = FermionProduct


def fermion(*args):
    ''' fermion operator constructor
        Examples:
        >>> fermion('0C1A')
        C0 A1

        >>> fermion((0, 'C'), (1, 'A'))
        C0 A1
        '''
    if len(args) == 0:
        return build_term(FermionOperator, ())
    if len(args) != 1:
        return fermion(args)
    return build_term(FermionOperator, args[0])
