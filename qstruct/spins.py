''' Spin-1/2 operators.

    Two symbol sets describe the same single-spin algebra:
    Pauli symbols (I, X, Y, Z) and decoherence symbols (I, X, iY, Z),
    the latter keeping every multiplication table entry real. '''
import numpy
import numba

from . import coefficient as cf
from .product import Phase, Product, SymbolEnum
from .operator import Operator, build_term
from .hamiltonian import HamiltonianOperator
from .lindblad import LindbladNoiseOperator
from .errors import DimensionMismatch


class SinglePauli(SymbolEnum):
    I = 0
    X = 1
    Y = 2
    Z = 3


class SingleDecoherence(SymbolEnum):
    I = 0
    X = 1
    iY = 2
    Z = 3


# resulting symbol of mu1 * mu2 (shared by both symbol sets)
mu_table = numpy.array([[0,1,2,3],[1,0,3,2],[2,3,0,1],[3,2,1,0]])
# phase i**k of mu1 * mu2 for Pauli symbols
pauli_ipow_table = numpy.array([[0,0,0,0],[0,0,1,-1],[0,-1,0,1],[0,1,-1,0]])
# phase i**k of mu1 * mu2 for decoherence symbols
decoherence_ipow_table = numpy.array([[0,0,0,0],[0,0,2,2],[0,0,2,2],[0,0,0,0]])

''' multiply two spin products
    Input:
    ind1, mu1 - indices and symbols of the first product
    ind2, mu2 - indices and symbols of the second product
    (use numpy.array to avoid dispatch for different sizes)
    mu_table, ipow_table - single-spin multiplication tables

    Output:
    ind, mu - indices and symbols of the merged product
    ipow - power of i generated during the merge
'''
@numba.njit
def spin_term_mul(ind1, mu1, ind2, mu2, mu_table, ipow_table):
    n1 = ind1.size
    n2 = ind2.size
    ind = numpy.empty(n1 + n2, dtype=ind1.dtype)
    mu = numpy.empty(n1 + n2, dtype=mu1.dtype)
    i1 = 0 # term1 pointer
    i2 = 0 # term2 pointer
    i  = 0 # term pointer
    ipow = 0
    while i1 < n1 and i2 < n2:
        if ind1[i1] == ind2[i2]:
            m = mu_table[mu1[i1], mu2[i2]]
            ipow += ipow_table[mu1[i1], mu2[i2]]
            # identity dropped
            if m != 0:
                ind[i] = ind1[i1]
                mu[i] = m
                i += 1
            i1 += 1
            i2 += 1
        else:
            if ind1[i1] < ind2[i2]:
                ind[i] = ind1[i1]
                mu[i] = mu1[i1]
                i += 1
                i1 += 1
            else:
                ind[i] = ind2[i2]
                mu[i] = mu2[i2]
                i += 1
                i2 += 1
    while i1 < n1:
        ind[i] = ind1[i1]
        mu[i] = mu1[i1]
        i += 1
        i1 += 1
    while i2 < n2:
        ind[i] = ind2[i2]
        mu[i] = mu2[i2]
        i += 1
        i2 += 1
    return ind[0:i], mu[0:i], ipow % 4


class SpinProduct(Product):
    ''' product of single-spin operators (common base of the two symbol sets)

        Attributes:
        ipow_table: phase table of the symbol set
        amplitudes: {symbol: (amplitude on |0>, amplitude on |1>)}
        flips: symbols that flip the spin '''
    __slots__ = ()
    kind = 'spin'
    ipow_table = None
    amplitudes = {}
    flips = ()

    def _arrays(self):
        ind = numpy.array([i for i, _ in self._items], dtype=numpy.int64)
        mu = numpy.array([int(s) for _, s in self._items], dtype=numpy.int64)
        return ind, mu

    def single_mul(self, symbol1, symbol2):
        m = self.symbol_type(int(mu_table[symbol1, symbol2]))
        return [(m, Phase(int(self.ipow_table[symbol1, symbol2]) % 4).to_complex())]

    def multiply(self, other):
        ''' spin products never vanish: the result is a single (product, phase) '''
        self._check_family(other)
        if len(self._items) == 0:
            return [(self.family._from_sorted(other._items), 1)]
        if len(other._items) == 0:
            return [(self.family._from_sorted(self._items), 1)]
        ind1, mu1 = self._arrays()
        ind2, mu2 = other._arrays()
        ind, mu, ipow = spin_term_mul(ind1, mu1, ind2, mu2, mu_table, self.ipow_table)
        items = tuple((int(i), self.symbol_type(int(m))) for i, m in zip(ind, mu))
        return [(self.family._from_sorted(items), Phase(int(ipow)).to_complex())]

    def act_on_basis(self, states, local_dimension):
        if local_dimension != 2:
            raise DimensionMismatch("spins have local dimension 2, got {!r}".format(local_dimension))
        new_states = states.copy()
        amplitudes = numpy.ones(states.shape, dtype=complex)
        for index, symbol in self._items:
            bit = (states >> index) & 1
            a0, a1 = self.amplitudes[symbol]
            amplitudes *= numpy.where(bit == 0, a0, a1)
            if symbol in self.flips:
                new_states ^= (1 << index)
        return new_states, amplitudes

    def x(self, index):
        return self.set(index, self.symbol_type.X)

    def z(self, index):
        return self.set(index, self.symbol_type.Z)


class PauliProduct(SpinProduct):
    ''' product of Pauli matrices, e.g. PauliProduct('0Z1X') = Z0 X1
        (every Pauli product is Hermitian) '''
    __slots__ = ()
    symbol_type = SinglePauli
    ipow_table = pauli_ipow_table
    amplitudes = {SinglePauli.X: (1, 1), SinglePauli.Y: (1j, -1j), SinglePauli.Z: (1, -1)}
    flips = (SinglePauli.X, SinglePauli.Y)

    def y(self, index):
        return self.set(index, SinglePauli.Y)

    def symbol_adjoint(self, symbol):
        return symbol, 1

    def to_decoherence_product(self):
        ''' Output: (DecoherenceProduct, Phase) with self = phase * product
            (Y = -i iY) '''
        phase = Phase.ONE
        items = []
        for i, s in self._items:
            if s == SinglePauli.Y:
                phase = phase.times(Phase.MINUS_I)
            items.append((i, SingleDecoherence(int(s))))
        return DecoherenceProduct._from_sorted(items), phase


class DecoherenceProduct(SpinProduct):
    ''' product of X, iY and Z, e.g. DecoherenceProduct('0iY1X') = iY0 X1 '''
    __slots__ = ()
    symbol_type = SingleDecoherence
    ipow_table = decoherence_ipow_table
    amplitudes = {SingleDecoherence.X: (1, 1), SingleDecoherence.iY: (-1, 1), SingleDecoherence.Z: (1, -1)}
    flips = (SingleDecoherence.X, SingleDecoherence.iY)

    def iy(self, index):
        return self.set(index, SingleDecoherence.iY)

    def symbol_adjoint(self, symbol):
        # (iY)^dagger = -iY
        if symbol == SingleDecoherence.iY:
            return symbol, -1
        return symbol, 1

    def to_pauli_product(self):
        ''' Output: (PauliProduct, Phase) with self = phase * product
            (iY = i Y) '''
        phase = Phase.ONE
        items = []
        for i, s in self._items:
            if s == SingleDecoherence.iY:
                phase = phase.times(Phase.I)
            items.append((i, SinglePauli(int(s))))
        return PauliProduct._from_sorted(items), phase


PauliProduct.family = PauliProduct
DecoherenceProduct.family = DecoherenceProduct


class SpinOperator(Operator):
    ''' operator in the Pauli basis

        Parameters:
        terms: dict - {PauliProduct: coef, ...} (tokens such as '0Z1X' accepted)
        number_modes: int (optional) - number of spins of the system '''
    product_type = PauliProduct

    def to_decoherence_operator(self):
        result = DecoherenceOperator(number_modes=self._number_modes)
        for term, coef in self.terms.items():
            product, phase = term.to_decoherence_product()
            result.add_term(product, cf.mul(coef, phase.to_complex()))
        return result


class DecoherenceOperator(Operator):
    ''' operator in the decoherence basis (X, iY, Z)

        Parameters:
        terms: dict - {DecoherenceProduct: coef, ...}
        number_modes: int (optional) - number of spins of the system '''
    product_type = DecoherenceProduct

    def to_spin_operator(self):
        result = SpinOperator(number_modes=self._number_modes)
        for term, coef in self.terms.items():
            product, phase = term.to_pauli_product()
            result.add_term(product, cf.mul(coef, phase.to_complex()))
        return result


class SpinHamiltonian(HamiltonianOperator):
    ''' Hermitian spin operator with real coefficients '''
    operator_type = SpinOperator
    product_type = PauliProduct
    hermitian_type = PauliProduct


class SpinLindbladNoiseOperator(LindbladNoiseOperator):
    ''' spin noise operator, keys are pairs of decoherence products '''
    product_type = DecoherenceProduct


def pauli(*args):
    ''' Pauli operator constructor
        Examples:
        >>> pauli()
        I

        >>> pauli('-i0X1Z')
        -i X0 Z1

        >>> pauli({3:'X', 5:'Z'})
        X3 Z5

        >>> pauli((3, 'X'), (5, 'Z'))
        X3 Z5
        '''
    if len(args) == 0:
        return build_term(SpinOperator, ())
    if len(args) != 1:
        return pauli(args)
    return build_term(SpinOperator, args[0])


def decoherence(*args):
    ''' decoherence operator constructor, e.g. decoherence('0iY1X') '''
    if len(args) == 0:
        return build_term(DecoherenceOperator, ())
    if len(args) != 1:
        return decoherence(args)
    return build_term(DecoherenceOperator, args[0])
