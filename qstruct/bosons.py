''' Bosonic operators.

    The algebra generated by a^dag and a on one mode is closed under
    multiplication only as a whole, so a single-mode symbol here is the
    normal-ordered monomial a^dag**k a**l, written with k letters C and
    l letters A ("CCA" = a^dag a^dag a). Same-mode products are brought
    back to normal order with Wick's theorem. '''
import math
import re
from collections import namedtuple

import numpy
import scipy.special

from .product import Product
from .operator import Operator, build_term
from .hamiltonian import HamiltonianOperator
from .lindblad import LindbladNoiseOperator
from .errors import DimensionMismatch, MalformedToken, NonHermitianTerm

_letters_re = re.compile(r'^(C*)(A*)$')


class BosonSymbol(namedtuple('BosonSymbol', ['creators', 'annihilators'])):
    ''' a^dag**creators a**annihilators on a single mode '''
    __slots__ = ()

    @property
    def letters(self):
        return 'C' * self.creators + 'A' * self.annihilators

    @property
    def is_identity(self):
        return self.creators == 0 and self.annihilators == 0

    @classmethod
    def from_letters(cls, letters):
        match = _letters_re.match(letters)
        if match is None or letters in ('', 'I'):
            raise MalformedToken(letters, "bosonic symbols are written C...CA...A")
        return cls(len(match.group(1)), len(match.group(2)))


IDENTITY = BosonSymbol(0, 0)
CREATION = BosonSymbol(1, 0)
ANNIHILATION = BosonSymbol(0, 1)
NUMBER = BosonSymbol(1, 1)


def normal_order(symbol1, symbol2):
    ''' a^dag**k a**l a^dag**m a**n
        = sum_j C(l,j) C(m,j) j! a^dag**(k+m-j) a**(l+n-j)
        Output:
        list of (BosonSymbol, coefficient) '''
    k, l = symbol1
    m, n = symbol2
    return [(BosonSymbol(k + m - j, l + n - j), math.comb(l, j) * math.comb(m, j) * math.factorial(j))
            for j in range(min(l, m) + 1)]


class BosonProduct(Product):
    ''' product of normal-ordered bosonic monomials,
        e.g. BosonProduct('0CC1A') = (a0^dag)**2 a1

        The local dimension is unbounded: matrices need an explicit
        truncation. '''
    __slots__ = ()
    symbol_type = BosonSymbol
    kind = 'boson'
    local_dimension = None

    @classmethod
    def coerce_symbol(cls, symbol):
        if isinstance(symbol, BosonSymbol):
            return symbol
        if isinstance(symbol, str):
            return BosonSymbol.from_letters(symbol)
        if isinstance(symbol, (tuple, list)) and len(symbol) == 2:
            k, l = symbol
            if all(isinstance(x, int) and not isinstance(x, bool) and x >= 0 for x in (k, l)):
                return BosonSymbol(k, l)
        raise ValueError("invalid bosonic symbol {!r}".format(symbol))

    @classmethod
    def symbol_is_identity(cls, symbol):
        return symbol.is_identity

    def create(self, index, power=1):
        return self.set(index, BosonSymbol(power, 0))

    def annihilate(self, index, power=1):
        return self.set(index, BosonSymbol(0, power))

    def number(self, index):
        return self.set(index, NUMBER)

    def get(self, index):
        for i, s in self._items:
            if i == index:
                return s
        return IDENTITY

    def single_mul(self, symbol1, symbol2):
        return normal_order(symbol1, symbol2)

    def symbol_adjoint(self, symbol):
        return BosonSymbol(symbol.annihilators, symbol.creators), 1

    def act_on_basis(self, states, local_dimension):
        ''' action in the occupation basis truncated to local_dimension
            levels per mode; states leaving the truncation are dropped '''
        if local_dimension is None:
            raise DimensionMismatch("bosonic matrices need an explicit local_dimension")
        new_states = states.copy()
        amplitudes = numpy.ones(states.shape, dtype=complex)
        for index, (k, l) in self._items:
            place = local_dimension ** index
            n = (states // place) % local_dimension
            valid = n >= l
            m = numpy.where(valid, n - l, 0)
            n_new = m + k
            valid &= n_new < local_dimension
            # a**l |n> = sqrt(n!/(n-l)!) |n-l>, a^dag**k |m> = sqrt((m+k)!/m!) |m+k>
            factor = numpy.sqrt(scipy.special.poch(m + 1, l) * scipy.special.poch(m + 1, k))
            amplitudes *= numpy.where(valid, factor, 0)
            new_states += numpy.where(valid, (n_new - n) * place, 0)
        return new_states, amplitudes


BosonProduct.family = BosonProduct


class HermitianBosonProduct(BosonProduct):
    ''' canonical half of a conjugate pair of boson products '''
    __slots__ = ()

    def validate(self):
        conj, _ = self.hermitian_conjugate()
        if conj < self:
            raise NonHermitianTerm("{} is not the canonical member of its conjugate pair, use {}".format(self, conj))


class BosonOperator(Operator):
    ''' operator in the algebra of bosonic modes

        Parameters:
        terms: dict - {BosonProduct: coef, ...} (tokens such as '0CA1C' accepted)
        number_modes: int (optional) - number of bosonic modes '''
    product_type = BosonProduct


class BosonHamiltonian(HamiltonianOperator):
    operator_type = BosonOperator
    product_type = BosonProduct
    hermitian_type = HermitianBosonProduct


class BosonLindbladNoiseOperator(LindbladNoiseOperator):
    product_type = BosonProduct


def boson(*args):
    ''' boson operator constructor, e.g. boson('0CA') = a0^dag a0 '''
    if len(args) == 0:
        return build_term(BosonOperator, ())
    if len(args) != 1:
        return boson(args)
    return build_term(BosonOperator, args[0])
