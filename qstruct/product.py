''' Canonical product keys.

    A product is an immutable tuple of (index, symbol) pairs, one per
    index, sorted by index and free of identity symbols. Products are
    hashable and totally ordered, so they serve as keys of the operator
    containers. Particle kinds specialize the symbol set, the same-index
    multiplication rule, the conjugation rule and the action on basis
    states. '''
import re
from enum import IntEnum
from itertools import product as cartesian

from .errors import IncompatibleOperands, MalformedToken


class Phase(IntEnum):
    ''' a power of i: i**k for k = 0..3 '''
    ONE = 0
    I = 1
    MINUS_ONE = 2
    MINUS_I = 3

    def to_complex(self):
        return (1, 1j, -1, -1j)[self]

    def times(self, other):
        return Phase((int(self) + int(other)) % 4)

    def conjugate(self):
        return Phase((-int(self)) % 4)

    @classmethod
    def from_head(cls, head):
        ''' interpret a sign/phase head token: '', '+', '-', 'i', '-i', '+i' '''
        heads = {'': cls.ONE, '+': cls.ONE, 'i': cls.I, '+i': cls.I, '-': cls.MINUS_ONE, '-i': cls.MINUS_I}
        if head not in heads:
            raise MalformedToken(head, "unknown phase prefix")
        return heads[head]


class SymbolEnum(IntEnum):
    ''' single-mode operator symbol; member 0 is the identity '''

    @property
    def letters(self):
        return self.name

    @classmethod
    def from_letters(cls, letters):
        for symbol in cls:
            if symbol.letters == letters:
                return symbol
        raise MalformedToken(letters, "unknown {} symbol".format(cls.__name__))

    @property
    def is_identity(self):
        return self == 0


_term_re = re.compile(r'(\d+)(\D+)')
_head_re = re.compile(r'^([+-]?i?)(.*)$')


class Product():
    ''' Canonical product of single-mode operators

        Parameters:
        items: iterable of (index, symbol) pairs, dict {index: symbol}
            or a readable token such as "0Z1X"
            index: int - non-negative mode index (unique)
            symbol: symbol member, its letters or its integer code

        Attributes (to be redefined by specific Product subclasses):
        symbol_type: type of the single-mode symbols
        family: the plain (unrestricted) product class of the kind
        kind: 'spin', 'fermion' or 'boson'
        local_dimension: dimension of a single mode, None if unbounded '''
    __slots__ = ('_items', '_hash')
    symbol_type = None
    family = None
    kind = None
    local_dimension = 2

    def __init__(self, items=()):
        if isinstance(items, str): # readable token
            items = self.family.from_string(items).items
        if isinstance(items, dict):
            items = items.items()
        pairs = {}
        for index, symbol in items:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ValueError("mode index must be a non-negative integer, got {!r}".format(index))
            if index in pairs:
                raise ValueError("index {:d} appears more than once in a product".format(index))
            pairs[index] = self.coerce_symbol(symbol)
        self._items = tuple((i, s) for i, s in sorted(pairs.items()) if not self.symbol_is_identity(s))
        self._hash = None
        self.validate()

    @classmethod
    def _from_sorted(cls, items):
        ''' build a product from already canonical items (no validation) '''
        obj = cls.__new__(cls)
        obj._items = tuple(items)
        obj._hash = None
        return obj

    # !!! to be redefined by specific Product subclasses
    def validate(self):
        ''' hook for class-level invariants of the product '''

    @classmethod
    def coerce_symbol(cls, symbol):
        if isinstance(symbol, cls.symbol_type):
            return symbol
        if isinstance(symbol, str):
            return cls.symbol_type.from_letters(symbol)
        return cls.symbol_type(symbol)

    @classmethod
    def symbol_is_identity(cls, symbol):
        return symbol.is_identity

    # ---- value semantics ----
    @property
    def items(self):
        return self._items

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def _key(self):
        return self._items

    def __eq__(self, other):
        if not isinstance(other, Product):
            return NotImplemented
        return self.family is other.family and self._items == other._items

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        if self._hash is None:
            self._hash = hash((self.family.__name__, self._items))
        return self._hash

    def _check_family(self, other):
        if not isinstance(other, Product):
            raise IncompatibleOperands("'{}' cannot be combined with '{}'".format(type(self).__name__, type(other).__name__))
        if other.family is not self.family:
            raise IncompatibleOperands("cannot combine {} product '{}' with {} product '{}'".format(
                self.kind, type(self).__name__, other.kind, type(other).__name__))

    def __lt__(self, other):
        self._check_family(other)
        return self._key() < other._key()

    def __le__(self, other):
        self._check_family(other)
        return self._key() <= other._key()

    def __gt__(self, other):
        self._check_family(other)
        return self._key() > other._key()

    def __ge__(self, other):
        self._check_family(other)
        return self._key() >= other._key()

    # ---- queries ----
    def indices(self):
        return tuple(i for i, _ in self._items)

    def get(self, index):
        ''' symbol acting on index (identity if none) '''
        for i, s in self._items:
            if i == index:
                return s
        return self.symbol_type(0)

    def max_index(self):
        ''' largest index touched, -1 for the identity product '''
        if len(self._items) == 0:
            return -1
        return self._items[-1][0]

    def current_number_modes(self):
        return self.max_index() + 1

    def is_natural_hermitian(self):
        conj, phase = self.hermitian_conjugate()
        return conj == self and phase == 1

    def set(self, index, symbol):
        ''' returns a new product with symbol placed on index '''
        items = dict(self._items)
        items[index] = symbol
        return type(self)(items)

    # ---- representation ----
    def __str__(self):
        if len(self._items) == 0:
            return 'I'
        return ''.join('{:d}{}'.format(i, self.symbol_letters(s)) for i, s in self._items)

    def __repr__(self):
        return "{}('{}')".format(type(self).__name__, str(self))

    def label(self):
        ''' human readable label (e.g. X0 Z2) '''
        if len(self._items) == 0:
            return 'I'
        return ' '.join('{}{:d}'.format(self.symbol_letters(s), i) for i, s in self._items)

    @classmethod
    def symbol_letters(cls, symbol):
        return symbol.letters

    @classmethod
    def from_string(cls, token):
        ''' parse a readable token such as "0Z1X"
            raises MalformedToken on failure '''
        if not isinstance(token, str):
            raise MalformedToken(token, "expected a string")
        text = token.strip()
        if text in ('', 'I'):
            return cls()
        position = 0
        items = []
        for match in _term_re.finditer(text):
            if match.start() != position:
                raise MalformedToken(token, "unexpected characters")
            position = match.end()
            try:
                items.append((int(match.group(1)), cls.symbol_type.from_letters(match.group(2))))
            except MalformedToken as err:
                raise MalformedToken(token, str(err)) from err
        if position != len(text):
            raise MalformedToken(token, "unexpected characters")
        try:
            return cls(items)
        except ValueError as err:
            raise MalformedToken(token, str(err)) from err

    @classmethod
    def parse_term(cls, token):
        ''' parse a token with an optional sign/phase head ("-i0X1Z")
            Output:
            (product, Phase) '''
        if not isinstance(token, str):
            raise MalformedToken(token, "expected a string")
        head, body = _head_re.match(token.strip()).groups()
        return cls.from_string(body), Phase.from_head(head)

    # ---- algebra ----
    # !!! to be redefined by specific Product subclasses
    def single_mul(self, symbol1, symbol2):
        ''' same-index product rule
            Output:
            list of (symbol, coefficient); empty if the term vanishes '''
        raise NotImplementedError

    def symbol_adjoint(self, symbol):
        ''' Output: (conjugate symbol, phase) '''
        raise NotImplementedError

    def is_odd(self, symbol):
        ''' True for symbols that anticommute across modes '''
        return False

    def multiply(self, other):
        ''' multiply two products (self @ other)
            Output:
            list of (product, phase) pairs, empty if the term vanishes '''
        self._check_family(other)
        term1, term2 = self._items, other._items
        if len(term1) == 0:
            return [(self.family._from_sorted(term2), 1)]
        if len(term2) == 0:
            return [(self.family._from_sorted(term1), 1)]
        n1 = len(term1) # length of term1
        n2 = len(term2) # length of term2
        # odd[i]: number of odd symbols in term1[i:]
        odd = [0] * (n1 + 1)
        for i in range(n1 - 1, -1, -1):
            odd[i] = odd[i + 1] + (1 if self.is_odd(term1[i][1]) else 0)
        i1 = 0 # term1 pointer
        i2 = 0 # term2 pointer
        ex = 0 # number of exchanges of odd symbols
        slots = [] # (index, [(symbol, coef), ...]) in index order
        while i1 < n1 and i2 < n2:
            ind1, s1 = term1[i1]
            ind2, s2 = term2[i2]
            if ind1 == ind2: # indices collide
                if self.is_odd(s2):
                    ex += odd[i1 + 1]
                options = self.single_mul(s1, s2)
                if len(options) == 0:
                    return []
                slots.append((ind1, options))
                i1 += 1
                i2 += 1
            elif ind1 < ind2:
                slots.append((ind1, [(s1, 1)]))
                i1 += 1
            else: # ind1 > ind2
                if self.is_odd(s2):
                    ex += odd[i1]
                slots.append((ind2, [(s2, 1)]))
                i2 += 1
        for ind, s in term1[i1:]: # if term1 not exhausted
            slots.append((ind, [(s, 1)]))
        for ind, s in term2[i2:]: # if term2 not exhausted
            slots.append((ind, [(s, 1)]))
        sign = 1 - 2 * (ex % 2) # exchange sign
        indices = [ind for ind, _ in slots]
        result = []
        for choice in cartesian(*(options for _, options in slots)):
            coef = sign
            items = []
            for ind, (s, c) in zip(indices, choice):
                coef *= c
                if not self.symbol_is_identity(s):
                    items.append((ind, s))
            result.append((self.family._from_sorted(items), coef))
        return result

    def __matmul__(self, other):
        return self.multiply(other)

    def hermitian_conjugate(self):
        ''' Output: (product, phase) with self^dagger = phase * product '''
        phase = 1
        items = []
        for i, s in self._items:
            s_adj, p = self.symbol_adjoint(s)
            phase *= p
            items.append((i, s_adj))
        return self.family._from_sorted(items), phase

    # !!! to be redefined by specific Product subclasses
    def act_on_basis(self, states, local_dimension):
        ''' action on computational basis states (vectorized over states)
            Input:
            states: numpy.ndarray of int - basis state labels
            local_dimension: int - dimension of a single mode
            Output:
            (new_states, amplitudes): self|state> = amplitude |new_state> '''
        raise NotImplementedError
