''' Jordan-Wigner mapping between spins and fermions.

    With n_k = c_k^dag c_k and Z_k = 1 - 2 n_k,

        c_j^dag = Z_0 ... Z_{j-1} (X_j - i Y_j) / 2
        c_j     = Z_0 ... Z_{j-1} (X_j + i Y_j) / 2

    Ordering the string factors next to their own mode, a product of
    single-mode images taken in ascending mode order picks up Z_k (or
    1 - 2 n_k) on the right of mode k once per odd site above k, whether
    or not the product acts on k. '''
import logging

from . import coefficient as cf
from .errors import IncompatibleOperands
from .operator import one
from .spins import (PauliProduct, DecoherenceProduct, SpinOperator, DecoherenceOperator,
                    SpinHamiltonian, SinglePauli)
from .fermions import FermionProduct, FermionOperator, FermionHamiltonian, SingleFermion

logger = logging.getLogger(__name__)


def _fermion_images():
    def op(*terms):
        return FermionOperator({FermionProduct(items): coef for items, coef in terms})
    def images(k):
        identity = ((), 1)
        create = (((k, SingleFermion.C),), 1)
        annihilate = (((k, SingleFermion.A),), 1)
        number = ((k, SingleFermion.N),)
        z = op(identity, (number, -2))
        return {
            SinglePauli.X: (op(create, annihilate), True),
            SinglePauli.Y: (op((create[0], 1j), (annihilate[0], -1j)), True),
            SinglePauli.Z: (z, False),
        }, z
    return images


def _spin_images():
    def op(*terms):
        return SpinOperator({PauliProduct(items): coef for items, coef in terms})
    def images(k):
        identity = ()
        x = ((k, SinglePauli.X),)
        y = ((k, SinglePauli.Y),)
        z = ((k, SinglePauli.Z),)
        return {
            SingleFermion.C: (op((x, 0.5), (y, -0.5j)), True),
            SingleFermion.A: (op((x, 0.5), (y, 0.5j)), True),
            SingleFermion.N: (op((identity, 0.5), (z, -0.5)), False),
        }, op((z, 1))
    return images


class JordanWignerMapper():
    ''' Maps spin operators to fermion operators and back

        Both directions preserve the bound of the operator and
        map Hamiltonians onto Hamiltonians. '''
    def __init__(self):
        self._fermion_images = _fermion_images()
        self._spin_images = _spin_images()

    def _map_product(self, product, images, optype):
        ''' image of a single product as an operator of type optype '''
        symbols = dict(product.items)
        factors = []
        odd_above = 0 # odd sites above the current mode
        for k in reversed(range(product.max_index() + 1)):
            table, string = images(k)
            image, odd = table[symbols[k]] if k in symbols else (None, False)
            if odd_above % 2:
                image = string if image is None else image @ string
            if image is not None:
                factors.append(image)
            if odd:
                odd_above += 1
        result = one(optype)
        for image in reversed(factors):
            result = result @ image
        return result

    def _map_operator(self, operator, images, optype):
        result = optype(number_modes=operator.bound)
        for term, coef in operator.items():
            for product, c in self._map_product(term, images, optype).items():
                result.add_term(product, cf.mul(coef, c))
        logger.debug("mapped %d terms of %s onto %d terms of %s",
            len(operator), type(operator).__name__, len(result), optype.__name__)
        return result

    def _map_hamiltonian(self, hamiltonian, images, optype, htype):
        ''' image of a Hamiltonian, symmetrized as (A + A^dag) / 2 so that it
            is exactly Hermitian in floating point '''
        image = self._map_operator(hamiltonian.to_operator(), images, optype)
        return htype.from_operator((image + image.H) / 2)

    def spin_to_fermion(self, obj):
        ''' Jordan-Wigner image of a spin product or operator
            Input:
            obj: PauliProduct, DecoherenceProduct, SpinOperator,
                 DecoherenceOperator or SpinHamiltonian
            Output:
            FermionOperator (FermionHamiltonian for a SpinHamiltonian) '''
        if isinstance(obj, DecoherenceProduct):
            product, phase = obj.to_pauli_product()
            return self.spin_to_fermion(product) * phase.to_complex()
        if isinstance(obj, PauliProduct):
            return self._map_product(obj, self._fermion_images, FermionOperator)
        if isinstance(obj, SpinHamiltonian):
            return self._map_hamiltonian(obj, self._fermion_images, FermionOperator, FermionHamiltonian)
        if isinstance(obj, DecoherenceOperator):
            return self.spin_to_fermion(obj.to_spin_operator())
        if isinstance(obj, SpinOperator):
            return self._map_operator(obj, self._fermion_images, FermionOperator)
        raise IncompatibleOperands("'{}' has no Jordan-Wigner fermion image".format(type(obj).__name__))

    def fermion_to_spin(self, obj):
        ''' inverse Jordan-Wigner image of a fermion product or operator
            Input:
            obj: FermionProduct, FermionOperator or FermionHamiltonian
            Output:
            SpinOperator (SpinHamiltonian for a FermionHamiltonian) '''
        if isinstance(obj, FermionProduct):
            return self._map_product(obj, self._spin_images, SpinOperator)
        if isinstance(obj, FermionHamiltonian):
            return self._map_hamiltonian(obj, self._spin_images, SpinOperator, SpinHamiltonian)
        if isinstance(obj, FermionOperator):
            return self._map_operator(obj, self._spin_images, SpinOperator)
        raise IncompatibleOperands("'{}' has no Jordan-Wigner spin image".format(type(obj).__name__))
