''' qstruct: sparse operator algebra for spins, fermions and bosons

    Operators are sparse sums of canonical products with complex or
    symbolic coefficients; Hamiltonians store one half of each conjugate
    pair, Lindblad noise operators store pairs of products. Operators
    convert to scipy sparse matrices and map between spins and fermions
    by Jordan-Wigner. '''
import logging

from .config import SCHEMA_VERSION, MINIMUM_SCHEMA_VERSION
from .errors import (QStructError, CapacityViolation, IncompatibleOperands, DimensionMismatch,
                     MalformedToken, UnsupportedSchemaVersion, NonHermitianTerm,
                     InvalidLindbladTerm, UnresolvedSymbol)
from .product import Phase, Product
from .operator import Operator, zero, one
from .hamiltonian import HamiltonianOperator
from .lindblad import NoiseOperator, LindbladNoiseOperator
from .spins import (SinglePauli, SingleDecoherence, PauliProduct, DecoherenceProduct,
                    SpinOperator, DecoherenceOperator, SpinHamiltonian,
                    SpinLindbladNoiseOperator, pauli, decoherence)
from .fermions import (SingleFermion, FermionProduct, HermitianFermionProduct, FermionOperator,
                       FermionHamiltonian, FermionLindbladNoiseOperator, fermion)
from .bosons import (BosonSymbol, BosonProduct, HermitianBosonProduct, BosonOperator,
                     BosonHamiltonian, BosonLindbladNoiseOperator, boson)
from .sparse import SparseMatrixConverter
from .mappings import JordanWignerMapper

__version__ = '0.1.0'

logging.getLogger(__name__).addHandler(logging.NullHandler())
