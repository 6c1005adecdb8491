''' Exceptions raised by qstruct.

    Every error derives from QStructError and from the builtin exception
    closest in meaning, so callers may catch either. '''


class QStructError(Exception):
    ''' base class of all qstruct errors '''


class CapacityViolation(QStructError, ValueError):
    ''' a product addresses an index at or beyond the declared number of modes '''
    def __init__(self, index, number_modes):
        super().__init__("index {:d} exceeds the number of modes ({:d}) of the operator".format(index, number_modes))
        self.index = index
        self.number_modes = number_modes


class IncompatibleOperands(QStructError, TypeError):
    ''' operands belong to different operator families or disagree on their bounds '''


class DimensionMismatch(QStructError, ValueError):
    ''' a matrix was requested with a basis that cannot hold the operator '''


class MalformedToken(QStructError, ValueError):
    ''' a readable token could not be parsed '''
    def __init__(self, token, reason=None):
        message = "malformed token {!r}".format(token)
        if reason:
            message += ": " + reason
        super().__init__(message)
        self.token = token


class UnsupportedSchemaVersion(QStructError, ValueError):
    ''' a payload was written by an incompatible (newer) schema '''


class NonHermitianTerm(QStructError, ValueError):
    ''' a term would break the Hermiticity of a Hamiltonian '''


class InvalidLindbladTerm(QStructError, ValueError):
    ''' a Lindblad dissipator was built from an identity product '''


class UnresolvedSymbol(QStructError, ValueError):
    ''' a numeric value was requested from a coefficient with free symbols '''
