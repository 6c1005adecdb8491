''' Coefficient arithmetic.

    A coefficient is either a Python complex number or a sympy expression
    in real-valued parameters. Numeric input of any kind is normalized to
    complex; an expression whose symbols all cancel collapses back to
    complex. Strings are parsed by sympy and their symbols are declared
    real, so that conjugation only acts on explicit factors of I. '''
import numbers

import numpy
import sympy

from .errors import MalformedToken, UnresolvedSymbol


def is_scalar(value):
    ''' True if value can be used as a coefficient '''
    return isinstance(value, (numbers.Number, sympy.Basic, str, numpy.number))


def _realify(expr):
    # replace every symbol by a real symbol of the same name
    symbols = {s: sympy.Symbol(s.name, real=True) for s in expr.atoms(sympy.Symbol) if s.is_real is not True}
    if symbols:
        expr = expr.xreplace(symbols)
    return expr


def _as_sympy(value):
    if isinstance(value, sympy.Basic):
        return value
    value = complex(value)
    def part(x):
        if x == int(x):
            return sympy.Integer(int(x))
        return sympy.Float(x)
    result = sympy.Integer(0)
    if value.real != 0:
        result += part(value.real)
    if value.imag != 0:
        result += part(value.imag) * sympy.I
    return result


def normalize(value):
    ''' bring a coefficient to its canonical form
        Input:
        value: number, sympy expression or str
        Output:
        complex, or an expanded sympy expression with free symbols '''
    if isinstance(value, sympy.Basic):
        expr = sympy.expand(value)
        if not expr.free_symbols:
            return complex(expr)
        return expr
    if isinstance(value, str):
        try:
            expr = sympy.sympify(value)
        except (sympy.SympifyError, SyntaxError, TypeError) as err:
            raise MalformedToken(value, "not a coefficient expression") from err
        return normalize(_realify(expr))
    if isinstance(value, (numbers.Number, numpy.number)):
        return complex(value)
    raise TypeError("'{}' cannot be used as a coefficient".format(type(value).__name__))


def coefficient(value):
    ''' convert user input to a coefficient (alias of normalize that also
        realifies sympy input) '''
    if isinstance(value, sympy.Basic):
        value = _realify(value)
    return normalize(value)


def is_symbolic(value):
    return isinstance(value, sympy.Basic)


def is_zero(value):
    ''' exact zero test (structural for expressions) '''
    value = normalize(value)
    if isinstance(value, sympy.Basic):
        return False
    return value == 0


def add(a, b):
    if isinstance(a, sympy.Basic) or isinstance(b, sympy.Basic):
        return normalize(_as_sympy(a) + _as_sympy(b))
    return complex(a + b)


def sub(a, b):
    if isinstance(a, sympy.Basic) or isinstance(b, sympy.Basic):
        return normalize(_as_sympy(a) - _as_sympy(b))
    return complex(a - b)


def mul(a, b):
    if isinstance(a, sympy.Basic) or isinstance(b, sympy.Basic):
        return normalize(_as_sympy(a) * _as_sympy(b))
    return complex(a * b)


def neg(a):
    if isinstance(a, sympy.Basic):
        return normalize(-a)
    return -complex(a)


def conjugate(a):
    if isinstance(a, sympy.Basic):
        return normalize(sympy.conjugate(a))
    return complex(a).conjugate()


def real_part(a):
    ''' real part: float, or a real sympy expression '''
    a = normalize(a)
    if isinstance(a, sympy.Basic):
        r = normalize(sympy.re(a))
        return r.real if isinstance(r, complex) else r
    return a.real


def imag_part(a):
    ''' imaginary part: float, or a real sympy expression '''
    a = normalize(a)
    if isinstance(a, sympy.Basic):
        r = normalize(sympy.im(a))
        return r.real if isinstance(r, complex) else r
    return a.imag


def is_real(a):
    return is_zero(imag_part(a))


def to_complex(a):
    ''' numeric value of a coefficient
        raises UnresolvedSymbol while free symbols remain '''
    a = normalize(a)
    if isinstance(a, sympy.Basic):
        names = sorted(s.name for s in a.free_symbols)
        raise UnresolvedSymbol("coefficient {} depends on unresolved symbols {}".format(a, names))
    return a


def substitute(a, values):
    ''' substitute parameter values into a coefficient
        Input:
        a: coefficient
        values: dict - {name: number, ...} '''
    if not isinstance(a, sympy.Basic):
        return a
    subs = {sympy.Symbol(name, real=True): _as_sympy(coefficient(v)) for name, v in values.items()}
    return normalize(a.xreplace(subs))


# ---- formatting ----
def format_part(x):
    ''' shortest scientific representation (5e-1, 0e0) or the expression '''
    if isinstance(x, sympy.Basic):
        return str(x)
    return numpy.format_float_scientific(float(x), trim='-', exp_digits=1).replace('e+', 'e')


def display(a):
    ''' "(<real> + i * <imag>)" '''
    return '({} + i * {})'.format(format_part(real_part(a)), format_part(imag_part(a)))


def coef_repr(c):
    ''' compact representation of a coefficient in front of a term '''
    if isinstance(c, sympy.Basic):
        return '({}) '.format(c)
    if c.imag == 0.:
        c = c.real
        if c == round(c):
            if c == 1:
                txt = ''
            elif c == -1:
                txt = '- '
            else:
                txt = '{:d} '.format(int(c))
        else:
            txt = '{:.3g} '.format(c)
    elif c.real == 0.:
        c = c.imag
        if c == round(c):
            if c == 1:
                txt = 'i '
            elif c == -1:
                txt = '-i '
            else:
                txt = '{:d}i '.format(int(c))
        else:
            txt = '{:.3g}i '.format(c)
    else:
        txt = '({:.3g}) '.format(c).replace('j', 'i')
    return txt
