"""
Tests for coefficient arithmetic (numeric and symbolic).
"""

import pytest
import sympy

from qstruct import coefficient as cf
from qstruct.errors import MalformedToken, UnresolvedSymbol


def test_numeric_input_is_complex():
    assert cf.coefficient(2) == 2 + 0j
    assert isinstance(cf.coefficient(2), complex)
    assert isinstance(cf.coefficient(0.5), complex)


def test_string_parses_to_real_symbol():
    theta = cf.coefficient('theta')
    assert cf.is_symbolic(theta)
    (symbol,) = theta.free_symbols
    assert symbol.is_real


def test_symbolic_cancellation_collapses_to_complex():
    theta = cf.coefficient('theta')
    result = cf.sub(theta, theta)
    assert result == 0j
    assert cf.is_zero(result)
    assert cf.is_zero('theta - theta')


def test_conjugation_only_acts_on_i():
    theta = cf.coefficient('theta')
    assert cf.is_zero(cf.sub(cf.conjugate(theta), theta))
    itheta = cf.mul(theta, 1j)
    assert cf.is_zero(cf.add(cf.conjugate(itheta), itheta))


def test_real_and_imaginary_parts():
    assert cf.real_part(1 + 2j) == 1.0
    assert cf.imag_part(1 + 2j) == 2.0
    expr = cf.coefficient('theta + 2*I*phi')
    assert str(cf.real_part(expr)) == 'theta'
    assert str(cf.imag_part(expr)) == '2*phi'
    assert not cf.is_real(expr)
    assert cf.is_real('theta')
    assert str(cf.real_part('theta + 1')) == 'theta + 1'
    assert str(cf.imag_part('2*I*phi')) == '2*phi'
    assert cf.imag_part('0.5') == 0.0


def test_to_complex_requires_resolved_symbols():
    with pytest.raises(UnresolvedSymbol):
        cf.to_complex(cf.coefficient('theta'))
    assert cf.to_complex(cf.coefficient('2*theta').subs(sympy.Symbol('theta', real=True), 1)) == 2


def test_substitute():
    expr = cf.coefficient('2*theta + 1')
    assert cf.substitute(expr, {'theta': 0.25}) == 1.5 + 0j
    assert cf.substitute(3j, {'theta': 1}) == 3j


def test_malformed_expression():
    with pytest.raises(MalformedToken):
        cf.coefficient('1 +')


@pytest.mark.parametrize("value, text", [
    (0.5, '(5e-1 + i * 0e0)'),
    (1j, '(0e0 + i * 1e0)'),
    (-2.5 + 1e-3j, '(-2.5e0 + i * 1e-3)'),
])
def test_display(value, text):
    assert cf.display(value) == text


@pytest.mark.parametrize("value, text", [
    (1 + 0j, ''),
    (-1 + 0j, '- '),
    (2 + 0j, '2 '),
    (1j, 'i '),
    (-1j, '-i '),
    (0.5 + 0j, '0.5 '),
])
def test_coef_repr(value, text):
    assert cf.coef_repr(value) == text
