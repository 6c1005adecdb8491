''' Readable and compact encodings of operators.

    readable: {"items": [[token, ..., re, im], ...],
               "number_modes": int or None,
               "_version": {"major_version": M, "minor_version": m}}
    compact:  same layout, every product as [[index, tag], ...] and every
              coefficient part as {"Float": x} or {"Str": expression}

    A key holds one product (operators, Hamiltonians) or two (noise
    operators). Payloads from a newer major schema are rejected before
    any term is decoded. '''
import json
import logging

from . import coefficient as cf
from .config import MINIMUM_SCHEMA_VERSION, SCHEMA_VERSION
from .errors import MalformedToken, UnsupportedSchemaVersion

logger = logging.getLogger(__name__)


def version_stamp():
    return {'major_version': SCHEMA_VERSION.major_version, 'minor_version': SCHEMA_VERSION.minor_version}


def check_version(data):
    ''' validate the version stamp of a payload
        raises UnsupportedSchemaVersion '''
    stamp = data.get('_version') if isinstance(data, dict) else None
    if not isinstance(stamp, dict):
        raise UnsupportedSchemaVersion("payload carries no schema version")
    major = stamp.get('major_version')
    minor = stamp.get('minor_version')
    if not isinstance(major, int) or not isinstance(minor, int):
        raise UnsupportedSchemaVersion("malformed schema version {!r}".format(stamp))
    if major > SCHEMA_VERSION.major_version:
        raise UnsupportedSchemaVersion("schema version {:d}.{:d} is newer than the supported {:d}.{:d}".format(
            major, minor, SCHEMA_VERSION.major_version, SCHEMA_VERSION.minor_version))
    if (major, minor) < tuple(MINIMUM_SCHEMA_VERSION):
        raise UnsupportedSchemaVersion("schema version {:d}.{:d} is older than the minimum {:d}.{:d}".format(
            major, minor, MINIMUM_SCHEMA_VERSION.major_version, MINIMUM_SCHEMA_VERSION.minor_version))
    if major == SCHEMA_VERSION.major_version and minor > SCHEMA_VERSION.minor_version:
        logger.warning("decoding payload with newer minor schema version %d.%d", major, minor)


def _key_products(obj, key):
    if obj.key_arity == 1:
        return (key,)
    return tuple(key)


def _make_key(cls, products):
    if cls.key_arity == 1:
        return products[0]
    return tuple(products)


# ---- coefficient parts ----
def _readable_part(x):
    if cf.is_symbolic(x):
        return str(x)
    return float(x)


def _compact_part(x):
    if cf.is_symbolic(x):
        return {'Str': str(x)}
    return {'Float': float(x)}


def _from_readable_part(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return complex(value)
    if isinstance(value, str):
        return cf.coefficient(value)
    raise MalformedToken(value, "coefficient part must be a number or a string")


def _from_compact_part(value):
    if not isinstance(value, dict) or len(value) != 1:
        raise MalformedToken(value, "expected {'Float': x} or {'Str': s}")
    (tag, inner), = value.items()
    if tag == 'Float':
        return _from_readable_part(float(inner))
    if tag == 'Str':
        return _from_readable_part(str(inner))
    raise MalformedToken(value, "unknown coefficient tag {!r}".format(tag))


def _join(re, im):
    return cf.add(re, cf.mul(im, 1j))


def _items(data):
    items = data.get('items')
    if not isinstance(items, list):
        raise MalformedToken(items, "payload has no item list")
    return items


def _build(cls, data, terms):
    obj = cls(number_modes=data.get('number_modes'))
    for key, coef in terms:
        obj.set(key, coef)
    return obj


# ---- readable ----
def to_readable(obj):
    items = []
    for key, coef in obj.items():
        tokens = [str(p) for p in _key_products(obj, key)]
        items.append(tokens + [_readable_part(cf.real_part(coef)), _readable_part(cf.imag_part(coef))])
    return {'items': items, 'number_modes': obj.bound, '_version': version_stamp()}


def from_readable(cls, data):
    ''' decode a readable payload into an instance of cls '''
    check_version(data)
    arity = cls.key_arity
    terms = []
    for item in _items(data):
        if not isinstance(item, (list, tuple)) or len(item) != arity + 2:
            raise MalformedToken(item, "expected {:d} tokens and two coefficient parts".format(arity))
        products = [cls.product_type.from_string(token) for token in item[:arity]]
        coef = _join(_from_readable_part(item[arity]), _from_readable_part(item[arity + 1]))
        terms.append((_make_key(cls, products), coef))
    return _build(cls, data, terms)


# ---- compact ----
def to_compact(obj):
    items = []
    for key, coef in obj.items():
        products = [[[i, p.symbol_letters(s)] for i, s in p] for p in _key_products(obj, key)]
        items.append(products + [_compact_part(cf.real_part(coef)), _compact_part(cf.imag_part(coef))])
    return {'items': items, 'number_modes': obj.bound, '_version': version_stamp()}


def _compact_product(cls, pairs):
    if not isinstance(pairs, (list, tuple)):
        raise MalformedToken(pairs, "expected a sequence of (index, tag) pairs")
    try:
        return cls.product_type([(index, tag) for index, tag in pairs])
    except MalformedToken:
        raise
    except (ValueError, TypeError) as err:
        raise MalformedToken(pairs, str(err)) from err


def from_compact(cls, data):
    ''' decode a compact payload into an instance of cls '''
    check_version(data)
    arity = cls.key_arity
    terms = []
    for item in _items(data):
        if not isinstance(item, (list, tuple)) or len(item) != arity + 2:
            raise MalformedToken(item, "expected {:d} products and two coefficient parts".format(arity))
        products = [_compact_product(cls, pairs) for pairs in item[:arity]]
        coef = _join(_from_compact_part(item[arity]), _from_compact_part(item[arity + 1]))
        terms.append((_make_key(cls, products), coef))
    return _build(cls, data, terms)


# ---- json ----
def to_json(obj):
    return json.dumps(to_readable(obj))


def from_json(cls, text):
    try:
        data = json.loads(text)
    except ValueError as err:
        raise MalformedToken(text, "invalid json") from err
    return from_readable(cls, data)
