''' Process-wide constants of qstruct.

    The schema version stamps every serialized payload; a reader accepts
    payloads up to its own major version. '''
from collections import namedtuple

SchemaVersion = namedtuple('SchemaVersion', ['major_version', 'minor_version'])

# version written into new payloads
SCHEMA_VERSION = SchemaVersion(1, 1)
# oldest payload layout this release still reads
MINIMUM_SCHEMA_VERSION = SchemaVersion(1, 0)
