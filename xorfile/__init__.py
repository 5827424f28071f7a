from .main import *
from .api_files import (
    Status,
    TransformOutcome,
    decryptfile,
    encryptfile,
    key_fingerprint,
    transform,
    validate_key,
    xor_bytes,
)
from .version import __version__

MIN_KEY_LENGTH = xorfile.MIN_KEY_LENGTH
MAX_KEY_LENGTH = xorfile.MAX_KEY_LENGTH
BUFFER_SIZE = xorfile.BUFFER_SIZE

__all__ = [
    "BUFFER_SIZE",
    "MAX_KEY_LENGTH",
    "MIN_KEY_LENGTH",
    "Status",
    "TransformOutcome",
    "__version__",
    "cli",
    "decryptfile",
    "encryptfile",
    "key_fingerprint",
    "main",
    "transform",
    "validate_key",
    "xor_bytes",
    "xorfile",
]
