"""File-oriented convenience wrappers."""

from .engine import xorfile


def encryptfile(
    file: str,
    output: str,
    key: str | bytes,
    *,
    chunk_size: int | None = None,
    progress_cb=None,
):
    return xorfile.encrypt_file(
        file,
        output,
        key,
        chunk_size=chunk_size,
        progress_cb=progress_cb,
    )


def decryptfile(
    file: str,
    output: str,
    key: str | bytes,
    *,
    chunk_size: int | None = None,
    progress_cb=None,
):
    return xorfile.decrypt_file(
        file,
        output,
        key,
        chunk_size=chunk_size,
        progress_cb=progress_cb,
    )


def transform(
    file: str,
    output: str,
    key: str | bytes,
    *,
    chunk_size: int | None = None,
    progress_cb=None,
):
    return xorfile.transform(
        file,
        output,
        key,
        chunk_size=chunk_size,
        progress_cb=progress_cb,
    )


def xor_bytes(data: bytes, key: str | bytes, chunk_size: int | None = None):
    return xorfile.xor_bytes(data, key, chunk_size=chunk_size)


def validate_key(key: str | bytes):
    return xorfile.validate_key(key)


def key_fingerprint(key: str | bytes):
    return xorfile.key_fingerprint(key)


Status = xorfile.Status
TransformOutcome = xorfile.TransformOutcome


__all__ = [
    "decryptfile",
    "encryptfile",
    "key_fingerprint",
    "Status",
    "transform",
    "TransformOutcome",
    "validate_key",
    "xor_bytes",
]
