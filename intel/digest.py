"""Streaming content digests used as commitment secrets."""

import hashlib
import logging
from pathlib import Path
from typing import Union

from .documents import DocumentError

logger = logging.getLogger(__name__)

DEFAULT_ALGORITHM = "sha256"
DEFAULT_CHUNK_SIZE = 65536


def _new_hash(algorithm: str):
    # Variable-length XOFs have no fixed digest size
    if algorithm.lower().startswith('shake_'):
        raise ValueError(f"Unsupported hash algorithm: {algorithm}")
    try:
        return hashlib.new(algorithm)
    except ValueError as e:
        raise ValueError(f"Unsupported hash algorithm: {algorithm}") from e


def digest_bytes(data: Union[bytes, bytearray, memoryview],
                 algorithm: str = DEFAULT_ALGORITHM) -> bytes:
    h = _new_hash(algorithm)
    h.update(data)
    return h.digest()


def digest_file(path: Path, algorithm: str = DEFAULT_ALGORITHM,
                chunk_size: int = DEFAULT_CHUNK_SIZE) -> bytes:
    """Hash the raw bytes of ``path`` without loading it all at once"""
    path = Path(path)
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")

    h = _new_hash(algorithm)
    if not path.is_file():
        raise DocumentError(f"unable to locate file '{path}'")

    try:
        with open(path, 'rb') as f:
            while chunk := f.read(chunk_size):
                h.update(chunk)
    except OSError as e:
        raise DocumentError(f"unable to read '{path}': {e}") from e

    logger.debug(f"Digested {path} with {algorithm}")
    return h.digest()
