"""
Proof wire format.

A serialized proof is a JSON object with exactly three string fields, each an
unpadded hexadecimal integer:

    {
        "modular-multiplicative-generator": "2",
        "prime": "ffffffff...",
        "modular-hash": "9c1f..."
    }

The field names are the contract between independently operated instances
and must not change.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from .commitment_proofs import Proof, check_group
from .errors import InvalidFieldEncodingError, MalformedProofRecordError
from .group_params import GroupParameters

logger = logging.getLogger(__name__)

GENERATOR_FIELD = "modular-multiplicative-generator"
PRIME_FIELD = "prime"
MODULAR_HASH_FIELD = "modular-hash"

PROOF_FIELDS = (GENERATOR_FIELD, PRIME_FIELD, MODULAR_HASH_FIELD)

_HEX_PATTERN = re.compile(r'[0-9a-fA-F]+')


def _to_hex(value: int) -> str:
    return format(value, 'x')


def _parse_hex_field(record: Mapping[str, Any], name: str) -> int:
    value = record[name]
    if not isinstance(value, str):
        raise InvalidFieldEncodingError(
            name, f"expected a hex string, got {type(value).__name__}")
    if not value:
        raise InvalidFieldEncodingError(name, "empty value")
    # int(x, 16) alone would also accept signs, '0x' prefixes, underscores
    # and surrounding whitespace.
    if _HEX_PATTERN.fullmatch(value) is None:
        raise InvalidFieldEncodingError(name, "not valid base-16")
    return int(value, 16)


def encode(proof: Proof) -> Dict[str, str]:
    """Encode a proof as a record of hex strings"""
    return {
        GENERATOR_FIELD: _to_hex(proof.generator),
        PRIME_FIELD: _to_hex(proof.prime),
        MODULAR_HASH_FIELD: _to_hex(proof.modular_hash),
    }


def decode(record: Mapping[str, Any], group: Optional[GroupParameters] = None) -> Proof:
    """
    Decode a record of hex strings into a proof, rejecting anything malformed.

    With ``group`` given, a record carrying another generator or prime raises
    ParameterMismatchError before any range check, so a foreign prime smaller
    than the record's modular-hash is still reported as a mismatch.
    """
    if not isinstance(record, Mapping):
        raise MalformedProofRecordError(
            f"proof record must be an object, got {type(record).__name__}")

    missing = [name for name in PROOF_FIELDS if name not in record]
    if missing:
        raise MalformedProofRecordError(
            f"proof record missing fields: {', '.join(missing)}")

    unexpected = sorted(str(name) for name in record if name not in PROOF_FIELDS)
    if unexpected:
        raise MalformedProofRecordError(
            f"proof record has unexpected fields: {', '.join(unexpected)}")

    generator = _parse_hex_field(record, GENERATOR_FIELD)
    prime = _parse_hex_field(record, PRIME_FIELD)
    modular_hash = _parse_hex_field(record, MODULAR_HASH_FIELD)

    if group is not None:
        check_group(group, generator, prime)

    if generator == 0:
        raise InvalidFieldEncodingError(GENERATOR_FIELD, "generator must be positive")
    if prime <= 1:
        raise InvalidFieldEncodingError(PRIME_FIELD, "prime must be greater than 1")
    if modular_hash >= prime:
        raise InvalidFieldEncodingError(
            MODULAR_HASH_FIELD, "value is not reduced modulo the prime")

    return Proof(generator=generator, prime=prime, modular_hash=modular_hash)


def dumps(proof: Proof, indent: Optional[int] = None) -> str:
    """Serialize a proof to JSON text"""
    return json.dumps(encode(proof), indent=indent)


def loads(text: Union[str, bytes], group: Optional[GroupParameters] = None) -> Proof:
    """Parse JSON text into a proof"""
    try:
        record = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedProofRecordError(f"proof is not valid JSON: {e}") from e

    if not isinstance(record, dict):
        raise MalformedProofRecordError(
            f"proof record must be a JSON object, got {type(record).__name__}")

    return decode(record, group)


def write_proof(proof: Proof, path: Path) -> Path:
    """Write a proof to ``path`` as indented JSON"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w') as f:
        f.write(dumps(proof, indent=2))
        f.write("\n")

    logger.info(f"Proof {proof.fingerprint()} written to {path}")
    return path


def read_proof(path: Path, group: Optional[GroupParameters] = None) -> Proof:
    """Read and decode a proof file"""
    path = Path(path)
    with open(path, 'rb') as f:
        data = f.read()

    proof = loads(data, group)
    logger.info(f"Loaded proof {proof.fingerprint()} from {path}")
    return proof
