"""
Digest Commitment Proofs
========================

Two parties holding secret digests decide whether the digests are equal
without exchanging them. Each side publishes

    modular_hash = generator ^ int(digest) mod prime

over the fixed group from ``group_params``. Recovering the digest from the
proof is a discrete logarithm problem; comparing two proofs only needs the
verifier to recompute its own residue.

The commitment is deterministic and unsalted: equal digests always yield equal
proofs. Resistance to dictionary attacks therefore rests entirely on the
digest being unpredictable to anyone who does not hold the content.
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Optional, Union

from .errors import EmptySecretError, InvalidProofError, ParameterMismatchError
from .group_params import GroupParameters, get_group_parameters

logger = logging.getLogger(__name__)

BytesLike = Union[bytes, bytearray, memoryview]


# ============================================================================
# PROOF VALUE OBJECT
# ============================================================================


@dataclass(frozen=True)
class Proof:
    """Commitment to a secret digest plus the group it was computed in"""
    generator: int
    prime: int
    modular_hash: int

    def __post_init__(self):
        for name in ('generator', 'prime', 'modular_hash'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise InvalidProofError(
                    f"{name} must be an integer, got {type(value).__name__}")

        if self.generator <= 0:
            raise InvalidProofError("generator must be positive")
        if self.prime <= 1:
            raise InvalidProofError("prime must be greater than 1")
        if not 0 <= self.modular_hash < self.prime:
            raise InvalidProofError("modular_hash must lie in [0, prime)")

    def fingerprint(self) -> str:
        """Short, non-secret identifier for log lines"""
        width = (self.prime.bit_length() + 7) // 8
        encoded = self.modular_hash.to_bytes(width, 'big')
        return hashlib.sha256(encoded).hexdigest()[:16]


def _secret_exponent(secret: BytesLike) -> int:
    """Interpret a secret digest as a big-endian unsigned integer"""
    if isinstance(secret, str):
        raise TypeError("secret must be bytes, not str; hash the text first")
    if not isinstance(secret, (bytes, bytearray, memoryview)):
        raise TypeError(
            f"secret must be a bytes-like object, got {type(secret).__name__}")

    secret = bytes(secret)
    if not secret:
        raise EmptySecretError("secret digest must not be empty")

    return int.from_bytes(secret, 'big')


def check_group(group: GroupParameters, generator: int, prime: int):
    """Raise ParameterMismatchError unless generator and prime are the group's"""
    if generator != group.generator:
        raise ParameterMismatchError(
            f"sender/receiver generator didn't match "
            f"(local {group.generator}, remote {generator})")

    if prime != group.prime:
        raise ParameterMismatchError(
            f"sender/receiver prime didn't match "
            f"(local {group.bit_length}-bit, remote {prime.bit_length()}-bit)")


# ============================================================================
# GENERATION
# ============================================================================


class ProofGenerator:
    """Maps a secret digest to its commitment proof"""

    def __init__(self, group: Optional[GroupParameters] = None):
        self.group = group if group is not None else get_group_parameters()

    def generate(self, secret: BytesLike) -> Proof:
        exponent = _secret_exponent(secret)

        # The exponent is used as-is; both sides derive it identically.
        modular_hash = pow(self.group.generator, exponent, self.group.prime)

        proof = Proof(
            generator=self.group.generator,
            prime=self.group.prime,
            modular_hash=modular_hash,
        )
        logger.debug(f"Generated proof {proof.fingerprint()}")
        return proof


# ============================================================================
# COMPARISON
# ============================================================================


class ProofComparator:
    """
    Decides whether a local secret matches a remote proof.

    Returns False only for genuinely different secrets. A proof computed in a
    different group raises ParameterMismatchError instead, since no equality
    conclusion can be drawn from it.
    """

    def __init__(self, group: Optional[GroupParameters] = None):
        self.group = group if group is not None else get_group_parameters()

    def check_parameters(self, remote: Proof):
        """Reject proofs that were not computed in the local group"""
        check_group(self.group, remote.generator, remote.prime)

    def compare(self, secret: BytesLike, remote: Proof) -> bool:
        self.check_parameters(remote)

        exponent = _secret_exponent(secret)
        local_hash = pow(self.group.generator, exponent, self.group.prime)

        # Residues are already reduced into [0, prime); equality of residues is
        # the whole test. Fixed-width encoding keeps the comparison constant-time.
        width = self.group.byte_length
        matched = hmac.compare_digest(
            local_hash.to_bytes(width, 'big'),
            remote.modular_hash.to_bytes(width, 'big'),
        )

        logger.debug(f"Compared against proof {remote.fingerprint()}: "
                     f"{'match' if matched else 'no match'}")
        return matched


# ============================================================================
# CONVENIENCE API
# ============================================================================


def generate_proof(secret: BytesLike, group: Optional[GroupParameters] = None) -> Proof:
    """Generate a proof for ``secret`` in the given (or default) group"""
    return ProofGenerator(group).generate(secret)


def compare_proof(secret: BytesLike, remote: Proof,
                  group: Optional[GroupParameters] = None) -> bool:
    """Compare ``secret`` against a remote proof in the given (or default) group"""
    return ProofComparator(group).compare(secret, remote)
