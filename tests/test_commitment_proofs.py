"""
Tests for proof generation and comparison.
"""

import dataclasses
import hashlib
from concurrent.futures import ThreadPoolExecutor

import pytest

from commitment import (
    EmptySecretError,
    GroupParameters,
    InvalidProofError,
    ParameterMismatchError,
    Proof,
    ProofComparator,
    ProofGenerator,
    compare_proof,
    generate_proof,
    get_group_parameters,
)

ALPHA = hashlib.sha256(b"alpha").digest()
BETA = hashlib.sha256(b"beta").digest()

TOY_GROUP = GroupParameters(generator=2, prime=23)


@pytest.fixture
def generator():
    return ProofGenerator()


@pytest.fixture
def comparator():
    return ProofComparator()


# ----------------------------------------------------------------------------
# Generation
# ----------------------------------------------------------------------------


def test_generate_is_deterministic(generator):
    assert generator.generate(ALPHA) == generator.generate(ALPHA)
    assert generator.generate(ALPHA) == ProofGenerator().generate(ALPHA)


def test_generate_carries_group_parameters(generator):
    group = get_group_parameters()
    proof = generator.generate(ALPHA)

    assert proof.generator == group.generator
    assert proof.prime == group.prime
    assert 0 <= proof.modular_hash < group.prime


def test_generate_is_modular_exponentiation(generator):
    group = get_group_parameters()
    exponent = int.from_bytes(ALPHA, "big")

    assert generator.generate(ALPHA).modular_hash == pow(2, exponent, group.prime)


def test_distinct_secrets_give_distinct_proofs(generator):
    assert generator.generate(ALPHA).modular_hash != generator.generate(BETA).modular_hash


def test_zero_digest_commits_to_one(generator, comparator):
    zero = bytes(32)
    proof = generator.generate(zero)

    assert proof.modular_hash == 1
    assert comparator.compare(zero, proof) is True


def test_secret_is_big_endian():
    generator = ProofGenerator(TOY_GROUP)

    # 0x0003 == 3 -> 2^3 mod 23 == 8
    assert generator.generate(b"\x00\x03").modular_hash == 8
    # 0x0300 == 768 -> 2^768 mod 23
    assert generator.generate(b"\x03\x00").modular_hash == pow(2, 768, 23)


def test_bytes_like_secrets_are_equivalent(generator):
    expected = generator.generate(ALPHA)

    assert generator.generate(bytearray(ALPHA)) == expected
    assert generator.generate(memoryview(ALPHA)) == expected


def test_empty_secret_rejected(generator, comparator):
    with pytest.raises(EmptySecretError):
        generator.generate(b"")

    with pytest.raises(EmptySecretError):
        comparator.compare(b"", generator.generate(ALPHA))


@pytest.mark.parametrize("secret", ["alpha", 12345, None])
def test_non_bytes_secret_rejected(generator, secret):
    with pytest.raises(TypeError):
        generator.generate(secret)


# ----------------------------------------------------------------------------
# Comparison
# ----------------------------------------------------------------------------


@pytest.mark.parametrize("content", [b"alpha", b"beta", b"", b"x" * 4096])
def test_compare_accepts_own_proof(generator, comparator, content):
    secret = hashlib.sha256(content).digest()
    assert comparator.compare(secret, generator.generate(secret)) is True


def test_compare_rejects_different_secret(generator, comparator):
    assert comparator.compare(BETA, generator.generate(ALPHA)) is False
    assert comparator.compare(ALPHA, generator.generate(BETA)) is False


def test_compare_uses_residue_equality_not_quotient():
    comparator = ProofComparator(TOY_GROUP)
    secret = b"\x04"  # 2^4 mod 23 == 16

    assert comparator.compare(secret, Proof(2, 23, 16)) is True
    # 17 // 16 == 1, but the residues differ
    assert comparator.compare(secret, Proof(2, 23, 17)) is False
    assert comparator.compare(secret, Proof(2, 23, 8)) is False


def test_compare_rejects_off_by_one_residue(generator, comparator):
    proof = generator.generate(ALPHA)
    shifted = Proof(proof.generator, proof.prime, (proof.modular_hash + 1) % proof.prime)

    assert comparator.compare(ALPHA, shifted) is False


def test_generator_mismatch_raises(generator, comparator):
    proof = generator.generate(ALPHA)
    foreign = dataclasses.replace(proof, generator=3)

    with pytest.raises(ParameterMismatchError):
        comparator.compare(ALPHA, foreign)


def test_prime_bit_flip_raises(generator, comparator):
    proof = generator.generate(ALPHA)
    widened = dataclasses.replace(proof, prime=proof.prime ^ (1 << 3072))

    with pytest.raises(ParameterMismatchError):
        comparator.compare(ALPHA, widened)

    one = generator.generate(bytes(32))
    lowered = dataclasses.replace(one, prime=one.prime ^ 1)

    with pytest.raises(ParameterMismatchError):
        comparator.compare(bytes(32), lowered)


def test_mismatch_is_raised_even_when_secrets_match(comparator):
    toy_proof = ProofGenerator(TOY_GROUP).generate(ALPHA)

    with pytest.raises(ParameterMismatchError):
        comparator.compare(ALPHA, toy_proof)


def test_injected_group_round_trip():
    proof = ProofGenerator(TOY_GROUP).generate(b"\x05")

    assert proof == Proof(2, 23, pow(2, 5, 23))
    assert ProofComparator(TOY_GROUP).compare(b"\x05", proof) is True
    assert ProofComparator(TOY_GROUP).compare(b"\x06", proof) is False


def test_convenience_functions(generator):
    proof = generate_proof(ALPHA)

    assert proof == generator.generate(ALPHA)
    assert compare_proof(ALPHA, proof) is True
    assert compare_proof(BETA, proof) is False
    assert compare_proof(b"\x05", generate_proof(b"\x05", TOY_GROUP), TOY_GROUP) is True


def test_concurrent_callers_agree(generator, comparator):
    secrets = [hashlib.sha256(str(i).encode()).digest() for i in range(8)]
    expected = [generator.generate(s) for s in secrets]

    with ThreadPoolExecutor(max_workers=4) as pool:
        proofs = list(pool.map(generator.generate, secrets))
        matches = list(pool.map(comparator.compare, secrets, proofs))

    assert proofs == expected
    assert all(matches)


# ----------------------------------------------------------------------------
# Proof value object
# ----------------------------------------------------------------------------


def test_proof_is_immutable(generator):
    proof = generator.generate(ALPHA)

    with pytest.raises(dataclasses.FrozenInstanceError):
        proof.modular_hash = 1


@pytest.mark.parametrize("fields", [
    (2, 23, 23),
    (2, 23, 99),
    (2, 23, -1),
    (0, 23, 1),
    (2, 1, 0),
    (True, 23, 1),
    (2, 23, 1.0),
    (2, "23", 1),
])
def test_proof_invariants_enforced(fields):
    with pytest.raises(InvalidProofError):
        Proof(*fields)


def test_invalid_proof_error_is_value_error():
    with pytest.raises(ValueError):
        Proof(2, 23, 23)


def test_fingerprint_is_short_and_stable(generator):
    proof = generator.generate(ALPHA)

    assert len(proof.fingerprint()) == 16
    assert proof.fingerprint() == generator.generate(ALPHA).fingerprint()
    assert proof.fingerprint() != generator.generate(BETA).fingerprint()
