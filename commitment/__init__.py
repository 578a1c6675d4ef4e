"""
Digest Commitment Module
Deterministic g^e mod p commitments for comparing secret digests
"""

from .group_params import (
    GENERATOR,
    GroupParameters,
    get_group_parameters,
    parse_prime,
)
from .commitment_proofs import (
    # Core classes
    Proof,
    ProofGenerator,
    ProofComparator,

    # Convenience functions
    generate_proof,
    compare_proof,
    check_group,
)
from .codec import (
    PROOF_FIELDS,
    encode,
    decode,
    dumps,
    loads,
    read_proof,
    write_proof,
)
from .errors import (
    CommitmentError,
    ParameterInitializationError,
    ParameterMismatchError,
    InvalidProofError,
    EmptySecretError,
    ProofDecodeError,
    InvalidFieldEncodingError,
    MalformedProofRecordError,
)

__version__ = "1.0.0"

__all__ = [
    # Group
    'GENERATOR',
    'GroupParameters',
    'get_group_parameters',
    'parse_prime',

    # Proofs
    'Proof',
    'ProofGenerator',
    'ProofComparator',
    'generate_proof',
    'compare_proof',
    'check_group',

    # Codec
    'PROOF_FIELDS',
    'encode',
    'decode',
    'dumps',
    'loads',
    'read_proof',
    'write_proof',

    # Exceptions
    'CommitmentError',
    'ParameterInitializationError',
    'ParameterMismatchError',
    'InvalidProofError',
    'EmptySecretError',
    'ProofDecodeError',
    'InvalidFieldEncodingError',
    'MalformedProofRecordError',
]
