"""Exception hierarchy for digest commitments."""


class CommitmentError(Exception):
    """Base exception for commitment operations"""
    pass


class ParameterInitializationError(CommitmentError):
    """The constant group prime could not be parsed at startup"""
    pass


class ParameterMismatchError(CommitmentError):
    """Remote proof was computed under a different generator or prime"""
    pass


class InvalidProofError(CommitmentError, ValueError):
    """Proof fields violate the group invariants"""
    pass


class EmptySecretError(CommitmentError, ValueError):
    """Secret byte sequence is empty"""
    pass


class ProofDecodeError(CommitmentError):
    """Serialized proof could not be decoded"""
    pass


class InvalidFieldEncodingError(ProofDecodeError):
    """A proof field is not valid base-16 or is out of range"""

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"invalid '{field_name}' field: {reason}")


class MalformedProofRecordError(ProofDecodeError):
    """Proof record is not a JSON object with exactly the expected fields"""
    pass
