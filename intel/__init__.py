"""Intel document ingestion: schema validation and content digests."""

from .documents import (
    DocumentError,
    ValidationReport,
    load_json,
    validate_instance,
    validate_document,
)
from .digest import digest_bytes, digest_file

__all__ = [
    'DocumentError',
    'ValidationReport',
    'load_json',
    'validate_instance',
    'validate_document',
    'digest_bytes',
    'digest_file',
]
