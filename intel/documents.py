"""
Intel document ingestion and JSON Schema validation.

A document that fails validation is reported but still usable for proof
creation unless the caller decides otherwise.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

from jsonschema import Draft7Validator, validators
from jsonschema.exceptions import SchemaError

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Intel document or schema could not be read"""
    pass


@dataclass
class ValidationReport:
    """Outcome of validating one document against one schema"""
    document_path: Path
    schema_path: Path
    valid: bool
    errors: List[str] = field(default_factory=list)


def load_json(path: Path) -> Any:
    """Read and parse a JSON file"""
    path = Path(path)
    if not path.is_file():
        raise DocumentError(f"unable to locate file '{path}'")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise DocumentError(f"'{path}' is not valid JSON: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentError(f"unable to read '{path}': {e}") from e


def _format_error(error) -> str:
    location = error.json_path if error.path else "$"
    return f"{location}: {error.message}"


def validate_instance(instance: Any, schema: Dict[str, Any]) -> List[str]:
    """Validate an already-loaded instance, returning formatted errors"""
    validator_cls = validators.validator_for(schema, default=Draft7Validator)

    try:
        validator_cls.check_schema(schema)
    except SchemaError as e:
        raise DocumentError(f"invalid schema: {e.message}") from e

    validator = validator_cls(schema)
    errors = sorted(validator.iter_errors(instance),
                    key=lambda e: (list(map(str, e.path)), e.message))
    return [_format_error(e) for e in errors]


def validate_document(document_path: Path, schema_path: Path) -> ValidationReport:
    """Validate a document file against a schema file"""
    document_path = Path(document_path)
    schema_path = Path(schema_path)

    schema = load_json(schema_path)
    if not isinstance(schema, dict):
        raise DocumentError(f"schema '{schema_path}' must be a JSON object")

    document = load_json(document_path)
    errors = validate_instance(document, schema)

    report = ValidationReport(
        document_path=document_path,
        schema_path=schema_path,
        valid=not errors,
        errors=errors
    )

    if report.valid:
        logger.info("The document is valid")
    else:
        logger.warning("The document is not valid. see errors :")
        for desc in report.errors:
            logger.warning(f"- {desc}")

    return report
