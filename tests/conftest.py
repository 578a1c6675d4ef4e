"""
Shared pytest fixtures: sample intel documents, a schema and an isolated
configuration rooted in the test's temporary directory.
"""

import json
import logging
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import ExchangeConfig  # noqa: E402

SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["id", "source", "indicators"],
    "properties": {
        "id": {"type": "string", "minLength": 1},
        "source": {"type": "string"},
        "indicators": {
            "type": "array",
            "minItems": 1,
            "items": {
                "type": "object",
                "required": ["type", "value"],
                "properties": {
                    "type": {"type": "string"},
                    "value": {"type": "string"}
                }
            }
        }
    }
}

ALPHA_DOCUMENT = {
    "id": "alpha",
    "source": "field-office-1",
    "indicators": [{"type": "domain", "value": "alpha.example"}]
}

BETA_DOCUMENT = {
    "id": "beta",
    "source": "field-office-2",
    "indicators": [{"type": "ip", "value": "192.0.2.7"}]
}


def _write_json(path: Path, data) -> Path:
    path.write_text(json.dumps(data, indent=2))
    return path


@pytest.fixture
def schema_path(tmp_path) -> Path:
    return _write_json(tmp_path / "schema.json", SCHEMA)


@pytest.fixture
def alpha_path(tmp_path) -> Path:
    return _write_json(tmp_path / "alpha.json", ALPHA_DOCUMENT)


@pytest.fixture
def beta_path(tmp_path) -> Path:
    return _write_json(tmp_path / "beta.json", BETA_DOCUMENT)


@pytest.fixture
def invalid_path(tmp_path) -> Path:
    return _write_json(tmp_path / "invalid.json",
                       {"id": "", "indicators": [{"type": "domain"}]})


@pytest.fixture
def exchange_config(tmp_path, schema_path) -> ExchangeConfig:
    return ExchangeConfig(
        schema_path=schema_path,
        log_dir=tmp_path / "logs",
        results_dir=tmp_path / "results",
    )


@pytest.fixture(autouse=True)
def restore_root_logging():
    """setup_logging replaces root handlers; put them back after each test"""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
