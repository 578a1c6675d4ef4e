import hashlib
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

# Group parameters are fixed constants in commitment.group_params and are
# intentionally absent here; both parties must share them.


@dataclass
class ExchangeConfig:
    schema_path: Optional[Path] = field(default_factory=lambda: Path("schema.json"))
    require_valid_document: bool = False

    hash_algorithm: str = "sha256"
    chunk_size: int = 65536

    log_dir: Path = field(default_factory=lambda: Path("logs"))
    results_dir: Path = field(default_factory=lambda: Path("results"))
    log_level: str = "INFO"

    enable_benchmarking: bool = True
    benchmark_trials: int = 10
    enable_debug_mode: bool = False

    def __post_init__(self):
        for name in ('schema_path', 'log_dir', 'results_dir'):
            value = getattr(self, name)
            if value is None and name == 'schema_path':
                continue
            if not isinstance(value, (str, Path)):
                raise ValueError(f"{name} must be a path, got {type(value).__name__}")
        for name in ('hash_algorithm', 'log_level'):
            if not isinstance(getattr(self, name), str):
                raise ValueError(f"{name} must be a string")
        for name in ('chunk_size', 'benchmark_trials'):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{name} must be an integer, got {value!r}")
        for name in ('require_valid_document', 'enable_benchmarking', 'enable_debug_mode'):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f"{name} must be true or false")

        if self.schema_path is not None:
            self.schema_path = Path(self.schema_path)
        self.log_dir = Path(self.log_dir)
        self.results_dir = Path(self.results_dir)

        if (self.hash_algorithm not in hashlib.algorithms_available
                or self.hash_algorithm.startswith('shake_')):
            raise ValueError(f"Unsupported hash algorithm: {self.hash_algorithm}")
        if self.chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        if self.benchmark_trials <= 0:
            raise ValueError("benchmark_trials must be positive")

        if self.enable_debug_mode:
            self.log_level = "DEBUG"


def load_config(config_path: Optional[Path] = None) -> ExchangeConfig:
    """Load configuration from file or return default"""
    if config_path is None:
        config_path = Path("config.yaml")
    config_path = Path(config_path)

    if not config_path.exists():
        return ExchangeConfig()

    try:
        with open(config_path, 'r') as f:
            config_data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Could not load config file {config_path}: {e}")
        logger.warning("Using default configuration")
        return ExchangeConfig()

    if not isinstance(config_data, dict):
        logger.warning(f"Config file {config_path} is not a mapping, using defaults")
        return ExchangeConfig()

    document_data = config_data.get('document') or {}
    digest_data = config_data.get('digest') or {}
    if not isinstance(document_data, dict) or not isinstance(digest_data, dict):
        logger.warning(f"Config file {config_path} has a malformed 'document' or "
                       f"'digest' section, using defaults")
        return ExchangeConfig()

    schema_path = document_data.get('schema_path', 'schema.json')

    return ExchangeConfig(
        schema_path=schema_path or None,
        require_valid_document=document_data.get('require_valid_document', False),
        hash_algorithm=digest_data.get('algorithm', 'sha256'),
        chunk_size=digest_data.get('chunk_size', 65536),
        log_dir=config_data.get('log_dir', 'logs'),
        results_dir=config_data.get('results_dir', 'results'),
        log_level=config_data.get('log_level', 'INFO'),
        enable_benchmarking=config_data.get('enable_benchmarking', True),
        benchmark_trials=config_data.get('benchmark_trials', 10),
        enable_debug_mode=config_data.get('enable_debug_mode', False)
    )


def save_config(config: ExchangeConfig, config_path: Optional[Path] = None):
    """Save configuration to YAML file"""
    if config_path is None:
        config_path = Path("config.yaml")
    config_path = Path(config_path)

    config_data = {
        'document': {
            'schema_path': str(config.schema_path) if config.schema_path else None,
            'require_valid_document': config.require_valid_document
        },
        'digest': {
            'algorithm': config.hash_algorithm,
            'chunk_size': config.chunk_size
        },
        'log_dir': str(config.log_dir),
        'results_dir': str(config.results_dir),
        'log_level': config.log_level,
        'enable_benchmarking': config.enable_benchmarking,
        'benchmark_trials': config.benchmark_trials,
        'enable_debug_mode': config.enable_debug_mode
    }

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, 'w') as f:
        yaml.dump(config_data, f, default_flow_style=False)

    logger.info(f"Configuration saved to {config_path}")
