import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from commitment import (
    ParameterInitializationError,
    ParameterMismatchError,
    ProofDecodeError,
    get_group_parameters,
)
from config import ExchangeConfig, load_config
from intel import DocumentError
from intel_exchange import IntelExchange
from utils import create_performance_report, save_results, setup_logging

logger = logging.getLogger(__name__)

EXIT_MATCHED = 0
EXIT_NOT_MATCHED = 1
EXIT_INPUT_ERROR = 2
EXIT_PARAMETER_MISMATCH = 3
EXIT_STARTUP_FAILURE = 4


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Privately compare intel documents using digest commitments')
    parser.add_argument('--path', type=Path, required=True,
                        help='path to json')
    parser.add_argument('--cmp-path', type=Path, default=None,
                        help='path to proof struct json')
    parser.add_argument('--create-proof', action='store_true',
                        help='creates your output proof based on your json')
    parser.add_argument('--output', type=Path, default=None,
                        help='write the created proof to this file instead of stdout')
    parser.add_argument('--schema', type=Path, default=None,
                        help='JSON schema for the intel document (default: from config, schema.json)')
    parser.add_argument('--config', type=Path, default=Path('config.yaml'),
                        help='Config file path')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Logging level (default: from config)')
    parser.add_argument('--benchmark', type=int, default=None, metavar='TRIALS',
                        help='time TRIALS generate/compare rounds over the document')
    return parser


def _resolve_config(args: argparse.Namespace) -> ExchangeConfig:
    config = load_config(args.config)
    if args.schema is not None:
        config.schema_path = args.schema
    if args.log_level is not None:
        config.log_level = args.log_level
    return config


def run(args: argparse.Namespace, config: ExchangeConfig) -> int:
    exchange = IntelExchange(config)

    if args.benchmark is not None:
        if args.benchmark <= 0:
            logger.error("--benchmark needs a positive number of trials")
            return EXIT_INPUT_ERROR
        results = exchange.benchmark(args.path, args.benchmark)
        print(create_performance_report(exchange.performance_monitor))
        if config.enable_benchmarking:
            save_results(results, config.results_dir / "benchmark_results.json")
            exchange.performance_monitor.save_metrics(
                config.results_dir / "benchmark_metrics.json")
        return EXIT_MATCHED

    if args.create_proof:
        proof = exchange.create_proof(args.path)
        text = exchange.export_proof(proof, args.output)
        if args.output is None:
            print(text)
        return EXIT_MATCHED

    if args.cmp_path is None:
        logger.error("nothing to do: pass --create-proof or --cmp-path")
        return EXIT_INPUT_ERROR

    outcome = exchange.compare_document(args.path, args.cmp_path)
    return EXIT_MATCHED if outcome.matched else EXIT_NOT_MATCHED


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = _resolve_config(args)
        setup_logging(config.log_level, log_dir=config.log_dir)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return EXIT_INPUT_ERROR

    try:
        get_group_parameters()
    except ParameterInitializationError as e:
        logger.critical(str(e))
        return EXIT_STARTUP_FAILURE

    try:
        return run(args, config)
    except ParameterMismatchError as e:
        logger.error(f"cannot compare: {e}")
        return EXIT_PARAMETER_MISMATCH
    except (DocumentError, ProofDecodeError) as e:
        logger.error(str(e))
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
