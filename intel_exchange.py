#!/usr/bin/env python3
"""
Intel Exchange
==============
Lets two parties learn whether they hold the same intel document without
revealing it. Each side validates its document, hashes it, and either
publishes a commitment proof or compares its own digest against the other
side's proof.

Document -> schema check -> content digest -> Proof -> JSON proof file
Proof file + document -> schema check -> content digest -> matched?
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from commitment import (
    Proof,
    ProofComparator,
    ProofGenerator,
    dumps,
    get_group_parameters,
    read_proof,
    write_proof,
)
from config import ExchangeConfig
from intel import DocumentError, ValidationReport, digest_file, validate_document
from utils import PerformanceMonitor, timed

logger = logging.getLogger(__name__)


@dataclass
class ComparisonOutcome:
    """Result of comparing a local document against a remote proof"""
    matched: bool
    document_path: Path
    proof_path: Path
    duration_seconds: float


class IntelExchange:
    """
    Orchestrates proof creation and comparison for intel documents.

    Commitment errors (malformed proofs, parameter mismatches) propagate to the
    caller unchanged so that "did not match" stays distinguishable from
    "could not compare".
    """

    def __init__(self, config: Optional[ExchangeConfig] = None):
        self.config = config or ExchangeConfig()
        self.group = get_group_parameters()
        self.generator = ProofGenerator(self.group)
        self.comparator = ProofComparator(self.group)
        self.performance_monitor = PerformanceMonitor()

        logger.info(f"Initialized Intel Exchange ({self.group.bit_length}-bit group, "
                    f"{self.config.hash_algorithm} digests)")

    def check_document(self, document_path: Path) -> Optional[ValidationReport]:
        """Validate a document against the configured schema, if any"""
        document_path = Path(document_path)
        if not document_path.is_file():
            raise DocumentError(f"unable to locate file '{document_path}'")

        schema_path = self.config.schema_path
        if schema_path is None:
            logger.debug("No schema configured, skipping validation")
            return None

        if not schema_path.is_file():
            if self.config.require_valid_document:
                raise DocumentError(f"unable to locate schema '{schema_path}'")
            logger.warning(f"Schema {schema_path} not found, skipping validation")
            return None

        with self.performance_monitor.start_operation("validate_document"):
            report = validate_document(document_path, schema_path)

        if not report.valid and self.config.require_valid_document:
            raise DocumentError(
                f"'{document_path}' does not match schema '{schema_path}' "
                f"({len(report.errors)} errors)")

        return report

    def digest(self, document_path: Path) -> bytes:
        with self.performance_monitor.start_operation("digest_document"), \
                timed(f"digest of {document_path}"):
            return digest_file(document_path,
                               algorithm=self.config.hash_algorithm,
                               chunk_size=self.config.chunk_size)

    def create_proof(self, document_path: Path) -> Proof:
        """Validate, hash and commit to a document"""
        logger.info("Creating Proof")
        self.check_document(document_path)
        secret = self.digest(document_path)

        with self.performance_monitor.start_operation("generate_proof"):
            proof = self.generator.generate(secret)

        logger.info(f"Created proof {proof.fingerprint()} for {document_path}")
        return proof

    def export_proof(self, proof: Proof, output_path: Optional[Path] = None) -> str:
        """Serialize a proof, writing it to ``output_path`` when given"""
        text = dumps(proof, indent=2)
        if output_path is not None:
            write_proof(proof, Path(output_path))
        return text

    def compare_document(self, document_path: Path, proof_path: Path) -> ComparisonOutcome:
        """Compare a local document against a remote party's proof file"""
        document_path = Path(document_path)
        proof_path = Path(proof_path)
        start_time = time.perf_counter()

        if not proof_path.is_file():
            raise DocumentError(f"unable to locate file '{proof_path}'")

        logger.info("loading intel file")
        self.check_document(document_path)
        secret = self.digest(document_path)

        logger.info("deserializing proof")
        with self.performance_monitor.start_operation("decode_proof"):
            remote = read_proof(proof_path, self.group)

        with self.performance_monitor.start_operation("compare_proof"):
            matched = self.comparator.compare(secret, remote)

        outcome = ComparisonOutcome(
            matched=matched,
            document_path=document_path,
            proof_path=proof_path,
            duration_seconds=time.perf_counter() - start_time
        )

        if matched:
            logger.info("files matched")
        else:
            logger.info("files did not match")

        return outcome

    def benchmark(self, document_path: Path, trials: Optional[int] = None) -> Dict[str, Any]:
        """Time repeated generate/compare rounds over one document's digest"""
        trials = trials or self.config.benchmark_trials
        secret = self.digest(document_path)

        for _ in range(trials):
            with self.performance_monitor.start_operation("benchmark_generate"):
                proof = self.generator.generate(secret)
            with self.performance_monitor.start_operation("benchmark_compare"):
                if not self.comparator.compare(secret, proof):
                    raise RuntimeError("proof did not verify against its own secret")

        summary = self.performance_monitor.get_summary()
        return {
            'group': {
                'generator': self.group.generator,
                'prime_bits': self.group.bit_length,
            },
            'benchmarks': {
                name: data for name, data in summary['operations'].items()
                if name.startswith('benchmark_')
            },
            'trials': trials,
        }
