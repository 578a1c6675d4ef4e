"""Tests for logging setup, performance monitoring and reporting helpers."""

import json
import logging

import pytest

from utils import (
    PerformanceMonitor,
    create_performance_report,
    format_duration,
    get_system_info,
    save_results,
    setup_logging,
)


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "logs" / "run.log"
    setup_logging("DEBUG", log_file=log_file)

    logging.getLogger("intel.test").debug("hello from the test")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert "hello from the test" in log_file.read_text()
    assert logging.getLogger().level == logging.DEBUG


def test_setup_logging_uses_log_dir(tmp_path):
    setup_logging("INFO", log_dir=tmp_path / "logdir")

    assert list((tmp_path / "logdir").glob("intel_exchange_*.log"))


def test_setup_logging_rejects_unknown_level(tmp_path):
    with pytest.raises(ValueError):
        setup_logging("CHATTY", log_file=tmp_path / "x.log")


def test_monitor_summary_groups_operations():
    monitor = PerformanceMonitor()
    for _ in range(3):
        with monitor.start_operation("generate"):
            pow(2, 2**64, 2**127 - 1)
    with monitor.start_operation("compare"):
        pass

    summary = monitor.get_summary()

    assert summary['total_operations'] == 4
    assert summary['operations']['generate']['count'] == 3
    assert summary['operations']['compare']['count'] == 1
    assert summary['operations']['compare']['std_duration'] == 0.0
    assert summary['total_duration'] >= 0


def test_monitor_records_failed_operations():
    monitor = PerformanceMonitor()
    with pytest.raises(RuntimeError):
        with monitor.start_operation("boom"):
            raise RuntimeError("boom")

    assert monitor.metrics[0].additional_data == {'exception': True}


def test_empty_monitor():
    monitor = PerformanceMonitor()

    assert monitor.get_summary() == {'total_operations': 0, 'total_duration': 0.0, 'operations': {}}
    assert "No performance data available." in create_performance_report(monitor)


def test_performance_report_and_metrics_file(tmp_path):
    monitor = PerformanceMonitor()
    with monitor.start_operation("decode_proof"):
        pass

    assert "DECODE_PROOF:" in create_performance_report(monitor)

    path = tmp_path / "metrics.json"
    monitor.save_metrics(path)
    data = json.loads(path.read_text())
    assert data['summary']['operations']['decode_proof']['count'] == 1


def test_save_results_writes_summary(tmp_path):
    path = tmp_path / "results" / "bench.json"
    save_results({'group': {'generator': 2, 'prime_bits': 3072},
                  'raw': b"\x01\x02", 'where': tmp_path}, path)

    data = json.loads(path.read_text())
    assert data['data']['raw'] == "0102"
    assert data['data']['where'] == str(tmp_path)

    summary = (tmp_path / "results" / "bench_summary.txt").read_text()
    assert "prime_bits: 3072" in summary


def test_system_info_has_basics():
    info = get_system_info()
    assert 'python_version' in info
    assert 'platform' in info


@pytest.mark.parametrize("seconds, expected", [
    (0.0015, "1.5ms"),
    (2.5, "2.50s"),
    (125, "2m 5.0s"),
    (3725, "1h 2m 5.0s"),
])
def test_format_duration(seconds, expected):
    assert format_duration(seconds) == expected
