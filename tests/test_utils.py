import logging

import pytest

from pgmigrate.core.utils import format_currency, safe_get, setup_logging


@pytest.mark.parametrize("amount,currency,expected", [
    (673.09, "USD", "$673"),
    (1234.6, "USD", "$1,235"),
    (-573.09, "USD", "-$573"),
    (-0.4, "USD", "$0"),
    (2.5, "USD", "$3"),
    (-2.5, "USD", "-$3"),
    (1234.5, "USD", "$1,235"),
    (1000, "eur", "€1,000"),
    (1000, "CHF", "CHF 1,000"),
])
def test_format_currency(amount, currency, expected):
    assert format_currency(amount, currency) == expected


def test_safe_get():
    data = {"workload": {"db_size_gb": 10}, "client": None}

    assert safe_get(data, "workload.db_size_gb") == 10
    assert safe_get(data, "workload.missing", "x") == "x"
    assert safe_get(data, "client.company_name") is None


def test_setup_logging_sets_level():
    setup_logging(log_level="DEBUG")
    assert logging.getLogger().level == logging.DEBUG

    setup_logging(log_level="WARNING", json_logs=True)
    assert logging.getLogger().level == logging.WARNING


def test_setup_logging_from_yaml_config(tmp_path):
    config_path = tmp_path / "logging.yaml"
    config_path.write_text(
        "version: 1\n"
        "disable_existing_loggers: false\n"
        "root:\n"
        "  level: ERROR\n"
    )

    setup_logging(config_path=config_path)

    assert logging.getLogger().level == logging.ERROR
