import pytest

from pgmigrate.models import WorkloadInput


@pytest.fixture
def make_workload():
    def _make(**overrides):
        values = {
            "db_size_gb": 500,
            "db_count": 5,
            "cpu_cores": 4,
            "ram_gb": 32,
            "current_monthly_cost": 0,
            "region": "eastus",
            "urgency": "standard",
        }
        values.update(overrides)
        return WorkloadInput(**values)
    return _make


@pytest.fixture
def general_purpose_workload(make_workload):
    """500 GB on 4 cores / 32 GB: sized to 8 General Purpose vCores."""
    return make_workload(current_monthly_cost=1000)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("ESTIMATOR_DEFAULT_REGION", "ESTIMATOR_PRICING_FILE", "ESTIMATOR_CURRENCY",
                 "LOG_LEVEL", "LOG_FORMAT", "DEBUG"):
        monkeypatch.delenv(name, raising=False)
