import math

import pytest
from pydantic import ValidationError

from pgmigrate.core.exceptions import InvalidInputException, MigrationPlannerException
from pgmigrate.models import Urgency, WorkloadInput, ensure_valid_workload, validate_workload


def test_valid_workload_has_no_errors(make_workload):
    workload = make_workload()

    assert validate_workload(workload) == []
    assert ensure_valid_workload(workload) is workload


def test_all_violations_are_reported(make_workload):
    errors = validate_workload(make_workload(cpu_cores=0, db_count=0, db_size_gb=-1, ram_gb=-2))

    assert errors == [
        "cpu_cores: at least one CPU core is required",
        "db_count: at least one database is required",
        "db_size_gb: cannot be negative",
        "ram_gb: cannot be negative",
    ]


def test_first_violation_is_raised(make_workload):
    with pytest.raises(InvalidInputException) as exc_info:
        ensure_valid_workload(make_workload(cpu_cores=-1, ram_gb=-2))

    error = exc_info.value
    assert error.field == "cpu_cores"
    assert error.value == -1
    assert error.details == {"field": "cpu_cores", "value": -1}
    assert "cpu_cores" in str(error)
    assert isinstance(error, MigrationPlannerException)


@pytest.mark.parametrize("value", [math.inf, math.nan])
def test_non_finite_sizes_are_rejected(make_workload, value):
    with pytest.raises(InvalidInputException, match="finite"):
        ensure_valid_workload(make_workload(ram_gb=value))


@pytest.mark.parametrize("field,value", [
    ("db_size_gb", 1.7e308),
    ("ram_gb", 1.7e308),
    ("current_monthly_cost", 1.7e308),
    ("cpu_cores", 10 ** 16),
    ("db_count", 10 ** 16),
    ("avg_iops", 10 ** 16),
])
def test_oversized_values_are_rejected(make_workload, field, value):
    with pytest.raises(InvalidInputException, match="cannot exceed") as exc_info:
        ensure_valid_workload(make_workload(**{field: value}))

    assert exc_info.value.details["field"] == field


def test_region_is_normalized(make_workload):
    assert make_workload(region="  WestEurope ").region == "westeurope"


@pytest.mark.parametrize("value", [None, ""])
def test_missing_urgency_defaults_to_standard(make_workload, value):
    assert make_workload(urgency=value).urgency == Urgency.STANDARD


def test_urgency_is_case_insensitive(make_workload):
    assert make_workload(urgency="URGENT").urgency == Urgency.URGENT


def test_unknown_urgency_is_a_type_error(make_workload):
    with pytest.raises(ValidationError):
        make_workload(urgency="asap")


def test_passthrough_fields_have_defaults():
    workload = WorkloadInput(db_size_gb=10, cpu_cores=1, ram_gb=2)

    assert workload.storage_type == "unspecified"
    assert workload.avg_iops == 0
    assert workload.db_count == 1
    assert workload.current_monthly_cost == 0
    assert workload.region == "eastus"


def test_workload_is_immutable(make_workload):
    workload = make_workload()

    with pytest.raises(ValidationError):
        workload.ram_gb = 64
