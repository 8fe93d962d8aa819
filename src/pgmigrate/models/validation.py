"""Validation utilities for workload inputs."""

import math
from typing import Any, List, Tuple
import structlog

from pgmigrate.core.exceptions import InvalidInputException
from .migration_models import WorkloadInput

logger = structlog.get_logger(__name__)

NON_NEGATIVE_FIELDS = ("db_size_gb", "ram_gb", "current_monthly_cost", "avg_iops")

# Keeps derived sizes and 3-year totals finite
MAX_INPUT_VALUE = 1e15


def _collect_violations(workload: WorkloadInput) -> List[Tuple[str, Any, str]]:
    violations = []
    
    if workload.cpu_cores < 1:
        violations.append(("cpu_cores", workload.cpu_cores, "at least one CPU core is required"))
    elif workload.cpu_cores > MAX_INPUT_VALUE:
        violations.append(("cpu_cores", workload.cpu_cores, f"cannot exceed {MAX_INPUT_VALUE:g}"))
    
    if workload.db_count < 1:
        violations.append(("db_count", workload.db_count, "at least one database is required"))
    elif workload.db_count > MAX_INPUT_VALUE:
        violations.append(("db_count", workload.db_count, f"cannot exceed {MAX_INPUT_VALUE:g}"))
    
    for field in NON_NEGATIVE_FIELDS:
        value = getattr(workload, field)
        if isinstance(value, float) and not math.isfinite(value):
            violations.append((field, value, "must be a finite number"))
        elif value < 0:
            violations.append((field, value, "cannot be negative"))
        elif value > MAX_INPUT_VALUE:
            violations.append((field, value, f"cannot exceed {MAX_INPUT_VALUE:g}"))
    
    return violations


def validate_workload(workload: WorkloadInput) -> List[str]:
    """Validate a workload and return validation errors."""
    return [f"{field}: {message}" for field, _, message in _collect_violations(workload)]


def ensure_valid_workload(workload: WorkloadInput) -> WorkloadInput:
    """Raise InvalidInputException for the first violation, else return the workload."""
    violations = _collect_violations(workload)
    if violations:
        field, value, message = violations[0]
        logger.warning("Rejected workload", field=field, value=value, errors=len(violations))
        raise InvalidInputException(field, value, message)
    return workload
