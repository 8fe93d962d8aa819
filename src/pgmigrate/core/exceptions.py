"""Custom exceptions for the migration planner."""

from typing import Optional, Dict, Any


class MigrationPlannerException(Exception):
    """Base exception for the migration planner."""
    
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class InvalidInputException(MigrationPlannerException):
    """Raised when a workload description cannot be estimated."""
    
    def __init__(self, field: str, value: Any, message: str):
        self.field = field
        self.value = value
        super().__init__(f"Invalid input for {field}: {message}", {"field": field, "value": value})


class ConfigurationException(MigrationPlannerException):
    """Raised when configuration or a pricing file is invalid."""
    pass
