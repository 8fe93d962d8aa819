from .exceptions import *
from .utils import *

__all__ = [
    "MigrationPlannerException",
    "InvalidInputException",
    "ConfigurationException",
    "setup_logging",
    "safe_get",
    "format_currency",
]
