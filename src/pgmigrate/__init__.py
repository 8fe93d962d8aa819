"""PostgreSQL to Azure migration planner."""

__version__ = "0.1.0"
