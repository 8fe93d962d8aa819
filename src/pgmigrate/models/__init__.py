from .base_models import *
from .migration_models import *
from .validation import *

__all__ = [
    "PlannerBaseModel",
    "ReportBaseModel",
    "ServiceTier",
    "Urgency",
    "MigrationPhase",
    "CostOutcome",
    "TIER_DISPLAY_NAMES",
    "TIER_RAM_PER_VCORE",
    "WorkloadInput",
    "ClientProfile",
    "SizingRecommendation",
    "CostBreakdown",
    "CostFigures",
    "AzureCostFigures",
    "SavingsFigures",
    "CostReport",
    "TimelinePhase",
    "MigrationTimeline",
    "ProposalSummary",
    "MigrationProposal",
    "validate_workload",
    "ensure_valid_workload",
]
