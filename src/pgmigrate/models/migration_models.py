"""
Migration Planner Data Models
Workload inputs and estimator results for PostgreSQL to Azure migrations
"""

from pydantic import Field, field_validator
from typing import List, Optional
from enum import Enum

from .base_models import PlannerBaseModel, ReportBaseModel


class ServiceTier(str, Enum):
    """Azure Database for PostgreSQL service tiers."""
    BURSTABLE = "burstable"
    GENERAL_PURPOSE = "generalPurpose"
    MEMORY_OPTIMIZED = "memoryOptimized"

    @property
    def display_name(self) -> str:
        return TIER_DISPLAY_NAMES[self]

    @property
    def ram_per_vcore(self) -> int:
        return TIER_RAM_PER_VCORE[self]


TIER_DISPLAY_NAMES = {
    ServiceTier.BURSTABLE: "Burstable",
    ServiceTier.GENERAL_PURPOSE: "General Purpose",
    ServiceTier.MEMORY_OPTIMIZED: "Memory Optimized",
}

# GB of RAM provisioned per vCore
TIER_RAM_PER_VCORE = {
    ServiceTier.BURSTABLE: 2,
    ServiceTier.GENERAL_PURPOSE: 4,
    ServiceTier.MEMORY_OPTIMIZED: 8,
}


class Urgency(str, Enum):
    """Requested migration delivery pace."""
    STANDARD = "standard"
    ACCELERATED = "accelerated"
    URGENT = "urgent"


class MigrationPhase(str, Enum):
    """Migration phases, in execution order."""
    ASSESSMENT = "assessment"
    SCHEMA = "schema"
    DATA = "data"
    TESTING = "testing"
    CUTOVER = "cutover"


class CostOutcome(str, Enum):
    """Whether moving to Azure lowers or raises the monthly bill."""
    SAVINGS = "savings"
    INVESTMENT = "investment"


class WorkloadInput(PlannerBaseModel):
    """On-premise PostgreSQL workload to be migrated."""
    
    db_size_gb: float = Field(..., description="Total database size in GB")
    db_count: int = Field(1, description="Number of databases")
    cpu_cores: int = Field(..., description="CPU cores of the current server")
    ram_gb: float = Field(..., description="RAM of the current server in GB")
    storage_type: str = Field("unspecified", description="Current storage type")
    avg_iops: int = Field(0, description="Average IOPS")
    current_monthly_cost: float = Field(0.0, description="Current monthly cost, 0 if not provided")
    region: str = Field("eastus", description="Target Azure region")
    urgency: Urgency = Field(Urgency.STANDARD, description="Migration urgency")

    @field_validator('region', mode='before')
    @classmethod
    def normalize_region(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator('urgency', mode='before')
    @classmethod
    def normalize_urgency(cls, v):
        if v is None or v == "":
            return Urgency.STANDARD
        if isinstance(v, str):
            return Urgency(v.strip().lower())
        return v

    @property
    def ram_per_core(self) -> float:
        return self.ram_gb / self.cpu_cores


class ClientProfile(PlannerBaseModel):
    """Organization the proposal is prepared for."""
    
    company_name: str = "Your Organization"
    industry: Optional[str] = None


class SizingRecommendation(PlannerBaseModel):
    """Recommended Azure Database for PostgreSQL configuration."""
    
    tier: ServiceTier
    tier_name: str
    vcores: int = Field(..., ge=1)
    requested_ram_gb: float = Field(..., description="RAM of the source server")
    allocated_ram_gb: int = Field(..., description="RAM provisioned by the recommended tier")
    storage_gb: int
    backup_gb: int
    ha_enabled: bool = True
    backup_retention_days: int = 7


class CostBreakdown(PlannerBaseModel):
    """Monthly Azure cost split by component."""
    
    compute: float
    storage: float
    backup: float


class CostFigures(PlannerBaseModel):
    """Spend over the reporting horizons."""
    
    monthly: float
    annual: float
    three_year: float


class AzureCostFigures(CostFigures):
    breakdown: CostBreakdown


class SavingsFigures(CostFigures):
    """Current spend minus Azure spend; negative when Azure costs more."""
    
    percentage: float = 0.0


class CostReport(PlannerBaseModel):
    """Current versus Azure cost comparison."""
    
    region: str
    region_multiplier: float
    current: CostFigures
    azure: AzureCostFigures
    savings: SavingsFigures

    @property
    def current_cost_provided(self) -> bool:
        return self.current.monthly > 0


class TimelinePhase(PlannerBaseModel):
    """One sequenced phase of the migration roadmap."""
    
    key: MigrationPhase
    name: str
    weeks: int = Field(..., ge=1)
    description: str
    start_week: int = Field(..., ge=1)
    end_week: int = Field(..., ge=1)


class MigrationTimeline(PlannerBaseModel):
    """Ordered migration roadmap."""
    
    urgency: Urgency
    phases: List[TimelinePhase]
    total_weeks: int
    total_months: int

    def phase(self, key: MigrationPhase) -> TimelinePhase:
        for phase in self.phases:
            if phase.key == key:
                return phase
        raise KeyError(key)


class ProposalSummary(PlannerBaseModel):
    """Executive summary figures."""
    
    cost_outcome: CostOutcome
    monthly_delta: float = Field(..., description="Absolute monthly savings or extra spend")
    savings_percentage: float
    tier_name: str
    vcores: int
    allocated_ram_gb: int
    total_months: int
    headline: str


class MigrationProposal(ReportBaseModel):
    """Complete migration proposal handed to the presentation layer."""
    
    client: ClientProfile
    workload: WorkloadInput
    region_name: str
    recommendation: SizingRecommendation
    costs: CostReport
    timeline: MigrationTimeline
    summary: ProposalSummary
