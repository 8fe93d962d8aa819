"""
Cost estimator: prices a sizing recommendation in the target region and
compares it with the current spend over one month, one year and three years.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional
import structlog

from pgmigrate.models.migration_models import (
    AzureCostFigures,
    CostBreakdown,
    CostFigures,
    CostReport,
    SavingsFigures,
    SizingRecommendation,
    WorkloadInput,
)
from pgmigrate.models.validation import ensure_valid_workload
from pgmigrate.pricing.catalog import PricingCatalog

logger = structlog.get_logger(__name__)

MONTHS_PER_YEAR = 12
TCO_YEARS = 3


def savings_percentage(monthly_savings: float, current_monthly_cost: float) -> float:
    """Savings as a percentage of current spend, rounded half-up to one decimal.

    Returns exactly 0.0 when no current cost was provided.
    """
    if current_monthly_cost <= 0:
        return 0.0
    percentage = Decimal(monthly_savings / current_monthly_cost * 100)
    return float(percentage.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)) + 0.0


class CostEstimator:
    """Monthly, annual and 3-year TCO comparison against the current spend."""
    
    def __init__(self, catalog: Optional[PricingCatalog] = None):
        self.catalog = catalog or PricingCatalog.default()
        self.logger = logger.bind(estimator="cost", catalog=self.catalog.source)
    
    def estimate(self, workload: WorkloadInput, recommendation: SizingRecommendation) -> CostReport:
        ensure_valid_workload(workload)
        
        multiplier = self.catalog.region_multiplier(workload.region)
        pricing = self.catalog.tier_pricing(recommendation.tier)
        
        breakdown = CostBreakdown(
            compute=pricing.vcore_price * recommendation.vcores * multiplier,
            storage=pricing.storage_price_per_gb * recommendation.storage_gb * multiplier,
            backup=pricing.backup_price_per_gb * recommendation.backup_gb * multiplier,
        )
        azure_monthly = breakdown.compute + breakdown.storage + breakdown.backup
        azure_annual = azure_monthly * MONTHS_PER_YEAR
        azure = AzureCostFigures(
            monthly=azure_monthly,
            annual=azure_annual,
            three_year=azure_annual * TCO_YEARS,
            breakdown=breakdown,
        )
        
        current_monthly = workload.current_monthly_cost
        current_annual = current_monthly * MONTHS_PER_YEAR
        current = CostFigures(
            monthly=current_monthly,
            annual=current_annual,
            three_year=current_annual * TCO_YEARS,
        )
        
        monthly_savings = current_monthly - azure_monthly
        annual_savings = monthly_savings * MONTHS_PER_YEAR
        savings = SavingsFigures(
            monthly=monthly_savings,
            annual=annual_savings,
            three_year=annual_savings * TCO_YEARS,
            percentage=savings_percentage(monthly_savings, current_monthly),
        )
        
        if workload.region not in self.catalog.regions:
            self.logger.info("Unknown region, using default multiplier",
                             region=workload.region, multiplier=multiplier)
        
        self.logger.debug(
            "Cost estimate computed",
            tier=recommendation.tier.value,
            region=workload.region,
            azure_monthly=round(azure_monthly, 2),
            monthly_savings=round(monthly_savings, 2),
        )
        
        return CostReport(
            region=workload.region,
            region_multiplier=multiplier,
            current=current,
            azure=azure,
            savings=savings,
        )


def estimate_cost(workload: WorkloadInput,
                  recommendation: SizingRecommendation,
                  catalog: Optional[PricingCatalog] = None) -> CostReport:
    """Price ``recommendation`` for ``workload`` and compare with its current spend."""
    return CostEstimator(catalog).estimate(workload, recommendation)
