# src/pgmigrate/estimation/proposal_engine.py
"""
Proposal Engine - runs sizing, cost and timeline estimation for one workload
and assembles the migration proposal handed to the presentation layer
"""

from typing import Any, Dict, Optional
import structlog

from pgmigrate.core.utils import format_currency
from pgmigrate.estimation.cost import CostEstimator
from pgmigrate.estimation.sizing import SizingAdvisor
from pgmigrate.estimation.timeline import TimelineEstimator
from pgmigrate.models.migration_models import (
    ClientProfile,
    CostOutcome,
    CostReport,
    MigrationProposal,
    MigrationTimeline,
    ProposalSummary,
    SizingRecommendation,
    WorkloadInput,
)
from pgmigrate.pricing.catalog import PricingCatalog, region_display_name

logger = structlog.get_logger(__name__)

PROPOSAL_VERSION = "1.0.0"


class ProposalEngine:
    """
    Migration proposal generator.
    Sizing feeds cost estimation; the timeline only depends on the workload.
    """
    
    def __init__(self, catalog: Optional[PricingCatalog] = None, currency: str = "USD"):
        self.catalog = catalog or PricingCatalog.default()
        self.currency = currency
        self.logger = logger.bind(engine="proposal")
        
        self.sizing_advisor = SizingAdvisor()
        self.cost_estimator = CostEstimator(self.catalog)
        self.timeline_estimator = TimelineEstimator()
    
    def generate(self, workload: WorkloadInput, client: Optional[ClientProfile] = None) -> MigrationProposal:
        """Generate the full proposal for ``workload``."""
        client = client or ClientProfile()
        self.logger.info("Generating migration proposal", company=client.company_name, region=workload.region)
        
        recommendation = self.sizing_advisor.recommend(workload)
        costs = self.cost_estimator.estimate(workload, recommendation)
        timeline = self.timeline_estimator.estimate(workload)
        
        proposal = MigrationProposal(
            client=client,
            workload=workload,
            region_name=region_display_name(workload.region),
            recommendation=recommendation,
            costs=costs,
            timeline=timeline,
            summary=self._build_summary(recommendation, costs, timeline),
        )
        
        self.logger.info(
            "Migration proposal generated",
            proposal_id=proposal.id,
            tier=recommendation.tier.value,
            azure_monthly=round(costs.azure.monthly, 2),
            cost_outcome=proposal.summary.cost_outcome.value,
            total_months=timeline.total_months,
        )
        return proposal
    
    def _build_summary(self, recommendation: SizingRecommendation,
                       costs: CostReport, timeline: MigrationTimeline) -> ProposalSummary:
        monthly_savings = costs.savings.monthly
        monthly_delta = abs(monthly_savings)
        
        if monthly_savings > 0:
            outcome = CostOutcome.SAVINGS
            savings_text = (f"reduce costs by {costs.savings.percentage:.1f}% "
                            f"({format_currency(monthly_delta, self.currency)}/month)")
        else:
            outcome = CostOutcome.INVESTMENT
            savings_text = f"invest {format_currency(monthly_delta, self.currency)}/month for enhanced capabilities"
        
        headline = (
            f"Migrating to Azure Database for PostgreSQL {recommendation.tier_name} "
            f"({recommendation.vcores} vCores, {recommendation.allocated_ram_gb}GB RAM) will {savings_text}. "
            f"The estimated migration timeline is {timeline.total_months} months."
        )
        
        return ProposalSummary(
            cost_outcome=outcome,
            monthly_delta=monthly_delta,
            savings_percentage=costs.savings.percentage,
            tier_name=recommendation.tier_name,
            vcores=recommendation.vcores,
            allocated_ram_gb=recommendation.allocated_ram_gb,
            total_months=timeline.total_months,
            headline=headline,
        )
    
    def export_proposal_to_dict(self, proposal: MigrationProposal) -> Dict[str, Any]:
        """Export migration proposal to a JSON-ready dictionary"""
        
        return {
            "migration_proposal": {
                "report_metadata": {
                    "proposal_id": proposal.id,
                    "generated_at": proposal.generated_at.isoformat(),
                    "pricing_source": self.catalog.source,
                    "currency": self.currency,
                    "proposal_version": PROPOSAL_VERSION,
                },
                "client": proposal.client.model_dump(mode="json"),
                "workload": proposal.workload.model_dump(mode="json"),
                "region_name": proposal.region_name,
                "executive_summary": proposal.summary.model_dump(mode="json"),
                "recommendation": proposal.recommendation.model_dump(mode="json"),
                "costs": {
                    **proposal.costs.model_dump(mode="json"),
                    "current_cost_provided": proposal.costs.current_cost_provided,
                },
                "timeline": proposal.timeline.model_dump(mode="json"),
            }
        }
