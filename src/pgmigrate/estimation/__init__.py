# src/pgmigrate/estimation/__init__.py
"""
Estimation pipeline - sizing, cost and timeline
"""

from .sizing import SizingAdvisor, recommend
from .cost import CostEstimator, estimate_cost, savings_percentage
from .timeline import TimelineEstimator, estimate_timeline
from .proposal_engine import ProposalEngine

__all__ = [
    "SizingAdvisor",
    "CostEstimator",
    "TimelineEstimator",
    "ProposalEngine",
    "recommend",
    "estimate_cost",
    "estimate_timeline",
    "savings_percentage",
]
