"""Base models for common migration planner data structures."""

from pydantic import BaseModel, ConfigDict, Field
from datetime import datetime, timezone
import uuid


class PlannerBaseModel(BaseModel):
    """Base model for all estimator inputs and results; immutable once built."""
    
    model_config = ConfigDict(frozen=True)


class ReportBaseModel(PlannerBaseModel):
    """Base model for generated reports."""
    
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    generated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
