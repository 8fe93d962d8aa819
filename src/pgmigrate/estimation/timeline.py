"""
Timeline estimator: builds the phased migration roadmap.
"""

import math
from typing import Dict, List
import structlog

from pgmigrate.models.migration_models import (
    MigrationPhase,
    MigrationTimeline,
    TimelinePhase,
    Urgency,
    WorkloadInput,
)
from pgmigrate.models.validation import ensure_valid_workload

logger = structlog.get_logger(__name__)

WEEKS_PER_MONTH = 4

LARGE_DATABASE_GB = 1000
MANY_DATABASES = 10

# Declaration order is execution order
BASE_PHASE_WEEKS = {
    MigrationPhase.ASSESSMENT: 2,
    MigrationPhase.SCHEMA: 2,
    MigrationPhase.DATA: 4,
    MigrationPhase.TESTING: 3,
    MigrationPhase.CUTOVER: 1,
}

PHASE_DISPLAY_NAMES = {
    MigrationPhase.ASSESSMENT: "Assessment & Planning",
    MigrationPhase.SCHEMA: "Schema Migration",
    MigrationPhase.DATA: "Data Migration",
    MigrationPhase.TESTING: "Testing & Validation",
    MigrationPhase.CUTOVER: "Cutover & Go-Live",
}

PHASE_DESCRIPTIONS = {
    MigrationPhase.ASSESSMENT: "Infrastructure assessment, dependency mapping, and migration planning",
    MigrationPhase.SCHEMA: "Schema migration, stored procedures, and database objects conversion",
    MigrationPhase.DATA: "Data migration using Azure Database Migration Service",
    MigrationPhase.TESTING: "Performance testing, validation, and optimization",
    MigrationPhase.CUTOVER: "Final sync, cutover execution, and go-live",
}

URGENCY_FACTORS = {
    Urgency.STANDARD: 1.0,
    Urgency.ACCELERATED: 0.7,
    Urgency.URGENT: 0.5,
}


class TimelineEstimator:
    """Phase durations from database size, database count and urgency."""
    
    def __init__(self):
        self.logger = logger.bind(estimator="timeline")
    
    def estimate(self, workload: WorkloadInput) -> MigrationTimeline:
        ensure_valid_workload(workload)
        
        weeks = self._phase_weeks(workload)
        phases = self._sequence(weeks)
        total_weeks = sum(weeks.values())
        
        timeline = MigrationTimeline(
            urgency=workload.urgency,
            phases=phases,
            total_weeks=total_weeks,
            total_months=math.ceil(total_weeks / WEEKS_PER_MONTH),
        )
        
        self.logger.debug(
            "Migration timeline computed",
            urgency=workload.urgency.value,
            total_weeks=timeline.total_weeks,
            total_months=timeline.total_months,
        )
        return timeline
    
    def _phase_weeks(self, workload: WorkloadInput) -> Dict[MigrationPhase, int]:
        weeks = dict(BASE_PHASE_WEEKS)
        
        if workload.db_size_gb > LARGE_DATABASE_GB:
            weeks[MigrationPhase.DATA] += 2
            weeks[MigrationPhase.TESTING] += 1
        
        if workload.db_count > MANY_DATABASES:
            weeks[MigrationPhase.SCHEMA] += 1
            weeks[MigrationPhase.DATA] += 1
        
        factor = URGENCY_FACTORS.get(workload.urgency, 1.0)
        # ceil keeps every phase at one week or more
        return {phase: math.ceil(count * factor) for phase, count in weeks.items()}
    
    def _sequence(self, weeks: Dict[MigrationPhase, int]) -> List[TimelinePhase]:
        phases = []
        elapsed = 0
        for key, duration in weeks.items():
            start_week = elapsed + 1
            elapsed += duration
            phases.append(TimelinePhase(
                key=key,
                name=PHASE_DISPLAY_NAMES[key],
                weeks=duration,
                description=PHASE_DESCRIPTIONS[key],
                start_week=start_week,
                end_week=elapsed,
            ))
        return phases


def estimate_timeline(workload: WorkloadInput) -> MigrationTimeline:
    """Build the phased migration roadmap for ``workload``."""
    return TimelineEstimator().estimate(workload)
