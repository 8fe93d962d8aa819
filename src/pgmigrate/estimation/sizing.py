"""
Sizing advisor: maps current server resources to an Azure Database for
PostgreSQL Flexible Server tier and vCore count.
"""

import math
import structlog

from pgmigrate.models.migration_models import ServiceTier, SizingRecommendation, WorkloadInput
from pgmigrate.models.validation import ensure_valid_workload

logger = structlog.get_logger(__name__)

STORAGE_BUFFER = 1.2
BACKUP_RATIO = 0.3
BACKUP_RETENTION_DAYS = 7

BURSTABLE_MAX_DB_SIZE_GB = 100
BURSTABLE_MAX_CPU_CORES = 4
BURSTABLE_MAX_VCORES = 2
MIN_VCORES = 2


class SizingAdvisor:
    """Recommends a service tier from the memory density of the workload."""
    
    def __init__(self):
        self.logger = logger.bind(estimator="sizing")
    
    def recommend(self, workload: WorkloadInput) -> SizingRecommendation:
        ensure_valid_workload(workload)
        
        tier = self._select_tier(workload)
        vcores = self._vcores_for(tier, workload.ram_gb)
        
        recommendation = SizingRecommendation(
            tier=tier,
            tier_name=tier.display_name,
            vcores=vcores,
            requested_ram_gb=workload.ram_gb,
            allocated_ram_gb=vcores * tier.ram_per_vcore,
            storage_gb=math.ceil(workload.db_size_gb * STORAGE_BUFFER),
            backup_gb=math.ceil(workload.db_size_gb * BACKUP_RATIO),
            ha_enabled=True,
            backup_retention_days=BACKUP_RETENTION_DAYS,
        )
        
        self.logger.debug(
            "Sizing recommendation computed",
            tier=tier.value,
            vcores=recommendation.vcores,
            allocated_ram_gb=recommendation.allocated_ram_gb,
            storage_gb=recommendation.storage_gb,
        )
        return recommendation
    
    def _select_tier(self, workload: WorkloadInput) -> ServiceTier:
        ram_per_core = workload.ram_per_core
        
        if ram_per_core > ServiceTier.MEMORY_OPTIMIZED.ram_per_vcore:
            return ServiceTier.MEMORY_OPTIMIZED
        if ram_per_core > ServiceTier.GENERAL_PURPOSE.ram_per_vcore:
            return ServiceTier.GENERAL_PURPOSE
        # Small, low-core servers go burstable even at a general purpose RAM ratio
        if workload.db_size_gb < BURSTABLE_MAX_DB_SIZE_GB and workload.cpu_cores <= BURSTABLE_MAX_CPU_CORES:
            return ServiceTier.BURSTABLE
        return ServiceTier.GENERAL_PURPOSE
    
    def _vcores_for(self, tier: ServiceTier, ram_gb: float) -> int:
        needed = math.ceil(ram_gb / tier.ram_per_vcore)
        if tier == ServiceTier.BURSTABLE:
            return min(BURSTABLE_MAX_VCORES, max(1, needed))
        return max(MIN_VCORES, needed)


def recommend(workload: WorkloadInput) -> SizingRecommendation:
    """Recommend an Azure configuration for ``workload``."""
    return SizingAdvisor().recommend(workload)
