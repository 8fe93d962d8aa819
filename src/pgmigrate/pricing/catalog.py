"""
Static Azure Database for PostgreSQL pricing snapshot.

Prices are USD per month, East US list prices. Region multipliers scale every
cost component uniformly. A YAML file can override individual tiers or regions;
anything it leaves out keeps the snapshot value.
"""

import math
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

import structlog
import yaml
from pydantic import Field, ValidationError

from pgmigrate.core.exceptions import ConfigurationException
from pgmigrate.models.base_models import PlannerBaseModel
from pgmigrate.models.migration_models import ServiceTier

logger = structlog.get_logger(__name__)

DEFAULT_REGION_MULTIPLIER = 1.0


class TierPricing(PlannerBaseModel):
    """Unit prices for one service tier."""
    
    vcore_price: float = Field(..., ge=0, allow_inf_nan=False, description="Price per vCore per month")
    storage_price_per_gb: float = Field(..., ge=0, allow_inf_nan=False, description="Storage price per GB per month")
    backup_price_per_gb: float = Field(..., ge=0, allow_inf_nan=False, description="Backup price per GB per month")


DEFAULT_TIER_PRICING = MappingProxyType({
    ServiceTier.GENERAL_PURPOSE: TierPricing(vcore_price=73.73, storage_price_per_gb=0.115, backup_price_per_gb=0.095),
    ServiceTier.MEMORY_OPTIMIZED: TierPricing(vcore_price=147.46, storage_price_per_gb=0.115, backup_price_per_gb=0.095),
    ServiceTier.BURSTABLE: TierPricing(vcore_price=24.82, storage_price_per_gb=0.115, backup_price_per_gb=0.095),
})

DEFAULT_REGION_MULTIPLIERS = MappingProxyType({
    "eastus": 1.0,
    "eastus2": 1.0,
    "westus": 1.0,
    "westus2": 1.0,
    "centralus": 1.0,
    "northeurope": 1.02,
    "westeurope": 1.02,
    "southeastasia": 1.08,
    "eastasia": 1.08,
})

REGION_DISPLAY_NAMES = MappingProxyType({
    "eastus": "East US",
    "eastus2": "East US 2",
    "westus": "West US",
    "westus2": "West US 2",
    "centralus": "Central US",
    "northeurope": "North Europe",
    "westeurope": "West Europe",
    "southeastasia": "Southeast Asia",
    "eastasia": "East Asia",
})


def region_display_name(region: str) -> str:
    return REGION_DISPLAY_NAMES.get(region, region)


class PricingCatalog:
    """Read-only tier prices and region multipliers."""
    
    def __init__(self,
                 tiers: Optional[Mapping[ServiceTier, TierPricing]] = None,
                 region_multipliers: Optional[Mapping[str, float]] = None,
                 source: str = "built-in"):
        self._tiers = MappingProxyType(dict(tiers if tiers is not None else DEFAULT_TIER_PRICING))
        self._region_multipliers = MappingProxyType(
            dict(region_multipliers if region_multipliers is not None else DEFAULT_REGION_MULTIPLIERS)
        )
        self.source = source
        self.logger = logger.bind(catalog=source)
    
    @classmethod
    def default(cls) -> "PricingCatalog":
        return cls()
    
    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "PricingCatalog":
        """Load a catalog from a YAML override file."""
        path = Path(path)
        if not path.exists():
            raise ConfigurationException(f"Pricing file not found: {path}")
        
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationException(f"Invalid YAML in pricing file {path}: {e}")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationException(f"Cannot read pricing file {path}: {e}")
        
        if not isinstance(data, dict):
            raise ConfigurationException(f"Pricing file {path} must contain a mapping")
        
        return cls.from_dict(data, source=str(path))
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any], source: str = "dict") -> "PricingCatalog":
        """Build a catalog from snapshot values overlaid with ``data``."""
        for section in ("tiers", "region_multipliers"):
            if not isinstance(data.get(section) or {}, dict):
                raise ConfigurationException(f"'{section}' in pricing data must be a mapping", {"source": source})
        
        tiers = dict(DEFAULT_TIER_PRICING)
        for tier_key, prices in (data.get("tiers") or {}).items():
            try:
                tier = ServiceTier(tier_key)
            except ValueError:
                raise ConfigurationException(
                    f"Unknown service tier in pricing data: {tier_key}",
                    {"source": source, "valid_tiers": [t.value for t in ServiceTier]}
                )
            
            try:
                merged = {**tiers[tier].model_dump(), **(prices or {})}
                tiers[tier] = TierPricing(**merged)
            except (TypeError, ValidationError) as e:
                raise ConfigurationException(f"Invalid pricing for tier {tier_key}: {e}", {"source": source})
        
        regions = dict(DEFAULT_REGION_MULTIPLIERS)
        for region, multiplier in (data.get("region_multipliers") or {}).items():
            if not isinstance(multiplier, (int, float)) or isinstance(multiplier, bool) \
                    or not math.isfinite(multiplier) or multiplier <= 0:
                raise ConfigurationException(
                    f"Region multiplier for {region} must be a positive number",
                    {"source": source, "value": multiplier}
                )
            regions[str(region).lower()] = float(multiplier)
        
        logger.info("Loaded pricing catalog", source=source, tiers=len(tiers), regions=len(regions))
        return cls(tiers=tiers, region_multipliers=regions, source=source)
    
    @property
    def regions(self) -> Mapping[str, float]:
        return self._region_multipliers
    
    def tier_pricing(self, tier: ServiceTier) -> TierPricing:
        pricing = self._tiers.get(tier)
        if pricing is None:
            self.logger.warning("No pricing for tier, using built-in snapshot", tier=tier.value)
            pricing = DEFAULT_TIER_PRICING[tier]
        return pricing
    
    def region_multiplier(self, region: str) -> float:
        return self._region_multipliers.get(region, DEFAULT_REGION_MULTIPLIER)
