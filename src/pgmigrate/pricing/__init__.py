from .catalog import (
    PricingCatalog,
    TierPricing,
    DEFAULT_TIER_PRICING,
    DEFAULT_REGION_MULTIPLIERS,
    REGION_DISPLAY_NAMES,
    region_display_name,
)

__all__ = [
    "PricingCatalog",
    "TierPricing",
    "DEFAULT_TIER_PRICING",
    "DEFAULT_REGION_MULTIPLIERS",
    "REGION_DISPLAY_NAMES",
    "region_display_name",
]
