"""Static catalogs: session trigger categories and interventions."""

from serene.domain.catalog.trigger_categories import (
    TRIGGER_CATEGORIES,
    TRIGGER_CATEGORY_IDS,
    get_trigger_category,
)
from serene.domain.catalog.interventions import (
    INTERVENTIONS,
    DEFAULT_INTERVENTION_ID,
    get_intervention,
    interventions_by_type,
)

__all__ = [
    "TRIGGER_CATEGORIES",
    "TRIGGER_CATEGORY_IDS",
    "get_trigger_category",
    "INTERVENTIONS",
    "DEFAULT_INTERVENTION_ID",
    "get_intervention",
    "interventions_by_type",
]
