"""
Intervention Selector

Maps a session's trigger category and self-rated anxiety level to
one technique from the therapist-approved catalog.

Selection is intentionally random among the candidate set, so the
same (category, level) pair may yield different techniques across
sessions. Inject a seeded random.Random for reproducible runs.

CLINICAL_REVIEW_REQUIRED: Severity-to-technique preferences must be
reviewed by a licensed clinician.
"""

import random
from typing import Optional, Sequence

from serene.config.logging_config import get_logger
from serene.domain.catalog.interventions import (
    DEFAULT_INTERVENTION_ID,
    INTERVENTIONS,
    get_intervention,
)
from serene.domain.enums.intervention_type import InterventionType
from serene.domain.models.intervention import Intervention

logger = get_logger(__name__)


class InterventionSelector:
    """
    Picks a technique for (trigger category, anxiety level).

    Policy:
    1. Techniques tagged with the category or "general"
    2. Narrowed by severity preference when that leaves any
    3. Without category candidates, severity preference over the
       full catalog, then the full catalog
    4. Uniform pick; "box_breathing" when everything is empty
    """

    HIGH_SEVERITY = 7
    MODERATE_SEVERITY = 4

    HIGH_SEVERITY_TYPES: frozenset[InterventionType] = frozenset({
        InterventionType.GROUNDING,
        InterventionType.BREATHING,
    })
    MODERATE_SEVERITY_TYPES: frozenset[InterventionType] = frozenset({
        InterventionType.MINDFULNESS,
    })
    LOW_SEVERITY_TYPES: frozenset[InterventionType] = frozenset({
        InterventionType.COGNITIVE,
        InterventionType.PHYSICAL,
    })

    def __init__(
        self,
        catalog: Sequence[Intervention] = INTERVENTIONS,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize selector.

        Args:
            catalog: Techniques to choose from
            rng: Random source (a fresh unseeded one when omitted)
        """
        self._catalog = tuple(catalog)
        self._rng = rng or random.Random()

    def candidates(
        self,
        trigger_category: Optional[str],
        anxiety_level: int,
    ) -> list[Intervention]:
        """
        Full candidate set for a selection, in catalog order.

        Args:
            trigger_category: Session trigger category id (may be None)
            anxiety_level: Self-rated level 0-10

        Returns:
            Candidates (empty only for an empty catalog)
        """
        by_category = (
            [i for i in self._catalog if i.applies_to(trigger_category)]
            if trigger_category
            else []
        )
        if by_category:
            return self._prefer_by_severity(by_category, anxiety_level)

        preferred = self._prefer_by_severity(list(self._catalog), anxiety_level)
        return preferred or list(self._catalog)

    def select(
        self,
        trigger_category: Optional[str],
        anxiety_level: int,
    ) -> Intervention:
        """
        Select one technique.

        Args:
            trigger_category: Session trigger category id (may be None)
            anxiety_level: Self-rated level 0-10

        Returns:
            Selected intervention
        """
        pool = self.candidates(trigger_category, anxiety_level)
        if not pool:
            logger.warning("No intervention candidates, using default")
            return get_intervention(DEFAULT_INTERVENTION_ID)

        selected = self._rng.choice(pool)
        logger.debug(
            "Intervention selected",
            trigger_category=trigger_category,
            anxiety_level=anxiety_level,
            intervention=selected.id,
            candidates=len(pool),
        )
        return selected

    def _prefer_by_severity(
        self,
        pool: list[Intervention],
        anxiety_level: int,
    ) -> list[Intervention]:
        """Narrow a pool to the severity-preferred types when any remain."""
        if anxiety_level >= self.HIGH_SEVERITY:
            preferred = self.HIGH_SEVERITY_TYPES
        elif anxiety_level >= self.MODERATE_SEVERITY:
            preferred = self.MODERATE_SEVERITY_TYPES
        else:
            preferred = self.LOW_SEVERITY_TYPES

        narrowed = [i for i in pool if i.type in preferred]
        return narrowed or pool
