"""Tests configuration and fixtures."""

import random
from datetime import datetime
from typing import Any, Callable
from uuid import uuid4

import pytest

from serene.config import Settings
from serene.domain.enums.session_stage import AnxietyStage
from serene.domain.models.conversation import ConversationMessage
from serene.domain.models.session import AnxietySession
from serene.services.session.intervention_selector import InterventionSelector
from serene.services.session.stage_machine import StageMachine


FIXED_NOW = datetime(2024, 5, 1, 12, 30, 0)


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with a fixed intervention seed."""
    return Settings(
        _env_file=None,
        env="development",
        metrics_enabled=False,
        analysis={"intervention_seed": 1234, "default_language": "en"},
    )


@pytest.fixture
def seeded_rng() -> random.Random:
    """Create a seeded random source."""
    return random.Random(1234)


@pytest.fixture
def selector(seeded_rng: random.Random) -> InterventionSelector:
    """Create intervention selector with seeded randomness."""
    return InterventionSelector(rng=seeded_rng)


@pytest.fixture
def stage_machine(selector: InterventionSelector) -> StageMachine:
    """Stage machine with seeded selection and a fixed clock."""
    return StageMachine(selector=selector, clock=lambda: FIXED_NOW)


@pytest.fixture
def session_factory() -> Callable[..., AnxietySession]:
    """Build sessions at a given stage."""
    def _make(stage: AnxietyStage = AnxietyStage.IDLE, **kwargs: Any) -> AnxietySession:
        kwargs.setdefault("user_id", uuid4())
        return AnxietySession(stage=stage, **kwargs)
    return _make


@pytest.fixture
def make_history() -> Callable[..., list[ConversationMessage]]:
    """Build a history from (text, is_user) pairs."""
    def _make(*turns: tuple[str, bool]) -> list[ConversationMessage]:
        return [ConversationMessage(text=text, is_user=is_user) for text, is_user in turns]
    return _make


@pytest.fixture
def fixed_now() -> datetime:
    """Timestamp returned by the stage machine clock."""
    return FIXED_NOW
