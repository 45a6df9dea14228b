from __future__ import annotations

import random

import pytest

from escape_room.constants.quiz_constants import LevelConfig
from escape_room.core.level_controller import LevelController
from escape_room.core.models import PlayerIdentity
from escape_room.core.services.session_store import InMemorySessionStore

from fakes import FakeBackend, FakeEnvironment, ManualScheduler, RecordingView, make_bank

LEVEL = 2


@pytest.fixture
def config() -> LevelConfig:
    return LevelConfig(level=LEVEL, duration_seconds=300, question_count=8, qualification_score=6)


@pytest.fixture
def player() -> PlayerIdentity:
    return PlayerIdentity(student_id="42", name="Ada", college="Engineering College")


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend({LEVEL: make_bank(12)})


@pytest.fixture
def store() -> InMemorySessionStore:
    return InMemorySessionStore()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def environment() -> FakeEnvironment:
    return FakeEnvironment()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def make_controller(config, player, backend, store, scheduler, environment):
    """Factory so a test can build a second controller over the same store (a reload)."""

    def factory(view=None, backend_override=None, scheduler_override=None, environment_override=None):
        return LevelController(
            config,
            player,
            backend_override or backend,
            store,
            scheduler_override or scheduler,
            environment_override or environment,
            view if view is not None else RecordingView(),
            rng=random.Random(7),
        )

    return factory


@pytest.fixture
def controller(make_controller, view) -> LevelController:
    return make_controller(view=view)
