"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator

import pytest

# Ensure src/ is on sys.path for tests so the src layout is used during test runs
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
SRC = os.path.join(ROOT, "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from ecobot import factors  # noqa: E402
from ecobot.sequencer import ChatSession  # noqa: E402

_ENV_VARS = (
    "ECOBOT_RESULT_DELAY_SECONDS",
    "ECOBOT_FACTORS_FILE",
    "ECOBOT_LOG_LEVEL",
    "ECOBOT_LOG_JSON",
    "ECOBOT_SHARE_BASE_URL",
)


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep host configuration and cached defaults out of the tests."""

    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    factors._packaged_factors.cache_clear()
    yield
    factors._packaged_factors.cache_clear()
    logger = logging.getLogger("ecobot")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def session() -> ChatSession:
    """A session that shows results without pausing."""

    return ChatSession(result_delay_seconds=0.0)


def answer_individual(
    session: ChatSession,
    *,
    electricity: str = "300",
    lpg: str = "12",
    transport: str = "50",
    fuel: str = "petrol",
    flights: str = "2",
    haul: str = "short",
    veg: str = "5",
    nonveg: str = "2",
) -> None:
    """Walk ``session`` through the individual branch."""

    assert session.select_kind("individual")
    assert session.submit_number(electricity)
    assert session.submit_number(lpg)
    assert session.submit_number(transport)
    assert session.select_choice(fuel)
    assert session.submit_number(flights)
    assert session.select_choice(haul)
    assert session.submit_number(veg)
    assert session.submit_number(nonveg)


def answer_company(
    session: ChatSession,
    *,
    electricity: str = "5000",
    fuel: str = "200",
    employees: str = "40",
    distance: str = "15",
    mode: str = "bus",
    days: str = "220",
    flights: str = "12",
    haul: str = "long",
    waste: str = "300",
) -> None:
    """Walk ``session`` through the company branch."""

    assert session.select_kind("company")
    assert session.submit_number(electricity)
    assert session.submit_number(fuel)
    assert session.submit_number(employees)
    assert session.submit_number(distance)
    assert session.select_choice(mode)
    assert session.submit_number(days)
    assert session.submit_number(flights)
    assert session.select_choice(haul)
    assert session.submit_number(waste)
