"""EcoBot - a conversational carbon footprint calculator."""

from __future__ import annotations

from importlib import import_module
from typing import Any, TYPE_CHECKING

__all__ = [
    "ChatSession",
    "CompanyAnswers",
    "FootprintBreakdown",
    "FootprintReport",
    "IndividualAnswers",
    "RespondentKind",
    "calculate_footprint",
]

if TYPE_CHECKING:
    from .calculator import FootprintBreakdown, calculate_footprint
    from .models import CompanyAnswers, IndividualAnswers, RespondentKind
    from .schemas import FootprintReport
    from .sequencer import ChatSession


def __getattr__(name: str) -> Any:
    """Lazily import submodules so ``import ecobot`` stays cheap."""

    module_map = {
        "ChatSession": "sequencer",
        "CompanyAnswers": "models",
        "FootprintBreakdown": "calculator",
        "FootprintReport": "schemas",
        "IndividualAnswers": "models",
        "RespondentKind": "models",
        "calculate_footprint": "calculator",
    }

    if name not in module_map:
        raise AttributeError(name)

    module = import_module(f".{module_map[name]}", __name__)
    return getattr(module, name)
