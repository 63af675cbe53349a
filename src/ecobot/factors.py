"""Emission factors used by the footprint calculator.

The packaged ``ecobot/data/factors.json`` file holds the canonical values.
``ECOBOT_FACTORS_FILE`` may point to a JSON object that replaces any subset of
them; keys that are not known factors are skipped with a warning.
"""

from __future__ import annotations

import json
import logging
import math
import pathlib
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import Final

from ecobot.settings import EcoBotSettings, get_settings

LOGGER = logging.getLogger(__name__)

__all__ = ["DEFAULT_FACTORS", "EmissionFactors", "load_emission_factors"]


@dataclass(frozen=True, slots=True)
class EmissionFactors:
    """Conversion factors from activity quantities to CO2.

    Attributes:
        electricity_kg_per_kwh: Grid electricity, kg CO2 per kWh.
        lpg_kg_per_cylinder: LPG, kg CO2 per cylinder.
        petrol_kg_per_litre: Petrol combustion, kg CO2 per litre.
        diesel_kg_per_litre: Diesel combustion, kg CO2 per litre.
        company_fuel_kg_per_litre: Company liquid fuel, assumed petrol
            equivalent.
        car_kg_per_km: Commute by car, kg CO2 per km per person.
        bus_kg_per_km: Commute by bus.
        train_kg_per_km: Commute by train or metro.
        short_haul_kg_per_trip: Average domestic flight.
        long_haul_kg_per_trip: Average international flight.
        veg_meal_kg: Vegetarian meal.
        nonveg_meal_kg: Non-vegetarian meal.
        waste_kg_per_kg: Landfilled waste, kg CO2 per kg.
    """

    electricity_kg_per_kwh: float = 0.70
    lpg_kg_per_cylinder: float = 3.0
    petrol_kg_per_litre: float = 2.31
    diesel_kg_per_litre: float = 2.68
    company_fuel_kg_per_litre: float = 2.31
    car_kg_per_km: float = 0.18
    bus_kg_per_km: float = 0.08
    train_kg_per_km: float = 0.04
    short_haul_kg_per_trip: float = 300.0
    long_haul_kg_per_trip: float = 1000.0
    veg_meal_kg: float = 1.5
    nonveg_meal_kg: float = 3.0
    waste_kg_per_kg: float = 0.5


DEFAULT_FACTORS: Final[EmissionFactors] = EmissionFactors()

MONTHS_PER_YEAR: Final[int] = 12
WEEKS_PER_YEAR: Final[int] = 52
KG_PER_TON: Final[float] = 1000.0

_FACTOR_NAMES: Final[frozenset[str]] = frozenset(
    field.name for field in fields(EmissionFactors)
)


def load_emission_factors(settings: EcoBotSettings | None = None) -> EmissionFactors:
    """Return the active emission factors.

    Args:
        settings: Optional settings instance; read from the environment when
            omitted.

    Returns:
        Packaged factors with any configured overrides applied.

    Raises:
        FileNotFoundError: The override path does not exist.
        RuntimeError: The override file is not a JSON object of numbers.
    """

    settings_obj = settings or get_settings()
    factors = _packaged_factors()
    override_path = settings_obj.factors_file
    if not override_path:
        return factors

    path = pathlib.Path(override_path)
    if not path.exists():
        raise FileNotFoundError(f"ECOBOT_FACTORS_FILE not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise RuntimeError("Failed to parse emission factor override JSON") from exc
    if not isinstance(data, dict):
        raise RuntimeError("Emission factor override must be a JSON object")

    overrides = _coerce_factors(data, strict=True)
    LOGGER.info(
        "Applied emission factor overrides",
        extra={"path": str(path), "factors": sorted(overrides)},
    )
    return replace(factors, **overrides)


@lru_cache(maxsize=1)
def _packaged_factors() -> EmissionFactors:
    """Load the factors shipped with the package."""

    try:
        import importlib.resources as resources

        data_text = (
            resources.files("ecobot.data")
            .joinpath("factors.json")
            .read_text(encoding="utf-8")
        )
        data = json.loads(data_text)
    except Exception as exc:  # pragma: no cover - defensive fallback
        LOGGER.error("Failed to load packaged emission factors: %s", exc)
        return DEFAULT_FACTORS

    if not isinstance(data, dict):
        LOGGER.warning(
            "Unexpected factors payload type %s; using built-in defaults",
            type(data),
        )
        return DEFAULT_FACTORS
    return replace(DEFAULT_FACTORS, **_coerce_factors(data, strict=False))


def _coerce_factors(data: dict[object, object], *, strict: bool) -> dict[str, float]:
    parsed: dict[str, float] = {}
    for key, value in data.items():
        if key not in _FACTOR_NAMES:
            LOGGER.warning("Ignoring unknown emission factor %r", key)
            continue
        try:
            number = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError):
            number = math.nan
        if not math.isfinite(number) or number < 0:
            if strict:
                raise RuntimeError(
                    f"Emission factor {key!r} must be a non-negative number"
                )
            LOGGER.warning("Skipping invalid emission factor for key %s", key)
            continue
        parsed[str(key)] = number
    return parsed
