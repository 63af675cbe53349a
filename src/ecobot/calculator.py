"""Deterministic annual footprint calculations.

All public helpers return tons of CO2 per year. Callers are expected to pass a
fully answered record; the sequencer only calculates once every question has
been answered.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ecobot.factors import (
    DEFAULT_FACTORS,
    KG_PER_TON,
    MONTHS_PER_YEAR,
    WEEKS_PER_YEAR,
    EmissionFactors,
)
from ecobot.models import (
    Answers,
    CommuteMode,
    CompanyAnswers,
    FlightHaul,
    FuelType,
    IndividualAnswers,
    RespondentKind,
)

__all__ = [
    "FootprintBreakdown",
    "calculate_company_footprint",
    "calculate_footprint",
    "calculate_individual_footprint",
    "commute_emissions",
    "company_fuel_emissions",
    "diet_emissions",
    "electricity_emissions",
    "flight_emissions",
    "lpg_emissions",
    "transport_emissions",
    "waste_emissions",
]


@dataclass(frozen=True, slots=True)
class FootprintBreakdown:
    """Annual footprint split into its named components."""

    kind: RespondentKind
    components: dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        """Sum of all components in tons CO2/year."""

        return sum(self.components.values())

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": self.kind.value,
            "components": dict(self.components),
            "total_tons": self.total,
        }


def _require_non_negative(**values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{name} must be non-negative")


def electricity_emissions(
    kwh_per_month: float, factors: EmissionFactors = DEFAULT_FACTORS
) -> float:
    """Electricity use: ``kWh/month x factor x 12 / 1000``."""

    _require_non_negative(kwh_per_month=kwh_per_month)
    return (
        kwh_per_month * factors.electricity_kg_per_kwh * MONTHS_PER_YEAR / KG_PER_TON
    )


def lpg_emissions(
    cylinders_per_year: float, factors: EmissionFactors = DEFAULT_FACTORS
) -> float:
    """LPG cylinders consumed over a year."""

    _require_non_negative(cylinders_per_year=cylinders_per_year)
    return cylinders_per_year * factors.lpg_kg_per_cylinder / KG_PER_TON


def transport_emissions(
    litres_per_month: float,
    fuel_type: FuelType | None,
    factors: EmissionFactors = DEFAULT_FACTORS,
) -> float:
    """Personal vehicle fuel. Anything other than petrol uses the diesel factor."""

    _require_non_negative(litres_per_month=litres_per_month)
    factor = (
        factors.petrol_kg_per_litre
        if fuel_type is FuelType.PETROL
        else factors.diesel_kg_per_litre
    )
    return litres_per_month * MONTHS_PER_YEAR * factor / KG_PER_TON


def company_fuel_emissions(
    litres_per_month: float, factors: EmissionFactors = DEFAULT_FACTORS
) -> float:
    """Company liquid fuels, counted as petrol equivalent."""

    _require_non_negative(litres_per_month=litres_per_month)
    return (
        litres_per_month
        * MONTHS_PER_YEAR
        * factors.company_fuel_kg_per_litre
        / KG_PER_TON
    )


def commute_factor(
    mode: CommuteMode | None, factors: EmissionFactors = DEFAULT_FACTORS
) -> float:
    """Return the per-km factor for ``mode``; car when unset."""

    if mode is CommuteMode.BUS:
        return factors.bus_kg_per_km
    if mode is CommuteMode.TRAIN:
        return factors.train_kg_per_km
    return factors.car_kg_per_km


def commute_emissions(
    km_per_day: float,
    mode: CommuteMode | None,
    days_per_year: float,
    employees: float,
    factors: EmissionFactors = DEFAULT_FACTORS,
) -> float:
    """Employee commuting: ``km x factor x days x employees / 1000``."""

    _require_non_negative(
        km_per_day=km_per_day, days_per_year=days_per_year, employees=employees
    )
    return (
        km_per_day
        * commute_factor(mode, factors)
        * days_per_year
        * employees
        / KG_PER_TON
    )


def flight_emissions(
    trips_per_year: float,
    haul: FlightHaul | None,
    factors: EmissionFactors = DEFAULT_FACTORS,
) -> float:
    """Flights; only an explicit short haul uses the short-haul figure."""

    _require_non_negative(trips_per_year=trips_per_year)
    per_trip = (
        factors.short_haul_kg_per_trip
        if haul is FlightHaul.SHORT
        else factors.long_haul_kg_per_trip
    )
    return trips_per_year * per_trip / KG_PER_TON


def diet_emissions(
    veg_meals_per_week: float,
    nonveg_meals_per_week: float,
    factors: EmissionFactors = DEFAULT_FACTORS,
) -> float:
    """Weekly meals scaled to a year."""

    _require_non_negative(
        veg_meals_per_week=veg_meals_per_week,
        nonveg_meals_per_week=nonveg_meals_per_week,
    )
    weekly = (
        veg_meals_per_week * factors.veg_meal_kg
        + nonveg_meals_per_week * factors.nonveg_meal_kg
    )
    return weekly * WEEKS_PER_YEAR / KG_PER_TON


def waste_emissions(
    kg_per_month: float, factors: EmissionFactors = DEFAULT_FACTORS
) -> float:
    _require_non_negative(kg_per_month=kg_per_month)
    return kg_per_month * MONTHS_PER_YEAR * factors.waste_kg_per_kg / KG_PER_TON


def calculate_individual_footprint(
    answers: IndividualAnswers, factors: EmissionFactors = DEFAULT_FACTORS
) -> FootprintBreakdown:
    """Compute the personal annual footprint.

    Args:
        answers: Completed individual answer record.
        factors: Emission factors to apply.

    Returns:
        Breakdown with electricity, LPG, transport, flight and diet
        components.
    """

    return FootprintBreakdown(
        kind=RespondentKind.INDIVIDUAL,
        components={
            "electricity": electricity_emissions(
                answers.electricity_kwh_per_month, factors
            ),
            "lpg": lpg_emissions(answers.lpg_cylinders_per_year, factors),
            "transportation": transport_emissions(
                answers.transport_litres_per_month, answers.fuel_type, factors
            ),
            "flights": flight_emissions(
                answers.flights_per_year, answers.flight_haul, factors
            ),
            "diet": diet_emissions(
                answers.veg_meals_per_week, answers.nonveg_meals_per_week, factors
            ),
        },
    )


def calculate_company_footprint(
    answers: CompanyAnswers, factors: EmissionFactors = DEFAULT_FACTORS
) -> FootprintBreakdown:
    """Compute the company annual footprint.

    Args:
        answers: Completed company answer record.
        factors: Emission factors to apply.

    Returns:
        Breakdown with electricity, fuel, commute, flight and waste
        components.
    """

    return FootprintBreakdown(
        kind=RespondentKind.COMPANY,
        components={
            "electricity": electricity_emissions(
                answers.electricity_kwh_per_month, factors
            ),
            "fuel": company_fuel_emissions(answers.fuel_litres_per_month, factors),
            "commute": commute_emissions(
                answers.commute_km_per_day,
                answers.commute_mode,
                answers.commute_days_per_year,
                answers.employees,
                factors,
            ),
            "flights": flight_emissions(
                answers.flights_per_year, answers.flight_haul, factors
            ),
            "waste": waste_emissions(answers.waste_kg_per_month, factors),
        },
    )


def calculate_footprint(
    answers: Answers, factors: EmissionFactors = DEFAULT_FACTORS
) -> FootprintBreakdown:
    """Dispatch to the calculator matching the answer record type."""

    if isinstance(answers, IndividualAnswers):
        return calculate_individual_footprint(answers, factors)
    if isinstance(answers, CompanyAnswers):
        return calculate_company_footprint(answers, factors)
    raise ValueError(f"Unsupported answer record: {type(answers).__name__}")
