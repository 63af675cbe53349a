"""Reduction tips and benchmark bands for a computed footprint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, Literal

from ecobot.calculator import (
    electricity_emissions,
    flight_emissions,
    transport_emissions,
)
from ecobot.factors import DEFAULT_FACTORS, EmissionFactors
from ecobot.models import Answers, CompanyAnswers, IndividualAnswers, RespondentKind

__all__ = [
    "GLOBAL_AVERAGE_TONS",
    "Benchmark",
    "Tip",
    "classify_footprint",
    "personalized_tips",
]

Severity = Literal["success", "info", "warning"]

GLOBAL_AVERAGE_TONS: Final[dict[RespondentKind, float]] = {
    RespondentKind.INDIVIDUAL: 4.8,
    RespondentKind.COMPANY: 50.0,
}
EXCELLENT_FRACTION: Final[float] = 0.7

ELECTRICITY_THRESHOLD: Final[float] = 2.0
TRANSPORT_THRESHOLD: Final[float] = 1.5
FLIGHTS_THRESHOLD: Final[float] = 2.0
NONVEG_MEALS_THRESHOLD: Final[float] = 10.0

ELECTRICITY_SAVING: Final[float] = 0.3
TRANSPORT_SAVING: Final[float] = 0.5
FLIGHTS_SAVING: Final[float] = 0.4


@dataclass(frozen=True, slots=True)
class Tip:
    """A single suggested action with its estimated effect."""

    title: str
    description: str
    impact: str

    def to_dict(self) -> dict[str, str]:
        return {"title": self.title, "description": self.description, "impact": self.impact}


@dataclass(frozen=True, slots=True)
class Benchmark:
    """Position of a footprint relative to the global average."""

    message: str
    severity: Severity
    global_average: float


_COMPANY_TIPS: Final[tuple[Tip, ...]] = (
    Tip(
        title="Energy Efficiency",
        description=(
            "Implement LED lighting, smart HVAC systems, and energy "
            "management systems."
        ),
        impact="Up to 30% energy reduction possible",
    ),
    Tip(
        title="Employee Engagement",
        description=(
            "Promote remote work, carpooling, and provide incentives for "
            "sustainable commuting."
        ),
        impact="20-40% commute emissions reduction",
    ),
    Tip(
        title="Waste Reduction",
        description=(
            "Implement recycling programs, go paperless, and choose "
            "sustainable suppliers."
        ),
        impact="50-70% waste reduction achievable",
    ),
)


def _saving(tons: float) -> str:
    return f"Could save {tons:.1f} tons CO2/year"


def _individual_tips(answers: IndividualAnswers, factors: EmissionFactors) -> list[Tip]:
    electricity = electricity_emissions(answers.electricity_kwh_per_month, factors)
    transport = transport_emissions(
        answers.transport_litres_per_month, answers.fuel_type, factors
    )
    flights = flight_emissions(answers.flights_per_year, answers.flight_haul, factors)

    tips: list[Tip] = []
    if electricity > ELECTRICITY_THRESHOLD:
        tips.append(
            Tip(
                title="Reduce Electricity Usage",
                description=(
                    "Switch to LED bulbs, unplug devices when not in use, and "
                    "consider renewable energy sources."
                ),
                impact=_saving(electricity * ELECTRICITY_SAVING),
            )
        )
    if transport > TRANSPORT_THRESHOLD:
        tips.append(
            Tip(
                title="Optimize Transportation",
                description=(
                    "Use public transport, bike, walk, or consider "
                    "electric/hybrid vehicles for daily commute."
                ),
                impact=_saving(transport * TRANSPORT_SAVING),
            )
        )
    if flights > FLIGHTS_THRESHOLD:
        tips.append(
            Tip(
                title="Mindful Flying",
                description=(
                    "Choose direct flights, economy class, and consider carbon "
                    "offset programs for unavoidable flights."
                ),
                impact=_saving(flights * FLIGHTS_SAVING),
            )
        )
    if answers.nonveg_meals_per_week > NONVEG_MEALS_THRESHOLD:
        tips.append(
            Tip(
                title="Sustainable Diet",
                description=(
                    "Try reducing meat consumption by 2-3 meals per week. "
                    "Plant-based meals have a lower carbon footprint."
                ),
                impact="Could save 0.5-1.2 tons CO2/year",
            )
        )
    return tips


def personalized_tips(
    answers: Answers, factors: EmissionFactors = DEFAULT_FACTORS
) -> list[Tip]:
    """Select tips for a completed answer record.

    Individual tips are driven by the electricity, transport and flight
    components and by the weekly non-vegetarian meal count. Companies always
    receive the same three general tips.

    Args:
        answers: Completed answer record.
        factors: Emission factors used to recompute components.

    Returns:
        Tips in display order; possibly empty for individuals.
    """

    if isinstance(answers, IndividualAnswers):
        return _individual_tips(answers, factors)
    if isinstance(answers, CompanyAnswers):
        return list(_COMPANY_TIPS)
    raise ValueError(f"Unsupported answer record: {type(answers).__name__}")


def classify_footprint(total_tons: float, kind: RespondentKind) -> Benchmark:
    """Band ``total_tons`` against the global average for ``kind``.

    Below 70% of the average is excellent, below the average is good, and
    anything else is flagged for improvement.
    """

    if total_tons < 0:
        raise ValueError("total_tons must be non-negative")
    average = GLOBAL_AVERAGE_TONS[kind]
    if total_tons < average * EXCELLENT_FRACTION:
        return Benchmark(
            message=(
                "Excellent! You're already below the global average. "
                "You're making a real difference!"
            ),
            severity="success",
            global_average=average,
        )
    if total_tons < average:
        return Benchmark(
            message=(
                "Good work! You're close to the global average. "
                "Small changes can make a big impact!"
            ),
            severity="info",
            global_average=average,
        )
    return Benchmark(
        message=(
            "Every step counts! With the right changes, you can significantly "
            "reduce your impact."
        ),
        severity="warning",
        global_average=average,
    )
