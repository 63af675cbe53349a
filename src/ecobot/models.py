"""Answer records and categorical choices collected by the questionnaire."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum


class RespondentKind(str, Enum):
    """Whether the footprint is computed for a person or an organisation."""

    INDIVIDUAL = "individual"
    COMPANY = "company"


class FuelType(str, Enum):
    PETROL = "petrol"
    DIESEL = "diesel"


class FlightHaul(str, Enum):
    """Flight distance bucket: short is domestic, long is international."""

    SHORT = "short"
    LONG = "long"


class CommuteMode(str, Enum):
    CAR = "car"
    BUS = "bus"
    TRAIN = "train"


@dataclass(slots=True)
class IndividualAnswers:
    """Answers collected from a single person.

    Numeric fields start at ``0.0`` and categorical fields at ``None`` until
    the matching question has been answered.
    """

    electricity_kwh_per_month: float = 0.0
    lpg_cylinders_per_year: float = 0.0
    transport_litres_per_month: float = 0.0
    fuel_type: FuelType | None = None
    flights_per_year: float = 0.0
    flight_haul: FlightHaul | None = None
    veg_meals_per_week: float = 0.0
    nonveg_meals_per_week: float = 0.0

    kind = RespondentKind.INDIVIDUAL

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly mapping of the answers."""

        return _plain(asdict(self))


@dataclass(slots=True)
class CompanyAnswers:
    """Answers collected on behalf of a company."""

    electricity_kwh_per_month: float = 0.0
    fuel_litres_per_month: float = 0.0
    employees: float = 0.0
    commute_km_per_day: float = 0.0
    commute_mode: CommuteMode | None = None
    commute_days_per_year: float = 0.0
    flights_per_year: float = 0.0
    flight_haul: FlightHaul | None = None
    waste_kg_per_month: float = 0.0

    kind = RespondentKind.COMPANY

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-friendly mapping of the answers."""

        return _plain(asdict(self))


Answers = IndividualAnswers | CompanyAnswers


def new_answers(kind: RespondentKind) -> Answers:
    """Create an all-default answer record for ``kind``."""

    if kind is RespondentKind.INDIVIDUAL:
        return IndividualAnswers()
    if kind is RespondentKind.COMPANY:
        return CompanyAnswers()
    raise ValueError(f"Unknown respondent kind: {kind!r}")


def _plain(row: dict[str, object]) -> dict[str, object]:
    return {
        key: value.value if isinstance(value, Enum) else value
        for key, value in row.items()
    }
