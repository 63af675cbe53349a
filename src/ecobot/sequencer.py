"""Question sequencing for a single questionnaire session.

A :class:`ChatSession` owns the three pieces of per-session state: the answer
record, the cursor (current :class:`Question`) and the transcript. Every
accepted input appends the echoed reply and the next prompt; rejected input
leaves all three untouched.
"""

from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Final

from ecobot.calculator import FootprintBreakdown, calculate_footprint
from ecobot.conversation import ConversationLog, Speaker
from ecobot.factors import EmissionFactors, load_emission_factors
from ecobot.models import (
    Answers,
    CommuteMode,
    CompanyAnswers,
    FlightHaul,
    FuelType,
    IndividualAnswers,
    RespondentKind,
    new_answers,
)
from ecobot.settings import EcoBotSettings, get_settings

LOGGER = logging.getLogger(__name__)

__all__ = [
    "COMPANY_SEQUENCE",
    "INDIVIDUAL_SEQUENCE",
    "ChatSession",
    "Choice",
    "Question",
    "parse_amount",
    "parse_commute_mode",
    "parse_flight_haul",
    "parse_fuel_type",
    "parse_respondent_kind",
]


class Question(str, Enum):
    """Cursor positions of the questionnaire."""

    CHOOSE_KIND = "choose_kind"
    ELECTRICITY = "electricity"
    LPG = "lpg"
    TRANSPORT_AMOUNT = "transport_amount"
    TRANSPORT_TYPE = "transport_type"
    FUEL = "fuel"
    EMPLOYEES = "employees"
    COMMUTE_DISTANCE = "commute_distance"
    COMMUTE_MODE = "commute_mode"
    COMMUTE_DAYS = "commute_days"
    FLIGHTS_AMOUNT = "flights_amount"
    FLIGHT_HAUL = "flight_haul"
    DIET = "diet"
    WASTE = "waste"
    RESULTS = "results"


@dataclass(frozen=True, slots=True)
class Choice:
    """A labelled button; ``value`` is the text submitted when pressed."""

    label: str
    value: str


INDIVIDUAL_SEQUENCE: Final[tuple[Question, ...]] = (
    Question.CHOOSE_KIND,
    Question.ELECTRICITY,
    Question.LPG,
    Question.TRANSPORT_AMOUNT,
    Question.TRANSPORT_TYPE,
    Question.FLIGHTS_AMOUNT,
    Question.FLIGHT_HAUL,
    Question.DIET,
    Question.RESULTS,
)

COMPANY_SEQUENCE: Final[tuple[Question, ...]] = (
    Question.CHOOSE_KIND,
    Question.ELECTRICITY,
    Question.FUEL,
    Question.EMPLOYEES,
    Question.COMMUTE_DISTANCE,
    Question.COMMUTE_MODE,
    Question.COMMUTE_DAYS,
    Question.FLIGHTS_AMOUNT,
    Question.FLIGHT_HAUL,
    Question.WASTE,
    Question.RESULTS,
)

_SEQUENCES: Final[dict[RespondentKind, tuple[Question, ...]]] = {
    RespondentKind.INDIVIDUAL: INDIVIDUAL_SEQUENCE,
    RespondentKind.COMPANY: COMPANY_SEQUENCE,
}

_HAUL_PROMPT = (
    'Are these mostly "short" haul flights (domestic) or "long" haul flights '
    "(international)?"
)

_PROMPTS: Final[dict[tuple[RespondentKind, Question], str]] = {
    (RespondentKind.INDIVIDUAL, Question.ELECTRICITY): (
        "Great! Let's start with your electricity consumption. "
        "How many kWh do you consume per month?"
    ),
    (RespondentKind.INDIVIDUAL, Question.LPG): (
        "How many LPG gas cylinders do you consume per year?"
    ),
    (RespondentKind.INDIVIDUAL, Question.TRANSPORT_AMOUNT): (
        "How many liters of fuel do you consume per month for transportation?"
    ),
    (RespondentKind.INDIVIDUAL, Question.TRANSPORT_TYPE): (
        'What type of fuel do you use? Reply with "petrol" or "diesel"'
    ),
    (RespondentKind.INDIVIDUAL, Question.FLIGHTS_AMOUNT): (
        "How many flights do you take per year?"
    ),
    (RespondentKind.INDIVIDUAL, Question.FLIGHT_HAUL): _HAUL_PROMPT,
    (RespondentKind.INDIVIDUAL, Question.DIET): (
        "Now about your diet! How many vegetarian meals do you have per week?"
    ),
    (RespondentKind.COMPANY, Question.ELECTRICITY): (
        "Perfect! Let's calculate your company's footprint. "
        "How many kWh does your company consume per month?"
    ),
    (RespondentKind.COMPANY, Question.FUEL): (
        "How many liters of liquid fuels does your company consume per month?"
    ),
    (RespondentKind.COMPANY, Question.EMPLOYEES): (
        "How many employees work in your company?"
    ),
    (RespondentKind.COMPANY, Question.COMMUTE_DISTANCE): (
        "What's the average daily commute distance per employee (in km)?"
    ),
    (RespondentKind.COMPANY, Question.COMMUTE_MODE): (
        "What's the primary mode of transport for employees? "
        'Reply with "car", "bus", or "train"'
    ),
    (RespondentKind.COMPANY, Question.COMMUTE_DAYS): (
        "How many days per year do employees typically commute to the office?"
    ),
    (RespondentKind.COMPANY, Question.FLIGHTS_AMOUNT): (
        "How many business flights does your company take per year?"
    ),
    (RespondentKind.COMPANY, Question.FLIGHT_HAUL): _HAUL_PROMPT,
    (RespondentKind.COMPANY, Question.WASTE): (
        "Finally, how much waste does your company generate per month (in kg)?"
    ),
}

NONVEG_PROMPT: Final[str] = "How many non-vegetarian meals do you have per week?"

# Numeric question -> answer record attribute. The diet question is handled
# separately because it fills two fields.
_NUMERIC_FIELDS: Final[dict[tuple[RespondentKind, Question], str]] = {
    (RespondentKind.INDIVIDUAL, Question.ELECTRICITY): "electricity_kwh_per_month",
    (RespondentKind.INDIVIDUAL, Question.LPG): "lpg_cylinders_per_year",
    (RespondentKind.INDIVIDUAL, Question.TRANSPORT_AMOUNT): "transport_litres_per_month",
    (RespondentKind.INDIVIDUAL, Question.FLIGHTS_AMOUNT): "flights_per_year",
    (RespondentKind.COMPANY, Question.ELECTRICITY): "electricity_kwh_per_month",
    (RespondentKind.COMPANY, Question.FUEL): "fuel_litres_per_month",
    (RespondentKind.COMPANY, Question.EMPLOYEES): "employees",
    (RespondentKind.COMPANY, Question.COMMUTE_DISTANCE): "commute_km_per_day",
    (RespondentKind.COMPANY, Question.COMMUTE_DAYS): "commute_days_per_year",
    (RespondentKind.COMPANY, Question.FLIGHTS_AMOUNT): "flights_per_year",
    (RespondentKind.COMPANY, Question.WASTE): "waste_kg_per_month",
}

_CHOICES: Final[dict[Question, tuple[Choice, ...]]] = {
    Question.CHOOSE_KIND: (
        Choice("Individual", RespondentKind.INDIVIDUAL.value),
        Choice("Company", RespondentKind.COMPANY.value),
    ),
    Question.TRANSPORT_TYPE: (
        Choice("Petrol", FuelType.PETROL.value),
        Choice("Diesel", FuelType.DIESEL.value),
    ),
    Question.COMMUTE_MODE: (
        Choice("Car", CommuteMode.CAR.value),
        Choice("Bus", CommuteMode.BUS.value),
        Choice("Train/Metro", CommuteMode.TRAIN.value),
    ),
    Question.FLIGHT_HAUL: (
        Choice("Short Haul", FlightHaul.SHORT.value),
        Choice("Long Haul", FlightHaul.LONG.value),
    ),
}


def parse_amount(text: str) -> float | None:
    """Parse a non-negative finite number, or return ``None``."""

    stripped = text.strip()
    if not stripped:
        return None
    try:
        value = float(stripped)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


# Free-text categorical parsing never fails: a reply that names no known
# option selects the default option.


def parse_respondent_kind(text: str) -> RespondentKind:
    return (
        RespondentKind.COMPANY
        if "company" in text.lower()
        else RespondentKind.INDIVIDUAL
    )


def parse_fuel_type(text: str) -> FuelType:
    return FuelType.PETROL if "petrol" in text.lower() else FuelType.DIESEL


def parse_commute_mode(text: str) -> CommuteMode:
    lowered = text.lower()
    mode = CommuteMode.CAR
    if "bus" in lowered:
        mode = CommuteMode.BUS
    if "train" in lowered or "metro" in lowered:
        mode = CommuteMode.TRAIN
    return mode


def parse_flight_haul(text: str) -> FlightHaul:
    return FlightHaul.SHORT if "short" in text.lower() else FlightHaul.LONG


def _result_message(breakdown: FootprintBreakdown) -> str:
    return (
        f"Your annual carbon footprint is {breakdown.total:.2f} tons of CO2! "
        "Let me show you how to make it even better..."
    )


class ChatSession:
    """Drive one respondent through the questionnaire.

    Args:
        factors: Emission factors for the final calculation. Loaded via
            :func:`ecobot.factors.load_emission_factors` when omitted.
        result_delay_seconds: Pause before the result is shown. Defaults to
            the configured ``ECOBOT_RESULT_DELAY_SECONDS``.
        sleep: Callable used for the pause.
        settings: Optional settings instance.
    """

    def __init__(
        self,
        *,
        factors: EmissionFactors | None = None,
        result_delay_seconds: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
        settings: EcoBotSettings | None = None,
    ) -> None:
        settings_obj = settings or get_settings()
        self.factors = factors or load_emission_factors(settings_obj)
        if result_delay_seconds is None:
            result_delay_seconds = settings_obj.result_delay_seconds
        if result_delay_seconds < 0:
            raise ValueError("result_delay_seconds must be non-negative")
        self.result_delay_seconds = result_delay_seconds
        self._sleep = sleep

        self._kind: RespondentKind | None = None
        self._answers: Answers | None = None
        self._question = Question.CHOOSE_KIND
        self._diet_nonveg_pending = False
        self._breakdown: FootprintBreakdown | None = None
        self._log = ConversationLog.with_greeting()

    @property
    def kind(self) -> RespondentKind | None:
        return self._kind

    @property
    def answers(self) -> Answers | None:
        return self._answers

    @property
    def current_question(self) -> Question:
        return self._question

    @property
    def log(self) -> ConversationLog:
        return self._log

    @property
    def is_complete(self) -> bool:
        return self._breakdown is not None

    @property
    def expects_number(self) -> bool:
        """``True`` when the cursor sits on a numeric question."""

        if self._kind is None:
            return False
        if self._question is Question.DIET:
            return True
        return (self._kind, self._question) in _NUMERIC_FIELDS

    @property
    def expects_choice(self) -> bool:
        return self._question in _CHOICES

    @property
    def diet_nonveg_pending(self) -> bool:
        """``True`` while the diet question waits for the non-veg count."""

        return self._diet_nonveg_pending

    @property
    def sequence(self) -> tuple[Question, ...]:
        """The question order for the chosen kind, or just the first step."""

        if self._kind is None:
            return (Question.CHOOSE_KIND,)
        return _SEQUENCES[self._kind]

    def choices(self) -> tuple[Choice, ...]:
        """Buttons available at the current question."""

        return _CHOICES.get(self._question, ())

    def current_prompt(self) -> str:
        """Text of the question currently awaiting an answer."""

        if self._question is Question.CHOOSE_KIND:
            return self._log[0].content
        if self._question is Question.DIET and self._diet_nonveg_pending:
            return NONVEG_PROMPT
        if self._question is Question.RESULTS or self._kind is None:
            return ""
        return _PROMPTS[(self._kind, self._question)]

    def result(self) -> FootprintBreakdown:
        """Return the computed footprint.

        Raises:
            RuntimeError: The questionnaire has not reached its result yet.
        """

        if self._breakdown is None:
            raise RuntimeError("Footprint requested before all questions were answered")
        return self._breakdown

    def select_kind(self, kind: RespondentKind | str) -> bool:
        """Choose who the footprint is for; only valid as the first answer."""

        if self._question is not Question.CHOOSE_KIND:
            LOGGER.debug("Ignoring kind selection at %s", self._question.value)
            return False
        if isinstance(kind, RespondentKind):
            chosen = kind
            reply = "Individual" if chosen is RespondentKind.INDIVIDUAL else "Company"
        else:
            chosen = parse_respondent_kind(kind)
            reply = kind
        self._kind = chosen
        self._answers = new_answers(chosen)
        self._log.append(Speaker.USER, reply)
        LOGGER.info("Respondent kind selected", extra={"kind": chosen.value})
        self._advance()
        return True

    def submit_number(self, text: str) -> bool:
        """Answer the current numeric question with raw ``text``.

        Returns:
            ``True`` when the input was accepted. Empty, non-numeric, negative
            or non-finite input is ignored and returns ``False``.
        """

        if not self.expects_number:
            LOGGER.debug("Numeric input ignored at %s", self._question.value)
            return False
        value = parse_amount(text)
        if value is None:
            LOGGER.debug("Ignoring unparseable amount %r", text)
            return False

        answers = self._require_answers()
        kind = self._require_kind()
        self._log.append(Speaker.USER, text)

        if self._question is Question.DIET:
            if not isinstance(answers, IndividualAnswers):
                raise RuntimeError("Diet question asked outside the individual branch")
            if not self._diet_nonveg_pending:
                answers.veg_meals_per_week = value
                self._diet_nonveg_pending = True
                self._log.append(Speaker.BOT, NONVEG_PROMPT)
                return True
            answers.nonveg_meals_per_week = value
            self._diet_nonveg_pending = False
        else:
            setattr(answers, _NUMERIC_FIELDS[(kind, self._question)], value)
        self._advance()
        return True

    def select_choice(self, text: str) -> bool:
        """Answer the current categorical question.

        Matching is a case-insensitive substring test; text that names no
        option selects the first-listed default.
        """

        if self._question is Question.CHOOSE_KIND:
            return self.select_kind(text)
        if not self.expects_choice:
            LOGGER.debug("Choice input ignored at %s", self._question.value)
            return False

        answers = self._require_answers()
        self._log.append(Speaker.USER, text)
        if self._question is Question.TRANSPORT_TYPE and isinstance(
            answers, IndividualAnswers
        ):
            answers.fuel_type = parse_fuel_type(text)
        elif self._question is Question.COMMUTE_MODE and isinstance(
            answers, CompanyAnswers
        ):
            answers.commute_mode = parse_commute_mode(text)
        elif self._question is Question.FLIGHT_HAUL:
            answers.flight_haul = parse_flight_haul(text)
        self._advance()
        return True

    def reset(self) -> None:
        """Discard all answers and start over with a fresh transcript."""

        self._kind = None
        self._answers = None
        self._question = Question.CHOOSE_KIND
        self._diet_nonveg_pending = False
        self._breakdown = None
        self._log = ConversationLog.with_greeting()
        LOGGER.info("Session reset")

    def _require_kind(self) -> RespondentKind:
        if self._kind is None:
            raise RuntimeError("Respondent kind has not been chosen yet")
        return self._kind

    def _require_answers(self) -> Answers:
        if self._answers is None:
            raise RuntimeError("Respondent kind has not been chosen yet")
        return self._answers

    def _advance(self) -> None:
        sequence = self.sequence
        position = sequence.index(self._question)
        self._question = sequence[position + 1]
        if self._question is Question.RESULTS:
            self._defer(self._show_results)
            return
        self._log.append(Speaker.BOT, _PROMPTS[(self._require_kind(), self._question)])

    def _defer(self, callback: Callable[[], None]) -> None:
        if self.result_delay_seconds:
            self._sleep(self.result_delay_seconds)
        callback()

    def _show_results(self) -> None:
        breakdown = calculate_footprint(self._require_answers(), self.factors)
        self._breakdown = breakdown
        self._log.append(Speaker.BOT, _result_message(breakdown))
        LOGGER.info(
            "Footprint calculated",
            extra={"kind": breakdown.kind.value, "total_tons": breakdown.total},
        )
