"""Tests for tip selection and benchmark bands."""

import pytest

from ecobot.advice import classify_footprint, personalized_tips
from ecobot.models import CompanyAnswers, FlightHaul, FuelType, IndividualAnswers, RespondentKind


def test_low_individual_gets_no_tips():
    assert personalized_tips(IndividualAnswers(electricity_kwh_per_month=100)) == []


def test_high_individual_gets_all_tips():
    answers = IndividualAnswers(
        electricity_kwh_per_month=500,  # 4.2 t
        transport_litres_per_month=100,  # 3.216 t diesel
        fuel_type=FuelType.DIESEL,
        flights_per_year=4,  # 4.0 t long haul
        flight_haul=FlightHaul.LONG,
        nonveg_meals_per_week=14,
    )
    tips = personalized_tips(answers)

    assert [tip.title for tip in tips] == [
        "Reduce Electricity Usage",
        "Optimize Transportation",
        "Mindful Flying",
        "Sustainable Diet",
    ]
    assert tips[0].impact == "Could save 1.3 tons CO2/year"
    assert tips[1].impact == "Could save 1.6 tons CO2/year"
    assert tips[2].impact == "Could save 1.6 tons CO2/year"
    assert tips[3].impact == "Could save 0.5-1.2 tons CO2/year"


def test_thresholds_are_strict():
    # exactly 10 non-veg meals and exactly 2 t of flights do not trigger tips
    answers = IndividualAnswers(
        flights_per_year=2, flight_haul=FlightHaul.LONG, nonveg_meals_per_week=10
    )
    assert personalized_tips(answers) == []


def test_company_tips_are_fixed():
    small = personalized_tips(CompanyAnswers())
    large = personalized_tips(CompanyAnswers(electricity_kwh_per_month=1e6))
    assert small == large
    assert [tip.title for tip in small] == [
        "Energy Efficiency",
        "Employee Engagement",
        "Waste Reduction",
    ]


@pytest.mark.parametrize(
    ("total", "kind", "severity"),
    [
        (3.0, RespondentKind.INDIVIDUAL, "success"),
        (3.4, RespondentKind.INDIVIDUAL, "info"),
        (4.79, RespondentKind.INDIVIDUAL, "info"),
        (4.8, RespondentKind.INDIVIDUAL, "warning"),
        (34.9, RespondentKind.COMPANY, "success"),
        (35.5, RespondentKind.COMPANY, "info"),
        (80.0, RespondentKind.COMPANY, "warning"),
    ],
)
def test_classify_footprint_bands(total, kind, severity):
    assert classify_footprint(total, kind).severity == severity


def test_classify_footprint_reports_average():
    benchmark = classify_footprint(1.0, RespondentKind.COMPANY)
    assert benchmark.global_average == 50.0
    assert benchmark.message.startswith("Excellent!")


def test_classify_footprint_rejects_negative():
    with pytest.raises(ValueError):
        classify_footprint(-0.1, RespondentKind.INDIVIDUAL)
