"""
Health-data validation.

Checks a decoded ``healthData`` object before anything is sent to the
prediction service. Rules run in a fixed order and the first failure wins;
callers get back a single human-readable reason, or ``None`` when the input
is acceptable.
"""

from collections.abc import Mapping
from typing import Any

from healthcheck.models.observation import (
    INTEGER_VITALS,
    SYMPTOM_TOKENS,
    VITAL_FIELDS,
    HealthObservation,
    SymptomFlag,
    is_blank,
)

# (wire field, low, high, message), checked in this order, bounds inclusive
VITAL_RANGES: list[tuple[str, float, float, str]] = [
    ("Age", 0, 120, "Age must be between 0 and 120"),
    ("Heart_Rate_bpm", 30, 220, "Heart rate must be between 30 and 220 bpm"),
    ("Body_Temperature_C", 35, 42, "Body temperature must be between 35°C and 42°C"),
    ("Oxygen_Saturation_", 70, 100, "Oxygen saturation must be between 70% and 100%"),
    ("Systolic", 70, 250, "Systolic pressure must be between 70 and 250"),
    ("Diastolic", 40, 150, "Diastolic pressure must be between 40 and 150"),
]


def _to_number(field: str, value: Any) -> float | int | None:
    """Parse a vital the way a form would: numeric strings allowed, ints truncated."""
    if isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return int(number) if field in INTEGER_VITALS else number


def validate_health_data(data: Any) -> str | None:
    """Return the first validation failure for ``data``, or None if it passes."""
    if data is None or not isinstance(data, Mapping):
        return "Please provide health data as an object"

    for field in VITAL_FIELDS:
        if field not in data or is_blank(data[field]):
            return f"Please fill in {field.replace('_', ' ', 1)}"

    if all(SymptomFlag.from_value(data.get(label)) is SymptomFlag.ABSENT for label in SYMPTOM_TOKENS):
        return "Please select at least one symptom"

    numbers: dict[str, float | int] = {}
    for field in VITAL_FIELDS:
        number = _to_number(field, data[field])
        if number is None:
            return f"{field.replace('_', ' ', 1)} must be a number"
        numbers[field] = number

    for field, low, high, message in VITAL_RANGES:
        if numbers[field] < low or numbers[field] > high:
            return message

    gender = data.get("Gender_Male")
    if not is_blank(gender) and _to_number("Gender_Male", gender) not in (0, 1):
        return "Gender must be 0 (female) or 1 (male)"

    return None


def parse_observation(data: Mapping[str, Any]) -> HealthObservation:
    """Build a HealthObservation from input that already passed validation."""
    gender = data.get("Gender_Male")
    return HealthObservation(
        **{attr: _to_number(field, data[field]) for field, attr in VITAL_FIELDS.items()},
        gender_male=None if is_blank(gender) else int(_to_number("Gender_Male", gender)),
        symptoms={label: SymptomFlag.from_value(data.get(label)) for label in SYMPTOM_TOKENS},
    )
