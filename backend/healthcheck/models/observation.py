from enum import Enum

from pydantic import BaseModel, ConfigDict


def is_blank(value) -> bool:
    """Missing form answer: None, or a string with nothing but whitespace."""
    return value is None or (isinstance(value, str) and value.strip() == "")


class SymptomFlag(str, Enum):
    """How a single symptom indicator was answered on the form."""

    ABSENT = "absent"  # missing, None or blank string
    NO = "no"  # explicit, but not numeric 1
    YES = "yes"  # numeric 1

    @classmethod
    def from_value(cls, value) -> "SymptomFlag":
        if is_blank(value):
            return cls.ABSENT
        # bool is an int subclass; True must not count as a selection
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value == 1:
            return cls.YES
        return cls.NO


# Form label → canonical token. Order is the order tokens are emitted in.
SYMPTOM_TOKENS: dict[str, str] = {
    "Body ache": "body_aches",
    "Cough": "cough",
    "Fatigue": "fatigue",
    "Fever": "fever",
    "Headache": "headache",
    "Runny nose": "runny_nose",
    "Shortness of breath": "shortness_of_breath",
    "Sore throat": "sore_throat",
}

SYMPTOM_VOCABULARY: frozenset[str] = frozenset(SYMPTOM_TOKENS.values())

# Wire name → HealthObservation attribute, for the six required vitals.
VITAL_FIELDS: dict[str, str] = {
    "Age": "age",
    "Heart_Rate_bpm": "heart_rate_bpm",
    "Body_Temperature_C": "body_temperature_c",
    "Oxygen_Saturation_": "oxygen_saturation",
    "Systolic": "systolic",
    "Diastolic": "diastolic",
}

INTEGER_VITALS = {"Age", "Heart_Rate_bpm", "Systolic", "Diastolic"}

SymptomSet = tuple[str, ...]


class HealthObservation(BaseModel):
    """One submitted set of vital signs and symptom answers."""

    model_config = ConfigDict(frozen=True)

    age: int
    heart_rate_bpm: int
    body_temperature_c: float
    oxygen_saturation: float
    systolic: int
    diastolic: int
    gender_male: int | None = None
    symptoms: dict[str, SymptomFlag]  # keyed by form label

    def flag(self, label: str) -> SymptomFlag:
        return self.symptoms.get(label, SymptomFlag.ABSENT)


# Shown to clients that send a malformed request body.
EXAMPLE_HEALTH_DATA = {
    "healthData": {
        "Age": 25,
        "Heart_Rate_bpm": 72,
        "Body_Temperature_C": 37.0,
        "Oxygen_Saturation_": 98,
        "Gender_Male": 1,
        "Systolic": 120,
        "Diastolic": 80,
        "Body ache": 0,
        "Cough": 1,
        "Fatigue": 1,
        "Fever": 1,
        "Headache": 0,
        "Runny nose": 0,
        "Shortness of breath": 0,
        "Sore throat": 1,
    }
}
