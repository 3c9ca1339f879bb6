from healthcheck.models.observation import (
    SYMPTOM_TOKENS,
    HealthObservation,
    SymptomFlag,
    SymptomSet,
)


def normalize_symptoms(observation: HealthObservation) -> SymptomSet:
    """Map the symptom answers marked YES to canonical tokens, in vocabulary order.

    An empty tuple means nothing was selected; that is a valid result here and
    is rejected later by the gateway.
    """
    return tuple(
        token
        for label, token in SYMPTOM_TOKENS.items()
        if observation.flag(label) is SymptomFlag.YES
    )
