"""Immutable value objects for the Virtual Patient domain.

Value objects are immutable (frozen) dataclasses that represent domain
concepts without identity. They are equal if all their attributes are equal.

All value objects use:
- frozen=True: Makes instances immutable
- slots=True: Optimizes memory usage
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import UTC, datetime
from typing import Any

from virtual_patient.domain.catalogs import MAX_AGE, MIN_AGE
from virtual_patient.domain.enums import DiagnosisStatus, Role
from virtual_patient.domain.exceptions import ValidationError

# snake_case attribute -> camelCase wire key
_PROFILE_WIRE_KEYS: dict[str, str] = {
    "name": "name",
    "age": "age",
    "gender": "gender",
    "occupation": "occupation",
    "marital_status": "maritalStatus",
    "chief_complaint": "chiefComplaint",
    "condition": "condition",
    "symptoms": "symptoms",
    "duration": "duration",
    "life_stressors": "lifeStressors",
    "previous_treatment": "previousTreatment",
    "family_history": "familyHistory",
    "personality_traits": "personalityTraits",
    "coping_mechanisms": "copingMechanisms",
}

_PROFILE_LIST_FIELDS = frozenset(
    {
        "symptoms",
        "life_stressors",
        "previous_treatment",
        "family_history",
        "personality_traits",
        "coping_mechanisms",
    }
)


@dataclass(frozen=True, slots=True)
class ConversationTurn:
    """A single turn of a conversation transcript."""

    role: Role
    """Speaker of the turn (doctor = user, patient = assistant)."""

    content: str
    """Free-text content of the turn."""

    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    """When the turn was recorded."""

    def __post_init__(self) -> None:
        """Coerce role strings to Role.

        Raises:
            ValueError: If role is not a known Role.
        """
        object.__setattr__(self, "role", Role(self.role))


@dataclass(frozen=True, slots=True)
class PatientProfile:
    """Demographic and clinical description of a simulated patient.

    Every attribute is optional so caller-supplied partial profiles can be
    represented; the profile generator always fills all of them.
    """

    name: str | None = None
    age: int | None = None
    gender: str | None = None
    occupation: str | None = None
    marital_status: str | None = None
    chief_complaint: str | None = None
    condition: str | None = None
    symptoms: tuple[str, ...] = ()
    duration: str | None = None
    life_stressors: tuple[str, ...] = ()
    previous_treatment: tuple[str, ...] = ()
    family_history: tuple[str, ...] = ()
    personality_traits: tuple[str, ...] = ()
    coping_mechanisms: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        """Validate age and freeze sequence attributes.

        Raises:
            ValueError: If age is outside the supported range.
        """
        if self.age is not None and not MIN_AGE <= self.age <= MAX_AGE:
            raise ValueError(f"Age {self.age} must be between {MIN_AGE} and {MAX_AGE}")
        for name in _PROFILE_LIST_FIELDS:
            object.__setattr__(self, name, tuple(getattr(self, name)))

    def is_empty(self) -> bool:
        """Return True when no attribute is set."""
        return all(not getattr(self, f.name) for f in fields(self))

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape.

        Unset scalar attributes are omitted; an empty profile serializes to ``{}``.
        """
        if self.is_empty():
            return {}
        data: dict[str, Any] = {}
        for attr, key in _PROFILE_WIRE_KEYS.items():
            value = getattr(self, attr)
            if attr in _PROFILE_LIST_FIELDS:
                data[key] = list(value)
            elif value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> PatientProfile:
        """Build a profile from a camelCase or snake_case mapping.

        Unknown keys are ignored.

        Raises:
            ValidationError: If a value has the wrong type or is out of range.
        """
        if not data:
            return cls()

        kwargs: dict[str, Any] = {}
        for attr, key in _PROFILE_WIRE_KEYS.items():
            if key in data:
                value = data[key]
            elif attr in data:
                value = data[attr]
            else:
                continue
            if value is None:
                continue
            if attr in _PROFILE_LIST_FIELDS:
                if isinstance(value, str):
                    value = (value,)
                elif not isinstance(value, (list, tuple)):
                    raise ValidationError(f"Profile field '{key}' must be a list of strings")
                value = tuple(str(item) for item in value)
            elif attr == "age":
                try:
                    value = int(value)
                except (TypeError, ValueError) as e:
                    raise ValidationError(f"Profile age must be an integer, got {value!r}") from e
            else:
                value = str(value)
            kwargs[attr] = value

        try:
            return cls(**kwargs)
        except ValueError as e:
            raise ValidationError(str(e)) from e


@dataclass(frozen=True, slots=True)
class DiagnosisFeedback:
    """Report verdict on the doctor's diagnosis."""

    status: DiagnosisStatus
    explanation: str

    def __post_init__(self) -> None:
        """Coerce status strings to DiagnosisStatus.

        Raises:
            ValueError: If status is not one of the three literals.
        """
        object.__setattr__(self, "status", DiagnosisStatus.parse(self.status))

    def to_dict(self) -> dict[str, str]:
        return {"status": self.status.value, "explanation": self.explanation}
