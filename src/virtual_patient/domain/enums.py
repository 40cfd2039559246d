"""Domain enumerations for Virtual Patient.

- Role: Speaker of a conversation turn
- Gender: Genders the profile generator draws from
- DiagnosisStatus: Report verdict on the doctor's diagnosis
"""

from __future__ import annotations

from enum import StrEnum


class Role(StrEnum):
    """Conversation turn roles.

    The doctor speaks as ``user`` and the simulated patient as ``assistant``.
    ``system`` entries are instructions and never come from callers.
    """

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


class Gender(StrEnum):
    """Genders used by the profile generator."""

    MALE = "male"
    FEMALE = "female"
    NON_BINARY = "non-binary"


class DiagnosisStatus(StrEnum):
    """How well the doctor's diagnosis matches the patient's presentation.

    Exactly three values are valid; anything else returned by the report
    model is a contract violation.
    """

    ACCURATE = "accurate"
    PARTIALLY_ACCURATE = "partially accurate"
    NOT_CONSISTENT = "not consistent"

    @classmethod
    def parse(cls, value: str) -> DiagnosisStatus:
        """Parse a literal status value.

        Raises:
            ValueError: If ``value`` is not one of the three literals.
        """
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(repr(s.value) for s in cls)
            msg = f"Invalid diagnosis status {value!r}; expected one of {allowed}"
            raise ValueError(msg) from None
