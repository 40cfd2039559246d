"""Domain models and entities for patient simulation.

This module provides the core domain layer for Virtual Patient,
containing pure Python objects with no external dependencies.

Modules:
    enums: Domain enumerations (Role, Gender, DiagnosisStatus)
    catalogs: Fixed reference tables for profile generation
    value_objects: Immutable value types (PatientProfile, ConversationTurn, ...)
    entities: Records and reports (ConversationRecord, SessionReport, ...)
    exceptions: Domain-specific exceptions

Example:
    >>> from virtual_patient.domain import DiagnosisStatus
    >>> DiagnosisStatus.parse("partially accurate")
    <DiagnosisStatus.PARTIALLY_ACCURATE: 'partially accurate'>
"""

from virtual_patient.domain.entities import (
    ConversationRecord,
    LoadedConversation,
    MessageRecord,
    SessionReport,
)
from virtual_patient.domain.enums import DiagnosisStatus, Gender, Role
from virtual_patient.domain.exceptions import (
    ConversationNotFoundError,
    DomainError,
    GenerationError,
    LLMError,
    LLMResponseParseError,
    LLMTimeoutError,
    MalformedReportError,
    UpstreamGenerationError,
    ValidationError,
)
from virtual_patient.domain.value_objects import (
    ConversationTurn,
    DiagnosisFeedback,
    PatientProfile,
)

__all__ = [
    "ConversationNotFoundError",
    "ConversationRecord",
    "ConversationTurn",
    "DiagnosisFeedback",
    "DiagnosisStatus",
    "DomainError",
    "Gender",
    "GenerationError",
    "LLMError",
    "LLMResponseParseError",
    "LLMTimeoutError",
    "LoadedConversation",
    "MalformedReportError",
    "MessageRecord",
    "PatientProfile",
    "Role",
    "SessionReport",
    "UpstreamGenerationError",
    "ValidationError",
]
