"""Pydantic output models for validating report responses.

Field aliases match the camelCase JSON shape the report prompt asks for.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from virtual_patient.agents.prompts.report import NO_DIAGNOSIS_STATED


class DiagnosisFeedbackOutput(BaseModel):
    """Verdict on the doctor's diagnosis."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["accurate", "partially accurate", "not consistent"]
    explanation: str


class ReportOutput(BaseModel):
    """Structured session report as produced by the model."""

    model_config = ConfigDict(populate_by_name=True)

    summary_of_discussion: str = Field(alias="summaryOfDiscussion")
    emotions_detected: list[str] = Field(alias="emotionsDetected")
    ai_analysis: str = Field(alias="aiAnalysis")
    doctor_diagnosis: str = Field(default=NO_DIAGNOSIS_STATED, alias="doctorDiagnosis")
    diagnosis_feedback: DiagnosisFeedbackOutput = Field(alias="diagnosisFeedback")
    suggested_questions: list[str] = Field(default_factory=list, alias="suggestedQuestions")

    @field_validator("doctor_diagnosis", mode="before")
    @classmethod
    def default_missing_diagnosis(cls, value: object) -> object:
        # Model-trusted: a blank or null diagnosis means none was stated.
        if value is None or (isinstance(value, str) and not value.strip()):
            return NO_DIAGNOSIS_STATED
        return value

    @field_validator("suggested_questions", mode="before")
    @classmethod
    def null_questions_to_empty(cls, value: object) -> object:
        return [] if value is None else value
