"""Extraction of validated report output from raw completion text."""

from __future__ import annotations

from pydantic import ValidationError

from virtual_patient.agents.output_models import ReportOutput
from virtual_patient.domain.exceptions import LLMResponseParseError, MalformedReportError
from virtual_patient.infrastructure.llm.responses import extract_json_from_response
from virtual_patient.infrastructure.logging import get_logger

logger = get_logger(__name__)

OPERATION = "synthesize_report"


def extract_report(text: str) -> ReportOutput:
    """Parse and validate a report response.

    Raises:
        MalformedReportError: If the text holds no JSON object, or the object
            does not match ``ReportOutput`` (including a status outside the
            three permitted literals).
    """
    try:
        data = extract_json_from_response(text)
    except LLMResponseParseError as e:
        msg = f"Report is not a JSON object: {e.parse_error}"
        raise MalformedReportError(OPERATION, msg, e) from e

    try:
        return ReportOutput.model_validate(data)
    except ValidationError as e:
        logger.warning(
            "Report failed validation",
            error_count=e.error_count(),
            fields=[".".join(str(p) for p in err["loc"]) for err in e.errors()],
        )
        msg = f"Report does not match the required shape: {e}"
        raise MalformedReportError(OPERATION, msg, e) from e
