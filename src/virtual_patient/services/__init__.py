"""Application services.

Public API:
- ProfileGenerator: Random patient profiles from the reference tables
- ConversationStore: Persistence gateway protocol
- InMemoryConversationStore: Process-local store
- ConsultationService: Chat and report orchestration (import from
  ``virtual_patient.services.consultation``)
- render_report_text / parse_report_text / report_filename: Report text
"""

from virtual_patient.services.conversation_store import (
    ConversationStore,
    ConversationSummary,
    InMemoryConversationStore,
)
from virtual_patient.services.profile_generator import ProfileGenerator, generate_random_profile
from virtual_patient.services.report_text import (
    ParsedReportText,
    parse_report_text,
    render_report_text,
    report_filename,
)

__all__ = [
    "ConversationStore",
    "ConversationSummary",
    "InMemoryConversationStore",
    "ParsedReportText",
    "ProfileGenerator",
    "generate_random_profile",
    "parse_report_text",
    "render_report_text",
    "report_filename",
]
