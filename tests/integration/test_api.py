"""Integration tests for the HTTP API.

The lifespan is not run; app state is wired to a mock chat client instead.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from server import app
from virtual_patient.agents import PatientAgent, ReportAgent
from virtual_patient.config import Settings
from virtual_patient.domain.exceptions import LLMError
from virtual_patient.infrastructure.llm.protocols import ChatRequest
from virtual_patient.services import InMemoryConversationStore, parse_report_text
from virtual_patient.services.consultation import ConsultationService
from tests.fixtures.mock_llm import MockLLMClient

pytestmark = pytest.mark.integration

PATIENT_REPLY = "Honestly? I'm exhausted all the time."


def _wire(llm_client: MockLLMClient) -> None:
    settings = Settings()
    app.state.settings = settings
    app.state.consultation_service = ConsultationService(
        store=InMemoryConversationStore(),
        patient_agent=PatientAgent(llm_client=llm_client, model_settings=settings.model),
        report_agent=ReportAgent(llm_client=llm_client, model_settings=settings.model),
        settings=settings.session,
    )


@pytest.fixture
def llm_client(sample_report_json: str) -> MockLLMClient:
    def respond(request: ChatRequest) -> str:
        return sample_report_json if request.json_mode else PATIENT_REPLY

    return MockLLMClient(chat_function=respond)


@pytest.fixture
def client(llm_client: MockLLMClient) -> Iterator[TestClient]:
    _wire(llm_client)
    yield TestClient(app)
    del app.state.settings
    del app.state.consultation_service


class TestHealth:
    def test_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["backend"] == "ollama"

    def test_uninitialized_service_returns_503(self) -> None:
        response = TestClient(app).get("/conversations")

        assert response.status_code == 503


class TestConversationRoutes:
    def test_create_conversation(self, client: TestClient) -> None:
        response = client.post(
            "/conversations",
            json={"title": "Intake", "patientInfo": {"name": "Sam", "age": 40}},
        )

        assert response.status_code == 201
        conversation = response.json()["conversation"]
        assert conversation["title"] == "Intake"
        assert conversation["patientInfo"] == {
            "name": "Sam",
            "age": 40,
            "symptoms": [],
            "lifeStressors": [],
            "previousTreatment": [],
            "familyHistory": [],
            "personalityTraits": [],
            "copingMechanisms": [],
        }

    def test_create_conversation_default_title(self, client: TestClient) -> None:
        response = client.post("/conversations", json={})

        assert response.status_code == 201
        assert response.json()["conversation"]["title"] == "Psychological Consultation"
        assert response.json()["conversation"]["patientInfo"] == {}

    def test_invalid_profile_returns_400(self, client: TestClient) -> None:
        response = client.post("/conversations", json={"patientInfo": {"age": -3}})

        assert response.status_code == 400

    def test_list_conversations_with_preview(self, client: TestClient) -> None:
        client.post("/chat", json={"message": "Hello."})

        response = client.get("/conversations")

        assert response.status_code == 200
        conversations = response.json()["conversations"]
        assert len(conversations) == 1
        assert conversations[0]["lastMessage"]["content"] == PATIENT_REPLY

    def test_messages_of_unknown_conversation(self, client: TestClient) -> None:
        response = client.get("/conversations/missing/messages")

        assert response.status_code == 404
        assert response.json()["detail"] == "Conversation not found"


class TestChatRoute:
    def test_chat_starts_conversation(self, client: TestClient) -> None:
        response = client.post("/chat", json={"message": "What brings you in today?"})

        assert response.status_code == 200
        body = response.json()
        assert [m["role"] for m in body["messages"]] == ["user", "assistant"]
        assert body["messages"][1]["content"] == PATIENT_REPLY
        assert body["conversation"]["patientInfo"]["name"]

        conversation_id = body["conversation"]["id"]
        messages = client.get(f"/conversations/{conversation_id}/messages").json()["messages"]
        assert len(messages) == 2

    def test_chat_continues_conversation(self, client: TestClient) -> None:
        first = client.post("/chat", json={"message": "Hello."}).json()
        conversation_id = first["conversation"]["id"]

        response = client.post(
            "/chat", json={"conversationId": conversation_id, "message": "Go on."}
        )

        assert response.status_code == 200
        assert response.json()["conversation"]["id"] == conversation_id

    def test_missing_message_returns_400(self, client: TestClient) -> None:
        response = client.post("/chat", json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Message is required"

    def test_unknown_conversation_returns_404(self, client: TestClient) -> None:
        response = client.post("/chat", json={"conversationId": "missing", "message": "Hi"})

        assert response.status_code == 404

    def test_upstream_failure_returns_fallback(self) -> None:
        _wire(MockLLMClient(error=LLMError("connection refused")))
        try:
            response = TestClient(app).post("/chat", json={"message": "Hello?"})
        finally:
            del app.state.settings
            del app.state.consultation_service

        assert response.status_code == 200
        reply = response.json()["messages"][1]["content"]
        assert reply == "Sorry, I could not generate a response."


class TestReportRoutes:
    def _start(self, client: TestClient) -> str:
        body = client.post(
            "/chat",
            json={
                "message": "How have you been sleeping?",
                "patientInfo": {"name": "Ana Lopez", "age": 33, "gender": "female"},
            },
        ).json()
        return str(body["conversation"]["id"])

    def test_generate_report(self, client: TestClient) -> None:
        conversation_id = self._start(client)

        response = client.post("/generate-report", json={"conversationId": conversation_id})

        assert response.status_code == 200
        report = response.json()
        assert report["patientInfo"]["name"] == "Ana Lopez"
        assert report["sessionDuration"] == "0 minutes"
        assert report["diagnosisFeedback"]["status"] == "accurate"
        assert report["suggestedQuestions"] == [
            "Have you had thoughts of self-harm?",
            "How is your appetite?",
        ]

    def test_generate_report_requires_id(self, client: TestClient) -> None:
        response = client.post("/generate-report", json={})

        assert response.status_code == 400

    def test_generate_report_unknown_conversation(self, client: TestClient) -> None:
        response = client.post("/generate-report", json={"conversationId": "missing"})

        assert response.status_code == 404

    def test_malformed_report_returns_502(self) -> None:
        llm_client = MockLLMClient(chat_responses=[PATIENT_REPLY, "not a report"])
        _wire(llm_client)
        try:
            test_client = TestClient(app)
            conversation_id = test_client.post("/chat", json={"message": "Hi"}).json()[
                "conversation"
            ]["id"]
            response = test_client.post(
                "/generate-report", json={"conversationId": conversation_id}
            )
        finally:
            del app.state.settings
            del app.state.consultation_service

        assert response.status_code == 502
        assert response.json()["detail"].startswith("Generation failed")

    def test_report_text_download(self, client: TestClient) -> None:
        conversation_id = self._start(client)

        response = client.post("/generate-report/text", json={"conversationId": conversation_id})

        assert response.status_code == 200
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="session_report_Ana_Lopez_')
        assert disposition.endswith('.txt"')

        parsed = parse_report_text(response.text)
        assert parsed.patient_name == "Ana Lopez"
        assert parsed.patient_age == 33
        assert parsed.status == "accurate"
