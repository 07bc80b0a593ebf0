import pytest
import requests
from fastapi.testclient import TestClient
from api.main import app
from api.shared import clear_cache, get_notifier
from models.submission import Submission, QuestionAnswer
from services.telegram_service import TelegramNotifier


class FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class FakeSession:
    """Thay requests.Session, ghi lại các lần gọi sendMessage"""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        result = self.responses.pop(0) if self.responses else {"ok": True, "result": {}}
        if isinstance(result, requests.exceptions.RequestException):
            raise result
        return FakeResponse(result)


class FakeSleep:
    def __init__(self):
        self.delays = []

    def __call__(self, seconds):
        self.delays.append(seconds)


@pytest.fixture
def fake_session():
    return FakeSession()


@pytest.fixture
def fake_sleep():
    return FakeSleep()


@pytest.fixture
def make_notifier(fake_session, fake_sleep):
    def _make(bot_token="123:abc", chat_id="42", **kwargs):
        return TelegramNotifier(
            bot_token=bot_token,
            chat_id=chat_id,
            session=kwargs.pop("session", fake_session),
            sleep=kwargs.pop("sleep", fake_sleep),
            **kwargs,
        )
    return _make


@pytest.fixture
def client(monkeypatch):
    for name in ("TELEGRAM_BOT_TOKEN", "TELEGRAM_CHAT_ID", "REPORT_TIMEZONE"):
        monkeypatch.delenv(name, raising=False)
    clear_cache()
    yield TestClient(app)
    app.dependency_overrides.clear()
    clear_cache()


@pytest.fixture
def override_notifier():
    def _override(notifier):
        app.dependency_overrides[get_notifier] = lambda: notifier
    return _override


@pytest.fixture
def ana_payload():
    return {
        "studentName": "Ana",
        "questions": [
            {"question": "Q1", "options": ["a", "b"], "correct": 0, "selected": 0},
            {"question": "Q2", "options": ["a", "b"], "correct": 1},
        ],
        "timeSpent": 65,
        "timeLeft": 0,
        "leaveCount": 5,
    }


@pytest.fixture
def ana_submission():
    return Submission(
        student_name="Ana",
        questions=[
            QuestionAnswer(question="Q1", options=["a", "b"], correct=0, selected=0),
            QuestionAnswer(question="Q2", options=["a", "b"], correct=1),
        ],
        time_spent=65,
        time_left=0,
        leave_count=5,
    )


@pytest.fixture
def long_payload():
    """Payload có báo cáo dài hơn 4000 ký tự (và ngắn hơn 8000)"""
    num_questions, text_length = 10, 500
    return {
        "studentName": "Long",
        "questions": [
            {"question": "x" * text_length, "options": ["yes", "no"], "correct": 0, "selected": 1}
            for _ in range(num_questions)
        ],
        "timeSpent": 600,
        "timeLeft": 30,
        "leaveCount": 0,
    }
