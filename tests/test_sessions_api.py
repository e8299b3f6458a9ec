import time

import pytest
from fastapi.testclient import TestClient

from app.dependencies import SESSIONS, get_quiz_service
from app.main import app
from app.services.gemini import GeminiQuizService, GenerationError
from app.services.prompts import IMAGE_FAILED_MESSAGE, QUESTIONS_FAILED_MESSAGE

from conftest import FAKE_IMAGE_URL, FakeGenerator, make_questions


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("QUIZ_FEEDBACK_DELAY_S", "0")
    monkeypatch.setenv("QUIZ_IMAGE_PROMPT_DELAY_S", "0")
    SESSIONS.clear()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    SESSIONS.clear()


def _use(generator):
    app.dependency_overrides[get_quiz_service] = lambda: generator
    return generator


def _wait_for(client, session_id, predicate, timeout=3.0):
    deadline = time.monotonic() + timeout
    while True:
        view = client.get(f"/sessions/{session_id}").json()["view"]
        if predicate(view):
            return view
        if time.monotonic() > deadline:
            pytest.fail(f"Timed out waiting on session view, last: {view}")
        time.sleep(0.01)


def _create_at_age(client):
    session_id = client.post("/sessions").json()["session_id"]
    client.post(f"/sessions/{session_id}/start")
    client.post(f"/sessions/{session_id}/gender", json={"gender": "female"})
    client.post(f"/sessions/{session_id}/age", json={"age": "20대"})
    return session_id


def test_full_quiz_flow(client):
    generator = _use(FakeGenerator(questions=make_questions(3)))

    response = client.post("/sessions")
    assert response.status_code == 200
    body = response.json()
    session_id = body["session_id"]
    assert body["view"] == {"screen": "onboarding"}

    view = client.post(f"/sessions/{session_id}/start").json()["view"]
    assert view["screen"] == "gender"
    assert view["options"] == ["male", "female"]

    view = client.post(f"/sessions/{session_id}/gender", json={"gender": "female"}).json()["view"]
    assert view["screen"] == "age"
    assert view["can_start"] is False

    view = client.post(f"/sessions/{session_id}/age", json={"age": "20대"}).json()["view"]
    assert view["age"] == "20대"
    assert view["can_start"] is True

    view = client.post(f"/sessions/{session_id}/quiz").json()["view"]
    assert view["screen"] in {"loading", "quiz"}

    view = _wait_for(client, session_id, lambda v: v["screen"] == "quiz")
    assert view["index"] == 0
    assert view["total"] == 3
    assert view["question"]["question"] == make_questions(3)[0].text
    assert len(view["question"]["options"]) == 5

    for index in range(3):
        _wait_for(client, session_id, lambda v, i=index: v["screen"] == "quiz" and v["index"] == i)
        response = client.post(f"/sessions/{session_id}/answers", json={"option": 1})
        assert response.status_code == 200

    view = _wait_for(client, session_id, lambda v: v["screen"] == "results" and v["show_image_prompt"])
    assert view["result"]["mainWeakness"] == "밀당 과다"
    assert len(generator.analysis_calls) == 1
    assert generator.analysis_calls[0][3] == [1, 1, 1]

    client.post(f"/sessions/{session_id}/image-prompt", json={"accept": True})
    view = _wait_for(client, session_id, lambda v: v["screen"] == "image_result")
    assert view["image_url"] == FAKE_IMAGE_URL
    assert view["result"]["animal"] == "고양이"

    view = client.post(f"/sessions/{session_id}/restart").json()["view"]
    assert view == {"screen": "onboarding"}


def test_question_failure_shows_error(client):
    _use(FakeGenerator(question_error=GenerationError("quota")))
    session_id = _create_at_age(client)

    client.post(f"/sessions/{session_id}/quiz")
    view = _wait_for(client, session_id, lambda v: v["screen"] != "loading")
    assert view == {"screen": "error", "message": QUESTIONS_FAILED_MESSAGE}


def test_image_failure_returns_to_results(client):
    _use(FakeGenerator(questions=make_questions(1), image_error=GenerationError("no image")))
    session_id = _create_at_age(client)
    client.post(f"/sessions/{session_id}/quiz")
    _wait_for(client, session_id, lambda v: v["screen"] == "quiz")
    client.post(f"/sessions/{session_id}/answers", json={"option": 0})
    _wait_for(client, session_id, lambda v: v["screen"] == "results" and v["show_image_prompt"])

    client.post(f"/sessions/{session_id}/image-prompt", json={"accept": True})
    view = _wait_for(client, session_id, lambda v: v["screen"] == "results")
    assert view["notice"] == IMAGE_FAILED_MESSAGE
    assert view["show_restart"] is True


def test_invalid_transition_is_conflict(client):
    _use(FakeGenerator())
    session_id = client.post("/sessions").json()["session_id"]

    response = client.post(f"/sessions/{session_id}/gender", json={"gender": "male"})
    assert response.status_code == 409

    client.post(f"/sessions/{session_id}/start")
    client.post(f"/sessions/{session_id}/gender", json={"gender": "male"})
    response = client.post(f"/sessions/{session_id}/quiz")
    assert response.status_code == 409


def test_out_of_range_answer_is_unprocessable(client):
    _use(FakeGenerator())
    session_id = _create_at_age(client)
    client.post(f"/sessions/{session_id}/quiz")
    _wait_for(client, session_id, lambda v: v["screen"] == "quiz")

    response = client.post(f"/sessions/{session_id}/answers", json={"option": 7})
    assert response.status_code == 422


def test_request_validation(client):
    _use(FakeGenerator())
    session_id = client.post("/sessions").json()["session_id"]
    client.post(f"/sessions/{session_id}/start")

    response = client.post(f"/sessions/{session_id}/gender", json={"gender": "other"})
    assert response.status_code == 422


def test_unknown_session_is_not_found(client):
    assert client.get("/sessions/quiz-missing").status_code == 404
    assert client.post("/sessions/quiz-missing/restart").status_code == 404


def test_delete_session(client):
    _use(FakeGenerator())
    session_id = client.post("/sessions").json()["session_id"]

    assert client.delete(f"/sessions/{session_id}").status_code == 204
    assert session_id not in SESSIONS
    assert client.get(f"/sessions/{session_id}").status_code == 404


def test_health_reports_configuration(client):
    _use(GeminiQuizService(client=None, text_model="gemini-x", image_model="imagen-y"))
    client.post("/sessions")

    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["gemini_configured"] is False
    assert body["text_model"] == "gemini-x"
    assert body["image_model"] == "imagen-y"
    assert body["active_sessions"] == 1


def test_oldest_session_evicted_at_capacity(client, monkeypatch):
    _use(FakeGenerator())
    monkeypatch.setenv("QUIZ_MAX_SESSIONS", "2")

    first = client.post("/sessions").json()["session_id"]
    second = client.post("/sessions").json()["session_id"]
    third = client.post("/sessions").json()["session_id"]

    assert list(SESSIONS) == [second, third]
    assert client.get(f"/sessions/{first}").status_code == 404
    assert client.get(f"/sessions/{third}").status_code == 200
