import asyncio
import json

import httpx
import pytest

from mirrorcare.client import ClinicalAnalysisClient, ClinicalAnalysisError
from mirrorcare.risk import run_demo_analysis
from mirrorcare.schemas import CheckInPayload, ClinicalAnalysisInput


def _request() -> ClinicalAnalysisInput:
    return ClinicalAnalysisInput(
        session_id="sess-9",
        check_in_payload=CheckInPayload(checkin_id="c-9", transcript="Took my meds, feel good."),
        follow_up_answers={"allergies": "none"},
    )


def _client(handler) -> ClinicalAnalysisClient:
    return ClinicalAnalysisClient("http://mirror.local/", transport=httpx.MockTransport(handler))


def test_client_posts_camel_case_body_and_parses_summary():
    seen: dict = {}
    summary = run_demo_analysis(CheckInPayload(transcript="Took my meds")).tagged("demo-fallback")

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=summary.to_response())

    result = asyncio.run(_client(handler).analyze(_request()))

    assert seen["url"] == "http://mirror.local/api/clinical/analyze"
    assert seen["body"]["sessionId"] == "sess-9"
    assert seen["body"]["checkInPayload"]["checkin_id"] == "c-9"
    assert seen["body"]["followUpAnswers"] == {"allergies": "none"}
    assert result.provider_source == "demo-fallback"
    assert result == summary


def test_client_raises_with_status_and_body_on_http_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, text="upstream exploded")

    with pytest.raises(ClinicalAnalysisError) as excinfo:
        asyncio.run(_client(handler).analyze(_request()))

    assert str(excinfo.value) == "Clinical analysis failed: 500 upstream exploded"
    assert excinfo.value.status_code == 500
    assert excinfo.value.body == "upstream exploded"


def test_client_raises_on_missing_section():
    body = run_demo_analysis(CheckInPayload(transcript="ok")).to_response()
    body.pop("caregiver_message")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(ClinicalAnalysisError, match="Invalid response structure"):
        asyncio.run(_client(handler).analyze(_request()))


def test_client_raises_on_non_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    with pytest.raises(ClinicalAnalysisError, match="Invalid response structure"):
        asyncio.run(_client(handler).analyze(_request()))


def test_client_raises_on_missing_model_meta():
    body = run_demo_analysis(CheckInPayload(transcript="ok")).to_response()
    body.pop("model_meta")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(ClinicalAnalysisError, match="Invalid response structure") as excinfo:
        asyncio.run(_client(handler).analyze(_request()))

    assert excinfo.value.status_code == 200
