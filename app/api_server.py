"""HTTP entrypoint for the MirrorCare clinical analysis API."""

from __future__ import annotations

from typing import Any

import httpx
from fastapi import Body, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import ValidationError

from mirrorcare.clinical import analyze_clinical
from mirrorcare.config import get_settings
from mirrorcare.followup import get_next_follow_ups
from mirrorcare.gateway import ProviderRouter
from mirrorcare.schemas import ClinicalAnalysisInput, FollowUpRequest
from mirrorcare.utils import clip_text, utc_now


settings = get_settings()
router = ProviderRouter(settings.provider_config())

app = FastAPI(title="MirrorCare Clinical API", version="1.0.0")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)


@app.get("/health")
async def health(probe: bool = False) -> dict[str, Any]:
    config = router.config
    remote: dict[str, Any] = {
        "configured": config.has_endpoint,
        "reachable": None,
        "status_code": None,
        "error": None,
        "url": config.endpoint or None,
    }

    if probe and config.has_endpoint:
        try:
            async with httpx.AsyncClient(timeout=4.0, follow_redirects=True) as client:
                response = await client.get(f"{config.endpoint.strip().rstrip('/')}/health")
            remote["reachable"] = response.is_success
            remote["status_code"] = response.status_code
            if not response.is_success:
                remote["error"] = clip_text(response.text)
        except Exception as exc:
            remote["reachable"] = False
            remote["error"] = str(exc)

    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp": utc_now().isoformat(),
        "demo_mode": config.demo_mode,
        "timeout_ms": config.timeout_ms,
        "medgemma_configured": config.has_endpoint,
        "medgemma_reachable": remote["reachable"],
        "probe_performed": probe,
        "remote": remote,
    }


@app.post("/api/clinical/analyze")
async def clinical_analyze(payload: dict[str, Any] = Body(...)):
    if not (payload.get("checkInPayload") or payload.get("check_in_payload")):
        raise HTTPException(status_code=400, detail={"error": "checkInPayload required"})

    try:
        request = ClinicalAnalysisInput.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors()) from exc

    try:
        summary = await analyze_clinical(request, router)
    except Exception as exc:
        print(f"[mirrorcare] clinical_analyze_failed: {type(exc).__name__}: {exc}")
        raise HTTPException(
            status_code=500,
            detail={"error": str(exc) or "Clinical analysis failed"},
        ) from exc

    return summary.to_response()


@app.post("/api/followup/next")
async def followup_next(payload: dict[str, Any] = Body(...)):
    if not (payload.get("checkInPayload") or payload.get("check_in_payload")):
        raise HTTPException(status_code=400, detail={"error": "checkInPayload required"})

    try:
        request = FollowUpRequest.model_validate(payload)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors()) from exc

    result = get_next_follow_ups(request.check_in_payload, request.follow_up_answers)
    return result.to_response()
