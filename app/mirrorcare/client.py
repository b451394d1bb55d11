"""HTTP client for the clinical analysis endpoint.

This is the caller-facing side: the server has already exhausted its own
fallback, so failures here are raised rather than absorbed.
"""

from __future__ import annotations

from typing import Any

import httpx
from pydantic import ValidationError

from mirrorcare.gateway import is_valid_care_summary
from mirrorcare.schemas import CareSummaryOutput, ClinicalAnalysisInput

ANALYZE_PATH = "/api/clinical/analyze"


class ClinicalAnalysisError(RuntimeError):
    def __init__(self, message: str, *, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ClinicalAnalysisClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout_sec: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout_sec = timeout_sec
        self._transport = transport

    async def analyze(self, request: ClinicalAnalysisInput) -> CareSummaryOutput:
        body = request.model_dump(mode="json", by_alias=True, exclude_none=True)
        async with httpx.AsyncClient(timeout=self._timeout_sec, transport=self._transport) as client:
            response = await client.post(f"{self._base_url}{ANALYZE_PATH}", json=body)

        if not response.is_success:
            raise ClinicalAnalysisError(
                f"Clinical analysis failed: {response.status_code} {response.text}",
                status_code=response.status_code,
                body=response.text,
            )

        try:
            data: Any = response.json()
            if not is_valid_care_summary(data):
                raise ValueError("missing required section")
            return CareSummaryOutput.model_validate(data)
        except (ValueError, ValidationError) as exc:
            raise ClinicalAnalysisError(
                "Invalid response structure",
                status_code=response.status_code,
                body=response.text,
            ) from exc
