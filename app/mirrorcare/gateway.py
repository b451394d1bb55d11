"""Provider router: remote MedGemma analysis with a local rule-based fallback."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from mirrorcare.config import ProviderConfig
from mirrorcare.risk import merge_with_heuristics, run_demo_analysis, run_heuristic_triage
from mirrorcare.schemas import REQUIRED_SECTIONS, CareSummaryOutput, CheckInPayload
from mirrorcare.utils import elapsed_ms, now_ms

ANALYZE_PATH = "/analyze_checkin"


def is_valid_care_summary(data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    return all(isinstance(data.get(key), dict) for key in REQUIRED_SECTIONS)


class ProviderRouter:
    def __init__(
        self,
        config: ProviderConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._config = config
        self._transport = transport

    @property
    def config(self) -> ProviderConfig:
        return self._config

    async def _post_json(self, base_url: str, path: str, payload: dict[str, Any]) -> Any:
        url = f"{base_url.strip().rstrip('/')}{path}"
        async with httpx.AsyncClient(
            timeout=self._config.timeout_sec,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await client.post(url, json=payload)
            response.raise_for_status()
            return response.json()

    async def _remote_analysis(self, payload: CheckInPayload) -> CareSummaryOutput:
        # The deadline covers the whole exchange; wait_for cancels the in-flight request.
        try:
            data = await asyncio.wait_for(
                self._post_json(self._config.endpoint, ANALYZE_PATH, payload.model_dump(mode="json")),
                timeout=self._config.timeout_sec,
            )
        except asyncio.TimeoutError as exc:
            raise TimeoutError(f"remote analysis timed out after {self._config.timeout_ms} ms") from exc

        if not is_valid_care_summary(data):
            raise ValueError("Invalid response structure")

        # The source tag is assigned here, never taken from the remote.
        body = {k: v for k, v in data.items() if k not in {"providerSource", "provider_source"}}
        summary = CareSummaryOutput.model_validate(body)

        heuristic = run_heuristic_triage(payload.transcript)
        if heuristic.red_flags:
            print(
                f"[mirrorcare] heuristic_flags: risk={heuristic.risk_level} "
                f"override={heuristic.should_override} flags={heuristic.red_flags}"
            )
        return merge_with_heuristics(summary, heuristic).tagged("medgemma-cloud")

    @staticmethod
    def _fallback(payload: CheckInPayload) -> CareSummaryOutput:
        return run_demo_analysis(payload).tagged("demo-fallback")

    async def route(self, payload: CheckInPayload) -> CareSummaryOutput:
        summary, _meta = await self.route_with_meta(payload)
        return summary

    async def route_with_meta(self, payload: CheckInPayload) -> tuple[CareSummaryOutput, dict[str, Any]]:
        start = now_ms()

        if not self._config.has_endpoint:
            return (
                self._fallback(payload),
                {
                    "engine": "rules.local",
                    "fallback_used": True,
                    "upstream": None,
                    "error": None,
                    "latency_ms": elapsed_ms(start),
                },
            )

        try:
            summary = await self._remote_analysis(payload)
            return (
                summary,
                {
                    "engine": "medgemma.remote",
                    "fallback_used": False,
                    "upstream": self._config.endpoint,
                    "error": None,
                    "latency_ms": elapsed_ms(start),
                },
            )
        except Exception as exc:
            # Every remote failure collapses into the local fallback.
            print(f"[mirrorcare] provider_fallback: {type(exc).__name__}: {exc}")
            return (
                self._fallback(payload),
                {
                    "engine": "rules.gateway_fallback",
                    "fallback_used": True,
                    "upstream": self._config.endpoint,
                    "error": f"{type(exc).__name__}: {exc}",
                    "latency_ms": elapsed_ms(start),
                },
            )

    async def analyze(self, payload: CheckInPayload) -> CareSummaryOutput:
        if self._config.demo_mode:
            return run_demo_analysis(payload)
        return await self.route(payload)
