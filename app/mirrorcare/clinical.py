"""Clinical analysis entry point used by the HTTP layer."""

from __future__ import annotations

from typing import Mapping

from mirrorcare.gateway import ProviderRouter
from mirrorcare.schemas import CareSummaryOutput, CheckInPayload, ClinicalAnalysisInput


def apply_follow_up_answers(
    payload: CheckInPayload,
    answers: Mapping[str, str] | None,
) -> CheckInPayload:
    if not answers:
        return payload
    extra = ". ".join(f"{key}: {value}" for key, value in answers.items())
    return payload.model_copy(update={"transcript": f"{payload.transcript}\n\nFollow-up: {extra}"})


async def analyze_clinical(request: ClinicalAnalysisInput, router: ProviderRouter) -> CareSummaryOutput:
    payload = apply_follow_up_answers(request.check_in_payload, request.follow_up_answers)
    return await router.analyze(payload)
