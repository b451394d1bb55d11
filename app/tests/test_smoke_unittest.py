import asyncio
import unittest

import httpx

from mirrorcare.clinical import analyze_clinical
from mirrorcare.config import ProviderConfig
from mirrorcare.gateway import ProviderRouter
from mirrorcare.risk import run_demo_analysis
from mirrorcare.schemas import CheckInPayload, ClinicalAnalysisInput, ClinicalVitals


class AlwaysDownTransport(httpx.AsyncBaseTransport):
    def __init__(self):
        self.calls = 0

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        raise httpx.ConnectError("connection refused", request=request)


class MirrorCareSmokeTests(unittest.TestCase):
    def test_demo_analysis_red(self):
        result = run_demo_analysis(
            CheckInPayload(transcript="Chest pain since this morning", vitals=ClinicalVitals(bp="150/95"))
        )

        self.assertEqual(result.triage.risk_level, "red")
        self.assertTrue(result.triage.red_flags)
        self.assertIn("elevated blood pressure", result.clinician_note_draft.objective)

    def test_router_falls_back_when_remote_down(self):
        transport = AlwaysDownTransport()
        router = ProviderRouter(
            ProviderConfig(demo_mode=False, endpoint="http://medgemma.local", timeout_ms=1000),
            transport=transport,
        )

        result = asyncio.run(router.route(CheckInPayload(transcript="feel great")))

        self.assertEqual(result.provider_source, "demo-fallback")
        self.assertEqual(transport.calls, 1)

    def test_end_to_end_clinical_analysis(self):
        router = ProviderRouter(ProviderConfig(demo_mode=False, endpoint=""))
        request = ClinicalAnalysisInput(
            session_id="unittest-session",
            check_in_payload=CheckInPayload(checkin_id="unittest-req", transcript="I missed my pills"),
            follow_up_answers={"current_medications": "metformin"},
        )

        result = asyncio.run(analyze_clinical(request, router))

        self.assertEqual(result.provider_source, "demo-fallback")
        self.assertEqual(result.patient_summary.med_adherence, "poor")
        self.assertIn("Follow-up: current_medications: metformin", result.clinician_note_draft.subjective)


if __name__ == "__main__":
    unittest.main()
