"""Rule-based check-in analysis used in demo mode and as the remote fallback."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable

from mirrorcare import rules
from mirrorcare.schemas import (
    CaregiverMessage,
    CareSummaryOutput,
    CheckInPayload,
    ClinicalVitals,
    MedAdherence,
    ModelMeta,
    PatientSummary,
    RiskLevel,
    SoapNoteDraft,
    Triage,
)
from mirrorcare.utils import risk_rank

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")


def _parse_int(value: str) -> int | None:
    match = _INT_PREFIX.match(value or "")
    if not match:
        return None
    return int(match.group(1))


def extract_symptoms(
    transcript: str,
    patterns: Iterable[tuple[str, str]] = rules.SYMPTOM_PATTERNS,
) -> list[str]:
    text = (transcript or "").lower()
    return [label for needle, label in patterns if needle in text]


def classify_risk(
    transcript: str,
    high_risk_terms: Iterable[str] = rules.HIGH_RISK_TERMS,
    medium_risk_terms: Iterable[str] = rules.MEDIUM_RISK_TERMS,
) -> tuple[RiskLevel, list[str]]:
    """Return the risk tier and the red-flag phrases that set it.

    Tiers are checked red, then yellow; the first matching term ends the scan,
    so at most one high-risk term is ever recorded.
    """
    text = (transcript or "").lower()

    for term in high_risk_terms:
        if term in text:
            return "red", [f"Patient reported: {term}"]

    for term in medium_risk_terms:
        if term in text:
            return "yellow", []

    return "green", []


def infer_med_adherence(transcript: str) -> MedAdherence:
    text = (transcript or "").lower()
    if rules.GOOD_ADHERENCE_VERB in text and any(obj in text for obj in rules.GOOD_ADHERENCE_OBJECTS):
        return "good"
    if any(term in text for term in rules.POOR_ADHERENCE_TERMS):
        return "poor"
    return "unknown"


def assess_vitals(vitals: ClinicalVitals) -> list[str]:
    findings: list[str] = []

    if vitals.bp:
        parts = vitals.bp.split("/")
        if len(parts) == 2:
            systolic = _parse_int(parts[0])
            if systolic is not None:
                if systolic > rules.SYSTOLIC_HIGH:
                    findings.append("elevated blood pressure")
                elif systolic < rules.SYSTOLIC_LOW:
                    findings.append("low blood pressure")

    if vitals.hr:
        hr = _parse_int(vitals.hr)
        if hr is not None:
            if hr > rules.HEART_RATE_HIGH:
                findings.append("elevated heart rate")
            elif hr < rules.HEART_RATE_LOW:
                findings.append("low heart rate")

    return findings


def _subjective(transcript: str) -> str:
    if len(transcript) > rules.SUBJECTIVE_MAX_CHARS:
        return f"Patient reports: {transcript[: rules.SUBJECTIVE_MAX_CHARS]}..."
    return f"Patient reports: {transcript}"


def _objective(vitals: ClinicalVitals, findings: list[str]) -> str:
    assessment = "; ".join(findings) if findings else "Vitals within normal limits."
    return (
        f"Vitals: BP {vitals.bp or 'N/A'}, HR {vitals.hr or 'N/A'}, "
        f"SpO2 {vitals.spo2 or 'N/A'}. {assessment}"
    )


def _normalized_vitals(vitals: ClinicalVitals) -> dict[str, str]:
    return dict(
        bp=vitals.bp or rules.NOT_RECORDED,
        hr=vitals.hr or rules.NOT_RECORDED,
        spo2=vitals.spo2 or rules.NOT_RECORDED,
        temp=vitals.temp or rules.NOT_RECORDED,
        weight=vitals.weight or rules.NOT_RECORDED,
    )


def run_demo_analysis(payload: CheckInPayload) -> CareSummaryOutput:
    transcript = payload.transcript or ""
    vitals = payload.vitals

    symptoms = extract_symptoms(transcript)
    risk_level, red_flags = classify_risk(transcript)
    if not red_flags and risk_level == "yellow":
        red_flags = [rules.YELLOW_RED_FLAG]
    med_adherence = infer_med_adherence(transcript)
    findings = assess_vitals(vitals)

    one_liner = rules.ONE_LINERS[risk_level]
    stable = risk_level == "green"

    status_note = "All looks good!" if stable else "Some symptoms noted - please monitor."

    return CareSummaryOutput(
        patient_summary=PatientSummary(
            one_liner=one_liner,
            key_changes_since_yesterday=symptoms[:2] if symptoms else ["No significant changes noted"],
            symptoms_reported=symptoms if symptoms else ["None reported"],
            med_adherence=med_adherence,
            vitals=_normalized_vitals(vitals),
        ),
        triage=Triage(
            risk_level=risk_level,
            red_flags=red_flags,
            recommended_next_steps=list(rules.STABLE_NEXT_STEPS if stable else rules.MONITOR_NEXT_STEPS),
            when_to_seek_urgent_care=list(rules.URGENT_CARE_TRIGGERS),
        ),
        caregiver_message=CaregiverMessage(
            sms_ready_text=f"Check-in complete. Status: {risk_level.upper()}. {status_note}",
            questions_to_ask_patient_today=list(rules.CAREGIVER_QUESTIONS),
        ),
        clinician_note_draft=SoapNoteDraft(
            subjective=_subjective(transcript),
            objective=_objective(vitals, findings),
            assessment=f"{rules.ASSESSMENT_LABELS[risk_level]} - {one_liner}",
            plan=rules.STABLE_PLAN if stable else rules.MONITOR_PLAN,
        ),
        model_meta=ModelMeta(
            model=rules.DEMO_MODEL_NAME,
            prompt_version=rules.DEMO_PROMPT_VERSION,
            limitations=list(rules.DEMO_LIMITATIONS),
        ),
        provider_source="demo",
    )


_HEURISTIC_RULES = tuple(
    (re.compile(pattern, re.IGNORECASE), flag, severity)
    for pattern, flag, severity in rules.HEURISTIC_RED_FLAG_PATTERNS
)


@dataclass(frozen=True)
class HeuristicResult:
    risk_level: RiskLevel = "green"
    red_flags: list[str] = field(default_factory=list)
    triggered_rules: list[str] = field(default_factory=list)
    should_override: bool = False


def run_heuristic_triage(transcript: str, table=_HEURISTIC_RULES) -> HeuristicResult:
    """Scan a transcript with the regex red-flag table.

    Unlike `classify_risk`, every matching rule is collected and the most
    severe tier wins.
    """
    red_flags: list[str] = []
    triggered: list[str] = []
    risk: RiskLevel = "green"

    for pattern, flag, severity in table:
        if pattern.search(transcript or ""):
            red_flags.append(flag)
            triggered.append(pattern.pattern)
            if risk_rank(severity) > risk_rank(risk):
                risk = severity

    return HeuristicResult(
        risk_level=risk,
        red_flags=red_flags,
        triggered_rules=triggered,
        should_override=risk == "red" or len(red_flags) >= rules.HEURISTIC_OVERRIDE_MIN_FLAGS,
    )


def merge_with_heuristics(summary: CareSummaryOutput, heuristic: HeuristicResult) -> CareSummaryOutput:
    """Fold heuristic red flags into a model-produced summary.

    A summary is returned as-is when the heuristics found nothing. A model
    "green" facing a heuristic "red" is raised only to "yellow".
    """
    if not heuristic.red_flags:
        return summary

    triage = summary.triage
    risk_level = triage.risk_level
    next_steps = list(triage.recommended_next_steps)
    limitations = list(summary.model_meta.limitations)

    if heuristic.should_override and risk_rank(heuristic.risk_level) > risk_rank(risk_level):
        if risk_level == "green" and heuristic.risk_level == "red":
            risk_level = "yellow"
            next_steps = [rules.HEURISTIC_ESCALATION_STEP, *next_steps]
        else:
            risk_level = heuristic.risk_level
        limitations.append(rules.HEURISTIC_LIMITATION)

    urgent = list(triage.when_to_seek_urgent_care)
    if heuristic.risk_level == "red":
        urgent = list(dict.fromkeys([*urgent, *(f"If {flag.lower()} worsens" for flag in heuristic.red_flags)]))

    return summary.model_copy(
        update={
            "triage": triage.model_copy(
                update={
                    "risk_level": risk_level,
                    "red_flags": list(dict.fromkeys([*triage.red_flags, *heuristic.red_flags])),
                    "recommended_next_steps": next_steps,
                    "when_to_seek_urgent_care": urgent,
                }
            ),
            "model_meta": summary.model_meta.model_copy(update={"limitations": limitations}),
        }
    )
