"""Follow-up question selection after a check-in."""

from __future__ import annotations

import re
from typing import Iterable

from mirrorcare.schemas import CheckInPayload, FollowUpAnswer, FollowUpQuestion, FollowUpResult

MAX_QUESTIONS_PER_CALL = 3

_URGENT_RE = re.compile(r"\b(chest pain|shortness of breath|fainting|severe headache)\b", re.IGNORECASE)
_APPOINTMENT_RE = re.compile(r"\bdoctor appointment\b|\bappointment\b.*\bdoctor\b", re.IGNORECASE)
_ALLERGY_RE = re.compile(r"\b(allerg(y|ies)|allergic to)\b", re.IGNORECASE)
_MEDICATION_RE = re.compile(r"\b(medication|meds|taking|prescribed)\b", re.IGNORECASE)

URGENT_QUESTIONS = (
    FollowUpQuestion(
        id="urgent_duration",
        question_text="How long have you had this symptom?",
        input_type="text",
        required=True,
        rationale="Assessing duration for urgent symptoms",
    ),
    FollowUpQuestion(
        id="urgent_severity",
        question_text="On a scale of 1-10, how severe is it right now?",
        input_type="number",
        required=True,
        rationale="Severity assessment",
    ),
    FollowUpQuestion(
        id="urgent_dizziness",
        question_text="Any dizziness or vision changes?",
        input_type="text",
        required=False,
        rationale="Rule out neurological involvement",
    ),
)

APPOINTMENT_QUESTIONS = (
    FollowUpQuestion(
        id="appt_date",
        question_text="When is the appointment?",
        input_type="text",
        required=True,
        rationale="Track upcoming care",
    ),
    FollowUpQuestion(
        id="appt_specialty",
        question_text="What specialty (e.g., cardiology, primary care)?",
        input_type="text",
        required=True,
        rationale="Context for care coordination",
    ),
    FollowUpQuestion(
        id="appt_top_question",
        question_text="What's the one question you most want to ask the doctor?",
        input_type="text",
        required=False,
        rationale="Prepare patient for visit",
    ),
)

ALLERGY_QUESTION = FollowUpQuestion(
    id="allergies",
    question_text="Do you have any known allergies (medications, foods, etc.)?",
    input_type="text",
    required=False,
    rationale="Safety - medication reconciliation",
)

MEDICATION_QUESTION = FollowUpQuestion(
    id="current_medications",
    question_text="What medications are you currently taking?",
    input_type="text",
    required=False,
    rationale="Medication reconciliation",
)


def get_next_follow_ups(
    payload: CheckInPayload,
    answers: Iterable[FollowUpAnswer] = (),
) -> FollowUpResult:
    """Pick up to three unanswered follow-up questions for a check-in.

    Urgent-symptom questions come first, then appointment prep, then the
    allergy and medication reconciliation prompts when the transcript does not
    already cover them.
    """
    answered = {answer.id for answer in answers}
    transcript = (payload.transcript or "").lower()
    selected: list[FollowUpQuestion] = []

    def add(question: FollowUpQuestion) -> None:
        if question.id not in answered and len(selected) < MAX_QUESTIONS_PER_CALL:
            selected.append(question)
            answered.add(question.id)

    if _URGENT_RE.search(transcript):
        for question in URGENT_QUESTIONS:
            add(question)

    if _APPOINTMENT_RE.search(transcript):
        for question in APPOINTMENT_QUESTIONS:
            add(question)

    if not _ALLERGY_RE.search(transcript):
        add(ALLERGY_QUESTION)
    if not _MEDICATION_RE.search(transcript):
        add(MEDICATION_QUESTION)

    return FollowUpResult(next_questions=selected, is_complete=not selected)
