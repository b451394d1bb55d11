from mirrorcare.followup import MAX_QUESTIONS_PER_CALL, get_next_follow_ups
from mirrorcare.schemas import CheckInPayload, FollowUpAnswer


def _ids(result):
    return [q.id for q in result.next_questions]


def test_urgent_symptoms_ask_urgent_questions_first():
    result = get_next_follow_ups(CheckInPayload(transcript="I had chest pain this morning"))

    assert _ids(result) == ["urgent_duration", "urgent_severity", "urgent_dizziness"]
    assert result.is_complete is False
    assert result.next_questions[1].input_type == "number"


def test_answered_questions_are_skipped():
    answers = [FollowUpAnswer(id="urgent_duration", answer="2 hours")]
    result = get_next_follow_ups(CheckInPayload(transcript="Severe headache since noon"), answers)

    assert _ids(result) == ["urgent_severity", "urgent_dizziness", "allergies"]


def test_appointment_questions():
    result = get_next_follow_ups(
        CheckInPayload(transcript="I have a doctor appointment and I'm allergic to penicillin. Taking my meds.")
    )

    assert _ids(result) == ["appt_date", "appt_specialty", "appt_top_question"]


def test_reconciliation_questions_when_not_mentioned():
    result = get_next_follow_ups(CheckInPayload(transcript="Feeling fine today"))

    assert _ids(result) == ["allergies", "current_medications"]


def test_complete_when_nothing_left_to_ask():
    result = get_next_follow_ups(
        CheckInPayload(transcript="No allergy issues, taking my medication as prescribed")
    )

    assert result.next_questions == []
    assert result.is_complete is True


def test_never_more_than_three_questions():
    answers: list[FollowUpAnswer] = []
    transcript = "chest pain before my doctor appointment"
    seen: list[str] = []
    for _ in range(4):
        result = get_next_follow_ups(CheckInPayload(transcript=transcript), answers)
        assert len(result.next_questions) <= MAX_QUESTIONS_PER_CALL
        seen.extend(_ids(result))
        answers.extend(FollowUpAnswer(id=qid, answer="x") for qid in _ids(result))

    assert seen == [
        "urgent_duration",
        "urgent_severity",
        "urgent_dizziness",
        "appt_date",
        "appt_specialty",
        "appt_top_question",
        "allergies",
        "current_medications",
    ]


def test_response_uses_camel_case_keys():
    body = get_next_follow_ups(CheckInPayload(transcript="")).to_response()

    assert body["isComplete"] is False
    assert body["nextQuestions"][0]["questionText"]
    assert body["nextQuestions"][0]["inputType"] == "text"
