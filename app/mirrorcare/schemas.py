"""Pydantic schemas for MirrorCare endpoints and internal contracts."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


RiskLevel = Literal["green", "yellow", "red"]
MedAdherence = Literal["good", "poor", "unknown"]
ProviderSource = Literal["demo", "medgemma-cloud", "demo-fallback"]

REQUIRED_SECTIONS = (
    "patient_summary",
    "triage",
    "caregiver_message",
    "clinician_note_draft",
    "model_meta",
)


class ClinicalVitals(BaseModel):
    model_config = ConfigDict(frozen=True, extra="allow")

    bp: str = ""
    hr: str = ""
    spo2: str = ""
    temp: str = ""
    weight: str = ""

    @field_validator("bp", "hr", "spo2", "temp", "weight", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value


class PatientProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    age: int | None = None
    conditions: list[str] = Field(default_factory=list)


class CheckInPayload(BaseModel):
    model_config = ConfigDict(frozen=True)

    checkin_id: str = ""
    transcript: str = ""
    vitals: ClinicalVitals = Field(default_factory=ClinicalVitals)
    yesterday_summary: str | None = None
    patient_profile: PatientProfile | None = None
    retrieved_guidelines: list[str] | None = None

    @field_validator("transcript", mode="before")
    @classmethod
    def _none_transcript(cls, value: Any) -> Any:
        return "" if value is None else value


class ClinicalAnalysisInput(BaseModel):
    session_id: str = Field(
        default="unknown",
        validation_alias=AliasChoices("sessionId", "session_id"),
        serialization_alias="sessionId",
    )
    check_in_payload: CheckInPayload = Field(
        validation_alias=AliasChoices("checkInPayload", "check_in_payload"),
        serialization_alias="checkInPayload",
    )
    follow_up_answers: dict[str, str] | None = Field(
        default=None,
        validation_alias=AliasChoices("followUpAnswers", "follow_up_answers"),
        serialization_alias="followUpAnswers",
    )

    @field_validator("session_id", mode="before")
    @classmethod
    def _default_session(cls, value: Any) -> Any:
        return value or "unknown"


class _Section(BaseModel):
    # Remote providers may add fields; they pass through untouched.
    model_config = ConfigDict(frozen=True, extra="allow", protected_namespaces=())


class PatientSummary(_Section):
    one_liner: str
    key_changes_since_yesterday: list[str]
    symptoms_reported: list[str]
    med_adherence: MedAdherence
    # Passed through as sent; remote providers may report numbers or omit fields.
    vitals: dict[str, Any]


class Triage(_Section):
    risk_level: RiskLevel
    red_flags: list[str]
    recommended_next_steps: list[str]
    when_to_seek_urgent_care: list[str]


class CaregiverMessage(_Section):
    sms_ready_text: str
    questions_to_ask_patient_today: list[str]


class SoapNoteDraft(_Section):
    subjective: str
    objective: str
    assessment: str
    plan: str


class ModelMeta(_Section):
    model: str
    prompt_version: str
    limitations: list[str]


class CareSummaryOutput(_Section):
    patient_summary: PatientSummary
    triage: Triage
    caregiver_message: CaregiverMessage
    clinician_note_draft: SoapNoteDraft
    model_meta: ModelMeta
    provider_source: ProviderSource | None = Field(
        default=None,
        validation_alias=AliasChoices("providerSource", "provider_source"),
        serialization_alias="providerSource",
    )

    def tagged(self, source: ProviderSource) -> CareSummaryOutput:
        return self.model_copy(update={"provider_source": source})

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class FollowUpQuestion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    question_text: str = Field(
        validation_alias=AliasChoices("questionText", "question_text"),
        serialization_alias="questionText",
    )
    input_type: Literal["text", "number"] = Field(
        default="text",
        validation_alias=AliasChoices("inputType", "input_type"),
        serialization_alias="inputType",
    )
    required: bool = False
    rationale: str = ""


class FollowUpAnswer(BaseModel):
    id: str
    answer: Any = None


class FollowUpRequest(BaseModel):
    session_id: str = Field(
        default="unknown",
        validation_alias=AliasChoices("sessionId", "session_id"),
        serialization_alias="sessionId",
    )
    check_in_payload: CheckInPayload = Field(
        validation_alias=AliasChoices("checkInPayload", "check_in_payload"),
        serialization_alias="checkInPayload",
    )
    follow_up_answers: list[FollowUpAnswer] = Field(
        default_factory=list,
        validation_alias=AliasChoices("followUpAnswers", "follow_up_answers"),
        serialization_alias="followUpAnswers",
    )

    @field_validator("session_id", mode="before")
    @classmethod
    def _default_session(cls, value: Any) -> Any:
        return value or "unknown"

    @field_validator("follow_up_answers", mode="before")
    @classmethod
    def _default_answers(cls, value: Any) -> Any:
        return [] if value is None else value


class FollowUpResult(BaseModel):
    next_questions: list[FollowUpQuestion] = Field(
        default_factory=list,
        validation_alias=AliasChoices("nextQuestions", "next_questions"),
        serialization_alias="nextQuestions",
    )
    is_complete: bool = Field(
        default=True,
        validation_alias=AliasChoices("isComplete", "is_complete"),
        serialization_alias="isComplete",
    )

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
