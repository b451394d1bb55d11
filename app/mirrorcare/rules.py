"""Fixed lookup tables for the rule-based check-in analyzer.

Order matters: symptom labels are emitted in table order and risk terms are
matched first-hit-wins.
"""

from __future__ import annotations

SYMPTOM_PATTERNS: tuple[tuple[str, str], ...] = (
    ("tired", "fatigue"),
    ("fatigue", "fatigue"),
    ("exhausted", "fatigue"),
    ("pain", "pain reported"),
    ("ache", "body aches"),
    ("headache", "headache"),
    ("dizzy", "dizziness"),
    ("nausea", "nausea"),
    ("cough", "cough"),
    ("fever", "fever"),
    ("cold", "cold symptoms"),
    ("stress", "stress"),
    ("anxiety", "anxiety"),
    ("sleep", "sleep issues"),
    ("insomnia", "insomnia"),
)

HIGH_RISK_TERMS: tuple[str, ...] = (
    "chest pain",
    "difficulty breathing",
    "severe",
    "emergency",
    "can't breathe",
    "cannot breathe",
    "unconscious",
    "bleeding",
    "blood in",
    "coughing blood",
)

MEDIUM_RISK_TERMS: tuple[str, ...] = (
    "dizzy",
    "nausea",
    "fever",
    "pain",
    "worse",
    "concerned",
)

GOOD_ADHERENCE_VERB = "took"
GOOD_ADHERENCE_OBJECTS: tuple[str, ...] = ("med", "pill", "medication")
POOR_ADHERENCE_TERMS: tuple[str, ...] = ("forgot", "missed", "didn't take")

SYSTOLIC_HIGH = 140
SYSTOLIC_LOW = 90
HEART_RATE_HIGH = 100
HEART_RATE_LOW = 60

SUBJECTIVE_MAX_CHARS = 200
NOT_RECORDED = "not recorded"

ONE_LINERS: dict[str, str] = {
    "green": "Patient appears stable with no significant concerns reported.",
    "yellow": "Patient reports some symptoms that warrant monitoring.",
    "red": "Patient reports concerning symptoms - clinical review recommended.",
}

ASSESSMENT_LABELS: dict[str, str] = {
    "green": "Stable",
    "yellow": "Requires monitoring",
    "red": "Concerning symptoms",
}

STABLE_NEXT_STEPS: tuple[str, ...] = (
    "Continue current care plan",
    "Monitor symptoms and vitals daily",
    "Contact care team if symptoms worsen",
)

MONITOR_NEXT_STEPS: tuple[str, ...] = (
    "Close symptom monitoring recommended",
    "Consider scheduling follow-up if symptoms persist",
    "Contact care team with any new concerns",
)

STABLE_PLAN = "Continue current treatment plan. Follow up as scheduled."
MONITOR_PLAN = "Close monitoring recommended. Consider follow-up if symptoms persist or worsen."

YELLOW_RED_FLAG = "Mild symptoms reported - monitoring advised"

URGENT_CARE_TRIGGERS: tuple[str, ...] = (
    "Chest pain or pressure",
    "Difficulty breathing",
    "Sudden severe symptoms",
    "Signs of infection (high fever, chills)",
)

CAREGIVER_QUESTIONS: tuple[str, ...] = (
    "How is your energy level today?",
    "Any new symptoms or concerns?",
    "Did you take all your medications?",
)

DEMO_MODEL_NAME = "medgemma-demo"
DEMO_PROMPT_VERSION = "v1-demo"
DEMO_LIMITATIONS: tuple[str, ...] = (
    "Demo mode - rule-based analysis",
    "Not medical advice",
    "For demonstration only",
)

# Safety-net patterns applied on top of remote model output: (regex, flag, severity).
HEURISTIC_RED_FLAG_PATTERNS: tuple[tuple[str, str, str], ...] = (
    (r"chest\s*pain", "Chest pain reported", "red"),
    (
        r"can'?t\s*breathe|cannot\s*breathe|difficulty\s*breathing|shortness\s*of\s*breath|hard\s*to\s*breathe",
        "Breathing difficulty reported",
        "red",
    ),
    (r"fainted|passed\s*out|lost\s*consciousness|blacked\s*out", "Loss of consciousness reported", "red"),
    (r"confusion|confused|disoriented|don'?t\s*know\s*where\s*i\s*am", "Confusion or disorientation reported", "red"),
    (r"severe\s*pain", "Severe pain reported", "red"),
    (r"numbness.*face|face.*numb|arm.*numb|leg.*numb|one\s*side.*weak", "Possible stroke symptoms", "red"),
    (r"blood\s*in.*stool|blood\s*in.*urine|coughing.*blood|vomiting.*blood", "Bleeding symptom reported", "red"),
    (r"suicidal|want\s*to\s*die|harm\s*myself|end\s*my\s*life", "Mental health crisis indicated", "red"),
    (r"allergic\s*reaction|throat.*swelling|can'?t\s*swallow", "Possible allergic reaction", "red"),
    (r"seizure|convulsion", "Seizure reported", "red"),
    (r"dizzy|dizziness|lightheaded", "Dizziness reported", "yellow"),
    (r"nausea|vomiting|threw\s*up", "Nausea/vomiting reported", "yellow"),
    (r"fever|temperature.*high|feel.*hot", "Possible fever", "yellow"),
    (r"headache|head\s*hurts|migraine", "Headache reported", "yellow"),
    (r"swelling|swollen", "Swelling reported", "yellow"),
    (r"rash|skin.*irritation|hives", "Skin issue reported", "yellow"),
    (
        r"didn'?t\s*take.*medication|missed.*medication|forgot.*medication|skip.*medication",
        "Medication non-adherence",
        "yellow",
    ),
    (r"blood\s*sugar.*high|blood\s*sugar.*low|glucose.*high|glucose.*low", "Blood sugar concern", "yellow"),
    (r"can'?t\s*sleep|insomnia|no\s*sleep", "Sleep issues reported", "yellow"),
    (r"anxiety|anxious|panic", "Anxiety reported", "yellow"),
    (r"depressed|depression|sad\s*all\s*the\s*time", "Depression symptoms", "yellow"),
    (r"pain", "Pain reported", "yellow"),
)

HEURISTIC_OVERRIDE_MIN_FLAGS = 3
HEURISTIC_ESCALATION_STEP = "Heuristic safety check flagged potential concerns"
HEURISTIC_LIMITATION = "Risk level adjusted by safety heuristics"
