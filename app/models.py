"""Data models for the painting lead assistant."""

import enum
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class LeadStatus(str, enum.Enum):
    """Lead lifecycle inside one conversation. Only moves NEW -> LEAD_CAPTURED."""
    NEW = "NEW"
    LEAD_CAPTURED = "LEAD_CAPTURED"


class ConversationIntent(str, enum.Enum):
    """What the assistant last asked for; advisory context for the next turn."""
    GREETING = "GREETING"
    NEW = "NEW"
    LEAD_CAPTURED = "LEAD_CAPTURED"
    LEAD_MODIFICATION = "LEAD_MODIFICATION"
    SCHEDULE_SITE_VISIT = "SCHEDULE_SITE_VISIT"


class HighLevelIntent(str, enum.Enum):
    """Intent labels produced by the classifier."""
    GREETING = "GREETING"
    NEW_LEAD = "NEW_LEAD"
    GENERATE_QUOTE_OPTIONS = "GENERATE_QUOTE_OPTIONS"
    UPDATE_EXISTING_LEAD = "UPDATE_EXISTING_LEAD"
    LOG_MEASUREMENT = "LOG_MEASUREMENT"
    GENERAL_QUESTION = "GENERAL_QUESTION"
    OTHER = "OTHER"


class JobType(str, enum.Enum):
    PAINTING = "painting"
    PLUMBING = "plumbing"
    ELECTRICAL = "electrical"
    CIVIL = "civil"
    UNKNOWN = "unknown"


class Urgency(str, enum.Enum):
    TODAY = "today"
    TOMORROW = "tomorrow"
    THIS_WEEK = "this_week"
    NEXT_WEEK = "next_week"
    FLEXIBLE = "flexible"
    UNKNOWN = "unknown"


class PreferredLanguage(str, enum.Enum):
    HINDI = "hi"
    ENGLISH = "en"
    MIXED = "mixed"
    UNKNOWN = "unknown"


class ConversationState(BaseModel):
    """Per-conversation state owned by the session layer."""
    lead_status: LeadStatus = LeadStatus.NEW
    last_intent: Optional[ConversationIntent] = None
    lead_id: Optional[str] = None


class Customer(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None


class ScopeHint(BaseModel):
    interior: Optional[bool] = None
    exterior: Optional[bool] = None


class LeadAnalysis(BaseModel):
    """Structured extraction of one utterance, produced by the lead extractor."""
    contractor_id: Optional[str] = None
    raw_utterance: str = ""
    customer: Customer = Field(default_factory=Customer)
    location_text: Optional[str] = None
    job_type: JobType = JobType.UNKNOWN
    scope_hint: ScopeHint = Field(default_factory=ScopeHint)
    urgency: Urgency = Urgency.UNKNOWN
    preferred_language: PreferredLanguage = PreferredLanguage.UNKNOWN

    @field_validator("job_type", "urgency", "preferred_language", mode="before")
    @classmethod
    def _unknown_label(cls, value, info):
        # null or off-list labels from the extractor mean "not understood"
        enum_type = cls.model_fields[info.field_name].annotation
        if isinstance(value, enum_type):
            return value
        normalized = str(value).strip().lower() if value is not None else ""
        if normalized in {member.value for member in enum_type}:
            return normalized
        return enum_type.UNKNOWN

    @field_validator("customer", "scope_hint", mode="before")
    @classmethod
    def _default_when_null(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].annotation()
        return value


class AnalysisResult(BaseModel):
    """Lead extractor outcome as handed to the orchestrator."""
    success: bool
    data: Optional[LeadAnalysis] = None
    error: Optional[str] = None


class LeadIntentResult(BaseModel):
    """Classifier output."""
    intent: HighLevelIntent
    lead_hint: Optional[str] = None  # e.g. "HSR 2BHK Rahil"
    topic: Optional[str] = None  # one-line summary for GENERAL_QUESTION


class MeasurementData(BaseModel):
    """Site measurement details recorded against a lead."""
    bhk: Optional[float] = None
    sqft: Optional[float] = None
    paintable_area: Optional[float] = None
    ceilings: Optional[int] = None
    coats: Optional[int] = None
    dampness: Optional[bool] = None
    putty_level: Optional[str] = None
    brand_preference: Optional[str] = None


class DependencyType(str, enum.Enum):
    PROJECT_REQUIRED = "PROJECT_REQUIRED"
    MEASUREMENT_REQUIRED = "MEASUREMENT_REQUIRED"
    BHK_REQUIRED = "BHK_REQUIRED"
    SQFT_REQUIRED = "SQFT_REQUIRED"
    PAINTABLE_AREA_REQUIRED = "PAINTABLE_AREA_REQUIRED"


class Dependency(BaseModel):
    """Unmet precondition blocking quote generation."""
    type: DependencyType
    message: str
    action: Optional[str] = None


class QuoteRequirements(BaseModel):
    options: int = 3
    timeline: Optional[str] = None  # e.g. "5 days"
    advance: Optional[int] = None  # percentage
    labour_and_material: bool = False


class ToolCall(BaseModel):
    """Declarative instruction for the caller to run an external action."""
    name: str
    arguments: dict[str, Any]


class MissingFields(BaseModel):
    missing: dict[str, bool] = Field(default_factory=dict)
    questions: list[str] = Field(default_factory=list)


class TurnDecision(BaseModel):
    """Result of one orchestrator turn."""
    reply: str
    new_state: ConversationState
    rule: str  # name of the precedence rule that produced the decision
    tool_call: Optional[ToolCall] = None
    dependencies: Optional[list[Dependency]] = None
    missing: Optional[dict[str, bool]] = None


class ProjectFlowState(BaseModel):
    """Per-chat state of the step-by-step project questionnaire."""
    step: int = 0
    answers: dict[str, str] = Field(default_factory=dict)
    waiting_for_assign_confirm: bool = False


class ProjectSavePayload(BaseModel):
    work_location: Optional[str] = None
    rooms_count: Optional[str] = None
    assign_resources: bool


class ProjectFlowResult(BaseModel):
    reply_text: Optional[str] = None
    # Present only when the questionnaire finished with a yes/no decision.
    save_payload: Optional[ProjectSavePayload] = None


class CapturedLead(BaseModel):
    """A lead confirmed by the user and persisted by the caller."""
    id: str
    contractor_id: Optional[str] = None
    analysis: LeadAnalysis
    created_at: datetime


class QuoteTier(str, enum.Enum):
    BASIC = "basic"
    STANDARD = "standard"
    PREMIUM = "premium"


class QuoteOption(BaseModel):
    tier: QuoteTier
    price: int
    description: str
    timeline: str
    advance_percentage: int
    includes: list[str] = Field(default_factory=list)


class QuoteResponse(BaseModel):
    success: bool
    options: list[QuoteOption] = Field(default_factory=list)
    error: Optional[str] = None


class TurnContext(BaseModel):
    """Everything the orchestrator may look at during one turn."""
    model_config = ConfigDict(frozen=True)

    text: str
    state: ConversationState
    analysis: AnalysisResult
    intent: Optional[LeadIntentResult] = None
    measurements: Optional[MeasurementData] = None


# API models

class LeadTurnRequest(BaseModel):
    """Request model for /lead/turn endpoint."""
    conversation_id: str
    text: str
    contractor_id: Optional[str] = None
    language_hint: Optional[str] = None


class LeadTurnResponse(BaseModel):
    """Response model for /lead/turn endpoint."""
    reply: str
    rule: str
    state: ConversationState
    intent: Optional[LeadIntentResult] = None
    tool_call: Optional[ToolCall] = None
    dependencies: Optional[list[Dependency]] = None
    missing: Optional[dict[str, bool]] = None
    quote: Optional[QuoteResponse] = None


class LeadAnalyzeRequest(BaseModel):
    """Request model for /lead/analyze endpoint."""
    text: str
    contractor_id: Optional[str] = None
    language_hint: Optional[str] = None


class LeadAnalyzeResponse(BaseModel):
    """Response model for /lead/analyze endpoint."""
    success: bool
    data: Optional[LeadAnalysis] = None
    missing: Optional[dict[str, bool]] = None
    followup_questions: Optional[list[str]] = None
    confirmation: Optional[str] = None
    error: Optional[str] = None


class LeadIntentRequest(BaseModel):
    text: str


class ProjectTurnRequest(BaseModel):
    """Request model for /project/turn endpoint."""
    chat_id: str
    text: Optional[str] = None
