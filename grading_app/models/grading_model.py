# /grading_app/models/grading_model.py

from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from typing import Optional, List
from datetime import datetime
from enum import Enum

# --- Core Enumerations ---
class UserRole(str, Enum):
    ADMIN = "ADMIN"; COLLABORATOR = "COLLABORATOR"; STUDENT = "STUDENT"

STAFF_ROLES = (UserRole.ADMIN.value, UserRole.COLLABORATOR.value)

class Judgment(str, Enum):
    """Qualitative verdict used by the simple correction mode."""
    CORRECT = "correct"
    WRONG = "wrong"
    BLANK = "blank"

class GradingStatus(str, Enum):
    ALL_PENDING = "all_pending"
    PARTIALLY_GRADED = "partially_graded"
    FULLY_GRADED = "fully_graded"

# --- Scoring Configuration ---

class ScoringConfig(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    correctPoints: float = Field(..., gt=0)
    wrongPoints: float = Field(default=0.0, le=0)
    blankPoints: float = Field(default=0.0)

class KeywordRule(BaseModel):
    keyword: str = Field(..., min_length=1)
    weight: float = Field(default=1.0, gt=0)
    isRequired: bool = Field(default=False)

# --- Validation Requests ---

class OpenAnswerValidation(BaseModel):
    """
    One manual grade. Percentage mode sends `manualScore` directly (any finite
    value, conventionally 0..1) or the slider `percentage` (0..100, snapped to
    5% steps); simple mode sends a `judgment` that the server normalizes with
    the simulation's scoring configuration.
    """
    openAnswerId: str = Field(..., min_length=1)
    manualScore: Optional[float] = Field(None, allow_inf_nan=False)
    percentage: Optional[float] = Field(None, ge=0, le=100)
    judgment: Optional[Judgment] = None
    validatorNotes: Optional[str] = None

    @model_validator(mode="after")
    def exactly_one_score_source(self):
        provided = [v for v in (self.manualScore, self.percentage, self.judgment) if v is not None]
        if len(provided) != 1:
            raise ValueError("Provide exactly one of 'manualScore', 'percentage' or 'judgment'.")
        return self

    @field_validator("validatorNotes")
    @classmethod
    def blank_notes_are_none(cls, v):
        if v is None or not v.strip(): return None
        return v

class BatchValidationRequest(BaseModel):
    resultId: str = Field(..., min_length=1)
    validations: List[OpenAnswerValidation] = Field(..., min_length=1)
    fillRemaining: bool = Field(
        default=False,
        description="Also validate every other pending answer of the result with its auto score (0 when absent).",
    )

# --- Result Intake ---

class OpenAnswerSubmission(BaseModel):
    questionId: str = Field(..., min_length=1)
    answerText: str = Field(default="")

class ResultCreateRequest(BaseModel):
    simulationId: str = Field(..., min_length=1)
    studentId: str = Field(..., min_length=1)
    completedAt: Optional[datetime] = None
    baseScore: float = Field(default=0.0, allow_inf_nan=False)
    maxScore: float = Field(default=0.0, ge=0, allow_inf_nan=False)
    openAnswers: List[OpenAnswerSubmission] = Field(default_factory=list)

# --- Response Contracts ---

class UserSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str; name: str; email: str

class SimulationSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str; title: str
    correctPoints: float; wrongPoints: float; blankPoints: float

class QuestionDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str; text: str
    textLatex: Optional[str] = None
    correctExplanation: Optional[str] = None
    keywords: List[KeywordRule] = Field(default_factory=list)

class OpenAnswerDetail(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: str
    resultId: str
    position: int
    question: QuestionDetail
    answerText: str
    autoScore: Optional[float] = None
    keywordsMatched: List[str] = Field(default_factory=list)
    keywordsMissed: List[str] = Field(default_factory=list)
    isValidated: bool
    finalScore: Optional[float] = None
    validatorNotes: Optional[str] = None
    validatedAt: Optional[datetime] = None

class ResultScoreSummary(BaseModel):
    """The parent result's aggregates after a grading transition. Clients
    must re-fetch dependent views instead of patching local copies."""
    resultId: str
    remainingPending: int
    gradingStatus: GradingStatus
    totalScore: float
    percentageScore: float

class SingleValidationResponse(BaseModel):
    openAnswer: OpenAnswerDetail
    result: ResultScoreSummary

class BatchValidationResponse(ResultScoreSummary):
    validatedCount: int

class ResultReviewResponse(BaseModel):
    """Everything the grading page needs for one result."""
    id: str
    completedAt: Optional[datetime] = None
    baseScore: float
    maxScore: float
    totalScore: float
    percentageScore: float
    pendingOpenAnswers: int
    gradingStatus: GradingStatus
    student: UserSummary
    simulation: SimulationSummary
    openAnswers: List[OpenAnswerDetail]

class PendingReviewItem(BaseModel):
    id: str
    completedAt: Optional[datetime] = None
    totalScore: float
    percentageScore: float
    pendingOpenAnswers: int
    student: UserSummary
    simulation: SimulationSummary

class PendingSimulationGroup(BaseModel):
    simulationId: str
    title: str
    results: int
    pendingAnswers: int

class PendingReviewListResponse(BaseModel):
    total: int
    results: List[PendingReviewItem]
    bySimulation: List[PendingSimulationGroup] = Field(default_factory=list)

class PendingReviewCountResponse(BaseModel):
    total: int = Field(..., ge=0, example=12)
    displayTotal: str = Field(..., description="Badge label, capped (e.g. '99+').", example="12")
    pollIntervalSeconds: int = Field(..., description="Foreground polling interval for the badge.", example=120)
