"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Field names follow the JSON the React client already sends
(camelCase where the client uses it).
"""

from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any, Union
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class AnnouncementType(str, Enum):
    normal = "normal"
    drive = "drive"


class AnnouncementStatus(str, Enum):
    active = "Active"
    ended = "Ended"
    cancelled = "Cancelled"


class CommunicationMode(str, Enum):
    voice = "voice"
    chat = "chat"
    scenario = "scenario"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class LoginRequest(BaseModel):
    username: str
    password: str


class PrincipalResponse(BaseModel):
    username: str
    role: str


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentRegister(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    dob: Optional[datetime] = None
    college: Optional[str] = None
    department: Optional[str] = None
    gender: Optional[str] = None
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class StudentUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    gender: Optional[str] = None
    department: Optional[str] = None
    city: Optional[str] = None


# ============================================================
# ADMIN SCHEMAS
# ============================================================

class AdminRegister(BaseModel):
    name: str = Field(..., min_length=1)
    position: str = Field(..., min_length=1)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class AdminUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    position: Optional[str] = None


class AdminProfileResponse(BaseModel):
    username: str
    email: str
    position: str


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyRegister(BaseModel):
    name: str
    email: Optional[str] = None
    company_add: Optional[str] = None
    phone: Optional[str] = None
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


# ============================================================
# ANNOUNCEMENT SCHEMAS
# ============================================================

class AnnouncementCreate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    type: AnnouncementType = AnnouncementType.normal
    company: Optional[str] = None
    role: Optional[str] = None
    package: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    batch: Optional[str] = None
    eligibility: Optional[str] = None
    applyLink: Optional[str] = None


class AnnouncementUpdate(BaseModel):
    title: Optional[str] = None
    content: Optional[str] = None
    type: Optional[AnnouncementType] = None
    company: Optional[str] = None
    role: Optional[str] = None
    package: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None
    batch: Optional[str] = None
    eligibility: Optional[str] = None
    applyLink: Optional[str] = None
    status: Optional[AnnouncementStatus] = None
    cancelReason: Optional[str] = None


class AnnouncementStatusUpdate(BaseModel):
    status: AnnouncementStatus
    cancelReason: Optional[str] = None


# ============================================================
# QUIZ SCHEMAS
# ============================================================

class QuizQuestionCreate(BaseModel):
    question_text: str = Field(..., min_length=1)
    options: List[str] = Field(..., min_length=1)
    correct_answer: str
    category: str = "Technical"
    explanation: Optional[str] = None
    difficulty: str = "Medium"


class ProctoringEntry(BaseModel):
    snapshotUrl: Optional[str] = None
    reason: Optional[str] = None
    timestamp: datetime = Field(default_factory=datetime.utcnow)


class QuizSubmission(BaseModel):
    username: str
    category: Optional[str] = None
    answers: Dict[str, str] = {}
    proctoringLog: List[ProctoringEntry] = []


class QuizResultItem(BaseModel):
    question: str
    isCorrect: bool = False
    category: Optional[str] = None


class QuizAnalysisRequest(BaseModel):
    results: List[QuizResultItem] = []
    score: int = 0
    total: int = 0


class ProctorFrameRequest(BaseModel):
    imageBase64: str = Field(..., min_length=1)


class QuizStatsResponse(BaseModel):
    totalTests: int
    topScore: int
    averageScore: int


# ============================================================
# DSA SCHEMAS
# ============================================================

class DSAExample(BaseModel):
    input: str = ""
    output: str = ""


class DSAProblemCreate(BaseModel):
    title: str = Field(..., min_length=1)
    difficulty: str = "Easy"
    topics: Optional[str] = None
    Body: Optional[str] = None
    examples: List[DSAExample] = []


class DSAAttemptCreate(BaseModel):
    username: str
    qid: Optional[str] = None
    title: Optional[str] = None
    difficulty: Optional[str] = None
    status: Optional[str] = None


class CodeRunRequest(BaseModel):
    # language stays a plain string: unknown values get a 400 from the route
    language: Optional[str] = None
    code: Optional[str] = None
    input: Optional[str] = None


class CodeRunResponse(BaseModel):
    output: str
    error: bool


# ============================================================
# INTERVIEW / COMMUNICATION SCHEMAS
# ============================================================

class InterviewQuestionsRequest(BaseModel):
    jobRole: Optional[str] = None
    techStack: Optional[str] = None
    experience: Optional[Union[int, float, str]] = None
    topic: Optional[str] = None
    scenarioBased: bool = False


class AnswerFeedbackRequest(BaseModel):
    question: str = ""
    answer: str = ""


class SessionAnalysisRequest(BaseModel):
    history: Optional[Any] = None


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    message: str = ""
    mode: Optional[str] = None
    history: List[ChatMessage] = []


class ScenarioStartRequest(BaseModel):
    scenario: str = ""


class ReplyResponse(BaseModel):
    reply: str


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str


class CountResponse(BaseModel):
    count: int
