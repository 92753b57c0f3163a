from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Dict, Any, Union
from datetime import datetime
from enum import Enum
import uuid


class UserRole(str, Enum):
    STUDENT = "student"
    MENTOR = "mentor"
    ADMIN = "admin"


# Authentication Models
class TokenData(BaseModel):
    user_id: str
    email: str
    name: Optional[str] = None
    role: Optional[str] = None


class UserSummary(BaseModel):
    user_id: str
    full_name: str
    email: str

    class Config:
        from_attributes = True


# Booking Models
class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class BookingFeedback(BaseModel):
    rating: int = Field(..., ge=1, le=5, description="Rating from 1-5")
    comment: Optional[str] = Field(None, max_length=1000)


class BookingCreate(BaseModel):
    mentee: str = Field(..., min_length=1, description="User ID of the mentee requesting the session")
    name: str = Field(..., min_length=1)
    email: EmailStr
    topic: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0, description="Duration in minutes, 0 or missing for the default")
    date: Optional[datetime] = None
    time: Optional[str] = None
    notes: Optional[str] = Field(None, max_length=1000)


class BookingResponse(BaseModel):
    id: str
    mentee_id: str
    # Snapshot of the mentee taken when the booking was submitted
    mentee_name: str
    mentee_email: str
    mentor_id: Optional[str] = None
    topic: str
    duration: int
    date: datetime
    time: str
    status: BookingStatus
    notes: Optional[str] = None
    meeting_link: Optional[str] = None
    feedback: Optional[BookingFeedback] = None
    created_at: datetime
    updated_at: datetime

    # Live mentee record, only filled on listings
    mentee: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class BookingAcceptResponse(BookingResponse):
    mentorship_id: str
    meeting_id: str


# Mentorship Models
class MentorshipStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MentorshipGoal(BaseModel):
    description: str = Field(..., min_length=1)
    completed: bool = False
    target_date: Optional[datetime] = None


class MentorshipFeedback(BaseModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = Field(None, max_length=1000)
    date: Optional[datetime] = None


class ProgressUpdate(BaseModel):
    progress: int = Field(..., ge=0, le=100)


class MentorshipResponse(BaseModel):
    id: str
    mentor_id: str
    mentee_id: str
    status: MentorshipStatus
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None
    progress: int = 0
    goals: List[MentorshipGoal] = []
    meetings: List[str] = []
    notes: Optional[str] = None
    feedback: List[MentorshipFeedback] = []
    created_at: datetime
    updated_at: datetime

    mentee: Optional[UserSummary] = None

    class Config:
        from_attributes = True


class MenteeSummary(BaseModel):
    id: str
    mentorship_id: str
    name: str
    email: str
    progress: int
    status: MentorshipStatus
    last_meeting: Union[datetime, str]


# Meeting Models
class MeetingStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class MeetingType(str, Enum):
    VIDEO = "video"
    AUDIO = "audio"
    IN_PERSON = "in-person"


class MeetingCreate(BaseModel):
    mentee_id: str
    date: datetime
    notes: Optional[str] = Field(None, max_length=1000)
    duration: int = Field(60, ge=1, description="Duration in minutes")
    meeting_type: MeetingType = MeetingType.VIDEO
    meeting_link: Optional[str] = Field(None, max_length=500)


class MeetingUpdate(BaseModel):
    date: Optional[datetime] = None
    status: Optional[MeetingStatus] = None
    notes: Optional[str] = Field(None, max_length=1000)
    meeting_link: Optional[str] = Field(None, max_length=500)


class MeetingResponse(BaseModel):
    id: str
    mentor_id: str
    mentee_id: str
    date: datetime
    status: MeetingStatus
    notes: Optional[str] = None
    duration: int = 60
    meeting_type: MeetingType = MeetingType.VIDEO
    meeting_link: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    mentee_name: Optional[str] = None
    mentee_email: Optional[str] = None

    class Config:
        from_attributes = True


class MentorshipDetailResponse(MentorshipResponse):
    meeting_details: List[MeetingResponse] = []


class UpcomingMeetingResponse(BaseModel):
    id: str
    mentee_name: Optional[str] = None
    date: datetime
    status: MeetingStatus
    notes: Optional[str] = None


class MentorStatsResponse(BaseModel):
    total_mentees: int
    active_mentees: int
    completed_meetings: int
    pending_meetings: int


# Quiz Models
class QuestionType(str, Enum):
    MCQ = "MCQ"
    SHORT_ANSWER = "ShortAnswer"


class QuizQuestionPublic(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: QuestionType
    text: str = Field(..., min_length=1)
    options: List[str] = []
    points: Optional[int] = Field(1, ge=0)


class QuizQuestion(QuizQuestionPublic):
    correct_answer: Any = None
    explanation: Optional[str] = None


class QuizCreate(BaseModel):
    title: str = Field(..., min_length=1)
    questions: List[QuizQuestion] = []
    course_id: Optional[str] = None
    module_id: Optional[str] = None
    lesson_id: Optional[str] = None
    passing_score: Optional[int] = Field(None, ge=0, le=100)
    time_limit: Optional[int] = Field(None, ge=1, description="Time limit in minutes")
    attempts_allowed: Optional[int] = Field(None, ge=1)
    is_active: bool = True


class QuizUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    questions: Optional[List[QuizQuestion]] = None
    course_id: Optional[str] = None
    module_id: Optional[str] = None
    lesson_id: Optional[str] = None
    passing_score: Optional[int] = Field(None, ge=0, le=100)
    time_limit: Optional[int] = Field(None, ge=1)
    attempts_allowed: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None


class QuizPublicResponse(BaseModel):
    id: str
    title: str
    questions: List[QuizQuestionPublic] = []
    course_id: Optional[str] = None
    module_id: Optional[str] = None
    lesson_id: Optional[str] = None
    passing_score: int
    time_limit: Optional[int] = None
    attempts_allowed: Optional[int] = None
    is_active: bool = True
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class QuizResponse(QuizPublicResponse):
    questions: List[QuizQuestion] = []


class QuizAnswer(BaseModel):
    question_id: str
    answer: Any = None


class QuizSubmission(BaseModel):
    answers: List[QuizAnswer] = []


class QuestionResult(BaseModel):
    question_id: str
    correct: bool
    points_awarded: int
    points_possible: int


class QuizGradeResponse(BaseModel):
    quiz_id: str
    score: int
    total: int
    percentage: int
    passed: bool
    results: List[QuestionResult] = []
    message: str = "Quiz submitted successfully"


class QuizResultResponse(BaseModel):
    id: str
    user_id: str
    quiz_id: str
    score: int
    total: int
    percentage: int
    passed: bool
    submitted_at: datetime

    class Config:
        from_attributes = True


# Assignment Models
class AssignmentCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    course_id: Optional[str] = None
    module_id: Optional[str] = None
    lesson_id: Optional[str] = None


class AssignmentResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    course_id: Optional[str] = None
    module_id: Optional[str] = None
    lesson_id: Optional[str] = None
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class AssignmentSubmissionCreate(BaseModel):
    file_url: Optional[str] = Field(None, max_length=500)
    text: Optional[str] = None


class AssignmentGrade(BaseModel):
    submission_id: str = Field(..., min_length=1)
    grade: float = Field(..., ge=0)
    feedback: Optional[str] = Field(None, max_length=2000)


class AssignmentSubmissionResponse(BaseModel):
    id: str
    assignment_id: str
    student_id: str
    file_url: Optional[str] = None
    text: Optional[str] = None
    submitted_at: datetime
    grade: Optional[float] = None
    feedback: Optional[str] = None
    graded_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# Response Models
class SuccessResponse(BaseModel):
    success: bool = True
    message: str
    data: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error_code: Optional[str] = None
    details: Optional[List[Any]] = None
