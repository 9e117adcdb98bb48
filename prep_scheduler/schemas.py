from pydantic import BaseModel, Field
from datetime import datetime, date
from typing import Optional, List, Dict, Any
from .scheduling.core.constants import SchedulingStrategy

# ----------------- Input Schemas ---------------------


class CalendarEventIn(BaseModel):
    title: str = ""
    startTime: str
    endTime: str
    isAllDay: bool = False
    attendees: List[str] = Field(default_factory=list)


class WorkBlockIn(BaseModel):
    # Left as strings: malformed blocks are dropped by the scheduler, not rejected
    start: str
    end: str


class PreparationCandidateIn(BaseModel):
    title: str
    startTime: str = Field(..., description="Start of the meeting, used as the preparation deadline")
    duration_estimation: Optional[int] = Field(None, description="Desired preparation time in minutes")
    meeting_preparation_prompt: Optional[str] = None


class ScheduleRequest(BaseModel):
    day: Optional[date] = Field(None, description="Day to schedule, defaults to the earliest meeting's day")
    events: List[CalendarEventIn] = Field(default_factory=list)
    candidates: List[PreparationCandidateIn] = Field(default_factory=list)
    work_blocks: Optional[List[WorkBlockIn]] = Field(None, description="Defaults to the configured work blocks")
    buffer_minutes: Optional[int] = Field(None, ge=0, description="Defaults to the configured buffer")
    project_id: Optional[str] = None


class AnalysisScheduleRequest(BaseModel):
    analysis: str = Field(..., description="Meeting analysis text containing a JSON list of events")
    day: Optional[date] = None
    events: List[CalendarEventIn] = Field(default_factory=list)
    work_blocks: Optional[List[WorkBlockIn]] = None
    buffer_minutes: Optional[int] = Field(None, ge=0)
    project_id: Optional[str] = None


# ----------------- Output Schemas ---------------------


class ScheduledSlotOut(BaseModel):
    title: str
    start: datetime
    end: datetime
    duration_minutes: int
    strategy: SchedulingStrategy
    busy_variant: Optional[str] = None
    task: Dict[str, Any]


class ScheduleResponse(BaseModel):
    day: Optional[date] = None
    slots: List[ScheduledSlotOut] = Field(default_factory=list)
    skipped: List[str] = Field(default_factory=list)
