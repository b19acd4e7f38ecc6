from __future__ import annotations

from datetime import datetime, timedelta
from typing import Literal, Optional, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


Priority = Literal["low", "medium", "high"]
TaskOrigin = Literal["diary", "manual", "prompt"]

DEFAULT_ESTIMATED_TIME_MIN = 60
DEFAULT_DUE_IN_DAYS = 7


def default_due_date() -> datetime:
    return datetime.now() + timedelta(days=DEFAULT_DUE_IN_DAYS)


class Task(BaseModel):
    # camelCase on the wire, snake_case in Python; both accepted on input
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = Field(..., min_length=1)
    subject: str = "General"
    description: str = ""

    due_date: datetime = Field(default_factory=default_due_date, alias="dueDate")
    priority: Priority = "medium"
    estimated_time: int = Field(
        DEFAULT_ESTIMATED_TIME_MIN, gt=0, alias="estimatedTime"
    )

    completed: bool = False
    scheduled_time: Optional[datetime] = Field(None, alias="scheduledTime")
    created_from: TaskOrigin = Field("diary", alias="createdFrom")

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        v2 = v.strip()
        if not v2:
            raise ValueError("title must not be blank")
        return v2

    def to_public_dict(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")


class TaskUpdate(BaseModel):
    """Partial update for a stored task. Unset fields are left untouched."""

    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, min_length=1)
    subject: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = Field(None, alias="dueDate")
    priority: Optional[Priority] = None
    estimated_time: Optional[int] = Field(None, gt=0, alias="estimatedTime")
    completed: Optional[bool] = None
    scheduled_time: Optional[datetime] = Field(None, alias="scheduledTime")


class DiaryPhoto(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    image_name: str = Field(..., alias="imageName")
    captured_at: datetime = Field(default_factory=datetime.now, alias="capturedAt")
    extracted_tasks: List[Task] = Field(default_factory=list, alias="extractedTasks")
    processed: bool = True


class Subject(BaseModel):
    id: str
    name: str
    color: str


class BoundingBox(BaseModel):
    x0: int
    y0: int
    x1: int
    y1: int


class OCRWord(BaseModel):
    text: str
    confidence: float
    bbox: BoundingBox


class OCRResult(BaseModel):
    """Raw text plus confidence metadata as returned by an OCR engine."""

    text: str = ""
    confidence: float = Field(0.0, ge=0.0, le=100.0)
    words: List[OCRWord] = Field(default_factory=list)


class DocumentResult(BaseModel):
    text: str
    file_name: str
    file_type: str
    # Set when text is a notice about the upload rather than its contents
    placeholder: bool = False
