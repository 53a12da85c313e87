from datetime import date
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class Homework(Document):
    """Homework assigned to a whole batch."""
    title: str
    description: Optional[str] = None
    due_date: date
    batch: Indexed(str)
    submitted_by: list[str] = Field(default_factory=list)  # student ids

    class Settings:
        name = "homework"
        use_state_management = True


class HomeworkCreate(BaseModel):
    title: str
    description: Optional[str] = None
    due_date: date
    batch: str
