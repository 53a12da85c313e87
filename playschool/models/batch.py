"""Batches (Playgroup, LKG, UKG...) and their annual fee."""
from typing import Optional

from beanie import Document, Indexed
from pydantic import BaseModel, Field


class Batch(Document):
    """Batch document; `fee_amount` is the annual total the fee plans are split from."""

    name: Indexed(str, unique=True)
    capacity: int = 20
    fee_amount: float = 0
    description: Optional[str] = None
    age_group: Optional[str] = None

    class Settings:
        name = "batches"
        use_state_management = True


class BatchOut(BaseModel):
    id: str
    name: str
    capacity: int = 20
    fee_amount: float = 0
    description: Optional[str] = None
    age_group: Optional[str] = None


class BatchCreate(BaseModel):
    name: str
    capacity: int = Field(default=20, ge=0)
    fee_amount: float = Field(default=0, ge=0)
    description: Optional[str] = None
    age_group: Optional[str] = None


class BatchUpdate(BaseModel):
    name: Optional[str] = None
    capacity: Optional[int] = Field(default=None, ge=0)
    fee_amount: Optional[float] = Field(default=None, ge=0)
    description: Optional[str] = None
    age_group: Optional[str] = None
