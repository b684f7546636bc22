from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from ..utils.validators import is_valid_date


class HabitCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    completed_dates: List[str] = []

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Название привычки не может быть пустым')
        return v.strip()


class HabitUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)


class ToggleRequest(BaseModel):
    date: str  # yyyy-MM-dd

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        if not is_valid_date(v):
            raise ValueError('Дата должна быть в формате yyyy-MM-dd')
        return v


class HabitOut(BaseModel):
    id: str
    name: str
    completed_dates: List[str] = []
    created_at: Optional[str] = None


class SyncResult(BaseModel):
    synced: int
    source: str


class HealthCheck(BaseModel):
    status: str
    service: str
    version: str
    timestamp: float
    habits: int = 0
