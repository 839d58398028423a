from pydantic import BaseModel, Field, validator
from typing import Optional
from datetime import datetime
from enum import Enum

class Stage(str, Enum):
    LEARNING = "learning"
    REVIEW = "review"

class CardBase(BaseModel):
    deck_id: int
    question: str
    answer: str

class CardCreate(CardBase):
    @validator('question', 'answer')
    def not_blank(cls, v):
        if not v or not v.strip():
            raise ValueError("Question and answer are required")
        return v.strip()

class Card(CardBase):
    id: int
    correct: int = Field(default=0, ge=0)
    incorrect: int = Field(default=0, ge=0)
    lapses: int = Field(default=0, ge=0)
    ease: int = Field(default=1, ge=1)
    stage: Stage = Stage.LEARNING
    review_due_date: datetime
    created_at: datetime
    last_reviewed_at: Optional[datetime] = None

    class Config:
        from_attributes = True
