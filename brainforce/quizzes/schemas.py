from datetime import datetime
from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class ScoreUpdate(BaseModel):
    email: str
    points: int


class ScoreResponse(BaseModel):
    points: int


class QuizCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: int = Field(alias="userid")
    questions: List[Any]
    points: int = 0
    subject: str = Field(min_length=1)
    difficulty: Difficulty


class QuizOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    quiz_id: int
    user_id: int
    questions: List[Any]
    points: int
    subject: str
    difficulty: str
    created: Optional[datetime] = None


class LeaderboardEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    points: int
    created: Optional[datetime] = None
    photo: Optional[str] = None
    totalquiz: int
