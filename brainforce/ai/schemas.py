from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from brainforce.quizzes.schemas import Difficulty


class GenerationRequest(BaseModel):
    """Body for both flashcard and quiz generation."""

    model_config = ConfigDict(populate_by_name=True)

    number: int = Field(default=5, ge=1, le=20)
    difficulty: Difficulty = Field(alias="difficultyLevel")
    subject: str = Field(min_length=1)
    focus: Optional[str] = Field(default=None, alias="optionalSection")


class ChallengeRequest(BaseModel):
    question: str = Field(min_length=1)
    answer: str
    options: List[str] = Field(default_factory=list)


class ExplainRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(min_length=1)
    selected_option: str = Field(alias="selectedOption")
    options: Optional[List[str]] = None


class GenerationResponse(BaseModel):
    success: bool = True
    data: str
