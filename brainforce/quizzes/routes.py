"""
API routes for quiz history, scores and the leaderboard.
"""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from brainforce.auth.service import update_score
from brainforce.db.session import get_db
from brainforce.quizzes import service
from brainforce.quizzes.schemas import (
    LeaderboardEntry,
    QuizCreate,
    QuizOut,
    ScoreResponse,
    ScoreUpdate,
)

router = APIRouter(tags=["quizzes"])


@router.post("/scores", response_model=ScoreResponse)
def submit_score(update: ScoreUpdate, db: Session = Depends(get_db)):
    points = update_score(db, update.email, update.points)
    if points is None:
        raise HTTPException(status_code=404, detail="User not found")
    return {"points": points}


@router.post("/quizzes", response_model=QuizOut)
def add_quiz(quiz: QuizCreate, db: Session = Depends(get_db)):
    stored = service.add_quiz(
        db,
        user_id=quiz.user_id,
        questions=quiz.questions,
        points=quiz.points,
        subject=quiz.subject,
        difficulty=quiz.difficulty.value,
    )
    if stored is None:
        raise HTTPException(status_code=404, detail="User not found")
    return stored


@router.get("/quizzes", response_model=List[QuizOut])
def list_quizzes(userid: int = Query(...), db: Session = Depends(get_db)):
    return service.list_quizzes(db, userid)


@router.get("/leaderboard", response_model=List[LeaderboardEntry])
def leaderboard(db: Session = Depends(get_db)):
    return service.leaderboard(db)
