import json
import logging
from pathlib import Path
from typing import Any, List

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from brainforce.ai.gateway import ContentGateway, get_gateway
from brainforce.auth import service as auth_service
from brainforce.auth.schemas import RegisterRequest
from brainforce.core.config import ACCESS_TOKEN_EXPIRE_MINUTES, is_production
from brainforce.core.deps import COOKIE_NAME, get_optional_claims
from brainforce.core.errors import AppError, UpstreamError
from brainforce.db.session import get_db
from brainforce.quizzes import service as quiz_service
from brainforce.quizzes.schemas import Difficulty

logger = logging.getLogger(__name__)

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(tags=["web"])

SUBJECTS = ["math", "science", "programming"]
DIFFICULTIES = [d.value for d in Difficulty]
FLASHCARDS_PER_COURSE = 2


def parse_flashcards(text: str) -> List[dict]:
    """
    Turn the model's reply into a list of {"question", "answer"} cards.

    Raises ValueError when the reply is not a JSON array of such objects.
    """
    cleaned = text.strip()
    # Models sometimes wrap JSON in a markdown fence
    if cleaned.startswith("```"):
        cleaned = cleaned.strip("`")
        if cleaned.lower().startswith("json"):
            cleaned = cleaned[4:]

    data: Any = json.loads(cleaned)
    if not isinstance(data, list):
        raise ValueError("expected a JSON array")

    cards = []
    for item in data:
        if not isinstance(item, dict) or "question" not in item or "answer" not in item:
            raise ValueError("every card needs a question and an answer")
        cards.append({"question": str(item["question"]), "answer": str(item["answer"])})
    return cards


# ======================================================
# LOGIN / LOGOUT
# ======================================================
@router.get("/login", response_class=HTMLResponse)
def login_page(request: Request):
    return templates.TemplateResponse(request, "login.html", {"error": None})


@router.post("/login")
def login_submit(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    db: Session = Depends(get_db),
):
    user = auth_service.authenticate(db, email, password)
    if not user:
        return templates.TemplateResponse(
            request, "login.html", {"error": "Invalid email/password"}, status_code=401
        )

    response = RedirectResponse(url="/make-course", status_code=303)
    response.set_cookie(
        key=COOKIE_NAME,
        value=auth_service.generate_token(user),
        httponly=True,
        samesite="lax",
        secure=is_production(),
        max_age=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
    return response


@router.get("/logout")
def logout():
    response = RedirectResponse(url="/login", status_code=303)
    response.delete_cookie(COOKIE_NAME)
    return response


# ======================================================
# SIGNUP
# ======================================================
@router.get("/signup", response_class=HTMLResponse)
def signup_page(request: Request):
    return templates.TemplateResponse(request, "signup.html", {"error": None})


@router.post("/signup")
def signup_submit(
    request: Request,
    email: str = Form(...),
    username: str = Form(...),
    password: str = Form(...),
    firstname: str = Form(""),
    lastname: str = Form(""),
    db: Session = Depends(get_db),
):
    creds = RegisterRequest(
        email=email,
        username=username,
        password=password,
        firstname=firstname,
        lastname=lastname,
    )
    try:
        auth_service.register(db, creds)
    except AppError as exc:
        return templates.TemplateResponse(
            request, "signup.html", {"error": exc.message}, status_code=exc.status_code
        )
    return RedirectResponse(url="/login", status_code=303)


# ======================================================
# MAKE COURSE -> FLASHCARDS
# ======================================================
@router.get("/make-course", response_class=HTMLResponse)
def make_course_page(request: Request, claims=Depends(get_optional_claims)):
    if not claims:
        return RedirectResponse(url="/login", status_code=303)
    return templates.TemplateResponse(
        request,
        "make_course.html",
        {"user": claims, "subjects": SUBJECTS, "difficulties": DIFFICULTIES, "error": None},
    )


@router.post("/make-course", response_class=HTMLResponse)
def make_course_submit(
    request: Request,
    subject: str = Form(...),
    difficulty: str = Form(...),
    claims=Depends(get_optional_claims),
    gateway: ContentGateway = Depends(get_gateway),
):
    if not claims:
        return RedirectResponse(url="/login", status_code=303)

    def form_error(message: str, status_code: int = 400):
        return templates.TemplateResponse(
            request,
            "make_course.html",
            {"user": claims, "subjects": SUBJECTS, "difficulties": DIFFICULTIES, "error": message},
            status_code=status_code,
        )

    if subject not in SUBJECTS or difficulty not in DIFFICULTIES:
        return form_error("Pick a subject and a difficulty.")

    try:
        text = gateway.flashcards(FLASHCARDS_PER_COURSE, difficulty, subject)
        cards = parse_flashcards(text)
    except UpstreamError:
        return form_error("Flashcards are temporarily unavailable. Please try again shortly.", 502)
    except ValueError as exc:
        logger.warning("Could not parse flashcards for subject=%s: %s", subject, exc)
        return form_error("The generated flashcards could not be read. Please try again.", 502)

    return templates.TemplateResponse(
        request,
        "flashcards.html",
        {"user": claims, "subject": subject, "difficulty": difficulty, "cards": cards},
    )


# ======================================================
# LEADERBOARD
# ======================================================
@router.get("/leaderboard/view", response_class=HTMLResponse)
def leaderboard_page(request: Request, db: Session = Depends(get_db), claims=Depends(get_optional_claims)):
    users = quiz_service.leaderboard(db)
    return templates.TemplateResponse(request, "leaderboard.html", {"user": claims, "users": users})
