"""
Content generation endpoints. All of them require a signed-in user.

Successful replies are `{"success": true, "data": <model text>}`; upstream
failures become a 400 with `{"success": false, "error": <upstream payload>}`.
"""
from typing import Callable

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from brainforce.ai.gateway import ContentGateway, get_gateway
from brainforce.ai.schemas import (
    ChallengeRequest,
    ExplainRequest,
    GenerationRequest,
    GenerationResponse,
)
from brainforce.core.deps import get_current_claims
from brainforce.core.errors import UpstreamError

router = APIRouter(
    prefix="/openai",
    tags=["openai"],
    dependencies=[Depends(get_current_claims)],
)


def _respond(generate: Callable[[], str]):
    try:
        return {"success": True, "data": generate()}
    except UpstreamError as exc:
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.payload})


@router.post("/flashcards", response_model=GenerationResponse)
def flashcards(body: GenerationRequest, gateway: ContentGateway = Depends(get_gateway)):
    return _respond(lambda: gateway.flashcards(body.number, body.difficulty.value, body.subject, body.focus))


@router.post("/quiz", response_model=GenerationResponse)
def quiz(body: GenerationRequest, gateway: ContentGateway = Depends(get_gateway)):
    return _respond(lambda: gateway.quiz(body.number, body.difficulty.value, body.subject, body.focus))


@router.post("/challenge", response_model=GenerationResponse)
def challenge(body: ChallengeRequest, gateway: ContentGateway = Depends(get_gateway)):
    return _respond(lambda: gateway.challenge(body.question, body.answer, body.options))


@router.post("/explain", response_model=GenerationResponse)
def explain(body: ExplainRequest, gateway: ContentGateway = Depends(get_gateway)):
    return _respond(lambda: gateway.explain(body.question, body.selected_option, body.options))
