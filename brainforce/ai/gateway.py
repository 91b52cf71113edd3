import logging
from typing import Any, Optional

import openai

from brainforce.ai import prompts
from brainforce.ai.openai_client import get_client, set_last_error
from brainforce.ai.prompts import ChatPrompt
from brainforce.core.errors import UpstreamError

logger = logging.getLogger(__name__)


class ContentGateway:
    """
    Sends prompts to the chat-completion API and returns the raw reply text.

    The reply is expected to be JSON for flashcards and quizzes, but it is
    passed through unparsed; the client decides what to do with it.
    """

    def __init__(self, client: Optional[Any] = None):
        self.client = client

    def complete(self, prompt: ChatPrompt) -> str:
        if self.client is None:
            set_last_error("OPENAI_API_KEY not set")
            logger.warning("Content generation requested but no OpenAI client is configured")
            raise UpstreamError()

        try:
            response = self.client.chat.completions.create(
                model=prompt.model,
                messages=prompt.messages(),
                temperature=prompt.temperature,
                max_tokens=prompt.max_tokens,
                top_p=prompt.top_p,
                frequency_penalty=prompt.frequency_penalty,
                presence_penalty=prompt.presence_penalty,
            )
        except openai.APIStatusError as exc:
            set_last_error(f"status={exc.status_code}")
            logger.error("OpenAI returned status %s", exc.status_code)
            raise UpstreamError(payload=exc.body) from exc
        except openai.APIConnectionError as exc:
            # Includes APITimeoutError
            set_last_error(type(exc).__name__)
            logger.error("OpenAI request failed: %s", type(exc).__name__)
            raise UpstreamError() from exc

        content = response.choices[0].message.content if response.choices else None
        if not content:
            set_last_error("empty completion")
            logger.warning("OpenAI returned an empty completion")
            raise UpstreamError()

        logger.debug("OpenAI response received: %s...", content[:100])
        return content

    def flashcards(self, number: int, difficulty: str, subject: str, focus: Optional[str] = None) -> str:
        return self.complete(prompts.flashcards_prompt(number, difficulty, subject, focus))

    def quiz(self, number: int, difficulty: str, subject: str, focus: Optional[str] = None) -> str:
        return self.complete(prompts.quiz_prompt(number, difficulty, subject, focus))

    def challenge(self, question: str, answer: str, options) -> str:
        return self.complete(prompts.challenge_prompt(question, answer, options))

    def explain(self, question: str, selected_option: str, options=None) -> str:
        return self.complete(prompts.explain_prompt(question, selected_option, options))


def get_gateway() -> ContentGateway:
    return ContentGateway(client=get_client())
