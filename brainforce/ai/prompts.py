"""
Prompt templates for the four kinds of generated content.

Each builder returns a ChatPrompt: the system/user message pair plus the
model and sampling settings to send with it.
"""
from dataclasses import dataclass
from typing import Optional, Sequence

from brainforce.core.config import OPENAI_CHALLENGE_MODEL, OPENAI_MODEL


@dataclass(frozen=True)
class ChatPrompt:
    system: str
    user: str
    model: str = OPENAI_MODEL
    temperature: float = 0.8
    max_tokens: int = 3500
    top_p: float = 1.0
    frequency_penalty: float = 0.0
    presence_penalty: float = 0.0

    def messages(self) -> list[dict]:
        return [
            {"role": "system", "content": self.system},
            {"role": "user", "content": self.user},
        ]


FLASHCARD_SYSTEM = """Depending on the difficulty level, the questions should be more difficult. Medium should be more difficult than easy.
Hard questions should be more difficult than medium questions.
Medium questions should be meant for college students/interns and hard questions should be meant for experts.
Response should be returned as an array of json objects where the response would look like:
[{"question" : "What is the general formula for alkane?", "answer": "CnH2n+2"}]
Return only the JSON array, with no surrounding text."""

QUIZ_SYSTEM = """You are a teacher creating questions for students. Depending on the difficulty level, the questions should be more difficult. Hard questions should be more difficult than medium questions.
Medium questions should be meant for graduate students and hard questions should be meant for experienced professionals in their respective fields.
Easy questions should be meant for high school students.
The answer should be a string (the answer must be in the options and not as an index of the options) and the options should be an array of strings.
All keys and values must be enclosed in double quotes.
Response should be returned as an array of json objects where the question, options and answer are keys:
[{"question": "What is the capital of France?", "options": ["New York", "London", "Paris", "Dublin"], "answer": "Paris"}]
Return only the JSON array, with no surrounding text."""

CHALLENGE_SYSTEM = "Response should be returned as true or false."

EXPLAIN_SYSTEM = "You are a teacher and you are explaining to a student."


def _focus_clause(focus: Optional[str]) -> str:
    focus = (focus or "").strip()
    return f" specifically {focus}" if focus else ""


def flashcards_prompt(number: int, difficulty: str, subject: str, focus: Optional[str] = None) -> ChatPrompt:
    user = f"Create {number} unique {difficulty} flashcard(s) about {subject}{_focus_clause(focus)}."
    return ChatPrompt(system=FLASHCARD_SYSTEM, user=user)


def quiz_prompt(number: int, difficulty: str, subject: str, focus: Optional[str] = None) -> ChatPrompt:
    user = (
        f"Create {number} unique {difficulty} multiple-choice questions "
        f"about {subject}{_focus_clause(focus)}."
    )
    return ChatPrompt(system=QUIZ_SYSTEM, user=user)


def challenge_prompt(question: str, answer: str, options: Sequence[str]) -> ChatPrompt:
    user = f"I believe the answer to {question} is {answer}. "
    if options:
        user += f"The choices I was given are {', '.join(options)}. "
    user += 'Please only respond "true" if I am correct and "false" if I am incorrect.'
    return ChatPrompt(
        system=CHALLENGE_SYSTEM,
        user=user,
        model=OPENAI_CHALLENGE_MODEL,
        temperature=0.6,
        max_tokens=200,
    )


def explain_prompt(question: str, selected_option: str, options: Optional[Sequence[str]] = None) -> ChatPrompt:
    user = f"Explain to me why the answer to {question} is {selected_option}."
    if options:
        user += f" The choices were {', '.join(options)}."
    return ChatPrompt(system=EXPLAIN_SYSTEM, user=user, temperature=0.6, max_tokens=1000)
