"""Pydantic request/response models for API endpoints."""

from pydantic import BaseModel

from cue_the_line.models import Closer, Mark
from cue_the_line.session import RevealItem, SubmitResult


class AnswerBody(BaseModel):
    answer: str = ""


class QuoteView(BaseModel):
    id: str
    text: str
    hint1: str | None = None  # only once revealed
    hint2: str | None = None


class RunView(BaseModel):
    run_number: int
    day_key: str
    index: int
    total: int
    completed: bool
    marks: list[Mark]
    correct_count: int
    hints_used: int
    quote: QuoteView | None = None
    result_message: list[str] | None = None
    share_text: str | None = None
    closer: Closer | None = None


class HintResponse(BaseModel):
    slot: int
    text: str | None
    run: RunView


class AnswerResponse(BaseModel):
    result: SubmitResult
    run: RunView


class ShareResponse(BaseModel):
    text: str


class YesterdayResponse(BaseModel):
    day_key: str
    items: list[RevealItem]
