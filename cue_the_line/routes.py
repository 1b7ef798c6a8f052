"""FastAPI endpoints under /api.

All endpoints act on today's run. The day is re-checked on every request,
so a server left running past midnight starts a new run on its own.
"""

import logging

from fastapi import APIRouter, HTTPException, Path, Request

from cue_the_line.days import yesterday_key
from cue_the_line.models import QUESTIONS_PER_RUN
from cue_the_line.pool import PoolLoadError
from cue_the_line.schemas import (
    AnswerBody,
    AnswerResponse,
    HintResponse,
    QuoteView,
    RunView,
    ShareResponse,
    YesterdayResponse,
)
from cue_the_line.session import DailySession
from cue_the_line.share import result_message

logger = logging.getLogger(__name__)

router = APIRouter()


def _session(request: Request) -> DailySession:
    try:
        return request.app.state.game.session()
    except PoolLoadError:
        raise HTTPException(503, "Could not load quotes.json")


def run_view(session: DailySession) -> RunView:
    state = session.state
    view = RunView(
        run_number=session.run_number,
        day_key=session.day_key,
        index=session.index,
        total=QUESTIONS_PER_RUN,
        completed=state.completed,
        marks=list(state.marks),
        correct_count=state.correct_count,
        hints_used=state.hints_used,
    )
    q = session.current_quote
    if q is not None:
        view.quote = QuoteView(
            id=q.id,
            text=q.quote,
            hint1=q.hint1 if session.is_hint_shown(1) else None,
            hint2=q.hint2 if session.is_hint_shown(2) else None,
        )
    if state.completed:
        view.result_message = result_message(state)
        view.share_text = session.share_text()
        view.closer = session.closer()
    return view


@router.get("/today")
async def get_today(request: Request) -> RunView:
    """Current state of today's run."""
    return run_view(_session(request))


@router.post("/today/hints/{slot}")
async def reveal_hint(request: Request, slot: int = Path(ge=1, le=2)) -> HintResponse:
    """Reveal hint 1 or 2 for the current quote."""
    session = _session(request)
    text = session.reveal_hint(slot)
    return HintResponse(slot=slot, text=text, run=run_view(session))


@router.post("/today/answer")
async def submit_answer(request: Request, body: AnswerBody) -> AnswerResponse:
    """Submit a title for the current quote."""
    session = _session(request)
    result = session.submit_answer(body.answer)
    return AnswerResponse(result=result, run=run_view(session))


@router.get("/today/share")
async def get_share(request: Request) -> ShareResponse:
    """Share card for a completed run."""
    session = _session(request)
    text = session.share_text()
    if text is None:
        raise HTTPException(409, "Today's run is not complete")
    logger.info("share_clicked day=%s", session.day_key)
    return ShareResponse(text=text)


@router.get("/yesterday")
async def get_yesterday(request: Request) -> YesterdayResponse:
    """Yesterday's quotes and their answers."""
    session = _session(request)
    items = session.yesterday_reveal()
    if items is None:
        raise HTTPException(404, "Nothing to reveal for yesterday")
    return YesterdayResponse(day_key=yesterday_key(session.today), items=items)
