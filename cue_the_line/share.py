"""Share card and end-of-run text.

The share card layout is parsed by other tools, keep it stable:

    🎬 Cue The Line — Today’s run
    ✅✅❌✅❌
    Score: 3/5            (or "Perfect 5/5")
    Hints used: 2

    Take the movie trivia challenge: https://cuetheline.com/
"""

from __future__ import annotations

from cue_the_line.models import QUESTIONS_PER_RUN, RunState

DEFAULT_PLAY_URL = "https://cuetheline.com/"
SHARE_TITLE = "🎬 Cue The Line — Today’s run"
RETURN_HINT = "Tomorrow, today’s answers unlock above — and you’ll get a new set of 5 quotes."


def score_line(state: RunState) -> str:
    if state.correct_count == QUESTIONS_PER_RUN:
        return f"Perfect {QUESTIONS_PER_RUN}/{QUESTIONS_PER_RUN}"
    return f"Score: {state.correct_count}/{QUESTIONS_PER_RUN}"


def build_share_card(state: RunState, play_url: str = DEFAULT_PLAY_URL) -> str:
    return "\n".join([
        SHARE_TITLE,
        "".join(state.marks),
        score_line(state),
        f"Hints used: {state.hints_used}",
        "",
        f"Take the movie trivia challenge: {play_url}",
    ])


def result_message(state: RunState) -> list[str]:
    return [
        "Here’s how you did today:",
        f"Score: {state.correct_count} / {QUESTIONS_PER_RUN}",
        RETURN_HINT,
    ]
