"""Tests for cue_the_line.session — the daily run state machine."""

from datetime import date, timedelta
from pathlib import Path

import pytest

from cue_the_line.models import QuotePool
from cue_the_line.session import (
    ADVANCE_DELAY_MS,
    CORRECT_STATUS,
    EMPTY_ANSWER_STATUS,
    NO_QUOTES_STATUS,
    UNKNOWN_TITLE,
    WRONG_STATUS,
    DailySession,
)
from cue_the_line.storage import JsonRunStore, MemoryRunStore

WRONG = "definitely not a real movie title"


def _clock() -> int:
    return 1_700_000_000_000


def _open(pool: QuotePool, store, day: date) -> DailySession:
    return DailySession(pool, store, day, clock=_clock)


def _right(session: DailySession) -> str:
    return session.current_quote.answers[0]


def _play(session: DailySession, pattern: str) -> None:
    """Answer in order: 'y' correct, 'n' wrong."""
    for c in pattern:
        session.submit_answer(_right(session) if c == "y" else WRONG)


# ---------------------------------------------------------------------------
# Begin / resume
# ---------------------------------------------------------------------------

class TestBegin:
    def test_new_run_created_and_saved(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        assert session.index == 0
        assert not session.completed
        assert session.state.started_at == _clock()
        assert session.state.set_ids == [q.id for q in session.daily_set]
        assert store.saves == 1
        assert store.data["2025-03-14"]["setIds"] == session.state.set_ids

    def test_run_number_counts_from_anchor(self, quote_pool, store) -> None:
        session = _open(quote_pool, store, date(2025, 1, 1))
        assert session.day_index == 0
        assert session.run_number == 1

    def test_current_quote_is_first_of_set(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        assert session.current_quote == session.daily_set[0]

    def test_resume_mid_run(self, quote_pool, store, today) -> None:
        first = _open(quote_pool, store, today)
        _play(first, "yny")
        marks = list(first.state.marks)

        resumed = _open(quote_pool, store, today)
        assert resumed.index == 3
        assert resumed.state.marks == marks
        assert resumed.state.correct_count == 2
        assert resumed.current_quote == resumed.daily_set[3]

    def test_completed_run_stays_completed(self, quote_pool, store, today) -> None:
        _play(_open(quote_pool, store, today), "yyyyy")
        reopened = _open(quote_pool, store, today)
        assert reopened.completed
        assert reopened.current_quote is None

    def test_lost_completion_write_is_repaired(self, quote_pool, today) -> None:
        store = MemoryRunStore({
            "2025-03-14": {"startedAt": 1, "correctCount": 1, "marks": ["✅", "❌", "❌", "❌", "❌"]},
        })
        session = _open(quote_pool, store, today)
        assert session.completed
        assert session.state.completed_at == _clock()

    def test_new_day_new_run(self, quote_pool, store, today) -> None:
        _play(_open(quote_pool, store, today), "yy")
        tomorrow = _open(quote_pool, store, today + timedelta(days=1))
        assert tomorrow.index == 0
        assert set(store.data) == {"2025-03-14", "2025-03-15"}


# ---------------------------------------------------------------------------
# Hints
# ---------------------------------------------------------------------------

class TestHints:
    def test_reveal_returns_text(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        q = session.current_quote
        assert session.reveal_hint(1) == q.hint1
        assert session.reveal_hint(2) == q.hint2
        assert session.state.hints_used == 2

    def test_second_reveal_is_free(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        session.reveal_hint(1)
        saves = store.saves
        session.reveal_hint(1)
        assert session.state.hints_used == 1
        assert store.saves == saves

    def test_shown_tracked_per_quote(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        session.reveal_hint(1)
        assert session.is_hint_shown(1)
        assert not session.is_hint_shown(2)
        _play(session, "n")
        assert not session.is_hint_shown(1)
        session.reveal_hint(1)
        assert session.state.hints_used == 2

    def test_hint_survives_reload(self, quote_pool, store, today) -> None:
        _open(quote_pool, store, today).reveal_hint(2)
        resumed = _open(quote_pool, store, today)
        assert resumed.is_hint_shown(2)
        resumed.reveal_hint(2)
        assert resumed.state.hints_used == 1

    def test_no_hints_after_completion(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        _play(session, "nnnnn")
        assert session.reveal_hint(1) is None
        assert session.state.hints_used == 0

    def test_bad_slot(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        with pytest.raises(ValueError):
            session.reveal_hint(3)


# ---------------------------------------------------------------------------
# Answers
# ---------------------------------------------------------------------------

class TestAnswers:
    def test_correct_answer(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        result = session.submit_answer(_right(session))
        assert result.accepted and result.correct
        assert result.status == CORRECT_STATUS
        assert result.tone == "ok"
        assert result.advance_delay_ms == ADVANCE_DELAY_MS
        assert session.state.marks == ["✅"]
        assert session.state.correct_count == 1
        assert session.index == 1

    def test_wrong_answer_keeps_playing(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        result = session.submit_answer(WRONG)
        assert result.accepted and result.correct is False
        assert result.status == WRONG_STATUS
        assert result.tone == "bad"
        assert not session.completed
        assert session.current_quote == session.daily_set[1]

    @pytest.mark.parametrize("blank", ["", "   ", "\t\n", None])
    def test_empty_answer_uses_no_turn(self, quote_pool, store, today, blank) -> None:
        session = _open(quote_pool, store, today)
        saves = store.saves
        result = session.submit_answer(blank)
        assert not result.accepted
        assert result.status == EMPTY_ANSWER_STATUS
        assert session.state.marks == []
        assert store.saves == saves

    def test_punctuation_only_answer_uses_a_turn(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        result = session.submit_answer("???")
        assert result.accepted and result.correct is False
        assert session.index == 1

    def test_five_answers_complete_the_run(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        _play(session, "nnnn")
        assert not session.completed
        result = session.submit_answer(WRONG)
        assert result.completed
        assert session.completed
        assert session.state.completed_at == _clock()
        assert store.data["2025-03-14"]["completed"] is True

    def test_completed_run_is_frozen(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        _play(session, "ynyny")
        before = session.state.model_copy(deep=True)
        result = session.submit_answer("casablanca")
        assert not result.accepted
        assert session.state.marks == before.marks
        assert session.state.correct_count == before.correct_count
        assert session.state.hints_used == before.hints_used
        assert len(session.state.marks) == 5

    def test_empty_pool_never_starts(self, store, today) -> None:
        session = _open(QuotePool(), store, today)
        result = session.submit_answer("jaws")
        assert not result.accepted
        assert not result.completed
        assert result.status == NO_QUOTES_STATUS
        assert session.share_text() is None
        assert session.state.marks == []

    def test_save_failure_does_not_stop_play(self, quote_pool, today, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        session = _open(quote_pool, JsonRunStore(blocker), today)
        _play(session, "yyyyy")
        assert session.completed
        assert session.state.correct_count == 5


# ---------------------------------------------------------------------------
# End of run
# ---------------------------------------------------------------------------

class TestEndOfRun:
    def test_share_text_scenario(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        session.reveal_hint(1)
        session.reveal_hint(2)
        _play(session, "yynyn")
        text = session.share_text()
        lines = text.split("\n")
        assert lines[1] == "✅✅❌✅❌"
        assert "Score: 3/5" in lines
        assert "Hints used: 2" in lines

    def test_no_share_before_completion(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        _play(session, "yy")
        assert session.share_text() is None

    def test_perfect_run_gets_closer(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        _play(session, "yyyyy")
        assert "Perfect 5/5" in session.share_text()
        assert session.closer() in quote_pool.perfect_closers

    def test_imperfect_run_has_no_closer(self, quote_pool, store, today) -> None:
        session = _open(quote_pool, store, today)
        _play(session, "yyyyn")
        assert session.closer() is None


# ---------------------------------------------------------------------------
# Yesterday reveal
# ---------------------------------------------------------------------------

class TestYesterday:
    def test_nothing_without_yesterday(self, quote_pool, store, today) -> None:
        assert _open(quote_pool, store, today).yesterday_reveal() is None

    def test_reveal_after_playing_yesterday(self, quote_pool, store, today) -> None:
        yesterday = _open(quote_pool, store, today - timedelta(days=1))
        ids = [q.id for q in yesterday.daily_set]

        items = _open(quote_pool, store, today).yesterday_reveal()
        assert [i.index for i in items] == [1, 2, 3, 4, 5]
        for item, quote_id in zip(items, ids):
            q = quote_pool.by_id(quote_id)
            assert item.quote == q.quote
            assert item.title == q.display
            assert item.year == q.year

    def test_unknown_id_falls_back(self, quote_pool, today) -> None:
        store = MemoryRunStore({
            "2025-03-13": {"startedAt": 1, "setIds": ["q001", "q002", "gone", "q004", "q005"]},
        })
        items = _open(quote_pool, store, today).yesterday_reveal()
        assert items[2].title == UNKNOWN_TITLE
        assert items[2].quote == ""
        assert items[0].title == "Casablanca"

    def test_incomplete_set_hidden(self, quote_pool, today) -> None:
        store = MemoryRunStore({"2025-03-13": {"startedAt": 1, "setIds": ["q001", "q002"]}})
        assert _open(quote_pool, store, today).yesterday_reveal() is None
