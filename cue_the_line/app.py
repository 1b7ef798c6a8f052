import logging
from datetime import date
from typing import Callable

from fastapi import FastAPI

from cue_the_line.config import Settings, load_settings
from cue_the_line.models import QuotePool
from cue_the_line.pool import PoolLoadError, load_pool
from cue_the_line.routes import router
from cue_the_line.session import DailySession
from cue_the_line.storage import JsonRunStore, RunStore

logger = logging.getLogger(__name__)


class Game:
    """Holds the pool and store for the process; hands out today's session."""

    def __init__(
        self,
        settings: Settings,
        store: RunStore,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.settings = settings
        self.store = store
        self._today = today
        self._session: DailySession | None = None
        self.pool: QuotePool | None = None
        self.load_error: str | None = None
        try:
            self.pool = load_pool(settings.quotes_path)
        except PoolLoadError as e:
            logger.error("Quote pool unavailable: %s", e)
            self.load_error = str(e)

    def session(self) -> DailySession:
        if self.pool is None:
            raise PoolLoadError(self.load_error or "Quote pool not loaded")
        today = self._today()
        if self._session is None or self._session.today != today:
            self._session = DailySession(
                self.pool, self.store, today,
                anchor=self.settings.anchor_date,
                play_url=self.settings.play_url,
            )
        return self._session


def create_app(
    settings: Settings | None = None,
    store: RunStore | None = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    resolved = settings or load_settings()
    game = Game(resolved, store or JsonRunStore(resolved.data_dir), today)

    app = FastAPI(title="Cue The Line")
    app.state.game = game
    app.include_router(router, prefix="/api")
    return app
