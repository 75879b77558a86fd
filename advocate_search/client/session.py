from __future__ import annotations

import logging
from typing import Callable

from ..advocates.filtering import filter_advocates
from ..advocates.models import Advocate
from .config import DEFAULT_CLIENT_CONFIG, ClientConfig
from .debounce import Debouncer
from .models import LoadState, RecommendationResult, SessionView
from .recommendation import RecommendationClient
from .transport import AdvocateApi, AdvocateApiError

logger = logging.getLogger(__name__)


class SessionController:
    """
    Owns all state of one browsing session.

    The roster is fetched by ``load``; live filtering goes through a
    ``Debouncer`` into ``filter_advocates``; free-text recommendations go
    through a ``RecommendationClient``. The presentation layer reads
    ``view()`` or subscribes with ``on_change``.
    """

    def __init__(
        self,
        api: AdvocateApi | None = None,
        config: ClientConfig = DEFAULT_CLIENT_CONFIG,
        on_change: Callable[[SessionView], None] | None = None,
    ):
        self._api = api or AdvocateApi(config)
        self._on_change = on_change

        self._load_state = LoadState.idle
        self._load_sequence = 0
        self._advocates: tuple[Advocate, ...] = ()

        self._filter_query = ""
        self._settled_filter_query = ""
        self._filtered: tuple[Advocate, ...] = ()
        self._debouncer: Debouncer[str] = Debouncer(config.quiet_period, self._on_filter_settled)

        self._recommendation_query = ""
        self._recommender = RecommendationClient(self._api)

    # ── Read side ─────────────────────────────────────────────────────────

    def view(self) -> SessionView:
        return SessionView(
            load_state=self._load_state,
            advocates=self._advocates,
            filter_query=self._filter_query,
            settled_filter_query=self._settled_filter_query,
            filtered=self._filtered,
            filter_pending=self._debouncer.pending,
            recommendation_query=self._recommendation_query,
            recommendation=self._recommender.result,
        )

    @property
    def recommendation(self) -> RecommendationResult:
        return self._recommender.result

    def _notify(self) -> None:
        if self._on_change is None:
            return
        try:
            self._on_change(self.view())
        except Exception:
            logger.exception("Session change listener raised")

    # ── Roster loading ───────────────────────────────────────────────────

    async def load(self) -> LoadState:
        """
        Fetch the roster. A later call replaces the whole set.

        Each call takes the next load sequence number; a fetch that resolves
        after a newer one was started leaves state untouched.
        """
        self._load_sequence += 1
        token = self._load_sequence
        logger.info("Fetching advocates (#%d)", token)
        self._load_state = LoadState.loading
        self._notify()

        try:
            advocates = await self._api.list_advocates()
        except AdvocateApiError:
            if token != self._load_sequence:
                logger.debug("Ignoring failure of superseded load #%d", token)
                return self._load_state
            logger.error("Could not load advocates", exc_info=True)
            self._advocates = ()
            self._filtered = ()
            self._load_state = LoadState.failed
            self._notify()
            return self._load_state

        if token != self._load_sequence:
            logger.debug("Discarding superseded load #%d", token)
            return self._load_state

        self._advocates = tuple(advocates)
        self._load_state = LoadState.loaded
        # Query may have settled before the roster arrived
        self._run_filter()
        logger.info("Loaded %d advocates", len(self._advocates))
        self._notify()
        return self._load_state

    # ── Live filter ──────────────────────────────────────────────────────

    def set_filter_query(self, text: str) -> None:
        """Record a keystroke; filtering happens once the input goes quiet."""
        if not text.strip():
            # Blank input matches everything, so there is nothing to wait for
            self._debouncer.cancel()
            self._filter_query = text
            self._settled_filter_query = text
            self._run_filter()
            self._notify()
            return
        self._filter_query = text
        self._debouncer.push(text)
        self._notify()

    def clear_filter(self) -> None:
        self._debouncer.cancel()
        self._filter_query = ""
        self._settled_filter_query = ""
        self._run_filter()
        self._notify()

    def _on_filter_settled(self, text: str) -> None:
        self._settled_filter_query = text
        self._run_filter()
        self._notify()

    def _run_filter(self) -> None:
        logger.debug("Filtering advocates for %r", self._settled_filter_query)
        self._filtered = tuple(filter_advocates(self._advocates, self._settled_filter_query))

    # ── Recommendation ───────────────────────────────────────────────────

    def set_recommendation_query(self, text: str) -> None:
        self._recommendation_query = text
        if not text.strip():
            self._recommender.clear()
        self._notify()

    async def submit_recommendation(self, text: str | None = None) -> RecommendationResult:
        """
        Submit the recommendation query (or ``text``) against the full roster.

        Returns the session's current result once this submission settles,
        which is a newer submission's state if this one was superseded.
        """
        if text is not None:
            self._recommendation_query = text
        query = self._recommendation_query

        token = self._recommender.start(query)
        self._notify()
        if token is None:
            return self._recommender.result

        # Recommendation always runs over the full roster, not the filtered view
        await self._recommender.complete(token, query, self._advocates)
        self._notify()
        return self._recommender.result

    def clear_recommendation(self) -> None:
        self._recommendation_query = ""
        self._recommender.clear()
        self._notify()

    # ── Teardown ─────────────────────────────────────────────────────────

    async def aclose(self) -> None:
        self._debouncer.cancel()
        await self._api.aclose()
