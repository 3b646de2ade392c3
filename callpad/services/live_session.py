"""
Live Parse Session.

Drives the parser from live typing. Each ``submit`` restarts a short
debounce; when it elapses the text is parsed and the resulting items
are added to the session's chips. Only the latest submission may land:
an earlier pending or in-flight parse is cancelled, and a result that
still arrives after being superseded is discarded by generation check.
"""

from __future__ import annotations

import asyncio
import inspect
from datetime import date
from typing import Awaitable, Callable, Optional, Union

from callpad.config import Settings, get_settings
from callpad.logging_config import get_logger, session_id_var
from callpad.schemas.chip import Chip
from callpad.schemas.detection import ParseRequest
from callpad.services.chip_workflow import ChipSession
from callpad.services.input_parser import InputParser

logger = get_logger(__name__)

ResultCallback = Callable[[list[Chip]], Union[None, Awaitable[None]]]


class LiveParseSession:
    """
    Debounced, last-submitted-wins wrapper around InputParser + ChipSession.

    Usage:
        live = LiveParseSession(session_id="abc", use_ai=True)
        await live.submit("mesa az, wedding")
        await live.submit("mesa az, wedding, 30 people")   # supersedes the first
        await live.flush()
        live.chips.record.to_public()
        await live.close()
    """

    def __init__(
        self,
        session_id: str = "",
        parser: InputParser | None = None,
        chips: ChipSession | None = None,
        settings: Settings | None = None,
        use_ai: bool = False,
        today: date | None = None,
        on_result: Optional[ResultCallback] = None,
    ) -> None:
        self._settings = settings or get_settings()
        self.session_id = session_id
        self.parser = parser or InputParser(settings=self._settings)
        self.chips = chips or ChipSession(today=today)
        self.use_ai = use_ai
        self._today = today
        self._on_result = on_result
        self._generation = 0
        self._task: Optional[asyncio.Task] = None
        self._closed = False

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def closed(self) -> bool:
        return self._closed

    async def submit(self, text: str) -> None:
        """Schedule a parse of ``text``, superseding any earlier submission."""
        if self._closed:
            logger.warning("submit_after_close", session_id=self.session_id)
            return

        self._generation += 1
        self._cancel_pending()
        self._task = asyncio.create_task(self._run(self._generation, text))

    async def commit(self, text: str) -> list[Chip]:
        """Parse ``text`` now, skipping the debounce. Supersedes pending submissions."""
        if self._closed:
            logger.warning("commit_after_close", session_id=self.session_id)
            return []

        self._generation += 1
        self._cancel_pending()
        generation = self._generation
        token = session_id_var.set(self.session_id)
        try:
            response = await self.parser.parse(ParseRequest(text=text, use_ai=self.use_ai), self._today)
            if generation != self._generation:
                logger.info("stale_result_discarded", generation=generation, current=self._generation)
                return []
            added = self.chips.add_items(response.items)
            logger.info("live_result_committed", generation=generation, chips=len(added))
            return added
        finally:
            session_id_var.reset(token)

    async def flush(self) -> None:
        """Wait for the latest submission to finish (or be cancelled)."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            # A newer submit or close() cancelled it; nothing to wait for
            if not task.cancelled():
                raise

    async def close(self) -> None:
        """Cancel in-flight work; any late result is discarded."""
        self._closed = True
        self._generation += 1
        self._cancel_pending()
        logger.info("live_session_closed", session_id=self.session_id)

    def _cancel_pending(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def _run(self, generation: int, text: str) -> None:
        token = session_id_var.set(self.session_id)
        try:
            await asyncio.sleep(self._settings.debounce_seconds)
            if generation != self._generation:
                return

            response = await self.parser.parse(ParseRequest(text=text, use_ai=self.use_ai), self._today)

            if generation != self._generation or self._closed:
                logger.info("stale_result_discarded", generation=generation, current=self._generation)
                return

            added = self.chips.add_items(response.items)
            logger.info("live_result_applied", generation=generation, chips=len(added))

            if self._on_result is not None:
                outcome = self._on_result(added)
                if inspect.isawaitable(outcome):
                    await outcome
        except asyncio.CancelledError:
            logger.debug("live_parse_cancelled", generation=generation)
            raise
        except Exception as e:
            logger.error("live_parse_error", generation=generation, error=str(e))
        finally:
            session_id_var.reset(token)
