"""KISSmetrics adapter lifecycle entry points."""
import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional

from ..config import AdapterOptions
from ..exceptions import CollectorNotLoadedError
from ..schemas.commands import Command, PendingPageView
from ..schemas.events import Alias, Identify, Page, Track
from ..translate.builder import CommandBuilder
from ..translate.device import MOBILE_SESSION_TRAITS, is_mobile
from ..translate.orders import expand_completed_order
from .collector import Collector, ScriptLoader
from .queue import CommandQueue


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AdapterState(str, Enum):
    """Adapter lifecycle state."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"


class KISSmetricsAdapter:
    """Translate canonical analytics calls into `_kmq` queue entries.

    Calls made before the collector loads are buffered in the queue and take
    effect once the collector drains it.
    """

    def __init__(
        self,
        loader: ScriptLoader,
        options: Optional[AdapterOptions] = None,
        queue: Optional[CommandQueue] = None,
        user_agent: str = "",
        clock: Callable[[], datetime] = _utc_now,
        skip_page_view: bool = False,
    ) -> None:
        """Initialize adapter.

        Args:
            loader: Script loader that fetches the collector library
            options: Integration options (defaults apply when omitted)
            queue: Existing command queue; created on initialize() if None
            user_agent: Browser user agent, classified once on initialize()
            clock: Current-time provider for orders without a timestamp
            skip_page_view: Suppress the collector's own page-view primitive
        """
        self.loader = loader
        self.options = options or AdapterOptions()
        self.queue = queue
        self.user_agent = user_agent
        self.clock = clock
        self.skip_page_view = skip_page_view

        self.state = AdapterState.UNINITIALIZED
        self.builder = CommandBuilder(self.options)
        self._collector: Optional[Collector] = None
        self._initializing = False

    @property
    def loaded(self) -> bool:
        return self._collector is not None

    @property
    def ready(self) -> bool:
        return self.state is AdapterState.READY

    def initialize(self, page: Optional[Page] = None) -> None:
        """Create the queue, tag mobile sessions and load the collector.

        Args:
            page: Page context used for the initial page translation
        """
        if self._initializing or self.ready:
            logger.warning("initialize() called more than once, ignoring")
            return
        self._initializing = True

        if self.queue is None:
            self.queue = CommandQueue()

        if is_mobile(self.user_agent):
            logger.info("Mobile user agent detected, tagging session")
            self.queue.push(Command.set(dict(MOBILE_SESSION_TRAITS)))

        initial_page = page or Page()

        def on_ready(collector: Collector) -> None:
            self._collector = collector
            self.track_page(initial_page)
            self.state = AdapterState.READY
            logger.info("KISSmetrics adapter ready")

        self.loader.load(self.options.library_url, on_ready)

    def page(self, page: Page) -> None:
        """Request the collector's page view and record page events."""
        if not self.skip_page_view:
            self._request_page_view()
        self.track_page(page)

    def track_page(self, page: Page) -> None:
        for command in self.builder.page(page):
            self._push(command)

    def identify(self, identify: Identify) -> None:
        for command in self.builder.identify(identify):
            self._push(command)

    def track(self, track: Track) -> None:
        """Record a track call; completed orders are expanded per line item."""
        if track.is_completed_order:
            self.completed_order(track)
            return
        self._push(self.builder.track(track))

    def alias(self, alias: Alias) -> None:
        self._push(self.builder.alias(alias))

    def completed_order(self, track: Track) -> None:
        transaction, items = expand_completed_order(
            track, self.options, self.clock, self.set_object
        )
        self._push(transaction)
        self._queue().append(items)

    def set_object(self, properties: dict) -> None:
        """Hand an object to the collector's setter primitive."""
        if self._collector is None:
            raise CollectorNotLoadedError("set")
        self._collector.set(properties)

    def _request_page_view(self) -> None:
        if self._collector is None:
            logger.debug("Collector not loaded, deferring page view")
            self._queue().append(PendingPageView(page_view=self._page_view))
            return
        self._page_view()

    def _page_view(self) -> None:
        if self._collector is None:
            raise CollectorNotLoadedError("page_view")
        self._collector.page_view()

    def _push(self, command: Command) -> None:
        logger.debug("Translated %s command", command.verb.value)
        self._queue().push(command)

    def _queue(self) -> CommandQueue:
        if self.queue is None:
            # Calls before initialize() still buffer.
            self.queue = CommandQueue()
        return self.queue
