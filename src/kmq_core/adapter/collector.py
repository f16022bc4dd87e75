"""Collector and script-loader collaborators.

`Collector` and `ScriptLoader` describe the externally loaded KISSmetrics
library. `InMemoryCollector` and `StaticLoader` stand in for it when the
adapter runs outside a browser (HTTP API, CLI, tests).
"""
import logging
from typing import Callable, Protocol

from ..schemas.commands import Command, DeferredUnit
from .queue import CommandQueue


logger = logging.getLogger(__name__)


class Collector(Protocol):
    """Primitives exposed by the loaded collector library."""

    def page_view(self) -> None:
        ...

    def set(self, properties: dict) -> None:
        ...


class ScriptLoader(Protocol):
    """Fetches the collector library and reports completion."""

    def load(self, url: str, on_ready: Callable[[Collector], None]) -> None:
        ...


class InMemoryCollector:
    """Collector that records what it receives and drains a queue in order."""

    def __init__(self) -> None:
        self.commands: list[tuple] = []
        self.objects: list[dict] = []
        self.page_views = 0
        self._cursor = 0

    def page_view(self) -> None:
        self.page_views += 1

    def set(self, properties: dict) -> None:
        self.objects.append(properties)

    def drain(self, queue: CommandQueue) -> int:
        """Process every entry appended since the last drain.

        Deferred units run in place; entries they cause to be appended are
        picked up in the same pass.

        Returns:
            Number of entries processed
        """
        processed = 0
        while self._cursor < len(queue):
            for entry in queue.read_from(self._cursor):
                self._cursor += 1
                processed += 1
                if isinstance(entry, Command):
                    self.commands.append(entry.as_tuple())
                elif isinstance(entry, DeferredUnit):
                    entry()

        logger.debug("Drained %s queue entries", processed)
        return processed


class StaticLoader:
    """Loader that completes immediately with a pre-built collector."""

    def __init__(self, collector: Collector) -> None:
        self.collector = collector
        self.requested_urls: list[str] = []

    def load(self, url: str, on_ready: Callable[[Collector], None]) -> None:
        self.requested_urls.append(url)
        logger.info("Loading collector library from %s", url)
        on_ready(self.collector)
