"""Append-only command queue shared with the collector."""
import logging
from typing import Iterator, Union

from ..schemas.commands import Command, DeferredUnit


logger = logging.getLogger(__name__)

QueueEntry = Union[Command, DeferredUnit]


class CommandQueue:
    """Append-only channel: the adapter produces, the collector consumes.

    Entries are never reordered, deduplicated or removed. Consumers keep
    their own read cursor.
    """

    def __init__(self) -> None:
        self._entries: list[QueueEntry] = []

    def append(self, entry: QueueEntry) -> None:
        if not isinstance(entry, (Command, DeferredUnit)):
            raise TypeError(f"Unsupported queue entry: {type(entry).__name__}")
        self._entries.append(entry)
        logger.debug("Queued %s (depth=%s)", _label(entry), len(self._entries))

    def push(self, command: Command) -> None:
        self.append(command)

    def read_from(self, cursor: int) -> list[QueueEntry]:
        """Entries appended at or after `cursor`."""
        return self._entries[cursor:]

    @property
    def entries(self) -> tuple[QueueEntry, ...]:
        return tuple(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[QueueEntry]:
        return iter(tuple(self._entries))


def _label(entry: QueueEntry) -> str:
    if isinstance(entry, Command):
        return entry.verb.value
    return entry.describe()
