"""Queue entries: commands and deferred units."""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


logger = logging.getLogger(__name__)


class Verb(str, Enum):
    """Command verbs understood by the collector."""

    RECORD = "record"
    SET = "set"
    IDENTIFY = "identify"
    ALIAS = "alias"


@dataclass(frozen=True)
class Command:
    """A single queued instruction, `(verb, *args)`."""

    verb: Verb
    args: tuple = ()

    def as_tuple(self) -> tuple:
        return (self.verb.value, *self.args)

    @classmethod
    def record(cls, event: str, properties: dict) -> "Command":
        return cls(Verb.RECORD, (event, properties))

    @classmethod
    def set(cls, properties: dict) -> "Command":
        return cls(Verb.SET, (properties,))

    @classmethod
    def identify(cls, user_id: str) -> "Command":
        return cls(Verb.IDENTIFY, (user_id,))

    @classmethod
    def alias(cls, to: str, from_: Any = None) -> "Command":
        return cls(Verb.ALIAS, (to, from_))


class DeferredUnit(ABC):
    """Zero-argument unit of work run once by the collector's loop."""

    def __init__(self) -> None:
        self.executed = False

    def __call__(self) -> None:
        if self.executed:
            logger.warning("%s already executed, ignoring re-run", self.describe())
            return
        self.executed = True
        self.run()

    @abstractmethod
    def run(self) -> None:
        """Perform the deferred work."""

    @abstractmethod
    def describe(self) -> str:
        """Short label for logs and serialized output."""


@dataclass(eq=False)
class PendingItemSet(DeferredUnit):
    """Materialized per-item object sets for one completed order.

    Items are captured by value when the order is processed; running the unit
    hands a copy of each, in order, to the collector's object setter.
    """

    event: str
    items: tuple[dict, ...]
    set_object: Callable[[dict], None] = field(repr=False)

    def __post_init__(self) -> None:
        DeferredUnit.__init__(self)

    def run(self) -> None:
        logger.debug("Setting %s line items for '%s'", len(self.items), self.event)
        for item in self.items:
            self.set_object(dict(item))

    def describe(self) -> str:
        return f"items:{self.event}"


@dataclass(eq=False)
class PendingPageView(DeferredUnit):
    """Page-view request issued before the collector finished loading."""

    page_view: Callable[[], None] = field(repr=False)

    def __post_init__(self) -> None:
        DeferredUnit.__init__(self)

    def run(self) -> None:
        self.page_view()

    def describe(self) -> str:
        return "page_view"
