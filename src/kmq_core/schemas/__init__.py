"""Canonical event and queue command models."""
from .commands import Command, DeferredUnit, PendingItemSet, PendingPageView, Verb
from .events import Alias, CanonicalCall, Identify, Page, PageContext, Track

__all__ = [
    "Alias",
    "CanonicalCall",
    "Command",
    "DeferredUnit",
    "Identify",
    "Page",
    "PageContext",
    "PendingItemSet",
    "PendingPageView",
    "Track",
    "Verb",
]
