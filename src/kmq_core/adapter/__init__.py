"""Adapter façade, command queue and collector collaborators."""
from .collector import Collector, InMemoryCollector, ScriptLoader, StaticLoader
from .facade import AdapterState, KISSmetricsAdapter
from .queue import CommandQueue

__all__ = [
    "AdapterState",
    "Collector",
    "CommandQueue",
    "InMemoryCollector",
    "KISSmetricsAdapter",
    "ScriptLoader",
    "StaticLoader",
]
