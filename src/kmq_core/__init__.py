"""KISSmetrics command-queue adapter."""
from .adapter import CommandQueue, InMemoryCollector, KISSmetricsAdapter, StaticLoader
from .config import AdapterOptions, load_options
from .exceptions import CollectorNotLoadedError, KMQError, OptionsError

__all__ = [
    "AdapterOptions",
    "CollectorNotLoadedError",
    "CommandQueue",
    "InMemoryCollector",
    "KISSmetricsAdapter",
    "KMQError",
    "OptionsError",
    "StaticLoader",
    "load_options",
]
