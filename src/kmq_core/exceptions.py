"""Custom exceptions for the KISSmetrics queue adapter."""


class KMQError(Exception):
    """Base exception for all adapter errors."""


class OptionsError(KMQError):
    """Raised when an environment option cannot be parsed."""

    def __init__(self, name: str, value: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid boolean for {name}: {value!r}")


class CollectorNotLoadedError(KMQError):
    """Raised when a collector primitive is used before the library loaded."""

    def __init__(self, primitive: str):
        self.primitive = primitive
        super().__init__(
            f"Collector primitive '{primitive}' called before the library loaded"
        )


class ApiKeyNotConfiguredError(KMQError):
    """Raised when the translation API has no key to check requests against."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} environment variable not configured")
