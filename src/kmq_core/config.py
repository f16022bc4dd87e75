"""Adapter options loaded from environment variables."""
import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

from .exceptions import ApiKeyNotConfiguredError, OptionsError


logger = logging.getLogger(__name__)

API_KEY_ENV = "KMQ_API_KEY"
LIBRARY_URL_TEMPLATE = "//scripts.kissmetrics.com/{api_key}.2.js"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class AdapterOptions(BaseModel):
    """Recognized integration options."""

    api_key: str = Field("", description="KISSmetrics account API key")
    prefix_properties: bool = Field(
        True, description="Prepend the event name to every property key"
    )
    track_named_pages: bool = Field(
        True, description="Record 'Viewed <name> Page' on page calls"
    )
    track_categorized_pages: bool = Field(
        True, description="Record 'Viewed <category> Page' on page calls"
    )

    @property
    def library_url(self) -> str:
        """Protocol-relative URL of the collector script."""
        return LIBRARY_URL_TEMPLATE.format(api_key=self.api_key)


def env_flag(name: str, default: bool) -> bool:
    """Parse a boolean environment variable.

    Args:
        name: Environment variable name
        default: Value used when the variable is unset

    Returns:
        Parsed flag

    Raises:
        OptionsError: If the value is not a recognizable boolean
    """
    raw: Optional[str] = os.getenv(name)
    if raw is None:
        return default

    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise OptionsError(name, raw)


def load_options() -> AdapterOptions:
    """Build adapter options from KISSMETRICS_* environment variables."""
    options = AdapterOptions(
        api_key=os.getenv("KISSMETRICS_API_KEY", ""),
        prefix_properties=env_flag("KISSMETRICS_PREFIX_PROPERTIES", True),
        track_named_pages=env_flag("KISSMETRICS_TRACK_NAMED_PAGES", True),
        track_categorized_pages=env_flag(
            "KISSMETRICS_TRACK_CATEGORIZED_PAGES", True
        ),
    )

    if not options.api_key:
        logger.warning("KISSMETRICS_API_KEY not configured, library URL has no key")

    return options


def load_skip_page_view() -> bool:
    """Read the KM_SKIP_PAGE_VIEW suppression flag."""
    return env_flag("KM_SKIP_PAGE_VIEW", False)


def load_api_key() -> str:
    """Key that translation API callers must present.

    Raises:
        ApiKeyNotConfiguredError: If KMQ_API_KEY is unset or blank
    """
    api_key = os.getenv(API_KEY_ENV, "").strip()
    if not api_key:
        raise ApiKeyNotConfiguredError(API_KEY_ENV)
    return api_key
