"""Pydantic models for canonical analytics calls."""
import re
from datetime import datetime
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..translate.mapping import alias_properties, normalize_revenue


COMPLETED_ORDER_PATTERN = re.compile(r"^[ _]?completed[ _]?order[ _]?$", re.IGNORECASE)


class CanonicalEvent(BaseModel):
    """Base for immutable canonical calls."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    timestamp: Optional[datetime] = Field(
        None, description="When the call happened (defaults to now when needed)"
    )


class PageContext(BaseModel):
    """Page defaults taken from the browsing context."""

    model_config = ConfigDict(frozen=True)

    path: str = ""
    referrer: str = ""
    search: str = ""
    title: str = ""
    url: str = ""


class Track(CanonicalEvent):
    """A named user action with free-form properties."""

    type: Literal["track"] = "track"
    event: str = Field(..., description="Event name, e.g. 'completed order'")
    properties: dict[str, Any] = Field(default_factory=dict)

    @property
    def is_completed_order(self) -> bool:
        return bool(COMPLETED_ORDER_PATTERN.match(self.event))

    def aliased_properties(self, mapping: Optional[dict[str, str]] = None) -> dict:
        """Shallow copy of the properties with `mapping` keys renamed."""
        return alias_properties(self.properties, mapping or {})

    def revenue(self) -> Optional[float]:
        """Revenue amount, falling back to `total` for completed orders."""
        value = self.properties.get("revenue")
        if not value and self.is_completed_order:
            value = self.properties.get("total")
        return normalize_revenue(value)

    def products(self) -> list:
        """Order line items, in input order."""
        products = self.properties.get("products")
        if isinstance(products, list):
            return products
        return []


class Page(CanonicalEvent):
    """A page view, optionally named and categorized."""

    type: Literal["page"] = "page"
    name: Optional[str] = None
    category: Optional[str] = None
    properties: dict[str, Any] = Field(default_factory=dict)
    context: PageContext = Field(default_factory=PageContext)

    @property
    def full_name(self) -> Optional[str]:
        """'<category> <name>' when both are set, otherwise the name."""
        if self.name and self.category:
            return f"{self.category} {self.name}"
        return self.name

    def page_properties(self) -> dict:
        """Context defaults, overridden by explicit properties, plus name/category."""
        merged: dict[str, Any] = self.context.model_dump()
        merged.update(self.properties)
        if self.name:
            merged["name"] = self.name
        if self.category:
            merged["category"] = self.category
        return merged

    def to_track(self, name: str) -> Track:
        """Derive the 'Viewed <name> Page' track call for this page."""
        return Track(
            event=f"Viewed {name} Page",
            properties=self.page_properties(),
            timestamp=self.timestamp,
        )


class Identify(CanonicalEvent):
    """Attach a user id and/or traits to the current visitor."""

    type: Literal["identify"] = "identify"
    user_id: Optional[str] = Field(None, alias="userId")
    traits: dict[str, Any] = Field(default_factory=dict)


class Alias(CanonicalEvent):
    """Link a new identity to a previous (possibly anonymous) one."""

    type: Literal["alias"] = "alias"
    to: str
    from_: Optional[str] = Field(None, alias="from")


CanonicalCall = Annotated[
    Union[Page, Identify, Track, Alias], Field(discriminator="type")
]
