"""Translation rules from canonical calls to queue commands."""
import logging

from ..config import AdapterOptions
from ..schemas.commands import Command
from ..schemas.events import Alias, Identify, Page, Track
from .mapping import REVENUE_MAPPING, prefix


logger = logging.getLogger(__name__)


class CommandBuilder:
    """Build `_kmq` commands for page, identify, track and alias calls."""

    def __init__(self, options: AdapterOptions) -> None:
        self.options = options

    def identify(self, identify: Identify) -> list[Command]:
        """Identify first, then set traits; absent inputs emit nothing."""
        commands: list[Command] = []
        if identify.user_id:
            commands.append(Command.identify(identify.user_id))
        if identify.traits:
            commands.append(Command.set(dict(identify.traits)))
        return commands

    def track(self, track: Track) -> Command:
        """Record the event with aliased, optionally prefixed properties."""
        event = track.event
        properties = track.aliased_properties(REVENUE_MAPPING)

        revenue = track.revenue()
        if revenue:
            # Reports built on the server-side feed read both 'revenue' and
            # 'Billing Amount', so both are written.
            properties["revenue"] = revenue

        if self.options.prefix_properties:
            properties = prefix(event, properties)

        return Command.record(event, properties)

    def page(self, page: Page) -> list[Command]:
        """Record 'Viewed ... Page' events for the named and categorized page."""
        commands: list[Command] = []
        category = page.category
        full_name = page.full_name

        if full_name and self.options.track_named_pages:
            commands.append(self.track(page.to_track(full_name)))

        if category and self.options.track_categorized_pages:
            commands.append(self.track(page.to_track(category)))

        if not commands:
            logger.debug("Page call produced no record commands")

        return commands

    def alias(self, alias: Alias) -> Command:
        return Command.alias(alias.to, alias.from_)
