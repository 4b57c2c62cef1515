"""robots.txt generation.

This module collects allow/disallow rules and the nonstandard or
Robots Exclusion Standard 2.0 directives per user agent, and renders
them as a robots.txt file.

See http://www.robotstxt.org/orig.html
"""

import logging
import warnings
from datetime import datetime, time

from indexed.exceptions import InvalidArgumentError
from indexed.models import DIRECTIVE_ORDER, Directive

LOGGER = logging.getLogger(__name__)

DEFAULT_AGENT = "*"

# Accepted time-of-day inputs, tried in order
TIME_FORMATS = [
    "%H:%M",
    "%H:%M:%S",
    "%H%M",
    "%I:%M %p",
    "%I:%M%p",
    "%I %p",
    "%I%p",
]


def parse_time_of_day(value: str | time | datetime) -> str:
    """
    Normalise a time of day to zero-padded 24-hour ``HH:MM``.

    Args:
        value: Time string (e.g. ``"13:00"``, ``"1pm"``), ``time`` or ``datetime``.

    Returns:
        Time formatted as ``HH:MM``.

    Raises:
        InvalidArgumentError: If the value is not a recognisable time of day.
    """
    if isinstance(value, (datetime, time)):
        return value.strftime("%H:%M")

    if isinstance(value, str):
        text = value.strip().upper()
        for fmt in TIME_FORMATS:
            try:
                return datetime.strptime(text, fmt).strftime("%H:%M")
            except ValueError:
                continue

    raise InvalidArgumentError(f"Cannot parse time of day: {value!r}", field="time", value=value)


def format_time_window(start: str | time | datetime, end: str | time | datetime) -> str:
    """Format a visit window as ``HH:MM - HH:MM``."""
    return f"{parse_time_of_day(start)} - {parse_time_of_day(end)}"


def sort_agents(agents: list[str]) -> list[str]:
    """
    Order agent blocks for output.

    Agents are emitted in descending lexicographic order, so the ``*``
    block (which sorts lowest) always comes last. Existing robots.txt
    files depend on this order; keep it stable.
    """
    return sorted(agents, reverse=True)


class DirectiveStore:
    """Directive values per user agent.

    Multi-valued directives keep insertion order. ``Crawl-delay`` holds
    a single value which is overwritten on each write.
    """

    def __init__(self) -> None:
        self._data: dict[str, dict[Directive, list[str]]] = {}

    def append(self, agent: str, directive: Directive, value: str) -> None:
        """Add a value to a multi-valued directive."""
        self._data.setdefault(agent, {}).setdefault(directive, []).append(value)

    def set(self, agent: str, directive: Directive, value: str) -> None:
        """Replace all values of a single-valued directive."""
        self._data.setdefault(agent, {})[directive] = [value]

    def agents(self) -> list[str]:
        """Agents in first-mention order."""
        return list(self._data)

    def directives(self, agent: str) -> list[tuple[Directive, list[str]]]:
        """
        Project an agent's directives onto the canonical directive order.

        Args:
            agent: Agent identifier.

        Returns:
            ``(directive, values)`` pairs for the directives present.
        """
        rules = self._data.get(agent, {})
        return [(directive, list(rules[directive])) for directive in DIRECTIVE_ORDER if directive in rules]

    def __len__(self) -> int:
        return len(self._data)


def render_robots(store: DirectiveStore) -> str:
    """
    Render a directive store as robots.txt content.

    Args:
        store: Directives to render.

    Returns:
        One block per agent separated by a blank line; empty string for an
        empty store.
    """
    blocks: list[str] = []

    for agent in sort_agents(store.agents()):
        lines = [f"{Directive.USER_AGENT.value}: {agent}\n"]
        for directive, values in store.directives(agent):
            for value in values:
                lines.append(f"{directive.value}: {value}\n")
        blocks.append("".join(lines))

    return "\n".join(blocks)


class RobotsTxt:
    """
    Builder for robots.txt files.

    Usage:
        robots = RobotsTxt()
        robots.disallow("/admin/")
        robots.sitemap("https://example.org/sitemap.xml")
        content = robots.generate()
    """

    def __init__(self) -> None:
        self._store = DirectiveStore()

    def allow(self, url: str, agent: str = DEFAULT_AGENT) -> None:
        """
        Allow access to a URL.

        Args:
            url: A site-relative URL or pattern.
            agent: Agent identifier; defaults to any.

        Raises:
            InvalidArgumentError: If the URL is fully qualified.
        """
        _require_relative(url, Directive.ALLOW)
        self._append(agent, Directive.ALLOW, url)

    def disallow(self, url: str, agent: str = DEFAULT_AGENT) -> None:
        """
        Disallow access to a URL.

        Args:
            url: A site-relative URL or pattern.
            agent: Agent identifier; defaults to any.

        Raises:
            InvalidArgumentError: If the URL is fully qualified.
        """
        _require_relative(url, Directive.DISALLOW)
        self._append(agent, Directive.DISALLOW, url)

    def deny(self, url: str, agent: str = DEFAULT_AGENT) -> None:
        """Deprecated alias of :meth:`disallow`."""
        warnings.warn(
            "RobotsTxt.deny() is deprecated, use disallow() instead.",
            DeprecationWarning,
            stacklevel=2,
        )
        self.disallow(url, agent)

    def sitemap(self, url: str, agent: str = DEFAULT_AGENT) -> None:
        """
        Hint where a sitemap is located.

        Args:
            url: A fully qualified URL.
            agent: Agent identifier; defaults to any.

        Raises:
            InvalidArgumentError: If the URL is not fully qualified.
        """
        if "://" not in url:
            raise InvalidArgumentError("Sitemap-URL must be fully qualified.", field="url", value=url)
        self._append(agent, Directive.SITEMAP, url)

    def crawl_delay(self, seconds: int, agent: str = DEFAULT_AGENT) -> None:
        """
        Set the number of seconds to wait between successive requests.

        Nonstandard extension. Calling it again for the same agent
        replaces the previous delay.
        """
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
            raise InvalidArgumentError("Crawl-delay must be a non-negative integer.", field="seconds", value=seconds)
        _require_agent(agent)
        self._store.set(agent, Directive.CRAWL_DELAY, str(seconds))

    def visit_time(
        self,
        start: str | time | datetime,
        end: str | time | datetime,
        agent: str = DEFAULT_AGENT,
    ) -> None:
        """
        Set when the site should be visited (Robots Exclusion Standard 2.0).

        Args:
            start: Start of the visit window; UTC.
            end: End of the visit window; UTC.
            agent: Agent identifier; defaults to any.
        """
        self._append(agent, Directive.VISIT_TIME, format_time_window(start, end))

    def request_rate(
        self,
        documents: int,
        start: str | time | datetime | None = None,
        end: str | time | datetime | None = None,
        agent: str = DEFAULT_AGENT,
    ) -> None:
        """
        Suggest a request rate in documents per minute (Robots Exclusion Standard 2.0).

        The time window is only added when both ``start`` and ``end`` are given.

        Args:
            documents: Number of documents per minute.
            start: Optional start of the window; UTC.
            end: Optional end of the window; UTC.
            agent: Agent identifier; defaults to any.
        """
        if isinstance(documents, bool) or not isinstance(documents, int) or documents < 1:
            raise InvalidArgumentError("Request-rate must be a positive integer.", field="documents", value=documents)

        value = f"{documents}/60"
        if start and end:
            value += f" {format_time_window(start, end)}"
        self._append(agent, Directive.REQUEST_RATE, value)

    def comment(self, text: str, agent: str = DEFAULT_AGENT) -> None:
        """Add a comment line to an agent block."""
        self._append(agent, Directive.COMMENT, text)

    def generate(self) -> str:
        """
        Generate the contents of a robots.txt file.

        Returns:
            The generated contents.
        """
        content = render_robots(self._store)
        LOGGER.debug("Generated robots.txt with %d agent block(s)", len(self._store))
        return content

    def _append(self, agent: str, directive: Directive, value: str) -> None:
        _require_agent(agent)
        if "\n" in value or "\r" in value:
            raise InvalidArgumentError(
                f"{directive.value} value must be a single line.",
                field=directive.value,
                value=value,
            )
        self._store.append(agent, directive, value)
        LOGGER.debug("Added %s: %s for agent %s", directive.value, value, agent)


def _require_relative(url: str, directive: Directive) -> None:
    if "://" in url:
        raise InvalidArgumentError(f"{directive.value}-URL must be relative.", field="url", value=url)


def _require_agent(agent: str) -> None:
    if not agent or not agent.strip() or "\n" in agent or "\r" in agent:
        raise InvalidArgumentError("Agent must be a non-blank single-line identifier.", field="agent", value=agent)
