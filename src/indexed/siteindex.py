"""Siteindex XML generation.

Siteindexes are sitemaps for sitemaps: a ``sitemapindex`` document
listing the locations of other sitemap files.

See https://www.sitemaps.org/protocol.html#index
"""

import logging
from typing import Any

from lxml import etree

from indexed._xml import (
    Namespace,
    append_comment,
    create_root,
    resolve_namespaces,
    safe_loc_element,
    serialize,
    text_element,
)
from indexed.config import IndexedSettings, get_settings
from indexed.exceptions import AlreadyExistsError
from indexed.models import SitemapRefEntry, format_lastmod
from indexed.utils import build_entry, check_document_size, check_item_count, qualify_url

LOGGER = logging.getLogger(__name__)

NAMESPACES = (
    Namespace(
        name="index",
        prefix=None,
        version="0.9",
        uri="http://www.sitemaps.org/schemas/sitemap/{version}",
        schema="http://www.sitemaps.org/schemas/sitemap/{version}/site{name}.xsd",
    ),
)


class Siteindex:
    """
    Builder for siteindex documents.

    Usage:
        index = Siteindex("http://example.org")
        index.sitemap("/site-a/map.xml", title="a map")
        xml = index.generate()
    """

    def __init__(
        self,
        base: str,
        debug: bool | None = None,
        settings: IndexedSettings | None = None,
    ) -> None:
        """
        Initialise an empty siteindex.

        Args:
            base: Base used to fully qualify URLs (e.g. ``http://example.org``).
            debug: Pretty-print output; defaults to the configured setting.
            settings: Optional settings; defaults to the cached environment settings.
        """
        settings = settings or get_settings()
        self.base = base
        self.debug = settings.debug if debug is None else debug
        self.max_items = settings.max_items
        self.max_size = settings.max_size

        self._namespaces = resolve_namespaces(NAMESPACES)
        self._entries: dict[str, SitemapRefEntry] = {}

    def sitemap(self, url: str, **options: Any) -> SitemapRefEntry:
        """
        Add a sitemap to the siteindex.

        Args:
            url: Absolute path or fully qualified URL of the sitemap.
            **options: ``modified`` (date) and ``title`` (rendered as a comment).

        Returns:
            The stored entry.

        Raises:
            AlreadyExistsError: If a sitemap with the same URL was added before.
            InvalidArgumentError: If an option is invalid.
        """
        url = qualify_url(url, self.base)
        if url in self._entries:
            raise AlreadyExistsError(f"Will not overwrite sitemap with URL `{url}`; already added.", url=url)

        entry = build_entry(SitemapRefEntry, **{**options, "url": url})
        self._entries[url] = entry
        LOGGER.debug("Added sitemap %s to siteindex", url)
        return entry

    @property
    def entries(self) -> list[SitemapRefEntry]:
        """Entries in insertion order."""
        return list(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def generate(self) -> str:
        """
        Generate the siteindex XML.

        Returns:
            The XML document.

        Raises:
            LimitExceededError: If there are too many entries or the document is too large.
        """
        check_item_count(len(self._entries), self.max_items, "sitemaps")

        document = self._generate()
        check_document_size(document, self.max_size)

        LOGGER.debug("Generated siteindex with %d sitemap(s), %d bytes", len(self._entries), len(document))
        return document.decode("utf-8")

    def _generate(self) -> bytes:
        core = self._namespaces["index"]
        root = create_root("sitemapindex", core)

        for entry in self._entries.values():
            element = etree.SubElement(root, core.qname("sitemap"))

            if entry.title:
                append_comment(element, entry.title)
            safe_loc_element(element, entry.url, core)

            if entry.modified:
                text_element(element, core, "lastmod", format_lastmod(entry.modified))

        return serialize(root, pretty=self.debug)
