"""Sitemap XML generation.

This module collects pages (optionally with images) and renders them
as a sitemaps.org ``urlset`` document. The Google image extension
namespace is declared only when at least one page carries images.

See https://www.sitemaps.org/protocol.html and
https://developers.google.com/search/docs/crawling-indexing/sitemaps/image-sitemaps
"""

import logging
import warnings
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
    uses,
)
from indexed.config import IndexedSettings, get_settings
from indexed.exceptions import AlreadyExistsError, NotFoundError, UnsupportedFormatError
from indexed.models import ImageEntry, PageEntry, format_lastmod, format_priority
from indexed.siteindex import Siteindex
from indexed.utils import build_entry, check_document_size, check_item_count, qualify_url

LOGGER = logging.getLogger(__name__)

NAMESPACES = (
    Namespace(
        name="core",
        prefix=None,
        version="0.9",
        uri="http://www.sitemaps.org/schemas/sitemap/{version}",
        schema="http://www.sitemaps.org/schemas/sitemap/{version}/sitemap.xsd",
    ),
    Namespace(
        name="image",
        prefix="image",
        version="1.1",
        uri="http://www.google.com/schemas/sitemap-{prefix}/{version}",
        schema="http://www.google.com/schemas/sitemap-{prefix}/{version}/sitemap-{prefix}.xsd",
    ),
)

FORMATS = ("xml", "txt", "indexXml")


class Sitemap:
    """
    Builder for sitemap documents.

    Usage:
        sitemap = Sitemap("http://example.org")
        sitemap.page("/posts", changes="daily", priority=0.8)
        sitemap.image("/img/cover.png", "/posts", caption="Cover")
        xml = sitemap.generate()
    """

    def __init__(
        self,
        base: str,
        debug: bool | None = None,
        settings: IndexedSettings | None = None,
    ) -> None:
        """
        Initialise an empty sitemap.

        Args:
            base: Base used to fully qualify URLs (e.g. ``http://example.org``).
            debug: Pretty-print output; defaults to the configured setting.
            settings: Optional settings; defaults to the cached environment settings.
        """
        self._settings = settings or get_settings()
        self.base = base
        self.debug = self._settings.debug if debug is None else debug
        self.max_items = self._settings.max_items
        self.max_size = self._settings.max_size
        self.max_images_per_page = self._settings.max_images_per_page

        self._namespaces = resolve_namespaces(NAMESPACES)
        self._pages: dict[str, PageEntry] = {}

    def page(self, url: str, **options: Any) -> PageEntry:
        """
        Add a page to the sitemap.

        Args:
            url: Absolute path or fully qualified URL of the page.
            **options: Additional options for the page:
                - modified: Last modification date.
                - changes: How often the page changes; one of ``always``,
                  ``hourly``, ``daily``, ``weekly``, ``monthly``, ``yearly``,
                  ``never``.
                - priority: 0.0 - 1.0 (most important); 0.5 is the default
                  crawlers assume.
                - title: Rendered as a comment.

        Returns:
            The stored entry.

        Raises:
            AlreadyExistsError: If a page with the same URL was added before.
            InvalidArgumentError: If an option is invalid.
        """
        url = qualify_url(url, self.base)
        if url in self._pages:
            raise AlreadyExistsError(f"Will not overwrite page with URL `{url}`; already added.", url=url)

        # Images are attached through image() only
        entry = build_entry(PageEntry, **{**options, "url": url, "images": {}})
        self._pages[url] = entry
        LOGGER.debug("Added page %s to sitemap", url)
        return entry

    def add(self, url: str, **options: Any) -> PageEntry:
        """Alias of :meth:`page`."""
        return self.page(url, **options)

    def image(self, url: str, page: str, **options: Any) -> ImageEntry:
        """
        Add an image to a page of the sitemap.

        Args:
            url: Absolute path or fully qualified URL of the image.
            page: Absolute path or fully qualified URL of the page containing the image.
            **options: Available options are:
                - title: The title of the image.
                - license: A fully qualified URL to the license of the image.
                - caption: The caption of the image.
                - location: The geographic location of the image (e.g. Limerick, Ireland).

        Returns:
            The stored image entry.

        Raises:
            NotFoundError: If the page was never added.
            AlreadyExistsError: If the image is already attached to the page.
            InvalidArgumentError: If an option is invalid.
        """
        url = qualify_url(url, self.base)
        page = qualify_url(page, self.base)

        entry = self._pages.get(page)
        if entry is None:
            raise NotFoundError(f"No page with URL `{page}` found to add image `{url}` to.", url=page)
        if url in entry.images:
            raise AlreadyExistsError(f"Will not overwrite image with URL `{url}`; already added.", url=url)

        image = build_entry(ImageEntry, **{**options, "url": url})
        entry.images[url] = image
        LOGGER.debug("Added image %s to page %s", url, page)
        return image

    @property
    def pages(self) -> list[PageEntry]:
        """Pages in insertion order."""
        return list(self._pages.values())

    def __len__(self) -> int:
        return len(self._pages)

    def generate(self, format: str = "xml") -> str:
        """
        Generate the sitemap in the given format.

        Args:
            format: ``xml`` (default); ``txt`` and ``indexXml`` are deprecated.

        Returns:
            The generated document.

        Raises:
            LimitExceededError: If there are too many pages or images, or the
                document is too large.
            UnsupportedFormatError: If the format is unknown.
        """
        check_item_count(len(self._pages), self.max_items, "pages")

        if format == "xml":
            document = self._generate_xml()
        elif format == "indexXml":
            warnings.warn(
                "Support for `indexXml` format has been deprecated. Please use the dedicated Siteindex class instead.",
                DeprecationWarning,
                stacklevel=2,
            )
            return self._generate_index()
        elif format == "txt":
            warnings.warn(
                "Format `txt` has been deprecated and will be removed soon.",
                DeprecationWarning,
                stacklevel=2,
            )
            document = self._generate_txt()
        else:
            raise UnsupportedFormatError(
                f"Invalid format given: {format!r}. Must be one of {', '.join(FORMATS)}",
                format=format,
            )

        check_document_size(document, self.max_size)
        LOGGER.debug("Generated %s sitemap with %d page(s), %d bytes", format, len(self._pages), len(document))
        return document.decode("utf-8")

    def _generate_xml(self) -> bytes:
        for entry in self._pages.values():
            check_item_count(len(entry.images), self.max_images_per_page, f"images for page {entry.url}")

        core = self._namespaces["core"]
        image_ns = self._namespaces["image"]
        extensions = [self._namespaces[name] for name in uses(self._pages.values(), self._namespaces)]

        root = create_root("urlset", core, extensions)

        for entry in self._pages.values():
            element = etree.SubElement(root, core.qname("url"))

            if entry.title:
                append_comment(element, entry.title)
            safe_loc_element(element, entry.url, core)

            if entry.modified:
                text_element(element, core, "lastmod", format_lastmod(entry.modified))
            if entry.changes:
                text_element(element, core, "changefreq", entry.changes.value)
            if entry.priority is not None:
                text_element(element, core, "priority", format_priority(entry.priority))

            for image in entry.images.values():
                self._append_image(element, image, image_ns)

        return serialize(root, pretty=self.debug)

    def _append_image(self, parent: etree._Element, image: ImageEntry, namespace: Namespace) -> None:
        element = etree.SubElement(parent, namespace.qname("image"))

        safe_loc_element(element, image.url, namespace)

        if image.caption:
            text_element(element, namespace, "caption", image.caption)
        if image.location:
            text_element(element, namespace, "geo_location", image.location)
        if image.title:
            text_element(element, namespace, "title", image.title)
        if image.license:
            text_element(element, namespace, "license", image.license)

    def _generate_index(self) -> str:
        index = Siteindex(self.base, debug=self.debug, settings=self._settings)
        for entry in self._pages.values():
            index.sitemap(entry.url)
        return index.generate()

    def _generate_txt(self) -> bytes:
        # https://www.sitemaps.org/protocol.html#otherformats
        return "".join(f"{entry.url}\n" for entry in self._pages.values()).encode("utf-8")
