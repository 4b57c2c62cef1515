"""Shared XML building blocks for sitemap and siteindex documents.

Provides namespace descriptors, extension detection, the CDATA decision
for URLs, and serialisation.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from lxml import etree

from indexed.exceptions import InvalidArgumentError

LOGGER = logging.getLogger(__name__)

XSI_URI = "http://www.w3.org/2001/XMLSchema-instance"

XML_DECLARATION = b'<?xml version="1.0" encoding="UTF-8"?>\n'


@dataclass(frozen=True)
class Namespace:
    """
    XML namespace descriptor.

    ``uri`` and ``schema`` may contain ``{name}``, ``{version}`` and
    ``{prefix}`` placeholders until bound.

    Attributes:
        name: Short name, also used to detect extension usage on entries.
        prefix: Namespace prefix; None for the default (core) namespace.
        version: Schema version.
        uri: Namespace URI template.
        schema: Schema location template.
    """

    name: str
    prefix: str | None
    version: str
    uri: str
    schema: str

    @property
    def is_extension(self) -> bool:
        """Prefixed namespaces are optional extensions."""
        return self.prefix is not None

    def bind(self) -> "Namespace":
        """Return a copy with all placeholders substituted."""
        values = {"name": self.name, "version": self.version, "prefix": self.prefix or ""}
        return replace(
            self,
            uri=self.uri.format_map(values),
            schema=self.schema.format_map(values),
        )

    def qname(self, local: str) -> str:
        """Clark notation name of an element in this namespace."""
        return f"{{{self.uri}}}{local}"


def resolve_namespaces(table: Iterable[Namespace]) -> dict[str, Namespace]:
    """
    Bind a namespace table.

    Args:
        table: Namespace templates; the first must be the core namespace.

    Returns:
        Bound namespaces keyed by name, in table order.
    """
    return {namespace.name: namespace.bind() for namespace in table}


def uses(entries: Iterable[Any], namespaces: Mapping[str, Namespace]) -> list[str]:
    """
    Find the extension namespaces used by any entry.

    An entry uses an extension when it has a non-empty attribute named
    after the extension or its plural (``image`` / ``images``).

    Args:
        entries: Entries to inspect.
        namespaces: Bound namespaces.

    Returns:
        Names of used extensions, in namespace table order.
    """
    pending = {name: f"{name}s" for name, namespace in namespaces.items() if namespace.is_extension}
    used: set[str] = set()

    for entry in entries:
        if not pending:
            break
        for name, plural in list(pending.items()):
            if getattr(entry, name, None) or getattr(entry, plural, None):
                used.add(name)
                del pending[name]

    return [name for name in namespaces if name in used]


def schema_location(namespaces: Iterable[Namespace]) -> str:
    """Space-joined namespace URI / schema URL pairs."""
    return " ".join(f"{namespace.uri} {namespace.schema}" for namespace in namespaces)


def create_root(local: str, core: Namespace, extensions: Iterable[Namespace] = ()) -> etree._Element:
    """
    Create a document root in the core namespace.

    Args:
        local: Root element name, e.g. ``urlset``.
        core: Default namespace.
        extensions: Extension namespaces to declare.

    Returns:
        Root element carrying ``xsi:schemaLocation``.
    """
    extensions = list(extensions)
    nsmap: dict[str | None, str] = {None: core.uri}
    for namespace in extensions:
        nsmap[namespace.prefix] = namespace.uri
    nsmap["xsi"] = XSI_URI

    root = etree.Element(core.qname(local), nsmap=nsmap)
    root.set(f"{{{XSI_URI}}}schemaLocation", schema_location([core, *extensions]))
    return root


def needs_escape(text: str) -> bool:
    """
    Check if a URL needs to be wrapped in a CDATA section.

    True when it contains a raw ``&`` and no ``&amp;`` entity.
    """
    return "&" in text and "&amp;" not in text


def safe_loc_element(parent: etree._Element, url: str, namespace: Namespace) -> etree._Element:
    """
    Append a ``loc`` element holding the URL, in a CDATA section if needed.

    URLs already carrying ``&amp;`` are treated as encoded; only that
    entity is decoded, so serialisation does not escape it twice.

    Args:
        parent: Element to append to.
        url: Fully qualified URL.
        namespace: Namespace of the ``loc`` element.

    Returns:
        The new element.
    """
    element = etree.SubElement(parent, namespace.qname("loc"))

    if needs_escape(url) and "]]>" not in url:
        try:
            element.text = etree.CDATA(url)
        except ValueError as e:
            raise InvalidArgumentError(f"URL is not XML compatible: {e}", field="url", value=url) from e
    else:
        set_text(element, url.replace("&amp;", "&"))
    return element


def text_element(parent: etree._Element, namespace: Namespace, local: str, text: str) -> etree._Element:
    """Append an element holding escaped character data."""
    element = etree.SubElement(parent, namespace.qname(local))
    set_text(element, text)
    return element


def set_text(element: etree._Element, text: str) -> None:
    """
    Set element text.

    Raises:
        InvalidArgumentError: If the text contains characters XML cannot hold.
    """
    try:
        element.text = text
    except ValueError as e:
        raise InvalidArgumentError(f"Text is not XML compatible: {e}", field="text", value=text) from e


def append_comment(parent: etree._Element, text: str) -> None:
    """Append an XML comment, neutralising sequences comments cannot contain."""
    safe = text
    while "--" in safe:
        safe = safe.replace("--", "- -")
    if safe.endswith("-"):
        safe += " "
    try:
        parent.append(etree.Comment(safe))
    except ValueError as e:
        raise InvalidArgumentError(f"Title is not XML compatible: {e}", field="title", value=text) from e


def serialize(root: etree._Element, pretty: bool = False) -> bytes:
    """
    Serialise a document as UTF-8 with an XML declaration.

    Args:
        root: Document root.
        pretty: Indent output (debug mode).

    Returns:
        Encoded document ending with a newline.
    """
    body = etree.tostring(root, encoding="UTF-8", xml_declaration=False, pretty_print=pretty)
    return XML_DECLARATION + body.rstrip(b"\n") + b"\n"
