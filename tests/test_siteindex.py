"""Tests for siteindex generation."""

from datetime import date

import pytest
from lxml import etree

from indexed.config import IndexedSettings
from indexed.exceptions import AlreadyExistsError, InvalidArgumentError, LimitExceededError
from indexed.siteindex import Siteindex

CORE_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
NS = {"sm": CORE_NS}


@pytest.fixture
def index(base: str) -> Siteindex:
    """Fresh siteindex in debug mode."""
    return Siteindex(base, debug=True)


class TestSitemap:
    """Tests for Siteindex.sitemap."""

    def test_relative_url_is_qualified(self, index: Siteindex) -> None:
        """Relative URLs get the base prefixed."""
        entry = index.sitemap("/site-a/map.xml")

        assert entry.url == "http://example.org/site-a/map.xml"

    def test_duplicate_rejected(self, index: Siteindex) -> None:
        """The same sitemap cannot be listed twice."""
        index.sitemap("/site-a/map.xml")

        with pytest.raises(AlreadyExistsError):
            index.sitemap("http://example.org/site-a/map.xml")

    def test_invalid_modified_rejected(self, index: Siteindex) -> None:
        """Unparseable dates raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError):
            index.sitemap("/site-a/map.xml", modified="whenever")


class TestGenerate:
    """Tests for the sitemapindex document."""

    def test_generate_basic(self, index: Siteindex) -> None:
        """Each entry becomes a sitemap element with comment and loc."""
        index.sitemap("/site-a/map.xml", title="a map")
        index.sitemap("/site-b/map.xml", title="b map")

        root = etree.fromstring(index.generate().encode("utf-8"))

        assert root.tag == f"{{{CORE_NS}}}sitemapindex"
        assert root.nsmap[None] == CORE_NS
        assert root.get(f"{{{XSI_NS}}}schemaLocation") == (
            "http://www.sitemaps.org/schemas/sitemap/0.9 http://www.sitemaps.org/schemas/sitemap/0.9/siteindex.xsd"
        )
        sitemaps = root.findall("sm:sitemap", NS)
        assert len(sitemaps) == 2
        assert isinstance(sitemaps[0][0], etree._Comment)
        assert sitemaps[0][0].text == "a map"
        assert sitemaps[1].findtext("sm:loc", namespaces=NS) == "http://example.org/site-b/map.xml"

    def test_lastmod(self, index: Siteindex) -> None:
        """Modification dates render as W3C datetimes."""
        index.sitemap("/site-a/map.xml", modified=date(2021, 6, 30))

        root = etree.fromstring(index.generate().encode("utf-8"))
        assert root.findtext("sm:sitemap/sm:lastmod", namespaces=NS) == "2021-06-30T00:00:00+00:00"

    def test_lastmod_keeps_offset(self, index: Siteindex) -> None:
        """Explicit offsets are preserved."""
        index.sitemap("/site-a/map.xml", modified="2021-06-30T12:30:00+02:00")

        assert "<lastmod>2021-06-30T12:30:00+02:00</lastmod>" in index.generate()

    def test_loc_cdata_rule(self, index: Siteindex) -> None:
        """loc follows the same CDATA rule as sitemaps."""
        index.sitemap("/maps?part=1&lang=en")
        index.sitemap("/maps?part=2&amp;lang=en")

        document = index.generate()
        assert "<loc><![CDATA[http://example.org/maps?part=1&lang=en]]></loc>" in document
        assert "<loc>http://example.org/maps?part=2&amp;lang=en</loc>" in document

    def test_no_extension_namespaces(self, index: Siteindex) -> None:
        """Siteindexes only ever declare the core and xsi namespaces."""
        index.sitemap("/site-a/map.xml")

        root = etree.fromstring(index.generate().encode("utf-8"))
        assert set(root.nsmap) == {None, "xsi"}

    def test_empty_index(self, index: Siteindex) -> None:
        """An empty index is still a valid document."""
        root = etree.fromstring(index.generate().encode("utf-8"))

        assert len(root) == 0


class TestLimits:
    """Tests for siteindex ceilings."""

    def test_too_many_sitemaps(self, base: str, small_settings: IndexedSettings) -> None:
        """Entry count is capped."""
        index = Siteindex(base, settings=small_settings)
        for name in ("a", "b", "c"):
            index.sitemap(f"/{name}.xml")

        with pytest.raises(LimitExceededError):
            index.generate()

    def test_document_too_large(self, base: str, small_settings: IndexedSettings) -> None:
        """Document size is capped."""
        index = Siteindex(base, settings=small_settings)
        index.sitemap("/" + "y" * 2000 + ".xml")

        with pytest.raises(LimitExceededError):
            index.generate()
