"""Unit tests for core/sitemap.py"""

from datetime import datetime
from xml.etree import ElementTree as ET

from mdxfolio.core.sitemap import SITEMAP_NS, build_sitemap, sitemap_xml


NOW = datetime(2025, 1, 1)


def test_build_sitemap_entries():
    entries = build_sitemap(["a", "b"], "https://example.com/", NOW)
    assert [e.url for e in entries] == [
        "https://example.com",
        "https://example.com/blog",
        "https://example.com/blog/a",
        "https://example.com/blog/b",
    ]
    assert [e.priority for e in entries] == [1.0, 0.9, 0.8, 0.8]
    assert entries[0].change_frequency == "monthly"
    assert all(e.change_frequency == "weekly" for e in entries[1:])


def test_sitemap_xml_parses():
    xml = sitemap_xml(build_sitemap(["post"], "https://example.com", NOW))
    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')
    root = ET.fromstring(xml.split("\n", 1)[1])
    locs = [el.text for el in root.iter(f"{{{SITEMAP_NS}}}loc")]
    assert locs[-1] == "https://example.com/blog/post"
    assert len(locs) == 3
