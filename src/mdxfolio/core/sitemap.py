"""Sitemap entries and urlset XML for the home page, blog index and every post"""

from datetime import datetime
from typing import Iterable
from xml.etree import ElementTree as ET

from pydantic import BaseModel


SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


class SitemapEntry(BaseModel):
    url:              str
    last_modified:    datetime
    change_frequency: str
    priority:         float


def build_sitemap(slugs: Iterable[str], base_url: str, now: datetime) -> list[SitemapEntry]:
    """Home (monthly, 1.0), /blog (weekly, 0.9), then one weekly 0.8 entry per slug."""
    base = base_url.rstrip('/')
    entries = [
        SitemapEntry(url=base, last_modified=now, change_frequency="monthly", priority=1.0),
        SitemapEntry(url=f"{base}/blog", last_modified=now, change_frequency="weekly", priority=0.9),
    ]
    entries.extend(
        SitemapEntry(url=f"{base}/blog/{slug}", last_modified=now, change_frequency="weekly", priority=0.8)
        for slug in slugs
    )
    return entries


def sitemap_xml(entries: list[SitemapEntry]) -> str:
    urlset = ET.Element("urlset", xmlns=SITEMAP_NS)
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.url
        ET.SubElement(url, "lastmod").text = entry.last_modified.isoformat()
        ET.SubElement(url, "changefreq").text = entry.change_frequency
        ET.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}\n'
