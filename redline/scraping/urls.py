"""Heuristics for telling article pages apart from listing pages."""

import re
from typing import Iterable, List, Optional, Pattern, Sequence
from urllib.parse import parse_qsl, urldefrag, urlencode, urljoin, urlparse

DATE_IN_PATH = r"/\d{4}/\d{2}/\d{2}/"
TRAILING_ID = r"-\d{6,}$"

STATIC_ASSET = r"\.(jpg|jpeg|png|gif|webp|svg|pdf|css|js|xml|rss)$"

TRACKING_PARAMS = ("fbclid", "gclid", "ref", "ref_src")

DEFAULT_EXCLUDE_PATTERNS = [
    r"/(tags?|search|author|category|topic)/",
    STATIC_ASSET,
]


def section_slug_pattern(sections: Iterable[str], depth: int = 1) -> str:
    """Match ``/<section>/.../<slug>`` with at least ``depth`` segments after the section."""
    names = "|".join(re.escape(s) for s in sections)
    return rf"/({names})/([^/]+/){{{max(depth - 1, 0)},}}[^/]+$"


def bare_section_pattern(sections: Iterable[str]) -> str:
    """Match a section landing page such as ``/news`` or ``/news/``."""
    names = "|".join(re.escape(s) for s in sections)
    return rf"/({names})/?$"


class ArticleUrlHeuristic:
    """A URL is an article when it matches an article pattern and no exclusion."""

    def __init__(
        self,
        article_patterns: Sequence[str],
        exclude_patterns: Sequence[str] = (),
    ) -> None:
        self.article_patterns: List[Pattern[str]] = [
            re.compile(p, re.IGNORECASE) for p in article_patterns
        ]
        self.exclude_patterns: List[Pattern[str]] = [
            re.compile(p, re.IGNORECASE) for p in exclude_patterns
        ]

    @classmethod
    def for_sections(
        cls,
        sections: Sequence[str],
        nested_sections: Sequence[str] = (),
        extra_article_patterns: Sequence[str] = (),
        extra_exclude_patterns: Sequence[str] = (),
    ) -> "ArticleUrlHeuristic":
        """
        Default news-site heuristic.

        Args:
            sections: Sections whose articles sit directly under them (``/city/<slug>``)
            nested_sections: Sections with sub-sections before the slug
                (``/news/bangladesh/<slug>``), so ``/news/bangladesh`` stays a listing page
            extra_article_patterns: Outlet-specific article patterns
            extra_exclude_patterns: Outlet-specific exclusions
        """
        article_patterns = [DATE_IN_PATH, TRAILING_ID]
        if sections:
            article_patterns.append(section_slug_pattern(sections))
        if nested_sections:
            article_patterns.append(section_slug_pattern(nested_sections, depth=2))
        all_sections = list(sections) + list(nested_sections)
        exclude_patterns = [bare_section_pattern(all_sections)] if all_sections else []
        return cls(
            article_patterns=article_patterns + list(extra_article_patterns),
            exclude_patterns=exclude_patterns
            + DEFAULT_EXCLUDE_PATTERNS
            + list(extra_exclude_patterns),
        )

    def is_excluded(self, url: str) -> bool:
        return any(p.search(url) for p in self.exclude_patterns)

    def is_article_url(self, url: str) -> bool:
        """Check if URL looks like an article."""
        if self.is_excluded(url):
            return False
        return any(p.search(url) for p in self.article_patterns)


def absolutize(href: Optional[str], base_url: str) -> Optional[str]:
    """Resolve an anchor href against the page URL; None for non-web links."""
    if not href:
        return None
    href = href.strip()
    if not href or href.startswith(("#", "mailto:", "tel:", "javascript:")):
        return None
    url, _fragment = urldefrag(urljoin(base_url, href))
    parts = urlparse(url)
    if parts.scheme not in ("http", "https"):
        return None
    return parts._replace(query=strip_tracking(parts.query)).geturl()


def strip_tracking(query: str) -> str:
    """Drop utm_* and click-id parameters so one story keeps one URL."""
    kept = [
        (key, value)
        for key, value in parse_qsl(query, keep_blank_values=True)
        if not key.lower().startswith("utm_") and key.lower() not in TRACKING_PARAMS
    ]
    return urlencode(kept)


def same_site(url: str, base_url: str) -> bool:
    """True when ``url`` is on the outlet's host (ignoring a leading www.)."""
    host = (urlparse(url).hostname or "").lower()
    base_host = (urlparse(base_url).hostname or "").lower()
    return host.removeprefix("www.") == base_host.removeprefix("www.")
