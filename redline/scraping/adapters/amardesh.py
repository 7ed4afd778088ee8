"""Adapter for Daily Amar Desh (dailyamardesh.com)."""

from ..base import SourceAdapter
from ..urls import ArticleUrlHeuristic


class AmarDeshAdapter(SourceAdapter):
    """Bengali daily; articles sit one level below their section."""

    key = "amardesh"
    name = "Daily Amar Desh"
    base_url = "https://www.dailyamardesh.com"
    language = "bn"
    listing_paths = ("/politics", "/national", "/bangladesh")
    fallback_selectors = (
        'a[href*="/politics/"]',
        'a[href*="/national/"]',
        'a[href*="/bangladesh/"]',
    )
    title_suffixes = (" | আমার দেশ",)
    content_selectors = (
        ".details p",
        ".news-details p",
        ".article-content p",
        "article p",
    )
    min_content_length = 100

    @property
    def url_heuristic(self) -> ArticleUrlHeuristic:
        return ArticleUrlHeuristic.for_sections(
            sections=["politics", "national", "bangladesh"],
            extra_exclude_patterns=[r"/(page|archive)/\d*"],
        )
