"""Adapter for The Daily Star (thedailystar.net)."""

from ..base import SourceAdapter
from ..urls import ArticleUrlHeuristic


class DailyStarAdapter(SourceAdapter):
    """English-language daily; articles end in a long numeric id."""

    key = "dailystar"
    name = "The Daily Star"
    base_url = "https://www.thedailystar.net"
    language = "en"
    listing_paths = ("/news/bangladesh", "/city", "/politics")
    fallback_selectors = (
        'a[href*="/news/"]',
        'a[href*="/city/"]',
        'a[href*="/politics/"]',
    )
    title_suffixes = (" | The Daily Star",)
    min_content_length = 100

    @property
    def url_heuristic(self) -> ArticleUrlHeuristic:
        return ArticleUrlHeuristic.for_sections(
            sections=["city", "politics"],
            nested_sections=["news"],
            extra_exclude_patterns=[r"/(business|sports|opinion|entertainment)/?$"],
        )
