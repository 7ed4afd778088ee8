"""Adapter for Prothom Alo (prothomalo.com)."""

from ..base import DEFAULT_CONTENT_SELECTORS, SourceAdapter
from ..urls import ArticleUrlHeuristic

SUB_SECTIONS = ("district", "capital", "crime", "environment", "city", "accident")


class ProthomAloAdapter(SourceAdapter):
    """Bengali daily; article URLs end in a short alphanumeric story id."""

    key = "prothomalo"
    name = "Prothom Alo"
    base_url = "https://www.prothomalo.com"
    language = "bn"
    listing_paths = ("/bangladesh", "/politics", "/bangladesh/crime")
    fallback_selectors = ('a[href*="/bangladesh/"]', 'a[href*="/politics/"]')
    title_suffixes = (" | প্রথম আলো",)
    content_selectors = (
        ".story-element-text p",
        '[class*="story-content"] p',
        *DEFAULT_CONTENT_SELECTORS,
    )
    author_selectors = (".contributor-name", ".author-name", '[class*="author"]')
    date_selectors = (
        "time[datetime]",
        'meta[property="article:published_time"]',
        "time",
    )
    min_content_length = 100

    @property
    def url_heuristic(self) -> ArticleUrlHeuristic:
        sub_sections = "|".join(SUB_SECTIONS)
        return ArticleUrlHeuristic.for_sections(
            sections=["politics"],
            nested_sections=["bangladesh"],
            extra_article_patterns=[r"/(?=[a-z0-9]*\d)[a-z0-9]{10}$"],
            extra_exclude_patterns=[
                rf"/bangladesh/({sub_sections})/?$",
                r"/(world|sports|entertainment|opinion|video|photo)/?$",
            ],
        )
