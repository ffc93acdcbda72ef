"""Platform-agnostic extraction rules.

Each field is described by an ordered tuple of :class:`Rule` objects. A rule
either finds a value or returns ``None``; :func:`first_found` walks the
tuple and keeps the first hit. Nothing in here raises on odd markup.
"""

import re
from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Iterable, Optional

from ..models import MetadataRecord
from ..text import decode_entities, unescape_json_string
from ..timeutil import format_date, format_timestamp, format_timestamp_ms

SITE_SUFFIX = re.compile(
    r"\s*[-|·_]\s*(?:抖音|今日头条|哔哩哔哩|bilibili|快手|西瓜视频|知乎|简书|CSDN博客|掘金|少数派).*$",
    re.I | re.S,
)

TITLE_TAG = re.compile(r"<title[^>]*>([^<]*)</title>", re.I)


def match_text(m: re.Match) -> str:
    return decode_entities(m.group(1)).strip()


def match_json_text(m: re.Match) -> str:
    return decode_entities(unescape_json_string(m.group(1))).strip()


def match_title_text(m: re.Match) -> str:
    return SITE_SUFFIX.sub("", match_text(m)).strip()


def match_raw(m: re.Match) -> str:
    return m.group(1).strip()


@dataclass(frozen=True)
class Rule:
    """One extraction strategy: try ``patterns`` in order, transform the match.

    ``min_length`` rejects values that are not strictly longer than it.
    ``scan`` keeps looking past the first match of a pattern.
    """

    name: str
    patterns: tuple
    transform: Callable[[re.Match], str] = match_text
    min_length: int = 0
    scan: bool = False

    def __call__(self, html: str) -> Optional[str]:
        for pattern in self.patterns:
            matches = pattern.finditer(html) if self.scan else filter(None, [pattern.search(html)])
            for m in matches:
                value = self.transform(m)
                if value and len(value) > self.min_length:
                    return value
        return None


def first_found(html: str, rules: Iterable[Rule]) -> str:
    if not html:
        return ""
    for rule in rules:
        value = rule(html)
        if value is not None:
            return value
    return ""


def meta_patterns(key: str, attr: str = "property") -> tuple:
    """Both attribute orders of ``<meta {attr}=key content=...>``."""
    k = re.escape(key)
    return (
        re.compile(rf"""<meta[^>]*\b{attr}=["']{k}["'][^>]*\bcontent=["']([^"']+)["']""", re.I),
        re.compile(rf"""<meta[^>]*\bcontent=["']([^"']+)["'][^>]*\b{attr}=["']{k}["']""", re.I),
    )


def json_string(key: str) -> re.Pattern:
    return re.compile(rf'"{re.escape(key)}"\s*:\s*"((?:[^"\\]|\\.)+)"')


def json_number(key: str, digits: str = r"\d+") -> re.Pattern:
    return re.compile(rf'"{re.escape(key)}"\s*:\s*({digits})(?!\d)')


def meta(key: str, attr: str = "property", **kwargs) -> Rule:
    return Rule(f"meta:{key}", meta_patterns(key, attr), **kwargs)


TITLE_RULES = (
    # 短视频平台的文案同时充当标题
    Rule("json:desc", (json_string("desc"),), match_json_text, min_length=3),
    meta("og:title", transform=match_title_text, min_length=3),
    Rule("tag:title", (TITLE_TAG,), match_title_text, min_length=3),
)

AUTHOR_RULES = (
    Rule("json:nickname", (json_string("nickname"),), match_json_text),
    Rule("json:unique_id", (json_string("unique_id"),), match_json_text),
    meta("video:director"),
)

DESCRIPTION_RULES = (
    meta("og:description"),
    meta("description", attr="name"),
)

IMAGE_RULES = (
    meta("og:image"),
    meta("og:video:image"),
)

ARTICLE_TITLE_RULES = (
    meta("og:title"),
    Rule("tag:title", (TITLE_TAG,)),
)

ARTICLE_AUTHOR_RULES = (
    meta("og:article:author"),
    meta("article:author"),
    meta("author", attr="name"),
)

_DATE = re.compile(r"(\d{4})[-/年](\d{1,2})[-/月](\d{1,2})")


def match_date(m: re.Match) -> str:
    year, month, day = (int(g) for g in m.groups())
    if 1970 <= year <= 2100 and 1 <= month <= 12 and 1 <= day <= 31:
        return format_date(year, month, day)
    return ""


def publish_time_rules(tz: Optional[tzinfo] = None) -> tuple:
    return (
        Rule("json:create_time", (json_number("create_time"),),
             lambda m: format_timestamp(m.group(1), tz)),
        meta("article:published_time", transform=match_raw),
    )


def article_publish_time_rules(tz: Optional[tzinfo] = None) -> tuple:
    return (
        # 微信文章 URL 编码后的 publish_time
        Rule("urlenc:publish_time", (re.compile(r"publish_time%22%3A(\d+)"),),
             lambda m: format_timestamp(m.group(1), tz)),
        Rule("json:create_time_ms", (json_number("create_time", r"\d{13}"),),
             lambda m: format_timestamp_ms(m.group(1), tz)),
        Rule("create_time", (re.compile(r"""create_time["']?\s*[:=]\s*["']?(\d{10})(?!\d)"""),),
             lambda m: format_timestamp(m.group(1), tz)),
        meta("article:published_time", transform=match_raw),
        Rule("date", (_DATE,), match_date, scan=True),
    )


def extract_title(html: str) -> str:
    return first_found(html, TITLE_RULES)


def extract_author(html: str) -> str:
    return first_found(html, AUTHOR_RULES)


def extract_description(html: str) -> str:
    return first_found(html, DESCRIPTION_RULES)


def extract_image(html: str) -> str:
    return first_found(html, IMAGE_RULES)


def extract_publish_time(html: str, tz: Optional[tzinfo] = None) -> str:
    return first_found(html, publish_time_rules(tz))


def extract_generic(html: str, tz: Optional[tzinfo] = None) -> MetadataRecord:
    return MetadataRecord(
        title=extract_title(html),
        description=extract_description(html),
        cover_image=extract_image(html),
        author=extract_author(html),
        publish_time=extract_publish_time(html, tz),
    )


def extract_article_title(html: str) -> str:
    return first_found(html, ARTICLE_TITLE_RULES)


def extract_article_author(html: str) -> str:
    return first_found(html, ARTICLE_AUTHOR_RULES)


def extract_article_publish_time(html: str, tz: Optional[tzinfo] = None) -> str:
    return first_found(html, article_publish_time_rules(tz))


def extract_article(html: str, tz: Optional[tzinfo] = None) -> MetadataRecord:
    return MetadataRecord(
        title=extract_article_title(html),
        description=extract_description(html),
        cover_image=extract_image(html),
        author=extract_article_author(html),
        publish_time=extract_article_publish_time(html, tz),
    )
