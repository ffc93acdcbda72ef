import logging
import re
from datetime import tzinfo
from typing import Optional

from ..models import MetadataRecord
from ..platforms import BILIBILI
from ..text import decode_entities
from ..timeutil import format_timestamp
from .base import BaseExtractor, first_number, first_str, load_embedded_json
from .generic import (
    TITLE_TAG,
    Rule,
    first_found,
    json_number,
    json_string,
    match_json_text,
    match_text,
    meta,
)

logger = logging.getLogger("linkmeta")

INITIAL_STATE_PATTERNS = (
    re.compile(r"window\.__INITIAL_STATE__\s*=\s*(\{[\s\S]+?\});\s*\(function"),
    re.compile(r"window\.__INITIAL_STATE__\s*=\s*(\{[\s\S]+?\});?\s*(?:</script>|$)"),
)

# 新旧页面视频数据的位置不同
NESTED_KEYS = ("videoData", "view")
TOP_LEVEL_KEYS = ("videoData", "videoInfo", "uplayerView")

TITLE_PATHS = (("title",),)
DESCRIPTION_PATHS = (("desc",), ("description",))
COVER_PATHS = (("pic",), ("cover",))
AUTHOR_PATHS = (("owner", "name"), ("author", "name"), ("up_name",), ("staff", 0, "name"))
PUBLISH_PATHS = (("pubdate",), ("ptime",))

# "标题_哔哩哔哩_bilibili" / "标题 - UP主 - 哔哩哔哩"
SITE_SUFFIX = re.compile(r"\s*[-_|—]\s*(?:哔哩哔哩|bilibili|B站).*$", re.I | re.S)
TITLE_SEPARATOR = re.compile(r"\s*_\s*|\s+[-|—]\s+")


def _cover(m: re.Match) -> str:
    return normalize_cover(match_json_text(m))


def normalize_cover(url: str) -> str:
    if url.startswith("//"):
        return "https:" + url
    return url


FALLBACK_COVER_RULES = (
    Rule("json:pic", (json_string("pic"),), _cover),
    Rule("json:cover", (json_string("cover"),), _cover),
    meta("og:image", transform=lambda m: normalize_cover(match_text(m))),
)

FALLBACK_AUTHOR_RULES = (
    Rule("json:owner.name", (re.compile(r'"owner"\s*:\s*\{\s*"name"\s*:\s*"([^"]+)"'),), match_json_text),
    Rule("json:up_name", (json_string("up_name"),), match_json_text),
    Rule("json:author", (json_string("author"),), match_json_text),
)

FALLBACK_DESCRIPTION_RULES = (
    Rule("json:desc", (json_string("desc"),), match_json_text),
)

FALLBACK_PUBLISH_PATTERNS = (json_number("pubdate"), json_number("ptime"))


def find_video_data(state: dict) -> Optional[dict]:
    for value in state.values():
        if not isinstance(value, dict):
            continue
        for key in NESTED_KEYS:
            if isinstance(value.get(key), dict):
                return value[key]
    for key in TOP_LEVEL_KEYS:
        if isinstance(state.get(key), dict):
            return state[key]
    return None


def split_page_title(raw: str) -> tuple[str, str]:
    """Split a page ``<title>`` into (title, uploader candidate)."""
    cleaned = SITE_SUFFIX.sub("", decode_entities(raw).strip()).strip()
    parts = [p.strip() for p in TITLE_SEPARATOR.split(cleaned) if p.strip()]
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[-1]


class BilibiliExtractor(BaseExtractor):
    platform = BILIBILI

    def extract(self, html: str, tz: Optional[tzinfo] = None) -> Optional[MetadataRecord]:
        if not html:
            return None
        record = self._from_initial_state(html, tz)
        if record is not None and not record.is_empty():
            return record
        return self._from_raw_text(html, tz)

    def _from_initial_state(self, html: str, tz: Optional[tzinfo]) -> Optional[MetadataRecord]:
        state = load_embedded_json(html, INITIAL_STATE_PATTERNS, "B站: __INITIAL_STATE__")
        if state is None:
            return None
        video = find_video_data(state)
        if video is None:
            logger.debug("B站: __INITIAL_STATE__ 中没有视频数据")
            return None
        return MetadataRecord(
            title=decode_entities(first_str(video, TITLE_PATHS)),
            description=decode_entities(first_str(video, DESCRIPTION_PATHS)),
            cover_image=normalize_cover(first_str(video, COVER_PATHS)),
            author=decode_entities(first_str(video, AUTHOR_PATHS)),
            publish_time=format_timestamp(first_number(video, PUBLISH_PATHS), tz),
        )

    def _from_raw_text(self, html: str, tz: Optional[tzinfo]) -> Optional[MetadataRecord]:
        title, uploader = "", ""
        m = TITLE_TAG.search(html)
        if m:
            title, uploader = split_page_title(m.group(1))

        cover_image = first_found(html, FALLBACK_COVER_RULES)
        author = first_found(html, FALLBACK_AUTHOR_RULES) or uploader
        description = first_found(html, FALLBACK_DESCRIPTION_RULES)

        publish_time = ""
        for pattern in FALLBACK_PUBLISH_PATTERNS:
            m = pattern.search(html)
            if m:
                publish_time = format_timestamp(m.group(1), tz)
                if publish_time:
                    break

        if not (title or cover_image or author):
            logger.debug("B站: 页面兜底提取失败")
            return None
        return MetadataRecord(
            title=title,
            description=description,
            cover_image=cover_image,
            author=author,
            publish_time=publish_time,
        )
