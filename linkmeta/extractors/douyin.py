import logging
import re
from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from ..models import MetadataRecord
from ..platforms import DOUYIN
from ..text import decode_entities, decode_unicode_escapes, unescape_json_string
from ..timeutil import format_timestamp, format_timestamp_ms
from .base import BaseExtractor, Path, dig, first_number, first_str, load_embedded_json
from .generic import json_number, json_string

logger = logging.getLogger("linkmeta")

ROUTER_DATA = re.compile(r"window\._ROUTER_DATA\s*=\s*(\{[\s\S]+?\})\s*</script>")

RAW_DESC = json_string("desc")
RAW_NICKNAME = json_string("nickname")
RAW_COVER_LIST = re.compile(r'"cover"\s*:\s*\{[^}]*"url_list"\s*:\s*\[([^\]]+)\]')
RAW_QUOTED = re.compile(r'"([^"]+)"')
RAW_WEBP = re.compile(r'"url"\s*:\s*"([^"]*\.webp[^"]*)"')
RAW_CREATE_TIME = json_number("create_time")


@dataclass(frozen=True)
class RecordShape:
    """Where a content record sits inside one ``loaderData`` entry, and its field paths."""

    name: str
    locator: Path
    title: tuple[Path, ...]
    description: tuple[Path, ...]
    cover_image: tuple[Path, ...]
    author: tuple[Path, ...]
    publish_time: tuple[Path, ...]
    millis: bool = False


AWEME_FIELDS = dict(
    title=(("desc",),),
    description=(("desc",),),
    cover_image=(
        ("video", "cover", "url_list", 0),
        ("cover", "url_list", 0),
        ("video", "origin_cover", "url_list", 0),
        ("video", "dynamic_cover", "url_list", 0),
        ("video", "cover"),
    ),
    author=(("author", "nickname"), ("author", "unique_id")),
    publish_time=(("create_time",),),
)

# 按顺序尝试：视频详情 → 图文笔记 → 分享页 item_list
RECORD_SHAPES = (
    RecordShape("aweme_detail", ("aweme_detail",), **AWEME_FIELDS),
    RecordShape(
        "note",
        ("noteInfo", "note"),
        title=(("title",), ("desc",)),
        description=(("desc",),),
        cover_image=(("imageList", 0, "urlList", 0),),
        author=(("authorInfo", "nickname"),),
        publish_time=(("createTime",),),
        millis=True,
    ),
    RecordShape("item_list", ("videoInfoRes", "item_list", 0), **AWEME_FIELDS),
)


def _raw_text(raw: str) -> str:
    return decode_entities(unescape_json_string(raw)).strip()


def _raw_url(raw: str) -> str:
    return unescape_json_string(decode_unicode_escapes(raw)).strip()


class DouyinExtractor(BaseExtractor):
    platform = DOUYIN

    def extract(self, html: str, tz: Optional[tzinfo] = None) -> Optional[MetadataRecord]:
        if not html:
            return None
        record = self._from_router_data(html, tz)
        if record is not None:
            return record
        return self._from_raw_text(html, tz)

    def _from_router_data(self, html: str, tz: Optional[tzinfo]) -> Optional[MetadataRecord]:
        router = load_embedded_json(html, (ROUTER_DATA,), "抖音: _ROUTER_DATA")
        if router is None:
            return None
        loader = router.get("loaderData")
        if not isinstance(loader, dict):
            logger.debug("抖音: loaderData 缺失")
            return None

        for key, page_data in loader.items():
            for shape in RECORD_SHAPES:
                item = dig(page_data, shape.locator)
                if not isinstance(item, dict):
                    continue
                record = self._build(item, shape, tz)
                if not record.is_empty():
                    logger.debug(f"抖音: 命中 {key}.{shape.name}")
                    return record
        logger.debug("抖音: loaderData 中没有视频或图文数据")
        return None

    def _build(self, item: dict, shape: RecordShape, tz: Optional[tzinfo]) -> MetadataRecord:
        ts = first_number(item, shape.publish_time)
        publish_time = format_timestamp_ms(ts, tz) if shape.millis else format_timestamp(ts, tz)
        return MetadataRecord(
            title=decode_entities(first_str(item, shape.title)),
            description=decode_entities(first_str(item, shape.description)),
            cover_image=decode_unicode_escapes(first_str(item, shape.cover_image)),
            author=decode_entities(first_str(item, shape.author)),
            publish_time=publish_time,
        )

    def _from_raw_text(self, html: str, tz: Optional[tzinfo]) -> Optional[MetadataRecord]:
        m = RAW_DESC.search(html)
        title = _raw_text(m.group(1)) if m else ""

        m = RAW_NICKNAME.search(html)
        author = _raw_text(m.group(1)) if m else ""

        cover_image = ""
        m = RAW_COVER_LIST.search(html)
        if m:
            first = RAW_QUOTED.search(m.group(1))
            if first:
                cover_image = _raw_url(first.group(1))
        if not cover_image:
            m = RAW_WEBP.search(html)
            if m:
                cover_image = _raw_url(m.group(1))

        m = RAW_CREATE_TIME.search(html)
        publish_time = format_timestamp(m.group(1), tz) if m else ""

        if not title and not cover_image:
            return None
        logger.debug(f"抖音: 原始文本兜底 title={bool(title)} author={bool(author)} cover={bool(cover_image)}")
        return MetadataRecord(
            title=title,
            description=title,
            cover_image=cover_image,
            author=author,
            publish_time=publish_time,
        )
