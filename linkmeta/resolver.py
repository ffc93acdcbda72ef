"""Turn a URL into a :class:`MetadataRecord`.

Only network errors (``httpx.HTTPError``) escape from here; anything that
goes wrong while reading the page just leaves fields empty.
"""

import logging
from datetime import tzinfo
from typing import Optional

import httpx

from .extractors import extract_article, extract_generic, find_extractor
from .http import PARSE_EXCEPTIONS, client_scope, fetch_page, resolve_final_url
from .models import MetadataRecord
from .platforms import OTHER, detect_source, is_short_link

logger = logging.getLogger("linkmeta")


def extract_metadata(html: str, source: str, tz: Optional[tzinfo] = None) -> MetadataRecord:
    """Platform extractor first; generic rules when it finds nothing."""
    record = None
    extractor = find_extractor(source)
    if extractor is not None:
        try:
            record = extractor.extract(html, tz)
        except PARSE_EXCEPTIONS as e:
            logger.warning(f"{source}: 页面解析异常: {e}")
            record = None
    if record is None or record.is_empty():
        record = (record or MetadataRecord()).merged(extract_generic(html, tz))
    return record


async def resolve_metadata(url: str, client: Optional[httpx.AsyncClient] = None,
                           tz: Optional[tzinfo] = None) -> MetadataRecord:
    source = detect_source(url)
    async with client_scope(client, mobile=True) as c:
        target = url
        if is_short_link(url):
            target = await resolve_final_url(c, url)
            logger.debug(f"短链接 {url} -> {target}")
        page = await fetch_page(c, target, mobile=True)
    if source == OTHER:
        source = detect_source(page.url)
    record = extract_metadata(page.text, source, tz)
    logger.debug(
        f"{source}: title={bool(record.title)} author={bool(record.author)} "
        f"cover={bool(record.cover_image)} publish={record.publish_time!r}"
    )
    return record


async def resolve_article_metadata(url: str, client: Optional[httpx.AsyncClient] = None,
                                   tz: Optional[tzinfo] = None) -> MetadataRecord:
    async with client_scope(client, mobile=False) as c:
        page = await fetch_page(c, url, mobile=False)
    record = extract_article(page.text, tz)
    logger.debug(f"文章: title={bool(record.title)} author={bool(record.author)} publish={record.publish_time!r}")
    return record
