"""Entity construction for the article / video lists.

Metadata resolution is best-effort here: a failed fetch is logged and the
entity is still built from whatever the caller supplied.
"""

import logging
from datetime import tzinfo
from typing import Optional

import httpx

from .http import NETWORK_EXCEPTIONS
from .models import Article, MetadataRecord, Video
from .platforms import default_title, detect_source
from .resolver import resolve_article_metadata, resolve_metadata
from .text import clean_share_url

logger = logging.getLogger("linkmeta")


def build_article(url: str, metadata: MetadataRecord, *, title: str = "", author: str = "",
                  image: str = "", description: str = "", publish_time: str = "") -> Article:
    """Caller-supplied non-empty fields win over scraped ones."""
    return Article(
        url=url,
        title=title or metadata.title,
        author=author or metadata.author,
        image=image or metadata.cover_image,
        description=description or metadata.description,
        publish_time=publish_time or metadata.publish_time,
        source=detect_source(url),
    )


def build_video(url: str, metadata: MetadataRecord) -> Video:
    source = detect_source(url)
    return Video(
        url=url,
        title=metadata.title or default_title(source),
        description=metadata.description,
        cover_image=metadata.cover_image,
        source=source,
        author=metadata.author,
        publish_time=metadata.publish_time,
    )


async def ingest_article(url: str, client: Optional[httpx.AsyncClient] = None,
                         tz: Optional[tzinfo] = None, **supplied) -> Article:
    if not url or not url.strip():
        raise ValueError("URL必填")
    url = url.strip()
    try:
        metadata = await resolve_article_metadata(url, client=client, tz=tz)
    except NETWORK_EXCEPTIONS as e:
        logger.warning(f"获取文章元数据失败 {url}: {e}")
        metadata = MetadataRecord()
    return build_article(url, metadata, **supplied)


async def ingest_video(text: str, client: Optional[httpx.AsyncClient] = None,
                       tz: Optional[tzinfo] = None) -> Video:
    """Accepts a bare URL or pasted share text."""
    url = clean_share_url(text)
    if not url:
        raise ValueError("URL必填")
    try:
        metadata = await resolve_metadata(url, client=client, tz=tz)
    except NETWORK_EXCEPTIONS as e:
        logger.warning(f"获取视频元数据失败 {url}: {e}")
        metadata = MetadataRecord()
    return build_video(url, metadata)
