__version__ = "1.0.0"

from .catalog import build_article, build_video, ingest_article, ingest_video
from .extractors import EXTRACTORS, find_extractor
from .extractors.generic import (
    extract_article,
    extract_author,
    extract_description,
    extract_generic,
    extract_image,
    extract_publish_time,
    extract_title,
)
from .http import NETWORK_EXCEPTIONS, PARSE_EXCEPTIONS, Page
from .models import Article, MetadataRecord, Video
from .platforms import default_title, detect_source, is_short_link
from .resolver import extract_metadata, resolve_article_metadata, resolve_metadata
from .text import clean_share_url, decode_entities, decode_unicode_escapes

__all__ = [
    "Article",
    "EXTRACTORS",
    "MetadataRecord",
    "NETWORK_EXCEPTIONS",
    "PARSE_EXCEPTIONS",
    "Page",
    "Video",
    "build_article",
    "build_video",
    "clean_share_url",
    "decode_entities",
    "decode_unicode_escapes",
    "default_title",
    "detect_source",
    "extract_article",
    "extract_author",
    "extract_description",
    "extract_generic",
    "extract_image",
    "extract_metadata",
    "extract_publish_time",
    "extract_title",
    "find_extractor",
    "ingest_article",
    "ingest_video",
    "is_short_link",
    "resolve_article_metadata",
    "resolve_metadata",
]
