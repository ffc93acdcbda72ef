from typing import Optional

from .base import BaseExtractor
from .bilibili import BilibiliExtractor
from .douyin import DouyinExtractor
from .generic import extract_article, extract_generic

# 按顺序匹配；新增平台时在这里追加
EXTRACTORS: tuple[BaseExtractor, ...] = (
    DouyinExtractor(),
    BilibiliExtractor(),
)


def find_extractor(source: str) -> Optional[BaseExtractor]:
    for extractor in EXTRACTORS:
        if extractor.matches(source):
            return extractor
    return None


__all__ = [
    "EXTRACTORS",
    "BaseExtractor",
    "BilibiliExtractor",
    "DouyinExtractor",
    "extract_article",
    "extract_generic",
    "find_extractor",
]
