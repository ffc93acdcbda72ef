import json
import logging
import re
from abc import ABC, abstractmethod
from datetime import tzinfo
from typing import Any, Iterable, Optional, Union

from ..http import PARSE_EXCEPTIONS
from ..models import MetadataRecord

logger = logging.getLogger("linkmeta")

Path = tuple[Union[str, int], ...]


def dig(obj: Any, path: Path) -> Any:
    """Walk dict keys / list indexes; ``None`` as soon as a step is missing."""
    for key in path:
        if isinstance(key, int):
            if not isinstance(obj, list) or not -len(obj) <= key < len(obj):
                return None
        elif not isinstance(obj, dict):
            return None
        obj = obj[key] if isinstance(key, int) else obj.get(key)
        if obj is None:
            return None
    return obj


def first_str(obj: Any, paths: Iterable[Path]) -> str:
    for path in paths:
        value = dig(obj, path)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def first_number(obj: Any, paths: Iterable[Path]) -> int:
    for path in paths:
        value = dig(obj, path)
        if isinstance(value, bool):
            continue
        if isinstance(value, (int, float)) and value > 0:
            return int(value)
        if isinstance(value, str) and value.isdigit() and int(value) > 0:
            return int(value)
    return 0


def load_embedded_json(html: str, patterns: Iterable[re.Pattern], label: str) -> Optional[dict]:
    """Parse the first embedded state object matched by ``patterns``.

    Missing, malformed or non-object blobs give ``None``.
    """
    for pattern in patterns:
        m = pattern.search(html)
        if not m:
            continue
        try:
            data = json.loads(m.group(1).replace("\n", ""))
        except PARSE_EXCEPTIONS as e:
            logger.debug(f"{label} 解析失败: {e}")
            continue
        if isinstance(data, dict):
            return data
        logger.debug(f"{label} 不是 JSON 对象")
    return None


class BaseExtractor(ABC):
    """Base class for platform page extractors."""

    platform: str = ""

    def matches(self, source: str) -> bool:
        return source == self.platform

    @abstractmethod
    def extract(self, html: str, tz: Optional[tzinfo] = None) -> Optional[MetadataRecord]:
        """Metadata from the page, or ``None`` when nothing usable was found."""
        ...
