from dataclasses import dataclass, field, fields, replace
from datetime import datetime


@dataclass(frozen=True)
class MetadataRecord:
    """Normalized metadata scraped from a third-party page.

    Every field is a string; unresolved fields stay empty, never None.
    """

    title: str = ""
    description: str = ""
    cover_image: str = ""
    author: str = ""
    publish_time: str = ""

    def is_empty(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def merged(self, fallback: "MetadataRecord") -> "MetadataRecord":
        """Fill empty fields from ``fallback``; own non-empty values win."""
        return replace(self, **{
            f.name: getattr(self, f.name) or getattr(fallback, f.name)
            for f in fields(self)
        })

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "coverImage": self.cover_image,
            "author": self.author,
            "publishTime": self.publish_time,
        }


@dataclass
class Article:
    url: str = ""
    title: str = ""
    author: str = ""
    image: str = ""
    description: str = ""
    publish_time: str = ""
    source: str = "other"
    added_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "title": self.title,
            "author": self.author,
            "image": self.image,
            "description": self.description,
            "publishTime": self.publish_time,
            "source": self.source,
            "addedAt": self.added_at.isoformat(timespec="seconds"),
        }


@dataclass
class Video:
    url: str = ""
    title: str = ""
    description: str = ""
    cover_image: str = ""
    source: str = "other"
    author: str = ""
    publish_time: str = ""
    order: int = 0
    visible: bool = True
    added_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "title": self.title,
            "description": self.description,
            "coverImage": self.cover_image,
            "source": self.source,
            "author": self.author,
            "publishTime": self.publish_time,
            "order": self.order,
            "visible": self.visible,
            "addedAt": self.added_at.isoformat(timespec="seconds"),
        }
