"""
Diario de Classe API — Post Domain Model
=========================================

What:  The single domain record of the API: a titled, authored, timestamped post.
Why:   Repositories and the service exchange this type; neither the Pydantic
       response schemas nor the raw MongoDB documents leak across layers.
How:   A plain dataclass plus conversion helpers for the document store.

Field Rules:
    - id:         assigned by the repository, never changed afterwards
    - created_at: UTC, set once at creation, never touched by updates
    - title/content/author: the only mutable fields (see MUTABLE_FIELDS)

Document Layout (MongoDB):
    {
        "_id":       ObjectId(...),        ← native id, never exposed
        "id":        1718000000000,        ← numeric id used for lookups
        "title":     "...",
        "content":   "...",
        "author":    "...",
        "createdAt": ISODate(...)
    }
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Mapping

# Fields a client may set on create or change on update
MUTABLE_FIELDS = ("title", "content", "author")

# Keys every stored document must carry
DOCUMENT_FIELDS = ("id", "title", "content", "author", "createdAt")


def utc_now() -> datetime:
    """Timezone-aware current time; naive datetimes are never stored."""
    return datetime.now(timezone.utc)


@dataclass
class Post:
    id: int
    title: str
    content: str
    author: str
    created_at: datetime = field(default_factory=utc_now)

    def to_document(self) -> Dict[str, Any]:
        """Serialize for MongoDB using the public field names."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "author": self.author,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_document(cls, document: Mapping[str, Any]) -> "Post":
        """
        Build a Post from a MongoDB document.

        BSON dates come back naive (UTC) unless the client is tz_aware,
        so a missing tzinfo is treated as UTC.

        Raises:
            ValueError: a required field is missing or `createdAt` is not
                a datetime. The creation time is never invented on read.
        """
        missing = [name for name in DOCUMENT_FIELDS if document.get(name) is None]
        if missing:
            raise ValueError(f"Post document is missing {', '.join(missing)}")
        created_at = document["createdAt"]
        if not isinstance(created_at, datetime):
            raise ValueError(f"Post document has a non-date createdAt: {created_at!r}")
        if created_at.tzinfo is None:
            created_at = created_at.replace(tzinfo=timezone.utc)
        return cls(
            id=int(document["id"]),
            title=document["title"],
            content=document["content"],
            author=document["author"],
            created_at=created_at,
        )

    def __repr__(self) -> str:
        return f"<Post(id={self.id}, title='{self.title}', created_at='{self.created_at}')>"
