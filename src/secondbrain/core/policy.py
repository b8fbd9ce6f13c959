"""
Authorization policy.

Every mutating operation on content or tags goes through ``ensure_owner``;
anonymous brain reads go through ``resolve_public_link`` and
``is_publicly_visible``. The checks are plain functions over loaded records
so services stay the only place touching the database.
"""

from typing import Iterable, List, Optional, Protocol, Sequence
from uuid import UUID

from .exceptions import ConflictError, InvalidInputError, NotFoundError, UnauthorizedError
from .models.content import Content
from .models.share_link import ShareLink
from .models.tag import Tag

# Same message for absent and private links so probing learns nothing
BRAIN_NOT_FOUND_MESSAGE = "The brain you're looking for is not public or invalid."


class Owned(Protocol):
    owner_id: Optional[UUID]


def ensure_owner(record: Optional[Owned], principal_id: UUID, resource: str = "Resource") -> Owned:
    """Allow the mutation only if ``principal_id`` owns ``record``.

    Absent records raise NotFoundError; records owned by somebody else, or by
    nobody (global tags), raise UnauthorizedError with a generic message.
    """
    if record is None:
        raise NotFoundError(resource)
    owner_id = getattr(record, "owner_id", None)
    if owner_id is None or owner_id != principal_id:
        raise UnauthorizedError(f"You are not allowed to modify this {resource.lower()}")
    return record


def ensure_tag_title_available(existing: Optional[Tag], title: str) -> None:
    """A title must not exist globally or among the requester's tags."""
    if existing is not None:
        scope = "global" if existing.is_global else "your"
        raise ConflictError(
            "Tag already exists", details={"title": title, "scope": scope}
        )


def ensure_tags_resolved(requested: Iterable[UUID], found: Sequence[Tag]) -> List[Tag]:
    """Every requested tag id must be an existing tag visible to the requester."""
    requested = set(requested)
    found_ids = {tag.id for tag in found}
    missing = requested - found_ids
    if missing:
        raise InvalidInputError(
            "Unknown tag reference",
            details={"tags": sorted(str(tag_id) for tag_id in missing)},
        )
    return list(found)


def resolve_public_link(link: Optional[ShareLink]) -> ShareLink:
    """Absent and private links are indistinguishable to anonymous callers."""
    if link is None or not link.is_public:
        raise NotFoundError("Brain", message=BRAIN_NOT_FOUND_MESSAGE)
    return link


def is_publicly_visible(link: ShareLink, content: Content) -> bool:
    """Brain-level public AND item-level shared, for the link owner's content."""
    return link.is_public and content.is_shared and content.owner_id == link.user_id
