"""Tests for ContentRepository and TagRepository against SQLite."""

from sqlalchemy import func, select

from secondbrain.core.models import Content, content_tags
from secondbrain.core.repositories.content_repository import ContentRepository
from secondbrain.core.repositories.tag_repository import TagRepository


async def make_tag(session, title, owner_id=None):
    return await TagRepository(session).create_tag(
        {"title": title, "owner_id": owner_id, "is_global": owner_id is None}
    )


def content_data(owner_id, title="Post", **extra):
    return {"title": title, "link": "https://x.com/", "type": "article", "owner_id": owner_id, **extra}


async def test_find_in_scope(test_session, test_user, other_user):
    repo = TagRepository(test_session)
    tech = await make_tag(test_session, "tech")
    mine = await make_tag(test_session, "books", test_user.id)
    await make_tag(test_session, "music", other_user.id)

    assert (await repo.find_in_scope("tech", test_user.id)).id == tech.id
    assert (await repo.find_in_scope("books", test_user.id)).id == mine.id
    assert (await repo.find_in_scope("Books", test_user.id)).id == mine.id
    assert await repo.find_in_scope("music", test_user.id) is None
    assert await repo.find_in_scope("books", test_user.id, exclude_id=mine.id) is None
    # global-only lookup
    assert await repo.find_in_scope("books", None) is None


async def test_visible_by_ids_filters_foreign_tags(test_session, test_user, other_user):
    repo = TagRepository(test_session)
    tech = await make_tag(test_session, "tech")
    mine = await make_tag(test_session, "books", test_user.id)
    theirs = await make_tag(test_session, "music", other_user.id)

    found = await repo.get_visible_by_ids(test_user.id, [tech.id, mine.id, theirs.id])
    assert {tag.id for tag in found} == {tech.id, mine.id}
    assert await repo.get_visible_by_ids(test_user.id, []) == []


async def test_delete_tag_detaches_it_from_content(test_session, test_user):
    tag = await make_tag(test_session, "books", test_user.id)
    repo = ContentRepository(test_session)
    content = await repo.create_content(content_data(test_user.id), [tag])

    await TagRepository(test_session).delete_tag(tag)

    remaining = await test_session.execute(select(func.count()).select_from(content_tags))
    assert remaining.scalar() == 0
    content_id = content.id
    test_session.expire_all()
    reloaded = await repo.get_by_id(content_id)
    assert reloaded is not None
    assert reloaded.tags == []


async def test_delete_content_keeps_owner_and_tags(test_session, test_user):
    tag = await make_tag(test_session, "books", test_user.id)
    repo = ContentRepository(test_session)
    content = await repo.create_content(content_data(test_user.id), [tag])

    await repo.delete_content(content)

    assert await repo.get_by_id(content.id) is None
    assert await TagRepository(test_session).get_by_id(tag.id) is not None
    assert await test_session.get(type(test_user), test_user.id) is not None


async def test_list_by_owner_shared_only(test_session, test_user):
    repo = ContentRepository(test_session)
    await repo.create_content(content_data(test_user.id, "a", is_shared=True))
    await repo.create_content(content_data(test_user.id, "b"))
    await repo.create_content(content_data(test_user.id, "c", is_shared=True))

    assert [c.title for c in await repo.list_by_owner(test_user.id)] == ["a", "b", "c"]
    shared = await repo.list_by_owner(test_user.id, shared_only=True)
    assert [c.title for c in shared] == ["a", "c"]


async def test_share_all_counts_changed_rows(test_session, test_user, other_user):
    repo = ContentRepository(test_session)
    await repo.create_content(content_data(test_user.id, "a"))
    await repo.create_content(content_data(test_user.id, "b", is_shared=True))
    await repo.create_content(content_data(other_user.id, "c"))

    assert await repo.share_all(test_user.id) == 1

    count = await test_session.execute(
        select(func.count()).select_from(Content).where(Content.is_shared.is_(False))
    )
    # other users are untouched
    assert count.scalar() == 1


async def test_is_owned_title_ignores_case(test_session, test_user):
    repo = TagRepository(test_session)
    await make_tag(test_session, "Tech", test_user.id)
    await make_tag(test_session, "ideas")

    assert await repo.is_owned_title("tech") is True
    assert await repo.is_owned_title("ideas") is False
