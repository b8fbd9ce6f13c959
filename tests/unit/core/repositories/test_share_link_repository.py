"""Tests for ShareLinkRepository against SQLite."""

import asyncio

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from secondbrain.core.models import User
from secondbrain.core.repositories.share_link_repository import ShareLinkRepository


async def test_create_and_lookup(test_session, test_user):
    repo = ShareLinkRepository(test_session)
    link, created = await repo.create_for_user(test_user.id)

    assert created is True
    assert link.is_public is True
    assert (await repo.get_by_token(link.token)).id == link.id
    assert (await repo.get_by_user(test_user.id)).token == link.token
    assert await repo.get_by_token("nope") is None


async def test_second_create_returns_existing(test_session, test_user):
    repo = ShareLinkRepository(test_session)
    first, _ = await repo.create_for_user(test_user.id)
    second, created = await repo.create_for_user(test_user.id)

    assert created is False
    assert second.token == first.token


async def test_compare_and_set_applies_once(test_session, test_user):
    repo = ShareLinkRepository(test_session)
    link, _ = await repo.create_for_user(test_user.id)

    assert await repo.compare_and_set_public(link, True, False) is True
    assert link.is_public is False

    # stale expectation: row already private
    assert await repo.compare_and_set_public(link, True, False) is False
    assert link.is_public is False


async def test_concurrent_creates_yield_one_link(file_engine):
    factory = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        user = User(email="race@example.com", password_hash="x")
        session.add(user)
        await session.commit()
        user_id = user.id

    async def create():
        async with factory() as session:
            link, created = await ShareLinkRepository(session).create_for_user(user_id)
            return link.token, created

    results = await asyncio.gather(create(), create())

    assert sorted(created for _, created in results) == [False, True]
    assert results[0][0] == results[1][0]


async def test_concurrent_toggles_do_not_cancel_out(file_engine):
    factory = async_sessionmaker(file_engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        user = User(email="flip@example.com", password_hash="x")
        session.add(user)
        await session.commit()
        link, _ = await ShareLinkRepository(session).create_for_user(user.id)
        link_id = link.id

    async def flip():
        async with factory() as session:
            repo = ShareLinkRepository(session)
            stale = await repo.get_by_token(link.token)
            assert stale.id == link_id
            # both requests expect the link to still be public
            return await repo.compare_and_set_public(stale, True, False)

    results = await asyncio.gather(flip(), flip())

    assert sorted(results) == [False, True]
    async with factory() as session:
        assert (await ShareLinkRepository(session).get_by_token(link.token)).is_public is False
