"""Unit tests for BrainService (secondbrain/core/services/brain_service.py)."""

import uuid

import pytest

from secondbrain.core.exceptions import NotFoundError
from secondbrain.core.models.content import Content
from secondbrain.core.models.share_link import ShareLink
from secondbrain.core.policy import BRAIN_NOT_FOUND_MESSAGE
from secondbrain.core.services import brain_service as brain_module
from secondbrain.core.services.brain_service import BrainService

BASE_URL = "http://test/"


async def add_content(session, owner_id, title, is_shared):
    content = Content(
        title=title, link="https://x.com/", type="article", is_shared=is_shared, owner_id=owner_id
    )
    session.add(content)
    await session.commit()
    return content


async def test_first_toggle_creates_public_link(test_session, test_user):
    svc = BrainService(test_session)
    res = await svc.toggle_sharing(test_user.id, BASE_URL)

    assert res.is_public is True
    assert res.message == "Sharing enabled"
    link = await svc.link_repo.get_by_user(test_user.id)
    assert res.link == f"http://test/api/v1/brain/{link.token}"
    assert len(link.token) == 32


async def test_toggle_twice_disables_and_keeps_token(test_session, test_user):
    svc = BrainService(test_session)
    first = await svc.toggle_sharing(test_user.id, BASE_URL)
    second = await svc.toggle_sharing(test_user.id, BASE_URL)
    third = await svc.toggle_sharing(test_user.id, BASE_URL)

    assert second.is_public is False
    assert second.link is None
    assert second.message == "Sharing disabled"
    # re-enabling reuses the same URL
    assert third.link == first.link


async def test_explicit_state_is_idempotent(test_session, test_user):
    svc = BrainService(test_session)

    res = await svc.toggle_sharing(test_user.id, BASE_URL, is_public=False)
    assert res.is_public is False
    # disabling a brain that was never shared creates nothing
    assert await svc.link_repo.get_by_user(test_user.id) is None

    on = await svc.toggle_sharing(test_user.id, BASE_URL, is_public=True)
    again = await svc.toggle_sharing(test_user.id, BASE_URL, is_public=True)
    assert on.is_public is again.is_public is True
    assert on.link == again.link

    off = await svc.toggle_sharing(test_user.id, BASE_URL, is_public=False)
    assert off.is_public is False


async def test_public_base_url_overrides_request_host(test_session, test_user, monkeypatch):
    svc = BrainService(test_session)
    monkeypatch.setattr(svc.settings, "public_base_url", "https://brain.example.com/")

    res = await svc.toggle_sharing(test_user.id, BASE_URL)
    assert res.link.startswith("https://brain.example.com/api/v1/brain/")


async def test_get_status(test_session, test_user):
    svc = BrainService(test_session)
    status = await svc.get_status(test_user.id, BASE_URL)
    assert status.is_public is False
    assert status.link is None

    toggled = await svc.toggle_sharing(test_user.id, BASE_URL)
    status = await svc.get_status(test_user.id, BASE_URL)
    assert status.is_public is True
    assert status.link == toggled.link


async def test_resolve_brain_returns_only_shared_content(test_session, test_user, other_user):
    await add_content(test_session, test_user.id, "Post", is_shared=True)
    await add_content(test_session, test_user.id, "Draft", is_shared=False)
    await add_content(test_session, other_user.id, "Elsewhere", is_shared=True)

    svc = BrainService(test_session)
    await svc.toggle_sharing(test_user.id, BASE_URL)
    link = await svc.link_repo.get_by_user(test_user.id)

    items = await svc.resolve_brain(link.token)
    assert [item.title for item in items] == ["Post"]


async def test_resolve_brain_with_nothing_shared_is_empty(test_session, test_user):
    await add_content(test_session, test_user.id, "Draft", is_shared=False)
    svc = BrainService(test_session)
    await svc.toggle_sharing(test_user.id, BASE_URL)
    link = await svc.link_repo.get_by_user(test_user.id)

    assert await svc.resolve_brain(link.token) == []


async def test_private_and_unknown_tokens_look_the_same(test_session, test_user):
    svc = BrainService(test_session)
    await svc.toggle_sharing(test_user.id, BASE_URL)
    await svc.toggle_sharing(test_user.id, BASE_URL)
    link = await svc.link_repo.get_by_user(test_user.id)

    errors = []
    for token in (link.token, "does-not-exist"):
        with pytest.raises(NotFoundError) as exc:
            await svc.resolve_brain(token)
        errors.append(exc.value.to_dict())

    assert errors[0] == errors[1]
    assert errors[0]["message"] == BRAIN_NOT_FOUND_MESSAGE


class RacingLinkRepo:
    """Share link repo whose stored state changes under the caller."""

    def __init__(self, link, created=True):
        self.link = link
        self.created = created
        self.cas_calls = []

    async def get_by_user(self, user_id):
        return None if self.created else self.link

    async def create_for_user(self, user_id, nbytes=16):
        return self.link, self.created

    async def compare_and_set_public(self, link, expected, value):
        self.cas_calls.append((expected, value))
        # another request already flipped it to ``value``
        link.is_public = value
        return False


@pytest.fixture
def racing_service(monkeypatch):
    def _build(repo):
        monkeypatch.setattr(brain_module, "ShareLinkRepository", lambda s: repo)
        monkeypatch.setattr(brain_module, "ContentRepository", lambda s: None)
        return BrainService(session=None)

    return _build


async def test_lost_compare_and_set_reports_stored_state(racing_service):
    link = ShareLink(token="a" * 32, user_id=uuid.uuid4(), is_public=True)
    repo = RacingLinkRepo(link, created=False)
    svc = racing_service(repo)

    res = await svc.toggle_sharing(link.user_id, BASE_URL)
    assert repo.cas_calls == [(True, False)]
    assert res.is_public is False


async def test_concurrent_first_toggle_does_not_flip_back(racing_service):
    link = ShareLink(token="b" * 32, user_id=uuid.uuid4(), is_public=True)
    repo = RacingLinkRepo(link, created=False)
    repo.get_by_user = lambda user_id: _none()
    svc = racing_service(repo)

    res = await svc.toggle_sharing(link.user_id, BASE_URL)
    # the winner's creation counts as this toggle too
    assert res.is_public is True
    assert repo.cas_calls == []


async def _none():
    return None
