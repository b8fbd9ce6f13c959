"""
Unit tests for User model.
"""

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from secondbrain.core.models import AuthProvider, Content, ShareLink, Tag, User


class TestUserModel:
    """Test User model functionality."""

    async def test_create_user_defaults(self, test_session):
        user = User(email="ada@example.com", password_hash="hashed")
        test_session.add(user)
        await test_session.commit()
        await test_session.refresh(user)

        assert isinstance(user.id, uuid.UUID)
        assert user.auth_provider == AuthProvider.LOCAL.value
        assert user.is_active is True
        assert user.is_email_verified is False
        assert user.created_at is not None
        assert repr(user) == "<User(email='ada@example.com')>"

    async def test_email_is_unique(self, test_session):
        test_session.add(User(email="dup@example.com", password_hash="x"))
        await test_session.commit()

        test_session.add(User(email="dup@example.com", password_hash="y"))
        with pytest.raises(IntegrityError):
            await test_session.commit()
        await test_session.rollback()

    def test_display_name(self):
        assert User(email="a@example.com", first_name="Ada", last_name="L").display_name == "Ada L"
        assert User(email="a@example.com").display_name == "a@example.com"

    def test_can_login(self):
        assert User(email="a@example.com", password_hash="h", is_active=True).can_login()
        assert not User(email="a@example.com", password_hash="h", is_active=False).can_login()
        # OAuth-only accounts have no password
        assert not User(
            email="a@example.com", auth_provider=AuthProvider.GOOGLE.value, is_active=True
        ).can_login()

    def test_reset_token_validity(self):
        future = datetime.now(timezone.utc) + timedelta(minutes=30)
        user = User(
            email="a@example.com", reset_password_token_hash="abc", reset_password_expires=future
        )
        assert user.has_valid_reset_token("abc")
        assert not user.has_valid_reset_token("other")

        user.reset_password_expires = datetime.now(timezone.utc) - timedelta(seconds=1)
        assert not user.has_valid_reset_token("abc")

        # naive timestamps, as SQLite returns them, are treated as UTC
        user.reset_password_expires = (future).replace(tzinfo=None)
        assert user.has_valid_reset_token("abc")

        user.clear_reset_token()
        assert user.reset_password_token_hash is None
        assert not user.has_valid_reset_token("abc")

    async def test_deleting_user_cascades(self, test_session):
        user = User(email="gone@example.com", password_hash="h")
        test_session.add(user)
        await test_session.commit()

        tag = Tag(title="mine", owner_id=user.id)
        content = Content(title="Post", link="https://x.com/", type="article", owner_id=user.id)
        content.tags = [tag]
        test_session.add_all([tag, content, ShareLink.create_for_user(user.id)])
        await test_session.commit()

        await test_session.delete(user)
        await test_session.commit()

        for model in (Content, Tag, ShareLink):
            result = await test_session.execute(select(model))
            assert result.scalars().all() == []
