"""Tests for the transaction() unit-of-work helper."""

import asyncio
from unittest.mock import AsyncMock

import pytest

from bookstore.core.database import transaction


class TestTransaction:
    """Tests for bookstore.core.database.transaction()."""

    async def test_clean_exit_commits(self):
        db = AsyncMock()

        async with transaction(db) as session:
            assert session is db

        db.commit.assert_awaited_once()
        db.rollback.assert_not_awaited()

    async def test_exception_rolls_back_and_propagates(self):
        db = AsyncMock()

        with pytest.raises(RuntimeError, match="boom"):
            async with transaction(db):
                raise RuntimeError("boom")

        db.rollback.assert_awaited_once()
        db.commit.assert_not_awaited()

    async def test_failed_commit_rolls_back(self):
        db = AsyncMock()
        db.commit.side_effect = RuntimeError("commit failed")

        with pytest.raises(RuntimeError, match="commit failed"):
            async with transaction(db):
                pass

        db.rollback.assert_awaited_once()

    async def test_cancellation_rolls_back(self):
        db = AsyncMock()

        with pytest.raises(asyncio.CancelledError):
            async with transaction(db):
                raise asyncio.CancelledError

        db.rollback.assert_awaited_once()
