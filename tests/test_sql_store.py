"""SqlStore against a stubbed AsyncSession: errors surface as StoreError."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from bisbis.services.orchestrator import MutationOrchestrator
from bisbis.services.outcomes import Failed
from bisbis.store.base import StoreError
from bisbis.store.sql import SqlStore


def _db_error() -> OperationalError:
    return OperationalError("COMMIT", {}, Exception("server closed the connection"))


@pytest.fixture
def session():
    result = MagicMock()
    result.scalar_one.return_value = 1
    result.fetchone.return_value = None

    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


class TestTransaction:
    @pytest.mark.asyncio
    async def test_clean_exit_commits(self, session):
        store = SqlStore(session)
        async with store.transaction():
            await store.delete_orders(1)
        session.commit.assert_awaited_once()
        session.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_commit_failure_is_store_error(self, session):
        session.commit.side_effect = _db_error()
        store = SqlStore(session)
        with pytest.raises(StoreError):
            async with store.transaction():
                await store.delete_orders(1)
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_rollback_failure_does_not_mask_commit_failure(self, session):
        session.commit.side_effect = _db_error()
        session.rollback.side_effect = _db_error()
        store = SqlStore(session)
        with pytest.raises(StoreError):
            async with store.transaction():
                pass

    @pytest.mark.asyncio
    async def test_statement_failure_rolls_back(self, session):
        session.execute.side_effect = _db_error()
        store = SqlStore(session)
        with pytest.raises(StoreError):
            async with store.transaction():
                await store.delete_orders(1)
        session.commit.assert_not_awaited()
        session.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_commit_failure_reaches_orchestrator_as_failed(self, session):
        session.commit.side_effect = _db_error()
        outcome = await MutationOrchestrator(SqlStore(session)).create_restaurant(
            "Taizu", False, ["Asian"]
        )
        assert isinstance(outcome, Failed)
        assert outcome.error.status_code == 500
        assert outcome.error.detail == "Internal Server Error. Unable to add new restaurant"


class TestStatementsSent:
    @pytest.mark.asyncio
    async def test_locked_read_uses_for_update(self, session):
        assert await SqlStore(session).fetch_restaurant_for_update(3) is None
        clause, params = session.execute.call_args.args
        assert clause.text.endswith("FOR UPDATE")
        assert params == {"pk": 3}

    @pytest.mark.asyncio
    async def test_plain_read_takes_no_lock(self, session):
        await SqlStore(session).fetch_restaurant(3)
        clause, _ = session.execute.call_args.args
        assert "FOR UPDATE" not in clause.text

    @pytest.mark.asyncio
    async def test_dishes_sent_as_json_text(self, session):
        await SqlStore(session).write_dishes(2, [{"id": "1"}], 2)
        _, params = session.execute.call_args.args
        assert params == {"dishes": '[{"id": "1"}]', "next_dish_id": 2, "pk": 2}
