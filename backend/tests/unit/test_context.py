"""Unit tests for the shared presale context"""
import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from presale.models import PresaleRound, VestingRecord
from presale.services.errors import ZeroPrice


def compiled(query) -> str:
    return str(query.compile(dialect=postgresql.dialect()))


class TestStateReads:
    """Tests for row locking of reads made by state transitions"""

    @pytest.mark.asyncio
    async def test_plain_read_outside_transition(self, service):
        query = service.ctx.lock_rows(select(PresaleRound))
        assert "FOR UPDATE" not in compiled(query)

    @pytest.mark.asyncio
    async def test_reads_locked_inside_transition(self, service):
        async with service.ctx.atomic("inspect"):
            round_query = service.ctx.lock_rows(select(PresaleRound))
            vesting_query = service.ctx.lock_rows(select(VestingRecord))
        assert "FOR UPDATE" in compiled(round_query)
        assert "FOR UPDATE" in compiled(vesting_query)
        assert "FOR UPDATE" not in compiled(service.ctx.lock_rows(select(PresaleRound)))

    @pytest.mark.asyncio
    async def test_lock_released_after_failed_transition(self, service):
        with pytest.raises(ZeroPrice):
            async with service.ctx.atomic("inspect"):
                raise ZeroPrice()
        assert "FOR UPDATE" not in compiled(service.ctx.lock_rows(select(PresaleRound)))
