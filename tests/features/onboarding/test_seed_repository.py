"""Tests for SeedRecordDatabaseRepository."""

import pytest

from flock_commons.core.exceptions import DatabaseError
from flock_commons.features.onboarding.repositories import SeedRecordDatabaseRepository


class TestSeedRecordRepository:
    @pytest.mark.asyncio
    async def test_exists_by_code(self, mock_database_repository):
        repository = SeedRecordDatabaseRepository(mock_database_repository, schema="tenant_grace")

        assert await repository.exists_by_code("membership_type", "t1", "member") is False

        mock_database_repository.execute_fetchrow.return_value = {"id": "x"}
        assert await repository.exists_by_code("membership_type", "t1", "member") is True

        query, tenant_id, code = mock_database_repository.execute_fetchrow.call_args.args
        assert "FROM tenant_grace.membership_type" in query
        assert "deleted_at IS NULL" in query
        assert (tenant_id, code) == ("t1", "member")

    @pytest.mark.asyncio
    async def test_exists_by_code_wraps_errors(self, mock_database_repository):
        mock_database_repository.execute_fetchrow.side_effect = RuntimeError("timeout")
        repository = SeedRecordDatabaseRepository(mock_database_repository)

        with pytest.raises(DatabaseError):
            await repository.exists_by_code("membership_type", "t1", "member")

    @pytest.mark.asyncio
    async def test_create_builds_insert_from_record(self, mock_database_repository):
        mock_database_repository.execute_fetchrow.return_value = {"id": "new", "code": "member"}
        repository = SeedRecordDatabaseRepository(mock_database_repository)

        row = await repository.create("membership_type", {"tenant_id": "t1", "code": "member", "name": "Member"})

        assert row == {"id": "new", "code": "member"}
        args = mock_database_repository.execute_fetchrow.call_args.args
        assert "INSERT INTO public.membership_type (tenant_id, code, name)" in args[0]
        assert "VALUES ($1, $2, $3)" in args[0]
        assert args[1:] == ("t1", "member", "Member")

    @pytest.mark.asyncio
    async def test_create_without_returned_row_raises(self, mock_database_repository):
        repository = SeedRecordDatabaseRepository(mock_database_repository)

        with pytest.raises(DatabaseError):
            await repository.create("membership_type", {"code": "member"})
