"""Unit tests for PermissionRepository."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.infrastructure.persistence.models import PermissionModel
from rolegate.infrastructure.persistence.repositories import PermissionRepository


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def permission_repo(mock_session):
    return PermissionRepository(mock_session)


@pytest.mark.asyncio
async def test_get_by_names_empty_skips_query(permission_repo, mock_session):
    assert await permission_repo.get_by_names([]) == []
    mock_session.execute.assert_not_called()


@pytest.mark.asyncio
async def test_get_by_names(permission_repo, mock_session):
    found = [PermissionModel(id=1, name="doc:read")]
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = found
    mock_session.execute.return_value = mock_result

    result = await permission_repo.get_by_names(["doc:read", "bogus:perm"])

    assert result == found
    assert "permissions.name IN" in str(mock_session.execute.call_args[0][0])


@pytest.mark.asyncio
async def test_get_by_name(permission_repo, mock_session):
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = PermissionModel(id=1, name="doc:read")
    mock_session.execute.return_value = mock_result

    result = await permission_repo.get_by_name("doc:read")

    assert result.name == "doc:read"
