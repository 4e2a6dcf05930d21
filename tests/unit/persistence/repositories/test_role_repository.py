"""Unit tests for RoleRepository."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from rolegate.infrastructure.persistence.models import RoleModel
from rolegate.infrastructure.persistence.repositories import RoleRepository


@pytest.fixture
def mock_session():
    """Create a mock database session."""
    return AsyncMock(spec=AsyncSession)


@pytest.fixture
def role_repo(mock_session):
    """Create a RoleRepository instance."""
    return RoleRepository(mock_session)


@pytest.mark.asyncio
async def test_create_role(role_repo, mock_session):
    """Test creating a role."""
    role = RoleModel(name="editor")

    result = await role_repo.create(role)

    assert result == role
    mock_session.add.assert_called_once_with(role)
    mock_session.flush.assert_called_once()


@pytest.mark.asyncio
async def test_get_by_id(role_repo, mock_session):
    """Test getting a role by ID."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = RoleModel(id=3, name="editor")
    mock_session.execute.return_value = mock_result

    result = await role_repo.get_by_id(3)

    assert result is not None
    assert result.id == 3
    mock_session.execute.assert_called_once()


@pytest.mark.asyncio
async def test_get_by_name_excluding_own_id(role_repo, mock_session):
    """The rename check ignores the role being renamed."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_session.execute.return_value = mock_result

    result = await role_repo.get_by_name("editor", exclude_id=3)

    assert result is None
    query = mock_session.execute.call_args[0][0]
    compiled = str(query)
    assert "roles.name = :name_1" in compiled
    assert "roles.id != :id_1" in compiled


@pytest.mark.asyncio
async def test_list_all(role_repo, mock_session):
    """Test listing roles."""
    roles = [RoleModel(id=1, name="auditor"), RoleModel(id=2, name="editor")]
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = roles
    mock_session.execute.return_value = mock_result

    result = await role_repo.list_all()

    assert result == roles
    assert "ORDER BY roles.name" in str(mock_session.execute.call_args[0][0])


@pytest.mark.asyncio
async def test_delete(role_repo, mock_session):
    """Test deleting a role."""
    role = RoleModel(id=1, name="temp")

    await role_repo.delete(role)

    mock_session.delete.assert_called_once_with(role)
    mock_session.flush.assert_called_once()
