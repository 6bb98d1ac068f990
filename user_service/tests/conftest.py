"""Pytest configuration and fixtures."""

from typing import AsyncGenerator

import pytest
from httpx import AsyncClient, ASGITransport

from user_service.app.api.deps import get_user_repository
from user_service.app.main import app
from user_service.app.models.user import Gender, UserEntity
from user_service.app.repositories.user_repository import InMemoryUserRepository


@pytest.fixture
def repository() -> InMemoryUserRepository:
    """Fresh, empty repository for each test."""
    return InMemoryUserRepository()


@pytest.fixture
def sample_user() -> UserEntity:
    """User record without an id, ready to insert."""
    return UserEntity(
        login="player1",
        first_name="Ivan",
        last_name="Petrov",
        gender=Gender.MALE,
        current_games_number=3,
    )


@pytest.fixture(scope="function")
async def test_client(repository: InMemoryUserRepository) -> AsyncGenerator[AsyncClient, None]:
    """
    Create test client backed by the per-test repository.

    Overrides the app's repository dependency so tests never share users.
    """
    app.dependency_overrides[get_user_repository] = lambda: repository

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    # Cleanup
    app.dependency_overrides.clear()


@pytest.fixture
async def created_user(test_client: AsyncClient) -> dict:
    """Create a user through the API and return its id and payload."""
    payload = {"login": "abc123", "firstName": "A", "lastName": "B"}
    response = await test_client.post("/api/users", json=payload)
    assert response.status_code == 201
    return {"id": response.json(), **payload}
