"""
Unit tests for UserService account creation and read operations.
"""

from unittest.mock import Mock

import pytest

from clinic.core.exceptions import BadRequestError, ConflictError
from clinic.core.security import verify_password
from clinic.schemas.dtos import UserCreateRequest, UserListQuery
from clinic.services.user_service import UserService
from tests.factories.repository_factories import UserRepositoryFactory, build_user


@pytest.fixture
def mock_user_repo() -> Mock:
    return UserRepositoryFactory.create_mock_full()


@pytest.fixture
def service(mock_user_repo) -> UserService:
    return UserService(mock_user_repo)


def _request(**overrides) -> UserCreateRequest:
    data = {
        "email": "nurse@clinic.test",
        "first_name": "Florence",
        "last_name": "Nightingale",
        "role": "nurse",
        "temporary_password": "Temp-pass-123",
    }
    data.update(overrides)
    return UserCreateRequest.from_dict(data)


@pytest.mark.services
@pytest.mark.user
class TestUserServiceCreation:
    """Test admin-driven account creation."""

    def test_create_by_admin_hashes_temporary_password(self, service, mock_user_repo):
        result = service.create_by_admin(_request())

        stored = mock_user_repo.create.call_args[0][0]
        assert stored.password_hash != "Temp-pass-123"
        assert verify_password("Temp-pass-123", stored.password_hash)
        assert stored.is_active is True
        assert stored.must_change_password is True
        assert result.email == "nurse@clinic.test"
        assert result.role == "nurse"

    def test_create_by_admin_response_hides_password_hash(self, service):
        result = service.create_by_admin(_request())
        assert "password_hash" not in result.to_dict()
        assert "must_change_password" not in result.to_dict()

    def test_create_by_admin_duplicate_email_raises_conflict(
        self, service, mock_user_repo
    ):
        mock_user_repo.get_by_email.return_value = build_user(email="nurse@clinic.test")

        with pytest.raises(ConflictError) as exc:
            service.create_by_admin(_request())

        assert exc.value.status_code == 409
        mock_user_repo.create.assert_not_called()

    def test_create_by_admin_propagates_store_conflict(self, service, mock_user_repo):
        mock_user_repo.create.side_effect = ConflictError("Email already in use")

        with pytest.raises(ConflictError):
            service.create_by_admin(_request())

    @pytest.mark.parametrize(
        "overrides",
        [
            {"email": "no-at-sign"},
            {"first_name": ""},
            {"role": "janitor"},
            {"temporary_password": "short"},
        ],
    )
    def test_create_by_admin_rejects_invalid_input(
        self, service, mock_user_repo, overrides
    ):
        with pytest.raises(BadRequestError):
            service.create_by_admin(_request(**overrides))
        mock_user_repo.get_by_email.assert_not_called()
        mock_user_repo.create.assert_not_called()


@pytest.mark.services
@pytest.mark.user
class TestUserServiceQueries:
    """Test listing and single-user lookups."""

    def test_find_all_returns_summaries(self, service, mock_user_repo):
        mock_user_repo.get_all.return_value = [
            build_user(id="u-1", role="admin", email="a@clinic.test"),
            build_user(id="u-2", role="doctor", email="d@clinic.test"),
        ]

        result = service.find_all()

        assert [u.to_dict()["email"] for u in result] == ["a@clinic.test", "d@clinic.test"]
        assert set(result[0].to_dict()) == {"id", "email", "role", "created_at"}

    def test_list_users_returns_page(self, service, mock_user_repo):
        mock_user_repo.search.return_value = (5, [build_user()])

        page = service.list_users(UserListQuery(q="user", offset=4, limit=1))

        mock_user_repo.search.assert_called_once_with(q="user", offset=4, limit=1)
        assert page.total == 5
        assert len(page.items) == 1
        assert "password_hash" not in page.to_dict()["items"][0]

    def test_get_user_returns_profile(self, service, mock_user_repo):
        mock_user_repo.get_by_id.return_value = build_user()

        result = service.get_user("u-1")

        assert result is not None
        assert result.to_dict() == {
            "id": "u-1",
            "firstname": "Test",
            "lastname": "User",
            "email": "user@clinic.test",
            "role": "doctor",
            "created_at": build_user().created_at,
        }

    def test_get_user_missing_returns_none(self, service):
        assert service.get_user("missing") is None
