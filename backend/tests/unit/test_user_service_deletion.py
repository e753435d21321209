"""
Unit tests for UserService.remove_user guard ordering.

Checks run as: existence, self-deletion, admin role, doctor linkage. The
first failing check decides the error and nothing is deleted.
"""

from unittest.mock import Mock

import pytest

from clinic.core.exceptions import BadRequestError, ForbiddenError, NotFoundError
from clinic.domain.guards import DOCTOR_LINKED_MESSAGE
from clinic.services.user_service import UserService
from tests.factories.repository_factories import UserRepositoryFactory, build_user


@pytest.fixture
def mock_user_repo() -> Mock:
    return UserRepositoryFactory.create_mock_full()


@pytest.fixture
def service(mock_user_repo) -> UserService:
    return UserService(mock_user_repo)


@pytest.mark.services
@pytest.mark.user
class TestUserServiceDeletion:
    def test_missing_user_raises_not_found(self, service, mock_user_repo):
        with pytest.raises(NotFoundError):
            service.remove_user("missing", "missing")
        mock_user_repo.delete.assert_not_called()

    @pytest.mark.parametrize("role", ["admin", "doctor", "nurse", "receptionist"])
    def test_self_deletion_is_forbidden_for_every_role(
        self, service, mock_user_repo, role
    ):
        mock_user_repo.get_by_id.return_value = build_user(id="u-1", role=role)

        with pytest.raises(ForbiddenError) as exc:
            service.remove_user("u-1", "u-1")

        assert exc.value.status_code == 403
        mock_user_repo.count_linked_records.assert_not_called()
        mock_user_repo.delete.assert_not_called()

    def test_admin_cannot_be_deleted_even_with_other_admins(
        self, service, mock_user_repo
    ):
        mock_user_repo.get_by_id.return_value = build_user(id="a-2", role="admin")
        mock_user_repo.count_active_admins.return_value = 3

        with pytest.raises(BadRequestError):
            service.remove_user("a-2", "a-1")
        mock_user_repo.delete.assert_not_called()

    @pytest.mark.parametrize("counts", [(1, 0), (0, 1), (4, 2)])
    def test_linked_doctor_cannot_be_deleted(self, service, mock_user_repo, counts):
        mock_user_repo.get_by_id.return_value = build_user(id="d-1", role="doctor")
        mock_user_repo.count_linked_records.return_value = counts

        with pytest.raises(BadRequestError) as exc:
            service.remove_user("d-1", "a-1")

        assert exc.value.message == DOCTOR_LINKED_MESSAGE
        mock_user_repo.count_linked_records.assert_called_once_with("d-1")
        mock_user_repo.delete.assert_not_called()

    def test_unlinked_doctor_is_deleted(self, service, mock_user_repo):
        mock_user_repo.get_by_id.return_value = build_user(id="d-1", role="doctor")

        result = service.remove_user("d-1", "a-1")

        mock_user_repo.delete.assert_called_once_with("d-1")
        assert result.to_dict() == {"message": "User deleted"}

    def test_non_doctor_skips_linkage_count(self, service, mock_user_repo):
        mock_user_repo.get_by_id.return_value = build_user(id="r-1", role="receptionist")

        service.remove_user("r-1", "a-1")

        mock_user_repo.count_linked_records.assert_not_called()
        mock_user_repo.delete.assert_called_once_with("r-1")
