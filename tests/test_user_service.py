"""Tests for user service."""

from meal_planner.services.users import UserService
from tests.conftest import InMemoryUserRepository


def test_find_user_by_internal_id(user_repository: InMemoryUserRepository) -> None:
    user = user_repository.add(firebase_uid="fb-1")
    service = UserService(user_repository)

    assert service.find_user(str(user.id)) == user


def test_find_user_by_firebase_uid(user_repository: InMemoryUserRepository) -> None:
    user = user_repository.add(firebase_uid="fb-1")
    service = UserService(user_repository)

    assert service.find_user("fb-1") == user


def test_find_user_missing(user_repository: InMemoryUserRepository) -> None:
    user_repository.add(firebase_uid="fb-1")
    service = UserService(user_repository)

    assert service.find_user("fb-2") is None
    assert service.find_user("00000000-0000-0000-0000-000000000000") is None
