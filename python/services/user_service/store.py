"""User storage for the user service."""

from __future__ import annotations

import logging
import threading
from abc import ABCMeta, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from common.models import (
    CreateUserRequest,
    Gender,
    GenderProfileField,
    NumberProfileField,
    TextProfileField,
    UpdateUserRequest,
    User,
)

logger = logging.getLogger(__name__)


class UserStore(metaclass=ABCMeta):
    """Storage backend for users, injected into the request handlers."""

    @abstractmethod
    def list_users(self) -> list[User]: ...

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, payload: CreateUserRequest) -> User:
        """
        Store a new user.

        Args:
            payload: name, email and optional profile fields of the user

        Returns:
            User: the stored user with its id and timestamps assigned
        """
        ...

    @abstractmethod
    def update_user(self, user_id: int, payload: UpdateUserRequest) -> Optional[User]:
        """
        Overwrite the fields set in ``payload`` and refresh ``updated_at``.

        Returns:
            User | None: the updated user, or None if ``user_id`` is unknown
        """
        ...

    @abstractmethod
    def delete_user(self, user_id: int) -> bool: ...


class InMemoryUserStore(UserStore):
    """Keeps users in an ordered list; ids are assigned incrementally."""

    def __init__(self, initial_users: Optional[list[User]] = None) -> None:
        self._users: list[User] = [user.model_copy(deep=True) for user in initial_users or []]
        self._next_id = max((user.id for user in self._users), default=0) + 1
        self._mutex = threading.Lock()

    def list_users(self) -> list[User]:
        with self._mutex:
            return [user.model_copy(deep=True) for user in self._users]

    def get_user(self, user_id: int) -> Optional[User]:
        with self._mutex:
            index = self._find(user_id)
            if index is None:
                return None
            return self._users[index].model_copy(deep=True)

    def create_user(self, payload: CreateUserRequest) -> User:
        now = datetime.now(timezone.utc)
        with self._mutex:
            user = User(
                id=self._next_id,
                name=payload.name,
                email=payload.email,
                profile_fields=payload.profile_fields,
                created_at=now,
                updated_at=now,
            )
            self._users.append(user)
            self._next_id += 1
            logger.info(f"User {user.id} added to store. Total users: {len(self._users)}")
            return user.model_copy(deep=True)

    def update_user(self, user_id: int, payload: UpdateUserRequest) -> Optional[User]:
        with self._mutex:
            index = self._find(user_id)
            if index is None:
                return None

            changes: dict = {"updated_at": datetime.now(timezone.utc)}
            if payload.name is not None:
                changes["name"] = payload.name
            if payload.email is not None:
                changes["email"] = payload.email
            if payload.profile_fields is not None:
                changes["profile_fields"] = payload.profile_fields

            user = self._users[index].model_copy(update=changes, deep=True)
            self._users[index] = user
            return user.model_copy(deep=True)

    def delete_user(self, user_id: int) -> bool:
        with self._mutex:
            index = self._find(user_id)
            if index is None:
                return False
            del self._users[index]
            logger.info(f"User {user_id} deleted. Total users: {len(self._users)}")
            return True

    def _find(self, user_id: int) -> Optional[int]:
        for index, user in enumerate(self._users):
            if user.id == user_id:
                return index
        return None


def sample_users() -> list[User]:
    now = datetime.now(timezone.utc)
    return [
        User(
            id=1,
            name="田中太郎",
            email="tanaka@example.com",
            created_at=now,
            updated_at=now,
            profile_fields=[
                TextProfileField(name="趣味", value="読書"),
                NumberProfileField(name="年齢", value=30),
            ],
        ),
        User(
            id=2,
            name="三井花子",
            email="mitsui@example.com",
            created_at=now,
            updated_at=now,
            profile_fields=[
                TextProfileField(name="職業", value="エンジニア"),
                GenderProfileField(name="性別", value=Gender.FEMALE),
            ],
        ),
    ]
