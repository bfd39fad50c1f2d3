"""
Admin Use Cases
"""

from .activate_users_use_case import ActivateUsersUseCase
from .change_role_use_case import ChangeRoleUseCase
from .dtos import ActivateUsersResponse, SuspendUsersResponse, UserListResponse
from .get_user_use_case import GetUserUseCase
from .list_users_use_case import ListUsersUseCase
from .suspend_users_use_case import SuspendUsersUseCase

__all__ = [
    "ActivateUsersUseCase",
    "ActivateUsersResponse",
    "ChangeRoleUseCase",
    "GetUserUseCase",
    "ListUsersUseCase",
    "SuspendUsersUseCase",
    "SuspendUsersResponse",
    "UserListResponse",
]
