"""
User Management Use Cases
"""

from .create_user_use_case import CreateUserUseCase
from .update_user_use_case import UpdateUserUseCase
from .deactivate_user_use_case import DeactivateUserUseCase
from .change_password_use_case import ChangePasswordUseCase
from .list_users_use_case import ListUsersUseCase
from .get_user_use_case import GetUserUseCase

__all__ = [
    "CreateUserUseCase",
    "UpdateUserUseCase",
    "DeactivateUserUseCase",
    "ChangePasswordUseCase",
    "ListUsersUseCase",
    "GetUserUseCase",
]
