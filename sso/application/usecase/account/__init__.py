"""Account use cases."""

from .delete_user_data import DeleteUserDataUseCase

__all__ = ["DeleteUserDataUseCase"]
