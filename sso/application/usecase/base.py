"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case: one entry point the host calls, backed by domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
