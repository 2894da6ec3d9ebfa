"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for persisted entities (accounts, identity links).

    Entities are immutable; changes go through repositories.
    """

    model_config = ConfigDict(frozen=True)
