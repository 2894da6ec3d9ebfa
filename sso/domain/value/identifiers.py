"""Strongly typed identifiers for SSO domain entities.

Local account ids are integers owned by the host account store.
"""

from typing import NewType

AccountId = NewType("AccountId", int)
