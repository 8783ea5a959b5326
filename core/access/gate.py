from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Literal

from core.errors import NotAuthorizedOperator, NotAuthorizedViewer

logger = logging.getLogger(__name__)

Role = Literal["operator", "viewer", "both", "none"]


@dataclass(frozen=True)
class AccessGate:
    """Role checks for numeric caller ids.

    Operators may mutate state, viewers may read it. The two sets are
    independent: an operator is not a viewer unless listed in both.
    """

    operators: frozenset[int] = field(default_factory=frozenset)
    viewers: frozenset[int] = field(default_factory=frozenset)

    @classmethod
    def from_ids(cls, *, operators: Iterable[int] = (), viewers: Iterable[int] = ()) -> "AccessGate":
        return cls(operators=frozenset(operators), viewers=frozenset(viewers))

    def is_operator(self, user_id: int) -> bool:
        return user_id in self.operators

    def is_viewer(self, user_id: int) -> bool:
        return user_id in self.viewers

    def role_of(self, user_id: int) -> Role:
        operator = self.is_operator(user_id)
        viewer = self.is_viewer(user_id)
        if operator and viewer:
            return "both"
        if operator:
            return "operator"
        if viewer:
            return "viewer"
        return "none"

    def require_operator(self, user_id: int) -> None:
        if not self.is_operator(user_id):
            logger.warning(f"Denied operator access for user {user_id}")
            raise NotAuthorizedOperator(user_id)

    def require_viewer(self, user_id: int) -> None:
        if not self.is_viewer(user_id):
            logger.warning(f"Denied viewer access for user {user_id}")
            raise NotAuthorizedViewer(user_id)
