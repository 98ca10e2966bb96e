"""Requester: the caller's identity and role, passed explicitly into use cases.

Identity and role resolution happen outside the core (auth middleware,
CLI flags).  The core only ever sees this value.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from storefront.domain.exceptions import AuthorizationError, ValidationError


class Role(Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Requester:

    user_id: str
    role: Role = Role.CUSTOMER

    def __post_init__(self) -> None:
        if not self.user_id or not self.user_id.strip():
            raise ValidationError("User ID is required")

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def can_access(self, owner_id: str) -> bool:
        return self.is_admin or self.user_id == owner_id

    def require_admin(self) -> None:
        if not self.is_admin:
            raise AuthorizationError("Admin access required")

    def require_owner_or_admin(self, owner_id: str, action: str) -> None:
        if not self.can_access(owner_id):
            raise AuthorizationError(f"Not authorized to {action}")

    @staticmethod
    def customer(user_id: str) -> Requester:
        return Requester(user_id=user_id, role=Role.CUSTOMER)

    @staticmethod
    def admin(user_id: str) -> Requester:
        return Requester(user_id=user_id, role=Role.ADMIN)

    @staticmethod
    def parse_role(raw: str | None) -> Role:
        if not raw:
            return Role.CUSTOMER
        try:
            return Role(raw.strip().lower())
        except ValueError as exc:
            raise ValidationError(f"Unknown role: {raw!r}") from exc
