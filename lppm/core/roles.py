"""
Roles and the access levels the API checks them against.
"""
from enum import Enum


class Access(Enum):
    """What an endpoint requires, expressed as the roles that may use it."""

    SITE = ("superadmin",)
    RECORDS = ("superadmin", "admin")


class Role(str, Enum):
    SUPERADMIN = "superadmin"
    ADMIN = "admin"

    def allows(self, access: Access) -> bool:
        return self.value in access.value

    @classmethod
    def parse(cls, value: str) -> "Role":
        """Return the role for ``value`` or raise ``ValueError``."""
        return cls(value.strip().lower())
