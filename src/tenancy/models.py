"""
Users, groups and tenants used to scope stack operations.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class User:
    """A user that can act on behalf of a tenant."""
    userid: str
    name: Optional[str] = None


@dataclass(frozen=True)
class Group:
    """A group of users within a tenant."""
    description: str
    tenant_name: str


@dataclass
class Tenant:
    """A tenant with an administrative user and a default group."""
    name: str
    admin: User
    default_group: Group
    parent: Optional["Tenant"] = None
    groups: List[Group] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @classmethod
    def build(
        cls,
        name: str,
        admin_userid: str = "admin",
        default_group: Optional[str] = None,
        parent: Optional["Tenant"] = None,
    ) -> "Tenant":
        """Create a tenant with its admin user and default group."""
        group = Group(
            description=default_group or f"Tenant {name} access",
            tenant_name=name,
        )
        return cls(
            name=name,
            admin=User(userid=admin_userid),
            default_group=group,
            parent=parent,
            groups=[group],
        )
