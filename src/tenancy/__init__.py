"""
Tenant and identity lookups for orchestration stacks.
"""

from .identity import IdentityContext, get_root_tenant, set_root_tenant, tenant_identity
from .models import Group, Tenant, User

__all__ = [
    "Group",
    "IdentityContext",
    "Tenant",
    "User",
    "get_root_tenant",
    "set_root_tenant",
    "tenant_identity",
]
