"""
Resolution of the acting identity for an orchestration stack.
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from config import get_config
from .models import Group, Tenant, User

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityContext:
    """User, group and tenant an operation on a stack runs as."""
    user: User
    current_group: Group
    current_tenant: Tenant


# Process-wide root tenant
_root_tenant: Optional[Tenant] = None


def get_root_tenant() -> Tenant:
    """Get or create the root tenant from configuration."""
    global _root_tenant
    if _root_tenant is None:
        config = get_config()
        _root_tenant = Tenant.build(
            name=config.root_tenant_name,
            admin_userid=config.root_admin_userid,
            default_group=config.root_default_group,
        )
    return _root_tenant


def set_root_tenant(tenant: Optional[Tenant]) -> None:
    """Replace the root tenant. Passing None rebuilds it from configuration."""
    global _root_tenant
    _root_tenant = tenant


def _owning_tenant(stack: Any) -> Optional[Tenant]:
    management_system = getattr(stack, "management_system", None)
    if management_system is None:
        return None
    return getattr(management_system, "tenant", None)


def tenant_identity(stack: Any) -> IdentityContext:
    """
    Resolve the identity used to authorize work on a stack.

    The admin user of the tenant owning the stack's management system is
    used; stacks without one fall back to the root tenant.

    Args:
        stack: Stack handle or record with an optional management_system

    Returns:
        Identity context scoped to the resolved tenant
    """
    tenant = _owning_tenant(stack)

    if tenant is None:
        logger.debug(f"Stack {getattr(stack, 'name', stack)} has no tenant, using root tenant")
        tenant = get_root_tenant()

    return IdentityContext(
        user=tenant.admin,
        current_group=tenant.default_group,
        current_tenant=tenant,
    )
