"""
Data model for orchestration stacks.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

import boto3

from tenancy.models import Tenant


@dataclass
class TemplateRef:
    """Template a stack is deployed from, given inline or by URL."""
    name: str
    body: Optional[str] = None
    url: Optional[str] = None

    def __post_init__(self) -> None:
        if (self.body is None) == (self.url is None):
            raise ValueError("Exactly one of body or url must be provided")

    def to_options(self) -> Dict[str, Any]:
        """Template-derived options for create/update calls."""
        if self.body is not None:
            return {"template_body": self.body}
        return {"template_url": self.url}


@dataclass(frozen=True)
class StackStatus:
    """Status and reason reported by the provider for a stack."""
    status: str
    reason: Optional[str] = None

    @property
    def is_in_progress(self) -> bool:
        return self.status.endswith("_IN_PROGRESS")

    @property
    def is_complete(self) -> bool:
        return self.status.endswith("_COMPLETE") and not self.is_rolled_back

    @property
    def is_failed(self) -> bool:
        return self.status.endswith("_FAILED")

    @property
    def is_rolled_back(self) -> bool:
        return "ROLLBACK" in self.status

    @property
    def is_deleted(self) -> bool:
        return self.status == "DELETE_COMPLETE"


@dataclass
class ManagementSystem:
    """Provider account and region that stacks are deployed into."""
    name: str
    region: str = "us-east-1"
    profile: Optional[str] = None
    tenant: Optional[Tenant] = None
    _client: Any = field(default=None, init=False, repr=False, compare=False)

    def connect(self) -> Any:
        """Return the cloudformation client for this account."""
        if self._client is None:
            session_args = {"region_name": self.region}
            if self.profile:
                session_args["profile_name"] = self.profile

            session = boto3.Session(**session_args)
            self._client = session.client("cloudformation")
        return self._client


@dataclass
class StackHandle:
    """
    Local record of a provider stack.

    ``provider_reference`` is the stack id assigned by the provider. It is set
    once at creation and cannot be changed afterwards.
    """
    provider_reference: str
    name: str
    status: Optional[str] = None
    status_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    management_system: Optional[ManagementSystem] = None

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "provider_reference":
            current = self.__dict__.get("provider_reference")
            if current is not None and current != value:
                raise AttributeError(
                    f"provider_reference of stack {self.name} is already set to {current}"
                )
        super().__setattr__(name, value)

    @property
    def ems_ref(self) -> str:
        return self.provider_reference

    def apply_status(self, status: StackStatus) -> None:
        """Record a polled status on the handle."""
        self.status = status.status
        self.status_reason = status.reason
