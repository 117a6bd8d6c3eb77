"""
Stack status polling against the provider.
"""

import logging
from typing import Any, Callable, Dict, Optional

from .errors import Operation, StackNotExistError, translate
from .models import StackHandle, StackStatus

logger = logging.getLogger(__name__)


class StackStatusResolver:
    """Query the provider for the status of existing stacks."""

    def __init__(
        self,
        client: Any = None,
        connect: Optional[Callable[[], Any]] = None,
    ):
        """
        Initialize the resolver.

        Args:
            client: cloudformation client
            connect: Opens the client on first use when no client is given
        """
        if client is None and connect is None:
            raise ValueError("Either client or connect must be provided")
        self._client = client
        self._connect = connect

    @property
    def cloudformation(self) -> Any:
        if self._client is None:
            self._client = self._connect()
        return self._client

    def describe(self, handle: StackHandle) -> Dict[str, Any]:
        """Return the provider record for a stack.

        Only the first matching record is used; the provider is trusted to
        key stack ids uniquely.
        """
        logger.debug(f"Describing stack {handle.provider_reference}")
        try:
            response = self.cloudformation.describe_stacks(
                StackName=handle.provider_reference
            )
        except Exception as e:
            raise translate(Operation.STATUS, e) from e

        stacks = response.get("Stacks") or []
        if not stacks:
            raise StackNotExistError(
                f"Stack with id {handle.provider_reference} does not exist"
            )
        return dict(stacks[0])

    def raw_status(self, handle: StackHandle) -> StackStatus:
        """Get the provider status and reason for a stack."""
        stack = self.describe(handle)
        return StackStatus(
            status=stack["StackStatus"],
            reason=stack.get("StackStatusReason"),
        )

    def raw_exists(self, handle: StackHandle) -> bool:
        """Check whether the provider still knows the stack."""
        try:
            self.raw_status(handle)
        except StackNotExistError:
            return False
        return True

    def refresh(self, handle: StackHandle) -> StackStatus:
        """Poll the provider and record the status on the handle."""
        status = self.raw_status(handle)
        handle.apply_status(status)
        return status
