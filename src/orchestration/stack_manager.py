"""
Orchestration stack lifecycle operations.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from config import get_config

from .errors import Operation, OrchestrationError, ProvisionError, translate
from .models import ManagementSystem, StackHandle, StackStatus, TemplateRef
from .options import format_options, to_api_params
from .status import StackStatusResolver
from .store import InMemoryStackStore, StackStore

logger = logging.getLogger(__name__)


class StackManager:
    """Create, update, delete and poll stacks in one management system."""

    def __init__(
        self,
        management_system: Optional[ManagementSystem] = None,
        store: Optional[StackStore] = None,
        client: Any = None,
    ):
        """
        Initialize stack manager.

        The provider client is opened on first use, inside the call that
        needs it, so connection failures surface as domain errors.

        Args:
            management_system: Provider account the stacks live in
            store: Where created stacks are recorded
            client: cloudformation client to use instead of opening one
        """
        if management_system is None and client is None:
            raise ValueError("Either management_system or client must be provided")
        self.management_system = management_system
        self.store = store if store is not None else InMemoryStackStore()
        self._client = client

    @property
    def cloudformation(self) -> Any:
        if self._client is None:
            self._client = self.management_system.connect()
        return self._client

    @cloudformation.setter
    def cloudformation(self, client: Any) -> None:
        self._client = client

    @property
    def status(self) -> StackStatusResolver:
        return StackStatusResolver(connect=lambda: self.cloudformation)

    def _build_options(
        self,
        stack_name: str,
        template: TemplateRef,
        extra_options: Optional[Mapping[str, Any]],
    ) -> Dict[str, Any]:
        options: Dict[str, Any] = {
            "stack_name": stack_name,
            **template.to_options(),
            **(extra_options or {}),
        }

        if not options.get("capabilities"):
            default_capabilities = get_config().default_capabilities
            if default_capabilities:
                options["capabilities"] = list(default_capabilities)

        return format_options(options)

    def create(
        self,
        name: str,
        template: TemplateRef,
        extra_options: Optional[Mapping[str, Any]] = None,
    ) -> StackHandle:
        """
        Create a stack and record its handle.

        The new stack is described right away so the handle starts with the
        status the provider reports. If that describe fails, the raised
        ProvisionError still carries the id of the stack the provider created.

        Args:
            name: Stack name
            template: Template to deploy
            extra_options: Parameters, capabilities and other create options

        Returns:
            Handle for the created stack

        Raises:
            ProvisionError: If the provider rejects the stack
        """
        options = self._build_options(name, template, extra_options)
        logger.info(f"Creating stack {name} from template {template.name}")

        try:
            response = self.cloudformation.create_stack(**to_api_params(options))
        except Exception as e:
            raise translate(Operation.CREATE, e) from e

        stack_id = (response or {}).get("StackId")
        if not stack_id:
            raise ProvisionError(f"Create of stack {name} returned no stack id")

        handle = StackHandle(
            provider_reference=stack_id,
            name=name,
            management_system=self.management_system,
        )

        try:
            stack = self.status.describe(handle)
        except OrchestrationError as e:
            raise ProvisionError(
                e.provider_message,
                error_code=e.error_code,
                provider_reference=stack_id,
            ) from e

        handle.apply_status(
            StackStatus(stack["StackStatus"], stack.get("StackStatusReason"))
        )
        handle.created_at = stack.get("CreationTime")

        self.store.save(handle)
        logger.info(f"Created stack {name} ({handle.provider_reference}): {handle.status}")
        return handle

    def update(
        self,
        handle: StackHandle,
        template: TemplateRef,
        extra_options: Optional[Mapping[str, Any]] = None,
    ) -> StackHandle:
        """
        Update a stack with a new template and options.

        Raises:
            UpdateError: If the provider rejects the update
        """
        options = self._build_options(handle.provider_reference, template, extra_options)
        logger.info(f"Updating stack {handle.name} ({handle.provider_reference})")

        try:
            response = self.cloudformation.update_stack(**to_api_params(options))
        except Exception as e:
            raise translate(Operation.UPDATE, e) from e

        stack_id = response.get("StackId")
        if stack_id and stack_id != handle.provider_reference:
            logger.warning(
                f"Provider returned stack id {stack_id} for update of {handle.provider_reference}"
            )

        self.store.save(handle)
        return handle

    def delete(self, handle: StackHandle) -> bool:
        """
        Request deletion of a stack.

        Deleting a stack that is already gone is not treated as success; the
        provider's error is raised.

        Raises:
            DeleteError: If the provider rejects the deletion
        """
        logger.info(f"Deleting stack {handle.name} ({handle.provider_reference})")

        try:
            self.cloudformation.delete_stack(StackName=handle.provider_reference)
        except Exception as e:
            raise translate(Operation.DELETE, e) from e

        self.store.remove(handle.provider_reference)
        return True

    def raw_status(self, handle: StackHandle) -> StackStatus:
        """Get the provider status and reason for a stack."""
        return self.status.raw_status(handle)

    def raw_exists(self, handle: StackHandle) -> bool:
        """Check whether the provider still knows the stack."""
        return self.status.raw_exists(handle)

    def refresh_status(self, handle: StackHandle) -> StackStatus:
        """Poll the provider and record the status on the handle."""
        status = self.status.refresh(handle)
        self.store.save(handle)
        return status


def create_stack(
    management_system: ManagementSystem,
    name: str,
    template: TemplateRef,
    extra_options: Optional[Mapping[str, Any]] = None,
    store: Optional[StackStore] = None,
) -> StackHandle:
    """Create a stack in a management system."""
    return StackManager(management_system, store=store).create(
        name, template, extra_options
    )
