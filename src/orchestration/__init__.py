"""
Orchestration stack lifecycle management.
"""

from .errors import (
    DeleteError,
    Operation,
    OrchestrationError,
    ProvisionError,
    StackNotExistError,
    StatusError,
    UpdateError,
    translate,
)
from .models import ManagementSystem, StackHandle, StackStatus, TemplateRef
from .options import format_options, to_api_params
from .stack_manager import StackManager, create_stack
from .status import StackStatusResolver
from .store import InMemoryStackStore, StackStore

__all__ = [
    "DeleteError",
    "InMemoryStackStore",
    "ManagementSystem",
    "Operation",
    "OrchestrationError",
    "ProvisionError",
    "StackHandle",
    "StackManager",
    "StackNotExistError",
    "StackStatus",
    "StackStatusResolver",
    "StackStore",
    "StatusError",
    "TemplateRef",
    "UpdateError",
    "create_stack",
    "format_options",
    "to_api_params",
    "translate",
]
