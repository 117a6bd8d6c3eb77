"""
Domain errors for orchestration stack operations and the translator that
maps raw provider failures onto them.
"""

import logging
from enum import Enum
from typing import Optional

from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

# Provider error text is not a stable contract; this match is best effort.
STACK_NOT_EXIST_MARKER = "does not exist"
VALIDATION_ERROR_CODE = "ValidationError"


class Operation(Enum):
    """Kind of provider call an error came from."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    STATUS = "status"


class OrchestrationError(Exception):
    """
    Base class for all orchestration stack failures.

    Attributes:
        provider_message: Message reported by the provider
        error_code: Provider error code, if one was reported
        provider_reference: Stack id the failure concerns, when known
    """

    def __init__(
        self,
        provider_message: str,
        error_code: Optional[str] = None,
        provider_reference: Optional[str] = None,
    ):
        self.provider_message = provider_message
        self.error_code = error_code
        self.provider_reference = provider_reference

        details = []
        if error_code:
            details.append(error_code)
        if provider_reference:
            details.append(f"stack={provider_reference}")

        if details:
            message = f"{provider_message} [{', '.join(details)}]"
        else:
            message = provider_message
        super().__init__(message)


class ProvisionError(OrchestrationError):
    """Raised when a stack could not be created."""


class UpdateError(OrchestrationError):
    """Raised when a stack could not be updated."""


class DeleteError(OrchestrationError):
    """Raised when a stack could not be deleted."""


class StatusError(OrchestrationError):
    """Raised when the status of a stack could not be retrieved."""


class StackNotExistError(StatusError):
    """Raised when the provider reports the stack does not exist."""


ERROR_CLASSES = {
    Operation.CREATE: ProvisionError,
    Operation.UPDATE: UpdateError,
    Operation.DELETE: DeleteError,
    Operation.STATUS: StatusError,
}


def error_code(error: BaseException) -> Optional[str]:
    """Extract the provider error code from a raw error."""
    if isinstance(error, ClientError):
        return error.response.get("Error", {}).get("Code")
    return getattr(error, "error_code", None) or getattr(error, "code", None)


def error_message(error: BaseException) -> str:
    """Extract the provider message from a raw error."""
    if isinstance(error, ClientError):
        message = error.response.get("Error", {}).get("Message")
        if message:
            return str(message)
    return str(error)


def is_stack_not_exist(error: BaseException) -> bool:
    """Check whether a raw error says the stack does not exist."""
    return (
        error_code(error) == VALIDATION_ERROR_CODE
        and STACK_NOT_EXIST_MARKER in error_message(error)
    )


def translate(operation: Operation, error: BaseException) -> OrchestrationError:
    """
    Translate a raw provider error into a domain error.

    Args:
        operation: Kind of call that failed
        error: Exception raised by the provider client

    Returns:
        Domain error carrying the provider message and code
    """
    if isinstance(error, OrchestrationError):
        return error

    code = error_code(error)
    message = error_message(error)

    if operation is Operation.STATUS and is_stack_not_exist(error):
        error_class = StackNotExistError
    else:
        error_class = ERROR_CLASSES[operation]

    logger.warning(
        f"Provider {operation.value} call failed ({code or type(error).__name__}): {message}"
    )
    return error_class(message, error_code=code)
