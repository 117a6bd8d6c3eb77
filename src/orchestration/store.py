"""
Storage of stack handles created by the lifecycle manager.
"""

import threading
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from .models import StackHandle


class StackStore(ABC):
    """Where stack handles are recorded."""

    @abstractmethod
    def save(self, handle: StackHandle) -> None:
        """Record or replace a stack handle."""

    @abstractmethod
    def get(self, provider_reference: str) -> Optional[StackHandle]:
        """Look up a stack handle by provider reference."""

    @abstractmethod
    def remove(self, provider_reference: str) -> None:
        """Forget a stack handle."""

    @abstractmethod
    def all(self) -> List[StackHandle]:
        """Return all recorded stack handles."""


class InMemoryStackStore(StackStore):
    """Process-local stack store."""

    def __init__(self) -> None:
        self._handles: Dict[str, StackHandle] = {}
        self._lock = threading.Lock()

    def save(self, handle: StackHandle) -> None:
        with self._lock:
            self._handles[handle.provider_reference] = handle

    def get(self, provider_reference: str) -> Optional[StackHandle]:
        with self._lock:
            return self._handles.get(provider_reference)

    def remove(self, provider_reference: str) -> None:
        with self._lock:
            self._handles.pop(provider_reference, None)

    def all(self) -> List[StackHandle]:
        with self._lock:
            return list(self._handles.values())
