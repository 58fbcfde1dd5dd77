"""
Base Service Interface

All engine services inherit from this base class, and report failures
through the ServiceError hierarchy.
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class BaseService(ABC, Generic[InputT, OutputT]):
    """
    Base class for all services.

    Each service has a typed request and a typed result, and carries no
    state between calls.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Service name for logging and error messages."""
        pass

    @abstractmethod
    async def execute(self, input_data: InputT) -> OutputT:
        """
        Execute the service's main function.

        Args:
            input_data: Validated input conforming to InputT schema

        Returns:
            Output conforming to OutputT schema

        Raises:
            ServiceError: If execution fails
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if service is healthy and can process requests."""
        pass


class ServiceError(Exception):
    """Base exception for service errors."""

    def __init__(self, service_name: str, message: str, details: dict = None):
        self.service_name = service_name
        self.message = message
        self.details = details or {}
        super().__init__(f"[{service_name}] {message}")


class MalformedInputError(ServiceError):
    """
    Input is structurally invalid: empty sequence, missing or non-numeric
    fields, NaN/infinite values, inconsistent OHLC or time going backwards.

    Short series are NOT malformed; indicators fall back to neutral values.
    """
    pass
