"""Mock dirt filter sensor implementation for testing."""

import logging
from typing import Callable, Optional

from .base import DirtFilter

logger = logging.getLogger(__name__)

# Type for dynamic capacity provider function
CapacityProvider = Callable[[], float]


class MockDirtFilter(DirtFilter):
    """Mock dirt filter sensor.

    Supports both a static capacity value (set manually) and a dynamic
    capacity provider.
    """

    def __init__(
        self,
        capacity: float = 100.0,
        call_log: Optional[list[str]] = None,
    ) -> None:
        """Initialize mock filter.

        Args:
            capacity: Initial remaining capacity in percent.
            call_log: Shared list that receives the name of every call.
        """
        self._capacity = capacity
        self._capacity_provider: Optional[CapacityProvider] = None
        self._call_log = call_log if call_log is not None else []
        self.capacity_calls = 0

    @property
    def current_capacity(self) -> float:
        """Static capacity value, ignoring any provider."""
        return self._capacity

    def set_capacity(self, capacity: float) -> None:
        """Manually set the reported capacity.

        Args:
            capacity: Remaining capacity in percent.

        Raises:
            ValueError: If capacity is outside 0-100.
        """
        if not 0.0 <= capacity <= 100.0:
            raise ValueError(f"Capacity out of range: {capacity}")
        self._capacity = capacity

    def set_capacity_provider(self, provider: CapacityProvider) -> None:
        """Set dynamic capacity provider.

        When set, capacity is read from the provider function instead of
        the static value.

        Args:
            provider: Function returning the capacity in percent.
        """
        self._capacity_provider = provider

    def capacity(self) -> float:
        self.capacity_calls += 1
        self._call_log.append("filter.capacity")
        if self._capacity_provider:
            return self._capacity_provider()
        return self._capacity
