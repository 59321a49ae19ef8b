"""
Instance Control Port

Architectural Intent:
- Port interface for starting and stopping compute instances by physical id
- Implemented by EC2Adapter
"""

from abc import ABC, abstractmethod


class InstanceControlError(Exception):
    """Raised when a single instance action is rejected or fails."""

    def __init__(self, instance_id: str, reason: str) -> None:
        super().__init__(f"{instance_id}: {reason}")
        self.instance_id = instance_id
        self.reason = reason


class InstanceControlPort(ABC):
    """
    Port interface for compute instance lifecycle actions.
    """

    @abstractmethod
    def start_instance(self, instance_id: str) -> None:
        """
        Starts the instance. Raises InstanceControlError on failure.
        """
        pass

    @abstractmethod
    def stop_instance(self, instance_id: str) -> None:
        """
        Stops the instance. Raises InstanceControlError on failure.
        """
        pass
