"""
PayloadSource Port - Interface for obtaining raw analytics payloads.

The pipeline never fetches data itself. This port defines the contract for the
collaborator that does. Implementations can be file-based or network-backed.
"""

from abc import ABC, abstractmethod
from typing import Any


class PayloadSource(ABC):
    """
    Abstract interface for raw analytics payload retrieval.

    Implementations:
    - FilePayloadSource: JSON or YAML file on disk
    """

    @abstractmethod
    async def load(self) -> Any:
        """
        Fetch the raw payload.

        Returns:
            Decoded payload, normally a mapping with 'historical' and 'predictions'
        """
        ...
