"""Base classes for toolchain matcher plugins."""

from abc import ABC, abstractmethod
from enum import Enum


class ToolFamily(Enum):
    """Closed set of program kinds the classifier knows how to read."""

    COMPILER = "compiler"
    ARCHIVER = "archiver"
    UNKNOWN = "unknown"


class ToolMatcher(ABC):
    """Contract for matchers that recognise a wrapped program by its path."""

    family: ToolFamily = ToolFamily.UNKNOWN

    @abstractmethod
    def matches(self, program: str) -> bool:
        """Return True when ``program`` belongs to this matcher's family."""
