"""Base class for discrete operators."""

from abc import ABC, abstractmethod


class BaseOperator(ABC):
    """Abstract base class for discrete operators on square grids."""

    def __init__(self, name: str = "BaseOperator"):
        """
        Initialize base operator.

        Args:
            name: Human-readable name for the operator
        """
        self.name = name

    @abstractmethod
    def can_apply(self, *sizes: int) -> bool:
        """
        Check if the operator can be applied to grids of the given sizes.

        Args:
            sizes: Points per side of each grid involved

        Returns:
            True if operator can be applied, False otherwise
        """
        pass

    def __str__(self) -> str:
        """String representation of the operator."""
        return self.name

    def __repr__(self) -> str:
        """Detailed representation of the operator."""
        return f"{self.__class__.__name__}(name='{self.name}')"
