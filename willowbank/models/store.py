# willowbank/models/store.py
"""
Record store protocol definition.

Generic parameterized query primitives used by every resource service.
No business logic lives behind this interface.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ExecuteResult:
    """Outcome of a mutating statement."""

    last_row_id: int | None
    row_count: int


class RecordStore(ABC):
    """
    Abstract base class for record storage implementations.

    All primitives raise StoreError wrapping the driver error. They never
    retry and never swallow failures.
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Create the schema and apply pending migrations."""
        pass

    @abstractmethod
    async def fetch_one(self, statement: str, args: Sequence[Any] = ()) -> dict[str, Any] | None:
        """
        Run a query and return its first row.

        Args:
            statement: Parameterized SQL statement
            args: Positional arguments for the placeholders

        Returns:
            Row as a dict, or None if the query matched nothing
        """
        pass

    @abstractmethod
    async def fetch_all(self, statement: str, args: Sequence[Any] = ()) -> list[dict[str, Any]]:
        """
        Run a query and return every row, in statement order.

        Args:
            statement: Parameterized SQL statement
            args: Positional arguments for the placeholders

        Returns:
            List of rows (possibly empty)
        """
        pass

    @abstractmethod
    async def execute(self, statement: str, args: Sequence[Any] = ()) -> ExecuteResult:
        """
        Run a single mutating statement and commit it.

        Args:
            statement: Parameterized SQL statement
            args: Positional arguments for the placeholders

        Returns:
            ExecuteResult with the generated id (inserts) and affected row count
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release resources held by the store."""
        pass
