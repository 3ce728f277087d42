"""Port for the source of loan identifiers."""

import abc

# pylint: disable=too-few-public-methods


class IdGenerator(abc.ABC):
    """Source of loan identifiers.

    The library service asks for one identifier per accepted checkout while
    holding its lock, so implementations need not be thread-safe themselves.
    Identifiers must not repeat within a process, and ordered schemes should
    sort in checkout order.
    """

    @abc.abstractmethod
    def new_id(self) -> str:
        """Return the identifier for the next loan."""
