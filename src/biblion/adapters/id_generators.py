"""ID generators for BIBLION loans."""

import threading

from ulid import monotonic

from biblion.interfaces.id_generator import IdGenerator

# pylint: disable=too-few-public-methods


class ULIDGenerator(IdGenerator):
    """Thread-safe monotonic ULID generator.

    ULIDs sort in creation order, so loan IDs double as a checkout sequence.
    This generator uses the `ulid-py` library to create them.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()

    def new_id(self) -> str:
        """Generate a new ULID (serialized across threads)."""
        with self._lock:
            return str(monotonic.new())


class SimpleIdGenerator(IdGenerator):
    """Sequential, zero-padded loan IDs with an optional prefix.

    Note:
        Deterministic output makes this the generator of choice for tests and
        scenario replays.
    """

    def __init__(self, prefix: str = "", length: int = 6) -> None:
        self._lock = threading.Lock()
        self._counter = 0
        self._prefix = prefix
        self._length = length

    def new_id(self) -> str:
        """Generate the next identifier in the sequence."""
        with self._lock:
            self._counter += 1
            return f"{self._prefix}{self._counter:0{self._length}d}"
