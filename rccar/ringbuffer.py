"""Fixed-capacity FIFO of samples and a windowed differentiator on top of it."""

from collections import deque


class RingBufferError(Exception):
    """Base class for ring buffer errors."""


class RingBufferEmpty(RingBufferError):
    """Raised when reading from an empty buffer."""


class RingBufferFull(RingBufferError):
    """Raised when writing to a full buffer."""


class RingBuffer:
    """FIFO of at most ``capacity`` values; writes to a full buffer fail."""

    def __init__(self, capacity):
        if capacity <= 0:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._items = deque()

    def __len__(self):
        return len(self._items)

    def clear(self):
        self._items.clear()

    def is_full(self):
        return len(self._items) >= self.capacity

    def put(self, value):
        """Append ``value``; raise :class:`RingBufferFull` when there is no room."""
        if self.is_full():
            raise RingBufferFull("ring buffer is full")
        self._items.append(value)

    def fill(self, value):
        """Append ``value`` until the buffer is full."""
        while not self.is_full():
            self.put(value)

    def peek(self):
        """Return the oldest value without removing it."""
        if not self._items:
            raise RingBufferEmpty("ring buffer is empty")
        return self._items[0]

    def get(self):
        """Remove and return the oldest value."""
        if not self._items:
            raise RingBufferEmpty("ring buffer is empty")
        return self._items.popleft()


class Differentiator:
    """Difference between the newest sample and the oldest one in a window."""

    def __init__(self, samples):
        self._buffer = RingBuffer(samples)

    def clear(self):
        self._buffer.clear()

    def update(self, value):
        """Feed ``value`` and return its difference to the window's oldest sample."""
        if self._buffer.is_full():
            oldest = self._buffer.get()
            self._buffer.put(value)
            return value - oldest
        self._buffer.put(value)
        return value - self._buffer.peek()