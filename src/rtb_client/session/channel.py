"""
Ordered, closable hand-off between the reader thread and the robot.

Backed by a thread-safe queue.Queue. With a positive capacity the sender
blocks once that many messages are waiting. With capacity 0 the channel is a
rendezvous: every put() waits until the consumer has taken the message.
"""
import queue
import threading
from typing import Iterator, Optional

from ..protocol.wire import Message

_CLOSED = object()


class ChannelClosed(Exception):
    """Raised by get() once the channel is closed and fully drained."""


class MessageChannel:
    """Single-producer, single-consumer message channel."""

    def __init__(self, capacity: int = 0):
        if capacity < 0:
            raise ValueError("capacity must be >= 0")
        self.capacity = capacity
        self._queue: queue.Queue = queue.Queue(maxsize=capacity or 1)
        self._closing = threading.Event()
        self._drained = threading.Event()

    def put(self, message: Message) -> None:
        """Deliver a message, blocking while the consumer is behind."""
        if self._closing.is_set():
            raise ChannelClosed("put on closed channel")
        self._queue.put(message)
        if self.capacity == 0:
            # Rendezvous: wait for the consumer to take it.
            self._queue.join()

    def close(self) -> None:
        """Signal that no further messages will be sent. Messages already queued stay readable."""
        if self._closing.is_set():
            return
        self._closing.set()
        # The end marker is never joined, so close() only blocks for queue space.
        self._queue.put(_CLOSED)

    def get(self, timeout: Optional[float] = None) -> Message:
        """
        Take the next message.

        Args:
            timeout: Seconds to wait (None = wait forever)

        Raises:
            ChannelClosed: The channel is closed and no messages remain
            queue.Empty: Nothing arrived within the timeout
        """
        if self._drained.is_set():
            raise ChannelClosed("channel is closed")
        item = self._queue.get(timeout=timeout)
        self._queue.task_done()
        if item is _CLOSED:
            self._drained.set()
            raise ChannelClosed("channel is closed")
        return item

    @property
    def closed(self) -> bool:
        return self._closing.is_set()

    @property
    def drained(self) -> bool:
        """True once the consumer has seen the end of the channel."""
        return self._drained.is_set()

    def pending_count(self) -> int:
        """Approximate number of queued messages."""
        count = self._queue.qsize()
        if self._closing.is_set() and not self._drained.is_set():
            count -= 1
        return max(count, 0)

    def __iter__(self) -> Iterator[Message]:
        while True:
            try:
                yield self.get()
            except ChannelClosed:
                return
