"""Bounded queues for the producer/consumer model."""

import threading
from collections import deque
from typing import Any

MAX_QUE = 10
MAX_THREAD = 4


class BlockQueue:
    """A bounded FIFO guarded by a lock and two condition variables.

    push blocks while the queue is full; pop blocks while it is empty.
    """

    def __init__(self, capacity: int = MAX_QUE):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._items: deque = deque()
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)

    def push(self, item: Any) -> None:
        """Add item at the tail, waiting for room if needed."""
        with self._not_full:
            while len(self._items) >= self.capacity:
                self._not_full.wait()
            self._items.append(item)
            self._not_empty.notify()

    def pop(self) -> Any:
        """Remove and return the head item, waiting for one if needed."""
        with self._not_empty:
            while not self._items:
                self._not_empty.wait()
            item = self._items.popleft()
            self._not_full.notify()
            return item

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class RingQueue:
    """A fixed ring buffer coordinated by counting semaphores.

    One semaphore counts free slots, one counts filled slots and a binary
    one protects the read and write positions.
    """

    def __init__(self, capacity: int = MAX_QUE):
        if capacity < 1:
            raise ValueError("capacity must be at least 1")
        self.capacity = capacity
        self._slots: list[Any] = [None] * capacity
        self._read_step = 0
        self._write_step = 0
        self._count = 0
        self._lock = threading.Semaphore(1)
        self._data_space = threading.Semaphore(0)
        self._idle_space = threading.Semaphore(capacity)

    def push(self, item: Any) -> None:
        """Write item into the next free slot, waiting for one if needed."""
        self._idle_space.acquire()
        with self._lock:
            self._slots[self._write_step] = item
            self._write_step = (self._write_step + 1) % self.capacity
            self._count += 1
        self._data_space.release()

    def pop(self) -> Any:
        """Take the oldest item, waiting for one if needed."""
        self._data_space.acquire()
        with self._lock:
            item = self._slots[self._read_step]
            self._slots[self._read_step] = None
            self._read_step = (self._read_step + 1) % self.capacity
            self._count -= 1
        self._idle_space.release()
        return item

    def __len__(self) -> int:
        with self._lock:
            return self._count


def run_producers_consumers(
    queue,
    producers: int = MAX_THREAD,
    consumers: int = MAX_THREAD,
    items_per_producer: int = 100,
) -> list:
    """Run producer and consumer threads over queue and return what was consumed.

    Each producer pushes 0, 1, ... items_per_producer - 1. The consumers
    share the total between them, so every pushed item is popped exactly
    once. Items come back in the order they were consumed.
    """
    if producers < 1 or consumers < 1:
        raise ValueError("at least one producer and one consumer are needed")
    if items_per_producer < 0:
        raise ValueError("items_per_producer must not be negative")

    consumed: list = []
    record_lock = threading.Lock()

    def produce() -> None:
        for item in range(items_per_producer):
            queue.push(item)

    def consume(count: int) -> None:
        for _ in range(count):
            item = queue.pop()
            with record_lock:
                consumed.append(item)

    share, extra = divmod(producers * items_per_producer, consumers)
    threads = [
        threading.Thread(target=consume, args=(share + (k < extra),))
        for k in range(consumers)
    ]
    threads += [threading.Thread(target=produce) for _ in range(producers)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return consumed