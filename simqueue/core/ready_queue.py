"""FIFO holding area for processes waiting on the server."""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterator, Optional


@dataclass
class ReadyProcess:
    """A process that has arrived but not yet started service.

    Attributes:
        process_id: Process identifier
        service_time: Service duration drawn when the process arrived
        arrival_time: Simulation time of arrival
    """
    process_id: int
    service_time: float
    arrival_time: float = 0.0

    def __post_init__(self):
        if self.service_time < 0:
            raise ValueError("Service time cannot be negative")


class ReadyQueue:
    """First-in first-out queue of ready processes."""

    def __init__(self):
        self._queue: Deque[ReadyProcess] = deque()

    def push_back(self, process_id: int, service_time: float,
                  arrival_time: float = 0.0) -> ReadyProcess:
        """Append a process to the back of the queue.

        Args:
            process_id: Process identifier
            service_time: Precomputed service duration
            arrival_time: Simulation time of arrival

        Returns:
            The queued process
        """
        process = ReadyProcess(process_id, service_time, arrival_time)
        self._queue.append(process)
        return process

    def pop_front(self) -> ReadyProcess:
        """Remove and return the process at the front.

        Raises:
            IndexError: If queue is empty
        """
        if not self._queue:
            raise IndexError("Cannot pop from empty ready queue")
        return self._queue.popleft()

    def peek_front(self) -> Optional[ReadyProcess]:
        return self._queue[0] if self._queue else None

    def is_empty(self) -> bool:
        return not self._queue

    def clear(self) -> None:
        self._queue.clear()

    def __iter__(self) -> Iterator[ReadyProcess]:
        return iter(self._queue)

    def __len__(self) -> int:
        return len(self._queue)

    def __repr__(self) -> str:
        return f"ReadyQueue(size={len(self._queue)}, front={self.peek_front()})"
