"""Event queue implementation for discrete event simulation."""

import heapq
from enum import Enum
from dataclasses import dataclass, field
from typing import Iterator, Optional


class EventType(Enum):
    """Types of events in the simulation."""
    ARRIVAL = "arrival"
    DEPARTURE = "departure"


@dataclass(order=True)
class Event:
    """Event in the discrete event simulation.

    Attributes:
        time: Event timestamp
        event_type: Type of event
        process_id: Process the event belongs to
        sequence: Insertion counter assigned by the queue, breaks ties
            between events with the same time
    """
    time: float
    event_type: EventType = field(compare=False)
    process_id: int = field(compare=False)
    sequence: int = field(default=0)

    def __post_init__(self):
        """Validate event after initialization."""
        if self.time < 0:
            raise ValueError("Event time cannot be negative")
        if self.process_id < 1:
            raise ValueError(f"Process id must be positive, got {self.process_id}")


class EventQueue:
    """Priority queue for managing simulation events.

    Events are ordered by time, with earlier events processed first.
    Events with the same time leave the queue in the order they were
    inserted.
    """

    def __init__(self):
        """Initialize empty event queue."""
        self._queue = []
        self._event_count = 0

    def insert(self, event_type: EventType, time: float, process_id: int) -> Event:
        """Create an event and add it to the queue.

        Args:
            event_type: Type of event
            time: Time at which the event fires
            process_id: Process the event belongs to

        Returns:
            The queued event
        """
        event = Event(time=time, event_type=event_type, process_id=process_id)
        self.push(event)
        return event

    def push(self, event: Event) -> None:
        """Add event to the queue.

        The event's sequence number is overwritten so that insertion
        order decides between equal times.

        Args:
            event: Event to add
        """
        event.sequence = self._event_count
        heapq.heappush(self._queue, event)
        self._event_count += 1

    def pop(self) -> Event:
        """Remove and return the next event.

        Returns:
            Next event to process

        Raises:
            IndexError: If queue is empty
        """
        if self.is_empty():
            raise IndexError("Cannot pop from empty event queue")
        return heapq.heappop(self._queue)

    def peek_next(self) -> Event:
        """Return the next event without removing it.

        Raises:
            IndexError: If queue is empty
        """
        if self.is_empty():
            raise IndexError("Cannot peek into empty event queue")
        return self._queue[0]

    def peek(self) -> Optional[Event]:
        """Return the next event, or None if queue is empty."""
        return self._queue[0] if self._queue else None

    def remove_next(self) -> Optional[Event]:
        """Remove the next event; does nothing on an empty queue.

        Returns:
            Removed event, or None if queue was empty
        """
        if self.is_empty():
            return None
        return heapq.heappop(self._queue)

    def is_empty(self) -> bool:
        """Check if queue is empty."""
        return len(self._queue) == 0

    def size(self) -> int:
        """Get number of events in queue."""
        return len(self._queue)

    def clear(self) -> None:
        """Remove all events from queue."""
        self._queue.clear()

    def dump(self) -> str:
        """Render pending events in dequeue order, one per line."""
        lines = [
            f"{event.process_id:>8}  {event.event_type.value:<10} {event.time:.6f}"
            for event in self
        ]
        return "\n".join(lines) if lines else "<empty>"

    def __iter__(self) -> Iterator[Event]:
        """Iterate over pending events in dequeue order without removing them."""
        return iter(sorted(self._queue))

    def __len__(self) -> int:
        """Get number of events in queue."""
        return len(self._queue)

    def __repr__(self) -> str:
        """String representation of event queue."""
        return f"EventQueue(size={len(self._queue)}, next={self.peek()})"
