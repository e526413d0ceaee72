"""
JSONL-based append-only event log.

Handles reading, appending and clearing the workout event file.
"""

import json
import time
import uuid
from dataclasses import replace
from pathlib import Path

from ..core.models import Event, Location
from .serializers import ValidationError, dict_to_event, event_to_dict, event_to_json_line


class EventStore:
    """
    Manages the event log stored in JSONL format.

    The file contains one event record per line.  Lines are only ever
    appended; a correction is a new event at the same set position with a
    later timestamp.
    """

    def __init__(self, events_path: str | Path):
        """
        Initialize the event store.

        Args:
            events_path: Path to the JSONL event file
        """
        self.events_path = Path(events_path)

    def exists(self) -> bool:
        """Check if the event file exists."""
        return self.events_path.exists()

    def init(self) -> None:
        """
        Initialize empty event file if it doesn't exist.

        Creates parent directories if needed.
        """
        self.events_path.parent.mkdir(parents=True, exist_ok=True)

        if not self.events_path.exists():
            self.events_path.touch()

    def load_events(self) -> list[Event]:
        """
        Load all events from the log.

        Returns:
            List of Event sorted by timestamp (file order breaks ties)

        Raises:
            FileNotFoundError: If the event file doesn't exist
            ValidationError: If a line cannot be parsed
        """
        if not self.events_path.exists():
            raise FileNotFoundError(
                f"Event log not found: {self.events_path}. Run 'init' first."
            )

        events: list[Event] = []

        with open(self.events_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue

                try:
                    data = json.loads(line)
                    if not isinstance(data, dict):
                        raise ValidationError("record is not a JSON object")
                    events.append(dict_to_event(data))
                except (json.JSONDecodeError, ValidationError) as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {self.events_path}: {e}"
                    ) from e

        events.sort(key=lambda e: e.timestamp)

        return events

    def _next_timestamp(self) -> int:
        """Wall clock in ms, kept strictly after the newest stored event."""
        now = int(time.time() * 1000)
        events = self.load_events()
        if events and events[-1].timestamp >= now:
            return events[-1].timestamp + 1
        return now

    def append_event(self, event: Event) -> Event:
        """
        Append an event to the log.

        Events without an id get one assigned here.  The record is
        validated before it is written.

        Args:
            event: Event to store

        Returns:
            The event as written

        Raises:
            FileNotFoundError: If the event file doesn't exist
            ValidationError: If the event holds invalid values
        """
        if not self.events_path.exists():
            raise FileNotFoundError(
                f"Event log not found: {self.events_path}. Run 'init' first."
            )

        if event.id is None:
            event = replace(event, id=str(uuid.uuid4()))
        event = dict_to_event(event_to_dict(event))

        with open(self.events_path, "a", encoding="utf-8") as f:
            f.write(event_to_json_line(event) + "\n")

        return event

    def _new_event(self, event_type: str, location: Location, **fields) -> Event:
        return Event(
            type=event_type,
            mesocycle=location.mesocycle,
            microcycle=location.microcycle,
            workout=location.workout,
            timestamp=self._next_timestamp(),
            **fields,
        )

    def log_set(
        self,
        location: Location,
        weight: float,
        reps: int,
        prescribed_weight: float | None = None,
        prescribed_reps: int | None = None,
    ) -> Event:
        """Log a completed set at a slot."""
        return self.append_event(
            self._new_event(
                "set-completed",
                location,
                exercise=location.exercise,
                set_index=location.set_index,
                performed_weight=weight,
                performed_reps=reps,
                prescribed_weight=prescribed_weight,
                prescribed_reps=prescribed_reps,
            )
        )

    def skip_set(self, location: Location) -> Event:
        """Log a skipped set at a slot."""
        return self.append_event(
            self._new_event(
                "set-skipped",
                location,
                exercise=location.exercise,
                set_index=location.set_index,
            )
        )

    def log_soreness(self, location: Location, muscle_group: str, soreness: str) -> Event:
        """Log soreness for a muscle group (asked after the first set)."""
        return self.append_event(
            self._new_event(
                "soreness-reported",
                location,
                muscle_group=muscle_group,
                soreness=soreness,
            )
        )

    def log_session_rating(
        self,
        location: Location,
        muscle_group: str,
        pump: int,
        joint_pain: str,
        sets_workload: str,
    ) -> Event:
        """Log session feedback for a muscle group (after its last set)."""
        return self.append_event(
            self._new_event(
                "session-rated",
                location,
                muscle_group=muscle_group,
                pump=pump,
                joint_pain=joint_pain,
                sets_workload=sets_workload,
            )
        )

    def clear(self) -> None:
        """
        Clear the whole log (dangerous - use with caution).
        """
        if self.events_path.exists():
            self.events_path.write_text("")


def get_default_events_path() -> Path:
    """
    Get the default event log path.

    Returns:
        ~/.rp-progression/events.jsonl
    """
    return Path.home() / ".rp-progression" / "events.jsonl"
