import logging
from enum import Enum
from typing import List, Optional, Tuple

from court_booking.errors import InsufficientConsecutiveSlots, SlotUnavailable
from court_booking.models import DayAvailability, Slot

logger = logging.getLogger(__name__)


class SelectionMode(str, Enum):
    CONTIGUOUS = "contiguous"
    FREE = "free"


class SlotSelectionModel:
    """Holds the chosen slots for the displayed day and enforces the selection rules.

    In FREE mode any available slot can be toggled independently. In CONTIGUOUS
    mode the caller picks a start time and the model selects ``duration`` consecutive
    available hours from there, or refuses.

    The selection is always kept sorted by start time and only ever contains slots
    that were available in the loaded DayAvailability.
    """

    def __init__(self, mode: SelectionMode = SelectionMode.FREE, duration: int = 1):
        self.mode = SelectionMode(mode)
        self._check_duration(duration)
        self.duration = duration
        self.day: Optional[DayAvailability] = None
        self._selected: List[Slot] = []

    @staticmethod
    def _check_duration(hours: int):
        if hours < 1:
            raise ValueError(f"Duration must be at least one hour, got {hours}")

    @property
    def selection(self) -> Tuple[Slot, ...]:
        return tuple(self._selected)

    @property
    def is_empty(self) -> bool:
        return not self._selected

    @property
    def start_time(self) -> Optional[str]:
        return self._selected[0].start_time if self._selected else None

    @property
    def end_time(self) -> Optional[str]:
        return self._selected[-1].end_time if self._selected else None

    @property
    def duration_hours(self) -> int:
        return len(self._selected)

    def load(self, day: Optional[DayAvailability]):
        """Replaces the day's availability. Any previous selection is dropped."""
        self.day = day
        self.clear()

    def clear(self):
        self._selected = []

    def _require_mode(self, mode: SelectionMode):
        if self.mode is not mode:
            raise ValueError(f"Operation requires {mode.value} mode, model is in {self.mode.value} mode")

    def _lookup(self, slot) -> Optional[Slot]:
        if self.day is None:
            return None
        if isinstance(slot, Slot):
            found = self.day.find(slot.start_time)
            return found if found is not None and found.key == slot.key else None
        return self.day.find(slot)

    # --- Free mode ---

    def toggle(self, slot) -> Tuple[Slot, ...]:
        """Adds or removes a slot, given as a Slot or its start time."""
        self._require_mode(SelectionMode.FREE)
        found = self._lookup(slot)
        if found is None or not found.is_available:
            label = found.label if found else (slot.label if isinstance(slot, Slot) else str(slot))
            logger.debug(f"Rejected toggle of unavailable slot {label}")
            raise SlotUnavailable(label)

        if found in self._selected:
            self._selected.remove(found)
        else:
            self._selected.append(found)
            self._selected.sort(key=lambda s: s.start_time)
        return self.selection

    # --- Contiguous mode ---

    def _consecutive_run(self, start_time: str, hours: int) -> Optional[List[Slot]]:
        if self.day is None:
            return None
        first = self.day.find(start_time)
        if first is None:
            return None
        slots = self.day.slots
        index = slots.index(first)

        run = slots[index:index + hours]
        if len(run) < hours:
            return None
        for previous, current in zip(run, run[1:]):
            if previous.end_time != current.start_time:
                return None
        if not all(s.is_available for s in run):
            return None
        return run

    def choose_start(self, start_time: str) -> Tuple[Slot, ...]:
        """Selects ``duration`` consecutive hours starting at start_time."""
        self._require_mode(SelectionMode.CONTIGUOUS)
        run = self._consecutive_run(start_time, self.duration)
        if run is None:
            self.clear()
            raise InsufficientConsecutiveSlots(start_time, self.duration)
        self._selected = list(run)
        return self.selection

    def set_duration(self, hours: int) -> Tuple[Slot, ...]:
        """Changes the run length, re-validating a start time that was already chosen."""
        self._check_duration(hours)
        self.duration = hours
        if self.mode is SelectionMode.CONTIGUOUS and self._selected:
            return self.choose_start(self._selected[0].start_time)
        return self.selection
