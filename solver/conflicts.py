"""Konflikt-Erkennung zwischen Wochenplänen.

Zwei Pläne kollidieren, sobald irgendein Termin des einen sich mit irgendeinem
Termin des anderen am selben Tag überschneidet (halboffen: 9-10 und 10-11
kollidieren nicht).
"""

from typing import Iterable, Sequence

from models.section import Section
from models.timeslot import TimeInterval


def conflicts(
    schedule_a: Sequence[TimeInterval], schedule_b: Sequence[TimeInterval]
) -> bool:
    """True wenn sich die beiden Pläne überschneiden. Symmetrisch."""
    for t1 in schedule_a:
        for t2 in schedule_b:
            if t1.overlaps(t2):
                return True
    return False


def conflicts_with_any(section: Section, chosen: Iterable[Section]) -> bool:
    """True wenn section mit irgendeiner bereits gewählten Section kollidiert."""
    return any(conflicts(section.schedule, other.schedule) for other in chosen)
