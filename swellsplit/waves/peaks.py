"""
Hysteresis peak detection ("peakdet").

Scans a sequence once and reports alternating local maxima and minima. A
maximum is only confirmed once the signal has dropped more than delta below
it, and a minimum once the signal has risen more than delta above it, so
ripples smaller than delta never split a peak.

The scan is a two-state machine:

    SEEKING_MAX --(v < max - delta: emit max)--> SEEKING_MIN
    SEEKING_MIN --(v > min + delta: emit min)--> SEEKING_MAX

The trailing run after the last confirmed extremum is never reported.
"""

import enum
import math
from typing import List, Tuple

from attrs import define, field, frozen


class ScanMode(enum.Enum):
    SEEKING_MAX = 'seeking_max'
    SEEKING_MIN = 'seeking_min'


class ExtremumKind(enum.Enum):
    MAXIMUM = 'maximum'
    MINIMUM = 'minimum'


@frozen
class PeakSet:
    """Confirmed extrema of one scan as (index, value) pairs in index order."""

    maxima: Tuple[Tuple[int, float], ...] = field(converter=tuple, default=())
    minima: Tuple[Tuple[int, float], ...] = field(converter=tuple, default=())

    @property
    def max_indices(self) -> List[int]:
        return [i for i, _ in self.maxima]

    @property
    def min_indices(self) -> List[int]:
        return [i for i, _ in self.minima]

    def merged(self) -> List[Tuple[int, float, ExtremumKind]]:
        """All extrema in index order, tagged with their kind."""
        tagged = [(i, v, ExtremumKind.MAXIMUM) for i, v in self.maxima]
        tagged += [(i, v, ExtremumKind.MINIMUM) for i, v in self.minima]
        return sorted(tagged, key=lambda item: item[0])


@define
class PeakScan:
    """Running state of one peak detection pass."""

    delta: float
    mode: ScanMode = ScanMode.SEEKING_MAX
    max_value: float = -math.inf
    max_index: int = -1
    min_value: float = math.inf
    min_index: int = -1

    def step(self, index, value):
        """
        Feed one sample into the scan.

        Returns:
        --------
        extremum : tuple or None
            (ExtremumKind, index, value) when this sample confirms an
            extremum, None otherwise
        """
        if value > self.max_value:
            self.max_value = value
            self.max_index = index
        if value < self.min_value:
            self.min_value = value
            self.min_index = index

        if self.mode is ScanMode.SEEKING_MAX:
            if value < self.max_value - self.delta:
                confirmed = (ExtremumKind.MAXIMUM, self.max_index, self.max_value)
                self.min_value = value
                self.min_index = index
                self.mode = ScanMode.SEEKING_MIN
                return confirmed
        else:
            if value > self.min_value + self.delta:
                confirmed = (ExtremumKind.MINIMUM, self.min_index, self.min_value)
                self.max_value = value
                self.max_index = index
                self.mode = ScanMode.SEEKING_MAX
                return confirmed

        return None


def detect_peaks(values, delta):
    """
    Find alternating local maxima and minima separated by at least delta.

    Parameters:
    -----------
    values : sequence of float
        Signal to scan, e.g. spectral energy density by frequency bin
    delta : float
        Minimum rise/fall (same units as values) that confirms an extremum

    Returns:
    --------
    peaks : PeakSet
        Confirmed maxima and minima

    Raises:
    -------
    ValueError
        If delta is not a positive finite number
    """
    try:
        threshold = float(delta)
    except (TypeError, ValueError):
        raise ValueError(f"delta must be a positive number, got {delta!r}")
    if not math.isfinite(threshold) or threshold <= 0:
        raise ValueError(f"delta must be a positive number, got {delta!r}")

    scan = PeakScan(delta=threshold)
    maxima = []
    minima = []

    for index, value in enumerate(values):
        extremum = scan.step(index, float(value))
        if extremum is None:
            continue
        kind, position, level = extremum
        if kind is ExtremumKind.MAXIMUM:
            maxima.append((position, level))
        else:
            minima.append((position, level))

    return PeakSet(maxima=maxima, minima=minima)
