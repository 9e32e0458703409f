"""
Directional energy rose: spectral energy binned by direction and energy level.
"""

import math
from typing import Tuple

import numpy as np
from attrs import field, frozen

from .. import config
from .stats import normalize_bearing


@frozen
class DirectionalRose:
    """Energy summed per (direction sector, energy range) cell."""

    sectors: Tuple[str, ...] = field(converter=tuple)
    energy_ranges: Tuple[float, ...] = field(converter=tuple)  # upper bounds, m^2/Hz
    energy: np.ndarray = field(eq=False)  # shape (n_sectors, n_ranges)

    @property
    def sector_totals(self) -> np.ndarray:
        return self.energy.sum(axis=1)

    def range_labels(self):
        labels = []
        lower = 0.0
        for upper in self.energy_ranges:
            if math.isinf(upper):
                labels.append(f"> {lower:g} m2/Hz")
            elif lower == 0.0:
                labels.append(f"< {upper:g} m2/Hz")
            else:
                labels.append(f"{lower:g}-{upper:g} m2/Hz")
            lower = upper
        return labels

    def to_dict(self) -> dict:
        return {
            'sectors': list(self.sectors),
            'energy_ranges': self.range_labels(),
            'energy': self.energy.tolist(),
            'sector_totals': self.sector_totals.tolist(),
        }


def direction_sector(degrees, n_sectors=len(config.COMPASS_POINTS)):
    """Index of the sector, centered on north, that holds a bearing."""
    width = 360.0 / n_sectors
    return int(((normalize_bearing(degrees) + width / 2.0) % 360.0) // width)


def energy_range_index(energy, ranges=config.ROSE_ENERGY_RANGES):
    """Index of the first energy range whose upper bound is >= energy, -1 if none."""
    for i, upper in enumerate(ranges):
        if energy <= upper:
            return i
    return -1


def directional_energy_rose(points, ranges=config.ROSE_ENERGY_RANGES):
    """
    Bin spectral energy by direction sector and energy level.

    Parameters:
    -----------
    points : sequence of SpectralPoint
        Spectrum with paired directions; points without direction are ignored
    ranges : sequence of float
        Upper bounds of the energy ranges (m^2/Hz), increasing

    Returns:
    --------
    rose : DirectionalRose
    """
    sectors = config.COMPASS_POINTS
    energy = np.zeros((len(sectors), len(ranges)))

    for point in points:
        if point.direction is None or math.isnan(point.direction):
            continue
        level = energy_range_index(point.energy, ranges)
        if level < 0:
            continue
        energy[direction_sector(point.direction, len(sectors)), level] += point.energy

    return DirectionalRose(sectors=sectors, energy_ranges=ranges, energy=energy)
