"""
Nine-band period summary of a buoy spectrum.

Energy and direction are integrated independently:

- Energy: every spectral bin adds S(f) * df to the band containing its
  period 1/f, giving a per-band zeroth moment m0 and height Hs = 4 * sqrt(m0).
- Direction: every bin of the directional coefficient files (fixed grid
  starting at 0.025 Hz in 0.005 Hz steps) yields a mean direction from
  alpha1, alpha2, r1, r2; each band reports the arithmetic mean of the
  directions falling inside it.

The two integrations may cover a different number of bins because they come
from different files. A band without directional samples reports no
direction but still reports its height.
"""

import math
from typing import List, Optional

from attrs import define, frozen

from .. import config
from .spectra import bandwidths, significant_wave_height
from .stats import coefficient_direction


@define
class PeriodBand:
    """Accumulator for one period band during a single analysis run."""

    low_period: float
    high_period: float  # exclusive, may be inf
    accumulated_energy: float = 0.0
    direction_sum: float = 0.0
    direction_sample_count: int = 0

    def contains(self, period) -> bool:
        return self.low_period <= period < self.high_period

    @property
    def label(self) -> str:
        return f"{self.low_period:g}-{self.high_period:g}"

    def result(self) -> 'BandResult':
        height_m = significant_wave_height(self.accumulated_energy)
        mean_direction = None
        if self.direction_sample_count > 0:
            mean_direction = self.direction_sum / self.direction_sample_count

        return BandResult(
            period_range=self.label,
            low_period=self.low_period,
            high_period=self.high_period,
            energy=self.accumulated_energy,
            height_m=height_m,
            height_ft=height_m * config.METERS_TO_FEET,
            mean_direction=mean_direction,
            direction_samples=self.direction_sample_count,
        )


@frozen
class BandResult:
    """Final values of one period band."""

    period_range: str
    low_period: float
    high_period: float
    energy: float  # m^2
    height_m: float
    height_ft: float
    mean_direction: Optional[float]  # degrees, None without directional samples
    direction_samples: int

    def to_dict(self) -> dict:
        return {
            'period_range': self.period_range,
            'low_period_s': self.low_period,
            'high_period_s': None if math.isinf(self.high_period) else self.high_period,
            'energy': self.energy,
            'height_m': self.height_m,
            'height_ft': self.height_ft,
            'mean_direction': self.mean_direction,
            'direction_samples': self.direction_samples,
        }


def new_band_table(ranges=config.PERIOD_BANDS) -> List[PeriodBand]:
    """Fresh, zeroed accumulators for one analysis run."""
    return [PeriodBand(low_period=low, high_period=high) for low, high in ranges]


def find_band(bands, period) -> Optional[PeriodBand]:
    """Band whose [low, high) range holds period, None if outside every band."""
    for band in bands:
        if band.contains(period):
            return band
    return None


def accumulate_energy(bands, points):
    """
    Add S(f) * df of every spectral point to its period band.

    Parameters:
    -----------
    bands : list of PeriodBand
        Accumulators, modified in place
    points : sequence of SpectralPoint
        Spectrum ordered by increasing frequency
    """
    df = bandwidths([p.frequency for p in points])

    for point, width in zip(points, df):
        band = find_band(bands, point.period)
        if band is None:
            continue
        band.accumulated_energy += point.energy * float(width)


def accumulate_directions(bands, alpha1, alpha2, r1, r2,
                          start_frequency=config.DIRECTIONAL_START_FREQUENCY,
                          frequency_step=config.DIRECTIONAL_FREQUENCY_STEP):
    """
    Add the coefficient direction of every grid frequency to its period band.

    The grid is driven by alpha1; a slot that is missing from any of the other
    series, or NaN in any of them, is skipped.

    Parameters:
    -----------
    bands : list of PeriodBand
        Accumulators, modified in place
    alpha1, alpha2, r1, r2 : sequence of float
        Directional coefficient series on the fixed frequency grid
    start_frequency : float
        Frequency of the first grid slot (Hz)
    frequency_step : float
        Grid spacing (Hz)
    """
    for j in range(len(alpha1)):
        coefficients = [
            series[j] if j < len(series) else None
            for series in (alpha1, alpha2, r1, r2)
        ]
        direction = coefficient_direction(*coefficients)
        if direction is None:
            continue

        frequency = start_frequency + frequency_step * j
        band = find_band(bands, 1.0 / frequency)
        if band is None:
            continue
        band.direction_sum += direction
        band.direction_sample_count += 1


def aggregate_bands(points, alpha1=(), alpha2=(), r1=(), r2=(),
                    start_frequency=config.DIRECTIONAL_START_FREQUENCY,
                    frequency_step=config.DIRECTIONAL_FREQUENCY_STEP,
                    ranges=config.PERIOD_BANDS):
    """
    Summarize a spectrum into fixed period bands.

    Parameters:
    -----------
    points : sequence of SpectralPoint
        Spectral density record, increasing frequency
    alpha1, alpha2, r1, r2 : sequence of float
        Directional coefficient series (may be empty)
    start_frequency, frequency_step : float
        Frequency grid of the directional series (Hz)
    ranges : sequence of (low, high)
        Period band table, defaults to the nine standard bands

    Returns:
    --------
    results : list of BandResult
        One entry per band, longest periods first, always all bands
    """
    bands = new_band_table(ranges)
    accumulate_energy(bands, points)
    accumulate_directions(bands, alpha1, alpha2, r1, r2,
                          start_frequency=start_frequency,
                          frequency_step=frequency_step)
    return [band.result() for band in bands]


def aggregate_record_bands(spectral_record, directional_records):
    """
    Band summary from parsed records.

    Parameters:
    -----------
    spectral_record : SpectralRecord or None
        Spectral density record; None is treated as an empty spectrum
    directional_records : dict
        Maps 'alpha1', 'alpha2', 'r1', 'r2' to DirectionalRecord or None

    Returns:
    --------
    results : list of BandResult
    """
    points = spectral_record.points if spectral_record is not None else ()

    series = {}
    for name in ('alpha1', 'alpha2', 'r1', 'r2'):
        record = directional_records.get(name)
        series[name] = record.values if record is not None else ()

    return aggregate_bands(points, **series)
