"""
Swell train decomposition of a buoy spectrum.

Each swell train shows up as a hump of spectral energy. Peak detection with a
hysteresis threshold finds the humps (maxima) and the valleys between them
(minima); the spectrum is then cut at the valleys and each piece integrated
separately:

    segment k = [previous valley, next valley)
    m0_k      = sum over segment [ S(f_j) * df_j ]
    Hs_k      = 4 * sqrt(m0_k)
    T_k       = 1 / f_peak
    Dir_k     = direction at f_peak

The reported energy density uses the deep-water estimate

    E = (1/16) * rho * g * Hs^2   (J/m^2)

which is the linear-wave energy (1/8) rho g H^2 evaluated with the rms
height of a Rayleigh sea, H_rms^2 = Hs^2 / 2.

Components are ranked by the spectral density at their peak, so the
dominant swell comes first.
"""

import logging
import math
from typing import List, Optional

from attrs import frozen

from .. import config
from .peaks import detect_peaks
from .spectra import SpectralPoint, bandwidths, significant_wave_height
from .stats import compass_point

logger = logging.getLogger(__name__)


class SeriesMismatchError(ValueError):
    """Energy and direction series cannot be paired safely."""


@frozen
class SwellComponent:
    """One swell train extracted from the spectrum."""

    wave_height_m: float
    period_s: float
    direction_deg: Optional[float]
    peak_energy: float  # m^2/Hz at the peak bin
    peak_energy_joules_per_m2: float
    peak_frequency_index: int

    @property
    def height_ft(self) -> float:
        return self.wave_height_m * config.METERS_TO_FEET

    @property
    def compass_direction(self) -> Optional[str]:
        return compass_point(self.direction_deg)

    @property
    def wave_type(self) -> str:
        for threshold, label in config.WAVE_TYPE_THRESHOLDS:
            if self.period_s >= threshold:
                return label
        return config.WAVE_TYPE_DEFAULT

    def to_dict(self) -> dict:
        return {
            'wave_height_m': self.wave_height_m,
            'wave_height_ft': self.height_ft,
            'period_s': self.period_s,
            'direction_deg': self.direction_deg,
            'compass_direction': self.compass_direction,
            'peak_energy': self.peak_energy,
            'peak_energy_joules_per_m2': self.peak_energy_joules_per_m2,
            'peak_frequency_index': self.peak_frequency_index,
            'wave_type': self.wave_type,
        }


def energy_density(wave_height_m, rho=config.RHO_SEAWATER, g=config.G):
    """
    Wave energy per unit surface area from significant wave height.

        E = (1/16) * rho * g * Hs^2

    Parameters:
    -----------
    wave_height_m : float
        Significant wave height (m)
    rho : float
        Water density (kg/m^3), default 1025
    g : float
        Gravitational acceleration (m/s^2), default 9.81

    Returns:
    --------
    E : float
        Energy per unit area (J/m^2)
    """
    return (1.0 / 16.0) * rho * g * wave_height_m**2


def pair_directions(spectral_pairs, direction_pairs, strict=False):
    """
    Attach per-frequency directions to spectral energy.

    Bins are paired by index and must report the same frequency. Pairing stops
    at the first index whose frequencies differ, and only the overlapping
    prefix of the two series is kept. A spectral bin with no energy (None) is
    left out together with its direction slot and pairing continues.

    Parameters:
    -----------
    spectral_pairs : sequence of (energy or None, frequency)
        Spectral density record, unreadable bins included as None
    direction_pairs : sequence of (direction, frequency)
        Mean direction record (.swdir), same frequency bins
    strict : bool
        Raise instead of truncating when the series differ in length or in
        frequency

    Returns:
    --------
    points : list of SpectralPoint

    Raises:
    -------
    SeriesMismatchError
        In strict mode, if the series cannot be paired one to one
    """
    if strict and len(spectral_pairs) != len(direction_pairs):
        raise SeriesMismatchError(
            f"{len(spectral_pairs)} spectral bins but {len(direction_pairs)} direction bins"
        )

    points = []
    for j, ((energy, frequency), (direction, direction_frequency)) in enumerate(
            zip(spectral_pairs, direction_pairs)):
        if frequency != direction_frequency:
            if strict:
                raise SeriesMismatchError(
                    f"frequency mismatch at bin {j}: {frequency} vs {direction_frequency}"
                )
            logger.warning(
                f"Direction pairing stopped at bin {j}: "
                f"spectral frequency {frequency} != direction frequency {direction_frequency}"
            )
            break
        if energy is None:
            continue
        if direction is not None and math.isnan(direction):
            direction = None
        points.append(SpectralPoint(frequency=frequency, energy=energy, direction=direction))

    readable = sum(1 for energy, _ in spectral_pairs if energy is not None)
    if len(points) < readable:
        logger.debug(f"Paired {len(points)} of {readable} spectral bins with directions")

    return points


def extract_swell_components(points, delta=config.SWELL_PEAK_DELTA,
                             rho=config.RHO_SEAWATER, g=config.G):
    """
    Decompose a spectrum into swell trains.

    Parameters:
    -----------
    points : sequence of SpectralPoint
        Spectrum ordered by increasing frequency, directions optional
    delta : float
        Peak detection threshold (m^2/Hz), default 0.05
    rho : float
        Water density (kg/m^3) for the energy estimate
    g : float
        Gravitational acceleration (m/s^2) for the energy estimate

    Returns:
    --------
    components : list of SwellComponent
        One per detected energy peak, largest peak energy first

    Raises:
    -------
    ValueError
        If delta is not positive
    """
    points = list(points)
    if not points:
        return []

    energies = [p.energy for p in points]
    peaks = detect_peaks(energies, delta)
    df = bandwidths([p.frequency for p in points])

    minima = peaks.min_indices
    components = []
    start = 0

    for k, peak_index in enumerate(peaks.max_indices):
        end = minima[k] if k < len(minima) else len(points)

        m0 = sum(energies[j] * float(df[j]) for j in range(start, end))
        height = significant_wave_height(m0)
        peak = points[peak_index]

        components.append(SwellComponent(
            wave_height_m=height,
            period_s=peak.period,
            direction_deg=peak.direction,
            peak_energy=peak.energy,
            peak_energy_joules_per_m2=energy_density(height, rho=rho, g=g),
            peak_frequency_index=peak_index,
        ))
        start = end

    components.sort(key=lambda c: c.peak_energy, reverse=True)
    return components
