"""
Spectral record model and spectral moment helpers.

A buoy spectrum is a sequence of discrete frequency bins, each carrying the
spectral energy density S(f) in m^2/Hz and, once paired with the directional
files, a mean direction in degrees true (coming-from).

Moments are integrated bin by bin using the local bandwidth of each bin:

    m0 = sum over j [ S(f_j) * df_j ]
    m1 = sum over j [ f_j * S(f_j) * df_j ]

where df_j = |f_j - f_(j-1)|, and for the first bin df_0 = |f_1 - f_0|
(or 0 when the spectrum holds a single bin).

Significant wave height follows from the zeroth moment: Hs = 4 * sqrt(m0).
"""

import math
from datetime import datetime
from typing import Optional, Tuple

import numpy as np
from attrs import field, frozen


@frozen
class SpectralPoint:
    """One frequency bin of a buoy spectrum."""

    frequency: float  # Hz
    energy: float  # m^2/Hz
    direction: Optional[float] = None  # degrees true, coming-from

    @property
    def period(self) -> float:
        return 1.0 / self.frequency

    def to_dict(self) -> dict:
        return {
            'frequency': self.frequency,
            'period': self.period,
            'energy': self.energy,
            'direction': self.direction,
        }


@frozen
class SpectralRecord:
    """Latest spectral density record of a station (.data_spec line)."""

    timestamp: datetime
    separation_frequency: Optional[float]
    points: Tuple[SpectralPoint, ...] = field(converter=tuple)
    # bins whose energy could not be read, kept so pairing stays aligned
    missing_frequencies: Tuple[float, ...] = field(converter=tuple, default=())

    @property
    def frequencies(self) -> np.ndarray:
        return np.array([p.frequency for p in self.points], dtype=float)

    @property
    def energies(self) -> np.ndarray:
        return np.array([p.energy for p in self.points], dtype=float)

    def to_dict(self) -> dict:
        return {
            'timestamp': self.timestamp.isoformat(),
            'separation_frequency': self.separation_frequency,
            'points': [p.to_dict() for p in self.points],
            'missing_frequencies': list(self.missing_frequencies),
        }


@frozen
class DirectionalRecord:
    """Latest record of one directional coefficient file (alpha1, alpha2, r1 or r2).

    Slots whose value could not be read hold NaN so the record stays aligned
    with the fixed frequency grid.
    """

    timestamp: datetime
    values: Tuple[float, ...] = field(converter=tuple)
    frequencies: Tuple[float, ...] = field(converter=tuple)

    def __len__(self):
        return len(self.values)


def bandwidths(frequencies):
    """
    Compute the bandwidth df of every frequency bin.

    df_j = |f_j - f_(j-1)| for j > 0. The first bin borrows the spacing to
    its successor, or gets 0 when it is the only bin.

    Parameters:
    -----------
    frequencies : array-like
        Frequency array f (Hz), increasing

    Returns:
    --------
    df : ndarray
        Bandwidth of each bin (Hz), same length as frequencies
    """
    f = np.asarray(frequencies, dtype=float)
    if len(f) == 0:
        return np.zeros(0)
    if len(f) == 1:
        return np.zeros(1)

    df = np.abs(np.diff(f))
    return np.concatenate(([df[0]], df))


def zero_moment(frequencies, energies):
    """
    Zeroth spectral moment m0 = sum(S * df).

    Parameters:
    -----------
    frequencies : array-like
        Frequency array f (Hz)
    energies : array-like
        Spectral density S(f) (m^2/Hz)

    Returns:
    --------
    m0 : float
        Variance of the sea surface elevation (m^2)
    """
    S = np.asarray(energies, dtype=float)
    if len(S) == 0:
        return 0.0
    return float(np.sum(S * bandwidths(frequencies)))


def significant_wave_height(m0):
    """
    Compute significant wave height from spectral moment m0.

    For a Gaussian sea surface, Hs = 4 * sqrt(m0)

    Parameters:
    -----------
    m0 : float
        Zeroth spectral moment (variance)

    Returns:
    --------
    Hs : float
        Significant wave height (m)
    """
    if m0 <= 0:
        return 0.0
    return 4.0 * math.sqrt(m0)


def summarize_spectrum(record):
    """
    Bulk wave parameters of a whole spectral record.

    Parameters:
    -----------
    record : SpectralRecord
        Parsed spectral density record

    Returns:
    --------
    dict with keys:
        m0, m1 : float
            Zeroth and first spectral moments
        Hs : float
            Significant wave height (m)
        peak_frequency : float
            Frequency of maximum S(f) (Hz), 0 for an empty/flat spectrum
        Tp : float
            Peak period (s)
        Tm01 : float
            Mean period m0/m1 (s)
        separation_frequency : float or None
            Swell/wind-sea separation frequency reported by the buoy
        n_frequencies : int
            Number of frequency bins
    """
    f = record.frequencies
    S = record.energies

    m0 = zero_moment(f, S)
    m1 = float(np.sum(f * S * bandwidths(f))) if len(f) else 0.0

    if len(f) == 0 or np.all(S == 0):
        fp = 0.0
        Tp = 0.0
    else:
        fp = float(f[np.argmax(S)])
        Tp = 1.0 / fp

    Tm01 = m0 / m1 if m1 > 0 else 0.0

    return {
        'm0': m0,
        'm1': m1,
        'Hs': significant_wave_height(m0),
        'peak_frequency': fp,
        'Tp': Tp,
        'Tm01': Tm01,
        'separation_frequency': record.separation_frequency,
        'n_frequencies': len(f),
    }
