"""Shared fixtures: synthetic NDBC realtime2 files and spectra."""
import numpy as np
import pytest
import requests

from swellsplit.waves.spectra import SpectralPoint

FREQUENCIES = [round(0.04 + 0.01 * i, 3) for i in range(27)]  # 0.04 .. 0.30 Hz
SWELL_PEAK_HZ = 0.07
WINDSEA_PEAK_HZ = 0.18


def two_hump_energies(frequencies=FREQUENCIES):
    """Groundswell hump at 0.07 Hz over a smaller wind-sea hump at 0.18 Hz."""
    f = np.asarray(frequencies)
    swell = 3.0 * np.exp(-((f - SWELL_PEAK_HZ) ** 2) / (2 * 0.012 ** 2))
    windsea = 1.0 * np.exp(-((f - WINDSEA_PEAK_HZ) ** 2) / (2 * 0.02 ** 2))
    return (swell + windsea).round(3)


def mean_directions(frequencies=FREQUENCIES):
    """Swell from the west, wind sea from the south-southwest."""
    return [270.0 if f < 0.12 else 200.0 for f in frequencies]


def format_pairs(values, frequencies, spaced=True):
    """value(freq) tokens; None values are written as NDBC's MM marker."""
    sep = ' ' if spaced else ''
    return ' '.join(
        f"{'MM' if v is None else format(v, '.3f')}{sep}({f:.3f})"
        for v, f in zip(values, frequencies)
    )


def data_spec_text(energies, frequencies=FREQUENCIES):
    return '\n'.join([
        '#YY  MM DD hh mm Sep_Freq  < spec_1 (freq_1) spec_2 (freq_2) spec_3 (freq_3) ... >',
        '2024 05 01 12 40 9.999 ' + format_pairs(energies, frequencies),
        '2024 05 01 11 40 9.999 ' + format_pairs(energies, frequencies),
    ])


def directional_text(values, frequencies=FREQUENCIES):
    return '\n'.join([
        '#YY  MM DD hh mm alpha1_1 (freq_1) alpha1_2 (freq_2) ... >',
        '2024 05 01 12 40 ' + format_pairs(values, frequencies),
    ])


@pytest.fixture
def two_hump_points():
    return [
        SpectralPoint(frequency=f, energy=float(e), direction=d)
        for f, e, d in zip(FREQUENCIES, two_hump_energies(), mean_directions())
    ]


@pytest.fixture
def station_files():
    """Texts of the five realtime2 files of a synthetic station, keyed by extension."""
    n = len(FREQUENCIES)
    return {
        'data_spec': data_spec_text(two_hump_energies()),
        'swdir': directional_text(mean_directions()),
        'swdir2': directional_text([90.0] * n),
        'swr1': directional_text([0.8] * n),
        'swr2': directional_text([0.6] * n),
    }


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for requests.Session, serving files by URL extension."""

    def __init__(self, files, status_code=200):
        self.files = files
        self.status_code = status_code
        self.requested = []
        self.closed = False

    def get(self, url, timeout=None, headers=None):
        self.requested.append(url)
        extension = url.rsplit('.', 1)[-1]
        return FakeResponse(self.files.get(extension, ''), self.status_code)

    def close(self):
        self.closed = True


@pytest.fixture
def fake_session(station_files):
    return FakeSession(station_files)
