"""
NOAA/NDBC realtime spectral wave data.

Fetches the five files needed for spectral partitioning of one station:

- {station}.data_spec : spectral energy density S(f) (m^2/Hz)
- {station}.swdir     : alpha1, mean wave direction per frequency (degrees)
- {station}.swdir2    : alpha2, principal wave direction per frequency (degrees)
- {station}.swr1      : r1, first normalized directional coefficient
- {station}.swr2      : r2, second normalized directional coefficient

Data Source: NOAA NDBC (National Data Buoy Center)
- Files: https://www.ndbc.noaa.gov/data/realtime2/
- Format: https://www.ndbc.noaa.gov/faq/measdes.shtml
- License: Public domain (U.S. Government)

Each file lists records newest first; only the most recent data line is used.
"""

import logging
from typing import Dict, Optional

import requests
from attrs import define, field

from .. import settings
from ..waves.spectra import DirectionalRecord, SpectralRecord
from .parser import RecordError, parse_directional_record, parse_spectral_record

logger = logging.getLogger(__name__)

# Record kind -> realtime2 file extension
NDBC_FILES = {
    'data_spec': 'data_spec',
    'alpha1': 'swdir',
    'alpha2': 'swdir2',
    'r1': 'swr1',
    'r2': 'swr2',
}

DIRECTIONAL_KINDS = ('alpha1', 'alpha2', 'r1', 'r2')


@define
class StationSpectra:
    """Latest spectral and directional records of one station."""

    station_id: str
    spectral: Optional[SpectralRecord] = None
    directional: Dict[str, Optional[DirectionalRecord]] = field(factory=dict)

    @property
    def timestamps(self) -> Dict[str, Optional[str]]:
        """ISO timestamp of the record used from each file."""
        stamps = {'data_spec': self.spectral.timestamp.isoformat() if self.spectral is not None else None}
        for kind in DIRECTIONAL_KINDS:
            record = self.directional.get(kind)
            stamps[kind] = record.timestamp.isoformat() if record is not None else None
        return stamps


def latest_data_line(text):
    """
    Most recent data line of a realtime2 file.

    Parameters:
    -----------
    text : str
        Whole file content; header lines start with '#'

    Returns:
    --------
    line : str or None
        First non-blank, non-header line, None if the file holds no data
    """
    if not text:
        return None
    for line in text.splitlines():
        stripped = line.strip()
        if stripped and not stripped.startswith('#'):
            return stripped
    return None


def fetch_raw_file(station_id, extension, session=None):
    """
    Download one realtime2 file.

    Parameters:
    -----------
    station_id : str
        NDBC station ID, e.g. '46232'
    extension : str
        File extension, e.g. 'data_spec' or 'swdir'
    session : requests.Session, optional
        Session to reuse across the files of one station

    Returns:
    --------
    text : str
        File content

    Raises:
    -------
    requests.RequestException
        On network failure or a non-2xx response
    """
    url = f"{settings.NDBC_BASE_URL}/{station_id}.{extension}"
    client = session or requests
    response = client.get(
        url,
        timeout=settings.REQUEST_TIMEOUT,
        headers={'User-Agent': settings.USER_AGENT},
    )
    response.raise_for_status()
    logger.info(f"Fetched {extension} for NDBC station {station_id}")
    return response.text


def _parse_latest(text, parse, station_id, kind):
    line = latest_data_line(text)
    result = parse(line)
    if isinstance(result, RecordError):
        logger.warning(f"No usable {kind} record for station {station_id}: {result.reason}")
        return None
    return result


def get_spectral_record(station_id, session=None):
    """
    Latest spectral density record of a station.

    Returns:
    --------
    record : SpectralRecord or None
        None when the file holds no parseable data line
    """
    text = fetch_raw_file(station_id, NDBC_FILES['data_spec'], session=session)
    return _parse_latest(text, parse_spectral_record, station_id, 'data_spec')


def get_directional_record(station_id, kind, session=None):
    """
    Latest directional coefficient record of a station.

    Parameters:
    -----------
    station_id : str
        NDBC station ID
    kind : str
        One of 'alpha1', 'alpha2', 'r1', 'r2'

    Returns:
    --------
    record : DirectionalRecord or None
    """
    if kind not in DIRECTIONAL_KINDS:
        raise ValueError(f"Unknown directional record kind: {kind}")
    text = fetch_raw_file(station_id, NDBC_FILES[kind], session=session)
    return _parse_latest(text, parse_directional_record, station_id, kind)


def get_station_spectra(station_id, session=None):
    """
    Fetch and parse all five spectral files of a station.

    Parameters:
    -----------
    station_id : str
        NDBC station ID
    session : requests.Session, optional
        Session to reuse; a new one is opened and closed otherwise

    Returns:
    --------
    spectra : StationSpectra
        Records that could not be parsed are None
    """
    own_session = session is None
    if own_session:
        session = requests.Session()

    try:
        spectra = StationSpectra(
            station_id=station_id,
            spectral=get_spectral_record(station_id, session=session),
        )
        for kind in DIRECTIONAL_KINDS:
            spectra.directional[kind] = get_directional_record(station_id, kind, session=session)
    finally:
        if own_session:
            session.close()

    return spectra
