"""
Tokenizer for NDBC realtime2 spectral records.

Spectral density (.data_spec) line:

    YYYY MM DD hh mm  sep_freq  value (freq) value (freq) ...

Directional coefficient (.swdir, .swdir2, .swr1, .swr2) line:

    YYYY MM DD hh mm  value (freq) value (freq) ...

The whitespace between a value and its parenthesized frequency is optional.
Parsing never raises: a line that cannot be read returns a RecordError, and
a value that cannot be read only affects its own bin.
"""

import logging
import math
import re
from datetime import datetime, timezone
from typing import List, Optional, Tuple, Union

from attrs import frozen

from .. import config
from ..waves.spectra import DirectionalRecord, SpectralPoint, SpectralRecord

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = 5

# value token, optional whitespace, frequency inside parentheses
_PAIR_PATTERN = re.compile(r'([^\s()]+)\s*\(([^()]*)\)')


@frozen
class RecordError:
    """Structured reason why a raw line holds no usable record."""

    reason: str
    line: Optional[str]


def parse_number(token) -> Optional[float]:
    """
    Read one numeric token, None for missing markers or junk.

    NDBC marks missing values with 'MM' or with 999/9999 sentinels.
    """
    if token is None or token in config.MISSING_TOKENS:
        return None
    try:
        value = float(token)
    except (TypeError, ValueError):
        return None
    if math.isnan(value) or value in config.MISSING_SENTINELS:
        return None
    return value


def parse_timestamp(fields) -> Optional[datetime]:
    """UTC timestamp from the five leading YY(YY) MM DD hh mm fields."""
    if len(fields) < TIMESTAMP_FIELDS:
        return None
    try:
        year, month, day, hour, minute = (int(f) for f in fields[:TIMESTAMP_FIELDS])
    except ValueError:
        return None

    # Two-digit years in older archives
    if year < 50:
        year += 2000
    elif year < 100:
        year += 1900

    try:
        return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    except ValueError:
        return None


def tokenize_pairs(section) -> List[Tuple[Optional[float], float]]:
    """
    Split the data section of a record into (value, frequency) pairs.

    Pairs whose frequency is unreadable are dropped. Unreadable values are
    kept as None so callers can decide between skipping and keeping the slot.

    Parameters:
    -----------
    section : str
        Text following the leading fields, e.g. '0.12 (0.033) 0.5(0.038)'

    Returns:
    --------
    pairs : list of (value or None, frequency)
    """
    pairs = []
    for match in _PAIR_PATTERN.finditer(section):
        value_token, frequency_token = match.group(1), match.group(2).strip()
        frequency = parse_number(frequency_token)
        if frequency is None or frequency <= 0:
            logger.debug(f"Skipping bin with unreadable frequency '{frequency_token}'")
            continue
        value = parse_number(value_token)
        if value is None:
            logger.debug(f"Unreadable value '{value_token}' at {frequency} Hz")
        pairs.append((value, frequency))
    return pairs


def _split_line(line, leading):
    if line is None:
        return None, None
    fields = line.strip().split()
    if len(fields) < leading:
        return None, None
    # Re-join so tokens like '0.12 (0.033)' and '0.12(0.033)' read the same
    return fields[:leading], ' '.join(fields[leading:])


def parse_spectral_record(line) -> Union[SpectralRecord, RecordError]:
    """
    Parse one .data_spec line.

    Bins with an unreadable energy value are dropped from the points and
    listed in missing_frequencies. Bins whose frequency does not increase over
    the previous bin are dropped.

    Parameters:
    -----------
    line : str
        Raw data line (not a '#' header)

    Returns:
    --------
    record : SpectralRecord or RecordError
    """
    leading, section = _split_line(line, TIMESTAMP_FIELDS + 1)
    if leading is None:
        return RecordError('missing leading fields', line)

    timestamp = parse_timestamp(leading)
    if timestamp is None:
        return RecordError('invalid timestamp', line)

    separation_frequency = parse_number(leading[TIMESTAMP_FIELDS])

    points = []
    missing = []
    for energy, frequency in tokenize_pairs(section):
        if energy is None:
            missing.append(frequency)
            continue
        if points and frequency <= points[-1].frequency:
            logger.warning(f"Dropping out-of-order bin at {frequency} Hz")
            continue
        points.append(SpectralPoint(frequency=frequency, energy=energy))

    if not points:
        return RecordError('no value(frequency) tokens', line)

    return SpectralRecord(
        timestamp=timestamp,
        separation_frequency=separation_frequency,
        points=points,
        missing_frequencies=missing,
    )


def parse_directional_record(line) -> Union[DirectionalRecord, RecordError]:
    """
    Parse one directional coefficient line (alpha1, alpha2, r1 or r2).

    Unreadable values stay in place as NaN to keep the frequency grid aligned.

    Parameters:
    -----------
    line : str
        Raw data line (not a '#' header)

    Returns:
    --------
    record : DirectionalRecord or RecordError
    """
    leading, section = _split_line(line, TIMESTAMP_FIELDS)
    if leading is None:
        return RecordError('missing leading fields', line)

    timestamp = parse_timestamp(leading)
    if timestamp is None:
        return RecordError('invalid timestamp', line)

    pairs = tokenize_pairs(section)
    if not pairs:
        return RecordError('no value(frequency) tokens', line)

    values = [math.nan if value is None else value for value, _ in pairs]
    frequencies = [frequency for _, frequency in pairs]
    return DirectionalRecord(timestamp=timestamp, values=values, frequencies=frequencies)


def record_pairs(record):
    """
    (value, frequency) pairs of a parsed record, in frequency order.

    Unreadable spectral bins come back as (None, frequency) in their original
    slot so the series lines up with the directional files.
    """
    if isinstance(record, SpectralRecord):
        pairs = [(p.energy, p.frequency) for p in record.points]
        pairs += [(None, frequency) for frequency in record.missing_frequencies]
        return sorted(pairs, key=lambda pair: pair[1])
    return list(zip(record.values, record.frequencies))
