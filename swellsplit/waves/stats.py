"""
Directional helper functions for wave analysis.
"""

import math

from .. import config


def normalize_bearing(degrees):
    """
    Normalize a compass bearing to the [0, 360) range.

    Parameters:
    -----------
    degrees : float
        Bearing in degrees, any sign or magnitude

    Returns:
    --------
    normalized : float
        Bearing in [0, 360)
    """
    normalized = math.fmod(degrees, 360.0)
    if normalized < 0:
        normalized += 360.0
    # fmod of tiny negatives can round up to exactly 360
    if normalized >= 360.0:
        normalized = 0.0
    return normalized


def compass_point(degrees):
    """
    Label a bearing with one of the 16 compass points.

    Sectors are 22.5 degrees wide and centered on N, NNE, NE, ...; a bearing
    on a sector edge rounds up to the next point clockwise.

    Parameters:
    -----------
    degrees : float or None
        Bearing in degrees true

    Returns:
    --------
    label : str or None
        Compass point ('N', 'NNE', ...) or None when degrees is None/NaN
    """
    if degrees is None or math.isnan(degrees):
        return None

    sector = math.floor(((degrees + 360.0) % 360.0) / config.COMPASS_SECTOR_DEGREES + 0.5)
    return config.COMPASS_POINTS[int(sector) % len(config.COMPASS_POINTS)]


def coefficient_direction(alpha1, alpha2, r1, r2):
    """
    Mean direction of one frequency bin from its directional Fourier coefficients.

        direction = (atan2(alpha2 * r1, alpha1 * r2) * 180/pi + 180) mod 360

    Parameters:
    -----------
    alpha1, alpha2 : float
        Mean and principal wave directions reported by the buoy (degrees)
    r1, r2 : float
        First and second normalized directional coefficients

    Returns:
    --------
    direction : float or None
        Direction in [0, 360), None if any coefficient is missing/NaN
    """
    for value in (alpha1, alpha2, r1, r2):
        if value is None or math.isnan(value):
            return None

    direction = math.degrees(math.atan2(alpha2 * r1, alpha1 * r2)) + 180.0
    return direction % 360.0
