"""
Analysis constants for buoy spectrum partitioning.

Period bands, peak-detection sensitivity and physical constants used by the
band aggregator and the swell component extractor. Every value here is a
default; the analysis functions accept overrides as parameters.
"""

# Period bands (seconds), longest period first.
# Each band is [low, high); the longest band is open-ended.
PERIOD_BANDS = (
    (22.0, float('inf')),
    (18.0, 22.0),
    (16.0, 18.0),
    (14.0, 16.0),
    (12.0, 14.0),
    (10.0, 12.0),
    (8.0, 10.0),
    (6.0, 8.0),
    (2.0, 6.0),
)

# Directional coefficient frequency grid (Hz)
# NDBC .swdir/.swdir2/.swr1/.swr2 files start at 0.025 Hz in 0.005 Hz steps
DIRECTIONAL_START_FREQUENCY = 0.025
DIRECTIONAL_FREQUENCY_STEP = 0.005

# Peak detector threshold (m^2/Hz) separating one swell hump from the next.
# Empirical; lower values split the spectrum into more components.
SWELL_PEAK_DELTA = 0.05

# Seawater density (kg/m^3)
RHO_SEAWATER = 1025.0

# Gravitational acceleration (m/s^2)
G = 9.81

# Unit conversion
METERS_TO_FEET = 3.28084

# 16-point compass rose, clockwise from north
COMPASS_POINTS = (
    'N', 'NNE', 'NE', 'ENE', 'E', 'ESE', 'SE', 'SSE',
    'S', 'SSW', 'SW', 'WSW', 'W', 'WNW', 'NW', 'NNW',
)
COMPASS_SECTOR_DEGREES = 360.0 / len(COMPASS_POINTS)

# Energy ranges for the directional rose (upper bounds, m^2/Hz)
ROSE_ENERGY_RANGES = (0.1, 0.5, 1.0, 2.0, 4.0, float('inf'))

# Wave type thresholds (period, seconds), longest first
WAVE_TYPE_THRESHOLDS = (
    (16.0, 'long_period_swell'),
    (12.0, 'swell'),
    (8.0, 'short_swell'),
)
WAVE_TYPE_DEFAULT = 'wind_waves'

# NDBC missing-value markers
MISSING_TOKENS = ('MM',)
MISSING_SENTINELS = (999.0, 9999.0)
