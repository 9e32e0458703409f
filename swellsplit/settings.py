"""
Runtime settings, read from environment variables at import time.

Development defaults apply unless SWELLSPLIT_ENV=production (or the host sets
PYTHONANYWHERE_DOMAIN).
"""

import os

is_production = (
    os.environ.get('SWELLSPLIT_ENV') == 'production'
    or 'PYTHONANYWHERE_DOMAIN' in os.environ
)

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# NDBC realtime2 data
NDBC_BASE_URL = os.environ.get('NDBC_BASE_URL', 'https://www.ndbc.noaa.gov/data/realtime2')
REQUEST_TIMEOUT = float(os.environ.get('REQUEST_TIMEOUT', '10'))
USER_AGENT = os.environ.get('USER_AGENT', 'swellsplit/0.1')

# Logging configuration
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
LOGS_DIR = os.environ.get('LOGS_DIR', os.path.join(PROJECT_ROOT, 'logs'))
LOG_FILE = os.path.join(LOGS_DIR, 'app.log')
LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
LOG_BACKUP_COUNT = 5

# CORS settings
ALLOWED_ORIGINS = os.environ.get('ALLOWED_ORIGINS', '*').split(',')

# Flask configuration
DEBUG = not is_production
PORT = int(os.environ.get('PORT', '5002'))
