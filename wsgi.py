"""
WSGI entry point.

WSGI hosts (gunicorn, PythonAnywhere, mod_wsgi) look for a variable named
'application' in this file.
"""

import os
import sys

# Add project directory to path
path = os.path.dirname(os.path.abspath(__file__))
if path not in sys.path:
    sys.path.insert(0, path)

from swellsplit import settings
from swellsplit.api.server import app

# WSGI hosts look for 'application'
application = app

# For local testing
if __name__ == '__main__':
    app.run(debug=settings.DEBUG, port=settings.PORT)
