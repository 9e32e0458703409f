"""
Flask API server for buoy swell partitioning.

Exposes endpoints:
- GET /health - Health check
- GET /stations/<station_id>/bands - Nine-band period summary
- GET /stations/<station_id>/swell - Ranked swell components
- GET /stations/<station_id>/rose - Directional energy rose

Data Source:
- Spectral wave data: NOAA NDBC realtime2 files
  Citation: NOAA National Data Buoy Center, https://www.ndbc.noaa.gov/
"""

import logging
import math
import os
from datetime import datetime
from logging.handlers import RotatingFileHandler

import numpy as np
import requests
from flask import Flask, jsonify, request

from .. import config, settings
from ..data_sources import ndbc
from ..data_sources.parser import record_pairs
from ..waves import bands, rose, spectra, swell

# Configure logging
if settings.is_production:
    # Production logging - log to file
    os.makedirs(settings.LOGS_DIR, exist_ok=True)

    file_handler = RotatingFileHandler(
        settings.LOG_FILE,
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT
    )
    file_handler.setLevel(settings.LOG_LEVEL)
    file_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))

    console_handler = logging.StreamHandler()
    console_handler.setLevel(settings.LOG_LEVEL)
    console_handler.setFormatter(logging.Formatter('%(asctime)s %(levelname)s %(name)s %(message)s'))

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        handlers=[file_handler, console_handler]
    )
else:
    # Development logging
    logging.basicConfig(level=settings.LOG_LEVEL)

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config['DEBUG'] = settings.DEBUG


class NoSpectralData(Exception):
    """The station returned no parseable spectral density record."""


@app.after_request
def after_request(response):
    allowed_origin = ','.join(settings.ALLOWED_ORIGINS) if settings.is_production else '*'
    response.headers.add('Access-Control-Allow-Origin', allowed_origin)
    response.headers.add('Access-Control-Allow-Headers', 'Content-Type,Authorization')
    response.headers.add('Access-Control-Allow-Methods', 'GET,OPTIONS')
    return response


def ensure_json_serializable(obj):
    """
    Recursively convert numpy types to Python native types for JSON serialization.

    Non-finite floats become None.
    """
    if isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, (float, np.floating)):
        value = float(obj)
        return value if math.isfinite(value) else None
    elif isinstance(obj, np.bool_):
        return bool(obj)
    elif isinstance(obj, np.ndarray):
        return ensure_json_serializable(obj.tolist())
    elif isinstance(obj, dict):
        return {key: ensure_json_serializable(value) for key, value in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [ensure_json_serializable(item) for item in obj]
    else:
        return obj


def paired_points(station_spectra):
    """
    Spectral points with the mean direction (alpha1) attached.

    Falls back to the bare spectrum when the direction file is unavailable.
    """
    spectral_record = station_spectra.spectral
    if spectral_record is None:
        return []

    alpha1 = station_spectra.directional.get('alpha1')
    if alpha1 is None:
        logger.warning(f"No direction record for station {station_spectra.station_id}")
        return list(spectral_record.points)

    return swell.pair_directions(record_pairs(spectral_record), record_pairs(alpha1))


def compute_band_summary(station_spectra):
    """
    Nine-band period summary of a station.

    Returns:
    --------
    dict with 'station_id', 'timestamps' and 'bands'
    """
    results = bands.aggregate_record_bands(station_spectra.spectral, station_spectra.directional)
    return {
        'station_id': station_spectra.station_id,
        'timestamps': station_spectra.timestamps,
        'bands': [band.to_dict() for band in results],
    }


def compute_swell_report(station_spectra, delta=config.SWELL_PEAK_DELTA):
    """
    Ranked swell components and bulk parameters of a station.

    Raises:
    -------
    NoSpectralData
        If the spectral density record is missing
    """
    if station_spectra.spectral is None:
        raise NoSpectralData(station_spectra.station_id)

    points = paired_points(station_spectra)
    components = swell.extract_swell_components(points, delta=delta)

    return {
        'station_id': station_spectra.station_id,
        'timestamps': station_spectra.timestamps,
        'delta': delta,
        'summary': spectra.summarize_spectrum(station_spectra.spectral),
        # bins the components were extracted from, fewer than n_frequencies
        # when the direction record is shorter or misaligned
        'paired_frequencies': len(points),
        'components': [component.to_dict() for component in components],
    }


def compute_rose(station_spectra):
    """Directional energy rose of a station."""
    if station_spectra.spectral is None:
        raise NoSpectralData(station_spectra.station_id)

    return {
        'station_id': station_spectra.station_id,
        'timestamps': station_spectra.timestamps,
        'rose': rose.directional_energy_rose(paired_points(station_spectra)).to_dict(),
    }


def _error(message, status, /, **extra):
    body = {'error': message, 'timestamp': datetime.now().isoformat()}
    body.update(extra)
    return jsonify(body), status


def _station_response(station_id, compute, **kwargs):
    try:
        station_spectra = ndbc.get_station_spectra(station_id)
    except requests.RequestException as e:
        logger.error(f"Failed to fetch NDBC data for station {station_id}: {e}")
        return _error('Upstream data unavailable', 502, station_id=station_id)

    try:
        payload = compute(station_spectra, **kwargs)
    except NoSpectralData:
        return _error('No spectral data', 404, station_id=station_id)

    payload['timestamp'] = datetime.now().isoformat()
    return jsonify(ensure_json_serializable(payload))


@app.route('/health', methods=['GET'])
def health():
    """Health check endpoint."""
    return jsonify({
        'status': 'ok',
        'timestamp': datetime.now().isoformat()
    })


@app.route('/stations/<station_id>/bands', methods=['GET'])
def get_bands(station_id):
    """Nine-band period summary endpoint."""
    logger.info(f"Computing band summary for station {station_id}...")
    return _station_response(station_id, compute_band_summary)


@app.route('/stations/<station_id>/swell', methods=['GET'])
def get_swell(station_id):
    """Swell component endpoint; optional ?delta= peak threshold."""
    delta_str = request.args.get('delta', str(config.SWELL_PEAK_DELTA))
    try:
        delta = float(delta_str)
        if not math.isfinite(delta) or delta <= 0:
            raise ValueError(delta_str)
    except ValueError:
        return _error('Invalid delta parameter', 400,
                      message='delta must be a positive number')

    logger.info(f"Computing swell components for station {station_id} (delta={delta})...")
    return _station_response(station_id, compute_swell_report, delta=delta)


@app.route('/stations/<station_id>/rose', methods=['GET'])
def get_rose(station_id):
    """Directional energy rose endpoint."""
    logger.info(f"Computing directional rose for station {station_id}...")
    return _station_response(station_id, compute_rose)


# Production error handlers
@app.errorhandler(404)
def not_found(error):
    """Handle 404 errors."""
    logger.warning(f"404 error: {request.url}")
    return _error('Not found', 404, message='The requested resource was not found.')


@app.errorhandler(500)
def internal_error(error):
    """Handle 500 errors."""
    logger.error(f"500 error: {error}", exc_info=True)
    if settings.is_production:
        # Don't expose error details in production
        return _error('Internal server error', 500,
                      message='An error occurred processing your request.')
    return _error(str(error), 500)


@app.errorhandler(Exception)
def handle_exception(e):
    """Handle all unhandled exceptions."""
    logger.error(f"Unhandled exception: {e}", exc_info=True)
    if settings.is_production:
        return _error('Internal server error', 500,
                      message='An unexpected error occurred.')
    return _error(str(e), 500)


if __name__ == '__main__':
    print(f"* API will be available at: http://localhost:{settings.PORT}")
    print(f"* Endpoints:")
    print(f"  - GET http://localhost:{settings.PORT}/stations/<station_id>/bands")
    print(f"  - GET http://localhost:{settings.PORT}/stations/<station_id>/swell")
    print(f"  - GET http://localhost:{settings.PORT}/stations/<station_id>/rose")
    print(f"  - GET http://localhost:{settings.PORT}/health")
    print("")

    # Development server only
    app.run(debug=settings.DEBUG, use_reloader=False, host='0.0.0.0', port=settings.PORT)
