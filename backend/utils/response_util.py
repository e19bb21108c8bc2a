"""
Utility functions for API responses.
"""
from flask import jsonify

GENERIC_FETCH_ERROR = 'Failed to fetch satellite data'


def error_response(message, status_code=400):
    """
    Create an error response.

    Args:
        message: Error message shown to the caller
        status_code: HTTP status code (default: 400)

    Returns:
        Flask response tuple
    """
    return jsonify({'error': message}), status_code


def satellite_data_response(result, status_code=200):
    """
    Create a satellite data response.

    Cache hits carry {data, cached, timestamp}; fresh fetches add count.

    Args:
        result: SatelliteDataResult from the TLE service
        status_code: HTTP status code (default: 200)

    Returns:
        Flask response tuple
    """
    return jsonify(result.to_dict()), status_code
