"""
API routes for categorized satellite TLE data.
"""
from flask import Blueprint, current_app, jsonify

from services.exceptions import InvalidCategoryError, UpstreamFetchError
from services.tle_service import get_tle_service
from utils.response_util import GENERIC_FETCH_ERROR, error_response, satellite_data_response

satellite_bp = Blueprint('satellites', __name__, url_prefix='/api/satellites')


@satellite_bp.route('', methods=['GET'])
def list_categories():
    """
    List satellite categories with their upstream feed and cache state.
    """
    service = get_tle_service()
    status = service.status()

    return jsonify({
        'categories': [
            {
                'category': category,
                'source': url,
                'cache': status.get(category, {'cached': False}),
            }
            for category, url in service.registry.items()
        ]
    })


@satellite_bp.route('/<category>', methods=['GET'])
def get_category_satellites(category):
    """
    Get TLE data for a satellite category.

    Served from the in-memory cache while fresh (24h by default),
    otherwise fetched from CelesTrak and cached.
    """
    current_app.logger.debug(f'Received category: {category}')

    try:
        result = get_tle_service().get_satellites(category)
    except InvalidCategoryError as e:
        return error_response(str(e), 400)
    except UpstreamFetchError as e:
        current_app.logger.error(f'Error fetching satellite data: {e}')
        return error_response(GENERIC_FETCH_ERROR, 500)
    except Exception:
        current_app.logger.exception('Unexpected error fetching satellite data')
        return error_response(GENERIC_FETCH_ERROR, 500)

    return satellite_data_response(result)
