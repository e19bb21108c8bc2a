"""
API route blueprints for the Satellite TLE API.
"""
from .satellite_routes import satellite_bp

__all__ = ['satellite_bp']
