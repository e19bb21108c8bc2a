"""
Satellite TLE API Backend Application
Flask application entry point with TLE cache service and API routes.
"""
import os
import atexit
import logging
from flask import Flask, jsonify
from flask_cors import CORS

from config import config

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def create_app(config_name=None, tle_service=None):
    """
    Application factory function.

    Args:
        config_name: Configuration name ('development', 'production', 'testing' or 'default')
        tle_service: Optional pre-built SatelliteDataService (tests inject one)

    Returns:
        Flask application instance
    """
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'default')

    app = Flask(__name__)
    app.config.from_object(config[config_name])
    logging.basicConfig(level=app.config['LOG_LEVEL'], format=LOG_FORMAT, datefmt=DATE_FORMAT)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Attach the TLE service; it owns the process-wide cache
    from services.tle_service import init_tle_service
    init_tle_service(app, tle_service)

    # Enable CORS
    CORS(app, resources={
        r"/api/*": {
            "origins": app.config['CORS_ORIGINS'],
            "send_wildcard": app.config['CORS_ORIGINS'] == '*',
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })

    # Register blueprints
    from routes.satellite_routes import satellite_bp

    app.register_blueprint(satellite_bp)

    # Health check endpoint
    @app.route('/api/health', methods=['GET'])
    def health_check():
        """Health check endpoint for monitoring."""
        return jsonify({
            'status': 'ok',
            'message': 'Satellite TLE API is running',
            'version': '1.0.0',
            'data_source': 'CelesTrak'
        })

    # API info endpoint
    @app.route('/api', methods=['GET'])
    def api_info():
        """API information and available endpoints."""
        from services.tle_service import get_tle_service
        return jsonify({
            'name': 'Satellite TLE API',
            'version': '1.0.0',
            'data_source': 'CelesTrak GP query API',
            'cache_ttl_seconds': app.config['TLE_CACHE_TTL'],
            'categories': get_tle_service(app).categories(),
            'endpoints': {
                'satellites': '/api/satellites',
                'satellites_by_category': '/api/satellites/<category>',
                'scheduler': '/api/scheduler/status',
                'health': '/api/health',
            }
        })

    # Scheduler status endpoint
    @app.route('/api/scheduler/status', methods=['GET'])
    def scheduler_status():
        """Get scheduler status and statistics."""
        from services.scheduler_service import get_scheduler_status
        return jsonify(get_scheduler_status())

    # Manual cache pre-warm trigger
    @app.route('/api/scheduler/trigger-update', methods=['POST'])
    def trigger_update():
        """Manually trigger a TLE cache pre-warm."""
        from services.scheduler_service import trigger_manual_update
        results = trigger_manual_update(app)
        body = {
            'status': 'success',
            'message': 'TLE update triggered'
        }
        if results is not None:
            body['results'] = results
        return jsonify(body)

    # Error handlers
    @app.errorhandler(404)
    def not_found(error):
        return jsonify({'error': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({'error': 'Internal server error'}), 500

    return app


# Create application instance
app = create_app()


def start_scheduler(app):
    """Start the background cache pre-warm when enabled."""
    if not app.config['TLE_PREWARM_ENABLED']:
        app.logger.info('[Scheduler] TLE pre-warm disabled')
        return

    from services.scheduler_service import initialize_scheduler, shutdown_scheduler

    initialize_scheduler(app)
    atexit.register(shutdown_scheduler)


if __name__ == '__main__':
    # Start background scheduler
    start_scheduler(app)

    port = int(os.environ.get('PORT', 6359))

    # Run the application
    app.logger.info('=' * 50)
    app.logger.info('Satellite TLE API Server')
    app.logger.info('=' * 50)
    app.logger.info(f'Server running at: http://localhost:{port}')
    app.logger.info(f'API documentation: http://localhost:{port}/api')
    app.logger.info('=' * 50)

    app.run(
        host='0.0.0.0',
        port=port,
        debug=False,
        use_reloader=False,
        threaded=True
    )
