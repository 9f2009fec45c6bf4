# Creates the Flask app (App Factory)
from flask import Flask, jsonify, send_from_directory
from flask_cors import CORS
import os
import logging
from .config import Config

# Application Factory Function
def create_app(config_overrides=None):
    # Disable Flask's default static handler so we can serve the UI build under /static
    app = Flask(__name__, static_folder=None)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    # Extensions
    CORS(app, resources={r"/api/*": {"origins": "*"}})

    # Import and register the blueprint from routes.py
    from .routes import api as api_blueprint
    app.register_blueprint(api_blueprint, url_prefix='/api')

    from .cli import analyze_command
    app.cli.add_command(analyze_command)

    # Logging configuration (DEBUG level by default)
    level = getattr(logging, str(app.config['LOG_LEVEL']).upper(), logging.DEBUG)
    if not app.logger.handlers:
        logging.basicConfig(level=level,
                            format='%(asctime)s %(levelname)s %(name)s - %(message)s')
    app.logger.setLevel(level)
    app.logger.debug('Application created and configured')

    @app.errorhandler(413)
    def request_too_large(e):
        app.logger.warning('Upload rejected: request body too large')
        return jsonify({'message': 'File too large'}), 413

    # Serve frontend build if available
    build_dir = app.config['FRONTEND_BUILD_DIR']

    @app.route('/')
    @app.route('/<path:path>')
    def serve_frontend(path: str = None):
        # If requesting API, do nothing here (handled by blueprint)
        if path and path.startswith('api/'):
            app.logger.debug('Bypassing frontend route for API path')
            return jsonify({'message': 'Not Found'}), 404

        if build_dir and os.path.isdir(build_dir):
            # Serve static files if they exist
            if path and os.path.isfile(os.path.join(build_dir, path)):
                app.logger.debug(f'Serving static asset: {path}')
                return send_from_directory(build_dir, path)
            if os.path.exists(os.path.join(build_dir, 'index.html')):
                app.logger.debug('Serving frontend index.html')
                return send_from_directory(build_dir, 'index.html')

        app.logger.debug('Frontend build not found; returning backend info JSON')
        return jsonify({
            'message': 'Backend running',
            'api_base': '/api',
            'health': '/api/health',
            'frontend_hint': 'Build UI not found. Set FRONTEND_BUILD_DIR to a built frontend.'
        }), 200

    return app
