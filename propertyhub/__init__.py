from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_jwt_extended import JWTManager
from flask_caching import Cache
from flask_cors import CORS
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_talisman import Talisman
from werkzeug.middleware.proxy_fix import ProxyFix

from propertyhub.config import get_config

db = SQLAlchemy()
migrate = Migrate()
jwt = JWTManager()
cache = Cache()
limiter = Limiter(key_func=get_remote_address)


def create_app(config_name=None):
    app = Flask(__name__)

    # Trust reverse proxy headers
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    config_class = get_config(config_name)
    app.config.from_object(config_class)
    app.logger.setLevel(app.config['LOG_LEVEL'])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    cache.init_app(app)
    limiter.init_app(app)

    from propertyhub.services.cache_service import ResultCache
    app.extensions['result_cache'] = ResultCache(cache, ttl=app.config['CACHE_DEFAULT_TIMEOUT'])

    CORS(app, resources={
        r"/api/*": {
            "origins": app.config['FRONTEND_URL'].split(','),
            "methods": ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
            "allow_headers": ["Content-Type", "Authorization"]
        }
    })

    # Security headers (only in production)
    if app.config.get('TALISMAN_ENABLED'):
        Talisman(app, force_https=True, content_security_policy=None)

    register_jwt_callbacks()

    # Register blueprints
    from propertyhub.api.auth import auth_bp
    from propertyhub.api.properties import properties_bp
    from propertyhub.api.favorites import favorites_bp
    from propertyhub.api.recommendations import recommendations_bp

    app.register_blueprint(auth_bp, url_prefix='/api/v1/auth')
    app.register_blueprint(properties_bp, url_prefix='/api/v1/properties')
    app.register_blueprint(favorites_bp, url_prefix='/api/v1/favorites')
    app.register_blueprint(recommendations_bp, url_prefix='/api/v1')

    # Error handlers
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({'message': 'Resource not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({'message': 'Method not allowed'}), 405

    @app.errorhandler(429)
    def ratelimit_handler(e):
        return jsonify({'message': 'Rate limit exceeded. Please try again later.'}), 429

    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        return jsonify({'message': 'Internal server error'}), 500

    # Health check endpoint
    @app.route('/health')
    def health_check():
        return {'status': 'healthy', 'service': 'propertyhub-api'}, 200

    # Create tables
    with app.app_context():
        from propertyhub import models  # noqa: F401
        db.create_all()

    return app


def register_jwt_callbacks():
    """Return 401 with a message body for every token failure"""

    @jwt.unauthorized_loader
    def missing_token(reason):
        return jsonify({'message': 'No token provided'}), 401

    @jwt.invalid_token_loader
    def invalid_token(reason):
        return jsonify({'message': 'Invalid token'}), 401

    @jwt.expired_token_loader
    def expired_token(jwt_header, jwt_payload):
        return jsonify({'message': 'Token has expired'}), 401
