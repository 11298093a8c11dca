"""Flask application factory."""
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException
from restock.database import init_db
import os


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.sort_keys = False

    # Sentry error tracking in production
    if app.config.get('SENTRY_DSN') and app.config.get('ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration

        sentry_sdk.init(
            dsn=app.config['SENTRY_DSN'],
            integrations=[FlaskIntegration()],
            traces_sample_rate=0.1,
            environment=app.config.get('ENV', 'production'),
            release=os.getenv('GIT_COMMIT', 'unknown')
        )

    # Receipt email (Flask-Mail)
    from restock.services.email_service import init_mail
    init_mail(app)

    # Downstream services
    from restock.services.catalog_client import init_catalog_client
    from restock.services.identity_client import init_identity_client
    init_catalog_client(app)
    init_identity_client(app)

    # Prometheus metrics instrumentation
    from restock.blueprints.metrics import setup_metrics_instrumentation
    setup_metrics_instrumentation(app)

    if app.config.get('ENV') == 'production':
        from werkzeug.middleware.proxy_fix import ProxyFix
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1, x_prefix=0)

    # Initialize database
    init_db(app)

    # Error Handlers
    from restock.exceptions import RestockError

    @app.errorhandler(RestockError)
    def handle_restock_error(error):
        """Handle custom application exceptions."""
        if error.status_code >= 500:
            app.logger.error(f"RestockError [{error.status_code}]: {error.message}")
        else:
            app.logger.warning(f"RestockError [{error.status_code}]: {error.message}")
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'status': 'error', 'kind': 'NotFound', 'message': 'Not Found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'status': 'error', 'kind': 'MethodNotAllowed', 'message': 'Method Not Allowed'}), 405

    @app.errorhandler(Exception)
    def internal_error(error):
        if isinstance(error, HTTPException):
            return jsonify({'status': 'error', 'message': error.description}), error.code

        import traceback
        app.logger.error(f"Unhandled Exception: {error}")
        app.logger.error(f"Traceback: {traceback.format_exc()}")
        return jsonify({'status': 'error', 'kind': 'Internal', 'message': 'Internal Server Error'}), 500

    # Register blueprints
    from restock.blueprints.main import main_bp
    from restock.blueprints.tables import tables_bp
    from restock.blueprints.orders import orders_bp
    from restock.blueprints.users import users_bp
    from restock.blueprints.sales import sales_bp
    from restock.blueprints.metrics import metrics_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(tables_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(users_bp)
    app.register_blueprint(sales_bp)
    app.register_blueprint(metrics_bp)

    # Register CLI commands
    from restock.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(f"CATALOG_SERVICE_URL={app.config.get('CATALOG_SERVICE_URL')}")
    app.logger.info(f"AUTH_SERVICE_URL={app.config.get('AUTH_SERVICE_URL')}")
    app.logger.info(f"MAIL_SERVER={app.config.get('MAIL_SERVER')}")

    return app
