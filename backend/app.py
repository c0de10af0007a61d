"""
Study Material Hub - Flask application entry point
"""
import logging
import signal
import sys

from flask import Flask
from flask_cors import CORS

from config import get_config
from models import db
from controllers import material_bp, category_bp, health_bp, spa_bp
from services.material_store import MaterialStore, EXTENSION_KEY

logger = logging.getLogger(__name__)


def _configure_logging(level_name: str):
    level = getattr(logging, level_name, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    logging.getLogger().setLevel(level)


def create_app(config_name: str = None, test_config: dict = None):
    """
    Application factory

    Args:
        config_name: 'development' | 'production' | 'testing' (defaults to FLASK_ENV)
        test_config: mapping applied over the selected config before extensions load
    """
    app = Flask(__name__)
    app.config.from_object(get_config(config_name))
    if test_config:
        app.config.update(test_config)

    _configure_logging(app.config['LOG_LEVEL'])

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}},
        supports_credentials=True,
    )

    db.init_app(app)

    # Storage client, injected into the endpoint layer
    app.extensions[EXTENSION_KEY] = MaterialStore.from_config(app.config)

    app.register_blueprint(health_bp)
    app.register_blueprint(material_bp)
    app.register_blueprint(category_bp)
    if app.config.get('SERVE_STATIC'):
        app.register_blueprint(spa_bp)

    logger.info("Created app (env=%s, database=%s)",
                app.config['ENV_NAME'], app.config['SQLALCHEMY_DATABASE_URI'].split('@')[-1])
    return app


def _install_shutdown_handlers(app, store):
    def _shutdown(signum, frame):
        logger.info("Received %s. Closing database connection...", signal.Signals(signum).name)
        with app.app_context():
            store.close()
        sys.exit(0)

    signal.signal(signal.SIGINT, _shutdown)
    signal.signal(signal.SIGTERM, _shutdown)


def main():
    app = create_app()
    store = app.extensions[EXTENSION_KEY]

    with app.app_context():
        try:
            if app.config['ENV_NAME'] != 'production':
                db.create_all()
            store.open()
        except Exception as e:
            logger.error(f"Cannot start server without database connection: {e}")
            sys.exit(1)

    _install_shutdown_handlers(app, store)

    logger.info("Server running on port %s", app.config['PORT'])
    app.run(host=app.config['HOST'], port=app.config['PORT'], debug=app.config['DEBUG'],
            use_reloader=False)


if __name__ == '__main__':
    main()
