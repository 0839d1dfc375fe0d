from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy.engine import make_url
import logging

# Extensions live outside create_app so models and blueprints can import them
db = SQLAlchemy()
migrate = Migrate()

logger = logging.getLogger(__name__)

def create_app(config_object='config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.json.ensure_ascii = False

    logging.basicConfig(level=app.config.get('LOG_LEVEL', 'INFO'),
                        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    try:
        db.init_app(app)
        migrate.init_app(app, db)
    except Exception as e:
        logger.error(f"Error initialising extensions: {e}")
        raise

    # Blueprints
    from app.routes.home import bp as home_bp
    app.register_blueprint(home_bp)
    from app.routes.promotions import bp as promotions_bp
    app.register_blueprint(promotions_bp, url_prefix=app.config.get('PROMOTIONS_URL_PREFIX', '/api/promotions'))

    from app.commands import register_commands
    register_commands(app)

    @app.after_request
    def add_cors_headers(response):
        origins = app.config.get('CORS_ORIGINS')
        if origins:
            response.headers['Access-Control-Allow-Origin'] = origins
        return response

    # Models must be imported for create_all and migrations to see them
    with app.app_context():
        from app.models.promotions import Promotion  # noqa: F401

    db_url = make_url(app.config['SQLALCHEMY_DATABASE_URI']).render_as_string(hide_password=True)
    logger.info(f"Application created, database: {db_url}")
    return app
