from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_mail import Mail
from flask_migrate import Migrate
import logging

from bloodlink.errors import BloodLinkError
from bloodlink.logging_config import setup_logging

# Initialize Flask extensions
db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
mail = Mail()
migrate = Migrate()

logger = logging.getLogger(__name__)


@login_manager.unauthorized_handler
def unauthorized():
    return jsonify({'message': 'Authentication required. Provide a valid bearer token.'}), 401


def create_app(config_class='bloodlink.config.Config'):
    app = Flask(__name__)
    app.config.from_object(config_class)

    setup_logging(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions with app
    db.init_app(app)
    bcrypt.init_app(app)
    login_manager.init_app(app)
    mail.init_app(app)
    migrate.init_app(app, db)

    @app.errorhandler(BloodLinkError)
    def handle_bloodlink_error(error):
        logger.warning(f"{type(error).__name__}: {error.message}")
        return jsonify({'message': error.message}), error.status_code

    # Register blueprints
    from bloodlink.routes.auth import auth
    from bloodlink.routes.donations import donations
    from bloodlink.routes.blood_requests import blood_requests
    from bloodlink.routes.appointments import appointments
    from bloodlink.routes.admin import admin

    app.register_blueprint(auth, url_prefix='/auth')
    app.register_blueprint(donations, url_prefix='/api/donations')
    app.register_blueprint(blood_requests, url_prefix='/api/requests')
    app.register_blueprint(appointments, url_prefix='/api/appointments')
    app.register_blueprint(admin, url_prefix='/api/admin')

    # Create database tables
    with app.app_context():
        db.create_all()

    return app
