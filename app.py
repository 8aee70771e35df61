# app.py
# Main Flask application, built with the Application Factory pattern

import logging
import time

from sqlalchemy.engine import make_url
from flask import Flask, g, jsonify, request
from config import Config
from extensions import db, migrate
from errors import HackathonError
from scoring import UPSERT_BUILDERS

# Models are imported here so that Flask-Migrate (Alembic) can see them
from models import User, Hackathon, Judge, Participation, Score


def create_app(config_class=Config):
    app = Flask(__name__)
    app.config.from_object(config_class)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # Score submission needs an atomic upsert from the database backend
    backend = make_url(app.config['SQLALCHEMY_DATABASE_URI']).get_backend_name()
    if backend not in UPSERT_BUILDERS:
        raise RuntimeError(f'Unsupported database backend: {backend}')

    db.init_app(app)
    migrate.init_app(app, db)

    from routes.api import api_bp
    app.register_blueprint(api_bp)

    @app.errorhandler(HackathonError)
    def handle_hackathon_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.before_request
    def start_request_timer():
        g.request_start_time = time.perf_counter()

    @app.after_request
    def log_request_time(response):
        start_time = getattr(g, 'request_start_time', None)
        if start_time is not None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            app.logger.info("%s %s -> %d in %.2fms",
                            request.method, request.path, response.status_code, duration_ms)
        return response

    from seed_data import seed_command
    app.cli.add_command(seed_command)

    return app
