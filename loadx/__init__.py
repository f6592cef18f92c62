from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask, jsonify


def create_app(test_config: dict | None = None) -> Flask:
    app = Flask(__name__, instance_relative_config=True)

    # Basis-Konfiguration
    app.config.from_mapping(
        SECRET_KEY="dev",
        SQLALCHEMY_DATABASE_URI="sqlite:///" + (Path(app.instance_path) / "loadx.db").as_posix(),
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        # Datums- und Zeitstempel der Einträge; der Verlaufsfilter vergleicht sie als Text
        LOADX_LOCALE_DATE_FORMAT="%d/%m/%Y",
        LOADX_LOCALE_TIME_FORMAT="%H:%M",
        LOADX_LOG_LEVEL="INFO",
        MAX_CONTENT_LENGTH=5 * 1024 * 1024,
    )

    if test_config is None:
        app.config.from_pyfile("config.py", silent=True)
    else:
        app.config.update(test_config)

    Path(app.instance_path).mkdir(parents=True, exist_ok=True)

    logging.getLogger("loadx").setLevel(app.config["LOADX_LOG_LEVEL"])
    app.logger.setLevel(app.config["LOADX_LOG_LEVEL"])

    from . import db
    db.init_app(app)

    from .errors import ValidationError

    @app.errorhandler(ValidationError)
    def handle_validation_error(error: ValidationError):
        return jsonify(error.to_dict()), error.status_code

    @app.get("/health")
    def health():
        _ = db.get_store()
        return {"status": "ok"}

    @app.get("/catalog")
    def catalog():
        from .catalog import MUSCLE_GROUPS, STYLE_TITLES, SUB_MODULES
        return {
            "styles": [
                {"key": key, "title": title, "subModules": list(SUB_MODULES[key])}
                for key, title in STYLE_TITLES.items()
            ],
            "muscleGroups": list(MUSCLE_GROUPS),
        }

    # Blueprints registrieren
    from .blueprints.auth import bp as auth_bp
    app.register_blueprint(auth_bp)

    from .blueprints.log import bp as log_bp
    app.register_blueprint(log_bp)

    from .blueprints.history import bp as history_bp
    app.register_blueprint(history_bp)

    from .blueprints.coach import bp as coach_bp
    app.register_blueprint(coach_bp)

    from .blueprints.guided import bp as guided_bp
    app.register_blueprint(guided_bp)

    from .blueprints.progress import progress_bp
    app.register_blueprint(progress_bp)

    return app
