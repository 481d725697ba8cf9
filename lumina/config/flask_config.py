from flask import Flask

from lumina.config.settings import settings


def configure_app(app: Flask) -> None:
    app.config["ENV"] = settings.environment
    app.config["DEBUG"] = settings.debug
    app.config["SECRET_KEY"] = settings.jwt_secret

    # chat bodies are small; anything bigger is refused with 413
    app.config["MAX_CONTENT_LENGTH"] = settings.max_request_bytes

    app.json.sort_keys = False
    app.json.ensure_ascii = False
    app.url_map.strict_slashes = False
