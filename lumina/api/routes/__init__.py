# lumina/api/routes/__init__.py

from flask import Flask

from lumina.api.routes.auth_routes import bp_auth
from lumina.api.routes.health_routes import bp_health
from lumina.api.routes.message_routes import bp_msg
from lumina.api.routes.notification_routes import bp_notif
from lumina.api.routes.user_routes import bp_users


def register_routes(app: Flask, *, api_prefix: str) -> None:
    app.register_blueprint(bp_health, url_prefix="/health")

    app.register_blueprint(bp_auth, url_prefix=f"{api_prefix}/auth")
    app.register_blueprint(bp_users, url_prefix=f"{api_prefix}/users")
    app.register_blueprint(bp_msg, url_prefix=f"{api_prefix}/messages")
    app.register_blueprint(bp_notif, url_prefix=f"{api_prefix}/notifications")
