# lumina/wsgi.py
import eventlet

# must run before anything else imports socket/threading
eventlet.monkey_patch()

from lumina.config.settings import settings  # noqa: E402
from lumina.infrastructure.realtime.socketio_server import socketio  # noqa: E402
from lumina.main import create_app  # noqa: E402

app = create_app()

if __name__ == "__main__":
    # production runs gunicorn with the eventlet worker; this is for local runs
    socketio.run(app, host="0.0.0.0", port=5000, debug=settings.debug)
