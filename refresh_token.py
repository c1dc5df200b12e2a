"""
One-time helper that obtains a Google refresh token for the revision job.

Opens the consent screen in a browser, catches the OAuth redirect on a
local Flask server and prints the refresh token to store as
GOOGLE_REFRESH_TOKEN.
"""

import logging
import os
import signal
import sys
import threading
import time
import webbrowser
from urllib.parse import urlparse

from flask import Flask, redirect, request
from google_auth_oauthlib.flow import Flow

from revision.calendar_client import SCOPES, TOKEN_URI
from revision.config import ConfigError, Settings

logger = logging.getLogger("refresh_token")

AUTH_URI = 'https://accounts.google.com/o/oauth2/auth'
DEFAULT_PORT = 3000


def build_flow(client_id: str, client_secret: str, redirect_uri: str) -> Flow:
    client_config = {
        'web': {
            'client_id': client_id,
            'client_secret': client_secret,
            'auth_uri': AUTH_URI,
            'token_uri': TOKEN_URI,
            'redirect_uris': [redirect_uri],
        }
    }
    return Flow.from_client_config(client_config, scopes=SCOPES, redirect_uri=redirect_uri)


def authorization_url(flow: Flow) -> str:
    url, _state = flow.authorization_url(
        access_type='offline',  # needed to get a refresh token
        prompt='consent select_account',  # forces consent so the refresh token is issued again
    )
    return url


def shutdown_server(delay: float = 2.0):
    """Stop the process once the callback response has been sent."""
    def _stop():
        time.sleep(delay)
        os.kill(os.getpid(), signal.SIGTERM)

    threading.Thread(target=_stop, daemon=True).start()


def create_app(flow: Flow, on_complete=shutdown_server) -> Flask:
    app = Flask(__name__)
    auth_url = authorization_url(flow)

    @app.route("/")
    def index():
        """Redirect the user to Google's consent screen."""
        return redirect(auth_url)

    @app.route("/oauth2callback")
    def oauth_callback():
        """Exchange the authorization code for tokens."""
        code = request.args.get("code")
        if not code:
            return "No code found in query", 400

        try:
            flow.fetch_token(code=code)
        except Exception as error:
            logger.error(f"❌ Error retrieving tokens: {error}")
            return "Error retrieving tokens", 500

        refresh = flow.credentials.refresh_token
        if not refresh:
            logger.warning("⚠️ Google did not return a refresh token. Revoke access and try again.")
        else:
            logger.info(f"✅ Refresh Token: {refresh}")

        on_complete()
        return (
            "<h3>Authorization complete!</h3>"
            "<p>Copy this refresh token for your automation:</p>"
            f"<pre>{refresh}</pre>"
        )

    return app


def open_browser(url: str, delay: float = 1.5):
    """Open the browser after a short delay so the server is listening."""
    def _open():
        time.sleep(delay)
        webbrowser.open(url)

    threading.Thread(target=_open, daemon=True).start()


def main() -> int:
    logging.basicConfig(level=logging.INFO, format='%(message)s', stream=sys.stdout)
    logging.getLogger('werkzeug').setLevel(logging.ERROR)

    settings = Settings.from_env()
    try:
        settings.require('google_client_id', 'google_client_secret', 'google_redirect_uri')
    except ConfigError as error:
        logger.error(f"❌ {error}")
        return 1

    flow = build_flow(settings.google_client_id, settings.google_client_secret,
                      settings.google_redirect_uri)
    app = create_app(flow)
    port = urlparse(settings.google_redirect_uri).port or DEFAULT_PORT

    logger.info("Opening browser for Google login...")
    open_browser(f"http://localhost:{port}/")
    logger.info(f"Server running on http://localhost:{port}")
    logger.info("Waiting for Google OAuth redirect...")
    app.run(port=port, debug=False, use_reloader=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())
