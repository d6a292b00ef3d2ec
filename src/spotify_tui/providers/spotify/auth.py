"""
Spotify OAuth 2.0 authorization and token storage.

Authorization uses the PKCE flow with a one-shot local callback server.
Tokens are kept as JSON in the data directory and refreshed shortly before
they expire.
"""

import base64
import hashlib
import json
import secrets
import threading
import webbrowser
from datetime import datetime, timedelta
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import parse_qs, urlencode, urlparse

import requests
from loguru import logger

from spotify_tui.core.config import SpotifyConfig, get_data_dir
from spotify_tui.core.output import log

from .exceptions import SpotifyAuthError

AUTHORIZE_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"

SPOTIFY_SCOPES = [
    "playlist-read-collaborative",
    "playlist-read-private",
    "playlist-modify-private",
    "playlist-modify-public",
    "user-follow-read",
    "user-follow-modify",
    "user-library-modify",
    "user-library-read",
    "user-modify-playback-state",
    "user-read-currently-playing",
    "user-read-playback-state",
    "user-read-playback-position",
    "user-read-private",
    "user-read-recently-played",
]

# Seconds to wait for the browser to hit the callback
CALLBACK_TIMEOUT = 120

# Refresh this long before the token actually expires
EXPIRY_BUFFER = timedelta(minutes=5)


def _generate_pkce() -> Dict[str, str]:
    """Generate a PKCE code verifier and its S256 challenge."""
    code_verifier = (
        base64.urlsafe_b64encode(secrets.token_bytes(32)).decode("utf-8").rstrip("=")
    )
    digest = hashlib.sha256(code_verifier.encode("utf-8")).digest()
    code_challenge = base64.urlsafe_b64encode(digest).decode("utf-8").rstrip("=")
    return {"code_verifier": code_verifier, "code_challenge": code_challenge}


def _basic_auth_header(config: SpotifyConfig) -> str:
    raw = f"{config.client_id}:{config.client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("utf-8")


def _with_expiry(token_data: Dict[str, Any]) -> Dict[str, Any]:
    expires_in = token_data.get("expires_in", 3600)
    token_data["expires_at"] = (datetime.now() + timedelta(seconds=expires_in)).isoformat()
    return token_data


def build_authorize_url(
    config: SpotifyConfig, code_challenge: str, csrf_state: str
) -> str:
    params = {
        "client_id": config.client_id,
        "response_type": "code",
        "redirect_uri": config.redirect_uri,
        "code_challenge_method": "S256",
        "code_challenge": code_challenge,
        "state": csrf_state,
        "scope": " ".join(SPOTIFY_SCOPES),
    }
    return f"{AUTHORIZE_URL}?{urlencode(params)}"


def parse_callback(url_or_path: str) -> Dict[str, Optional[str]]:
    """Pull code/state/error out of a redirect URL or request path."""
    params = parse_qs(urlparse(url_or_path).query)
    return {
        "code": params.get("code", [None])[0],
        "state": params.get("state", [None])[0],
        "error": params.get("error", [None])[0],
    }


def _wait_for_callback(redirect_uri: str, auth_url: str) -> Optional[Dict[str, Optional[str]]]:
    """Serve exactly one request on the redirect URI's port.

    Falls back to asking for the redirect URL on stdin when the port
    cannot be bound.
    """
    result: Dict[str, Optional[str]] = {}

    class CallbackHandler(BaseHTTPRequestHandler):
        def do_GET(self):
            result.update(parse_callback(self.path))
            self.send_response(200)
            self.send_header("Content-type", "text/html")
            self.end_headers()
            if result.get("code"):
                body = "<html><body><h1>spotify-tui is authorized</h1>You can close this window.</body></html>"
            else:
                body = f"<html><body><h1>Authorization failed</h1>{result.get('error') or 'Unknown error'}</body></html>"
            self.wfile.write(body.encode())

        def log_message(self, format, *args):
            pass  # Keep the terminal clean

    parsed = urlparse(redirect_uri)
    server = None
    try:
        server = HTTPServer((parsed.hostname or "127.0.0.1", parsed.port or 8888), CallbackHandler)
        server_thread = threading.Thread(
            target=server.handle_request, name="spotify-auth-callback", daemon=True
        )
        server_thread.start()

        if not webbrowser.open(auth_url):
            log("Could not open a browser. Open this URL to authorize:", level="warning")
            log(auth_url)
        log(f"Waiting for authorization ({CALLBACK_TIMEOUT} seconds)...")
        server_thread.join(timeout=CALLBACK_TIMEOUT)
    except OSError as e:
        logger.warning(f"Callback server error: {e}")
        log(f"Could not listen on {redirect_uri}. Open this URL to authorize:", level="warning")
        log(auth_url)
        try:
            pasted = input("Paste the URL you were redirected to: ").strip()
        except (EOFError, KeyboardInterrupt):
            return None
        if pasted:
            result.update(parse_callback(pasted))
    finally:
        if server:
            server.server_close()

    return result or None


def authenticate(config: SpotifyConfig) -> Dict[str, Any]:
    """Run the PKCE authorization flow and store the resulting tokens.

    Args:
        config: Spotify client configuration

    Returns:
        Token data including ``expires_at``

    Raises:
        SpotifyAuthError: Missing credentials, timeout, denial or a failed
            code exchange
    """
    if not config.client_id or not config.client_secret:
        raise SpotifyAuthError(
            "Spotify client_id/client_secret are not configured. Create an app at "
            "https://developer.spotify.com/dashboard, add the redirect URI "
            f"{config.redirect_uri}, and set them in config.toml or .env"
        )

    pkce = _generate_pkce()
    csrf_state = secrets.token_urlsafe(32)
    auth_url = build_authorize_url(config, pkce["code_challenge"], csrf_state)
    logger.debug(f"Authorization URL: {auth_url}")

    callback = _wait_for_callback(config.redirect_uri, auth_url)
    if callback is None:
        raise SpotifyAuthError("Authorization timed out, no response received")
    if callback.get("error"):
        raise SpotifyAuthError(f"Authorization error: {callback['error']}")
    if not callback.get("code"):
        raise SpotifyAuthError("No authorization code received")
    if callback.get("state") != csrf_state:
        logger.error(f"CSRF state mismatch: expected {csrf_state}, got {callback.get('state')}")
        raise SpotifyAuthError("Authorization state mismatch, please try again")

    try:
        response = requests.post(
            TOKEN_URL,
            data={
                "grant_type": "authorization_code",
                "code": callback["code"],
                "redirect_uri": config.redirect_uri,
                "code_verifier": pkce["code_verifier"],
            },
            headers={"Authorization": _basic_auth_header(config)},
            timeout=30,
        )
        response.raise_for_status()
    except requests.HTTPError as e:
        logger.exception("Token exchange HTTP error")
        raise SpotifyAuthError(
            f"Token exchange failed: {e.response.text if e.response is not None else e}",
            e.response.status_code if e.response is not None else None,
        ) from e
    except requests.RequestException as e:
        raise SpotifyAuthError(f"Token exchange failed: {e}") from e

    token_data = _with_expiry(response.json())
    save_user_tokens(token_data)
    logger.info(f"Spotify authorization successful, token expires {token_data['expires_at']}")
    return token_data


def _get_tokens_file() -> Path:
    tokens_dir = get_data_dir() / "spotify"
    tokens_dir.mkdir(parents=True, exist_ok=True)
    return tokens_dir / "user_tokens.json"


def load_user_tokens() -> Optional[Dict[str, Any]]:
    tokens_file = _get_tokens_file()
    if not tokens_file.exists():
        return None
    try:
        with open(tokens_file) as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Failed to load Spotify tokens from {tokens_file}: {e}")
        return None


def save_user_tokens(token_data: Dict[str, Any]) -> None:
    """Write tokens with owner-only permissions."""
    tokens_file = _get_tokens_file()
    with open(tokens_file, "w") as f:
        json.dump(token_data, f, indent=2)
    tokens_file.chmod(0o600)
    logger.debug(f"Saved Spotify tokens to {tokens_file}")


def is_token_expired(token_data: Dict[str, Any], now: Optional[datetime] = None) -> bool:
    """True if the token is expired or expires within five minutes."""
    if "expires_at" not in token_data:
        return True
    expires_at = datetime.fromisoformat(token_data["expires_at"])
    return (now or datetime.now()) >= expires_at - EXPIRY_BUFFER


def refresh_token(config: SpotifyConfig, token_data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Exchange the refresh token for a new access token.

    Returns:
        New token data, or None if the refresh failed
    """
    refresh_value = token_data.get("refresh_token")
    if not config.client_id or not config.client_secret or not refresh_value:
        logger.warning("Missing credentials or refresh token for Spotify token refresh")
        return None

    try:
        response = requests.post(
            TOKEN_URL,
            data={"grant_type": "refresh_token", "refresh_token": refresh_value},
            headers={"Authorization": _basic_auth_header(config)},
            timeout=30,
        )
        response.raise_for_status()
    except requests.RequestException as e:
        logger.warning(f"Failed to refresh Spotify token: {e}")
        return None

    new_token_data = _with_expiry(response.json())
    # Spotify may omit the refresh token when it is unchanged
    new_token_data.setdefault("refresh_token", refresh_value)
    save_user_tokens(new_token_data)
    logger.info(f"Spotify token refreshed, expires {new_token_data['expires_at']}")
    return new_token_data


def get_valid_token(config: SpotifyConfig) -> Dict[str, Any]:
    """Return usable token data, refreshing or re-authorizing as needed.

    Raises:
        SpotifyAuthError: When no token can be obtained
    """
    token_data = load_user_tokens()
    if token_data and not is_token_expired(token_data):
        return token_data
    if token_data:
        refreshed = refresh_token(config, token_data)
        if refreshed:
            return refreshed
        logger.info("Stored token could not be refreshed, authorizing again")
    return authenticate(config)
