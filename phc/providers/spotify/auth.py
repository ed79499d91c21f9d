"""Spotify OAuth (authorization code + PKCE).

Opens the browser on the authorize URL, waits for the redirect on a local
HTTP server, exchanges the code for tokens and caches them in a JSON file.
Cached tokens are refreshed 60 seconds before they expire.
"""
from __future__ import annotations
import base64
import hashlib
import json
import logging
import os
import secrets
import ssl
import string
import threading
import time
import webbrowser
from http.server import HTTPServer, BaseHTTPRequestHandler
from urllib.parse import urlencode, urlparse, parse_qs
from typing import Dict, Any, Optional

import requests

from ..base import AuthProvider

logger = logging.getLogger(__name__)

AUTH_URL = "https://accounts.spotify.com/authorize"
TOKEN_URL = "https://accounts.spotify.com/api/token"

DEFAULT_SCOPE = " ".join([
    "user-read-private",
    "playlist-read-private",
    "playlist-read-collaborative",
    "app-remote-control",
    "user-read-playback-state",
    "user-modify-playback-state",
    "user-read-currently-playing",
    "user-read-playback-position",
])
DEFAULT_REDIRECT_PORT = 8888
DEFAULT_REDIRECT_PATH = "/callback"
DEFAULT_CACHE_FILE = ".tokens.json"


def _code_verifier(length: int = 64) -> str:
    alphabet = string.ascii_letters + string.digits + "-._~"
    return ''.join(secrets.choice(alphabet) for _ in range(length))


def _code_challenge(verifier: str) -> str:
    h = hashlib.sha256(verifier.encode()).digest()
    return base64.urlsafe_b64encode(h).decode().rstrip('=')


class OAuthServer(HTTPServer):
    def __init__(self, server_address, RequestHandlerClass):
        super().__init__(server_address, RequestHandlerClass)
        self.code: Optional[str] = None
        self.state: Optional[str] = None
        self.error: Optional[str] = None
        self.error_description: Optional[str] = None


class OAuthHandler(BaseHTTPRequestHandler):
    def do_GET(self):  # type: ignore[override]
        qs = parse_qs(urlparse(self.path).query)
        code = qs.get('code', [None])[0]
        error = qs.get('error', [None])[0]
        # Browsers also request /favicon.ico; only a request carrying a code counts
        if code is not None:
            self.server.code = code  # type: ignore[attr-defined]
            self.server.state = qs.get('state', [None])[0]  # type: ignore[attr-defined]
        if error is not None:
            self.server.error = error  # type: ignore[attr-defined]
            self.server.error_description = qs.get('error_description', [None])[0]  # type: ignore[attr-defined]
        logger.debug(f"Callback received path={self.path} code={'yes' if code else 'no'} error={error}")
        self.send_response(200)
        self.send_header('Content-Type', 'text/plain')
        self.end_headers()
        if error:
            self.wfile.write(b"Authorization failed. You may close this window.")
        else:
            self.wfile.write(b"You may close this window.")

    def log_message(self, format, *args):  # silence default logging
        return


class SpotifyAuthProvider(AuthProvider):
    def __init__(self, client_id: str, redirect_port: int = DEFAULT_REDIRECT_PORT, scope: str = DEFAULT_SCOPE, cache_file: str = DEFAULT_CACHE_FILE, redirect_path: str = DEFAULT_REDIRECT_PATH, redirect_scheme: str = "http", redirect_host: str = "127.0.0.1", cert_file: str | None = None, key_file: str | None = None, timeout_seconds: int = 300):
        self.client_id = client_id
        self.redirect_port = redirect_port
        self.scope = scope
        self.cache_file = cache_file
        self.redirect_scheme = redirect_scheme
        self.redirect_host = redirect_host
        if not redirect_path.startswith('/'):
            redirect_path = '/' + redirect_path
        self.redirect_path = redirect_path
        self.cert_file = cert_file
        self.key_file = key_file
        self.timeout_seconds = timeout_seconds

    # ---------------- Token Cache Helpers -----------------
    def _load_cache(self) -> Dict[str, Any]:
        if not os.path.exists(self.cache_file):
            return {}
        try:
            with open(self.cache_file, 'r', encoding='utf-8') as fh:
                data = json.load(fh)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable token cache {self.cache_file}: {e}")
            return {}
        logger.debug(f"Loaded token cache from {self.cache_file}")
        return data if isinstance(data, dict) else {}

    def _save_cache(self, data: Dict[str, Any]) -> None:
        try:
            with open(self.cache_file, 'w', encoding='utf-8') as fh:
                json.dump(data, fh)
        except OSError as e:
            logger.warning(f"Could not write token cache {self.cache_file}: {e}")
            return
        logger.debug(f"Saved token cache to {os.path.abspath(self.cache_file)}")

    def clear_cache(self) -> None:
        if os.path.exists(self.cache_file):
            os.remove(self.cache_file)

    def _needs_refresh(self, tok: Dict[str, Any]) -> bool:
        exp = tok.get('expires_at')
        if not exp:
            return True
        # refresh 60s early
        return time.time() + 60 >= exp

    def _refresh(self, tok: Dict[str, Any]) -> Dict[str, Any]:
        refresh_token = tok['refresh_token']
        data = {
            'grant_type': 'refresh_token',
            'refresh_token': refresh_token,
            'client_id': self.client_id,
        }
        resp = requests.post(TOKEN_URL, data=data, timeout=30)
        resp.raise_for_status()
        new_tok = resp.json()
        # keep old refresh if not returned
        if 'refresh_token' not in new_tok:
            new_tok['refresh_token'] = refresh_token
        new_tok['expires_at'] = time.time() + int(new_tok.get('expires_in', 3600))
        self._save_cache(new_tok)
        return new_tok

    def get_token(self, force: bool = False) -> Dict[str, Any]:
        cached = {} if force else self._load_cache()
        if cached and not self._needs_refresh(cached):
            return cached
        if cached.get('refresh_token'):
            try:
                return self._refresh(cached)
            except requests.RequestException as e:
                logger.info(f"Token refresh failed ({e}); starting full authorization")
        return self._auth_flow()

    # ---------------- Primary Auth Flow -----------------
    def _wrap_tls(self, server: OAuthServer) -> None:
        if not (self.cert_file and self.key_file and os.path.exists(self.cert_file) and os.path.exists(self.key_file)):
            raise RuntimeError(
                "HTTPS redirect selected but cert/key files are missing. "
                "Set PHC__PROVIDERS__SPOTIFY__REDIRECT_SCHEME=http or provide cert_file/key_file."
            )
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
        context.load_cert_chain(certfile=self.cert_file, keyfile=self.key_file)
        server.socket = context.wrap_socket(server.socket, server_side=True)

    def _auth_flow(self) -> Dict[str, Any]:
        verifier = _code_verifier()
        redirect_uri = self.build_redirect_uri()
        state = base64.urlsafe_b64encode(os.urandom(12)).decode().rstrip('=')
        server = OAuthServer((self.redirect_host, self.redirect_port), OAuthHandler)
        if self.redirect_scheme.lower() == 'https':
            self._wrap_tls(server)
        params = {
            "client_id": self.client_id,
            "response_type": "code",
            "redirect_uri": redirect_uri,
            "scope": self.scope,
            "code_challenge_method": "S256",
            "code_challenge": _code_challenge(verifier),
            "state": state,
        }
        url = f"{AUTH_URL}?{urlencode(params)}"
        logger.info(f"Login via {url}")
        webbrowser.open(url)
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        logger.debug(f"Local server started on port {self.redirect_port}, waiting for authorization code...")
        start = time.time()
        try:
            while server.code is None:
                if server.error:
                    raise RuntimeError(f"Spotify authorization error: {server.error} {server.error_description or ''}".strip())
                if time.time() - start > self.timeout_seconds:
                    raise TimeoutError("Authorization timeout expired.")
                time.sleep(0.05)
        finally:
            server.shutdown()
            server.server_close()
        if server.state != state:
            raise RuntimeError("Spotify authorization state mismatch")
        data = {
            "client_id": self.client_id,
            "grant_type": "authorization_code",
            "code": server.code,
            "redirect_uri": redirect_uri,
            "code_verifier": verifier,
        }
        resp = requests.post(TOKEN_URL, data=data, timeout=30)
        resp.raise_for_status()
        tok = resp.json()
        tok['expires_at'] = time.time() + int(tok.get('expires_in', 3600))
        self._save_cache(tok)
        logger.debug(f"Token acquired (expires_in={tok.get('expires_in')})")
        return tok

    def build_redirect_uri(self) -> str:
        return f"{self.redirect_scheme}://{self.redirect_host}:{self.redirect_port}{self.redirect_path}"


__all__ = ["SpotifyAuthProvider", "DEFAULT_SCOPE", "DEFAULT_REDIRECT_PORT", "DEFAULT_REDIRECT_PATH", "DEFAULT_CACHE_FILE"]
