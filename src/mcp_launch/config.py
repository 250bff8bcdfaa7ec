"""Parse the platform environment into a LaunchConfig."""

from collections.abc import Mapping
from dataclasses import dataclass

GSC_OAUTH_CLIENT_ID = "GSC_OAUTH_CLIENT_ID"
GSC_OAUTH_CLIENT_SECRET = "GSC_OAUTH_CLIENT_SECRET"
GSC_OAUTH_REFRESH_TOKEN = "GSC_OAUTH_REFRESH_TOKEN"
GSC_OAUTH_REDIRECT_URI = "GSC_OAUTH_REDIRECT_URI"

# Checked in order; the first non-empty one wins.
SERVICE_ACCOUNT_JSON_VARS = (
    "GSC_CREDENTIALS_JSON_STRING",
    "GOOGLE_APPLICATION_CREDENTIALS_STRING",
)

GOOGLE_APPLICATION_CREDENTIALS = "GOOGLE_APPLICATION_CREDENTIALS"
GOOGLE_PRIVATE_KEY = "GOOGLE_PRIVATE_KEY"
GOOGLE_PRIVATE_KEY_BASE64 = "GOOGLE_PRIVATE_KEY_BASE64"

DEFAULT_PORT = 8080


@dataclass(frozen=True)
class LaunchConfig:
    gsc_oauth_client_id: str | None = None
    gsc_oauth_client_secret: str | None = None
    gsc_oauth_refresh_token: str | None = None
    gsc_oauth_redirect_uri: str | None = None
    service_account_json: str | None = None
    private_key_base64: str | None = None
    port: int = DEFAULT_PORT

    @property
    def oauth_ready(self) -> bool:
        """True when the refresh token can be exchanged for access tokens."""
        return bool(
            self.gsc_oauth_client_id
            and self.gsc_oauth_client_secret
            and self.gsc_oauth_refresh_token
        )

    @classmethod
    def from_env(cls, env: Mapping[str, str]) -> "LaunchConfig":
        """Build a config from an environment mapping.

        Empty strings count as unset. An unparseable PORT falls back to the default.
        """
        return cls(
            gsc_oauth_client_id=_get(env, GSC_OAUTH_CLIENT_ID),
            gsc_oauth_client_secret=_get(env, GSC_OAUTH_CLIENT_SECRET),
            gsc_oauth_refresh_token=_get(env, GSC_OAUTH_REFRESH_TOKEN),
            gsc_oauth_redirect_uri=_get(env, GSC_OAUTH_REDIRECT_URI),
            service_account_json=_first(env, SERVICE_ACCOUNT_JSON_VARS),
            private_key_base64=_get(env, GOOGLE_PRIVATE_KEY_BASE64),
            port=_parse_port(_get(env, "PORT")),
        )


def _get(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(key)
    return value if value else None


def _first(env: Mapping[str, str], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = _get(env, key)
        if value is not None:
            return value
    return None


def _parse_port(raw: str | None) -> int:
    if raw is None:
        return DEFAULT_PORT
    try:
        return int(raw)
    except ValueError:
        return DEFAULT_PORT
