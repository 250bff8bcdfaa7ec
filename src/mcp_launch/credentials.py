"""Credential preparation: pick the Search Console strategy, decode the GA key."""

import base64
import binascii
import os
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass, field

from mcp_launch import log
from mcp_launch.config import (
    GOOGLE_APPLICATION_CREDENTIALS,
    GOOGLE_PRIVATE_KEY,
    GOOGLE_PRIVATE_KEY_BASE64,
    LaunchConfig,
)

KEY_FILE_NAME = "gsc-sa-key.json"


@dataclass(frozen=True)
class OAuth:
    """Refresh-token access. No key file is written."""


@dataclass(frozen=True)
class ServiceAccount:
    path: str


@dataclass(frozen=True)
class NoCredentials:
    """Search Console left unauthenticated."""


CredentialStrategy = OAuth | ServiceAccount | NoCredentials


@dataclass(frozen=True)
class Resolution:
    strategy: CredentialStrategy
    env: dict[str, str]
    warnings: list[str] = field(default_factory=list)


def key_file_path(tmp_dir: str | None = None) -> str:
    return os.path.join(tmp_dir or tempfile.gettempdir(), KEY_FILE_NAME)


def write_key_file(path: str, content: str) -> None:
    """Write the service-account JSON verbatim, readable by the owner only.

    Whatever sits at path, including a symlink, is removed first and a fresh
    file is created there, never opened through an existing entry.
    """
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL | os.O_NOFOLLOW, 0o600)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(content)


def decode_private_key(encoded: str) -> str:
    """Decode a base64 private key to text. Raises ValueError on bad input."""
    compact = "".join(encoded.split())
    try:
        return base64.b64decode(compact, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ValueError(str(e)) from e


def resolve(
    config: LaunchConfig,
    base_env: Mapping[str, str],
    tmp_dir: str | None = None,
) -> Resolution:
    """Compute the child environment from config and the inherited environment.

    Never raises for bad credential input: failures are logged, collected in
    Resolution.warnings, and the affected variable is left unconfigured.
    """
    env = dict(base_env)
    warnings: list[str] = []

    strategy = _resolve_search_console(config, env, tmp_dir, warnings)
    _resolve_private_key(config, env, warnings)

    return Resolution(strategy=strategy, env=env, warnings=warnings)


def _resolve_search_console(
    config: LaunchConfig,
    env: dict[str, str],
    tmp_dir: str | None,
    warnings: list[str],
) -> CredentialStrategy:
    # Strategies are exclusive: the child must never see both an OAuth token
    # and a service-account file for Search Console.
    env.pop(GOOGLE_APPLICATION_CREDENTIALS, None)

    if config.gsc_oauth_refresh_token:
        log.info("GSC: refresh token present, using OAuth")
        log.step(f"{GOOGLE_APPLICATION_CREDENTIALS} left unset")
        return OAuth()

    if config.service_account_json:
        path = key_file_path(tmp_dir)
        try:
            write_key_file(path, config.service_account_json)
        except OSError as e:
            msg = f"GSC: failed to write service account key to {path}: {e}"
            log.error(msg)
            warnings.append(msg)
            return NoCredentials()
        env[GOOGLE_APPLICATION_CREDENTIALS] = path
        log.info(f"GSC: service account key written to {path}")
        return ServiceAccount(path=path)

    msg = (
        "GSC: no refresh token or service account JSON set, "
        "Search Console access will be unauthenticated"
    )
    log.warning(msg)
    warnings.append(msg)
    return NoCredentials()


def _resolve_private_key(
    config: LaunchConfig, env: dict[str, str], warnings: list[str]
) -> None:
    if not config.private_key_base64:
        return
    try:
        env[GOOGLE_PRIVATE_KEY] = decode_private_key(config.private_key_base64)
    except ValueError as e:
        msg = f"GA: failed to decode {GOOGLE_PRIVATE_KEY_BASE64}: {e}"
        log.error(msg)
        warnings.append(msg)
        return
    log.info(f"GA: {GOOGLE_PRIVATE_KEY} decoded from {GOOGLE_PRIVATE_KEY_BASE64}")
