"""Pre-launch summary of the variables the child will see."""

from mcp_launch import log
from mcp_launch.config import LaunchConfig
from mcp_launch.credentials import (
    CredentialStrategy,
    NoCredentials,
    OAuth,
    ServiceAccount,
)

# (name, secret)
REPORTED_VARS = [
    ("GSC_OAUTH_CLIENT_ID", False),
    ("GSC_OAUTH_CLIENT_SECRET", True),
    ("GSC_OAUTH_REFRESH_TOKEN", True),
    ("GSC_OAUTH_REDIRECT_URI", False),
    ("GOOGLE_APPLICATION_CREDENTIALS", False),
    ("GOOGLE_PRIVATE_KEY", True),
    ("GOOGLE_CLIENT_EMAIL", False),
    ("GA_PROPERTY_ID", False),
    ("DATAFORSEO_USERNAME", False),
    ("DATAFORSEO_PASSWORD", True),
    ("FIRECRAWL_API_KEY", True),
]

NOT_SET = "NOT SET"
HIDDEN = "SET (value hidden)"


def describe_strategy(strategy: CredentialStrategy) -> str:
    match strategy:
        case OAuth():
            return "OAuth (refresh token)"
        case ServiceAccount(path=path):
            return f"service account ({path})"
        case NoCredentials():
            return "none"


def describe(
    env: dict[str, str], strategy: CredentialStrategy, config: LaunchConfig
) -> list[tuple[str, str]]:
    """Return (label, display value) rows. Secret values are never included."""
    rows = []
    for name, secret in REPORTED_VARS:
        value = env.get(name)
        if not value:
            rows.append((name, NOT_SET))
        elif secret:
            rows.append((name, HIDDEN))
        else:
            rows.append((name, value))
    rows.append(("GSC strategy", describe_strategy(strategy)))
    rows.append(("GSC OAuth client", "configured" if config.oauth_ready else "not configured"))
    return rows


def log_report(
    env: dict[str, str], strategy: CredentialStrategy, config: LaunchConfig
) -> None:
    log.header("environment")
    for label, value in describe(env, strategy, config):
        log.step(f"{label}: {value}")
    log.footer("ready")
