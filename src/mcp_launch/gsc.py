"""Search Console API client.

This module wraps the searchconsole v1 discovery client with OAuth user
credentials built from the GSC_OAUTH_* variables. Every API failure is
re-raised as SearchConsoleError carrying the operation name and upstream detail.
"""

import json
from typing import Any

from google.auth.exceptions import RefreshError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from mcp_launch.config import LaunchConfig

TOKEN_URI = "https://oauth2.googleapis.com/token"
SCOPES = ["https://www.googleapis.com/auth/webmasters"]


class NotInitializedError(RuntimeError):
    """Raised when the OAuth variables needed for a client are missing."""

    def __init__(self) -> None:
        super().__init__(
            "Search Console client not initialized: set GSC_OAUTH_CLIENT_ID, "
            "GSC_OAUTH_CLIENT_SECRET and GSC_OAUTH_REFRESH_TOKEN"
        )


class SearchConsoleError(RuntimeError):
    def __init__(
        self,
        operation: str,
        message: str,
        status: int | None = None,
        detail: str | None = None,
        reauth_required: bool = False,
    ) -> None:
        super().__init__(message)
        self.operation = operation
        self.status = status
        self.detail = detail
        self.reauth_required = reauth_required


def is_revoked_credential(exc: BaseException) -> bool:
    """True when the refresh token was rejected and re-authorization is needed."""
    if isinstance(exc, RefreshError):
        # google-auth passes the token endpoint's JSON body as the second arg
        return any(
            isinstance(arg, dict) and arg.get("error") == "invalid_grant"
            for arg in exc.args
        )
    if isinstance(exc, HttpError):
        return exc.resp.status == 401
    return False


def _api_error(exc: HttpError) -> dict:
    """Extract the `error` object from a Google API error body, or {}."""
    content = exc.content
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    try:
        data = json.loads(content)
    except (TypeError, ValueError):
        return {}
    error = data.get("error") if isinstance(data, dict) else None
    return error if isinstance(error, dict) else {}


def wrap_error(operation: str, exc: Exception) -> SearchConsoleError:
    """Build a SearchConsoleError describing exc in the context of operation."""
    message = f'Error during GSC operation "{operation}": {exc}'
    status = None
    detail = None

    if isinstance(exc, HttpError):
        status = exc.resp.status
        api_error = _api_error(exc)
        if api_error:
            detail = f"{api_error.get('code', status)} {api_error.get('message', '')}".strip()
            if api_error.get("status"):
                detail += f" (Status: {api_error['status']})"
            reasons = [
                f"{e.get('reason')}: {e.get('message')}"
                for e in api_error.get("errors", [])
                if isinstance(e, dict)
            ]
            if reasons:
                detail += f" | Details: {', '.join(reasons)}"
            message += f" | API Error: {detail}"

    reauth = is_revoked_credential(exc)
    if reauth:
        message += (
            " | The refresh token may be expired or revoked. Re-authorization may be needed."
        )

    return SearchConsoleError(
        operation, message, status=status, detail=detail, reauth_required=reauth
    )


def _require(operation: str, **params: Any) -> None:
    missing = [name for name, value in params.items() if not value]
    if missing:
        raise ValueError(f"{', '.join(missing)} required for {operation}")


class SearchConsole:
    """Thin wrapper over the searchconsole v1 resource."""

    def __init__(self, service: Any) -> None:
        self._service = service

    @classmethod
    def from_config(cls, config: LaunchConfig) -> "SearchConsole":
        """Build a client from OAuth config. Raises NotInitializedError if incomplete."""
        if not config.oauth_ready:
            raise NotInitializedError()
        credentials = Credentials(
            token=None,
            refresh_token=config.gsc_oauth_refresh_token,
            client_id=config.gsc_oauth_client_id,
            client_secret=config.gsc_oauth_client_secret,
            token_uri=TOKEN_URI,
            scopes=SCOPES,
        )
        service = build("searchconsole", "v1", credentials=credentials, cache_discovery=False)
        return cls(service)

    def _execute(self, operation: str, request: Any) -> Any:
        try:
            return request.execute()
        except Exception as e:
            raise wrap_error(operation, e) from e

    # Sites

    def list_sites(self) -> list[dict]:
        res = self._execute("listSites", self._service.sites().list())
        return res.get("siteEntry", []) if res else []

    def get_site(self, site_url: str) -> dict:
        _require("getSite", site_url=site_url)
        return self._execute(f"getSite ({site_url})", self._service.sites().get(siteUrl=site_url))

    def add_site(self, site_url: str) -> dict:
        """Add a property. The authenticated user must own the site."""
        _require("addSite", site_url=site_url)
        self._execute(f"addSite ({site_url})", self._service.sites().add(siteUrl=site_url))
        return {
            "message": f'Site "{site_url}" submitted for addition successfully. '
            "Verification may be required."
        }

    def delete_site(self, site_url: str) -> dict:
        _require("deleteSite", site_url=site_url)
        self._execute(f"deleteSite ({site_url})", self._service.sites().delete(siteUrl=site_url))
        return {"message": f'Site "{site_url}" deleted successfully.'}

    # Search analytics

    def query_analytics(
        self,
        site_url: str,
        start_date: str,
        end_date: str,
        dimensions: list[str],
        dimension_filter_groups: list[dict] | None = None,
        type: str = "web",
        aggregation_type: str = "auto",
        row_limit: int = 1000,
        start_row: int = 0,
    ) -> dict:
        """Query search performance rows.

        Dates are YYYY-MM-DD. dimensions is e.g. ["query"] or ["date", "device"].
        """
        _require(
            "queryAnalytics",
            site_url=site_url,
            start_date=start_date,
            end_date=end_date,
            dimensions=dimensions,
        )
        body = {
            "startDate": start_date,
            "endDate": end_date,
            "dimensions": list(dimensions),
            "type": type,
            "aggregationType": aggregation_type,
            "rowLimit": row_limit,
            "startRow": start_row,
        }
        if dimension_filter_groups:
            body["dimensionFilterGroups"] = dimension_filter_groups
        return self._execute(
            f"queryAnalytics for {site_url}",
            self._service.searchanalytics().query(siteUrl=site_url, body=body),
        )

    # URL inspection

    def inspect_url(
        self, site_url: str, inspection_url: str, language_code: str = "en-US"
    ) -> dict | None:
        _require("inspectUrl", site_url=site_url, inspection_url=inspection_url)
        body = {
            "inspectionUrl": inspection_url,
            "siteUrl": site_url,
            "languageCode": language_code,
        }
        res = self._execute(
            f"inspectUrl for {inspection_url}",
            self._service.urlInspection().index().inspect(body=body),
        )
        return res.get("inspectionResult") if res else None

    # Sitemaps

    def list_sitemaps(self, site_url: str) -> list[dict]:
        _require("listSitemaps", site_url=site_url)
        res = self._execute(
            f"listSitemaps for {site_url}", self._service.sitemaps().list(siteUrl=site_url)
        )
        return res.get("sitemap", []) if res else []

    def get_sitemap(self, site_url: str, feedpath: str) -> dict:
        _require("getSitemap", site_url=site_url, feedpath=feedpath)
        return self._execute(
            f"getSitemap for {feedpath}",
            self._service.sitemaps().get(siteUrl=site_url, feedpath=feedpath),
        )

    def submit_sitemap(self, site_url: str, feedpath: str) -> dict:
        _require("submitSitemap", site_url=site_url, feedpath=feedpath)
        self._execute(
            f"submitSitemap for {feedpath}",
            self._service.sitemaps().submit(siteUrl=site_url, feedpath=feedpath),
        )
        msg = f'Sitemap "{feedpath}" submitted successfully for site "{site_url}".'
        return {"message": msg}

    def delete_sitemap(self, site_url: str, feedpath: str) -> dict:
        """Remove a sitemap. Google may still crawl URLs it already discovered."""
        _require("deleteSitemap", site_url=site_url, feedpath=feedpath)
        self._execute(
            f"deleteSitemap for {feedpath}",
            self._service.sitemaps().delete(siteUrl=site_url, feedpath=feedpath),
        )
        msg = f'Sitemap "{feedpath}" deleted successfully for site "{site_url}".'
        return {"message": msg}
