"""Click entry point — all commands."""

import json
import os
import sys

import click

from mcp_launch import __version__, credentials, log, process, report
from mcp_launch.config import LaunchConfig

DEFAULT_COMMAND = ["npx", "-y", "@typingmind/mcp"]


@click.group()
@click.version_option(version=__version__, prog_name="mcp-launch")
def main():
    """Prepare credentials from the platform environment and launch the MCP server."""


def _prepare():
    config = LaunchConfig.from_env(os.environ)
    resolution = credentials.resolve(config, os.environ)
    report.log_report(resolution.env, resolution.strategy, config)
    return config, resolution


@main.command(context_settings={"ignore_unknown_options": True})
@click.option("--dry-run", is_flag=True, help="Resolve and report without launching")
@click.argument("command", nargs=-1, type=click.UNPROCESSED)
def run(dry_run, command):
    """Resolve credentials, then launch COMMAND (default: npx -y @typingmind/mcp)."""
    args = list(command) or DEFAULT_COMMAND
    _, resolution = _prepare()
    if dry_run:
        log.info(f"would launch: {' '.join(args)}")
        return
    log.info(f"Launching: {' '.join(args)}")
    code = process.launch(args, resolution.env)
    sys.exit(code)


@main.command()
def env():
    """Resolve credentials and show what the child would see."""
    _prepare()


@main.command(name="ping-server")
@click.option("--host", default="0.0.0.0", show_default=True, help="Bind address")
@click.option("--port", default=None, type=int, help="Listen port (default: $PORT or 8080)")
def ping_server(host, port):
    """Serve GET /ping for platform health checks."""
    from mcp_launch import server

    if port is None:
        port = LaunchConfig.from_env(os.environ).port
    server.serve(port, host)


@main.group()
def gsc():
    """Search Console operations (needs GSC_OAUTH_* variables)."""


def _gsc_call(method, *args, **kwargs):
    """Invoke a SearchConsole method, print JSON, and exit 1 on failure."""
    from mcp_launch.gsc import NotInitializedError, SearchConsole, SearchConsoleError

    try:
        client = SearchConsole.from_config(LaunchConfig.from_env(os.environ))
        result = getattr(client, method)(*args, **kwargs)
    except (NotInitializedError, SearchConsoleError, ValueError) as e:
        log.error(str(e))
        sys.exit(1)
    click.echo(json.dumps(result, indent=2))


@gsc.command(name="list-sites")
def list_sites():
    """List properties the account can access."""
    _gsc_call("list_sites")


@gsc.command(name="get-site")
@click.argument("site_url")
def get_site(site_url):
    """Show one property."""
    _gsc_call("get_site", site_url)


@gsc.command(name="add-site")
@click.argument("site_url")
def add_site(site_url):
    """Add a property."""
    _gsc_call("add_site", site_url)


@gsc.command(name="delete-site")
@click.argument("site_url")
def delete_site(site_url):
    """Remove a property."""
    _gsc_call("delete_site", site_url)


@gsc.command()
@click.argument("site_url")
@click.option("--start-date", required=True, help="YYYY-MM-DD")
@click.option("--end-date", required=True, help="YYYY-MM-DD")
@click.option("--dimension", "dimensions", multiple=True, required=True, help="e.g. query, page, date")
@click.option("--type", "search_type", default="web", show_default=True)
@click.option("--aggregation-type", default="auto", show_default=True)
@click.option("--row-limit", default=1000, type=int, show_default=True)
@click.option("--start-row", default=0, type=int, show_default=True)
@click.option("--filters", default=None, help="dimensionFilterGroups as JSON")
def query(
    site_url,
    start_date,
    end_date,
    dimensions,
    search_type,
    aggregation_type,
    row_limit,
    start_row,
    filters,
):
    """Query search analytics for SITE_URL."""
    filter_groups = None
    if filters:
        try:
            filter_groups = json.loads(filters)
        except json.JSONDecodeError as e:
            log.error(f"--filters is not valid JSON: {e}")
            sys.exit(1)
    _gsc_call(
        "query_analytics",
        site_url,
        start_date,
        end_date,
        list(dimensions),
        dimension_filter_groups=filter_groups,
        type=search_type,
        aggregation_type=aggregation_type,
        row_limit=row_limit,
        start_row=start_row,
    )


@gsc.command()
@click.argument("site_url")
@click.argument("inspection_url")
@click.option("--language", default="en-US", show_default=True)
def inspect(site_url, inspection_url, language):
    """Inspect the index status of INSPECTION_URL."""
    _gsc_call("inspect_url", site_url, inspection_url, language)


@gsc.command()
@click.argument("site_url")
def sitemaps(site_url):
    """List submitted sitemaps."""
    _gsc_call("list_sitemaps", site_url)


@gsc.command(name="get-sitemap")
@click.argument("site_url")
@click.argument("feedpath")
def get_sitemap(site_url, feedpath):
    """Show one sitemap."""
    _gsc_call("get_sitemap", site_url, feedpath)


@gsc.command(name="submit-sitemap")
@click.argument("site_url")
@click.argument("feedpath")
def submit_sitemap(site_url, feedpath):
    """Submit a sitemap."""
    _gsc_call("submit_sitemap", site_url, feedpath)


@gsc.command(name="delete-sitemap")
@click.argument("site_url")
@click.argument("feedpath")
def delete_sitemap(site_url, feedpath):
    """Delete a sitemap."""
    _gsc_call("delete_sitemap", site_url, feedpath)


if __name__ == "__main__":
    main()
