"""Aftercare CLI: run the server, prepare the database, poke a running API.

Usage:
    aftercare serve                 # Run the API with uvicorn
    aftercare init-db               # Create tables directly (local setups)
    aftercare health                # Query /health on a running server
    aftercare sections              # List brochure sections from the catalog
"""

from __future__ import annotations

import asyncio
import concurrent.futures
import json
import os
import sys

import click
import httpx

from aftercare import __version__

# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

DEFAULT_API_URL = "http://localhost:3007"


def _api_url() -> str:
    return os.environ.get("AFTERCARE_API_URL", DEFAULT_API_URL).rstrip("/")


def _client() -> httpx.AsyncClient:
    """Build an async HTTP client pointed at the Aftercare backend."""
    return httpx.AsyncClient(base_url=_api_url(), timeout=10.0)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _run(coro):
    """Run an async coroutine from a synchronous Click handler.

    Handles nested event loops (e.g. when invoked via Click CliRunner
    inside an existing async context like tests) by offloading to a thread.
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return asyncio.run(coro)
    else:
        with concurrent.futures.ThreadPoolExecutor(max_workers=1) as pool:
            return pool.submit(asyncio.run, coro).result()


def _print_table(rows: list[dict], columns: list[tuple[str, str, int]]):
    """Print a simple ASCII table.

    columns: list of (header, dict_key, width)
    """
    header = "  ".join(h.ljust(w) for h, _, w in columns)
    click.secho(header, bold=True)
    click.echo("-" * len(header))
    for row in rows:
        line = "  ".join(str(row.get(k, "-"))[:w].ljust(w) for _, k, w in columns)
        click.echo(line)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(version=__version__, prog_name="aftercare")
def main():
    """Aftercare: post-operative recovery backend."""


# ---------------------------------------------------------------------------
# aftercare serve
# ---------------------------------------------------------------------------


@main.command()
@click.option("--host", default=None, help="Bind address (default: AFTERCARE_HOST)")
@click.option("--port", "-p", type=int, default=None, help="Port (default: AFTERCARE_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the API server."""
    import uvicorn

    from aftercare.config import settings

    uvicorn.run(
        "aftercare.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


# ---------------------------------------------------------------------------
# aftercare init-db
# ---------------------------------------------------------------------------


@main.command("init-db")
def init_db():
    """Create all tables on the configured database.

    Skips Alembic; use `alembic upgrade head` for managed environments.
    """
    _run(_init_db_impl())
    click.secho("Database tables created", fg="green")


async def _init_db_impl():
    from aftercare.config import settings
    from aftercare.db.engine import build_engine
    from aftercare.db.models import Base

    engine = build_engine(settings)
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    finally:
        await engine.dispose()


# ---------------------------------------------------------------------------
# aftercare health
# ---------------------------------------------------------------------------


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the raw response")
def health(as_json: bool):
    """Query the health endpoint of a running server."""
    _run(_health_impl(as_json))


async def _health_impl(as_json: bool):
    try:
        async with _client() as c:
            r = await c.get("/health")
            r.raise_for_status()
            data = r.json()
    except httpx.HTTPError as e:
        click.secho(f"Health check failed: {e}", fg="red", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(data, indent=2))
    else:
        color = "green" if data.get("status") == "OK" else "yellow"
        click.secho(f"Status:   {data.get('status')}", fg=color)
        click.echo(f"Version:  {data.get('version')}")
        click.echo(f"Database: {data.get('database')}")

    if data.get("status") != "OK":
        sys.exit(2)


# ---------------------------------------------------------------------------
# aftercare sections
# ---------------------------------------------------------------------------


@main.command()
@click.option("--search", "-s", default="", help="Filter by title")
def sections(search: str):
    """List brochure sections with their block and item counts."""
    from aftercare.services.brochure_service import BrochureCatalog

    catalog = BrochureCatalog()
    summaries, total = catalog.search_sections(search, page=1, limit=max(catalog.total_items, 1))
    items_per_section = {}
    for section_id, _ in catalog.all_items():
        items_per_section[section_id] = items_per_section.get(section_id, 0) + 1

    rows = [
        {
            "id": s.id,
            "title": s.title,
            "blocks": s.content_count,
            "items": items_per_section.get(s.id, 0),
        }
        for s in summaries
    ]
    _print_table(rows, [("ID", "id", 28), ("TITLE", "title", 36), ("BLOCKS", "blocks", 6), ("ITEMS", "items", 5)])
    click.echo(f"\n{total} section(s)")


if __name__ == "__main__":
    main()
