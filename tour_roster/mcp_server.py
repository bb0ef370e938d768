"""tour-roster MCP server.

Exposes tools that import booking data (ICS feed or CSV export), derive
guiding shift candidates, and hand the stored import documents to the
scheduling surface.
"""
from __future__ import annotations

import argparse
import json
import logging
import os
from datetime import date
from typing import Any

import anyio
from mcp.server.fastmcp import FastMCP

from booking_core.errors import FetchError
from booking_core.models import ImportResult

from .config import RuntimeConfig, load_env, load_tour_taxonomy, runtime_config
from .feed_client import FeedClient
from .importer import import_csv_text, import_ics_feed as _import_ics_feed
from .storage import (
    list_imports as _list_imports,
    load_import as _load_import,
    save_import as _save_import,
)

mcp = FastMCP(
    "tour-roster",
    instructions=(
        "Shift derivation engine for zipline tour guiding. "
        "Imports confirmed bookings from the booking calendar feed or a CSV "
        "export, groups them into guiding shifts per course, and stores the "
        "result for the schedule builder. Staff assignment happens elsewhere."
    ),
)

_ENV_FILE: str | None = None


def _config() -> RuntimeConfig:
    load_env(_ENV_FILE or os.getenv("TOUR_ROSTER_ENV_FILE"))
    return runtime_config()


def _persist(cfg: RuntimeConfig):
    def _on_import(result: ImportResult) -> None:
        _save_import(cfg.artifact_root, result)

    return _on_import


# -- Imports --

@mcp.tool()
async def import_ics_feed(url: str | None = None) -> dict[str, Any]:
    """Fetch the booking calendar feed and derive guiding shifts.

    Uses TOUR_ROSTER_FEED_URL when url is omitted. Returns the import summary
    with every shift candidate; the document is also stored locally.
    """
    cfg = _config()
    feed_url = url or cfg.feed_url
    if not feed_url:
        raise ValueError("No feed URL given and TOUR_ROSTER_FEED_URL is not set")
    try:
        outcome = await _import_ics_feed(
            feed_url,
            client=FeedClient(timeout_s=cfg.fetch_timeout_s),
            taxonomy=load_tour_taxonomy(cfg),
            tz=cfg.local_tz,
            on_import=_persist(cfg),
        )
    except FetchError as exc:
        return {"ok": False, "error": str(exc), "status_code": exc.status_code}
    return outcome.to_dict()


@mcp.tool()
def import_csv(csv_text: str, schedule_date: str, templates_json: str | None = None) -> dict[str, Any]:
    """Derive guiding shifts from a booking export CSV for one schedule date.

    templates_json is an optional JSON list of existing shift templates
    (objects with a "name"); when given, per time-slot staffing demand is
    matched against them as well.
    """
    cfg = _config()
    target_date = date.fromisoformat(schedule_date)
    templates = json.loads(templates_json) if templates_json else None
    if templates is not None and not isinstance(templates, list):
        raise ValueError("templates_json must be a JSON list of shift templates")
    outcome = import_csv_text(
        csv_text,
        target_date,
        taxonomy=load_tour_taxonomy(cfg),
        shift_templates=templates,
        on_import=_persist(cfg),
    )
    return outcome.to_dict()


# -- Import documents --

@mcp.tool()
def list_imports(limit: int = 20) -> list[dict[str, Any]]:
    """List stored import manifests, newest first."""
    return _list_imports(_config().artifact_root, limit=limit)


@mcp.tool()
def load_import(import_id: str | None = None) -> dict[str, Any]:
    """Load a full import document by ID (or latest if omitted)."""
    return _load_import(_config().artifact_root, import_id=import_id)


@mcp.tool()
def tour_types() -> dict[str, Any]:
    """Show the tour taxonomy: course, roles, duration and colour per tour type."""
    return load_tour_taxonomy(_config()).to_dict()


# -- Server entrypoints --

async def _run_http(host: str, port: int) -> None:
    import uvicorn
    from starlette.responses import PlainTextResponse
    from starlette.routing import Route

    app = mcp.streamable_http_app()
    app.routes.append(Route("/health", lambda request: PlainTextResponse("ok")))
    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level="info"))
    await server.serve()


def main() -> None:
    global _ENV_FILE

    parser = argparse.ArgumentParser(description="Serve the tour-roster import tools over MCP")
    parser.add_argument("--env-file", default=None, help="Path to .env file")
    parser.add_argument(
        "--transport",
        default="stdio",
        choices=["stdio", "sse", "streamable-http"],
        help="MCP transport (default: stdio)",
    )
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    args = parser.parse_args()
    _ENV_FILE = args.env_file
    logging.basicConfig(level=logging.INFO)

    if args.transport == "streamable-http":
        anyio.run(_run_http, args.host, args.port)
    else:
        mcp.settings.host = args.host
        mcp.settings.port = args.port
        mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
