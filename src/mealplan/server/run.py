"""Helper for running the meal-planning ASGI application."""

from __future__ import annotations

import asyncio
import os
from typing import Optional

import uvicorn

from mealplan.config import get_settings

APP_FACTORY = "mealplan.server.app:create_app"


async def _serve_for(server: uvicorn.Server, duration: float) -> None:
    """Serve until ``duration`` seconds have passed."""

    async def _stop_later() -> None:
        await asyncio.sleep(duration)
        server.should_exit = True

    asyncio.create_task(_stop_later())
    await server.serve()


def _parse_duration(value: str | None) -> Optional[float]:
    if not value:
        return None
    try:
        parsed = float(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid MEALPLAN_SERVER_DURATION '{value}': {exc}") from exc
    if parsed <= 0:
        raise SystemExit("MEALPLAN_SERVER_DURATION must be greater than 0 when provided.")
    return parsed


def build_config(host: str, port: int, *, reload: bool = False) -> uvicorn.Config:
    settings = get_settings()
    return uvicorn.Config(
        APP_FACTORY,
        host=host,
        port=port,
        reload=reload,
        factory=True,
        log_level=settings.log_level.lower(),
        # Access lines come from the application's own request middleware.
        access_log=False,
    )


def main() -> None:
    """Entry point for the ``mealplan-server`` script."""

    host = os.environ.get("MEALPLAN_SERVER_HOST", "127.0.0.1")
    port = int(os.environ.get("MEALPLAN_SERVER_PORT", "8000"))
    reload_enabled = os.environ.get("MEALPLAN_RELOAD") == "1"
    duration = _parse_duration(os.environ.get("MEALPLAN_SERVER_DURATION"))

    if reload_enabled and duration is not None:
        raise SystemExit("Use MEALPLAN_RELOAD=0 when specifying MEALPLAN_SERVER_DURATION.")

    if reload_enabled:
        uvicorn.run(APP_FACTORY, host=host, port=port, reload=True, factory=True)
        return

    server = uvicorn.Server(build_config(host, port))
    if duration is not None:
        asyncio.run(_serve_for(server, duration))
        return
    server.run()


if __name__ == "__main__":
    main()
