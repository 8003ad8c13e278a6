"""Main Flet desktop application entry point."""

from __future__ import annotations

from typing import Optional

import flet as ft

from ..config import BaseConfig
from ..logging_config import setup_logging
from .context import create_app_context
from .navigation import DEFAULT_ROUTE, Router
from .views import build_history_view, build_today_view


def make_main(config: Optional[BaseConfig] = None):
    """Return a Flet ``target`` bound to ``config``."""

    def _main(page: ft.Page) -> None:
        main(page, config=config)

    return _main


def main(page: ft.Page, config: Optional[BaseConfig] = None) -> None:
    """Main entry point for the Flet desktop app."""

    config = config or BaseConfig()
    logger = setup_logging(config)
    ctx = create_app_context(config)
    logger.info("HabitFlow desktop application starting")

    page.title = "HabitFlow (DEV)" if ctx.dev_mode else "HabitFlow"
    page.theme_mode = ctx.theme_mode
    page.padding = 0
    page.window.width = 520
    page.window.height = 760
    page.window.min_width = 420
    page.window.min_height = 560
    if ctx.dev_mode:
        logger.debug("Dev mode enabled", extra={"data_dir": str(ctx.config.DATA_DIR)})

    router = Router(page, ctx)
    router.register("/", build_today_view)
    router.register("/today", build_today_view)
    router.register("/history", build_history_view)

    page.on_route_change = router.route_change
    page.on_view_pop = router.view_pop

    def _on_error(e: ft.ControlEvent) -> None:  # pragma: no cover (UI callback)
        logger.error("Flet page error", extra={"data": getattr(e, "data", None)})

    page.on_error = _on_error
    page.go(DEFAULT_ROUTE)


if __name__ == "__main__":
    ft.app(target=main)
