"""Navigation and routing for the Flet app."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict

import flet as ft

if TYPE_CHECKING:
    from .context import AppContext

from ..logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_ROUTE = "/today"

# View builder type
ViewBuilder = Callable[["AppContext", ft.Page], ft.View]


class Router:
    """Maps routes to view builders and swaps the page's top view."""

    def __init__(self, page: ft.Page, context: AppContext):
        self.page = page
        self.context = context
        self.routes: Dict[str, ViewBuilder] = {}

    def register(self, route: str, builder: ViewBuilder) -> None:
        """Register a route with its view builder."""
        logger.debug(f"Registering route: {route}")
        self.routes[route] = builder

    def route_change(self, e: ft.RouteChangeEvent) -> None:
        """Handle route change events."""
        self.show(e.route or "/")

    def show(self, route: str) -> None:
        """Build and display the view for ``route``, falling back to today."""
        if route not in self.routes:
            logger.warning(f"Unknown route {route}, defaulting to {DEFAULT_ROUTE}")
            route = DEFAULT_ROUTE

        builder = self.routes[route]
        try:
            view = builder(self.context, self.page)
        except Exception as ex:
            logger.error(f"Failed to build view for route {route}: {ex}", exc_info=True)
            self.show_error(f"Error loading view: {ex}")
            return

        if self.page.views:
            self.page.views[-1] = view
        else:
            self.page.views.append(view)
        self.page.update()
        logger.info(f"Loaded view for route: {route}")

    def view_pop(self, e: ft.ViewPopEvent) -> None:
        """Handle back button navigation."""
        if len(self.page.views) > 1:
            self.page.views.pop()
        self.page.go(self.page.views[-1].route or DEFAULT_ROUTE)

    def show_error(self, message: str) -> None:
        """Display an error dialog."""
        dialog = ft.AlertDialog(
            title=ft.Text("Error"),
            content=ft.Text(message),
            actions=[ft.TextButton("OK", on_click=lambda _: self.page.close(dialog))],
        )
        self.page.open(dialog)
