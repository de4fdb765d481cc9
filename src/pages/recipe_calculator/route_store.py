"""Keeps the encoded recipe in the Flet page route."""

from __future__ import annotations

import logging
from typing import Protocol

from .constants import RECIPE_ROUTE

logger = logging.getLogger(__name__)


class RoutablePage(Protocol):
    route: str

    def update(self) -> None: ...


class FletRouteFragmentStore:
    """
    Fragment store over `page.route`.

    The recipe lives after the page route, e.g. `/recipe_calculator/%7B%22uid%22...`.
    With the hash URL strategy that whole route sits in the browser's address
    fragment, so the link can be bookmarked or shared.
    """

    def __init__(self, page: RoutablePage, base_route: str = RECIPE_ROUTE) -> None:
        self.page = page
        self.base_route = base_route.rstrip("/")

    def read_fragment(self) -> str | None:
        route = self.page.route or ""
        prefix = f"{self.base_route}/"
        if not route.startswith(prefix):
            return None
        return route[len(prefix):] or None

    def write_fragment(self, fragment: str) -> None:
        self.page.route = f"{self.base_route}/{fragment}"
        self.page.update()
