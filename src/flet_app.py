import logging

import flet as ft

from core.config import settings
from pages.recipe_calculator.constants import RECIPE_ROUTE
from pages.recipe_calculator.page import RecipeCalculatorContent

logging.basicConfig(
    level=settings.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def is_recipe_route(route: str) -> bool:
    return route == RECIPE_ROUTE or route.startswith(f"{RECIPE_ROUTE}/")


def main(page: ft.Page):
    page.title = settings.APP_NAME
    page.theme_mode = ft.ThemeMode.LIGHT
    page.scroll = ft.ScrollMode.AUTO

    def route_change(route):
        # The calculator rewrites its own route on every edit to keep the recipe in the URL
        if is_recipe_route(page.route) and page.views and is_recipe_route(page.views[-1].route):
            return

        page.views.clear()

        if is_recipe_route(page.route):
            calculator = RecipeCalculatorContent(page)
            page.views.append(ft.View(RECIPE_ROUTE, [calculator], scroll=ft.ScrollMode.AUTO))
            calculator.build_content()
        else:
            # Shared links always open the calculator
            logger.info("Redirecting %s to the calculator", page.route)
            page.go(RECIPE_ROUTE)
            return

        page.update()

    page.on_route_change = route_change

    page.go(page.route)


if __name__ == "__main__":
    ft.app(target=main, view=ft.AppView.WEB_BROWSER, route_url_strategy="hash")
