from __future__ import annotations

from core.recipe.persistence import RecipeStateRepository
from pages.recipe_calculator.route_store import FletRouteFragmentStore
from pages.recipe_calculator.state_manager import RecipeStateManager


class _FakePage:
    def __init__(self, route: str) -> None:
        self.route = route
        self.updates = 0

    def update(self) -> None:
        self.updates += 1


def test_read_fragment_strips_base_route() -> None:
    store = FletRouteFragmentStore(_FakePage("/recipe_calculator/%7B%22uid%22%3A1%7D"))

    assert store.read_fragment() == "%7B%22uid%22%3A1%7D"


def test_read_fragment_without_recipe_is_none() -> None:
    for route in ("/recipe_calculator", "/recipe_calculator/", "/", "/elsewhere/abc"):
        assert FletRouteFragmentStore(_FakePage(route)).read_fragment() is None


def test_write_fragment_updates_route_and_page() -> None:
    page = _FakePage("/recipe_calculator")
    store = FletRouteFragmentStore(page)

    store.write_fragment("abc")

    assert page.route == "/recipe_calculator/abc"
    assert page.updates == 1
    assert store.read_fragment() == "abc"


def test_recipe_survives_reload_through_route() -> None:
    page = _FakePage("/recipe_calculator")
    manager = RecipeStateManager(RecipeStateRepository(FletRouteFragmentStore(page)))
    manager.load()
    manager.set_total_volume("100")
    liquid = manager.add_liquid()
    manager.update_field(liquid, "name", "Water")

    reloaded = RecipeStateManager(RecipeStateRepository(FletRouteFragmentStore(_FakePage(page.route))))
    reloaded.load()

    assert "/" not in page.route[len("/recipe_calculator/"):]
    assert reloaded.state == manager.state
