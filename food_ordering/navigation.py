"""
Tab Navigation and Session Gate

The app shell has four fixed tabs. Every tab sits behind the session gate:
while the session is loading nothing is rendered, a signed-out visitor is
sent to the sign-in route, and a signed-in user gets the tab shell.

Author: Khalil Bannouri
Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum

from food_ordering.services.session.store import SessionStore

ACTIVE_TINT = "#fe8c00"
INACTIVE_TINT = "#5d5f6d"


class RouteDecision(str, Enum):
    LOADING = "loading"
    REDIRECT_SIGN_IN = "redirect_sign_in"
    RENDER_SHELL = "render_shell"


@dataclass(frozen=True)
class TabDestination:
    """A tab of the app shell with its static icon/label pair."""
    name: str
    title: str
    icon: str
    path: str


@dataclass(frozen=True)
class TabBarEntry:
    """A tab as drawn in the tab bar for one active tab."""
    destination: TabDestination
    focused: bool

    @property
    def tint(self) -> str:
        return ACTIVE_TINT if self.focused else INACTIVE_TINT

    @property
    def label_class(self) -> str:
        return "text-primary" if self.focused else "text-gray-200"


TABS: tuple[TabDestination, ...] = (
    TabDestination(name="index", title="Home", icon="🏠", path="/"),
    TabDestination(name="search", title="Search", icon="🔍", path="/search"),
    TabDestination(name="cart", title="Cart", icon="🛍️", path="/cart"),
    TabDestination(name="profile", title="Profile", icon="👤", path="/profile"),
)

TABS_BY_NAME = {tab.name: tab for tab in TABS}


def decide_route(store: SessionStore) -> RouteDecision:
    """Route decision for any tab, from the session store alone."""
    if store.is_loading:
        return RouteDecision.LOADING
    if not store.is_authenticated:
        return RouteDecision.REDIRECT_SIGN_IN
    return RouteDecision.RENDER_SHELL


def tab_bar(active: str) -> list[TabBarEntry]:
    """
    Tab bar entries with the active tab highlighted.

    Raises:
        KeyError: If active is not one of the tab names
    """
    if active not in TABS_BY_NAME:
        raise KeyError(f"Unknown tab: {active}")
    return [TabBarEntry(destination=tab, focused=tab.name == active) for tab in TABS]
