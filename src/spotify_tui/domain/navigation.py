"""
Navigation history for the terminal client.

A stack of Route records, newest last. The bottom entry is the Home route
and is never popped, so the user can never navigate past it.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

from loguru import logger

from .models import ActiveBlock, RouteId


@dataclass
class Route:
    """One entry in the navigation history.

    Attributes:
        id: Which view this route shows
        active_block: Panel currently receiving commands
        hovered_block: Panel that becomes active on Enter
        context: Parameter of parameterized routes (the track id of an
            add-to-playlist route, the DialogContext of a dialog route)
    """

    id: RouteId
    active_block: ActiveBlock
    hovered_block: ActiveBlock
    context: Any = None


def default_route() -> Route:
    """Home route every stack starts from."""
    return Route(
        id=RouteId.HOME,
        active_block=ActiveBlock.EMPTY,
        hovered_block=ActiveBlock.LIBRARY,
    )


@dataclass
class NavigationStack:
    """Non-empty stack of routes with a fixed Home floor."""

    routes: list[Route] = field(default_factory=lambda: [default_route()])

    def __len__(self) -> int:
        return len(self.routes)

    def push(
        self, route_id: RouteId, active_block: ActiveBlock, context: Any = None
    ) -> Route:
        """Push a new route whose hovered block equals its active block.

        Args:
            route_id: View to show
            active_block: Block that receives focus
            context: Optional route parameter

        Returns:
            The route that was pushed
        """
        route = Route(
            id=route_id,
            active_block=active_block,
            hovered_block=active_block,
            context=context,
        )
        self.routes.append(route)
        logger.debug(f"Navigation push: {route_id.value} ({len(self.routes)} deep)")
        return route

    def pop(self) -> Optional[Route]:
        """Remove and return the top route.

        Returns None without touching the stack when only the Home floor
        is left.
        """
        if len(self.routes) == 1:
            return None
        route = self.routes.pop()
        logger.debug(f"Navigation pop: {route.id.value} ({len(self.routes)} deep)")
        return route

    def current(self) -> Route:
        return self.routes[-1]

    def set_current_state(
        self,
        active: Optional[ActiveBlock] = None,
        hovered: Optional[ActiveBlock] = None,
    ) -> None:
        """Mutate the focus of the top route in place.

        Either argument may be omitted to keep that field unchanged.
        """
        route = self.routes[-1]
        if active is not None:
            route.active_block = active
        if hovered is not None:
            route.hovered_block = hovered
