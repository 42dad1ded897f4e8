"""
A2UI — Action routing

The renderer never interprets actions. A host page usually wants one
function per action name, so ActionRouter maps names to handlers and is
itself callable as the renderer's on_action:

    router = ActionRouter()

    @router.route("delete")
    def delete(task_id):
        ...

    render(tree, on_action=router)

Handlers receive the action args positionally plus any keyword context the
caller passes, and their return value (awaitable or not) is handed back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from engine.a2ui.schema import Action, parse_action

logger = logging.getLogger(__name__)


class UnknownActionError(LookupError):
    """Raised when no handler is registered for an action name."""

    def __init__(self, action: str):
        super().__init__(f"Unknown action: {action!r}")
        self.action = action


class ActionRouter:
    """Action name → handler table."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[..., Any]] = {}

    def add(self, name: str, handler: Callable[..., Any]) -> ActionRouter:
        self._handlers[name] = handler
        return self

    def route(self, name: str) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(handler: Callable[..., Any]) -> Callable[..., Any]:
            self.add(name, handler)
            return handler

        return decorator

    def __call__(self, action: str, args: list[Any] | None = None, **context: Any) -> Any:
        handler = self._handlers.get(action)
        if handler is None:
            raise UnknownActionError(action)
        logger.debug("a2ui: dispatching %s args=%r", action, args)
        return handler(*(args or []), **context)

    def dispatch(self, action: Action | dict[str, Any], **context: Any) -> Any:
        parsed = parse_action(action)
        if parsed is None:
            raise ValueError(f"Not an action: {action!r}")
        return self(parsed.action, parsed.args, **context)

    def names(self) -> list[str]:
        return sorted(self._handlers)

    def __contains__(self, action: object) -> bool:
        return action in self._handlers
