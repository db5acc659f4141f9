# This project was developed with assistance from AI tools.
"""In-memory application store.

Holds the one application aggregate the wizard works on. Services never
mutate the stored state; they return a new ``ApplicationState`` that the
caller commits once the whole command has succeeded.
"""

import logging

from .models import ApplicationState

logger = logging.getLogger(__name__)


class ApplicationStore:
    """Owner of the current ``ApplicationState``."""

    def __init__(self, initial: ApplicationState) -> None:
        self._state = initial

    @property
    def state(self) -> ApplicationState:
        return self._state

    def commit(self, state: ApplicationState) -> ApplicationState:
        self._state = state
        return state


_store: ApplicationStore | None = None


def init_store(initial: ApplicationState) -> ApplicationStore:
    """Initialise the singleton (called once from app lifespan)."""
    global _store  # noqa: PLW0603
    _store = ApplicationStore(initial)
    logger.info("ApplicationStore initialised (stage=%s)", initial.current_stage.value)
    return _store


def get_store() -> ApplicationStore:
    """Return the initialised ApplicationStore singleton."""
    if _store is None:
        raise RuntimeError("ApplicationStore not initialised -- call init_store() first")
    return _store
