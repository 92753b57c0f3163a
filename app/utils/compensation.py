"""
Undo log for multi-step writes that cannot share a database transaction
"""
import logging
from typing import Any, Callable, List, Tuple

logger = logging.getLogger(__name__)


class Compensations:
    """Collects undo actions while a sequence of writes progresses.

    Call add() right after each write succeeds. If a later step fails, rollback()
    runs the undo actions newest first. A failing undo action is logged and the
    remaining ones still run, so the original error is what reaches the caller.
    """

    def __init__(self, label: str):
        self.label = label
        self._actions: List[Tuple[str, Callable[[], Any]]] = []

    def add(self, description: str, action: Callable[[], Any]) -> None:
        self._actions.append((description, action))

    def __len__(self) -> int:
        return len(self._actions)

    def rollback(self) -> None:
        if not self._actions:
            return
        logger.warning(f"Rolling back {len(self._actions)} step(s) of {self.label}")
        while self._actions:
            description, action = self._actions.pop()
            try:
                action()
                logger.info(f"Rolled back: {description}")
            except Exception as e:
                logger.error(f"Failed to roll back '{description}' for {self.label}: {e}")
