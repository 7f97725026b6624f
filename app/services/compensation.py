"""
Best-effort compensation for multi-step stock changes.

The spreadsheet has no transactions. Operations touching several rows
record an undo action after each step that succeeded; when a later step
fails the undo actions run in reverse order. Undo actions never raise: a
failed undo is logged and the remaining ones still run. A crash between
steps leaves stock inconsistent, since nothing is persisted.
"""
import logging
from typing import Any, Callable, List, Tuple

logger = logging.getLogger(__name__)


def best_effort(description: str, func: Callable, *args: Any, **kwargs: Any) -> bool:
    """
    Run a step whose failure must not stop the calling operation.

    Returns False when the step raised or reported, by returning False, that
    it did nothing.
    """
    try:
        result = func(*args, **kwargs)
    except Exception as e:
        logger.warning(f"Best-effort step '{description}' failed: {e}")
        return False
    return result is not False


class CompensationStack:
    """
    Ordered stack of undo actions for one logical operation.

    Used as a context manager: leaving the block with an exception unwinds
    every recorded action (last in, first out) and lets the original
    exception propagate unchanged; leaving it normally discards them.

    Example:
        with CompensationStack("create sale") as saga:
            stock.discount("A1", 2)
            saga.push("replenish A1 x2", stock.replenish, "A1", 2)
            sales.insert(sale)
    """

    def __init__(self, operation: str):
        self.operation = operation
        self._actions: List[Tuple[str, Callable, tuple, dict]] = []

    def __len__(self) -> int:
        return len(self._actions)

    def __enter__(self) -> "CompensationStack":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None:
            self.discard()
            return False
        logger.warning(
            f"{self.operation} failed ({exc}), undoing {len(self)} step(s)"
        )
        failed = self.unwind()
        if failed:
            logger.error(
                f"{self.operation}: {len(failed)} undo step(s) failed, stock may be inconsistent: {failed}"
            )
        return False

    def push(self, description: str, func: Callable, *args: Any, **kwargs: Any) -> None:
        """Record the action that undoes a step which just succeeded."""
        self._actions.append((description, func, args, kwargs))

    def unwind(self) -> List[str]:
        """
        Run every recorded undo action, most recent first.

        Returns:
            Descriptions of the undo actions that failed
        """
        failed = []
        while self._actions:
            description, func, args, kwargs = self._actions.pop()
            logger.warning(f"[{self.operation}] compensating: {description}")
            try:
                func(*args, **kwargs)
            except Exception as e:
                logger.error(f"[{self.operation}] compensation '{description}' failed: {e}")
                failed.append(description)
        return failed

    def discard(self) -> None:
        self._actions.clear()
