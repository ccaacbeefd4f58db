"""
Status toggle coordination.

Guards against duplicate concurrent mutations of the same entity (a double
tap on "Block", a double submit of "Record Payment"). Each entity id moves
Idle -> InFlight -> Idle; a second toggle while InFlight is refused as a
no-op. The in-flight marker lives in the Django cache so the guard holds
across worker threads, and cache.add() makes acquisition atomic.
"""
from dataclasses import dataclass
from typing import Any, Callable, Optional
import logging

from django.conf import settings
from django.core.cache import cache
from django.utils import timezone

from core.exceptions import BaseApplicationException

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = 'status_toggle'


@dataclass(frozen=True)
class Result:
    """Tagged outcome of a mutation: Ok(value) or Err(error)"""
    ok: bool
    value: Any = None
    error: Optional[BaseApplicationException] = None

    @classmethod
    def success(cls, value=None) -> 'Result':
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: BaseApplicationException) -> 'Result':
        return cls(ok=False, error=error)


Ok = Result.success
Err = Result.failure


class StatusToggleCoordinator:
    """
    Per-entity in-flight guard.

    Usage:
        coordinator = StatusToggleCoordinator('student')
        result = coordinator.run(student.id, mutate, apply=patch_view, revert=restore_view)
        if result is None:
            # another toggle for this student is still in flight
    """

    def __init__(self, namespace: str, timeout: Optional[int] = None):
        self.namespace = namespace
        self.timeout = timeout or getattr(settings, 'STAYTRACK_TOGGLE_TIMEOUT', 30)

    def _key(self, entity_id) -> str:
        return f"{CACHE_KEY_PREFIX}:{self.namespace}:{entity_id}"

    def begin_toggle(self, entity_id) -> bool:
        """Mark entity_id in flight. False if it already was."""
        acquired = cache.add(
            self._key(entity_id),
            {'started_at': timezone.now().isoformat()},
            self.timeout,
        )
        if not acquired:
            logger.info(f"Toggle refused, {self.namespace} {entity_id} already in flight")
        return acquired

    def _release(self, entity_id):
        cache.delete(self._key(entity_id))

    def complete_toggle(self, entity_id, result: Result,
                        apply: Optional[Callable[[Any], None]] = None,
                        revert: Optional[Callable[[], None]] = None) -> Result:
        """
        Finish a toggle: apply the local patch on success, revert on failure.
        The in-flight marker is cleared on every path.
        """
        try:
            if result.ok:
                if apply is not None:
                    apply(result.value)
            else:
                logger.warning(
                    f"Toggle failed for {self.namespace} {entity_id}: {result.error.message}"
                )
                if revert is not None:
                    revert()
        finally:
            self._release(entity_id)
        return result

    def run(self, entity_id, mutation: Callable[[], Any],
            apply: Optional[Callable[[Any], None]] = None,
            revert: Optional[Callable[[], None]] = None) -> Optional[Result]:
        """
        Run mutation under the guard.

        Returns:
            Ok(value) / Err(error) for the applied attempt, or None when a
            toggle for entity_id was already in flight.
        """
        if not self.begin_toggle(entity_id):
            return None
        try:
            value = mutation()
        except BaseApplicationException as e:
            return self.complete_toggle(entity_id, Err(e), revert=revert)
        except Exception:
            self._release(entity_id)
            raise
        return self.complete_toggle(entity_id, Ok(value), apply=apply)


student_toggles = StatusToggleCoordinator('student')
payment_toggles = StatusToggleCoordinator('payment')
