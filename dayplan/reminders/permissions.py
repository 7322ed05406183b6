"""Joined access requests for the reminders and calendar-events scopes."""

import threading
from concurrent.futures import Future, wait
from typing import Any, Callable, Dict, Optional
import logging

from dayplan.core.exceptions import AccessTimeoutError, AuthorizationError
from dayplan.core.models import AccessResult, AccessScope
from dayplan.reminders.gateway import describe_platform_error
from dayplan.utils.dispatch import InlineDispatcher


SCOPES = (AccessScope.REMINDERS, AccessScope.EVENTS)


class PermissionGateway:
    """
    Requests both scopes and reports one combined AccessResult.

    Each scope gets its own Future that the platform callback resolves at
    most once. A daemon thread waits for both, bounded by ``timeout``; a
    scope that never answers counts as denied with an AccessTimeoutError.
    The combined completion is dispatched on the main context exactly once
    per ``request_access`` call.
    """

    def __init__(self, platform, dispatcher=None, timeout: float = 30.0,
                 logger: Optional[logging.Logger] = None):
        self.platform = platform
        self.dispatcher = dispatcher or InlineDispatcher()
        self.timeout = timeout
        self.logger = logger or logging.getLogger(__name__)

    def request_access(self, completion: Optional[Callable[[AccessResult], Any]] = None) -> "Future[AccessResult]":
        """
        Ask for reminders and events access.

        Args:
            completion: Optional callable receiving the AccessResult on the
                main context

        Returns:
            Future resolved with the same AccessResult
        """
        pending: Dict[AccessScope, Future] = {}
        for scope in SCOPES:
            future: Future = Future()
            pending[scope] = future
            try:
                self.platform.request_access(scope, self._resolver(scope, future))
            except Exception as e:
                self.logger.error(f"Failed to request {scope.value} access: {e}")
                self._settle(future, False, e)

        combined: Future = Future()
        joiner = threading.Thread(
            target=self._join,
            args=(pending, combined, completion),
            name="dayplan-access-join",
            daemon=True,
        )
        joiner.start()
        return combined

    def _resolver(self, scope: AccessScope, future: Future):
        def completion(granted, error):
            if not self._settle(future, bool(granted), error):
                self.logger.warning(f"Ignoring late or repeated {scope.value} access callback")
        return completion

    @staticmethod
    def _settle(future: Future, granted: bool, error: Any) -> bool:
        try:
            future.set_result((granted, error))
            return True
        except Exception:
            # InvalidStateError: the scope already answered.
            return False

    def _join(self, pending: Dict[AccessScope, Future], combined: Future,
              completion: Optional[Callable[[AccessResult], Any]]) -> None:
        wait(list(pending.values()), timeout=self.timeout)

        outcomes = {}
        errors = []
        for scope in SCOPES:
            future = pending[scope]
            # A cancelled future turns late callbacks into no-ops.
            if not future.done() and future.cancel():
                granted = False
                error = AccessTimeoutError(
                    f"No answer to the {scope.value} access request after "
                    f"{self.timeout:g} seconds; treating it as denied."
                )
            else:
                granted, error = future.result()
            outcomes[scope] = granted
            if error is not None:
                errors.append(self._as_exception(scope, error))

        result = AccessResult(
            reminders_granted=outcomes[AccessScope.REMINDERS],
            events_granted=outcomes[AccessScope.EVENTS],
            errors=tuple(errors),
        )
        self.logger.info(
            f"Access result: reminders={result.reminders_granted}, "
            f"events={result.events_granted}, errors={len(result.errors)}"
        )

        try:
            if completion is not None:
                self.dispatcher.dispatch(completion, result)
        finally:
            combined.set_result(result)

    @staticmethod
    def _as_exception(scope: AccessScope, error: Any) -> BaseException:
        if isinstance(error, BaseException):
            return error
        return AuthorizationError(
            f"{scope.value} access failed: {describe_platform_error(error)}"
        )
