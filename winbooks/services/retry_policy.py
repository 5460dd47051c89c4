"""
Refresh-and-retry policy for authenticated requests.

A request is attempted once. If the API answers 401, the refresh callback
runs and the request is attempted one more time. A second 401 means the
refresh token is dead too, and InvalidTokensError is raised. Any other
failure is re-raised as is.
"""
from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from winbooks.utils.errors import HttpStatusError, InvalidTokensError, TransportError
from winbooks.utils.logger import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    response: T


@dataclass(frozen=True)
class Unauthorized:
    error: HttpStatusError


@dataclass(frozen=True)
class Failed:
    error: Exception


Outcome = Union[Ok, Unauthorized, Failed]


def classify(request_fn: Callable[[], T]) -> Outcome:
    """Run one attempt and tag its result."""
    try:
        return Ok(request_fn())
    except HttpStatusError as e:
        if e.is_unauthorized:
            return Unauthorized(e)
        return Failed(e)
    except TransportError as e:
        return Failed(e)


class RetryPolicy:
    """
    Usage:
        policy = RetryPolicy(refresh=session.refresh_auth)
        response = policy.execute(lambda: transport.send(...))
    """

    def __init__(self, refresh: Callable[[], None]):
        """
        Args:
            refresh: Called between the two attempts; must replace the
                credentials the request function will use
        """
        self._refresh = refresh

    def execute(self, request_fn: Callable[[], T]) -> T:
        """
        Run request_fn, refreshing and retrying at most once on 401.

        Raises:
            InvalidTokensError: 401 again after a refresh
            TransportError: Any other failure, unchanged
        """
        using_refreshed_credential = False

        while True:
            outcome = classify(request_fn)

            if isinstance(outcome, Ok):
                return outcome.response

            if isinstance(outcome, Unauthorized):
                if using_refreshed_credential:
                    logger.error("Request rejected with refreshed credentials")
                    raise InvalidTokensError()

                logger.info("Access token rejected (401), refreshing")
                self._refresh()
                using_refreshed_credential = True
                continue

            raise outcome.error
