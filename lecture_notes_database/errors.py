"""Error kinds raised by the stores and the auth service."""
from typing import Optional, Tuple


class StoreError(Exception):
    """Base class for every error raised by this package."""

    message = "store error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.message
        super().__init__(self.message)


class NotFoundError(StoreError):
    """No row matched a single-row lookup, an update probe, or a swap target.

    For swaps, `first_id` / `second_id` hold whichever of the two ids could
    not be resolved; the other one is None.
    """

    message = "not found"

    def __init__(
        self,
        message: Optional[str] = None,
        first_id: Optional[int] = None,
        second_id: Optional[int] = None,
    ):
        self.first_id = first_id
        self.second_id = second_id
        if message is None and (first_id is not None or second_id is not None):
            missing = ", ".join(str(i) for i in self.missing_ids)
            message = f"not found: {missing}"
        super().__init__(message)

    @property
    def missing_ids(self) -> Tuple[int, ...]:
        # Swapping a row with itself names the same id twice.
        ids = (self.first_id, self.second_id)
        return tuple(dict.fromkeys(i for i in ids if i is not None))


class NothingToUpdateError(StoreError):
    message = "nothing to update"


class EmptyFilterError(StoreError):
    message = "no filter fields provided"


class UnexpectedError(StoreError):
    """Any datastore failure: connectivity, constraint violation, bad query."""

    message = "unexpected datastore error"


class CantSwapAcrossScope(StoreError):
    message = "can't swap entities from different scopes"


class InvalidPassword(StoreError):
    message = "invalid password"


class UnauthenticatedError(StoreError):
    message = "not authenticated"


class NotAdminError(StoreError):
    message = "admin access required"
