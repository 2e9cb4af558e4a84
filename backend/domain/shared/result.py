"""Tagged success/failure result.

Application components never raise across their public boundary: they
return ``Ok(value)`` or ``Err(error)`` where ``error`` is an
``InventoryDomainError``. Exceptions raised inside a component are
converted with ``to_err``.
"""

from dataclasses import dataclass
from typing import Generic, NoReturn, TypeVar, Union

from domain.shared.errors import InventoryDomainError, PersistenceError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome carrying a value."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome carrying a typed domain error."""

    error: InventoryDomainError

    @property
    def ok(self) -> bool:
        return False

    @property
    def kind(self) -> str:
        return self.error.kind

    @property
    def message(self) -> str:
        return self.error.message

    def unwrap(self) -> NoReturn:
        raise self.error


Result = Union[Ok[T], Err]


def to_err(exc: Exception, fallback_message: str) -> Err:
    """
    Convert an exception into an ``Err``.

    Domain errors are kept as-is; anything else is an unexpected
    infrastructure failure and is wrapped in ``PersistenceError``.

    Args:
        exc: Exception caught at a component boundary
        fallback_message: Prefix used for non-domain exceptions

    Returns:
        Err wrapping a domain error
    """
    if isinstance(exc, InventoryDomainError):
        return Err(exc)
    detail = str(exc) or exc.__class__.__name__
    return Err(PersistenceError(f"{fallback_message}: {detail}"))
