from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from servicebind.exceptions import BindingError

if TYPE_CHECKING:
    from typing_extensions import Self

INVOKE = "__call__"
"""Default method of a reference: the target itself is invoked."""

_TUPLE_REFERENCE_LENGTH = 2


class Reference:
    """Point at a method of a class or object, for ``Container.call``.

    When the target is a class, the container builds it before invoking the
    method. Parameters attached with ``with_params`` are passed to the method
    unless ``Container.call`` receives explicit parameters.
    """

    def __init__(self, target: Any, method: str = INVOKE) -> None:
        self._target = target
        self._method = method
        self._params: list[Any] = []

    @classmethod
    def make(cls, target: Any, method: str = INVOKE) -> Self:
        return cls(target, method)

    @classmethod
    def from_tuple(cls, reference: Sequence[Any]) -> Self:
        """Create a reference from a ``(target, method_name)`` pair.

        Raises:
            BindingError: If ``reference`` is not a two-item sequence with a
                string method name.

        """
        if len(reference) != _TUPLE_REFERENCE_LENGTH or not isinstance(reference[1], str):
            msg = (
                "A method reference must be a (target, method_name) pair. "
                f"Got {reference!r} instead."
            )
            raise BindingError(msg)
        target, method = reference
        return cls(target, method)

    def with_params(self, *params: Any) -> Self:
        """Append parameters passed to the method when it is invoked."""
        self._params.extend(params)
        return self

    @property
    def target(self) -> Any:
        return self._target

    @property
    def method(self) -> str:
        return self._method

    @property
    def parameters(self) -> list[Any]:
        return list(self._params)

    @property
    def has_parameters(self) -> bool:
        return len(self._params) > 0

    def __repr__(self) -> str:
        return f"Reference({self._target!r}, {self._method!r})"


__all__ = ["INVOKE", "Reference"]
