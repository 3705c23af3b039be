"""
Field State - value, validation and error reporting for form fields.

Validation failures are data, never exceptions: a field exposes
``has_error`` and ``error_message`` for the presentation layer to render,
and ``describe()`` wires the message into aria-describedby.

Usage:
    from a11y.field_state import FieldState, required, max_length

    email = FieldState("", validators=[required("Email is required")])
    email.has_error          # True
    email.set_value("a@b.c")
    email.has_error          # False

    email.set_error("Address already registered")   # e.g. from the server
    email.set_value("x@y.z")                          # clears that error
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, Generic, List, Optional, Sequence, TypeVar

from a11y.observable import Observable
from core.constants import TAB_INDEX_UNREACHABLE
from core.result import Err, Ok, Result

if TYPE_CHECKING:
    from a11y.aria_labels import AriaLabelRegistry, LabelBinding

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Returns an error message, or None when the value is acceptable
Validator = Callable[[T], Optional[str]]

# validate() without an argument checks the stored value
_CURRENT = object()


def required(message: str = "This field is required") -> Validator[Any]:
    def check(value: Any) -> Optional[str]:
        if value is None:
            return message
        if isinstance(value, str) and not value.strip():
            return message
        if isinstance(value, (list, tuple, set, dict)) and not value:
            return message
        return None
    return check


def max_length(limit: int, message: Optional[str] = None) -> Validator[Any]:
    def check(value: Any) -> Optional[str]:
        if value is not None and len(value) > limit:
            return message or f"Must be at most {limit} characters"
        return None
    return check


class FieldState(Generic[T]):
    """Form field state combining validators, external errors and disabled state."""

    def __init__(
        self,
        initial_value: T,
        validators: Optional[Sequence[Validator[T]]] = None,
        *,
        disabled: bool = False,
    ):
        self._value = initial_value
        self._validators: List[Validator[T]] = list(validators or [])
        self._validation_error: Optional[str] = None
        self._error: Optional[str] = None
        self._disabled = bool(disabled)
        self.state_changed: Observable["FieldState[T]"] = Observable("field")

        self._run_validators(initial_value)

    # ------------------------------------------------------------------
    # Value
    # ------------------------------------------------------------------

    @property
    def value(self) -> T:
        return self._value

    def set_value(self, value: T) -> None:
        """Change the value, drop any external error and revalidate."""
        self._value = value
        self._error = None
        self._run_validators(value)
        self.state_changed.notify(self)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, value: Any = _CURRENT) -> Result[T, str]:
        """
        Run the validator chain; the first message returned wins.

        Without an argument the current value is revalidated and the
        field's error state updated. With a value, that candidate is
        checked and the field is left untouched (``None`` is a valid
        candidate).
        """
        if value is _CURRENT:
            result = self._run_validators(self._value)
            self.state_changed.notify(self)
            return result
        return self._check(value)

    def _check(self, value: T) -> Result[T, str]:
        for validator in self._validators:
            message = validator(value)
            if message:
                return Err(message)
        return Ok(value)

    def _run_validators(self, value: T) -> Result[T, str]:
        result = self._check(value)
        self._validation_error = result.error
        if result.is_err():
            logger.debug(f"Validation failed: {result.error}")
        return result

    @property
    def validation_error(self) -> Optional[str]:
        return self._validation_error

    # ------------------------------------------------------------------
    # External errors
    # ------------------------------------------------------------------

    @property
    def error(self) -> Optional[str]:
        return self._error

    def set_error(self, message: Optional[str]) -> None:
        """Report an error from outside the validators (empty clears it)."""
        self._error = message or None
        self.state_changed.notify(self)

    def clear_error(self) -> None:
        self.set_error(None)

    # ------------------------------------------------------------------
    # Derived state
    # ------------------------------------------------------------------

    @property
    def is_valid(self) -> bool:
        return self._validation_error is None and self._error is None

    @property
    def has_error(self) -> bool:
        return not self.is_valid

    @property
    def error_message(self) -> Optional[str]:
        return self._validation_error or self._error

    @property
    def disabled(self) -> bool:
        return self._disabled

    @disabled.setter
    def disabled(self, value: bool) -> None:
        self._disabled = bool(value)
        self.state_changed.notify(self)

    @property
    def is_interactive(self) -> bool:
        return not self._disabled

    def disabled_props(self) -> Dict[str, Any]:
        if not self._disabled:
            return {}
        return {"disabled": True, "aria-disabled": True, "tab_index": TAB_INDEX_UNREACHABLE}

    def describe(
        self,
        registry: "AriaLabelRegistry",
        label: Optional[str] = None,
        description: Optional[str] = None,
        *,
        owner: Optional[Any] = None,
    ) -> "LabelBinding":
        """Bind label ids with the current error message included."""
        return registry.bind(label, description, self.error_message, owner=owner)

    def aria_props(self) -> Dict[str, Any]:
        props: Dict[str, Any] = {"aria-invalid": self.has_error}
        props.update(self.disabled_props())
        return props
