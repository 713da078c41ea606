"""Submit-trigger binding — validate a container before a submit proceeds.

Binding is an explicit call owned by the presentation layer; importing
fieldcheck never wires anything up on its own::

    binding = bind_submit_trigger(engine, "checkout", button)
    # button.on_click(binding) has been called; each click validates
    # the "checkout" container and suppresses the default action on failure.

Any object exposing ``on_click(handler)`` can act as a trigger. The
handler receives a ``SubmitEvent``-compatible object.
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from fieldcheck.engine import ValidationEngine

logger = logging.getLogger("fieldcheck.binding")


class Cancellable(Protocol):
    """An event whose default action can be suppressed."""

    def prevent_default(self) -> None: ...


class Trigger(Protocol):
    """A control that can notify a handler when it is activated."""

    def on_click(self, handler: "SubmitBinding") -> object: ...


@dataclass(slots=True)
class SubmitEvent:
    """A minimal submit/click event for non-browser front ends and tests."""

    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass(frozen=True, slots=True)
class SubmitBinding:
    """Validates ``container_id`` whenever it is called with an event."""

    engine: ValidationEngine
    container_id: str
    clear_prior_errors: bool = False

    def __call__(self, event: Cancellable) -> bool:
        passed = self.engine.validate(self.container_id, self.clear_prior_errors)
        if not passed:
            logger.debug("Submit blocked: %r failed validation", self.container_id)
            event.prevent_default()
        return passed


def bind_submit_trigger(
    engine: ValidationEngine,
    container_id: str,
    trigger: Trigger | None = None,
    *,
    clear_prior_errors: bool = False,
) -> SubmitBinding:
    """Create a binding that validates *container_id* on submit.

    Args:
        engine: The engine that runs the validation.
        container_id: Container whose annotated fields are validated.
        trigger: If given, the binding is registered through
            ``trigger.on_click``.
        clear_prior_errors: Remove displayed markers before each pass.

    Returns:
        The binding, callable with any event exposing ``prevent_default()``.
    """
    binding = SubmitBinding(engine, container_id, clear_prior_errors)
    if trigger is not None:
        trigger.on_click(binding)
    return binding
