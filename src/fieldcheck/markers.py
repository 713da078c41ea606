"""Error markers — creation, placement, and one-shot dismissal.

A marker is the visible error indicator for one failing field. The
``MarkerBoard`` owns every marker currently displayed; it is the only
mutable state shared between validation passes.

Placement policy: the marker sits immediately before its field, a small
fixed offset below the field's top edge. Inputs get the marker
right-aligned to the field's right edge; selects get a fixed left inset
so the marker doesn't cover the dropdown arrow.

Dismissal: every marker arms two one-shot triggers, activating the
marker itself and the field regaining focus. Whichever fires first
removes the marker, disarms the other, and hands focus back to the
field. Dismissing an already-dismissed marker is a no-op.
"""

import itertools
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fieldcheck.config import ValidationConfig
from fieldcheck.errors import UnknownMarkerError
from fieldcheck.fields import FieldDescriptor, FieldGeometry, FieldKind

logger = logging.getLogger("fieldcheck.markers")


@dataclass(frozen=True, slots=True)
class MarkerPlacement:
    """Where a marker is drawn, in page pixels."""

    top: float
    left: float
    margin_left: float

    def css(self) -> str:
        """Inline style declaring this placement."""
        return (
            f"position: absolute; top: {self.top:g}px; left: {self.left:g}px; "
            f"margin-left: {self.margin_left:g}px"
        )


def place_marker(
    geometry: FieldGeometry,
    kind: FieldKind,
    marker_width: float,
    config: ValidationConfig,
) -> MarkerPlacement:
    """Compute a marker's placement next to a field.

    Args:
        geometry: The field's page position and width.
        kind: Inputs are right-aligned, selects use a fixed inset.
        marker_width: Rendered width of the marker.
        config: Supplies the top offset and select inset.
    """
    if kind is FieldKind.SELECT:
        margin_left = config.select_left_inset
    else:
        margin_left = geometry.width - marker_width
    return MarkerPlacement(
        top=geometry.top + config.marker_top_offset,
        left=geometry.left,
        margin_left=margin_left,
    )


class OneShot:
    """A handler that runs at most once, then detaches itself.

    Calling a fired or detached trigger does nothing and returns False.
    """

    __slots__ = ("_handler",)

    def __init__(self, handler: Callable[[], object]) -> None:
        self._handler: Callable[[], object] | None = handler

    @property
    def armed(self) -> bool:
        return self._handler is not None

    def detach(self) -> None:
        self._handler = None

    def __call__(self) -> bool:
        handler = self._handler
        if handler is None:
            return False
        self._handler = None
        handler()
        return True


@dataclass(frozen=True, slots=True)
class Marker:
    """One displayed error marker.

    ``dismiss`` removes this marker from its board. It is safe to call
    any number of times; only the first call removes anything.
    """

    marker_id: int
    field_id: str
    message: str
    css_class: str
    kind: FieldKind = FieldKind.INPUT
    placement: MarkerPlacement | None = None
    dismiss: Callable[[], bool] = field(default=lambda: False, compare=False, repr=False)


@dataclass(slots=True)
class _Triggers:
    on_activate: OneShot
    on_focus: OneShot

    def detach(self) -> None:
        self.on_activate.detach()
        self.on_focus.detach()


class MarkerBoard:
    """The set of markers currently displayed.

    Args:
        config: Marker class name and placement constants.
        focus: Called with a field id when a dismissal returns focus to
            that field. Adapters wire this to their toolkit's focus call.
        measure: Returns the rendered width of a marker message. Falls
            back to ``len(message) * config.char_width``.
    """

    __slots__ = ("_config", "_focus", "_ids", "_markers", "_measure", "_triggers")

    def __init__(
        self,
        config: ValidationConfig | None = None,
        *,
        focus: Callable[[str], object] | None = None,
        measure: Callable[[str], float] | None = None,
    ) -> None:
        self._config = config or ValidationConfig()
        self._focus = focus
        self._measure = measure
        self._ids = itertools.count(1)
        self._markers: dict[int, Marker] = {}
        self._triggers: dict[int, _Triggers] = {}

    # -- Queries ----------------------------------------------------------

    @property
    def markers(self) -> tuple[Marker, ...]:
        """Displayed markers, oldest first."""
        return tuple(self._markers.values())

    def for_field(self, field_id: str) -> tuple[Marker, ...]:
        return tuple(m for m in self._markers.values() if m.field_id == field_id)

    def get(self, marker_id: int) -> Marker:
        try:
            return self._markers[marker_id]
        except KeyError:
            raise UnknownMarkerError(marker_id) from None

    def __len__(self) -> int:
        return len(self._markers)

    def __contains__(self, marker_id: object) -> bool:
        return marker_id in self._markers

    # -- Lifecycle --------------------------------------------------------

    def display(self, field: FieldDescriptor, message: str) -> Marker:
        """Create and show a marker for *field*."""
        marker_id = next(self._ids)
        placement = None
        if field.geometry is not None:
            placement = place_marker(
                field.geometry, field.kind, self._marker_width(message), self._config
            )

        def dismiss() -> bool:
            return self.dismiss(marker_id)

        marker = Marker(
            marker_id=marker_id,
            field_id=field.field_id,
            message=message,
            css_class=self._config.marker_class,
            kind=field.kind,
            placement=placement,
            dismiss=dismiss,
        )
        self._markers[marker_id] = marker
        self._triggers[marker_id] = _Triggers(OneShot(dismiss), OneShot(dismiss))
        logger.debug("Marker %d shown on %r: %s", marker_id, field.field_id, message)
        return marker

    def dismiss(self, marker_id: int) -> bool:
        """Remove a marker and return focus to its field.

        Returns False when the marker was already gone.
        """
        marker = self._markers.pop(marker_id, None)
        if marker is None:
            return False
        self._triggers.pop(marker_id).detach()
        logger.debug("Marker %d dismissed from %r", marker_id, marker.field_id)
        if self._focus is not None:
            self._focus(marker.field_id)
        return True

    def clear(self) -> int:
        """Remove every marker without moving focus. Returns how many were removed."""
        removed = len(self._markers)
        for triggers in self._triggers.values():
            triggers.detach()
        self._markers.clear()
        self._triggers.clear()
        if removed:
            logger.debug("Cleared %d marker(s)", removed)
        return removed

    # -- User interaction -------------------------------------------------

    def activate(self, marker_id: int) -> bool:
        """The user clicked or otherwise activated a marker."""
        triggers = self._triggers.get(marker_id)
        if triggers is None:
            return False
        return triggers.on_activate()

    def field_focused(self, field_id: str) -> int:
        """A field regained focus. Dismisses its markers; returns how many."""
        pending = [
            triggers.on_focus
            for marker_id, triggers in self._triggers.items()
            if self._markers[marker_id].field_id == field_id
        ]
        before = len(self._markers)
        for trigger in pending:
            trigger()
        return before - len(self._markers)

    def _marker_width(self, message: str) -> float:
        if self._measure is not None:
            return self._measure(message)
        return len(message) * self._config.char_width
