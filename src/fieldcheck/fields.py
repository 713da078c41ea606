"""Field descriptors and field sources.

A ``FieldDescriptor`` is a snapshot of one form control: its current
value, the rule keys it declares, and its placeholder text. Sources
build descriptors fresh for every validation pass, so the engine never
sees stale UI state.

The engine resolves fields through a ``FieldSource`` — any callable
taking an optional scope (container id) and returning descriptors in
document order. ``StaticFieldSource`` is an in-memory source for tests
and non-HTML front ends; ``fieldcheck.markup.HtmlFieldSource`` reads
annotated markup.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Protocol


class FieldKind(Enum):
    """How a control is rendered, which decides marker alignment."""

    INPUT = "input"
    SELECT = "select"


@dataclass(frozen=True, slots=True)
class FieldGeometry:
    """Page position and width of a control, in pixels."""

    top: float
    left: float
    width: float


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """One control as it stands right now.

    ``rules`` is ``None`` when the control carries no rule annotation at
    all, and an empty tuple when the annotation is present but blank.
    """

    field_id: str
    value: str | None = None
    rules: tuple[str, ...] | None = None
    placeholder: str | None = None
    kind: FieldKind = FieldKind.INPUT
    geometry: FieldGeometry | None = None

    @property
    def effective_value(self) -> str | None:
        """The value rules see: placeholder text counts as empty."""
        if self.placeholder is not None and self.value == self.placeholder:
            return ""
        return self.value


def parse_rules(declaration: str | None) -> tuple[str, ...] | None:
    """Split a comma-separated rule declaration into keys.

    Keys are kept verbatim: no trimming, no case folding. A key with
    stray whitespace simply won't match the registry.

        >>> parse_rules("required,email")
        ('required', 'email')
        >>> parse_rules("") is None, parse_rules(None) is None
        (False, True)
    """
    if declaration is None:
        return None
    if not declaration:
        return ()
    return tuple(declaration.split(","))


class FieldSource(Protocol):
    """Resolves the fields a validation pass covers.

    ``scope=None`` means every visible annotated field; otherwise only
    the visible annotated fields inside the named container.
    """

    def __call__(self, scope: str | None = None) -> Sequence[FieldDescriptor]: ...


# ---------------------------------------------------------------------------
# In-memory source
# ---------------------------------------------------------------------------


@dataclass(slots=True)
class _FieldState:
    descriptor: FieldDescriptor
    containers: tuple[str, ...]
    visible: bool


@dataclass(slots=True)
class StaticFieldSource:
    """A mutable, in-memory stand-in for a rendered form.

    Register controls once, update their values as the "user" types,
    and hand the source to a ``ValidationEngine``::

        source = StaticFieldSource()
        source.add("email", rules="required,email", containers=("signup",))
        source.set_value("email", "ada@example.com")
        engine = ValidationEngine(source)
        engine.validate("signup")
    """

    _fields: dict[str, _FieldState] = field(default_factory=dict)
    _hidden_containers: set[str] = field(default_factory=set)
    _known_containers: set[str] = field(default_factory=set)

    def add(
        self,
        field_id: str,
        *,
        rules: str | None = None,
        value: str | None = None,
        placeholder: str | None = None,
        kind: FieldKind = FieldKind.INPUT,
        geometry: FieldGeometry | None = None,
        containers: Iterable[str] = (),
        visible: bool = True,
    ) -> FieldDescriptor:
        """Register a control. ``containers`` lists its ancestor ids."""
        if field_id in self._fields:
            raise ValueError(f"Field {field_id!r} is already registered")
        descriptor = FieldDescriptor(
            field_id=field_id,
            value=value,
            rules=parse_rules(rules),
            placeholder=placeholder,
            kind=kind,
            geometry=geometry,
        )
        ancestors = tuple(containers)
        self._known_containers.update(ancestors)
        self._fields[field_id] = _FieldState(descriptor, ancestors, visible)
        return descriptor

    def set_value(self, field_id: str, value: str | None) -> None:
        state = self._fields[field_id]
        state.descriptor = replace(state.descriptor, value=value)

    def set_visible(self, field_id: str, visible: bool) -> None:
        self._fields[field_id].visible = visible

    def hide_container(self, container_id: str) -> None:
        self._hidden_containers.add(container_id)

    def show_container(self, container_id: str) -> None:
        self._hidden_containers.discard(container_id)

    def get(self, field_id: str) -> FieldDescriptor:
        """Current descriptor for *field_id*."""
        return self._fields[field_id].descriptor

    def __call__(self, scope: str | None = None) -> list[FieldDescriptor]:
        if scope is not None and (
            scope not in self._known_containers or scope in self._hidden_containers
        ):
            return []
        resolved: list[FieldDescriptor] = []
        for state in self._fields.values():
            if state.descriptor.rules is None or not state.visible:
                continue
            if self._hidden_containers.intersection(state.containers):
                continue
            if scope is not None and scope not in state.containers:
                continue
            resolved.append(state.descriptor)
        return resolved
