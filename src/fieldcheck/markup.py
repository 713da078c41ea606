"""HTML field source — annotated controls discovered from markup.

Scans an HTML document for ``input``, ``select`` and ``textarea``
elements carrying the rule attribute (``data-validate`` by default)
and serves them to the engine as ``FieldDescriptor`` values. Submitted
form data can be layered on top so the server validates what the user
actually sent::

    form = await request.form()
    source = HtmlFieldSource(page_html, values=form)
    engine = ValidationEngine(source)
    if not engine.validate("signup"):
        ...

Visibility follows the browser's layout rules: an element is hidden
when it or any ancestor has the ``hidden`` attribute or an inline
``display: none``, and ``<input type="hidden">`` is never visible.
``visibility: hidden`` still occupies layout, so it counts as visible.

A field's id is its ``id`` attribute, else its ``name``. Controls that
share a name, such as a radio group, get numbered ids (``plan``,
``plan-2``, ...) so each keeps its own outcome and marker position;
submitted values are still looked up by name.
"""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from html.parser import HTMLParser

from fieldcheck.config import ValidationConfig
from fieldcheck.fields import FieldDescriptor, FieldKind, parse_rules

logger = logging.getLogger("fieldcheck.markup")

_FIELD_TAGS = frozenset({"input", "select", "textarea"})

_VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "param", "source", "track", "wbr",
})

# Start tags that implicitly close an open <p>
_CLOSES_P = frozenset({
    "address", "article", "aside", "blockquote", "details", "dialog", "div",
    "dl", "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2",
    "h3", "h4", "h5", "h6", "header", "hgroup", "hr", "main", "menu", "nav",
    "ol", "p", "pre", "section", "table", "ul",
})

# An open <p> above one of these is out of reach of the implicit close
_P_SCOPE_BOUNDARIES = frozenset({
    "applet", "button", "caption", "html", "marquee", "object", "table",
    "td", "template", "th",
})

_DISPLAY_NONE_RE = re.compile(r"(?:^|;)\s*display\s*:\s*none\s*(?:!important\s*)?(?:;|$)", re.IGNORECASE)


@dataclass(frozen=True, slots=True)
class SubmitTrigger:
    """A control annotated with the submitter attribute."""

    label: str
    container_id: str


@dataclass(slots=True)
class _ScannedField:
    field_id: str
    name: str | None
    declaration: str | None
    placeholder: str | None
    value: str | None
    kind: FieldKind
    containers: tuple[str, ...]
    visible: bool
    offset: int
    options: list[tuple[str, bool]] = field(default_factory=list)


@dataclass(slots=True)
class _OpenElement:
    tag: str
    element_id: str | None
    hidden: bool


def _is_hidden(tag: str, attrs: dict[str, str | None]) -> bool:
    if "hidden" in attrs:
        return True
    if tag == "input" and (attrs.get("type") or "").lower() == "hidden":
        return True
    return bool(_DISPLAY_NONE_RE.search(attrs.get("style") or ""))


class _FormScanner(HTMLParser):
    """Single pass over a document collecting annotated fields."""

    def __init__(self, document: str, config: ValidationConfig) -> None:
        super().__init__(convert_charrefs=True)
        self._config = config
        self._line_starts = [0]
        for line in document.split("\n")[:-1]:
            self._line_starts.append(self._line_starts[-1] + len(line) + 1)
        self._stack: list[_OpenElement] = []
        self._select: _ScannedField | None = None
        self._option: tuple[str | None, bool] | None = None
        self._textarea: _ScannedField | None = None
        self._text: list[str] = []
        self._unnamed = 0
        self._field_ids: set[str] = set()
        self.fields: list[_ScannedField] = []
        self.triggers: list[SubmitTrigger] = []
        # element id -> hidden (itself or through an ancestor)
        self.containers: dict[str, bool] = {}

    def _offset(self) -> int:
        line, col = self.getpos()
        return self._line_starts[line - 1] + col

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in _CLOSES_P:
            self._close_paragraph()
        attributes = dict(attrs)
        element_id = attributes.get("id") or None
        hidden = _is_hidden(tag, attributes) or any(o.hidden for o in self._stack)
        if element_id is not None:
            self.containers.setdefault(element_id, hidden)

        container = attributes.get(self._config.submitter_attribute)
        if container:
            label = element_id or attributes.get("name") or tag
            self.triggers.append(SubmitTrigger(label, container))

        if tag == "option" and self._select is not None:
            self._finish_option()
            self._option = (attributes.get("value"), "selected" in attributes)
            self._text = []

        if tag in _FIELD_TAGS and self._config.rule_attribute in attributes:
            scanned = self._scan_field(tag, attributes, element_id, hidden)
            self.fields.append(scanned)
            if tag == "select":
                self._select = scanned
            elif tag == "textarea":
                self._textarea = scanned
                self._text = []

        if tag not in _VOID_TAGS:
            self._stack.append(_OpenElement(tag, element_id, hidden))

    def _close_paragraph(self) -> None:
        for index in range(len(self._stack) - 1, -1, -1):
            open_tag = self._stack[index].tag
            if open_tag == "p":
                del self._stack[index:]
                return
            if open_tag in _P_SCOPE_BOUNDARIES:
                return

    def handle_endtag(self, tag: str) -> None:
        if tag == "option":
            self._finish_option()
        elif tag == "select" and self._select is not None:
            self._finish_option()
            self._select.value = _selected_value(self._select.options)
            self._select = None
        elif tag == "textarea" and self._textarea is not None:
            self._textarea.value = "".join(self._text).removeprefix("\n")
            self._textarea = None
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index].tag == tag:
                del self._stack[index:]
                break

    def handle_data(self, data: str) -> None:
        if self._option is not None or self._textarea is not None:
            self._text.append(data)

    def _finish_option(self) -> None:
        if self._option is None or self._select is None:
            return
        value, selected = self._option
        if value is None:
            value = " ".join("".join(self._text).split())
        self._select.options.append((value, selected))
        self._option = None

    def _scan_field(
        self,
        tag: str,
        attrs: dict[str, str | None],
        element_id: str | None,
        hidden: bool,
    ) -> _ScannedField:
        name = attrs.get("name") or None
        field_id = element_id or name
        if field_id is None:
            self._unnamed += 1
            field_id = f"{tag}-{self._unnamed}"
        # Radio groups and repeated names share a name; ids stay unique
        base_id, suffix = field_id, 1
        while field_id in self._field_ids:
            suffix += 1
            field_id = f"{base_id}-{suffix}"
        self._field_ids.add(field_id)
        value: str | None = None
        if tag == "input":
            value = attrs.get("value")
            input_type = (attrs.get("type") or "text").lower()
            if value is None:
                value = "on" if input_type in ("checkbox", "radio") else ""
        return _ScannedField(
            field_id=field_id,
            name=name,
            declaration=attrs.get(self._config.rule_attribute) or "",
            placeholder=attrs.get("placeholder"),
            value=value,
            kind=FieldKind.SELECT if tag == "select" else FieldKind.INPUT,
            containers=tuple(o.element_id for o in self._stack if o.element_id),
            visible=not hidden,
            offset=self._offset(),
        )


def _selected_value(options: list[tuple[str, bool]]) -> str | None:
    """A select's value: the last selected option, else the first one."""
    if not options:
        return None
    selected = [value for value, is_selected in options if is_selected]
    return selected[-1] if selected else options[0][0]


class HtmlFieldSource:
    """A ``FieldSource`` backed by an HTML document.

    Args:
        document: The rendered page or form fragment.
        values: Submitted values keyed by field name (or id), e.g. a
            ``FormData`` mapping. Override the values in the markup.
        config: Names of the rule and submitter attributes.
    """

    __slots__ = ("_containers", "_fields", "_triggers", "_values", "document")

    def __init__(
        self,
        document: str,
        values: Mapping[str, str] | None = None,
        *,
        config: ValidationConfig | None = None,
    ) -> None:
        scanner = _FormScanner(document, config or ValidationConfig())
        scanner.feed(document)
        scanner.close()
        self.document = document
        self._fields = scanner.fields
        self._triggers = tuple(scanner.triggers)
        self._containers = scanner.containers
        self._values = values
        logger.debug(
            "Scanned %d annotated field(s), %d submit trigger(s)",
            len(self._fields),
            len(self._triggers),
        )

    def __call__(self, scope: str | None = None) -> list[FieldDescriptor]:
        if scope is not None and self._containers.get(scope, True):
            return []
        return [
            self._describe(scanned)
            for scanned in self._fields
            if scanned.visible and (scope is None or scope in scanned.containers)
        ]

    def submit_triggers(self) -> tuple[SubmitTrigger, ...]:
        """Controls declaring which container they validate, in document order."""
        return self._triggers

    def offset_of(self, field_id: str) -> int | None:
        """Character offset of the field's start tag in ``document``."""
        for scanned in self._fields:
            if scanned.field_id == field_id:
                return scanned.offset
        return None

    def _describe(self, scanned: _ScannedField) -> FieldDescriptor:
        value = scanned.value
        if self._values is not None:
            for key in (scanned.name, scanned.field_id):
                if key is not None and key in self._values:
                    value = self._values[key]
                    break
        return FieldDescriptor(
            field_id=scanned.field_id,
            value=value,
            rules=parse_rules(scanned.declaration),
            placeholder=scanned.placeholder,
            kind=scanned.kind,
        )
