"""Server-side marker rendering with kida.

Turns displayed markers into HTML and splices them into the document
they belong to, immediately before each failing field — the same spot
a browser adapter would insert them::

    source = HtmlFieldSource(page, values=form)
    engine = ValidationEngine(source)
    if not engine.validate("signup", clear_prior_errors=True):
        page = render_markers_into(source, engine.board.markers)

Messages are autoescaped.
"""

from collections.abc import Iterable
from functools import cache

from kida import DictLoader, Environment

from fieldcheck.config import ValidationConfig
from fieldcheck.markers import Marker
from fieldcheck.markup import HtmlFieldSource

_MARKER_TEMPLATE = (
    '<div class="{{ css_class }}" data-field="{{ field_id }}" data-marker="{{ marker_id }}"'
    '{% if style %} style="{{ style }}"{% end %}>{{ message }}</div>'
)


@cache
def _environment() -> Environment:
    return Environment(
        loader=DictLoader({"fieldcheck/marker.html": _MARKER_TEMPLATE}),
        autoescape=True,
    )


def render_marker(marker: Marker, config: ValidationConfig | None = None) -> str:
    """Render one marker as a ``<div>`` carrying the marker class.

    *config* overrides the class the marker was created with.
    """
    template = _environment().get_template("fieldcheck/marker.html")
    return template.render({
        "css_class": config.marker_class if config is not None else marker.css_class,
        "field_id": marker.field_id,
        "marker_id": marker.marker_id,
        "message": marker.message,
        "style": marker.placement.css() if marker.placement is not None else "",
    })


def render_markers_into(
    source: HtmlFieldSource,
    markers: Iterable[Marker],
    config: ValidationConfig | None = None,
) -> str:
    """Return ``source.document`` with each marker placed before its field.

    Markers for fields the source doesn't know are dropped. Several
    markers on one field keep their display order, oldest first.
    """
    insertions: dict[int, list[str]] = {}
    for marker in markers:
        offset = source.offset_of(marker.field_id)
        if offset is None:
            continue
        insertions.setdefault(offset, []).append(render_marker(marker, config))

    document = source.document
    for offset in sorted(insertions, reverse=True):
        document = document[:offset] + "".join(insertions[offset]) + document[offset:]
    return document
