"""fieldcheck — declarative validation for annotated form fields.

Fields declare a comma-separated rule list; the engine runs the rules in
order, stops at the first failure, and shows that rule's message in a
marker next to the field.

Basic usage::

    from fieldcheck import StaticFieldSource, ValidationEngine

    source = StaticFieldSource()
    source.add("email", rules="required,email", value="ada@")
    engine = ValidationEngine(source)

    engine.validate()               # False
    engine.board.markers[0].message  # "Invalid email address"

Validating submitted HTML forms server-side::

    from fieldcheck import HtmlFieldSource, ValidationEngine, render_markers_into

    source = HtmlFieldSource(page, values=form)
    engine = ValidationEngine(source)
    if not engine.validate("checkout"):
        page = render_markers_into(source, engine.board.markers)
"""

__version__ = "0.1.0.dev0"
__all__ = [
    "REGISTRY",
    "ConfigurationError",
    "FieldDescriptor",
    "FieldGeometry",
    "FieldKind",
    "FieldOutcome",
    "FieldSource",
    "FieldcheckError",
    "HtmlFieldSource",
    "Marker",
    "MarkerBoard",
    "MissingRulesError",
    "RuleKey",
    "ScopeOutcome",
    "StaticFieldSource",
    "SubmitEvent",
    "ValidationConfig",
    "ValidationEngine",
    "ValidationResult",
    "bind_submit_trigger",
    "lookup",
    "render_marker",
    "render_markers_into",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import fieldcheck`` fast and defers the kida import until
    rendering is actually used.
    """
    if name == "ValidationEngine":
        from fieldcheck.engine import ValidationEngine

        return ValidationEngine

    if name == "ValidationConfig":
        from fieldcheck.config import ValidationConfig

        return ValidationConfig

    if name in ("REGISTRY", "RuleKey", "lookup"):
        from fieldcheck import rules as _rules

        return getattr(_rules, name)

    if name in ("FieldOutcome", "ScopeOutcome", "ValidationResult"):
        from fieldcheck import result as _result

        return getattr(_result, name)

    if name in (
        "FieldDescriptor",
        "FieldGeometry",
        "FieldKind",
        "FieldSource",
        "StaticFieldSource",
    ):
        from fieldcheck import fields as _fields

        return getattr(_fields, name)

    if name in ("Marker", "MarkerBoard"):
        from fieldcheck import markers as _markers

        return getattr(_markers, name)

    if name == "HtmlFieldSource":
        from fieldcheck.markup import HtmlFieldSource

        return HtmlFieldSource

    if name in ("SubmitEvent", "bind_submit_trigger"):
        from fieldcheck import binding as _binding

        return getattr(_binding, name)

    if name in ("render_marker", "render_markers_into"):
        from fieldcheck import render as _render

        return getattr(_render, name)

    if name in ("ConfigurationError", "FieldcheckError", "MissingRulesError"):
        from fieldcheck import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
