"""fieldcheck exception hierarchy.

Shared across the engine, marker board, and adapters so every module
raises and catches the same types. Rule failures are never exceptions;
they are ``ValidationResult`` values.
"""


class FieldcheckError(Exception):
    """Base for all fieldcheck-specific errors."""


class ConfigurationError(FieldcheckError):
    """Raised when a ``ValidationConfig`` is invalid.

    Raised from ``ValidationConfig.__post_init__`` so a bad config never
    reaches the engine.
    """


class MissingRulesError(FieldcheckError):
    """Raised when a field is validated without any rule list.

    ``validate_field`` needs either an explicit rule string or a field
    annotated with one. Adapters should only hand annotated fields to
    the engine.
    """

    def __init__(self, field_id: str) -> None:
        self.field_id = field_id
        super().__init__(f"Field {field_id!r} declares no validation rules")


class UnknownMarkerError(FieldcheckError, KeyError):  # noqa: N818
    """No marker with the given id is currently displayed."""

    def __init__(self, marker_id: int) -> None:
        self.marker_id = marker_id
        super().__init__(f"No displayed marker with id {marker_id}")

    def __str__(self) -> str:
        return self.args[0]
