"""Validation configuration.

ValidationConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from dataclasses import dataclass

from fieldcheck.errors import ConfigurationError

_LOG_LEVELS = frozenset({"debug", "info", "warning", "error", "critical"})


@dataclass(frozen=True, slots=True)
class ValidationConfig:
    """Engine and adapter configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ValidationConfig(marker_class="form-error", marker_top_offset=4)
    """

    # Markup annotations
    rule_attribute: str = "data-validate"
    submitter_attribute: str = "data-submitter"

    # Marker presentation
    marker_class: str = "validation-error"
    marker_top_offset: float = 3.0  # Below the field's top edge
    select_left_inset: float = 5.0  # Selects get a fixed inset instead of right alignment
    char_width: float = 7.0  # Width estimate per character when the adapter cannot measure

    # Logging (applied by the CLI; the library never installs handlers)
    log_level: str = "warning"

    def __post_init__(self) -> None:
        for name in ("rule_attribute", "submitter_attribute", "marker_class"):
            if not getattr(self, name).strip():
                raise ConfigurationError(f"{name} must not be empty")
        if self.marker_top_offset < 0:
            raise ConfigurationError("marker_top_offset must be >= 0")
        if self.select_left_inset < 0:
            raise ConfigurationError("select_left_inset must be >= 0")
        if self.char_width <= 0:
            raise ConfigurationError("char_width must be > 0")
        if self.log_level.lower() not in _LOG_LEVELS:
            levels = ", ".join(sorted(_LOG_LEVELS))
            raise ConfigurationError(f"log_level must be one of: {levels}")
