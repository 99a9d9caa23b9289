import math
from dataclasses import dataclass


class ConfigValidationError(ValueError):
    """Raised when an ExtractionConfig field has an invalid value."""


def _check_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise ConfigValidationError(f"{name}={value} must be a finite number")


def _check_positive(name: str, value: float) -> None:
    _check_finite(name, value)
    if value <= 0:
        raise ConfigValidationError(f"{name}={value} must be > 0")


def _check_non_negative(name: str, value: float) -> None:
    _check_finite(name, value)
    if value < 0:
        raise ConfigValidationError(f"{name}={value} must be >= 0")


@dataclass
class ExtractionConfig:
    """Tunables for text extraction and layout reconstruction."""

    # Vertical distance (points) under which two fragments share a row.
    y_tolerance: float = 2.0
    # Assumed width (points) of one monospace output column.
    character_width_divisor: float = 4.0
    # Emit per-fragment clustering diagnostics on the debug logger.
    enable_debug: bool = False
    # Return the reconstructed layout + page detail instead of flat text only.
    include_layout: bool = False

    # ── Fragment collection (pdfplumber word extraction) ──────────────
    collect_x_tolerance: float = 3.0
    collect_y_tolerance: float = 3.0
    # Keep spaces inside words so fragments carry whole text runs.
    collect_keep_blank_chars: bool = True

    def __post_init__(self) -> None:
        """Validate field ranges to catch misconfiguration early."""
        self.validate()

    def validate(self) -> None:
        """Re-check every field; raises :class:`ConfigValidationError`."""
        _check_positive("y_tolerance", self.y_tolerance)
        _check_positive("character_width_divisor", self.character_width_divisor)
        _check_non_negative("collect_x_tolerance", self.collect_x_tolerance)
        _check_non_negative("collect_y_tolerance", self.collect_y_tolerance)
