"""Result of ``terraform validate -json``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from tfwrap.errors import JsonParseError


@dataclass
class DiagnosticPos:
    """A position within a source file."""

    line: int
    column: int
    byte: int

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DiagnosticPos:
        """Build from a decoded JSON object."""
        return cls(line=data["line"], column=data["column"], byte=data["byte"])


@dataclass
class DiagnosticRange:
    """Source location of a diagnostic."""

    filename: str
    start: DiagnosticPos
    end: DiagnosticPos

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> DiagnosticRange:
        """Build from a decoded JSON object."""
        return cls(
            filename=data["filename"],
            start=DiagnosticPos.from_dict(data["start"]),
            end=DiagnosticPos.from_dict(data["end"]),
        )


@dataclass
class Diagnostic:
    """A diagnostic message from Terraform."""

    severity: str
    summary: str
    detail: str = ""
    range: DiagnosticRange | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Diagnostic:
        """Build from a decoded JSON object."""
        source_range = data.get("range")
        return cls(
            severity=data["severity"],
            summary=data["summary"],
            detail=data.get("detail", ""),
            range=DiagnosticRange.from_dict(source_range) if source_range is not None else None,
        )


@dataclass
class ValidationResult:
    """Outcome of validating a configuration."""

    format_version: str
    valid: bool
    error_count: int
    warning_count: int
    diagnostics: list[Diagnostic] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ValidationResult:
        """Build from a decoded JSON object."""
        return cls(
            format_version=data["format_version"],
            valid=data["valid"],
            error_count=data["error_count"],
            warning_count=data["warning_count"],
            diagnostics=[Diagnostic.from_dict(d) for d in data["diagnostics"]],
        )

    @classmethod
    def from_json(cls, text: str) -> ValidationResult:
        """Parse JSON text, raising JsonParseError on malformed input."""
        try:
            return cls.from_dict(json.loads(text))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise JsonParseError(f"failed to parse validate json: {exc}") from exc