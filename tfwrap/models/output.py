"""Output values as reported by ``terraform output -json``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping


@dataclass
class OutputValue:
    """A single Terraform output value."""

    sensitive: bool
    output_type: Any = None
    value: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OutputValue:
        """Build from a decoded JSON object; ``type`` and ``value`` may be absent."""
        return cls(
            sensitive=data["sensitive"],
            output_type=data.get("type"),
            value=data.get("value"),
        )


def parse_outputs(data: Mapping[str, Mapping[str, Any]]) -> dict[str, OutputValue]:
    """Decode the name-to-output mapping produced by ``terraform output -json``."""
    return {name: OutputValue.from_dict(item) for name, item in data.items()}