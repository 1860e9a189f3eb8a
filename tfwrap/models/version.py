"""Version information from ``terraform version -json``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from tfwrap.errors import JsonParseError


@dataclass
class VersionInfo:
    """Terraform version, platform and selected providers."""

    terraform_version: str
    platform: str
    terraform_outdated: bool
    provider_selections: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> VersionInfo:
        """Build from a decoded JSON object."""
        return cls(
            terraform_version=data["terraform_version"],
            platform=data["platform"],
            terraform_outdated=data["terraform_outdated"],
            provider_selections=dict(data["provider_selections"]),
        )

    @classmethod
    def from_json(cls, text: str) -> VersionInfo:
        """Parse JSON text, raising JsonParseError on malformed input."""
        try:
            return cls.from_dict(json.loads(text))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise JsonParseError(f"failed to parse version json: {exc}") from exc