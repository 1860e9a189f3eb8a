"""State representation from ``terraform show -json``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from tfwrap.errors import JsonParseError
from tfwrap.models.output import OutputValue, parse_outputs


@dataclass
class Resource:
    """A resource in the state or plan."""

    address: str
    mode: str
    resource_type: str
    name: str
    provider_name: str
    schema_version: int
    values: Any = None
    sensitive_values: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Resource:
        """Build from a decoded JSON object."""
        return cls(
            address=data["address"],
            mode=data["mode"],
            resource_type=data["type"],
            name=data["name"],
            provider_name=data["provider_name"],
            schema_version=data["schema_version"],
            values=data.get("values"),
            sensitive_values=data.get("sensitive_values"),
        )


@dataclass
class ChildModule:
    """A child module with its resources and nested modules."""

    address: str
    resources: list[Resource] = field(default_factory=list)
    child_modules: list[ChildModule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChildModule:
        """Build from a decoded JSON object."""
        return cls(
            address=data["address"],
            resources=[Resource.from_dict(r) for r in data.get("resources") or []],
            child_modules=[cls.from_dict(m) for m in data.get("child_modules") or []],
        )


@dataclass
class Module:
    """A root module holding resources and child modules."""

    resources: list[Resource] = field(default_factory=list)
    child_modules: list[ChildModule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Module:
        """Build from a decoded JSON object."""
        return cls(
            resources=[Resource.from_dict(r) for r in data.get("resources") or []],
            child_modules=[ChildModule.from_dict(m) for m in data.get("child_modules") or []],
        )


@dataclass
class StateValues:
    """Top-level state values."""

    root_module: Module
    outputs: dict[str, OutputValue] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StateValues:
        """Build from a decoded JSON object."""
        return cls(
            root_module=Module.from_dict(data["root_module"]),
            outputs=parse_outputs(data.get("outputs") or {}),
        )


@dataclass
class StateRepresentation:
    """Current state as shown by ``terraform show -json``."""

    format_version: str
    terraform_version: str
    values: StateValues

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> StateRepresentation:
        """Build from a decoded JSON object."""
        return cls(
            format_version=data["format_version"],
            terraform_version=data["terraform_version"],
            values=StateValues.from_dict(data["values"]),
        )

    @classmethod
    def from_json(cls, text: str) -> StateRepresentation:
        """Parse JSON text, raising JsonParseError on malformed input."""
        try:
            return cls.from_dict(json.loads(text))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise JsonParseError(f"failed to parse state json: {exc}") from exc