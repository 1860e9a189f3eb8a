"""Plan representation from ``terraform show -json <planfile>``."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping

from tfwrap.errors import JsonParseError
from tfwrap.models.output import OutputValue, parse_outputs
from tfwrap.models.state import Module, StateRepresentation


@dataclass
class Change:
    """Details of a resource change."""

    actions: list[str]
    before: Any = None
    after: Any = None
    after_unknown: Any = None
    before_sensitive: Any = None
    after_sensitive: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Change:
        """Build from a decoded JSON object."""
        return cls(
            actions=list(data["actions"]),
            before=data.get("before"),
            after=data.get("after"),
            after_unknown=data.get("after_unknown"),
            before_sensitive=data.get("before_sensitive"),
            after_sensitive=data.get("after_sensitive"),
        )


@dataclass
class OutputChange:
    """A change to a single output."""

    actions: list[str]
    before: Any = None
    after: Any = None
    after_unknown: Any = None
    before_sensitive: Any = None
    after_sensitive: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> OutputChange:
        """Build from a decoded JSON object."""
        return cls(
            actions=list(data["actions"]),
            before=data.get("before"),
            after=data.get("after"),
            after_unknown=data.get("after_unknown"),
            before_sensitive=data.get("before_sensitive"),
            after_sensitive=data.get("after_sensitive"),
        )


@dataclass
class ResourceChange:
    """A planned change to a single resource."""

    address: str
    mode: str
    resource_type: str
    name: str
    provider_name: str
    change: Change

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceChange:
        """Build from a decoded JSON object."""
        return cls(
            address=data["address"],
            mode=data["mode"],
            resource_type=data["type"],
            name=data["name"],
            provider_name=data["provider_name"],
            change=Change.from_dict(data["change"]),
        )


@dataclass
class PlannedValues:
    """Values the plan expects after apply."""

    root_module: Module
    outputs: dict[str, OutputValue] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlannedValues:
        """Build from a decoded JSON object."""
        return cls(
            root_module=Module.from_dict(data["root_module"]),
            outputs=parse_outputs(data.get("outputs") or {}),
        )


@dataclass
class PlanRepresentation:
    """A saved plan as shown by ``terraform show -json``."""

    format_version: str
    terraform_version: str
    planned_values: PlannedValues
    resource_changes: list[ResourceChange] = field(default_factory=list)
    output_changes: dict[str, OutputChange] = field(default_factory=dict)
    prior_state: StateRepresentation | None = None
    timestamp: str | None = None
    applyable: bool = False
    complete: bool = False
    errored: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> PlanRepresentation:
        """Build from a decoded JSON object."""
        prior = data.get("prior_state")
        return cls(
            format_version=data["format_version"],
            terraform_version=data["terraform_version"],
            planned_values=PlannedValues.from_dict(data["planned_values"]),
            resource_changes=[
                ResourceChange.from_dict(item) for item in data.get("resource_changes") or []
            ],
            output_changes={
                name: OutputChange.from_dict(item)
                for name, item in (data.get("output_changes") or {}).items()
            },
            prior_state=StateRepresentation.from_dict(prior) if prior is not None else None,
            timestamp=data.get("timestamp"),
            applyable=bool(data.get("applyable", False)),
            complete=bool(data.get("complete", False)),
            errored=bool(data.get("errored", False)),
        )

    @classmethod
    def from_json(cls, text: str) -> PlanRepresentation:
        """Parse JSON text, raising JsonParseError on malformed input."""
        try:
            return cls.from_dict(json.loads(text))
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise JsonParseError(f"failed to parse plan json: {exc}") from exc