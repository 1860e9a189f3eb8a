"""Builder for Terraform JSON configuration (``.tf.json``) files."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any


def _sorted_value(value: Any) -> Any:
    """Return a copy of a JSON-like value with every object's keys sorted."""
    if isinstance(value, dict):
        return {key: _sorted_value(value[key]) for key in sorted(value)}
    if isinstance(value, (list, tuple)):
        return [_sorted_value(item) for item in value]
    return value


class TerraformConfig:
    """Chainable builder producing a configuration Terraform reads like an HCL file.

    Every builder method updates the configuration in place and returns it,
    so calls can be chained.
    """

    def __init__(self) -> None:
        self._required_providers: dict[str, dict[str, str]] = {}
        self._backend: dict[str, Any] | None = None
        self._has_terraform_block = False
        self._providers: dict[str, Any] = {}
        self._resources: dict[str, dict[str, Any]] = {}
        self._data: dict[str, dict[str, Any]] = {}
        self._variables: dict[str, Any] = {}
        self._outputs: dict[str, Any] = {}
        self._locals: dict[str, Any] = {}
        self._modules: dict[str, Any] = {}

    def __repr__(self) -> str:
        return f"TerraformConfig({self.to_json()})"

    def required_provider(self, name: str, source: str, version: str) -> TerraformConfig:
        """Add a provider to the ``required_providers`` block."""
        self._has_terraform_block = True
        self._required_providers[name] = {"source": source, "version": version}
        return self

    def backend(self, backend_type: str, config: Any) -> TerraformConfig:
        """Configure the state backend, replacing any earlier one."""
        self._has_terraform_block = True
        self._backend = {backend_type: config}
        return self

    def provider(self, name: str, config: Any) -> TerraformConfig:
        """Configure a provider."""
        self._providers[name] = config
        return self

    def resource(self, resource_type: str, name: str, config: Any) -> TerraformConfig:
        """Add a managed resource."""
        self._resources.setdefault(resource_type, {})[name] = config
        return self

    def data(self, data_type: str, name: str, config: Any) -> TerraformConfig:
        """Add a data source."""
        self._data.setdefault(data_type, {})[name] = config
        return self

    def variable(self, name: str, config: Any) -> TerraformConfig:
        """Add an input variable."""
        self._variables[name] = config
        return self

    def output(self, name: str, config: Any) -> TerraformConfig:
        """Add an output."""
        self._outputs[name] = config
        return self

    def local(self, name: str, value: Any) -> TerraformConfig:
        """Add a local value."""
        self._locals[name] = value
        return self

    def module(self, name: str, config: Any) -> TerraformConfig:
        """Add a module call."""
        self._modules[name] = config
        return self

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration as a JSON-ready dictionary; empty blocks are left out."""
        result: dict[str, Any] = {}
        if self._has_terraform_block:
            block: dict[str, Any] = {}
            if self._required_providers:
                block["required_providers"] = _sorted_value(self._required_providers)
            if self._backend is not None:
                block["backend"] = _sorted_value(self._backend)
            result["terraform"] = block
        sections = (
            ("provider", self._providers),
            ("resource", self._resources),
            ("data", self._data),
            ("variable", self._variables),
            ("output", self._outputs),
            ("locals", self._locals),
            ("module", self._modules),
        )
        for key, section in sections:
            if section:
                result[key] = _sorted_value(section)
        return result

    def to_json(self) -> str:
        """Serialise to compact JSON."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)

    def to_json_pretty(self) -> str:
        """Serialise to indented JSON."""
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def write_to(self, path: str | os.PathLike[str]) -> None:
        """Write the pretty JSON to ``path``, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.to_json_pretty(), encoding="utf-8")

    def write_to_tempdir(self) -> tempfile.TemporaryDirectory[str]:
        """Write ``main.tf.json`` into a new temporary directory and return it.

        The directory is removed when the returned object is cleaned up or
        used as a context manager and exited.
        """
        directory = tempfile.TemporaryDirectory()
        try:
            self.write_to(Path(directory.name) / "main.tf.json")
        except BaseException:
            directory.cleanup()
            raise
        return directory