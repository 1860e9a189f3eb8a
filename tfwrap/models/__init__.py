"""Dataclasses for Terraform's JSON output: versions, validation, state, plans and outputs."""