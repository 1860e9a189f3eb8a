"""Builders for the version, validate, state, workspace and test subcommands."""