"""Asyncio wrapper around the Terraform command-line tool, with JSON output models and a .tf.json builder."""

__version__ = "0.4.0"