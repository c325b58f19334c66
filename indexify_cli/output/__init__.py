"""Rendering of command results as tables or JSON."""

from indexify_cli.output.renderer import Format, build_table

__all__ = ["Format", "build_table"]
