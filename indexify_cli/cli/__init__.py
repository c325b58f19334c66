"""indexify CLI - Command-line interface for the indexify service.

Main entry point is in main.py which registers all command groups.

Usage:
    python -m indexify_cli          # Run CLI
    python -m indexify_cli.cli      # Also works
"""


def __getattr__(name: str):
    """Lazy import so the command modules can use cli.console freely."""
    if name == "app":
        from indexify_cli.cli.main import app

        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["app"]
