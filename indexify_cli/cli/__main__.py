"""CLI package entry point.

Allows running the CLI as: python -m indexify_cli.cli
"""

from indexify_cli.cli.main import cli_main

if __name__ == "__main__":
    cli_main()
