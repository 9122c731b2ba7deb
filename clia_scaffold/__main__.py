"""
Main entry point for the clia_scaffold package.

When run as `python -m clia_scaffold`, it starts the Typer CLI.
"""

from clia_scaffold.cli import main

if __name__ == "__main__":
    main()
