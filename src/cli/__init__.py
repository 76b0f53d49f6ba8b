"""Main CLI application module.

This module provides the main entry point for the TechyPark deployment CLI.
Commands are organized by deployment target.

Command Groups:
- gke: Minimal GKE deployment (up, down, status, manifests)
"""

from typing import Annotated

import typer

from src.utils.log_config import configure_logging

from .commands import gke_app

# Create the main CLI application
app = typer.Typer(
    help="🚀 TechyPark CLI - Cloud Deployment Tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Register deployment target command groups
app.add_typer(gke_app, name="gke", help="Google Kubernetes Engine commands")


@app.callback()
def _configure(
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every executed command",
        ),
    ] = False,
) -> None:
    configure_logging(verbose)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
