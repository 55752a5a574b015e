"""Logging utilities."""

import logging


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for the command-line front end."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
