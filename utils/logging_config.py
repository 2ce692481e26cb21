"""Logging configuration for the quiz backend."""

import logging


def configure_logging(level="INFO"):
    """Configure basic logging for the application."""
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
