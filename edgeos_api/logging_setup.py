"""Logging configuration for the EdgeOS API client."""

import logging

import colorlog

log = logging.getLogger("edgeos-api")


def setup_logging(debug: bool = False) -> None:
    """Attach a coloured console handler to the package logger.

    Library code only emits records; the CLI is the one caller of this.
    """
    level = logging.DEBUG if debug else logging.INFO
    log.setLevel(level)
    log.handlers.clear()

    handler = colorlog.StreamHandler()
    handler.setFormatter(colorlog.ColoredFormatter(
        "%(log_color)s%(asctime)s [%(levelname)s]%(reset)s %(message)s",
        datefmt="%H:%M:%S",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "bold_red",
        },
    ))
    log.addHandler(handler)


def mask(secret: str | None, keep: int = 6) -> str:
    """Return a loggable prefix of *secret* (never the full value)."""
    if not secret:
        return "<none>"
    return secret[:keep] + "…"
