"""Application entry point for tourmatch."""

from __future__ import annotations

import argparse
import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint

from tourmatch import settings
from tourmatch.adapters.logging_dispatch import LoggingMailSender, LoggingTaxAuthority
from tourmatch.core.models import ConfirmationResult

NAME = "TOURMATCH"
FONT = "tarty-1"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
DEFAULT_LOG_PATH = "logs/tourmatch.log"

LOGGER = logging.getLogger(__name__)


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


def _rotating_file_handler(file_cfg: dict) -> RotatingFileHandler:
    """Build the optional log file handler, relative paths resolve under the project root."""

    path = file_cfg.get("path", DEFAULT_LOG_PATH)
    if not os.path.isabs(path):
        path = os.path.join(settings.PROJECT_ROOT, path)
    os.makedirs(os.path.dirname(path), exist_ok=True)
    return RotatingFileHandler(
        path,
        maxBytes=int(file_cfg.get("max_bytes", 1024 * 1024)),
        backupCount=int(file_cfg.get("backup_count", 3)),
        encoding="utf-8",
    )


def _configure_logging(config: dict) -> None:
    """Apply the ``logging`` block of the scenario file (console on by default)."""

    logging_cfg = config.get("logging", {})
    if not logging_cfg.get("enabled", True):
        return

    handlers: list[logging.Handler] = []
    if logging_cfg.get("console", True):
        handlers.append(logging.StreamHandler())
    file_cfg = logging_cfg.get("file", {})
    if file_cfg.get("enabled", False):
        handlers.append(_rotating_file_handler(file_cfg))
    if not handlers:
        return

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)
    for handler in handlers:
        handler.setFormatter(formatter)
    level = getattr(logging, str(logging_cfg.get("level", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, handlers=handlers)


def _log_results(results: list[ConfirmationResult]) -> None:
    for result in results:
        if not result.confirmed:
            continue
        LOGGER.info("Confirmed %s: %s travelers notified", result.tour_name, result.notified)
        for failure in result.failures:
            LOGGER.warning(
                "Traveler %s was not fully notified (%s): %s",
                failure.person_id,
                failure.observer,
                failure.error,
            )


def _run(config_path: Optional[str]) -> None:
    _print_banner()
    config = settings.load_config(settings.resolve_config_path(config_path))
    _configure_logging(config)

    LOGGER.info("Starting tourmatch")

    administrator = settings.build_world(config, LoggingMailSender(), LoggingTaxAuthority())
    results = administrator.assign_people_to_tours()
    _log_results(results)

    for tour in administrator.tours:
        LOGGER.info(
            "Tour %s: %s/%s travelers, confirmed=%s",
            tour.name,
            len(tour.travelers),
            tour.capacity,
            tour.confirmed,
        )
    if administrator.pending:
        LOGGER.info("Pending: %s", ", ".join(person.person_id for person in administrator.pending))


def _check(config_path: Optional[str]) -> None:
    config = settings.load_config(settings.resolve_config_path(config_path))
    _configure_logging(config)
    administrator = settings.build_world(config, LoggingMailSender(), LoggingTaxAuthority())
    LOGGER.info(
        "Config OK: %s tours, %s people",
        len(administrator.tours),
        len(administrator.unassigned),
    )


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="tourmatch")
    parser.add_argument("--config", help="Path to the scenario JSON file")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Assign people to tours and confirm full tours")
    subparsers.add_parser("check", help="Validate the scenario file and exit")

    args = parser.parse_args(argv)
    if args.command == "check":
        _check(args.config)
        return
    _run(args.config)


if __name__ == "__main__":
    main()
