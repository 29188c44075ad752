#!/usr/bin/env python3
"""Dispatch tracer: loads a YAML scenario of dispatcher nodes and listeners,
dispatches its event, and shows which listeners fired in which phase.

Usage:
    trace_dispatch.py scenario.yaml [--config config.yaml] [--log-file trace.log]
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from event_dispatcher.config import AppConfig, EventDispatcherError
from event_dispatcher.interfaces.cli.presenter import DispatchTracePresenter
from event_dispatcher.interfaces.cli.scenario import Scenario
from event_dispatcher.utils import format_path, print_error, print_info, print_warning

# Logger will be configured in main() after loading config
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "config.yaml"


def setup_logging(config_log_level: str, log_file: Path | None = None) -> None:
    """Configure logging with console and optional file handlers."""
    log_level = getattr(logging, config_log_level.upper(), logging.INFO)

    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)
    handlers: list[logging.Handler] = [console_handler]

    if log_file is not None:
        file_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(name)s - %(funcName)s - %(message)s'
        )
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file is not None else log_level,
        handlers=handlers,
        force=True
    )


def load_config(config_path: Path | None) -> AppConfig:
    """Load config.yaml (explicit path, or ./config.yaml if present) plus env overrides."""
    load_dotenv()

    if config_path is not None:
        config = AppConfig.load(config_path)
    elif Path(DEFAULT_CONFIG_FILENAME).exists():
        config = AppConfig.load(DEFAULT_CONFIG_FILENAME)
    else:
        config = AppConfig.default()

    return config.apply_env_overrides()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Trace capture/bubble propagation of an event through a dispatcher tree."
    )
    parser.add_argument("scenario", type=Path, help="YAML scenario file")
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    parser.add_argument("--log-file", type=Path, default=None, help="Write DEBUG log here")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the dispatch tracer."""
    args = parse_args(argv)
    try:
        config = load_config(args.config)
        setup_logging(config.logging.level, args.log_file)

        scenario = Scenario.load(args.scenario, config.dispatcher)
        target = scenario.nodes[scenario.target]
        print_info(f"Path: {format_path(target.propagation_path() + [target])}")

        presenter = DispatchTracePresenter(scenario).attach()
        presenter.run()
        if not presenter.hops:
            print_warning(f"No listener fired for the event dispatched on '{scenario.target}'")
        presenter.render()

    except EventDispatcherError as e:
        print_error(f"Error: {e}")
        return 1
    except Exception as e:
        print_error(f"Unexpected Error: {e}")
        logger.debug("Unexpected error occurred", exc_info=True)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
