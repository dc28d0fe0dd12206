"""Application start-up: logging, configuration and the detection and thermal managers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import NoReturn

from .config import AppConfig, ConfigError, load_app_config
from .detect_manager import DetectManager
from .thermal import ThermalManager

log = logging.getLogger(__name__)

EXIT_ERROR = 1

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class FatalError(RuntimeError):
    """An error after which the application cannot go on."""


def _init_app_log() -> None:
    try:
        logging.basicConfig(level=logging.INFO, format=_LOG_FORMAT)
    except (ValueError, TypeError, OSError) as exc:
        raise FatalError("Init app log failed. (init_app_log)") from exc


def exit_app(error: BaseException) -> NoReturn:
    """Report a fatal error on stderr and end the program."""
    print("----- Fatal error: ", file=sys.stderr)
    print(str(error), file=sys.stderr)
    print("----- Terminate.", file=sys.stderr)
    raise SystemExit(EXIT_ERROR)


def init_app(
    start_dir: str | Path | None = None,
    detect_manager: DetectManager | None = None,
    thermal_manager: ThermalManager | None = None,
) -> AppConfig | None:
    """Set up logging, load the configuration and configure the managers.

    A missing or broken configuration file ends the program; failures while
    configuring the managers are logged.
    """
    try:
        _init_app_log()
    except Exception as exc:
        print(f"Init app log failed: {exc}", file=sys.stderr)

    config: AppConfig | None = None
    try:
        config = load_app_config(start_dir)
    except (ConfigError, FatalError) as exc:
        exit_app(exc)
    except Exception as exc:
        log.error("Init app failed %s.", exc)

    if config is None:
        log.error("Init DetectManager failed: no configuration.")
        return None

    try:
        if detect_manager is not None:
            detect_manager.init(config)
        if thermal_manager is not None:
            thermal_manager.configure(config)
    except Exception as exc:
        log.error("Init DetectManager failed %s.", exc)
    return config


def init_after_widget(thermal_manager: ThermalManager) -> None:
    """Steps that must wait until the display is up."""
    thermal_manager.init_after_widget()