# -- coding: utf-8 --

import argparse
import logging
import time

from core.config import DEFAULT_CONFIG_PATH, ConfigError, load_config, validate_config
from core.runtime_assembly import build_dispatch_loop
from gate import GpioInitError, install_toggle_handler


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Gated camera snapshot relay (config-driven)",
    )
    p.add_argument(
        "--config", default=DEFAULT_CONFIG_PATH, help="Path to the YAML config file"
    )
    p.add_argument("--verbose", action="store_true", help="Debug log")
    p.add_argument(
        "--log-level", default="", help="Override log level (debug/info/warning/error)"
    )
    return p.parse_args(argv)


def setup_logging(verbose: bool, log_level: str = ""):
    if verbose:
        level = logging.DEBUG
    else:
        level_map = {
            "debug": logging.DEBUG,
            "info": logging.INFO,
            "warning": logging.WARNING,
            "warn": logging.WARNING,
            "error": logging.ERROR,
            "critical": logging.CRITICAL,
        }
        level = level_map.get(str(log_level or "").strip().lower(), logging.INFO)
    # Use UTC for all %(asctime)s timestamps in logs.
    logging.Formatter.converter = time.gmtime
    logging.basicConfig(
        level=level, format="%(asctime)sZ [%(levelname)s] %(message)s", force=True
    )
    if not verbose:
        # Connection-pool chatter from requests.
        logging.getLogger("urllib3").setLevel(logging.WARNING)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.verbose, args.log_level)
    try:
        cfg = load_config(args.config)
        validate_config(cfg)
    except ConfigError as e:
        logging.error("Config load failed: %s", e)
        raise SystemExit(1)
    # Config-driven log level (unless overridden by CLI).
    if not args.verbose and not args.log_level:
        setup_logging(args.verbose, cfg.runtime.log_level)

    install_toggle_handler()
    try:
        loop = build_dispatch_loop(cfg)
    except (ConfigError, ValueError) as e:
        logging.error("Config invalid: %s", e)
        raise SystemExit(1) from e
    except GpioInitError as e:
        logging.error("GPIO required but unavailable: %s", e)
        raise SystemExit(1) from e

    logging.info(
        "Starting: config=%s cameras=%d endpoints=%d",
        cfg.path,
        len(loop.sources),
        len(loop.endpoints),
    )
    try:
        loop.run()
    except KeyboardInterrupt:
        logging.info("Service STOPPED by user (Ctrl+C)")
    except Exception:
        logging.exception("Error")
        raise
    finally:
        loop.gate.close()
        loop.uploader.close()


if __name__ == "__main__":
    main()
