# Entry point for the table canvas.

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import config
from logging_utils import configure_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="table-canvas", description=config.WINDOW_TITLE)
    parser.add_argument("--debug", action="store_true", help="log at DEBUG level")
    parser.add_argument("--log-dir", type=Path, default=None, help="directory for the rotating log file")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.debug, args.log_dir)
    # tkinter is only needed once a window is opened
    from app import run_app

    return run_app()


if __name__ == "__main__":
    sys.exit(main())
