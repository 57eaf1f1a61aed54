#!/usr/bin/env python3
"""
modelComparator command line entry point.

Dispatches subcommands to their pipeline handlers and maps failures to exit
codes.
"""

import sys
import warnings
from datetime import datetime
from typing import Optional, Sequence

from sklearn.exceptions import ConvergenceWarning

from .cli.argument_parser import parse_arguments
from .core.exceptions import ModelComparatorError
from .utils.logger import get_logger

warnings.filterwarnings("ignore", category=ConvergenceWarning)


def _handle_compare(args):
    from .pipelines.compare import handle_compare
    return handle_compare(args)


HANDLERS = {
    'compare': _handle_compare,
}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point; returns the process exit code."""
    args = parse_arguments(argv)
    logger = get_logger("Main")

    cmd = getattr(args, 'command', None)
    handler = HANDLERS.get(cmd)
    if handler is None:
        raise ValueError(f"Unknown command: {cmd}. Supported commands: {', '.join(HANDLERS)}")

    start_time = datetime.now()
    logger.info(f"Command: {cmd.upper()} | started {start_time.strftime('%Y-%m-%d %H:%M:%S')}")

    try:
        handler(args)
    except KeyboardInterrupt:
        logger.error(f"{cmd.upper()} interrupted by user")
        return 130
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 2
    except ValueError as e:
        logger.error(f"Invalid argument: {e}")
        return 3
    except ModelComparatorError as e:
        logger.error(f"{cmd.upper()} failed: {type(e).__name__}: {e}")
        return 1

    logger.info(f"{cmd.upper()} finished in {datetime.now() - start_time}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
