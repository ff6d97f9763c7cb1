#!/usr/bin/env python3
# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Word Search Generator

Reads a batch file of puzzles and writes, per puzzle:
- images/<n>.png            blank puzzle
- resolved/<n>-resolved.png answer key with highlighted words

Usage:
    # Defaults: words.csv in, images/ and resolved/ under the current directory
    python wordsearch_generator.py

    # With YAML configuration:
    python wordsearch_generator.py --config wordsearch.yaml

    # Reproducible output:
    python wordsearch_generator.py --input puzzles.csv --seed 42
"""

import logging
import os
import sys
from typing import List, Optional

from batch_reader import read_batch_file
from batch_runner import BatchRunner
from config import ConfigValidationError, create_argument_parser, load_config
from logging_config import setup_logging


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_PUZZLE_FAILURES = 2
EXIT_INTERRUPTED = 130


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config(args)

        if args.dry_run:
            specs = read_batch_file(config.input_file)
            print("Configuration valid:")
            print(f"  Input: {config.input_file}")
            print(f"  Output Directory: {config.output.directory}")
            print(f"  Formats: {', '.join(config.output.formats)}")
            print(f"  Seed: {config.generation.seed}")
            print(f"  Puzzles: {len(specs)}")
            for spec in specs:
                print(f"    {spec.index}: {spec.label}, {len(spec.words)} words")
            return EXIT_OK

        log_directory = None
        if config.output.log_directory:
            log_directory = os.path.join(
                config.output.directory, config.output.log_directory
            )
        log_path = setup_logging(
            log_level=config.output.log_level,
            log_directory=log_directory,
            log_file_prefix=config.output.log_file_prefix,
            enable_console=config.output.enable_console_logging,
        )
        logger = logging.getLogger(__name__)
        logger.debug(f"Configuration: {config.to_dict()}")

        report = BatchRunner(config).run()
        logger.info(f"Summary:\n{report}")
        if log_path:
            logger.info(f"Log file: {log_path}")

        if report.ok:
            logger.info("All images generated.")
            return EXIT_OK
        return EXIT_PUZZLE_FAILURES

    except ConfigValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("\nGeneration cancelled.", file=sys.stderr)
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    sys.exit(main())
