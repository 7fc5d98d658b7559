#!/usr/bin/env python3
"""
Main entry point for the NK2 export tool.

This module provides the command-line interface that reads an Outlook
autocomplete file, extracts its contacts and writes them as CSV or vCard.

Dependencies:
    - argparse: Standard library for command-line argument parsing
    - sys: Standard library for system-specific parameters
    - pathlib: Standard library for path handling
    - nk2_export.nk2_reader: Local module for NK2 file decoding
    - nk2_export.contact_parser: Local module for contact extraction
    - nk2_export.contact_writer: Local module for CSV/vCard output
    - nk2_export.logger: Local module for logging configuration
"""
# pylint: disable=logging-fstring-interpolation, broad-except

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from nk2_export.contact_parser import extract_contacts
from nk2_export.contact_writer import OutputFormat, write_contacts
from nk2_export.data_parser import DEFAULT_LIMITS, DecoderLimits
from nk2_export.logger import log_contacts, log_statistics, setup_logger
from nk2_export.nk2_reader import read_file


def _positive_int(value: str) -> int:
    """
    Parse a strictly positive integer argument.

    :param value: Raw argument string
    :return: Parsed integer
    :raises argparse.ArgumentTypeError: If the value is not a positive integer
    """
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if parsed <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {parsed}")
    return parsed


def _create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser.

    :return: Configured argument parser
    """
    parser = argparse.ArgumentParser(
        description='Export contacts from an Outlook autocomplete (nk2/dat) file',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        '--file', '-f',
        type=str,
        required=True,
        help='Path to outlook autocomplete nk2/dat file'
    )

    parser.add_argument(
        '--output-file', '-o',
        type=str,
        required=True,
        help='Path to output file'
    )

    parser.add_argument(
        '--output-format',
        type=str,
        default=OutputFormat.CSV.value,
        choices=[fmt.value for fmt in OutputFormat],
        help='Output file format (default: csv)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Trace every decoded property and contact'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        default=None,
        help='Also write a detailed log to this file'
    )

    limits = parser.add_argument_group('decoder limits')
    limits.add_argument(
        '--max-string-length',
        type=_positive_int,
        default=DEFAULT_LIMITS.max_string_length,
        metavar='BYTES',
        help='Largest accepted string length '
             f'(default: {DEFAULT_LIMITS.max_string_length})'
    )
    limits.add_argument(
        '--max-binary-length',
        type=_positive_int,
        default=DEFAULT_LIMITS.max_binary_length,
        metavar='BYTES',
        help='Largest accepted binary property length '
             f'(default: {DEFAULT_LIMITS.max_binary_length})'
    )
    limits.add_argument(
        '--max-array-elements',
        type=_positive_int,
        default=DEFAULT_LIMITS.max_array_elements,
        metavar='COUNT',
        help='Largest accepted multi-value element count '
             f'(default: {DEFAULT_LIMITS.max_array_elements})'
    )

    return parser


def _limits_from_args(args: argparse.Namespace) -> DecoderLimits:
    return DecoderLimits(
        max_string_length=args.max_string_length,
        max_binary_length=args.max_binary_length,
        max_array_elements=args.max_array_elements
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main application entry point."""
    parser = _create_argument_parser()
    args = parser.parse_args(argv)

    log_file = Path(args.log_file) if args.log_file else None
    logger = setup_logger(verbose=args.verbose, log_file=log_file)

    try:
        input_path = Path(args.file)
        logger.info(f"Reading and parsing file {input_path} ...")
        rows = read_file(input_path, _limits_from_args(args))

        if rows is None:
            logger.error(f"Could not decode {input_path}, no output written")
            sys.exit(1)

        result = extract_contacts(rows)
        log_contacts(logger, result.contacts)

        output_path = Path(args.output_file)
        logger.info("Write output file ...")
        written = write_contacts(args.output_format, result.contacts, output_path)
        logger.info(f"Successfully created {output_path}")

        log_statistics(logger, {
            'rows_read': len(rows),
            'contacts_extracted': len(result.contacts),
            'rows_skipped': len(result.failures),
            'contacts_written': written,
        })

    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"I/O error: {e}")
        sys.exit(1)
    except Exception as e:
        logger.exception(f"Unexpected error: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
