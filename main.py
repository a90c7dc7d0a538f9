#!/usr/bin/env python3
"""
Mail Merge Compiler - Main CLI entry point.

Fills a Word template once per record and combines the results into one DOCX.
"""

import argparse
import sys
from pathlib import Path

from mail_merge.core.config import Config
from mail_merge.core.merger import MailMerger
from mail_merge.document.resolvers import DictResolver, load_records
from mail_merge.utils.logging_config import setup_logging, get_logger
from mail_merge.utils.validators import Validators


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description='Mail Merge Compiler - Fill a Word template per record and combine the results',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s letter.dotx recipients.csv letters.docx
  %(prog)s letter.docx recipients.json letters.docx --individual
  %(prog)s letter.dotx recipients.csv letters.docx --keep-temp --verbose

Records:
  CSV   - header row holds the field names, one record per row
  JSON  - a list of objects, one record per object

Fields:
  Each MERGEFIELD in the template shows as «FieldName». Every placeholder
  whose whole text run equals «FieldName» is replaced with the record value.
        """)

    parser.add_argument('template_file', help='Template path (.dotx or .docx)')
    parser.add_argument('records_file', help='Records path (.csv or .json)')
    parser.add_argument('output_file', help='Combined output DOCX path')
    parser.add_argument('--individual', action='store_true', help='Also write one DOCX per record next to the output')
    parser.add_argument('--keep-temp', action='store_true', help='Keep temporary files for debugging')
    parser.add_argument('--verbose', '-v', '--debug', action='store_true', help='Enable verbose logging (DEBUG level)')
    parser.add_argument('--log-file', help='Log to file in addition to console')
    parser.add_argument('--version', action='version', version=f'Mail Merge Compiler v{Config.__version__}')

    args = parser.parse_args(argv)

    setup_logging(log_file=args.log_file, verbose=args.verbose)

    logger = get_logger()
    logger.info("=" * 60)
    logger.info("Mail Merge Compiler v%s - Starting merge", Config.__version__)
    logger.info("=" * 60)

    return handle_merge(args, logger)


def handle_merge(args, logger) -> int:
    """Load records and run the merge batch."""
    records_result = Validators.validate_records_path(args.records_file)
    if not records_result['valid']:
        logger.error("Invalid records file: %s", records_result['error_message'])
        return 1

    try:
        records = load_records(records_result['resolved_path'])
    except (OSError, ValueError) as e:
        logger.error("Cannot read records: %s", e)
        return 1

    logger.info("Loaded %d record(s) from %s", len(records), Path(args.records_file).name)
    if not records:
        logger.error("Records file contains no records.")
        return 1

    merger = MailMerger(
        template_path=str(Path(args.template_file).absolute()),
        output_path=str(Path(args.output_file).absolute()),
        keep_temp=args.keep_temp,
        write_individual=args.individual
    )

    try:
        result = merger.run(DictResolver(record) for record in records)
    except KeyboardInterrupt:
        logger.warning("\n⚠️ Mail merge interrupted by user.")
        return 1

    if result:
        logger.info("=" * 60)
        logger.info("🎉 Mail merge completed successfully!")
        logger.info("📄 Output: %s", result.value)
        logger.info("=" * 60)
        return 0

    logger.error("=" * 60)
    logger.error("❌ Mail merge failed! %s", result.error_message)
    logger.error("=" * 60)
    return 1


if __name__ == '__main__':
    sys.exit(main())
