import argparse
import logging
import os

from .dialect import TRADE_REPUBLIC, load_dialect
from .reader import StatementReader


def main(argv=None):
  parser = argparse.ArgumentParser(description='Extract the transaction ledger from account statement PDFs')
  parser.add_argument('pdfs', nargs='+', help='Input PDF files')
  parser.add_argument('--output', required=True, help='Output CSV file (.xlsx writes Excel)')
  parser.add_argument('--dialect', help='JSON file describing the statement dialect')
  parser.add_argument('--log-level', default=os.environ.get('LOG_LEVEL', 'INFO'),
                      help='Logging level (default: $LOG_LEVEL or INFO)')
  args = parser.parse_args(argv)

  logging.basicConfig(level=args.log_level.upper(), format='%(levelname)s | %(message)s')

  dialect = load_dialect(args.dialect) if args.dialect else TRADE_REPUBLIC
  reader = StatementReader(dialect)
  df = reader.convert(args.pdfs, args.output)
  logging.getLogger(__name__).info(f'{len(df)} transaction(s) written to {args.output}')
  return 0


if __name__ == '__main__':
  raise SystemExit(main())
