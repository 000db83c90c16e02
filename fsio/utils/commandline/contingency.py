#!/usr/bin/env python
# License: BSD 3 clause
"""
Script that prints the A, B, C, D contingency counts of a dataset file.
"""

import argparse
import logging
import sys

from fsio.contingency import contingency_table
from fsio.data.readers import Reader
from fsio.errors import FsioError
from fsio.utils.commandline.convert import resolve_format
from fsio.utils.constants import STDOUT
from fsio.utils.logging import get_fsio_logger
from fsio.version import __version__


def main(argv=None):
    """
    Handles command line arguments and gets things started.

    Parameters
    ----------
    argv : list of str
        List of arguments, as if specified on the command-line.
        If None, ``sys.argv[1:]`` is used instead.
    """
    # Get command line arguments
    parser = argparse.ArgumentParser(
        description="Reads a dataset file and prints, as CSV, how often each "
                    "feature is present and absent inside and outside of "
                    "each class.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument('infile',
                        help='input dataset file (ends in .arff, .csv, .libsvm, '
                             'or .svm), or - for STDIN')
    parser.add_argument('--input_format',
                        help='Format of the input: libsvm, csv, or weka.')
    parser.add_argument('-f', '--feature',
                        help='A feature to count. If unspecified, all features '
                             'are counted.',
                        nargs='*')
    parser.add_argument('-l', '--label',
                        help='A class to count against. If unspecified, all '
                             'classes are counted.',
                        nargs='*')
    parser.add_argument('-o', '--output',
                        help='Where to write the CSV table; - for STDOUT.',
                        default=STDOUT)
    parser.add_argument('--log_file',
                        help='Also write log messages to this file.')
    parser.add_argument('-q', '--quiet',
                        help='Suppress printing of "Loading..." messages.',
                        action='store_true')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__}')
    args = parser.parse_args(argv)

    # Make warnings from built-in warnings module get formatted more nicely
    logging.captureWarnings(True)
    logging.basicConfig(format=('%(asctime)s - %(name)s - %(levelname)s - '
                                '%(message)s'))
    logger = get_fsio_logger(__name__, filepath=args.log_file)

    input_format = resolve_format(args.infile, args.input_format, logger)

    try:
        dataset = Reader.for_format(args.infile, input_format, quiet=args.quiet,
                                     logger=logger).read()
    except FsioError as exc:
        logger.error(str(exc))
        sys.exit(1)

    if args.feature:
        unknown = [feature for feature in args.feature if feature not in dataset.features]
        if unknown:
            logger.warning(f"Features not found in {args.infile}: {', '.join(unknown)}")
    table = contingency_table(dataset, features=args.feature or None)

    if args.label:
        unknown = [label for label in args.label if label not in dataset]
        if unknown:
            logger.warning(f"Classes not found in {args.infile}: {', '.join(unknown)}")
        table = table[table.index.get_level_values('class').isin(args.label)]

    if args.output == STDOUT:
        table.to_csv(sys.stdout, lineterminator='\n')
    else:
        table.to_csv(args.output, lineterminator='\n')


if __name__ == '__main__':
    main()
