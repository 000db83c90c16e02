#!/usr/bin/env python
# License: BSD 3 clause
"""
Script that converts dataset files from one format to another.
"""

import argparse
import logging
import sys
from pathlib import Path

from fsio.data.readers import Reader, canonical_format
from fsio.data.writers import Writer
from fsio.errors import FsioError
from fsio.utils.constants import DEFAULT_QUOTE_CHAR, DEFAULT_RELATION, EXT_TO_FORMAT, STDIN
from fsio.utils.logging import get_fsio_logger
from fsio.version import __version__


def resolve_format(path, fmt, logger):
    """
    Work out the format of a file from an explicit tag or its extension.

    Parameters
    ----------
    path : str
        The file path, or ``"-"`` for a standard stream.
    fmt : Optional[str]
        The format given on the command line, if any.
    logger : logging.Logger
        Where to report the problem if no format can be found.

    Returns
    -------
    str
        The canonical format tag.

    Raises
    ------
    SystemExit
        If the format cannot be determined.
    """
    if fmt:
        try:
            return canonical_format(fmt)
        except FsioError as exc:
            logger.error(str(exc))
            sys.exit(1)
    if path == STDIN:
        logger.error("A format must be given when reading from STDIN or writing "
                     "to STDOUT.")
        sys.exit(1)
    extension = Path(path).suffix.lower()
    if extension not in EXT_TO_FORMAT:
        logger.error("Files must be in either .arff, .csv, .libsvm, or .svm format "
                     f"unless a format is given. You specified: {path}")
        sys.exit(1)
    return EXT_TO_FORMAT[extension]


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
        description="Takes an input dataset file and converts it to another "
                    "format. Formats are determined from file extensions "
                    "unless given explicitly.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    parser.add_argument('infile',
                        help='input dataset file (ends in .arff, .csv, .libsvm, '
                             'or .svm), or - for STDIN')
    parser.add_argument('outfile',
                        help='output dataset file (ends in .arff, .csv, .libsvm, '
                             'or .svm), or - for STDOUT')
    parser.add_argument('--input_format',
                        help='Format of the input: libsvm, csv, or weka.')
    parser.add_argument('--output_format',
                        help='Format of the output: libsvm, csv, or weka.')
    parser.add_argument('--sparse',
                        help='Write sparse rows when creating ARFF files.',
                        action='store_true')
    parser.add_argument('--relation',
                        help='Relation name to use for ARFF files. Defaults to '
                             f'the input relation or {DEFAULT_RELATION}.')
    parser.add_argument('--quote_char',
                        help='Quote character for reading and writing ARFF files.',
                        default=DEFAULT_QUOTE_CHAR)
    parser.add_argument('--class_label_column',
                        help='1-based column that holds the class labels in CSV '
                             'input files.',
                        type=int,
                        default=1)
    parser.add_argument('--write_mapping',
                        help='Add comments mapping class and feature numbers '
                             'to their names when writing LibSVM files.',
                        action='store_true')
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
    output_format = resolve_format(args.outfile, args.output_format, logger)

    reader_args = {'quiet': args.quiet, 'logger': logger}
    if input_format == 'csv':
        reader_args['class_label_column'] = args.class_label_column
    elif input_format == 'weka':
        reader_args['quote_char'] = args.quote_char

    writer_args = {'quiet': args.quiet, 'logger': logger}
    if output_format == 'weka':
        writer_args['sparse'] = args.sparse
        writer_args['relation'] = args.relation
        writer_args['quote_char'] = args.quote_char
    elif output_format == 'libsvm':
        writer_args['write_mapping'] = args.write_mapping

    try:
        dataset = Reader.for_format(args.infile, input_format, **reader_args).read()
        Writer.for_format(args.outfile, dataset, output_format, **writer_args).write()
    except FsioError as exc:
        logger.error(str(exc))
        sys.exit(1)


if __name__ == '__main__':
    main()
