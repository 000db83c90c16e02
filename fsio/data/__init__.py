# License: BSD 3 clause
"""
Handles reading and writing labeled datasets in LibSVM, CSV and WEKA ARFF
formats.
"""

from .dataset import Dataset, canonical_feature_type, format_value, parse_value
from .readers import (
    ARFFReader,
    CSVReader,
    LibSVMReader,
    Reader,
    read,
    read_url,
    split_with_quotes,
)
from .synthetic import make_random_dataset
from .writers import ARFFWriter, CSVWriter, LibSVMWriter, Writer, write

__all__ = ['Dataset', 'canonical_feature_type', 'format_value', 'parse_value',
           'Reader', 'ARFFReader', 'CSVReader', 'LibSVMReader',
           'read', 'read_url', 'split_with_quotes', 'make_random_dataset',
           'Writer', 'ARFFWriter', 'CSVWriter', 'LibSVMWriter', 'write']
