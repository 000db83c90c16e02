# License: BSD 3 clause
"""
Read, write and count labeled feature datasets for feature selection.

Datasets can be read from and written to LibSVM, CSV and WEKA ARFF files;
:mod:`fsio.contingency` derives the per-(feature, class) counts that
scoring formulas are built on.
"""

from .contingency import ContingencyCounts, contingency, contingency_table
from .data import Dataset, make_random_dataset, read, read_url, write
from .errors import ConfigurationError, FsioError, MalformedInputError
from .version import __version__

__all__ = ['ContingencyCounts', 'contingency', 'contingency_table', 'Dataset',
           'make_random_dataset', 'read', 'read_url', 'write',
           'ConfigurationError', 'FsioError', 'MalformedInputError', '__version__']
