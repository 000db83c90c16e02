# License: BSD 3 clause
"""
Handles writing datasets out to various types of data files.

A base ``Writer`` class is provided that is sub-classed for each data
file type that is supported, e.g. ``CSVWriter``. Writers only read the
:class:`fsio.data.dataset.Dataset` they are given.

Some formats cannot represent everything a ``Dataset`` can hold:

- LibSVM has no way to write a zero or a missing value other than leaving
  the feature out, and it has no names for classes and features unless
  ``write_mapping=True`` is used.
- Sparse ARFF leaves out both zero and missing values, and a feature that
  is left out is read back as zero.
"""

import csv
import logging
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Dict, Optional

from fsio.data.dataset import Dataset, format_value, is_zero
from fsio.data.readers import canonical_format
from fsio.errors import ConfigurationError
from fsio.types import ClassLabel, DestinationType, PathOrStr, Sample
from fsio.utils.constants import (
    ARFF_CLASS_ATTRIBUTE,
    ARFF_COMMENT_MARKER,
    ARFF_DATE_FORMAT,
    ARFF_MISSING_VALUE,
    DEFAULT_FEATURE_TYPE,
    DEFAULT_QUOTE_CHAR,
    DEFAULT_RELATION,
    EXT_TO_FORMAT,
    STDOUT,
)


class Writer(object):
    """
    Write out a Dataset to a file or stream.

    This is the base class used to create dataset writers for different
    file types.

    Parameters
    ----------
    destination : :class:`fsio.types.DestinationType`
        A path to the file we would like to create, an already-open
        text stream, or ``"-"`` for the standard output. Streams that
        are passed in (including the standard output) are never closed
        by the writer.

    dataset : :class:`fsio.data.dataset.Dataset`
        The ``Dataset`` instance to dump to the file.

    quiet : bool, default=True
        Do not print "Writing..." status message to stderr.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.

    """

    def __init__(
        self,
        destination: DestinationType,
        dataset: Dataset,
        quiet: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize base Writer class."""
        super(Writer, self).__init__()

        self.destination = destination
        self.dataset = dataset
        self.quiet = quiet
        self.logger = logger if logger else logging.getLogger(__name__)
        if isinstance(destination, (str, Path)):
            self.name = "<stdout>" if str(destination) == STDOUT else str(destination)
        else:
            self.name = str(getattr(destination, "name", "<stream>"))
        self._progress_msg = ""
        # present values the format could not write explicitly
        self._num_omitted = 0

    @classmethod
    def for_path(cls, path: PathOrStr, dataset: Dataset, **kwargs) -> "Writer":
        """
        Retrieve object of ``Writer`` sub-class appropriate for given path.

        Parameters
        ----------
        path : :class:`fsio.types.PathOrStr`
            A path to the file we would like to create. The suffix
            to this filename must be ``.arff``, ``.csv``, ``.libsvm``
            or ``.svm``.

        dataset : :class:`fsio.data.dataset.Dataset`
            The ``Dataset`` instance to dump to the output file.

        kwargs : Optional[Dict[str, Any]]
            The keyword arguments for ``for_path`` are the same as
            the initializer for the desired ``Writer`` subclass.

        Returns
        -------
        writer : :class:`fsio.data.Writer`
            New instance of the Writer sub-class that is
            appropriate for the given path.

        Raises
        ------
        ConfigurationError
            If the path does not have a known extension.

        """
        ext = Path(path).suffix.lower()
        if ext not in EXT_TO_FORMAT:
            raise ConfigurationError("Output files must be in either .arff, .csv, "
                                     f".libsvm, or .svm format. You specified: {path}")
        return FORMAT_TO_WRITER[EXT_TO_FORMAT[ext]](path, dataset, **kwargs)

    @classmethod
    def for_format(
        cls, destination: DestinationType, dataset: Dataset, fmt: str, **kwargs
    ) -> "Writer":
        """
        Retrieve object of ``Writer`` sub-class for a format tag.

        Parameters
        ----------
        destination : :class:`fsio.types.DestinationType`
            Where to write to.

        dataset : :class:`fsio.data.dataset.Dataset`
            The ``Dataset`` instance to dump.

        fmt : str
            ``libsvm``, ``csv`` or ``weka`` (or ``arff``).

        kwargs : Optional[Dict[str, Any]]
            The arguments to the desired ``Writer`` subclass.

        Returns
        -------
        writer : :class:`fsio.data.Writer`

        Raises
        ------
        ConfigurationError
            If the format is not supported.

        """
        return FORMAT_TO_WRITER[canonical_format(fmt)](destination, dataset, **kwargs)

    @contextmanager
    def _open_destination(self):
        """
        Yield a writable stream, closing it afterwards only if we opened it.

        A file we created is removed again if writing it fails.
        """
        if isinstance(self.destination, (str, Path)):
            if str(self.destination) == STDOUT:
                yield sys.stdout
            else:
                try:
                    with open(self.destination, "w", encoding="utf-8") as output_file:
                        yield output_file
                except Exception:
                    Path(self.destination).unlink(missing_ok=True)
                    raise
        else:
            yield self.destination

    def write(self) -> None:
        """Write out this Writer's ``Dataset`` in its format."""
        self.logger.debug(f"destination: {self.name}")
        self.logger.debug(f"dataset: {self.dataset}")
        self._num_omitted = 0

        # fail before anything is written
        self._check_dataset()

        if not self.quiet:
            self._progress_msg = f"Writing {self.name}..."
            print(self._progress_msg, end="\r", file=sys.stderr)
            sys.stderr.flush()

        with self._open_destination() as output_file:
            # Write out the header if this format requires it
            self._write_header(output_file)
            # Write individual lines
            for ex_num, (label, sample) in enumerate(self.dataset):
                self._write_line(label, sample, output_file)
                if not self.quiet and ex_num % 100 == 0:
                    print(f"{self._progress_msg}{ex_num:>15}", end="\r", file=sys.stderr)
                    sys.stderr.flush()
            output_file.flush()

        if self._num_omitted:
            self.logger.debug(f"{self._num_omitted} zero values were left out of "
                              f"{self.name} and will not be read back as written.")

        if not self.quiet:
            print(f"{self._progress_msg}{'done':<15}", file=sys.stderr)
            sys.stderr.flush()

    def _check_dataset(self) -> None:
        """
        Make sure the format can hold everything in the dataset.

        Raises
        ------
        ConfigurationError
            If some value cannot be written in this format.

        """
        pass

    def _write_header(self, output_file: IO[str]) -> None:
        """
        Write header to file.

        Called before lines are written to file, so that headers can be written
        for files that need them.

        Parameters
        ----------
        output_file : Ignored
            Not used.

        """
        pass

    def _write_line(self, label: ClassLabel, sample: Sample, output_file: IO[str]) -> None:
        """
        Write the current sample in this Writer's format.

        Parameters
        ----------
        label : Ignored
            Not used.

        sample : Ignored
            Not used.

        output_file : Ignored
             Not used.

        Raises
        ------
        NotImplementedError

        """
        raise NotImplementedError


class CSVWriter(Writer):
    """
    Writer for writing out Datasets as CSV files.

    The first row holds the feature names and the second row their types
    (``string`` for features without a registered type). Every following
    row holds the class label and then one cell per feature, left empty
    when the value is missing.

    Parameters
    ----------
    destination : :class:`fsio.types.DestinationType`
        Where to write to.

    dataset : :class:`fsio.data.dataset.Dataset`
        The ``Dataset`` instance to dump to the output file.

    quiet : bool, default=True
        Do not print "Writing..." status message to stderr.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.

    """

    def __init__(
        self,
        destination: DestinationType,
        dataset: Dataset,
        quiet: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the CSVWriter class."""
        super(CSVWriter, self).__init__(destination, dataset, quiet=quiet, logger=logger)
        self._features = dataset.features
        self._types = [dataset.get_feature_type(feature) for feature in self._features]
        self._csv_writer = None

    def _write_header(self, output_file: IO[str]) -> None:
        """
        Write the feature name and feature type rows.

        Parameters
        ----------
        output_file : IO[str]
            The file being written to.

        """
        self._csv_writer = csv.writer(output_file, lineterminator="\n")
        self._csv_writer.writerow(self._features)
        self._csv_writer.writerow([feature_type or DEFAULT_FEATURE_TYPE
                                   for feature_type in self._types])

    def _write_line(self, label: ClassLabel, sample: Sample, output_file: IO[str]) -> None:
        """
        Write the current sample as a CSV row.

        Parameters
        ----------
        label : :class:`fsio.types.ClassLabel`
            The class of the current sample.

        sample : :class:`fsio.types.Sample`
            The feature values of the current sample.

        output_file : Ignored
            Not used; rows go through the CSV writer created for it.

        """
        row = [label]
        for feature, feature_type in zip(self._features, self._types):
            row.append(format_value(sample[feature], feature_type) if feature in sample else "")
        self._csv_writer.writerow(row)


class ARFFWriter(Writer):
    """
    Writer for writing out Datasets as WEKA ARFF files.

    Parameters
    ----------
    destination : :class:`fsio.types.DestinationType`
        Where to write to.

    dataset : :class:`fsio.data.dataset.Dataset`
        The ``Dataset`` instance to dump to the output file.

    quiet : bool, default=True
        Do not print "Writing..." status message to stderr.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.

    sparse : bool, default=False
        Write sparse rows (``{index value, ..., n label}``) instead of
        dense ones. Sparse rows leave out zero *and* missing values.

    relation : Optional[str], default=None
        The name of the relation in the ARFF file. Defaults to the
        relation the dataset was read with, or ``fsio_relation``.

    quote_char : str, default='"'
        Character used to quote names and values that contain spaces,
        commas, braces or ``%``.

    Raises
    ------
    ConfigurationError
        If a feature is called ``class``, which is reserved for the
        class attribute.

    """

    special_chars = set(" \t,{}") | {ARFF_COMMENT_MARKER}

    def __init__(
        self,
        destination: DestinationType,
        dataset: Dataset,
        quiet: bool = True,
        logger: Optional[logging.Logger] = None,
        sparse: bool = False,
        relation: Optional[str] = None,
        quote_char: str = DEFAULT_QUOTE_CHAR,
    ):
        """Initialize the ARFFWriter class."""
        super(ARFFWriter, self).__init__(destination, dataset, quiet=quiet, logger=logger)
        self.sparse = sparse
        self.relation = relation or dataset.relation or DEFAULT_RELATION
        self.quote_char = quote_char
        self._features = dataset.features
        self._types = [dataset.get_feature_type(feature) for feature in self._features]
        if any(feature.lower() == ARFF_CLASS_ATTRIBUTE for feature in self._features):
            raise ConfigurationError(f'Class attribute name "{ARFF_CLASS_ATTRIBUTE}" '
                                     "already used as feature name.")

    def _quote(self, token: str) -> str:
        """Quote a name or value if it contains characters ARFF treats specially."""
        if self.quote_char in token:
            raise ConfigurationError(f"Cannot write '{token}' to ARFF: it contains the "
                                     f"quote character {self.quote_char}")
        if not token or any(char in self.special_chars for char in token):
            return f"{self.quote_char}{token}{self.quote_char}"
        return token

    def _check_dataset(self) -> None:
        """Check every name and value for the quote character."""
        self._quote(self.relation)
        for token in self._features + self.dataset.classes:
            self._quote(token)
        for _, sample in self.dataset:
            for feature, value in sample.items():
                self._quote(format_value(value, self.dataset.get_feature_type(feature)))

    def _attribute_spec(self, feature: str, feature_type: Optional[str]) -> str:
        """Return what follows the attribute name in its header line."""
        if feature_type == "nominal":
            # re-derive the nominal values from what we actually have
            values = sorted({format_value(value, feature_type)
                             for value in self.dataset.get_feature_values(feature)})
            return "{" + ",".join(self._quote(value) for value in values) + "}"
        if feature_type == "date":
            return f"date {self.quote_char}{ARFF_DATE_FORMAT}{self.quote_char}"
        return feature_type or DEFAULT_FEATURE_TYPE

    def _write_header(self, output_file: IO[str]) -> None:
        """
        Write comments, relation, attributes and the data marker.

        Parameters
        ----------
        output_file : IO[str]
            The file being written to.

        """
        if self.dataset.comments:
            print("\n".join(self.dataset.comments), file=output_file)
            print(file=output_file)

        print(f"@RELATION {self._quote(self.relation)}\n", file=output_file)

        for feature, feature_type in zip(self._features, self._types):
            print(f"@ATTRIBUTE {self._quote(feature)} "
                  f"{self._attribute_spec(feature, feature_type)}", file=output_file)

        classes = ",".join(self._quote(label) for label in self.dataset.classes)
        print(f"@ATTRIBUTE {ARFF_CLASS_ATTRIBUTE} {{{classes}}}", file=output_file)

        # Finish header and start data section
        print("\n@DATA", file=output_file)

    def _write_line(self, label: ClassLabel, sample: Sample, output_file: IO[str]) -> None:
        """
        Write the current sample as a dense or sparse data row.

        Parameters
        ----------
        label : :class:`fsio.types.ClassLabel`
            The class of the current sample.

        sample : :class:`fsio.types.Sample`
            The feature values of the current sample.

        output_file : IO[str]
            The file being written to.

        """
        cells = []
        if self.sparse:
            for index, (feature, feature_type) in enumerate(zip(self._features, self._types)):
                # zero and missing values are both left out
                if feature not in sample:
                    continue
                if is_zero(sample[feature]):
                    self._num_omitted += 1
                    continue
                value = self._quote(format_value(sample[feature], feature_type))
                cells.append(f"{index} {value},")
            print(f"{{{''.join(cells)}{len(self._features)} {self._quote(label)}}}",
                  file=output_file)
        else:
            for feature, feature_type in zip(self._features, self._types):
                if feature in sample:
                    cells.append(f"{self._quote(format_value(sample[feature], feature_type))},")
                else:
                    cells.append(f"{ARFF_MISSING_VALUE},")
            print(f"{''.join(cells)}{self._quote(label)}", file=output_file)


class LibSVMWriter(Writer):
    """
    Writer for writing out Datasets as LibSVM/SVMLight files.

    Classes are numbered from 1 in the order of ``Dataset.classes`` and
    features from 1 in the order of ``Dataset.features``. Only present,
    non-zero values are written, in increasing feature number order.

    Parameters
    ----------
    destination : :class:`fsio.types.DestinationType`
        Where to write to.

    dataset : :class:`fsio.data.dataset.Dataset`
        The ``Dataset`` instance to dump to the output file.

    quiet : bool, default=True
        Do not print "Writing..." status message to stderr.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.

    write_mapping : bool, default=False
        Append a comment to every line that maps the class and feature
        numbers used on that line back to their names, e.g.
        ``1 2:0.5 # 1=spam | 2=free``. ``LibSVMReader`` uses it to restore
        the names.

    """

    LIBSVM_REPLACE_DICT = {":": "\u2236",
                           "#": "\uFF03",
                           " ": "\u2002",
                           "=": "\ua78a",
                           "|": "\u2223"}

    def __init__(
        self,
        destination: DestinationType,
        dataset: Dataset,
        quiet: bool = True,
        logger: Optional[logging.Logger] = None,
        write_mapping: bool = False,
    ):
        """Initialize the LibSVMWriter class."""
        super(LibSVMWriter, self).__init__(destination, dataset, quiet=quiet, logger=logger)
        self.write_mapping = write_mapping
        self.label_map: Dict[ClassLabel, int] = {
            label: num for num, label in enumerate(dataset.classes, start=1)
        }
        self.feature_map: Dict[str, int] = {
            feature: num for num, feature in enumerate(dataset.features, start=1)
        }

    @staticmethod
    def _sanitize(name: str) -> str:
        """
        Sanitize names for the mapping comment.

        Replace special characters in names with close unicode
        equivalents so that the line can still be split on them.

        Parameters
        ----------
        name : str
            Input name in which special characters are replaced with unicode
            equivalents.

        Returns
        -------
        str
            The sanitized name with special characters replaced.

        """
        for orig, replacement in LibSVMWriter.LIBSVM_REPLACE_DICT.items():
            name = name.replace(orig, replacement)
        return name

    def _check_dataset(self) -> None:
        """Reject text values, which LibSVM cannot hold."""
        for _, sample in self.dataset:
            for feature, value in sample.items():
                if isinstance(value, str):
                    raise ConfigurationError(f"LibSVM files can only hold numeric values, "
                                             f"but feature '{feature}' has the value "
                                             f"'{value}'")

    def _write_line(self, label: ClassLabel, sample: Sample, output_file: IO[str]) -> None:
        """
        Write the current sample in LibSVM format.

        Parameters
        ----------
        label : :class:`fsio.types.ClassLabel`
            The class of the current sample.

        sample : :class:`fsio.types.Sample`
            The feature values of the current sample.

        output_file : IO[str]
            The file being written to.

        """
        field_values = []
        for feature, value in sample.items():
            # implicit mode: zeros are left out
            if is_zero(value):
                self._num_omitted += 1
                continue
            field_values.append((self.feature_map[feature], feature, value))
        field_values.sort()

        line = str(self.label_map[label])
        if field_values:
            line += " " + " ".join(f"{num}:{format_value(value)}"
                                   for num, _, value in field_values)
        if self.write_mapping:
            feature_names = " ".join(f"{num}={self._sanitize(feature)}"
                                     for num, feature, _ in field_values)
            line += f" # {self.label_map[label]}={self._sanitize(label)} | {feature_names}"
            line = line.rstrip(" ")
        print(line, file=output_file)


def write(dataset, destination, fmt, **kwargs):
    """
    Write a dataset in the given format.

    Parameters
    ----------
    dataset : :class:`fsio.data.dataset.Dataset`
        The dataset to write.

    destination : :class:`fsio.types.DestinationType`
        A path, an open text stream, or ``"-"`` for the standard output.

    fmt : str
        ``libsvm``, ``csv`` or ``weka`` (or ``arff``).

    kwargs : dict, optional
        Format-specific options, passed on to the writer. For WEKA:
        ``sparse``, ``relation``, ``quote_char``. For LibSVM:
        ``write_mapping``.
    """
    Writer.for_format(destination, dataset, fmt, **kwargs).write()


# Constants
FORMAT_TO_WRITER = {
    "libsvm": LibSVMWriter,
    "csv": CSVWriter,
    "weka": ARFFWriter,
}
