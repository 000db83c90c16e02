# License: BSD 3 clause
"""
This module handles loading data from various types of data files. A
base ``Reader`` class is provided that is sub-classed for each data
file type that is supported, e.g. ``CSVReader``.

Every reader returns a brand new :class:`fsio.data.dataset.Dataset`; a
reader never adds to a dataset it returned earlier. Reading is
all-or-nothing: the first malformed line aborts the whole read with a
:class:`fsio.errors.MalformedInputError` and no partial dataset is
returned.

Notes about Missing Values
--------------------------
The three formats do not agree on what an absent value means:

- In CSV files an empty cell is a missing value and the feature is left
  out of the sample.
- In dense ARFF rows ``?`` is a missing value and the feature is left out
  of the sample.
- In sparse ARFF rows every feature that is *not listed* has the value
  zero, so it is added to the sample with the zero of its type.
- In LibSVM files a feature that is not listed is zero, but since the
  format cannot distinguish zero from missing the reader does not add
  it to the sample.
"""

import csv
import logging
import re
import sys
from collections import OrderedDict
from contextlib import contextmanager
from io import StringIO
from pathlib import Path
from urllib.parse import quote
from urllib.request import urlopen

from bs4 import UnicodeDammit

from fsio.data.dataset import Dataset, canonical_feature_type, parse_value, zero_value
from fsio.errors import ConfigurationError, MalformedInputError
from fsio.utils.constants import (
    ARFF_CLASS_ATTRIBUTE,
    ARFF_COMMENT_MARKER,
    ARFF_MISSING_VALUE,
    DEFAULT_QUOTE_CHAR,
    EXT_TO_FORMAT,
    FORMAT_ALIASES,
    KNOWN_FORMATS,
    STDIN,
)


def canonical_format(fmt):
    """
    Normalize a format tag.

    Parameters
    ----------
    fmt : str
        One of ``libsvm``, ``csv`` or ``weka`` (``arff`` is accepted as
        another name for ``weka``), in any case.

    Returns
    -------
    str
        The lower-case format tag.

    Raises
    ------
    ConfigurationError
        If the format is not supported.
    """
    tag = str(fmt).strip().lower()
    tag = FORMAT_ALIASES.get(tag, tag)
    if tag not in KNOWN_FORMATS:
        raise ConfigurationError(f"Only {', '.join(KNOWN_FORMATS)} formats are "
                                 f"supported. You specified: {fmt}")
    return tag


def split_with_quotes(string, delimiter=",", quote_char=DEFAULT_QUOTE_CHAR):
    """
    A replacement for ``re.split()`` that won't split delimiters
    enclosed in quotes.

    Parameters
    ----------
    string : str
        The string with quotes to split.

    delimiter : str or re.Pattern, default=","
        A regular expression matching the delimiter, e.g. ``r",\\s*"``.

    quote_char : str, default='"'
        The quote character. Quote characters are removed from the
        returned tokens. Pass ``None`` to disable quoting.

    Returns
    -------
    tokens : list of str
        The tokens, in order. Empty tokens between two adjacent
        delimiters are kept; an empty string gives an empty list.

    Raises
    ------
    MalformedInputError
        If the string contains an odd number of quote characters.

    Examples
    --------
    >>> split_with_quotes('a,"b,c",d')
    ['a', 'b,c', 'd']
    """
    if quote_char and string.count(quote_char) % 2:
        raise MalformedInputError(f"Unbalanced quote character {quote_char} in: {string}")
    if not string:
        return []

    pattern = re.compile(delimiter) if isinstance(delimiter, str) else delimiter
    tokens = []
    current = []
    in_quotes = False
    pos = 0
    while pos < len(string):
        char = string[pos]
        if quote_char and char == quote_char:
            in_quotes = not in_quotes
            pos += 1
            continue
        if not in_quotes:
            match = pattern.match(string, pos)
            # ignore zero-width matches so we always make progress
            if match and match.end() > pos:
                tokens.append("".join(current))
                current = []
                pos = match.end()
                continue
        current.append(char)
        pos += 1
    tokens.append("".join(current))
    return tokens


class Reader(object):
    """
    Base class for reading a dataset from a text source.

    Parameters
    ----------
    source : :class:`fsio.types.SourceType`
        A path, an already-open text or binary stream, or ``"-"`` for
        the standard input. Streams that are passed in (including the
        standard input) are never closed by the reader.

    quiet : bool, default=True
        Do not print "Loading..." status message to stderr.

    name : Optional[str], default=None
        The name given to the resulting ``Dataset`` and used in error
        messages. Defaults to the path or the stream's name.

    logger : Optional[logging.Logger], default=None
        A logger instance to use to log messages instead of creating
        a new one by default.
    """

    def __init__(self, source, quiet=True, name=None, logger=None):
        super(Reader, self).__init__()
        self.source = source
        self.quiet = quiet
        self.logger = logger if logger else logging.getLogger(__name__)
        if name is not None:
            self.name = name
        elif isinstance(source, (str, Path)):
            self.name = "<stdin>" if str(source) == STDIN else str(source)
        else:
            self.name = str(getattr(source, "name", "<stream>"))
        self._progress_msg = ""

    @classmethod
    def for_path(cls, path, **kwargs):
        """
        Instantiate the appropriate Reader sub-class based on the
        file extension of the given path.

        Parameters
        ----------
        path : :class:`fsio.types.PathOrStr`
            A path ending in ``.arff``, ``.csv``, ``.libsvm`` or ``.svm``.

        kwargs : dict, optional
            The arguments to the Reader object being instantiated.

        Returns
        -------
        reader : fsio.data.Reader
            A new instance of the Reader sub-class that is
            appropriate for the given path.

        Raises
        ------
        ConfigurationError
            If file does not have a valid extension.
        """
        ext = Path(path).suffix.lower()
        if ext not in EXT_TO_FORMAT:
            raise ConfigurationError("Example files must be in either .arff, .csv, "
                                     f".libsvm, or .svm format. You specified: {path}")
        return FORMAT_TO_READER[EXT_TO_FORMAT[ext]](path, **kwargs)

    @classmethod
    def for_format(cls, source, fmt, **kwargs):
        """
        Instantiate the Reader sub-class for a format tag.

        Parameters
        ----------
        source : :class:`fsio.types.SourceType`
            What to read from.

        fmt : str
            ``libsvm``, ``csv`` or ``weka`` (or ``arff``).

        kwargs : dict, optional
            The arguments to the Reader object being instantiated.

        Returns
        -------
        reader : fsio.data.Reader

        Raises
        ------
        ConfigurationError
            If the format is not supported.
        """
        return FORMAT_TO_READER[canonical_format(fmt)](source, **kwargs)

    @contextmanager
    def _open_source(self):
        """Yield a readable stream, closing it afterwards only if we opened it."""
        if isinstance(self.source, (str, Path)):
            if str(self.source) == STDIN:
                yield sys.stdin
            else:
                with open(self.source, encoding="utf-8") as input_file:
                    yield input_file
        else:
            yield self.source

    def _numbered_lines(self, file):
        """
        Yield ``(line_num, line)`` pairs with line endings removed.

        Byte strings (from binary streams) are decoded the same way
        regardless of where they come from.
        """
        for line_num, line in enumerate(file, start=1):
            if isinstance(line, bytes):
                line = UnicodeDammit(line, ["utf-8", "windows-1252"]).unicode_markup
            if line_num % 100 == 0:
                self._print_progress(line_num)
            yield line_num, line.rstrip("\r\n")

    def _print_progress(self, progress_num, end="\r"):
        """
        Helper method to print out progress numbers in proper format.
        Nothing gets printed if ``self.quiet`` is ``True``.

        Parameters
        ----------
        progress_num
            Progress indicator value. Usually a line number.
            Must be able to convert to string.

        end : str, default='\r'
            The string to put at the end of the line.  "\\r" should be
            used for every update except for the final one.
        """
        if not self.quiet:
            print(f"{self._progress_msg}{progress_num:>15}", end=end, file=sys.stderr)
            sys.stderr.flush()

    def _parse_value(self, text, feature_type, line_num):
        """Call ``parse_value`` and add the location to any error."""
        try:
            return parse_value(text, feature_type)
        except MalformedInputError as exc:
            raise MalformedInputError(exc.message, self.name, line_num) from exc

    def _sub_read(self, lines):
        """
        Does the actual parsing.

        Parameters
        ----------
        lines : iterator of (int, str)
            Line numbers and lines, without line endings.

        Raises
        ------
        NotImplementedError
        """
        raise NotImplementedError

    def read(self):
        """
        Load the dataset.

        Returns
        -------
        dataset : fsio.data.Dataset
            ``Dataset`` instance representing the input.

        Raises
        ------
        MalformedInputError
            If the input does not follow the format.

        ConfigurationError
            If the input declares an unknown feature type.
        """
        self.logger.debug(f"Path: {self.name}")

        if not self.quiet:
            self._progress_msg = f"Loading {self.name}..."
            print(self._progress_msg, end="\r", file=sys.stderr)
            sys.stderr.flush()

        with self._open_source() as file:
            dataset = self._sub_read(self._numbered_lines(file))

        # Report that loading is complete
        self._print_progress("done", end="\n")
        self.logger.debug(f"Read {len(dataset)} samples in {len(dataset.classes)} "
                          f"classes with {len(dataset.features)} features from {self.name}")
        return dataset


class LibSVMReader(Reader):
    """
    Reader to create a ``Dataset`` instance from a LibSVM/SVMLight file.

    Each line looks like ``<label> <index>:<value> ...``. Indices are kept
    as opaque feature names and all values are read as floats. A feature
    that is not listed on a line is zero in LibSVM, but because the format
    cannot tell zero and missing apart it is simply left out of the sample.

    Lines may end with a comment that maps the numbers back to names, as
    written by ``LibSVMWriter(write_mapping=True)``::

        1 2:0.5 4:1.0 # 1=spam | 2=free 4=money

    When present, labels and feature names are restored from it.
    """

    LIBSVM_REPLACE_DICT = {"\u2236": ":",
                           "\uFF03": "#",
                           "\u2002": " ",
                           "\ua78a": "=",
                           "\u2223": "|"}

    @staticmethod
    def _unsanitize(name):
        for orig, replacement in LibSVMReader.LIBSVM_REPLACE_DICT.items():
            name = name.replace(orig, replacement)
        return name

    @staticmethod
    def _parse_mapping(text):
        """Turn ``1=a 2=b`` into ``{"1": "a", "2": "b"}``."""
        mapping = {}
        # names may hold U+2002, which str.split() would also split on
        for pair in filter(None, text.split(" ")):
            number, sep, name = pair.partition("=")
            if not sep:
                raise ValueError(f"'{pair}' is not a number=name pair")
            mapping[number] = LibSVMReader._unsanitize(name)
        return mapping

    def _sub_read(self, lines):
        """
        Parameters
        ----------
        lines : iterator of (int, str)
            Line numbers and lines of a LibSVM file.

        Returns
        -------
        dataset : fsio.data.Dataset

        Raises
        ------
        MalformedInputError
            If a line does not look like valid libsvm format.
        """
        data = OrderedDict()
        # feature name -> the index it was written with
        feature_indices = OrderedDict()

        for line_num, line in lines:
            body, _, comment = line.partition("#")
            tokens = body.split()
            # blank and comment-only lines
            if not tokens:
                continue
            label_map, feat_map = {}, {}
            if "|" in comment:
                label_str, _, feat_str = comment.partition("|")
                try:
                    label_map = self._parse_mapping(label_str)
                    feat_map = self._parse_mapping(feat_str)
                except ValueError as exc:
                    raise MalformedInputError(f"Bad name mapping comment: {exc}",
                                              self.name, line_num)

            label = label_map.get(tokens[0], tokens[0])
            sample = {}
            for pair in tokens[1:]:
                index, sep, value = pair.partition(":")
                if not sep or not index:
                    raise MalformedInputError("Line does not look like valid libsvm "
                                              f"format: '{pair}' is not index:value",
                                              self.name, line_num)
                feature = feat_map.get(index, index)
                sample[feature] = self._parse_value(value, "real", line_num)
                feature_indices.setdefault(feature, index)
            data.setdefault(label, []).append(sample)

        # order by index when every index is a number, otherwise keep
        # the order in which the features were first seen
        features = list(feature_indices)
        if all(index.isdigit() for index in feature_indices.values()):
            features.sort(key=lambda feature: int(feature_indices[feature]))

        return Dataset(data,
                       features=features,
                       feature_types={feature: "real" for feature in features},
                       name=self.name)


class CSVReader(Reader):
    """
    Reader for creating a ``Dataset`` instance from a CSV file.

    By default the first row holds the feature names and the second row
    their types (``integer``, ``real``, ``numeric``, ``continuous``,
    ``string``, ``nominal``, ``categorical`` or ``date``, in any case).
    Neither row has a cell for the class label column. All other rows are
    data rows, one per sample::

        f1,f2,f3
        integer,real,string
        c1,1,0.5,red
        c2,,1.5,blue

    An empty cell is a missing value. Blank lines are skipped.

    Parameters
    ----------
    source : :class:`fsio.types.SourceType`
        What to read from.

    feature_name_row : int, default=1
        The (1-indexed) line that holds the feature names.

    feature_type_row : int, default=2
        The (1-indexed) line that holds the feature types.

    feature_name2type : Optional[Dict[str, str]], default=None
        Ordered mapping from feature name to type. If given, the file has
        no name or type rows: every line is a data row and the mapping's
        order is the feature order.

    class_label_column : int, default=1
        The (1-indexed) column that holds the class label.

    kwargs : dict, optional
        Other arguments to the Reader object.

    Raises
    ------
    ConfigurationError
        If ``class_label_column`` is not a positive integer or the
        mapping contains an invalid type.
    """

    def __init__(self,
                 source,
                 feature_name_row=1,
                 feature_type_row=2,
                 feature_name2type=None,
                 class_label_column=1,
                 **kwargs):
        super(CSVReader, self).__init__(source, **kwargs)
        if not isinstance(class_label_column, int) or class_label_column < 1:
            raise ConfigurationError("The class label column must be a positive "
                                     f"integer. You specified: {class_label_column}")
        self.class_label_column = class_label_column
        if feature_name2type:
            self._features = [str(name) for name in feature_name2type]
            self._types = [canonical_feature_type(type_name)
                           for type_name in feature_name2type.values()]
            self.feature_name_row, self.feature_type_row = None, None
        else:
            self._features, self._types = None, None
            self.feature_name_row = feature_name_row
            self.feature_type_row = feature_type_row

    def _split(self, line, line_num):
        try:
            return next(csv.reader([line]))
        except csv.Error as exc:
            raise MalformedInputError(f"Could not split CSV row: {exc}", self.name, line_num)

    def _sub_read(self, lines):
        """
        Parameters
        ----------
        lines : iterator of (int, str)
            Line numbers and lines of a CSV file.

        Returns
        -------
        dataset : fsio.data.Dataset

        Raises
        ------
        MalformedInputError
            If a data row comes before the header rows, is too wide,
            or does not have the class label column.
        """
        features, types = self._features, self._types
        data = OrderedDict()

        for line_num, line in lines:
            if not line.strip():
                continue
            cells = self._split(line, line_num)

            if line_num == self.feature_name_row:
                features = [cell.strip() for cell in cells]
                continue
            if line_num == self.feature_type_row:
                try:
                    types = [canonical_feature_type(cell) for cell in cells]
                except ConfigurationError as exc:
                    raise ConfigurationError(f"{exc} ({self.name}, line {line_num})") from exc
                continue

            if features is None or types is None:
                raise MalformedInputError("Found a data row before the feature "
                                          "name and type rows", self.name, line_num)
            if len(features) != len(types):
                raise MalformedInputError(f"Found {len(features)} feature names but "
                                          f"{len(types)} feature types", self.name, line_num)
            if self.class_label_column > len(cells):
                raise MalformedInputError(f"The class label column ({self.class_label_column}) "
                                          f"can't be found in a row with {len(cells)} cells",
                                          self.name, line_num)

            label = cells.pop(self.class_label_column - 1).strip()
            if len(cells) > len(features):
                raise MalformedInputError(f"Row has {len(cells)} feature cells but only "
                                          f"{len(features)} features are declared",
                                          self.name, line_num)

            sample = {}
            for feature, feature_type, cell in zip(features, types, cells):
                # empty cells are missing values
                if not cell.strip():
                    continue
                sample[feature] = self._parse_value(cell.strip(), feature_type, line_num)
            data.setdefault(label, []).append(sample)

        if features is None or types is None:
            raise MalformedInputError("No feature name and type rows found in "
                                      "possibly empty file", self.name)
        if len(features) != len(types):
            raise MalformedInputError(f"Found {len(features)} feature names but "
                                      f"{len(types)} feature types", self.name)
        if len(set(features)) != len(features):
            raise MalformedInputError(f"Duplicate feature names in {features}", self.name)

        return Dataset(data,
                       features=features,
                       feature_types=dict(zip(features, types)),
                       name=self.name)


class ARFFReader(Reader):
    """
    Reader for creating a ``Dataset`` instance from a WEKA ARFF file.

    The header must declare the class attribute as a nominal attribute
    called ``class``; all other attributes are features, in the order
    they are declared. Data rows may be dense (``1,2.5,red,c1``) or sparse
    (``{0 1, 2 red, 3 c1}``), and the two may be mixed. In both cases the
    class label comes last.

    Parameters
    ----------
    source : :class:`fsio.types.SourceType`
        What to read from.

    quote_char : str, default='"'
        The character used to quote names and values that contain
        spaces or commas.

    kwargs : dict, optional
        Other arguments to the Reader object.
    """

    relation_regex = re.compile(r"^@relation(\s|$)", flags=re.IGNORECASE)
    attribute_regex = re.compile(r"^@attribute\s+(?P<rest>.*)$", flags=re.IGNORECASE)
    data_regex = re.compile(r"^@data$", flags=re.IGNORECASE)

    def __init__(self, source, quote_char=DEFAULT_QUOTE_CHAR, **kwargs):
        super(ARFFReader, self).__init__(source, **kwargs)
        if not isinstance(quote_char, str) or len(quote_char) != 1:
            raise ConfigurationError("The quote character must be a single "
                                     f"character. You specified: {quote_char!r}")
        self.quote_char = quote_char

    def _split(self, string, delimiter, line_num):
        try:
            return split_with_quotes(string, delimiter, self.quote_char)
        except MalformedInputError as exc:
            raise MalformedInputError(exc.message, self.name, line_num) from exc

    def _parse_attribute(self, rest, line_num):
        """
        Split what follows ``@attribute`` into a name and a specification.

        Returns
        -------
        name : str
            The attribute name, without quotes.

        spec : str
            Everything after the name, e.g. ``numeric`` or ``{a,b}``.
        """
        rest = rest.strip()
        if rest.startswith(self.quote_char):
            end = rest.find(self.quote_char, 1)
            if end < 0:
                raise MalformedInputError(f"Unbalanced quote character {self.quote_char} "
                                          "in attribute name", self.name, line_num)
            name, spec = rest[1:end], rest[end + 1:]
        else:
            name, _, spec = rest.replace("\t", " ").partition(" ")
        spec = spec.strip()
        if not name or not spec:
            raise MalformedInputError("Attribute directive needs a name and a type",
                                      self.name, line_num)
        return name, spec

    def _sub_read(self, lines):
        """
        Parameters
        ----------
        lines : iterator of (int, str)
            Line numbers and lines of an ARFF file.

        Returns
        -------
        dataset : fsio.data.Dataset

        Raises
        ------
        MalformedInputError
            If the header or a data row is malformed, or the file has no
            class attribute or no data section.

        ConfigurationError
            If an attribute has an unknown type.
        """
        relation = None
        features, types, classes, comments = [], [], [], []
        has_class, has_data = False, False
        data = OrderedDict()

        for line_num, line in lines:
            line = line.strip()
            # blank lines
            if not line:
                continue

            if line.startswith(ARFF_COMMENT_MARKER):
                comments.append(line)
            elif has_data:
                if not has_class:
                    raise MalformedInputError("Found data before a class attribute "
                                              "was declared", self.name, line_num)
                label, sample = self._parse_data_row(line, line_num, features, types)
                if label not in data:
                    raise MalformedInputError(f"Class label '{label}' was not declared "
                                              "in the class attribute", self.name, line_num)
                data[label].append(sample)
            elif self.relation_regex.match(line):
                tokens = self._split(line, r"\s+", line_num)
                if len(tokens) < 2:
                    raise MalformedInputError("Relation directive without a name",
                                              self.name, line_num)
                relation = tokens[1]
            elif self.attribute_regex.match(line):
                rest = self.attribute_regex.match(line).group("rest")
                name, spec = self._parse_attribute(rest, line_num)
                if spec.startswith("{") and spec.endswith("}"):
                    values = self._split(spec[1:-1].strip(), r",\s*", line_num)
                    if name.lower() == ARFF_CLASS_ATTRIBUTE:
                        if has_class:
                            raise MalformedInputError("Class attribute declared twice",
                                                      self.name, line_num)
                        has_class = True
                        classes = values
                        for label in classes:
                            data[label] = []
                        continue
                    # the nominal values are only advisory
                    feature_type = "nominal"
                else:
                    type_name = self._split(spec, r"\s+", line_num)[0]
                    try:
                        feature_type = canonical_feature_type(type_name)
                    except ConfigurationError as exc:
                        raise ConfigurationError(f"{exc} ({self.name}, line {line_num})") from exc
                if name in features:
                    raise MalformedInputError(f"Attribute '{name}' declared twice",
                                              self.name, line_num)
                features.append(name)
                types.append(feature_type)
            elif self.data_regex.match(line):
                has_data = True
            else:
                raise MalformedInputError(f"Unrecognized header line: {line}",
                                          self.name, line_num)

        if not has_class:
            raise MalformedInputError("No class attribute found", self.name)
        if not has_data:
            raise MalformedInputError("No @data section found", self.name)

        return Dataset(data,
                       features=features,
                       feature_types=dict(zip(features, types)),
                       classes=classes,
                       relation=relation,
                       comments=comments,
                       name=self.name)

    def _parse_data_row(self, line, line_num, features, types):
        """
        Parse one dense or sparse data row.

        Returns
        -------
        label : str
            The class label.

        sample : dict
            The feature values.
        """
        num_features = len(features)

        # sparse ARFF
        if line.startswith("{") and line.endswith("}"):
            pairs = self._split(line[1:-1].strip(), r",\s*", line_num)
            if not pairs:
                raise MalformedInputError("Sparse row without a class label",
                                          self.name, line_num)
            # unquoted values may contain spaces
            last = pairs.pop().strip().split(None, 1)
            if len(last) < 2:
                raise MalformedInputError("Sparse row must end with '<index> <class>'",
                                          self.name, line_num)
            label = last[1]

            values = {}
            for pair in pairs:
                tokens = pair.strip().split(None, 1)
                if len(tokens) != 2:
                    raise MalformedInputError(f"'{pair}' is not an '<index> <value>' pair",
                                              self.name, line_num)
                index_str, value = tokens
                try:
                    index = int(index_str)
                except ValueError:
                    raise MalformedInputError(f"Invalid feature index '{index_str}'",
                                              self.name, line_num)
                if not 0 <= index < num_features:
                    raise MalformedInputError(f"Feature index {index} out of range "
                                              f"[0, {num_features})", self.name, line_num)
                # "?" marks a listed but missing value
                values[index] = (None if value == ARFF_MISSING_VALUE
                                 else self._parse_value(value, types[index], line_num))

            sample = {}
            for index, (feature, feature_type) in enumerate(zip(features, types)):
                if index not in values:
                    # features that are not listed are zero
                    sample[feature] = zero_value(feature_type)
                elif values[index] is not None:
                    sample[feature] = values[index]
            return label, sample

        # regular ARFF
        cells = self._split(line, r",\s*", line_num)
        if len(cells) != num_features + 1:
            raise MalformedInputError(f"Row has {len(cells)} cells but {num_features} "
                                      "features plus the class are declared",
                                      self.name, line_num)
        label = cells.pop()
        sample = {}
        for feature, feature_type, value in zip(features, types, cells):
            if value == ARFF_MISSING_VALUE:
                continue
            sample[feature] = self._parse_value(value, feature_type, line_num)
        return label, sample


def read(source, fmt, **kwargs):
    """
    Read a dataset in the given format.

    Parameters
    ----------
    source : :class:`fsio.types.SourceType`
        A path, an open stream, or ``"-"`` for the standard input.

    fmt : str
        ``libsvm``, ``csv`` or ``weka`` (or ``arff``).

    kwargs : dict, optional
        Format-specific options, passed on to the reader. For CSV:
        ``feature_name_row``, ``feature_type_row``,
        ``feature_name2type``, ``class_label_column``. For WEKA:
        ``quote_char``.

    Returns
    -------
    dataset : fsio.data.Dataset
    """
    return Reader.for_format(source, fmt, **kwargs).read()


def read_url(url, fmt, **kwargs):
    """
    Fetch a dataset over the network and read it.

    The format is checked before anything is fetched, and the whole
    response is read before parsing starts.

    Parameters
    ----------
    url : str
        The URL of the dataset.

    fmt : str
        ``libsvm``, ``csv`` or ``weka`` (or ``arff``).

    kwargs : dict, optional
        Format-specific options, passed on to the reader.

    Returns
    -------
    dataset : fsio.data.Dataset

    Raises
    ------
    ConfigurationError
        If the format is not supported.
    """
    fmt = canonical_format(fmt)
    logger = kwargs.get("logger") or logging.getLogger(__name__)
    logger.debug(f"Fetching {url}")
    with urlopen(quote(url, safe="%/:=&?~#+!$,;'@()*[]")) as response:
        content = response.read()
    text = UnicodeDammit(content, ["utf-8", "windows-1252"]).unicode_markup
    kwargs.setdefault("name", url)
    return Reader.for_format(StringIO(text), fmt, **kwargs).read()


# Constants
FORMAT_TO_READER = {"libsvm": LibSVMReader,
                    "csv": CSVReader,
                    "weka": ARFFReader}
