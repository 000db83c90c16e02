# License: BSD 3 clause
"""
The canonical in-memory representation shared by all readers and writers.

A :class:`Dataset` maps each class label to the samples that belong to it.
Each sample is a plain dictionary from feature name to value, where a
feature that is absent from the dictionary is *missing*, not zero. Two side
tables travel with the samples: the feature order (used by every writer and
by the contingency counter) and the feature type registry, which decides how
text is turned into values and back.
"""

import numbers
from datetime import timedelta
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

import numpy as np
import pandas as pd
from pandas.api.types import is_datetime64_any_dtype, is_float_dtype, is_integer_dtype
from sklearn.feature_extraction import DictVectorizer

from fsio.errors import ConfigurationError, MalformedInputError
from fsio.types import ClassLabel, DatasetDict, FeatureName, FeatureTypeMap, FeatureValue, Sample
from fsio.utils.constants import DATE_EPOCH, FEATURE_TYPE_ALIASES, TEXT_FEATURE_TYPES


def canonical_feature_type(type_name: str) -> str:
    """
    Collapse a feature type keyword to one of the canonical types.

    Matching is case-insensitive, so ``NUMERIC``, ``Continuous`` and
    ``real`` all become ``"real"``.

    Parameters
    ----------
    type_name : str
        The type keyword as found in a header or supplied by the caller.

    Returns
    -------
    str
        One of ``"integer"``, ``"real"``, ``"nominal"``, ``"string"``
        or ``"date"``.

    Raises
    ------
    ConfigurationError
        If the keyword is not a known type or alias.
    """
    try:
        return FEATURE_TYPE_ALIASES[str(type_name).strip().lower()]
    except KeyError:
        raise ConfigurationError(f"Invalid feature type: '{type_name}'. Valid types "
                                 f"are: {', '.join(sorted(FEATURE_TYPE_ALIASES))}")


def _to_days(value) -> int:
    """Convert a date-like value to the number of whole days since the epoch."""
    timestamp = pd.Timestamp(value)
    if pd.isna(timestamp):
        raise ValueError(f"'{value}' is not a date")
    if timestamp.tzinfo is not None:
        timestamp = timestamp.tz_convert(None)
    return (timestamp - pd.Timestamp(DATE_EPOCH)).days


def parse_value(value, feature_type: Optional[str]) -> FeatureValue:
    """
    Convert a raw value to the Python type its feature is declared with.

    Parameters
    ----------
    value : str or number
        The raw value, usually a token read from a file.

    feature_type : Optional[str]
        The canonical type of the feature. Features without a
        registered type keep text as text.

    Returns
    -------
    :class:`fsio.types.FeatureValue`
        An ``int`` for integer and date features, a ``float`` for real
        features and a ``str`` otherwise.

    Raises
    ------
    MalformedInputError
        If the value cannot be converted.
    """
    try:
        if feature_type == "integer":
            if isinstance(value, numbers.Integral):
                return int(value)
            if isinstance(value, str):
                try:
                    return int(value)
                except ValueError:
                    pass
            # integral floats such as "3.0" are accepted
            as_float = float(value)
            if not as_float.is_integer():
                raise ValueError("not an integer")
            return int(as_float)
        elif feature_type == "real":
            return float(value)
        elif feature_type == "date":
            if isinstance(value, numbers.Integral):
                return int(value)
            return _to_days(value)
        elif isinstance(value, str):
            return value
        elif feature_type in TEXT_FEATURE_TYPES:
            return str(value)
        elif isinstance(value, numbers.Integral):
            return int(value)
        elif isinstance(value, numbers.Real):
            return float(value)
        return str(value)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Cannot convert '{value}' to a value of "
                                  f"type {feature_type}: {exc}")


def format_value(value: FeatureValue, feature_type: Optional[str] = None) -> str:
    """
    Turn a feature value back into the text written to a file.

    Parameters
    ----------
    value : :class:`fsio.types.FeatureValue`
        The value to format.

    feature_type : Optional[str], default=None
        The canonical type of the feature. Dates are written as
        ``YYYY-MM-DD``; everything else uses ``str()``, which for
        floats is the shortest text that reads back as the same float.

    Returns
    -------
    str
    """
    if feature_type == "date":
        return (DATE_EPOCH + timedelta(days=int(value))).isoformat()
    if feature_type == "integer":
        return str(int(value))
    if feature_type == "real":
        return str(float(value))
    return str(value)


def zero_value(feature_type: Optional[str]) -> FeatureValue:
    """
    Return the value that stands for "zero" for the given feature type.

    Text features get the number 0 as well, so that an unlisted value in
    a sparse row is never mistaken for the text "0".
    """
    if feature_type == "real":
        return 0.0
    return 0


def is_zero(value: FeatureValue) -> bool:
    """Check whether a value is numerically zero; text is never zero."""
    return (isinstance(value, numbers.Number) and not isinstance(value, bool)
            and value == 0)


class Dataset(object):
    """
    Encapsulate the labeled samples of a dataset and their metadata.

    Parameters
    ----------
    data : :class:`fsio.types.DatasetDict`
        Mapping from class label to a sequence of sample dictionaries.

    features : Optional[Iterable[str]], default=None
        The feature order. Features that appear in samples but not in
        this list are appended in the order they are first seen. If
        ``None``, the order is entirely derived from the samples.

    feature_types : Optional[Dict[str, str]], default=None
        Mapping from feature name to type keyword. Keywords are
        canonicalized with :func:`canonical_feature_type`.

    classes : Optional[Iterable[str]], default=None
        Declared class labels. Declared classes come first (and are kept
        even if they have no samples), followed by any other label in
        ``data``.

    relation : Optional[str], default=None
        The ARFF relation name, if one was read.

    comments : Optional[List[str]], default=None
        ARFF comment lines, verbatim.

    name : str, default="dataset"
        The name of this dataset, usually the path it was read from.

    Raises
    ------
    ConfigurationError
        If ``features`` contains duplicates or a type keyword is invalid.

    Notes
    -----
    A ``Dataset`` is not meant to be modified once built: the samples
    of each class are stored in a tuple, and ``samples``, ``data`` and the
    side-table accessors all return copies. Iterating over a ``Dataset``
    yields the stored sample dictionaries themselves, so they must not be
    changed.
    """

    def __init__(
        self,
        data: DatasetDict,
        features: Optional[Iterable[FeatureName]] = None,
        feature_types: Optional[FeatureTypeMap] = None,
        classes: Optional[Iterable[ClassLabel]] = None,
        relation: Optional[str] = None,
        comments: Optional[List[str]] = None,
        name: str = "dataset",
    ):
        """Initialize a Dataset instance."""
        super(Dataset, self).__init__()
        self.name = name
        self.relation = relation
        self.comments = list(comments) if comments else []

        class_order = list(classes) if classes is not None else []
        class_order.extend(label for label in data if label not in class_order)
        self._data: Dict[ClassLabel, Tuple[Sample, ...]] = {
            label: tuple(dict(sample) for sample in data.get(label, ()))
            for label in class_order
        }

        feature_order = list(features) if features is not None else []
        if len(set(feature_order)) != len(feature_order):
            raise ConfigurationError(f"Duplicate feature names in {feature_order}")
        seen = set(feature_order)
        for _, sample in self:
            for feature in sample:
                if feature not in seen:
                    seen.add(feature)
                    feature_order.append(feature)
        self._features = feature_order

        self._feature_types = {
            feature: canonical_feature_type(type_name)
            for feature, type_name in (feature_types or {}).items()
        }

    @property
    def classes(self) -> List[ClassLabel]:
        """The class labels, in declaration order."""
        return list(self._data)

    @property
    def features(self) -> List[FeatureName]:
        """The feature order."""
        return list(self._features)

    @property
    def feature_types(self) -> FeatureTypeMap:
        """The feature type registry (only features with a registered type)."""
        return dict(self._feature_types)

    @property
    def data(self) -> Dict[ClassLabel, Tuple[Sample, ...]]:
        """Mapping from class label to copies of its samples."""
        return {label: self.samples(label) for label in self._data}

    def samples(self, label: ClassLabel) -> Tuple[Sample, ...]:
        """Return copies of the samples of a class (empty if the class is unknown)."""
        return tuple(dict(sample) for sample in self._data.get(label, ()))

    def class_size(self, label: ClassLabel) -> int:
        """Return the number of samples in a class."""
        return len(self._data.get(label, ()))

    def get_feature_type(self, feature: FeatureName) -> Optional[str]:
        """Return the registered type of a feature, or ``None``."""
        return self._feature_types.get(feature)

    def get_feature_values(self, feature: FeatureName) -> List[FeatureValue]:
        """
        Return the values a feature takes, in sample order.

        Samples in which the feature is missing contribute nothing.
        """
        return [sample[feature] for _, sample in self if feature in sample]

    def __contains__(self, label):
        """
        Check if a class label is in the Dataset.

        Parameters
        ----------
        label
            The class label to check.

        """
        return label in self._data

    def __iter__(self) -> Iterator[Tuple[ClassLabel, Sample]]:
        """Iterate through (label, sample) tuples, class by class."""
        for label, samples in self._data.items():
            for sample in samples:
                yield label, sample

    def __len__(self) -> int:
        """Return the total number of samples."""
        return sum(len(samples) for samples in self._data.values())

    def __eq__(self, other):
        """
        Check whether two datasets hold the same data.

        Two datasets are equal when they have the same classes, feature
        order, feature types and samples (per class, in order). The name,
        relation and comments are not compared.

        Parameters
        ----------
        other : :class:`fsio.data.dataset.Dataset`
            The other ``Dataset`` to check equivalence with.

        Returns
        -------
        bool
            ``True`` if they are the same, ``False`` otherwise.
        """
        if not isinstance(other, Dataset):
            return NotImplemented
        return (
            self.classes == other.classes
            and self._features == other._features
            and self._feature_types == other._feature_types
            and self._data == other._data
        )

    def __str__(self):
        """Return a short summary of the ``Dataset``."""
        return (f"{self.name}: {len(self)} samples, {len(self._data)} classes, "
                f"{len(self._features)} features")

    def __repr__(self):
        """Return a string representation of ``Dataset``."""
        return (f"Dataset(name={self.name!r}, classes={self.classes!r}, "
                f"features={self._features!r}, num_samples={len(self)})")

    def to_data_frame(self, label_column: str = "class") -> pd.DataFrame:
        """
        Convert the dataset to a pandas data frame.

        Each sample becomes a row; missing values become ``NaN``. The
        columns follow the feature order, with the label last.

        Parameters
        ----------
        label_column : str, default="class"
            The name of the column holding the class labels.

        Returns
        -------
        pandas.DataFrame

        Raises
        ------
        ConfigurationError
            If ``label_column`` is already the name of a feature.
        """
        if label_column in self._features:
            raise ConfigurationError(f"Label column name '{label_column}' already "
                                     "used as feature name.")
        rows = []
        for label, sample in self:
            row = dict(sample)
            row[label_column] = label
            rows.append(row)
        return pd.DataFrame(rows, columns=self._features + [label_column])

    @staticmethod
    def from_data_frame(
        df: pd.DataFrame,
        label_column: str = "class",
        name: str = "dataset",
        feature_types: Optional[FeatureTypeMap] = None,
    ) -> "Dataset":
        """
        Create a ``Dataset`` instance from a pandas data frame.

        ``NaN`` cells become missing values. When ``feature_types`` does
        not cover a column, its type is inferred from the column dtype:
        integer columns are ``integer``, float columns ``real``, datetime
        columns ``date`` and anything else ``string``.

        Parameters
        ----------
        df : pandas.DataFrame
            The data frame, one row per sample.

        label_column : str, default="class"
            The name of the column containing the class labels.

        name : str, default="dataset"
            The name of the output ``Dataset``.

        feature_types : Optional[Dict[str, str]], default=None
            Explicit types for some or all of the columns.

        Returns
        -------
        :class:`fsio.data.dataset.Dataset`

        Raises
        ------
        ConfigurationError
            If ``label_column`` is not a column of ``df``.
        """
        if label_column not in df.columns:
            raise ConfigurationError(f"Label column '{label_column}' not found in "
                                     "data frame.")
        features = [str(column) for column in df.columns if column != label_column]
        types = {}
        for column in df.columns:
            if column == label_column:
                continue
            if feature_types and str(column) in feature_types:
                types[str(column)] = canonical_feature_type(feature_types[str(column)])
            elif is_integer_dtype(df[column]):
                types[str(column)] = "integer"
            elif is_float_dtype(df[column]):
                types[str(column)] = "real"
            elif is_datetime64_any_dtype(df[column]):
                types[str(column)] = "date"
            else:
                types[str(column)] = "string"

        data: Dict[ClassLabel, List[Sample]] = {}
        for record in df.to_dict(orient="records"):
            label = str(record.pop(label_column))
            data.setdefault(label, []).append({
                str(feature): parse_value(value, types[str(feature)])
                for feature, value in record.items()
                if not pd.isna(value)
            })
        return Dataset(data, features=features, feature_types=types, name=name)

    def vectorize(self, sparse: bool = True) -> Tuple[np.ndarray, np.ndarray, DictVectorizer]:
        """
        Turn the samples into a feature matrix and a label array.

        This is meant for scoring code that works on matrices. Text
        features are one-hot encoded by scikit-learn's ``DictVectorizer``
        (as ``name=value`` columns); missing values become zeros.

        Parameters
        ----------
        sparse : bool, default=True
            Whether to return a sparse (CSR) matrix.

        Returns
        -------
        X : numpy.ndarray or scipy.sparse.csr_matrix
            The feature matrix, one row per sample in iteration order.

        y : numpy.ndarray
            The class label of each row.

        vectorizer : sklearn.feature_extraction.DictVectorizer
            The fitted vectorizer, for mapping columns back to features.
        """
        vectorizer = DictVectorizer(sparse=sparse)
        labels = []
        samples = []
        for label, sample in self:
            labels.append(label)
            samples.append(sample)
        X = vectorizer.fit_transform(samples)
        return X, np.array(labels), vectorizer
