# License: BSD 3 clause
"""
Contingency counts between feature presence and class membership.

For a feature *f* and a class *k*, every sample falls into one of four
cells:

============  ===================  ==================
..            sample in class *k*  sample not in *k*
============  ===================  ==================
*f* present   A                    B
*f* absent    C                    D
============  ===================  ==================

A feature is *present* in a sample when the sample has a value for it and,
for numeric values, that value is not zero (negative values are present).
Text values are present whenever they exist. Features left out of a sparse
ARFF row are filled with the number 0 whatever their type, so they are absent.

Scoring formulas downstream (information gain, odds ratios, ...) are all
built from these four numbers.
"""

from typing import Iterable, NamedTuple, Optional

import numpy as np
import pandas as pd
import scipy.sparse as sp

from fsio.data.dataset import Dataset, is_zero
from fsio.types import ClassLabel, FeatureName, Sample


class ContingencyCounts(NamedTuple):
    """The A, B, C, D counts of one (feature, class) pair."""

    a: int
    b: int
    c: int
    d: int


def is_present(sample: Sample, feature: FeatureName) -> bool:
    """Check whether a feature counts as present in a sample."""
    return feature in sample and not is_zero(sample[feature])


def contingency(dataset: Dataset, feature: FeatureName, label: ClassLabel) -> ContingencyCounts:
    """
    Compute the contingency counts of one feature against one class.

    Parameters
    ----------
    dataset : :class:`fsio.data.dataset.Dataset`
        The dataset to count over. It is not modified.

    feature : str
        The feature whose presence is counted. A feature that no sample
        has is absent everywhere.

    label : str
        The target class. A class that is not in the dataset has no
        samples, so A and C are both zero.

    Returns
    -------
    ContingencyCounts
        ``A + C`` is the size of the class and ``B + D`` the number of
        samples outside it.
    """
    a = b = c = d = 0
    for sample_label, sample in dataset:
        present = is_present(sample, feature)
        if sample_label == label:
            if present:
                a += 1
            else:
                c += 1
        elif present:
            b += 1
        else:
            d += 1
    return ContingencyCounts(a, b, c, d)


def contingency_table(
    dataset: Dataset, features: Optional[Iterable[FeatureName]] = None
) -> pd.DataFrame:
    """
    Compute contingency counts for every (feature, class) pair at once.

    Presence is collected into a sparse samples-by-features matrix which
    is multiplied with a one-hot samples-by-classes matrix, so the cost
    is proportional to the number of present values.

    Parameters
    ----------
    dataset : :class:`fsio.data.dataset.Dataset`
        The dataset to count over.

    features : Optional[Iterable[str]], default=None
        The features to include, in this order. Defaults to the
        dataset's feature order.

    Returns
    -------
    pandas.DataFrame
        Indexed by ``(feature, class)`` with integer columns ``a``,
        ``b``, ``c`` and ``d``. Each row equals
        ``contingency(dataset, feature, class)``.
    """
    features = dataset.features if features is None else list(features)
    classes = dataset.classes
    feature_index = {feature: idx for idx, feature in enumerate(features)}
    class_index = {label: idx for idx, label in enumerate(classes)}

    rows, cols, label_ids = [], [], []
    for row, (label, sample) in enumerate(dataset):
        label_ids.append(class_index[label])
        for feature in sample:
            if feature in feature_index and is_present(sample, feature):
                rows.append(row)
                cols.append(feature_index[feature])

    num_samples = len(label_ids)
    presence = sp.csr_matrix((np.ones(len(rows), dtype=np.int64), (rows, cols)),
                             shape=(num_samples, len(features)))
    membership = sp.csr_matrix((np.ones(num_samples, dtype=np.int64),
                                (np.arange(num_samples), label_ids)),
                               shape=(num_samples, len(classes)))

    # features x classes
    a = np.asarray((presence.T @ membership).todense(), dtype=np.int64)
    present_total = np.asarray(presence.sum(axis=0), dtype=np.int64).reshape(-1, 1)
    class_sizes = np.asarray(membership.sum(axis=0), dtype=np.int64).reshape(1, -1)
    b = present_total - a
    c = class_sizes - a
    d = (num_samples - class_sizes) - b

    index = pd.MultiIndex.from_product([features, classes], names=["feature", "class"])
    return pd.DataFrame({"a": a.ravel(), "b": b.ravel(), "c": c.ravel(), "d": d.ravel()},
                        index=index)
