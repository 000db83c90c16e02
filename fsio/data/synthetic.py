# License: BSD 3 clause
"""
Generate random datasets for testing code that consumes a ``Dataset``.
"""

from typing import Dict, List

import numpy as np

from fsio.data.dataset import Dataset
from fsio.types import ClassLabel, Sample


def make_random_dataset(
    num_samples: int = 100,
    num_classes: int = 2,
    num_features: int = 10,
    num_categories: int = 2,
    allow_missing: bool = True,
    random_state: int = 1234567890,
) -> Dataset:
    """
    Create a random labeled dataset.

    Parameters
    ----------
    num_samples : int, default=100
        Total number of samples.

    num_classes : int, default=2
        Labels are drawn uniformly from ``c1`` to ``c<num_classes>``.

    num_features : int, default=10
        Features are called ``f1`` to ``f<num_features>``.

    num_categories : int, default=2
        The kind of values the features take:

        - ``1``: every present feature has the integer value 1
        - ``> 1``: integers between 1 and ``num_categories``
        - anything else: reals in ``[0, 1]`` (a ``[0, 1)`` draw rounded to
          3 decimals, so 1.0 can occur)

    allow_missing : bool, default=True
        If ``True``, each sample drops a random number of its features
        (possibly none, never all of them).

    random_state : int, default=1234567890
        Seed for the ``numpy.random.RandomState`` used.

    Returns
    -------
    :class:`fsio.data.dataset.Dataset`
        A dataset whose feature order is ``f1`` to ``f<num_features>``
        and whose classes are the labels that were drawn, in numeric
        order.
    """
    prng = np.random.RandomState(random_state)
    features = [f"f{num}" for num in range(1, num_features + 1)]
    feature_type = "integer" if num_categories >= 1 else "real"

    data: Dict[ClassLabel, List[Sample]] = {}
    for _ in range(num_samples):
        label = f"c{prng.randint(num_classes) + 1}"
        kept = features
        if allow_missing and num_features:
            num_dropped = prng.randint(num_features)
            dropped = set(prng.choice(num_features, size=num_dropped, replace=False))
            kept = [feature for idx, feature in enumerate(features) if idx not in dropped]

        sample: Sample = {}
        for feature in kept:
            if num_categories == 1:
                sample[feature] = 1
            elif num_categories > 1:
                sample[feature] = int(prng.randint(num_categories)) + 1
            else:
                sample[feature] = round(float(prng.random_sample()), 3)
        data.setdefault(label, []).append(sample)

    classes = [f"c{num}" for num in range(1, num_classes + 1) if f"c{num}" in data]
    return Dataset(data,
                   features=features,
                   feature_types={feature: feature_type for feature in features},
                   classes=classes,
                   name="random")
