# License: BSD 3 clause
"""
Custom type aliases for readability.
"""
from __future__ import annotations

from pathlib import Path
from typing import IO, Dict, Sequence, Union

from typing_extensions import TypeAlias

# class labels and feature names are plain strings
ClassLabel: TypeAlias = str
FeatureName: TypeAlias = str

# a single feature value; which of these a feature holds
# is governed by its declared type
FeatureValue: TypeAlias = Union[int, float, str]

# one sample maps feature names to values;
# an absent feature is a missing value
Sample: TypeAlias = Dict[FeatureName, FeatureValue]

# the canonical dataset layout: class label -> samples
DatasetDict: TypeAlias = Dict[ClassLabel, Sequence[Sample]]

# feature name -> canonical feature type keyword
FeatureTypeMap: TypeAlias = Dict[FeatureName, str]

# a string path or Path object
PathOrStr: TypeAlias = Union[Path, str]

# anything a reader can read from: a path, the stdin sentinel,
# or an already-open text or binary stream
SourceType: TypeAlias = Union[PathOrStr, IO[str], IO[bytes]]

# anything a writer can write to: a path, the stdout
# sentinel, or an already-open text stream
DestinationType: TypeAlias = Union[PathOrStr, IO[str]]
