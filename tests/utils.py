"""
Utility functions to make fsio testing simpler.
"""

from pathlib import Path
from typing import Union

from fsio.data import Dataset


def unlink(file_path: Union[str, Path]):
    """
    Remove a file path if it exists.

    Parameters
    ----------
    file_path : str/Path
    """
    file_path = Path(file_path)
    if file_path.exists():
        file_path.unlink()


def make_weather_dataset():
    """
    Create the dataset stored in ``tests/other/toy.arff``.

    Dates are days since 1970-01-01.
    """
    data = {
        "yes": [
            {"outlook": "overcast", "humidity": 86, "wind speed": 0.0,
             "note": "calm", "day": 18264},
            {"outlook": "rainy", "temperature": 70.5, "wind speed": 3.25,
             "day": 18265},
        ],
        "no": [
            {"outlook": "sunny", "temperature": 85.0, "humidity": 85,
             "wind speed": 1.5, "note": "very hot", "day": 18263},
        ],
    }
    return Dataset(data,
                   features=["outlook", "temperature", "humidity", "wind speed",
                             "note", "day"],
                   feature_types={"outlook": "nominal", "temperature": "real",
                                  "humidity": "integer", "wind speed": "real",
                                  "note": "string", "day": "date"},
                   classes=["yes", "no"],
                   relation="weather")


def make_numeric_dataset():
    """Create a small all-numeric dataset with zero and missing values."""
    data = {
        "spam": [{"free": 1.0, "money": 0.0, "win": 2.0},
                 {"money": 3.5}],
        "ham": [{"win": 0.5}, {}],
    }
    return Dataset(data,
                   features=["free", "money", "win"],
                   feature_types={"free": "real", "money": "real", "win": "real"})
