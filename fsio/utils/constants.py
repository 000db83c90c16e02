"""
Constants shared by the ``fsio`` readers, writers and command-line tools.
"""

from datetime import date

# format tags accepted by ``read()``/``write()``; "arff" is
# accepted as another name for WEKA's format
KNOWN_FORMATS = ["libsvm", "csv", "weka"]
FORMAT_ALIASES = {"arff": "weka"}

# file extensions used to guess a format from a path
EXT_TO_FORMAT = {".arff": "weka",
                 ".csv": "csv",
                 ".libsvm": "libsvm",
                 ".svm": "libsvm"}

# sentinel path that selects the standard input or output stream
STDIN = "-"
STDOUT = "-"

# the (lower-case) feature type aliases and the canonical types they collapse to
FEATURE_TYPE_ALIASES = {"int": "integer",
                        "integer": "integer",
                        "real": "real",
                        "numeric": "real",
                        "continuous": "real",
                        "float": "real",
                        "nominal": "nominal",
                        "categorical": "nominal",
                        "string": "string",
                        "date": "date"}
TEXT_FEATURE_TYPES = {"nominal", "string"}

# type written out for features that have no registered type
DEFAULT_FEATURE_TYPE = "string"

# WEKA ARFF markup
ARFF_COMMENT_MARKER = "%"
ARFF_MISSING_VALUE = "?"
ARFF_CLASS_ATTRIBUTE = "class"
ARFF_DATE_FORMAT = "yyyy-MM-dd"
DEFAULT_RELATION = "fsio_relation"
DEFAULT_QUOTE_CHAR = '"'

# dates are stored as whole days elapsed since this day
DATE_EPOCH = date(1970, 1, 1)
