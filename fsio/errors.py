# License: BSD 3 clause
"""
Exceptions raised while reading, writing and counting datasets.

Both concrete exceptions subclass ``ValueError`` so that code written
against plain ``ValueError`` keeps working.
"""


class FsioError(Exception):
    """Base class for all errors raised by ``fsio``."""


class ConfigurationError(FsioError, ValueError):
    """
    Raised for invalid options.

    Examples are an unsupported format tag, an unknown feature type
    keyword, or a value that the chosen output format cannot represent.
    """


class MalformedInputError(FsioError, ValueError):
    """
    Raised when the input text does not follow its format's grammar.

    Parameters
    ----------
    message : str
        What went wrong.

    source : Optional[str], default=None
        A description of the input (usually its path).

    line_num : Optional[int], default=None
        The 1-indexed line number on which the problem was detected.
    """

    def __init__(self, message, source=None, line_num=None):
        self.message = message
        self.source = source
        self.line_num = line_num
        location = ""
        if source is not None and line_num is not None:
            location = f" ({source}, line {line_num})"
        elif source is not None:
            location = f" ({source})"
        elif line_num is not None:
            location = f" (line {line_num})"
        super(MalformedInputError, self).__init__(f"{message}{location}")
