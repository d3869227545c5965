"""
This module contains the options that morphotree provides out of the box. They are
registered when :mod:`morphotree.options` is first imported.
"""

import numpy as np

from .exceptions import OptionError
from .option import MorphotreeOption


class VerbosityOption(
    MorphotreeOption,
    name="verbosity",
    project="verbosity",
    env=("MORPHOTREE_VERBOSITY",),
):
    """
    Set the verbosity of the package. Verbosity 0 is completely silent, 1 is default,
    2 is verbose, 3 is progress and 4 is debug.
    """

    def setter(self, value):
        return int(value)

    def getter(self, value):
        return int(value)

    def get_default(self):
        return 1


class PrecisionOption(
    MorphotreeOption,
    name="precision",
    project="precision",
    env=("MORPHOTREE_PRECISION",),
):
    """
    Floating point type of the point level arrays of read-only morphologies.
    """

    choices = ("float32", "float64")

    def setter(self, value):
        value = str(np.dtype(value)) if not isinstance(value, str) else value.lower()
        if value not in self.choices:
            raise OptionError(
                f"Precision must be one of {', '.join(self.choices)}, got '{value}'."
            )
        return value

    def getter(self, value):
        return self.setter(value)

    def get_default(self):
        return "float64"


class VersionFlag(
    MorphotreeOption,
    name="version",
    readonly=True,
):
    """
    Return the version of the package.
    """

    def get_default(self):
        from . import __version__

        return __version__
