"""
Package wide options. Assigning to an attribute of this module sets that option for the
running script, overriding ``pyproject.toml`` and the environment. Deleting the
attribute undoes it.

.. code-block::

  import morphotree.options

  morphotree.options.verbosity = 4
  del morphotree.options.verbosity
"""

import sys
import types

from ._options import PrecisionOption, VerbosityOption, VersionFlag
from .exceptions import OptionError

_options = {}


def register_option(option):
    """
    Register an option singleton under its name.

    :type option: morphotree.option.MorphotreeOption
    """
    if option.name in _options:
        raise OptionError(f"The '{option.name}' option name is already taken.")
    _options[option.name] = option


def get_option_descriptor(name):
    """
    Return the option singleton registered under ``name``.

    :rtype: morphotree.option.MorphotreeOption
    """
    try:
        return _options[name]
    except KeyError:
        raise OptionError(f"Unknown option '{name}'") from None


def get_option(name, prio=None):
    """
    Retrieve the cascaded value of an option, or only the value of the ``prio`` source
    ('script', 'project' or 'env').
    """
    return get_option_descriptor(name).get(prio=prio)


class _OptionsModule(types.ModuleType):
    def __getattr__(self, attr):
        if attr.startswith("__"):
            # Module protocol lookups such as `__path__` or `__warningregistry__`.
            raise AttributeError(attr)
        return get_option(attr)

    def __setattr__(self, attr, value):
        get_option_descriptor(attr).script = value

    def __delattr__(self, attr):
        try:
            opt = get_option_descriptor(attr)
        except OptionError:
            raise AttributeError(attr) from None
        del opt.script


register_option(VerbosityOption())
register_option(PrecisionOption())
register_option(VersionFlag())

__all__ = ["get_option", "get_option_descriptor", "register_option"]

_om = _OptionsModule(__name__)
_om.__dict__.update(
    {k: v for k, v in globals().items() if k not in ("_om", "sys", "types")}
)
sys.modules[__name__] = _om
