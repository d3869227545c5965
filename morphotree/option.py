"""
Option classes. An option's value is looked up in the script (attributes set on
:mod:`morphotree.options`), the ``[tool.morphotree]`` table of the closest
``pyproject.toml``, the environment and finally the option's default, in that order.
"""

import functools
import os
import pathlib

import toml

from .exceptions import OptionError, ReadOnlyOptionError
from .reporting import warn


class OptionDescriptor:
    """
    Base descriptor of one source of option values. Returns ``None`` when its source
    holds no value for the option.
    """

    def __init__(self, *tags):
        self.tags = tags

    def is_set(self, instance):
        return self.__get__(instance, type(instance)) is not None


class ScriptOptionDescriptor(OptionDescriptor):
    """
    Value set at runtime, stored on the option singleton.
    """

    def __get__(self, instance, owner):
        if instance is None:
            return self
        return instance.__dict__.get("_mtopt_script_value")

    def __set__(self, instance, value):
        if instance.readonly:
            raise ReadOnlyOptionError(
                f"'{instance.name}' is a read-only option.", instance, instance.name
            )
        instance.__dict__["_mtopt_script_value"] = instance.setter(value)

    def __delete__(self, instance):
        instance.__dict__.pop("_mtopt_script_value", None)

    def is_set(self, instance):
        return "_mtopt_script_value" in instance.__dict__


class EnvOptionDescriptor(OptionDescriptor):
    """
    Value read from the first of the option's environment variables that is set.
    """

    def __get__(self, instance, owner):
        if instance is None:
            return self
        for tag in self.tags:
            if tag in os.environ:
                return instance.getter(os.environ[tag])

    def __set__(self, instance, value):
        value = str(instance.setter(value))
        for tag in self.tags:
            os.environ[tag] = value

    def __delete__(self, instance):
        for tag in self.tags:
            os.environ.pop(tag, None)

    def is_set(self, instance):
        return any(tag in os.environ for tag in self.tags)


class ProjectOptionDescriptor(OptionDescriptor):
    """
    Value read from the ``[tool.morphotree]`` table, ``tags`` is the path of keys into
    the table.
    """

    def __get__(self, instance, owner):
        if instance is None:
            return self
        if not self.tags:
            return None
        value = _project_settings()
        for tag in self.tags:
            if not isinstance(value, dict) or tag not in value:
                return None
            value = value[tag]
        return instance.getter(value)


class MorphotreeOption:
    """
    Base option class. Subclasses declare their sources in the class argument list and
    can override ``setter``, ``getter`` and ``get_default``.
    """

    def __init_subclass__(cls, name=None, env=(), project=None, readonly=False, **kwargs):
        super().__init_subclass__(**kwargs)
        if name is None:
            raise OptionError("Options must be given a name in the class argument list.")
        cls.name = name
        cls.script = ScriptOptionDescriptor()
        cls.project = ProjectOptionDescriptor(*(project.split(".") if project else ()))
        cls.env = EnvOptionDescriptor(*env)
        cls.readonly = readonly
        cls.description = cls.__doc__

    def setter(self, value):
        return value

    def getter(self, value):
        return value

    def get_default(self):
        return None

    def is_set(self, slug):
        return getattr(type(self), slug).is_set(self)

    def get(self, prio=None):
        """
        Get the option's value.

        :param prio: Only consult this source. Any of 'script', 'project', 'env'.
        :type prio: str
        """
        if prio is not None and prio not in ("script", "project", "env"):
            raise OptionError(f"Unknown option source '{prio}'.")
        try:
            if prio is not None:
                return getattr(self, prio)
            for slug in ("script", "project", "env"):
                if self.is_set(slug):
                    return getattr(self, slug)
            return self.get_default()
        except Exception as e:
            warn(f"Error retrieving option '{self.name}': {e}")
            return self.get_default()


@functools.cache
def _pyproject_path():
    path = pathlib.Path.cwd()
    while True:
        proj = path / "pyproject.toml"
        if proj.exists():
            return proj
        if path.parent == path:
            return None
        path = path.parent


def _project_settings():
    path = _pyproject_path()
    if path is None:
        return {}
    with open(path, "r") as f:
        return toml.load(f).get("tool", {}).get("morphotree", {})


__all__ = [
    "EnvOptionDescriptor",
    "MorphotreeOption",
    "OptionDescriptor",
    "ProjectOptionDescriptor",
    "ScriptOptionDescriptor",
]
