import numpy as np

from . import _util
from .exceptions import SomaError


def soma_center(points):
    """
    Return the center of a soma: the arithmetic mean of its points.

    :raises morphotree.exceptions.SomaError: if there are no points.
    """
    if not len(points):
        raise SomaError("Soma without points has no center.")
    return np.mean(points, axis=0)


def soma_max_distance(points):
    """
    Return the largest distance of any soma point to the soma center.
    """
    center = soma_center(points)
    return float(np.max(np.linalg.norm(points - center, axis=1)))


class Soma:
    """
    Read-only soma of a :class:`~morphotree.morphology.Morphology`. The arrays are
    frozen views, the center is computed on demand.
    """

    def __init__(self, points, diameters):
        self._points = points
        self._diameters = diameters
        _util.freeze(points, diameters)

    @_util.obj_str_insert
    def __repr__(self):
        return f"{len(self._points)} points"

    @property
    def points(self):
        return self._points

    @property
    def diameters(self):
        return self._diameters

    def center(self):
        return soma_center(self._points)

    def max_distance(self):
        return soma_max_distance(self._points)

    def __len__(self):
        return len(self._points)

    def __eq__(self, other):
        if not isinstance(other, Soma):
            return NotImplemented
        return (
            self._points.shape == other._points.shape
            and np.array_equal(self._points, other._points)
            and np.array_equal(self._diameters, other._diameters)
        )

    __hash__ = None


__all__ = ["Soma", "soma_center", "soma_max_distance"]
