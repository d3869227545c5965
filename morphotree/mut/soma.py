from ..properties import PointLevel, as_points, as_values
from ..soma import soma_center, soma_max_distance


class Soma:
    """
    Editable soma. The point and diameter buffers are replaced wholesale by assignment.
    """

    def __init__(self, point_level=None):
        if point_level is None:
            point_level = PointLevel()
        self._points = point_level.points.copy()
        self._diameters = point_level.diameters.copy()

    @property
    def points(self):
        return self._points

    @points.setter
    def points(self, value):
        self._points = as_points(value, copy=True)

    @property
    def diameters(self):
        return self._diameters

    @diameters.setter
    def diameters(self, value):
        self._diameters = as_values(value, "diameter", copy=True)

    def center(self):
        return soma_center(self._points)

    def max_distance(self):
        return soma_max_distance(self._points)

    def __len__(self):
        return len(self._points)


__all__ = ["Soma"]
