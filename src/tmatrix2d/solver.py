"""
Interface to scattering solvers.

A solver computes the field scattered by some obstacle for a list of
incident fields. The T-matrix builder only needs the far field of each
scattered field, sampled at given angles.
"""

import logging
from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from .exceptions import IncidentTypeError
from .incident import IncidentField

logger = logging.getLogger(__name__)


class Solver(ABC):
    """
    Abstract scattering solver.

    Usage:
        solver.set_incident_field(fields)
        solver.solve()
        farfield = solver.get_far_field(angles, indices)
    """

    def __init__(self):
        self.incident_field = []

    def set_incident_field(self, fields: Sequence[IncidentField]) -> None:
        """
        Set the incident fields to be solved for.

        Args:
            fields: An incident field or an ordered sequence of them

        Raises:
            IncidentTypeError: If any entry is not an IncidentField
        """
        if isinstance(fields, IncidentField):
            fields = [fields]
        fields = list(fields)
        for i, field in enumerate(fields):
            if not isinstance(field, IncidentField):
                raise IncidentTypeError(f"Incident field {i} is a {type(field).__name__}, not an IncidentField")
        self.incident_field = fields
        logger.info(f"{type(self).__name__}: {len(fields)} incident field(s) set")

    @abstractmethod
    def solve(self) -> None:
        """Compute the scattered field for every incident field."""

    @abstractmethod
    def get_far_field(self, angles: np.ndarray, indices: Sequence[int]) -> np.ndarray:
        """
        Far field of the scattered fields.

        Args:
            angles: Observation angles in radians
            indices: 0-based indices of the incident fields

        Returns:
            Complex array of shape (len(angles), len(indices)), referenced to
            the global origin
        """
