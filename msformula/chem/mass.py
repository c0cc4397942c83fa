"""
Mass computation and mass comparison utilities.

Objects
-------
- MassEvaluator

Functions
---------
- absolute_to_ppm
- ppm_to_absolute

"""

from typing import Mapping, Optional, Union

import numpy as np

from ..config import DEFAULT_CONFIGURATION, MassConfiguration
from .atoms import Element

Number = Union[float, np.ndarray]


def absolute_to_ppm(reference: Number, compare: Number) -> Number:
    """
    Computes the distance between two masses in parts per million.

    Parameters
    ----------
    reference : float or array
        Reference mass.
    compare : float or array
        Mass to compare.

    Returns
    -------
    float or array

    Examples
    --------
    >>> absolute_to_ppm(18.01056, 18.0110)
    24.43...

    """
    return np.abs((reference - compare) / reference) * 1e6


def ppm_to_absolute(reference: Number, ppm: Number) -> Number:
    """
    Converts a tolerance in ppm to an absolute mass tolerance.

    Parameters
    ----------
    reference : float or array
        Reference mass.
    ppm : float or array
        Tolerance in parts per million.

    Returns
    -------
    float or array

    """
    return reference / 1e6 * ppm


class MassEvaluator:
    """
    Computes monoisotopic masses and compares them against experimental masses.

    Parameters
    ----------
    config : MassConfiguration or None, default=None
        If ``None``, the default configuration is used.

    """

    def __init__(self, config: Optional[MassConfiguration] = None):
        self.config = DEFAULT_CONFIGURATION if config is None else config

    @property
    def electron_mass(self) -> float:
        return self.config.electron_mass

    @property
    def default_ppm(self) -> float:
        return self.config.default_ppm

    def get_monoisotopic_mass(self, composition: Mapping[Element, int], charge: int = 0) -> float:
        """
        Computes the monoisotopic mass of a composition.

        For charged species, the mass of the lost (or gained) electrons is
        corrected and the mass is divided by the charge magnitude, i.e., the
        m/z value is returned.

        Parameters
        ----------
        composition : Mapping[Element, int]
            Element counts.
        charge : int
            Signed charge.

        Returns
        -------
        float

        """
        mass = sum(e.m * k for e, k in composition.items())
        mass -= self.electron_mass * charge
        return mass / (abs(charge) if charge else 1)

    def check_mass(self, reference: float, external: Number, ppm: Optional[float] = None):
        """
        Checks if an external mass is inside a ppm window around a reference mass.

        Parameters
        ----------
        reference : float
            Reference mass used to build the tolerance window.
        external : float or array
            Masses to compare.
        ppm : float or None, default=None
            Tolerance in ppm. If ``None``, the configured default is used.

        Returns
        -------
        bool or array[bool]
            ``True`` where ``abs(reference - external) <= tolerance``.

        """
        if ppm is None:
            ppm = self.default_ppm
        tolerance = ppm_to_absolute(reference, ppm)
        within = np.abs(reference - np.asarray(external)) <= tolerance
        if within.ndim == 0:
            return bool(within)
        return within

    def __repr__(self):
        return "MassEvaluator(electron_mass={}, default_ppm={})".format(
            self.electron_mass, self.default_ppm
        )


DEFAULT_EVALUATOR = MassEvaluator()
