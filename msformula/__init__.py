"""
msformula
=========

A package to work with molecular formulas in mass spectrometry.

Provides
    1. The Formula object to compute monoisotopic masses of formulas and adducts.
    2. Mass comparison with ppm tolerances.
    3. Formula resolution from free text, SMILES and InChI strings.

"""

__version__ = "0.1.0"

from . import chem
from . import config
from . import exceptions
from ._constants import ChargeType
from .chem import Adduct, Formula, FormulaType, formula_from_string, parse_hill
from .config import MassConfiguration
