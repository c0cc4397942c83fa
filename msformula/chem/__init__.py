"""
Chemistry
=========

Provides:

1. A Formula object to compute the exact mass of molecular formulas and their adducts.
2. A PeriodicTable with element and labelled isotope information.
3. An Adduct object to parse adduct expressions such as ``[M+H]+``.
4. Functions to build formulas from free text, SMILES and InChI strings.

Objects
-------
- PeriodicTable
- Element
- Formula
- FormulaType
- Adduct
- MassEvaluator

Functions
---------
- parse_hill
- try_parse_hill
- formula_from_string
- formula_from_smiles
- formula_from_inchi
- absolute_to_ppm
- ppm_to_absolute

Constants
---------
- EM : electron mass

"""

from .atoms import EM, Element, PeriodicTable
from .mass import MassEvaluator, absolute_to_ppm, ppm_to_absolute
from .formula import Formula, FormulaType, parse_hill
from .adduct import Adduct
from .resolvers import (
    ChemCalcNormalizer,
    NeedsRemoteResolution,
    Parsed,
    RDKitStructureResolver,
    formula_from_inchi,
    formula_from_smiles,
    formula_from_string,
    try_parse_hill,
)
