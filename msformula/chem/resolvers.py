"""
Formula resolution from free text and molecular structures.

Parsed :
    A formula string that was parsed locally.
NeedsRemoteResolution :
    A formula string that could not be parsed locally.
ChemCalcNormalizer :
    Converts free text formulas into Hill notation using the ChemCalc service.
RDKitStructureResolver :
    Computes formulas from SMILES or InChI strings using RDKit.
try_parse_hill :
    Parse a formula string without querying external services.
formula_from_string :
    Parse a formula string, using the formula service as a fallback.
formula_from_smiles :
    Create a Formula from a SMILES string.
formula_from_inchi :
    Create a Formula from an InChI string.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union

import requests

from .. import _constants as c
from ..config import MassConfiguration
from ..exceptions import MalformedFormula, UnknownElement
from .formula import Formula, parse_hill
from .mass import DEFAULT_EVALUATOR, MassEvaluator

logger = logging.getLogger(__file__)


@dataclass(frozen=True)
class Parsed:
    """A formula string parsed without external services."""

    formula: Formula


@dataclass(frozen=True)
class NeedsRemoteResolution:
    """A formula string that is not valid Hill notation."""

    text: str
    error: ValueError


ParseResult = Union[Parsed, NeedsRemoteResolution]


class FormulaNormalizer(Protocol):
    """Converts a free text formula into a Hill notation formula string."""

    def __call__(self, text: str) -> str:
        ...


class StructureResolver(Protocol):
    """Computes Hill notation formula strings from molecular structures."""

    def smiles_to_formula(self, smiles: str) -> str:
        ...

    def inchi_to_formula(self, inchi: str) -> str:
        ...


class ChemCalcNormalizer:
    """
    Resolve formula strings using the ChemCalc molecular formula service.

    Parameters
    ----------
    url : str
        Service URL.
    timeout : float
        Request timeout in seconds.

    """

    def __init__(self, url: str = c.CHEMCALC_URL, timeout: float = c.CHEMCALC_TIMEOUT):
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_config(cls, config: MassConfiguration) -> ChemCalcNormalizer:
        return cls(config.normalizer_url, config.normalizer_timeout)

    def __call__(self, text: str) -> str:
        """
        Query the formula service.

        Returns
        -------
        str
            The formula in Hill notation.

        Raises
        ------
        MalformedFormula
            If the service is not reachable or cannot resolve the formula.

        """
        try:
            r = requests.get(self.url, params={"mf": text}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning("Error connecting to %s: %s", self.url, e)
            msg = "Error connecting to the formula service: {}".format(e)
            raise MalformedFormula(msg) from e

        if r.status_code != 200:
            msg = "The formula {!r} was not parseable to a correct formula.".format(text)
            raise MalformedFormula(msg)

        try:
            mf_hill = r.json()["mf"]
        except (ValueError, KeyError, TypeError) as e:
            msg = "Invalid response from the formula service for {!r}.".format(text)
            raise MalformedFormula(msg) from e

        if not isinstance(mf_hill, str):
            msg = "Invalid response from the formula service for {!r}.".format(text)
            raise MalformedFormula(msg)
        logger.debug("Formula %r resolved to %r", text, mf_hill)
        return mf_hill


class RDKitStructureResolver:
    """
    Compute formulas from molecular structures using RDKit.

    Raises
    ------
    ImportError
        If RDKit is not installed.

    """

    def __init__(self):
        try:
            from rdkit import Chem
            from rdkit.Chem import rdMolDescriptors
        except ImportError as e:
            msg = (
                "RDKit is required to compute formulas from molecular structures. "
                "Install it with `pip install msformula[structure]`."
            )
            raise ImportError(msg) from e
        self._chem = Chem
        self._descriptors = rdMolDescriptors

    def smiles_to_formula(self, smiles: str) -> str:
        mol = self._chem.MolFromSmiles(smiles)
        if mol is None:
            msg = "Invalid SMILES string: {!r}".format(smiles)
            raise MalformedFormula(msg)
        return self._descriptors.CalcMolFormula(mol)

    def inchi_to_formula(self, inchi: str) -> str:
        mol = self._chem.MolFromInchi(inchi)
        if mol is None:
            msg = "Invalid InChI string: {!r}".format(inchi)
            raise MalformedFormula(msg)
        return self._descriptors.CalcMolFormula(mol)


def try_parse_hill(
    text: str,
    adduct: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    evaluator: Optional[MassEvaluator] = None,
) -> ParseResult:
    """
    Parse a formula string in Hill notation.

    Returns
    -------
    Parsed or NeedsRemoteResolution
        ``NeedsRemoteResolution`` if the string is not valid Hill notation or
        contains unknown symbols.

    Raises
    ------
    IncorrectAdduct
        If the adduct is not valid.
    NegativeElementCount
        If the adduct removes more atoms than the ones in the formula.

    """
    try:
        return Parsed(parse_hill(text, adduct, metadata, evaluator))
    except (MalformedFormula, UnknownElement) as e:
        return NeedsRemoteResolution(text, e)


def formula_from_string(
    text: str,
    adduct: Optional[str] = None,
    no_api: bool = False,
    metadata: Optional[Dict[str, Any]] = None,
    normalizer: Optional[FormulaNormalizer] = None,
    evaluator: Optional[MassEvaluator] = None,
) -> Formula:
    """
    Create a Formula from a formula string.

    Hill notation is parsed locally. Other notations are sent to a formula
    service that converts them into Hill notation.

    Parameters
    ----------
    text : str
        A formula string, e.g. ``"C6H12O6"`` or ``"CH3(CH2)4COOH"``.
    adduct : str or None, default=None
    no_api : bool, default=False
        If ``True``, never query the formula service.
    metadata : dict or None, default=None
    normalizer : callable or None, default=None
        Converts a formula string into Hill notation. If ``None``, the
        ChemCalc service configured in the evaluator is used.
    evaluator : MassEvaluator or None, default=None

    Returns
    -------
    Formula

    Raises
    ------
    MalformedFormula
        If the string cannot be resolved.
    UnknownElement
        If the resolved formula contains an unknown element.

    """
    evaluator = DEFAULT_EVALUATOR if evaluator is None else evaluator
    result = try_parse_hill(text, adduct, metadata, evaluator)
    if isinstance(result, Parsed):
        return result.formula

    config = evaluator.config
    if no_api or not config.use_remote_normalizer:
        raise result.error

    logger.debug("Could not parse %r (%s). Querying formula service.", text, result.error)
    if normalizer is None:
        normalizer = ChemCalcNormalizer.from_config(config)
    mf_hill = normalizer(result.text)
    return parse_hill(mf_hill, adduct, metadata, evaluator)


def formula_from_smiles(
    smiles: str,
    adduct: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    resolver: Optional[StructureResolver] = None,
    evaluator: Optional[MassEvaluator] = None,
) -> Formula:
    """
    Create a Formula from a SMILES string. The formal charge of the molecule
    is used as the formula charge.

    Examples
    --------
    >>> formula_from_smiles("O")
    Formula(H2O)
    >>> formula_from_smiles("CC(=O)[O-]")
    Formula([C2H3O2]-)

    """
    if resolver is None:
        resolver = RDKitStructureResolver()
    return parse_hill(resolver.smiles_to_formula(smiles), adduct, metadata, evaluator)


def formula_from_inchi(
    inchi: str,
    adduct: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    resolver: Optional[StructureResolver] = None,
    evaluator: Optional[MassEvaluator] = None,
) -> Formula:
    """
    Create a Formula from an InChI string.

    Examples
    --------
    >>> formula_from_inchi("InChI=1S/H2O/h1H2")
    Formula(H2O)

    """
    if resolver is None:
        resolver = RDKitStructureResolver()
    return parse_hill(resolver.inchi_to_formula(inchi), adduct, metadata, evaluator)
