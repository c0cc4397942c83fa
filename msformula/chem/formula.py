"""
Tools for working with chemical formulas

Objects
-------

- Formula
- FormulaType

Functions
---------

- parse_hill

Exceptions
----------

- IncorrectFormula
- MalformedFormula
- NegativeElementCount
- InvalidCharge

"""

import enum
import re
import string
from collections import Counter
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .._constants import CHLORINE, CHNOPS, DEUTERIUM, ChargeType
from ..exceptions import (
    IncorrectFormula,
    InvalidCharge,
    MalformedFormula,
    NegativeElementCount,
)
from .atoms import MOLECULAR_MARKERS, Element, PeriodicTable
from .mass import DEFAULT_EVALUATOR, MassEvaluator, absolute_to_ppm


class FormulaType(enum.Enum):
    """Classification of formulas by the elements they contain."""

    CHNOPS = "CHNOPS"
    CHNOPSD = "CHNOPSD"
    CHNOPSCL = "CHNOPSCL"
    CHNOPSCLD = "CHNOPSCLD"
    ALL = "ALL"
    ALLD = "ALLD"


class Formula:
    """
    Represents a chemical formula as a mapping from elements to formula
    coefficients, a charge state and, optionally, an adduct.

    Formula objects are immutable. Arithmetic operations create new Formula
    objects. The monoisotopic mass, with and without the adduct, is computed
    when the Formula is created.

    Parameters
    ----------
    composition : str or Mapping[str or Element, int]
        A formula string in Hill notation or a mapping from element symbols to
        positive formula coefficients.
    charge : int, default=0
        Charge magnitude. Only used if `composition` is a mapping.
    charge_type : {"", "+", "-"} or ChargeType, default=""
        Charge sign. Only used if `composition` is a mapping.
    adduct : str or None, default=None
        An adduct expression, e.g. ``"[M+H]+"``.
    metadata : dict or None, default=None
        Additional information stored with the formula. Not used to compute
        any property.
    evaluator : MassEvaluator or None, default=None
        Used to compute masses. If ``None``, a default evaluator is used.

    Attributes
    ----------
    composition: Dict[Element, int]
        A mapping of Elements to formula coefficients.
    charge: int
        Charge magnitude.
    charge_type: ChargeType
        Charge sign.
    adduct: str or None
        Adduct expression associated with the formula.

    Examples
    --------
    >>> Formula("H2O")
    Formula(H2O)
    >>> Formula("[13]CO2")
    Formula([13]CO2)
    >>> Formula("C6H12O6", adduct="[M+Na]+")
    Formula(C6H12O6, adduct='[M+Na]+')
    >>> Formula("CH3COOH")
    Formula(C2H4O2)
    >>> Formula({"C": 1, "O": 3}, 2, "-")
    Formula([CO3]2-)

    Notes
    -----
    Two formulas are equal if they have the same composition and the same
    adduct expression. The charge is not compared.

    """

    def __init__(
        self,
        composition: Union[str, Mapping[Union[str, Element], int]],
        charge: int = 0,
        charge_type: Union[str, ChargeType] = "",
        adduct: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        evaluator: Optional[MassEvaluator] = None,
    ):
        if isinstance(composition, str):
            if charge != 0 or charge_type not in ("", ChargeType.NEUTRAL):
                msg = "The charge of a formula string is defined in the string."
                raise InvalidCharge(msg)
            composition, charge, charge_type = _parse_hill_str(composition)

        self._composition = _validate_composition(composition)
        self._charge = _make_signed_charge(charge, charge_type)
        self._adduct = _normalize_adduct_str(adduct)
        self._metadata = dict() if metadata is None else dict(metadata)
        self._evaluator = DEFAULT_EVALUATOR if evaluator is None else evaluator
        self._monoisotopic_mass = self._evaluator.get_monoisotopic_mass(
            self._composition, self._charge
        )
        self._monoisotopic_mass_with_adduct = self._compute_mass_with_adduct()

    @property
    def composition(self) -> Dict[Element, int]:
        return dict(self._composition)

    @property
    def charge(self) -> int:
        return abs(self._charge)

    @property
    def charge_type(self) -> ChargeType:
        return ChargeType.from_charge(self._charge)

    @property
    def signed_charge(self) -> int:
        return self._charge

    @property
    def adduct(self) -> Optional[str]:
        return self._adduct

    @property
    def metadata(self) -> Dict[str, Any]:
        return dict(self._metadata)

    @property
    def evaluator(self) -> MassEvaluator:
        return self._evaluator

    def __getitem__(self, element: Union[str, Element]) -> int:
        if isinstance(element, str):
            element = PeriodicTable().get_element(element)
        return self._composition.get(element, 0)

    def __contains__(self, element: Union[str, Element]) -> bool:
        return self[element] > 0

    def add(self, other: "Formula") -> "Formula":
        """
        Creates a new Formula by adding the coefficients and charges of two
        formulas.

        The result keeps the adduct, metadata and evaluator of this formula.

        """
        if not isinstance(other, Formula):
            msg = "sum operation is defined only for Formula objects"
            raise ValueError(msg)
        sum_composition = Counter(self._composition)
        sum_composition.update(other._composition)
        sum_charge = self._charge + other._charge
        return self._new(sum_composition, sum_charge)

    def subtract(self, other: "Formula") -> "Formula":
        """
        Creates a new Formula by subtracting the coefficients and charges of
        another formula.

        The result keeps the adduct, metadata and evaluator of this formula.

        Raises
        ------
        NegativeElementCount
            If `other` contains an element in a greater amount than this formula.

        """
        if not isinstance(other, Formula):
            msg = "subtraction operation is defined only for Formula objects"
            raise ValueError(msg)
        comp = Counter(self._composition)
        comp.subtract(other._composition)
        _check_non_negative(comp, "{} - {}".format(self, other))
        comp = Counter({k: v for k, v in comp.items() if v > 0})
        charge = self._charge - other._charge
        return self._new(comp, charge)

    def multiply(self, n: int) -> "Formula":
        """
        Creates a new Formula with all coefficients multiplied by a positive
        integer. Charge and adduct are not modified.

        """
        if isinstance(n, bool) or not isinstance(n, int) or (n < 1):
            msg = "Formula multiplier must be a positive integer. Got {}.".format(n)
            raise IncorrectFormula(msg)
        comp = {k: v * n for k, v in self._composition.items()}
        return self._new(comp, self._charge)

    def __add__(self, other: "Formula") -> "Formula":
        return self.add(other)

    def __sub__(self, other: "Formula") -> "Formula":
        return self.subtract(other)

    def __mul__(self, n: int) -> "Formula":
        return self.multiply(n)

    __rmul__ = __mul__

    def __eq__(self, other):
        if not isinstance(other, Formula):
            return NotImplemented
        return (self._composition == other._composition) and (self._adduct == other._adduct)

    def __hash__(self):
        return hash((frozenset(self._composition.items()), self._adduct))

    def get_monoisotopic_mass(self) -> float:
        """
        Returns the monoisotopic mass of the formula.

        For charged formulas, the m/z value is returned, i.e., the mass is
        corrected by the electron mass and divided by the charge magnitude.

        Examples
        --------
        >>> import msformula as mf
        >>> f = mf.chem.Formula("H2O")
        >>> f.get_monoisotopic_mass()
        18.0105650642

        """
        return self._monoisotopic_mass

    def get_monoisotopic_mass_with_adduct(self) -> float:
        """
        Returns the monoisotopic mass of the formula after applying the adduct.

        If the formula does not have an adduct, the monoisotopic mass is returned.

        Examples
        --------
        >>> import msformula as mf
        >>> f = mf.chem.Formula("H2O", adduct="[M+H]+")
        >>> f.get_monoisotopic_mass_with_adduct()
        19.0178415163

        """
        return self._monoisotopic_mass_with_adduct

    def get_nominal_mass(self) -> int:
        """
        Computes the nominal mass of the formula.

        Examples
        --------
        >>> import msformula as mf
        >>> f = mf.chem.Formula("H2O")
        >>> f.get_nominal_mass()
        18

        """
        return sum(x.nominal_mass * k for x, k in self._composition.items())

    def get_adduct(self):
        """
        Builds an Adduct object from the adduct expression.

        Returns
        -------
        Adduct or None
            ``None`` if the formula does not have an adduct.

        """
        if self._adduct is None:
            return None
        from .adduct import Adduct

        return Adduct(self._adduct, evaluator=self._evaluator)

    def get_final_formula_with_adduct(self) -> str:
        """
        Returns the formula string obtained after applying the adduct.

        Examples
        --------
        >>> import msformula as mf
        >>> f = mf.chem.Formula("C12H3N3O", adduct="[M-H2O+H]+")
        >>> f.get_final_formula_with_adduct()
        '[C12H2N3]+'

        """
        if self._adduct is None:
            return str(self)
        composition, charge = self._apply_adduct(self.get_adduct())
        return _get_formula_str(composition, charge)

    def check_monoisotopic_mass(self, external_mass, ppm: Optional[float] = None):
        """
        Checks if an external mass is within a ppm tolerance of the
        monoisotopic mass of the formula.

        Parameters
        ----------
        external_mass : float or array
        ppm : float or None, default=None
            Tolerance in ppm. If ``None``, the evaluator default tolerance is
            used.

        Returns
        -------
        bool or array[bool]

        """
        return self._evaluator.check_mass(self._monoisotopic_mass, external_mass, ppm)

    def check_monoisotopic_mass_with_adduct(self, external_mass, ppm: Optional[float] = None):
        """
        Checks if an external mass is within a ppm tolerance of the
        monoisotopic mass of the formula with the adduct.

        """
        return self._evaluator.check_mass(
            self._monoisotopic_mass_with_adduct, external_mass, ppm
        )

    def ppm_difference_with_exp_mass(self, exp_mass):
        """
        Computes the ppm error between the mass with adduct and an
        experimental mass.

        Raises
        ------
        IncorrectFormula
            If the mass with adduct is zero, e.g. for an empty formula.

        """
        if self._monoisotopic_mass_with_adduct == 0:
            msg = "ppm difference is not defined for {!r}, which has zero mass.".format(self)
            raise IncorrectFormula(msg)
        return absolute_to_ppm(self._monoisotopic_mass_with_adduct, exp_mass)

    def get_formula_type(self) -> FormulaType:
        """
        Classifies the formula by its element set.

        Examples
        --------
        >>> import msformula as mf
        >>> mf.chem.Formula("H2DCONCl").get_formula_type()
        <FormulaType.CHNOPSCLD: 'CHNOPSCLD'>

        """
        symbols = {x.symbol for x in self._composition}
        has_deuterium = DEUTERIUM in symbols
        has_chlorine = CHLORINE in symbols
        others = symbols.difference(CHNOPS, {CHLORINE, DEUTERIUM})
        if others:
            return FormulaType.ALLD if has_deuterium else FormulaType.ALL
        elif has_chlorine:
            return FormulaType.CHNOPSCLD if has_deuterium else FormulaType.CHNOPSCL
        else:
            return FormulaType.CHNOPSD if has_deuterium else FormulaType.CHNOPS

    def _new(self, composition: Mapping[Element, int], charge: int) -> "Formula":
        charge_type = ChargeType.from_charge(charge)
        return Formula(
            composition,
            abs(charge),
            charge_type,
            adduct=self._adduct,
            metadata=self._metadata,
            evaluator=self._evaluator,
        )

    def _apply_adduct(self, adduct) -> Tuple[Dict[Element, int], int]:
        """
        Computes the composition and charge after applying an adduct.

        """
        composition = Counter({k: v * adduct.multimer for k, v in self._composition.items()})
        charge = self._charge + adduct.signed_charge
        composition.update(adduct.formula_plus.composition)
        composition.subtract(adduct.formula_minus.composition)
        _check_non_negative(composition, "{} with adduct {}".format(self, adduct))
        composition = {k: v for k, v in composition.items() if v > 0}
        return composition, charge

    def _compute_mass_with_adduct(self) -> float:
        if self._adduct is None:
            return self._monoisotopic_mass
        composition, charge = self._apply_adduct(self.get_adduct())
        return self._evaluator.get_monoisotopic_mass(composition, charge)

    def __repr__(self):
        if self._adduct is None:
            return "Formula({})".format(str(self))
        return "Formula({}, adduct={!r})".format(str(self), self._adduct)

    def __str__(self):
        return _get_formula_str(self._composition, self._charge)


def parse_hill(
    formula_str: str,
    adduct: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    evaluator: Optional[MassEvaluator] = None,
) -> Formula:
    """
    Creates a Formula from a string in Hill notation.

    Parameters
    ----------
    formula_str : str
        A formula, e.g. ``"C6H12O6"``, optionally followed by a charge, e.g.
        ``"C2H3O2-"``, ``"H2O-1"``, ``"C5H5N(+2)"`` or ``"[CO3]2-"``. Isotopes
        are labelled with their mass number: ``"[13]CH4"`` or ``"[13C]H4"``.
    adduct : str or None, default=None
        An adduct expression, e.g. ``"[M+H]+"``, ``"[M-3H2O+2H]2+"`` or
        ``"[5M+Ca]2+"``.
    metadata : dict or None, default=None
    evaluator : MassEvaluator or None, default=None

    Returns
    -------
    Formula

    Raises
    ------
    MalformedFormula
        If the string does not follow the formula grammar.
    UnknownElement
        If the string contains a symbol that is not in the periodic table.
    IncorrectAdduct
        If the adduct is not valid.

    """
    if not isinstance(formula_str, str):
        msg = "Formula must be a string. Got {!r}.".format(formula_str)
        raise MalformedFormula(msg)
    composition, charge, charge_type = _parse_hill_str(formula_str)
    return Formula(composition, charge, charge_type, adduct, metadata, evaluator)


_matching_parenthesis = {"(": ")", "[": "]"}

_FORMULA_STR_PATTERN = re.compile(r"^[\[\]A-Za-z0-9]+(\(?[+-][0-9]*\)?)?$")
_BRACKET_CHARGE_PATTERN = re.compile(r"\](?P<n>[0-9]*)(?P<sign>[+-])$")
_SUFFIX_CHARGE_PATTERN = re.compile(r"(?P<open>\()?(?P<sign>[+-])(?P<n>[0-9]*)(?(open)\))$")
_LABELLED_ISOTOPE_PATTERN = re.compile(r"[0-9]+[A-Z][a-z]*")

_SUPERSCRIPT_DIGITS = "⁰¹²³⁴⁵⁶⁷⁸⁹"
_SUPERSCRIPT_TRANS = str.maketrans(_SUPERSCRIPT_DIGITS + "⁺⁻", string.digits + "+-")
_SUBSCRIPT_TRANS = str.maketrans("₀₁₂₃₄₅₆₇₈₉", string.digits)
_SUPERSCRIPT_CHARGE_PATTERN = re.compile("([{}]*)([⁺⁻])$".format(_SUPERSCRIPT_DIGITS))
_SUPERSCRIPT_ISOTOPE_PATTERN = re.compile("([{}]+)(?=[A-Z])".format(_SUPERSCRIPT_DIGITS))


def _normalize_formula_str(formula: str) -> str:
    """
    Removes whitespace and converts unicode sub/superscripts, e.g.
    ``"¹³CH₄"`` to ``"[13]CH4"`` and ``"SO₄²⁻"`` to ``"SO4(-2)"``.

    """
    formula = "".join(formula.split())
    formula = formula.translate(_SUBSCRIPT_TRANS)

    def charge_repl(match: re.Match) -> str:
        digits, sign = match.group(1, 2)
        return "({}{})".format(sign, digits).translate(_SUPERSCRIPT_TRANS)

    def isotope_repl(match: re.Match) -> str:
        return "[{}]".format(match.group(1).translate(_SUPERSCRIPT_TRANS))

    formula = _SUPERSCRIPT_CHARGE_PATTERN.sub(charge_repl, formula)
    formula = _SUPERSCRIPT_ISOTOPE_PATTERN.sub(isotope_repl, formula)
    return formula


def _parse_hill_str(formula_str: str) -> Tuple[Counter, int, ChargeType]:
    formula = _normalize_formula_str(formula_str)
    if not _FORMULA_STR_PATTERN.match(formula):
        msg = "{!r} is not a valid formula.".format(formula_str)
        raise MalformedFormula(msg)
    formula, charge, charge_type = _parse_charge(formula)
    formula = _strip_outer_brackets(formula)
    try:
        composition = _parse_formula(formula)
    except MalformedFormula as e:
        msg = "{!r} is not a valid formula. {}".format(formula_str, e)
        raise MalformedFormula(msg) from e
    return composition, charge, charge_type


def _parse_charge(formula: str) -> Tuple[str, int, ChargeType]:
    """
    compute the charge state of a formula and remove the charge from the formula
    string

    Parameters
    ----------
    formula: str
        molecular formula

    Returns
    -------
    formula_without_charge, charge, charge_type: str, int, ChargeType

    """
    # bracket notation, the charge magnitude is written before the sign: [CO3]2-
    match = _BRACKET_CHARGE_PATTERN.search(formula)
    if match:
        end = match.start("n")
    else:
        match = _SUFFIX_CHARGE_PATTERN.search(formula)
        if match is None:
            return formula, 0, ChargeType.NEUTRAL
        end = match.start()
    n = match.group("n")
    charge = int(n) if n else 1
    return formula[:end], charge, ChargeType.from_symbol(match.group("sign"))


def _strip_outer_brackets(formula: str) -> str:
    """
    Removes brackets enclosing the whole formula, e.g. "[H3O]" -> "H3O".
    Isotope labels, e.g. "[13C]", are kept.

    """
    is_enclosed = (
        (len(formula) > 2)
        and (formula[0] == "[")
        and (formula[1] not in string.digits)
        and (_find_matching_parenthesis(formula, 0) == len(formula) - 1)
    )
    return formula[1:-1] if is_enclosed else formula


def _get_token_type(formula: str, ind: int) -> int:
    """
    assigns 0 to elements and 1 to isotope labels.
    """
    c = formula[ind]
    if c in string.ascii_uppercase:
        token_type = 0
    elif c == "[":
        token_type = 1
    else:
        msg = "Unexpected character {!r} at position {}.".format(c, ind)
        raise MalformedFormula(msg)
    return token_type


def _find_matching_parenthesis(formula: str, ind: int):
    parenthesis_open = formula[ind]
    parenthesis_close = _matching_parenthesis[parenthesis_open]
    match_ind = ind + 1
    level = 1
    try:
        while level > 0:
            c = formula[match_ind]
            if c == parenthesis_open:
                level += 1
            elif c == parenthesis_close:
                level -= 1
            match_ind += 1
        return match_ind - 1
    except IndexError:
        msg = "Formula string has non-matching parenthesis"
        raise MalformedFormula(msg)


def _get_coefficient(formula: str, ind: int):
    """
    traverses a formula string to compute a coefficient. ind is a position
    after an element or isotope.

    Returns
    -------
    coefficient : int
    new_ind : int, new index to continue parsing the formula
    """
    length = len(formula)
    if (ind >= length) or (formula[ind] not in string.digits):
        coefficient = 1
        new_ind = ind
    else:
        end = ind + 1
        while (end < length) and (formula[end] in string.digits):
            end += 1
        coefficient = int(formula[ind:end])
        new_ind = end
    return coefficient, new_ind


def _get_symbol(formula: str, ind: int) -> Tuple[str, int]:
    length = len(formula)
    if (ind >= length) or (formula[ind] not in string.ascii_uppercase):
        msg = "Expected an element symbol at position {}.".format(ind)
        raise MalformedFormula(msg)
    end = ind + 1
    while (end < length) and (formula[end] in string.ascii_lowercase):
        end += 1
    return formula[ind:end], end


def _tokenize_element(formula: str, ind: int) -> Tuple[Element, int]:
    symbol, end = _get_symbol(formula, ind)
    element = PeriodicTable().get_element(symbol)
    return element, end


def _tokenize_isotope(formula: str, ind: int) -> Tuple[Element, int]:
    """
    Convert an isotope label starting at `ind` into an Element. Both "[13]C"
    and "[13C]" are valid labels.

    Returns
    -------
    element, new_ind

    """
    end = _find_matching_parenthesis(formula, ind)
    label = formula[ind + 1 : end]
    if label and all(c in string.digits for c in label):
        symbol, end = _get_symbol(formula, end + 1)
        key = label + symbol
    elif _LABELLED_ISOTOPE_PATTERN.fullmatch(label):
        key = label
        end += 1
    else:
        msg = "Invalid isotope label {!r}.".format(formula[ind : end + 1])
        raise MalformedFormula(msg)
    element = PeriodicTable().get_element(key)
    return element, end


def _parse_formula(formula: str) -> Counter:
    """
    Parse a formula string into a Counter that maps elements to formula
    coefficients. Repeated elements are summed.
    """
    ind = 0
    n = len(formula)
    composition = Counter()
    while ind < n:
        token_type = _get_token_type(formula, ind)
        if token_type == 0:
            element, ind = _tokenize_element(formula, ind)
        else:
            element, ind = _tokenize_isotope(formula, ind)
        coefficient, ind = _get_coefficient(formula, ind)
        composition[element] += coefficient
    return composition


def _validate_composition(composition: Mapping[Union[str, Element], int]) -> Dict[Element, int]:
    if not isinstance(composition, Mapping):
        msg = "Composition must be a mapping from elements to coefficients."
        raise IncorrectFormula(msg)
    ptable = PeriodicTable()
    validated = dict()
    for k, v in composition.items():
        if isinstance(k, str):
            element = ptable.get_element(k)
        elif isinstance(k, Element):
            element = k
        else:
            msg = "Composition keys must be element symbols or Element objects. Got {!r}.".format(k)
            raise IncorrectFormula(msg)

        if isinstance(v, bool) or not isinstance(v, int) or (v < 1):
            msg = "Formula coefficients must be positive integers. Got {}: {!r}.".format(k, v)
            raise IncorrectFormula(msg)
        if element.key in MOLECULAR_MARKERS:
            symbol, n_atoms = MOLECULAR_MARKERS[element.key]
            element = ptable.get_element(symbol)
            v = v * n_atoms
        validated[element] = validated.get(element, 0) + v
    return validated


def _make_signed_charge(charge: int, charge_type: Union[str, ChargeType]) -> int:
    if isinstance(charge_type, str):
        try:
            charge_type = ChargeType.from_symbol(charge_type)
        except ValueError:
            msg = "charge_type {!r} invalid. It should be +, - or empty.".format(charge_type)
            raise InvalidCharge(msg)
    elif not isinstance(charge_type, ChargeType):
        msg = "charge_type {!r} invalid. It should be +, - or empty.".format(charge_type)
        raise InvalidCharge(msg)

    if isinstance(charge, bool) or not isinstance(charge, int) or (charge < 0):
        msg = "Charge must be a non-negative integer. Got {!r}.".format(charge)
        raise InvalidCharge(msg)

    if (charge == 0) != (charge_type is ChargeType.NEUTRAL):
        msg = "Charge {} is not compatible with charge type {!r}.".format(charge, charge_type.value)
        raise InvalidCharge(msg)
    return charge_type.sign * charge


def _normalize_adduct_str(adduct: Optional[str]) -> Optional[str]:
    if adduct is None:
        return None
    if not isinstance(adduct, str):
        msg = "Adduct must be a string. Got {!r}.".format(adduct)
        raise IncorrectFormula(msg)
    adduct = adduct.strip()
    if adduct in ("", "None"):
        return None
    return adduct


def _check_non_negative(composition: Mapping[Element, int], context: str):
    negatives = {k: v for k, v in composition.items() if v < 0}
    if negatives:
        details = ", ".join("{}={}".format(k, v) for k, v in negatives.items())
        msg = "{} results in negative coefficients: {}".format(context, details)
        raise NegativeElementCount(msg)


# functions to get a formula string from a Formula


def _element_sort_key(element: Element):
    # Hill order: carbon, hydrogen, then other elements alphabetically
    if element.z == 6:
        rank = 0
    elif element.z == 1:
        rank = 1
    else:
        rank = 2
    symbol = element.symbol if rank == 2 else ""
    return rank, symbol, element.m


def _get_formula_str(composition: Mapping[Element, int], charge: int) -> str:
    f_str = ""
    for element in sorted(composition, key=_element_sort_key):
        f_str += _element_coeff_to_f_str(element, composition[element])

    if charge:
        charge_str = _get_charge_str(charge)
        f_str = "[{}]{}".format(f_str, charge_str)

    return f_str


def _element_coeff_to_f_str(element: Element, coeff: int) -> str:
    coeff_str = str(coeff) if coeff > 1 else ""
    return "{}{}".format(element, coeff_str)


def _get_charge_str(q: int) -> str:
    qa = abs(q)
    q_sign = "+" if q > 0 else "-"
    q_str = str(qa) if qa > 1 else ""
    q_str = q_str + q_sign
    return q_str
