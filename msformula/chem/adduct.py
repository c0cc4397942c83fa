"""
Tools for working with adducts.

Objects
-------

- Adduct

Exceptions
----------

- IncorrectAdduct
- MalformedAdduct

"""

import re
from collections import Counter
from typing import Optional, Tuple

from .._constants import ChargeType
from ..exceptions import IncorrectFormula, MalformedAdduct
from .formula import Formula, parse_hill
from .mass import MassEvaluator

_ADDUCT_PATTERN = re.compile(
    r"^\[(?P<multimer>[0-9]*)M(?P<body>.*)\](?P<charge>[0-9]*)(?P<sign>[+-])?$"
)
_BODY_PATTERN = re.compile(r"(?:[+-][0-9]*[A-Z\[][A-Za-z0-9\[\]]*)*")
_TERM_PATTERN = re.compile(r"(?P<sign>[+-])(?P<n>[0-9]*)(?P<formula>[A-Z\[][A-Za-z0-9\[\]]*)")


class Adduct:
    """
    Representation of an adduct expression such as ``"[M+H]+"``,
    ``"[M-3H2O+2H]2+"``, ``"[2M+CH3CN+H]+"`` or ``"[5M+Ca]2+"``.

    The elements added and removed by the adduct are netted, e.g. the
    adduct ``"[M+H-H2O]+"`` removes one O and one H.

    Parameters
    ----------
    adduct : str
        Adduct expression.
    evaluator : MassEvaluator or None, default=None
        Used to compute the mass of the added and removed formulas.

    Attributes
    ----------
    multimer : int
        Number of molecules in the adduct, 1 for ``M``, 2 for ``2M``...
    formula_plus : Formula
        Elements added.
    formula_minus : Formula
        Elements removed.
    charge : int
        Charge magnitude of the adduct.
    charge_type : ChargeType
        Charge sign of the adduct.

    Raises
    ------
    MalformedAdduct
        If the expression does not follow the adduct grammar.
    UnknownElement
        If an element in the adduct is not in the periodic table.

    Examples
    --------
    >>> a = Adduct("[M+H-H2O]+")
    >>> a.formula_minus
    Formula(HO)
    >>> a.get_adduct_mass()
    -17.00274...

    """

    def __init__(self, adduct: str, evaluator: Optional[MassEvaluator] = None):
        if not isinstance(adduct, str):
            msg = "Adduct must be a string. Got {!r}.".format(adduct)
            raise MalformedAdduct(msg)
        expression = "".join(adduct.split())
        match = _ADDUCT_PATTERN.match(expression)
        if match is None:
            msg = "{!r} is not a valid adduct.".format(adduct)
            raise MalformedAdduct(msg)

        multimer = match.group("multimer")
        multimer = int(multimer) if multimer else 1
        if multimer < 1:
            msg = "Invalid multimer in adduct {!r}.".format(adduct)
            raise MalformedAdduct(msg)

        # without a sign the adduct is neutral and charge digits are ignored
        charge, sign = match.group("charge", "sign")
        if sign is None:
            signed_charge = 0
        else:
            charge = int(charge) if charge else 1
            signed_charge = ChargeType.from_symbol(sign).sign * charge

        self._expression = adduct
        self._multimer = multimer
        self._charge = signed_charge
        self._formula_plus, self._formula_minus = _parse_adduct_body(
            match.group("body"), adduct, evaluator
        )

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def multimer(self) -> int:
        return self._multimer

    @property
    def formula_plus(self) -> Formula:
        return self._formula_plus

    @property
    def formula_minus(self) -> Formula:
        return self._formula_minus

    @property
    def charge(self) -> int:
        return abs(self._charge)

    @property
    def charge_type(self) -> ChargeType:
        return ChargeType.from_charge(self._charge)

    @property
    def signed_charge(self) -> int:
        return self._charge

    def get_adduct_mass(self) -> float:
        """
        Computes the mass difference introduced by the adduct: the mass of the
        added elements minus the mass of the removed elements.

        """
        return (
            self._formula_plus.get_monoisotopic_mass()
            - self._formula_minus.get_monoisotopic_mass()
        )

    def get_formula_str(self) -> str:
        """Returns the netted adduct body, e.g. ``"+Na-H"``."""
        f_str = ""
        if self._formula_plus.composition:
            f_str += "+{}".format(self._formula_plus)
        if self._formula_minus.composition:
            f_str += "-{}".format(self._formula_minus)
        return f_str

    def __eq__(self, other):
        if not isinstance(other, Adduct):
            return NotImplemented
        return (
            (self._multimer == other._multimer)
            and (self._formula_plus == other._formula_plus)
            and (self._formula_minus == other._formula_minus)
            and (self._charge == other._charge)
        )

    def __hash__(self):
        return hash((self._multimer, self._formula_plus, self._formula_minus, self._charge))

    def __str__(self):
        multimer_str = "" if self._multimer == 1 else str(self._multimer)
        charge_str = "" if self.charge < 2 else str(self.charge)
        return "[{}M{}]{}{}".format(
            multimer_str, self.get_formula_str(), charge_str, self.charge_type.value
        )

    def __repr__(self):
        return "Adduct({})".format(str(self))


def _parse_adduct_body(
    body: str, adduct: str, evaluator: Optional[MassEvaluator]
) -> Tuple[Formula, Formula]:
    """
    Computes the formulas added and removed by an adduct body, e.g. "+CH3CN+H".

    Each term is a sign, an optional multiplier and a formula. Element counts
    are netted across terms.

    """
    if not _BODY_PATTERN.fullmatch(body):
        msg = "{!r} is not a valid adduct.".format(adduct)
        raise MalformedAdduct(msg)

    net = Counter()
    for term in _TERM_PATTERN.finditer(body):
        sign = 1 if term.group("sign") == "+" else -1
        n = term.group("n")
        n = int(n) if n else 1
        if n < 1:
            msg = "Invalid multiplier in term {!r} of adduct {!r}.".format(term.group(), adduct)
            raise MalformedAdduct(msg)
        try:
            subformula = parse_hill(term.group("formula"), evaluator=evaluator)
        except IncorrectFormula as e:
            msg = "Invalid term {!r} in adduct {!r}. {}".format(term.group(), adduct, e)
            raise MalformedAdduct(msg) from e
        for element, k in subformula.composition.items():
            net[element] += sign * n * k

    plus = {k: v for k, v in net.items() if v > 0}
    minus = {k: -v for k, v in net.items() if v < 0}
    return Formula(plus, evaluator=evaluator), Formula(minus, evaluator=evaluator)
