"""
Tools for working with Elements and labelled isotopes.

Objects
-------
- Element
- PeriodicTable

Constants
---------
- EM: Mass of the electron.

Exceptions
----------
- UnknownElement

"""
import json
import os.path
from string import digits
from typing import Dict, Final, Optional, Tuple, Union

from .._constants import EM
from ..exceptions import UnknownElement

__all__ = ["EM", "Element", "PeriodicTable", "UnknownElement"]

# alternative names for labelled isotopes with their own symbol
_ISOTOPE_ALIASES: Final[Dict[str, str]] = {"2H": "D"}

# molecular markers stored in formulas as a number of atoms of one element
MOLECULAR_MARKERS: Final[Dict[str, Tuple[str, int]]] = {"H2": ("H", 2)}


class Element:
    """
    Representation of an element or a labelled isotope.

    Attributes
    ----------
    symbol : str
        Symbol used in formula strings.
    name : str
        Element name.
    z : int
        Atomic number.
    m : float
        Monoisotopic mass.
    a : int or None
        Mass number of explicitly labelled isotopes, e.g. 13 for carbon-13.
        ``None`` for elements with their natural monoisotope.

    """

    __slots__ = ("symbol", "name", "z", "m", "a")

    def __init__(self, symbol: str, name: str, z: int, m: float, a: Optional[int] = None):
        self.symbol = symbol
        self.name = name
        self.z = z
        self.m = m
        self.a = a

    @property
    def key(self) -> str:
        """String used to fetch the element from the periodic table."""
        if self.a is None:
            return self.symbol
        return "{}{}".format(self.a, self.symbol)

    @property
    def nominal_mass(self) -> int:
        return int(round(self.m))

    def is_isotope(self) -> bool:
        return self.a is not None

    def __str__(self):
        if self.a is None:
            return self.symbol
        return "[{}]{}".format(self.a, self.symbol)

    def __repr__(self):
        return "Element({})".format(self.key)


def PeriodicTable():
    """
    Reference the PeriodicTable object.

    Examples
    --------
    >>> import msformula as mf
    >>> ptable = mf.chem.PeriodicTable()

    """
    return _PeriodicTable.instance


class _PeriodicTable:
    """
    Periodic Table representation. Maps element symbols and labelled isotopes
    to their monoisotopic mass.

    Methods
    -------
    get_element
    get_monoisotopic_mass

    """

    instance = None

    def __init__(self):
        self._symbol_to_element = _make_periodic_table()
        self._z_to_element = dict()
        for element in self._symbol_to_element.values():
            # several entries share an atomic number (H, D, 13C...)
            if element.a is None:
                self._z_to_element.setdefault(element.z, element)

    def __contains__(self, symbol: str) -> bool:
        symbol = _ISOTOPE_ALIASES.get(symbol, symbol)
        return symbol in self._symbol_to_element

    def __len__(self):
        return len(self._symbol_to_element)

    def get_element(self, element: Union[str, int]) -> Element:
        """
        Returns an Element using its symbol, its labelled isotope string or
        its atomic number.

        Parameters
        ----------
        element : str or int
            element symbol (e.g. "C", "D"), labelled isotope (e.g. "13C") or
            atomic number.

        Returns
        -------
        Element

        Raises
        ------
        UnknownElement
            If the element is not in the table.

        Examples
        --------
        >>> import msformula as mf
        >>> ptable = mf.chem.PeriodicTable()
        >>> h = ptable.get_element("H")
        >>> c13 = ptable.get_element("13C")
        >>> c = ptable.get_element(6)

        """
        try:
            if isinstance(element, int):
                return self._z_to_element[element]
            element = _ISOTOPE_ALIASES.get(element, element)
            return self._symbol_to_element[element]
        except (KeyError, TypeError):
            msg = "{} is not a valid element.".format(element)
            raise UnknownElement(msg)

    def get_monoisotopic_mass(self, element: str) -> float:
        """Returns the monoisotopic mass of an element symbol."""
        return self.get_element(element).m


def _make_periodic_table() -> Dict[str, Element]:
    this_dir, _ = os.path.split(__file__)
    elements_path = os.path.join(this_dir, "elements.json")
    with open(elements_path, "r") as fin:
        element_data = json.load(fin)

    isotopes_path = os.path.join(this_dir, "isotopes.json")
    with open(isotopes_path, "r") as fin:
        isotope_data = json.load(fin)

    periodic_table = dict()
    for symbol, data in element_data.items():
        periodic_table[symbol] = Element(symbol, **data)

    for key, data in isotope_data.items():
        if key[0] not in digits:  # pragma: no cover
            msg = "Invalid isotope key in isotopes.json: {}".format(key)
            raise ValueError(msg)
        periodic_table[key] = Element(**data)
    return periodic_table


_PeriodicTable.instance = _PeriodicTable()
