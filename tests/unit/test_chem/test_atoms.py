from msformula.chem import atoms
from msformula.exceptions import UnknownElement
import pytest
from concurrent.futures import ThreadPoolExecutor


def test_PeriodicTable_is_singleton():
    assert atoms.PeriodicTable() is atoms.PeriodicTable()


def test_PeriodicTable_is_loaded_on_import():
    assert atoms._PeriodicTable.instance is not None
    assert atoms.PeriodicTable() is atoms._PeriodicTable.instance


def test_PeriodicTable_get_element_from_symbol():
    ptable = atoms.PeriodicTable()
    c = ptable.get_element("C")
    assert c.z == 6
    assert c.symbol == "C"
    assert c.m == 12.0


def test_PeriodicTable_get_element_from_z():
    ptable = atoms.PeriodicTable()
    p = ptable.get_element(15)
    assert p.symbol == "P"
    assert p.z == 15


def test_PeriodicTable_get_element_from_z_returns_natural_element():
    ptable = atoms.PeriodicTable()
    assert ptable.get_element(1) is ptable.get_element("H")


def test_PeriodicTable_get_isotope_from_symbol():
    ptable = atoms.PeriodicTable()
    cl37 = ptable.get_element("37Cl")
    assert cl37.a == 37
    assert cl37.symbol == "Cl"
    assert cl37.is_isotope()
    assert cl37.key == "37Cl"
    assert str(cl37) == "[37]Cl"


def test_PeriodicTable_deuterium_alias():
    ptable = atoms.PeriodicTable()
    d = ptable.get_element("D")
    assert ptable.get_element("2H") is d
    assert "2H" in ptable
    assert str(d) == "D"
    assert d.z == 1


@pytest.mark.parametrize(
    "symbol,mass",
    [
        ("H", 1.0078250321),
        ("D", 2.01410177811),
        ("O", 15.994915),
        ("Na", 22.98976928),
        ("13C", 13.00335484),
    ],
)
def test_PeriodicTable_get_monoisotopic_mass(symbol, mass):
    ptable = atoms.PeriodicTable()
    assert ptable.get_monoisotopic_mass(symbol) == pytest.approx(mass)


def test_PeriodicTable_h2_is_not_deuterium():
    ptable = atoms.PeriodicTable()
    h2 = ptable.get_element("H2")
    assert h2.m == pytest.approx(2 * ptable.get_element("H").m)


@pytest.mark.parametrize("symbol", ["Xx", "c", "", "99C", 0, 200, None])
def test_PeriodicTable_get_element_invalid_input(symbol):
    ptable = atoms.PeriodicTable()
    with pytest.raises(UnknownElement):
        ptable.get_element(symbol)


@pytest.mark.parametrize(
    "symbol,nominal",
    [("C", 12), ("H", 1), ("O", 16), ("Cl", 35), ("37Cl", 37)],
)
def test_Element_nominal_mass(symbol, nominal):
    ptable = atoms.PeriodicTable()
    assert ptable.get_element(symbol).nominal_mass == nominal


def test_superheavy_elements_use_current_symbols():
    ptable = atoms.PeriodicTable()
    for symbol, z in [("Nh", 113), ("Mc", 115), ("Ts", 117), ("Og", 118)]:
        assert ptable.get_element(symbol).z == z


def test_formulas_built_in_threads_share_elements():
    from msformula.chem.formula import Formula

    with ThreadPoolExecutor(max_workers=4) as executor:
        formulas = list(executor.map(Formula, ["C6H12O6"] * 8))
    assert all(f == formulas[0] for f in formulas)
