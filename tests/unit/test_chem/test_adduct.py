from msformula.chem.adduct import Adduct
from msformula.chem.formula import Formula
from msformula._constants import ChargeType
from msformula.exceptions import IncorrectAdduct, MalformedAdduct, UnknownElement
import pytest


def test_valid_adduct():
    adduct = Adduct("[M+H]+")
    assert adduct.multimer == 1
    assert adduct.charge == 1
    assert adduct.charge_type is ChargeType.POSITIVE
    assert adduct.signed_charge == 1
    assert adduct.formula_plus == Formula("H")
    assert adduct.formula_minus.composition == dict()


def test_valid_adduct_with_multiple_charges():
    adduct = Adduct("[M+Na]2+")
    assert adduct.multimer == 1
    assert adduct.charge == 2
    assert adduct.charge_type is ChargeType.POSITIVE


def test_adduct_with_multimer():
    adduct = Adduct("[5M+H]+")
    assert adduct.multimer == 5
    assert adduct.charge == 1


@pytest.mark.parametrize(
    "adduct_str,multimer,signed_charge,plus,minus",
    [
        ("[M-H]-", 1, -1, {}, {"H": 1}),
        ("[M-3H2O+2H]2+", 1, 2, {}, {"H": 4, "O": 3}),
        ("[2M+CH3CN+H]+", 2, 1, {"C": 2, "H": 4, "N": 1}, {}),
        ("[5M+Ca]2+", 5, 2, {"Ca": 1}, {}),
        ("[M+Cl]-", 1, -1, {"Cl": 1}, {}),
        ("[M+Na-2H]-", 1, -1, {"Na": 1}, {"H": 2}),
        ("[M+H+H]+", 1, 1, {"H": 2}, {}),
        ("[M+H-H]+", 1, 1, {}, {}),
        ("[M]", 1, 0, {}, {}),
        ("[M]+", 1, 1, {}, {}),
        ("[M+[13]CH3]+", 1, 1, {"13C": 1, "H": 3}, {}),
        (" [M + H]+ ", 1, 1, {"H": 1}, {}),
    ],
)
def test_adduct_valid_input(adduct_str, multimer, signed_charge, plus, minus):
    adduct = Adduct(adduct_str)
    assert adduct.multimer == multimer
    assert adduct.signed_charge == signed_charge
    assert adduct.formula_plus == Formula(plus)
    assert adduct.formula_minus == Formula(minus)


def test_adduct_body_is_netted():
    adduct = Adduct("[M+H-H2O]+")
    assert adduct.formula_plus.composition == dict()
    assert adduct.formula_minus == Formula({"O": 1, "H": 1})


def test_adduct_mass():
    adduct = Adduct("[M+H-H2O]+")
    mass = adduct.get_adduct_mass()
    assert -17.01 < mass < -17


@pytest.mark.parametrize(
    "adduct_str",
    [
        "[3]",
        "M+H",
        "[M+H",
        "[N+H]+",
        "[0M+H]+",
        "[M+H]++",
        "[M+0H]+",
        "[M+h]+",
        "[MH]+",
        "[M+]+",
        "[M+(CH3)2]+",
        "[M+H0]+",
        "",
        None,
    ],
)
def test_adduct_malformed(adduct_str):
    with pytest.raises(MalformedAdduct):
        Adduct(adduct_str)


def test_adduct_malformed_is_incorrect_adduct():
    with pytest.raises(IncorrectAdduct):
        Adduct("[3]")


def test_adduct_unknown_element():
    with pytest.raises(UnknownElement):
        Adduct("[M+Xx]+")


@pytest.mark.parametrize(
    "adduct_str,expected",
    [
        ("[M+H]+", "[M+H]+"),
        ("[M-H]-", "[M-H]-"),
        ("[M-3H2O+2H]2+", "[M-H4O3]2+"),
        ("[2M+CH3CN+H]+", "[2M+C2H4N]+"),
        ("[M+H-H2O]+", "[M-HO]+"),
        ("[M]", "[M]"),
    ],
)
def test_adduct_str(adduct_str, expected):
    adduct = Adduct(adduct_str)
    assert str(adduct) == expected
    assert adduct.expression == adduct_str
    assert Adduct(str(adduct)) == adduct


def test_adduct_equality():
    assert Adduct("[M+H+H]2+") == Adduct("[M+2H]2+")
    assert hash(Adduct("[M+H+H]2+")) == hash(Adduct("[M+2H]2+"))
    assert Adduct("[M+H]+") != Adduct("[2M+H]+")
    assert Adduct("[M+H]+") != Adduct("[M+H]2+")
    assert Adduct("[M+H]+") != "[M+H]+"


@pytest.mark.parametrize("adduct_str", ["[M+H]2", "[M+H]0+", "[M+H]0-", "[M+H]"])
def test_adduct_without_charge_is_neutral(adduct_str):
    adduct = Adduct(adduct_str)
    assert adduct.signed_charge == 0
    assert adduct.charge == 0
    assert adduct.charge_type is ChargeType.NEUTRAL
    assert adduct.formula_plus == Formula("H")
    assert str(adduct) == "[M+H]"


def test_formula_with_neutral_adduct_charge_digits():
    f = Formula("H2O", adduct="[M+H]2")
    assert f.get_final_formula_with_adduct() == "H3O"
    assert f.get_monoisotopic_mass_with_adduct() == pytest.approx(18.0105650642 + 1.0078250321)
