import pytest

from formulamatch.chem import formula


@pytest.mark.parametrize(
    "f_str,composition",
    [
        ("C3H8", {"C": 3, "H": 8}),
        ("C10H20N2O5S1P0", {"C": 10, "H": 20, "N": 2, "O": 5, "S": 1}),
        ("H-2O-1", {"H": -2, "O": -1}),
        ("CH4Cl2", {"C": 0, "H": 4, "Cl": 2}),
        ("C1C5H2", {"C": 5, "H": 2}),
        ("C5C", {"C": 0}),
        ("CoCl2", {"Cl": 2}),
        ("NaCl", {}),
        ("C2 H6 O1", {"C": 2, "H": 6, "O": 1}),
        ("C-", {}),
    ]
)
def test_parse(f_str, composition):
    f = formula.parse(f_str)
    expected = {x: composition.get(x, 0) for x in ["C", "H", "N", "O", "S", "P", "Cl"]}
    assert f.as_dict() == expected


@pytest.mark.parametrize("f_str", ["", "Xy", "C", "123", "h2o", None])
def test_parse_default_is_zero_formula(f_str):
    assert formula.parse(f_str) == formula.Formula.zero()


@pytest.mark.parametrize(
    "f_str,canonical",
    [
        ("C10H20N2O5S1P1", "C10H20Cl0N2O5P1S1"),
        ("C3H8", "C3H8Cl0N0O0P0S0"),
        ("H-2O-1", "C0H-2Cl0N0O-1P0S0"),
        ("Cl1", "C0H0Cl1N0O0P0S0"),
        ("", "C0H0Cl0N0O0P0S0"),
    ]
)
def test_to_canonical_string(f_str, canonical):
    f = formula.parse(f_str)
    assert formula.to_canonical_string(f) == canonical
    assert str(f) == canonical


@pytest.mark.parametrize(
    "composition",
    [
        {},
        {"C": 10, "H": 20, "N": 2, "O": 5, "S": 1, "P": 1, "Cl": 3},
        {"H": -2, "O": -1},
        {"C": -12, "Cl": 100},
    ]
)
def test_parse_canonical_string_round_trip(composition):
    f = formula.Formula(composition)
    assert formula.parse(formula.to_canonical_string(f)) == f


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ("C10H20N2O5", "H1", "C10H21Cl0N2O5P0S0"),
        ("C6H12O6", "H-2O-1", "C6H10Cl0N0O5P0S0"),
        ("H1", "H-3", "C0H-2Cl0N0O0P0S0"),
        ("Cl1S2", "Cl1P1", "C0H0Cl2N0O0P1S2"),
    ]
)
def test_add(a, b, expected):
    fa = formula.parse(a)
    fb = formula.parse(b)
    total = formula.add(fa, fb)
    assert total.to_canonical_string() == expected
    for symbol in ["C", "H", "N", "O", "S", "P", "Cl"]:
        assert total[symbol] == fa[symbol] + fb[symbol]


def test_add_does_not_modify_operands():
    a = formula.parse("C3H8")
    b = formula.parse("H1")
    a + b
    assert str(a) == "C3H8Cl0N0O0P0S0"
    assert str(b) == "C0H1Cl0N0O0P0S0"


def test_subtraction_and_negation():
    a = formula.parse("C3H8")
    b = formula.parse("H1O1")
    assert str(a - b) == "C3H7Cl0N0O-1P0S0"
    assert str(-b) == "C0H-1Cl0N0O-1P0S0"


def test_add_invalid_operand_raises_error():
    with pytest.raises(ValueError):
        formula.parse("C3H8") + "H1"


def test_counts_are_read_only():
    f = formula.parse("C3H8")
    with pytest.raises(ValueError):
        f.counts[0] = 1


def test_formula_equality_and_hash():
    a = formula.Formula("C3H8")
    b = formula.Formula({"C": 3, "H": 8})
    assert a == b
    assert hash(a) == hash(b)
    assert a != formula.Formula("C3H7")
    assert len({a, b}) == 1


def test_formula_repr():
    assert repr(formula.Formula("C3H8")) == "Formula(C3H8Cl0N0O0P0S0)"


@pytest.mark.parametrize("composition", [{"Br": 1}, {"C": 1.5}])
def test_formula_from_dictionary_invalid_composition(composition):
    with pytest.raises(formula.InvalidFormula):
        formula.Formula(composition)


def test_getitem_invalid_element():
    with pytest.raises(formula.InvalidFormula):
        formula.Formula("C3H8")["Br"]


@pytest.mark.parametrize(
    "f_str,unknown,defaulted",
    [
        ("C3H8", [], []),
        ("XyC3H", ["Xy"], ["H"]),
        ("NaCl", ["Na"], ["Cl"]),
        ("C-O2", [], ["C"]),
    ]
)
def test_parse_with_diagnostics(f_str, unknown, defaulted):
    f, diagnostics = formula.parse_with_diagnostics(f_str)
    assert f == formula.parse(f_str)
    assert diagnostics.unknown == unknown
    assert diagnostics.defaulted == defaulted
    assert diagnostics.is_clean == (not (unknown or defaulted))


def test_parse_count_out_of_range_is_zero():
    f, diagnostics = formula.parse_with_diagnostics("C99999999999999999999H2")
    assert f.as_dict() == {"C": 0, "H": 2, "N": 0, "O": 0, "S": 0, "P": 0, "Cl": 0}
    assert diagnostics.defaulted == ["C"]


@pytest.mark.parametrize(
    "f_str,expected",
    [
        ("C2147483647", 2147483647),
        ("C-2147483647", -2147483647),
        ("C2147483648", 0),
        ("C-2147483648", 0),
    ]
)
def test_parse_count_range_limits(f_str, expected):
    assert formula.parse(f_str)["C"] == expected


def test_add_formulas_with_largest_counts():
    a = formula.parse("C2147483647H-2147483647")
    total = a + a
    assert total["C"] == 2 * 2147483647
    assert total["H"] == -2 * 2147483647
    assert (a - (-a))["C"] == 2 * 2147483647


@pytest.mark.parametrize("coeff", [2 ** 31, -(2 ** 31), 10 ** 20])
def test_formula_from_dictionary_count_out_of_range(coeff):
    with pytest.raises(formula.InvalidFormula):
        formula.Formula({"C": coeff})


@pytest.mark.parametrize("f_str", ["C٣", "H２", "O²"])
def test_parse_non_ascii_digits_are_not_counts(f_str):
    f, diagnostics = formula.parse_with_diagnostics(f_str)
    assert f == formula.Formula.zero()
    assert diagnostics.defaulted == [f_str[0]]
