import pytest

from formulamatch.chem import parse
from formulamatch.models import Correction, FormulaEntry


def _make_entries(pairs):
    return [FormulaEntry(id=str(k), formula=parse(f)) for k, f in pairs]


def _make_corrections(formulas):
    return [Correction(delta=parse(f)) for f in formulas]


@pytest.fixture
def make_entries():
    return _make_entries


@pytest.fixture
def make_corrections():
    return _make_corrections


@pytest.fixture
def entries():
    pairs = [
        ("1", "C10H20N2O5S1P0"),
        ("2", "C10H21N2O5S1P0"),
        ("3", "C10H20N2O4S1P0"),
        ("10", "C6H12O6"),
        ("11", "C6H10O5"),
    ]
    return _make_entries(pairs)


@pytest.fixture
def corrections():
    return _make_corrections(["H1", "O-1", "H-2O-1"])


@pytest.fixture
def formula_catalog_path(tmp_path):
    path = tmp_path / "formulas.csv"
    content = (
        "ID;formulas;mz\n"
        "1;C10H20N2O5S1P0;100.0\n"
        "2;C10H21N2O5S1P0;101.0\n"
        "\n"
        "3;;102.0\n"
        ";C6H12O6;103.0\n"
        "10;C6H12O6;180.0\n"
        "11;C6H10O5;162.0\n"
    )
    path.write_text(content)
    return path


@pytest.fixture
def correction_catalog_path(tmp_path):
    path = tmp_path / "corrections.txt"
    path.write_text("H1\n\n  O-1  \nH-2O-1\n")
    return path
