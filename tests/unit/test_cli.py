import pytest

from formulamatch import cli
from formulamatch.projection import SortKey


def test_main(formula_catalog_path, correction_catalog_path, tmp_path, capsys):
    output = tmp_path / "out.csv"
    args = [str(formula_catalog_path), str(correction_catalog_path), "-o", str(output)]
    cli.main(args)
    lines = output.read_text().splitlines()
    assert lines[0] == "ID;Original Formula;Number of Matches;Matches"
    assert [x.split(";")[0] for x in lines[1:]] == ["1", "2", "10", "11"]
    assert "Found 2 matches for 2 entries" in capsys.readouterr().out


def test_main_sort_and_search(formula_catalog_path, correction_catalog_path, tmp_path):
    output = tmp_path / "out.csv"
    args = [
        str(formula_catalog_path),
        str(correction_catalog_path),
        "-o",
        str(output),
        "--search",
        "C6",
        "--sort-by",
        "matches",
        "--descending",
    ]
    cli.main(args)
    lines = output.read_text().splitlines()
    assert [x.split(";")[0] for x in lines[1:]] == ["10", "11"]


def test_main_with_config_file(formula_catalog_path, correction_catalog_path, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("delimiter: ','\nsort_by: formula\n")
    csv_path = tmp_path / "formulas.csv"
    csv_path.write_text(formula_catalog_path.read_text().replace(";", ","))
    output = tmp_path / "out.csv"
    args = [str(csv_path), str(correction_catalog_path), "-o", str(output), "--config", str(config_path)]
    cli.main(args)
    lines = output.read_text().splitlines()
    assert lines[0] == "ID,Original Formula,Number of Matches,Matches"
    # C10... sorts before C6...
    assert [x.split(",")[0] for x in lines[1:]] == ["1", "2", "11", "10"]


def test_main_missing_column(tmp_path, correction_catalog_path, capsys):
    path = tmp_path / "formulas.csv"
    path.write_text("ID;formula\n1;C1H1\n")
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(path), str(correction_catalog_path)])
    assert excinfo.value.code == 1
    assert "Missing required column(s): formulas" in capsys.readouterr().err


def test_main_invalid_chunk_size(formula_catalog_path, correction_catalog_path):
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(formula_catalog_path), str(correction_catalog_path), "--chunk-size", "0"])
    assert excinfo.value.code == 1


def test_build_config_overrides():
    parser = cli.build_parser()
    args = parser.parse_args(["f.csv", "c.txt", "--sort-by", "formula", "--symmetric", "--chunk-size", "5"])
    config = cli.build_config(args)
    assert config.sort_by == SortKey.FORMULA
    assert config.symmetric
    assert config.chunk_size == 5
    assert not config.descending


def test_main_malformed_config_file(formula_catalog_path, correction_catalog_path, tmp_path, capsys):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("delimiter: [\n")
    args = [str(formula_catalog_path), str(correction_catalog_path), "--config", str(config_path)]
    with pytest.raises(SystemExit) as excinfo:
        cli.main(args)
    assert excinfo.value.code == 1
    assert capsys.readouterr().err


def test_main_unwritable_output(formula_catalog_path, correction_catalog_path, tmp_path, capsys):
    output = tmp_path / "missing_dir" / "out.csv"
    with pytest.raises(SystemExit) as excinfo:
        cli.main([str(formula_catalog_path), str(correction_catalog_path), "-o", str(output)])
    assert excinfo.value.code == 1
    assert "Error writing results" in capsys.readouterr().err
    assert not output.exists()
