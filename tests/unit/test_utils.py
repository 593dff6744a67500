import io
from datetime import datetime

from formulamatch import utils


def test_get_export_filename():
    date = datetime(2024, 3, 5, 14, 7, 9)
    assert utils.get_export_filename(date) == "matches_2024_03_05-14_07_09.csv"


def test_get_export_filename_current_date():
    filename = utils.get_export_filename()
    assert filename.startswith("matches_")
    assert filename.endswith(".csv")


def test_get_progress_bar():
    tqdm_func = utils.get_progress_bar()
    bar = tqdm_func(total=2, file=io.StringIO())
    bar.update(2)
    assert bar.n == 2
    bar.close()
