"""
Functions used in different modules.
"""

from datetime import datetime
from typing import Optional

from tqdm.auto import tqdm

from . import _constants as c


def get_progress_bar():
    """Returns the tqdm progress bar class suitable for the current frontend."""
    return tqdm


def get_export_filename(date: Optional[datetime] = None) -> str:
    """
    Creates a timestamped file name for match exports.

    Parameters
    ----------
    date: datetime or None, default=None
        If ``None``, the current local time is used.

    Returns
    -------
    str

    Examples
    --------
    >>> get_export_filename(datetime(2024, 3, 5, 14, 7, 9))
    'matches_2024_03_05-14_07_09.csv'

    """
    if date is None:
        date = datetime.now()
    return "{}_{}.csv".format(c.EXPORT_PREFIX, date.strftime(c.EXPORT_DATE_FORMAT))
