"""Matching session configuration.

SessionConfiguration :
    Store the parameters used to read catalogs, run matching and export results.

"""

from __future__ import annotations

import pathlib

import pydantic
import yaml

from . import _constants as c
from .projection import SortDirection, SortKey


class SessionConfiguration(pydantic.BaseModel):
    """
    Store matching session configuration.

    Parameters
    ----------
    delimiter : str, default=";"
        Field delimiter used to read formula catalogs and to write exports.
    chunk_size : int, default=100
        Number of entries processed between progress reports.
    symmetric : bool, default=False
        Also test if another entry plus a correction equals each entry.
    clear_on_error : bool, default=True
        Clear the previously loaded catalog when a new load fails.
    sort_by : SortKey, default=SortKey.ID
        Sort key used to build export rows.
    descending : bool, default=False
        Sort export rows in descending order.
    show_progress : bool, default=False
        Display a progress bar during matching.

    """

    model_config = pydantic.ConfigDict(validate_assignment=True)

    delimiter: str = pydantic.Field(default=c.DEFAULT_DELIMITER, min_length=1, max_length=1)
    chunk_size: pydantic.PositiveInt = c.DEFAULT_CHUNK_SIZE
    symmetric: bool = False
    clear_on_error: bool = True
    sort_by: SortKey = SortKey.ID
    descending: bool = False
    show_progress: bool = False

    @property
    def direction(self) -> SortDirection:
        """The sort direction of export rows."""
        return SortDirection.DESC if self.descending else SortDirection.ASC

    @classmethod
    def from_yaml(cls, yaml_path: pathlib.Path) -> SessionConfiguration:
        """Create a configuration instance from a YAML file."""
        with pathlib.Path(yaml_path).open("rt") as file:
            d = yaml.safe_load(file)
        return cls(**(d or dict()))

    def to_yaml(self, yaml_path: pathlib.Path) -> None:
        """Dump configuration into a YAML file."""
        yaml_dict = self.model_dump(mode="json")
        with pathlib.Path(yaml_path).open("wt") as file_out:
            yaml.dump(yaml_dict, file_out)
