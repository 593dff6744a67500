"""
Validation functions for projection and export parameters received from
untyped sources such as the command line or configuration files.
"""


import cerberus
from typing import List
from . import _constants as c
from .projection import SortDirection, SortKey


def _normalize_params(params: dict, validator: cerberus.Validator) -> dict:
    """
    Applies schema defaults and coercions and checks the result.

    Every error is reported as one ``<field>: <message>`` line, with fields
    sorted by name.

    Raises
    ------
    ValueError: if any of the parameters are invalid.
    """
    normalized = validator.normalized(params)
    if normalized is None or not validator.validate(normalized):
        lines: List[str] = list()
        for field in sorted(validator.errors):
            lines.extend("{}: {}".format(field, x) for x in validator.errors[field])
        raise ValueError("\n".join(lines))
    return normalized


class ParameterValidator(cerberus.Validator):
    def _validate_positive(self, positive, field, value):
        """
        Tests if a size or count is greater than zero

        The rule's arguments are validated against this schema:
        {"type": "boolean"}
        """
        if positive and isinstance(value, int) and value < 1:
            self._error(field, "Must be greater than zero, got {}".format(value))

    def _validate_single_character(self, single_character, field, value):
        """
        Tests if a string has exactly one character

        The rule's arguments are validated against this schema:
        {"type": "boolean"}
        """
        if single_character and isinstance(value, str) and len(value) != 1:
            msg = "Must be a single character"
            self._error(field, msg)


def validate_projection_params(params: dict) -> dict:
    """
    Validates filter and sort parameters.

    Parameters
    ----------
    params: dict
        May contain the keys `query` (str or None), `sort_by` (one of "id",
        "formula" or "matches") and `direction` ("asc" or "desc").

    Returns
    -------
    dict: parameters with defaults set and sort values converted to
    SortKey and SortDirection.

    Raises
    ------
    ValueError: if any of the parameters are invalid.
    """
    schema = {
        "query": {"type": "string", "nullable": True, "default": None},
        "sort_by": {
            "type": "string",
            "allowed": [x.value for x in SortKey],
            "default": SortKey.ID.value,
            "coerce": _enum_value,
        },
        "direction": {
            "type": "string",
            "allowed": [x.value for x in SortDirection],
            "default": SortDirection.ASC.value,
            "coerce": _enum_value,
        },
    }
    validator = ParameterValidator(schema)
    normalized = _normalize_params(params, validator)
    normalized["sort_by"] = SortKey(normalized["sort_by"])
    normalized["direction"] = SortDirection(normalized["direction"])
    return normalized


def validate_run_params(params: dict) -> dict:
    """
    Validates matching run and export parameters.

    Parameters
    ----------
    params: dict
        May contain the keys `chunk_size` (positive int), `symmetric` (bool)
        and `delimiter` (single character).

    Returns
    -------
    dict: normalized parameters.

    Raises
    ------
    ValueError: if any of the parameters are invalid.
    """
    schema = {
        "chunk_size": {"type": "integer", "positive": True, "default": c.DEFAULT_CHUNK_SIZE},
        "symmetric": {"type": "boolean", "default": False},
        "delimiter": {"type": "string", "single_character": True, "default": c.DEFAULT_DELIMITER},
    }
    validator = ParameterValidator(schema)
    return _normalize_params(params, validator)


def _enum_value(value):
    if isinstance(value, (SortKey, SortDirection)):
        return value.value
    if isinstance(value, str):
        return value.lower()
    return value
