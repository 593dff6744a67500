from typing import Final, List, Tuple

# tracked elements, in the storage order of Formula counts
CARBON: Final[str] = "C"
HYDROGEN: Final[str] = "H"
NITROGEN: Final[str] = "N"
OXYGEN: Final[str] = "O"
SULFUR: Final[str] = "S"
PHOSPHORUS: Final[str] = "P"
CHLORINE: Final[str] = "Cl"
ELEMENTS: Final[Tuple[str, ...]] = (
    CARBON, HYDROGEN, NITROGEN, OXYGEN, SULFUR, PHOSPHORUS, CHLORINE
)

# element order used in canonical formula strings
CANONICAL_ORDER: Final[Tuple[str, ...]] = (
    CARBON, HYDROGEN, CHLORINE, NITROGEN, OXYGEN, PHOSPHORUS, SULFUR
)

# formula catalog columns
ID_COLUMN: Final[str] = "ID"
FORMULA_COLUMN: Final[str] = "formulas"
REQUIRED_COLUMNS: Final[List[str]] = [ID_COLUMN, FORMULA_COLUMN]

# export columns
EXPORT_ID: Final[str] = "ID"
EXPORT_FORMULA: Final[str] = "Original Formula"
EXPORT_N_MATCHES: Final[str] = "Number of Matches"
EXPORT_MATCHES: Final[str] = "Matches"
EXPORT_COLUMNS: Final[List[str]] = [
    EXPORT_ID, EXPORT_FORMULA, EXPORT_N_MATCHES, EXPORT_MATCHES
]

# io defaults
DEFAULT_DELIMITER: Final[str] = ";"
DEFAULT_CHUNK_SIZE: Final[int] = 100
EXPORT_PREFIX: Final[str] = "matches"
EXPORT_DATE_FORMAT: Final[str] = "%Y_%m_%d-%H_%M_%S"

# formula coefficients are bounded so that sums of two formulas fit in int64
MAX_COEFFICIENT: Final[int] = 2 ** 31 - 1
