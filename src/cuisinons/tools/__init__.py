"""
Cuisinons - Tools Package.

Units:
- UNIT_DEFINITIONS: Static unit table with conversion factors
- can_convert_units / convert_quantity: Category-safe conversion

Normalization:
- clean_unit, extract_quantity_unit: Ingredient line parsing

Lookup:
- IngredientLookup: Resolve ingredient names to stable ids
"""

from cuisinons.tools.normalize import clean_unit, extract_quantity_unit, normalize_name
from cuisinons.tools.units import (
    UNIT_DEFINITIONS,
    UnitCategory,
    UnitDefinition,
    can_convert_units,
    convert_quantity,
    get_unit_definition,
    resolve_unit,
)

__all__ = [
    "UNIT_DEFINITIONS",
    "UnitCategory",
    "UnitDefinition",
    "can_convert_units",
    "clean_unit",
    "convert_quantity",
    "extract_quantity_unit",
    "get_unit_definition",
    "normalize_name",
    "resolve_unit",
]
