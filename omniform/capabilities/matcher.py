"""Predicate matching over a data type's resolved traits.

Pure: only the given type's resolved trait map is inspected.
"""

from collections.abc import Mapping
from typing import Optional, Union

from omniform.datatypes.schemas import DataType

from .schemas import HasTrait, TraitValues


def matches(data_type: DataType, predicate: Optional[Union[HasTrait, TraitValues]]) -> bool:
    """Decide whether `predicate` holds for `data_type`.

    An absent predicate always matches.

    Raises:
        TypeError: If `predicate` is not one of the known predicate kinds
    """
    if predicate is None:
        return True

    traits = data_type.resolved_traits()

    if isinstance(predicate, HasTrait):
        return predicate.trait in traits

    if isinstance(predicate, TraitValues):
        declared = traits.get(predicate.trait)
        if not isinstance(declared, Mapping):
            return False
        return all(
            key in declared and declared[key] == value
            for key, value in predicate.values.items()
        )

    raise TypeError(f"Unknown predicate kind: {type(predicate).__name__}")
