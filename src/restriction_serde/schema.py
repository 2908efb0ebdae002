"""
:py:mod:`restriction_serde.schema` derives the attribute declarations a schema engine
needs to store a flattened restriction, one per flat key.

Two flavors are generated:

* the *resource* flavor, where each attribute is optional and defaults to the sentinel
  so that the stored map always has the complete key set;
* the *data* flavor, where each attribute is computed and never supplied by the user.
"""

import dataclasses
import enum
import typing
from collections import OrderedDict

from .registry import FieldRegistry, resolve_registry


class AttributeMode(enum.Enum):
    OPTIONAL = "optional"
    COMPUTED = "computed"


@dataclasses.dataclass(frozen=True)
class AttributeSchema:
    key: str
    mode: AttributeMode
    type: typing.Type = str
    default: typing.Optional[str] = None
    description: str = ""

    @property
    def optional(self) -> bool:
        return self.mode is AttributeMode.OPTIONAL

    @property
    def computed(self) -> bool:
        return self.mode is AttributeMode.COMPUTED


def _generate(
    registry: FieldRegistry,
    factory: typing.Callable[[str, str], AttributeSchema],
) -> typing.Mapping[str, AttributeSchema]:
    return OrderedDict(
        (leaf.key, factory(leaf.key, leaf.description)) for leaf in registry.leaves
    )


def generate_resource_schema(
    registry: typing.Optional[FieldRegistry] = None,
) -> typing.Mapping[str, AttributeSchema]:
    registry_ = resolve_registry(registry)
    return _generate(
        registry_,
        lambda key, description: AttributeSchema(
            key=key,
            mode=AttributeMode.OPTIONAL,
            default=registry_.sentinel,
            description=description,
        ),
    )


def generate_data_schema(
    registry: typing.Optional[FieldRegistry] = None,
) -> typing.Mapping[str, AttributeSchema]:
    return _generate(
        resolve_registry(registry),
        lambda key, description: AttributeSchema(
            key=key,
            mode=AttributeMode.COMPUTED,
            description=description,
        ),
    )
