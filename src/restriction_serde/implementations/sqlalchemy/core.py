"""
restriction_serde.implementations.sqlalchemy.core lets a flattened restriction live in
a relational table, either spread over one column per flat key, or as a single JSON column.

Synopsis
--------

.. code-block:: python

   import sqlalchemy as sa
   from restriction_serde.implementations.sqlalchemy import (
       RestrictionType,
       dump_restriction,
       load_restriction,
       restriction_columns,
   )

   metadata = sa.MetaData()
   role_bindings = sa.Table(
       "role_bindings",
       metadata,
       sa.Column("id", sa.Integer(), primary_key=True),
       *restriction_columns(),
   )

   conn.execute(role_bindings.insert().values(id=1, **dump_restriction(restriction)))
   row = conn.execute(sa.select(role_bindings)).first()
   restriction = load_restriction(row)

"""
import collections.abc
import typing

import sqlalchemy as sa  # type: ignore

from ...flattener import RestrictionFlattener
from ...models import AttributeGroup
from ...registry import FieldRegistry
from ...schema import generate_data_schema, generate_resource_schema
from ...unflattener import RestrictionUnflattener
from ...utils.types import FlatMap


def restriction_columns(
    registry: typing.Optional[FieldRegistry] = None, computed: bool = False
) -> typing.List[sa.Column]:
    """
    Builds one string column per flat key.

    The columns are non-nullable and default to the sentinel unless ``computed`` is
    set, in which case they are nullable and have no default.
    """
    schemas = generate_data_schema(registry) if computed else generate_resource_schema(registry)
    return [
        sa.Column(
            schema.key,
            sa.String(),
            nullable=schema.computed,
            default=schema.default,
            server_default=schema.default,
            comment=schema.description or None,
        )
        for schema in schemas.values()
    ]


def dump_restriction(
    restriction: typing.Optional[AttributeGroup], registry: typing.Optional[FieldRegistry] = None
) -> typing.Dict[str, str]:
    """
    Returns the values for the columns built by :py:func:`restriction_columns`, with
    the sentinel in place of every unset leaf.
    """
    return RestrictionFlattener(registry, fill_unset=True)(restriction)[0]


def load_restriction(
    row: typing.Any, registry: typing.Optional[FieldRegistry] = None
) -> typing.Optional[AttributeGroup]:
    """
    Rebuilds a restriction out of a row. Columns other than the restriction columns are ignored.

    :param row: a mapping, or a row object exposing one as ``_mapping``.
    :return: the restriction, or :py:const:`None` if no leaf is set.
    """
    mapping: FlatMap
    if isinstance(row, collections.abc.Mapping):
        mapping = row
    else:
        mapping = row._mapping
    restriction, has_any_value = RestrictionUnflattener(registry)(mapping)
    return restriction if has_any_value else None


class RestrictionType(sa.types.TypeDecorator):
    """
    A column type storing a restriction as its flat map in a JSON column.

    A restriction without any leaf set is stored as SQL ``NULL`` and read back as :py:const:`None`.
    """

    impl = sa.JSON
    cache_ok = True

    registry: typing.Optional[FieldRegistry]

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        flat, has_any_value = self._flattener(value)
        return flat if has_any_value else None

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        restriction, has_any_value = self._unflattener(value)
        return restriction if has_any_value else None

    def __init__(self, registry: typing.Optional[FieldRegistry] = None):
        super().__init__(none_as_null=True)
        self.registry = registry
        self._flattener = RestrictionFlattener(registry)
        self._unflattener = RestrictionUnflattener(registry)
