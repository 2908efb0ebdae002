"""
:py:mod:`restriction_serde.flattener` turns a :py:class:`~restriction_serde.models.ResourceNameRestriction`
into the flat ``str -> str`` map stored by a schema that cannot nest optional values.

Synopsis
--------

.. code-block:: python

   from restriction_serde.flattener import flatten

   flat, has_any_value = flatten(
       ResourceNameRestriction(
           common=CommonAttributes(organization="org-1"),
           pulsar=PulsarAttributes(topic=PulsarTopicAttributes(domain="persistent")),
       )
   )
   # flat == {"common_organization": "org-1", "pulsar_topic_domain": "persistent"}
   # has_any_value is True

"""

import typing
from collections import OrderedDict

from .models import AttributeGroup
from .registry import FieldRegistry, LeafDescriptor, resolve_registry
from .utils.types import MutableFlatMap


class RestrictionFlattener:
    """
    :param Optional[FieldRegistry] registry: the registry to walk. Defaults to :py:data:`~restriction_serde.registry.DEFAULT_REGISTRY`.
    :param bool fill_unset: when set, every key of the registry is emitted and unset leaves carry the sentinel.
        This is for storages that require a fixed key set; the returned flag still reflects real values only.
    """

    _registry: FieldRegistry
    _fill_unset: bool = False

    def _fetch_value(
        self, restriction: AttributeGroup, leaf: LeafDescriptor
    ) -> typing.Optional[str]:
        node: typing.Optional[AttributeGroup] = restriction
        for name in leaf.group_path:
            node = getattr(node, name)
            if node is None:
                return None
        return getattr(node, leaf.name)

    def __call__(
        self, restriction: typing.Optional[AttributeGroup]
    ) -> typing.Tuple[typing.Dict[str, str], bool]:
        result: MutableFlatMap = OrderedDict()
        has_any_value = False
        for leaf in self._registry.leaves:
            value = None
            if restriction is not None:
                value = self._fetch_value(restriction, leaf)
            if not self._registry.is_unset(value):
                result[leaf.key] = typing.cast(str, value)
                has_any_value = True
            elif self._fill_unset:
                result[leaf.key] = self._registry.sentinel
        return dict(result), has_any_value

    def __init__(self, registry: typing.Optional[FieldRegistry] = None, fill_unset: bool = False):
        self._registry = resolve_registry(registry)
        self._fill_unset = fill_unset


_default_flattener = RestrictionFlattener()


def flatten(
    restriction: typing.Optional[AttributeGroup],
) -> typing.Tuple[typing.Dict[str, str], bool]:
    """
    Flattens ``restriction`` with the default registry.

    :param restriction: the restriction, or :py:const:`None`.
    :return: the flat map and whether any leaf was set.
    """
    return _default_flattener(restriction)
