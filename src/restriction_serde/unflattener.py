"""
:py:mod:`restriction_serde.unflattener` rebuilds a :py:class:`~restriction_serde.models.ResourceNameRestriction`
out of a flat map.

A leaf is unset when its key is missing, or when the key maps to the sentinel,
:py:const:`None` or :py:data:`~restriction_serde.utils.types.UNSET`. A group is built
only when at least one leaf under it is set, so no empty group ever comes out.
Unknown keys are ignored so that maps written by other versions can still be read.
"""

import logging
import typing

from .models import AttributeGroup
from .registry import FieldRegistry, resolve_registry
from .utils.types import FlatMap, GroupPath

logger = logging.getLogger(__name__)


class RestrictionUnflattener:
    _registry: FieldRegistry

    def _collect(
        self, flat: FlatMap
    ) -> typing.Dict[GroupPath, typing.Dict[str, typing.Any]]:
        pending: typing.Dict[GroupPath, typing.Dict[str, typing.Any]] = {}
        for leaf in self._registry.leaves:
            try:
                value = flat[leaf.key]
            except KeyError:
                continue
            if self._registry.is_unset(value):
                continue
            if not isinstance(value, str):
                logger.debug("ignoring non-string value for %s: %r", leaf.key, value)
                continue
            pending.setdefault(leaf.group_path, {})[leaf.name] = value
            # every ancestor of a group with a set leaf has to be built as well
            for i in range(len(leaf.group_path)):
                pending.setdefault(leaf.group_path[:i], {})
        return pending

    def _build(
        self, pending: typing.Dict[GroupPath, typing.Dict[str, typing.Any]]
    ) -> AttributeGroup:
        # children first, so that each group is constructed with its subgroups in place
        for path in sorted(pending, key=len, reverse=True):
            if not path:
                continue
            group = self._registry.group_class(path)(**pending[path])
            pending.setdefault(path[:-1], {})[path[-1]] = group
        return self._registry.root(**pending.get((), {}))

    def __call__(self, flat: typing.Optional[FlatMap]) -> typing.Tuple[AttributeGroup, bool]:
        if not flat:
            return self._registry.root(), False
        if logger.isEnabledFor(logging.DEBUG):
            unknown_keys = self._registry.unknown_keys(flat)
            if unknown_keys:
                logger.debug("ignoring unknown keys: %s", ", ".join(unknown_keys))
        pending = self._collect(flat)
        return self._build(pending), bool(pending)

    def __init__(self, registry: typing.Optional[FieldRegistry] = None):
        self._registry = resolve_registry(registry)


_default_unflattener = RestrictionUnflattener()


def unflatten(flat: typing.Optional[FlatMap]) -> typing.Tuple[AttributeGroup, bool]:
    """
    Unflattens ``flat`` with the default registry.

    :param flat: the flat map, or :py:const:`None`.
    :return: the restriction and whether any leaf was set. The restriction is never
        :py:const:`None`; when nothing is set it has every group absent.
    """
    return _default_unflattener(flat)
