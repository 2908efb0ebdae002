"""
:py:mod:`restriction_serde.registry` holds the table that correlates every flat key
with the position of its leaf within a :py:class:`~restriction_serde.models.ResourceNameRestriction`.

Both the flattener and the unflattener walk the same :py:class:`FieldRegistry`, so
a key name is declared once. Adding a leaf means adding one :py:class:`LeafDescriptor`
to :py:data:`DEFAULT_LEAVES`; adding a group means one more entry in
:py:data:`DEFAULT_GROUPS`.
"""

import dataclasses
import types
import typing
from collections import OrderedDict

from .exceptions import DuplicateKeyError, InvalidDeclarationError
from .models import (
    RESOURCE_UNSET,
    AttributeGroup,
    CloudApiKeyAttributes,
    CloudAttributes,
    CommonAttributes,
    PulsarAttributes,
    PulsarSubscriptionAttributes,
    PulsarTopicAttributes,
    ResourceNameRestriction,
)
from .utils import UnsetType
from .utils.formatting import dotted
from .utils.types import FlatMap, GroupPath


@dataclasses.dataclass(frozen=True)
class LeafDescriptor:
    """
    :param Tuple[str, ...] path: the attribute names leading from the root to the leaf.
    :param str description: a human readable description of the leaf.
    :param Optional[str] key: the flat key. Defaults to the path joined with underscores.
    """

    path: GroupPath
    description: str = ""
    key: str = ""

    @property
    def name(self) -> str:
        return self.path[-1]

    @property
    def group_path(self) -> GroupPath:
        return self.path[:-1]

    def __post_init__(self):
        if not self.path:
            raise InvalidDeclarationError("a leaf must have a non-empty path")
        if not self.key:
            object.__setattr__(self, "key", "_".join(self.path))


def _field_names(class_: typing.Type) -> typing.Set[str]:
    return {field.name for field in dataclasses.fields(class_)}


class FieldRegistry:
    """
    An immutable, ordered table of the leaves of a restriction.

    :param Type[AttributeGroup] root: the class of the root group.
    :param Mapping[Tuple[str, ...], Type[AttributeGroup]] groups: the classes of the nested groups keyed by their path.
    :param Iterable[LeafDescriptor] leaves: the leaves, in the order they are flattened.
    """

    _root: typing.Type[AttributeGroup]
    _groups: typing.Mapping[GroupPath, typing.Type[AttributeGroup]]
    _leaves: typing.Tuple[LeafDescriptor, ...]
    _leaves_by_key: typing.Mapping[str, LeafDescriptor]

    @property
    def root(self) -> typing.Type[AttributeGroup]:
        return self._root

    @property
    def sentinel(self) -> str:
        """
        The reserved value that marks an unset leaf in a flat map, always :py:data:`~restriction_serde.models.RESOURCE_UNSET`.
        """
        return RESOURCE_UNSET

    @property
    def leaves(self) -> typing.Sequence[LeafDescriptor]:
        return self._leaves

    @property
    def keys(self) -> typing.Sequence[str]:
        return tuple(self._leaves_by_key.keys())

    @property
    def groups(self) -> typing.Mapping[GroupPath, typing.Type[AttributeGroup]]:
        """
        The mapping of group paths to group classes. The root is registered under ``()``.
        """
        return self._groups

    def group_class(self, path: GroupPath) -> typing.Type[AttributeGroup]:
        return self._groups[path]

    def leaf_for_key(self, key: str) -> typing.Optional[LeafDescriptor]:
        return self._leaves_by_key.get(key)

    def leaves_in_group(self, path: GroupPath) -> typing.Sequence[LeafDescriptor]:
        return tuple(leaf for leaf in self._leaves if leaf.group_path == path)

    def is_unset(self, value: typing.Any) -> bool:
        return value is None or isinstance(value, UnsetType) or value == self.sentinel

    def unknown_keys(self, flat: FlatMap) -> typing.Sequence[str]:
        """
        Returns the keys of ``flat`` the registry does not know about.
        The codec ignores them; callers wanting strictness can reject them on their own.
        """
        return tuple(k for k in flat if k not in self._leaves_by_key)

    def _validate_groups(self) -> None:
        for path, class_ in self._groups.items():
            if not (isinstance(class_, type) and dataclasses.is_dataclass(class_)):
                raise InvalidDeclarationError(f"group {dotted(path)} is not a dataclass: {class_!r}")
            if not path:
                continue
            parent_class = self._groups.get(path[:-1])
            if parent_class is None:
                raise InvalidDeclarationError(
                    f"group {dotted(path)} has no registered parent group {dotted(path[:-1])}"
                )
            if path[-1] not in _field_names(parent_class):
                raise InvalidDeclarationError(
                    f"{parent_class.__name__} has no attribute {path[-1]} for group {dotted(path)}"
                )

    def _validate_leaf(self, leaf: LeafDescriptor) -> None:
        if leaf.path in self._groups:
            raise InvalidDeclarationError(f"leaf {dotted(leaf.path)} is registered as a group")
        class_ = self._groups.get(leaf.group_path)
        if class_ is None:
            raise InvalidDeclarationError(
                f"leaf {dotted(leaf.path)} belongs to an unregistered group {dotted(leaf.group_path)}"
            )
        if leaf.name not in _field_names(class_):
            raise InvalidDeclarationError(
                f"{class_.__name__} has no attribute {leaf.name} for leaf {dotted(leaf.path)}"
            )

    def __init__(
        self,
        root: typing.Type[AttributeGroup],
        groups: typing.Mapping[GroupPath, typing.Type[AttributeGroup]],
        leaves: typing.Iterable[LeafDescriptor],
    ):
        self._root = root
        groups_: typing.MutableMapping[GroupPath, typing.Type[AttributeGroup]] = OrderedDict(
            [((), root)]
        )
        groups_.update(groups)
        self._groups = types.MappingProxyType(groups_)
        self._leaves = tuple(leaves)

        leaves_by_key: typing.MutableMapping[str, LeafDescriptor] = OrderedDict()
        duplicates: typing.List[str] = []
        for leaf in self._leaves:
            if leaf.key in leaves_by_key:
                if leaf.key not in duplicates:
                    duplicates.append(leaf.key)
                continue
            leaves_by_key[leaf.key] = leaf
        if duplicates:
            raise DuplicateKeyError(duplicates)
        self._leaves_by_key = types.MappingProxyType(leaves_by_key)

        self._validate_groups()
        for leaf in self._leaves:
            self._validate_leaf(leaf)


DEFAULT_GROUPS: typing.Mapping[GroupPath, typing.Type[AttributeGroup]] = OrderedDict(
    [
        (("common",), CommonAttributes),
        (("pulsar",), PulsarAttributes),
        (("pulsar", "topic"), PulsarTopicAttributes),
        (("pulsar", "subscription"), PulsarSubscriptionAttributes),
        (("cloud",), CloudAttributes),
        (("cloud", "apikey"), CloudApiKeyAttributes),
    ]
)

_DESCRIPTION_PREFIX = "The conditional role binding resource name - "

DEFAULT_LEAVES: typing.Sequence[LeafDescriptor] = (
    LeafDescriptor(("common", "organization"), _DESCRIPTION_PREFIX + "organization"),
    LeafDescriptor(("common", "instance"), _DESCRIPTION_PREFIX + "instance"),
    LeafDescriptor(("common", "cluster"), _DESCRIPTION_PREFIX + "cluster"),
    LeafDescriptor(("common", "tenant"), _DESCRIPTION_PREFIX + "tenant"),
    LeafDescriptor(("common", "namespace"), _DESCRIPTION_PREFIX + "namespace"),
    LeafDescriptor(("common", "topic"), _DESCRIPTION_PREFIX + "topic name"),
    LeafDescriptor(
        ("pulsar", "topic", "domain"),
        _DESCRIPTION_PREFIX + "topic domain(persistent/non-persistent)",
    ),
    LeafDescriptor(("pulsar", "subscription", "name"), _DESCRIPTION_PREFIX + "subscription"),
    LeafDescriptor(("cloud", "apikey", "name"), _DESCRIPTION_PREFIX + "api key"),
)

DEFAULT_REGISTRY = FieldRegistry(ResourceNameRestriction, DEFAULT_GROUPS, DEFAULT_LEAVES)


def resolve_registry(registry: typing.Optional[FieldRegistry]) -> FieldRegistry:
    return DEFAULT_REGISTRY if registry is None else registry

