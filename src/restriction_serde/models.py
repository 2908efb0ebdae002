"""
Classes in :py:mod:`restriction_serde.models` describe a resource name restriction,
the nested value that scopes a credential to specific organizations, instances,
tenants, namespaces, topics, subscriptions or API keys.

Every leaf is an optional string and every group is optional. A group is expected
to be present only when at least one of its leaves is; the codec never builds
an empty group.

.. code-block:: python

   restriction = ResourceNameRestriction(
       common=CommonAttributes(organization="org-1", instance="ins-1"),
       cloud=CloudAttributes(apikey=CloudApiKeyAttributes(name="api-key-1")),
   )
"""

import dataclasses
import typing

from .exceptions import InvalidLeafValueError, ReservedValueError

RESOURCE_UNSET = "__RESOURCE_UNSET__"
"""
The reserved flat-map value meaning "the key is present but the leaf is unset".
No leaf of a restriction may take this value.
"""


@dataclasses.dataclass(frozen=True)
class AttributeGroup:
    """
    The base class for every group of a restriction.
    """

    def __post_init__(self):
        for field in dataclasses.fields(self):
            value = getattr(self, field.name)
            if value is None or isinstance(value, AttributeGroup):
                continue
            if not isinstance(value, str):
                raise InvalidLeafValueError(type(self).__name__, field.name, value)
            if value == RESOURCE_UNSET:
                raise ReservedValueError(type(self).__name__, field.name, value)


@dataclasses.dataclass(frozen=True)
class CommonAttributes(AttributeGroup):
    organization: typing.Optional[str] = None
    instance: typing.Optional[str] = None
    cluster: typing.Optional[str] = None
    tenant: typing.Optional[str] = None
    namespace: typing.Optional[str] = None
    topic: typing.Optional[str] = None


@dataclasses.dataclass(frozen=True)
class PulsarTopicAttributes(AttributeGroup):
    domain: typing.Optional[str] = None
    """
    Either ``persistent`` or ``non-persistent``.
    """


@dataclasses.dataclass(frozen=True)
class PulsarSubscriptionAttributes(AttributeGroup):
    name: typing.Optional[str] = None


@dataclasses.dataclass(frozen=True)
class PulsarAttributes(AttributeGroup):
    topic: typing.Optional[PulsarTopicAttributes] = None
    subscription: typing.Optional[PulsarSubscriptionAttributes] = None


@dataclasses.dataclass(frozen=True)
class CloudApiKeyAttributes(AttributeGroup):
    name: typing.Optional[str] = None


@dataclasses.dataclass(frozen=True)
class CloudAttributes(AttributeGroup):
    apikey: typing.Optional[CloudApiKeyAttributes] = None


@dataclasses.dataclass(frozen=True)
class ResourceNameRestriction(AttributeGroup):
    """
    :py:class:`ResourceNameRestriction` is the root of a restriction.

    :param Optional[CommonAttributes] common: names shared by every kind of resource.
    :param Optional[PulsarAttributes] pulsar: Pulsar topic and subscription names.
    :param Optional[CloudAttributes] cloud: cloud API key names.
    """

    common: typing.Optional[CommonAttributes] = None
    pulsar: typing.Optional[PulsarAttributes] = None
    cloud: typing.Optional[CloudAttributes] = None
