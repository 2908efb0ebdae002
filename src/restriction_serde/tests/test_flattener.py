import pytest

from ..models import (
    RESOURCE_UNSET,
    CloudApiKeyAttributes,
    CloudAttributes,
    CommonAttributes,
    PulsarAttributes,
    PulsarSubscriptionAttributes,
    ResourceNameRestriction,
)
from .testing import FULL_FLAT_MAP, full_restriction


class TestRestrictionFlattener:
    @pytest.fixture
    def target(self):
        from ..flattener import RestrictionFlattener

        return RestrictionFlattener

    def test_full(self, target):
        flat, has_any_value = target()(full_restriction())
        assert has_any_value
        assert flat == FULL_FLAT_MAP
        assert list(flat.keys()) == list(FULL_FLAT_MAP.keys())

    def test_partial(self, target):
        flat, has_any_value = target()(
            ResourceNameRestriction(
                common=CommonAttributes(organization="org-1", namespace="namespace-1"),
                pulsar=PulsarAttributes(
                    subscription=PulsarSubscriptionAttributes(name="subscription-1"),
                ),
            )
        )
        assert has_any_value
        assert flat == {
            "common_organization": "org-1",
            "common_namespace": "namespace-1",
            "pulsar_subscription_name": "subscription-1",
        }

    def test_empty_string_is_a_value(self, target):
        flat, has_any_value = target()(
            ResourceNameRestriction(common=CommonAttributes(topic=""))
        )
        assert has_any_value
        assert flat == {"common_topic": ""}

    @pytest.mark.parametrize(
        "restriction",
        [
            None,
            ResourceNameRestriction(),
            ResourceNameRestriction(common=CommonAttributes()),
            ResourceNameRestriction(cloud=CloudAttributes()),
            ResourceNameRestriction(cloud=CloudAttributes(apikey=CloudApiKeyAttributes())),
        ],
    )
    def test_nothing_set(self, target, restriction):
        flat, has_any_value = target()(restriction)
        assert not has_any_value
        assert flat == {}

    def test_fill_unset(self, target):
        flat, has_any_value = target(fill_unset=True)(
            ResourceNameRestriction(common=CommonAttributes(cluster="cluster-1"))
        )
        assert has_any_value
        assert flat == {
            "common_organization": RESOURCE_UNSET,
            "common_instance": RESOURCE_UNSET,
            "common_cluster": "cluster-1",
            "common_tenant": RESOURCE_UNSET,
            "common_namespace": RESOURCE_UNSET,
            "common_topic": RESOURCE_UNSET,
            "pulsar_topic_domain": RESOURCE_UNSET,
            "pulsar_subscription_name": RESOURCE_UNSET,
            "cloud_apikey_name": RESOURCE_UNSET,
        }

    def test_fill_unset_nothing_set(self, target):
        flat, has_any_value = target(fill_unset=True)(None)
        assert not has_any_value
        assert set(flat.values()) == {RESOURCE_UNSET}
        assert len(flat) == 9


def test_flatten():
    from ..flattener import flatten

    assert flatten(full_restriction()) == (FULL_FLAT_MAP, True)
    assert flatten(None) == ({}, False)


def test_presence_agrees_with_unflattener():
    from ..flattener import flatten
    from ..unflattener import unflatten
    from ..utils import UNSET

    common = CommonAttributes(tenant="tenant-1")
    # bypasses the constructor check to reach the flattener with an unset marker in a leaf
    object.__setattr__(common, "organization", UNSET)
    flat, flattened_any = flatten(ResourceNameRestriction(common=common))
    assert flat == {"common_tenant": "tenant-1"}
    restriction, unflattened_any = unflatten(flat)
    assert flattened_any == unflattened_any
    assert restriction == ResourceNameRestriction(common=CommonAttributes(tenant="tenant-1"))

    flat, flattened_any = flatten(
        ResourceNameRestriction(cloud=CloudAttributes(apikey=CloudApiKeyAttributes(name="")))
    )
    assert flat == {"cloud_apikey_name": ""}
    assert flattened_any == unflatten(flat)[1] is True
