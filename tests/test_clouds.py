import pytest

from landing_zone_designer.addressing import ALLOCATION_RULES
from landing_zone_designer.catalog import REGIONS
from landing_zone_designer.clouds import PROFILES, Cloud, get_profile
from landing_zone_designer.exporters.policies import POLICY_BASELINES


@pytest.mark.parametrize("value, member", [("Azure", Cloud.AZURE), ("AWS", Cloud.AWS), ("GCP", Cloud.GCP)])
def test_parse_known_clouds(value, member):
    assert Cloud.parse(value) is member


@pytest.mark.parametrize("value", ["OtherCloud", "azure", "", None])
def test_parse_unknown_clouds(value):
    assert Cloud.parse(value) is None
    assert get_profile(value) is None


@pytest.mark.parametrize("table", [PROFILES, ALLOCATION_RULES, POLICY_BASELINES, REGIONS])
def test_every_cloud_has_an_entry(table):
    assert set(table) == set(Cloud)


def test_only_azure_has_an_m365_bundle():
    assert [cloud for cloud, profile in PROFILES.items() if "m365" in profile.bundles] == [Cloud.AZURE]
