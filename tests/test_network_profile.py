"""
Tests for network profile commands
"""

import json

import pytest

from metalcloud_cli.client import (
    ExternalConnection, NetworkProfile, NetworkProfileSubnetPool, NetworkProfileVLAN, SubnetPool,
)
from metalcloud_cli.commands import dispatch
from metalcloud_cli.errors import InvalidArgument, MissingArgument, OperationNotConfirmed


@pytest.fixture
def run(registry, make_ctx):
    """Dispatch a network-profile command and return its output."""
    def _run(*argv, **ctx_kwargs):
        ctx = _run.ctx = make_ctx(**ctx_kwargs)
        return dispatch(registry, ["network-profile", *argv], ctx)
    return _run


@pytest.fixture
def profile():
    return NetworkProfile(
        network_profile_id=7,
        network_profile_label="internet01",
        datacenter_name="uk-reading",
        network_type="wan",
        network_profile_vlans=[
            NetworkProfileVLAN(
                vlan_id=None, port_mode="native", external_connection_ids=[10],
                subnet_pools=[NetworkProfileSubnetPool(subnet_pool_id=13, subnet_pool_type="ipv4")],
            ),
            NetworkProfileVLAN(vlan_id=3205, port_mode="trunk", provision_subnet_gateways=True),
        ],
    )


class TestListNetworkProfiles:
    """network-profile list"""

    def test_rows(self, client, run, profile):
        client.network_profiles.return_value = {7: profile}

        row = json.loads(run("list", "-datacenter", "uk-reading", "-format", "json"))[0]

        assert row["ID"] == 7
        assert row["NETWORK TYPE"] == "wan"
        assert row["VLANs"] == "3205"
        client.network_profiles.assert_called_once_with("uk-reading")

    def test_datacenter_required(self, client, run):
        with pytest.raises(MissingArgument):
            run("ls")


class TestVlanList:
    """network-profile vlan-list"""

    def test_rows(self, client, run, profile):
        client.network_profile_get.return_value = profile
        client.external_connection_get.return_value = ExternalConnection(
            external_connection_id=10, external_connection_label="isp-a"
        )

        rows = json.loads(run("vlans", "-id", "7", "-format", "json"))

        assert rows[0] == {
            "VLAN": "auto",
            "Port mode": "native",
            "External connections": "isp-a (#10)",
            "Provision subnet gateways": False,
        }
        assert rows[1]["VLAN"] == "3205"


class TestGetNetworkProfile:
    """network-profile get"""

    def test_details(self, client, run, profile):
        client.network_profile_get.return_value = profile
        client.external_connection_get.return_value = ExternalConnection(
            external_connection_id=10, external_connection_label="isp-a"
        )
        client.subnet_pool_get.return_value = SubnetPool(
            subnet_pool_id=13, subnet_pool_prefix_human_readable="10.0.0.0", subnet_pool_prefix_size=24
        )

        row = json.loads(run("get", "-id", "7", "-format", "json"))[0]

        assert row["ID"] == "#7"
        assert row["DETAILS"] == (
            "VLAN ID: auto (native) no GW EC:[isp-a (#10)] Subnets:[10.0.0.0/24 (#13)]\n"
            "VLAN ID: 3205 (trunk)"
        )

    def test_auto_subnet(self, client, run):
        client.network_profile_get.return_value = NetworkProfile(
            network_profile_id=1,
            network_profile_vlans=[NetworkProfileVLAN(
                vlan_id=5, port_mode="native", provision_subnet_gateways=True,
                subnet_pools=[NetworkProfileSubnetPool(subnet_pool_id=None, subnet_pool_type="ipv6")],
            )],
        )

        row = json.loads(run("get", "-id", "1", "-format", "json"))[0]

        assert row["DETAILS"] == "VLAN ID: 5 (native) Subnets:[auto ipv6]"
        client.subnet_pool_get.assert_not_called()

    def test_raw_yaml(self, client, run, profile):
        """-raw dumps with the API's key names."""
        client.network_profile_get.return_value = profile

        output = run("show", "-id", "7", "-raw", "-format", "yaml")

        assert "label: internet01" in output
        assert "networkType: wan" in output


class TestCreateNetworkProfile:
    """network-profile create"""

    def test_from_yaml_pipe(self, client, run):
        client.network_profile_create.return_value = NetworkProfile(network_profile_id=21)
        definition = (
            "label: internet01\n"
            "networkType: wan\n"
            "vlans:\n"
            "- vlanID: 3205\n"
            "  portMode: trunk\n"
        )

        output = run(
            "create", "-datacenter", "uk-reading", "-format", "yaml", "-pipe", "-return-id",
            stdin_text=definition,
        )

        assert output == "21"
        datacenter, sent = client.network_profile_create.call_args[0]
        assert datacenter == "uk-reading"
        assert sent.network_profile_label == "internet01"
        assert sent.network_profile_vlans[0].vlan_id == 3205

    def test_raw_config_file(self, client, run, tmp_path):
        path = tmp_path / "np.json"
        path.write_text('{"label": "x"}')
        client.network_profile_create.return_value = NetworkProfile(network_profile_id=21)

        assert run("new", "-datacenter", "dc", "-raw-config", str(path)) == ""

    def test_both_sources(self, client, run, tmp_path):
        path = tmp_path / "np.json"
        path.write_text('{"label": "x"}')

        with pytest.raises(InvalidArgument):
            run("create", "-datacenter", "dc", "-raw-config", str(path), "-pipe", stdin_text="{}")

        client.network_profile_create.assert_not_called()


class TestDeleteNetworkProfile:
    """network-profile delete"""

    def test_confirmed(self, client, run, profile):
        client.network_profile_get.return_value = profile

        run("delete", "-id", "7", answers=["yes"])

        assert run.ctx.io.last_prompt.startswith("Deleting network profile internet01 (7).")
        client.network_profile_delete.assert_called_once_with(7)

    def test_declined(self, client, run, profile):
        client.network_profile_get.return_value = profile

        with pytest.raises(OperationNotConfirmed):
            run("rm", "-id", "7")

        client.network_profile_delete.assert_not_called()


class TestAssociation:
    """network-profile associate / remove"""

    def test_associate(self, client, run):
        run("assign", "-id", "7", "-net", "2", "-ia", "30")
        client.instance_array_network_profile_set.assert_called_once_with(30, 2, 7)

    def test_remove(self, client, run):
        run("unassign", "-ia", "30", "-net", "2")
        client.instance_array_network_profile_clear.assert_called_once_with(30, 2)

    def test_ids_must_be_numeric(self, client, run):
        with pytest.raises(InvalidArgument):
            run("associate", "-id", "web", "-net", "2", "-ia", "30")
