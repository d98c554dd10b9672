"""
Tests for subnet pool commands — list, get, create, delete

All tests run against the mock client; no API endpoint is contacted.
"""

import json

import pytest

from metalcloud_cli.client import SubnetPool, SubnetPoolUtilization, SwitchDevice, User
from metalcloud_cli.commands import dispatch
from metalcloud_cli.errors import InvalidArgument, MissingArgument, OperationNotConfirmed, RemoteError


def utilization(free="250", percent="97.66"):
    return SubnetPoolUtilization(
        ip_addresses_usable_count_free=free,
        ip_addresses_usable_free_percent_optimistic=percent,
    )


@pytest.fixture
def run(registry, make_ctx):
    """Dispatch a subnet-pool command and return its output."""
    def _run(*argv, **ctx_kwargs):
        ctx = _run.ctx = make_ctx(**ctx_kwargs)
        return dispatch(registry, ["subnet-pool", *argv], ctx)
    return _run


class TestListSubnetPools:
    """subnet-pool list"""

    def test_prefix_column(self, client, run):
        """Rows show the prefix in address/size notation."""
        client.subnet_pool_search.return_value = [
            SubnetPool(subnet_pool_id=10, subnet_pool_prefix_human_readable="asdads", subnet_pool_prefix_size=0)
        ]
        client.subnet_pool_prefix_sizes_stats.return_value = utilization()

        rows = json.loads(run("list", "-format", "json"))

        assert rows[0]["ID"] == 10
        assert rows[0]["PREFIX"] == "asdads/0"
        assert rows[0]["AVAILABLE_IPS"] == "250 (97.66%)"
        client.subnet_pool_search.assert_called_once_with("*")

    def test_datacenter_filter(self, client, run):
        """-datacenter narrows the search expression."""
        client.subnet_pool_search.return_value = []

        run("ls", "-datacenter", "uk-reading", "-filter", "type: ipv4")

        client.subnet_pool_search.assert_called_once_with("datacenter_name: uk-reading type: ipv4")

    def test_enrichment(self, client, run):
        """Owner email and switch identifier are looked up."""
        client.subnet_pool_search.return_value = [
            SubnetPool(subnet_pool_id=1, user_id=5, network_equipment_id=8)
        ]
        client.subnet_pool_prefix_sizes_stats.return_value = utilization()
        client.user_get.return_value = User(user_id=5, user_email="ops@example.com")
        client.switch_device_get.return_value = SwitchDevice(
            network_equipment_id=8, network_equipment_identifier_string="sw-01"
        )

        row = json.loads(run("list", "-format", "json"))[0]

        assert row["USER"] == "ops@example.com"
        assert row["NETWORK_EQUIPMENT"] == "sw-01"
        client.switch_device_get.assert_called_once_with(8, False)

    def test_unowned_pool_skips_lookups(self, client, run):
        client.subnet_pool_search.return_value = [SubnetPool(subnet_pool_id=1)]
        client.subnet_pool_prefix_sizes_stats.return_value = utilization()

        row = json.loads(run("list", "-format", "json"))[0]

        assert row["USER"] == ""
        client.user_get.assert_not_called()
        client.switch_device_get.assert_not_called()

    def test_sorted_by_id(self, client, run):
        client.subnet_pool_search.return_value = [
            SubnetPool(subnet_pool_id=30), SubnetPool(subnet_pool_id=4), SubnetPool(subnet_pool_id=12),
        ]
        client.subnet_pool_prefix_sizes_stats.return_value = utilization()

        rows = json.loads(run("list", "-format", "json"))

        assert [r["ID"] for r in rows] == [4, 12, 30]

    def test_failed_lookup_aborts(self, client, run):
        """A failed enrichment call fails the whole listing."""
        client.subnet_pool_search.return_value = [SubnetPool(subnet_pool_id=1)]
        client.subnet_pool_prefix_sizes_stats.side_effect = RemoteError("boom")

        with pytest.raises(RemoteError):
            run("list")

    def test_human_title(self, client, run):
        client.subnet_pool_search.return_value = []
        assert "Subnet pools" in run("list")

    def test_invalid_format(self, client, run):
        client.subnet_pool_search.return_value = []
        with pytest.raises(InvalidArgument):
            run("list", "-format", "xml")


class TestGetSubnetPool:
    """subnet-pool get"""

    def test_transposed(self, client, run):
        client.subnet_pool_get.return_value = SubnetPool(
            subnet_pool_id=100, subnet_pool_prefix_human_readable="10.0.0.0", subnet_pool_prefix_size=24
        )
        client.subnet_pool_prefix_sizes_stats.return_value = utilization()

        output = run("get", "-id", "100")

        assert "10.0.0.0/24" in output
        assert "AVAILABLE_IPS" in output
        client.subnet_pool_get.assert_called_once_with(100)

    def test_raw_json(self, client, run):
        """-raw dumps the whole object without enrichment."""
        client.subnet_pool_get.return_value = SubnetPool(subnet_pool_id=100, datacenter_name="uk")

        data = json.loads(run("get", "-id", "100", "-raw", "-format", "json"))

        assert data["subnet_pool_id"] == 100
        assert data["datacenter_name"] == "uk"
        client.subnet_pool_prefix_sizes_stats.assert_not_called()

    def test_raw_needs_machine_format(self, client, run):
        client.subnet_pool_get.return_value = SubnetPool(subnet_pool_id=100)
        with pytest.raises(InvalidArgument):
            run("get", "-id", "100", "-raw")


class TestCreateSubnetPool:
    """subnet-pool create"""

    def test_from_pipe(self, client, run):
        client.subnet_pool_create.return_value = SubnetPool(subnet_pool_id=55)

        output = run(
            "create", "-pipe", "-return-id",
            stdin_text='{"datacenter_name": "uk", "subnet_pool_prefix_size": 24}',
        )

        assert output == "55"
        sent = client.subnet_pool_create.call_args[0][0]
        assert sent.datacenter_name == "uk"
        assert sent.subnet_pool_prefix_size == 24

    def test_from_yaml_file(self, client, run, tmp_path):
        path = tmp_path / "pool.yaml"
        path.write_text("datacenter_name: uk\n")
        client.subnet_pool_create.return_value = SubnetPool(subnet_pool_id=55)

        assert run("create", "-config", str(path), "-format", "yaml") == ""
        assert client.subnet_pool_create.call_args[0][0].datacenter_name == "uk"

    def test_no_source(self, client, run):
        with pytest.raises(MissingArgument):
            run("create")
        client.subnet_pool_create.assert_not_called()


class TestDeleteSubnetPool:
    """subnet-pool delete"""

    def test_autoconfirm(self, client, run):
        """-autoconfirm deletes without prompting."""
        client.subnet_pool_get.return_value = SubnetPool(subnet_pool_id=100, subnet_pool_prefix_human_readable="asdas")

        assert run("delete", "-id", "100", "-autoconfirm") == ""

        client.subnet_pool_delete.assert_called_once_with(100)
        assert run.ctx.io.prompts == []

    def test_confirmed(self, client, run):
        client.subnet_pool_get.return_value = SubnetPool(
            subnet_pool_id=100, subnet_pool_prefix_human_readable="10.0.0.0", subnet_pool_prefix_size=24
        )

        run("rm", "-id", "100", answers=["yes"])

        assert run.ctx.io.last_prompt.startswith("Deleting subnet 10.0.0.0/24 (100).")
        client.subnet_pool_delete.assert_called_once_with(100)

    def test_declined(self, client, run):
        """Anything but 'yes' leaves the pool alone."""
        client.subnet_pool_get.return_value = SubnetPool(subnet_pool_id=100)

        with pytest.raises(OperationNotConfirmed):
            run("delete", "-id", "100", answers=["y"])

        client.subnet_pool_delete.assert_not_called()

    @pytest.mark.parametrize("token", ["-auto", "-a", "--autoconf"])
    def test_abbreviated_autoconfirm_rejected(self, client, run, token):
        """A truncated -autoconfirm never skips the prompt."""
        client.subnet_pool_get.return_value = SubnetPool(subnet_pool_id=100)

        with pytest.raises(InvalidArgument):
            run("delete", "-id", "100", token)

        client.subnet_pool_delete.assert_not_called()
        assert run.ctx.io.prompts == []

    def test_abbreviated_format_rejected(self, client, run):
        client.subnet_pool_search.return_value = []
        with pytest.raises(InvalidArgument):
            run("list", "-form", "json")

    def test_missing_id(self, client, run):
        with pytest.raises(MissingArgument):
            run("delete")
        client.subnet_pool_get.assert_not_called()
