"""
Network profile commands — list, vlan-list, get, create, delete, associate, remove

A network profile describes the VLANs (and their subnet pools and
external connections) an instance array gets on one of its networks.
"""

from dataclasses import dataclass
from typing import List, Optional

from ..client.models import NetworkProfile, NetworkProfileVLAN
from ..core import confirmation_prompt, read_raw_object, require_confirmation
from ..output import FieldType, SchemaField, Table, TableSorter, render_raw_object
from .arguments import flag, option
from .common import (
    INPUT_FORMAT_HELP, autoconfirm_flag, format_option, render, render_folded, return_id_flag,
)
from .registry import CommandContext, CommandDescriptor

SUBJECT = "network-profile"
ALT_SUBJECT = "np"

CREATE_EXAMPLE = """\
#create file network-profile.yaml:
label: internet01
dc: us02-chi-qts01-dc
networkType: wan
vlans:
- vlanID: null
  portMode: native
  provisionSubnetGateways: false
  extConnectionIDs:
   - 10
  subnetPools:
  - subnetPoolID: 13
    subnetPoolType: ipv4
- vlanID: 3205
  portMode: trunk
  provisionSubnetGateways: false
  extConnectionIDs: []

#create the actual profile from the file:
metalcloud-cli network-profile create -datacenter us02-chi-qts01-dc -format yaml -raw-config ./network-profile.yaml
"""


def vlan_label(vlan: NetworkProfileVLAN) -> str:
    return "auto" if vlan.vlan_id is None else str(vlan.vlan_id)


def external_connections_text(ctx: CommandContext, vlan: NetworkProfileVLAN) -> List[str]:
    """'label (#id)' for each external connection of a VLAN."""
    names = []
    for connection_id in vlan.external_connection_ids:
        connection = ctx.client.external_connection_get(connection_id)
        names.append(f"{connection.external_connection_label} (#{connection_id})")
    return names


# =============================================================================
# list
# =============================================================================

LIST_SCHEMA = [
    SchemaField("ID", FieldType.INT, 6),
    SchemaField("LABEL", FieldType.STRING, 30),
    SchemaField("NETWORK TYPE", FieldType.STRING, 30),
    SchemaField("VLANs", FieldType.INTERFACE, 30),
    SchemaField("CREATED", FieldType.STRING, 10),
    SchemaField("UPDATED", FieldType.STRING, 10),
]


@dataclass
class ListArgs:
    datacenter: str = option("-datacenter", required=True, help="Network profile datacenter")
    format: str = format_option()


def list_network_profiles(args: ListArgs, ctx: CommandContext) -> str:
    profiles = ctx.client.network_profiles(args.datacenter)

    data: List[list] = []
    for profile in profiles.values():
        vlans = ",".join(
            str(vlan.vlan_id) for vlan in profile.network_profile_vlans if vlan.vlan_id is not None
        )
        data.append([
            profile.network_profile_id,
            profile.network_profile_label,
            profile.network_type,
            vlans,
            profile.network_profile_created_timestamp,
            profile.network_profile_updated_timestamp,
        ])

    TableSorter(LIST_SCHEMA).order_by("ID").sort(data)

    return render(ctx, Table(LIST_SCHEMA, data), "Network Profiles", "", args.format)


# =============================================================================
# vlan-list
# =============================================================================

VLAN_SCHEMA = [
    SchemaField("VLAN", FieldType.STRING, 6),
    SchemaField("Port mode", FieldType.STRING, 6),
    SchemaField("External connections", FieldType.STRING, 6),
    SchemaField("Provision subnet gateways", FieldType.BOOL, 6),
]


@dataclass
class VlanListArgs:
    network_profile_id: int = option("-id", int, required=True, help="Network profile's id.")
    format: str = format_option()


def list_network_profile_vlans(args: VlanListArgs, ctx: CommandContext) -> str:
    profile = ctx.client.network_profile_get(args.network_profile_id)

    data: List[list] = []
    for vlan in profile.network_profile_vlans:
        data.append([
            vlan_label(vlan),
            vlan.port_mode,
            ", ".join(external_connections_text(ctx, vlan)),
            vlan.provision_subnet_gateways,
        ])

    return render_folded(ctx, Table(VLAN_SCHEMA, data), "", "", args.format)


# =============================================================================
# get
# =============================================================================

GET_SCHEMA = [
    SchemaField("ID", FieldType.STRING, 6),
    SchemaField("LABEL", FieldType.STRING, 6),
    SchemaField("DATACENTER", FieldType.STRING, 6),
    SchemaField("DETAILS", FieldType.STRING, 6),
]


@dataclass
class GetArgs:
    network_profile_id: int = option("-id", int, required=True, help="Network profile's id.")
    format: str = format_option()
    raw: bool = flag("-raw", help="If set returns the raw object serialized using specified format")


def vlan_details(ctx: CommandContext, vlan: NetworkProfileVLAN) -> str:
    """One-line description of a VLAN with its connections and subnets."""
    connections = external_connections_text(ctx, vlan)

    subnets = []
    for subnet in vlan.subnet_pools:
        if subnet.subnet_pool_id is None:
            subnets.append(f"auto {subnet.subnet_pool_type}")
            continue
        pool = ctx.client.subnet_pool_get(subnet.subnet_pool_id)
        subnets.append(f"{pool.prefix} (#{pool.subnet_pool_id})")

    details = f"VLAN ID: {vlan_label(vlan)} ({vlan.port_mode})"
    if not vlan.provision_subnet_gateways:
        details += " no GW"
    if connections:
        details += f" EC:[{','.join(connections)}]"
    if subnets:
        details += f" Subnets:[{','.join(subnets)}]"
    return details


def get_network_profile(args: GetArgs, ctx: CommandContext) -> str:
    profile = ctx.client.network_profile_get(args.network_profile_id)

    if args.raw:
        return render_raw_object(profile, args.format, "NetworkProfile")

    details = [vlan_details(ctx, vlan) for vlan in profile.network_profile_vlans]
    data = [[
        f"#{profile.network_profile_id}",
        profile.network_profile_label,
        profile.datacenter_name,
        "\n".join(details),
    ]]

    return render(ctx, Table(GET_SCHEMA, data), "", "", args.format)


# =============================================================================
# create
# =============================================================================

@dataclass
class CreateArgs:
    datacenter: str = option(
        "-datacenter", required=True, help="Label of the datacenter. Also used as an ID."
    )
    format: str = format_option(help=INPUT_FORMAT_HELP, default="json")
    raw_config: Optional[str] = option(
        "-raw-config",
        help="Read configuration from file in the format specified with -format.",
        metavar="PATH",
    )
    pipe: bool = flag(
        "-pipe",
        help="If set, read configuration from pipe instead of from a file. "
             "Either this flag or the -raw-config option must be used.",
    )
    return_id: bool = return_id_flag()


def create_network_profile(args: CreateArgs, ctx: CommandContext) -> str:
    data = read_raw_object(args.raw_config, args.pipe, args.format, ctx.stdin, path_flag="-raw-config")
    created = ctx.client.network_profile_create(args.datacenter, NetworkProfile.from_dict(data))

    if args.return_id:
        return str(created.network_profile_id)
    return ""


# =============================================================================
# delete
# =============================================================================

@dataclass
class DeleteArgs:
    network_profile_id: int = option("-id", int, required=True, help="Network profile's id")
    autoconfirm: bool = autoconfirm_flag()


def delete_network_profile(args: DeleteArgs, ctx: CommandContext) -> str:
    profile = ctx.client.network_profile_get(args.network_profile_id)

    require_confirmation(
        ctx.io,
        args.autoconfirm,
        lambda: confirmation_prompt(
            f"Deleting network profile {profile.network_profile_label} "
            f"({profile.network_profile_id})."
        ),
    )

    ctx.client.network_profile_delete(profile.network_profile_id)
    return ""


# =============================================================================
# associate / remove
# =============================================================================

@dataclass
class AssociateArgs:
    network_profile_id: int = option("-id", int, required=True, help="Network profile's id")
    network_id: int = option("-net", int, required=True, help="Network's id")
    instance_array_id: int = option("-ia", int, required=True, help="Instance array's id")


def associate_network_profile(args: AssociateArgs, ctx: CommandContext) -> str:
    ctx.client.instance_array_network_profile_set(
        args.instance_array_id, args.network_id, args.network_profile_id
    )
    return ""


@dataclass
class RemoveArgs:
    instance_array_id: int = option("-ia", int, required=True, help="Instance array's id")
    network_id: int = option("-net", int, required=True, help="Network's id")


def remove_network_profile(args: RemoveArgs, ctx: CommandContext) -> str:
    ctx.client.instance_array_network_profile_clear(args.instance_array_id, args.network_id)
    return ""


COMMANDS = (
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="list", alt_predicate="ls",
        description="Lists all network profiles.",
        arguments_type=ListArgs,
        execute=list_network_profiles,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="vlan-list", alt_predicate="vlans",
        description="Lists vlans of network profile.",
        arguments_type=VlanListArgs,
        execute=list_network_profile_vlans,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="get", alt_predicate="show",
        description="Get network profile details.",
        arguments_type=GetArgs,
        execute=get_network_profile,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="create", alt_predicate="new",
        description="Create network profile.",
        arguments_type=CreateArgs,
        execute=create_network_profile,
        example=CREATE_EXAMPLE,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="delete", alt_predicate="rm",
        description="Delete a network profile.",
        arguments_type=DeleteArgs,
        execute=delete_network_profile,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="associate", alt_predicate="assign",
        description="Add a network profile to an instance array.",
        arguments_type=AssociateArgs,
        execute=associate_network_profile,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="remove", alt_predicate="unassign",
        description="Remove network profile from an instance array.",
        arguments_type=RemoveArgs,
        execute=remove_network_profile,
    ),
)
