"""
Subnet pool commands — list, get, create, delete

    metalcloud-cli subnet-pool list [-datacenter DC] [-filter EXPR] [-format F]
    metalcloud-cli subnet-pool get -id ID [-raw] [-format F]
    metalcloud-cli subnet-pool create (-config FILE | -pipe) [-format json|yaml] [-return-id]
    metalcloud-cli subnet-pool delete -id ID [-autoconfirm]
"""

from dataclasses import dataclass
from typing import List, Optional

from ..client.models import SubnetPool
from ..core import confirmation_prompt, read_raw_object, require_confirmation
from ..output import FieldType, SchemaField, Table, TableSorter, render_raw_object
from .arguments import flag, option
from .common import (
    INPUT_FORMAT_HELP, autoconfirm_flag, format_option, render, render_transposed, return_id_flag,
)
from .registry import CommandContext, CommandDescriptor

SUBJECT = "subnet-pool"
ALT_SUBJECT = "subnet"

SUBNET_POOL_SCHEMA = [
    SchemaField("ID", FieldType.INT, 6),
    SchemaField("DATACENTER", FieldType.STRING, 6),
    SchemaField("DEST.", FieldType.STRING, 3),
    SchemaField("PREFIX", FieldType.STRING, 10),
    SchemaField("NETWORK_EQUIPMENT", FieldType.STRING, 5),
    SchemaField("USER", FieldType.STRING, 5),
    SchemaField("MANUAL_ONLY", FieldType.BOOL, 3),
    SchemaField("AVAILABLE_IPS", FieldType.STRING, 3),
]


def subnet_pool_row(ctx: CommandContext, pool: SubnetPool) -> list:
    """
    Build a table row for a subnet pool.

    Looks up the owner's email (if owned), the address utilization and
    the switch identifier (if bound to one). Any failed lookup aborts.
    """
    client = ctx.client

    user_email = ""
    if pool.user_id:
        user_email = client.user_get(pool.user_id).user_email

    utilization = client.subnet_pool_prefix_sizes_stats(pool.subnet_pool_id)
    available = (
        f"{utilization.ip_addresses_usable_count_free} "
        f"({utilization.ip_addresses_usable_free_percent_optimistic}%)"
    )

    network_equipment = ""
    if pool.network_equipment_id:
        switch = client.switch_device_get(pool.network_equipment_id, False)
        network_equipment = switch.network_equipment_identifier_string

    return [
        pool.subnet_pool_id,
        pool.datacenter_name,
        pool.subnet_pool_destination,
        pool.prefix,
        network_equipment,
        user_email,
        pool.subnet_pool_is_only_for_manual_allocation,
        available,
    ]


# =============================================================================
# list
# =============================================================================

@dataclass
class ListArgs:
    format: str = format_option()
    filter: str = option("-filter", default="*", help="Filter to restrict the results. Defaults to '*'")
    datacenter: Optional[str] = option(
        "-datacenter",
        help="Quick filter to restrict the results to show only the subnets of a datacenter.",
    )


def list_subnet_pools(args: ListArgs, ctx: CommandContext) -> str:
    search = args.filter
    if args.datacenter is not None:
        search = f"datacenter_name: {args.datacenter} {search}"

    pools = ctx.client.subnet_pool_search(search)

    data: List[list] = [subnet_pool_row(ctx, pool) for pool in pools]

    TableSorter(SUBNET_POOL_SCHEMA).order_by("ID", "DATACENTER", "DEST.").sort(data)

    return render(ctx, Table(SUBNET_POOL_SCHEMA, data), "Subnet pools", "", args.format)


# =============================================================================
# get
# =============================================================================

@dataclass
class GetArgs:
    subnet_pool_id: int = option("-id", int, required=True, help="Subnet pool's id")
    format: str = format_option()
    raw: bool = flag(
        "-raw",
        help="When set the return will be a full dump of the object. "
             "This is useful when copying configurations. Only works with json and yaml formats.",
    )


def get_subnet_pool(args: GetArgs, ctx: CommandContext) -> str:
    pool = ctx.client.subnet_pool_get(args.subnet_pool_id)

    if args.raw:
        return render_raw_object(pool, args.format, "SubnetPool")

    table = Table(SUBNET_POOL_SCHEMA, [subnet_pool_row(ctx, pool)])
    return render_transposed(ctx, table, "subnet pool", "", args.format)


# =============================================================================
# create
# =============================================================================

@dataclass
class CreateArgs:
    format: str = format_option(help=INPUT_FORMAT_HELP, default="json")
    config: Optional[str] = option("-config", help="Read configuration from file", metavar="PATH")
    pipe: bool = flag(
        "-pipe",
        help="If set, read configuration from pipe instead of from a file. "
             "Either this flag or the -config option must be used.",
    )
    return_id: bool = return_id_flag()


def create_subnet_pool(args: CreateArgs, ctx: CommandContext) -> str:
    data = read_raw_object(args.config, args.pipe, args.format, ctx.stdin)
    created = ctx.client.subnet_pool_create(SubnetPool.from_dict(data))

    if args.return_id:
        return str(created.subnet_pool_id)
    return ""


# =============================================================================
# delete
# =============================================================================

@dataclass
class DeleteArgs:
    subnet_pool_id: int = option("-id", int, required=True, help="Subnet pool's id")
    autoconfirm: bool = autoconfirm_flag()


def delete_subnet_pool(args: DeleteArgs, ctx: CommandContext) -> str:
    pool = ctx.client.subnet_pool_get(args.subnet_pool_id)

    require_confirmation(
        ctx.io,
        args.autoconfirm,
        lambda: confirmation_prompt(
            f"Deleting subnet {pool.prefix} ({pool.subnet_pool_id})."
        ),
    )

    ctx.client.subnet_pool_delete(pool.subnet_pool_id)
    return ""


COMMANDS = (
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="list", alt_predicate="ls",
        description="Lists subnets",
        arguments_type=ListArgs,
        execute=list_subnet_pools,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="get", alt_predicate="show",
        description="Get a subnet pool.",
        arguments_type=GetArgs,
        execute=get_subnet_pool,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="create", alt_predicate="new",
        description="Create a subnet pool.",
        arguments_type=CreateArgs,
        execute=create_subnet_pool,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="delete", alt_predicate="rm",
        description="Delete a subnet pool.",
        arguments_type=DeleteArgs,
        execute=delete_subnet_pool,
    ),
)
