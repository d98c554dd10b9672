"""
Drive array commands — create, edit, list, delete, get

Drive arrays belong to an infrastructure and may be attached to an
instance array. Every id-or-label flag (-infra, -ia, -id, -template)
accepts either a numeric ID or a label; labels cost one extra lookup.
"""

import dataclasses
from dataclasses import dataclass
from typing import List, Optional

from ..client.models import DriveArray, DriveArrayOperation, Infrastructure, InstanceArray
from ..core import confirmation_prompt, get_entity, require_confirmation, resolve_id
from ..output import FieldType, SchemaField, Table, TableSorter
from .arguments import UNSET, flag, option
from .common import autoconfirm_flag, format_option, render, return_id_flag
from .registry import CommandContext, CommandDescriptor

SUBJECT = "drive-array"
ALT_SUBJECT = "da"

INFRA_HELP = (
    "Infrastructure's id or label. Note that the 'label' may be ambiguous in certain situations."
)
DRIVE_ARRAY_HELP = (
    "Drive Array's ID or label. Note that using the label can be ambiguous and is slower."
)
IA_HELP = (
    "The id or label of the instance array it is attached to. "
    "It can be zero for unattached Drive Arrays"
)
TEMPLATE_HELP = "DriveArrays's volume template to clone when creating Drives"


# =============================================================================
# Lookups
# =============================================================================

def resolve_infrastructure(ctx: CommandContext, token: str) -> Infrastructure:
    return get_entity(
        token,
        ctx.client.infrastructure_get,
        ctx.client.infrastructure_get_by_label,
        kind="infrastructure",
    )


def resolve_instance_array_id(ctx: CommandContext, token: str) -> int:
    def lookup(label: str) -> Optional[int]:
        ia = ctx.client.instance_array_get_by_label(label)
        return ia.instance_array_id if ia is not None else None

    return resolve_id(token, lookup, kind="instance array")


def resolve_volume_template_id(ctx: CommandContext, token: str) -> int:
    def lookup(label: str) -> Optional[int]:
        vt = ctx.client.volume_template_get_by_label(label)
        return vt.volume_template_id if vt is not None else None

    return resolve_id(token, lookup, kind="volume template")


def resolve_drive_array(ctx: CommandContext, token: str) -> DriveArray:
    return get_entity(
        token,
        ctx.client.drive_array_get,
        ctx.client.drive_array_get_by_label,
        kind="drive array",
    )


def pending_operation(da: DriveArray) -> DriveArrayOperation:
    """The drive array's operation object, or one mirroring its current state."""
    if da.drive_array_operation is not None:
        return da.drive_array_operation
    return DriveArrayOperation(
        drive_array_id=da.drive_array_id,
        drive_array_label=da.drive_array_label,
        drive_array_storage_type=da.drive_array_storage_type,
        drive_array_count=da.drive_array_count,
        drive_size_mbytes_default=da.drive_size_mbytes_default,
        drive_array_expand_with_instance_array=da.drive_array_expand_with_instance_array,
        instance_array_id=da.instance_array_id,
        volume_template_id=da.volume_template_id,
    )


def display_status(da: DriveArray) -> str:
    """Service status, showing pending not-yet-deployed edits and deletes."""
    operation = da.drive_array_operation
    if da.drive_array_service_status == "ordered" or operation is None:
        return da.drive_array_service_status
    if operation.drive_array_deploy_status != "not_started":
        return da.drive_array_service_status
    if operation.drive_array_deploy_type == "edit":
        return "edited"
    if operation.drive_array_deploy_type == "delete":
        return "marked for delete"
    return da.drive_array_service_status


# =============================================================================
# create
# =============================================================================

@dataclass
class CreateArgs:
    infra: str = option("-infra", required=True, help=INFRA_HELP)
    ia: Optional[str] = option("-ia", help=IA_HELP)
    label: str = option("-label", required=True, help="The label of the drive array")
    type: Optional[str] = option("-type", help="Possible values: iscsi_ssd, iscsi_hdd")
    size: Optional[int] = option("-size", int, help="Drive arrays's size in MBytes")
    count: Optional[int] = option(
        "-count", int, help="DriveArrays's drive count. Use this only for unconnected DriveArrays."
    )
    no_expand_with_ia: bool = flag(
        "-no-expand-with-ia",
        help="If set, auto-expand when the connected instance array expands is disabled",
    )
    template: Optional[str] = option("-template", help=TEMPLATE_HELP)
    return_id: bool = return_id_flag()


def create_drive_array(args: CreateArgs, ctx: CommandContext) -> str:
    infrastructure = resolve_infrastructure(ctx, args.infra)

    da = DriveArray(
        drive_array_label=args.label,
        drive_array_expand_with_instance_array=not args.no_expand_with_ia,
    )
    if args.type is not None:
        da.drive_array_storage_type = args.type
    if args.size is not None:
        da.drive_size_mbytes_default = args.size
    if args.count is not None:
        da.drive_array_count = args.count
    if args.ia is not None:
        da.instance_array_id = resolve_instance_array_id(ctx, args.ia)
    if args.template is not None:
        da.volume_template_id = resolve_volume_template_id(ctx, args.template)

    created = ctx.client.drive_array_create(infrastructure.infrastructure_id, da)

    if args.return_id:
        return str(created.drive_array_id)
    return ""


# =============================================================================
# edit
# =============================================================================

@dataclass
class EditArgs:
    id: str = option("-id", required=True, help=DRIVE_ARRAY_HELP)
    ia: Optional[str] = option("-ia", help=IA_HELP)
    label: Optional[str] = option("-label", help="The label of the drive array")
    type: Optional[str] = option("-type", help="Possible values: iscsi_ssd, iscsi_hdd")
    size: Optional[int] = option("-size", int, help="Drive arrays's size in MBytes")
    count: Optional[int] = option(
        "-count", int, help="DriveArrays's drive count. Use this only for unconnected DriveArrays."
    )
    expand_with_ia: Optional[bool] = flag(
        "-expand-with-ia",
        default=UNSET,
        help="Auto-expand when the connected instance array expands",
    )
    template: Optional[str] = option("-template", help=TEMPLATE_HELP)


def edit_drive_array(args: EditArgs, ctx: CommandContext) -> str:
    da = resolve_drive_array(ctx, args.id)
    operation = dataclasses.replace(pending_operation(da))

    if args.ia is not None:
        operation.instance_array_id = resolve_instance_array_id(ctx, args.ia)
    if args.template is not None:
        operation.volume_template_id = resolve_volume_template_id(ctx, args.template)
    if args.label is not None:
        operation.drive_array_label = args.label
    if args.type is not None:
        operation.drive_array_storage_type = args.type
    if args.count is not None:
        operation.drive_array_count = args.count
    if args.size is not None:
        operation.drive_size_mbytes_default = args.size
    if args.expand_with_ia is not None:
        operation.drive_array_expand_with_instance_array = args.expand_with_ia

    ctx.client.drive_array_edit(da.drive_array_id, operation)
    return ""


# =============================================================================
# list
# =============================================================================

DRIVE_ARRAY_SCHEMA = [
    SchemaField("ID", FieldType.INT, 6),
    SchemaField("LABEL", FieldType.STRING, 30),
    SchemaField("STATUS", FieldType.STRING, 10),
    SchemaField("SIZE (MB)", FieldType.INT, 10),
    SchemaField("TYPE", FieldType.STRING, 10),
    SchemaField("ATTACHED TO", FieldType.STRING, 30),
    SchemaField("DRV_CNT", FieldType.INT, 10),
    SchemaField("TEMPLATE", FieldType.STRING, 25),
]


@dataclass
class ListArgs:
    infra: str = option("-infra", required=True, help=INFRA_HELP)
    format: str = format_option()


def list_drive_arrays(args: ListArgs, ctx: CommandContext) -> str:
    client = ctx.client

    def lookup(label: str) -> Optional[int]:
        infrastructure = client.infrastructure_get_by_label(label)
        return infrastructure.infrastructure_id if infrastructure is not None else None

    infrastructure_id = resolve_id(args.infra, lookup, kind="infrastructure")

    data: List[list] = []
    for da in client.drive_arrays(infrastructure_id).values():
        operation = pending_operation(da)

        template = ""
        if operation.volume_template_id:
            vt = client.volume_template_get(operation.volume_template_id)
            template = f"{vt.volume_template_display_name} (#{vt.volume_template_id})"

        attached_to = ""
        if operation.instance_array_id:
            ia = client.instance_array_get(int(operation.instance_array_id))
            attached_to = f"{ia.instance_array_label} (#{ia.instance_array_id})"

        data.append([
            da.drive_array_id,
            operation.drive_array_label,
            display_status(da),
            operation.drive_size_mbytes_default,
            operation.drive_array_storage_type,
            attached_to,
            operation.drive_array_count,
            template,
        ])

    TableSorter(DRIVE_ARRAY_SCHEMA).order_by("ID").sort(data)

    return render(ctx, Table(DRIVE_ARRAY_SCHEMA, data), "Drive Arrays", "", args.format)


# =============================================================================
# delete
# =============================================================================

@dataclass
class DeleteArgs:
    id: str = option("-id", required=True, help=DRIVE_ARRAY_HELP)
    autoconfirm: bool = autoconfirm_flag()


def delete_drive_array(args: DeleteArgs, ctx: CommandContext) -> str:
    client = ctx.client
    da = resolve_drive_array(ctx, args.id)

    instance_array: Optional[InstanceArray] = None
    if da.instance_array_id:
        instance_array = client.instance_array_get(da.instance_array_id)

    infrastructure = client.infrastructure_get(da.infrastructure_id)

    def message() -> str:
        if instance_array is not None:
            attachment = (
                f"attached to instance array ({instance_array.instance_array_label}, "
                f"{instance_array.instance_array_id})"
            )
        else:
            attachment = "unattached"
        return confirmation_prompt(
            f"Deleting drive array {da.drive_array_label} ({da.drive_array_id}), {attachment} - "
            f"from infrastructure {infrastructure.infrastructure_label} "
            f"({infrastructure.infrastructure_id})."
        )

    require_confirmation(ctx.io, args.autoconfirm, message)

    client.drive_array_delete(da.drive_array_id)
    return ""


# =============================================================================
# get
# =============================================================================

DRIVE_SCHEMA = [
    SchemaField("ID", FieldType.INT, 6),
    SchemaField("LABEL", FieldType.STRING, 30),
    SchemaField("STATUS", FieldType.STRING, 10),
    SchemaField("SIZE (MB)", FieldType.INT, 10),
    SchemaField("TYPE", FieldType.STRING, 10),
    SchemaField("ATTACHED TO", FieldType.STRING, 30),
    SchemaField("TEMPLATE", FieldType.STRING, 25),
    SchemaField("DETAILS", FieldType.STRING, 25),
]

CREDENTIALS_FIELD = SchemaField("CREDENTIALS", FieldType.STRING, 5)


@dataclass
class GetArgs:
    id: str = option("-id", required=True, help=DRIVE_ARRAY_HELP)
    show_iscsi_credentials: bool = flag(
        "-show-iscsi-credentials", help="If set returns the drives' iscsi credentials"
    )
    format: str = format_option()


def get_drive_array(args: GetArgs, ctx: CommandContext) -> str:
    client = ctx.client
    da = resolve_drive_array(ctx, args.id)

    schema = list(DRIVE_SCHEMA)
    if args.show_iscsi_credentials:
        schema.append(CREDENTIALS_FIELD)

    data: List[list] = []
    for drive in client.drive_array_drives(da.drive_array_id).values():
        template = ""
        if drive.template_id_origin:
            vt = client.volume_template_get(drive.template_id_origin)
            template = f"{vt.volume_template_display_name}(#{vt.volume_template_id})"

        details = []
        if drive.drive_operating_system is not None:
            details.append(drive.drive_operating_system.operating_system_type)
        if drive.drive_filesystem is not None:
            details.append(drive.drive_filesystem.drive_filesystem_type)

        row = [
            drive.drive_id,
            drive.drive_label,
            drive.drive_service_status,
            drive.drive_size_mbytes,
            drive.drive_storage_type,
            f"instance-{drive.instance_id}" if drive.instance_id else "",
            template,
            " ".join(details),
        ]

        if args.show_iscsi_credentials:
            iscsi = drive.drive_credentials.iscsi if drive.drive_credentials else None
            if iscsi is not None:
                row.append(
                    f"Target: {iscsi.storage_ip_address} Port:{iscsi.storage_port} "
                    f"IQN:{iscsi.target_iqn} LUN ID:{iscsi.lun_id}"
                )
            else:
                row.append("")

        data.append(row)

    subtitle = f"Drive Array #{da.drive_array_id}"
    if da.instance_array_id:
        subtitle += f" attached to instance array {da.instance_array_id}"
    subtitle += " has the following drives:"

    TableSorter(schema).order_by("ID").sort(data)

    return render(ctx, Table(schema, data), "Drives", subtitle, args.format)


COMMANDS = (
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="create", alt_predicate="new",
        description="Creates a drive array.",
        arguments_type=CreateArgs,
        execute=create_drive_array,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="edit", alt_predicate="alter",
        description="Edit a drive array.",
        arguments_type=EditArgs,
        execute=edit_drive_array,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="list", alt_predicate="ls",
        description="Lists all drive arrays of an infrastructure.",
        arguments_type=ListArgs,
        execute=list_drive_arrays,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="delete", alt_predicate="rm",
        description="Delete a drive array.",
        arguments_type=DeleteArgs,
        execute=delete_drive_array,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="get", alt_predicate="show",
        description="Gets a drive array.",
        arguments_type=GetArgs,
        execute=get_drive_array,
    ),
)
