"""
Secret commands — list, create, delete

Secret content is never taken from a flag: it is read from the pipe or
prompted for without echo, and sent base64-encoded.
"""

import base64
from dataclasses import dataclass
from typing import List, Optional

from ..client.models import Secret
from ..core import confirmation_prompt, get_entity, require_confirmation
from ..core.input import read_input_from_pipe
from ..errors import InvalidArgument
from ..output import FieldType, SchemaField, Table, TableSorter
from .arguments import flag, option
from .common import autoconfirm_flag, format_option, render, return_id_flag
from .registry import CommandContext, CommandDescriptor

SUBJECT = "secret"
LIST_SUBJECT = "secrets"
ALT_SUBJECT = "sec"

SECRET_SCHEMA = [
    SchemaField("ID", FieldType.INT, 6),
    SchemaField("NAME", FieldType.STRING, 20),
    SchemaField("USAGE", FieldType.STRING, 20),
    SchemaField("CREATED", FieldType.STRING, 20),
    SchemaField("UPDATED", FieldType.STRING, 20),
]


def find_secret_by_name(ctx: CommandContext, name: str) -> Optional[Secret]:
    """Scan the user's secrets for one with this exact name."""
    for secret in ctx.client.secrets(None).values():
        if secret.secret_name == name:
            return secret
    return None


@dataclass
class ListArgs:
    format: str = format_option()
    usage: Optional[str] = option("-usage", help="Secret's usage")


def list_secrets(args: ListArgs, ctx: CommandContext) -> str:
    secrets = ctx.client.secrets(args.usage)

    data: List[list] = [
        [
            s.secret_id,
            s.secret_name,
            s.secret_usage,
            s.secret_created_timestamp,
            s.secret_updated_timestamp,
        ]
        for s in secrets.values()
    ]

    TableSorter(SECRET_SCHEMA).order_by("ID").sort(data)

    return render(ctx, Table(SECRET_SCHEMA, data), "Secrets", "", args.format)


@dataclass
class CreateArgs:
    name: str = option("-name", required=True, help="Secret's name")
    usage: Optional[str] = option("-usage", help="Secret's usage")
    pipe: bool = flag("-pipe", help="Read secret's content from pipe instead of terminal input")
    return_id: bool = return_id_flag()


def create_secret(args: CreateArgs, ctx: CommandContext) -> str:
    if args.pipe:
        content = read_input_from_pipe(ctx.stdin)
    else:
        content = ctx.io.ask_secret("Secret content:")

    if not content:
        raise InvalidArgument("Content cannot be empty")

    secret = Secret(
        secret_name=args.name,
        secret_usage=args.usage or "",
        secret_base64=base64.b64encode(content.encode("utf-8")).decode("ascii"),
    )

    created = ctx.client.secret_create(secret)

    if args.return_id:
        return str(created.secret_id)
    return ""


@dataclass
class DeleteArgs:
    id: str = option("-id", required=True, help="Secret's id or name")
    autoconfirm: bool = autoconfirm_flag()


def delete_secret(args: DeleteArgs, ctx: CommandContext) -> str:
    secret = get_entity(
        args.id,
        ctx.client.secret_get,
        lambda name: find_secret_by_name(ctx, name),
        kind="secret",
    )

    require_confirmation(
        ctx.io,
        args.autoconfirm,
        lambda: confirmation_prompt(f"Deleting secret {secret.secret_name} ({secret.secret_id})."),
    )

    ctx.client.secret_delete(secret.secret_id)
    return ""


COMMANDS = (
    CommandDescriptor(
        subject=LIST_SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="list", alt_predicate="ls",
        description="Lists available secrets.",
        arguments_type=ListArgs,
        execute=list_secrets,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="create", alt_predicate="new",
        description="Create secret.",
        arguments_type=CreateArgs,
        execute=create_secret,
    ),
    CommandDescriptor(
        subject=SUBJECT, alt_subject=ALT_SUBJECT,
        predicate="delete", alt_predicate="rm",
        description="Delete a secret.",
        arguments_type=DeleteArgs,
        execute=delete_secret,
    ),
)
