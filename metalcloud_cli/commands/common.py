"""
Common — Flags and rendering helpers shared by resource commands
"""

from ..output import Table
from .arguments import flag, option
from .registry import CommandContext

FORMAT_HELP = (
    "The output format. Supported values are 'json','csv','yaml'. "
    "The default format is human readable."
)

INPUT_FORMAT_HELP = "The input format. Supported values are 'json','yaml'. The default format is json."


def format_option(help: str = FORMAT_HELP, default: str = ""):
    return option("-format", default=default, help=help)


def autoconfirm_flag():
    return flag("-autoconfirm", help="If set it will assume action is confirmed")


def return_id_flag():
    return flag("-return-id", help="If set will print the ID of the created object. Useful for automating tasks.")


def render(ctx: CommandContext, table: Table, title: str, subtitle: str, format: str) -> str:
    """Render a table with the invocation's width and symbols."""
    return table.render_table(title, subtitle, format, width=ctx.width, symbols=ctx.symbols)


def render_folded(ctx: CommandContext, table: Table, title: str, subtitle: str, format: str) -> str:
    """Render a table, wrapping over-wide cells."""
    return table.render_table_foldable(title, subtitle, format, width=ctx.width, symbols=ctx.symbols)


def render_transposed(ctx: CommandContext, table: Table, title: str, subtitle: str, format: str) -> str:
    return table.render_transposed_table(title, subtitle, format, symbols=ctx.symbols)
