"""
Arguments — Typed command arguments bound from command-line flags

A command declares its arguments as a dataclass whose fields are built
with option() and flag():

    @dataclass
    class DeleteArgs:
        subnet_pool_id: int = option("-id", int, required=True, help="Subnet pool's ID")
        autoconfirm: bool = flag("-autoconfirm", help="Assume action is confirmed")

bind_arguments() builds an argparse parser from those fields, parses the
tokens and returns a fresh dataclass instance. Flags are accepted with
one or two leading dashes (-id, --id). Optional arguments that were not
supplied come out as None.
"""

import argparse
import dataclasses
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..errors import InvalidArgument, MissingArgument


class _Unset:
    """Marker for 'no default value'."""

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset()

_METADATA_KEY = "argument"


@dataclass(frozen=True)
class ArgumentSpec:
    """
    One command-line argument, derived from an arguments dataclass field.

    Attributes:
        name: Dataclass field name
        flag: Flag as shown to the operator (e.g. "-id")
        kind: str, int or bool
        default: Default value, or UNSET
        required: Whether the command refuses to run without it
        help: One-line description
        metavar: Placeholder shown in usage
    """
    name: str
    flag: str
    kind: type = str
    default: Any = UNSET
    required: bool = False
    help: str = ""
    metavar: Optional[str] = None

    @property
    def option_strings(self) -> List[str]:
        bare = self.flag.lstrip("-")
        return [f"-{bare}", f"--{bare}"]

    @property
    def negated_option_strings(self) -> List[str]:
        bare = self.flag.lstrip("-")
        return [f"-no-{bare}", f"--no-{bare}"]


def option(
    flag: str,
    kind: type = str,
    required: bool = False,
    default: Any = UNSET,
    help: str = "",
    metavar: Optional[str] = None
):
    """Declare a valued argument on an arguments dataclass."""
    metadata = {
        _METADATA_KEY: {
            "flag": flag,
            "kind": kind,
            "required": required,
            "default": default,
            "help": help,
            "metavar": metavar,
        }
    }
    return field(default=None if default is UNSET else default, metadata=metadata)


def flag(flag: str, help: str = "", default: Any = False):
    """
    Declare a boolean switch.

    With default False the flag simply turns the switch on. Any other
    default (True, or UNSET for "leave unchanged") also accepts the
    -no-<name> and --no-<name> spellings.
    """
    return option(flag, bool, default=default, help=help)


def argument_specs(arguments_type: type) -> List[ArgumentSpec]:
    """Derive the ArgumentSpec list of an arguments dataclass, in field order."""
    specs = []
    for f in dataclasses.fields(arguments_type):
        meta = f.metadata.get(_METADATA_KEY)
        if meta is None:
            continue
        specs.append(ArgumentSpec(name=f.name, **meta))
    return specs


class CommandArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of exiting and only accepts exact flags."""

    def _get_option_tuples(self, option_string):
        # allow_abbrev=False still prefix-matches single-dash flags
        return []

    def error(self, message):
        raise InvalidArgument(message, hint=f"Run '{self.prog} -h' for usage")


def build_argument_parser(
    arguments_type: type,
    prog: str,
    description: str = "",
    epilog: str = ""
) -> argparse.ArgumentParser:
    """
    Build the argparse parser for an arguments dataclass.

    Required arguments are not marked required in argparse; the binder
    checks them itself so the error names the flag.
    """
    parser = CommandArgumentParser(
        prog=prog,
        description=description,
        epilog=epilog,
        add_help=False,
        allow_abbrev=False,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    for spec in argument_specs(arguments_type):
        help_text = spec.help
        if spec.required:
            help_text = f"(Required) {help_text}"
        default = None if spec.default is UNSET else spec.default

        if spec.kind is bool:
            parser.add_argument(
                *spec.option_strings,
                dest=spec.name,
                action="store_const",
                const=True,
                default=default,
                help=help_text,
            )
            if spec.default is not False:
                parser.add_argument(
                    *spec.negated_option_strings,
                    dest=spec.name,
                    action="store_const",
                    const=False,
                    default=default,
                    help=f"Opposite of {spec.flag}",
                )
        else:
            parser.add_argument(
                *spec.option_strings,
                dest=spec.name,
                type=spec.kind,
                default=default,
                metavar=spec.metavar or spec.name.upper(),
                help=help_text,
            )

    return parser


def bind_arguments(descriptor, tokens: Sequence[str]):
    """
    Parse flag tokens into a fresh instance of the command's arguments dataclass.

    Args:
        descriptor: CommandDescriptor being invoked
        tokens: Flag tokens following subject and predicate

    Returns:
        Arguments dataclass instance

    Raises:
        InvalidArgument: Unknown flag, missing flag value or unconvertible value
        MissingArgument: A required flag was not supplied
    """
    parser = build_argument_parser(descriptor.arguments_type, prog=descriptor.prog)
    namespace = parser.parse_args(list(tokens))

    for spec in argument_specs(descriptor.arguments_type):
        if spec.required and getattr(namespace, spec.name) is None:
            raise MissingArgument(spec.flag, hint=f"Run '{descriptor.prog} -h' for usage")

    return descriptor.arguments_type(**vars(namespace))
