"""
Commands — Resource command modules with self-registration

Each command module:
1. Defines an arguments dataclass and an execute function per command
2. Exports COMMANDS, a tuple of CommandDescriptor

Registry pattern enables:
- Locality: Flags and output shape live next to the command body
- Open/Closed: Add a resource = add its module to COMMAND_MODULES
- Early failure: Conflicting aliases are caught when the registry is built
"""

import importlib
from typing import List

from .arguments import (
    UNSET, ArgumentSpec, CommandArgumentParser, argument_specs, bind_arguments, build_argument_parser,
    flag, option,
)
from .registry import CommandContext, CommandDescriptor, CommandRegistry, PROGRAM_NAME, dispatch

# Command modules that participate in registration
# Order determines help display order
COMMAND_MODULES = [
    'drive_array',
    'network_profile',
    'secret',
    'subnet_pool',
]


def collect_commands() -> List[CommandDescriptor]:
    """Import each module in COMMAND_MODULES and gather its COMMANDS."""
    descriptors: List[CommandDescriptor] = []
    for module_name in COMMAND_MODULES:
        module = importlib.import_module(f'.{module_name}', __package__)
        descriptors.extend(module.COMMANDS)
    return descriptors


def build_registry() -> CommandRegistry:
    """
    Build the process-wide command registry.

    Raises:
        AmbiguousCommand: Two commands claim the same subject/predicate
    """
    return CommandRegistry(collect_commands())


__all__ = [
    'COMMAND_MODULES', 'collect_commands', 'build_registry',
    'CommandContext', 'CommandDescriptor', 'CommandRegistry', 'PROGRAM_NAME', 'dispatch',
    'UNSET', 'ArgumentSpec', 'CommandArgumentParser', 'argument_specs', 'bind_arguments', 'build_argument_parser',
    'flag', 'option',
]
