"""
Registry — Command descriptors, lookup and dispatch

Every operator command is a CommandDescriptor: a subject/predicate pair
(each with an optional alias), an arguments dataclass and an execute
function. All descriptors are collected once into an immutable
CommandRegistry; a subject/predicate pair claimed twice is rejected when
the registry is built, not when the command is run.

Dispatch:
    argv = ["subnet-pool", "delete", "-id", "100", "-autoconfirm"]
    find("subnet-pool", "delete")  ->  bind flags  ->  execute(args, ctx)
"""

import logging
import sys
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import IO, Any, Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from ..core.operator_io import OperatorIO
from ..errors import AmbiguousCommand, UnknownCommand
from ..presentation.symbols import ASCII, SymbolSet
from .arguments import bind_arguments

logger = logging.getLogger(__name__)

PROGRAM_NAME = "metalcloud-cli"


@dataclass
class CommandContext:
    """
    Per-invocation collaborators handed to every command.

    Attributes:
        client: MetalCloudClient used for all remote calls
        io: Operator I/O for prompts and confirmations
        stdin: Stream read by -pipe flags
        width: Terminal width for tables (None = unlimited)
        symbols: Box-drawing symbol set for tables
    """
    client: Any
    io: OperatorIO
    stdin: IO[str] = field(default_factory=lambda: sys.stdin)
    width: Optional[int] = None
    symbols: SymbolSet = ASCII


@dataclass(frozen=True)
class CommandDescriptor:
    """
    Static description of one operator command.

    Attributes:
        subject: Resource the command acts on (e.g. "subnet-pool")
        alt_subject: Short alias of subject ("" for none)
        predicate: Verb (e.g. "delete")
        alt_predicate: Short alias of predicate ("" for none)
        description: One-line summary for help listings
        arguments_type: Arguments dataclass (fields built with option()/flag())
        execute: Called as execute(args, ctx), returns the text to print
        example: Optional usage example shown in command help
    """
    subject: str
    alt_subject: str
    predicate: str
    alt_predicate: str
    description: str
    arguments_type: type
    execute: Callable[[Any, CommandContext], str]
    example: str = ""

    @property
    def name(self) -> str:
        return f"{self.subject} {self.predicate}"

    @property
    def prog(self) -> str:
        return f"{PROGRAM_NAME} {self.name}"

    def keys(self) -> List[Tuple[str, str]]:
        """Every (subject, predicate) spelling that selects this command."""
        subjects = [s for s in (self.subject, self.alt_subject) if s]
        predicates = [p for p in (self.predicate, self.alt_predicate) if p]
        keys = []
        for subject in subjects:
            for predicate in predicates:
                if (subject, predicate) not in keys:
                    keys.append((subject, predicate))
        return keys


class CommandRegistry:
    """
    Immutable index of command descriptors.

    Raises:
        AmbiguousCommand: On construction, if two descriptors claim the
                          same subject/predicate spelling
    """

    def __init__(self, descriptors: Iterable[CommandDescriptor]):
        self._descriptors: Tuple[CommandDescriptor, ...] = tuple(descriptors)

        index: Dict[Tuple[str, str], CommandDescriptor] = {}
        for descriptor in self._descriptors:
            for key in descriptor.keys():
                existing = index.get(key)
                if existing is not None and existing is not descriptor:
                    raise AmbiguousCommand(*key, claimants=(existing.name, descriptor.name))
                index[key] = descriptor

        self._index = MappingProxyType(index)

    def find(self, subject: str, predicate: str) -> CommandDescriptor:
        """
        Look up a command by subject and predicate (either spelling, case-sensitive).

        Raises:
            UnknownCommand: No command matches
        """
        descriptor = self._index.get((subject, predicate))
        if descriptor is None:
            raise UnknownCommand(subject, predicate)
        return descriptor

    def __iter__(self) -> Iterator[CommandDescriptor]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, key) -> bool:
        return key in self._index


def dispatch(registry: CommandRegistry, argv: Sequence[str], ctx: CommandContext) -> str:
    """
    Run the command selected by argv.

    Args:
        registry: Command registry
        argv: [subject, predicate, flags...]
        ctx: Invocation context

    Returns:
        The command's output, unchanged

    Raises:
        UnknownCommand: No command matches (flags are not parsed)
        MetalCloudCLIError: Anything the binder or command raises
    """
    subject = argv[0] if len(argv) > 0 else ""
    predicate = argv[1] if len(argv) > 1 else ""

    descriptor = registry.find(subject, predicate)
    logger.debug("Dispatching '%s' with %d flag token(s)", descriptor.name, len(argv) - 2)

    args = bind_arguments(descriptor, argv[2:])
    return descriptor.execute(args, ctx)
