"""
Confirmation Gate — Explicit operator consent before destructive actions

The gate runs to completion before the mutating call is issued:

    require_confirmation(ctx.io, args.autoconfirm, lambda: message)
    client.subnet_pool_delete(pool.subnet_pool_id)

It performs no remote calls; messages are composed from entities the
caller already fetched.
"""

from typing import Callable, Union

from ..errors import OperationNotConfirmed
from .operator_io import OperatorIO


# Only this exact answer (case-sensitive) confirms
CONFIRMATION_TOKEN = "yes"


def confirmation_prompt(action: str) -> str:
    """Standard confirmation message for an action description."""
    return f'{action}  Are you sure? Type "{CONFIRMATION_TOKEN}" to continue:'


def request_confirmation(io: OperatorIO, message: str) -> bool:
    """
    Ask the operator and return the verdict.

    Surrounding whitespace is ignored; anything other than the exact
    confirmation token, including empty input, is a decline.
    """
    answer = io.ask(message)
    return answer.strip() == CONFIRMATION_TOKEN


def require_confirmation(
    io: OperatorIO,
    autoconfirm: bool,
    message: Union[str, Callable[[], str]]
) -> None:
    """
    Block until the operator confirms, or raise.

    Args:
        io: Operator I/O capability
        autoconfirm: Treat the action as confirmed without any I/O
        message: Message, or a callable building it (only called when prompting)

    Raises:
        OperationNotConfirmed: The operator declined
    """
    if autoconfirm:
        return

    text = message() if callable(message) else message
    if not request_confirmation(io, text):
        raise OperationNotConfirmed()
