"""
Core — Identifier resolution, confirmation gate and operator input
"""

from .identifiers import ById, ByLabel, Identifier, parse_identifier, resolve_id, get_entity
from .operator_io import OperatorIO, TerminalIO, ScriptedIO
from .confirm import CONFIRMATION_TOKEN, confirmation_prompt, request_confirmation, require_confirmation
from .input import read_config_content, decode_content, read_raw_object

__all__ = [
    'ById', 'ByLabel', 'Identifier', 'parse_identifier', 'resolve_id', 'get_entity',
    'OperatorIO', 'TerminalIO', 'ScriptedIO',
    'CONFIRMATION_TOKEN', 'confirmation_prompt', 'request_confirmation', 'require_confirmation',
    'read_config_content', 'decode_content', 'read_raw_object',
]
