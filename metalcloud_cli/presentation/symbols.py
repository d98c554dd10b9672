"""
Symbols — Box-drawing characters for table output

Two sets: UNICODE line drawing and a plain ASCII fallback. The display.symbols
setting picks one ("unicode", "ascii"), or "auto" detects from the terminal.

safe_print() writes rendered tables to streams that cannot encode line
drawing (or remote labels carrying arbitrary Unicode) without failing.
"""

import dataclasses
import os
import sys
from dataclasses import dataclass
from typing import IO, Optional


@dataclass(frozen=True)
class SymbolSet:
    """Characters the table renderers draw with."""
    box_h: str
    box_v: str
    box_tl: str
    box_tr: str
    box_bl: str
    box_br: str
    box_cross: str
    box_t_down: str
    box_t_up: str
    box_t_right: str
    box_t_left: str
    ellipsis: str


UNICODE = SymbolSet(
    box_h='─', box_v='│',
    box_tl='┌', box_tr='┐', box_bl='└', box_br='┘',
    box_cross='┼', box_t_down='┬', box_t_up='┴', box_t_right='├', box_t_left='┤',
    ellipsis='…',
)

ASCII = SymbolSet(
    box_h='-', box_v='|',
    box_tl='+', box_tr='+', box_bl='+', box_br='+',
    box_cross='+', box_t_down='+', box_t_up='+', box_t_right='+', box_t_left='+',
    ellipsis='...',
)

VALID_SYMBOL_PREFERENCES = ('auto', 'unicode', 'ascii')

# Each Unicode symbol maps to its ASCII counterpart
_TO_ASCII = str.maketrans(dict(zip(dataclasses.astuple(UNICODE), dataclasses.astuple(ASCII))))

_ASCII_ONLY_ENV = 'METALCLOUD_ASCII_ONLY'


def safe_print(text: str, end: str = '\n', file: Optional[IO[str]] = None) -> None:
    """
    Print text, degrading table symbols to ASCII if the stream can't encode them.

    Characters with no ASCII counterpart become '?'.
    """
    stream = file if file is not None else sys.stdout
    try:
        print(text, end=end, file=stream)
    except UnicodeEncodeError:
        encoding = getattr(stream, 'encoding', None) or 'ascii'
        fallback = text.translate(_TO_ASCII).encode(encoding, errors='replace').decode(encoding)
        print(fallback, end=end, file=stream)


def _is_utf(name: str) -> bool:
    name = name.lower().replace('-', '').replace('_', '')
    return 'utf8' in name or 'utf16' in name


def supports_unicode() -> bool:
    """
    Guess whether stdout can show line drawing.

    METALCLOUD_ASCII_ONLY forces False. Otherwise stdout's encoding
    decides when it is known; the locale variables decide when it isn't.
    """
    if os.environ.get(_ASCII_ONLY_ENV, '').lower() in ('1', 'true', 'yes'):
        return False

    encoding = getattr(sys.stdout, 'encoding', None)
    if encoding:
        return _is_utf(encoding)

    return any(_is_utf(os.environ.get(var, '')) for var in ('LC_ALL', 'LANG'))


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Symbol set for a display.symbols preference.

    Args:
        preference: "unicode", "ascii", or "auto" / None to detect

    Returns:
        UNICODE or ASCII
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII
