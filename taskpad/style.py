from __future__ import annotations

import re
from functools import lru_cache
from typing import Optional


_TOKEN_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


@lru_cache(maxsize=1)
def _ansi_token_map() -> dict[str, str]:
    from . import ansi as ansi_mod

    out: dict[str, str] = {}
    for k, v in vars(ansi_mod).items():
        if not k or not k.isupper():
            continue
        if isinstance(v, str):
            out[k] = v
    return out


def expand_style_tokens(text: str) -> str:
    """Replace ``{NAME}`` tokens (e.g. ``{BRIGHT_CYAN}``) with ANSI codes."""
    if not text:
        return "" if text is None else str(text)

    mp = _ansi_token_map()

    def repl(m: re.Match[str]) -> str:
        key = m.group(1).upper()
        v = mp.get(key)
        return m.group(0) if v is None else v

    return _TOKEN_RE.sub(repl, str(text))


def resolve_style(value: Optional[str], default: str) -> str:
    raw = default if value is None else value
    return expand_style_tokens("" if raw is None else str(raw))
