"""Replace math spans with marker tokens before Markdown parsing"""

from __future__ import annotations

import logging
import re

from mathreveal.spans import DisplayMode, MathSpanStore

logger = logging.getLogger(__name__)

# Order matters: block patterns run first so that $$...$$ is never split into
# two single-dollar spans, and \[...\] runs before $$...$$.
BLOCK_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\\\[(.*?)\\\]", re.DOTALL),  # \[ ... \]
    re.compile(r"\$\$(.*?)\$\$", re.DOTALL),  # $$ ... $$
)

INLINE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"\\\((.*?)\\\)", re.DOTALL),  # \( ... \)
    re.compile(r"\$(?![{#])[^$\n]+?\$"),  # $ ... $, but not ${ or $#
)


def extract(raw: str) -> tuple[str, MathSpanStore]:
    """Substitute every math span in raw with a marker token.

    Returns the substituted text and the frozen store of extracted spans. The
    span counter is local to this call, so the same input always yields the
    same tokens.
    """
    store = MathSpanStore()
    text = raw

    for display_mode, patterns in [
        (DisplayMode.BLOCK, BLOCK_PATTERNS),
        (DisplayMode.INLINE, INLINE_PATTERNS),
    ]:
        for pattern in patterns:
            text = _substitute(pattern, text, store, display_mode)

    logger.debug("extracted %d math spans", len(store))
    return text, store.freeze()


def _substitute(
    pattern: re.Pattern[str],
    text: str,
    store: MathSpanStore,
    display_mode: DisplayMode,
) -> str:
    def replacer(match: re.Match[str]) -> str:
        return store.add(match.group(0), display_mode).id

    return pattern.sub(replacer, text)
