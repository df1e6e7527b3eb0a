"""Cache key computation for deterministic completion keys."""

from __future__ import annotations

import hashlib

from aicopilot.models import ContextBundle


def compute_cache_key(bundle: ContextBundle, current_line: str) -> str:
    """Compute a deterministic SHA-256 key over the bundle text and current line.

    A NUL separator keeps ``("ab", "c")`` and ``("a", "bc")`` apart.
    """
    raw = bundle.serialize() + "\x00" + current_line
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()
