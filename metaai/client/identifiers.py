"""Identifier helpers for conversations and individual messages."""
from __future__ import annotations

import random
import string
import uuid

THREADING_ID_LENGTH = 19
# Leading digits the backend rejects in offline threading ids.
RESERVED_LEADING_DIGITS = frozenset({"0", "9"})


def generate_threading_id(rng: random.Random | None = None) -> str:
    """Return a 19-digit threading id whose first digit is never ``0`` or ``9``.

    Whole candidates are drawn digit by digit and rejected until the leading
    digit is acceptable, so every non-leading position stays uniform.
    """
    source = rng or random
    while True:
        candidate = "".join(source.choice(string.digits) for _ in range(THREADING_ID_LENGTH))
        if candidate[0] in RESERVED_LEADING_DIGITS:
            continue
        return candidate


def generate_conversation_id() -> str:
    return str(uuid.uuid4())


__all__ = [
    "RESERVED_LEADING_DIGITS",
    "THREADING_ID_LENGTH",
    "generate_conversation_id",
    "generate_threading_id",
]
