"""Identifier generation for files and stages."""

from __future__ import annotations

import secrets

ID_BYTES = 8


class IdentifierError(RuntimeError):
    """Raised when the operating system cannot supply entropy."""


def new_id() -> str:
    """Return a 16 character lowercase hex token drawn from OS entropy."""
    try:
        return secrets.token_hex(ID_BYTES)
    except (NotImplementedError, OSError) as exc:
        raise IdentifierError(f"no entropy source available: {exc}") from exc


__all__ = ["IdentifierError", "new_id", "ID_BYTES"]
