# cookparse/core/parse_context.py
from __future__ import annotations

import contextvars

slug_ctx = contextvars.ContextVar("slug", default=None)


def get_slug() -> str | None:
    return slug_ctx.get()


def set_slug(value: str | None) -> contextvars.Token:
    return slug_ctx.set(value)


def reset_slug(token: contextvars.Token) -> None:
    slug_ctx.reset(token)
