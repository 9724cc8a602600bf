"""Chaining of unary server interceptors."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

Handler = Callable[[Any, Any], Any]
Interceptor = Callable[[Any, Any, Any, Handler], Any]


def intercept_chain(*args: Interceptor) -> Interceptor:
    """Combine interceptors into one; the first given runs outermost."""

    def chained(ctx: Any, req: Any, info: Any, handler: Handler) -> Any:
        def bind(interceptor: Interceptor, nxt: Handler) -> Handler:
            return lambda c, r: interceptor(c, r, info, nxt)

        call = handler
        for interceptor in reversed(args):
            call = bind(interceptor, call)
        return call(ctx, req)

    return chained