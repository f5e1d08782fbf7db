"""
Callback-style handler pipeline.

Handlers take ``(request, response, next_)``. Calling ``next_()``
passes control to the following handler, ``next_(error)`` jumps to
the terminal error handler, and writing the response ends the chain.
A Pipeline is mounted on the FastAPI app as a plain Starlette endpoint.

Handlers that may fail asynchronously are registered through
async_wrapper, which turns any failure into a ``next_(error)`` call.
"""

import functools
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from server.shared.errors.formatted import FormattedError
from server.shared.errors.handlers import error_handler as default_error_handler

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]
ErrorHandler = Callable[..., Any]


async def _resolve(value: Any) -> Any:
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass(frozen=True)
class Outcome:
    """Result of running a handler: either a value or the error it failed with."""

    value: Any = None
    error: Any = None

    @property
    def failed(self) -> bool:
        return self.error is not None


async def capture(fn: Handler, *args: Any, **kwargs: Any) -> Outcome:
    """Run a sync or async callable and return its Outcome instead of raising.

    A synchronous raise and a failed awaitable are captured the same way.
    Only ``Exception`` subclasses are captured; cancellation propagates.
    """
    try:
        value = await _resolve(fn(*args, **kwargs))
    except Exception as exc:
        return Outcome(error=exc)
    return Outcome(value=value)


def async_wrapper(fn: Handler) -> Callable[[Any, Any, Any], Awaitable[Any]]:
    """Wrap a handler so that its failures are forwarded to ``next_``.

    The wrapped handler may be sync or async. If it raises, or the
    awaitable it returns fails, ``next_`` is called exactly once with
    that error object. The wrapper never writes the response itself
    and never raises.

    Args:
        fn: A ``(request, response, next_)`` handler.

    Returns:
        A coroutine function with the same signature.
    """

    @functools.wraps(fn)
    async def wrapper(request: Any, response: Any, next_: Any) -> Any:
        outcome = await capture(fn, request, response, next_)
        if outcome.failed:
            await _resolve(next_(outcome.error))
        return outcome.value

    return wrapper


class ResponseAlreadySentError(RuntimeError):
    """Raised when a handler writes a response that was already written."""


class ResponseWriter:
    """Mutable response passed along the pipeline.

    ``json()`` serializes immediately, so an unserializable payload
    fails inside the handler that wrote it.
    """

    def __init__(self) -> None:
        self.status_code = 200
        self.headers: dict[str, str] = {}
        self.sent = False
        self._response: Response | None = None

    def status(self, status_code: int) -> "ResponseWriter":
        self.status_code = status_code
        return self

    def set(self, name: str, value: str) -> "ResponseWriter":
        self.headers[name] = value
        return self

    def set_all(self, headers: dict[str, str]) -> "ResponseWriter":
        self.headers.update(headers)
        return self

    def json(self, payload: Any) -> "ResponseWriter":
        if self.sent:
            raise ResponseAlreadySentError("Response already sent")
        self._response = JSONResponse(
            content=payload,
            status_code=self.status_code,
            headers=self.headers or None,
        )
        self.sent = True
        return self

    def to_response(self) -> Response:
        """Return the written response, or an empty one if nothing was written."""
        if self._response is not None:
            return self._response
        return Response(status_code=self.status_code, headers=self.headers or None)


class _Next:
    """The ``next_`` callback handed to a single handler."""

    def __init__(self) -> None:
        self.called = False
        self.error: Any = None

    def __call__(self, error: Any = None) -> None:
        if self.called:
            if error is not None and self.error is None:
                # A failure after next_() still has to reach the error handler.
                self.error = error
                return
            logger.warning("next_ called more than once; ignoring repeat call")
            return
        self.called = True
        self.error = error


class Pipeline:
    """Ordered chain of ``(request, response, next_)`` handlers.

    ``next_`` must be called before the handler (or its awaitable)
    returns. A chain that ends without a response and with every
    handler calling ``next_()`` is answered with 404.

    Only synchronous raises reach the error handler on their own. A
    failed awaitable escapes the endpoint to the app's exception
    handlers unless the handler is wrapped with async_wrapper.

    Example:
        pipeline = Pipeline()
        pipeline.use(async_wrapper(load_user))
        app.add_route("/accounts", pipeline.endpoint(async_wrapper(list_accounts)))
    """

    def __init__(self, error_handler: ErrorHandler = default_error_handler) -> None:
        self._handlers: list[Handler] = []
        self._error_handler = error_handler

    def use(self, *handlers: Handler) -> "Pipeline":
        """Append handlers that run before every endpoint's own handlers."""
        self._handlers.extend(handlers)
        return self

    def endpoint(self, *handlers: Handler) -> Callable[[Request], Awaitable[Response]]:
        """Build a Starlette endpoint running shared then route handlers."""
        chain = [*self._handlers, *handlers]

        async def endpoint(request: Request) -> Response:
            response = ResponseWriter()
            await self.dispatch(chain, request, response)
            return response.to_response()

        return endpoint

    async def dispatch(self, chain: list[Handler], request: Request, response: ResponseWriter) -> None:
        for handler in chain:
            step = _Next()
            try:
                result = handler(request, response, step)
            except Exception as exc:
                await self._fail(exc, request, response)
                return
            await _resolve(result)

            if step.error is not None:
                await self._fail(step.error, request, response)
                return
            if response.sent or not step.called:
                return

        if not response.sent:
            await self._fail(
                FormattedError.not_found(f"Cannot {request.method} {request.url.path}"),
                request,
                response,
            )

    async def _fail(self, error: Any, request: Request, response: ResponseWriter) -> None:
        await _resolve(self._error_handler(error, request, response, _Next()))
