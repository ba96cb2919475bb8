"""핸들러 호출 규약 정규화

핸들러는 다음 중 하나의 방식으로 결과를 돌려줄 수 있습니다.

- ``async def handler(event, context)`` - 코루틴 결과
- ``def handler(event, context, callback)`` - ``callback(error, result)`` 호출
- ``def handler(event, context)`` - 값을 그대로 반환

wrap_handler()는 세 방식 모두를 ``await handler(event, context)`` 하나로 맞춥니다.
"""

import asyncio
import inspect
from typing import Any, Awaitable, Callable, Optional


AsyncHandler = Callable[[Any, Any], Awaitable[Any]]


class CallbackResult:
    """callback(error, result) 호출을 기다릴 수 있는 awaitable"""

    def __init__(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._future: asyncio.Future = self._loop.create_future()

    @property
    def called(self) -> bool:
        return self._future.done()

    def callback(self, error: Any = None, result: Any = None) -> None:
        if self._future.done():
            return
        if error:
            exc = error if isinstance(error, BaseException) else Exception(str(error))
            self._future.set_exception(exc)
        else:
            self._future.set_result(result)

    def __await__(self):
        return self._future.__await__()


def accepts_callback(fn: Callable) -> bool:
    """세 번째 위치 인자(callback)를 받을 수 있는 함수인지"""
    try:
        params = list(inspect.signature(fn).parameters.values())
    except (TypeError, ValueError):
        return True

    positional = 0
    for param in params:
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            return True
        if param.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD):
            positional += 1
    return positional >= 3


def wrap_handler(fn: Callable, path: Optional[str] = None) -> AsyncHandler:
    with_callback = accepts_callback(fn)

    async def handler(event: Any, context: Any) -> Any:
        deferred = CallbackResult()
        if with_callback:
            result = fn(event, context, deferred.callback)
        else:
            result = fn(event, context)

        if inspect.isawaitable(result):
            return await result
        if deferred.called or (result is None and with_callback):
            return await deferred
        return result

    handler.path = path
    return handler
