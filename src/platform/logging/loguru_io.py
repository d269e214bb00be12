"""
@Logger.io - call tracing for use cases, repositories and controllers

In DEBUG every decorated call logs its arguments and return value (customer
emails masked, long values truncated). Exceptions are logged once, by the
innermost decorated frame they pass through:
- CustomBaseError: error line, no traceback (expected business outcome)
- anything listed in `expected`: debug line, left for the caller to interpret
- everything else: error line with traceback
"""

from functools import wraps
from inspect import iscoroutinefunction
import types
from typing import TYPE_CHECKING, Any, Callable, ParamSpec, TypeVar, cast, overload


if TYPE_CHECKING:
    from loguru import Logger as LoguruLogger

from src.platform.config.core_setting import settings
from src.platform.exception.exceptions import CustomBaseError
from src.platform.logging.loguru_io_config import ExtraField, custom_logger
from src.platform.logging.loguru_io_utils import (
    build_call_target_func_path,
    enter_call,
    get_chain_start_time,
    mask_sensitive,
    normalize_args_kwargs,
    reset_call_depth,
    should_mask_keyword,
    truncate_content,
)


_F = TypeVar('_F', bound=Callable[..., Any])
_P = ParamSpec('_P')
_T = TypeVar('_T')

ExpectedErrors = tuple[type[Exception], ...]


class LoguruIO:
    # Skip _on_* and the wrapper so the line points at the decorated function's caller
    depth = 2

    def __init__(
        self, *, reraise: bool = True, truncate: bool = True, expected: ExpectedErrors = ()
    ) -> None:
        self.reraise = reraise
        self.truncate = truncate
        self.expected = expected
        self.call_target = ''

    def _log(self) -> 'LoguruLogger':
        return custom_logger.bind(
            **{
                ExtraField.CALL_TARGET: self.call_target,
                ExtraField.CHAIN_START_TIME: get_chain_start_time(),
            }
        ).opt(depth=self.depth)

    def render(self, data: Any) -> Any:
        if isinstance(data, dict):
            data = {key: self.render(should_mask_keyword(key, value)) for key, value in data.items()}
        elif isinstance(data, list | tuple):
            data = type(data)(self.render(item) for item in data)
        else:
            data = mask_sensitive(data)
        return truncate_content(data) if self.truncate else data

    def _on_call(self, args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        enter_call()
        if settings.DEBUG:
            self._log().debug(f'args: {self.render(args)}, kwargs: {self.render(kwargs)}')

    def _on_return(self, value: Any) -> None:
        if settings.DEBUG:
            self._log().debug(f'return: {self.render(value)}')

    def _on_error(self, e: Exception) -> None:
        if getattr(e, '_has_logged', False):
            return
        if isinstance(e, self.expected):
            self._log().debug(f'{type(e).__name__} raised, handled by caller')
            return

        e._has_logged = True  # type: ignore[attr-defined]
        if isinstance(e, CustomBaseError):
            self._log().error(f'{type(e).__name__}: {e}')
        else:
            self._log().exception(f'{type(e).__name__}: {e}')

    def _hide_from_traceback(self, wrapper: Callable[..., Any]) -> Callable[..., Any]:
        # Attribute the wrapper frame to loguru so tracebacks stay on user code
        wrapper.__code__ = wrapper.__code__.replace(  # type: ignore[attr-defined]
            co_filename=cast(types.FunctionType, custom_logger.catch).__code__.co_filename
        )
        return wrapper

    def __call__(self, func: _F) -> _F:
        self.call_target = build_call_target_func_path(func)

        if iscoroutinefunction(func):

            @wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    self._on_call(args, kwargs)
                    args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                    value = await func(*args, **kwargs)
                except Exception as e:
                    self._on_error(e)
                    if self.reraise:
                        raise
                    return None
                else:
                    self._on_return(value)
                    return value
                finally:
                    reset_call_depth()

            return cast(_F, self._hide_from_traceback(async_wrapper))

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                self._on_call(args, kwargs)
                args, kwargs = normalize_args_kwargs(func, *args, **kwargs)
                value = func(*args, **kwargs)
            except Exception as e:
                self._on_error(e)
                if self.reraise:
                    raise
                return None
            else:
                self._on_return(value)
                return value
            finally:
                reset_call_depth()

        return cast(_F, self._hide_from_traceback(sync_wrapper))


class Logger:
    base = custom_logger

    @overload
    @staticmethod
    def io(func: Callable[_P, _T]) -> Callable[_P, _T]: ...

    @overload
    @staticmethod
    def io(
        func: None = ...,
        *,
        reraise: bool = ...,
        truncate: bool = ...,
        expected: ExpectedErrors = ...,
    ) -> LoguruIO: ...

    @staticmethod
    def io(
        func: Callable[_P, _T] | None = None,
        *,
        reraise: bool = True,
        truncate: bool = True,
        expected: ExpectedErrors = (),
    ) -> Callable[_P, _T] | LoguruIO:
        io = LoguruIO(reraise=reraise, truncate=truncate, expected=expected)
        return io(func) if func else io
