"""
Utility decorators for input validation and operation logging.
"""

import functools
import inspect
import time
import uuid
from collections.abc import Callable
from typing import Any, TypeVar

from loguru import logger

from tradelog.core.exceptions.journal import ValidationError
from tradelog.core.utils.validation import validate_account_id, validate_positive

F = TypeVar("F", bound=Callable[..., Any])

_CONTEXT_PARAMS = ("account_id", "symbol", "trade_id", "filename")


def _bind_arguments(
    func: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> inspect.BoundArguments:
    bound_args = inspect.signature(func).bind(*args, **kwargs)
    bound_args.apply_defaults()
    return bound_args


def validate_inputs(func: F) -> F:
    """Decorator to validate journal inputs (account_id, lot_size)."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        bound_args = _bind_arguments(func, args, kwargs)
        for param_name, value in bound_args.arguments.items():
            if value is None:
                continue
            try:
                if param_name == "account_id":
                    bound_args.arguments[param_name] = validate_account_id(value)
                elif param_name == "lot_size":
                    bound_args.arguments[param_name] = validate_positive(value, param_name)
            except (TypeError, ValueError) as e:
                raise ValidationError(f"Invalid {param_name}: {e}") from e
        return func(*bound_args.args, **bound_args.kwargs)

    return wrapper  # type: ignore


def _extract_context(bound_args: inspect.BoundArguments) -> dict[str, Any]:
    """Extract loggable context from function arguments."""
    context: dict[str, Any] = {}
    for param_name in _CONTEXT_PARAMS:
        value = bound_args.arguments.get(param_name)
        if value is not None:
            context[param_name] = str(value)
    return context


def _describe_result(result: Any) -> dict[str, Any]:
    """Summarize a result for logging without dumping whole trade sets."""
    if isinstance(result, bool | int | float | str):
        return {"result": result}
    if hasattr(result, "to_dict") and hasattr(result, "added"):
        return {"result": result.to_dict()}
    return {"result_type": type(result).__name__}


def log_operation(func: F) -> F:
    """Decorator to log journal operations with correlation IDs and timing."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        context = {
            "correlation_id": str(uuid.uuid4())[:8],
            **_extract_context(_bind_arguments(func, args, kwargs)),
        }
        func_name = func.__name__
        bound_logger = logger.bind(**context)

        bound_logger.info(f"Journal operation started: {func_name}")
        start_time = time.perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
            bound_logger.error(
                f"Journal operation failed: {func_name} "
                f"({type(e).__name__}: {e}) after {execution_time_ms}ms"
            )
            raise

        execution_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        bound_logger.bind(**_describe_result(result)).success(
            f"Journal operation completed: {func_name} in {execution_time_ms}ms"
        )
        return result

    return wrapper  # type: ignore
