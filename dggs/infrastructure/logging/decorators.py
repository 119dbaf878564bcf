"""Decorators for automatic logging and error capture."""

import functools
import inspect
import time
from typing import Callable, Any, Optional, TypeVar
from collections.abc import Sized

from .structured_logger import get_logger, operation_context

F = TypeVar('F', bound=Callable[..., Any])


def log_operation(operation_name: Optional[str] = None,
                  log_args: bool = False,
                  log_result: bool = False,
                  log_performance: bool = True):
    """Decorator to log operation execution and capture errors.

    While the function runs, the operation name is available to every log
    record through ``operation_context``. Sized results are reported as
    ``items_processed`` in the performance record.

    Args:
        operation_name: Custom operation name (defaults to function name)
        log_args: Whether to log function arguments
        log_result: Whether to log function result
        log_performance: Whether to log performance metrics

    Example:
        @log_operation("cells_for_bound", log_args=True)
        def cells_for_bound(self, lat0, lat1, lon0, lon1):
            ...
    """
    def decorator(func: F) -> F:
        name = operation_name or func.__name__
        logger = get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            start_time = time.time()
            context = {'operation': name}

            if log_args:
                bound_args = inspect.signature(func).bind(*args, **kwargs)
                bound_args.apply_defaults()
                context['arguments'] = {
                    arg_name: arg_value if isinstance(arg_value, (str, int, float, bool))
                    else f"<{type(arg_value).__name__}>"
                    for arg_name, arg_value in bound_args.arguments.items()
                    if arg_name != 'self'
                }

            token = operation_context.set(name)
            try:
                logger.debug(f"Starting {name}", extra={'context': context})
                result = func(*args, **kwargs)

                if log_result:
                    if isinstance(result, (str, int, float, bool, list, dict)):
                        context['result'] = result
                    else:
                        context['result'] = f"<{type(result).__name__}>"

                if log_performance:
                    metrics = {}
                    if isinstance(result, Sized) and not isinstance(result, str):
                        metrics['items_processed'] = len(result)
                    logger.log_performance(name, time.time() - start_time, status='success', **metrics)
                else:
                    logger.info(f"Completed {name}", extra={'context': context})
                return result

            except Exception as e:
                duration = time.time() - start_time
                logger.error(
                    f"Failed {name}: {e}",
                    exc_info=True,
                    extra={
                        'context': context,
                        'performance': {
                            'duration': duration,
                            'status': 'failed',
                            'error_type': type(e).__name__
                        }
                    }
                )
                raise
            finally:
                operation_context.reset(token)

        return wrapper  # type: ignore
    return decorator
