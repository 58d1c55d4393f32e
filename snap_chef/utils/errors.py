"""Provider exceptions and graceful-degradation helpers."""

from typing import Optional

from snap_chef.utils.logger import logger


class ProviderError(Exception):
    """A provider call failed (network error, bad status, empty result)."""

    def __init__(self, provider: str, message: str, status: Optional[int] = None) -> None:
        super().__init__(f"{provider}: {message}")
        self.provider = provider
        self.status = status


class ProviderParseError(ProviderError):
    """A provider answered but its payload could not be parsed or normalized."""


def _log_error(operation_name: str, exception: Exception, log_level: str = "warning") -> None:
    """Log error with appropriate level."""
    msg = f"{operation_name}: {exception}"
    if log_level == "debug":
        logger.debug(msg)
    else:
        logger.warning(msg)


async def safe_execute_async(coro, operation_name: str, log_level: str = "warning", default_return=None):
    """Await `coro`, logging and returning `default_return` on failure.

    Used for optional steps that should degrade gracefully (fetching an
    image URL, decoding a data URL).

    Args:
        coro: Awaitable to execute.
        operation_name: Description for logging.
        log_level: "debug" or "warning". Default: "warning".
        default_return: Value returned on exception.
    """
    try:
        return await coro
    except Exception as e:
        _log_error(operation_name, e, log_level)
        return default_return


def safe_execute_sync(func, operation_name: str, log_level: str = "warning", default_return=None):
    """Synchronous version of safe_execute_async. Same behavior."""
    try:
        return func()
    except Exception as e:
        _log_error(operation_name, e, log_level)
        return default_return
