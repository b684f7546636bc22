import asyncio
import functools
import logging

logger = logging.getLogger(__name__)


def retry_on_exception(retries=3, delay=2, exceptions=(Exception,)):
    """Повтор async-вызова; после последней попытки пробрасывает исключение."""
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            for attempt in range(1, retries + 1):
                try:
                    return await func(*args, **kwargs)
                except exceptions as e:
                    logger.warning(f"Попытка {attempt}/{retries} {func.__name__}: {e}")
                    if attempt >= retries:
                        raise
                    await asyncio.sleep(delay)
        return wrapper
    return decorator
