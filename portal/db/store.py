import asyncio
import logging

from pymongo.errors import DuplicateKeyError, PyMongoError

from portal.config import settings
from portal.errors import StoreError, StoreTimeout

logger = logging.getLogger(__name__)


async def guarded(operation, description: str, timeout: float = None):
    '''
    await a store operation under the configured timeout

    timeouts become StoreTimeout, other driver failures StoreError,
    DuplicateKeyError is left for the caller to map (usually to Conflict)
    no retries, a failed call is surfaced as is
    '''
    timeout = settings.STORE_TIMEOUT_SECONDS if timeout is None else timeout
    try:
        return await asyncio.wait_for(operation, timeout=timeout)
    except asyncio.TimeoutError as e:
        logger.warning(f"store operation timed out after {timeout}s: {description}")
        raise StoreTimeout(f"{description} timed out") from e
    except DuplicateKeyError:
        raise
    except PyMongoError as e:
        if e.timeout:
            logger.warning(f"store operation timed out: {description}: {e}")
            raise StoreTimeout(f"{description} timed out") from e
        logger.error(f"store operation failed: {description}: {e}")
        raise StoreError(f"{description} failed") from e
