
import asyncio
import logging
from prometheus_client import Counter, Histogram

from .. exceptions import OperationTimeoutError

# Module logger
logger = logging.getLogger(__name__)

class OperationPoller:
    """
    Resolves a node operation by repeatedly fetching its status.

    Each attempt waits `frequency` seconds and then awaits `fetch()`, which
    must return an OperationResult.  The first terminal result is returned.
    After `max_retries` non-terminal results OperationTimeoutError is
    raised, so a timeout is never confused with a FAILED operation.
    """

    def __init__(self):

        if not hasattr(__class__, "attempts_metric"):
            __class__.attempts_metric = Histogram(
                'operation_poll_attempts', 'Status checks per operation',
                ["operation"],
                buckets=[1, 2, 3, 5, 8, 13, 21, 34, 55, 89, 144]
            )

        if not hasattr(__class__, "results_metric"):
            __class__.results_metric = Counter(
                'operation_results', 'Operation outcomes',
                ["operation", "status"],
            )

    async def poll(self, fetch, operation, operation_id, max_retries, frequency):

        if operation_id is None:
            raise ValueError(
                f"Cannot poll {operation} operation without an operation id"
            )

        for attempt in range(1, max_retries + 1):

            await asyncio.sleep(frequency)

            result = await fetch()

            if result.terminal:

                logger.debug(
                    f"Operation {operation} {operation_id} is {result.status} "
                    f"after {attempt} attempt(s)"
                )

                __class__.attempts_metric.labels(
                    operation=operation
                ).observe(attempt)

                __class__.results_metric.labels(
                    operation=operation, status=result.status
                ).inc()

                return result

            logger.debug(
                f"Operation {operation} {operation_id} still {result.status}, "
                f"attempt {attempt}/{max_retries}"
            )

        logger.warning(
            f"Operation {operation} {operation_id} did not complete in "
            f"{max_retries} attempts"
        )

        __class__.results_metric.labels(
            operation=operation, status="TIMEOUT"
        ).inc()

        raise OperationTimeoutError(operation, operation_id, max_retries)

