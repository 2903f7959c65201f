"""
FastAPI dependencies and process-wide state for the KPI dashboard.

This module owns the loaded configuration, the cached order corpus and
the per-client rate limiting storage. The corpus is built on first use and
then shared, read-only, by every request in the process.
"""

import logging
import os
import threading
import time
from functools import wraps

from cachetools import TTLCache
from fastapi import HTTPException, Request, status

from ..config.models import DashboardConfig
from ..config.settings import load_config_with_fallback
from ..generators.order_generator import generate_orders
from .exceptions import CorpusGenerationError
from .metrics import Timer, metrics_collector
from .models import Order

logger = logging.getLogger(__name__)


# Global instances (initialized lazily or on startup)
_config: DashboardConfig | None = None
_order_corpus: tuple[Order, ...] | None = None

# Guards the one-time corpus build when requests run in the threadpool
_corpus_lock = threading.Lock()


# ================================
# ENVIRONMENT VARIABLE PARSING
# ================================


def _parse_env_int(name: str, default: int, min_val: int, max_val: int) -> int:
    """Parse integer environment variable with validation and fallback.

    Args:
        name: Environment variable name
        default: Default value if not set or invalid
        min_val: Minimum allowed value
        max_val: Maximum allowed value

    Returns:
        Validated integer value within bounds
    """
    try:
        value = int(os.getenv(name, str(default)))
        return max(min_val, min(max_val, value))
    except ValueError:
        logger.warning(
            f"Invalid {name} value, using default {default}",
            extra={"env_var": name, "default": default},
        )
        return default


# Rate limiting storage, bounded to RATE_LIMIT_MAXSIZE client IPs.
# Entries expire RATE_LIMIT_TTL seconds after insertion; in-place list
# updates do not reset the timer.
RATE_LIMIT_MAXSIZE = _parse_env_int("RATE_LIMIT_MAXSIZE", 10000, 100, 100000)
RATE_LIMIT_TTL = _parse_env_int("RATE_LIMIT_TTL", 3600, 60, 86400)

_rate_limit_storage: TTLCache[str, list[float]] = TTLCache(
    maxsize=RATE_LIMIT_MAXSIZE, ttl=RATE_LIMIT_TTL
)

# Sync endpoints run in the threadpool; TTLCache is not thread-safe
_rate_limit_lock = threading.Lock()


# ================================
# CONFIGURATION DEPENDENCIES
# ================================


def get_config() -> DashboardConfig:
    """Get the current dashboard configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config_with_fallback()
    return _config


def update_config(new_config: DashboardConfig) -> None:
    """
    Replace the global configuration.

    The cached corpus is dropped when generation settings change so the
    next request rebuilds it from the new seed and size.
    """
    global _config
    previous = _config
    _config = new_config

    if previous is None or (
        previous.seed != new_config.seed
        or previous.generation != new_config.generation
    ):
        reset_order_corpus()


# ================================
# ORDER CORPUS
# ================================


def get_order_corpus(config: DashboardConfig | None = None) -> tuple[Order, ...]:
    """
    Return the process-wide order corpus, generating it on first call.

    Raises:
        CorpusGenerationError: If generation fails
    """
    global _order_corpus
    corpus = _order_corpus
    if corpus is not None:
        return corpus

    with _corpus_lock:
        if _order_corpus is None:
            config = config or get_config()
            try:
                with Timer() as timer:
                    orders = generate_orders(
                        seed=config.seed,
                        count=config.generation.order_count,
                        lookback_days=config.generation.lookback_days,
                    )
            except Exception as e:
                logger.error(f"Order corpus generation failed: {e}", exc_info=True)
                raise CorpusGenerationError(
                    "Failed to generate order corpus",
                    seed=config.seed,
                    order_count=config.generation.order_count,
                    original_error=e,
                ) from e

            _order_corpus = tuple(orders)
            metrics_collector.record_corpus_built(len(orders), timer.elapsed)
            logger.info(
                f"Generated order corpus: {len(orders):,} orders "
                f"(seed={config.seed}) in {timer.elapsed:.3f}s"
            )
        return _order_corpus


def reset_order_corpus() -> None:
    """Drop the cached corpus; the next access regenerates it."""
    global _order_corpus
    with _corpus_lock:
        _order_corpus = None


# ================================
# RATE LIMITING
# ================================


def _check_rate_limit(client_ip: str, max_requests: int, window_seconds: int) -> None:
    current_time = time.time()

    with _rate_limit_lock:
        request_times = _rate_limit_storage.setdefault(client_ip, [])

        cutoff_time = current_time - window_seconds
        request_times[:] = [t for t in request_times if t > cutoff_time]

        if len(request_times) >= max_requests:
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=(
                    f"Rate limit exceeded: {max_requests} requests "
                    f"per {window_seconds} seconds"
                ),
            )

        request_times.append(current_time)


def rate_limit(max_requests: int | None = None, window_seconds: int | None = None):
    """
    Rate limiting decorator for endpoints that take a ``request`` argument.

    Limits default to the export limits in the current configuration.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            request = kwargs.get("request")
            if request is None:
                request = next((a for a in args if isinstance(a, Request)), None)

            if request is None or request.client is None:
                return func(*args, **kwargs)

            api_config = get_config().api
            _check_rate_limit(
                request.client.host,
                max_requests or api_config.export_rate_limit,
                window_seconds or api_config.export_rate_window_seconds,
            )
            return func(*args, **kwargs)

        return wrapper

    return decorator


def reset_rate_limits() -> None:
    """Clear all rate limiting state."""
    with _rate_limit_lock:
        _rate_limit_storage.clear()
