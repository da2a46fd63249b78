"""
Structured logging for Interest Profiler.

JSON lines on stderr; see logger.py for the keys.
"""

from interest_profiler.profiler_logging.logger import get_logger, mask_api_key, short_address

__all__ = ["get_logger", "mask_api_key", "short_address"]
