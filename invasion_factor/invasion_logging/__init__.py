"""
Structured logging for Invasion Factor.

JSON logs with timestamp, sample_id and event_type.
Use get_logger() in all engine modules for aggregation-friendly output.
"""

from invasion_factor.invasion_logging.logger import bind_sample, configure_logging, get_logger

__all__ = ["bind_sample", "configure_logging", "get_logger"]
