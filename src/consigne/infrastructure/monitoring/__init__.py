"""
Monitoring and observability infrastructure.
"""

from consigne.infrastructure.monitoring import metrics
from consigne.infrastructure.monitoring.logger import (
    get_logger,
    get_operation_id,
    log_performance,
    set_operation_id,
    setup_logging,
)

__all__ = [
    "metrics",
    "get_logger",
    "get_operation_id",
    "set_operation_id",
    "setup_logging",
    "log_performance",
]
