from shared.infrastructure.observability.logger import (
    DIVERGENCE_EVENT,
    configure_logging,
    get_logger,
    log_divergence,
)

__all__ = ["DIVERGENCE_EVENT", "configure_logging", "get_logger", "log_divergence"]
