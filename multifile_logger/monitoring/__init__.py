"""
Monitoring module for logger metrics

Example:
    from multifile_logger.monitoring import MetricsCollector
    from multifile_logger.writers import MultiFileLogWriter

    metrics = MetricsCollector()
    router = MultiFileLogWriter(metrics=metrics)
    router.init('{"filename": "logs/app.log", "separate": ["error"]}')

    print(metrics.get_metrics().writer_errors)
"""

from multifile_logger.monitoring.metrics import LoggerMetrics, MetricsCollector

__all__ = [
    "LoggerMetrics",
    "MetricsCollector",
]
