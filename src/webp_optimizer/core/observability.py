"""Observability utilities for structured logging and metrics."""

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .logging_config import setup_logger


@dataclass
class LogContext:
    """Context information for structured logging."""

    correlation_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    operation: str = ""
    component: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def with_operation(self, operation: str) -> "LogContext":
        """Create new context with operation set."""
        return LogContext(
            correlation_id=self.correlation_id,
            operation=operation,
            component=self.component,
            metadata=self.metadata.copy(),
        )

    def with_metadata(self, **kwargs) -> "LogContext":
        """Create new context with additional metadata."""
        new_metadata = self.metadata.copy()
        new_metadata.update(kwargs)
        return LogContext(
            correlation_id=self.correlation_id,
            operation=self.operation,
            component=self.component,
            metadata=new_metadata,
        )


class StructuredLogger:
    """Structured logger with context support."""

    def __init__(self, name: str = "webp-optimizer", level: Optional[str] = None):
        self._logger = setup_logger(name, level=level)

    def format(
        self, message: str, context: Optional[LogContext] = None, **kwargs
    ) -> str:
        """Render message, context and extra fields into a single line."""
        if context is None:
            if not kwargs:
                return message
            extra = ", ".join(f"{k}={v}" for k, v in kwargs.items())
            return f"{message} ({extra})"

        formatted_message = f"[{context.correlation_id}] {message}"
        if context.operation:
            formatted_message = f"[{context.operation}] {formatted_message}"

        fields = {**context.metadata, **kwargs}
        if fields:
            metadata_str = ", ".join(f"{k}={v}" for k, v in fields.items())
            formatted_message = f"{formatted_message} ({metadata_str})"
        return formatted_message

    def debug(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._logger.debug(self.format(message, context, **kwargs))

    def info(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._logger.info(self.format(message, context, **kwargs))

    def warning(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._logger.warning(self.format(message, context, **kwargs))

    def error(self, message: str, context: Optional[LogContext] = None, **kwargs):
        self._logger.error(self.format(message, context, **kwargs))


@dataclass
class PerformanceMetrics:
    """Performance metrics for operations."""

    operation: str
    start_time: float
    end_time: float
    success: bool
    error_message: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def duration(self) -> float:
        """Calculate operation duration in seconds."""
        return self.end_time - self.start_time


class MetricsCollector:
    """Collector for performance metrics."""

    def __init__(self):
        self._metrics: list[PerformanceMetrics] = []

    def record_metric(self, metric: PerformanceMetrics):
        """Record a performance metric."""
        self._metrics.append(metric)

    def get_metrics(self, operation: Optional[str] = None) -> list[PerformanceMetrics]:
        """Get recorded metrics, optionally filtered by operation."""
        if operation:
            return [m for m in self._metrics if m.operation == operation]
        return self._metrics.copy()

    def get_summary(self, operation: Optional[str] = None) -> Dict[str, Any]:
        """Get summary statistics for metrics."""
        metrics = self.get_metrics(operation)

        if not metrics:
            return {}

        durations = [m.duration for m in metrics]
        successful = [m for m in metrics if m.success]

        return {
            "total_operations": len(metrics),
            "successful_operations": len(successful),
            "failed_operations": len(metrics) - len(successful),
            "success_rate": len(successful) / len(metrics),
            "avg_duration": sum(durations) / len(durations),
            "max_duration": max(durations),
            "total_duration": sum(durations),
        }

    def clear_metrics(self):
        """Clear all recorded metrics."""
        self._metrics.clear()
