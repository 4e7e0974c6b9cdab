"""Performance profiler for token translator operations."""

import time
import psutil
import logging
from typing import Dict, Any, Optional, List
from dataclasses import dataclass
from contextlib import contextmanager


@dataclass
class PerformanceMetrics:
    """Performance metrics for one upload or export operation."""
    operation_name: str
    start_time: float
    end_time: float
    duration: float
    input_size: int
    output_size: int
    memory_peak_mb: float
    memory_start_mb: float
    memory_end_mb: float
    throughput_mbps: float
    tokens_processed: int


class PerformanceProfiler:
    """
    Profiler recording duration, memory and throughput of operations.

    Metrics of finished operations are kept in ``metrics_history``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the performance profiler.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)
        self.metrics_history: List[PerformanceMetrics] = []
        self.current_operation: Optional[str] = None
        self.start_time: Optional[float] = None
        self.start_memory: float = 0
        self.peak_memory: float = 0
        self.input_size: int = 0
        self.output_size: int = 0
        self.tokens_processed: int = 0

    @contextmanager
    def profile_operation(self, operation_name: str, input_size: int = 0):
        """
        Context manager for profiling operations.

        Call ``record_output`` inside the block to attach output figures.

        Args:
            operation_name: Name of the operation being profiled
            input_size: Size of input data in bytes
        """
        self.start_profiling(operation_name, input_size)
        try:
            yield self
        finally:
            self.stop_profiling()

    def start_profiling(self, operation_name: str, input_size: int = 0):
        """Start profiling an operation."""
        self.current_operation = operation_name
        self.start_time = time.time()
        self.input_size = input_size
        self.output_size = 0
        self.tokens_processed = 0

        self.start_memory = self._current_memory_mb()
        self.peak_memory = self.start_memory

        self.logger.debug(f"Started profiling: {operation_name}")

    def sample_performance(self):
        """Sample current memory usage."""
        if not self.current_operation:
            return
        self.peak_memory = max(self.peak_memory, self._current_memory_mb())

    def record_output(self, output_size: int = 0, tokens_processed: int = 0):
        """Attach output figures to the running operation."""
        self.output_size = output_size
        self.tokens_processed = tokens_processed
        self.sample_performance()

    def stop_profiling(self) -> PerformanceMetrics:
        """
        Stop profiling and return metrics.

        Returns:
            PerformanceMetrics object with collected data

        Raises:
            ValueError: If no operation is being profiled
        """
        if not self.current_operation or self.start_time is None:
            raise ValueError("No active profiling session")

        end_time = time.time()
        duration = end_time - self.start_time
        end_memory = self._current_memory_mb()
        self.peak_memory = max(self.peak_memory, end_memory)

        throughput = (self.input_size / 1024 / 1024) / duration if duration > 0 else 0  # MB/s

        metrics = PerformanceMetrics(
            operation_name=self.current_operation,
            start_time=self.start_time,
            end_time=end_time,
            duration=duration,
            input_size=self.input_size,
            output_size=self.output_size,
            memory_peak_mb=self.peak_memory,
            memory_start_mb=self.start_memory,
            memory_end_mb=end_memory,
            throughput_mbps=throughput,
            tokens_processed=self.tokens_processed
        )

        self.metrics_history.append(metrics)

        self.logger.info(f"Performance Summary - {self.current_operation}: "
                         f"{duration:.3f}s, {self.tokens_processed} tokens, "
                         f"peak memory {self.peak_memory:.1f} MB")

        # Reset state
        self.current_operation = None
        self.start_time = None

        return metrics

    def get_performance_summary(self) -> Dict[str, Any]:
        """
        Get summary of all performance metrics.

        Returns:
            Dictionary with performance summary
        """
        if not self.metrics_history:
            return {"total_operations": 0}

        total_duration = sum(m.duration for m in self.metrics_history)
        total_tokens = sum(m.tokens_processed for m in self.metrics_history)
        max_memory = max(m.memory_peak_mb for m in self.metrics_history)

        return {
            "total_operations": len(self.metrics_history),
            "total_duration": total_duration,
            "total_tokens": total_tokens,
            "max_memory_peak_mb": max_memory,
            "operations": [
                {
                    "name": m.operation_name,
                    "duration": m.duration,
                    "tokens": m.tokens_processed,
                    "memory_peak": m.memory_peak_mb
                }
                for m in self.metrics_history
            ]
        }

    def _current_memory_mb(self) -> float:
        try:
            return psutil.Process().memory_info().rss / 1024 / 1024
        except psutil.Error as e:
            self.logger.warning(f"Performance sampling failed: {e}")
            return self.peak_memory
