"""
MLflow tracing integration for LLM observability.
Provides span-based tracing for the analysis and tutor chat calls.
"""
import logging
import time
from typing import Optional, Dict, Any, Callable
from functools import wraps
from contextlib import contextmanager

import mlflow

from ..config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class MLflowTracer:
    """Handles MLflow tracing for LLM observability."""

    def __init__(self):
        self.enabled = settings.MLFLOW_ENABLE_TRACING
        if self.enabled:
            try:
                mlflow.set_tracking_uri(settings.MLFLOW_TRACKING_URI)
                logger.info("MLflow tracing enabled")
            except Exception as e:
                logger.warning(f"Failed to initialize MLflow tracing: {e}")
                self.enabled = False
        else:
            logger.debug("MLflow tracing disabled")

    @contextmanager
    def span(
        self,
        name: str,
        span_type: str = "UNKNOWN",
        attributes: Optional[Dict[str, Any]] = None,
        inputs: Optional[Dict[str, Any]] = None
    ):
        """
        Create a traced span for an operation.

        Args:
            name: Name of the span (e.g., "llm.analyze", "llm.tutor_chat")
            span_type: Type of span (e.g., "LLM", "CHAIN")
            attributes: Additional metadata for the span
            inputs: Input data to the operation
        """
        if not self.enabled:
            yield None
            return

        with mlflow.start_span(name=name, span_type=span_type) as span:
            if attributes:
                span.set_attributes(attributes)
            if inputs:
                span.set_inputs(inputs)

            start_time = time.time()
            yield span
            elapsed = time.time() - start_time
            span.set_attribute("latency_ms", int(elapsed * 1000))

    def trace_llm_call(
        self,
        model: str,
        prompt: str,
        temperature: Optional[float] = None,
        turn_count: Optional[int] = None,
        tokens: Optional[Dict[str, int]] = None
    ):
        """Log details of an LLM call within the current span."""
        if not self.enabled:
            return

        attributes: Dict[str, Any] = {
            "model": model,
            "prompt_length": len(prompt),
        }
        if temperature is not None:
            attributes["temperature"] = temperature
        if turn_count is not None:
            attributes["turn_count"] = turn_count
        if tokens:
            attributes.update(tokens)

        try:
            current_span = mlflow.get_current_active_span()
            if current_span:
                current_span.set_attributes(attributes)
        except Exception as e:
            logger.warning(f"Failed to trace LLM call: {e}")


def traced_operation(name: str, span_type: str = "CHAIN"):
    """
    Decorator to automatically trace a function as a span.

    Usage:
        @traced_operation("llm.analyze", span_type="LLM")
        def run_analysis(text, text_type):
            ...
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            with tracer.span(name=name, span_type=span_type):
                return func(*args, **kwargs)
        return wrapper
    return decorator


# Global tracer instance
tracer = MLflowTracer()
