# bracket_engine/utils/observability.py
import logging
import sys
from typing import Optional
import structlog
import contextvars
from prometheus_client import Counter, Histogram, CollectorRegistry

from bracket_engine.config import ObservabilitySettings

# Correlation ID for tracing one command / request through the service
CORRELATION_ID = contextvars.ContextVar('correlation_id', default=None)


class MetricsRegistry:
    """Centralized metrics management."""
    
    def __init__(self):
        self.registry = CollectorRegistry()
        self._init_metrics()
    
    def _init_metrics(self):
        """Initialize all metrics with proper naming conventions."""
        
        # HISTOGRAMS (timing data)
        self.update_latency = Histogram(
            'bracket_update_latency_seconds',
            'Time spent applying one result submission',
            labelnames=['format'],
            buckets=(0.0001, 0.001, 0.01, 0.05, 0.1, 0.5),
            registry=self.registry
        )
        
        # COUNTERS (monotonic increases)
        self.brackets_built = Counter(
            'brackets_built_total',
            'Total number of brackets built',
            labelnames=['format'],
            registry=self.registry
        )
        
        self.results_submitted = Counter(
            'results_submitted_total',
            'Result submissions by outcome',
            labelnames=['format', 'outcome'],  # 'applied' or 'noop'
            registry=self.registry
        )
        
        self.champions_decided = Counter(
            'champions_decided_total',
            'Submissions that produced a tournament winner',
            labelnames=['format'],
            registry=self.registry
        )
        
        self.lock_timeouts = Counter(
            'tournament_lock_timeouts_total',
            'Updates rejected because the tournament lock was held',
            registry=self.registry
        )


class StructlogConfig:
    """Structured logging configuration."""
    
    @staticmethod
    def configure(env: str = 'development', log_level: str = 'INFO'):
        """
        Configure structlog with environment-appropriate settings.
        
        Production: JSON output (machine-readable)
        Development: Console output (human-readable)
        """
        
        shared_processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt='iso'),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
        ]
        
        if env == 'production':
            processors = shared_processors + [
                structlog.processors.dict_tracebacks,
                structlog.processors.JSONRenderer(),
            ]
        else:
            processors = shared_processors + [
                structlog.dev.ConsoleRenderer(),
            ]
        
        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(
                logging.getLevelName(log_level)
            ),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
            cache_logger_on_first_use=True,
        )


class Logger:
    """Wrapper for structured logging with context awareness."""
    
    def __init__(self, module_name: str):
        self.logger = structlog.get_logger(module_name)
        self.module_name = module_name
    
    def log_event(self, event: str, **kwargs):
        """Log structured event with automatic context."""
        ctx = {'correlation_id': CORRELATION_ID.get(), 'module': self.module_name}
        ctx.update(kwargs)
        return self.logger.info(event, **ctx)
    
    def log_warning(self, event: str, **kwargs):
        ctx = {'correlation_id': CORRELATION_ID.get(), 'module': self.module_name}
        ctx.update(kwargs)
        return self.logger.warning(event, **ctx)
    
    def log_error(self, event: str, exc_info=None, **kwargs):
        """Log error with exception details."""
        ctx = {'correlation_id': CORRELATION_ID.get(), 'module': self.module_name}
        ctx.update(kwargs)
        return self.logger.error(event, exc_info=exc_info, **ctx)


def initialize_observability(environment: Optional[str] = None):
    """One-stop initialization for logging and metrics."""
    config = ObservabilitySettings()
    env = environment or config.environment
    StructlogConfig.configure(env=env, log_level=config.log_level)
    metrics = MetricsRegistry()
    
    logger = structlog.get_logger(__name__)
    logger.info(
        'observability_initialized',
        environment=env,
        log_format='json' if env == 'production' else config.log_format,
        metrics_enabled=config.enable_metrics,
    )
    
    return metrics, config


# Global metrics instance
METRICS = None


def get_metrics() -> MetricsRegistry:
    """Lazy-load metrics singleton."""
    global METRICS
    if METRICS is None:
        METRICS, _ = initialize_observability()
    return METRICS
