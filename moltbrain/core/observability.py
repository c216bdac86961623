"""
Metrics for context assembly.

Counts assemblies and included/excluded observations and tracks the token
usage distribution with prometheus-client. Each collector owns its own
registry, so several collectors can live in one process.
"""

from typing import Optional, Dict

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest


TOKEN_BUCKETS = (50, 100, 250, 500, 1000, 2000, 4000, 8000, 16000, 32000, 64000)


class MetricsCollector:
    """
    Prometheus metrics for the context assembler.

    Example:
        ```python
        metrics = MetricsCollector()
        packer = BudgetPacker(metrics=metrics)
        packer.pack(candidates, "compact", 2000)
        print(metrics.export().decode())
        ```
    """

    def __init__(
        self,
        enabled: bool = True,
        registry: Optional[CollectorRegistry] = None
    ):
        """
        Initialize metrics collector.

        Args:
            enabled: Enable metrics collection
            registry: Registry to register metrics with (a private one by default)
        """
        self.enabled = enabled
        self.registry = registry or CollectorRegistry()

        self.assemblies = Counter(
            'moltbrain_context_assemblies_total',
            'Total context assemblies',
            ['mode', 'status'],
            registry=self.registry
        )

        self.observations = Counter(
            'moltbrain_context_observations_total',
            'Observations offered to the packer by outcome',
            ['mode', 'outcome'],
            registry=self.registry
        )

        self.tokens_used = Histogram(
            'moltbrain_context_tokens_used',
            'Estimated tokens in assembled context',
            ['mode'],
            buckets=TOKEN_BUCKETS,
            registry=self.registry
        )

    def increment_counter(self, name: str, labels: Dict[str, str], value: float = 1):
        """Increment counter metric."""
        if not self.enabled or value <= 0:
            return

        metric = getattr(self, name)
        metric.labels(**labels).inc(value)

    def observe_histogram(self, name: str, labels: Dict[str, str], value: float):
        """Observe histogram metric."""
        if not self.enabled:
            return

        metric = getattr(self, name)
        metric.labels(**labels).observe(value)

    def record_assembly(
        self,
        mode: str,
        tokens_used: int,
        observations_offered: int,
        observations_included: int,
        status: str = "success"
    ):
        """Record metrics for one assembly call."""
        self.increment_counter('assemblies', {'mode': mode, 'status': status})
        if status != "success":
            return

        self.increment_counter(
            'observations',
            {'mode': mode, 'outcome': 'included'},
            observations_included
        )
        self.increment_counter(
            'observations',
            {'mode': mode, 'outcome': 'excluded'},
            observations_offered - observations_included
        )
        self.observe_histogram('tokens_used', {'mode': mode}, tokens_used)

    def get_sample(self, name: str, labels: Optional[Dict[str, str]] = None) -> Optional[float]:
        """Read a single sample value from the registry."""
        return self.registry.get_sample_value(name, labels or {})

    def export(self) -> bytes:
        """Render all metrics in the Prometheus text exposition format."""
        return generate_latest(self.registry)
