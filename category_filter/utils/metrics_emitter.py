"""
CloudWatch metrics emitter for the filter endpoint.

Metrics are buffered per invocation and flushed once at the end of the
request. Emission is best-effort: failures are logged, never raised.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..config.constants import METRICS_NAMESPACE

logger = logging.getLogger(__name__)


class MetricsEmitter:
    """
    Emits CloudWatch metrics for fragment cache and self-request activity.
    """

    def __init__(
        self,
        namespace: str = METRICS_NAMESPACE,
        enabled: bool = True,
        cloudwatch_client=None
    ):
        """
        Initialize metrics emitter.

        Args:
            namespace: CloudWatch namespace for metrics
            enabled: When False, metrics are discarded
            cloudwatch_client: Optional CloudWatch client for testing
        """
        self.namespace = namespace
        self.enabled = enabled
        self._cloudwatch = cloudwatch_client
        self._metric_buffer: List[Dict] = []
        self._buffer_size = 20

    @property
    def cloudwatch(self):
        """CloudWatch client, created on first use."""
        if self._cloudwatch is None:
            self._cloudwatch = boto3.client('cloudwatch')
        return self._cloudwatch

    def emit_cache_result(self, hit: bool) -> None:
        """
        Emit fragment cache hit or miss.

        Args:
            hit: True on cache hit
        """
        self._add_metric(
            metric_name='FragmentCacheHit' if hit else 'FragmentCacheMiss',
            value=1,
            unit='Count'
        )

    def emit_fetch_latency(self, latency_ms: float) -> None:
        """
        Emit self-request latency.

        Args:
            latency_ms: Fetch duration in milliseconds
        """
        self._add_metric(
            metric_name='UpstreamFetchLatency',
            value=latency_ms,
            unit='Milliseconds'
        )

    def emit_error(self, error_type: str) -> None:
        """
        Emit a failed filter request.

        Args:
            error_type: Exception class name
        """
        self._add_metric(
            metric_name='FilterRequestErrors',
            value=1,
            unit='Count',
            dimensions=[{'Name': 'ErrorType', 'Value': error_type}]
        )

    def _add_metric(
        self,
        metric_name: str,
        value: float,
        unit: str,
        dimensions: Optional[List[Dict[str, str]]] = None
    ) -> None:
        """
        Add metric to buffer.

        Args:
            metric_name: Name of the metric
            value: Metric value
            unit: Metric unit
            dimensions: Metric dimensions
        """
        if not self.enabled:
            return

        self._metric_buffer.append({
            'MetricName': metric_name,
            'Value': value,
            'Unit': unit,
            'Dimensions': dimensions or [],
            'Timestamp': datetime.now(timezone.utc)
        })

        if len(self._metric_buffer) >= self._buffer_size:
            self.flush()

    def flush(self) -> None:
        """Flush buffered metrics to CloudWatch."""
        if not self._metric_buffer:
            return

        metrics, self._metric_buffer = self._metric_buffer, []
        try:
            self.cloudwatch.put_metric_data(
                Namespace=self.namespace,
                MetricData=metrics
            )
        except (BotoCoreError, ClientError) as e:
            logger.warning(f"Failed to emit metrics: {e}")
