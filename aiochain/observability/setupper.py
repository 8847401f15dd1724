"""Observability setup for applications using aiochain."""

import logging
import uuid
from typing import Self

from opentelemetry import trace
from opentelemetry.sdk.resources import SERVICE_INSTANCE_ID, SERVICE_NAME, SERVICE_NAMESPACE, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter, SimpleSpanProcessor, SpanExporter

from aiochain.configs.observability import ObservabilityConfig

logger = logging.getLogger(__name__)

LIBRARY_LOGGER_NAME = "aiochain"
DEFAULT_LOG_FORMAT = "time=%(asctime)s level=%(levelname)s logger=%(name)s msg=%(message)r"


class ObservabilitySetupper:
    """Observability setupper."""

    def __init__(
        self,
        config: ObservabilityConfig | None = None,
        service_name: str | None = None,
    ) -> None:
        """Initialize the observability setupper.

        Args:
            config: The observability config.
            If None, the default observability config will be used.
            See `aiochain.configs.observability.ObservabilityConfig` for more details.
            service_name: The name of the service to create the resource with.
            The resource itself can be overwritten with the `ObservabilitySetupper.with_resource` method.

        """
        self._config = config or ObservabilityConfig()
        self._resource = Resource.create(
            attributes={SERVICE_INSTANCE_ID: str(uuid.uuid4())}
            | ({SERVICE_NAMESPACE: self._config.service_namespace} if self._config.service_namespace else {})
            | ({SERVICE_NAME: service_name} if service_name else {})
        )

        self._tracer_provider: TracerProvider | None = None

    def with_resource(self, resource: Resource) -> Self:
        """Set the resource for the observability.

        Args:
            resource: The resource to use for the observability.
            See `opentelemetry.sdk.resources.Resource` for more details.

        """
        self._resource = resource
        return self

    def get_resource(self) -> Resource:
        """Get the resource for the observability."""
        return self._resource

    def setup_logging(self, level: int | str | None = None, formatter: logging.Formatter | None = None) -> Self:
        """Setup logging.

        Sets the level of the aiochain logger and, if console logs are enabled,
        replaces its handlers with a single console handler.

        Args:
            level: The level to set for the aiochain logger.
                Defaults to `ObservabilityConfig.log_level`.
            formatter: The formatter to use for the console handler.
                If None, a logfmt-like formatter is used.

        """
        library_logger = logging.getLogger(LIBRARY_LOGGER_NAME)
        library_logger.setLevel(level if level is not None else self._config.log_level.upper())

        if self._config.enable_console_logs:
            for handler in library_logger.handlers[:]:
                library_logger.removeHandler(handler)

            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter or logging.Formatter(DEFAULT_LOG_FORMAT))
            library_logger.addHandler(console_handler)

        logger.info("Logging has been setup")

        return self

    def setup_tracing(self, *exporters: SpanExporter) -> Self:
        """Setup tracing.

        Installs a global tracer provider, so spans of terminal operations get exported.

        Args:
            exporters: Extra span exporters, attached with a simple (synchronous) processor.

        """
        tracer_provider = TracerProvider(resource=self._resource)

        if self._config.enable_console_tracer:
            tracer_provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
            logger.info("Enabled console span exporter")

        for exporter in exporters:
            tracer_provider.add_span_processor(SimpleSpanProcessor(exporter))

        trace.set_tracer_provider(tracer_provider)

        self._tracer_provider = tracer_provider

        logger.info("Tracing has been setup")

        return self

    def get_tracer_provider(self) -> TracerProvider | None:
        """Get the tracer provider for the observability.

        Returns:
            TracerProvider | None: The tracer provider for the observability.
            If None, the tracer provider has not been setup.

        """
        return self._tracer_provider
