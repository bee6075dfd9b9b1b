import logging
from typing import cast

from metric_mock.registry import DescriptorRegistry, RegistryError
from metric_mock.schemas import (
    CreateMetricDescriptorRequest,
    CreateTimeSeriesRequest,
    DeleteMetricDescriptorRequest,
    Empty,
    GetMetricDescriptorRequest,
    GetMonitoredResourceDescriptorRequest,
    ListMetricDescriptorsRequest,
    ListMetricDescriptorsResponse,
    ListMonitoredResourceDescriptorsRequest,
    ListMonitoredResourceDescriptorsResponse,
    ListTimeSeriesRequest,
    ListTimeSeriesResponse,
    MetricDescriptor,
    MonitoredResourceDescriptor,
)
from metric_mock.status import Err, Ok, RpcResult, status_from_registry_error
from metric_mock.validation import Operation, validate_request

logger = logging.getLogger(__name__)


class MetricService:
    """Metric RPC handlers backed by an injected descriptor registry.

    Each handler validates its request, then (for descriptor calls) consults
    the registry. Expected failures come back as ``Err``; nothing is raised
    to the caller except for programmer errors.
    """

    def __init__(self, registry: DescriptorRegistry) -> None:
        self.registry = registry

    @classmethod
    def create(cls) -> 'MetricService':
        return cls(DescriptorRegistry())

    def _registry_failure(self, operation: Operation, error: RegistryError) -> Err:
        status = status_from_registry_error(error)
        logger.debug(
            'Registry rejected request',
            extra={
                'operation': operation.value,
                'descriptor': error.name,
                'code': status.code.name,
            },
        )
        return Err(status)

    async def create_metric_descriptor(
        self, request: CreateMetricDescriptorRequest
    ) -> RpcResult[MetricDescriptor]:
        operation = Operation.CREATE_METRIC_DESCRIPTOR
        if status := validate_request(operation, request):
            return Err(status)
        descriptor = cast(MetricDescriptor, request.metric_descriptor)

        try:
            self.registry.create(descriptor)
        except RegistryError as e:
            return self._registry_failure(operation, e)

        logger.info(
            'Metric descriptor created',
            extra={'descriptor': descriptor.name},
        )
        return Ok(MetricDescriptor())

    async def get_metric_descriptor(
        self, request: GetMetricDescriptorRequest
    ) -> RpcResult[MetricDescriptor]:
        operation = Operation.GET_METRIC_DESCRIPTOR
        if status := validate_request(operation, request):
            return Err(status)

        try:
            descriptor = self.registry.get(request.name)
        except RegistryError as e:
            return self._registry_failure(operation, e)
        return Ok(descriptor)

    async def delete_metric_descriptor(
        self, request: DeleteMetricDescriptorRequest
    ) -> RpcResult[Empty]:
        operation = Operation.DELETE_METRIC_DESCRIPTOR
        if status := validate_request(operation, request):
            return Err(status)

        try:
            self.registry.delete(request.name)
        except RegistryError as e:
            return self._registry_failure(operation, e)

        logger.info('Metric descriptor deleted', extra={'descriptor': request.name})
        return Ok(Empty())

    async def list_metric_descriptors(
        self, request: ListMetricDescriptorsRequest
    ) -> RpcResult[ListMetricDescriptorsResponse]:
        if status := validate_request(Operation.LIST_METRIC_DESCRIPTORS, request):
            return Err(status)
        return Ok(ListMetricDescriptorsResponse(metric_descriptors=self.registry.list()))

    # Time series and monitored resources are acknowledged but never stored.

    async def create_time_series(
        self, request: CreateTimeSeriesRequest
    ) -> RpcResult[Empty]:
        if status := validate_request(Operation.CREATE_TIME_SERIES, request):
            return Err(status)
        logger.debug(
            'Time series accepted', extra={'series_count': len(request.time_series)}
        )
        return Ok(Empty())

    async def list_time_series(
        self, request: ListTimeSeriesRequest
    ) -> RpcResult[ListTimeSeriesResponse]:
        if status := validate_request(Operation.LIST_TIME_SERIES, request):
            return Err(status)
        return Ok(ListTimeSeriesResponse())

    async def get_monitored_resource_descriptor(
        self, request: GetMonitoredResourceDescriptorRequest
    ) -> RpcResult[MonitoredResourceDescriptor]:
        if status := validate_request(
            Operation.GET_MONITORED_RESOURCE_DESCRIPTOR, request
        ):
            return Err(status)
        return Ok(MonitoredResourceDescriptor())

    async def list_monitored_resource_descriptors(
        self, request: ListMonitoredResourceDescriptorsRequest
    ) -> RpcResult[ListMonitoredResourceDescriptorsResponse]:
        if status := validate_request(
            Operation.LIST_MONITORED_RESOURCE_DESCRIPTORS, request
        ):
            return Err(status)
        return Ok(ListMonitoredResourceDescriptorsResponse())
