from typing import Annotated, Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, Response

from metric_mock.dependencies import get_metric_service
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
from metric_mock.service import MetricService
from metric_mock.status import Err, RpcResult, RpcStatus

router = APIRouter(prefix='/google.monitoring.v3.MetricService')

Service = Annotated[MetricService, Depends(get_metric_service)]

ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {'description': 'A required field is missing'},
    404: {'description': 'The metric descriptor does not exist'},
    409: {'description': 'A metric descriptor with this name already exists'},
}


def error_response(status: RpcStatus) -> JSONResponse:
    return JSONResponse(
        status_code=status.code.http_status, content=status.to_payload()
    )


def to_response(result: RpcResult[Any]) -> Response:
    if isinstance(result, Err):
        return error_response(result.status)
    return JSONResponse(content=result.value.model_dump(mode='json'))


@router.post(
    '/CreateMetricDescriptor',
    response_model=MetricDescriptor,
    responses=ERROR_RESPONSES,
)
async def create_metric_descriptor(
    request: CreateMetricDescriptorRequest, service: Service
) -> Response:
    return to_response(await service.create_metric_descriptor(request))


@router.post(
    '/GetMetricDescriptor', response_model=MetricDescriptor, responses=ERROR_RESPONSES
)
async def get_metric_descriptor(
    request: GetMetricDescriptorRequest, service: Service
) -> Response:
    return to_response(await service.get_metric_descriptor(request))


@router.post(
    '/DeleteMetricDescriptor', response_model=Empty, responses=ERROR_RESPONSES
)
async def delete_metric_descriptor(
    request: DeleteMetricDescriptorRequest, service: Service
) -> Response:
    return to_response(await service.delete_metric_descriptor(request))


@router.post(
    '/ListMetricDescriptors',
    response_model=ListMetricDescriptorsResponse,
    responses=ERROR_RESPONSES,
)
async def list_metric_descriptors(
    request: ListMetricDescriptorsRequest, service: Service
) -> Response:
    return to_response(await service.list_metric_descriptors(request))


@router.post('/CreateTimeSeries', response_model=Empty, responses=ERROR_RESPONSES)
async def create_time_series(
    request: CreateTimeSeriesRequest, service: Service
) -> Response:
    return to_response(await service.create_time_series(request))


@router.post(
    '/ListTimeSeries',
    response_model=ListTimeSeriesResponse,
    responses=ERROR_RESPONSES,
)
async def list_time_series(
    request: ListTimeSeriesRequest, service: Service
) -> Response:
    return to_response(await service.list_time_series(request))


@router.post(
    '/GetMonitoredResourceDescriptor',
    response_model=MonitoredResourceDescriptor,
    responses=ERROR_RESPONSES,
)
async def get_monitored_resource_descriptor(
    request: GetMonitoredResourceDescriptorRequest, service: Service
) -> Response:
    return to_response(await service.get_monitored_resource_descriptor(request))


@router.post(
    '/ListMonitoredResourceDescriptors',
    response_model=ListMonitoredResourceDescriptorsResponse,
    responses=ERROR_RESPONSES,
)
async def list_monitored_resource_descriptors(
    request: ListMonitoredResourceDescriptorsRequest, service: Service
) -> Response:
    return to_response(await service.list_monitored_resource_descriptors(request))
