from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MetricKind(str, Enum):
    METRIC_KIND_UNSPECIFIED = 'METRIC_KIND_UNSPECIFIED'
    GAUGE = 'GAUGE'
    DELTA = 'DELTA'
    CUMULATIVE = 'CUMULATIVE'


class ValueType(str, Enum):
    VALUE_TYPE_UNSPECIFIED = 'VALUE_TYPE_UNSPECIFIED'
    BOOL = 'BOOL'
    INT64 = 'INT64'
    DOUBLE = 'DOUBLE'
    STRING = 'STRING'
    DISTRIBUTION = 'DISTRIBUTION'
    MONEY = 'MONEY'


class TimeSeriesView(str, Enum):
    FULL = 'FULL'
    HEADERS = 'HEADERS'


class LabelDescriptor(BaseModel):
    key: str = ''
    value_type: str = 'STRING'
    description: str = ''


class MetricDescriptor(BaseModel):
    name: str = ''
    type: str = ''
    labels: list[LabelDescriptor] = Field(default_factory=list)
    metric_kind: MetricKind = MetricKind.METRIC_KIND_UNSPECIFIED
    value_type: ValueType = ValueType.VALUE_TYPE_UNSPECIFIED
    unit: str = ''
    description: str = ''
    display_name: str = ''
    monitored_resource_types: list[str] = Field(default_factory=list)


class MonitoredResourceDescriptor(BaseModel):
    name: str = ''
    type: str = ''
    display_name: str = ''
    description: str = ''
    labels: list[LabelDescriptor] = Field(default_factory=list)


class Metric(BaseModel):
    type: str = ''
    labels: dict[str, str] = Field(default_factory=dict)


class MonitoredResource(BaseModel):
    type: str = ''
    labels: dict[str, str] = Field(default_factory=dict)


class TimeInterval(BaseModel):
    start_time: datetime | None = None
    end_time: datetime | None = None


class Point(BaseModel):
    interval: TimeInterval = Field(default_factory=TimeInterval)
    value: dict[str, Any] = Field(default_factory=dict)


class TimeSeries(BaseModel):
    metric: Metric = Field(default_factory=Metric)
    resource: MonitoredResource = Field(default_factory=MonitoredResource)
    metric_kind: MetricKind = MetricKind.METRIC_KIND_UNSPECIFIED
    value_type: ValueType = ValueType.VALUE_TYPE_UNSPECIFIED
    points: list[Point] = Field(default_factory=list)
    unit: str = ''


class Empty(BaseModel):
    model_config = ConfigDict(extra='forbid')


# Requests. Fields a client may omit default to None or an empty value so the
# validator, not pydantic, decides what is missing.


class RpcRequest(BaseModel):
    @model_validator(mode='before')
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        # JSON null means "not set": fall back to the field default.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class CreateMetricDescriptorRequest(RpcRequest):
    name: str = ''
    metric_descriptor: MetricDescriptor | None = None


class GetMetricDescriptorRequest(RpcRequest):
    name: str = ''


class DeleteMetricDescriptorRequest(RpcRequest):
    name: str = ''


class ListMetricDescriptorsRequest(RpcRequest):
    name: str = ''


class CreateTimeSeriesRequest(RpcRequest):
    name: str = ''
    time_series: list[TimeSeries] = Field(default_factory=list)


class ListTimeSeriesRequest(RpcRequest):
    name: str = ''
    filter: str = ''
    interval: TimeInterval | None = None
    view: TimeSeriesView | None = None


class GetMonitoredResourceDescriptorRequest(RpcRequest):
    name: str = ''


class ListMonitoredResourceDescriptorsRequest(RpcRequest):
    name: str = ''


# Responses


class ListMetricDescriptorsResponse(BaseModel):
    metric_descriptors: list[MetricDescriptor] = Field(default_factory=list)


class ListTimeSeriesResponse(BaseModel):
    time_series: list[TimeSeries] = Field(default_factory=list)
    next_page_token: str = ''
    execution_errors: list[dict[str, Any]] = Field(default_factory=list)


class ListMonitoredResourceDescriptorsResponse(BaseModel):
    resource_descriptors: list[MonitoredResourceDescriptor] = Field(
        default_factory=list
    )
