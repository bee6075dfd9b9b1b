from fastapi.testclient import TestClient
import pytest

from metric_mock.main import create_app
from metric_mock.registry import DescriptorRegistry
from metric_mock.schemas import (
    LabelDescriptor,
    MetricDescriptor,
    MetricKind,
    ValueType,
)
from metric_mock.service import MetricService


@pytest.fixture
def registry() -> DescriptorRegistry:
    return DescriptorRegistry()


@pytest.fixture
def service(registry: DescriptorRegistry) -> MetricService:
    return MetricService(registry)


@pytest.fixture
def client(service: MetricService):
    with TestClient(create_app(service)) as test_client:
        yield test_client


def build_descriptor(
    name: str = 'test-metric-descriptor-1', **overrides
) -> MetricDescriptor:
    fields = {
        'name': name,
        'type': f'custom.googleapis.com/{name}',
        'labels': [LabelDescriptor(key='zone', description='Compute zone')],
        'metric_kind': MetricKind.GAUGE,
        'value_type': ValueType.DOUBLE,
        'unit': 's',
        'description': 'Request latency',
        **overrides,
    }
    return MetricDescriptor(**fields)


@pytest.fixture
def make_descriptor():
    return build_descriptor
