from collections.abc import Mapping
from enum import Enum
import logging

from pydantic import BaseModel

from metric_mock.status import RpcStatus, missing_fields_status

logger = logging.getLogger(__name__)


class Operation(str, Enum):
    CREATE_METRIC_DESCRIPTOR = 'CreateMetricDescriptor'
    GET_METRIC_DESCRIPTOR = 'GetMetricDescriptor'
    DELETE_METRIC_DESCRIPTOR = 'DeleteMetricDescriptor'
    LIST_METRIC_DESCRIPTORS = 'ListMetricDescriptors'
    GET_MONITORED_RESOURCE_DESCRIPTOR = 'GetMonitoredResourceDescriptor'
    LIST_MONITORED_RESOURCE_DESCRIPTORS = 'ListMonitoredResourceDescriptors'
    LIST_TIME_SERIES = 'ListTimeSeries'
    CREATE_TIME_SERIES = 'CreateTimeSeries'


REQUIRED_FIELDS: Mapping[Operation, tuple[str, ...]] = {
    Operation.CREATE_METRIC_DESCRIPTOR: ('name', 'metric_descriptor'),
    Operation.GET_METRIC_DESCRIPTOR: ('name',),
    Operation.DELETE_METRIC_DESCRIPTOR: ('name',),
    Operation.LIST_METRIC_DESCRIPTORS: ('name',),
    Operation.GET_MONITORED_RESOURCE_DESCRIPTOR: ('name',),
    Operation.LIST_MONITORED_RESOURCE_DESCRIPTORS: ('name',),
    Operation.LIST_TIME_SERIES: ('name', 'filter', 'interval', 'view'),
    Operation.CREATE_TIME_SERIES: ('name', 'time_series'),
}


class UndeclaredOperationError(LookupError):
    """Raised for an operation or field the required-field table doesn't cover."""


def _is_missing(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict, set)):
        return len(value) == 0
    return False


def validate(operation: Operation, request: BaseModel) -> set[str]:
    """Return the mandatory fields of ``operation`` that ``request`` leaves empty.

    Empty strings, empty collections and unset sub-messages count as missing.
    A sub-message that was supplied counts as present even if all of its own
    fields are defaults.
    """
    try:
        required = REQUIRED_FIELDS[operation]
    except KeyError:
        raise UndeclaredOperationError(
            f'No required fields declared for operation {operation!r}'
        ) from None

    fields = type(request).model_fields
    missing: set[str] = set()
    for field in required:
        if field not in fields:
            raise UndeclaredOperationError(
                f'{type(request).__name__} has no field {field!r} '
                f'required by {operation!r}'
            )
        if _is_missing(getattr(request, field)):
            missing.add(field)
    return missing


def validate_request(operation: Operation, request: BaseModel) -> RpcStatus | None:
    missing = validate(operation, request)
    if not missing:
        return None
    logger.debug(
        'Request is missing required fields',
        extra={'operation': operation.value, 'missing_fields': sorted(missing)},
    )
    return missing_fields_status(missing)
