"""RPC status codes, structured error details and the Ok/Err call result.

Every facade call resolves to either ``Ok(payload)`` or ``Err(RpcStatus)``.
An ``RpcStatus`` carries a machine-readable detail list alongside the code and
the human-readable message, so callers can tell failures apart without
parsing text.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import Annotated, Generic, Literal, NoReturn, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from metric_mock.registry import (
    DescriptorAlreadyExistsError,
    DescriptorNotFoundError,
    RegistryError,
)

T = TypeVar('T')

MISSING_FIELD_MESSAGE = 'missing required field(s)'
DESCRIPTOR_NOT_FOUND_MESSAGE = 'metric descriptor not found'
DUPLICATE_DESCRIPTOR_MESSAGE = 'metric descriptor with this name already exists'


class StatusCode(IntEnum):
    OK = 0
    INVALID_ARGUMENT = 3
    NOT_FOUND = 5
    ALREADY_EXISTS = 6
    INTERNAL = 13

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[StatusCode, int] = {
    StatusCode.OK: 200,
    StatusCode.INVALID_ARGUMENT: 400,
    StatusCode.NOT_FOUND: 404,
    StatusCode.ALREADY_EXISTS: 409,
    StatusCode.INTERNAL: 500,
}


class MissingFieldsDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal['missing_fields'] = 'missing_fields'
    missing_fields: list[str]


class ResourceNameDetail(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal['resource_name'] = 'resource_name'
    conflicting_or_missing_name: str


ErrorDetail = Annotated[
    MissingFieldsDetail | ResourceNameDetail, Field(discriminator='type')
]


class RpcStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: StatusCode
    message: str
    details: list[ErrorDetail] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """Wire shape used by the HTTP transport."""
        return {
            'code': int(self.code),
            'status': self.code.name,
            'message': self.message,
            'details': [d.model_dump() for d in self.details],
        }


class RpcError(Exception):
    def __init__(self, status: RpcStatus) -> None:
        super().__init__(f'{status.code.name}: {status.message}')
        self.status = status


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    status: RpcStatus

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise RpcError(self.status)


RpcResult = Ok[T] | Err


def missing_fields_status(fields: Iterable[str]) -> RpcStatus:
    missing = sorted(fields)
    return RpcStatus(
        code=StatusCode.INVALID_ARGUMENT,
        message=f'{MISSING_FIELD_MESSAGE}: {", ".join(missing)}',
        details=[MissingFieldsDetail(missing_fields=missing)],
    )


def not_found_status(name: str) -> RpcStatus:
    return RpcStatus(
        code=StatusCode.NOT_FOUND,
        message=f'{DESCRIPTOR_NOT_FOUND_MESSAGE}: {name!r}',
        details=[ResourceNameDetail(conflicting_or_missing_name=name)],
    )


def already_exists_status(name: str) -> RpcStatus:
    return RpcStatus(
        code=StatusCode.ALREADY_EXISTS,
        message=f'{DUPLICATE_DESCRIPTOR_MESSAGE}: {name!r}',
        details=[ResourceNameDetail(conflicting_or_missing_name=name)],
    )


def status_from_registry_error(error: RegistryError) -> RpcStatus:
    if isinstance(error, DescriptorAlreadyExistsError):
        return already_exists_status(error.name)
    if isinstance(error, DescriptorNotFoundError):
        return not_found_status(error.name)
    raise TypeError(f'Unmapped registry error: {type(error).__name__}')


def has_missing_fields(status: RpcStatus, fields: Iterable[str]) -> bool:
    """True when ``status`` reports exactly ``fields`` as missing."""
    expected = set(fields)
    return any(
        isinstance(d, MissingFieldsDetail) and set(d.missing_fields) == expected
        for d in status.details
    )


def has_resource_name(status: RpcStatus, name: str) -> bool:
    return any(
        isinstance(d, ResourceNameDetail) and d.conflicting_or_missing_name == name
        for d in status.details
    )
