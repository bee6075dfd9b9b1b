import logging
from operator import attrgetter
import threading

from metric_mock.schemas import MetricDescriptor

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name


class DescriptorNotFoundError(RegistryError):
    pass


class DescriptorAlreadyExistsError(RegistryError):
    pass


class DescriptorRegistry:
    """In-memory metric descriptors keyed by descriptor name.

    A single lock serialises every read and write, so a name can only be
    claimed once even when creates race. Descriptors are copied on the way in
    and on the way out; callers never hold a reference to the stored value.
    """

    def __init__(self) -> None:
        self._descriptors: dict[str, MetricDescriptor] = {}
        self._lock = threading.Lock()

    def create(self, descriptor: MetricDescriptor) -> None:
        name = descriptor.name
        with self._lock:
            if name in self._descriptors:
                raise DescriptorAlreadyExistsError(name)
            self._descriptors[name] = descriptor.model_copy(deep=True)
        logger.debug('Metric descriptor stored', extra={'descriptor': name})

    def get(self, name: str) -> MetricDescriptor:
        with self._lock:
            try:
                stored = self._descriptors[name]
            except KeyError:
                raise DescriptorNotFoundError(name) from None
            return stored.model_copy(deep=True)

    def delete(self, name: str) -> None:
        with self._lock:
            if self._descriptors.pop(name, None) is None:
                raise DescriptorNotFoundError(name)
        logger.debug('Metric descriptor removed', extra={'descriptor': name})

    def list(self) -> list[MetricDescriptor]:
        with self._lock:
            stored = sorted(self._descriptors.values(), key=attrgetter('name'))
            return [d.model_copy(deep=True) for d in stored]

    def __len__(self) -> int:
        with self._lock:
            return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._descriptors
