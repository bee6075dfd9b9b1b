from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
import uvicorn

from metric_mock.config import settings
from metric_mock.log_config_loader import setup_logging
from metric_mock.router import router as metric_router
from metric_mock.service import MetricService

setup_logging(
    service_name=settings.SERVICE_NAME,
    level=settings.LOG_LEVEL,
    log_format=settings.LOG_FORMAT,
    version=settings.SERVICE_VERSION,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info(
        'Metric mock started',
        extra={'descriptors': len(app.state.metric_service.registry)},
    )
    try:
        yield
    finally:
        logger.info('Metric mock stopped')


def create_app(service: MetricService | None = None) -> FastAPI:
    """Build an app around ``service``, or around a fresh, empty registry."""
    app = FastAPI(title=settings.SERVICE_NAME, lifespan=lifespan)
    app.state.metric_service = service or MetricService.create()

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        logger.debug('Health check...')
        return {'status': 'ok'}

    app.include_router(metric_router)
    return app


app = create_app()


def main() -> None:
    uvicorn.run(
        'metric_mock.main:app',
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == '__main__':
    main()
