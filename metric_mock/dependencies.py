from fastapi import HTTPException, Request

from metric_mock.service import MetricService


async def get_metric_service(request: Request) -> MetricService:
    service = getattr(request.app.state, 'metric_service', None)
    if service is None:
        raise HTTPException(status_code=503, detail='Metric service not initialised')
    return service
