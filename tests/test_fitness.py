import json
from datetime import date, datetime, timedelta, timezone

import httpx
import pytest

from nutritrack.errors import ExternalServiceError
from nutritrack.services.fitness import (
    DAY_MILLIS,
    STEP_DATA_TYPE,
    StepDataClient,
    calories_from_steps,
    distance_km,
)


NOW = datetime(2024, 1, 3, 15, 0, tzinfo=timezone.utc)
DAY_START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def bucket(day_offset, *counts):
    start = DAY_START + timedelta(days=day_offset)
    return {
        "startTimeMillis": str(int(start.timestamp() * 1000)),
        "dataset": [{"point": [{"value": [{"intVal": c}]} for c in counts]}],
    }


def client_for(handler):
    return StepDataClient(
        base_url="https://fit.test/users/me",
        transport=httpx.MockTransport(handler),
        now=lambda: NOW,
    )


def test_derived_figures():
    assert calories_from_steps(10000) == 400
    assert distance_km(10000) == 7.6
    assert calories_from_steps(0) == 0


@pytest.mark.asyncio
async def test_step_history():
    requests = []

    def handler(request):
        requests.append(request)
        return httpx.Response(200, json={"bucket": [bucket(0, 3000, 1000), bucket(1, 8000), bucket(2)]})

    history = await client_for(handler).get_step_history("user-1", "token-abc", days=3)

    assert [(d.date, d.steps) for d in history.data] == [
        (date(2024, 1, 1), 4000), (date(2024, 1, 2), 8000), (date(2024, 1, 3), 0)]
    assert history.total_steps == 12000
    assert history.average_steps == 4000
    assert history.calories_burned == 480
    assert (history.start, history.end) == (date(2024, 1, 1), date(2024, 1, 3))

    [request] = requests
    assert request.url.path.endswith("/dataset:aggregate")
    assert request.headers["Authorization"] == "Bearer token-abc"
    body = json.loads(request.content)
    assert body["aggregateBy"][0]["dataTypeName"] == STEP_DATA_TYPE
    assert body["bucketByTime"]["durationMillis"] == DAY_MILLIS
    assert body["startTimeMillis"] == int(DAY_START.timestamp() * 1000)


@pytest.mark.asyncio
async def test_today_steps():
    def handler(request):
        return httpx.Response(200, json={"bucket": [bucket(2, 5000, 2500)]})

    today = await client_for(handler).get_today_steps("token")

    assert today.date == date(2024, 1, 3)
    assert today.steps == 7500
    assert today.calories_burned == 300
    assert today.distance_km == 5.7
    assert today.timestamp == NOW


@pytest.mark.asyncio
async def test_empty_history():
    history = await client_for(lambda request: httpx.Response(200, json={})).get_step_history("u", "t")
    assert history.data == []
    assert history.average_steps == 0


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(401, json={"error": "expired"}),
    httpx.Response(200, json={"bucket": [{"dataset": []}]}),
    httpx.Response(200, text="not json"),
])
async def test_failures_raise_external_service_error(response):
    with pytest.raises(ExternalServiceError):
        await client_for(lambda request: response).get_today_steps("token")
