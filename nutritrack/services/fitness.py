"""Step data from the Google Fit aggregate API."""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import httpx

from nutritrack.config import get_settings
from nutritrack.errors import ExternalServiceError
from nutritrack.models.fitness import StepData, StepHistory, TodaySteps


logger = logging.getLogger(__name__)

STEP_DATA_TYPE = "com.google.step_count.delta"
STEP_DATA_SOURCE = "derived:com.google.step_count.delta:com.google.android.gms:estimated_steps"
DAY_MILLIS = 24 * 60 * 60 * 1000

CALORIES_PER_STEP = 0.04
METERS_PER_STEP = 0.762


def calories_from_steps(steps: int) -> int:
    return round(steps * CALORIES_PER_STEP)


def distance_km(steps: int) -> float:
    return round(steps * METERS_PER_STEP / 1000, 1)


def _millis(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def _utc_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class StepDataClient:
    """Read-only client for daily step counts."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        now: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self.base_url = base_url or get_settings().google_fit_base_url
        self.timeout = timeout
        self.transport = transport
        self.now = now

    async def _aggregate(self, access_token: str, start: datetime, end: datetime) -> List[StepData]:
        body = {
            "aggregateBy": [{"dataTypeName": STEP_DATA_TYPE, "dataSourceId": STEP_DATA_SOURCE}],
            "bucketByTime": {"durationMillis": DAY_MILLIS},
            "startTimeMillis": _millis(start),
            "endTimeMillis": _millis(end),
        }
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.post(
                    "/dataset:aggregate",
                    headers={"Authorization": f"Bearer {access_token}"},
                    json=body,
                )
                response.raise_for_status()
                return self._parse_buckets(response.json())
        except (httpx.HTTPError, KeyError, ValueError) as e:
            logger.warning("Step data request failed: %s", e)
            raise ExternalServiceError(f"Step data request failed: {e}") from e

    @staticmethod
    def _parse_buckets(payload: Dict[str, Any]) -> List[StepData]:
        days = []
        for bucket in payload.get("bucket", []):
            started = datetime.fromtimestamp(int(bucket["startTimeMillis"]) / 1000, tz=timezone.utc)
            steps = sum(
                value.get("intVal", 0)
                for dataset in bucket.get("dataset", [])
                for point in dataset.get("point", [])
                for value in point.get("value", [])
            )
            days.append(StepData(date=started.date(), steps=steps))
        return days

    async def get_step_history(self, user_id: str, access_token: str, days: int = 7) -> StepHistory:
        """Daily step counts for the last ``days`` days, today included."""
        now = self.now()
        start = _utc_midnight(now.date() - timedelta(days=days - 1))
        data = await self._aggregate(access_token, start, now)

        total = sum(d.steps for d in data)
        return StepHistory(
            user_id=user_id,
            start=start.date(),
            end=now.date(),
            data=data,
            total_steps=total,
            average_steps=round(total / len(data)) if data else 0,
            calories_burned=calories_from_steps(total),
        )

    async def get_today_steps(self, access_token: str) -> TodaySteps:
        now = self.now()
        data = await self._aggregate(access_token, _utc_midnight(now.date()), now)
        steps = sum(d.steps for d in data)
        return TodaySteps(
            date=now.date(),
            steps=steps,
            calories_burned=calories_from_steps(steps),
            distance_km=distance_km(steps),
            timestamp=now,
        )
