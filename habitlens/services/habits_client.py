# services/habits_client.py

import asyncio
import json
import logging
from typing import Any, Dict, List, Optional

import aiohttp

from ..config import ClientConfig
from ..models import Habit, HabitLensError
from ..utils.decorators import retry_on_exception

logger = logging.getLogger(__name__)


class HabitsApiError(HabitLensError):
    """Ошибка удалённого API привычек"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class HabitsApiTransientError(HabitsApiError):
    """Таймаут, обрыв соединения или 5xx — запрос можно повторить"""
    pass


class HabitsApiClient:
    """
    Асинхронный клиент API привычек

    Эндпоинты:
    - GET  /habits?userId=...           -> [{id, name}]
    - GET  /habits/{id}/calendar        -> {completedDates: [...], createdAt?}
    - POST /habits/{id}/toggle {date}   -> {completedDates: [...]}
    """

    def __init__(self, config: Optional[ClientConfig] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        self.config = config or ClientConfig()
        self._session = session
        self._owns_session = session is None
        self._request_with_retry = retry_on_exception(
            retries=self.config.retries,
            delay=0.5,
            exceptions=(HabitsApiTransientError,),
        )(self._request_once)

    async def __aenter__(self) -> "HabitsApiClient":
        await self._ensure_session()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def _ensure_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)
            self._session = aiohttp.ClientSession(timeout=timeout)
            self._owns_session = True
        return self._session

    async def close(self):
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.token:
            headers["Authorization"] = f"Bearer {self.config.token}"
        return headers

    async def _request_once(self, method: str, path: str, **kwargs) -> Any:
        session = await self._ensure_session()
        url = f"{self.config.base_url}{path}"
        try:
            async with session.request(method, url, headers=self._headers(), **kwargs) as resp:
                text = await resp.text()
                stripped = text.strip()
                data: Any = text
                if stripped.startswith(("{", "[")):
                    try:
                        data = json.loads(stripped)
                    except ValueError:
                        data = text

                if resp.status >= 400:
                    message = f"HTTP {resp.status}"
                    if isinstance(data, dict):
                        message = data.get("error") or data.get("message") or message
                    error_cls = HabitsApiTransientError if resp.status >= 500 else HabitsApiError
                    raise error_cls(message, status=resp.status)

                return data
        except asyncio.TimeoutError:
            raise HabitsApiTransientError("Время ожидания запроса истекло")
        except aiohttp.ClientError as e:
            raise HabitsApiTransientError(f"Ошибка соединения: {e}")

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        logger.debug(f"{method} {path}")
        return await self._request_with_retry(method, path, **kwargs)

    # ===== ПРИВЫЧКИ =====

    async def list_habits(self, user_id: Optional[str] = None) -> List[Habit]:
        """Список привычек пользователя без истории выполнений"""
        params = {}
        user_id = user_id or self.config.user_id
        if user_id:
            params["userId"] = user_id

        data = await self._request("GET", "/habits", params=params)
        if not isinstance(data, list):
            raise HabitsApiError("Неожиданный ответ /habits: ожидался список")

        habits = []
        for item in data:
            if not isinstance(item, dict) or "id" not in item:
                logger.warning(f"⚠️ Пропущена запись привычки без id: {item!r}")
                continue
            habits.append(Habit(id=str(item["id"]), name=str(item.get("name", ""))))
        return habits

    async def get_habit_calendar(self, habit_id: str) -> Dict[str, Any]:
        data = await self._request("GET", f"/habits/{habit_id}/calendar")
        if not isinstance(data, dict):
            raise HabitsApiError(f"Неожиданный ответ календаря привычки {habit_id}")
        return data

    async def toggle_on_date(self, habit_id: str, date_key: str) -> Dict[str, Any]:
        return await self._request("POST", f"/habits/{habit_id}/toggle", json={"date": date_key})
