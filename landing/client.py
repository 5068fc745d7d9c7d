"""Typed client for the landing page API.

Every read goes through a small query cache keyed by the API path. Mutations
invalidate the cache key they affect once they succeed, so the next read
refetches. Success and failure are reported through an optional ``notify``
callback as :class:`Toast` events, mirroring what the admin dashboard shows.

Works with any ``httpx.Client``, including ``fastapi.testclient.TestClient``::

    client = LandingClient(httpx.Client(base_url="http://localhost:5000"))
    client.login("admin", "secret")
    client.update_settings(site_title="Lucky Spins")
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
from pydantic import BaseModel, ValidationError

from . import schemas

logger = logging.getLogger(__name__)

SETTINGS_PATH = "/api/settings"
GAMES_PATH = "/api/games"
BUTTONS_PATH = "/api/buttons"
USER_PATH = "/api/user"
LOGIN_PATH = "/api/login"
LOGOUT_PATH = "/api/logout"
UPLOAD_PATH = "/api/upload"

DEFAULT_QUERY_RETRIES = 3


@dataclass(frozen=True)
class Toast:
    title: str
    description: str = ""
    variant: str = "default"


class ApiError(Exception):
    def __init__(self, status_code: int, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.field = field

    def __repr__(self) -> str:
        return f"ApiError({self.status_code}, {self.message!r}, field={self.field!r})"


class QueryCache:
    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def get(self, key: str, default=None):
        return self._entries.get(key, default)

    def has(self, key: str) -> bool:
        return key in self._entries

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()


def error_from_response(response: httpx.Response) -> ApiError:
    message = response.reason_phrase or f"HTTP {response.status_code}"
    field = None
    if response.content:
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            message = body.get("message") or message
            field = body.get("field")
        elif response.text:
            message = response.text
    return ApiError(response.status_code, message, field)


def error_from_validation(exc: ValidationError, model) -> ApiError:
    first = exc.errors()[0]
    parts = []
    for part in first["loc"]:
        info = model.model_fields.get(part) if isinstance(part, str) else None
        parts.append((info.alias or part) if info is not None else str(part))
    return ApiError(400, first["msg"], ".".join(parts))


def to_payload(data: Union[BaseModel, Dict[str, Any]], model, partial: bool = False) -> dict:
    """Validate ``data`` against ``model`` and dump it with wire names.

    Raises :class:`ApiError` (400) with the first failing field, the same shape
    the server answers with.
    """
    if not isinstance(data, model):
        try:
            data = model.model_validate(data)
        except ValidationError as exc:
            raise error_from_validation(exc, model) from exc
    return data.model_dump(mode="json", by_alias=True, exclude_unset=partial)


class LandingClient:
    def __init__(
        self,
        http: httpx.Client,
        notify: Optional[Callable[[Toast], None]] = None,
        retries: int = DEFAULT_QUERY_RETRIES,
    ):
        self.http = http
        self.notify = notify
        self.retries = retries
        self.cache = QueryCache()
        self._in_flight = 0

    @property
    def is_loading(self) -> bool:
        return self._in_flight > 0

    @contextmanager
    def _loading(self):
        self._in_flight += 1
        try:
            yield
        finally:
            self._in_flight -= 1

    def _toast(self, title: str, description: str = "", variant: str = "default") -> None:
        if self.notify is not None:
            self.notify(Toast(title=title, description=description, variant=variant))

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        with self._loading():
            response = self.http.request(method, path, **kwargs)
        if response.is_error:
            raise error_from_response(response)
        return response

    # Queries

    def _query(self, path: str, parse: Callable[[Any], Any], retries: Optional[int] = None):
        if self.cache.has(path):
            return self.cache.get(path)
        attempts = (self.retries if retries is None else retries) + 1
        for attempt in range(1, attempts + 1):
            try:
                response = self._send("GET", path)
                break
            except (httpx.TransportError, ApiError) as exc:
                retryable = not isinstance(exc, ApiError) or exc.status_code >= 500
                if not retryable or attempt == attempts:
                    raise
                logger.debug("GET %s failed (attempt %d/%d): %r", path, attempt, attempts, exc)
        value = parse(response.json())
        self.cache.set(path, value)
        return value

    def settings(self) -> schemas.SettingsItem:
        return self._query(SETTINGS_PATH, schemas.SettingsItem.model_validate)

    def games(self) -> List[schemas.GameItem]:
        return self._query(
            GAMES_PATH, lambda rows: [schemas.GameItem.model_validate(row) for row in rows]
        )

    def buttons(self) -> List[schemas.ButtonItem]:
        return self._query(
            BUTTONS_PATH, lambda rows: [schemas.ButtonItem.model_validate(row) for row in rows]
        )

    def published_games(self) -> List[schemas.GameItem]:
        """Games shown on the public page."""
        return [game for game in self.games() if game.is_published]

    def visible_buttons(self) -> List[schemas.ButtonItem]:
        """Buttons shown on the public page, in display order."""
        return [button for button in self.buttons() if button.is_visible]

    def user(self) -> Optional[schemas.UserItem]:
        """Current user, or ``None`` when logged out. Never retried."""
        try:
            return self._query(
                USER_PATH,
                lambda body: None if body is None else schemas.UserItem.model_validate(body),
                retries=0,
            )
        except ApiError as exc:
            if exc.status_code == 401:
                self.cache.set(USER_PATH, None)
                return None
            raise

    # Mutations

    def _mutate(
        self,
        method: str,
        path: str,
        invalidates: str,
        success: Optional[str],
        failure: str = "Error",
        body: Union[BaseModel, Dict[str, Any], None] = None,
        model=None,
        partial: bool = False,
        **kwargs,
    ) -> httpx.Response:
        try:
            if model is not None:
                kwargs["json"] = to_payload(body or {}, model, partial=partial)
            response = self._send(method, path, **kwargs)
        except ApiError as exc:
            self._toast(failure, exc.message, "destructive")
            raise
        except httpx.TransportError as exc:
            self._toast(failure, str(exc) or type(exc).__name__, "destructive")
            raise
        self.cache.invalidate(invalidates)
        if success:
            self._toast(success)
        return response

    def login(self, username: str, password: str) -> str:
        response = self._mutate(
            "POST",
            LOGIN_PATH,
            invalidates=USER_PATH,
            success=None,
            failure="Login failed",
            json={"username": username, "password": password},
        )
        return response.json()["message"]

    def logout(self) -> None:
        with self._loading():
            self.http.post(LOGOUT_PATH)
        self.cache.clear()
        self.cache.set(USER_PATH, None)

    def update_settings(self, **changes) -> schemas.SettingsItem:
        response = self._mutate(
            "PATCH",
            SETTINGS_PATH,
            invalidates=SETTINGS_PATH,
            success="Settings saved",
            body=changes,
            model=schemas.SettingsUpdate,
            partial=True,
        )
        return schemas.SettingsItem.model_validate(response.json())

    def create_game(self, data: Union[schemas.GameCreate, Dict[str, Any]]) -> schemas.GameItem:
        response = self._mutate(
            "POST",
            GAMES_PATH,
            invalidates=GAMES_PATH,
            success="Game created",
            body=data,
            model=schemas.GameCreate,
        )
        return schemas.GameItem.model_validate(response.json())

    def update_game(self, game_id: int, **changes) -> schemas.GameItem:
        response = self._mutate(
            "PUT",
            f"{GAMES_PATH}/{game_id}",
            invalidates=GAMES_PATH,
            success="Game updated",
            body=changes,
            model=schemas.GameUpdate,
            partial=True,
        )
        return schemas.GameItem.model_validate(response.json())

    def delete_game(self, game_id: int) -> None:
        self._mutate(
            "DELETE", f"{GAMES_PATH}/{game_id}", invalidates=GAMES_PATH, success="Game deleted"
        )

    def duplicate_game(self, game: schemas.GameItem) -> schemas.GameItem:
        """Create an independent copy of ``game`` named ``"<name> (Copy)"``."""
        data = game.model_dump(exclude={"id", "created_at"})
        data["name"] = f"{game.name} (Copy)"
        return self.create_game(schemas.GameCreate(**data))

    def create_button(
        self, data: Union[schemas.ButtonCreate, Dict[str, Any], None] = None
    ) -> schemas.ButtonItem:
        response = self._mutate(
            "POST",
            BUTTONS_PATH,
            invalidates=BUTTONS_PATH,
            success="Button created",
            body=data,
            model=schemas.ButtonCreate,
        )
        return schemas.ButtonItem.model_validate(response.json())

    def update_button(self, button_id: int, **changes) -> schemas.ButtonItem:
        response = self._mutate(
            "PUT",
            f"{BUTTONS_PATH}/{button_id}",
            invalidates=BUTTONS_PATH,
            success="Button updated",
            body=changes,
            model=schemas.ButtonUpdate,
            partial=True,
        )
        return schemas.ButtonItem.model_validate(response.json())

    def delete_button(self, button_id: int) -> None:
        self._mutate(
            "DELETE",
            f"{BUTTONS_PATH}/{button_id}",
            invalidates=BUTTONS_PATH,
            success="Button deleted",
        )

    def upload(self, filename: str, content: bytes, content_type: str = "application/octet-stream") -> str:
        """Upload a file and return its public URL."""
        try:
            response = self._send(
                "POST", UPLOAD_PATH, files={"file": (filename, content, content_type)}
            )
        except ApiError as exc:
            self._toast("Upload failed", exc.message, "destructive")
            raise
        except httpx.TransportError as exc:
            self._toast("Upload failed", str(exc) or type(exc).__name__, "destructive")
            raise
        return response.json()["url"]
