import logging
import os
import random
import shutil
import time
from pathlib import Path
from typing import List, Optional

from fastapi import Depends, FastAPI, File, HTTPException, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from fastapi.staticfiles import StaticFiles
from sqlalchemy.orm import Session
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from . import __version__, schemas
from .auth import (
    AdminRequired,
    SessionContext,
    check_password,
    end_session,
    get_session_context,
    require_admin,
    start_session,
)
from .database import BASE_DIR, Base, SessionLocal, engine, get_db
from .storage import DatabaseStorage

logger = logging.getLogger(__name__)

SECRET_KEY = os.environ.get("SESSION_SECRET", "dev-secret")
ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME", "admin")
DEFAULT_ADMIN_PASSWORD = "bell2026"
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", DEFAULT_ADMIN_PASSWORD)
UPLOAD_DIR = Path(os.environ.get("UPLOAD_DIR", str(BASE_DIR / "uploads")))
SEED_DEMO_GAMES = os.environ.get("SEED_DEMO_GAMES", "true").lower() in ("1", "true", "yes")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

UPLOAD_DIR.mkdir(parents=True, exist_ok=True)


def configure_logging() -> None:
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    root.setLevel(LOG_LEVEL)


def get_storage(db: Session = Depends(get_db)) -> DatabaseStorage:
    return DatabaseStorage(db)


def first_error_field(error: dict) -> str:
    if error.get("type") == "json_invalid":
        return ""
    parts = list(error.get("loc", ()))
    if parts and parts[0] in ("body", "query", "path", "header", "cookie"):
        parts = parts[1:]
    return ".".join(str(part) for part in parts)


def generate_upload_name(original: str) -> str:
    suffix = Path(original or "").suffix
    return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}{suffix}"


app = FastAPI(
    title="Landing Page",
    description="Content API for the public landing page and its admin dashboard.",
    version=__version__,
)

app.add_middleware(
    SessionMiddleware,
    secret_key=SECRET_KEY,
    session_cookie="landing_session",
    same_site="lax",
)

app.mount("/uploads", StaticFiles(directory=str(UPLOAD_DIR)), name="uploads")


@app.exception_handler(RequestValidationError)
def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {"msg": "Invalid request", "loc": ()}
    return JSONResponse(
        status_code=400,
        content={"message": first["msg"], "field": first_error_field(first)},
    )


@app.exception_handler(AdminRequired)
def admin_required_handler(request: Request, exc: AdminRequired):
    return Response(status_code=401)


@app.exception_handler(StarletteHTTPException)
def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.on_event("startup")
def startup() -> None:
    configure_logging()
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        storage = DatabaseStorage(db)
        storage.seed_admin(ADMIN_USERNAME, ADMIN_PASSWORD)
        if SEED_DEMO_GAMES:
            storage.seed_demo_games()
    finally:
        db.close()
    if ADMIN_PASSWORD == DEFAULT_ADMIN_PASSWORD:
        logger.warning(
            "ADMIN_PASSWORD is not set; the built-in default admin password is in use "
            "and passwords are stored in plain text."
        )
    logger.info("Uploads served from %s", UPLOAD_DIR)


@app.get("/health", include_in_schema=False)
def health() -> dict:
    return {"status": "ok"}


# Auth


@app.post("/api/login", response_model=schemas.MessageResponse)
def api_login(
    payload: schemas.LoginRequest,
    request: Request,
    storage: DatabaseStorage = Depends(get_storage),
):
    user = storage.get_user_by_username(payload.username)
    if not check_password(user, payload.password):
        logger.info("Failed login for %r", payload.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    start_session(request, user)
    logger.info("User %r logged in", user.username)
    return schemas.MessageResponse(message="Logged in successfully")


@app.post("/api/logout")
def api_logout(request: Request) -> Response:
    end_session(request)
    return Response(status_code=200)


@app.get("/api/user", response_model=Optional[schemas.UserItem])
def api_user(
    context: SessionContext = Depends(get_session_context),
    storage: DatabaseStorage = Depends(get_storage),
):
    if not context.is_authenticated:
        return None
    return storage.get_user(context.user_id)


# Settings


@app.get("/api/settings", response_model=schemas.SettingsItem)
def get_settings(storage: DatabaseStorage = Depends(get_storage)):
    return storage.get_settings()


@app.patch("/api/settings", response_model=schemas.SettingsItem)
def update_settings(
    payload: schemas.SettingsUpdate,
    admin: SessionContext = Depends(require_admin),
    storage: DatabaseStorage = Depends(get_storage),
):
    settings = storage.update_settings(payload)
    logger.info("Settings updated: %s", ", ".join(sorted(payload.changes())) or "-")
    return settings


# Games


@app.get("/api/games", response_model=List[schemas.GameItem])
def list_games(storage: DatabaseStorage = Depends(get_storage)):
    return storage.get_games()


@app.post("/api/games", response_model=schemas.GameItem, status_code=201)
def create_game(
    payload: schemas.GameCreate,
    admin: SessionContext = Depends(require_admin),
    storage: DatabaseStorage = Depends(get_storage),
):
    game = storage.create_game(payload)
    logger.info("Game %s created (%s)", game.id, game.name)
    return game


@app.put("/api/games/{game_id}", response_model=schemas.GameItem)
def update_game(
    game_id: int,
    payload: schemas.GameUpdate,
    admin: SessionContext = Depends(require_admin),
    storage: DatabaseStorage = Depends(get_storage),
):
    game = storage.update_game(game_id, payload)
    if game is None:
        raise HTTPException(status_code=404, detail="Game not found")
    return game


@app.delete("/api/games/{game_id}", status_code=204)
def delete_game(
    game_id: int,
    admin: SessionContext = Depends(require_admin),
    storage: DatabaseStorage = Depends(get_storage),
) -> Response:
    if not storage.delete_game(game_id):
        raise HTTPException(status_code=404, detail="Game not found")
    logger.info("Game %s deleted", game_id)
    return Response(status_code=204)


# Buttons


@app.get("/api/buttons", response_model=List[schemas.ButtonItem])
def list_buttons(storage: DatabaseStorage = Depends(get_storage)):
    return storage.get_buttons()


@app.post("/api/buttons", response_model=schemas.ButtonItem, status_code=201)
def create_button(
    payload: schemas.ButtonCreate,
    admin: SessionContext = Depends(require_admin),
    storage: DatabaseStorage = Depends(get_storage),
):
    button = storage.create_button(payload)
    logger.info("Button %s created (%s)", button.id, button.label)
    return button


@app.put("/api/buttons/{button_id}", response_model=schemas.ButtonItem)
def update_button(
    button_id: int,
    payload: schemas.ButtonUpdate,
    admin: SessionContext = Depends(require_admin),
    storage: DatabaseStorage = Depends(get_storage),
):
    button = storage.update_button(button_id, payload)
    if button is None:
        raise HTTPException(status_code=404, detail="Button not found")
    return button


@app.delete("/api/buttons/{button_id}", status_code=204)
def delete_button(
    button_id: int,
    admin: SessionContext = Depends(require_admin),
    storage: DatabaseStorage = Depends(get_storage),
) -> Response:
    if not storage.delete_button(button_id):
        raise HTTPException(status_code=404, detail="Button not found")
    logger.info("Button %s deleted", button_id)
    return Response(status_code=204)


# Uploads


@app.post("/api/upload", response_model=schemas.UploadResponse)
def upload_file(
    admin: SessionContext = Depends(require_admin),
    file: Optional[UploadFile] = File(None),
):
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded.")
    name = generate_upload_name(file.filename)
    with open(UPLOAD_DIR / name, "wb") as out:
        shutil.copyfileobj(file.file, out)
    logger.info("Stored upload %s (%s)", name, file.filename)
    return schemas.UploadResponse(url=f"/uploads/{name}")


def run() -> None:
    import uvicorn

    uvicorn.run(
        "landing.main:app",
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "5000")),
    )
