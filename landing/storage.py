import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from . import models, schemas

logger = logging.getLogger(__name__)

# Applied on top of the column defaults when the settings row is first created.
SETTINGS_SEED = {
    "logo_url": "https://placehold.co/200x80/000000/FFFFFF/png?text=LOGO",
    "background_url": "",
    "button_color": "#3b82f6",
    "login_url": "/login",
    "register_url": "/register",
    "desktop_columns": 4,
    "mobile_columns": 3,
    "game_icon_size": 50,
    "site_title": "Game Site",
}

DEMO_GAMES = [
    {
        "provider": "PRAGMATIC PLAY",
        "name": "GATES OF OLYMPUS",
        "deposit": "20.000",
        "withdraw": "50.000",
        "bet": "200",
        "image_url": "https://placehold.co/300x300/1e3a8a/FFFFFF/png?text=OLYMPUS",
        "icon_url": "https://placehold.co/50x50/1e3a8a/FFFFFF/png?text=P",
        "outline_color": "#fbbf24",
    },
    {
        "provider": "PG SOFT",
        "name": "MAHJONG WAYS 2",
        "deposit": "20.000",
        "withdraw": "50.000",
        "bet": "200",
        "image_url": "https://placehold.co/300x300/991b1b/FFFFFF/png?text=MAHJONG",
        "icon_url": "https://placehold.co/50x50/991b1b/FFFFFF/png?text=PG",
        "outline_color": "#ef4444",
    },
    {
        "provider": "HABANERO",
        "name": "KOI GATE",
        "deposit": "10.000",
        "withdraw": "50.000",
        "bet": "180",
        "image_url": "https://placehold.co/300x300/065f46/FFFFFF/png?text=KOI",
        "icon_url": "https://placehold.co/50x50/065f46/FFFFFF/png?text=H",
        "outline_color": "#34d399",
    },
    {
        "provider": "SPADEGAMING",
        "name": "BROTHERS KINGDOM",
        "deposit": "20.000",
        "withdraw": "50.000",
        "bet": "200",
        "image_url": "https://placehold.co/300x300/4c1d95/FFFFFF/png?text=KINGDOM",
        "icon_url": "https://placehold.co/50x50/4c1d95/FFFFFF/png?text=S",
        "outline_color": "#a78bfa",
    },
]


def apply_changes(row, changes: dict) -> None:
    for key, value in changes.items():
        setattr(row, key, value)


class DatabaseStorage:
    """CRUD over the landing page content, one method per entity and operation.

    ``update_*`` returns ``None`` and ``delete_*`` returns ``False`` when the
    id does not exist; callers decide whether that is a 404.
    """

    def __init__(self, db: Session):
        self.db = db

    # Users

    def get_user(self, user_id: int) -> Optional[models.User]:
        return self.db.get(models.User, user_id)

    def get_user_by_username(self, username: str) -> Optional[models.User]:
        return (
            self.db.query(models.User)
            .filter(models.User.username == username)
            .first()
        )

    def create_user(self, data: schemas.UserCreate) -> models.User:
        user = models.User(**data.model_dump())
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    # Settings

    def get_settings(self) -> models.Settings:
        existing = self.db.query(models.Settings).order_by(models.Settings.id.asc()).first()
        if existing:
            return existing
        created = models.Settings(**SETTINGS_SEED)
        self.db.add(created)
        self.db.commit()
        self.db.refresh(created)
        logger.info("Created default settings row id=%s", created.id)
        return created

    def update_settings(self, patch: schemas.SettingsUpdate) -> models.Settings:
        existing = self.db.query(models.Settings).order_by(models.Settings.id.asc()).first()
        if existing is None:
            existing = models.Settings()
            self.db.add(existing)
        apply_changes(existing, patch.changes())
        self.db.commit()
        self.db.refresh(existing)
        return existing

    # Games

    def get_games(self) -> List[models.Game]:
        return (
            self.db.query(models.Game)
            .order_by(models.Game.created_at.asc(), models.Game.id.asc())
            .all()
        )

    def get_game(self, game_id: int) -> Optional[models.Game]:
        return self.db.get(models.Game, game_id)

    def create_game(self, data: schemas.GameCreate) -> models.Game:
        game = models.Game(**data.model_dump())
        self.db.add(game)
        self.db.commit()
        self.db.refresh(game)
        return game

    def update_game(self, game_id: int, patch: schemas.GameUpdate) -> Optional[models.Game]:
        game = self.get_game(game_id)
        if game is None:
            return None
        apply_changes(game, patch.changes())
        self.db.commit()
        self.db.refresh(game)
        return game

    def delete_game(self, game_id: int) -> bool:
        deleted = (
            self.db.query(models.Game)
            .filter(models.Game.id == game_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    # Buttons

    def get_buttons(self) -> List[models.Button]:
        return (
            self.db.query(models.Button)
            .order_by(models.Button.sort_order.asc(), models.Button.id.asc())
            .all()
        )

    def get_button(self, button_id: int) -> Optional[models.Button]:
        return self.db.get(models.Button, button_id)

    def create_button(self, data: schemas.ButtonCreate) -> models.Button:
        button = models.Button(**data.model_dump())
        self.db.add(button)
        self.db.commit()
        self.db.refresh(button)
        return button

    def update_button(
        self, button_id: int, patch: schemas.ButtonUpdate
    ) -> Optional[models.Button]:
        button = self.get_button(button_id)
        if button is None:
            return None
        apply_changes(button, patch.changes())
        self.db.commit()
        self.db.refresh(button)
        return button

    def delete_button(self, button_id: int) -> bool:
        deleted = (
            self.db.query(models.Button)
            .filter(models.Button.id == button_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        return deleted > 0

    # Startup seeding

    def seed_admin(self, username: str, password: str) -> Optional[models.User]:
        if self.get_user_by_username(username):
            return None
        user = self.create_user(
            schemas.UserCreate(username=username, password=password, is_admin=True)
        )
        logger.info("Admin user %r seeded.", username)
        return user

    def seed_demo_games(self) -> int:
        if self.db.query(models.Game).count():
            return 0
        stamp = datetime.now().strftime("%m/%d/%Y, %I:%M:%S %p")
        for entry in DEMO_GAMES:
            self.create_game(
                schemas.GameCreate(date_time=stamp, is_published=True, **entry)
            )
        logger.info("Seeded %d demo games.", len(DEMO_GAMES))
        return len(DEMO_GAMES)
