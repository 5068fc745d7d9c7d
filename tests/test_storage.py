"""DatabaseStorage used directly, without HTTP."""
from landing import models
from landing.schemas import ButtonUpdate, GameCreate, GameUpdate, SettingsUpdate


def make_game(**overrides) -> GameCreate:
    data = dict(
        provider="HABANERO",
        name="KOI GATE",
        deposit="10.000",
        withdraw="50.000",
        bet="180",
        date_time="now",
        image_url="https://placehold.co/300x300",
    )
    data.update(overrides)
    return GameCreate(**data)


class TestSettingsStorage:
    def test_get_settings_never_missing(self, storage, db_session):
        assert db_session.query(models.Settings).count() == 0
        settings = storage.get_settings()
        assert settings.site_title == "Game Site"
        assert storage.get_settings().id == settings.id
        assert db_session.query(models.Settings).count() == 1

    def test_update_settings_upserts(self, storage, db_session):
        updated = storage.update_settings(SettingsUpdate(snow_amount=80))
        assert updated.snow_amount == 80
        storage.update_settings(SettingsUpdate(marquee_enabled=True))
        assert db_session.query(models.Settings).count() == 1
        current = storage.get_settings()
        assert current.snow_amount == 80
        assert current.marquee_enabled is True


class TestGameStorage:
    def test_update_missing_returns_none(self, storage):
        assert storage.update_game(42, GameUpdate(name="X")) is None

    def test_delete_missing_returns_false(self, storage):
        assert storage.delete_game(42) is False

    def test_crud(self, storage):
        game = storage.create_game(make_game())
        assert storage.get_game(game.id).name == "KOI GATE"
        storage.update_game(game.id, GameUpdate(bet="250"))
        assert storage.get_game(game.id).bet == "250"
        assert storage.delete_game(game.id) is True
        assert storage.get_games() == []


class TestButtonStorage:
    def test_update_missing_returns_none(self, storage):
        assert storage.update_button(7, ButtonUpdate(label="X")) is None

    def test_delete_missing_returns_false(self, storage):
        assert storage.delete_button(7) is False


class TestSeeding:
    def test_seed_admin_once(self, storage):
        assert storage.seed_admin("owner", "pw") is not None
        assert storage.seed_admin("owner", "other") is None
        owner = storage.get_user_by_username("owner")
        assert owner.is_admin is True
        assert owner.password == "pw"

    def test_seed_demo_games_only_when_empty(self, storage):
        assert storage.seed_demo_games() == 4
        assert storage.seed_demo_games() == 0
        names = [g.name for g in storage.get_games()]
        assert names == ["GATES OF OLYMPUS", "MAHJONG WAYS 2", "KOI GATE", "BROTHERS KINGDOM"]

    def test_seed_demo_games_skipped_with_existing(self, storage):
        storage.create_game(make_game())
        assert storage.seed_demo_games() == 0
