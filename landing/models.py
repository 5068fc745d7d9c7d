from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text

from .database import Base


class Settings(Base):
    """Site-wide display configuration. Exactly one row is kept."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, index=True)
    logo_url = Column(Text, default="", nullable=False)
    background_url = Column(Text, default="", nullable=False)
    button_color = Column(String, default="#3b82f6", nullable=False)
    button_outline_color = Column(String, default="#60a5fa", nullable=False)
    button_shape = Column(String, default="rounded-full", nullable=False)
    login_url = Column(Text, default="#", nullable=False)
    register_url = Column(Text, default="#", nullable=False)
    desktop_columns = Column(Integer, default=4, nullable=False)
    mobile_columns = Column(Integer, default=3, nullable=False)
    game_icon_size = Column(Integer, default=50, nullable=False)
    logo_size = Column(Integer, default=220, nullable=False)
    site_title = Column(String, default="Landing Page", nullable=False)
    outline_animation = Column(String, default="pulse", nullable=False)
    outline_animation_speed = Column(Integer, default=3, nullable=False)
    game_card_size = Column(Integer, default=200, nullable=False)
    outline_thickness = Column(Integer, default=2, nullable=False)
    snow_enabled = Column(Boolean, default=False, nullable=False)
    snow_speed = Column(Integer, default=5, nullable=False)
    snow_amount = Column(Integer, default=50, nullable=False)
    snow_particle_size = Column(Integer, default=20, nullable=False)
    snow_image_url_1 = Column(Text, default="", nullable=False)
    snow_image_url_2 = Column(Text, default="", nullable=False)
    snow_image_url_3 = Column(Text, default="", nullable=False)
    snow_image_url_4 = Column(Text, default="", nullable=False)
    card_bg_color = Column(String, default="#0c1929", nullable=False)
    button_height = Column(Integer, default=48, nullable=False)
    button_width = Column(Integer, default=300, nullable=False)
    bg_color = Column(String, default="#020617", nullable=False)
    site_description = Column(Text, default="", nullable=False)
    site_description_size = Column(Integer, default=16, nullable=False)
    site_description_color = Column(String, default="#ffffff", nullable=False)
    marquee_text = Column(Text, default="", nullable=False)
    marquee_speed = Column(Integer, default=10, nullable=False)
    marquee_color = Column(String, default="#ffffff", nullable=False)
    marquee_bg_color = Column(String, default="#1e293b", nullable=False)
    marquee_enabled = Column(Boolean, default=False, nullable=False)


class Game(Base):
    __tablename__ = "games"

    id = Column(Integer, primary_key=True, index=True)
    provider = Column(String, nullable=False)
    name = Column(String, nullable=False)
    # display strings such as "20.000", never parsed
    deposit = Column(String, nullable=False)
    withdraw = Column(String, nullable=False)
    bet = Column(String, nullable=False)
    date_time = Column(String, nullable=False)
    image_url = Column(Text, nullable=False)
    icon_url = Column(Text, nullable=True)
    icon_url_2 = Column(Text, nullable=True)
    outline_color = Column(String, default="#ffffff", nullable=False)
    outline_color_end = Column(String, default="#ff0000", nullable=False)
    is_published = Column(Boolean, default=True, nullable=False)
    description = Column(String(200), default="", nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Button(Base):
    __tablename__ = "buttons"

    id = Column(Integer, primary_key=True, index=True)
    label = Column(String, default="Button", nullable=False)
    url = Column(Text, default="#", nullable=False)
    color = Column(String, default="#3b82f6", nullable=False)
    outline_color = Column(String, default="#60a5fa", nullable=False)
    width = Column(Integer, default=300, nullable=False)
    height = Column(Integer, default=48, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    is_visible = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    # FIXME: stored and compared as plain text; hash before exposing this outside a trusted deployment
    password = Column(String, nullable=False)
    is_admin = Column(Boolean, default=True, nullable=False)
