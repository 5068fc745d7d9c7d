from datetime import datetime
from typing import ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class PatchModel(CamelModel):
    """Partial update: absent fields are left alone, explicit nulls are rejected
    unless the column is nullable."""

    nullable_fields: ClassVar[FrozenSet[str]] = frozenset()

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value, info: ValidationInfo):
        if value is None and info.field_name not in cls.nullable_fields:
            raise ValueError("Expected a value, received null")
        return value

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


# Settings


class SettingsItem(CamelModel):
    id: int
    logo_url: str
    background_url: str
    button_color: str
    button_outline_color: str
    button_shape: str
    login_url: str
    register_url: str
    desktop_columns: int
    mobile_columns: int
    game_icon_size: int
    logo_size: int
    site_title: str
    outline_animation: str
    outline_animation_speed: int
    game_card_size: int
    outline_thickness: int
    snow_enabled: bool
    snow_speed: int
    snow_amount: int
    snow_particle_size: int
    snow_image_url_1: str
    snow_image_url_2: str
    snow_image_url_3: str
    snow_image_url_4: str
    card_bg_color: str
    button_height: int
    button_width: int
    bg_color: str
    site_description: str
    site_description_size: int
    site_description_color: str
    marquee_text: str
    marquee_speed: int
    marquee_color: str
    marquee_bg_color: str
    marquee_enabled: bool


class SettingsUpdate(PatchModel):
    logo_url: Optional[str] = None
    background_url: Optional[str] = None
    button_color: Optional[str] = None
    button_outline_color: Optional[str] = None
    button_shape: Optional[str] = None
    login_url: Optional[str] = None
    register_url: Optional[str] = None
    desktop_columns: Optional[int] = None
    mobile_columns: Optional[int] = None
    game_icon_size: Optional[int] = None
    logo_size: Optional[int] = None
    site_title: Optional[str] = None
    outline_animation: Optional[str] = None
    outline_animation_speed: Optional[int] = None
    game_card_size: Optional[int] = None
    outline_thickness: Optional[int] = None
    snow_enabled: Optional[bool] = None
    snow_speed: Optional[int] = None
    snow_amount: Optional[int] = None
    snow_particle_size: Optional[int] = None
    snow_image_url_1: Optional[str] = None
    snow_image_url_2: Optional[str] = None
    snow_image_url_3: Optional[str] = None
    snow_image_url_4: Optional[str] = None
    card_bg_color: Optional[str] = None
    button_height: Optional[int] = None
    button_width: Optional[int] = None
    bg_color: Optional[str] = None
    site_description: Optional[str] = None
    site_description_size: Optional[int] = None
    site_description_color: Optional[str] = None
    marquee_text: Optional[str] = None
    marquee_speed: Optional[int] = None
    marquee_color: Optional[str] = None
    marquee_bg_color: Optional[str] = None
    marquee_enabled: Optional[bool] = None


# Games


class GameCreate(CamelModel):
    provider: str = Field(min_length=1)
    name: str = Field(min_length=1)
    deposit: str
    withdraw: str
    bet: str
    date_time: str
    image_url: str = Field(min_length=1)
    icon_url: Optional[str] = None
    icon_url_2: Optional[str] = None
    outline_color: str = "#ffffff"
    outline_color_end: str = "#ff0000"
    is_published: bool = True
    description: str = Field(default="", max_length=200)


class GameUpdate(PatchModel):
    nullable_fields: ClassVar[FrozenSet[str]] = frozenset({"icon_url", "icon_url_2"})

    provider: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=1)
    deposit: Optional[str] = None
    withdraw: Optional[str] = None
    bet: Optional[str] = None
    date_time: Optional[str] = None
    image_url: Optional[str] = Field(default=None, min_length=1)
    icon_url: Optional[str] = None
    icon_url_2: Optional[str] = None
    outline_color: Optional[str] = None
    outline_color_end: Optional[str] = None
    is_published: Optional[bool] = None
    description: Optional[str] = Field(default=None, max_length=200)


class GameItem(CamelModel):
    id: int
    provider: str
    name: str
    deposit: str
    withdraw: str
    bet: str
    date_time: str
    image_url: str
    icon_url: Optional[str] = None
    icon_url_2: Optional[str] = None
    outline_color: str
    outline_color_end: str
    is_published: bool
    description: str
    created_at: datetime


# Buttons


class ButtonCreate(CamelModel):
    label: str = "Button"
    url: str = "#"
    color: str = "#3b82f6"
    outline_color: str = "#60a5fa"
    width: int = 300
    height: int = 48
    sort_order: int = 0
    is_visible: bool = True


class ButtonUpdate(PatchModel):
    label: Optional[str] = None
    url: Optional[str] = None
    color: Optional[str] = None
    outline_color: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    sort_order: Optional[int] = None
    is_visible: Optional[bool] = None


class ButtonItem(CamelModel):
    id: int
    label: str
    url: str
    color: str
    outline_color: str
    width: int
    height: int
    sort_order: int
    is_visible: bool
    created_at: datetime


# Auth


class LoginRequest(BaseModel):
    username: str
    password: str


class UserCreate(CamelModel):
    username: str = Field(min_length=1)
    password: str
    is_admin: bool = True


class UserItem(CamelModel):
    id: int
    username: str
    is_admin: bool


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    url: str
