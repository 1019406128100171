from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)
from ulid import ULID

from clipjoint.utils.text_formatter import menu_label

MENU_LABEL_CHARACTER_LIMIT = 25
CLIP_TEXT_CHARACTER_LIMIT = 20_000

STORED_FIELDS = ("id", "name", "text")


def new_clip_id() -> str:
    # Time-ordered ULID rendered in UUID form so stored ids stay UUID strings.
    return str(ULID.from_datetime(datetime.now()).to_uuid())


class Clip(BaseModel):
    """A named, bounded unit of stored text."""
    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(default_factory=new_clip_id, frozen=True)
    name: str
    text: str

    @model_validator(mode="before")
    @classmethod
    def _require_stored_fields(cls, data: Any, info: ValidationInfo) -> Any:
        # Saved entries must carry every field; only new clips get a fresh id.
        if info.context and info.context.get("stored") and isinstance(data, dict):
            missing = [name for name in STORED_FIELDS if name not in data]
            if missing:
                raise ValueError(f"saved clip is missing {', '.join(missing)}")
        return data

    @field_validator("id")
    @classmethod
    def _id_is_uuid(cls, value: str) -> str:
        UUID(value)
        return value

    @property
    def menu_label(self) -> str:
        return menu_label(self.name, self.text, MENU_LABEL_CHARACTER_LIMIT)


_clip_list = TypeAdapter(List[Clip])


def encode_clips(clips: List[Clip]) -> bytes:
    return _clip_list.dump_json(list(clips))


def decode_clips(data: Optional[bytes]) -> Optional[List[Clip]]:
    """Decode a persisted clip list, or ``None`` when absent or malformed.

    A list that repeats an id is malformed.
    """
    if data is None:
        return None
    try:
        clips = _clip_list.validate_json(data, context={"stored": True})
    except ValidationError:
        return None

    if len({clip.id for clip in clips}) != len(clips):
        return None
    return clips
