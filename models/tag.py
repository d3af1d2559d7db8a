"""Datenmodell für ein Merkmal-Tag (Pydantic v2)."""

from pydantic import BaseModel, ConfigDict, Field


class Tag(BaseModel):
    """Merkmal, das den Förder- bzw. Betreuungsaufwand einer Klasse beeinflusst."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    label: str                                  # Eindeutig unter allen Tags
    color_bg: str = Field(alias="colorBg")      # Tailwind-Klasse, z.B. "bg-red-100"
    color_text: str = Field(alias="colorText")  # Tailwind-Klasse, z.B. "text-red-800"
