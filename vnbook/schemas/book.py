"""
Book content schemas for vnbook.

Defines Pydantic models for the declarative content file:
- Colors and text alignment hints
- Lines of text
- Button actions (next page, jump to a named page, end of book)
- Pages and the book itself
"""

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# -----------------------------------------------------------------------------
# Display hints
# -----------------------------------------------------------------------------

def parse_hex_color(value: str) -> dict[str, float]:
    """Parse '#rrggbb' or '#rrggbbaa' into channel floats in [0, 1]."""
    digits = value.strip().lstrip("#")
    if len(digits) not in (6, 8):
        raise ValueError(f"Invalid hex color: {value!r}")
    try:
        channels = [int(digits[i:i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    except ValueError:
        raise ValueError(f"Invalid hex color: {value!r}") from None
    return dict(zip("rgba", channels))


class Color(BaseModel):
    """RGBA color, channels in [0, 1]."""
    model_config = ConfigDict(frozen=True)

    r: float = Field(..., ge=0.0, le=1.0)
    g: float = Field(..., ge=0.0, le=1.0)
    b: float = Field(..., ge=0.0, le=1.0)
    a: float = Field(default=1.0, ge=0.0, le=1.0)

    @model_validator(mode="before")
    @classmethod
    def coerce_forms(cls, data):
        # Accepts hex strings, [r, g, b(, a)] lists and {"Rgba": {...}} content
        if isinstance(data, str):
            return parse_hex_color(data)
        if isinstance(data, (list, tuple)):
            if len(data) not in (3, 4):
                raise ValueError("Color list must have 3 or 4 channels")
            return dict(zip("rgba", data))
        if isinstance(data, dict) and "Rgba" in data:
            inner = data["Rgba"] or {}
            names = {"red": "r", "green": "g", "blue": "b", "alpha": "a"}
            return {names[k]: v for k, v in inner.items() if k in names}
        return data

    @classmethod
    def rgb(cls, r: float, g: float, b: float, a: float = 1.0) -> "Color":
        return cls(r=r, g=g, b=b, a=a)

    def to_css(self) -> str:
        """CSS rgba() string with 0-255 color channels."""
        return (
            f"rgba({round(self.r * 255)}, {round(self.g * 255)}, "
            f"{round(self.b * 255)}, {self.a:g})"
        )


class TextAlign(str, Enum):
    START = "Start"
    CENTER = "Center"
    END = "End"


def normalize_align(value):
    """Accept 'start' / 'CENTER' spellings for TextAlign."""
    if isinstance(value, str):
        return value.strip().capitalize()
    return value


class Line(BaseModel):
    """One line of page text. Unset hints fall back to engine defaults."""
    model_config = ConfigDict(frozen=True)

    text: str
    align: Optional[TextAlign] = None
    color: Optional[Color] = None
    size: Optional[float] = Field(default=None, gt=0)

    @field_validator("align", mode="before")
    @classmethod
    def align_spelling(cls, v):
        return normalize_align(v)


# -----------------------------------------------------------------------------
# Button actions
# -----------------------------------------------------------------------------

class NextPage(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["next_page"] = "next_page"


class JumpToPage(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["jump_to_page"] = "jump_to_page"
    target: str


class JumpToEnd(BaseModel):
    model_config = ConfigDict(frozen=True)
    kind: Literal["jump_to_end"] = "jump_to_end"


Action = Annotated[
    Union[NextPage, JumpToPage, JumpToEnd],
    Field(discriminator="kind"),
]

# Content files name actions in PascalCase
ACTION_NAMES = {
    "NextPage": "next_page",
    "JumpToPage": "jump_to_page",
    "JumpToEnd": "jump_to_end",
}


def normalize_action(value):
    """
    Convert content-file action forms into the tagged model layout.

    Accepted forms:
        "NextPage", "JumpToEnd"
        {"JumpToPage": "page_name"}
        {"kind": "jump_to_page", "target": "page_name"}
    """
    if isinstance(value, (NextPage, JumpToPage, JumpToEnd)):
        return value
    if isinstance(value, str):
        kind = ACTION_NAMES.get(value, value)
        if kind == "jump_to_page":
            raise ValueError("JumpToPage requires a target page name")
        return {"kind": kind}
    if isinstance(value, dict) and "kind" not in value and len(value) == 1:
        name, payload = next(iter(value.items()))
        kind = ACTION_NAMES.get(name, name)
        if kind == "jump_to_page":
            return {"kind": kind, "target": payload}
        return {"kind": kind}
    return value


class Button(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    action: Action

    @field_validator("action", mode="before")
    @classmethod
    def action_forms(cls, v):
        return normalize_action(v)


# -----------------------------------------------------------------------------
# Pages and book
# -----------------------------------------------------------------------------

class Page(BaseModel):
    """
    One screen of content.

    `buttons` maps an input name (e.g. "green", "space", "1") to a Button.
    When absent the book's `default_buttons` apply. Mapping order is the
    document order and is the order buttons are scanned and shown in.
    """
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None        # cross-reference key for JumpToPage
    is_final: bool = False            # last message before the scoreboard
    lines: list[Line] = []
    buttons: Optional[dict[str, Button]] = None
    background_color: Optional[Color] = None
    content_alignment: Optional[TextAlign] = None

    @field_validator("content_alignment", mode="before")
    @classmethod
    def align_spelling(cls, v):
        return normalize_align(v)


class Book(BaseModel):
    model_config = ConfigDict(frozen=True)

    pages: list[Page] = []
    line_spacing: float = Field(default=30.0, ge=0)
    default_buttons: dict[str, Button] = {}

    def page_index(self, name: str) -> Optional[int]:
        """Index of the first page named `name`, or None."""
        for idx, page in enumerate(self.pages):
            if page.name is not None and page.name == name:
                return idx
        return None

    def page_names(self) -> list[str]:
        return [page.name for page in self.pages if page.name is not None]
