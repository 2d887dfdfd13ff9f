"""Display nodes produced by the markdown-subset renderer."""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field


class TextSegment(BaseModel):
    """A run of inline text inside a paragraph."""

    style: Literal["text", "bold", "italic"] = "text"
    text: str


class HeadingBlock(BaseModel):
    type: Literal["heading"] = "heading"
    level: Literal[1, 2]
    text: str


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    segments: list[TextSegment] = Field(default_factory=list)


class LineBreakBlock(BaseModel):
    type: Literal["line_break"] = "line_break"


Block = Annotated[
    Union[HeadingBlock, ParagraphBlock, LineBreakBlock],
    Field(discriminator="type"),
]
