from typing import Annotated, Literal

from pydantic import BaseModel, Field


class RawCompletion(BaseModel):
    """Reply text that still has to be parsed"""

    kind: Literal["raw"] = "raw"
    text: str


class ParsedCompletion(BaseModel):
    """Reply the provider already returned as structured data"""

    kind: Literal["parsed"] = "parsed"
    data: dict


Completion = Annotated[RawCompletion | ParsedCompletion, Field(discriminator="kind")]
