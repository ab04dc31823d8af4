from pydantic import BaseModel, field_validator
from typing import Optional


class CocktailInput(BaseModel):
    """Body of POST /api/cocktails and PUT /api/cocktails/{id}.

    Update is a full replace, so both operations share one shape: optional
    fields that are absent or blank end up stored as null.
    """
    theCock: str
    theIngredients: str
    theRecipe: str
    theJpeg: Optional[str] = None
    theComment: Optional[str] = None

    @field_validator("theCock", "theIngredients", "theRecipe", mode="before")
    @classmethod
    def validate_required(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("must not be empty")
        return v

    @field_validator("theCock", "theIngredients", "theRecipe")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return v.strip()

    @field_validator("theJpeg", "theComment")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        v = (v or "").strip()
        return v or None

    def to_model_data(self) -> dict:
        return {
            "name": self.theCock,
            "ingredients": self.theIngredients,
            "recipe": self.theRecipe,
            "image": self.theJpeg,
            "comment": self.theComment,
        }


class MessageResponse(BaseModel):
    message: str


class UploadResponse(BaseModel):
    filePath: str
