from pydantic import BaseModel, Field


class PromptRequest(BaseModel):
    """One question asked while updating an output file."""

    key: str = Field(..., description="Key whose value is being asked for")
    text: str = Field(..., description="Full prompt: preceding template comments, the key and the default")
    default: str = Field(default="", description="Value kept when the answer is empty")
