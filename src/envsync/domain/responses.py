"""
Result models returned by the envsync services.

These models carry the rendered document together with bookkeeping that
front ends report to the user.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .env_file import EnvFile


class UpdateResult(BaseModel):
    """Outcome of synchronizing an output file with its template."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    document: EnvFile = Field(..., description="Rendered output document")
    output_path: str = Field(..., description="Path the document belongs to")
    prompted: List[str] = Field(default_factory=list, description="Keys the user was asked for, in order")
    skipped: List[str] = Field(default_factory=list, description="Keys skipped by the only_empty/only_filled filters")
    cleared: List[str] = Field(default_factory=list, description="Keys cleared by end of input")
    created: bool = Field(default=False, description="True when the output file did not exist before")
    written: bool = Field(default=False, description="False in dry-run mode")

    @property
    def content(self) -> str:
        return self.document.render()


class TemplateResult(BaseModel):
    """Outcome of deriving a template from a real env file."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    document: EnvFile = Field(..., description="Rendered template document")
    source_path: Optional[str] = Field(default=None, description="File the values were read from")
    target_path: Optional[str] = Field(default=None, description="File the template was written to")
    keys: List[str] = Field(default_factory=list, description="Keys replaced by the placeholder")
    written: bool = Field(default=False, description="Whether the template was persisted")

    @property
    def content(self) -> str:
        return self.document.render()
