import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Pattern, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from reqcsv.prj_exception import SettingsError

DEFAULT_PDF_PATH = "config/example.pdf"
DEFAULT_OUTPUT_PATH = "output.csv"
DEFAULT_CHAPTER_REGEX = r"(\d+\.\d+)"
DEFAULT_REQUIREMENT_REGEX = r"(\d+\.\d+\.\d+)"
DEFAULT_REDUCED_REQUIREMENT_REGEX = r"\b(\d+\.\d+\.\d+)\b"
DEFAULT_HEADER = "Chapter,Requirement,Description"

MODE_CROSS = "cross"
MODE_SCOPED = "scoped"
MODE_REDUCED = "reduced"


class ExtractionSettings(BaseModel):
    """Validated settings for one conversion run."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pdf_path: Path = Path(DEFAULT_PDF_PATH)
    output_path: Path = Path(DEFAULT_OUTPUT_PATH)
    chapter_regex: str = DEFAULT_CHAPTER_REGEX
    requirement_regex: Optional[str] = None
    header: List[str] = Field(default_factory=lambda: DEFAULT_HEADER.split(","))
    start_page: int = Field(1, ge=1)
    end_page: int = -1
    scoped: bool = False
    reduced: bool = False
    replace_tokens: List[str] = Field(default_factory=list)
    replace_with: str = " "
    show_progress: bool = True

    @field_validator("header", mode="before")
    @classmethod
    def split_header(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.split(",")
        return value

    @field_validator("chapter_regex", "requirement_regex")
    @classmethod
    def check_regex(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid regular expression {value!r}: {e}") from e
        return value

    @field_validator("end_page")
    @classmethod
    def check_end_page(cls, value: int) -> int:
        if value != -1 and value < 1:
            raise ValueError("end_page must be -1 (last page) or a page number >= 1")
        return value

    @model_validator(mode="after")
    def check_mode(self) -> "ExtractionSettings":
        if self.scoped and self.reduced:
            raise ValueError("scoped and reduced modes cannot be combined")
        return self

    @property
    def mode(self) -> str:
        if self.reduced:
            return MODE_REDUCED
        if self.scoped:
            return MODE_SCOPED
        return MODE_CROSS

    @property
    def column_count(self) -> int:
        return 1 if self.reduced else 3

    @property
    def effective_requirement_regex(self) -> str:
        if self.requirement_regex is not None:
            return self.requirement_regex
        return DEFAULT_REDUCED_REQUIREMENT_REGEX if self.reduced else DEFAULT_REQUIREMENT_REGEX

    def compile_patterns(self) -> Tuple[Pattern, Pattern]:
        """Return the (chapter, requirement) patterns, compiled once per run."""
        return re.compile(self.chapter_regex), re.compile(self.effective_requirement_regex)

    @classmethod
    def from_sources(
        cls,
        config: Optional[Mapping[str, Any]] = None,
        overrides: Optional[Mapping[str, Any]] = None,
        ) -> "ExtractionSettings":
        """
        Merge built-in defaults, a config mapping and explicit overrides.

        Config keys are case-insensitive (config.yaml uses upper case). Override
        values of None are treated as "not given".

        Raises:
            SettingsError: If any merged value fails validation.
        """
        merged: Dict[str, Any] = {str(k).lower(): v for k, v in (config or {}).items()}
        merged.update({k: v for k, v in (overrides or {}).items() if v is not None})
        try:
            return cls(**merged)
        except ValidationError as e:
            raise SettingsError(f"Invalid settings: {e}") from e
