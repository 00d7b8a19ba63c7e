from pydantic import BaseModel, Field, model_validator
from typing import Literal


class DiskConfig(BaseModel):
    capacity: int = Field(default=70_000_000, ge=0)
    required_free: int = Field(default=30_000_000, ge=0)

    @model_validator(mode="after")
    def check_required_fits(self) -> "DiskConfig":
        if self.required_free > self.capacity:
            raise ValueError(
                f"required_free ({self.required_free}) cannot exceed capacity ({self.capacity})"
            )
        return self


class ParserConfig(BaseModel):
    max_depth: int | None = Field(default=None, gt=0)


class ReportConfig(BaseModel):
    small_dir_limit: int = Field(default=100_000, ge=0)


class ReclaimConfig(BaseModel):
    disk: DiskConfig = Field(default_factory=DiskConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    report: ReportConfig = Field(default_factory=ReportConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
