from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CompilationSettings(BaseModel):
    """Where compiled container definitions are written and loaded from.

    Attributes:
        cache_dir: Directory holding the compiled definitions module.
        filename: Name of the compiled definitions module.
    """

    model_config = ConfigDict(frozen=True)

    cache_dir: Path = Field(..., description="Directory holding compiled definitions.")
    filename: str = Field(default="compiled_container.py", description="Compiled module file name.")

    @field_validator("filename")
    @classmethod
    def _python_module_name(cls, value: str) -> str:
        if not value.endswith(".py") or "/" in value or "\\" in value:
            raise ValueError("filename must be a bare '.py' file name")
        return value

    @property
    def compiled_file(self) -> Path:
        """Full path of the compiled definitions module."""
        return self.cache_dir / self.filename
