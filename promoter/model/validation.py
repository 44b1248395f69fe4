"""Errors raised while loading a pipeline definition."""

from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from promoter.exceptions import PromotionError


class PipelineDefinitionError(PromotionError):
    """Raised when a pipeline definition file cannot be loaded or is invalid."""

    def __init__(
        self,
        message: str,
        path: Optional[Union[str, Path]] = None,
        errors: Optional[List[str]] = None,
    ):
        self.message = message
        self.path = str(path) if path is not None else None
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        header = self.message
        if self.path:
            header = f"{self.message} ({self.path})"
        if not self.errors:
            return header
        return header + "\n" + "\n".join(f"  - {e}" for e in self.errors)

    @classmethod
    def from_pydantic(
        cls, error: PydanticValidationError, path: Optional[Union[str, Path]] = None
    ) -> "PipelineDefinitionError":
        """Flatten a pydantic ValidationError into one line per problem."""
        errors = []
        for item in error.errors():
            location = ".".join(str(part) for part in item.get("loc", ()))
            errors.append(f"{location or '<root>'}: {item.get('msg', 'invalid')}")
        return cls("Invalid pipeline definition", path=path, errors=errors)
