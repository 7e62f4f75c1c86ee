"""Pydantic models for call sites found in a syntax tree."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from perevod_core.messages.models import LiteralArgument


class ASTNodeLocation(BaseModel):
    """Location information for an AST node in source code."""

    model_config = ConfigDict(frozen=True)

    start_line: int = Field(..., ge=0, description="Starting line number (0-indexed)")
    end_line: int = Field(..., ge=0, description="Ending line number (0-indexed)")
    start_column: int = Field(..., ge=0, description="Starting column number (0-indexed)")
    end_column: int = Field(..., ge=0, description="Ending column number (0-indexed)")
    start_byte: int = Field(..., ge=0, description="Starting byte offset in file")
    end_byte: int = Field(..., ge=0, description="Ending byte offset in file")


class CallSite(BaseModel):
    """A call expression with its callee reduced to a dotted name.

    ``callee_name`` is None when the callee is not a plain identifier,
    ``this`` or member-access chain (e.g. ``fn()()`` or ``obj[key]()``);
    such calls never match a configured callee.
    """

    model_config = ConfigDict(frozen=True)

    callee_name: Optional[str] = Field(default=None, description="Dotted callee, e.g. 'i18n.t'")
    arguments: List[LiteralArgument] = Field(
        default_factory=list, description="Folded literal arguments, in call order"
    )
    location: ASTNodeLocation = Field(..., description="Location of the call expression")
    file_path: Optional[str] = Field(default=None, description="Source file, if known")

    @property
    def line(self) -> int:
        """1-based line number of the call."""
        return self.location.start_line + 1

    @property
    def reference(self) -> Optional[str]:
        """Catalog reference ``path:line``, if the file is known."""
        if self.file_path is None:
            return None
        return f"{self.file_path}:{self.line}"
