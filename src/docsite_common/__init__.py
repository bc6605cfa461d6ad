"""Shared logging, error and settings helpers for docsite build tooling."""

from __future__ import annotations

from docsite_common.errors import DocsiteError, ErrorCode
from docsite_common.logging import get_logger, setup_logging, with_fields
from docsite_common.problem_details import ProblemDetails, build_problem_details
from docsite_common.settings import load_settings

__all__ = [
    "DocsiteError",
    "ErrorCode",
    "ProblemDetails",
    "build_problem_details",
    "get_logger",
    "load_settings",
    "setup_logging",
    "with_fields",
]
