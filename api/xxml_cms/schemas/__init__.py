"""Pydantic schemas for request/response validation."""

from xxml_cms.schemas.common import ActionResult, ErrorInfo, parse_input
from xxml_cms.schemas.docs import ClassData, ExampleData, MethodData, ModuleData, SeedSummary

__all__ = [
    "ActionResult",
    "ErrorInfo",
    "parse_input",
    "ModuleData",
    "ClassData",
    "MethodData",
    "ExampleData",
    "SeedSummary",
]
