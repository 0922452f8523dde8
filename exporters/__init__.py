"""Exporters for converting dependency maps to various output formats."""

from .text_exporter import render_lines, to_text
from .json_exporter import to_json

__all__ = ["render_lines", "to_text", "to_json"]
