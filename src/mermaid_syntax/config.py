"""Centralized configuration for mermaid-syntax."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ParseConfig:
    """Configuration for a command-line parse run."""

    diagram_type: str = "flowchart"
    output_format: str = "summary"  # summary | json
    strict: bool = False  # exit non-zero when errors were recorded
