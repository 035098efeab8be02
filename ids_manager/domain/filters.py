"""
filters.py - Filter DTOs
Single responsibility: carry filter inputs for list queries.
"""
from dataclasses import dataclass


@dataclass
class ListFilter:
    status: str = "ALL"
    keyword: str = ""
    week: str | None = None
    owner: str | None = None
    unsolved_only: bool = False
