"""
Domain value objects accepted by ThreadsIoService.

They are plain carriers: shapes are checked by the client when the call is made.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class User:
    """A user to identify, track or remove"""
    user_id: str
    traits: Any = field(default_factory=dict)


@dataclass
class Event:
    """A named event with free-form properties"""
    name: str
    properties: Any = field(default_factory=dict)


@dataclass
class Page:
    """
    A visited page; title is sent as the page name.

    visited_at is used as the call timestamp when the caller passes none.
    """
    title: str
    properties: Any = field(default_factory=dict)
    visited_at: Optional[datetime] = None
