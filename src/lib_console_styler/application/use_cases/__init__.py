"""Use cases wiring domain objects and ports into logging operations."""

from __future__ import annotations

from .dump import create_capture_dump
from .process_entry import ProcessCallable, create_process_entry
from .shutdown import create_shutdown

__all__ = ["ProcessCallable", "create_capture_dump", "create_process_entry", "create_shutdown"]
