"""Session specification: immutable models and the project file loader."""

from .loader import (
    build_session_spec,
    create_project,
    list_projects,
    load_project,
    resolve_project_path,
)
from .models import PaneSpec, SessionSpec, WindowSpec, is_layout_hint

__all__ = [
    # Models
    "SessionSpec",
    "WindowSpec",
    "PaneSpec",
    "is_layout_hint",
    # Loader
    "build_session_spec",
    "load_project",
    "resolve_project_path",
    "create_project",
    "list_projects",
]
