"""
Configuration templates.

Built-in presets ship with the application; user templates are created at
runtime and persisted through a TemplateStorage backend.
"""

from .builtin import BUILTIN_TEMPLATES, get_builtin_template, get_templates_by_category
from .models import BuiltinTemplate, Template, TemplateCategory
from .storage import (
    STORAGE_NAME,
    STORAGE_VERSION,
    InMemoryTemplateStorage,
    JsonFileTemplateStorage,
    TemplateStorage,
)
from .store import TemplateStore

__all__ = [
    # Models
    "Template",
    "BuiltinTemplate",
    "TemplateCategory",
    # Built-ins
    "BUILTIN_TEMPLATES",
    "get_builtin_template",
    "get_templates_by_category",
    # Storage
    "TemplateStorage",
    "JsonFileTemplateStorage",
    "InMemoryTemplateStorage",
    "STORAGE_NAME",
    "STORAGE_VERSION",
    # Store
    "TemplateStore",
]
