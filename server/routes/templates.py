"""
Template listing endpoint.
"""

from fastapi import APIRouter, Depends

from core.templates import BUILTIN_TEMPLATES, TemplateStore

from ..state import get_template_store

router = APIRouter()


@router.get("/api/templates")
async def list_templates(store: TemplateStore = Depends(get_template_store)) -> dict:
    """Built-in presets and the user's saved templates."""
    return {
        "builtin": [template.to_record() for template in BUILTIN_TEMPLATES],
        "user": [template.to_record() for template in store.list_templates()],
    }
