"""ID generation utility."""

import secrets


def gen_id(prefix: str) -> str:
    """Generate opaque IDs such as tpl_xxx."""
    return f"{prefix}{secrets.token_urlsafe(16)}"
