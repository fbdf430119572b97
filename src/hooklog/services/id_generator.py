"""Prefixed ID generation utility."""

import secrets


def generate_id(prefix: str) -> str:
    """Generate a prefixed random ID.

    Used when a delivery arrives without its own identifier header.

    Args:
        prefix: The prefix (e.g., "dlv_").

    Returns:
        A string like "dlv_a1b2c3d4e5f6a7b8".
    """
    return f"{prefix}{secrets.token_hex(8)}"
