"""Collision-free record identifiers"""

import uuid


def new_id(prefix: str) -> str:
    """Prefixed random identifier, e.g. 'S-9f1c...'"""
    return f"{prefix}-{uuid.uuid4().hex}"
