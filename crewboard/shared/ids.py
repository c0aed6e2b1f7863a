import uuid


def generate_id(prefix: str) -> str:
    """Generate an opaque id such as 'b-3f9a2c1'"""
    return f"{prefix}-{uuid.uuid4().hex[:7]}"
