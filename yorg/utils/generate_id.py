import time
from uuid import uuid4


def generate_id(prefix: str = "") -> str:
    """生成一个足够复杂的ID，避免冲突。"""
    timestamp = hex(time.time_ns() // 1000)[2:]
    rand_part = uuid4().hex[:8]
    return f"{prefix}{timestamp}-{rand_part}"
