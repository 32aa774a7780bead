"""JSON serialization utilities."""
import json


def json_dump(payload: object) -> str:
    """Serialize object to compact JSON string, keeping non-ASCII text."""
    return json.dumps(payload, ensure_ascii=False)


def json_load(data: str) -> object:
    """Deserialize JSON string to object."""
    return json.loads(data)
