"""
Codec - converts a task forest to and from its persisted JSON document.

The document is a single JSON array of task node objects. Decoding is strict:
a document that is not valid JSON, does not match ``TASK_FOREST_SCHEMA``, or
cannot be turned into models raises ``DecodeError`` and nothing is recovered.
"""
import json
from typing import Union

from jsonschema import validate, ValidationError as SchemaValidationError
from pydantic import ValidationError as ModelValidationError

from tododep.logs import get_logger
from tododep.models import TaskForest
from tododep.recovery import DecodeError

log = get_logger("data.codec")

TASK_FOREST_SCHEMA = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Task forest",
    "type": "array",
    "items": {"$ref": "#/$defs/taskNode"},
    "$defs": {
        "taskNode": {
            "type": "object",
            "required": ["title", "details", "completed", "children"],
            "properties": {
                "title": {"type": "string"},
                "details": {"type": "string"},
                "completed": {"type": "boolean"},
                "children": {
                    "type": "array",
                    "items": {"$ref": "#/$defs/taskNode"},
                },
            },
        },
    },
}

def decode(document: Union[str, bytes]) -> TaskForest:
    """
    Parse a persisted document into a task forest.

    Args:
        document: The full file contents, as text or UTF-8 bytes.

    Returns:
        The decoded forest.

    Raises:
        DecodeError: If the document is not a well formed array of task nodes.
    """
    try:
        if isinstance(document, bytes):
            document = document.decode("utf-8")
        data = json.loads(document)
    except UnicodeDecodeError as e:
        raise DecodeError(f"Save file is not valid UTF-8: {e}") from e
    except json.JSONDecodeError as e:
        raise DecodeError(f"Could not decode save file: {e}") from e
    except RecursionError as e:
        raise DecodeError("Could not decode save file: tasks are nested too deeply") from e

    try:
        validate(instance=data, schema=TASK_FOREST_SCHEMA)
        forest = TaskForest.model_validate(data)
    except SchemaValidationError as e:
        path = "/".join(str(p) for p in e.absolute_path) or "<root>"
        raise DecodeError(f"Save file does not match the task schema at {path}: {e.message}") from e
    except ModelValidationError as e:
        raise DecodeError(f"Save file contains invalid tasks: {e}") from e
    except RecursionError as e:
        raise DecodeError("Could not decode save file: tasks are nested too deeply") from e

    log.debug(f"Decoded {len(forest)} root tasks")
    return forest

def encode(forest: TaskForest) -> str:
    """Serialize a forest as indented JSON with a trailing newline."""
    return json.dumps(forest.model_dump(), indent=2, ensure_ascii=False) + "\n"
