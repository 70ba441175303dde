from typing import Any, Union

# Payloads and outputs of remote jobs are schemaless JSON.
JsonValue = Union[None, bool, int, float, str, list[Any], dict[str, Any]]
