from __future__ import annotations

import json
import re
from typing import Any, Union

from fastapi.responses import JSONResponse


_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1
_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}


def dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, indent=4)


class IndentedJSONResponse(JSONResponse):
    def render(self, content: Any) -> bytes:
        return dumps(content).encode("utf-8")


def coerce_query_value(value: str) -> Union[int, bool, str]:
    """Interpret a query-string value as an int, else a bool, else keep the string."""
    if _INT_RE.fullmatch(value):
        number = int(value)
        if _INT64_MIN <= number <= _INT64_MAX:
            return number
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    return value
