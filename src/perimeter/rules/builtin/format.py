from __future__ import annotations

import re
from typing import Any, Optional, Pattern

from perimeter.engine.types import is_string
from perimeter.rules.base import BaseConstraint
from perimeter.rules.registry import register_constraint


@register_constraint("format")
class FormatConstraint(BaseConstraint):
    """
    String must match a regular expression.

    param: str pattern or compiled ``re.Pattern``. Matching uses
    ``re.search``, so the pattern may match anywhere unless anchored.
    """

    def _coerce_param(self, param: Any) -> Pattern[str]:
        if isinstance(param, re.Pattern):
            return param
        if not isinstance(param, str):
            raise ValueError(f"format must be a regex string or compiled pattern, got {param!r}")
        try:
            return re.compile(param)
        except re.error as e:
            raise ValueError(f"invalid regex {param!r}: {e}") from e

    def applies(self, value: Any) -> bool:
        return is_string(value)

    def check(self, value: str) -> Optional[str]:
        if self.param.search(value) is None:
            return "does not match format"
        return None
