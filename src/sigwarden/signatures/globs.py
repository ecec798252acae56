"""Glob class patterns.

Patterns are matched against binary class names (``java.util.ArrayList``):

    *   any run of characters except ``.``
    **  any run of characters, ``.`` included
    ?   one character other than ``.``

Patterns may be written with ``/`` separators; they are read as ``.``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Optional


def glob_to_regex(glob: str) -> re.Pattern[str]:
    """Compile a class-name glob into an anchored regular expression."""
    glob = glob.replace("/", ".")
    parts: list[str] = []
    i = 0
    while i < len(glob):
        ch = glob[i]
        if ch == "*":
            if glob.startswith("**", i):
                parts.append(".*")
                i += 2
                continue
            parts.append(r"[^.]*")
        elif ch == "?":
            parts.append(r"[^.]")
        else:
            parts.append(re.escape(ch))
        i += 1
    return re.compile("".join(parts), re.DOTALL)


@dataclass(frozen=True)
class ClassPatternRule:
    """A forbidden class pattern with its optional message.

    Equality and hashing use only (glob, message), so a set of rules stays
    duplicate free.
    """

    glob: str
    message: Optional[str] = None
    _regex: re.Pattern[str] = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_regex", glob_to_regex(self.glob))

    def matches(self, binary_class_name: str) -> bool:
        return self._regex.fullmatch(binary_class_name) is not None

    def get_printout(self, binary_class_name: str) -> str:
        if self.message is not None:
            return f"{binary_class_name} [{self.message}]"
        return binary_class_name
