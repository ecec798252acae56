"""Line grammar of the signature language.

    line        := blank | comment | directive | signature
    comment     := "#" ...
    directive   := "@includeBundled " NAME | "@defaultMessage " TEXT | "@ignoreUnresolvable"
    signature   := CLASS [ "#" MEMBER ] [ "@" MESSAGE ]
    MEMBER      := FIELD_NAME | METHOD_NAME "(" PARAM_TYPES ")"

Blank and comment lines are filtered by the caller (see ``is_content_line``).
"""

from __future__ import annotations

from typing import Optional, Union

from ..exceptions import SignatureParseError
from .descriptors import MethodSignature
from .models import (
    DefaultMessage,
    Directive,
    IgnoreUnresolvable,
    IncludeBundled,
    SignatureRecord,
    is_glob,
)

DIRECTIVE_MARKER = "@"
COMMENT_MARKER = "#"

INCLUDE_BUNDLED = "@includeBundled"
DEFAULT_MESSAGE = "@defaultMessage"
IGNORE_UNRESOLVABLE = "@ignoreUnresolvable"


def is_content_line(line: str) -> bool:
    """False for blank and comment lines (expects a trimmed line)."""
    return bool(line) and not line.startswith(COMMENT_MARKER)


def parse_line(
    line: str, default_message: Optional[str] = None
) -> Union[Directive, SignatureRecord]:
    """Parse one trimmed, non-comment line into a directive or a signature record."""
    if line.startswith(DIRECTIVE_MARKER):
        return parse_directive(line)
    return parse_signature(line, default_message)


def parse_directive(line: str) -> Directive:
    keyword, _, rest = line.partition(" ")
    rest = rest.strip()
    if keyword == INCLUDE_BUNDLED and rest:
        return IncludeBundled(rest)
    if keyword == DEFAULT_MESSAGE:
        return DefaultMessage(rest or None)
    if keyword == IGNORE_UNRESOLVABLE and not rest:
        return IgnoreUnresolvable()
    raise SignatureParseError(f"Invalid line in signature file: {line}")


def _split_message(line: str) -> tuple[str, Optional[str]]:
    """Split at the last ``@`` not escaped by a backslash."""
    pos = len(line)
    while True:
        pos = line.rfind("@", 0, pos)
        if pos < 0:
            return line, None
        if pos == 0 or line[pos - 1] != "\\":
            return line[:pos], line[pos + 1 :].replace("\\@", "@")


def parse_signature(line: str, default_message: Optional[str] = None) -> SignatureRecord:
    """Parse ``CLASS[#MEMBER][@MESSAGE]``.

    An inline message replaces the default one; an inline message that is
    empty after trimming means no message at all.
    """
    signature, inline = _split_message(line)
    signature = signature.strip()
    message = inline.strip() if inline is not None else default_message
    if not message:
        message = None
    if not signature:
        raise SignatureParseError("Empty signature", line=line)

    class_name, hash_sign, member = signature.partition("#")
    class_name = class_name.strip()
    method: Optional[MethodSignature] = None
    field_name: Optional[str] = None
    if hash_sign:
        member = member.strip()
        paren = member.find("(")
        if paren == 0:
            raise SignatureParseError(
                f"Invalid method signature (method name missing): {signature}"
            )
        if paren > 0:
            try:
                method = MethodSignature.from_declaration(member)
            except SignatureParseError:
                raise SignatureParseError(f"Invalid method signature: {signature}") from None
        elif member:
            field_name = member
        else:
            raise SignatureParseError(f"Invalid field signature (field name missing): {signature}")
    if not class_name:
        raise SignatureParseError(f"Invalid signature (class name missing): {signature}")

    if is_glob(class_name) and hash_sign:
        raise SignatureParseError(
            f"Class level glob pattern cannot be combined with methods/fields: {signature}"
        )

    return SignatureRecord(
        signature=signature,
        class_name=class_name,
        method=method,
        field_name=field_name,
        message=message,
    )
