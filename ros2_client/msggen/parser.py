"""Parser for ROS 2 ``.msg`` interface definitions.

A definition is parsed line by line. Each line holds an optional field or
constant and an optional ``#`` comment. Parsing stops at the first line that
cannot be parsed, and the unparsed remainder is returned with the result.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ros2_client.msggen.stringparser import StringParseError, parse_string

_U64_MAX = 2**64 - 1
_I64_MAX = 2**63 - 1


class MsgParseError(ValueError):
    """The definition cannot be parsed at all."""


class _NoMatch(Exception):
    """A parser alternative did not match; the caller may try another."""


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class PrimitiveType:
    name: str


@dataclass(frozen=True)
class BoundedString:
    bound: int


@dataclass(frozen=True)
class ComplexType:
    package_name: Optional[str]
    type_name: str


@dataclass(frozen=True)
class StaticArray:
    size: int


@dataclass(frozen=True)
class UnboundedArray:
    pass


@dataclass(frozen=True)
class BoundedArray:
    bound: int


BaseTypeName = Union[PrimitiveType, BoundedString, ComplexType]
ArraySpecifier = Union[StaticArray, UnboundedArray, BoundedArray]
Value = Union[bool, float, int, bytes]


@dataclass(frozen=True)
class TypeName:
    base: BaseTypeName
    array_spec: Optional[ArraySpecifier] = None


@dataclass(frozen=True)
class Field:
    type_name: TypeName
    field_name: str
    default_value: Optional[Value] = None


@dataclass(frozen=True)
class Constant:
    type_name: TypeName
    const_name: str
    value: Value


Item = Union[Field, Constant]
Line = Tuple[Optional[Item], Optional[Comment]]

_PRIMITIVES = (
    "bool",
    "byte",
    "char",
    "float32",
    "float64",
    "int8",
    "int16",
    "int32",
    "int64",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "string",
    "wstring",
)

_SPACE0 = re.compile(r"[ \t]*")
_IDENTIFIER = re.compile(r"[A-Za-z0-9_]+")
_DIGITS = re.compile(r"[0-9]+")
_COMMENT = re.compile(r"#[^\r\n]*")
_DEC = r"[0-9][0-9_]*"
_FLOAT_FORMS = tuple(
    re.compile(pattern)
    for pattern in (
        rf"\.{_DEC}(?:[eE][+-]?{_DEC})?",
        rf"{_DEC}(?:\.{_DEC})?[eE][+-]?{_DEC}",
        rf"{_DEC}\.(?:{_DEC})?",
    )
)


def _space0(text: str) -> str:
    return text[_SPACE0.match(text).end() :]


def _tag(text: str, prefix: str) -> str:
    if not text.startswith(prefix):
        raise _NoMatch
    return text[len(prefix) :]


def _identifier(text: str) -> tuple[str, str]:
    match = _IDENTIFIER.match(text)
    if match is None:
        raise _NoMatch
    return text[match.end() :], match.group()


def _uint(text: str) -> tuple[str, int]:
    match = _DIGITS.match(text)
    if match is None:
        raise _NoMatch
    number = int(match.group())
    if number > _U64_MAX:
        raise MsgParseError(f"unsigned integer out of range: {match.group()}")
    return text[match.end() :], number


def _line_ending(text: str) -> str:
    if text.startswith("\n"):
        return text[1:]
    if text.startswith("\r\n"):
        return text[2:]
    raise _NoMatch


def _comment(text: str) -> tuple[str, Comment]:
    match = _COMMENT.match(text)
    if match is None:
        raise _NoMatch
    end = match.end()
    if text[end : end + 1] == "\r" and text[end : end + 2] != "\r\n":
        raise _NoMatch
    return text[end:], Comment(match.group())


def _bounded_string(text: str) -> tuple[str, BaseTypeName]:
    rest, bound = _uint(_tag(text, "string<="))
    return rest, BoundedString(bound)


def _primitive_type(text: str) -> tuple[str, BaseTypeName]:
    name = next((p for p in _PRIMITIVES if text.startswith(p)), None)
    if name is None:
        raise _NoMatch
    return text[len(name) :], PrimitiveType(name)


def _complex_type(text: str) -> tuple[str, BaseTypeName]:
    package: Optional[str] = None
    try:
        after_pkg, candidate = _identifier(text)
        text = _tag(after_pkg, "/")
        package = candidate
    except _NoMatch:
        pass
    rest, type_name = _identifier(text)
    return rest, ComplexType(package, type_name)


def _array_specifier(text: str) -> tuple[str, ArraySpecifier]:
    text = _tag(text, "[")
    spec: ArraySpecifier
    try:
        text, bound = _uint(_tag(text, "<="))
        spec = BoundedArray(bound)
    except _NoMatch:
        try:
            text, size = _uint(text)
            spec = StaticArray(size)
        except _NoMatch:
            text, spec = _space0(text), UnboundedArray()
    return _tag(text, "]"), spec


def _type_spec(text: str) -> tuple[str, TypeName]:
    for alternative in (_bounded_string, _primitive_type, _complex_type):
        try:
            rest, base = alternative(text)
            break
        except _NoMatch:
            continue
    else:
        raise _NoMatch
    try:
        rest, array_spec = _array_specifier(rest)
    except _NoMatch:
        array_spec = None
    return rest, TypeName(base, array_spec)


def _float(text: str) -> tuple[str, float]:
    for form in _FLOAT_FORMS:
        match = form.match(text)
        if match:
            literal = match.group()
            if "_" in literal:
                raise MsgParseError(f"malformed floating point value: {literal}")
            return text[match.end() :], float(literal)
    raise _NoMatch


def _value_spec(text: str) -> tuple[str, Value]:
    for word, flag in (("false", False), ("true", True)):
        if text.startswith(word):
            return text[len(word) :], flag
    try:
        return _float(text)
    except _NoMatch:
        pass
    if text.startswith("-"):
        try:
            rest, magnitude = _uint(text[1:])
        except _NoMatch:
            pass
        else:
            if magnitude > _I64_MAX + 1:
                raise MsgParseError(f"signed integer out of range: -{magnitude}")
            return rest, -magnitude
    try:
        return _uint(text)
    except _NoMatch:
        pass
    try:
        rest, string = parse_string(text)
    except StringParseError as exc:
        if exc.incomplete:
            raise MsgParseError(str(exc)) from exc
        raise _NoMatch from None
    return rest, string.encode("utf-8")


def _field(text: str) -> tuple[str, Item]:
    text, type_name = _type_spec(text)
    text, field_name = _identifier(_space0(text))
    return text, Field(type_name, field_name)


def _constant(text: str) -> tuple[str, Item]:
    text, type_name = _type_spec(text)
    text, const_name = _identifier(_space0(text))
    text = _space0(_tag(_space0(text), "="))
    text, value = _value_spec(text)
    return text, Constant(type_name, const_name, value)


def _item(text: str) -> tuple[str, Item]:
    text = _space0(text)
    try:
        text, item = _constant(text)
    except _NoMatch:
        text, item = _field(text)
    return _space0(text), item


def _line(text: str) -> tuple[str, Line]:
    item: Optional[Item]
    try:
        text, item = _item(text)
    except _NoMatch:
        text, item = _space0(text), None
    found_comment: Optional[Comment]
    try:
        text, found_comment = _comment(text)
    except _NoMatch:
        found_comment = None
    return _line_ending(text), (item, found_comment)


def msg_spec(text: str) -> tuple[str, list[Line]]:
    """Parse a ``.msg`` definition.

    Returns the unparsed remainder and the parsed lines. Raises
    MsgParseError only for input that cannot be parsed at all.
    """
    lines: list[Line] = []
    while True:
        try:
            text, parsed = _line(text)
        except _NoMatch:
            return text, lines
        lines.append(parsed)


def comment(text: str) -> tuple[str, Comment]:
    """Parse a ``#`` comment up to, but not including, the line ending."""
    try:
        return _comment(text)
    except _NoMatch:
        raise MsgParseError("expected a comment") from None