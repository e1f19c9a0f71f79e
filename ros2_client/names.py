"""Names of ROS 2 nodes, topics, services and message, service and action types."""

from __future__ import annotations

from dataclasses import dataclass


class InvalidNameError(ValueError):
    """A name does not follow the ROS 2 naming rules."""


class EmptyNameError(InvalidNameError):
    """The base name is empty."""

    def __init__(self) -> None:
        super().__init__("Base name must not be empty")


class BadCharError(InvalidNameError):
    """A name contains a character that is not allowed where it stands."""

    def __init__(self, char: str) -> None:
        self.char = char
        super().__init__(f"Bad characters in Name: {char!r}")


class BadSlashError(InvalidNameError):
    """Separator slashes are misplaced, missing or repeated."""

    def __init__(self, namespace: str, name: str) -> None:
        self.namespace = namespace
        self.name = name
        super().__init__(
            f"Invalid placement of separator slashes. namespace={namespace}  name={name}"
        )


def _is_alpha(c: str) -> bool:
    return c.isascii() and c.isalpha()


def _is_alnum(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _is_start_char(c: str) -> bool:
    return _is_alpha(c) or c == "_"


def _is_word_char(c: str) -> bool:
    return _is_alnum(c) or c == "_"


def _first_bad(text: str, allowed) -> str | None:
    return next((c for c in text if not allowed(c)), None)


@dataclass(frozen=True)
class NodeName:
    """Name of a node: an absolute namespace and a base name."""

    namespace: str
    base_name: str

    def __post_init__(self) -> None:
        namespace, base_name = self.namespace, self.base_name

        if not base_name:
            raise EmptyNameError()
        if not _is_start_char(base_name[0]):
            raise BadCharError(base_name[0])
        bad = _first_bad(base_name, _is_word_char)
        if bad is not None:
            raise BadCharError(bad)

        if not namespace:
            raise BadSlashError("<empty_namespace>", base_name)
        # '~' is rejected: it has no meaning in a node's namespace.
        if not (_is_alpha(namespace[0]) or namespace[0] == "/"):
            raise BadCharError(namespace[0])
        if not namespace.startswith("/"):
            raise BadSlashError(namespace, base_name)
        bad = _first_bad(namespace, lambda c: _is_word_char(c) or c == "/")
        if bad is not None:
            raise BadCharError(bad)
        if namespace.endswith("/") and namespace != "/":
            raise BadSlashError(namespace, base_name)

    def fully_qualified_name(self) -> str:
        """Namespace and base name joined by a single slash, e.g. ``/ns/node``."""
        if self.namespace.endswith("/"):
            return self.namespace + self.base_name
        return f"{self.namespace}/{self.base_name}"


class Name:
    """Name of a topic or service, absolute or relative to a node's namespace.

    Tilde expansion and brace substitution are not supported.
    """

    __slots__ = ("base_name", "preceding_tokens", "absolute")

    def __init__(self, namespace: str, base_name: str) -> None:
        if namespace.startswith("/"):
            namespace_rel, absolute = namespace[1:], True
        else:
            namespace_rel, absolute = namespace, False

        if not base_name:
            raise EmptyNameError()
        bad = _first_bad(base_name, _is_word_char)
        if bad is not None:
            raise BadCharError(bad)
        if not _is_start_char(base_name[0]):
            raise BadCharError(base_name[0])
        if "__" in base_name:
            raise BadCharError("_")

        tokens = tuple(namespace_rel.split("/")) if namespace_rel else ()
        if any(not tok for tok in tokens):
            raise BadSlashError(namespace_rel, base_name)
        if not all(
            all(_is_word_char(c) for c in tok)
            and _is_start_char(tok[0])
            and "__" not in tok
            for tok in tokens
        ):
            raise BadCharError("?")

        self.base_name = base_name
        self.preceding_tokens = tokens
        self.absolute = absolute

    @classmethod
    def _from_parts(cls, base_name: str, preceding_tokens: tuple[str, ...], absolute: bool) -> Name:
        name = cls.__new__(cls)
        name.base_name = base_name
        name.preceding_tokens = preceding_tokens
        name.absolute = absolute
        return name

    @classmethod
    def parse(cls, full_name: str) -> Name:
        """Build a name from a slash-separated string such as ``myspace/some_name``."""
        prefix, sep, base = full_name.rpartition("/")
        if not sep:
            return cls("", full_name)
        if not prefix and not base:
            raise EmptyNameError()
        if not base:
            raise BadSlashError(prefix, "")
        if not prefix:
            return cls("/", base)
        if prefix.endswith("/"):
            raise BadSlashError(prefix, base)
        return cls(prefix, base)

    def to_dds_name(self, kind_prefix: str, node: NodeName, suffix: str) -> str:
        """Map to a DDS topic name, e.g. ``rt/node_ns/topic``."""
        if kind_prefix.endswith("/"):
            raise ValueError(f"kind prefix must not end with a slash: {kind_prefix!r}")
        parts = [kind_prefix]
        if not self.absolute:
            parts.append(node.namespace)
        parts.append("/")
        parts.extend(f"{tok}/" for tok in self.preceding_tokens)
        parts.append(self.base_name)
        parts.append(suffix)
        return "".join(parts)

    def push(self, new_suffix: str) -> Name:
        """Return a name one level deeper, with ``new_suffix`` as the base name."""
        return self._from_parts(
            new_suffix, self.preceding_tokens + (self.base_name,), self.absolute
        )

    def is_absolute(self) -> bool:
        return self.absolute

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Name):
            return NotImplemented
        return (self.base_name, self.preceding_tokens, self.absolute) == (
            other.base_name,
            other.preceding_tokens,
            other.absolute,
        )

    def __hash__(self) -> int:
        return hash((self.base_name, self.preceding_tokens, self.absolute))

    def __str__(self) -> str:
        lead = "/" if self.absolute else ""
        return lead + "".join(f"{tok}/" for tok in self.preceding_tokens) + self.base_name

    def __repr__(self) -> str:
        return f"Name({str(self)!r})"


def _slash_to_colons(text: str) -> str:
    return text.replace("/", "::")


@dataclass(frozen=True)
class MessageTypeName:
    """Name of a data type carried over a topic, e.g. ``std_msgs/String``."""

    package_name: str
    type_name: str
    prefix: str = "msg"

    def dds_msg_type(self) -> str:
        """Type name used over DDS."""
        return _slash_to_colons(
            f"{self.package_name}/{self.prefix}/dds_/{self.type_name}_"
        )


@dataclass(frozen=True)
class ServiceTypeName:
    """Name of a service type, e.g. ``turtlesim/Spawn``."""

    package_name: str
    type_name: str
    prefix: str = "srv"

    def _dds_type(self, kind: str) -> str:
        return _slash_to_colons(
            f"{self.package_name}/{self.prefix}/dds_/{self.type_name}_{kind}_"
        )

    def dds_request_type(self) -> str:
        return self._dds_type("Request")

    def dds_response_type(self) -> str:
        return self._dds_type("Response")


@dataclass(frozen=True)
class ActionTypeName:
    """Name of an action type, e.g. ``turtlesim/RotateAbsolute``."""

    package_name: str
    type_name: str

    def dds_action_topic(self, topic: str) -> MessageTypeName:
        return MessageTypeName(self.package_name, self.type_name + topic, prefix="action")

    def dds_action_service(self, srv: str) -> ServiceTypeName:
        return ServiceTypeName(self.package_name, self.type_name + srv, prefix="action")