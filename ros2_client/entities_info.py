"""Message types for ROS 2 discovery: mapping of nodes to DDS participants."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from ros2_client.gid import Gid
from ros2_client.names import InvalidNameError, NodeName

logger = logging.getLogger(__name__)


def _as_gid(value: Gid | bytes) -> Gid:
    return value if isinstance(value, Gid) else Gid(value)


@dataclass
class NodeEntitiesInfo:
    """A ROS 2 node and the reader and writer ids that belong to it."""

    node_name: NodeName
    reader_gid_seq: list[Gid] = field(default_factory=list)
    writer_gid_seq: list[Gid] = field(default_factory=list)

    @property
    def namespace(self) -> str:
        return self.node_name.namespace

    @property
    def name(self) -> str:
        return self.node_name.base_name

    def fully_qualified_name(self) -> str:
        """Namespace plus name, e.g. ``/some_node``."""
        return self.node_name.fully_qualified_name()

    def add_writer(self, gid: Gid) -> None:
        if gid not in self.writer_gid_seq:
            self.writer_gid_seq.append(gid)

    def add_reader(self, gid: Gid) -> None:
        if gid not in self.reader_gid_seq:
            self.reader_gid_seq.append(gid)

    def to_repr(self) -> dict[str, Any]:
        """Field layout of the wire message."""
        return {
            "node_namespace": self.namespace,
            "node_name": self.name,
            "reader_gid_seq": list(self.reader_gid_seq),
            "writer_gid_seq": list(self.writer_gid_seq),
        }

    @classmethod
    def from_repr(cls, data: Mapping[str, Any]) -> NodeEntitiesInfo:
        """Build from the wire field layout; raises InvalidNameError on a bad name."""
        namespace, base = data["node_namespace"], data["node_name"]
        try:
            node_name = NodeName(namespace, base)
        except InvalidNameError:
            logger.error("Offending node name: namespace=%r name=%r", namespace, base)
            raise
        return cls(
            node_name,
            [_as_gid(g) for g in data["reader_gid_seq"]],
            [_as_gid(g) for g in data["writer_gid_seq"]],
        )


@dataclass
class ParticipantEntitiesInfo:
    """The ROS 2 nodes implemented by one DDS domain participant."""

    gid: Gid
    node_entities_info_seq: list[NodeEntitiesInfo] = field(default_factory=list)

    def __init__(self, gid: Gid, node_entities_info_seq: Iterable[NodeEntitiesInfo] = ()) -> None:
        self.gid = gid
        self.node_entities_info_seq = list(node_entities_info_seq)

    @property
    def nodes(self) -> list[NodeEntitiesInfo]:
        return self.node_entities_info_seq