# ros2_client

Building blocks for working with ROS 2 names, message types and discovery data:

- `ros2_client.names`: validated ROS 2 names: `NodeName`, `Name`,
  `MessageTypeName`, `ServiceTypeName` and `ActionTypeName`, with mapping to
  DDS topic and type names.
- `ros2_client.builtin_interfaces`: the over-the-wire `Time` and `Duration`
  types, with the ROS 2 conversion and saturation rules. `WireTime` is the
  seconds-plus-nanoseconds form of a `Time`.
- `ros2_client.gid`: the ROS 2 `Gid` identifier (16 bytes), built from DDS GUID
  bytes with `Gid.from_guid_bytes`.
- `ros2_client.entities_info`: `NodeEntitiesInfo` and
  `ParticipantEntitiesInfo`, the ROS 2 discovery messages.
- `ros2_client.log`: the rosout `Log` message and `LogLevel`.
- `ros2_client.interfaces`: example service messages `BasicTypesRequest`,
  `BasicTypesResponse`, `MarkerRequest` and `MarkerResponse`.
- `ros2_client.msggen`: a parser for `.msg` files (`msggen.parser`,
  `msggen.stringparser`) and the `msggen` command that generates struct
  definitions from them (`msggen.cli`).

The package has no runtime dependencies.

## Installing

    pip install .

To run the tests:

    pip install .[test]
    pytest

## Names

```python
from ros2_client.names import Name, NodeName, MessageTypeName

node = NodeName("/ns", "talker")
node.fully_qualified_name()                 # "/ns/talker"

topic = Name.parse("chatter")
topic.to_dds_name("rt", node, "")           # "rt/ns/chatter"

MessageTypeName("std_msgs", "String").dds_msg_type()
# "std_msgs::msg::dds_::String_"
```

An invalid name raises `InvalidNameError` (a `ValueError`). The error is one of
its subclasses: `EmptyNameError`, `BadCharError` or `BadSlashError`.

## Time and Duration

```python
from ros2_client.builtin_interfaces import Time, Duration

wire = Time.from_nanos(-1_500_000_000).to_wire()   # WireTime(sec=-2, nanosec=500_000_000)
Time.from_wire(wire).to_nanos()                    # -1_500_000_000
Duration.from_millis(1500).to_nanos()              # 1_500_000_000
```

Seconds that do not fit in 32 bits are saturated, and a warning is logged.

## Parsing .msg files

```python
from ros2_client.msggen.parser import msg_spec

rest, lines = msg_spec("int32 X = 5 # five\nstring name\n")
# each line is an (item, comment) pair; item is a Field, a Constant or None
```

Parsing stops at the first line that cannot be parsed; that remainder is
returned as `rest`.

## Generating code from .msg files

Translate a single file and write the result to standard output, or to a file
with `-o`:

    msggen -i Pose.msg

Translate one or more types from a ROS 2 workspace. This mode runs
`colcon list` in the workspace, so `colcon` must be installed and on your
`PATH`. It writes `mod.rs` and one `<package>.rs` per package that holds
`.msg` files into the output directory:

    msggen -w /opt/ros/jazzy -t turtlesim/Pose -o generated_dir

`-t` may be given several times. Add `-l logdir` to keep the colcon logs;
otherwise they go to `/dev/null`. The command exits with status 1 and an
error message on failure.

## What this package does not do

It does not connect to a DDS network. There is no context, node, publisher,
subscription, service or action client: the package only provides the names,
message types and code generation that such a client uses.