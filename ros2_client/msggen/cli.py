"""Command-line generator of Rust struct definitions from ROS 2 ``.msg`` files.

A single ``.msg`` file can be translated with ``-i``. With ``-t`` the
requested types and everything they depend on are located in a ROS 2
workspace by asking ``colcon``, and one source file is generated per package.
"""

from __future__ import annotations

import argparse
import itertools
import subprocess
import sys
from dataclasses import dataclass, field
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional, Sequence, TextIO

from ros2_client.msggen.parser import (
    BoundedArray,
    BoundedString,
    Comment,
    ComplexType,
    Constant,
    Field,
    Line,
    PrimitiveType,
    StaticArray,
    TypeName,
    UnboundedArray,
    Value,
    msg_spec,
)

RUST_BYTESTRING = "String"
RUST_WIDE_STRING = "WString"

_PRIMITIVE_TRANSLATIONS = {
    "bool": "bool",
    "byte": "u8",
    "char": "u8",
    "float32": "f32",
    "float64": "f64",
    "int8": "i8",
    "int16": "i16",
    "int32": "i32",
    "int64": "i64",
    "uint8": "u8",
    "uint16": "u16",
    "uint32": "u32",
    "uint64": "u64",
    "string": RUST_BYTESTRING,
    "wstring": RUST_WIDE_STRING,
}

_GENERATED_HEADER = (
    "// Generated code. Do not modify.\n"
    "use serde::{Serialize,Deserialize};\n"
    "#[allow(unused_imports)]\n"
    "use ros2_client::WString;\n"
    "\n"
)


@dataclass
class RosPkg:
    """A ROS 2 package and the ``.msg`` definitions it holds."""

    name: str
    path: str
    types: dict[str, str] = field(default_factory=dict)


def _quoted(text: object) -> str:
    return f'"{text}"'


def list_packages_with_msgs(
    workspace_dir: str, ros2_abs_type: str, colcon_log_directory: Path
) -> list[RosPkg]:
    """Ask colcon for the packages a type depends on, in topological order.

    Only packages that contain ``.msg`` files are returned.
    """
    package_name, sep, _type_name = ros2_abs_type.rpartition("/")
    if not sep:
        raise ValueError("Need package_name/type_name")

    print(f"Changing to {workspace_dir}")
    print("Querying colcon")
    command = [
        "colcon",
        f"--log-base={colcon_log_directory}",
        "list",
        "--topological-order",
        "--packages-up-to",
        package_name,
    ]
    completed = subprocess.run(command, cwd=workspace_dir, capture_output=True, check=False)
    if completed.returncode != 0:
        stderr = completed.stderr.decode("utf-8", errors="replace")
        raise RuntimeError(f"Colcon failure: {stderr}\nHave you run local_setup.bash?")

    result = []
    stdout = completed.stdout.decode("utf-8", errors="replace")
    for line in stdout.splitlines():
        fields = line.split()
        if len(fields) != 3:
            raise RuntimeError(f"Colcon list output: {fields!r}")
        name, package_path, _build_tool = fields
        types = _read_msg_types(Path(workspace_dir) / package_path / "msg")
        if types:
            result.append(RosPkg(name, package_path, types))
    print(f"Got {len(result)} packages")
    return result


def _read_msg_types(msg_dir: Path) -> dict[str, str]:
    """Map each ``.msg`` file's stem to its contents, sorted by stem."""
    if not msg_dir.is_dir():
        return {}
    print(f"Package path {_quoted(msg_dir)}")
    types = {}
    for path in sorted(msg_dir.iterdir()):
        if path.suffix == ".msg":
            types[path.stem] = path.read_text(encoding="utf-8")
        elif path.suffix in (".idl", ".json"):
            continue
        else:
            print(f"{_quoted(path)} is not .msg")
    return dict(sorted(types.items()))


def escape_keywords(ident: str) -> str:
    """Escape identifiers that would clash with Rust keywords."""
    return "r#" + ident if ident == "type" else ident


def translate_type(type_name: TypeName) -> str:
    """Rust type corresponding to a ``.msg`` type."""
    base_type = type_name.base
    if isinstance(base_type, PrimitiveType):
        try:
            base = _PRIMITIVE_TRANSLATIONS[base_type.name]
        except KeyError:
            raise ValueError(f"Unexpected primitive type {base_type.name}") from None
    elif isinstance(base_type, BoundedString):
        # There is no type that represents the bound.
        base = RUST_BYTESTRING
    elif isinstance(base_type, ComplexType):
        prefix = f"super::{base_type.package_name}::" if base_type.package_name else ""
        base = prefix + base_type.type_name
    else:
        raise TypeError(f"unknown base type {base_type!r}")

    spec = type_name.array_spec
    if isinstance(spec, StaticArray):
        return f"[{base};{spec.size}]"
    if isinstance(spec, (UnboundedArray, BoundedArray)):
        return f"Vec<{base}>"
    return base


def _format_float(number: float) -> str:
    """Shortest round-trip decimal form, without exponent or trailing ``.0``."""
    if number != number:
        return "NaN"
    if number in (float("inf"), float("-inf")):
        return "inf" if number > 0 else "-inf"
    text = format(Decimal(repr(number)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def translate_value(value: Value) -> str:
    """Rust literal text for a constant's value."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_float(value)
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8")
    raise TypeError(f"unsupported constant value {value!r}")


def _is_not_field(line: Line) -> bool:
    return not isinstance(line[0], Field)


def _comment_tail(found: Optional[Comment]) -> str:
    return f"// {found.text}\n" if found is not None else "\n"


def print_struct_definition(out: TextIO, name: str, lines: Sequence[Line]) -> None:
    """Write constants and a struct definition for one message type.

    Everything before the first field becomes top-level constants and
    comments; the rest goes inside the struct.
    """
    header = itertools.takewhile(_is_not_field, lines)
    body = itertools.dropwhile(_is_not_field, lines)

    for item, found in header:
        if item is None:
            out.write(f"// {found.text}\n" if found is not None else "\n")
            continue
        if not isinstance(item, Constant):
            raise AssertionError("field among leading constants")
        rust_type = translate_type(item.type_name)
        rust_value = translate_value(item.value)
        out.write(f"pub const {item.const_name} : {rust_type} = {rust_value};")
        out.write(_comment_tail(found))

    out.write("\n")
    out.write("#[derive(Debug, Serialize, Deserialize)]\n")
    out.write(f"pub struct {name} {{\n")
    for item, found in body:
        if item is None:
            out.write(f"  // {found.text}\n" if found is not None else "\n")
            continue
        out.write("  pub ")
        if isinstance(item, Field):
            rust_type = translate_type(item.type_name)
            out.write(f"{escape_keywords(item.field_name)} : {rust_type}, ")
        else:
            out.write(f"// skipped constant {item.const_name} in the middle of struct")
        out.write(_comment_tail(found))
    out.write("}\n")


def _parse_lines(definition: str) -> list[Line]:
    _rest, lines = msg_spec(definition)
    return lines


def _translate_file(input_file: str, output: Optional[str]) -> None:
    path = Path(input_file)
    type_name = path.stem
    if not type_name:
        raise ValueError("Input file did not have base name?")
    lines = _parse_lines(path.read_text(encoding="utf-8"))
    if output is None:
        print_struct_definition(sys.stdout, type_name, lines)
    else:
        with open(output, "w", encoding="utf-8") as out_file:
            print_struct_definition(out_file, type_name, lines)


def _unique_packages(groups: Iterable[list[RosPkg]]) -> list[RosPkg]:
    packages: list[RosPkg] = []
    for group in groups:
        packages.extend(pkg for pkg in group if pkg not in packages)
    return packages


def _translate_types(
    types: list[str], output: Optional[str], workspace: Optional[str], log_dir: Path
) -> None:
    if output is None:
        raise ValueError("Output dir required")
    if workspace is None:
        raise ValueError("ROS 2 workspace dir required")

    print("Requested types: [" + ", ".join(_quoted(t) for t in types) + "]")
    packages = _unique_packages(
        list_packages_with_msgs(workspace, ros2_type, log_dir) for ros2_type in types
    )

    print(f"Generating code to directory '{output}'")
    output_dir = Path(output)
    with open(output_dir / "mod.rs", "w", encoding="utf-8") as mod_file:
        for pkg in packages:
            output_file = output_dir / f"{pkg.name}.rs"
            print(f"Generating to {_quoted(output_file)}")
            with open(output_file, "w", encoding="utf-8") as out_file:
                mod_file.write(f"mod {pkg.name};\n")
                out_file.write(_GENERATED_HEADER)
                for ros2_type, definition in pkg.types.items():
                    print(f"  type {_quoted(ros2_type)}")
                    print_struct_definition(out_file, ros2_type, _parse_lines(definition))


def _argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msggen",
        description="Compiler from ROS 2 .msg definitions to Rust source",
        epilog=(
            "Example: ./msggen --workspace /opt/ros/jazzy --typename turtlesim/Pose "
            "--output generated_rust_dir"
        ),
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.0.1")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("-i", "--input", metavar="file", help="Input .msg file name")
    source.add_argument(
        "-t",
        "--typename",
        dest="types",
        action="append",
        metavar="package_name/type_name",
        help="ROS 2 type to be translated. Can be used multiple times.",
    )
    parser.add_argument("-o", "--output", metavar="file/dir", help="Output path")
    parser.add_argument("-w", "--workspace", metavar="dir", help="Ros 2 workspace path")
    parser.add_argument("-l", "--logdir", metavar="logdir", help="Dir to write colcon logs")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the generator; returns the process exit status."""
    args = _argument_parser().parse_args(argv)
    log_dir = Path(args.logdir) if args.logdir else Path("/dev/null")
    try:
        if args.input is not None:
            _translate_file(args.input, args.output)
        elif args.types:
            _translate_types(args.types, args.output, args.workspace, log_dir)
        else:
            print("Please specify input by either -i or -t option.")
    except (OSError, ValueError, RuntimeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())