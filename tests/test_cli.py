import io
import os
import sys
from pathlib import Path

import pytest

from ros2_client.msggen.cli import (
    RosPkg,
    escape_keywords,
    list_packages_with_msgs,
    main,
    print_struct_definition,
    translate_type,
    translate_value,
)
from ros2_client.msggen.parser import (
    BoundedArray,
    BoundedString,
    ComplexType,
    PrimitiveType,
    StaticArray,
    TypeName,
    UnboundedArray,
    msg_spec,
)

_FAKE_COLCON = """#!{python}
import os
import pathlib
import sys

here = pathlib.Path(__file__).resolve().parent
(here / "args.txt").write_text("\\n".join(sys.argv[1:]))
(here / "cwd.txt").write_text(os.getcwd())
sys.stdout.write((here / "stdout.txt").read_text())
sys.stderr.write((here / "stderr.txt").read_text())
sys.exit(int((here / "code.txt").read_text()))
"""


class _FakeColcon:
    def __init__(self, bin_dir: Path):
        self.bin_dir = bin_dir

    def configure(self, stdout: str, returncode: int = 0, stderr: str = "") -> None:
        (self.bin_dir / "stdout.txt").write_text(stdout)
        (self.bin_dir / "stderr.txt").write_text(stderr)
        (self.bin_dir / "code.txt").write_text(str(returncode))

    @property
    def args(self) -> list:
        return (self.bin_dir / "args.txt").read_text().split("\n")

    @property
    def cwd(self) -> Path:
        return Path((self.bin_dir / "cwd.txt").read_text())


@pytest.fixture
def fake_colcon(tmp_path, monkeypatch):
    bin_dir = tmp_path / "fakebin"
    bin_dir.mkdir()
    script = bin_dir / "colcon"
    script.write_text(_FAKE_COLCON.format(python=sys.executable))
    script.chmod(0o755)
    monkeypatch.setenv("PATH", str(bin_dir) + os.pathsep + os.environ.get("PATH", ""))
    colcon = _FakeColcon(bin_dir)
    colcon.configure("")
    return colcon


@pytest.fixture
def workspace(tmp_path):
    ws = tmp_path / "ws"
    msg_dir = ws / "pkg_a" / "msg"
    msg_dir.mkdir(parents=True)
    (msg_dir / "Foo.msg").write_text("int32 a\n")
    (msg_dir / "Bar.msg").write_text("string b\n")
    (msg_dir / "Foo.idl").write_text("ignored")
    (msg_dir / "notes.txt").write_text("ignored")
    (ws / "pkg_b").mkdir()
    return ws


COLCON_LISTING = "pkg_a\tpkg_a\t(ros.ament_cmake)\npkg_b\tpkg_b\t(ros.ament_cmake)\n"


@pytest.mark.parametrize(
    "primitive, expected",
    [
        ("bool", "bool"),
        ("byte", "u8"),
        ("char", "u8"),
        ("float32", "f32"),
        ("string", "String"),
        ("wstring", "WString"),
    ],
)
def test_translate_primitive(primitive, expected):
    assert translate_type(TypeName(PrimitiveType(primitive))) == expected


def test_translate_unknown_primitive_raises():
    with pytest.raises(ValueError):
        translate_type(TypeName(PrimitiveType("quaternion")))


def test_translate_bounded_string_is_plain_string():
    assert translate_type(TypeName(BoundedString(20))) == translate_type(
        TypeName(PrimitiveType("string"))
    )


def test_translate_complex_type():
    assert translate_type(TypeName(ComplexType(None, "Point"))) == "Point"
    qualified = translate_type(TypeName(ComplexType("geometry_msgs", "Point")))
    assert qualified.startswith("super::geometry_msgs::")
    assert qualified.endswith("Point")


def test_translate_arrays():
    assert translate_type(TypeName(PrimitiveType("int32"), StaticArray(3))) == "[i32;3]"
    unbounded = translate_type(TypeName(PrimitiveType("int32"), UnboundedArray()))
    bounded = translate_type(TypeName(PrimitiveType("int32"), BoundedArray(5)))
    assert unbounded == bounded == "Vec<i32>"


@pytest.mark.parametrize(
    "value, expected",
    [(True, "true"), (False, "false"), (7, "7"), (-3, "-3"), (1.5, "1.5"), (b"hello", "hello")],
)
def test_translate_value(value, expected):
    assert translate_value(value) == expected


def test_translate_whole_float_has_no_fraction():
    assert translate_value(2.0) == "2"


def test_escape_keywords():
    assert escape_keywords("type") == "r#type"
    assert escape_keywords("data") == "data"


def test_print_struct_definition():
    _rest, lines = msg_spec("# header\nint32 X=5\nint32 a\nstring type # c\n")
    out = io.StringIO()
    print_struct_definition(out, "Foo", lines)
    assert out.getvalue() == (
        "// # header\n"
        "pub const X : i32 = 5;\n"
        "\n"
        "#[derive(Debug, Serialize, Deserialize)]\n"
        "pub struct Foo {\n"
        "  pub a : i32, \n"
        "  pub r#type : String, // # c\n"
        "}\n"
    )


def test_print_struct_skips_constant_inside_struct():
    _rest, lines = msg_spec("int32 a\nint32 B=1\n")
    out = io.StringIO()
    print_struct_definition(out, "Foo", lines)
    assert "// skipped constant B in the middle of struct" in out.getvalue()
    assert out.getvalue().endswith("}\n")


def test_main_input_to_file(tmp_path):
    source = tmp_path / "Pose.msg"
    source.write_text("float32 x\n")
    target = tmp_path / "pose.rs"
    assert main(["-i", str(source), "-o", str(target)]) == 0
    text = target.read_text()
    assert "pub struct Pose {" in text
    assert "  pub x : f32, \n" in text


def test_main_input_to_stdout(tmp_path, capsys):
    source = tmp_path / "Pose.msg"
    source.write_text("float64 y\n")
    assert main(["-i", str(source)]) == 0
    assert "pub struct Pose {" in capsys.readouterr().out


def test_main_without_input(capsys):
    assert main([]) == 0
    assert "Please specify input by either -i or -t option." in capsys.readouterr().out


def test_main_input_and_type_conflict():
    with pytest.raises(SystemExit):
        main(["-i", "x.msg", "-t", "pkg/Type"])


def test_main_type_requires_output(capsys):
    assert main(["-t", "pkg/Type", "-w", "ws"]) == 1
    assert "Output dir required" in capsys.readouterr().err


def test_main_type_requires_workspace(tmp_path, capsys):
    assert main(["-t", "pkg/Type", "-o", str(tmp_path)]) == 1
    assert "ROS 2 workspace dir required" in capsys.readouterr().err


def test_list_packages_needs_package_and_type():
    with pytest.raises(ValueError):
        list_packages_with_msgs("ws", "JustAType", Path("/dev/null"))


def test_list_packages_reads_msg_files(workspace, fake_colcon):
    fake_colcon.configure(COLCON_LISTING)
    packages = list_packages_with_msgs(str(workspace), "pkg_a/Foo", Path("/tmp/logs"))
    assert packages == [
        RosPkg("pkg_a", "pkg_a", {"Bar": "string b\n", "Foo": "int32 a\n"})
    ]
    assert list(packages[0].types) == ["Bar", "Foo"]
    command = fake_colcon.args
    assert command[-2:] == ["--packages-up-to", "pkg_a"]
    assert "--log-base=/tmp/logs" in command
    assert "list" in command
    assert fake_colcon.cwd.resolve() == workspace.resolve()


def test_list_packages_colcon_failure(workspace, fake_colcon):
    fake_colcon.configure("", returncode=1, stderr="boom")
    with pytest.raises(RuntimeError, match="Colcon failure: boom"):
        list_packages_with_msgs(str(workspace), "pkg_a/Foo", Path("/dev/null"))


def test_list_packages_bad_listing(workspace, fake_colcon):
    fake_colcon.configure("only_two fields\n")
    with pytest.raises(RuntimeError):
        list_packages_with_msgs(str(workspace), "pkg_a/Foo", Path("/dev/null"))


def test_main_type_mode_generates_files(workspace, tmp_path, fake_colcon):
    out_dir = tmp_path / "generated"
    out_dir.mkdir()
    fake_colcon.configure(COLCON_LISTING)
    status = main(
        ["-t", "pkg_a/Foo", "-t", "pkg_a/Bar", "-w", str(workspace), "-o", str(out_dir)]
    )
    assert status == 0
    assert (out_dir / "mod.rs").read_text() == "mod pkg_a;\n"
    generated = (out_dir / "pkg_a.rs").read_text()
    assert generated.startswith("// Generated code. Do not modify.\n")
    assert "use ros2_client::WString;" in generated
    assert generated.index("pub struct Bar {") < generated.index("pub struct Foo {")
    assert not (out_dir / "pkg_b.rs").exists()