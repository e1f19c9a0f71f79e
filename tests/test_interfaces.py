import pytest

from ros2_client.interfaces import (
    BasicTypesRequest,
    BasicTypesResponse,
    MarkerRequest,
    MarkerResponse,
)


def test_request_demo_values():
    req = BasicTypesRequest.demo()
    assert req.bool_value is True
    assert req.string_value == "From RustDDS service, this a Request"
    assert req.byte_value == BasicTypesRequest().byte_value


def test_response_demo_values():
    resp = BasicTypesResponse.demo()
    assert resp.bool_value is True
    assert resp.string_value == "From RustDDS service, this a Response"


def test_default_is_empty():
    req = BasicTypesRequest()
    assert req.bool_value is False
    assert req.string_value == ""
    assert req.int64_value == req.uint64_value == req.char_value == 0


def test_byte_value_is_converted_to_bytes():
    req = BasicTypesRequest(byte_value=[1, 2, 255])
    assert req.byte_value == bytes([1, 2, 255])


@pytest.mark.parametrize(
    "field, value",
    [
        ("int8_value", -128),
        ("int8_value", 127),
        ("uint8_value", 255),
        ("int16_value", -(2**15)),
        ("uint32_value", 2**32 - 1),
        ("int64_value", -(2**63)),
        ("uint64_value", 2**64 - 1),
    ],
)
def test_boundary_values_accepted(field, value):
    req = BasicTypesRequest(**{field: value})
    assert getattr(req, field) == value


@pytest.mark.parametrize(
    "field, value",
    [
        ("int8_value", 128),
        ("uint8_value", -1),
        ("char_value", 256),
        ("uint16_value", 2**16),
        ("int32_value", 2**31),
        ("uint64_value", 2**64),
    ],
)
def test_out_of_range_rejected(field, value):
    with pytest.raises(ValueError):
        BasicTypesResponse(**{field: value})


def test_marker_messages():
    req = MarkerRequest("m")
    assert req.marker == "m"
    assert req == MarkerRequest("m")
    assert not (req == MarkerResponse("m"))