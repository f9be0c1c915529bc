"""Tests for command encoding and response decoding."""

from __future__ import annotations

import pytest

from epson_projector import EpsonProjectorError
from epson_projector.emulator import EmulatorConnection, EpsonProjectorEmulator
from epson_projector.protocol import (
    NOT_FOUND_INT,
    NOT_FOUND_STR,
    color_modes,
    controls,
    decode_response,
    encode_command,
    is_accepted,
    queries,
)


def test_encode_numeric_writes_three_ascii_digits():
    template = controls["RGB#Red"].template
    assert encode_command(template, 210) == b"RED 210\r"
    assert encode_command(template, 7) == b"RED 007\r"


def test_encode_returns_fresh_copy_and_leaves_template_untouched():
    template = controls["Image settings#Brightness"].template
    original = template.data
    first = encode_command(template, 255)
    second = encode_command(template, 1)
    assert first == b"BRIGHT 255\r"
    assert second == b"BRIGHT 001\r"
    assert template.data == original == b"BRIGHT 000\r"


def test_encode_color_mode_writes_single_raw_byte():
    template = controls["Image color mode"].template
    command = encode_command(template, color_modes["Theatre"])
    assert command == b"CMODE 0\x05\r"
    assert command[template.value_offset] == 0x05


@pytest.mark.parametrize("value", [-1, 1000])
def test_encode_rejects_values_that_do_not_fit(value):
    with pytest.raises(EpsonProjectorError):
        encode_command(controls["RGB#Blue"].template, value)


def test_encode_rejects_color_mode_code_over_one_byte():
    with pytest.raises(EpsonProjectorError):
        encode_command(controls["Image color mode"].template, 0x100)


def test_decode_numeric_response():
    assert decode_response(b"PWR=04\r:", queries["power_status"]) == 4
    assert decode_response(b"LAMP=1234\r:", queries["lamp_hours"]) == 1234
    assert decode_response("BRIGHT=0\r:", queries["brightness"]) == 0


@pytest.mark.parametrize("response", [b"PWR=4\r:", b"PWR=123\r:", b"PWR=\r:"])
def test_decode_power_status_requires_two_digits(response):
    assert decode_response(response, queries["power_status"]) == NOT_FOUND_INT


def test_decode_string_response():
    assert decode_response(b"SNO=X4ZK1234567\r:", queries["serial_number"]) == "X4ZK1234567"


def test_decode_switch_response():
    assert decode_response(b"MUTE=ON\r:", queries["mute_status"]) == 1
    assert decode_response(b"FREEZE=OFF\r:", queries["freeze_status"]) == 0


def test_decode_color_mode_is_hexadecimal():
    assert decode_response(b"CMODE=0F\r:", queries["color_mode"]) == 0x0F
    assert decode_response(b"CMODE=14\r:", queries["color_mode"]) == 0x14


@pytest.mark.parametrize(
    "response",
    [
        b"ERR\r:",
        b"",
        b"BRIGHT=\r:",
        b"BRIGHT=abc\r:",
        b"BRIGHT=12",  # not terminated by a carriage return
        b"CONTRAST=12\r:",
    ],
)
def test_decode_numeric_sentinel(response):
    assert decode_response(response, queries["brightness"]) == NOT_FOUND_INT


def test_decode_string_sentinel():
    assert decode_response(b"ERR\r:", queries["serial_number"]) == NOT_FOUND_STR
    assert decode_response(b"SNO=\r:", queries["serial_number"]) == NOT_FOUND_STR


def test_decode_switch_sentinel():
    assert decode_response(b"MUTE=MAYBE\r:", queries["mute_status"]) == NOT_FOUND_INT


def test_is_accepted():
    assert is_accepted(b":")
    assert not is_accepted(b"")
    assert not is_accepted(b"ERR\r:")
    assert not is_accepted(b"::")


def _apply_and_query(emulator: EpsonProjectorEmulator, command: bytes, query_command: bytes) -> bytes:
    connection = EmulatorConnection()
    connection.authorized = True
    assert emulator.handle_command(connection, command) == b":"
    return emulator.handle_command(connection, query_command)


def test_numeric_values_survive_device_round_trip():
    emulator = EpsonProjectorEmulator(power_status=1)
    control_meta = controls["Image settings#Color temperature"]
    for value in range(0, 256):
        response = _apply_and_query(
            emulator, encode_command(control_meta.template, value), control_meta.query.command)
        assert decode_response(response, control_meta.query) == value


def test_color_modes_survive_device_round_trip():
    emulator = EpsonProjectorEmulator(power_status=1)
    control_meta = controls["Image color mode"]
    for name, code in color_modes.items():
        response = _apply_and_query(
            emulator, encode_command(control_meta.template, code), control_meta.query.command)
        assert decode_response(response, control_meta.query) == code, name
