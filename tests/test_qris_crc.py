import re

import pytest

from qris_crc import calculate_crc


def test_reference_vector():
    assert calculate_crc("123456789") == "29B1"


def test_empty_input_is_initial_register():
    assert calculate_crc("") == "FFFF"


@pytest.mark.parametrize("data", ["test data", "QRIS test data", "0", "6304", "a" * 512])
def test_output_is_four_uppercase_hex(data):
    crc = calculate_crc(data)
    assert len(crc) == 4
    assert re.fullmatch(r"[0-9A-F]{4}", crc)


def test_deterministic():
    data = "QRIS test data"
    assert calculate_crc(data) == calculate_crc(data)


def test_only_low_byte_of_code_point_is_used():
    # U+0141 and U+0041 share the low byte 0x41
    assert calculate_crc("ŁBC") == calculate_crc("ABC")


def test_single_bit_change_alters_checksum():
    assert calculate_crc("5802ID") != calculate_crc("5802IE")
