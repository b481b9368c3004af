# Developed in Oct 2026.
# Purpose: Convert static QRIS codes into dynamic, amount-bound codes and
# validate the structure and CRC16 checksum of any QRIS code.

import re
from decimal import Decimal
from enum import Enum
from typing import List, NamedTuple

from qris_crc import calculate_crc

# --- QRIS MARKERS ---
STATIC_POINT_OF_INITIATION = "010211"
DYNAMIC_POINT_OF_INITIATION = "010212"
COUNTRY_CODE_ANCHOR = "5802ID"
AMOUNT_TAG = "54"
PERCENTAGE_FEE_PREFIX = "55020357"
FIXED_FEE_PREFIX = "55020256"
MIN_QRIS_LENGTH = 20
CRC_LENGTH = 4
CRC_PATTERN = re.compile(r"^[0-9A-F]{4}$", re.IGNORECASE)

# --- VALIDATION MESSAGES ---
MSG_NOT_A_STRING = "QRIS must be a non-empty string"
MSG_TOO_SHORT = "QRIS is too short"
MSG_MISSING_COUNTRY_CODE = f"QRIS must contain Indonesia country code ({COUNTRY_CODE_ANCHOR})"
MSG_BAD_CRC_FORMAT = "QRIS must end with a valid 4-character CRC16 checksum"


class QRISError(ValueError):
    """Base error for QRIS conversion. `code` is a stable machine-readable tag."""

    code = "QRIS_ERROR"

    def __init__(self, msg=""):
        super().__init__(msg or self.code)


class InvalidFormat(QRISError):
    code = "INVALID_FORMAT"


class InvalidAmount(QRISError):
    code = "INVALID_AMOUNT"


class InvalidFeeKind(QRISError):
    code = "INVALID_FEE_KIND"


class FeeKind(Enum):
    PERCENTAGE = "percentage"
    FIXED = "fixed"


# One-letter aliases: 'p' for percentage, 'r' for rupiah (fixed amount).
FEE_KIND_ALIASES = {
    "p": FeeKind.PERCENTAGE,
    "r": FeeKind.FIXED,
}


class ValidationResult(NamedTuple):
    valid: bool
    errors: List[str]


def pad(value):
    """Left-pads the text form of value with zeros to at least 2 characters."""
    return str(value).zfill(2)


def to_text(value):
    """Renders an amount or fee the way it appears inside the QRIS payload.

    Integral floats drop their fractional part (100.0 -> '100'), None becomes ''.
    Other floats use Python's repr, so exponent forms read '1.5e-07'.
    """
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


def parse_fee_kind(fee_kind):
    """Resolves a FeeKind from an enum member, its value or a one-letter alias."""
    if isinstance(fee_kind, FeeKind):
        return fee_kind
    if isinstance(fee_kind, str):
        key = fee_kind.strip().lower()
        if key in FEE_KIND_ALIASES:
            return FEE_KIND_ALIASES[key]
        try:
            return FeeKind(key)
        except ValueError:
            pass
    raise InvalidFeeKind(f"Unknown fee kind: {fee_kind!r}")


def is_valid_qris(qris):
    """Syntactic pre-check: length, country code anchor and CRC trailer shape.

    Does not verify the checksum itself.
    """
    if not qris or not isinstance(qris, str):
        return False
    if len(qris) < MIN_QRIS_LENGTH:
        return False
    if COUNTRY_CODE_ANCHOR not in qris:
        return False
    if not CRC_PATTERN.match(qris[-CRC_LENGTH:]):
        return False
    return True


def validate_qris(qris):
    """Validates a QRIS string and returns every applicable diagnostic."""
    errors = []

    if not qris or not isinstance(qris, str):
        errors.append(MSG_NOT_A_STRING)
        return ValidationResult(False, errors)

    if len(qris) < MIN_QRIS_LENGTH:
        errors.append(MSG_TOO_SHORT)

    if COUNTRY_CODE_ANCHOR not in qris:
        errors.append(MSG_MISSING_COUNTRY_CODE)

    if not CRC_PATTERN.match(qris[-CRC_LENGTH:]):
        errors.append(MSG_BAD_CRC_FORMAT)

    # Checksum is meaningless over a structurally broken payload
    if not errors:
        expected_crc = calculate_crc(qris[:-CRC_LENGTH])
        actual_crc = qris[-CRC_LENGTH:].upper()
        if expected_crc != actual_crc:
            errors.append(f"Invalid CRC16 checksum. Expected: {expected_crc}, Actual: {actual_crc}")

    return ValidationResult(not errors, errors)


def build_amount_tag(amount_str):
    return AMOUNT_TAG + pad(len(amount_str)) + amount_str


def build_fee_tag(fee_kind, fee_str):
    """Tag 55 with the fee indicator subtag (03 percentage / 02 fixed) and value.

    Returns '' for a zero fee.
    """
    if fee_str == "0":
        return ""
    if fee_kind is FeeKind.PERCENTAGE:
        return PERCENTAGE_FEE_PREFIX + pad(len(fee_str)) + fee_str
    return FIXED_FEE_PREFIX + pad(len(fee_str)) + fee_str


def generate_dynamic_qris(qris_static, amount, fee_kind=FeeKind.PERCENTAGE, fee="0"):
    """Converts a static QRIS into a dynamic QRIS bound to amount and optional fee.

    Raises InvalidFormat when the input is not a plausible QRIS or its country
    code is missing/duplicated, InvalidAmount for an empty or zero amount and
    InvalidFeeKind for a fee kind other than percentage/fixed.
    """
    if not is_valid_qris(qris_static):
        raise InvalidFormat("Invalid QRIS format")

    amount_str = to_text(amount)
    # An omitted fee means no fee; an omitted amount stays '' and is rejected
    fee_str = to_text("0" if fee is None else fee)

    if not amount_str or amount_str == "0":
        raise InvalidAmount("Amount must be greater than 0")

    kind = parse_fee_kind(fee_kind)

    qris_without_crc = qris_static[:-CRC_LENGTH]
    # Already-dynamic input has no 010211 and passes through unchanged
    qris_dynamic = qris_without_crc.replace(STATIC_POINT_OF_INITIATION, DYNAMIC_POINT_OF_INITIATION, 1)

    parts = qris_dynamic.split(COUNTRY_CODE_ANCHOR)
    if len(parts) != 2:
        raise InvalidFormat("Invalid QRIS format: missing or duplicate country code")
    before_country_code, after_country_code = parts

    middle = build_amount_tag(amount_str) + build_fee_tag(kind, fee_str) + COUNTRY_CODE_ANCHOR
    output_without_crc = before_country_code.strip() + middle + after_country_code.strip()

    return output_without_crc + calculate_crc(output_without_crc)
