# Developed in Oct 2026.
# Purpose: CRC-16/CCITT-FALSE checksum used as the QRIS payload trailer.

CRC_INITIAL = 0xFFFF
CRC_POLYNOMIAL = 0x1021


def calculate_crc(data_string):
    """Calculates the CRC-16/CCITT-FALSE (0xFFFF, 0x1021) for QRIS.

    Each character contributes the low 8 bits of its code point. The result is
    rendered as 4 uppercase hex digits, so an empty string gives 'FFFF'.
    """
    crc = CRC_INITIAL

    for char in data_string:
        crc ^= (ord(char) & 0xFF) << 8
        for _ in range(8):
            if (crc & 0x8000):
                crc = (crc << 1) ^ CRC_POLYNOMIAL
            else:
                crc = crc << 1
            crc &= 0xFFFF
    return f"{crc & 0xFFFF:04X}"
