import pytest

from qris_crc import calculate_crc

# Static QRIS issued by a GoPay merchant (tag 01 = 11)
STATIC_QRIS = (
    "00020101021126610014COM.GO-JEK.WWW01189360091434035299640210G4035299640303UMI"
    "51440014ID.CO.QRIS.WWW0215ID10253753027970303UMI5204581553033605802ID"
    "5924Anjani Falisha Kikanaya,6006MALANG61056513962070703A0163042735"
)

# Same layout without a checksum, so tests can sign it themselves
UNSIGNED_QRIS = (
    "00020101021126370016ID.CO.TELKOM.WWW011893600898021234567802150000000000000000303UME"
    "51440014ID.CO.QRIS.WWW0215ID20200185853940303UME5204549953033605802ID5303360"
)


def _sign(body):
    return body + calculate_crc(body)


@pytest.fixture
def sign():
    """Appends the correct CRC16 trailer to a QRIS body."""
    return _sign


@pytest.fixture
def unsigned_qris():
    return UNSIGNED_QRIS


@pytest.fixture
def static_qris():
    return STATIC_QRIS


@pytest.fixture
def signed_qris():
    return _sign(UNSIGNED_QRIS)
