"""
Leaf Encoding Unit Tests
Tests for core/merkle/leaves.py

Tests:
- Fixed 52-byte tight-packed layout (address || uint256 big-endian)
- Leaf digest = keccak256(encoding)
- Tampering with address or amount changes the digest
- Threaded hashing matches sequential hashing
"""
from core.crypto.hashing import keccak256
from core.merkle.leaves import LEAF_ENCODING_SIZE, encode_leaf, hash_leaf, hash_leaves

from fixtures.common import ADDRESS_A, ADDRESS_B, make_record, make_records


class TestEncodeLeaf:
    """Tests for encode_leaf()."""

    def test_encoding_length(self):
        assert LEAF_ENCODING_SIZE == 52
        assert len(encode_leaf(make_record(ADDRESS_A, 100))) == 52

    def test_encoding_layout(self):
        """Address bytes followed by a 32-byte big-endian amount."""
        encoded = encode_leaf(make_record(ADDRESS_A, 100))

        assert encoded[:20] == bytes.fromhex(ADDRESS_A[2:])
        assert encoded[20:] == (100).to_bytes(32, "big")
        assert encoded[-1] == 100
        assert encoded[20:-1] == b"\x00" * 31

    def test_zero_amount(self):
        encoded = encode_leaf(make_record(ADDRESS_A, 0))
        assert encoded[20:] == b"\x00" * 32

    def test_max_amount(self):
        encoded = encode_leaf(make_record(ADDRESS_A, 2**256 - 1))
        assert encoded[20:] == b"\xff" * 32

    def test_address_case_does_not_change_encoding(self):
        upper = "0x" + ADDRESS_A[2:].upper()
        assert encode_leaf(make_record(upper, 7)) == encode_leaf(make_record(ADDRESS_A, 7))

    def test_line_number_not_encoded(self):
        assert encode_leaf(make_record(ADDRESS_A, 7, line_number=2)) == encode_leaf(
            make_record(ADDRESS_A, 7, line_number=99)
        )


class TestHashLeaf:
    """Tests for hash_leaf()."""

    def test_hash_leaf_is_keccak_of_encoding(self):
        record = make_record(ADDRESS_B, 50)
        assert hash_leaf(record) == keccak256(encode_leaf(record))

    def test_hash_leaf_deterministic(self):
        assert hash_leaf(make_record(ADDRESS_A, 100)) == hash_leaf(make_record(ADDRESS_A, 100))

    def test_amount_tamper_changes_digest(self):
        assert hash_leaf(make_record(ADDRESS_A, 100)) != hash_leaf(make_record(ADDRESS_A, 101))

    def test_address_tamper_changes_digest(self):
        tampered = ADDRESS_A[:-1] + "0"
        assert hash_leaf(make_record(ADDRESS_A, 100)) != hash_leaf(make_record(tampered, 100))


class TestHashLeaves:
    """Tests for hash_leaves()."""

    def test_preserves_input_order(self):
        records = make_records(6)
        assert hash_leaves(records) == [hash_leaf(r) for r in records]

    def test_threaded_matches_sequential(self):
        records = make_records(50)
        assert hash_leaves(records, workers=4) == hash_leaves(records, workers=1)

    def test_empty(self):
        assert hash_leaves([]) == []
