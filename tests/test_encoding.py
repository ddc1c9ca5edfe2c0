"""Tests for type and struct encoding."""

import pytest
from eth_utils import keccak

from compound_eip712.typed_data import (
    ArrayType,
    CyclicTypeError,
    EncodingError,
    PrimitiveType,
    StructType,
    UnsupportedTypeError,
    classify_field_type,
    dependencies,
    encode_data,
    encode_type,
    struct_hash,
    type_hash,
)

from conftest import MAIL_STRUCT_HASH, MAIL_TYPE_HASH, MAIL_TYPE_STRING


# A declares Beta before Alpha; Alpha sorts before Beta
ABC_TYPES = {
    "A": [
        {"name": "b", "type": "Beta"},
        {"name": "c", "type": "Alpha"},
    ],
    "Beta": [{"name": "value", "type": "uint256"}],
    "Alpha": [{"name": "flag", "type": "bool"}],
    "Unrelated": [{"name": "x", "type": "uint8"}],
}


class TestDependencies:
    """Tests for dependency resolution."""

    def test_primary_type_first(self, mail_types):
        """Test that the primary type leads the list."""
        assert dependencies("Mail", mail_types) == ["Mail", "Person"]

    def test_deduplicates(self, mail_types):
        """Test that a type referenced twice appears once."""
        deps = dependencies("Mail", mail_types)
        assert deps.count("Person") == 1

    def test_primitive_type_is_empty(self, mail_types):
        """Test that a name outside the dictionary expands to nothing."""
        assert dependencies("address", mail_types) == []

    def test_first_seen_order(self):
        """Test that transitive types appear in depth-first order."""
        types = {
            "Root": [
                {"name": "z", "type": "Zed"},
                {"name": "a", "type": "Alpha"},
            ],
            "Zed": [{"name": "inner", "type": "Inner"}],
            "Alpha": [{"name": "n", "type": "uint256"}],
            "Inner": [{"name": "n", "type": "uint256"}],
        }
        assert dependencies("Root", types) == ["Root", "Zed", "Inner", "Alpha"]

    def test_array_element_struct(self):
        """Test that P[2] resolves to its element type P."""
        types = {
            "A": [{"name": "p", "type": "P[2]"}],
            "P": [{"name": "x", "type": "uint256"}],
        }
        assert dependencies("A", types) == ["A", "P"]

    def test_ignores_unrelated_types(self):
        """Test that types not reachable from the primary type are left out."""
        assert "Unrelated" not in dependencies("A", ABC_TYPES)

    def test_self_reference_raises(self):
        """Test that a type referencing itself is rejected."""
        types = {"Node": [{"name": "next", "type": "Node"}]}
        with pytest.raises(CyclicTypeError, match="Node"):
            dependencies("Node", types)

    def test_indirect_cycle_raises(self):
        """Test that a cycle through another type is rejected."""
        types = {
            "Left": [{"name": "right", "type": "Right"}],
            "Right": [{"name": "left", "type": "Left"}],
        }
        with pytest.raises(CyclicTypeError):
            dependencies("Left", types)

    def test_shared_dependency_is_not_a_cycle(self):
        """Test that a diamond-shaped graph resolves."""
        types = {
            "Top": [
                {"name": "l", "type": "Left"},
                {"name": "r", "type": "Right"},
            ],
            "Left": [{"name": "s", "type": "Shared"}],
            "Right": [{"name": "s", "type": "Shared"}],
            "Shared": [{"name": "n", "type": "uint256"}],
        }
        assert dependencies("Top", types) == ["Top", "Left", "Shared", "Right"]


class TestEncodeType:
    """Tests for canonical type strings."""

    def test_mail_type_string(self, mail_types):
        """Test the reference Mail type string."""
        assert encode_type("Mail", mail_types) == MAIL_TYPE_STRING

    def test_dependencies_alphabetical_after_primary(self):
        """Test that A renders first, then Alpha, then Beta."""
        assert encode_type("A", ABC_TYPES) == (
            "A(Beta b,Alpha c)Alpha(bool flag)Beta(uint256 value)"
        )

    def test_struct_array_element_is_included(self):
        """Test that a P[] field pulls P into the type string."""
        types = {
            "A": [{"name": "p", "type": "P[]"}],
            "P": [{"name": "x", "type": "uint256"}],
        }
        assert encode_type("A", types) == "A(P[] p)P(uint256 x)"

    def test_fields_keep_declared_order(self):
        """Test that fields are not re-sorted."""
        types = {"T": [{"name": "z", "type": "uint256"}, {"name": "a", "type": "bool"}]}
        assert encode_type("T", types) == "T(uint256 z,bool a)"

    def test_independent_of_unrelated_types(self):
        """Test that adding unrelated types leaves the string unchanged."""
        types = dict(ABC_TYPES)
        types["Zzz"] = [{"name": "q", "type": "string"}]
        assert encode_type("A", types) == encode_type("A", ABC_TYPES)

    def test_missing_primary_type(self, mail_types):
        """Test that an undefined primary type raises EncodingError."""
        with pytest.raises(EncodingError, match="Letter"):
            encode_type("Letter", mail_types)

    def test_missing_nested_type(self, mail_types):
        """Test that an undefined field struct type raises EncodingError."""
        del mail_types["Person"]
        with pytest.raises(EncodingError) as exc_info:
            encode_type("Mail", mail_types)
        assert exc_info.value.type_name == "Person"


class TestTypeHash:
    """Tests for type hashes."""

    def test_mail_type_hash(self, mail_types):
        """Test the reference Mail type hash."""
        assert type_hash("Mail", mail_types).hex() == MAIL_TYPE_HASH

    def test_type_hash_is_keccak_of_string(self):
        """Test that the type hash hashes the UTF-8 type string."""
        assert type_hash("A", ABC_TYPES) == keccak(text=encode_type("A", ABC_TYPES))


class TestClassifyFieldType:
    """Tests for field type dispatch."""

    def test_struct(self, mail_types):
        assert classify_field_type("Person", mail_types) == StructType("Person")

    def test_primitive(self, mail_types):
        assert classify_field_type("uint256", mail_types) == PrimitiveType("uint256")

    def test_dynamic_array(self, mail_types):
        assert classify_field_type("uint256[]", mail_types) == ArrayType("uint256")

    def test_fixed_array_of_structs(self, mail_types):
        assert classify_field_type("Person[2]", mail_types) == ArrayType("Person")

    def test_unknown(self, mail_types):
        with pytest.raises(EncodingError, match="Letter"):
            classify_field_type("Letter", mail_types)


class TestEncodeData:
    """Tests for struct data encoding."""

    def test_mail_struct_hash(self, mail_types, mail_message):
        """Test the reference Mail struct hash."""
        assert struct_hash("Mail", mail_message, mail_types).hex() == MAIL_STRUCT_HASH

    def test_layout(self, mail_types, mail_message):
        """Test that output is the type hash plus one word per field."""
        encoded = encode_data("Mail", mail_message, mail_types)

        assert len(encoded) == 32 * 4
        assert encoded[:32] == type_hash("Mail", mail_types)
        assert encoded[96:128] == keccak(text="Hello, Bob!")

    def test_nested_struct_is_hashed(self, mail_types, mail_message):
        """Test that a nested struct contributes its struct hash only."""
        encoded = encode_data("Mail", mail_message, mail_types)
        assert encoded[32:64] == struct_hash("Person", mail_message["from"], mail_types)

    def test_primitive_words(self):
        """Test address, uint and bool words."""
        types = {
            "P": [
                {"name": "who", "type": "address"},
                {"name": "amount", "type": "uint256"},
                {"name": "ok", "type": "bool"},
            ]
        }
        data = {
            "who": "0xbBbBBBBbbBBBbbbBbbBbbbbBBbBbbbbBbBbbBBbB",
            "amount": 258,
            "ok": True,
        }
        encoded = encode_data("P", data, types)

        assert encoded[32:64] == bytes(12) + bytes.fromhex("bb" * 20)
        assert encoded[64:96] == (258).to_bytes(32, "big")
        assert encoded[96:128] == (1).to_bytes(32, "big")

    def test_string_integers_are_coerced(self):
        """Test that decimal and hex strings encode like integers."""
        types = {"N": [{"name": "n", "type": "uint256"}]}
        as_int = encode_data("N", {"n": 255}, types)

        assert encode_data("N", {"n": "255"}, types) == as_int
        assert encode_data("N", {"n": "0xff"}, types) == as_int

    def test_bytes_field_is_hashed(self):
        """Test that dynamic bytes are hashed, hex or raw."""
        types = {"B": [{"name": "data", "type": "bytes"}]}
        raw = encode_data("B", {"data": b"\x01\x02"}, types)

        assert raw[32:] == keccak(b"\x01\x02")
        assert encode_data("B", {"data": "0x0102"}, types) == raw

    def test_bytes32_hex_string(self):
        """Test that a bytes32 hex string encodes as its bytes."""
        types = {"H": [{"name": "h", "type": "bytes32"}]}
        value = "0x" + "ab" * 32
        assert encode_data("H", {"h": value}, types)[32:] == bytes.fromhex("ab" * 32)

    def test_short_bytes32_hex_string_rejected(self):
        """Test that a bytes32 field given one byte raises EncodingError."""
        types = {"H": [{"name": "h", "type": "bytes32"}]}
        with pytest.raises(EncodingError, match="'h'.*incorrect data length"):
            encode_data("H", {"h": "0xab"}, types)

    def test_wrong_length_raw_bytes_rejected(self):
        """Test that raw bytes longer than bytes4 raise EncodingError."""
        types = {"S": [{"name": "selector", "type": "bytes4"}]}
        with pytest.raises(EncodingError, match="selector"):
            encode_data("S", {"selector": b"\x01\x02\x03\x04\x05"}, types)

    def test_array_field_rejected(self):
        """Test that uint256[] raises UnsupportedTypeError."""
        types = {"L": [{"name": "items", "type": "uint256[]"}]}
        with pytest.raises(UnsupportedTypeError, match="uint256"):
            encode_data("L", {"items": [1, 2, 3]}, types)

    def test_missing_nested_type(self, mail_types, mail_message):
        """Test that a nested field with an undefined type raises EncodingError."""
        del mail_types["Person"]
        with pytest.raises(EncodingError):
            encode_data("Mail", mail_message, mail_types)

    def test_missing_value(self, mail_types, mail_message):
        """Test that a message lacking a field raises EncodingError."""
        del mail_message["contents"]
        with pytest.raises(EncodingError, match="contents"):
            encode_data("Mail", mail_message, mail_types)

    def test_invalid_value(self, mail_types, mail_message):
        """Test that an unencodable value raises EncodingError."""
        mail_message["to"]["wallet"] = "not-an-address"
        with pytest.raises(EncodingError, match="wallet"):
            encode_data("Mail", mail_message, mail_types)

    def test_nested_value_must_be_mapping(self, mail_types, mail_message):
        """Test that a scalar in a struct field raises EncodingError."""
        mail_message["to"] = "Bob"
        with pytest.raises(EncodingError, match="mapping"):
            encode_data("Mail", mail_message, mail_types)

    def test_does_not_mutate_inputs(self, mail_types, mail_message):
        """Test that types and data are left untouched."""
        before_types = repr(mail_types)
        before_message = repr(mail_message)

        encode_data("Mail", mail_message, mail_types)

        assert repr(mail_types) == before_types
        assert repr(mail_message) == before_message


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
