import pytest

from torrentkit.bencode import BencodeError, decode, encode


def test_encode_string_wire_form():
    assert encode(b"spam") == b"4:spam"


def test_encode_negative_integer_wire_form():
    assert encode(-3) == b"i-3e"


def test_encode_sorts_dictionary_keys():
    assert encode({"b": 1, "a": 2}) == b"d1:ai2e1:bi1ee"


@pytest.mark.parametrize(
    "value",
    [
        0,
        42,
        -17,
        2**70,
        b"",
        b"hello world",
        bytes(range(256)),
        [],
        [1, b"two", [3]],
        {},
        {b"name": b"example", b"list": [1, 2, {b"nested": b"x"}]},
    ],
)
def test_round_trip(value):
    assert decode(encode(value)) == value


def test_str_is_encoded_as_utf8_bytes():
    text = "caf\u00e9"
    assert decode(encode(text)) == text.encode("utf-8")


def test_str_keys_decode_as_bytes():
    assert decode(encode({"key": 1})) == {b"key": 1}


def test_tuple_encodes_like_list():
    assert encode((1, b"a")) == encode([1, b"a"])


def test_decode_accepts_bytearray_and_memoryview():
    data = encode({b"a": [1, 2]})
    assert decode(bytearray(data)) == decode(data)
    assert decode(memoryview(data)) == decode(data)


def test_encoding_is_canonical():
    data = encode({b"z": 1, b"a": {b"y": 2, b"b": 3}})
    assert encode(decode(data)) == data


def test_unsorted_keys_are_accepted_on_decode():
    data = b"d1:bi1e1:ai2ee"
    assert decode(data) == {b"a": 2, b"b": 1}


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"i01e",
        b"i-0e",
        b"ie",
        b"i12",
        b"5:abc",
        b"05:hello",
        b"3abc",
        b"l",
        b"li1e",
        b"d1:ae",
        b"di1ei2ee",
        b"i1eextra",
        b"x",
    ],
)
def test_decode_rejects_invalid_data(data):
    with pytest.raises(BencodeError):
        decode(data)


@pytest.mark.parametrize("value", [1.5, None, True, {1: b"a"}, object()])
def test_encode_rejects_unsupported_values(value):
    with pytest.raises(BencodeError):
        encode(value)


def test_encode_rejects_duplicate_keys():
    with pytest.raises(BencodeError):
        encode({"a": 1, b"a": 2})


def test_bencode_error_is_value_error():
    with pytest.raises(ValueError):
        decode(b"q")