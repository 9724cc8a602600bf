from dataclasses import dataclass

import pytest

from imtools import strutil


def test_string_to_int_valid_and_signed():
    assert strutil.string_to_int("42") == 42
    assert strutil.string_to_int("+7") == 7
    assert strutil.string_to_int("-7") == -7


@pytest.mark.parametrize("text", ["", "abc", " 12", "1_000", "1.5", "12a"])
def test_string_to_int_invalid_gives_zero(text):
    assert strutil.string_to_int(text) == 0
    assert strutil.string_to_int64(text) == 0


def test_string_to_int64_clamps():
    assert strutil.string_to_int64("9" * 30) == 2**63 - 1
    assert strutil.string_to_int64("-" + "9" * 30) == -(2**63)


def test_string_to_int32_truncates():
    assert strutil.string_to_int32("123") == 123
    assert strutil.string_to_int32(str(2**31)) == -(2**31)


def test_is_contain():
    assert strutil.is_contain("b", ["a", "b"])
    assert not strutil.is_contain("c", ["a", "b"])


@dataclass
class Item:
    name: str
    tags: list


def test_json_round_trip():
    obj = {"b": [1, 2], "a": {"x": None}}
    text = strutil.struct_to_json_string(obj)
    assert strutil.json_string_to_struct(text) == obj
    assert text.index('"a"') < text.index('"b"')


def test_json_dataclass_and_html_escape():
    text = strutil.struct_to_json_string(Item("<&>", ["t"]))
    assert "<" not in text and "&" not in text and ">" not in text
    assert strutil.json_string_to_struct(text) == {"name": "<&>", "tags": ["t"]}


def test_json_unencodable_gives_empty():
    assert strutil.struct_to_json_string(object()) == ""
    assert strutil.struct_to_json_string(float("nan")) == ""


def test_json_invalid_raises():
    with pytest.raises(ValueError):
        strutil.json_string_to_struct("{not json")


def test_get_msg_id_is_hex_md5():
    msg_id = strutil.get_msg_id("user1")
    assert len(msg_id) == 32
    assert all(c in "0123456789abcdef" for c in msg_id)


def test_remove_duplicates():
    assert strutil.remove_duplicate_element(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]
    assert strutil.remove_duplicate([3, 1, 3]) == [3, 1]


def test_is_duplicate_string_slice():
    assert strutil.is_duplicate_string_slice(["a", "b", "a"])
    assert not strutil.is_duplicate_string_slice(["a", "b"])


@pytest.mark.parametrize("text", ["", "hello", "héllo wörld", "a" * 10])
def test_base64_round_trip(text):
    assert strutil.base64_decode(strutil.base64_encode(text)) == text


def test_base64_encode_known_value():
    assert strutil.base64_encode("hello") == "aGVsbG8="


def test_base64_decode_stops_at_corrupt_group():
    encoded = strutil.base64_encode("foobar")
    assert strutil.base64_decode(encoded + "!!!!") == "foobar"
    assert strutil.base64_decode("!!!!") == ""


def test_intersect_and_difference():
    assert strutil.intersect([1, 2, 3], [2, 3, 4]) == [2, 3]
    assert strutil.difference([1, 2, 3], [2, 3, 4]) == [1, 4]
    assert strutil.intersect(["a"], ["b"]) == []


def test_operation_id_generator_is_numeric():
    op_id = strutil.operation_id_generator()
    assert op_id.isdigit()


def test_get_hash_code_check_value():
    assert strutil.get_hash_code("123456789") == 0xCBF43926


def test_conversation_ids():
    assert strutil.gen_conversation_id_for_single("b", "a") == "si_a_b"
    assert strutil.gen_conversation_id_for_single("a", "b") == "si_a_b"
    assert strutil.gen_conversation_unique_key_for_single("b", "a") == "a_b"
    assert strutil.gen_group_conversation_id("g1") == "sg_g1"
    assert strutil.gen_conversation_unique_key_for_group("g1") == "g1"


def test_notification_conversation_ids():
    assert strutil.get_notification_conversation_id_by_conversation_id("si_a_b") == "n_a_b"
    assert strutil.get_notification_conversation_id_by_conversation_id("nounderscore") == ""
    assert strutil.get_self_notification_conversation_id("u1") == "n_u1_u1"


def test_get_seqs_begin_end():
    assert strutil.get_seqs_begin_end([]) == (0, 0)
    assert strutil.get_seqs_begin_end([3, 5, 9]) == (3, 9)


def test_get_self_func_name():
    assert strutil.get_self_func_name() == "test_get_self_func_name"


def test_get_func_name():
    def helper():
        return strutil.get_func_name(), strutil.get_func_name(1)

    assert helper() == ("helper", "test_get_func_name")
    assert strutil.get_func_name(10_000) == ""