import pytest

from recipe_creator.llm.errors import LLMRequestError, ResponseExtractionError
from recipe_creator.llm.extraction import extract_json, read_message_content


def test_extract_bare_json():
    assert extract_json('{"a":1}') == {"a": 1}


def test_extract_fenced_json_with_prose():
    assert extract_json('prefix ```json\n{"a":1}\n``` suffix') == {"a": 1}


def test_extract_untagged_fence():
    text = 'Here you go:\n```\n{"assistantSummary":"ok","recipes":[]}\n```'
    assert extract_json(text)["assistantSummary"] == "ok"


def test_extract_braces_embedded_in_prose():
    text = 'Sure! {"recipes": [{"title": "Soup"}]} Enjoy {your} meal.'
    with pytest.raises(ResponseExtractionError):
        extract_json(text)

    text = 'Sure! {"recipes": [{"title": "Soup"}]} Enjoy.'
    assert extract_json(text) == {"recipes": [{"title": "Soup"}]}


def test_extract_falls_back_past_broken_fence():
    assert extract_json('```json\nnot json\n```\nActual: {"a": 2}') == {"a": 2}


def test_extract_broken_fence_and_broken_span():
    text = '```json\n{broken\n```\nActual: {"a": 2}'
    # first "{" is inside the fence, so the brace span is broken too
    with pytest.raises(ValueError):
        extract_json(text)


def test_extract_fails_without_braces():
    with pytest.raises(ResponseExtractionError, match="did not include JSON"):
        extract_json("I cannot help with that.")


def test_extract_error_is_a_value_error():
    with pytest.raises(ValueError):
        extract_json("no json here")


def test_read_message_content_string():
    payload = {"choices": [{"message": {"content": '{"a":1}'}}]}
    assert read_message_content(payload) == '{"a":1}'


def test_read_message_content_output_text_wins():
    payload = {"output_text": "hello", "choices": [{"message": {"content": "ignored"}}]}
    assert read_message_content(payload) == "hello"


def test_read_message_content_chunks():
    payload = {"choices": [{"message": {"content": [{"text": "part one"}, {"type": "x"}, {"text": "part two"}]}}]}
    assert read_message_content(payload) == "part one\npart two"


@pytest.mark.parametrize(
    "payload",
    [None, [], {"choices": []}, {"choices": [{"message": {"content": "   "}}]}, {"choices": [{}]}],
)
def test_read_message_content_missing(payload):
    with pytest.raises(LLMRequestError):
        read_message_content(payload)


def test_extract_deeply_nested_reply_is_malformed():
    depth = 100_000
    text = '{"a": ' * depth + "1" + "}" * depth

    with pytest.raises(ResponseExtractionError, match="malformed JSON"):
        extract_json(text)
