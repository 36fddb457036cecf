from __future__ import annotations

from io import BytesIO

import pytest

from fb2text.errors import InputUnavailableError, MalformedInputError
from fb2text.tokenizer import EndTag, StartTag, Text, local_name, tokenize


def test_local_name_strips_namespace() -> None:
    assert local_name("{http://www.gribuser.ru/xml/fictionbook/2.0}body") == "body"
    assert local_name("p") == "p"


def test_events_use_local_names_for_tags_and_attributes() -> None:
    markup = (
        b'<FictionBook xmlns="http://www.gribuser.ru/xml/fictionbook/2.0" '
        b'xmlns:l="http://www.w3.org/1999/xlink">'
        b'<body><p>See <a l:href="#n1" type="note">1</a></p></body></FictionBook>'
    )

    events = list(tokenize(BytesIO(markup)))

    assert events == [
        StartTag("FictionBook", {}),
        StartTag("body", {}),
        StartTag("p", {}),
        Text("See "),
        StartTag("a", {"href": "#n1", "type": "note"}),
        Text("1"),
        EndTag("a"),
        EndTag("p"),
        EndTag("body"),
        EndTag("FictionBook"),
    ]


def test_text_split_across_reads_arrives_as_one_event() -> None:
    markup = b"<p>" + b"word " * 200 + b"</p>"

    events = list(tokenize(BytesIO(markup), chunk_size=7))
    texts = [event for event in events if isinstance(event, Text)]

    assert len(texts) == 1
    assert texts[0].data == "word " * 200


def test_entities_and_declared_cp1251_are_decoded() -> None:
    markup = '<?xml version="1.0" encoding="windows-1251"?><p>Тёмный &amp; лес</p>'.encode("cp1251")

    events = list(tokenize(BytesIO(markup)))

    assert Text("Тёмный & лес") in events


def test_encoding_detector_is_pluggable() -> None:
    markup = "<p>Привет</p>".encode("cp1251")
    samples: list[bytes] = []

    def detector(sample: bytes) -> str | None:
        samples.append(sample)
        return "cp1251"

    events = list(tokenize(BytesIO(markup), encoding_detector=detector))

    assert samples == [markup]
    assert Text("Привет") in events


def test_empty_stream_is_unavailable_input() -> None:
    with pytest.raises(InputUnavailableError):
        list(tokenize(BytesIO(b"")))


def test_mismatched_markup_is_malformed_input() -> None:
    with pytest.raises(MalformedInputError, match="Invalid FB2 markup"):
        list(tokenize(BytesIO(b"<FictionBook><author><first-name>Frank</author></FictionBook>")))


def test_truncated_document_is_malformed_input() -> None:
    with pytest.raises(MalformedInputError):
        list(tokenize(BytesIO(b"<FictionBook><body><p>unfinished")))


def test_detector_naming_an_unknown_encoding_is_unavailable_input() -> None:
    with pytest.raises(InputUnavailableError, match="x-no-such-charset"):
        list(tokenize(BytesIO(b"<p>text</p>"), encoding_detector=lambda sample: "x-no-such-charset"))
