import pytest

from vttcore import (
    Cue,
    CueSettings,
    Timestamp,
    WebVTT,
    WebVTTValidationError,
    dumps,
    format_cue,
    parse_webvtt,
    validate_document,
    write_webvtt,
)


def _sample_document():
    doc = WebVTT()
    doc.add_metadata("Language", "en-US")
    doc.add_metadata("Kind", "captions")
    doc.add_cue(Cue(Timestamp(1000), Timestamp(5000), "Hello, world!", identifier="1"))
    doc.add_cue(Cue(
        Timestamp.from_components(hours=100),
        Timestamp.from_components(hours=100, seconds=2),
        "<i>two</i>\nlines",
        settings=CueSettings([("align", "start"), ("line", "0"), ("line", "90%")]),
    ))
    doc.add_cue(Cue(Timestamp(7000), Timestamp(8000), ""))
    return doc


def test_empty_document():
    assert write_webvtt(WebVTT()) == "WEBVTT\n"
    assert parse_webvtt("WEBVTT\n") == WebVTT()


def test_metadata_follows_header_directly():
    doc = WebVTT()
    doc.add_metadata("Language", "en")
    doc.add_metadata("Kind", "captions")
    doc.add_metadata("Language", "fr")
    assert write_webvtt(doc) == "WEBVTT\nLanguage: fr\nKind: captions\n"


def test_cues_are_separated_by_one_blank_line():
    expected = (
        "WEBVTT\n"
        "Language: en-US\n"
        "Kind: captions\n"
        "\n"
        "1\n"
        "00:00:01.000 --> 00:00:05.000\n"
        "Hello, world!\n"
        "\n"
        "100:00:00.000 --> 100:00:02.000 align:start line:0 line:90%\n"
        "<i>two</i>\n"
        "lines\n"
        "\n"
        "00:00:07.000 --> 00:00:08.000\n"
    )
    assert write_webvtt(_sample_document()) == expected


def test_round_trip():
    doc = _sample_document()
    assert validate_document(doc) == []
    assert parse_webvtt(write_webvtt(doc)) == doc
    assert parse_webvtt(str(doc)) == doc


def test_settings_line_round_trips_identically():
    content = "WEBVTT\n\n00:00:01.000 --> 00:00:05.000 align:start line:0\nHi\n"
    assert write_webvtt(parse_webvtt(content)) == content


def test_shorthand_input_is_written_in_full_form():
    doc = parse_webvtt("WEBVTT\n\n01:02.000 --> 01:03.500\nHi")
    assert write_webvtt(doc) == "WEBVTT\n\n00:01:02.000 --> 00:01:03.500\nHi\n"


def test_cues_are_not_sorted():
    doc = WebVTT()
    doc.add_cue(Cue(Timestamp(5000), Timestamp(6000), "later"))
    doc.add_cue(Cue(Timestamp(1000), Timestamp(2000), "earlier"))
    assert [cue.payload for cue in parse_webvtt(write_webvtt(doc)).cues] == ["later", "earlier"]


def test_format_cue():
    cue = Cue(Timestamp(1000), Timestamp(5000), "Test")
    assert format_cue(cue) == "00:00:01.000 --> 00:00:05.000\nTest"


def test_end_before_start_is_written_but_flagged():
    doc = WebVTT()
    doc.add_cue(Cue(Timestamp(5000), Timestamp(5000), "zero length"))
    assert write_webvtt(doc) == "WEBVTT\n\n00:00:05.000 --> 00:00:05.000\nzero length\n"

    problems = doc.validate()
    assert len(problems) == 1
    assert "not after start" in problems[0]

    with pytest.raises(WebVTTValidationError):
        write_webvtt(doc, validate=True)
    with pytest.raises(ValueError):
        dumps(doc)


def test_validation_catches_unrepresentable_cues():
    doc = WebVTT()
    doc.add_cue(Cue(Timestamp(0), Timestamp(1000), "a\n\nb"))
    doc.add_cue(Cue(Timestamp(0), Timestamp(1000), "x", identifier="00:00:00.000 --> 00:00:01.000"))
    doc.add_cue(Cue(Timestamp(0), Timestamp(1000), "x", identifier="two\nlines"))
    doc.add_cue(Cue(Timestamp(0), Timestamp(1000), "x", identifier="NOTE 1"))
    doc.add_cue(Cue(Timestamp(0), Timestamp(1000), "x", identifier="   "))
    doc.add_cue(Cue(Timestamp(0), Timestamp(1000), "x", settings=CueSettings([("a b", "c")])))
    doc.add_cue(Cue(Timestamp(0), Timestamp(1000), "trailing\n"))

    problems = validate_document(doc)
    assert [problem.split(":")[0] for problem in problems] == [
        "cue 1", "cue 2", "cue 3", "cue 4", "cue 5", "cue 6", "cue 7",
    ]


def test_validation_catches_bad_metadata():
    doc = WebVTT()
    doc.add_metadata("Bad: key", "x")
    doc.add_metadata("Key", "two\nlines")
    assert len(validate_document(doc)) == 2


def test_settings_built_from_lists_round_trip():
    doc = WebVTT()
    doc.add_cue(Cue(Timestamp(0), Timestamp(1000), "x", settings=CueSettings([["align", "start"]])))
    emptied = Cue(Timestamp(2000), Timestamp(3000), "y")
    emptied.settings = CueSettings()
    doc.add_cue(emptied)
    assert parse_webvtt(write_webvtt(doc)) == doc
