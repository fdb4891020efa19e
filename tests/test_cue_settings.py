from vttcore import Cue, CueSettings, InvalidCueBlock, Timestamp


def test_parse_keeps_order():
    settings = CueSettings.parse("align:start line:0")
    assert settings.pairs == [("align", "start"), ("line", "0")]
    assert settings.format() == "align:start line:0"


def test_parse_accepts_token_list_and_unknown_keys():
    settings = CueSettings.parse(["region:r1", "custom:x", "position:50%"])
    assert settings.get("custom") == "x"
    assert settings.get("missing") is None


def test_duplicate_keys_are_preserved():
    settings = CueSettings.parse("line:0 line:90%")
    assert len(settings) == 2
    assert settings.get_all("line") == ["0", "90%"]
    assert settings.get("line") == "90%"
    assert str(settings) == "line:0 line:90%"


def test_token_without_colon_is_an_error():
    result = CueSettings.parse("align")
    assert isinstance(result, InvalidCueBlock)
    assert "align" in result.reason


def test_token_with_two_colons_or_no_key_is_an_error():
    assert isinstance(CueSettings.parse("a:b:c"), InvalidCueBlock)
    assert isinstance(CueSettings.parse(":start"), InvalidCueBlock)


def test_empty_value_is_allowed():
    assert CueSettings.parse("region:").pairs == [("region", "")]


def test_empty_input_gives_empty_settings():
    assert CueSettings.parse("").pairs == []


def test_cue_normalises_empty_settings():
    cue = Cue(Timestamp(0), Timestamp(1000), "x", settings=CueSettings())
    assert cue.settings is None


def test_cue_timing_line():
    cue = Cue("00:00:01.000", "00:00:05.000", "Hi", settings=CueSettings.parse("align:start"))
    assert cue.start == Timestamp(1000)
    assert cue.duration == 4000
    assert cue.timing_line == "00:00:01.000 --> 00:00:05.000 align:start"


def test_pairs_given_as_lists_are_stored_as_tuples():
    settings = CueSettings([["align", "start"]])
    assert settings.pairs == [("align", "start")]
    assert settings == CueSettings.parse("align:start")


def test_settings_emptied_after_construction_compare_as_absent():
    cue = Cue(Timestamp(0), Timestamp(1000), "x")
    cue.settings = CueSettings()
    assert cue == Cue(Timestamp(0), Timestamp(1000), "x")
    assert cue.timing_line == "00:00:00.000 --> 00:00:01.000"

    other = Cue(Timestamp(0), Timestamp(1000), "x", settings=CueSettings.parse("line:0"))
    assert cue != other
