"""
Basic VTTCore usage example.

Demonstrates downloading a VTT file, editing it and writing it back.
"""

from vttcore import Cue, ParseError, Timestamp, VTTDownloader, parse_webvtt, write_webvtt

SAMPLE = """WEBVTT
Language: en

1
00:00:01.000 --> 00:00:04.000 align:start
Hello, world!
"""


def main():
    # Parse text; errors come back as values
    doc = parse_webvtt(SAMPLE)
    if isinstance(doc, ParseError):
        print(f"Parse failed: {doc.message}")
        return

    doc.add_cue(Cue(Timestamp.from_seconds(5), Timestamp.from_seconds(7), "Goodbye"))

    problems = doc.validate()
    if problems:
        print("\n".join(problems))
        return
    print(write_webvtt(doc))

    # Download VTT file
    print("Downloading VTT file...")
    vtt_path = VTTDownloader().download(
        url="https://example.com/subtitles.vtt",
        output_dir="/tmp/vtt"
    )
    print(f"Downloaded to: {vtt_path}")


if __name__ == "__main__":
    main()
