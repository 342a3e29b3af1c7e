"""Tests for the command-line interface.

HOW: main(argv) is called directly with files under tmp_path; stderr is
captured with capsys.
"""

import json

import pytest

from readalong_aligner.cli import build_parser, load_segments, main
from readalong_aligner.api.models import TranscriptionFormatError


@pytest.fixture
def inputs(tmp_path, sample_text, verbose_json_response):
    text_file = tmp_path / "article.txt"
    text_file.write_text(sample_text, encoding="utf-8")
    asr_file = tmp_path / "article.asr.json"
    asr_file.write_text(json.dumps(verbose_json_response), encoding="utf-8")
    return text_file, asr_file


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args(["a.txt", "b.json"])
        assert args.formats is None
        assert args.output_dir is None
        assert args.max_words is None

    def test_log_level_case_insensitive(self):
        args = build_parser().parse_args(["a.txt", "b.json", "--log-level", "debug"])
        assert args.log_level == "DEBUG"


class TestLoadSegments:
    def test_bare_list(self, clean_segments):
        assert len(load_segments(clean_segments)) == 2

    def test_response_object(self, verbose_json_response):
        assert len(load_segments(verbose_json_response)) == 2

    def test_missing_segments(self):
        with pytest.raises(TranscriptionFormatError):
            load_segments({"text": "no segments"})


class TestMain:
    def test_writes_all_formats(self, inputs, capsys):
        text_file, asr_file = inputs
        main([str(text_file), str(asr_file)])

        doc = json.loads((text_file.parent / "article-alignment.json").read_text(encoding="utf-8"))
        assert [c["text"] for c in doc["chunks"]] == ["Hello world.", "Goodbye now."]
        assert (text_file.parent / "article-chunks.srt").is_file()
        assert "Done! Saved 2 file(s)" in capsys.readouterr().err

    def test_selected_format_and_output_dir(self, inputs, tmp_path):
        text_file, asr_file = inputs
        out_dir = tmp_path / "out"
        out_dir.mkdir()
        main([str(text_file), str(asr_file), "--formats", "chunk_srt", "--output-dir", str(out_dir)])
        assert [p.name for p in out_dir.iterdir()] == ["article-chunks.srt"]

    def test_conflicting_output_gets_counter(self, inputs):
        text_file, asr_file = inputs
        main([str(text_file), str(asr_file), "--formats", "page_audio_json"])
        main([str(text_file), str(asr_file), "--formats", "page_audio_json"])
        assert (text_file.parent / "article-alignment-2.json").is_file()

    def test_unknown_format(self, inputs, capsys):
        text_file, asr_file = inputs
        with pytest.raises(SystemExit) as exc:
            main([str(text_file), str(asr_file), "--formats", "docx"])
        assert exc.value.code == 1
        assert "Unknown format 'docx'" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path / "nope.txt"), str(tmp_path / "nope.json")])
        assert exc.value.code == 1
        assert "File not found" in capsys.readouterr().err

    def test_word_limit(self, inputs, capsys):
        text_file, asr_file = inputs
        with pytest.raises(SystemExit) as exc:
            main([str(text_file), str(asr_file), "--max-words", "3"])
        assert exc.value.code == 1
        assert "more than the limit of 3" in capsys.readouterr().err

    def test_malformed_transcription(self, inputs, capsys):
        text_file, asr_file = inputs
        asr_file.write_text(json.dumps({"text": "hi"}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(text_file), str(asr_file)])
        assert exc.value.code == 1
        assert "missing segments" in capsys.readouterr().err

    def test_malformed_playback_epsilon_does_not_break_alignment(self, inputs, monkeypatch):
        monkeypatch.setenv("READALONG_PLAYBACK_EPSILON_S", "abc")
        text_file, asr_file = inputs
        main([str(text_file), str(asr_file), "--formats", "chunk_srt"])
        assert (text_file.parent / "article-chunks.srt").is_file()

    def test_invalid_json(self, inputs, capsys):
        text_file, asr_file = inputs
        asr_file.write_text("{not json", encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main([str(text_file), str(asr_file)])
        assert exc.value.code == 1
