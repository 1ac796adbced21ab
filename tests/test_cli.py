"""
CLI pipeline tests

Runs the pipeline stages behind the fancymark command on files in a
temporary directory, without going through the chris_plugin wrapper.
"""

from argparse import Namespace

import pytest

from fancymark.__main__ import (
    env_check,
    output_write,
    results_report,
    richText_render,
    source_read,
)
from fancymark.models import ProgramState, pipeline


def options_make(**overrides) -> Namespace:
    options = {
        "inputFile": "notes.md",
        "preset": "",
        "settingsFile": None,
        "outputSuffix": "",
        "verbosity": 0,
    }
    options.update(overrides)
    return Namespace(**options)


def run(tmp_path, **overrides) -> ProgramState:
    state = ProgramState.state_createFromNamespace(
        options=options_make(**overrides),
        inputdir=tmp_path / "in",
        outputdir=tmp_path / "out",
    )
    return pipeline(state, env_check, source_read, richText_render, output_write, results_report)


@pytest.fixture
def source_dir(tmp_path):
    inputdir = tmp_path / "in"
    inputdir.mkdir()
    (inputdir / "notes.md").write_text("# Notes\n**bold** and *it*\n", encoding="utf-8")
    return tmp_path


class TestPipeline:
    """Test the full CLI pipeline"""

    def test_default_preset(self, source_dir):
        state = run(source_dir)

        output = source_dir / "out" / "notes.rt"
        assert output.exists()
        assert output.read_text(encoding="utf-8") == (
            "<size=2em><b>Notes</b></size>\n<b>bold</b> and <i>it</i>\n"
        )
        assert state.envOK is True
        assert state.renderResult["line_count"] == 2

    def test_html_preset_and_suffix(self, source_dir):
        run(source_dir, preset="html", outputSuffix=".html")

        output = source_dir / "out" / "notes.html"
        assert output.read_text(encoding="utf-8") == (
            "<h1>Notes</h1>\n<strong>bold</strong> and <em>it</em>\n"
        )

    def test_settings_file(self, source_dir):
        settings_file = source_dir / "tags.yaml"
        settings_file.write_text("italics:\n  open_tag: '<i><color=red>'\n  close_tag: '</color></i>'\n")

        run(source_dir, settingsFile=str(settings_file))

        text = (source_dir / "out" / "notes.rt").read_text(encoding="utf-8")
        assert "<i><color=red>it</color></i>" in text

    def test_output_dir_created(self, source_dir):
        run(source_dir)
        assert (source_dir / "out").is_dir()


class TestPipelineErrors:
    """Test that bad input exits with status 1"""

    def test_missing_input(self, tmp_path):
        with pytest.raises(SystemExit) as exit_info:
            run(tmp_path, inputFile="absent.md")
        assert exit_info.value.code == 1

    def test_unknown_preset(self, source_dir):
        with pytest.raises(SystemExit) as exit_info:
            run(source_dir, preset="rtf")
        assert exit_info.value.code == 1

    def test_missing_settings_file(self, source_dir):
        with pytest.raises(SystemExit):
            run(source_dir, settingsFile=str(source_dir / "absent.yaml"))
