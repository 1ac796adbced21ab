#!/usr/bin/env python3
"""
fancymark - Markdown to rich-text tag renderer

Renders a markdown file into rich-text tags for a text engine such as
TextMeshPro, or into inline HTML with the html preset.

Supported markup:
    **bold**  *italics*  ~~strikethrough~~  `monospace`
    x^2  x^(a + b)  H~2O  H~(two words)
    [label](destination)  https://bare.links
    # Headers (and setext === / --- underlines)
    - unordered and 1. ordered list items
    \\* escapes any character; \\\\ is a literal backslash

Usage:
    fancymark inputdir/ outputdir/ --inputFile notes.md

    The rendered text is written to outputdir/ as <stem><suffix>,
    notes.rt by default.

Examples:
    # TextMeshPro rich text
    fancymark . output/ --inputFile notes.md

    # HTML fragments with overridden tags
    fancymark . output/ --inputFile notes.md --preset html --settingsFile tags.yaml --outputSuffix .html

    # Verbose output
    fancymark . output/ --inputFile notes.md -vv
"""

import sys
from pathlib import Path
from argparse import ArgumentParser, Namespace, ArgumentDefaultsHelpFormatter

from chris_plugin import chris_plugin
from .lib import Renderer, __version__, LOG, state_connectToLogger
from .config import appsettings, presets_listAvailable, renderingSettings_resolve, SettingsError
from .models import ProgramState, pipeline


DISPLAY_TITLE = r"""
    __                                          __
   / _| __ _ _ __   ___ _   _ _ __ ___   __ _ _ __| | __
  | |_ / _` | '_ \ / __| | | | '_ ` _ \ / _` | '__| |/ /
  |  _| (_| | | | | (__| |_| | | | | | | (_| | |  |   <
  |_|  \__,_|_| |_|\___|\__, |_| |_| |_|\__,_|_|  |_|\_\
                        |___/
  Markdown to rich-text tag renderer
"""

parser = ArgumentParser(
    description="fancymark - render markdown into rich-text tags",
    formatter_class=ArgumentDefaultsHelpFormatter,
)

parser.add_argument(
    "--inputFile", required=True, type=str, help="Input markdown file (relative to inputdir)"
)

parser.add_argument(
    "--preset",
    default="",
    type=str,
    help=f"Rendering preset ({', '.join(presets_listAvailable())}); defaults to FANCYMARK_DEFAULT_PRESET",
)

parser.add_argument(
    "--settingsFile",
    default=None,
    type=str,
    help="YAML file overriding indicators and tags of the preset",
)

parser.add_argument(
    "--outputSuffix",
    default="",
    type=str,
    help="Suffix of the rendered file; defaults to FANCYMARK_OUTPUT_SUFFIX",
)

parser.add_argument(
    "-v",
    "--verbosity",
    action="count",
    default=1,
    help="Increase output verbosity (can be repeated: -v, -vv, -vvv)",
)

parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")


def env_check(inputstate: ProgramState) -> ProgramState:
    """
    Validate environment and resolve file paths.

    Returns:
        ProgramState with added fields:
            - inputSourceFile: Resolved path to the markdown file
            - outputFile: Path the rendered text will be written to
            - envOK: True if environment is valid

    Exits:
        1 if the input file is missing
    """
    state = inputstate.copy()

    if state.verbosity >= 2:
        LOG(DISPLAY_TITLE, level=2)

    LOG("Checking environment...", level=2)

    input_file = state.inputdir / state.inputFile
    if not input_file.is_file():
        print(f"Error: Input file not found: {input_file}", file=sys.stderr)
        state.envOK = False
        sys.exit(1)

    state.inputSourceFile = input_file
    LOG(f"Input file: {input_file}", level=2)

    state.outputdir.mkdir(parents=True, exist_ok=True)
    state.outputFile = state.outputdir / appsettings.outputName_make(
        input_file.name, state.outputSuffix or None
    )
    LOG(f"Output file: {state.outputFile}", level=2)

    state.envOK = True
    return state


def source_read(inputstate: ProgramState) -> ProgramState:
    """
    Read the markdown source.

    Returns:
        ProgramState with added field:
            - sourceText: Markdown text

    Exits:
        1 if the file cannot be read
    """
    state = inputstate.copy()

    LOG("Reading source file...", level=1)
    try:
        state.sourceText = state.inputSourceFile.read_text(encoding=appsettings.encoding)
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input file: {e}", file=sys.stderr)
        sys.exit(1)

    LOG(f"Read {len(state.sourceText)} characters from {state.inputSourceFile.name}", level=2)
    return state


def richText_render(inputstate: ProgramState) -> ProgramState:
    """
    Resolve rendering settings and render the source.

    Returns:
        ProgramState with added fields:
            - renderingSettings: Resolved RenderingSettings
            - richText: Rendered output

    Exits:
        1 if the preset or settings file is invalid
    """
    state = inputstate.copy()

    preset = state.preset or appsettings.default_preset
    LOG(f"Resolving preset '{preset}'...", level=1)
    try:
        state.renderingSettings = renderingSettings_resolve(preset, state.settingsFile)
    except SettingsError as e:
        print(f"Settings error: {e}", file=sys.stderr)
        sys.exit(1)

    LOG("Rendering markdown...", level=1)
    state.richText = Renderer(state.renderingSettings).render(state.sourceText)
    return state


def output_write(inputstate: ProgramState) -> ProgramState:
    """
    Write the rendered text.

    Returns:
        ProgramState with added field:
            - renderResult: Dict with output_file, line_count, characters

    Exits:
        1 if the file cannot be written
    """
    state = inputstate.copy()

    try:
        state.outputFile.write_text(state.richText or "", encoding=appsettings.encoding)
    except OSError as e:
        print(f"Error writing output file: {e}", file=sys.stderr)
        sys.exit(1)

    separator = state.renderingSettings.line_separator
    state.renderResult = {
        "output_file": str(state.outputFile),
        "line_count": (state.richText or "").count(separator) if separator else 0,
        "characters": len(state.richText or ""),
    }
    LOG(f"Wrote {state.outputFile}", level=2)
    return state


def results_report(inputstate: ProgramState) -> ProgramState:
    """
    Display a summary of the rendering.

    Exits:
        1 if renderResult is None
    """
    state: ProgramState = inputstate.copy()
    if not state.renderResult:
        print("Error: Rendering failed", file=sys.stderr)
        sys.exit(1)

    LOG("\n✓ Rendering successful!", level=1)
    LOG(f"  Output: {state.renderResult['output_file']}", level=1)
    LOG(f"  Lines: {state.renderResult['line_count']}", level=1)
    return state


@chris_plugin(
    parser=parser,
    title="fancymark - Markdown to rich-text tag renderer",
    category="Utility",
    min_memory_limit="100Mi",
    min_cpu_limit="500m",
)
def main(options: Namespace, inputdir: Path, outputdir: Path):
    """
    Main entry point - render a markdown file to rich text.

    Orchestrates the full pipeline:
        1. env_check: Validate paths
        2. source_read: Read the markdown file
        3. richText_render: Resolve settings and render
        4. output_write: Write the rendered file
        5. results_report: Display results to user

    Note:
        This function is wrapped by @chris_plugin which handles CLI
        argument parsing and invokes this function with parsed values.
    """
    state: ProgramState = ProgramState.state_createFromNamespace(
        options=options, inputdir=inputdir, outputdir=outputdir
    )

    state_connectToLogger(state)

    pipeline(state, env_check, source_read, richText_render, output_write, results_report)


if __name__ == "__main__":
    main()  # type: ignore  # @chris_plugin decorator transforms signature
