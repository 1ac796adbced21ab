"""
Program state model and pipeline helper

Defines ProgramState dataclass for the functional pipeline pattern and
the pipeline() helper for composing transformation stages.
"""

import dataclasses
from functools import reduce
from pathlib import Path
from argparse import Namespace
from typing import Any, Optional, Type, TypeVar, Dict, Callable
from dataclasses import dataclass, field


PS = TypeVar("PS", bound="ProgramState")


@dataclass
class ProgramState:
    """
    Central state container for the rendering pipeline (state bus pattern).

    Pipeline stages and their state additions:
        - Initial: inputdir, outputdir, verbosity, inputFile, preset,
          settingsFile, outputSuffix
        - env_check: inputSourceFile, outputFile, envOK
        - source_read: sourceText
        - richText_render: renderingSettings, richText
        - output_write: renderResult
        - results_report: (no additions, terminal stage)

    Attributes:
        inputdir: Directory containing the markdown source
        outputdir: Directory the rich-text file is written to
        verbosity: Logging verbosity level (1-3)
        inputFile: Markdown filename (relative to inputdir)
        preset: Name of the rendering preset; empty uses appsettings
        settingsFile: Optional YAML overrides for the preset
        outputSuffix: Suffix of the output file; empty uses appsettings
        envOK: Environment validation passed
        inputSourceFile: Resolved path to the markdown source
        outputFile: Resolved path of the rich-text output
        sourceText: Markdown read from inputSourceFile
        renderingSettings: Resolved RenderingSettings
        richText: Rendered output
        renderResult: Summary (output_file, line_count, characters)
    """

    # CLI arguments
    inputdir: Optional[Path] = field(default=None)
    outputdir: Optional[Path] = field(default=None)
    verbosity: int = field(default=1)
    inputFile: str = field(default="")
    preset: str = field(default="")
    settingsFile: Optional[str] = field(default=None)
    outputSuffix: str = field(default="")

    # Pipeline state
    envOK: bool = field(default=False)
    inputSourceFile: Path = field(default=Path("/"))
    outputFile: Path = field(default=Path("/"))
    sourceText: Optional[str] = field(default=None)
    renderingSettings: Optional[Any] = field(default=None)  # RenderingSettings at runtime
    richText: Optional[str] = field(default=None)
    renderResult: Optional[Dict] = field(default=None)

    @classmethod
    def state_createFromNamespace(
        cls: Type["ProgramState"], options: Namespace, inputdir: Path, outputdir: Path
    ) -> "ProgramState":
        """
        Create ProgramState from argparse Namespace and directory paths.

        Options that are not ProgramState fields are ignored.

        Args:
            options: Parsed CLI arguments (inputFile, preset, etc.)
            inputdir: Directory containing source files
            outputdir: Directory for rendered output

        Returns:
            ProgramState instance with all CLI options as attributes
        """
        valid_fields = {f.name for f in dataclasses.fields(cls)}
        filtered_options = {k: v for k, v in vars(options).items() if k in valid_fields}
        merged_args = {**filtered_options, "inputdir": inputdir, "outputdir": outputdir}
        return cls(**merged_args)

    def copy(self: PS) -> PS:
        """
        Creates a shallow copy of the ProgramState instance.

        Returns:
            A new ProgramState instance.
        """
        return type(self)(**self.__dict__)


def pipeline(
    initial_state: ProgramState, *stages: Callable[[ProgramState], ProgramState]
) -> ProgramState:
    """
    Execute a functional pipeline of state transformations.

    Each stage is a function (ProgramState) -> ProgramState that receives
    the output of the previous stage and returns a new state.

    Example:
        final_state = pipeline(
            initial_state,
            env_check,
            source_read,
            richText_render,
            output_write,
            results_report
        )

    This is equivalent to:
        results_report(output_write(richText_render(source_read(env_check(initial_state)))))
    """
    return reduce(lambda state, stage: stage(state), stages, initial_state)
