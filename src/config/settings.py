"""
Application and rendering settings

Uses pydantic-settings for type-safe configuration via environment variables.

- AppSettings: application knobs, FANCYMARK_ prefix
  (e.g., FANCYMARK_DEFAULT_PRESET=html)
- RenderingSettings: indicators and tags per style, FANCYMARK_RENDER_ prefix
  with "__" for nested fields. A nested style is replaced as a whole, so
  give every key (FANCYMARK_RENDER_BOLD__INDICATOR, ..._OPEN_TAG, ..._CLOSE_TAG)
  or a JSON object (FANCYMARK_RENDER_BOLD='{"indicator": "**", ...}')

Named presets give a complete RenderingSettings; a YAML file can override
any part of a preset:

    bold:
      open_tag: "<b><color=#FFD700>"
      close_tag: "</color></b>"
    headers:
      sizes: ["3em", "2.5em", "2em", "1.5em", "1.25em", "1em"]

Settings can also be loaded from a .env file in the working directory.
"""

import copy
import re
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsError(Exception):
    """Raised when rendering settings cannot be resolved or loaded"""
    pass


# Matches {target}, {level}, {size}, {number} in tag templates
_PLACEHOLDER = re.compile(r"\{\w+\}")


class StyleOptions(BaseModel):
    """Indicator and tags for one inline style"""

    indicator: str = Field(min_length=1, description="Markdown token marking the style")
    open_tag: str = Field(description="Rich-text open tag; links may use {target}")
    close_tag: str = Field(description="Rich-text close tag")
    ignore_fill: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=1,
        description="Character that, repeated, is never taggable content",
    )


class AutoLinkOptions(BaseModel):
    """Bare URL detection"""

    indicators: List[str] = Field(
        default_factory=lambda: ["http://", "https://"],
        description="URL prefixes that start an autolink, in processing order",
    )
    open_tag: str = Field(default='<link="{target}"><color=#4A9EFF><u>')
    close_tag: str = Field(default="</u></color></link>")

    @model_validator(mode="after")
    def indicators_check(self) -> "AutoLinkOptions":
        if any(not indicator for indicator in self.indicators):
            raise ValueError("autolink indicators must not be empty")
        return self


class HeaderOptions(BaseModel):
    """ATX (#) and setext (=== / ---) headers"""

    indicator: str = Field(default="#", min_length=1, max_length=1)
    open_tag: str = Field(default="<size={size}><b>", description="May use {level} and {size}")
    close_tag: str = Field(default="</b></size>", description="May use {level} and {size}")
    sizes: List[str] = Field(
        default_factory=lambda: ["2em", "1.75em", "1.5em", "1.3em", "1.15em", "1em"],
        min_length=6,
        max_length=6,
        description="Value of {size} for header levels 1-6",
    )


class ListOptions(BaseModel):
    """Unordered and ordered list markers"""

    unordered_prefix: str = Field(default="  • ", description="Replaces '- ', '* ' and '+ '")
    ordered_prefix: str = Field(default="  {number}. ", description="Replaces '1. ' or '1) '")


class RenderingSettings(BaseSettings):
    """
    Indicators and rich-text tags for every style.

    Defaults target TextMeshPro rich text. No open or close tag may
    contain any style's indicator, otherwise a later processor would
    re-scan markup an earlier one emitted.
    """

    model_config = SettingsConfigDict(
        env_prefix="FANCYMARK_RENDER_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    bold: StyleOptions = Field(
        default_factory=lambda: StyleOptions(indicator="**", open_tag="<b>", close_tag="</b>")
    )
    italics: StyleOptions = Field(
        default_factory=lambda: StyleOptions(indicator="*", open_tag="<i>", close_tag="</i>")
    )
    strikethrough: StyleOptions = Field(
        default_factory=lambda: StyleOptions(
            indicator="~~", open_tag="<s>", close_tag="</s>", ignore_fill="~"
        )
    )
    monospace: StyleOptions = Field(
        default_factory=lambda: StyleOptions(
            indicator="`", open_tag="<mspace=0.55em>", close_tag="</mspace>"
        )
    )
    superscript: StyleOptions = Field(
        default_factory=lambda: StyleOptions(
            indicator="^", open_tag="<sup>", close_tag="</sup>", ignore_fill="^"
        )
    )
    subscript: StyleOptions = Field(
        default_factory=lambda: StyleOptions(
            indicator="~", open_tag="<sub>", close_tag="</sub>", ignore_fill="~"
        )
    )
    link: StyleOptions = Field(
        default_factory=lambda: StyleOptions(
            indicator="[",
            open_tag='<link="{target}"><color=#4A9EFF><u>',
            close_tag="</u></color></link>",
        )
    )
    autolinks: AutoLinkOptions = Field(default_factory=AutoLinkOptions)
    headers: HeaderOptions = Field(default_factory=HeaderOptions)
    lists: ListOptions = Field(default_factory=ListOptions)

    line_separator: str = Field(default="\n", description="Appended after every output line")

    def styles_iter(self) -> Dict[str, StyleOptions]:
        """Inline styles keyed by name"""
        return {
            "bold": self.bold,
            "italics": self.italics,
            "strikethrough": self.strikethrough,
            "monospace": self.monospace,
            "superscript": self.superscript,
            "subscript": self.subscript,
            "link": self.link,
        }

    def indicators_all(self) -> List[str]:
        """Every indicator a tag could collide with"""
        indicators = [style.indicator for style in self.styles_iter().values()]
        return indicators + list(self.autolinks.indicators)

    def indicatorCharacters_collect(self) -> str:
        """
        Every character of the inline style indicators, sorted

        Link destinations and autolinked URLs have these escaped before
        they are written into the line, so a "~" in a URL is never read
        as subscript.

        Example:
            >>> RenderingSettings().indicatorCharacters_collect()
            '*[^`~'
        """
        characters = set()
        for style in self.styles_iter().values():
            characters.update(style.indicator)
        return ''.join(sorted(characters))

    def tags_all(self) -> Dict[str, str]:
        """Every emitted tag or prefix, keyed by a readable origin"""
        tags: Dict[str, str] = {}
        for name, style in self.styles_iter().items():
            tags[f"{name}.open_tag"] = style.open_tag
            tags[f"{name}.close_tag"] = style.close_tag
        tags["autolinks.open_tag"] = self.autolinks.open_tag
        tags["autolinks.close_tag"] = self.autolinks.close_tag
        tags["headers.open_tag"] = self.headers.open_tag
        tags["headers.close_tag"] = self.headers.close_tag
        tags["lists.unordered_prefix"] = self.lists.unordered_prefix
        tags["lists.ordered_prefix"] = self.lists.ordered_prefix
        return tags

    @model_validator(mode="after")
    def tags_checkIndicatorFree(self) -> "RenderingSettings":
        indicators = self.indicators_all()
        for origin, tag in self.tags_all().items():
            literal = _PLACEHOLDER.sub("", tag)
            for indicator in indicators:
                if indicator in literal:
                    raise ValueError(
                        f"{origin} {tag!r} contains the indicator {indicator!r}"
                    )
        return self


PRESETS: Dict[str, Dict[str, Any]] = {
    "textmeshpro": {},
    "html": {
        "bold": {"indicator": "**", "open_tag": "<strong>", "close_tag": "</strong>"},
        "italics": {"indicator": "*", "open_tag": "<em>", "close_tag": "</em>"},
        "strikethrough": {
            "indicator": "~~", "open_tag": "<del>", "close_tag": "</del>", "ignore_fill": "~"
        },
        "monospace": {"indicator": "`", "open_tag": "<code>", "close_tag": "</code>"},
        "superscript": {
            "indicator": "^", "open_tag": "<sup>", "close_tag": "</sup>", "ignore_fill": "^"
        },
        "subscript": {
            "indicator": "~", "open_tag": "<sub>", "close_tag": "</sub>", "ignore_fill": "~"
        },
        "link": {"indicator": "[", "open_tag": '<a href="{target}">', "close_tag": "</a>"},
        "autolinks": {"open_tag": '<a href="{target}">', "close_tag": "</a>"},
        "headers": {"open_tag": "<h{level}>", "close_tag": "</h{level}>"},
        "lists": {"unordered_prefix": "  • ", "ordered_prefix": "  {number}. "},
    },
}


def presets_listAvailable() -> List[str]:
    """Names of the built-in presets"""
    return sorted(PRESETS)


def dict_mergeDeep(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Merge overrides into a copy of base, descending into nested dicts

    Example:
        >>> dict_mergeDeep({"bold": {"indicator": "**", "open_tag": "<b>"}},
        ...                {"bold": {"open_tag": "<strong>"}})
        {'bold': {'indicator': '**', 'open_tag': '<strong>'}}
    """
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = dict_mergeDeep(merged[key], value)
        else:
            merged[key] = value
    return merged


def settingsFile_load(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load rendering overrides from a YAML file

    Raises:
        SettingsError: File is missing, unreadable, or not a YAML mapping
    """
    settings_path = Path(path)
    if not settings_path.exists():
        raise SettingsError(f"Settings file not found: {settings_path}")

    try:
        with open(settings_path, 'r', encoding='utf-8') as f:
            data: Any = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise SettingsError(f"Failed to parse {settings_path.name}: {e}")
    except OSError as e:
        raise SettingsError(f"Failed to load {settings_path.name}: {e}")

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise SettingsError(f"{settings_path.name} must contain a mapping of style options")
    return data


def renderingDefaults_dump() -> Dict[str, Any]:
    """Default value of every RenderingSettings field as plain data"""
    defaults: Dict[str, Any] = {}
    for name, info in RenderingSettings.model_fields.items():
        value = info.get_default(call_default_factory=True)
        defaults[name] = value.model_dump() if isinstance(value, BaseModel) else value
    return defaults


def renderingSettings_resolve(
    preset: str = "textmeshpro", settings_file: Optional[Union[str, Path]] = None
) -> RenderingSettings:
    """
    Build RenderingSettings from a named preset and optional YAML overrides

    Layers, lowest first: built-in defaults, the preset, the YAML file.
    The result is passed as explicit values, so FANCYMARK_RENDER_ env
    variables only apply to a bare RenderingSettings().

    Args:
        preset: Name from PRESETS
        settings_file: Optional YAML file merged over the preset

    Returns:
        Validated RenderingSettings

    Raises:
        SettingsError: Unknown preset, bad file, or invalid resulting settings
    """
    if preset not in PRESETS:
        raise SettingsError(
            f"Unknown preset '{preset}'. Available: {', '.join(presets_listAvailable())}"
        )

    data = dict_mergeDeep(renderingDefaults_dump(), PRESETS[preset])
    if settings_file is not None:
        data = dict_mergeDeep(data, settingsFile_load(settings_file))

    try:
        return RenderingSettings(**data)
    except ValidationError as e:
        raise SettingsError(f"Invalid rendering settings: {e}") from e


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Examples:
        FANCYMARK_DEFAULT_PRESET=html
        FANCYMARK_OUTPUT_SUFFIX=.html
    """

    model_config = SettingsConfigDict(
        env_prefix="FANCYMARK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_preset: str = Field(
        default="textmeshpro",
        description="Preset used when --preset is not given",
    )

    output_suffix: str = Field(
        default=".rt",
        description="Suffix of the rendered output file",
    )

    encoding: str = Field(
        default="utf-8",
        description="Encoding for reading sources and writing output",
    )

    def outputName_make(self, source_name: str, suffix: Optional[str] = None) -> str:
        """
        Output filename for a source filename.

        Example:
            >>> AppSettings().outputName_make("notes.md")
            'notes.rt'
        """
        return f"{Path(source_name).stem}{suffix if suffix is not None else self.output_suffix}"


# Singleton instance - import this in your code
appsettings = AppSettings()
