"""
Processor table

Resolves RenderingSettings into style descriptors and lays out the fixed
processing order. Order matters: each processor sees everything earlier
processors wrote, and list markers must be rewritten before "*" can be
read as italics.
"""

from typing import List, Tuple

from ..config.settings import RenderingSettings, StyleOptions
from ..models.styles import EngineKind, StyleDescriptor
from .engine import TagProcessor
from .log import LOG
from .prefix import HeaderProcessor, OrderedListProcessor, UnorderedListProcessor
from .processor import LineProcessor


def style_describe(
    name: str, kind: EngineKind, options: StyleOptions, protected: str = ""
) -> StyleDescriptor:
    """Descriptor for an inline style from its configured options"""
    return StyleDescriptor(
        name=name,
        kind=kind,
        indicator=options.indicator,
        open_tag=options.open_tag,
        close_tag=options.close_tag,
        ignore_fill=options.ignore_fill,
        protected=protected,
    )


def autolinks_describe(settings: RenderingSettings) -> List[StyleDescriptor]:
    """One descriptor per autolink prefix, in configured order"""
    return [
        StyleDescriptor(
            name=f"autolinks {indicator}",
            kind=EngineKind.ASYMMETRIC,
            indicator=indicator,
            open_tag=settings.autolinks.open_tag,
            close_tag=settings.autolinks.close_tag,
            keep_indicator=True,
            word_start_only=True,
            content_verbatim=True,
            protected=settings.indicatorCharacters_collect(),
        )
        for indicator in settings.autolinks.indicators
    ]


def processors_build(settings: RenderingSettings) -> Tuple[LineProcessor, ...]:
    """
    Build the ordered processor pipeline for a settings object

    Order:
        autolinks (http://, then https://), unordered lists, ordered lists,
        bold, italics, strikethrough, monospace, headers, links,
        superscript, subscript

    Args:
        settings: Resolved rendering settings

    Returns:
        Tuple of processors, run first to last
    """
    protected = settings.indicatorCharacters_collect()
    processors: List[LineProcessor] = [
        TagProcessor(style) for style in autolinks_describe(settings)
    ]
    processors += [
        UnorderedListProcessor(settings.lists),
        OrderedListProcessor(settings.lists),
        TagProcessor(style_describe("bold", EngineKind.SYMMETRIC, settings.bold, protected)),
        TagProcessor(
            style_describe("italics", EngineKind.SYMMETRIC, settings.italics, protected)
        ),
        TagProcessor(
            style_describe(
                "strikethrough", EngineKind.SYMMETRIC, settings.strikethrough, protected
            )
        ),
        TagProcessor(
            style_describe("monospace", EngineKind.SYMMETRIC, settings.monospace, protected)
        ),
        HeaderProcessor(settings.headers),
        TagProcessor(style_describe("links", EngineKind.LINK, settings.link, protected)),
        TagProcessor(
            style_describe("superscript", EngineKind.ASYMMETRIC, settings.superscript, protected)
        ),
        TagProcessor(
            style_describe("subscript", EngineKind.ASYMMETRIC, settings.subscript, protected)
        ),
    ]
    LOG(f"Built {len(processors)} processors", level=3)
    return tuple(processors)
