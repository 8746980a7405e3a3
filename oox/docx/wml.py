"""
WordprocessingML Deserializer
=============================

Turns the XML parts of a .docx package into the typed, immutable model used
by the style resolver.

Parts handled
-------------
    word/document.xml   -> Document (paragraphs, runs, hyperlinks, tables)
    word/styles.xml     -> StyleGraph (docDefaults, latentStyles, styles)
    word/numbering.xml  -> NumberingTable
    word/footnotes.xml  -> FootnoteTable
    word/endnotes.xml   -> FootnoteTable
    word/settings.xml   -> Settings

Property Lists
--------------
``w:rPr`` is kept as an ordered tuple of ``RunProperty`` entries so that the
strike / double-strike exclusion can be decided in source order later on.
``w:pPr`` is flattened straight into ``ParagraphProperties``.

Malformed Values
----------------
Unknown enumeration tokens, unparsable numbers and elements missing required
attributes are logged and skipped. Structure that the model does not cover
(tracked-change markup, drawings, fields) is ignored.
"""

import logging
from typing import Any, Callable, Optional
from xml.etree import ElementTree as ET

from oox.docx.document import (
    Block,
    Body,
    DirectParagraphProperties,
    DirectRunProperties,
    Document,
    Hyperlink,
    Paragraph,
    ParagraphContent,
    Run,
    RunContent,
    RunContentKind,
    SectionProperties,
    Table,
    TableCell,
    TableRow,
)
from oox.docx.footnotes import Footnote, FootnoteTable, FootnoteType
from oox.docx.numbering import (
    AbstractNumbering,
    Level,
    LevelOverride,
    NumberingInstance,
    NumberingTable,
)
from oox.docx.properties import (
    Border,
    Color,
    EastAsianLayout,
    EmphasisMark,
    FitText,
    Fonts,
    FrameProperties,
    HighlightColor,
    Indentation,
    Justification,
    Language,
    LineSpacingRule,
    NumberingProperty,
    ParagraphBorders,
    ParagraphProperties,
    RunProperty,
    RunPropertyKind,
    Shading,
    Spacing,
    TabJustification,
    TabLeader,
    TabStop,
    TextAlignment,
    TextDirection,
    TextEffect,
    Underline,
    UnderlineType,
    VerticalAlignRun,
)
from oox.docx.settings import Settings
from oox.docx.styles import (
    DocumentDefaults,
    LatentStyleException,
    LatentStyles,
    Style,
    StyleGraph,
    StyleType,
)
from oox.shared.xml import (
    W_NS,
    R_NS,
    get_val,
    local_name,
    parse_enum,
    parse_int,
    parse_on_off_element,
    parse_optional_bool,
    parse_percentage,
    parse_twips,
    w_attr,
)

logger = logging.getLogger(__name__)


##################
# Shared records
##################


def _val_int(element: ET.Element) -> Optional[int]:
    return parse_int(get_val(element))


def _val_twips(element: ET.Element) -> Optional[int]:
    return parse_twips(get_val(element))


def parse_border(element: ET.Element) -> Border:
    return Border(
        value=get_val(element),
        color=w_attr(element, "color"),
        theme_color=w_attr(element, "themeColor"),
        theme_tint=w_attr(element, "themeTint"),
        theme_shade=w_attr(element, "themeShade"),
        size=parse_int(w_attr(element, "sz")),
        spacing=parse_int(w_attr(element, "space")),
        shadow=parse_optional_bool(w_attr(element, "shadow")),
        frame=parse_optional_bool(w_attr(element, "frame")),
    )


def parse_shading(element: ET.Element) -> Shading:
    return Shading(
        value=get_val(element),
        color=w_attr(element, "color"),
        theme_color=w_attr(element, "themeColor"),
        theme_tint=w_attr(element, "themeTint"),
        theme_shade=w_attr(element, "themeShade"),
        fill=w_attr(element, "fill"),
        theme_fill=w_attr(element, "themeFill"),
        theme_fill_tint=w_attr(element, "themeFillTint"),
        theme_fill_shade=w_attr(element, "themeFillShade"),
    )


##################
# Run properties
##################


def _parse_fonts(element: ET.Element) -> Fonts:
    return Fonts(
        hint=w_attr(element, "hint"),
        ascii=w_attr(element, "ascii"),
        high_ansi=w_attr(element, "hAnsi"),
        east_asian=w_attr(element, "eastAsia"),
        complex_script=w_attr(element, "cs"),
        ascii_theme=w_attr(element, "asciiTheme"),
        high_ansi_theme=w_attr(element, "hAnsiTheme"),
        east_asian_theme=w_attr(element, "eastAsiaTheme"),
        complex_script_theme=w_attr(element, "cstheme"),
    )


def _parse_color(element: ET.Element) -> Color:
    return Color(
        value=get_val(element),
        theme_color=w_attr(element, "themeColor"),
        theme_tint=w_attr(element, "themeTint"),
        theme_shade=w_attr(element, "themeShade"),
    )


def _parse_underline(element: ET.Element) -> Underline:
    return Underline(
        value=parse_enum(UnderlineType, get_val(element)),
        color=w_attr(element, "color"),
        theme_color=w_attr(element, "themeColor"),
        theme_tint=w_attr(element, "themeTint"),
        theme_shade=w_attr(element, "themeShade"),
    )


def _parse_fit_text(element: ET.Element) -> Optional[FitText]:
    value = _val_twips(element)
    if value is None:
        return None
    return FitText(value=value, id=parse_int(w_attr(element, "id")))


def _parse_language(element: ET.Element) -> Language:
    return Language(
        value=get_val(element),
        east_asian=w_attr(element, "eastAsia"),
        bidirectional=w_attr(element, "bidi"),
    )


def _parse_east_asian_layout(element: ET.Element) -> EastAsianLayout:
    return EastAsianLayout(
        id=parse_int(w_attr(element, "id")),
        combine=parse_optional_bool(w_attr(element, "combine")),
        combine_brackets=w_attr(element, "combineBrackets"),
        vertical=parse_optional_bool(w_attr(element, "vert")),
        vertical_compress=parse_optional_bool(w_attr(element, "vertCompress")),
    )


_RUN_PROPERTY_PARSERS: dict[str, tuple[RunPropertyKind, Callable[[ET.Element], Any]]] = {
    "rStyle": (RunPropertyKind.RUN_STYLE, get_val),
    "rFonts": (RunPropertyKind.RUN_FONTS, _parse_fonts),
    "b": (RunPropertyKind.BOLD, parse_on_off_element),
    "bCs": (RunPropertyKind.COMPLEX_SCRIPT_BOLD, parse_on_off_element),
    "i": (RunPropertyKind.ITALIC, parse_on_off_element),
    "iCs": (RunPropertyKind.COMPLEX_SCRIPT_ITALIC, parse_on_off_element),
    "caps": (RunPropertyKind.CAPITALS, parse_on_off_element),
    "smallCaps": (RunPropertyKind.SMALL_CAPITALS, parse_on_off_element),
    "strike": (RunPropertyKind.STRIKETHROUGH, parse_on_off_element),
    "dstrike": (RunPropertyKind.DOUBLE_STRIKETHROUGH, parse_on_off_element),
    "outline": (RunPropertyKind.OUTLINE, parse_on_off_element),
    "shadow": (RunPropertyKind.SHADOW, parse_on_off_element),
    "emboss": (RunPropertyKind.EMBOSS, parse_on_off_element),
    "imprint": (RunPropertyKind.IMPRINT, parse_on_off_element),
    "noProof": (RunPropertyKind.NO_PROOFING, parse_on_off_element),
    "snapToGrid": (RunPropertyKind.SNAP_TO_GRID, parse_on_off_element),
    "vanish": (RunPropertyKind.VANISH, parse_on_off_element),
    "webHidden": (RunPropertyKind.WEB_HIDDEN, parse_on_off_element),
    "color": (RunPropertyKind.COLOR, _parse_color),
    "spacing": (RunPropertyKind.SPACING, _val_twips),
    "w": (RunPropertyKind.WIDTH, lambda element: parse_percentage(get_val(element))),
    "kern": (RunPropertyKind.KERNING, _val_int),
    "position": (RunPropertyKind.POSITION, _val_int),
    "sz": (RunPropertyKind.FONT_SIZE, _val_int),
    "szCs": (RunPropertyKind.COMPLEX_SCRIPT_FONT_SIZE, _val_int),
    "highlight": (RunPropertyKind.HIGHLIGHT, lambda element: parse_enum(HighlightColor, get_val(element))),
    "u": (RunPropertyKind.UNDERLINE, _parse_underline),
    "effect": (RunPropertyKind.EFFECT, lambda element: parse_enum(TextEffect, get_val(element))),
    "bdr": (RunPropertyKind.BORDER, parse_border),
    "shd": (RunPropertyKind.SHADING, parse_shading),
    "fitText": (RunPropertyKind.FIT_TEXT, _parse_fit_text),
    "vertAlign": (RunPropertyKind.VERTICAL_ALIGNMENT, lambda element: parse_enum(VerticalAlignRun, get_val(element))),
    "rtl": (RunPropertyKind.RTL, parse_on_off_element),
    "cs": (RunPropertyKind.COMPLEX_SCRIPT, parse_on_off_element),
    "em": (RunPropertyKind.EMPHASIS_MARK, lambda element: parse_enum(EmphasisMark, get_val(element))),
    "lang": (RunPropertyKind.LANGUAGE, _parse_language),
    "eastAsianLayout": (RunPropertyKind.EAST_ASIAN_LAYOUT, _parse_east_asian_layout),
    "specVanish": (RunPropertyKind.SPECIAL_VANISH, parse_on_off_element),
    "oMath": (RunPropertyKind.O_MATH, parse_on_off_element),
}


def parse_run_property_entries(element: ET.Element) -> tuple[RunProperty, ...]:
    """Ordered entries of a ``w:rPr``; unknown children (e.g. ``w:rPrChange``) are skipped."""
    entries = []
    for child in element:
        parser = _RUN_PROPERTY_PARSERS.get(local_name(child.tag))
        if parser is None:
            continue
        kind, parse = parser
        value = parse(child)
        if value is None:
            continue
        entries.append(RunProperty(kind, value))
    return tuple(entries)


########################
# Paragraph properties
########################


def _parse_frame_properties(element: ET.Element) -> FrameProperties:
    return FrameProperties(
        drop_cap=w_attr(element, "dropCap"),
        lines=parse_int(w_attr(element, "lines")),
        width=parse_twips(w_attr(element, "w")),
        height=parse_twips(w_attr(element, "h")),
        vertical_space=parse_twips(w_attr(element, "vSpace")),
        horizontal_space=parse_twips(w_attr(element, "hSpace")),
        wrap=w_attr(element, "wrap"),
        horizontal_anchor=w_attr(element, "hAnchor"),
        vertical_anchor=w_attr(element, "vAnchor"),
        x=parse_twips(w_attr(element, "x")),
        x_align=w_attr(element, "xAlign"),
        y=parse_twips(w_attr(element, "y")),
        y_align=w_attr(element, "yAlign"),
        height_rule=w_attr(element, "hRule"),
        anchor_lock=parse_optional_bool(w_attr(element, "anchorLock")),
    )


def _parse_numbering_property(element: ET.Element) -> NumberingProperty:
    level = element.find(f"{W_NS}ilvl")
    numbering_id = element.find(f"{W_NS}numId")
    return NumberingProperty(
        level=_val_int(level) if level is not None else None,
        numbering_id=_val_int(numbering_id) if numbering_id is not None else None,
    )


_BORDER_SIDES = {
    "top": "top",
    "left": "start",
    "start": "start",
    "bottom": "bottom",
    "right": "end",
    "end": "end",
    "between": "between",
    "bar": "bar",
}


def _parse_paragraph_borders(element: ET.Element) -> ParagraphBorders:
    sides = {}
    for child in element:
        side = _BORDER_SIDES.get(local_name(child.tag))
        if side is not None:
            sides[side] = parse_border(child)
    return ParagraphBorders(**sides)


def _parse_tabs(element: ET.Element) -> tuple[TabStop, ...]:
    tabs = []
    for child in element.findall(f"{W_NS}tab"):
        value = parse_enum(TabJustification, get_val(child))
        position = parse_twips(w_attr(child, "pos"))
        if value is None or position is None:
            logger.warning("Tab stop without a valid w:val or w:pos ignored")
            continue
        tabs.append(
            TabStop(
                value=value,
                position=position,
                leader=parse_enum(TabLeader, w_attr(child, "leader")),
            )
        )
    return tuple(tabs)


def _parse_spacing(element: ET.Element) -> Spacing:
    return Spacing(
        before=parse_twips(w_attr(element, "before")),
        before_lines=parse_int(w_attr(element, "beforeLines")),
        before_autospacing=parse_optional_bool(w_attr(element, "beforeAutospacing")),
        after=parse_twips(w_attr(element, "after")),
        after_lines=parse_int(w_attr(element, "afterLines")),
        after_autospacing=parse_optional_bool(w_attr(element, "afterAutospacing")),
        line=parse_twips(w_attr(element, "line")),
        line_rule=parse_enum(LineSpacingRule, w_attr(element, "lineRule")),
    )


def _first_attr(element: ET.Element, *names: str) -> Optional[str]:
    for name in names:
        value = w_attr(element, name)
        if value is not None:
            return value
    return None


def _parse_indentation(element: ET.Element) -> Indentation:
    # w:left / w:right are the transitional spellings of w:start / w:end
    return Indentation(
        start=parse_twips(_first_attr(element, "start", "left")),
        start_chars=parse_int(_first_attr(element, "startChars", "leftChars")),
        end=parse_twips(_first_attr(element, "end", "right")),
        end_chars=parse_int(_first_attr(element, "endChars", "rightChars")),
        hanging=parse_twips(w_attr(element, "hanging")),
        hanging_chars=parse_int(w_attr(element, "hangingChars")),
        first_line=parse_twips(w_attr(element, "firstLine")),
        first_line_chars=parse_int(w_attr(element, "firstLineChars")),
    )


_PARAGRAPH_PROPERTY_PARSERS: dict[str, tuple[str, Callable[[ET.Element], Any]]] = {
    "pStyle": ("style", get_val),
    "keepNext": ("keep_with_next", parse_on_off_element),
    "keepLines": ("keep_lines_on_one_page", parse_on_off_element),
    "pageBreakBefore": ("start_on_next_page", parse_on_off_element),
    "framePr": ("frame_properties", _parse_frame_properties),
    "widowControl": ("widow_control", parse_on_off_element),
    "numPr": ("numbering_properties", _parse_numbering_property),
    "suppressLineNumbers": ("suppress_line_numbers", parse_on_off_element),
    "pBdr": ("borders", _parse_paragraph_borders),
    "shd": ("shading", parse_shading),
    "tabs": ("tabs", _parse_tabs),
    "suppressAutoHyphens": ("suppress_auto_hyphens", parse_on_off_element),
    "kinsoku": ("kinsoku", parse_on_off_element),
    "wordWrap": ("word_wrapping", parse_on_off_element),
    "overflowPunct": ("overflow_punctuations", parse_on_off_element),
    "topLinePunct": ("top_line_punctuations", parse_on_off_element),
    "autoSpaceDE": ("auto_space_latin_and_east_asian", parse_on_off_element),
    "autoSpaceDN": ("auto_space_east_asian_and_numbers", parse_on_off_element),
    "bidi": ("bidirectional", parse_on_off_element),
    "adjustRightInd": ("adjust_right_indent", parse_on_off_element),
    "snapToGrid": ("snap_to_grid", parse_on_off_element),
    "spacing": ("spacing", _parse_spacing),
    "ind": ("indent", _parse_indentation),
    "contextualSpacing": ("contextual_spacing", parse_on_off_element),
    "mirrorIndents": ("mirror_indents", parse_on_off_element),
    "suppressOverlap": ("suppress_overlapping", parse_on_off_element),
    "jc": ("alignment", lambda element: parse_enum(Justification, get_val(element))),
    "textDirection": ("text_direction", lambda element: parse_enum(TextDirection, get_val(element))),
    "textAlignment": ("text_alignment", lambda element: parse_enum(TextAlignment, get_val(element))),
    "textboxTightWrap": ("textbox_tight_wrap", get_val),
    "outlineLvl": ("outline_level", _val_int),
    "divId": ("div_id", _val_int),
    "cnfStyle": ("conditional_formatting", get_val),
}


def parse_paragraph_properties_base(element: ET.Element) -> ParagraphProperties:
    values = {}
    for child in element:
        parser = _PARAGRAPH_PROPERTY_PARSERS.get(local_name(child.tag))
        if parser is None:
            continue
        field_name, parse = parser
        value = parse(child)
        if value is not None:
            values[field_name] = value
    return ParagraphProperties(**values)


def parse_section_properties(element: ET.Element) -> SectionProperties:
    values: dict[str, Any] = {}
    page_size = element.find(f"{W_NS}pgSz")
    if page_size is not None:
        values["page_width"] = parse_twips(w_attr(page_size, "w"))
        values["page_height"] = parse_twips(w_attr(page_size, "h"))
        values["orientation"] = w_attr(page_size, "orient")
    margins = element.find(f"{W_NS}pgMar")
    if margins is not None:
        for attr, name in (
            ("top", "margin_top"),
            ("bottom", "margin_bottom"),
            ("left", "margin_left"),
            ("right", "margin_right"),
            ("header", "margin_header"),
            ("footer", "margin_footer"),
            ("gutter", "margin_gutter"),
        ):
            values[name] = parse_twips(w_attr(margins, attr))
    columns = element.find(f"{W_NS}cols")
    if columns is not None:
        values["column_count"] = parse_int(w_attr(columns, "num"))
    return SectionProperties(**values)


def parse_paragraph_properties(element: ET.Element) -> DirectParagraphProperties:
    mark = element.find(f"{W_NS}rPr")
    section = element.find(f"{W_NS}sectPr")
    return DirectParagraphProperties(
        base=parse_paragraph_properties_base(element),
        mark_run_properties=parse_run_property_entries(mark) if mark is not None else (),
        section_properties=parse_section_properties(section) if section is not None else None,
    )


###########################
# Paragraphs, runs, tables
###########################


_RUN_CONTENT_KINDS = {kind.value: kind for kind in RunContentKind}
_TEXT_KINDS = (RunContentKind.TEXT, RunContentKind.DELETED_TEXT, RunContentKind.FIELD_CODE)
# containers whose runs belong to the enclosing paragraph
_RUN_CONTAINERS = {"ins", "smartTag", "customXml", "fldSimple", "sdtContent", "sdt", "dir", "bdo"}


def parse_run(element: ET.Element) -> Run:
    properties = None
    contents = []
    for child in element:
        name = local_name(child.tag)
        if name == "rPr":
            properties = DirectRunProperties(parse_run_property_entries(child))
            continue
        kind = _RUN_CONTENT_KINDS.get(name)
        if kind is None:
            continue
        if kind in _TEXT_KINDS:
            contents.append(RunContent(kind, text=child.text or ""))
        elif kind in (RunContentKind.FOOTNOTE_REFERENCE, RunContentKind.ENDNOTE_REFERENCE):
            contents.append(RunContent(kind, reference_id=parse_int(w_attr(child, "id"))))
        elif kind is RunContentKind.SYMBOL:
            contents.append(RunContent(kind, text=w_attr(child, "char")))
        else:
            contents.append(RunContent(kind))
    return Run(properties=properties, contents=tuple(contents))


def _parse_paragraph_contents(element: ET.Element) -> list[ParagraphContent]:
    contents: list[ParagraphContent] = []
    for child in element:
        name = local_name(child.tag)
        if name == "r":
            contents.append(parse_run(child))
        elif name == "hyperlink":
            runs = tuple(
                content
                for content in _parse_paragraph_contents(child)
                if isinstance(content, Run)
            )
            contents.append(
                Hyperlink(
                    relationship_id=child.get(f"{R_NS}id"),
                    anchor=w_attr(child, "anchor"),
                    runs=runs,
                )
            )
        elif name in _RUN_CONTAINERS:
            contents.extend(_parse_paragraph_contents(child))
    return contents


def parse_paragraph(element: ET.Element) -> Paragraph:
    properties = element.find(f"{W_NS}pPr")
    return Paragraph(
        properties=parse_paragraph_properties(properties) if properties is not None else None,
        contents=tuple(_parse_paragraph_contents(element)),
    )


def parse_table(element: ET.Element) -> Table:
    style = None
    table_style = element.find(f"{W_NS}tblPr/{W_NS}tblStyle")
    if table_style is not None:
        style = get_val(table_style)
    rows = []
    for row in element.findall(f"{W_NS}tr"):
        cells = tuple(
            TableCell(blocks=parse_blocks(cell)) for cell in row.findall(f"{W_NS}tc")
        )
        rows.append(TableRow(cells=cells))
    return Table(style=style, rows=tuple(rows))


def parse_blocks(element: ET.Element) -> tuple[Block, ...]:
    """Block-level children of a body, cell, note or structured document tag."""
    blocks: list[Block] = []
    for child in element:
        name = local_name(child.tag)
        if name == "p":
            blocks.append(parse_paragraph(child))
        elif name == "tbl":
            blocks.append(parse_table(child))
        elif name in ("sdt", "sdtContent", "customXml"):
            blocks.extend(parse_blocks(child))
    return tuple(blocks)


def parse_document(root: ET.Element) -> Document:
    body = root.find(f"{W_NS}body")
    if body is None:
        return Document()
    section = body.find(f"{W_NS}sectPr")
    return Document(
        body=Body(
            blocks=parse_blocks(body),
            section_properties=parse_section_properties(section) if section is not None else None,
        )
    )


#########
# Styles
#########


def _child_val(element: ET.Element, name: str) -> Optional[str]:
    child = element.find(f"{W_NS}{name}")
    if child is None:
        return None
    return get_val(child)


def _child_on_off(element: ET.Element, name: str) -> Optional[bool]:
    child = element.find(f"{W_NS}{name}")
    if child is None:
        return None
    return parse_on_off_element(child)


def _run_entries_of(element: ET.Element) -> Optional[tuple[RunProperty, ...]]:
    run_properties = element.find(f"{W_NS}rPr")
    if run_properties is None:
        return None
    return parse_run_property_entries(run_properties)


def _paragraph_base_of(element: ET.Element) -> Optional[ParagraphProperties]:
    paragraph_properties = element.find(f"{W_NS}pPr")
    if paragraph_properties is None:
        return None
    return parse_paragraph_properties_base(paragraph_properties)


def parse_style(element: ET.Element) -> Optional[Style]:
    style_id = w_attr(element, "styleId")
    if not style_id:
        logger.warning("Style without w:styleId ignored")
        return None

    style_type_value = w_attr(element, "type")
    # ECMA-376: a missing w:type means a paragraph style
    style_type = parse_enum(StyleType, style_type_value) if style_type_value else StyleType.PARAGRAPH

    return Style(
        style_id=style_id,
        style_type=style_type,
        name=_child_val(element, "name"),
        is_default=bool(parse_optional_bool(w_attr(element, "default"))),
        based_on=_child_val(element, "basedOn"),
        next_style=_child_val(element, "next"),
        link=_child_val(element, "link"),
        aliases=_child_val(element, "aliases"),
        ui_priority=parse_int(_child_val(element, "uiPriority")),
        hidden=_child_on_off(element, "hidden"),
        semi_hidden=_child_on_off(element, "semiHidden"),
        unhide_when_used=_child_on_off(element, "unhideWhenUsed"),
        primary_style=_child_on_off(element, "qFormat"),
        locked=_child_on_off(element, "locked"),
        custom_style=parse_optional_bool(w_attr(element, "customStyle")),
        paragraph_properties=_paragraph_base_of(element),
        run_properties=_run_entries_of(element),
        has_table_properties=element.find(f"{W_NS}tblPr") is not None,
    )


def parse_document_defaults(element: ET.Element) -> DocumentDefaults:
    paragraph_properties = None
    run_properties = None
    paragraph_default = element.find(f"{W_NS}pPrDefault")
    if paragraph_default is not None:
        paragraph_properties = _paragraph_base_of(paragraph_default)
    run_default = element.find(f"{W_NS}rPrDefault")
    if run_default is not None:
        run_properties = _run_entries_of(run_default)
    return DocumentDefaults(
        paragraph_properties=paragraph_properties,
        run_properties=run_properties,
    )


def parse_latent_styles(element: ET.Element) -> LatentStyles:
    exceptions = []
    for child in element.findall(f"{W_NS}lsdException"):
        name = w_attr(child, "name")
        if name is None:
            logger.warning("Latent style exception without w:name ignored")
            continue
        exceptions.append(
            LatentStyleException(
                name=name,
                locked=parse_optional_bool(w_attr(child, "locked")),
                ui_priority=parse_int(w_attr(child, "uiPriority")),
                semi_hidden=parse_optional_bool(w_attr(child, "semiHidden")),
                unhide_when_used=parse_optional_bool(w_attr(child, "unhideWhenUsed")),
                primary_style=parse_optional_bool(w_attr(child, "qFormat")),
            )
        )
    return LatentStyles(
        exceptions=tuple(exceptions),
        default_locked_state=parse_optional_bool(w_attr(element, "defLockedState")),
        default_ui_priority=parse_int(w_attr(element, "defUIPriority")),
        default_semi_hidden=parse_optional_bool(w_attr(element, "defSemiHidden")),
        default_unhide_when_used=parse_optional_bool(w_attr(element, "defUnhideWhenUsed")),
        default_primary_style=parse_optional_bool(w_attr(element, "defQFormat")),
        count=parse_int(w_attr(element, "count")),
    )


def parse_styles(root: ET.Element) -> StyleGraph:
    document_defaults = None
    latent_styles = None
    styles = []
    for child in root:
        name = local_name(child.tag)
        if name == "docDefaults":
            document_defaults = parse_document_defaults(child)
        elif name == "latentStyles":
            latent_styles = parse_latent_styles(child)
        elif name == "style":
            style = parse_style(child)
            if style is not None:
                styles.append(style)
    return StyleGraph(styles, document_defaults=document_defaults, latent_styles=latent_styles)


############
# Numbering
############


def parse_level(element: ET.Element) -> Optional[Level]:
    level = parse_int(w_attr(element, "ilvl"))
    if level is None:
        logger.warning("Numbering level without w:ilvl ignored")
        return None
    return Level(
        level=level,
        start=parse_int(_child_val(element, "start")),
        number_format=_child_val(element, "numFmt"),
        level_restart=parse_int(_child_val(element, "lvlRestart")),
        paragraph_style=_child_val(element, "pStyle"),
        is_legal=_child_on_off(element, "isLgl"),
        suffix=_child_val(element, "suff"),
        level_text=_child_val(element, "lvlText"),
        picture_bullet_id=parse_int(_child_val(element, "lvlPicBulletId")),
        alignment=_child_val(element, "lvlJc"),
        template_code=parse_int(w_attr(element, "tplc"), base=16),
        tentative=parse_optional_bool(w_attr(element, "tentative")),
        paragraph_properties=_paragraph_base_of(element),
        run_properties=_run_entries_of(element),
    )


def _parse_levels(element: ET.Element) -> tuple[Level, ...]:
    levels = (parse_level(child) for child in element.findall(f"{W_NS}lvl"))
    return tuple(level for level in levels if level is not None)


def parse_abstract_numbering(element: ET.Element) -> Optional[AbstractNumbering]:
    abstract_numbering_id = parse_int(w_attr(element, "abstractNumId"))
    if abstract_numbering_id is None:
        logger.warning("Abstract numbering without w:abstractNumId ignored")
        return None
    return AbstractNumbering(
        abstract_numbering_id=abstract_numbering_id,
        levels=_parse_levels(element),
        name=_child_val(element, "name"),
        multi_level_type=_child_val(element, "multiLevelType"),
        style_link=_child_val(element, "styleLink"),
        numbering_style_link=_child_val(element, "numStyleLink"),
    )


def _parse_level_override(element: ET.Element) -> Optional[LevelOverride]:
    level = parse_int(w_attr(element, "ilvl"))
    if level is None:
        return None
    override_level = element.find(f"{W_NS}lvl")
    return LevelOverride(
        level=level,
        start_override=parse_int(_child_val(element, "startOverride")),
        override_level=parse_level(override_level) if override_level is not None else None,
    )


def parse_numbering_instance(element: ET.Element) -> Optional[NumberingInstance]:
    numbering_id = parse_int(w_attr(element, "numId"))
    abstract_numbering_id = parse_int(_child_val(element, "abstractNumId"))
    if numbering_id is None or abstract_numbering_id is None:
        logger.warning("Numbering instance without w:numId or w:abstractNumId ignored")
        return None
    overrides = (_parse_level_override(child) for child in element.findall(f"{W_NS}lvlOverride"))
    return NumberingInstance(
        numbering_id=numbering_id,
        abstract_numbering_id=abstract_numbering_id,
        level_overrides=tuple(override for override in overrides if override is not None),
    )


def parse_numbering(root: ET.Element) -> NumberingTable:
    instances = []
    abstract_numberings = []
    picture_bullet_ids = []
    for child in root:
        name = local_name(child.tag)
        if name == "abstractNum":
            abstract = parse_abstract_numbering(child)
            if abstract is not None:
                abstract_numberings.append(abstract)
        elif name == "num":
            instance = parse_numbering_instance(child)
            if instance is not None:
                instances.append(instance)
        elif name == "numPicBullet":
            bullet_id = parse_int(w_attr(child, "numPicBulletId"))
            if bullet_id is not None:
                picture_bullet_ids.append(bullet_id)
    return NumberingTable(
        instances=tuple(instances),
        abstract_numberings=tuple(abstract_numberings),
        picture_bullet_ids=tuple(picture_bullet_ids),
    )


#######################
# Footnotes / endnotes
#######################


def parse_note(element: ET.Element) -> Optional[Footnote]:
    note_id = parse_int(w_attr(element, "id"))
    if note_id is None:
        logger.warning(f"{local_name(element.tag)} without w:id ignored")
        return None
    return Footnote(
        id=note_id,
        note_type=parse_enum(FootnoteType, w_attr(element, "type")),
        blocks=parse_blocks(element),
    )


def parse_notes(root: ET.Element) -> FootnoteTable:
    """``w:footnotes`` or ``w:endnotes``."""
    notes = []
    for child in root:
        if local_name(child.tag) not in ("footnote", "endnote"):
            continue
        note = parse_note(child)
        if note is not None:
            notes.append(note)
    return FootnoteTable(notes=tuple(notes))


###########
# Settings
###########


def _note_ids(element: Optional[ET.Element], note_tag: str) -> tuple[int, ...]:
    if element is None:
        return ()
    ids = (parse_int(w_attr(child, "id")) for child in element.findall(f"{W_NS}{note_tag}"))
    return tuple(note_id for note_id in ids if note_id is not None)


def parse_settings(root: ET.Element) -> Settings:
    compatibility_mode = None
    for setting in root.findall(f"{W_NS}compat/{W_NS}compatSetting"):
        if w_attr(setting, "name") == "compatibilityMode":
            compatibility_mode = parse_int(get_val(setting))
    default_tab_stop = root.find(f"{W_NS}defaultTabStop")
    return Settings(
        default_tab_stop=_val_twips(default_tab_stop) if default_tab_stop is not None else None,
        even_and_odd_headers=_child_on_off(root, "evenAndOddHeaders"),
        mirror_margins=_child_on_off(root, "mirrorMargins"),
        footnote_separator_ids=_note_ids(root.find(f"{W_NS}footnotePr"), "footnote"),
        endnote_separator_ids=_note_ids(root.find(f"{W_NS}endnotePr"), "endnote"),
        compatibility_mode=compatibility_mode,
    )
