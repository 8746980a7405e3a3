import logging
import unittest
from dataclasses import fields

from oox.docx.properties import (
    TOGGLE_PROPERTIES,
    Color,
    Fonts,
    Indentation,
    LineSpacingRule,
    ParagraphProperties,
    RunProperties,
    RunProperty,
    RunPropertyKind,
    Spacing,
    TextAlignment,
    Underline,
    UnderlineType,
)

logger = logging.getLogger(__name__)

tc = unittest.TestCase()
tc.maxDiff = None


def _sample_run_properties() -> RunProperties:
    return RunProperties(
        style="Emphasis",
        fonts=Fonts(ascii="Calibri", east_asian="MS Mincho"),
        bold=True,
        italic=False,
        strikethrough=True,
        color=Color(value="FF0000"),
        font_size=24,
        underline=Underline(value=UnderlineType.SINGLE),
        complex_script=True,
    )


def _sample_paragraph_properties() -> ParagraphProperties:
    return ParagraphProperties(
        style="Heading1",
        keep_with_next=True,
        spacing=Spacing(before=240, line=360, line_rule=LineSpacingRule.AUTO),
        indent=Indentation(start=720, hanging=360),
        text_alignment=TextAlignment.CENTER,
        outline_level=0,
    )


def test_merge_with_empty_is_identity() -> None:
    run_properties = _sample_run_properties()
    tc.assertEqual(run_properties, run_properties.merge(RunProperties()))
    tc.assertEqual(run_properties, RunProperties().merge(run_properties))

    paragraph_properties = _sample_paragraph_properties()
    tc.assertEqual(paragraph_properties, paragraph_properties.merge(ParagraphProperties()))
    tc.assertEqual(paragraph_properties, ParagraphProperties().merge(paragraph_properties))


def test_merge_is_idempotent() -> None:
    run_properties = _sample_run_properties()
    tc.assertEqual(run_properties, run_properties.merge(run_properties))

    paragraph_properties = _sample_paragraph_properties()
    tc.assertEqual(paragraph_properties, paragraph_properties.merge(paragraph_properties))


def test_toggle_merge_with_itself_clears_toggles_only() -> None:
    run_properties = _sample_run_properties()
    merged = run_properties.toggle_merge(run_properties)

    for name in TOGGLE_PROPERTIES:
        value = getattr(run_properties, name)
        if value is None:
            tc.assertIsNone(getattr(merged, name), name)
        else:
            tc.assertIs(getattr(merged, name), False, name)

    for item in fields(RunProperties):
        if item.name in TOGGLE_PROPERTIES:
            continue
        tc.assertEqual(getattr(run_properties, item.name), getattr(merged, item.name), item.name)


def test_merge_overlay_wins() -> None:
    base = RunProperties(bold=True, italic=True, font_size=20)
    overlay = RunProperties(italic=False, font_size=28)

    merged = base.merge(overlay)

    tc.assertIs(merged.bold, True)
    tc.assertIs(merged.italic, False)
    tc.assertEqual(28, merged.font_size)


def test_merge_combines_sub_records_field_by_field() -> None:
    base = RunProperties(fonts=Fonts(ascii="Calibri", high_ansi="Calibri"))
    overlay = RunProperties(fonts=Fonts(complex_script="Arial"))

    merged = base.merge(overlay)

    tc.assertEqual(
        Fonts(ascii="Calibri", high_ansi="Calibri", complex_script="Arial"),
        merged.fonts,
    )

    paragraph = ParagraphProperties(spacing=Spacing(before=120, after=120))
    merged_paragraph = paragraph.merge(ParagraphProperties(spacing=Spacing(after=0, line=240)))
    tc.assertEqual(Spacing(before=120, after=0, line=240), merged_paragraph.spacing)


def test_toggle_merge_xors_when_both_sides_set() -> None:
    base = RunProperties(bold=True, italic=True, vanish=False)
    overlay = RunProperties(bold=True, italic=False, vanish=True)

    merged = base.toggle_merge(overlay)

    tc.assertIs(merged.bold, False)
    tc.assertIs(merged.italic, True)
    tc.assertIs(merged.vanish, True)


def test_toggle_merge_keeps_single_sided_value() -> None:
    tc.assertIs(RunProperties(bold=True).toggle_merge(RunProperties()).bold, True)
    tc.assertIs(RunProperties().toggle_merge(RunProperties(bold=True)).bold, True)
    tc.assertIsNone(RunProperties().toggle_merge(RunProperties()).bold)


def test_toggle_merge_complex_script_uses_overlay() -> None:
    tc.assertIs(
        RunProperties(complex_script=False).toggle_merge(RunProperties(complex_script=True)).complex_script,
        True,
    )
    tc.assertIs(
        RunProperties(complex_script=True).toggle_merge(RunProperties(complex_script=True)).complex_script,
        False,
    )
    tc.assertIs(
        RunProperties().toggle_merge(RunProperties(complex_script=True)).complex_script,
        True,
    )


def test_toggle_merge_overrides_non_toggle_fields() -> None:
    base = RunProperties(font_size=20, underline=Underline(value=UnderlineType.SINGLE))
    overlay = RunProperties(font_size=32)

    merged = base.toggle_merge(overlay)

    tc.assertEqual(32, merged.font_size)
    tc.assertEqual(Underline(value=UnderlineType.SINGLE), merged.underline)


def test_paragraph_toggle_merge_is_plain_merge() -> None:
    base = ParagraphProperties(keep_with_next=True)
    overlay = ParagraphProperties(keep_with_next=True)
    tc.assertIs(base.toggle_merge(overlay).keep_with_next, True)


def test_from_entries_later_entry_wins() -> None:
    run_properties = RunProperties.from_entries(
        [
            RunProperty(RunPropertyKind.BOLD, True),
            RunProperty(RunPropertyKind.FONT_SIZE, 20),
            RunProperty(RunPropertyKind.BOLD, False),
        ]
    )
    tc.assertIs(run_properties.bold, False)
    tc.assertEqual(20, run_properties.font_size)


def test_from_entries_strike_pair_later_wins() -> None:
    double_last = RunProperties.from_entries(
        [
            RunProperty(RunPropertyKind.STRIKETHROUGH, True),
            RunProperty(RunPropertyKind.DOUBLE_STRIKETHROUGH, True),
        ]
    )
    tc.assertIsNone(double_last.strikethrough)
    tc.assertIs(double_last.double_strikethrough, True)

    single_last = RunProperties.from_entries(
        [
            RunProperty(RunPropertyKind.DOUBLE_STRIKETHROUGH, True),
            RunProperty(RunPropertyKind.STRIKETHROUGH, True),
        ]
    )
    tc.assertIs(single_last.strikethrough, True)
    tc.assertIsNone(single_last.double_strikethrough)


def test_merge_strike_pair_is_exclusive() -> None:
    base = RunProperties(strikethrough=True)

    merged = base.merge(RunProperties(double_strikethrough=True))
    tc.assertIsNone(merged.strikethrough)
    tc.assertIs(merged.double_strikethrough, True)

    toggled = base.toggle_merge(RunProperties(double_strikethrough=True))
    tc.assertIsNone(toggled.strikethrough)
    tc.assertIs(toggled.double_strikethrough, True)

    # overlay without either keeps the base
    tc.assertIs(base.merge(RunProperties(bold=True)).strikethrough, True)


def test_strike_pair_never_both_true() -> None:
    layers = [
        RunProperties(strikethrough=True),
        RunProperties(double_strikethrough=True),
        RunProperties(strikethrough=True, double_strikethrough=True),
        RunProperties(strikethrough=True, bold=True),
        RunProperties(double_strikethrough=True, italic=True),
    ]
    for base in layers:
        for overlay in layers:
            for merged in (base.merge(overlay), base.toggle_merge(overlay)):
                tc.assertFalse(
                    merged.strikethrough is True and merged.double_strikethrough is True,
                    f"{base} / {overlay}",
                )


def test_is_empty() -> None:
    tc.assertTrue(RunProperties().is_empty())
    tc.assertTrue(ParagraphProperties().is_empty())
    tc.assertFalse(RunProperties(bold=False).is_empty())
    tc.assertTrue(Spacing().is_empty())


def test_every_toggle_name_is_a_boolean_run_field() -> None:
    names = {item.name for item in fields(RunProperties)}
    tc.assertTrue(TOGGLE_PROPERTIES <= names)
    for kind in RunPropertyKind:
        tc.assertIn(kind.value, names)


def test_overlay_with_both_strikes_keeps_double() -> None:
    base = RunProperties(strikethrough=True)
    overlay = RunProperties(strikethrough=True, double_strikethrough=True)

    for merged in (base.merge(overlay), base.toggle_merge(overlay)):
        tc.assertIsNone(merged.strikethrough)
        tc.assertIs(merged.double_strikethrough, True)
