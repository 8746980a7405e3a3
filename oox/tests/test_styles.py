import logging
import unittest

from oox.docx.styles import Style, StyleGraph, StyleType

logger = logging.getLogger(__name__)

tc = unittest.TestCase()


def _style(style_id: str, based_on: str = None, **kwargs) -> Style:
    return Style(style_id=style_id, style_type=StyleType.PARAGRAPH, based_on=based_on, **kwargs)


def test_graph_lookup() -> None:
    graph = StyleGraph([_style("Normal", is_default=True), _style("Title", "Normal")])

    tc.assertEqual(2, len(graph))
    tc.assertIn("Title", graph)
    tc.assertNotIn("Subtitle", graph)
    tc.assertEqual(["Normal", "Title"], [style.style_id for style in graph])
    tc.assertIsNone(graph.get(None))
    tc.assertIsNone(graph.default_style(StyleType.CHARACTER))
    tc.assertEqual("Normal", graph.default_style(StyleType.PARAGRAPH).style_id)


def test_based_on_chain() -> None:
    graph = StyleGraph([_style("A"), _style("B", "A"), _style("C", "B")])

    tc.assertEqual(["C", "B", "A"], [style.style_id for style in graph.based_on_chain("C")])
    tc.assertEqual(["A"], [style.style_id for style in graph.based_on_chain("A")])
    tc.assertEqual([], graph.based_on_chain("Z"))


def test_based_on_chain_stops_at_cycle(caplog) -> None:
    graph = StyleGraph([_style("A", "C"), _style("B", "A"), _style("C", "B")])

    with caplog.at_level(logging.DEBUG, logger="oox.docx.styles"):
        chain = graph.based_on_chain("A")

    tc.assertEqual(["A", "C", "B"], [style.style_id for style in chain])
    tc.assertIn("basedOn cycle", caplog.text)


def test_based_on_chain_stops_at_dangling_link() -> None:
    graph = StyleGraph([_style("A", "Missing")])
    tc.assertEqual(["A"], [style.style_id for style in graph.based_on_chain("A")])


def test_default_per_type_first_wins() -> None:
    graph = StyleGraph(
        [
            _style("First", is_default=True),
            _style("Second", is_default=True),
            Style(style_id="Char", style_type=StyleType.CHARACTER, is_default=True),
        ]
    )
    tc.assertEqual("First", graph.default_style(StyleType.PARAGRAPH).style_id)
    tc.assertEqual("Char", graph.default_style(StyleType.CHARACTER).style_id)
