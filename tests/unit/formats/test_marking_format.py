"""
Unit tests for the marking game format.
"""

from camxes_postproc.dom import Labeled, Leaf, Unlabeled
from camxes_postproc.formats.marking import MarkingFormat
from camxes_postproc.modes import Options, options_from_letters
from camxes_postproc.postproc import postprocess


class TestMarkingFormat:
    def setup_method(self):
        self.fmt = MarkingFormat()

    def test_name(self):
        assert self.fmt.name == "marking"

    def test_adjusts_options(self):
        options = self.fmt.adjust_options(options_from_letters("CRJS"))
        assert options.trim
        assert options.show_node_labels
        assert not options.show_selmaho
        assert options.no_leaf_prefix
        assert not options.json_format
        assert not options.show_spaces

    def test_forces_whole_words(self):
        options = self.fmt.adjust_options(options_from_letters("MST"))
        assert not options.keep_morphology
        assert not options.show_spaces
        assert not options.show_terminators

    def test_brackets_by_constituent(self):
        node = Labeled("BRIDI", [
            Labeled("SUMTI", [Leaf("mi")]),
            Labeled("SELBRI", [Leaf("klama")]),
            Labeled("SUMTI", [Unlabeled([Leaf("le"), Leaf("zarci")])]),
        ])
        assert self.fmt.render(node, Options()) == "{[mi] <klama> [le zarci]}"

    def test_prenex(self):
        node = Unlabeled([Labeled("PRENEX", [Leaf("da"), Leaf("zo'u")]), Labeled("BRIDI", [Leaf("da")])])
        assert self.fmt.render(node, Options()) == "⟦da zo'u⟧ {da}"

    def test_other_labels_dropped(self):
        node = Labeled("free", [Leaf("coi"), Labeled("G", [Leaf("klama")])])
        assert self.fmt.render(node, Options()) == "coi klama"

    def test_absent(self):
        assert self.fmt.render(None, Options()) == ""

    def test_display_flags_do_not_leak(self):
        tree = ["text", ["sentence",
                         ["sumti", ["KOhA", [["m", "m"], ["i", "i"]]], ["spaces", " "]],
                         ["selbri", ["gismu", [["k", "k"], ["l", "l"], ["a", "a"]]]],
                         ["KU"]]]
        plain = postprocess(tree, "", format_type="marking")
        assert plain == "{[mi] <kla>}"
        assert postprocess(tree, "MST", format_type="marking") == plain
        assert postprocess(tree, "MSTCRN!", format_type="marking") == plain
