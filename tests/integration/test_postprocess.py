"""
Integration tests for the postprocessing pipeline.

Parse tree in -> mode decoding -> rewriting -> output format.
"""

import json

import pytest
from camxes_postproc.config import reset_config
from camxes_postproc.dom import Labeled, Leaf, Unlabeled, from_json
from camxes_postproc.errors import (
    DepthLimitError,
    InvalidInputError,
    InvalidOptionError,
    PostprocError,
)
from camxes_postproc.modes import Options
from camxes_postproc.postproc import (
    load_tree,
    postprocess,
    postprocess_tree,
    postprocessing,
)


def chain(*names, inner):
    """Nest inner under a chain of single-child labels."""
    for name in reversed(names):
        inner = [name, inner]
    return inner


MI = chain("sumti", "sumti_1", "sumti_6", "KOhA_clause", inner=[
    "KOhA_pre", ["KOhA", [["m", "m"], ["i", "i"]]], ["spaces", " "],
])
KLAMA = chain("selbri", "selbri_1", "tanru_unit", "BRIVLA_clause", inner=[
    "BRIVLA", ["gismu", [["k", "k"], ["l", "l"], ["a", "a"], ["m", "m"], ["a", "a"]]],
])
SENTENCE = ["sentence", ["terms", MI], ["bridi_tail", KLAMA, ["tail_terms", ["VAU"]]]]
MI_KLAMA = ["text", ["text_1", SENTENCE]]

KLAMA_ONLY = ["text", ["sentence", ["selbri", [["gismu", "klama"]]]]]


@pytest.fixture(autouse=True)
def default_config(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    monkeypatch.delenv("CAMXES_DEFAULT_MODE", raising=False)
    reset_config()
    yield
    reset_config()


class TestScenarios:
    def test_trimmed_wrappers_collapse_to_leaf(self):
        assert postprocess(KLAMA_ONLY, "J") == Leaf("klama")
        assert postprocess(KLAMA_ONLY, "") == "klama"

    def test_node_labels_keep_sentence_wrapper(self):
        result = postprocess(KLAMA_ONLY, "NJ")
        assert result == Labeled("BRIDI:", [Leaf("SELBRI:klama")])
        assert postprocess(KLAMA_ONLY, "N") == "(BRIDI: SELBRI:klama)"

    def test_node_labels_without_prefix(self):
        assert postprocess(KLAMA_ONLY, "N!") == "(BRIDI [SELBRI klama])"

    def test_options_instance(self):
        options = Options(trim=True, show_selmaho=False, show_node_labels=False, json_format=True)
        assert postprocess(KLAMA_ONLY, options) == Leaf("klama")


class TestModes:
    def test_default(self):
        assert postprocess(MI_KLAMA) == "(mi klama)"

    def test_selmaho(self):
        assert postprocess(MI_KLAMA, "C") == "(KOhA:mi G:klama)"

    def test_terminators(self):
        assert postprocess(MI_KLAMA, "T") == "(mi [klama VAU])"

    def test_spaces(self):
        assert postprocess(MI_KLAMA, "S") == "([mi _] klama)"

    def test_node_labels(self):
        assert postprocess(MI_KLAMA, "N") == "(BRIDI SUMTI:mi SELBRI:klama)"

    def test_raw_keeps_every_label(self):
        result = postprocess(MI_KLAMA, "RJ")
        assert isinstance(result, Labeled)
        assert result.name == "text"
        assert "VAU" not in postprocess(MI_KLAMA, "R", format_type="json")

    def test_raw_morphology_is_identity_without_spaces_and_terminators(self):
        tree = ["sumti", ["KOhA", [["m", "m"], ["i", "i"]]]]
        assert postprocess(tree, "RMJ") == from_json(tree)

    def test_legacy_code_matches_letters(self):
        assert postprocess(MI_KLAMA, 2) == postprocess(MI_KLAMA, "T")
        assert postprocess(MI_KLAMA, 7) == postprocess(MI_KLAMA, "CN")

    def test_configured_default_mode(self, monkeypatch):
        monkeypatch.setenv("CAMXES_DEFAULT_MODE", "C")
        reset_config()
        assert postprocess(MI_KLAMA) == "(KOhA:mi G:klama)"


class TestInputs:
    def test_json_string_input(self):
        assert postprocess(json.dumps(MI_KLAMA)) == postprocess(MI_KLAMA)

    def test_node_input(self):
        assert postprocess(from_json(MI_KLAMA)) == "(mi klama)"

    def test_load_tree(self):
        assert load_tree('["UI", "ui"]') == Labeled("UI", [Leaf("ui")])

    def test_malformed_token_does_not_abort(self):
        tree = ["sentence", ["KOhA", "mi"], ["PA", 5], ["gismu", "klama"]]
        assert postprocess(tree) == "(mi 5 klama)"


class TestOutputs:
    def test_json_format_type(self):
        assert postprocess(MI_KLAMA, "", format_type="json") == '["mi","klama"]'

    def test_explicit_format_beats_json_letter(self):
        assert postprocess(MI_KLAMA, "J", format_type="text") == "(mi klama)"

    def test_marking_format(self):
        assert postprocess(MI_KLAMA, format_type="marking") == "{[mi] <klama>}"

    def test_deleted_tree(self):
        tree = [["spaces", " "], ["KU"]]
        assert postprocess(tree) == "()"
        assert postprocess(tree, "J") == Unlabeled([])
        assert postprocess_tree(tree) is None

    def test_postprocess_tree(self):
        assert postprocess_tree(MI_KLAMA, "C!") == Unlabeled([
            Labeled("KOhA", [Leaf("mi")]),
            Labeled("G", [Leaf("klama")]),
        ])

    def test_alias(self):
        assert postprocessing is postprocess


class TestErrors:
    @pytest.mark.parametrize("bad", [42, None, {"text": []}, Leaf("klama"), 3.5])
    def test_invalid_input_type(self, bad):
        with pytest.raises(InvalidInputError, match="got"):
            postprocess(bad)

    def test_invalid_json_text(self):
        with pytest.raises(InvalidInputError, match="not valid JSON"):
            postprocess("[text,")

    def test_json_text_not_an_array(self):
        with pytest.raises(InvalidInputError):
            postprocess('"klama"')

    def test_invalid_mode_letter(self):
        with pytest.raises(InvalidOptionError):
            postprocess(MI_KLAMA, "Q")

    def test_invalid_legacy_code(self):
        with pytest.raises(InvalidOptionError):
            postprocess(MI_KLAMA, 32)

    def test_unknown_format(self):
        with pytest.raises(InvalidOptionError, match="marking"):
            postprocess(MI_KLAMA, format_type="yaml")

    def test_errors_are_structured(self):
        with pytest.raises(PostprocError) as exc:
            postprocess(42)
        assert exc.value.code == "invalid_input"
        assert str(exc.value).startswith("[invalid_input] ")

    def test_pathological_depth(self):
        tree = "x"
        for _ in range(450):
            tree = ["n", tree]
        with pytest.raises(DepthLimitError):
            postprocess(tree)
