"""Unit tests for importing glyphs into a Fontgarden."""

import copy

import pytest
from ufoLib2 import Font
from ufoLib2.objects import Component, Glyph

from fontgarden.config import CyclePolicy
from fontgarden.core.importer import extract_glyph_data, import_glyphs, route_glyphs
from fontgarden.domain import Color, Fontgarden, GlyphRecord, OpenTypeCategory
from fontgarden.exceptions import ComponentCycleError, LoadError, LoadErrorKind


class TestExtractGlyphData:
    """Tests for extract_glyph_data."""

    def test_metadata_tables(self, light_wide) -> None:
        """Test production names, categories and export exclusion."""
        glyph_data = extract_glyph_data(light_wide, ["Aacute", "acute", "arrowleft", "S"])
        assert glyph_data["Aacute"] == GlyphRecord(
            postscript_name="uni00C1",
            codepoints=[0xC1],
            opentype_category=OpenTypeCategory.BASE,
        )
        assert glyph_data["acute"].opentype_category is OpenTypeCategory.MARK
        assert glyph_data["arrowleft"].export is False
        assert glyph_data["S"] == GlyphRecord(codepoints=[0x53])

    def test_glyph_only_in_other_layer(self, light_wide) -> None:
        """Test glyphs missing from the default layer get no code points."""
        light_wide.layers["background"].insertGlyph(Glyph(name="sketch", unicodes=[0xE000]))
        assert extract_glyph_data(light_wide, ["sketch"])["sketch"] == GlyphRecord()

    def test_unknown_category(self, light_wide) -> None:
        """Test unknown category text in the font lib."""
        light_wide.lib["public.openTypeCategories"]["S"] = "letter"
        with pytest.raises(LoadError) as info:
            extract_glyph_data(light_wide, ["S"])
        assert info.value.kind is LoadErrorKind.OPENTYPE_CATEGORY
        assert info.value.context == {"glyph_name": "S", "raw": "letter"}

    def test_malformed_table(self, light_wide) -> None:
        """Test lib tables of the wrong type."""
        light_wide.lib["public.postscriptNames"] = ["not", "a", "dict"]
        with pytest.raises(LoadError) as info:
            extract_glyph_data(light_wide, ["S"])
        assert info.value.kind is LoadErrorKind.GLYPH_DATA


class TestRouteGlyphs:
    """Tests for route_glyphs."""

    def test_new_glyphs_go_to_target(self) -> None:
        """Test routing into an empty Fontgarden."""
        assert route_glyphs(Fontgarden(), {"A", "B"}, "Latin") == {"Latin": {"A", "B"}}

    def test_existing_glyphs_stay_in_their_set(self) -> None:
        """Test that a glyph owned by a set is not moved by a new target."""
        fontgarden = Fontgarden()
        fontgarden.get_or_create_set("Latin").glyph_data["A"] = GlyphRecord()
        routing = route_glyphs(fontgarden, {"A", "comma"}, "Punctuation")
        assert routing == {"Latin": {"A"}, "Punctuation": {"comma"}}

    def test_no_empty_entries(self) -> None:
        """Test that sets without routed glyphs are left out."""
        fontgarden = Fontgarden()
        fontgarden.get_or_create_set("Latin").glyph_data["A"] = GlyphRecord()
        fontgarden.get_or_create_set("Arrows")
        assert route_glyphs(fontgarden, {"A"}, "default") == {"Latin": {"A"}}


class TestImportGlyphs:
    """Tests for import_glyphs."""

    def test_composite_pulls_in_components(self, light_wide) -> None:
        """Test importing a composite imports what it references."""
        fontgarden = Fontgarden()
        routing = import_glyphs(fontgarden, light_wide, ["Aacute"], "Latin", "LightWide")
        assert routing == {"Latin": {"Aacute", "A", "acute"}}
        source = fontgarden.sets["Latin"].sources["LightWide"]
        assert set(source.default_layer().glyphs) == {"Aacute", "A", "acute"}

    def test_layers(self, light_wide) -> None:
        """Test the default layer maps onto the source's default layer."""
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["A", "S"], "Latin", "LightWide")
        source = fontgarden.sets["Latin"].sources["LightWide"]
        assert source.default_layer_name == "foreground"
        assert set(source.layers) == {"foreground", "background"}
        assert not source.layers["background"].default
        assert set(source.layers["background"].glyphs) == {"A", "S"}

    def test_layers_without_routed_glyphs_are_not_created(self, light_wide) -> None:
        """Test that importing comma does not create an empty background layer."""
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["comma"], "Punctuation", "LightWide")
        assert set(fontgarden.sets["Punctuation"].sources["LightWide"].layers) == {"foreground"}

    def test_glyphs_are_copied(self, light_wide) -> None:
        """Test the repository does not share glyph objects with the font."""
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["A"], "Latin", "LightWide")
        stored = fontgarden.sets["Latin"].sources["LightWide"].default_layer().glyphs["A"]
        assert stored is not light_wide["A"]
        assert light_wide["A"].markColor == "1,0,0,1"

    def test_color_marks_move_out_of_glyph_lib(self, light_wide) -> None:
        """Test mark colors become color annotations."""
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["A", "S"], "Latin", "LightWide")
        source = fontgarden.sets["Latin"].sources["LightWide"]
        layer = source.default_layer()
        assert layer.color_marks == {"A": Color(1, 0, 0, 1), "S": Color(0, 0.5, 1, 1)}
        assert layer.glyphs["A"].markColor is None
        assert source.layers["background"].color_marks == {"S": Color(0, 1, 0, 1)}

    def test_color_marks_canonicalized(self, light_wide) -> None:
        """Test imported colors are rounded to their string precision."""
        light_wide["A"].markColor = "0.12345,0,0,1"
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["A"], "Latin", "LightWide")
        layer = fontgarden.sets["Latin"].sources["LightWide"].default_layer()
        assert layer.color_marks["A"] == Color(0.123, 0, 0, 1)

    def test_invalid_color_mark(self, light_wide) -> None:
        """Test an unparsable mark color."""
        light_wide["A"].markColor = "red"
        with pytest.raises(LoadError) as info:
            import_glyphs(Fontgarden(), light_wide, ["A"], "Latin", "LightWide")
        assert info.value.kind is LoadErrorKind.COLOR_MARKS
        assert info.value.path == (("layer", "foreground"),)

    def test_failed_import_changes_nothing(self, light_wide) -> None:
        """Test a bad color in a later layer leaves the repository untouched."""
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["comma"], "Punctuation", "LightWide")
        before = copy.deepcopy(fontgarden)
        light_wide.layers["background"]["S"].markColor = "2,0,0,1"
        with pytest.raises(LoadError) as info:
            import_glyphs(fontgarden, light_wide, ["A", "S"], "Latin", "LightWide")
        assert info.value.path == (("layer", "background"),)
        assert fontgarden == before

    def test_routing_is_intentional_not_an_error(self, light_wide) -> None:
        """Test a glyph already in Latin stays there when Punctuation is requested."""
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["A"], "Latin", "LightWide")
        routing = import_glyphs(fontgarden, light_wide, ["A", "comma"], "Punctuation", "LightWide")
        assert routing == {"Latin": {"A"}, "Punctuation": {"comma"}}
        assert set(fontgarden.sets["Punctuation"].glyph_data) == {"comma"}
        assert "A" not in fontgarden.sets["Punctuation"].sources["LightWide"].glyph_names()

    def test_global_uniqueness(self, light_wide, light_condensed) -> None:
        """Test that no glyph ends up in two sets across several imports."""
        fontgarden = Fontgarden()
        for document in (light_wide, light_condensed):
            name = document.info.styleName
            import_glyphs(fontgarden, document, ["A", "S"], "Latin", name)
            import_glyphs(fontgarden, document, ["quotedblbase"], "Punctuation", name)
            import_glyphs(fontgarden, document, ["Aacute"], "Accents", name)
        seen: set[str] = set()
        for _, set_ in fontgarden.iter_sets():
            assert not seen & set_.coverage()
            seen |= set_.coverage()
        assert fontgarden.sets["Accents"].coverage() == {"Aacute", "acute"}

    def test_idempotent(self, light_wide) -> None:
        """Test importing the same glyphs twice changes nothing."""
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["Aacute", "S"], "Latin", "LightWide")
        before = copy.deepcopy(fontgarden)
        import_glyphs(fontgarden, light_wide, ["Aacute", "S"], "Latin", "LightWide")
        assert fontgarden == before

    def test_two_sources_share_metadata(self, make_document) -> None:
        """Test importing A from two fonts into different sources."""
        first = make_document("Light", width=300)
        second = make_document("Bold", width=900)
        second["A"].unicodes = [0x41, 0x391]

        fontgarden = Fontgarden()
        import_glyphs(fontgarden, first, ["A"], "Latin", "Light")
        import_glyphs(fontgarden, second, ["A"], "Latin", "Bold")

        latin = fontgarden.sets["Latin"]
        assert set(latin.sources) == {"Light", "Bold"}
        for source_name, width in (("Light", 300), ("Bold", 900)):
            default_layer = latin.sources[source_name].default_layer()
            assert set(default_layer.glyphs) == {"A"}
            assert default_layer.glyphs["A"].width == width
        assert latin.glyph_data == {
            "A": GlyphRecord(codepoints=[0x41, 0x391], opentype_category=OpenTypeCategory.BASE)
        }

    def test_reimport_replaces_glyph(self, light_wide) -> None:
        """Test reimporting overwrites drawings and clears removed marks."""
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["A"], "Latin", "LightWide")
        light_wide["A"].width = 640
        light_wide["A"].markColor = None
        import_glyphs(fontgarden, light_wide, ["A"], "Latin", "LightWide")
        layer = fontgarden.sets["Latin"].sources["LightWide"].default_layer()
        assert layer.glyphs["A"].width == 640
        assert layer.color_marks == {}

    def test_missing_names_are_dropped(self, light_wide) -> None:
        """Test that names absent from the font are skipped."""
        fontgarden = Fontgarden()
        routing = import_glyphs(fontgarden, light_wide, ["A", "Zcaron"], "Latin", "LightWide")
        assert routing == {"Latin": {"A"}}
        assert "Zcaron" not in fontgarden.coverage()

    def test_glyph_only_in_background(self, light_wide) -> None:
        """Test glyphs present only in a non-default layer."""
        light_wide.layers["background"].insertGlyph(Glyph(name="sketch"))
        fontgarden = Fontgarden()
        import_glyphs(fontgarden, light_wide, ["sketch"], "Sketches", "LightWide")
        source = fontgarden.sets["Sketches"].sources["LightWide"]
        assert source.default_layer().is_empty()
        assert set(source.layers["background"].glyphs) == {"sketch"}

    def test_set_name_with_path_separator(self, light_wide) -> None:
        """Test a set name that would nest directories is rejected up front."""
        fontgarden = Fontgarden()
        with pytest.raises(LoadError) as info:
            import_glyphs(fontgarden, light_wide, ["A"], "Latin/Ext", "LightWide")
        assert info.value.kind is LoadErrorKind.INVALID_NAME
        assert info.value.context == {"raw": "Latin/Ext"}
        assert fontgarden == Fontgarden()

    @pytest.mark.parametrize(
        ("set_name", "source_name"),
        [("", "Bold"), ("Latin", "Bo\nld"), ("Latin", "Bold\\Italic")],
    )
    def test_invalid_names(self, light_wide, set_name: str, source_name: str) -> None:
        """Test set and source names are validated."""
        with pytest.raises(LoadError) as info:
            import_glyphs(Fontgarden(), light_wide, ["A"], set_name, source_name)
        assert info.value.kind is LoadErrorKind.INVALID_NAME

    def test_cycle_policy_error(self) -> None:
        """Test cyclic composites with the error policy."""
        font = Font()
        font.layers.defaultLayer.insertGlyph(Glyph(name="a", components=[Component("b")]))
        font.layers.defaultLayer.insertGlyph(Glyph(name="b", components=[Component("a")]))
        with pytest.raises(ComponentCycleError):
            import_glyphs(Fontgarden(), font, ["a"], "Latin", "Bold", CyclePolicy.ERROR)
