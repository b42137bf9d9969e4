import pytest

from force_diagram.errors import (
    PaletteError,
    PaletteNotFoundError,
    TooManyColorsError,
    UnknownPaletteIdentifierError,
    UnsupportedSourceError,
    UnsupportedTypeError,
)
from force_diagram.palettes import (
    BLACK,
    PALETTE_SETS,
    Color,
    PaletteFamily,
    PaletteSource,
    palette_names,
    parse_family,
    parse_source,
    resolve_palette,
)


B, CB = PaletteSource.BUILTIN, PaletteSource.COLORBREWER
Q, S, D = PaletteFamily.QUALITATIVE, PaletteFamily.SEQUENTIAL, PaletteFamily.DIVERGING


class TestColor:

    def test_hex_round_trip(self):
        c = Color.from_hex("#e41a1c")
        assert c == Color(0xE4, 0x1A, 0x1C)
        assert c.hex == "#e41a1c"

    def test_float_conversion(self):
        assert Color.from_float((1.0, 0.0, 0.5)) == Color(255, 0, 128)
        assert Color(255, 0, 0).as_float() == (1.0, 0.0, 0.0)


class TestBuiltin:

    def test_default_palette_has_nine_colors_without_black(self):
        colors = resolve_palette(B, Q, 0, 9)
        assert len(colors) == 9
        assert BLACK not in colors
        assert len(set(colors)) == 9

    def test_truncates_to_count(self):
        full = resolve_palette(B, Q, 0, 9)
        assert resolve_palette(B, Q, 0, 4) == full[:4]

    def test_too_many_colors(self):
        with pytest.raises(TooManyColorsError, match="10"):
            resolve_palette(B, Q, 0, 10)

    @pytest.mark.parametrize("family", list(PaletteFamily))
    def test_every_entry_resolves_at_full_size(self, family):
        for index, (_, codes) in enumerate(PALETTE_SETS[B].tables[family]):
            colors = resolve_palette(B, family, index, len(codes))
            assert [c.hex for c in colors] == list(codes)


class TestColorBrewer:

    @pytest.mark.parametrize("family", [S, D])
    @pytest.mark.parametrize("count", [1, 2, 7, 25])
    def test_sampled_families_give_exact_count(self, family, count):
        assert len(resolve_palette(CB, family, 0, count)) == count

    def test_qualitative_cycles_past_list(self):
        # Set1 lists nine colors
        index = palette_names(CB, Q).index("Set1")
        colors = resolve_palette(CB, Q, index, 12)
        assert len(colors) == 12
        assert colors[9:] == colors[:3]
        assert colors[0] == Color.from_hex("#e41a1c")

    def test_sequential_runs_light_to_dark(self):
        index = palette_names(CB, S).index("Blues")
        colors = resolve_palette(CB, S, index, 5)
        assert sum(colors[0]) > sum(colors[-1])


class TestLookupErrors:

    @pytest.mark.parametrize("source", list(PaletteSource))
    def test_index_past_end(self, source):
        n = PALETTE_SETS[source].size(Q)
        with pytest.raises(PaletteNotFoundError):
            resolve_palette(source, Q, n, 3)

    def test_negative_index_does_not_wrap(self):
        with pytest.raises(PaletteNotFoundError):
            resolve_palette(B, Q, -1, 3)

    def test_zero_colors(self):
        with pytest.raises(PaletteError):
            resolve_palette(B, Q, 0, 0)

    def test_unsupported_source_and_type(self):
        with pytest.raises(UnsupportedSourceError):
            resolve_palette("crayola", Q, 0, 3)
        with pytest.raises(UnsupportedTypeError):
            resolve_palette(B, "pastel", 0, 3)

    def test_parse_identifiers(self):
        assert parse_source("ColorBrewer") is CB
        assert parse_family(" Diverging ") is D
        with pytest.raises(UnknownPaletteIdentifierError):
            parse_source("crayola")
        with pytest.raises(UnknownPaletteIdentifierError):
            parse_family("rainbow")

    def test_legacy_source_name(self):
        assert parse_source("gephi") is B
        assert parse_source(" Gephi ") is B

    def test_short_palette_is_an_error(self, monkeypatch):
        class Short:
            def size(self, family):
                return 1

            def colors(self, family, index, count):
                return (Color(1, 2, 3),)

        monkeypatch.setitem(PALETTE_SETS, B, Short())
        with pytest.raises(PaletteError, match="gave 1 colors, expected 3"):
            resolve_palette(B, Q, 0, 3)
