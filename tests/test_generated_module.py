"""End-to-end tests of generated modules: parsing and rendering.

Each schema is generated, executed as a fresh module and exercised
through the classes it defines.
"""

from __future__ import annotations

import dataclasses
from types import ModuleType

import pytest
from hypothesis import given
from hypothesis import strategies as st

from enumkit.runtime import PhfMap, VariantBase, VariantDisabledError, VariantNotFoundError
from tests.helpers.loading import load
from tests.helpers.parse_errors import BareError, ColorError

COLORS = """\
## Colors of the demo palette.
@enumkit(ascii_case_insensitive)
enum Color:
    @enumkit(serialize = "red", to_string = "RED")
    Red
    @enumkit(serialize = "b", serialize = "blue")
    Blue(hue: int)
    @enumkit(serialize = "black", serialize = "blk")
    Black
    @enumkit(disabled)
    Gray
    @enumkit(default)
    Green(str)
"""


@pytest.fixture(scope="module")
def colors() -> ModuleType:
    return load(COLORS)


@pytest.fixture(scope="module")
def planet() -> ModuleType:
    return load(TestPerfectHash.SCHEMA)


# ============================================================================
# SHAPE
# ============================================================================


class TestVariantShape:
    """Test the classes backing each variant."""

    def test_unit_variant_is_singleton(self, colors: ModuleType) -> None:
        """Unit variants are instances of the enum."""
        Color = colors.Color

        assert isinstance(Color.Red, Color)
        assert isinstance(Color.Red, VariantBase)
        assert Color.from_str("red") is Color.Red

    def test_data_variant_is_class(self, colors: ModuleType) -> None:
        """Data variants are constructed like dataclasses."""
        Color = colors.Color
        blue = Color.Blue(hue=3)

        assert blue.hue == 3
        assert isinstance(blue, Color)
        assert blue == Color.Blue(3)
        assert blue != Color.Blue(hue=4)

    def test_repr_uses_qualified_name(self, colors: ModuleType) -> None:
        """Reprs read like the source: Color.Blue(hue=3)."""
        Color = colors.Color

        assert repr(Color.Red) == "Color.Red()"
        assert repr(Color.Blue(hue=3)) == "Color.Blue(hue=3)"
        assert repr(Color.Green("lime")) == "Color.Green(_0='lime')"

    def test_frozen(self, colors: ModuleType) -> None:
        """Variants are immutable."""
        with pytest.raises(dataclasses.FrozenInstanceError):
            colors.Color.Blue(hue=3).hue = 4

    def test_hashable(self, colors: ModuleType) -> None:
        """Variants can be set members and dict keys."""
        Color = colors.Color

        assert {Color.Red, Color.Red, Color.Blue(hue=1), Color.Blue(hue=1)} == {
            Color.Red,
            Color.Blue(hue=1),
        }

    def test_ordinal_and_name(self, colors: ModuleType) -> None:
        """Every variant knows its declaration index and identifier."""
        Color = colors.Color

        assert (Color.Red.ordinal, Color.Red.variant_name) == (0, "Red")
        assert (Color.Green("x").ordinal, Color.Green("x").variant_name) == (4, "Green")

    def test_docs(self, colors: ModuleType) -> None:
        """Enum doc comments become the class docstring."""
        assert colors.Color.__doc__ == "Colors of the demo palette."

    def test_structural_matching(self, colors: ModuleType) -> None:
        """Variants work with match statements."""
        Color = colors.Color

        def describe(color: object) -> str:
            match color:
                case Color.Red:
                    return "red"
                case Color.Blue(hue):
                    return f"blue {hue}"
                case _:
                    return "other"

        assert [describe(c) for c in (Color.Red, Color.Blue(hue=7), Color.Black)] == [
            "red",
            "blue 7",
            "other",
        ]


# ============================================================================
# PARSING
# ============================================================================


class TestFromStr:
    """Test generated from_str."""

    def test_aliases_and_to_string(self, colors: ModuleType) -> None:
        """Every alias and the to_string value parse to the variant."""
        Color = colors.Color

        assert Color.from_str("red") is Color.Red
        assert Color.from_str("RED") is Color.Red
        assert Color.from_str("blk") is Color.Black

    def test_ascii_case_insensitive(self, colors: ModuleType) -> None:
        """ASCII case is ignored when the enum asks for it."""
        Color = colors.Color

        assert Color.from_str("BLACK") is Color.Black
        assert Color.from_str("BLK") is Color.Black
        assert Color.from_str("Blue") == Color.Blue(hue=0)

    def test_data_variant_zero_filled(self, colors: ModuleType) -> None:
        """Fields of a parsed data variant get their type's zero value."""
        assert colors.Color.from_str("b") == colors.Color.Blue(hue=0)

    def test_catch_all(self, colors: ModuleType) -> None:
        """Unmatched input becomes the catch-all variant."""
        Color = colors.Color

        assert Color.from_str("lime") == Color.Green("lime")
        assert Color.from_str("") == Color.Green("")

    def test_disabled_not_parsed(self, colors: ModuleType) -> None:
        """A disabled variant's name falls through to the catch-all."""
        Color = colors.Color

        assert Color.from_str("Gray") == Color.Green("Gray")

    def test_not_found(self) -> None:
        """Without a catch-all, unmatched input raises VariantNotFoundError."""
        module = load('@enumkit(serialize_all = "snake_case")\nenum Direction:\n    NorthEast\n')
        Direction = module.Direction

        assert Direction.from_str("north_east") is Direction.NorthEast
        with pytest.raises(VariantNotFoundError) as exc_info:
            Direction.from_str("NorthEast")
        assert exc_info.value.value == "NorthEast"

    def test_case_sensitive_by_default(self) -> None:
        """Without ascii_case_insensitive, case matters."""
        Direction = load("enum Direction:\n    Up\n").Direction

        with pytest.raises(ValueError, match="Matching variant not found"):
            Direction.from_str("up")

    def test_unicode_case_not_folded(self) -> None:
        """Only ASCII letters fold."""
        Word = load(
            '@enumkit(ascii_case_insensitive)\nenum Word:\n    @enumkit(serialize = "é")\n    E\n'
        ).Word

        assert Word.from_str("é") is Word.E
        with pytest.raises(VariantNotFoundError):
            Word.from_str("É")

    def test_default_with(self) -> None:
        """default_with converts the raw input before building the catch-all."""
        Level = load(
            'enum Level:\n    Low\n    @enumkit(default_with = "str.upper")\n    Other(str)\n'
        ).Level

        assert Level.from_str("meh") == Level.Other("MEH")
        assert Level.from_str("Low") is Level.Low

    def test_field_default_with(self) -> None:
        """A field factory replaces the type's zero value."""
        Box = load(
            'enum Box:\n    Items(@enumkit(default_with = "tuple") items: list[int])\n'
        ).Box

        assert Box.from_str("Items") == Box.Items(items=())


class TestCustomErrors:
    """Test parse_err_type and parse_err_fn."""

    SCHEMA = """\
from tests.helpers.parse_errors import BareError, ColorError, make_bare_error, make_error

@enumkit(parse_err_type = ColorError)
enum ByType:
    X
@enumkit(parse_err_fn = make_error)
enum ByFn:
    X
@enumkit(parse_err_type = BareError)
enum ByBareType:
    X
@enumkit(parse_err_fn = make_bare_error)
enum ByBareFn:
    X
"""

    def test_error_type_with_value(self) -> None:
        """The error type receives the rejected input."""
        module = load(self.SCHEMA)

        with pytest.raises(ColorError) as exc_info:
            module.ByType.from_str("purple")
        assert exc_info.value.value == "purple"

    def test_error_function_with_value(self) -> None:
        """The error function receives the rejected input."""
        module = load(self.SCHEMA)

        with pytest.raises(ValueError, match="bad input: purple"):
            module.ByFn.from_str("purple")

    def test_error_without_arguments(self) -> None:
        """Factories taking no arguments are called bare."""
        module = load(self.SCHEMA)

        with pytest.raises(BareError):
            module.ByBareType.from_str("purple")
        with pytest.raises(KeyError):
            module.ByBareFn.from_str("purple")

    def test_catch_all_wins_over_custom_error(self) -> None:
        """A catch-all variant means lookup never fails."""
        module = load(
            "from tests.helpers.parse_errors import ColorError\n"
            "@enumkit(parse_err_type = ColorError)\n"
            "enum Tag:\n    @enumkit(default)\n    Any(str)\n"
        )

        assert module.Tag.from_str("x") == module.Tag.Any("x")


# ============================================================================
# RENDERING
# ============================================================================


class TestDisplay:
    """Test generated __str__."""

    def test_rendering_priority(self, colors: ModuleType) -> None:
        """to_string, else the first alias, else the derived name."""
        Color = colors.Color

        assert str(Color.Red) == "RED"
        assert str(Color.Blue(hue=3)) == "b"
        assert str(Color.Black) == "black"

    def test_catch_all_renders_field(self, colors: ModuleType) -> None:
        """The catch-all renders the text it was built from."""
        assert str(colors.Color.Green("lime")) == "lime"

    def test_disabled_raises(self, colors: ModuleType) -> None:
        """Rendering a disabled variant is an error."""
        with pytest.raises(VariantDisabledError) as exc_info:
            str(colors.Color.Gray)

        assert str(exc_info.value) == "Variant Color.Gray is disabled and has no string form"

    def test_transparent(self) -> None:
        """Transparent variants render their only field."""
        Wrapper = load(
            "enum Wrapper:\n    @enumkit(transparent)\n    Inner(int)\n    Plain\n"
        ).Wrapper

        assert str(Wrapper.Inner(5)) == "5"
        assert str(Wrapper.Plain) == "Plain"
        assert Wrapper.from_str("Inner") == Wrapper.Inner(0)

    def test_serialize_all(self) -> None:
        """Derived names follow serialize_all, prefix and suffix."""
        Status = load(
            '@enumkit(serialize_all = "SCREAMING-KEBAB-CASE", prefix = "x-")\n'
            "enum Status:\n    NotFound\n    HTTPError\n"
        ).Status

        assert [str(Status.NotFound), str(Status.HTTPError)] == ["x-NOT-FOUND", "x-HTTP-ERROR"]
        assert Status.from_str("x-HTTP-ERROR") is Status.HTTPError

    def test_round_trip(self, colors: ModuleType) -> None:
        """Every enabled variant parses back from its rendering."""
        Color = colors.Color

        for variant in Color.iter():
            assert Color.from_str(str(variant)) == variant


class TestConstIntoStr:
    """Test renderings emitted as a constant table."""

    SCHEMA = """\
@enumkit(const_into_str, serialize_all = "kebab-case")
enum Mode:
    ReadOnly
    @enumkit(to_string = "rw")
    ReadWrite
    @enumkit(disabled)
    Legacy
    @enumkit(transparent)
    Custom(str)
"""

    def test_table(self) -> None:
        """STRS holds constant renderings by ordinal, None otherwise."""
        assert load(self.SCHEMA).Mode.STRS == ("read-only", "rw", None, None)

    def test_rendering(self) -> None:
        """__str__ reads the table; non-constant variants keep their own."""
        Mode = load(self.SCHEMA).Mode

        assert str(Mode.ReadOnly) == "read-only"
        assert str(Mode.ReadWrite) == "rw"
        assert str(Mode.Custom("any")) == "any"

    def test_disabled(self) -> None:
        """A disabled variant has no table entry and cannot render."""
        with pytest.raises(VariantDisabledError, match=r"Mode\.Legacy"):
            str(load(self.SCHEMA).Mode.Legacy)


# ============================================================================
# PERFECT HASH
# ============================================================================


class TestPerfectHash:
    """Test use_phf lookup in generated code."""

    SCHEMA = """\
@enumkit(use_phf)
enum Planet:
    @enumkit(serialize = "mercury", serialize = "hg")
    Mercury
    Venus(moons: int)
    @enumkit(default)
    Unknown(str)
"""

    def test_table_emitted(self) -> None:
        """The enum carries a PhfMap over every candidate."""
        Planet = load(self.SCHEMA).Planet

        assert isinstance(Planet._PHF, PhfMap)
        assert sorted(Planet._PHF.keys()) == ["Venus", "hg", "mercury"]

    def test_lookup(self) -> None:
        """Perfect hash lookup matches the linear semantics."""
        Planet = load(self.SCHEMA).Planet

        assert Planet.from_str("hg") is Planet.Mercury
        assert Planet.from_str("mercury") is Planet.Mercury
        assert Planet.from_str("Venus") == Planet.Venus(moons=0)
        assert Planet.from_str("pluto") == Planet.Unknown("pluto")
        assert Planet.from_str("MERCURY") == Planet.Unknown("MERCURY")

    @given(st.text(max_size=12))
    def test_unknown_input_never_raises(self, planet: ModuleType, text: str) -> None:
        """PROPERTY: with a catch-all, from_str is total."""
        Planet = planet.Planet

        assert isinstance(Planet.from_str(text), Planet)

    @pytest.mark.parametrize("text", ["\ud800", "\udfff", "hg\udc80"])
    def test_lone_surrogates(self, text: str) -> None:
        """Strings that are not valid UTF-8 are rejected like any other miss."""
        schema = '@enumkit(serialize = "earth")\n    Earth\n    Mars\n'
        hashed = load("@enumkit(use_phf)\nenum Planet:\n    " + schema).Planet
        linear = load("enum Planet:\n    " + schema).Planet

        with pytest.raises(VariantNotFoundError):
            hashed.from_str(text)
        with pytest.raises(VariantNotFoundError):
            linear.from_str(text)


class TestColorErrorsImported:
    """Test that schema imports are executed in the generated module."""

    def test_import_available(self) -> None:
        """Names imported by the schema exist in the generated module."""
        module = load("from tests.helpers.parse_errors import ColorError\nenum A:\n    X\n")

        assert module.ColorError is ColorError


# ============================================================================
# END TO END
# ============================================================================


class TestPaletteScenario:
    """Parse and render the mixed unit/data palette end to end."""

    SCHEMA = """\
enum Color:
    Red
    @enumkit(serialize = "b", to_string = "blue")
    Blue(hue: int)
    @enumkit(serialize = "y", serialize = "yellow")
    Yellow
    @enumkit(to_string = "purp")
    Purple
"""

    @pytest.fixture(scope="class")
    def palette(self) -> ModuleType:
        return load(self.SCHEMA)

    def test_rendering(self, palette: ModuleType) -> None:
        """to_string wins, then the first alias, then the derived name."""
        Color = palette.Color

        assert str(Color.Blue(hue=0)) == "blue"
        assert str(Color.Red) == "Red"
        assert str(Color.Yellow) == "y"
        assert str(Color.Purple) == "purp"

    def test_parsing(self, palette: ModuleType) -> None:
        """Aliases resolve; data variants are zero-filled."""
        Color = palette.Color

        assert Color.from_str("Red") is Color.Red
        assert Color.from_str("b") == Color.Blue(hue=0)
        assert Color.from_str("blue") == Color.Blue(hue=0)
        assert Color.from_str("y") is Color.Yellow
        assert Color.from_str("yellow") is Color.Yellow
        assert Color.from_str("purp") is Color.Purple

    def test_unmatched_rejected(self, palette: ModuleType) -> None:
        """Without a catch-all, unknown strings and replaced derived names fail."""
        Color = palette.Color

        for text in ("red", "Blue", "Purple", ""):
            with pytest.raises(VariantNotFoundError):
                Color.from_str(text)
