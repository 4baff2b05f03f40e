"""End-to-end tests of the auxiliary generators.

Messages, properties, discriminants, counting, variant tables,
iteration, ordinal lookup and is_<variant> predicates.
"""

from __future__ import annotations

import enum
import logging
from types import ModuleType

import pytest

from enumkit import InvalidAttributeSyntaxError, generate
from tests.helpers.loading import load

SHAPES = """\
import enum

@enumkit(serialize_all = "snake_case")
@discriminants(derive(enum.unique), doc = "Kinds of shape.")
@repr(int)
enum Shape:
    ## A point has no size.
    @enumkit(
        message = "Point",
        detailed_message = "A single point",
        props(corners = 0, label = "pt", round = false),
    )
    Point
    @enumkit(message = "Circle", props(corners = 0, round = true))
    @enumkit(serialize = "circle", serialize = "o")
    Circle(radius: float)
    @enumkit(props(corners = 4))
    RightAngle(float, float)
    @enumkit(disabled)
    Legacy
"""


@pytest.fixture(scope="module")
def shapes() -> ModuleType:
    return load(SHAPES)


class TestMessages:
    """Test message, detailed message, documentation and serializations."""

    def test_messages(self, shapes: ModuleType) -> None:
        """Declared messages are returned; missing ones are None."""
        Shape = shapes.Shape

        assert Shape.Point.get_message() == "Point"
        assert Shape.Point.get_detailed_message() == "A single point"
        assert Shape.Circle(radius=1.0).get_detailed_message() is None
        assert Shape.Legacy.get_message() is None

    def test_documentation(self, shapes: ModuleType) -> None:
        """Doc comments are exposed at runtime and as the class docstring."""
        Shape = shapes.Shape

        assert Shape.Point.get_documentation() == "A point has no size."
        assert type(Shape.Point).__doc__ == "A point has no size."
        assert Shape.Legacy.get_documentation() is None

    def test_serializations(self, shapes: ModuleType) -> None:
        """Every string parsing to the variant, in declaration order."""
        Shape = shapes.Shape

        assert Shape.Circle(radius=1.0).get_serializations() == ("circle", "o")
        assert Shape.RightAngle(1.0, 2.0).get_serializations() == ("right_angle",)


class TestProperties:
    """Test typed property lookup."""

    def test_get_property(self, shapes: ModuleType) -> None:
        """Untyped lookup returns the literal as declared."""
        Shape = shapes.Shape

        assert Shape.Point.get_property("label") == "pt"
        assert Shape.Point.get_property("missing") is None

    def test_typed_getters(self, shapes: ModuleType) -> None:
        """Typed getters return None when the kind does not match."""
        point = shapes.Shape.Point

        assert point.get_str("label") == "pt"
        assert point.get_str("corners") is None
        assert point.get_int("corners") == 0
        assert point.get_int("label") is None
        assert point.get_bool("round") is False

    def test_bool_is_not_int(self, shapes: ModuleType) -> None:
        """Booleans are a distinct property kind."""
        circle = shapes.Shape.Circle(radius=1.0)

        assert circle.get_int("round") is None
        assert circle.get_bool("round") is True
        assert circle.get_bool("corners") is None

    def test_variant_without_props(self, shapes: ModuleType) -> None:
        """Variants without props answer None to every key."""
        assert shapes.Shape.Legacy.get_property("corners") is None


class TestDiscriminants:
    """Test the payload-free companion enum."""

    def test_members(self, shapes: ModuleType) -> None:
        """One member per variant, valued by ordinal."""
        ShapeDiscriminants = shapes.ShapeDiscriminants

        assert issubclass(ShapeDiscriminants, enum.Enum)
        assert [m.name for m in ShapeDiscriminants] == ["Point", "Circle", "RightAngle", "Legacy"]
        assert [m.value for m in ShapeDiscriminants] == [0, 1, 2, 3]

    def test_repr_type_mixed_in(self, shapes: ModuleType) -> None:
        """@repr(int) makes the members ints."""
        assert shapes.ShapeDiscriminants.Circle == 1
        assert isinstance(shapes.ShapeDiscriminants.Circle, int)

    def test_discriminant_accessor(self, shapes: ModuleType) -> None:
        """discriminant() maps any variant value to its member."""
        Shape = shapes.Shape

        assert Shape.Circle(radius=2.0).discriminant() is shapes.ShapeDiscriminants.Circle
        assert Shape.Point.discriminant() is shapes.ShapeDiscriminants.Point

    def test_doc_and_passthrough(self, shapes: ModuleType) -> None:
        """doc becomes the docstring; derive decorators are applied."""
        assert shapes.ShapeDiscriminants.__doc__ == "Kinds of shape."
        assert "ShapeDiscriminants" in shapes.__all__

    def test_custom_name_private(self) -> None:
        """name(...) renames the enum; vis(private) leaves it out of __all__."""
        module = load(
            '@discriminants(name(Kind), vis(private), doc = "k", extra)\nenum A:\n    X\n    Y\n'
        )

        assert module.A.X.discriminant() is module.Kind.X
        assert module.__all__ == ["A"]
        assert module.Kind.__enumkit_passthrough__ == ("extra",)

    def test_name_collision(self) -> None:
        """A discriminant enum cannot take another generated class's name."""
        with pytest.raises(InvalidAttributeSyntaxError, match="'B'"):
            generate("@discriminants(name(B))\nenum A:\n    X\nenum B:\n    Y\n")


class TestTables:
    """Test COUNT, VARIANTS and VARIANT_VALUES."""

    def test_count_includes_disabled(self, shapes: ModuleType) -> None:
        """COUNT is the number of declared variants."""
        assert shapes.Shape.COUNT == 4

    def test_variant_names(self, shapes: ModuleType) -> None:
        """VARIANTS lists renderings in declaration order."""
        assert shapes.Shape.VARIANTS == ("point", "circle", "right_angle", "legacy")

    def test_no_variant_array_for_data_enums(self, shapes: ModuleType) -> None:
        """VARIANT_VALUES exists only for field-less enums."""
        assert not hasattr(shapes.Shape, "VARIANT_VALUES")

    def test_variant_array(self) -> None:
        """Field-less enums list every variant value."""
        Dir = load("enum Dir:\n    Up\n    Down\n").Dir

        assert Dir.VARIANT_VALUES == (Dir.Up, Dir.Down)
        assert Dir.COUNT == len(Dir.VARIANT_VALUES)

    def test_single_variant_tables(self) -> None:
        """One-element tables are still tuples."""
        Only = load("enum Only:\n    One\n").Only

        assert Only.VARIANTS == ("One",)
        assert Only.VARIANT_VALUES == (Only.One,)

    def test_empty_enum(self) -> None:
        """An enum without variants still generates."""
        Never = load("enum Never:\n").Never

        assert Never.COUNT == 0
        assert Never.VARIANTS == ()
        assert list(Never.iter()) == []
        assert Never.from_repr(0) is None


class TestIterAndFromRepr:
    """Test iteration and ordinal lookup."""

    def test_iter_skips_disabled(self, shapes: ModuleType) -> None:
        """iter() yields enabled variants with zero-filled data."""
        Shape = shapes.Shape

        assert list(Shape.iter()) == [
            Shape.Point,
            Shape.Circle(radius=0.0),
            Shape.RightAngle(0.0, 0.0),
        ]

    def test_from_repr(self, shapes: ModuleType) -> None:
        """from_repr() maps an ordinal back to its variant."""
        Shape = shapes.Shape

        assert Shape.from_repr(0) is Shape.Point
        assert Shape.from_repr(2) == Shape.RightAngle(0.0, 0.0)
        assert Shape.from_repr(4) is None
        assert Shape.from_repr(-1) is None

    def test_ordinals_round_trip(self, shapes: ModuleType) -> None:
        """from_repr(v.ordinal) == v for every iterated variant."""
        Shape = shapes.Shape

        for variant in Shape.iter():
            assert Shape.from_repr(variant.ordinal) == variant


class TestIsVariant:
    """Test is_<variant> predicates."""

    def test_predicates(self, shapes: ModuleType) -> None:
        """One predicate per variant, named in snake_case."""
        Shape = shapes.Shape

        assert Shape.Point.is_point()
        assert not Shape.Point.is_circle()
        assert Shape.RightAngle(1.0, 1.0).is_right_angle()

    def test_duplicate_predicate_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        """Variants mapping to the same predicate keep only the first."""
        with caplog.at_level(logging.WARNING, logger="enumkit.codegen.auxiliary"):
            Pair = load("enum Pair:\n    AB\n    Ab\n").Pair

        assert Pair.AB.is_ab()
        assert not Pair.Ab.is_ab()
        assert "is_ab() already generated" in caplog.text


class TestGeneratorSelection:
    """Test that @derive restricts what is generated."""

    def test_only_selected_members(self) -> None:
        """Unselected generators leave no members behind."""
        module = load("@derive(count, iter)\nenum Dir:\n    Up\n    Down\n")
        Dir = module.Dir

        assert Dir.COUNT == 2
        assert list(Dir.iter()) == [Dir.Up, Dir.Down]
        for missing in ("from_str", "VARIANTS", "get_message", "discriminant", "is_up"):
            assert not hasattr(Dir, missing)
        assert not hasattr(module, "DirDiscriminants")
        assert module.__all__ == ["Dir"]

    def test_display_not_selected(self) -> None:
        """Without display, str() falls back to the dataclass repr."""
        Dir = load("@derive(from_str)\nenum Dir:\n    Up\n").Dir

        assert Dir.from_str("Up") is Dir.Up
        assert str(Dir.Up) == "Dir.Up()"
