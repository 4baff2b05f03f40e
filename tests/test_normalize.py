"""Tests for the metadata normalizer.

The normalizer enforces option and flag consistency and resolves every
default before generators run.
"""

from __future__ import annotations

import logging

import pytest

from enumkit import normalize_schema, parse_schema
from enumkit.casing import CaseStyle
from enumkit.diagnostics import (
    ArityMismatchError,
    ConflictingVariantFlagsError,
    DiagnosticCode,
    DuplicateOptionError,
    DuplicatePropertyError,
    EnumKitError,
    InvalidAttributeSyntaxError,
)
from enumkit.enums import Generator, Visibility
from enumkit.model import EnumModel, normalize_enum


def model(source: str) -> EnumModel:
    return normalize_schema(parse_schema(source)).enums[0]


def failure[E: EnumKitError](source: str, error_type: type[E]) -> E:
    with pytest.raises(error_type) as exc_info:
        normalize_schema(parse_schema(source, origin="test.enums"))
    return exc_info.value


# ============================================================================
# DEFAULTS
# ============================================================================


class TestResolvedDefaults:
    """Test defaults filled in by the normalizer."""

    def test_derived_names(self) -> None:
        """serialize_all, prefix and suffix shape the derived name."""
        enum = model(
            '@enumkit(serialize_all = "snake_case", prefix = "c_", suffix = "!")\n'
            "enum Color:\n    DarkBlack\n"
        )

        assert enum.type.case_style is CaseStyle.SNAKE_CASE
        assert enum.variants[0].derived_name == "c_dark_black!"

    def test_identifier_kept_without_style(self) -> None:
        """Without serialize_all the identifier is used as is."""
        assert model("enum Color:\n    DarkBlack\n").variants[0].derived_name == "DarkBlack"

    def test_rendering_priority(self) -> None:
        """to_string wins over the first alias, which wins over the derived name."""
        enum = model(
            "enum Color:\n"
            '    @enumkit(serialize = "r", to_string = "RED")\n'
            "    Red\n"
            '    @enumkit(serialize = "b", serialize = "bl")\n'
            "    Blue\n"
            "    Green\n"
        )

        assert [v.rendering for v in enum.variants] == ["RED", "b", "Green"]
        assert [a.value for a in enum.variants[1].aliases] == ["b", "bl"]

    def test_case_insensitivity_inherited_and_overridden(self) -> None:
        """Variants inherit the enum's mode unless they override it."""
        enum = model(
            "@enumkit(ascii_case_insensitive)\n"
            "enum Color:\n"
            "    Red\n"
            "    @enumkit(ascii_case_insensitive = false)\n"
            "    Blue\n"
        )

        assert [v.ascii_case_insensitive for v in enum.variants] == [True, False]

    def test_discriminant_defaults(self) -> None:
        """The discriminant enum is named <Enum>Discriminants and public."""
        discriminants = model("enum Color:\n    Red\n").type.discriminants

        assert discriminants.name == "ColorDiscriminants"
        assert discriminants.visibility is Visibility.PUBLIC
        assert discriminants.derives == ()

    def test_discriminant_settings(self) -> None:
        """name, vis, derive and doc are resolved; the rest passes through."""
        discriminants = model(
            '@discriminants(name(Kind), vis(private), derive(enum.unique), doc = "Kinds.", '
            "extra = 1)\n"
            "enum Color:\n    Red\n"
        ).type.discriminants

        assert discriminants.name == "Kind"
        assert discriminants.visibility is Visibility.PRIVATE
        assert discriminants.derives == ("enum.unique",)
        assert discriminants.doc == "Kinds."
        assert discriminants.passthrough == (("extra", "extra = 1"),)

    def test_variant_details(self) -> None:
        """Messages, docs and props land on the VariantConfig."""
        enum = model(
            "enum Color:\n"
            "    ## Warm.\n"
            "    ## Very warm.\n"
            '    @enumkit(message = "Red!", detailed_message = "So red", '
            'props(weight = 3, hot = true))\n'
            "    Red\n"
        )
        red = enum.variants[0]

        assert red.message == "Red!"
        assert red.detailed_message == "So red"
        assert red.documentation == "Warm.\nVery warm."
        assert red.props == (("weight", 3), ("hot", True))
        assert red.get_property("hot") is True
        assert red.get_property("missing") is None

    def test_fields(self) -> None:
        """Field types keep their text and callable origin."""
        enum = model(
            "enum Shape:\n"
            '    Circle(radius: float, @enumkit(default_with = "make") tags: list[str])\n'
        )
        radius, tags = enum.variants[0].fields

        assert (radius.name, radius.factory) == ("radius", "float")
        assert (tags.type_text, tags.factory) == ("list[str]", "make")
        assert enum.variants[0].has_named_fields

    def test_catch_all(self) -> None:
        """default and default_with mark the catch-all variant."""
        enum = model(
            'enum Color:\n    Red\n    @enumkit(default_with = "str.upper")\n    Other(str)\n'
        )

        assert enum.catch_all is enum.variants[1]
        assert enum.variants[1].default_with == "str.upper"

    def test_enum_doc(self) -> None:
        """Enum doc comments are joined with newlines."""
        assert model("## Colors.\n## All of them.\nenum Color:\n    Red\n").type.doc == (
            "Colors.\nAll of them."
        )

    def test_normalize_enum_function(self) -> None:
        """normalize_enum() handles a single declaration."""
        source = "enum A:\n    X\n"
        enum = normalize_enum(parse_schema(source).enums[0], source=source)

        assert enum.name == "A"
        assert enum.is_fieldless


class TestGeneratorSelection:
    """Test @derive resolution."""

    def test_all_generators_by_default(self) -> None:
        """Without @derive every generator runs."""
        assert model("enum A:\n    X\n").type.generators == tuple(Generator)

    def test_variant_array_skipped_for_data_enums(self) -> None:
        """By default variant_array is dropped when a variant has fields."""
        generators = model("enum A:\n    X(int)\n").type.generators

        assert Generator.VARIANT_ARRAY not in generators
        assert Generator.FROM_STR in generators

    def test_explicit_selection_in_canonical_order(self) -> None:
        """Selected generators run in canonical order, not declaration order."""
        enum = model("@derive(count, from_str)\nenum A:\n    X\n")

        assert enum.type.generators == (Generator.FROM_STR, Generator.COUNT)
        assert enum.type.runs(Generator.COUNT)
        assert not enum.type.runs(Generator.DISPLAY)

    def test_variant_array_requires_unit_variants(self) -> None:
        """Explicit variant_array on a data enum is an arity error."""
        error = failure("@derive(variant_array)\nenum A:\n    X\n    Y(int)\n", ArityMismatchError)

        assert error.diagnostic is not None
        assert error.diagnostic.code is DiagnosticCode.ARITY_MISMATCH
        assert "'A.Y'" in error.diagnostic.message

    def test_duplicate_generator(self) -> None:
        """A generator can be derived once."""
        failure("@derive(count, count)\nenum A:\n    X\n", DuplicateOptionError)


# ============================================================================
# CONSISTENCY ERRORS
# ============================================================================


class TestDuplicateOptions:
    """Test exclusive options declared twice."""

    def test_enum_option(self) -> None:
        """Duplicated enum options report both sites."""
        error = failure(
            '@enumkit(prefix = "a")\n@enumkit(prefix = "b")\nenum A:\n    X\n',
            DuplicateOptionError,
        )

        diagnostic = error.diagnostic
        assert diagnostic is not None
        assert diagnostic.message == "Option 'prefix' declared more than once on enum 'A'"
        assert diagnostic.span is not None
        assert diagnostic.related_span is not None
        assert diagnostic.span.line == 2
        assert diagnostic.related_span.line == 1
        assert diagnostic.related_label == "first declared here"
        assert diagnostic.origin == "test.enums"

    def test_variant_option(self) -> None:
        """Duplicated variant options name the variant."""
        error = failure(
            'enum A:\n    @enumkit(to_string = "a", to_string = "b")\n    X\n',
            DuplicateOptionError,
        )

        assert "on variant 'X'" in str(error)

    def test_serialize_is_repeatable(self) -> None:
        """serialize may appear any number of times."""
        enum = model('enum A:\n    @enumkit(serialize = "a", serialize = "b")\n    X\n')

        assert len(enum.variants[0].aliases) == 2

    def test_two_catch_alls(self) -> None:
        """Only one variant may be the catch-all."""
        error = failure(
            "enum A:\n    @enumkit(default)\n    X(str)\n    @enumkit(default)\n    Y(str)\n",
            DuplicateOptionError,
        )

        assert error.diagnostic is not None
        assert error.diagnostic.message == "Option 'default' declared more than once on enum 'A'"

    def test_repr_twice(self) -> None:
        """@repr may be given once."""
        failure("@repr(int)\n@repr(str)\nenum A:\n    X\n", DuplicateOptionError)


class TestConflictingFlags:
    """Test mutually exclusive variant flags."""

    @pytest.mark.parametrize(
        ("flags", "first", "second"),
        [
            ("disabled, default", "disabled", "default"),
            ("default, disabled", "default", "disabled"),
            ('transparent, serialize = "x"', "transparent", "serialize"),
            ('to_string = "x", transparent', "to_string", "transparent"),
            ('default, default_with = "str"', "default", "default_with"),
        ],
    )
    def test_conflicts(self, flags: str, first: str, second: str) -> None:
        """The earlier flag is named first."""
        source = f"enum A:\n    @enumkit({flags})\n    X(str)\n"
        error = failure(source, ConflictingVariantFlagsError)

        assert error.diagnostic is not None
        assert error.diagnostic.message == f"Variant 'X' cannot be both '{first}' and '{second}'"
        assert error.diagnostic.related_label == f"'{first}' declared here"


class TestArity:
    """Test single-field requirements."""

    @pytest.mark.parametrize("flag", ["default", "transparent", 'default_with = "str"'])
    def test_unit_variant(self, flag: str) -> None:
        """Single-field flags reject unit variants."""
        error = failure(f"enum A:\n    @enumkit({flag})\n    X\n", ArityMismatchError)

        assert "requires variant 'X' to have exactly one field, found 0" in str(error)

    def test_two_fields(self) -> None:
        """Two fields are one too many."""
        error = failure("enum A:\n    @enumkit(transparent)\n    X(str, int)\n", ArityMismatchError)

        assert error.diagnostic is not None
        assert error.diagnostic.message == (
            "'transparent' requires variant 'X' to have exactly one field, found 2"
        )


class TestProperties:
    """Test property key uniqueness."""

    def test_duplicate_key(self) -> None:
        """A key may appear once per variant."""
        error = failure(
            "enum A:\n    @enumkit(props(k = 1), props(k = 2))\n    X\n", DuplicatePropertyError
        )

        assert error.diagnostic is not None
        assert error.diagnostic.message == "Property 'k' declared more than once on variant 'X'"

    def test_same_key_on_other_variants(self) -> None:
        """Keys are scoped to their variant."""
        enum = model(
            "enum A:\n    @enumkit(props(k = 1))\n    X\n    @enumkit(props(k = 2))\n    Y\n"
        )

        assert [v.get_property("k") for v in enum.variants] == [1, 2]


class TestReservedNames:
    """Test variant names that would shadow generated members."""

    @pytest.mark.parametrize("name", ["COUNT", "iter", "from_str", "_hidden"])
    def test_reserved(self, name: str) -> None:
        """Generated member names and private names are rejected."""
        error = failure(f"enum A:\n    {name}\n", InvalidAttributeSyntaxError)

        assert error.diagnostic is not None
        assert f"'{name}'" in error.diagnostic.message
        assert "reserved" in error.diagnostic.message

    @pytest.mark.parametrize("name", ["_ordinal", "_0", "ordinal", "variant_name", "get_message"])
    def test_reserved_field(self, name: str) -> None:
        """Fields cannot replace the variant's class members."""
        error = failure(f"enum A:\n    X({name}: int)\n", InvalidAttributeSyntaxError)

        assert error.diagnostic is not None
        assert error.diagnostic.message == f"Field name '{name}' of 'A.X' is reserved"
        assert error.diagnostic.variant_name == "X"
        assert error.diagnostic.span is not None
        assert (error.diagnostic.span.line, error.diagnostic.span.column) == (2, 7)

    def test_duplicate_field(self) -> None:
        """A field name may appear once per variant."""
        error = failure("enum A:\n    X(x: int, x: str)\n", InvalidAttributeSyntaxError)

        diagnostic = error.diagnostic
        assert diagnostic is not None
        assert diagnostic.message == "Field 'x' declared more than once on variant 'X'"
        assert diagnostic.span is not None
        assert diagnostic.related_span is not None
        assert (diagnostic.span.column, diagnostic.related_span.column) == (15, 7)

    def test_same_field_on_other_variants(self) -> None:
        """Field names are scoped to their variant."""
        enum = model("enum A:\n    X(x: int)\n    Y(x: str)\n")

        assert [v.fields[0].name for v in enum.variants] == ["x", "x"]


class TestLogging:
    """Test normalizer log output."""

    def test_debug_summary(self, caplog: pytest.LogCaptureFixture) -> None:
        """One debug line per normalized enum."""
        with caplog.at_level(logging.DEBUG, logger="enumkit.model.normalize"):
            model("@derive(count)\nenum Color:\n    Red\n    Blue\n")

        assert "Normalized enum Color: 2 variant(s), generators=count" in caplog.text
