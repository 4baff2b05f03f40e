"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Iterable

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This solves EM101/EM102 violations while providing:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def unexpected_eof(position: int) -> Diagnostic:
        """Unexpected end of schema source.

        Args:
            position: Character offset where EOF was hit

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected EOF at position {position}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_EOF,
            message=msg,
            span=None,
            hint="Check for unclosed parentheses or unterminated strings",
        )

    @staticmethod
    def source_too_large(size: int, limit: int) -> Diagnostic:
        """Schema source exceeds the configured size limit.

        Args:
            size: Source length in characters
            limit: Configured maximum

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        msg = f"Schema source size ({size:,} characters) exceeds maximum ({limit:,} characters)"
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=msg,
            hint="Split the schema or raise GeneratorConfig.max_source_size",
        )

    @staticmethod
    def invalid_syntax(
        message: str, span: SourceSpan, expected: tuple[str, ...] = ()
    ) -> Diagnostic:
        """Malformed schema or attribute syntax.

        Args:
            message: Description of what went wrong
            span: Location of the offending token
            expected: Tokens that would have been accepted

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        hint = None
        if expected:
            hint = "Expected one of: " + ", ".join(f"'{e}'" for e in expected)
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=message,
            span=span,
            hint=hint,
        )

    @staticmethod
    def unknown_keyword(
        keyword: str, context: str, allowed: Iterable[str], span: SourceSpan
    ) -> Diagnostic:
        """Keyword outside the closed set accepted in this position.

        Args:
            keyword: The keyword that was found
            context: Where it was found ("enum", "variant", "field", ...)
            allowed: Keywords accepted in that position
            span: Location of the keyword

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        msg = f"Unknown {context} keyword '{keyword}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=msg,
            span=span,
            hint="Expected one of: " + ", ".join(sorted(allowed)),
        )

    @staticmethod
    def invalid_value(keyword: str, expected: str, span: SourceSpan) -> Diagnostic:
        """Keyword used with a value of the wrong shape.

        Args:
            keyword: The keyword being parsed
            expected: Human description of the accepted form
            span: Location of the offending item

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        msg = f"Invalid value for '{keyword}': expected {expected}"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=msg,
            span=span,
        )

    @staticmethod
    def reserved_variant_name(variant_name: str, span: SourceSpan, *, enum_name: str) -> Diagnostic:
        """Variant named after a member every generated enum may define.

        Args:
            variant_name: Offending variant identifier
            span: Location of the variant name
            enum_name: Enum being normalized

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        msg = f"Variant name '{variant_name}' of '{enum_name}' is reserved for generated members"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=msg,
            span=span,
            hint="Rename the variant and keep the string with serialize or to_string",
            enum_name=enum_name,
            variant_name=variant_name,
        )

    @staticmethod
    def name_collision(name: str, span: SourceSpan, first_span: SourceSpan) -> Diagnostic:
        """Two generated top-level classes would share a name.

        Args:
            name: Colliding class name
            span: Declaration producing the second class
            first_span: Declaration producing the first class

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        msg = f"Generated class name '{name}' is used more than once"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=msg,
            span=span,
            related_span=first_span,
            related_label="first generated here",
            hint="Rename the enum or pass name(...) to @discriminants",
        )

    @staticmethod
    def reserved_class_name(name: str, span: SourceSpan) -> Diagnostic:
        """Generated class named like a module-level helper of the output.

        Args:
            name: Offending class name
            span: Declaration producing the class

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        msg = f"Generated class name '{name}' would replace a name the generated module uses"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=msg,
            span=span,
            hint="Rename the enum or pass name(...) to @discriminants",
        )

    @staticmethod
    def duplicate_field(
        field_name: str,
        span: SourceSpan,
        first_span: SourceSpan,
        *,
        enum_name: str,
        variant_name: str,
    ) -> Diagnostic:
        """Field name repeated within one variant.

        Args:
            field_name: Repeated field name
            span: Second declaration
            first_span: First declaration
            enum_name: Enum being normalized
            variant_name: Variant carrying the fields

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        msg = f"Field '{field_name}' declared more than once on variant '{variant_name}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=msg,
            span=span,
            related_span=first_span,
            related_label="first declared here",
            enum_name=enum_name,
            variant_name=variant_name,
        )

    @staticmethod
    def reserved_field_name(
        field_name: str, span: SourceSpan, *, enum_name: str, variant_name: str
    ) -> Diagnostic:
        """Field named after a generated member or a private attribute.

        Args:
            field_name: Offending field name
            span: Location of the field name
            enum_name: Enum being normalized
            variant_name: Variant carrying the field

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        msg = f"Field name '{field_name}' of '{enum_name}.{variant_name}' is reserved"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=msg,
            span=span,
            hint="Field names cannot start with '_' or match a generated member",
            enum_name=enum_name,
            variant_name=variant_name,
        )

    @staticmethod
    def unknown_case_style(value: str, allowed: Iterable[str], span: SourceSpan) -> Diagnostic:
        """serialize_all names a case style that does not exist.

        Args:
            value: The literal that was given
            allowed: Accepted case style spellings
            span: Location of the literal

        Returns:
            Diagnostic for INVALID_ATTRIBUTE_SYNTAX
        """
        msg = f"Unknown case style '{value}'"
        return Diagnostic(
            code=DiagnosticCode.INVALID_ATTRIBUTE_SYNTAX,
            message=msg,
            span=span,
            hint="Expected one of: " + ", ".join(sorted(allowed)),
        )

    @staticmethod
    def duplicate_option(
        option: str,
        span: SourceSpan,
        first_span: SourceSpan,
        *,
        enum_name: str,
        variant_name: str | None = None,
    ) -> Diagnostic:
        """Exclusive option declared more than once.

        Args:
            option: Option keyword
            span: Second declaration
            first_span: First declaration
            enum_name: Enum being normalized
            variant_name: Variant being normalized (None for type-level options)

        Returns:
            Diagnostic for DUPLICATE_OPTION
        """
        owner = f"variant '{variant_name}'" if variant_name else f"enum '{enum_name}'"
        msg = f"Option '{option}' declared more than once on {owner}"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_OPTION,
            message=msg,
            span=span,
            related_span=first_span,
            related_label="first declared here",
            hint=f"Keep a single '{option}' declaration",
            enum_name=enum_name,
            variant_name=variant_name,
        )

    @staticmethod
    def conflicting_flags(
        first: str,
        second: str,
        span: SourceSpan,
        related_span: SourceSpan | None,
        *,
        enum_name: str,
        variant_name: str,
    ) -> Diagnostic:
        """Mutually exclusive variant flags combined.

        Args:
            first: Flag declared earlier
            second: Flag that conflicts with it
            span: Location of the conflicting flag
            related_span: Location of the earlier flag
            enum_name: Enum being normalized
            variant_name: Variant carrying both flags

        Returns:
            Diagnostic for CONFLICTING_VARIANT_FLAGS
        """
        msg = f"Variant '{variant_name}' cannot be both '{first}' and '{second}'"
        return Diagnostic(
            code=DiagnosticCode.CONFLICTING_VARIANT_FLAGS,
            message=msg,
            span=span,
            related_span=related_span,
            related_label=f"'{first}' declared here",
            hint=f"Remove either '{first}' or '{second}'",
            enum_name=enum_name,
            variant_name=variant_name,
        )

    @staticmethod
    def arity_mismatch(
        flag: str,
        field_count: int,
        span: SourceSpan,
        *,
        enum_name: str,
        variant_name: str,
    ) -> Diagnostic:
        """Flag requires exactly one field.

        Args:
            flag: The flag needing a single field
            field_count: Number of fields the variant actually declares
            span: Location of the flag
            enum_name: Enum being normalized
            variant_name: Variant carrying the flag

        Returns:
            Diagnostic for ARITY_MISMATCH
        """
        msg = (
            f"'{flag}' requires variant '{variant_name}' to have exactly one field, "
            f"found {field_count}"
        )
        return Diagnostic(
            code=DiagnosticCode.ARITY_MISMATCH,
            message=msg,
            span=span,
            hint=f"Declare a single field, e.g. {variant_name}(str)",
            enum_name=enum_name,
            variant_name=variant_name,
        )

    @staticmethod
    def variant_array_requires_unit(
        variant_name: str, span: SourceSpan, *, enum_name: str
    ) -> Diagnostic:
        """variant_array requested on an enum with data-carrying variants.

        Args:
            variant_name: First variant with fields
            span: Location of that variant
            enum_name: Enum being normalized

        Returns:
            Diagnostic for ARITY_MISMATCH
        """
        msg = (
            f"'variant_array' requires field-less variants, but '{enum_name}.{variant_name}' "
            "carries data"
        )
        return Diagnostic(
            code=DiagnosticCode.ARITY_MISMATCH,
            message=msg,
            span=span,
            hint="Use the discriminants generator for enums with data",
            enum_name=enum_name,
            variant_name=variant_name,
        )

    @staticmethod
    def duplicate_property(
        key: str,
        span: SourceSpan,
        first_span: SourceSpan,
        *,
        enum_name: str,
        variant_name: str,
    ) -> Diagnostic:
        """Property key declared twice on one variant.

        Args:
            key: Property key
            span: Second declaration
            first_span: First declaration
            enum_name: Enum being normalized
            variant_name: Variant carrying the properties

        Returns:
            Diagnostic for DUPLICATE_PROPERTY
        """
        msg = f"Property '{key}' declared more than once on variant '{variant_name}'"
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_PROPERTY,
            message=msg,
            span=span,
            related_span=first_span,
            related_label="first declared here",
            hint=f"Keep a single '{key}' entry",
            enum_name=enum_name,
            variant_name=variant_name,
        )

    @staticmethod
    def conflicting_serialization(
        value: str,
        first_variant: str,
        second_variant: str,
        span: SourceSpan,
        first_span: SourceSpan,
        *,
        enum_name: str,
    ) -> Diagnostic:
        """Two variants would both match the same input.

        Args:
            value: The shared candidate string (as declared by the second variant)
            first_variant: Variant declared earlier
            second_variant: Variant declared later
            span: Location of the second candidate
            first_span: Location of the first candidate
            enum_name: Enum being planned

        Returns:
            Diagnostic for CONFLICTING_SERIALIZATION
        """
        msg = (
            f"Variants '{first_variant}' and '{second_variant}' of '{enum_name}' "
            f"both match '{value}'"
        )
        return Diagnostic(
            code=DiagnosticCode.CONFLICTING_SERIALIZATION,
            message=msg,
            span=span,
            related_span=first_span,
            related_label=f"'{first_variant}' serialization declared here",
            hint="Give one variant a distinct serialize or to_string value",
            enum_name=enum_name,
            variant_name=second_variant,
        )

    @staticmethod
    def perfect_hash_failed(enum_name: str, attempts: int) -> Diagnostic:
        """No seed produced a perfect hash table.

        Args:
            enum_name: Enum being planned
            attempts: Number of seeds tried

        Returns:
            Diagnostic for PERFECT_HASH_FAILED
        """
        msg = f"Could not build a perfect hash table for '{enum_name}' after {attempts} attempts"
        return Diagnostic(
            code=DiagnosticCode.PERFECT_HASH_FAILED,
            message=msg,
            hint="Remove use_phf to fall back to the linear lookup chain",
            enum_name=enum_name,
        )
