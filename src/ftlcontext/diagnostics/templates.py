"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from .codes import Diagnostic, DiagnosticCode, SourceSpan, get_error_message

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This keeps the wording of every resolver and store diagnostic in one place,
    where tests can pin it.
    """

    @staticmethod
    def message_not_found(message_id: str) -> Diagnostic:
        """Message reference not found in the context.

        Args:
            message_id: The message identifier that was not found

        Returns:
            Diagnostic for MESSAGE_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NOT_FOUND,
            message=f"Unknown message: {message_id}",
            hint="Check that the message is defined in the loaded resources",
        )

    @staticmethod
    def term_not_found(term_id: str) -> Diagnostic:
        """Term reference not found.

        Args:
            term_id: The term identifier, including the leading ``-``

        Returns:
            Diagnostic for TERM_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.TERM_NOT_FOUND,
            message=f"Unknown term: {term_id}",
            hint="Terms must be added to the context before they are referenced",
        )

    @staticmethod
    def attribute_not_found(attribute: str) -> Diagnostic:
        """Message or term attribute not found.

        Args:
            attribute: The attribute name that was not found

        Returns:
            Diagnostic for ATTRIBUTE_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.ATTRIBUTE_NOT_FOUND,
            message=f"Unknown attribute: {attribute}",
        )

    @staticmethod
    def variant_not_found(key: str) -> Diagnostic:
        """Variant key not present in a variant list.

        Args:
            key: The formatted variant key

        Returns:
            Diagnostic for VARIANT_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.VARIANT_NOT_FOUND,
            message=f"Unknown variant: {key}",
        )

    @staticmethod
    def variable_not_provided(variable_name: str) -> Diagnostic:
        """Variable not provided in arguments.

        Args:
            variable_name: The variable name (without leading $)

        Returns:
            Diagnostic for VARIABLE_NOT_PROVIDED
        """
        return Diagnostic(
            code=DiagnosticCode.VARIABLE_NOT_PROVIDED,
            message=f"Unknown variable: ${variable_name}",
            hint=f"Pass '{variable_name}' in the arguments dictionary",
        )

    @staticmethod
    def unsupported_variable_type(variable_name: str, type_name: str) -> Diagnostic:
        """Variable of a type the resolver cannot wrap.

        Args:
            variable_name: The variable name (without leading $)
            type_name: Name of the Python type received

        Returns:
            Diagnostic for TYPE_MISMATCH
        """
        return Diagnostic(
            code=DiagnosticCode.TYPE_MISMATCH,
            message=f"Unsupported variable type: {variable_name}, {type_name}",
            hint="Pass str, int, float, Decimal, date, datetime or a FluentType",
        )

    @staticmethod
    def invalid_number(variable_name: str, error_msg: str) -> Diagnostic:
        """Numeric variable that cannot be formatted, e.g. a signalling NaN.

        Args:
            variable_name: The variable name (without leading $)
            error_msg: Why the number was rejected

        Returns:
            Diagnostic for TYPE_MISMATCH
        """
        return Diagnostic(
            code=DiagnosticCode.TYPE_MISMATCH,
            message=f"Invalid number: ${variable_name} ({error_msg})",
        )

    @staticmethod
    def function_not_found(function_name: str) -> Diagnostic:
        """Function not registered.

        Args:
            function_name: The function name that was not found

        Returns:
            Diagnostic for FUNCTION_NOT_FOUND
        """
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_NOT_FOUND,
            message=f"Unknown function: {function_name}()",
            hint="Built-in functions: NUMBER, DATETIME",
        )

    @staticmethod
    def function_failed(function_name: str, error_msg: str) -> Diagnostic:
        """Function execution failed.

        Args:
            function_name: The function that failed
            error_msg: The error message from the exception

        Returns:
            Diagnostic for FUNCTION_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.FUNCTION_FAILED,
            message=f"Function {function_name}() failed: {error_msg}",
            hint="Check the function arguments and their types",
        )

    @staticmethod
    def no_default_variant() -> Diagnostic:
        """Select expression or variant list without a usable default."""
        return Diagnostic(code=DiagnosticCode.NO_DEFAULT_VARIANT, message="No default")

    @staticmethod
    def cyclic_reference() -> Diagnostic:
        """Pattern reached again while it is being resolved."""
        return Diagnostic(
            code=DiagnosticCode.CYCLIC_REFERENCE,
            message="Cyclic reference",
            hint="Break the cycle by removing one of the references",
        )

    @staticmethod
    def max_depth_exceeded(max_depth: int) -> Diagnostic:
        """Maximum resolution depth exceeded.

        Args:
            max_depth: The maximum allowed depth

        Returns:
            Diagnostic for MAX_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.MAX_DEPTH_EXCEEDED,
            message=f"Maximum resolution depth ({max_depth}) exceeded",
            hint="Reduce message reference chain depth or refactor to avoid deep nesting",
        )

    @staticmethod
    def message_no_value(message_id: str) -> Diagnostic:
        """Referenced message has attributes but no value.

        Args:
            message_id: The message identifier, kept for the hint

        Returns:
            Diagnostic for MESSAGE_NO_VALUE
        """
        return Diagnostic(
            code=DiagnosticCode.MESSAGE_NO_VALUE,
            message="No value",
            hint=f"Reference an attribute of '{message_id}' instead",
        )

    @staticmethod
    def placeable_too_long(length: int, max_length: int) -> Diagnostic:
        """Formatted placeable exceeded the length limit.

        Args:
            length: Length of the formatted placeable
            max_length: Maximum allowed length

        Returns:
            Diagnostic for PLACEABLE_TOO_LONG
        """
        return Diagnostic(
            code=DiagnosticCode.PLACEABLE_TOO_LONG,
            message=(
                f"Too many characters in placeable ({length}, "
                f"max allowed is {max_length})"
            ),
        )

    @staticmethod
    def duplicate_entry(kind: str, entry_id: str) -> Diagnostic:
        """Message or term identifier already present in the store.

        Args:
            kind: "message" or "term"
            entry_id: The duplicated identifier

        Returns:
            Diagnostic for DUPLICATE_ID
        """
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_ID,
            message=f'Attempt to override an existing {kind}: "{entry_id}"',
            hint="The first definition is kept",
        )

    @staticmethod
    def parse_junk(code: str, args: Sequence[str], span: SourceSpan | None) -> Diagnostic:
        """Syntax error recovered as a Junk entry.

        Args:
            code: Annotation code (E0001-E0026)
            args: Annotation arguments
            span: Location of the failure

        Returns:
            Diagnostic for PARSE_JUNK
        """
        return Diagnostic(
            code=DiagnosticCode.PARSE_JUNK,
            message=f"{code}: {get_error_message(code, args)}",
            span=span,
        )
