"""MessageContext - main API for Fluent message formatting.

A context holds the messages and terms of one language, the function
table, and the formatting options. Resources are added to it; messages
are looked up and formatted through it.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

import logging
from collections.abc import Callable, Iterator, Mapping, Sequence

from ftlcontext.diagnostics import (
    ErrorTemplate,
    FluentError,
    FluentOverrideError,
    FluentRangeError,
    FluentReferenceError,
)
from ftlcontext.enums import ReferenceKind
from ftlcontext.locale_utils import get_system_locale, normalize_locales
from ftlcontext.syntax.ast import Attribute, Message, Pattern, Term

from .function_bridge import FluentFunction, FunctionRegistry
from .functions import get_shared_registry
from .resolver import FluentResolver
from .resource import FluentResource
from .value_types import FluentArg

__all__ = ["MessageContext"]

logger = logging.getLogger(__name__)

# Warnings show more context as they're surfaced to users.
_LOG_TRUNCATE_WARNING: int = 100
_LOG_TRUNCATE_DEBUG: int = 50


def _identity(text: str) -> str:
    return text


class MessageContext:
    """Message store and formatter for one language.

    Messages and terms live in separate tables; terms keep their leading
    ``-`` as part of the id and are never returned by the message lookups.
    Adding an id that is already stored is rejected and the first
    definition is kept.

    Not safe for concurrent mutation: add resources first, then format
    from as many threads as needed.

    Example:
        >>> ctx = MessageContext("en-US")
        >>> ctx.add_messages("hello = Hello, { $name }!")
        []
        >>> ctx.format(ctx.get_message("hello"), {"name": "Anna"})
        'Hello, \\u2068Anna\\u2069!'
    """

    __slots__ = (
        "_functions",
        "_locales",
        "_messages",
        "_resolver",
        "_terms",
        "_transform",
        "_use_isolating",
    )

    def __init__(
        self,
        locales: str | Sequence[str],
        /,
        *,
        use_isolating: bool = True,
        transform: Callable[[str], str] | None = None,
        functions: Mapping[str, FluentFunction] | FunctionRegistry | None = None,
    ) -> None:
        """Initialize the context.

        Args:
            locales: Locale code, or a fallback chain whose first element is
                the primary locale [positional-only]
            use_isolating: Wrap placeables in FSI/PDI marks when they are
                part of a larger pattern (default: True)
            transform: Applied to every literal text run, e.g. for
                pseudo-localization (default: no change)
            functions: Custom functions, looked up before NUMBER and DATETIME

        Raises:
            ValueError: If no locale is given or a function name is invalid
            TypeError: If a custom function is not callable
        """
        self._locales = normalize_locales(locales)
        self._use_isolating = use_isolating
        self._transform = transform if transform is not None else _identity
        self._messages: dict[str, Message] = {}
        self._terms: dict[str, Term] = {}

        if isinstance(functions, FunctionRegistry):
            self._functions = functions.copy()
        else:
            self._functions = FunctionRegistry()
            for name, func in (functions or {}).items():
                self._functions.register(name, func)

        self._resolver = FluentResolver(self)

        logger.info(
            "MessageContext initialized for locales: %s (use_isolating=%s, functions=%d)",
            ", ".join(self._locales),
            use_isolating,
            len(self._functions),
        )

    @classmethod
    def for_system_locale(
        cls,
        *,
        use_isolating: bool = True,
        transform: Callable[[str], str] | None = None,
        functions: Mapping[str, FluentFunction] | FunctionRegistry | None = None,
    ) -> "MessageContext":
        """Create a context for the locale detected from the environment.

        Example:
            >>> ctx = MessageContext.for_system_locale()
            >>> ctx.locale  # e.g. 'en_US'
        """
        return cls(
            get_system_locale(),
            use_isolating=use_isolating,
            transform=transform,
            functions=functions,
        )

    @property
    def locales(self) -> tuple[str, ...]:
        """Normalized locale chain, primary locale first (read-only)."""
        return self._locales

    @property
    def locale(self) -> str:
        """Primary locale (read-only).

        Example:
            >>> MessageContext(["lv-LV", "en"]).locale
            'lv_LV'
        """
        return self._locales[0]

    @property
    def use_isolating(self) -> bool:
        return self._use_isolating

    @property
    def transform(self) -> Callable[[str], str]:
        return self._transform

    # ------------------------------------------------------------------
    # Adding entries
    # ------------------------------------------------------------------

    def add_messages(self, source: str, /) -> list[FluentError]:
        """Parse FTL source and add its messages and terms.

        Parse failures do not stop the rest of the source from loading.

        Args:
            source: FTL file content [positional-only]

        Returns:
            Syntax errors, then rejected duplicates

        Raises:
            ValueError: If source exceeds the maximum source size

        Example:
            >>> errors = ctx.add_messages("foo = Foo\\nfoo = Bar")
            >>> errors[0].message
            'Attempt to override an existing message: "foo"'
        """
        return self.add_resource(FluentResource.from_string(source))

    def add_resource(self, resource: FluentResource, /) -> list[FluentError]:
        """Add the messages and terms of a parsed resource.

        Returns:
            The resource's own errors followed by one FluentOverrideError per
            id that was already stored
        """
        errors: list[FluentError] = list(resource.errors)

        for junk in resource.junk:
            logger.warning(
                "Syntax error in resource: %s",
                repr(junk.content[:_LOG_TRUNCATE_WARNING]),
            )

        for message_id, message in resource.messages.items():
            if message_id in self._messages:
                errors.append(self._override_error(ReferenceKind.MESSAGE, message_id))
                continue
            self._messages[message_id] = message
            logger.debug("Registered message: %s", message_id)

        for term_id, term in resource.terms.items():
            if term_id in self._terms:
                errors.append(self._override_error(ReferenceKind.TERM, term_id))
                continue
            self._terms[term_id] = term
            logger.debug("Registered term: %s", term_id)

        logger.info(
            "Added resource: %d messages, %d terms, %d junk entries",
            len(self._messages),
            len(self._terms),
            len(resource.junk),
        )
        return errors

    @staticmethod
    def _override_error(kind: ReferenceKind, entry_id: str) -> FluentOverrideError:
        logger.warning("Ignoring duplicate %s: %s", kind, entry_id)
        return FluentOverrideError(ErrorTemplate.duplicate_entry(kind, entry_id))

    def add_function(self, name: str, func: FluentFunction) -> None:
        """Add a custom function, shadowing a built-in of the same name.

        Raises:
            ValueError: If name is not an uppercase function name
            TypeError: If func is not callable

        Example:
            >>> def upper(positional, named):
            ...     return FluentString(positional[0].format(ctx).upper())
            >>> ctx.add_function("UPPER", upper)
        """
        self._functions.register(name, func)
        logger.debug("Added custom function: %s", name)

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def has_message(self, message_id: str) -> bool:
        """Check whether a public message exists. Terms never count."""
        return message_id in self._messages

    def get_message(self, message_id: str) -> Message | None:
        return self._messages.get(message_id)

    def get_term(self, term_id: str) -> Term | None:
        """Get a term by id, including its leading ``-``."""
        return self._terms.get(term_id)

    def get_function(self, name: str) -> FluentFunction | None:
        """Custom functions first, then the built-ins."""
        func = self._functions.get(name)
        if func is None:
            func = get_shared_registry().get(name)
        return func

    def message_ids(self) -> Iterator[str]:
        return iter(self._messages)

    def __contains__(self, message_id: object) -> bool:
        return message_id in self._messages

    def __len__(self) -> int:
        return len(self._messages)

    # ------------------------------------------------------------------
    # Formatting
    # ------------------------------------------------------------------

    def format(
        self,
        node: Message | Attribute | Pattern,
        args: Mapping[str, FluentArg] | None = None,
        errors: list[FluentError] | None = None,
    ) -> str | None:
        """Format a message, an attribute or a pattern.

        Never raises for problems in the translation: each one is appended
        to ``errors`` and the output shows a fallback in its place.

        Args:
            node: What to format, usually from get_message()
            args: Variables referenced as ``$name``
            errors: List that resolution errors are appended to

        Returns:
            The formatted string, or None for a message without a value

        Example:
            >>> ctx.add_messages("login = Log in\\n    .title = Sign in here")
            >>> msg = ctx.get_message("login")
            >>> ctx.format(msg)
            'Log in'
            >>> ctx.format(msg.attributes[0])
            'Sign in here'
        """
        if isinstance(node, Message) and node.value is None:
            return None

        sink: list[FluentError] = [] if errors is None else errors
        before = len(sink)
        result = self._resolver.resolve(node, args, sink)

        if len(sink) > before:
            logger.warning("Resolution errors: %d error(s)", len(sink) - before)
            for err in sink[before:]:
                logger.debug("  - %s: %s", type(err).__name__, err)
        else:
            logger.debug("Resolved: %s", result[:_LOG_TRUNCATE_DEBUG])

        return result

    def format_pattern(
        self,
        message_id: str,
        /,
        args: Mapping[str, FluentArg] | None = None,
        *,
        attribute: str | None = None,
    ) -> tuple[str, tuple[FluentError, ...]]:
        """Format a message by id, returning the result and its errors.

        Args:
            message_id: Message identifier [positional-only]
            args: Variables referenced as ``$name``
            attribute: Attribute name (optional, keyword-only)

        Returns:
            Tuple of (formatted_string, errors). An unknown message or
            attribute, or a message without a value, formats as its id.

        Example:
            >>> result, errors = ctx.format_pattern("hello", {"name": "Anna"})
            >>> errors
            ()
        """
        message = self._messages.get(message_id)
        if message is None:
            logger.warning("Message '%s' not found", message_id)
            return message_id, (FluentReferenceError(ErrorTemplate.message_not_found(message_id)),)

        node: Message | Attribute = message
        if attribute is not None:
            found = next((a for a in message.attributes if a.id.name == attribute), None)
            if found is None:
                logger.warning("Attribute '%s.%s' not found", message_id, attribute)
                error = FluentReferenceError(
                    ErrorTemplate.attribute_not_found(f"{message_id}.{attribute}")
                )
                return message_id, (error,)
            node = found

        errors: list[FluentError] = []
        result = self.format(node, args, errors)
        if result is None:
            return message_id, (
                FluentRangeError(ErrorTemplate.message_no_value(message_id)),
            )
        return result, tuple(errors)

    def __repr__(self) -> str:
        """Return string representation for debugging.

        Example:
            >>> ctx = MessageContext("lv_LV")
            >>> repr(ctx)
            "MessageContext(locale='lv_LV', messages=0, terms=0)"
        """
        return (
            f"MessageContext(locale={self.locale!r}, "
            f"messages={len(self._messages)}, terms={len(self._terms)})"
        )
