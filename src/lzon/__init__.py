"""
Lenient recursive-descent reader for JSON-like text.

Builds an immutable tree of typed values from a string in a single pass.
The grammar is deliberately forgiving: booleans match regardless of case,
colons and commas are skipped as generic separators, and strings are taken
verbatim up to the next double quote with no escape processing.
"""

import logging
import os
import time
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any
from typing import overload

__version__ = "0.1.0"

type Position = int

# Receives the ordered (key, value) pairs of every converted object
ObjectPairsHook = Callable[[list[tuple[str, Any]]], Any] | None

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "LZON_PROFILE" in os.environ

DEFAULT_MAX_DEPTH = 256

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

# Noise consumed before every value, at any nesting level
_SKIP_CHARS = frozenset(" \n\t:,")
_ARRAY_SEPARATORS = frozenset(", \n\t")
_OBJECT_SEPARATORS = frozenset(", :\n\t")
_NUMBER_CHARS = frozenset("0123456789.-")
_NUMBER_START = frozenset("-0123456789")


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during parsing."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    chars_processed: int = 0

    def record_call(self, duration_ns: int, chars: int = 0) -> None:
        """Records a function call with timing and character processing info."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.chars_processed += chars


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """
        Times one reader method and counts the characters it consumed.

        The count is the distance the reader's cursor moved between entry
        and exit, so it includes nested values and skipped separators.
        """

        def __init__(self, func_name: str, reader: "Reader") -> None:
            self.func_name = func_name
            self.reader = reader
            self.start_pos = 0
            self.start_time = 0

        def __enter__(self) -> "ProfileContext":
            self.start_pos = self.reader.pos
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            stats = _hot_path_stats.setdefault(
                self.func_name, HotPathStats(self.func_name)
            )
            stats.record_call(duration, self.reader.pos - self.start_pos)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:
    # Zero-cost in production - ignore arguments
    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, reader: "Reader") -> None:
            pass

        def __enter__(self) -> "ProfileContext":
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass


class ParseError(ValueError):
    """
    Reports a parse failure with its position in the input.

    Carries the character offset plus derived line, column and UTF-8 byte
    offsets so callers can point at the offending fragment.
    """

    def __init__(self, msg: str, doc: str = "", pos: Position = 0) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos

        # Compute line and column numbers from position
        self.lineno = doc.count("\n", 0, pos) + 1 if doc else 1
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        super().__init__(
            f"{msg} at line {self.lineno}, column {self.colno} (char {pos})"
        )

    @property
    def byte_pos(self) -> int:
        """UTF-8 byte offset of the error position."""
        return len(self.doc[: self.pos].encode("utf-8", "surrogatepass"))


class InvalidFormat(ParseError):
    """Malformed literal, unparsable number or unexpected leading char."""


class EndOfStream(ParseError):
    """Input ran out where a value (or a closing delimiter) was expected."""


class NestingTooDeep(ParseError):
    """Containers nested beyond the configured maximum depth."""


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures reader behavior with immutable settings.

    ``strict_eof`` turns the silent truncation of unterminated containers
    and strings into ``EndOfStream`` errors. ``max_depth`` bounds container
    nesting; ``None`` removes the bound.
    """

    strict_eof: bool = False
    max_depth: int | None = DEFAULT_MAX_DEPTH

    def __post_init__(self) -> None:
        if not isinstance(self.strict_eof, bool):
            raise TypeError("strict_eof must be a boolean")
        if self.max_depth is None:
            return
        if isinstance(self.max_depth, bool) or not isinstance(
            self.max_depth, int
        ):
            raise TypeError("max_depth must be an integer or None")
        if self.max_depth < 1:
            raise ValueError("max_depth must be at least 1")


@dataclass(frozen=True)
class Boolean:
    """Boolean literal."""

    value: bool


@dataclass(frozen=True)
class Number:
    """Numeric literal, always held as a float."""

    value: float


@dataclass(frozen=True)
class Null:
    """The null literal."""


@dataclass(frozen=True)
class String:
    """String literal, taken verbatim between double quotes."""

    value: str


@dataclass(frozen=True)
class Array:
    """Ordered sequence of values."""

    items: tuple["Value", ...] = ()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator["Value"]:
        return iter(self.items)

    def __getitem__(self, index: int) -> "Value":
        return self.items[index]


@dataclass(frozen=True)
class Object:
    """
    Ordered sequence of (key, value) pairs.

    Duplicate keys are kept as separate entries in source order; nothing is
    overwritten. ``get`` returns the first match, ``get_all`` every match.
    """

    pairs: tuple[tuple[str, "Value"], ...] = ()

    def __len__(self) -> int:
        return len(self.pairs)

    def __iter__(self) -> Iterator[tuple[str, "Value"]]:
        return iter(self.pairs)

    def keys(self) -> list[str]:
        return [key for key, _ in self.pairs]

    @overload
    def get(self, key: str) -> "Value | None": ...

    @overload
    def get[T](self, key: str, default: T) -> "Value | T": ...

    def get(self, key: str, default: Any = None) -> Any:
        for name, value in self.pairs:
            if name == key:
                return value
        return default

    def get_all(self, key: str) -> list["Value"]:
        return [value for name, value in self.pairs if name == key]


type Value = Boolean | Number | Null | Array | String | Object


class Reader:
    """
    Cursor-based recursive-descent parser over a fixed input string.

    The cursor (``pos``) is a character index that only moves forward.
    ``parse`` skips separator noise, classifies the current character and
    hands off to the matching ``parse_*`` method; containers call back into
    ``parse`` for each member. Errors propagate unchanged to the caller.
    """

    def __init__(self, text: str, config: ParseConfig | None = None) -> None:
        if not isinstance(text, str):
            raise TypeError(
                f"the input must be str, not {type(text).__name__}"
            )
        self.text = text
        self.config = config if config is not None else ParseConfig()
        self.pos: Position = 0
        self._depth = 0

    def current(self) -> str | None:
        """Returns the character under the cursor, or None past the end."""
        return self.text[self.pos] if self.pos < len(self.text) else None

    def look_ahead(self, length: int) -> str:
        """
        Returns up to ``length`` characters starting just past the cursor.

        Yields a shorter (possibly empty) string near the end of input and
        never moves the cursor.
        """
        start = self.pos + 1
        return self.text[start : start + length]

    def advance(self, n: int = 1) -> None:
        """Moves the cursor forward without bounds checking."""
        self.pos += n

    def _fail(
        self, error: type[ParseError], msg: str, pos: Position | None = None
    ) -> ParseError:
        pos = self.pos if pos is None else pos
        logger.debug("parse aborted at char %d: %s", pos, msg)
        return error(msg, self.text, pos)

    @contextmanager
    def _nested(self) -> Iterator[None]:
        limit = self.config.max_depth
        if limit is not None and self._depth >= limit:
            raise self._fail(
                NestingTooDeep, f"Nesting deeper than {limit} levels"
            )
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def _skip_closing_quote(self) -> None:
        # parse_string leaves its closing quote for the container to absorb
        if self.current() == '"':
            self.advance()

    def parse(self) -> Value:
        """Parses the next value after any separator noise."""
        with ProfileContext("parse", self):
            char = self.current()
            while char is not None and char in _SKIP_CHARS:
                self.advance()
                char = self.current()

            if char is None:
                raise self._fail(EndOfStream, "Expecting value")
            elif char == "{":
                return self.parse_object()
            elif char in "TFtf":
                return self.parse_bool()
            elif char in _NUMBER_START:
                return self.parse_number()
            elif char in "Nn":
                return self.parse_null()
            elif char == "[":
                return self.parse_array()
            elif char == '"':
                return self.parse_string()
            else:
                raise self._fail(
                    InvalidFormat, f"Invalid format, found {char!r}"
                )

    def parse_bool(self) -> Boolean:
        """Parses true/false in any letter case."""
        with ProfileContext("parse_bool", self):
            char = self.current()
            if char is None:
                raise self._fail(EndOfStream, "Expecting boolean")

            if char in "tT":
                tail = self.look_ahead(3)
                if tail.lower() == "rue":
                    self.advance(4)
                    return Boolean(True)
            elif char in "fF":
                tail = self.look_ahead(4)
                if tail.lower() == "alse":
                    self.advance(5)
                    return Boolean(False)
            else:
                raise self._fail(
                    InvalidFormat, f"Invalid boolean, found {char!r}"
                )

            raise self._fail(
                InvalidFormat, f"Invalid boolean, found {char + tail!r}"
            )

    def parse_number(self) -> Number:
        """
        Parses a run of digits, dots and minus signs as a float.

        The scan is purely by character class; float() decides whether the
        run is actually a number.
        """
        with ProfileContext("parse_number", self):
            end = self.pos
            while end < len(self.text) and self.text[end] in _NUMBER_CHARS:
                end += 1
            raw = self.text[self.pos : end]

            try:
                value = float(raw)
            except ValueError as e:
                raise self._fail(
                    InvalidFormat, f"Invalid number format: {e}"
                ) from e

            self.advance(len(raw))
            return Number(value)

    def parse_null(self) -> Null:
        """Parses null; the tail after the first letter is case-sensitive."""
        with ProfileContext("parse_null", self):
            tail = self.look_ahead(3)
            if tail != "ull":
                raise self._fail(
                    InvalidFormat, f"Invalid null value, found {tail!r}"
                )
            self.advance(4)
            return Null()

    def parse_string(self) -> String:
        """
        Parses a string starting at its opening quote.

        Takes everything up to the next double quote verbatim, so a
        backslash-escaped quote ends the string. The closing quote is left
        under the cursor. Without a closing quote the rest of the input
        becomes the string, unless ``strict_eof`` is set.
        """
        with ProfileContext("parse_string", self):
            start = self.pos
            self.advance()
            if self.config.strict_eof and self.text.find('"', self.pos) < 0:
                raise self._fail(
                    EndOfStream, "Unterminated string starting at", start
                )
            return String(self.parse_key())

    def parse_key(self) -> str:
        """Scans raw text up to the next double quote, excluding it."""
        end = self.text.find('"', self.pos)
        if end < 0:
            end = len(self.text)
        key = self.text[self.pos : end]
        self.advance(len(key))
        return key

    def parse_array(self) -> Array:
        """Parses an array starting at its opening bracket."""
        with ProfileContext("parse_array", self), self._nested():
            start = self.pos
            items: list[Value] = []
            self.advance()

            while True:
                char = self.current()
                if char is None:
                    if self.config.strict_eof:
                        raise self._fail(
                            EndOfStream,
                            "Unterminated array starting at",
                            start,
                        )
                    break
                elif char in _ARRAY_SEPARATORS:
                    self.advance()
                elif char == "]":
                    self.advance()
                    break
                else:
                    value = self.parse()
                    if isinstance(value, String):
                        self._skip_closing_quote()
                    items.append(value)

            return Array(tuple(items))

    def parse_object(self) -> Object:
        """Parses an object starting at its opening brace."""
        with ProfileContext("parse_object", self), self._nested():
            start = self.pos
            pairs: list[tuple[str, Value]] = []
            self.advance()

            while True:
                char = self.current()
                if char is None:
                    if self.config.strict_eof:
                        raise self._fail(
                            EndOfStream,
                            "Unterminated object starting at",
                            start,
                        )
                    break
                elif char == "}":
                    self.advance()
                    break
                elif char in _OBJECT_SEPARATORS:
                    self.advance()
                    continue

                if char == '"':
                    self.advance()
                key = self.parse_key()
                self.advance()
                value = self.parse()
                if isinstance(value, String):
                    self._skip_closing_quote()
                pairs.append((key, value))

            return Object(tuple(pairs))


def loads(s: str, **kwargs: Any) -> Value:
    """
    Parses the first value in ``s``.

    Keyword arguments build the ParseConfig; anything after the first value
    is left unread.
    """
    return Reader(s, ParseConfig(**kwargs)).parse()


def to_python(
    value: Value, *, object_pairs_hook: ObjectPairsHook = None
) -> Any:
    """
    Converts a value tree into plain Python objects.

    Objects become dicts, so later duplicate keys win; pass
    ``object_pairs_hook`` to receive the ordered pairs instead.
    """
    if isinstance(value, Null):
        return None
    elif isinstance(value, Boolean | Number | String):
        return value.value
    elif isinstance(value, Array):
        return [
            to_python(item, object_pairs_hook=object_pairs_hook)
            for item in value.items
        ]
    elif isinstance(value, Object):
        pairs = [
            (key, to_python(item, object_pairs_hook=object_pairs_hook))
            for key, item in value.pairs
        ]
        if object_pairs_hook is not None:
            return object_pairs_hook(pairs)
        return dict(pairs)
    else:
        msg = f"Object of type {type(value).__name__} is not an lzon value"
        raise TypeError(msg)


__all__ = [
    "Array",
    "Boolean",
    "EndOfStream",
    "HotPathStats",
    "InvalidFormat",
    "NestingTooDeep",
    "Null",
    "Number",
    "Object",
    "ParseConfig",
    "ParseError",
    "Reader",
    "String",
    "Value",
    "clear_hot_path_stats",
    "get_hot_path_stats",
    "loads",
    "to_python",
]
