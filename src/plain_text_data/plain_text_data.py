"""Main module."""

import sys
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Literal, TextIO, TypeAlias

from .utils import split_by_first_sep, strip_comments, trim

DEFAULT_COMMENT = "%"
DEFAULT_DELIMITER = ":"

Record: TypeAlias = tuple[str] | tuple[str, str]
Result: TypeAlias = dict[str, str] | list[str]
CommentOption: TypeAlias = str | Sequence[str] | Literal[False] | None
Logger: TypeAlias = Callable[[str], None]


class ParseError(ValueError):
    """Base class for documents that cannot be turned into a value."""

    reason = ""

    def __init__(self, record: Record, delimiter: str = DEFAULT_DELIMITER) -> None:
        self.record = record
        self.line = delimiter.join(record)
        super().__init__(f"Error at `{self.line}`: {self.reason}")


class ShapeMismatch(ParseError):
    """A line's shape (pair or bare value) differs from the first line's."""

    reason = (
        "Both property-value pairs and array values found. Make sure either exists."
    )


class DuplicateKey(ParseError):
    """A repeated key or value that the duplicate policy does not allow."""

    reason = (
        "Duplicate data found. Make sure, in objects, no duplicate properties "
        "exist; in arrays, no duplicate values."
    )


class Forgiving(Enum):
    STRICT = "strict"
    TOLERATE_IDENTICAL = "true"
    OVERWRITE = "fix"

    @classmethod
    def coerce(cls, value: "bool | str | Forgiving | None") -> "Forgiving":
        if isinstance(value, Forgiving):
            return value
        match value:
            case None | False | "strict" | "false":
                return cls.STRICT
            case True | "true" | "tolerate":
                return cls.TOLERATE_IDENTICAL
            case "fix":
                return cls.OVERWRITE
            case _:
                raise ValueError(f"Unknown forgiving policy: {value!r}")


def print_to_stderr(message: str) -> None:
    print(message, file=sys.stderr)


@dataclass
class ParseOptions:
    comment: CommentOption = DEFAULT_COMMENT
    delimiter: str | None = DEFAULT_DELIMITER
    forgiving: bool | str | Forgiving | None = False
    log: bool | None = True
    logger: Logger | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ParseOptions":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown parse options: {', '.join(unknown)}")
        return cls(**data)

    @property
    def comment_tokens(self) -> tuple[str, ...]:
        match self.comment:
            case None:
                return (DEFAULT_COMMENT,)
            case False | "":
                return ()
            case str():
                return (self.comment,)
            case Sequence() if all(isinstance(token, str) for token in self.comment):
                return tuple(token for token in self.comment if token)
            case _:
                raise ValueError(f"Unknown comment option: {self.comment!r}")

    @property
    def delimiter_token(self) -> str:
        return self.delimiter or DEFAULT_DELIMITER

    @property
    def policy(self) -> Forgiving:
        return Forgiving.coerce(self.forgiving)

    def emit(self, message: str) -> None:
        if self.log is None or self.log:
            (self.logger or print_to_stderr)(message)


def normalize_lines(text: str, comment: CommentOption = DEFAULT_COMMENT) -> list[str]:
    """Strip comments and surrounding whitespace, dropping lines left empty."""
    tokens = ParseOptions(comment=comment).comment_tokens
    lines = (trim(strip_comments(row, tokens)) for row in text.split("\n"))
    return [line for line in lines if line]


def split_pair(line: str, delimiter: str = DEFAULT_DELIMITER) -> Record:
    head, sep, tail = split_by_first_sep(delimiter, line)
    if not sep:
        return (trim(head),)
    return (trim(head), trim(tail))


def _first_char_code(record: Record) -> int:
    # empty heads order before everything else
    head = record[0]
    return ord(head[0]) if head else -1


def _check_records(records: list[Record], options: ParseOptions) -> bool:
    """Enforce a single document shape and the duplicate policy.

    Returns whether the document is made of pairs.
    """
    policy = options.policy
    delimiter = options.delimiter_token
    seen: dict[str, str | None] = {}
    is_pair: bool | None = None

    for record in records:
        current_is_pair = len(record) == 2
        if is_pair is None:
            is_pair = current_is_pair
        elif current_is_pair != is_pair:
            raise ShapeMismatch(record, delimiter)

        head = record[0]
        tail = record[1] if current_is_pair else None
        if head in seen:
            previous = seen[head]
            match policy:
                case Forgiving.STRICT:
                    raise DuplicateKey(record, delimiter)
                case Forgiving.TOLERATE_IDENTICAL:
                    if is_pair and tail != previous:
                        raise DuplicateKey(record, delimiter)
                    options.emit(f"Ignoring duplicate key for `{head}`")
                case Forgiving.OVERWRITE:
                    if is_pair and tail != previous:
                        options.emit(
                            f"Overwriting `{previous}` to `{tail}` for `{head}`"
                        )
                    else:
                        options.emit(f"Ignoring duplicate key for `{head}`")
        seen[head] = tail

    return bool(is_pair)


def _aggregate(records: list[Record], is_pair: bool) -> Result:
    if is_pair:
        values: dict[str, str] = {}
        for head, tail in sorted(records, key=_first_char_code):
            values[head] = tail
        return values
    return sorted(record[0] for record in records)


def parse(
    text: str, options: ParseOptions | None = None, **kwargs: Any
) -> Result:
    """Turn a plain-text document into a sorted list or a mapping.

    Args:
        text: the whole document; lines are separated by ``\\n``
        options: parse options; keyword arguments override its fields
    Returns:
        ``dict`` when every line is a ``key<delimiter>value`` pair,
        ``list`` when every line is a bare value
    Raises:
        ShapeMismatch: pairs and bare values are mixed
        DuplicateKey: a repeated key/value is not allowed by ``forgiving``
    """
    if options is None:
        options = ParseOptions(**kwargs)
    elif kwargs:
        options = ParseOptions(**{**vars(options), **kwargs})

    delimiter = options.delimiter_token
    lines = normalize_lines(text, options.comment)
    records = [split_pair(line, delimiter) for line in lines]
    return _aggregate(records, _check_records(records, options))


def load(
    fp: TextIO | Iterable[str], options: ParseOptions | None = None, **kwargs: Any
) -> Result:
    if isinstance(fp, str):
        return parse(fp, options, **kwargs)
    text = "\n".join(row.rstrip("\r\n") for row in fp)
    return parse(text, options, **kwargs)


def dump(
    value: Mapping[str, str] | Iterable[str],
    fp: TextIO | None = None,
    *,
    delimiter: str = DEFAULT_DELIMITER,
    batch_size=10000,
) -> list[str]:
    """Render a parsed value back to lines, optionally writing them to ``fp``."""
    if isinstance(value, Mapping):
        lines = [f"{k}{delimiter} {v}".rstrip() for k, v in value.items()]
    else:
        lines = list(value)
    if fp is not None:
        for i in range(0, len(lines), batch_size):
            batch = lines[i : i + batch_size]
            fp.write("\n".join(batch))
            fp.write("\n")
    return lines
