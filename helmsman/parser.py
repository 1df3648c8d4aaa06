"""
Helmsman tokenizer/resolver.

parse(tokens, schema) turns a flat argument list (program name excluded) into a
ParseResult: the command token, the positional arguments and an option → value
mapping keyed by option name.

token classes
- long option:   starts with '--'                        → '--name'
- alias:         starts with '-', 2..4 chars, 2nd not '-'  → '-D', '-ab'
- positional:    anything else (including '-' and '-long-word')

resolution rules
- defaults are pre-populated before scanning.
- a candidate matches an option by name first, then by alias.
- boolean options never need a value; a following literal 'true'/'false' is
  consumed as their value, any other token is left for the scan.
- other options consume the following token when it is not option-shaped.
  With nothing to consume, strict parsing raises MissingValueError; lenient
  parsing (used to sniff --help/--version) records the implicit True, which is
  then coerced like any other raw value.
- multi-character aliases ('-ab') are matched as a single alias and advance one
  token only, even when they read the following token as their value.
- unmatched option tokens are ignored and advance one token; unknown-flag
  reporting is left to presentation layers.
- the first positional token is the command; later ones are arguments.
"""
import logging
from typing import NamedTuple

from .coercion import coerce
from .faults import *
from .utils import ordinal
from .values import Kind, Value

logger = logging.getLogger(__name__)


class ParseResult(NamedTuple):
    """
    structured outcome of one parse pass (fresh per call).

    - command: the first positional token, or None.
    - args: the remaining positional tokens, in order.
    - options: option name → coerced value; defaults included.
    """
    command: str | None
    args: tuple[str, ...]
    options: dict[str, Value]


def is_long(token, /):
    return token.startswith("--")


def is_alias(token, /):
    return token.startswith("-") and 2 <= len(token) <= 4 and token[1] != "-"


def is_switch(token, /):
    """
    option-shaped tokens never serve as another option's value.
    """
    return is_long(token) or is_alias(token)


def _lookup(schema, candidate, memo, /):
    """
    resolve a candidate (without dashes) to an option; names win over aliases.

    memo is local to a single parse call, so a later pass over a different
    schema can never observe a previous match.
    """
    key = (candidate, len(schema))
    try:
        return memo[key]
    except KeyError:
        pass
    option = next((option for option in schema if option.name == candidate), None)
    if option is None:
        option = next((option for option in schema if option.alias == candidate), None)
    memo[key] = option
    return option


def parse(tokens, schema, /, *, strict=True):
    """
    scan tokens left to right against a flat option schema.

    parameters
    - tokens: Sequence[str]
      raw arguments, program name excluded.
    - schema: Sequence[Option]
      the resolution scope (global options, or global + command options).
    - strict: bool (keyword-only)
      when True, a non-boolean option without a value raises MissingValueError.

    returns
    - ParseResult

    raises
    - MissingValueError (strict only), CoercionError / InvalidChoiceError.
    """
    tokens = list(tokens)
    options = {option.name: option.default for option in schema if option.default is not None}
    command = None
    args = []
    memo = {}

    index = 0
    while index < len(tokens):
        token = tokens[index]

        if not token:
            index += 1
            continue

        if not is_switch(token):
            if command is None and not args:
                command = token
            else:
                args.append(token)
            index += 1
            continue

        candidate = token[2:] if is_long(token) else token[1:]
        option = _lookup(schema, candidate, memo)
        if option is None:
            logger.debug("ignoring unmatched option %r at %s position", token, ordinal(index + 1))
            index += 1
            continue

        following = tokens[index + 1] if index + 1 < len(tokens) else None
        consumed = False

        if option.type is Kind.BOOL:
            raw = True
            if following in ("true", "false"):
                raw = following
                consumed = True
        elif following is not None and not is_switch(following):
            raw = following
            consumed = True
        elif strict:
            raise MissingValueError(
                "option %r at %s position expects a %s value" % (token, ordinal(index + 1), option.type),
                title="missing option value",
                code=FaultCode.MISSING_VALUE,
                hint="pass a value after %s (for example: %s <value>)" % (token, token),
                option=option,
                input=token,
                index=index + 1,
                docs=getdoc(FaultCode.MISSING_VALUE)
            )
        else:
            raw = True

        options[option.name] = coerce(raw, option)

        if is_alias(token) and len(candidate) > 1:
            index += 1
        else:
            index += 2 if consumed else 1

    return ParseResult(command, tuple(args), options)


__all__ = (
    "ParseResult",
    "is_long",
    "is_alias",
    "is_switch",
    "parse",
)
