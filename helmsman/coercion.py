"""
Helmsman type coercion and post-parse validation.

coerce(raw, option)
- raw is either True (a bare flag) or the token text that followed the option.
- bool:   True/False as-is; the strings 'true'/'false' (case-sensitive); nothing else.
- number: never a bare flag; the text must parse as a float.
- string: never a bare flag; text that parses as a number is rejected so stray
          numerics are not mistaken for names; choices are checked by exact match.

validate(result, schema)
- injects defaults for options absent from the result;
- fails fast on the first required option (schema order) that is still absent.
"""
from .faults import *
from .values import Kind, kindof, parse_number


def _uncoercible(raw, option):
    shown = "a bare flag" if raw is True else repr(raw)
    return CoercionError(
        "option %r expects a %s, got %s" % (option.name, option.type, shown),
        title="invalid option value",
        code=FaultCode.UNCOERCIBLE_VALUE,
        hint="pass a %s value (for example: --%s <%s>)" % (option.type, option.name, option.type),
        option=option,
        input=raw,
        expected=option.type,
        docs=getdoc(FaultCode.UNCOERCIBLE_VALUE)
    )


def coerce(raw, option, /):
    """
    convert a raw value into the option's declared type.

    returns
    - bool | str | float

    raises
    - CoercionError when the value cannot take the declared type.
    - InvalidChoiceError when a string value is not one of the option's choices.
    """
    match option.type:
        case Kind.BOOL:
            if isinstance(raw, bool):
                return raw
            if raw in ("true", "false"):
                return raw == "true"
            raise _uncoercible(raw, option)
        case Kind.NUMBER:
            if isinstance(raw, bool):
                raise _uncoercible(raw, option)
            if kindof(value := parse_number(raw)) is not Kind.NUMBER:
                raise _uncoercible(raw, option)
            return value
        case Kind.STRING:
            if isinstance(raw, bool) or kindof(parse_number(raw)) is Kind.NUMBER:
                raise _uncoercible(raw, option)
            if option.choices and raw not in option.choices:
                raise InvalidChoiceError(
                    "option %r must be one of: [%s], got %r" % (option.name, ", ".join(option.choices), raw),
                    title="invalid choice",
                    code=FaultCode.INVALID_CHOICE,
                    hint="pick one of %s" % ", ".join(map(repr, option.choices)),
                    option=option,
                    input=raw,
                    expected=option.type,
                    choices=option.choices,
                    docs=getdoc(FaultCode.INVALID_CHOICE)
                )
            return raw
    raise RuntimeError("unreachable")


def validate(result, schema, /):
    """
    complete a parse result against its schema.

    defaults are injected in place for absent options; then the first required
    option that is still absent raises MissingRequiredOptionError.

    returns
    - the same ParseResult, for chaining.
    """
    for option in schema:
        if option.default is not None:
            result.options.setdefault(option.name, option.default)

    for option in schema:
        if option.required and option.name not in result.options:
            spelled = " (-%s)" % option.alias if option.alias else ""
            value = "" if option.type is Kind.BOOL else " <%s>" % option.type
            raise MissingRequiredOptionError(
                "missing required option: --%s%s" % (option.name, spelled),
                title="missing required option",
                code=FaultCode.MISSING_REQUIRED_OPTION,
                hint="pass %s%s" % (" or ".join(reversed(option.flags)), value),
                option=option,
                docs=getdoc(FaultCode.MISSING_REQUIRED_OPTION)
            )

    return result


__all__ = (
    "coerce",
    "validate",
)
