"""Parser for @param declarations."""

from __future__ import annotations

import re

from .models import UNDEFINED_TYPE, NgdocsError, ParamField, ParamType

# {type1|type2=} name-token description
_PARAM_RE = re.compile(r"(\{([^}]+)\})?\s*([\[\]=\w|]+)\s+([\s\S]+)")


class ParamSyntaxError(NgdocsError, ValueError):
    """Raised when a @param value does not follow the param grammar."""

    pass


def _parse_types(types: str) -> tuple[list[ParamType], bool]:
    optional = False
    parsed = []
    for entry in types.split("|"):
        if "=" in entry:
            optional = True
        name = re.sub(r"=.*", "", entry)
        normalized = "function" if "function" in name else name
        parsed.append(ParamType(name=name, type=normalized.lower()))
    return parsed, optional


def parse_param(raw: str) -> ParamField:
    """Parse the text following ``@param``.

    Examples:
        ``{string=} [name|alias=x] Some text`` gives an optional field named
        ``name`` with alt name ``alias`` and default ``x``.

    Raises:
        ParamSyntaxError: If no name token followed by a description is found.
    """
    match = _PARAM_RE.search(raw)
    if not match:
        raise ParamSyntaxError(f"Invalid @param declaration: {raw!r}")

    types, name_token, description = match.group(2), match.group(3), match.group(4)

    optional = False
    if types:
        param_type, optional = _parse_types(types)
    else:
        param_type = UNDEFINED_TYPE

    # Brackets are dropped; only a "=" in the type marks the field optional
    var_name = name_token.replace("[", "", 1).replace("]", "", 1)
    alt_name = None
    if "|" in var_name:
        names = var_name.split("|")
        var_name, alt_name = names[0], names[1]

    default_value = None
    default_match = re.search(r"=(.*)", var_name)
    if default_match:
        default_value = default_match.group(1)
        var_name = var_name.replace("=" + default_value, "", 1)

    return ParamField(
        type=param_type,
        var_name=var_name,
        alt_name=alt_name,
        description=description,
        optional=optional,
        default_value=default_value,
    )
