"""
https://jsonapi.org/format/#fetching-includes

Inclusion of Related Resources

An endpoint MAY support an include request parameter to allow the client
to customize which related resources should be returned.
The value of the include parameter MUST be a comma-separated (U+002C COMMA, ",")
list of relationship paths. A relationship path is a dot-separated (U+002E FULL-STOP, ".")
list of relationship names.

    include=author.avatar,author.license,featureImage

is parsed to the include paths

    (("author", "avatar"), ("author", "license"), ("featureImage",))
"""
import re
from typing import Any, Dict, Iterable, List, Tuple
from .config import get_config
from .errors import MalformedIncludeParameter

IncludePath = Tuple[str, ...]

INCLUDE_PARAM = "include"
# include[]=x, include[0]=x: php/rails style array parameters
INCLUDE_ARRAY_RE = re.compile(r"^include\[.*\]$")


def parse_include(value: Any) -> Tuple[IncludePath, ...]:
    """
    :param value: raw include query parameter value (None, "" or a comma separated string)
    :return: tuple of unique include paths, in the order they were first seen

    Tokens are not stripped: "author, comments" yields the path (" comments",),
    which matches no relationship and is ignored.
    """
    if value is None:
        return ()
    if not isinstance(value, str):
        # lists, tuples, dicts ...: the parameter was sent as an array
        raise MalformedIncludeParameter()

    result = []
    for token in value.split(","):
        if not token:
            # trailing or duplicate comma
            continue
        path = tuple(token.split("."))
        if path not in result:
            result.append(path)

    return tuple(result)


def group_paths(paths: Iterable[IncludePath]) -> Dict[str, List[IncludePath]]:
    """
    Group the include paths by their first segment (the relationship name)

    :param paths: include paths
    :return: dict of relationship name -> list of the (non-empty) remaining paths

    eg. [("a", "b"), ("a", "c"), ("d",)] => {"a": [("b",), ("c",)], "d": []}
    """
    result: Dict[str, List[IncludePath]] = {}
    for path in paths:
        rel_name, suffix = path[0], path[1:]
        suffixes = result.setdefault(rel_name, [])
        if suffix and suffix not in suffixes:
            suffixes.append(suffix)
    return result


def get_include_param(args) -> Any:
    """
    Retrieve the raw include value from the request query args

    :param args: werkzeug MultiDict (request.args)
    :return: the include string, or a list if the parameter was sent as an array
    """
    array_values = [val for arg in args.keys() if INCLUDE_ARRAY_RE.match(arg) for val in args.getlist(arg)]
    values = args.getlist(INCLUDE_PARAM)
    if array_values or len(values) > 1:
        return values + array_values
    if values:
        return values[0]
    return get_config("DEFAULT_INCLUDED")
