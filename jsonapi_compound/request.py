"""
http://jsonapi.org/format/#fetching-includes

The include query parameter is parsed lazily: the parse error (MalformedIncludeParameter)
is raised when the include paths are accessed while rendering the document, so it can be
handled by the JsonApi error handler.
"""
from functools import cached_property
from typing import Any, Tuple
from flask import Request
from .include import IncludePath, get_include_param, parse_include


# pylint: disable=too-many-ancestors
class JsonApiRequest(Request):
    """
    Parse the jsonapi related request arguments:
    - include: comma separated list of relationship paths
    """

    @cached_property
    def include_paths(self) -> Tuple[IncludePath, ...]:
        """
        :return: the include paths requested by the client
        """
        return parse_include(get_include_param(self.args))


def get_include_paths(request: Any) -> Tuple[IncludePath, ...]:
    """
    :param request: request context, a flask request or any object
    :return: the include paths requested in the request context
    """
    if request is None:
        return ()
    if isinstance(request, JsonApiRequest):
        return request.include_paths
    args = getattr(request, "args", None)
    if args is not None and hasattr(args, "getlist"):
        # a plain flask request, i.e. JsonApi was not initialized
        return parse_include(get_include_param(args))
    return parse_include(getattr(request, "include", None))
