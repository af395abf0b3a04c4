# flake8: noqa: F401
#
# jsonapi_compound renders in-memory object graphs as JSON:API compound documents,
# the include= query parameter determines which relationships are resolved and included
#
from .jsonapi_init import JsonApi, log
from .errors import JsonapiError, ValidationError, GenericError, MalformedIncludeParameter, RelationshipResolutionFailure
from .include import parse_include, group_paths
from .resource import JsonApiResource, ResourceIdentifier, ResourceNode
from .collector import IncludedSet
from .resolver import RelationshipResolver
from .document import DocumentAssembler, jsonapi_document
from .request import JsonApiRequest
from .json_encoder import JsonApiJSONProvider, JsonApiJSONEncoder
from .sqla import SQLAlchemyResource
from .__about__ import __version__, __description__

__all__ = (
    "__version__",
    "__description__",
    #
    "JsonApi",
    "log",
    # resources:
    "JsonApiResource",
    "ResourceIdentifier",
    "ResourceNode",
    "SQLAlchemyResource",
    # document:
    "jsonapi_document",
    "DocumentAssembler",
    "RelationshipResolver",
    "IncludedSet",
    "parse_include",
    "group_paths",
    # flask:
    "JsonApiRequest",
    "JsonApiJSONProvider",
    "JsonApiJSONEncoder",
    # Errors:
    "JsonapiError",
    "ValidationError",
    "GenericError",
    "MalformedIncludeParameter",
    "RelationshipResolutionFailure",
)
