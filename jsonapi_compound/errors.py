# Exception Handlers
#
# The application loglevel determines the level of detail shown to the user.
# If set to debug, too much sensitive info might be shown !
#
# The exceptions are rendered by the JsonApi error handler, for example:
# {
#     "errors": [
#         {
#             "title": "Generic Error: ",
#             "detail": "Generic Error: (debug logging disabled)",
#             "code": "500"
#         }
#     ]
# }
#
import traceback
from http import HTTPStatus
from flask import request, has_request_context
from sqlalchemy.exc import DontWrapMixin
import jsonapi_compound
from .config import is_debug

HIDDEN_LOG = "(debug logging disabled)"


class JsonapiError(Exception, DontWrapMixin):
    """
    Base class for the errors that are rendered as a jsonapi error response
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value
    message = ""
    title = ""

    def to_dict(self):
        """
        :return: json serializable error document
        """
        error = dict(title=self.title or self.message, detail=self.message, code=str(self.status_code))
        return {"errors": [error]}

    def __str__(self):
        return self.message


class GenericError(JsonapiError):
    """
    This exception is raised when an error has been detected
    """

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR.value  # 500
    title = "Generic Error: "

    def __init__(self, message, status_code=HTTPStatus.INTERNAL_SERVER_ERROR.value):
        Exception.__init__(self)
        self.status_code = status_code
        self.message = self.title
        jsonapi_compound.log.error("Generic Error: %s", message)
        if is_debug():
            if has_request_context():
                jsonapi_compound.log.info(f"Error in {request.url}")
            jsonapi_compound.log.debug(traceback.format_exc(120))
            self.message += str(message)
        else:
            self.message += HIDDEN_LOG


class RelationshipResolutionFailure(GenericError):
    """
    This exception is raised when a requested relationship could not be resolved,
    i.e. its producer raised or returned something that isn't a resource
    """

    title = "Relationship Error: "


class ValidationError(JsonapiError):
    """
    This exception is raised when invalid input has been detected (client side input)
    Always send back the message to the client in the response
    """

    status_code = HTTPStatus.BAD_REQUEST.value
    title = "Validation Error: "

    def __init__(self, message="", status_code=HTTPStatus.BAD_REQUEST.value):
        Exception.__init__(self)
        self.status_code = status_code
        jsonapi_compound.log.warning("ValidationError: %s", message)
        self.message = self.title + message


class MalformedIncludeParameter(ValidationError):
    """
    The include= query parameter was sent as an array (eg. include[]=author)
    instead of a comma separated string
    """

    title = ""
    default_message = "The include parameter must be a comma seperated list of relationship paths."

    def __init__(self, message=default_message, status_code=HTTPStatus.BAD_REQUEST.value):
        super().__init__(message, status_code)

    def to_dict(self):
        return {"message": self.message}
