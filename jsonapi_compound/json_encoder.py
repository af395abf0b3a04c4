# jsonapi document encoding

import datetime
import decimal
import json
from uuid import UUID
from flask.json.provider import DefaultJSONProvider
import jsonapi_compound


class _JsonApiJSONEncoder:
    """
    JSON encoding for the attribute values found in jsonapi documents
    """

    # pylint: disable=too-many-return-statements,method-hidden
    def default(self, obj, **kwargs):
        """
        override the default json encoding
        :param obj: object to be encoded
        :return: encoded/serialized object
        """
        if obj is None:
            return None
        if isinstance(obj, datetime.timedelta):
            return str(obj)
        if isinstance(obj, datetime.datetime):
            return obj.isoformat(" ")
        if isinstance(obj, (datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, set):
            return list(obj)
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, decimal.Decimal):
            return float(obj)
        if isinstance(obj, bytes):
            if obj == b"":
                return ""
            jsonapi_compound.log.debug("JsonApiJSONEncoder: serializing bytes obj")
            return obj.hex()

        jsonapi_compound.log.warning(f'JSON Encoding Error: Unknown object type "{type(obj)}" for {obj}')
        raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JsonApiJSONProvider(_JsonApiJSONEncoder, DefaultJSONProvider):
    """
    Flask JSON encoding
    """

    mimetype = "application/vnd.api+json"
    # keep the attribute and relationship order of the resources
    sort_keys = False


class JsonApiJSONEncoder(_JsonApiJSONEncoder, json.JSONEncoder):
    """
    Common JSON encoding, eg. json.dumps(document, cls=JsonApiJSONEncoder)
    """

    pass
