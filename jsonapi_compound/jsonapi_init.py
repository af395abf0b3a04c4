import logging
import os
import sys
from flask import Flask, jsonify
from .errors import JsonapiError
from .request import JsonApiRequest
from .json_encoder import JsonApiJSONProvider
import flask.app


class JsonApi:
    """This class configures the Flask application to render JSON:API compound documents
    :param app: a Flask application.
    :param LOGLEVEL: loglevel configuration variable, values from logging module (0: trace, .. 50: critical)
    """

    # Configuration settings are stored as class variables
    LOGLEVEL = logging.WARNING
    DEFAULT_INCLUDED = ""  # include= value used when the client doesn't send one

    def __init__(self, app: flask.app.Flask = None, **kwargs) -> None:
        """
        Constructor
        """
        self.app = app
        if app is not None:
            self.init_app(app, **kwargs)

    def init_app(self, app: flask.app.Flask, **kwargs) -> None:
        """
        Install the jsonapi request class, json provider and error handler
        """
        if not isinstance(app, Flask):  # pragma: no cover
            raise TypeError("'app' should be Flask.")

        app.request_class = JsonApiRequest
        app.json = JsonApiJSONProvider(app)

        if app.config.get("DEBUG", False):
            log.setLevel(logging.DEBUG)

        # app.config is read by get_config, only the extension kwargs are stored on the class
        for conf_name, conf_val in kwargs.items():
            setattr(JsonApi, conf_name, conf_val)

        @app.errorhandler(JsonapiError)
        def handle_jsonapi_error(exc):
            response = jsonify(exc.to_dict())
            response.status_code = exc.status_code
            return response

    @staticmethod
    def init_logging(loglevel: int = logging.WARNING) -> logging.Logger:
        """
        Specify the log format used in the webserver logs
        The webserver will catch stderr so we log everything there
        """
        log = logging.getLogger(__name__)
        if log.level == logging.NOTSET:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter("[%(asctime)s] %(levelname)s: %(message)s")
            handler.setFormatter(formatter)
            log.setLevel(loglevel)
            log.addHandler(handler)
        return log


#
# logging initialization
#
try:
    DEBUG = os.getenv("DEBUG", logging.WARNING)
    LOGLEVEL = int(DEBUG)
except ValueError:  # pragma: no cover
    print(f'Invalid LogLevel in DEBUG Environment Variable! "{DEBUG}"')
    LOGLEVEL = logging.INFO

log = JsonApi.init_logging(LOGLEVEL)
