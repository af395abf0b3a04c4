# Configuration settings should be set in app.config
# get_config falls back to the JsonApi class attributes and the environment
# so the engine can also be used without a Flask application
import os
import logging
from flask import current_app
import jsonapi_compound
from typing import Optional, Union


def get_config(option: str) -> Optional[Union[bool, str, int]]:
    """Retrieve a configuration parameter from the app
    :param option: configuration parameter
    :return: configuration value
    """
    try:
        result = current_app.config[option]
    except (KeyError, RuntimeError):
        # KeyError: not configured in the app, RuntimeError: no app context
        result = getattr(jsonapi_compound.JsonApi, option, os.environ.get(option, None))
    return result


def is_debug() -> bool:
    """
    We use the loglevel to check whether we're running in debug mode
    :return: whether the app is in debug mode
    :rtype: Boolean
    """
    return jsonapi_compound.log.getEffectiveLevel() < logging.INFO
