import logging
from http import HTTPStatus

import pytest
from flask import Flask

import jsonapi_compound
from jsonapi_compound import (
    GenericError,
    JsonApi,
    MalformedIncludeParameter,
    RelationshipResolutionFailure,
    ValidationError,
    jsonapi_document,
)
from jsonapi_compound.config import get_config, is_debug
from jsonapi_compound.errors import HIDDEN_LOG
from tests.resources import BasicModel, PostResource


def test_get_config_prefers_app_config(app) -> None:
    app.config["DEFAULT_INCLUDED"] = "author"

    with app.app_context():
        assert get_config("DEFAULT_INCLUDED") == "author"


def test_get_config_falls_back_to_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JSONAPI_TEST_OPTION", "value")

    assert get_config("JSONAPI_TEST_OPTION") == "value"
    assert get_config("DEFAULT_INCLUDED") == ""


def test_generic_error_hides_details(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(jsonapi_compound.log, "level", logging.WARNING)

    exc = GenericError("database password is hunter2")

    assert not is_debug()
    assert exc.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert exc.to_dict() == {"errors": [{"title": "Generic Error: ", "detail": "Generic Error: " + HIDDEN_LOG, "code": "500"}]}


def test_generic_error_details_in_debug_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(jsonapi_compound.log, "level", logging.DEBUG)

    exc = RelationshipResolutionFailure("producer failed")

    assert is_debug()
    assert exc.message == "Relationship Error: producer failed"


def test_validation_error_message_is_shown() -> None:
    exc = ValidationError("bad input")

    assert exc.status_code == HTTPStatus.BAD_REQUEST
    assert exc.message == "Validation Error: bad input"
    assert str(exc) == "Validation Error: bad input"


def test_malformed_include_parameter_body() -> None:
    exc = MalformedIncludeParameter()

    assert isinstance(exc, ValidationError)
    assert exc.to_dict() == {"message": "The include parameter must be a comma seperated list of relationship paths."}


def test_error_handler_renders_jsonapi_errors(app) -> None:
    @app.route("/fail")
    def fail():
        raise ValidationError("bad input")

    response = app.test_client().get("/fail")

    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json() == {"errors": [{"title": "Validation Error: ", "detail": "Validation Error: bad input", "code": "400"}]}


@pytest.fixture
def restore_log_level():
    level = jsonapi_compound.log.level
    yield
    jsonapi_compound.log.setLevel(level)


def test_app_config_does_not_leak_between_apps() -> None:
    first = Flask("jsonapi_compound_first")
    first.config["DEFAULT_INCLUDED"] = "author"
    JsonApi(first)

    second = Flask("jsonapi_compound_second")
    JsonApi(second)

    # the post has no author: resolving "author" would fail the request
    post = BasicModel(id="post-id", title="post-title", content="post-content")
    second.add_url_rule("/posts", "posts", lambda: jsonapi_document(PostResource.make(post)))

    response = second.test_client().get("/posts")

    assert response.status_code == HTTPStatus.OK
    assert "included" not in response.get_json()
    with first.app_context():
        assert get_config("DEFAULT_INCLUDED") == "author"
    with second.app_context():
        assert get_config("DEFAULT_INCLUDED") == ""


def test_extension_kwargs_are_stored_on_the_class(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(JsonApi, "DEFAULT_INCLUDED", JsonApi.DEFAULT_INCLUDED)

    JsonApi(Flask("jsonapi_compound_kwargs"), DEFAULT_INCLUDED="author")
    other = Flask("jsonapi_compound_other")

    assert JsonApi.DEFAULT_INCLUDED == "author"
    with other.app_context():
        assert get_config("DEFAULT_INCLUDED") == "author"


def test_flask_debug_lowers_the_log_level(restore_log_level) -> None:
    jsonapi_compound.log.setLevel(logging.WARNING)
    app = Flask("jsonapi_compound_debug")
    app.config["DEBUG"] = True

    JsonApi(app)

    assert jsonapi_compound.log.level == logging.DEBUG
    assert is_debug()


def test_log_level_unchanged_without_flask_debug(restore_log_level) -> None:
    jsonapi_compound.log.setLevel(logging.WARNING)

    JsonApi(Flask("jsonapi_compound_nodebug"))

    assert jsonapi_compound.log.level == logging.WARNING
    assert not is_debug()
