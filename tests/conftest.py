import pytest
from flask import Flask
from jsonapi_compound import JsonApi


@pytest.fixture
def app() -> Flask:
    app = Flask("jsonapi_compound_tests")
    JsonApi(app)
    return app


@pytest.fixture
def get_json_api(app: Flask):
    """
    Register `view` on /test-route and GET it with the given query string
    """

    def get(view, query: str = ""):
        app.add_url_rule("/test-route", "test_route", view)
        return app.test_client().get(f"/test-route{query}")

    return get
