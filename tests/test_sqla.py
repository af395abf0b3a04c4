from http import HTTPStatus

import pytest
from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import inspect as sqla_inspect

from jsonapi_compound import JsonApi, SQLAlchemyResource, jsonapi_document

db = SQLAlchemy()


class Author(db.Model):
    __tablename__ = "Authors"
    id = db.Column(db.String, primary_key=True)
    name = db.Column(db.String, default="")
    email = db.Column(db.String, default="")
    books = db.relationship("Book", back_populates="author", order_by="Book.id")


class Book(db.Model):
    __tablename__ = "Books"
    id = db.Column(db.String, primary_key=True)
    title = db.Column(db.String, default="")
    author_id = db.Column(db.String, db.ForeignKey("Authors.id"))
    author = db.relationship("Author", back_populates="books")
    reviews = db.relationship("Review", back_populates="book", order_by="Review.reviewer")


class Review(db.Model):
    __tablename__ = "Reviews"
    book_id = db.Column(db.String, db.ForeignKey("Books.id"), primary_key=True)
    reviewer = db.Column(db.String, primary_key=True)
    rating = db.Column(db.Integer)
    book = db.relationship("Book", back_populates="reviews")


class AuthorResource(SQLAlchemyResource):
    model = Author
    exclude_attrs = ["email"]


@pytest.fixture
def sqla_app():
    app = Flask("jsonapi_compound_sqla_tests")
    app.config["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
    db.init_app(app)
    JsonApi(app)

    with app.app_context():
        db.create_all()
        author = Author(id="author-1", name="Tolkien", email="jrr@example.com")
        hobbit = Book(id="book-1", title="The Hobbit", author=author)
        lotr = Book(id="book-2", title="The Lord of the Rings", author=author)
        db.session.add_all(
            [author, hobbit, lotr, Review(book=hobbit, reviewer="alice", rating=5), Review(book=hobbit, reviewer="bob", rating=4)]
        )
        db.session.commit()

        @app.route("/authors/<author_id>")
        def get_author(author_id):
            return jsonapi_document(AuthorResource.make(db.session.get(Author, author_id)))

        @app.route("/books")
        def get_books():
            return jsonapi_document(SQLAlchemyResource.collection(db.session.query(Book).order_by(Book.id)))

        yield app
        db.session.remove()
        db.drop_all()


def test_sqla_resource_object(sqla_app) -> None:
    response = sqla_app.test_client().get("/authors/author-1")

    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {
        "data": {"id": "author-1", "type": "authors", "attributes": {"name": "Tolkien"}, "relationships": {}},
    }


def test_sqla_include_nested_relationships(sqla_app) -> None:
    response = sqla_app.test_client().get("/authors/author-1?include=books.reviews")

    assert response.status_code == HTTPStatus.OK
    document = response.get_json()
    assert document["data"]["relationships"] == {
        "books": [{"data": {"id": "book-1", "type": "books"}}, {"data": {"id": "book-2", "type": "books"}}],
    }
    assert [(item["type"], item["id"]) for item in document["included"]] == [
        ("books", "book-1"),
        ("books", "book-2"),
        ("reviews", "book-1_alice"),
        ("reviews", "book-1_bob"),
    ]
    assert document["included"][0]["attributes"] == {"title": "The Hobbit", "author_id": "author-1"}
    assert document["included"][0]["relationships"] == {
        "reviews": [{"data": {"id": "book-1_alice", "type": "reviews"}}, {"data": {"id": "book-1_bob", "type": "reviews"}}],
    }
    assert document["included"][1]["relationships"] == {"reviews": []}
    assert document["included"][2]["attributes"] == {"rating": 5}


def test_sqla_related_instances_use_registered_resource(sqla_app) -> None:
    response = sqla_app.test_client().get("/books?include=author")

    assert response.status_code == HTTPStatus.OK
    document = response.get_json()
    assert document["data"][0]["relationships"] == {"author": {"data": {"id": "author-1", "type": "authors"}}}
    # the author is included once, rendered by AuthorResource (without email)
    assert document["included"] == [
        {"id": "author-1", "type": "authors", "attributes": {"name": "Tolkien"}, "relationships": {}},
    ]


def test_sqla_unrequested_relationships_are_not_loaded(sqla_app) -> None:
    with sqla_app.test_request_context("/authors/author-1?include="):
        db.session.expire_all()
        author = db.session.get(Author, "author-1")

        jsonapi_document(AuthorResource.make(author))

        assert "books" in sqla_inspect(author).unloaded


def test_sqla_exclude_rels(sqla_app) -> None:
    class BookResource(SQLAlchemyResource):
        exclude_rels = ["reviews"]

    with sqla_app.app_context():
        book = db.session.get(Book, "book-1")

        document = jsonapi_document(BookResource.make(book), include="reviews,author")

    assert document["data"]["relationships"] == {"author": {"data": {"id": "author-1", "type": "authors"}}}
