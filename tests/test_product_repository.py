import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId
from pymongo import ReturnDocument

from ordermgmt import logger
from ordermgmt.domain import InvalidIdError, NotFoundError, ProductRequest
from ordermgmt.repository.product import MongoProductRepository


@pytest.fixture(autouse=True)
def _quiet_logging(tmp_path):
    logger.setup_logging(tmp_path, "ERROR", "")


class FakeProducts:
    """Documents kept in a dict keyed by their _id."""

    def __init__(self, id_factory=ObjectId):
        self.store = {}
        self.new_id = id_factory

    def find(self, query):
        assert query == {}
        return copy.deepcopy(list(self.store.values()))

    def find_one(self, query):
        return copy.deepcopy(self.store.get(query["_id"]))

    def insert_one(self, document):
        key = self.new_id()
        self.store[key] = {**document, "_id": key}
        return SimpleNamespace(inserted_id=key)

    def find_one_and_update(self, query, update, return_document):
        assert return_document == ReturnDocument.AFTER
        target = self.store.get(query["_id"])
        if target is not None:
            target.update(update["$set"])
        return copy.deepcopy(target)

    def find_one_and_delete(self, query):
        return self.store.pop(query["_id"], None)


@pytest.fixture
def db():
    return {"products": FakeProducts()}


@pytest.fixture
def repo(db):
    return MongoProductRepository(db)


def widget():
    return ProductRequest(name="Widget", price=2.5, stock=10)


def test_create_and_get_round_trip(repo, db):
    created = repo.create(widget())
    assert isinstance(created.id, ObjectId)
    assert (created.name, created.price, created.stock) == ("Widget", 2.5, 10)
    assert repo.get_by_id(str(created.id)) == created
    assert db["products"].store[created.id]["name"] == "Widget"


def test_create_rejects_non_object_id():
    db = {"products": FakeProducts(id_factory=lambda: 7)}
    with pytest.raises(RuntimeError):
        MongoProductRepository(db).create(widget())


def test_get_by_id_missing(repo):
    with pytest.raises(NotFoundError):
        repo.get_by_id(str(ObjectId()))


def test_get_all(repo):
    assert repo.get_all() == []
    first = repo.create(widget())
    second = repo.create(ProductRequest(name="Gadget", price=4.0, stock=3))
    assert repo.get_all() == [first, second]


@pytest.mark.parametrize(
    "change, expected",
    [
        (ProductRequest(name="Widget Pro", price=3.0, stock=5), ("Widget Pro", 3.0, 5)),
        (ProductRequest(name="", price=0.0, stock=0), ("Widget", 2.5, 0)),
        (ProductRequest(name="", price=0.0, stock=-1), ("Widget", 2.5, 10)),
    ],
)
def test_update_rules(repo, change, expected):
    created = repo.create(widget())
    updated = repo.update(str(created.id), change)
    assert (updated.name, updated.price, updated.stock) == expected
    assert repo.get_by_id(str(created.id)) == updated


def test_delete(repo):
    created = repo.create(widget())
    assert repo.delete(str(created.id)) == created
    assert repo.get_all() == []


@pytest.mark.parametrize(
    "call",
    [lambda r: r.update(str(ObjectId()), widget()), lambda r: r.delete(str(ObjectId()))],
)
def test_missing_product_gives_none(repo, call):
    assert call(repo) is None


@pytest.mark.parametrize(
    "call",
    [
        lambda r: r.get_by_id("not-hex"),
        lambda r: r.update("not-hex", widget()),
        lambda r: r.delete("bad"),
    ],
)
def test_invalid_id_raises(repo, call):
    with pytest.raises(InvalidIdError):
        call(repo)