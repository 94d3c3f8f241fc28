import copy
from types import SimpleNamespace

import pytest
from bson import ObjectId

from ordermgmt import logger
from ordermgmt.domain import Customer, CustomerRequest, InvalidIdError, NotFoundError
from ordermgmt.repository.customer import MongoCustomerRepository


@pytest.fixture(autouse=True)
def _quiet_logging(tmp_path):
    logger.setup_logging(tmp_path, "ERROR", "")


class FakeCollection:
    def __init__(self, id_factory=ObjectId):
        self.docs = []
        self.id_factory = id_factory

    @staticmethod
    def _match(doc, flt):
        return all(doc.get(key) == value for key, value in flt.items())

    def find(self, flt):
        return [copy.deepcopy(doc) for doc in self.docs if self._match(doc, flt)]

    def find_one(self, flt):
        return next(iter(self.find(flt)), None)

    def insert_one(self, doc):
        doc = dict(doc)
        doc.setdefault("_id", self.id_factory())
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])

    def update_one(self, flt, update):
        matched = [doc for doc in self.docs if self._match(doc, flt)][:1]
        for doc in matched:
            doc.update(update["$set"])
        return SimpleNamespace(matched_count=len(matched))

    def find_one_and_delete(self, flt):
        found = self.find_one(flt)
        self.docs = [doc for doc in self.docs if not self._match(doc, flt)]
        return found


class FakeDatabase(dict):
    def __missing__(self, name):
        collection = self[name] = FakeCollection()
        return collection


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def repo(db):
    return MongoCustomerRepository(db)


def john():
    return CustomerRequest(name="John Doe", email="john@example.com", phone="[phone]")


def test_create_returns_customer_with_new_id(repo, db):
    created = repo.create(john())
    assert isinstance(created.id, ObjectId)
    assert (created.name, created.email, created.phone) == ("John Doe", "john@example.com", "[phone]")
    stored = db["customers"].docs[0]
    assert stored["_id"] == created.id
    assert stored["email"] == "john@example.com"


def test_create_rejects_non_object_id(db):
    db["customers"] = FakeCollection(id_factory=lambda: "not-an-object-id")
    with pytest.raises(RuntimeError):
        MongoCustomerRepository(db).create(john())


def test_get_by_id_round_trip(repo):
    created = repo.create(john())
    assert repo.get_by_id(str(created.id)) == created


def test_get_all(repo):
    assert repo.get_all() == []
    repo.create(john())
    repo.create(CustomerRequest(name="Jane Smith", email="jane@example.com", phone="[phone]"))
    customers = repo.get_all()
    assert [c.name for c in customers] == ["John Doe", "Jane Smith"]
    assert all(isinstance(c, Customer) for c in customers)


def test_update_sets_only_non_empty_fields(repo):
    created = repo.create(john())
    updated = repo.update(str(created.id), CustomerRequest(name="Johnny"))
    assert updated.name == "Johnny"
    assert updated.email == "john@example.com"
    assert updated.phone == "[phone]"
    assert repo.get_by_id(str(created.id)) == updated


def test_update_missing_returns_none(repo):
    assert repo.update(str(ObjectId()), CustomerRequest(name="Nobody")) is None


def test_delete_returns_removed_customer(repo):
    created = repo.create(john())
    assert repo.delete(str(created.id)) == created
    with pytest.raises(NotFoundError):
        repo.get_by_id(str(created.id))


def test_get_by_id_missing_raises(repo):
    missing = str(ObjectId())
    with pytest.raises(NotFoundError) as excinfo:
        repo.get_by_id(missing)
    assert missing in str(excinfo.value)


def test_delete_missing_raises_and_keeps_others(repo):
    kept = repo.create(john())
    missing = str(ObjectId())
    with pytest.raises(NotFoundError) as excinfo:
        repo.delete(missing)
    assert missing in str(excinfo.value)
    assert repo.get_all() == [kept]


def test_get_by_id_invalid_id_raises(repo):
    with pytest.raises(InvalidIdError):
        repo.get_by_id("invalid-id")


def test_update_invalid_id_changes_nothing(repo):
    created = repo.create(john())
    with pytest.raises(InvalidIdError):
        repo.update("xyz", CustomerRequest(name="Nobody"))
    assert repo.get_by_id(str(created.id)).name == "John Doe"


def test_delete_invalid_id_changes_nothing(repo):
    created = repo.create(john())
    with pytest.raises(InvalidIdError):
        repo.delete("invalid-id")
    assert repo.get_all() == [created]