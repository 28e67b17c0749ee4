from __future__ import annotations

import copy
import re
import sqlite3
from datetime import datetime
from pathlib import Path

import pytest
from bson import ObjectId

from database.utils import CREATE_ITEMS_TABLE

GADGET_ID = ObjectId("64b7f0c2a1b2c3d4e5f60718")


def matches(document: dict, query: dict) -> bool:
    for field, condition in query.items():
        value = document.get(field)
        if isinstance(condition, dict) and "$regex" in condition:
            flags = re.IGNORECASE if "i" in condition.get("$options", "") else 0
            if not isinstance(value, str) or not re.search(condition["$regex"], value, flags):
                return False
        elif isinstance(condition, dict) and "$in" in condition:
            if value not in condition["$in"]:
                return False
        elif value != condition:
            return False
    return True


class FakeCursor:
    def __init__(self, documents: list[dict]):
        self.documents = documents

    async def to_list(self, length=None):
        return self.documents if length is None else self.documents[:length]


class FakeCollection:
    """Just enough of a Motor collection for equality and $regex filters."""

    def __init__(self, documents=None, error: Exception | None = None):
        self.documents = list(documents or [])
        self.error = error
        self.queries: list[dict] = []

    async def find_one(self, query: dict):
        self.queries.append(query)
        if self.error:
            raise self.error
        for document in self.documents:
            if matches(document, query):
                return copy.deepcopy(document)
        return None

    def find(self, query: dict) -> FakeCursor:
        self.queries.append(query)
        if self.error:
            raise self.error
        return FakeCursor([copy.deepcopy(d) for d in self.documents if matches(d, query)])


class FakeDatabase:
    def __init__(self, **collections: FakeCollection):
        self.collections = collections

    def __getitem__(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection())


@pytest.fixture
def item_documents() -> list[dict]:
    return [
        {"_id": "1", "itemDescription": "Red Widget", "upc": "00012345", "price": 2.5},
        {
            "_id": GADGET_ID,
            "itemDescription": "Blue Gadget",
            "upc": "000123456",
            "createdDate": datetime(2024, 1, 5, 12, 30),
            "brandId": ObjectId("64b7f0c2a1b2c3d4e5f60799"),
        },
        {"_id": "3", "itemDescription": "a.c Connector", "upc": "77"},
        {"_id": "4", "itemDescription": "abc Tool", "upc": "78"},
        {"_id": "5", "itemDescription": "50% off_cut", "upc": "79"},
    ]


@pytest.fixture
def mongo_db(item_documents) -> FakeDatabase:
    return FakeDatabase(items=FakeCollection(item_documents))


@pytest.fixture
def sqlite_path(tmp_path: Path) -> str:
    path = str(tmp_path / "catalog.db")
    conn = sqlite3.connect(path)
    conn.execute(CREATE_ITEMS_TABLE)
    conn.executemany(
        "INSERT INTO items (id, itemDescription, upc, extra) VALUES (?, ?, ?, ?)",
        [
            ("1", "Red Widget", "00012345", '{"price": 2.5}'),
            (str(GADGET_ID), "Blue Gadget", "000123456", None),
            ("3", "a.c Connector", "77", None),
            ("4", "abc Tool", "78", None),
            ("5", "50% off_cut", "79", None),
        ],
    )
    conn.commit()
    conn.close()
    return path
