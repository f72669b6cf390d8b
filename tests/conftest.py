import json
from pathlib import Path

import pytest

from index_store import CatalogIndex

SAMPLE_FOODS = {
    "foods": [
        {"foodId": "01.001", "foodName": "Melk, helmelk", "searchKeywords": ["melk", "meieri"]},
        {"foodId": "01.002", "foodName": "Ekstra Melk", "searchKeywords": []},
        {"foodId": "04.101", "foodName": "Kjøttdeig", "searchKeywords": ["kjøtt", "storfe"]},
        {"foodId": "06.001", "foodName": "Agurk", "searchKeywords": "grønnsak"},
        {"foodId": "06.002", "foodName": "Agurksalat", "searchKeywords": ""},
        {"foodId": "09.010", "foodName": "Brunost", "searchKeywords": ["geitost", "ost"]},
    ]
}


def write_json(path: Path, payload) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def foods_file(tmp_path):
    return write_json(tmp_path / "data" / "foods.json", SAMPLE_FOODS)


@pytest.fixture
def snapshot_path(tmp_path):
    return tmp_path / "search" / "foods.index.json"


@pytest.fixture
def index(foods_file, snapshot_path):
    return CatalogIndex(foods_file, snapshot_path)
