import re

from image_gateway.services.storage import build_storage_key


def test__build_storage_key__timestamp_and_filename():
    assert build_storage_key("cat.png", now_ms=1700000000000) == "1700000000000-cat.png"


def test__build_storage_key__uses_current_time():
    key = build_storage_key("cat.png")

    assert re.fullmatch(r"\d{13}-cat\.png", key)


def test__build_storage_key__missing_filename():
    assert build_storage_key(None, now_ms=1) == "1-image"


def test__build_storage_key__unique_suffix():
    first = build_storage_key("cat.png", now_ms=1700000000000, unique_suffix=True)
    second = build_storage_key("cat.png", now_ms=1700000000000, unique_suffix=True)

    assert re.fullmatch(r"1700000000000-[0-9a-f]{8}-cat\.png", first)
    assert first != second
