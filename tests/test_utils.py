from ahaguide.utils import generate_document_id, truncate_field


def test_generate_document_id_is_timestamp_derived():
    assert generate_document_id(now_ms=1718000000000) == "aha-1718000000000"


def test_generate_document_id_avoids_existing_ids():
    existing = {"aha-5", "aha-5-1"}
    assert generate_document_id(existing, now_ms=5) == "aha-5-2"


def test_truncate_field():
    assert truncate_field("abcdef", 3) == "abc"
    assert truncate_field("abcdefghij", 8) == "abcde..."
    assert truncate_field("short", 10) == "short"
    assert truncate_field("anything", 0) == ""
